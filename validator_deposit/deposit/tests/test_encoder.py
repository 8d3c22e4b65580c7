import json

import pytest
from web3 import Web3

from validator_deposit.deposit.abi import DEPOSIT_CALL_LAYOUT
from validator_deposit.deposit.encoder import (
    combine_outputs,
    encode_default,
    encode_launchpad,
    encode_raw,
    render_deposit_data,
)
from validator_deposit.deposit.typings import (
    DepositDatum,
    ForkVersion,
    OutputMode,
    PublicKey,
    Root,
    Signature,
    WithdrawalCredentials,
)


@pytest.fixture
def deposit_datum() -> DepositDatum:
    return _create_deposit_datum('validator-1', b'\xaa')


def _create_deposit_datum(account_name: str, key_byte: bytes) -> DepositDatum:
    return DepositDatum(
        wallet_name='validators',
        account_name=account_name,
        public_key=PublicKey(key_byte * 48),
        withdrawal_credentials=WithdrawalCredentials(b'\x00' + b'\xbb' * 31),
        amount=32_000_000_000,
        signature=Signature(b'\xcc' * 96),
        deposit_message_root=Root(b'\xee' * 32),
        deposit_data_root=Root(b'\xdd' * 32),
        fork_version=ForkVersion(bytes.fromhex('00000001')),
    )


class TestEncodeDefault:
    def test_encode(self, deposit_datum: DepositDatum):
        output = encode_default(deposit_datum)

        assert output == (
            '{"name":"Deposit for validators/validator-1",'
            '"account":"validators/validator-1",'
            f'"pubkey":"0x{"aa" * 48}",'
            f'"withdrawal_credentials":"0x00{"bb" * 31}",'
            f'"signature":"0x{"cc" * 96}",'
            '"value":32000000000,'
            f'"deposit_data_root":"0x{"dd" * 32}",'
            '"version":2}'
        )


class TestEncodeLaunchpad:
    def test_encode(self, deposit_datum: DepositDatum):
        output = encode_launchpad(deposit_datum)

        assert json.loads(output) == [
            {
                'pubkey': 'aa' * 48,
                'withdrawal_credentials': '00' + 'bb' * 31,
                'amount': 32000000000,
                'signature': 'cc' * 96,
                'deposit_message_root': 'ee' * 32,
                'deposit_data_root': 'dd' * 32,
                'fork_version': '00000001',
            }
        ]
        assert ' ' not in output
        assert '0x' not in output


class TestEncodeRaw:
    def test_encode(self, deposit_datum: DepositDatum):
        output = encode_raw(deposit_datum)

        assert output.startswith('0x22895118')
        assert output == output.lower()
        assert len(Web3.to_bytes(hexstr=output)) == 420
        assert DEPOSIT_CALL_LAYOUT.decode(Web3.to_bytes(hexstr=output)) == {
            'pubkey': deposit_datum.public_key,
            'withdrawal_credentials': deposit_datum.withdrawal_credentials,
            'signature': deposit_datum.signature,
            'deposit_data_root': deposit_datum.deposit_data_root,
        }


class TestCombineOutputs:
    def test_single(self):
        assert combine_outputs(['{"a":1}']) == '{"a":1}'

    def test_several(self):
        assert combine_outputs(['{"a":1}', '{"a":2}']) == '[{"a":1},{"a":2}]'


class TestRenderDepositData:
    def test_default_single(self, deposit_datum: DepositDatum):
        output = render_deposit_data([deposit_datum], OutputMode.DEFAULT)

        assert isinstance(json.loads(output), dict)

    def test_default_batch_keeps_order(self, deposit_datum: DepositDatum):
        other = _create_deposit_datum('validator-2', b'\xab')

        output = json.loads(render_deposit_data([deposit_datum, other], OutputMode.DEFAULT))

        assert [item['account'] for item in output] == [
            'validators/validator-1',
            'validators/validator-2',
        ]

    def test_launchpad_batch(self, deposit_datum: DepositDatum):
        other = _create_deposit_datum('validator-2', b'\xab')

        output = json.loads(render_deposit_data([deposit_datum, other], OutputMode.LAUNCHPAD))

        assert len(output) == 2
        assert output[0][0]['pubkey'] == 'aa' * 48
        assert output[1][0]['pubkey'] == 'ab' * 48

    def test_raw_batch(self, deposit_datum: DepositDatum):
        other = _create_deposit_datum('validator-2', b'\xab')

        output = render_deposit_data([deposit_datum, other], OutputMode.RAW)

        assert output == f'[{encode_raw(deposit_datum)},{encode_raw(other)}]'
