import json
from typing import Any, Callable

from web3 import Web3

from validator_deposit.config.settings import DEPOSIT_DATA_VERSION
from validator_deposit.deposit.abi import DEPOSIT_CALL_LAYOUT
from validator_deposit.deposit.typings import DepositDatum, OutputMode


def encode_deposit_call_data(deposit_datum: DepositDatum) -> bytes:
    return DEPOSIT_CALL_LAYOUT.encode(
        {
            'pubkey': deposit_datum.public_key,
            'withdrawal_credentials': deposit_datum.withdrawal_credentials,
            'signature': deposit_datum.signature,
            'deposit_data_root': deposit_datum.deposit_data_root,
        }
    )


def encode_raw(deposit_datum: DepositDatum) -> str:
    return Web3.to_hex(encode_deposit_call_data(deposit_datum))


def encode_launchpad(deposit_datum: DepositDatum) -> str:
    return _to_json(
        [
            {
                'pubkey': deposit_datum.public_key.hex(),
                'withdrawal_credentials': deposit_datum.withdrawal_credentials.hex(),
                'amount': deposit_datum.amount,
                'signature': deposit_datum.signature.hex(),
                'deposit_message_root': deposit_datum.deposit_message_root.hex(),
                'deposit_data_root': deposit_datum.deposit_data_root.hex(),
                'fork_version': deposit_datum.fork_version.hex(),
            }
        ]
    )


def encode_default(deposit_datum: DepositDatum) -> str:
    return _to_json(
        {
            'name': f'Deposit for {deposit_datum.account_path}',
            'account': deposit_datum.account_path,
            'pubkey': Web3.to_hex(deposit_datum.public_key),
            'withdrawal_credentials': Web3.to_hex(deposit_datum.withdrawal_credentials),
            'signature': Web3.to_hex(deposit_datum.signature),
            'value': deposit_datum.amount,
            'deposit_data_root': Web3.to_hex(deposit_datum.deposit_data_root),
            'version': DEPOSIT_DATA_VERSION,
        }
    )


ENCODERS: dict[OutputMode, Callable[[DepositDatum], str]] = {
    OutputMode.DEFAULT: encode_default,
    OutputMode.RAW: encode_raw,
    OutputMode.LAUNCHPAD: encode_launchpad,
}


def combine_outputs(outputs: list[str]) -> str:
    """
    A single output is returned as is, several outputs are joined into an array.
    Launchpad outputs keep their own single element arrays.
    """
    if len(outputs) == 1:
        return outputs[0]
    return f'[{",".join(outputs)}]'


def render_deposit_data(deposit_data: list[DepositDatum], output_mode: OutputMode) -> str:
    encoder = ENCODERS[output_mode]
    return combine_outputs([encoder(deposit_datum) for deposit_datum in deposit_data])


def _to_json(value: Any) -> str:
    return json.dumps(value, separators=(',', ':'))
