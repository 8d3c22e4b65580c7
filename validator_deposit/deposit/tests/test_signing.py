import pytest
from py_ecc.bls import G2ProofOfPossession
from web3 import Web3

from validator_deposit.common.exceptions import EncodingError
from validator_deposit.deposit.credentials import get_withdrawal_credentials
from validator_deposit.deposit.signing import (
    build_deposit_data,
    build_deposit_message,
    compute_deposit_domain,
    compute_signing_root,
    get_deposit_data_root,
    get_deposit_message_root,
    get_signing_domain,
)
from validator_deposit.deposit.typings import (
    ForkVersion,
    PublicKey,
    Signature,
)
from validator_deposit.test_fixtures.keys import VALIDATOR_KEYS

PUBLIC_KEY = PublicKey(b'\xaa' * 48)
WITHDRAWAL_CREDENTIALS = get_withdrawal_credentials(b'\xbb' * 48)
FORK_VERSION = ForkVersion(bytes.fromhex('00000001'))
AMOUNT = 32_000_000_000


class TestDomain:
    def test_mainnet_deposit_domain(self):
        domain = compute_deposit_domain(ForkVersion(bytes(4)))

        assert Web3.to_hex(domain) == (
            '0x03000000f5a5fd42d16a20302798ef6ed309979b43003d2320d9f0e8ea9831a9'
        )

    def test_deposit_domain(self):
        domain = compute_deposit_domain(FORK_VERSION)

        assert domain[:4] == bytes.fromhex('03000000')
        assert Web3.to_hex(domain) == (
            '0x0300000018ae4ccbda9538839d79bb18ca09e23e24ae8c1550f56cbb3d84b053'
        )

    def test_signing_domain(self):
        signing_domain = get_signing_domain(FORK_VERSION)

        assert signing_domain.fork_version == FORK_VERSION
        assert signing_domain.domain == compute_deposit_domain(FORK_VERSION)


class TestDepositRoots:
    def test_deposit_message_root(self):
        message = build_deposit_message(PUBLIC_KEY, WITHDRAWAL_CREDENTIALS, AMOUNT)

        assert Web3.to_hex(get_deposit_message_root(message)) == (
            '0x6373e83429f3288956c915832fbdc3bdd87b850f3c90c0be3dd2926723127a9d'
        )

    def test_signing_root(self):
        message = build_deposit_message(PUBLIC_KEY, WITHDRAWAL_CREDENTIALS, AMOUNT)
        signing_root = compute_signing_root(message, compute_deposit_domain(FORK_VERSION))

        assert Web3.to_hex(signing_root) == (
            '0x7afe559f13489c4da79e496cd58ed54c41fa6ca18537e2db43e8be87668ff6af'
        )

    def test_deposit_data_root(self):
        message = build_deposit_message(PUBLIC_KEY, WITHDRAWAL_CREDENTIALS, AMOUNT)
        deposit_data = build_deposit_data(message, Signature(b'\xcc' * 96))

        root = get_deposit_data_root(deposit_data)

        assert Web3.to_hex(root) == (
            '0xa83e46b6e4566a48b75fc282daabaaccf0b323042ba266d1c78ec4c4f2073ad2'
        )
        # recomputing gives the same root
        assert get_deposit_data_root(build_deposit_data(message, Signature(b'\xcc' * 96))) == root

    def test_amount_changes_root(self):
        message = build_deposit_message(PUBLIC_KEY, WITHDRAWAL_CREDENTIALS, AMOUNT)
        other_message = build_deposit_message(PUBLIC_KEY, WITHDRAWAL_CREDENTIALS, AMOUNT + 1)

        assert get_deposit_message_root(message) != get_deposit_message_root(other_message)

    def test_amount_overflow(self):
        with pytest.raises(EncodingError, match='deposit message'):
            get_deposit_message_root(
                build_deposit_message(PUBLIC_KEY, WITHDRAWAL_CREDENTIALS, 2**64)
            )

    def test_signature_verifies(self):
        public_key, private_key = next(iter(VALIDATOR_KEYS.items()))
        message = build_deposit_message(
            PublicKey.from_hex(public_key),
            WITHDRAWAL_CREDENTIALS,
            AMOUNT,
        )
        signing_root = compute_signing_root(message, compute_deposit_domain(FORK_VERSION))

        signature = G2ProofOfPossession.Sign(Web3.to_int(hexstr=private_key), signing_root)

        assert G2ProofOfPossession.Verify(PublicKey.from_hex(public_key), signing_root, signature)
