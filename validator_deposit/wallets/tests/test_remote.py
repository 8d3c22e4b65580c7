import re

import pytest
from aioresponses import aioresponses
from py_ecc.bls import G2ProofOfPossession
from web3 import Web3

from validator_deposit.common.exceptions import InvalidInputError, SigningError
from validator_deposit.config.settings import settings
from validator_deposit.deposit.credentials import get_withdrawal_credentials
from validator_deposit.deposit.signing import (
    build_deposit_message,
    compute_signing_root,
    get_signing_domain,
)
from validator_deposit.deposit.typings import ForkVersion, PublicKey
from validator_deposit.wallets.remote import RemoteSignerAccount, RemoteSignerWalletStore

FORK_VERSION = ForkVersion(bytes.fromhex('10000910'))


def _deposit_message(public_key: PublicKey):
    return build_deposit_message(
        public_key, get_withdrawal_credentials(b'\xbb' * 48), 32_000_000_000
    )


class TestRemoteSignerWalletStore:
    @pytest.mark.usefixtures('mocked_remote_signer')
    async def test_get_wallet(self, remote_signer_url: str, remote_signer_keys: dict[str, int]):
        wallet_store = RemoteSignerWalletStore(
            remote_signer_url, settings.remote_signer_wallet_name
        )

        wallet = await wallet_store.get_wallet('remote-signer')

        assert wallet.name == 'remote-signer'
        assert [account.name for account in wallet.accounts()] == list(remote_signer_keys.keys())
        assert [Web3.to_hex(account.public_key) for account in wallet.accounts()] == list(
            remote_signer_keys.keys()
        )

    @pytest.mark.usefixtures('mocked_remote_signer')
    async def test_unknown_wallet(self, remote_signer_url: str):
        wallet_store = RemoteSignerWalletStore(remote_signer_url, 'remote-signer')

        with pytest.raises(InvalidInputError, match='Unknown wallet "validators"'):
            await wallet_store.get_wallet('validators')

    async def test_signer_unavailable(self, remote_signer_url: str):
        wallet_store = RemoteSignerWalletStore(remote_signer_url, 'remote-signer')

        with aioresponses() as m:
            m.get(f'{remote_signer_url}/api/v1/eth2/publicKeys', status=503)
            with pytest.raises(SigningError, match='Failed to fetch public keys'):
                await wallet_store.get_wallet('remote-signer')


class TestRemoteSignerAccount:
    @pytest.mark.usefixtures('mocked_remote_signer')
    async def test_sign(self, remote_signer_url: str, remote_signer_keys: dict[str, int]):
        public_key = PublicKey.from_hex(next(iter(remote_signer_keys.keys())))
        account = RemoteSignerAccount(public_key, remote_signer_url)
        message = _deposit_message(public_key)
        signing_domain = get_signing_domain(FORK_VERSION)

        signature = await account.sign(message, signing_domain)

        signing_root = compute_signing_root(message, signing_domain.domain)
        assert G2ProofOfPossession.Verify(public_key, signing_root, signature)

    async def test_sign_request(self, remote_signer_url: str):
        public_key = PublicKey(b'\xaa' * 48)
        account = RemoteSignerAccount(public_key, remote_signer_url)
        message = _deposit_message(public_key)
        signing_domain = get_signing_domain(FORK_VERSION)
        sign_url = f'{remote_signer_url}/api/v1/eth2/sign/0x{"aa" * 48}'

        with aioresponses() as m:
            m.post(sign_url, status=500)
            with pytest.raises(SigningError):
                await account.sign(message, signing_domain)

            request = list(m.requests.values())[0][0]
        assert request.kwargs['json'] == {
            'type': 'DEPOSIT',
            'signing_root': Web3.to_hex(compute_signing_root(message, signing_domain.domain)),
            'deposit': {
                'pubkey': f'0x{"aa" * 48}',
                'withdrawal_credentials': Web3.to_hex(get_withdrawal_credentials(b'\xbb' * 48)),
                'amount': '32000000000',
                'genesis_fork_version': '0x10000910',
            },
        }

    @pytest.mark.usefixtures('mocked_remote_signer')
    async def test_unknown_public_key(self, remote_signer_url: str):
        public_key = PublicKey(b'\xaa' * 48)
        account = RemoteSignerAccount(public_key, remote_signer_url)

        with pytest.raises(
            SigningError, match='Is this public key present in the remote signer?'
        ):
            await account.sign(_deposit_message(public_key), get_signing_domain(FORK_VERSION))

    async def test_invalid_signature(
        self, remote_signer_url: str, remote_signer_keys: dict[str, int]
    ):
        public_key = PublicKey.from_hex(next(iter(remote_signer_keys.keys())))
        account = RemoteSignerAccount(public_key, remote_signer_url)
        message = _deposit_message(public_key)
        # signature of another key
        other_private_key = list(remote_signer_keys.values())[1]
        signing_root = compute_signing_root(message, get_signing_domain(FORK_VERSION).domain)
        signature = G2ProofOfPossession.Sign(other_private_key, signing_root)

        with aioresponses() as m:
            m.post(
                re.compile(f'^{remote_signer_url}/api/v1/eth2/sign/.*$'),
                payload={'signature': Web3.to_hex(signature)},
            )
            with pytest.raises(SigningError, match='invalid signature'):
                await account.sign(message, get_signing_domain(FORK_VERSION))

    async def test_malformed_response(self, remote_signer_url: str):
        public_key = PublicKey(b'\xaa' * 48)
        account = RemoteSignerAccount(public_key, remote_signer_url)

        with aioresponses() as m:
            m.post(
                re.compile(f'^{remote_signer_url}/api/v1/eth2/sign/.*$'),
                payload={'error': 'unexpected'},
            )
            with pytest.raises(SigningError, match='Failed to sign deposit data'):
                await account.sign(_deposit_message(public_key), get_signing_domain(FORK_VERSION))
