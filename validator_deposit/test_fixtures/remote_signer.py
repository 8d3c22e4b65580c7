import re
from typing import Generator

import pytest
from aioresponses import CallbackResult, aioresponses
from py_ecc.bls import G2ProofOfPossession
from web3 import Web3

from validator_deposit.test_fixtures.keys import VALIDATOR_KEYS


@pytest.fixture
def remote_signer_url() -> str:
    return 'http://web3signer:9000'


@pytest.fixture
def remote_signer_keys() -> dict[str, int]:
    return {
        public_key: Web3.to_int(hexstr=private_key)
        for public_key, private_key in VALIDATOR_KEYS.items()
    }


@pytest.fixture
def mocked_remote_signer(
    remote_signer_url: str,
    remote_signer_keys: dict[str, int],
) -> Generator:
    def _mocked_get_public_keys_endpoint(url, **kwargs) -> CallbackResult:
        return CallbackResult(
            status=200,
            payload=list(remote_signer_keys.keys()),
        )

    def _mocked_sign_endpoint(url, **kwargs) -> CallbackResult:
        public_key_to_sign_for = url.path.split('/')[-1]

        try:
            corresponding_private_key = remote_signer_keys[public_key_to_sign_for]
        except KeyError:
            return CallbackResult(status=404, body='Not Found')

        signature = G2ProofOfPossession.Sign(
            corresponding_private_key, Web3.to_bytes(hexstr=kwargs['json']['signing_root'])
        )

        return CallbackResult(payload={'signature': Web3.to_hex(signature)})

    with aioresponses() as m:
        # Mocked get public keys endpoint
        m.get(
            f'{remote_signer_url}/api/v1/eth2/publicKeys',
            callback=_mocked_get_public_keys_endpoint,
            repeat=True,
        )

        # Mocked signing endpoint
        m.post(
            re.compile(f'^{remote_signer_url}/api/v1/eth2/sign/\\w{{98}}$'),
            callback=_mocked_sign_endpoint,
            repeat=True,
        )
        yield
