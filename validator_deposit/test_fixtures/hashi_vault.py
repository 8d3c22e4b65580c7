import json
from functools import partial
from typing import Generator

import pytest
from aioresponses import CallbackResult, aioresponses

from validator_deposit.test_fixtures.keys import VALIDATOR_KEYS, WITHDRAWAL_KEYS

VALIDATORS_WALLET_ACCOUNTS = {
    f'validator-{index}': private_key
    for index, private_key in enumerate(VALIDATOR_KEYS.values(), start=1)
}
WITHDRAWAL_WALLET_ACCOUNTS = {
    'withdrawal': private_key for private_key in WITHDRAWAL_KEYS.values()
}


@pytest.fixture
def hashi_vault_url() -> str:
    return 'http://vault:8200'


@pytest.fixture
def mocked_hashi_vault(
    hashi_vault_url: str,
) -> Generator:
    def _mocked_secret_path(data, url, **kwargs) -> CallbackResult:
        return CallbackResult(
            status=200,
            body=json.dumps(
                dict(
                    data=dict(
                        data=data,
                    )
                )
            ),  # type: ignore
        )

    def _mocked_error_path(url, **kwargs) -> CallbackResult:
        return CallbackResult(
            status=200, body=json.dumps(dict(errors=['permission denied']))  # type: ignore
        )

    with aioresponses() as m:
        m.get(
            f'{hashi_vault_url}/v1/secret/data/validators',
            callback=partial(_mocked_secret_path, VALIDATORS_WALLET_ACCOUNTS),
            repeat=True,
        )
        m.get(
            f'{hashi_vault_url}/v1/secret/data/withdrawal',
            callback=partial(_mocked_secret_path, WITHDRAWAL_WALLET_ACCOUNTS),
            repeat=True,
        )
        # Mocked wallet with custom engine name
        m.get(
            f'{hashi_vault_url}/v1/custom/data/validators',
            callback=partial(_mocked_secret_path, VALIDATORS_WALLET_ACCOUNTS),
            repeat=True,
        )
        m.get(
            f'{hashi_vault_url}/v1/secret/data/broken',
            callback=partial(_mocked_secret_path, {'validator-1': '0xnothex'}),
            repeat=True,
        )
        # Mocked inaccessible wallet
        m.get(
            f'{hashi_vault_url}/v1/secret/data/inaccessible',
            callback=_mocked_error_path,
            repeat=True,
        )
        m.get(
            f'{hashi_vault_url}/v1/secret/data/missing',
            status=404,
            repeat=True,
        )
        yield
