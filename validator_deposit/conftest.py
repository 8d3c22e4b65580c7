from pathlib import Path
from tempfile import TemporaryDirectory
from typing import Generator

import pytest
from click.testing import CliRunner
from web3 import Web3

from validator_deposit.config.settings import settings
from validator_deposit.test_fixtures.hashi_vault import (
    hashi_vault_url,
    mocked_hashi_vault,
)
from validator_deposit.test_fixtures.keys import VALIDATOR_KEYS, WITHDRAWAL_KEYS
from validator_deposit.test_fixtures.remote_signer import (
    mocked_remote_signer,
    remote_signer_keys,
    remote_signer_url,
)
from validator_deposit.wallets.local import LocalWallet, LocalWalletStore


@pytest.fixture(autouse=True)
def _default_settings() -> Generator:
    settings.set()
    yield
    settings.set()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def validators_wallet() -> LocalWallet:
    return LocalWallet.from_private_keys(
        'validators',
        {
            f'validator-{index}': Web3.to_int(hexstr=private_key)
            for index, private_key in enumerate(VALIDATOR_KEYS.values(), start=1)
        },
    )


@pytest.fixture
def withdrawal_wallet() -> LocalWallet:
    return LocalWallet.from_private_keys(
        'withdrawal',
        {'withdrawal': Web3.to_int(hexstr=private_key) for private_key in WITHDRAWAL_KEYS.values()},
    )


@pytest.fixture
def wallet_store(
    validators_wallet: LocalWallet, withdrawal_wallet: LocalWallet
) -> LocalWalletStore:
    return LocalWalletStore([validators_wallet, withdrawal_wallet])
