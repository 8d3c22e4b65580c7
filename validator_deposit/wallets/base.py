import abc
import re

from validator_deposit.common.exceptions import InvalidInputError
from validator_deposit.deposit.signing import DepositMessage
from validator_deposit.deposit.typings import PublicKey, Signature, SigningDomain


class BaseAccount(abc.ABC):
    @property
    @abc.abstractmethod
    def name(self) -> str:
        raise NotImplementedError

    @property
    @abc.abstractmethod
    def public_key(self) -> PublicKey:
        raise NotImplementedError

    @abc.abstractmethod
    async def sign(self, message: DepositMessage, domain: SigningDomain) -> Signature:
        """Signs the deposit message root under the domain. Raises `SigningError`."""
        raise NotImplementedError


class BaseWallet(abc.ABC):
    @property
    @abc.abstractmethod
    def name(self) -> str:
        raise NotImplementedError

    @abc.abstractmethod
    def accounts(self) -> list[BaseAccount]:
        """Returns the wallet accounts in a deterministic order."""
        raise NotImplementedError


class BaseWalletStore(abc.ABC):
    @abc.abstractmethod
    async def get_wallet(self, name: str) -> BaseWallet:
        raise NotImplementedError


def parse_account_path(path: str) -> tuple[str, str]:
    """Splits `wallet/account` path into wallet name and account part."""
    wallet_name, _, account_name = path.partition('/')
    if not wallet_name:
        raise InvalidInputError(f'Invalid account path "{path}"')
    return wallet_name, account_name


async def resolve_accounts(
    wallet_store: BaseWalletStore, path: str
) -> tuple[BaseWallet, list[BaseAccount]]:
    """
    Returns the wallet and its accounts matching the path.
    The account part of the path is a regular expression matched against
    the whole account name, an empty account part matches all the accounts.
    """
    wallet_name, account_spec = parse_account_path(path)
    wallet = await wallet_store.get_wallet(wallet_name)
    if not account_spec:
        return wallet, wallet.accounts()

    try:
        pattern = re.compile(account_spec)
    except re.error as e:
        raise InvalidInputError(f'Invalid account pattern "{account_spec}"') from e

    return wallet, [account for account in wallet.accounts() if pattern.fullmatch(account.name)]


async def resolve_account(
    wallet_store: BaseWalletStore, path: str
) -> tuple[BaseWallet, BaseAccount]:
    wallet_name, account_name = parse_account_path(path)
    if not account_name:
        raise InvalidInputError(f'Account path "{path}" does not include an account name')

    wallet = await wallet_store.get_wallet(wallet_name)
    for account in wallet.accounts():
        if account.name == account_name:
            return wallet, account

    raise InvalidInputError(f'Account "{account_name}" not found in wallet "{wallet_name}"')
