import logging
import urllib.parse
from dataclasses import dataclass

from aiohttp import ClientError, ClientSession, ClientTimeout
from web3 import Web3

from validator_deposit.common.exceptions import InvalidInputError, SigningError
from validator_deposit.config.settings import settings
from validator_deposit.wallets.base import BaseWallet, BaseWalletStore
from validator_deposit.wallets.local import LocalWallet

logger = logging.getLogger(__name__)


@dataclass
class HashiVaultConfiguration:
    token: str
    url: str
    engine_name: str
    timeout: int

    @classmethod
    def from_settings(cls) -> 'HashiVaultConfiguration':
        if settings.hashi_vault_url is None or settings.hashi_vault_token is None:
            raise InvalidInputError('Both URL and token must be specified for hashi vault')
        return cls(
            token=settings.hashi_vault_token,
            url=settings.hashi_vault_url,
            engine_name=settings.hashi_vault_engine_name,
            timeout=settings.hashi_vault_timeout,
        )

    def secret_url(self, wallet_name: str) -> str:
        return urllib.parse.urljoin(
            self.url,
            f'/v1/{self.engine_name}/data/{wallet_name.strip("/")}',
        )


class HashiVaultWalletStore(BaseWalletStore):
    """
    Loads wallets from hashi vault K/V secret engine.

    Every secret is a wallet, its keys are the account names and its values are
    the private keys stored as hex strings with or without 0x prefix.
    """

    def __init__(self, config: HashiVaultConfiguration):
        self.config = config
        self._wallets: dict[str, LocalWallet] = {}

    def session(self) -> ClientSession:
        return ClientSession(
            timeout=ClientTimeout(self.config.timeout),
            headers={'X-Vault-Token': self.config.token},
        )

    async def get_wallet(self, name: str) -> BaseWallet:
        if name not in self._wallets:
            self._wallets[name] = await self._load_wallet(name)
        return self._wallets[name]

    async def _load_wallet(self, name: str) -> LocalWallet:
        secret_url = self.config.secret_url(name)
        logger.info('Will load wallet %s from hashi vault', name)

        try:
            async with self.session() as session:
                response = await session.get(secret_url)
                if response.status == 404:
                    raise InvalidInputError(f'Unknown wallet "{name}"')

                response.raise_for_status()
                key_data = await response.json()
        except TimeoutError:
            raise
        except ClientError as e:
            raise SigningError(f'Failed to load wallet "{name}" from hashi vault: {e!r}') from e

        if 'data' not in key_data:
            for error in key_data.get('errors', []):
                logger.error('hashi vault error: %s', error)
            raise InvalidInputError(f'Can not retrieve wallet "{name}" from hashi vault')

        secret = key_data['data']
        accounts = secret.get('data') if isinstance(secret, dict) else None
        if not isinstance(accounts, dict):
            raise InvalidInputError(f'Can not retrieve wallet "{name}" from hashi vault')

        private_keys = {}
        for account_name, private_key in sorted(accounts.items()):
            try:
                private_keys[account_name] = Web3.to_int(hexstr=private_key)
            except ValueError as e:
                raise InvalidInputError(
                    f'Invalid private key for account "{name}/{account_name}"'
                ) from e

        logger.info('Loaded %d accounts of wallet %s from hashi vault', len(private_keys), name)
        return LocalWallet.from_private_keys(name, private_keys)
