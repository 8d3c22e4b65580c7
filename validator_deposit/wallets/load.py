import logging

from validator_deposit.common.exceptions import InvalidInputError
from validator_deposit.config.settings import settings
from validator_deposit.wallets.base import BaseWalletStore
from validator_deposit.wallets.hashi_vault import (
    HashiVaultConfiguration,
    HashiVaultWalletStore,
)
from validator_deposit.wallets.remote import RemoteSignerWalletStore

logger = logging.getLogger(__name__)


def load_wallet_store() -> BaseWalletStore:
    if settings.remote_signer_url:
        logger.info('Using remote signer at %s', settings.remote_signer_url)
        return RemoteSignerWalletStore(
            signer_url=settings.remote_signer_url,
            wallet_name=settings.remote_signer_wallet_name,
        )
    if settings.hashi_vault_url:
        logger.info('Using hashi vault at %s for loading wallets', settings.hashi_vault_url)
        return HashiVaultWalletStore(HashiVaultConfiguration.from_settings())
    raise InvalidInputError('No remote signer or hashi vault URL provided')
