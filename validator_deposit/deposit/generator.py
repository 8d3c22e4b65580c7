import asyncio
import logging

from web3 import Web3
from web3.types import Gwei

from validator_deposit.common.exceptions import InvalidInputError
from validator_deposit.common.units import parse_deposit_value
from validator_deposit.config.settings import (
    MAX_DEPOSIT_AMOUNT_GWEI,
    MIN_DEPOSIT_AMOUNT_GWEI,
)
from validator_deposit.deposit.credentials import (
    get_withdrawal_credentials,
    parse_public_key,
)
from validator_deposit.deposit.fork import resolve_fork_version
from validator_deposit.deposit.signing import (
    build_deposit_data,
    build_deposit_message,
    get_deposit_data_root,
    get_deposit_message_root,
    get_signing_domain,
)
from validator_deposit.deposit.typings import (
    DepositDataConfig,
    DepositDatum,
    PublicKey,
    SigningDomain,
    WithdrawalCredentials,
)
from validator_deposit.wallets.base import (
    BaseAccount,
    BaseWallet,
    BaseWalletStore,
    resolve_account,
    resolve_accounts,
)

logger = logging.getLogger(__name__)


async def generate_deposit_data(
    config: DepositDataConfig,
    wallet_store: BaseWalletStore,
    timeout: float | None = None,
) -> list[DepositDatum]:
    """
    Generates signed deposit data for every validator account matching the config.
    Everything is validated before the first signature is requested,
    the first failure aborts the whole batch.
    """
    async with asyncio.timeout(timeout):
        wallet, accounts = await _get_validator_accounts(config, wallet_store)
        withdrawal_credentials = await _get_withdrawal_credentials(config, wallet_store)
        amount = get_deposit_amount(config.deposit_value)

        fork_version = await resolve_fork_version(config)
        logger.debug('Fork version is %s', Web3.to_hex(fork_version))
        signing_domain = get_signing_domain(fork_version)
        logger.debug('Domain is %s', Web3.to_hex(signing_domain.domain))

        deposit_data = []
        for account in accounts:
            deposit_datum = await _create_deposit_datum(
                wallet=wallet,
                account=account,
                withdrawal_credentials=withdrawal_credentials,
                amount=amount,
                signing_domain=signing_domain,
            )
            deposit_data.append(deposit_datum)
        return deposit_data


def get_deposit_amount(deposit_value: str) -> Gwei:
    if not deposit_value:
        raise InvalidInputError('deposit value is required')

    amount = parse_deposit_value(deposit_value)
    if amount < MIN_DEPOSIT_AMOUNT_GWEI:
        raise InvalidInputError(f'deposit value must be at least {MIN_DEPOSIT_AMOUNT_GWEI} Gwei')
    if amount > MAX_DEPOSIT_AMOUNT_GWEI:
        raise InvalidInputError(f'deposit value must be at most {MAX_DEPOSIT_AMOUNT_GWEI} Gwei')
    return amount


async def _get_validator_accounts(
    config: DepositDataConfig, wallet_store: BaseWalletStore
) -> tuple[BaseWallet, list[BaseAccount]]:
    if not config.validator_account:
        raise InvalidInputError('validator account is required')

    wallet, accounts = await resolve_accounts(wallet_store, config.validator_account)
    if not accounts:
        raise InvalidInputError('Failed to obtain validator account')

    for account in accounts:
        # accessing the key early rejects invalid accounts before signing
        public_key = PublicKey(account.public_key)
        logger.debug(
            'Validator public key of %s/%s is %s',
            wallet.name,
            account.name,
            Web3.to_hex(public_key),
        )
    logger.info('Found %d validator accounts in wallet %s', len(accounts), wallet.name)
    return wallet, accounts


async def _get_withdrawal_credentials(
    config: DepositDataConfig, wallet_store: BaseWalletStore
) -> WithdrawalCredentials:
    if config.withdrawal_account:
        _, account = await resolve_account(wallet_store, config.withdrawal_account)
        withdrawal_public_key = PublicKey(account.public_key)
    elif config.withdrawal_public_key:
        withdrawal_public_key = parse_public_key(config.withdrawal_public_key)
    else:
        raise InvalidInputError('withdrawal account or withdrawal public key is required')

    logger.debug('Withdrawal public key is %s', Web3.to_hex(withdrawal_public_key))
    withdrawal_credentials = get_withdrawal_credentials(withdrawal_public_key)
    logger.debug('Withdrawal credentials are %s', Web3.to_hex(withdrawal_credentials))
    return withdrawal_credentials


async def _create_deposit_datum(
    wallet: BaseWallet,
    account: BaseAccount,
    withdrawal_credentials: WithdrawalCredentials,
    amount: Gwei,
    signing_domain: SigningDomain,
) -> DepositDatum:
    logger.info('Creating deposit for %s/%s', wallet.name, account.name)

    public_key = PublicKey(account.public_key)
    deposit_message = build_deposit_message(
        public_key=public_key,
        withdrawal_credentials=withdrawal_credentials,
        amount=amount,
    )
    deposit_message_root = get_deposit_message_root(deposit_message)
    logger.debug('Deposit message root is %s', Web3.to_hex(deposit_message_root))

    signature = await account.sign(deposit_message, signing_domain)
    logger.debug('Signature is %s', Web3.to_hex(signature))

    deposit_data = build_deposit_data(deposit_message, signature)
    deposit_data_root = get_deposit_data_root(deposit_data)
    logger.debug('Deposit data root is %s', Web3.to_hex(deposit_data_root))

    return DepositDatum(
        wallet_name=wallet.name,
        account_name=account.name,
        public_key=public_key,
        withdrawal_credentials=withdrawal_credentials,
        amount=amount,
        signature=signature,
        deposit_message_root=deposit_message_root,
        deposit_data_root=deposit_data_root,
        fork_version=signing_domain.fork_version,
    )
