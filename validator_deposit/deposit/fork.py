import logging

from aiohttp import ClientError

from validator_deposit.common.consensus import fetch_chain_config
from validator_deposit.common.exceptions import (
    ConfigurationUnavailableError,
    InvalidInputError,
)
from validator_deposit.config.networks import NETWORKS
from validator_deposit.config.settings import settings
from validator_deposit.deposit.typings import DepositDataConfig, ForkVersion

logger = logging.getLogger(__name__)

GENESIS_FORK_VERSION_KEY = 'GENESIS_FORK_VERSION'


def parse_fork_version(value: str) -> ForkVersion:
    return ForkVersion.from_hex(value)


async def resolve_fork_version(config: DepositDataConfig) -> ForkVersion:
    """
    Returns the explicit fork version if supplied, then the genesis fork version
    of the selected network. Falls back to the beacon node chain configuration.
    """
    if config.fork_version:
        return parse_fork_version(config.fork_version)

    if config.network:
        if config.network not in NETWORKS:
            raise InvalidInputError(f'Unknown network "{config.network}"')
        return ForkVersion(NETWORKS[config.network].GENESIS_FORK_VERSION)

    return await fetch_genesis_fork_version()


async def fetch_genesis_fork_version() -> ForkVersion:
    if not settings.consensus_endpoint:
        raise ConfigurationUnavailableError()

    try:
        chain_config = await fetch_chain_config(settings.consensus_endpoint)
    except TimeoutError:
        raise
    except (ClientError, ValueError) as e:
        logger.debug('Failed to fetch chain configuration: %r', e)
        raise ConfigurationUnavailableError() from e

    genesis_fork_version = chain_config.get(GENESIS_FORK_VERSION_KEY)
    if not genesis_fork_version:
        raise ConfigurationUnavailableError('Failed to obtain genesis fork version')

    try:
        return parse_fork_version(genesis_fork_version)
    except InvalidInputError as e:
        raise ConfigurationUnavailableError(
            f'Invalid genesis fork version "{genesis_fork_version}" in chain configuration'
        ) from e
