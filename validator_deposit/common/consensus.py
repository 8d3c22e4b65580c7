import logging

from aiohttp import ClientSession, ClientTimeout

from validator_deposit.common.utils import urljoin
from validator_deposit.config.settings import settings

logger = logging.getLogger(__name__)

CHAIN_CONFIG_PATH = '/eth/v1/config/spec'


async def fetch_chain_config(endpoint: str) -> dict[str, str]:
    """Fetches the chain configuration from the beacon node API."""
    url = urljoin(endpoint, CHAIN_CONFIG_PATH)
    logger.debug('Fetching chain configuration from %s', url)
    async with ClientSession(timeout=ClientTimeout(settings.consensus_timeout)) as session:
        response = await session.get(url)
        response.raise_for_status()

        data = await response.json()

    if not isinstance(data, dict) or not isinstance(data.get('data'), dict):
        raise ValueError(f'Unexpected chain configuration response from {url}')
    return data['data']
