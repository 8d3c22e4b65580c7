import re
from decimal import Decimal

from web3 import Web3
from web3.types import Gwei

from validator_deposit.common.exceptions import InvalidInputError

VALUE_PATTERN = re.compile(r'^\s*(?P<amount>\d+(\.\d+)?)\s*(?P<unit>[a-zA-Z]*)\s*$')
UNIT_ALIASES = {
    'eth': 'ether',
}
WEI_PER_GWEI = 10**9


def parse_deposit_value(value: str) -> Gwei:
    """
    Converts a human readable value such as "32 Ether" or "1000000000 gwei"
    to Gwei. A value without a unit is treated as Wei.
    """
    match = VALUE_PATTERN.match(value)
    if not match:
        raise InvalidInputError(f'Invalid value "{value}"')

    unit = match['unit'].lower() or 'wei'
    unit = UNIT_ALIASES.get(unit, unit)
    try:
        wei = Web3.to_wei(Decimal(match['amount']), unit)
    except ValueError as e:
        raise InvalidInputError(f'Invalid value "{value}": {e}') from e

    if wei % WEI_PER_GWEI:
        raise InvalidInputError(f'Invalid value "{value}": must be a whole number of Gwei')
    return Gwei(wei // WEI_PER_GWEI)
