import asyncio

from web3.exceptions import Web3Exception

from validator_deposit.common.exceptions import InvalidInputError
from validator_deposit.common.utils import format_error, urljoin


def test_format_error():
    assert format_error(asyncio.TimeoutError()) == 'TimeoutError()'
    assert format_error(Web3Exception('0x1234')) == 'Web3Exception'
    assert format_error(InvalidInputError('Invalid value "x"')) == 'Invalid value "x"'


def test_urljoin():
    assert urljoin('http://node:5052/', '/eth/v1/config/spec') == (
        'http://node:5052/eth/v1/config/spec'
    )
    assert urljoin('http://signer:9000', 'api/v1/eth2/publicKeys') == (
        'http://signer:9000/api/v1/eth2/publicKeys'
    )
