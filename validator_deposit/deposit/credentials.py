from hashlib import sha256

from validator_deposit.config.settings import BLS_WITHDRAWAL_PREFIX
from validator_deposit.deposit.typings import PublicKey, WithdrawalCredentials


def get_withdrawal_credentials(public_key: bytes) -> WithdrawalCredentials:
    """
    Returns BLS withdrawal credentials for the withdrawal public key.
    The type prefix is hard-coded so that deposit data can be generated
    without a connection to the beacon node.
    """
    public_key = PublicKey(public_key)
    digest = sha256(public_key).digest()
    return WithdrawalCredentials(BLS_WITHDRAWAL_PREFIX + digest[1:])


def parse_public_key(value: str) -> PublicKey:
    return PublicKey.from_hex(value)
