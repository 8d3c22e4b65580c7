from ssz import Serializable, bytes4, bytes32, bytes48, bytes96, uint64
from ssz.exceptions import SSZException
from web3.types import Gwei

from validator_deposit.common.exceptions import EncodingError
from validator_deposit.config.settings import DOMAIN_DEPOSIT, ZERO_ROOT
from validator_deposit.deposit.typings import (
    Domain,
    ForkVersion,
    PublicKey,
    Root,
    Signature,
    SigningDomain,
    WithdrawalCredentials,
)

# field order of every container is part of the hash tree root


class DepositMessage(Serializable):
    fields = [
        ('pubkey', bytes48),
        ('withdrawal_credentials', bytes32),
        ('amount', uint64),
    ]


class DepositData(Serializable):
    fields = [
        ('pubkey', bytes48),
        ('withdrawal_credentials', bytes32),
        ('amount', uint64),
        ('signature', bytes96),
    ]


class ForkData(Serializable):
    fields = [
        ('current_version', bytes4),
        ('genesis_validators_root', bytes32),
    ]


class SigningData(Serializable):
    fields = [
        ('object_root', bytes32),
        ('domain', bytes32),
    ]


def build_deposit_message(
    public_key: PublicKey, withdrawal_credentials: WithdrawalCredentials, amount: Gwei
) -> DepositMessage:
    try:
        return DepositMessage(
            pubkey=bytes(public_key),
            withdrawal_credentials=bytes(withdrawal_credentials),
            amount=amount,
        )
    except (SSZException, ValueError, TypeError) as e:
        raise EncodingError('Failed to build deposit message') from e


def build_deposit_data(message: DepositMessage, signature: Signature) -> DepositData:
    try:
        return DepositData(
            pubkey=message.pubkey,
            withdrawal_credentials=message.withdrawal_credentials,
            amount=message.amount,
            signature=bytes(signature),
        )
    except (SSZException, ValueError, TypeError) as e:
        raise EncodingError('Failed to build deposit data') from e


def get_deposit_message_root(message: DepositMessage) -> Root:
    return _hash_tree_root(message, 'deposit message root')


def get_deposit_data_root(deposit_data: DepositData) -> Root:
    return _hash_tree_root(deposit_data, 'deposit data root')


def compute_deposit_domain(fork_version: ForkVersion) -> Domain:
    """
    Deposits are valid across forks, thus the domain is computed
    with the genesis fork version and a zero genesis validators root.
    """
    fork_data = ForkData(
        current_version=bytes(fork_version),
        genesis_validators_root=ZERO_ROOT,
    )
    fork_data_root = _hash_tree_root(fork_data, 'fork data root')
    return Domain(DOMAIN_DEPOSIT + fork_data_root[:28])


def get_signing_domain(fork_version: ForkVersion) -> SigningDomain:
    return SigningDomain(
        fork_version=fork_version,
        domain=compute_deposit_domain(fork_version),
    )


def compute_signing_root(message: DepositMessage, domain: Domain) -> Root:
    signing_data = SigningData(
        object_root=bytes(get_deposit_message_root(message)),
        domain=bytes(domain),
    )
    return _hash_tree_root(signing_data, 'signing root')


def _hash_tree_root(value: Serializable, name: str) -> Root:
    try:
        return Root(value.hash_tree_root)
    except (SSZException, ValueError, TypeError) as e:
        raise EncodingError(f'Failed to generate {name}') from e
