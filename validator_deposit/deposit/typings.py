from dataclasses import dataclass
from enum import Enum
from typing import Self

from eth_utils import decode_hex
from web3.types import Gwei

from validator_deposit.common.exceptions import InvalidInputError


class FixedLengthBytes(bytes):
    """Bytes value that asserts its length on construction."""

    length: int = 0

    def __new__(cls, value: bytes) -> Self:
        if len(value) != cls.length:
            raise InvalidInputError(
                f'{cls.__name__} must be exactly {cls.length} bytes, got {len(value)}'
            )
        return super().__new__(cls, value)

    @classmethod
    def from_hex(cls, value: str) -> Self:
        try:
            data = decode_hex(value.strip())
        except ValueError as e:
            raise InvalidInputError(f'Invalid hex value "{value}"') from e
        return cls(data)


class PublicKey(FixedLengthBytes):
    length = 48


class WithdrawalCredentials(FixedLengthBytes):
    length = 32


class ForkVersion(FixedLengthBytes):
    length = 4


class Domain(FixedLengthBytes):
    length = 32


class Signature(FixedLengthBytes):
    length = 96


class Root(FixedLengthBytes):
    length = 32


class OutputMode(Enum):
    DEFAULT = 'default'
    RAW = 'raw'
    LAUNCHPAD = 'launchpad'


@dataclass(frozen=True)
class SigningDomain:
    fork_version: ForkVersion
    domain: Domain


@dataclass(frozen=True)
class DepositDataConfig:
    validator_account: str
    deposit_value: str
    withdrawal_account: str | None = None
    withdrawal_public_key: str | None = None
    fork_version: str | None = None
    network: str | None = None
    output_mode: OutputMode = OutputMode.DEFAULT


@dataclass(frozen=True)
# pylint: disable-next=too-many-instance-attributes
class DepositDatum:
    wallet_name: str
    account_name: str
    public_key: PublicKey
    withdrawal_credentials: WithdrawalCredentials
    amount: Gwei
    signature: Signature
    deposit_message_root: Root
    deposit_data_root: Root
    fork_version: ForkVersion

    @property
    def account_path(self) -> str:
        return f'{self.wallet_name}/{self.account_name}'
