import asyncio
from functools import cached_property

from py_ecc.bls import G2ProofOfPossession
from py_ecc.optimized_bls12_381 import curve_order

from validator_deposit.common.exceptions import InvalidInputError
from validator_deposit.deposit.signing import DepositMessage, compute_signing_root
from validator_deposit.deposit.typings import PublicKey, Signature, SigningDomain
from validator_deposit.wallets.base import BaseAccount, BaseWallet, BaseWalletStore


class LocalAccount(BaseAccount):
    """Account holding its BLS private key in memory."""

    def __init__(self, name: str, private_key: int):
        if not 0 < private_key < curve_order:
            raise InvalidInputError(f'Invalid private key for account "{name}"')
        self._name = name
        self.private_key = private_key

    @property
    def name(self) -> str:
        return self._name

    @cached_property
    def public_key(self) -> PublicKey:
        return PublicKey(G2ProofOfPossession.SkToPk(self.private_key))

    async def sign(self, message: DepositMessage, domain: SigningDomain) -> Signature:
        signing_root = compute_signing_root(message, domain.domain)
        signature = await asyncio.to_thread(
            G2ProofOfPossession.Sign, self.private_key, signing_root
        )
        return Signature(signature)


class LocalWallet(BaseWallet):
    def __init__(self, name: str, accounts: list[BaseAccount]):
        self._name = name
        self._accounts = accounts

    @property
    def name(self) -> str:
        return self._name

    def accounts(self) -> list[BaseAccount]:
        return list(self._accounts)

    @staticmethod
    def from_private_keys(name: str, private_keys: dict[str, int]) -> 'LocalWallet':
        accounts: list[BaseAccount] = [
            LocalAccount(name=account_name, private_key=private_key)
            for account_name, private_key in private_keys.items()
        ]
        return LocalWallet(name=name, accounts=accounts)


class LocalWalletStore(BaseWalletStore):
    def __init__(self, wallets: list[BaseWallet]):
        self.wallets = {wallet.name: wallet for wallet in wallets}

    async def get_wallet(self, name: str) -> BaseWallet:
        if name not in self.wallets:
            raise InvalidInputError(f'Unknown wallet "{name}"')
        return self.wallets[name]
