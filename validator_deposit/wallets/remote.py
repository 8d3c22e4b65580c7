import asyncio
import dataclasses
import logging
from dataclasses import dataclass

from aiohttp import ClientError, ClientSession, ClientTimeout
from eth_typing import HexStr
from py_ecc.bls import G2ProofOfPossession
from web3 import Web3

from validator_deposit.common.exceptions import InvalidInputError, SigningError
from validator_deposit.common.utils import urljoin
from validator_deposit.config.settings import settings
from validator_deposit.deposit.signing import DepositMessage, compute_signing_root
from validator_deposit.deposit.typings import PublicKey, Signature, SigningDomain
from validator_deposit.wallets.base import BaseAccount, BaseWallet, BaseWalletStore

logger = logging.getLogger(__name__)


@dataclass
class DepositMessageModel:
    pubkey: HexStr
    withdrawal_credentials: HexStr
    amount: str
    genesis_fork_version: HexStr


@dataclass
class DepositRequestModel:
    deposit: DepositMessageModel
    signing_root: HexStr
    type: str


class RemoteSignerAccount(BaseAccount):
    """Web3Signer key. The account is named by its public key."""

    def __init__(self, public_key: PublicKey, signer_url: str):
        self._public_key = public_key
        self.signer_url = signer_url

    @property
    def name(self) -> str:
        return Web3.to_hex(self._public_key)

    @property
    def public_key(self) -> PublicKey:
        return self._public_key

    async def sign(self, message: DepositMessage, domain: SigningDomain) -> Signature:
        signing_root = compute_signing_root(message, domain.domain)
        data = DepositRequestModel(
            deposit=DepositMessageModel(
                pubkey=Web3.to_hex(message.pubkey),
                withdrawal_credentials=Web3.to_hex(message.withdrawal_credentials),
                amount=str(message.amount),
                genesis_fork_version=Web3.to_hex(domain.fork_version),
            ),
            signing_root=Web3.to_hex(signing_root),
            type='DEPOSIT',
        )
        signer_url = urljoin(self.signer_url, f'/api/v1/eth2/sign/{self.name}')

        try:
            async with ClientSession(
                timeout=ClientTimeout(settings.remote_signer_timeout)
            ) as session:
                response = await session.post(
                    signer_url,
                    json=dataclasses.asdict(data),
                    headers={'Accept': 'application/json'},
                )

                if response.status == 404:
                    # Pubkey not present on remote signer side
                    raise SigningError(
                        f'Failed to sign deposit data for {self.name}.'
                        f' Is this public key present in the remote signer?'
                    )

                response.raise_for_status()
                signature = Signature(Web3.to_bytes(hexstr=(await response.json())['signature']))
        except TimeoutError:
            raise
        except (ClientError, ValueError, KeyError) as e:
            raise SigningError(f'Failed to sign deposit data for {self.name}: {e!r}') from e

        is_valid = await asyncio.to_thread(
            G2ProofOfPossession.Verify, self._public_key, signing_root, signature
        )
        if not is_valid:
            raise SigningError(f'Remote signer returned an invalid signature for {self.name}')
        return signature


class RemoteSignerWallet(BaseWallet):
    def __init__(self, name: str, accounts: list[BaseAccount]):
        self._name = name
        self._accounts = accounts

    @property
    def name(self) -> str:
        return self._name

    def accounts(self) -> list[BaseAccount]:
        return list(self._accounts)


class RemoteSignerWalletStore(BaseWalletStore):
    """Exposes the keys of a remote signer as the accounts of a single wallet."""

    def __init__(self, signer_url: str, wallet_name: str):
        self.signer_url = signer_url
        self.wallet_name = wallet_name
        self._wallet: RemoteSignerWallet | None = None

    async def get_wallet(self, name: str) -> BaseWallet:
        if name != self.wallet_name:
            raise InvalidInputError(
                f'Unknown wallet "{name}", remote signer keys are in wallet "{self.wallet_name}"'
            )
        if self._wallet is None:
            public_keys = await self._get_remote_signer_public_keys()
            accounts: list[BaseAccount] = [
                RemoteSignerAccount(public_key=public_key, signer_url=self.signer_url)
                for public_key in public_keys
            ]
            self._wallet = RemoteSignerWallet(name=self.wallet_name, accounts=accounts)
        return self._wallet

    async def _get_remote_signer_public_keys(self) -> list[PublicKey]:
        signer_url = urljoin(self.signer_url, '/api/v1/eth2/publicKeys')
        try:
            async with ClientSession(
                timeout=ClientTimeout(settings.remote_signer_timeout)
            ) as session:
                response = await session.get(signer_url)

                response.raise_for_status()
                public_keys = await response.json()
        except TimeoutError:
            raise
        except (ClientError, ValueError) as e:
            raise SigningError(f'Failed to fetch public keys from the remote signer: {e!r}') from e

        logger.info('Loaded %d public keys from the remote signer', len(public_keys))
        return [PublicKey.from_hex(public_key) for public_key in public_keys]
