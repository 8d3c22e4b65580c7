from decouple import config as decouple_config
from web3 import Web3
from web3.types import Gwei

from validator_deposit.common.typings import Singleton

DEFAULT_TIMEOUT = 30
DEFAULT_CONSENSUS_TIMEOUT = 10
DEFAULT_REMOTE_SIGNER_TIMEOUT = 30
DEFAULT_HASHI_VAULT_TIMEOUT = 10
DEFAULT_HASHI_VAULT_ENGINE_NAME = 'secret'
DEFAULT_REMOTE_SIGNER_WALLET_NAME = 'remote-signer'
DEFAULT_LOG_LEVEL = 'WARNING'

# logging
LOG_PLAIN = 'plain'
LOG_JSON = 'json'
LOG_FORMATS = [LOG_PLAIN, LOG_JSON]
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
LOG_WHITELISTED_DOMAINS = ['localhost', '127.0.0.1']


# pylint: disable-next=too-many-instance-attributes
class Settings(metaclass=Singleton):
    # defaults apply until the command calls `set`
    consensus_endpoint: str | None = None
    consensus_timeout: int = DEFAULT_CONSENSUS_TIMEOUT
    remote_signer_url: str | None = None
    remote_signer_wallet_name: str = DEFAULT_REMOTE_SIGNER_WALLET_NAME
    remote_signer_timeout: int = DEFAULT_REMOTE_SIGNER_TIMEOUT
    hashi_vault_url: str | None = None
    hashi_vault_token: str | None = None
    hashi_vault_engine_name: str = DEFAULT_HASHI_VAULT_ENGINE_NAME
    hashi_vault_timeout: int = DEFAULT_HASHI_VAULT_TIMEOUT
    timeout: int = DEFAULT_TIMEOUT
    verbose: bool = False
    quiet: bool = False

    log_level: str = DEFAULT_LOG_LEVEL
    log_format: str = LOG_PLAIN

    # pylint: disable-next=too-many-arguments
    def set(
        self,
        consensus_endpoint: str | None = None,
        remote_signer_url: str | None = None,
        hashi_vault_url: str | None = None,
        hashi_vault_token: str | None = None,
        hashi_vault_engine_name: str = DEFAULT_HASHI_VAULT_ENGINE_NAME,
        timeout: int = DEFAULT_TIMEOUT,
        verbose: bool = False,
        quiet: bool = False,
        log_level: str | None = None,
        log_format: str | None = None,
    ) -> None:
        self.consensus_endpoint = consensus_endpoint
        self.consensus_timeout = decouple_config(
            'CONSENSUS_TIMEOUT', default=DEFAULT_CONSENSUS_TIMEOUT, cast=int
        )

        # remote signer configuration
        self.remote_signer_url = remote_signer_url
        self.remote_signer_wallet_name = decouple_config(
            'REMOTE_SIGNER_WALLET_NAME', default=DEFAULT_REMOTE_SIGNER_WALLET_NAME
        )
        self.remote_signer_timeout = decouple_config(
            'REMOTE_SIGNER_TIMEOUT', default=DEFAULT_REMOTE_SIGNER_TIMEOUT, cast=int
        )

        # hashi vault configuration
        self.hashi_vault_url = hashi_vault_url
        self.hashi_vault_token = hashi_vault_token
        self.hashi_vault_engine_name = hashi_vault_engine_name
        self.hashi_vault_timeout = decouple_config(
            'HASHI_VAULT_TIMEOUT', default=DEFAULT_HASHI_VAULT_TIMEOUT, cast=int
        )

        self.timeout = timeout
        self.verbose = verbose
        self.quiet = quiet

        if quiet:
            self.log_level = 'FATAL'
        elif log_level:
            self.log_level = log_level
        else:
            self.log_level = 'INFO' if verbose else DEFAULT_LOG_LEVEL
        self.log_format = log_format or LOG_PLAIN


settings = Settings()

# deposit contract call `deposit(bytes,bytes,bytes,bytes32)`
DEPOSIT_FUNCTION_SIGNATURE = 'deposit(bytes,bytes,bytes,bytes32)'
DEPOSIT_FUNCTION_SELECTOR = bytes.fromhex('22895118')

# signing
DOMAIN_DEPOSIT = bytes.fromhex('03000000')
BLS_WITHDRAWAL_PREFIX = bytes.fromhex('00')
# deposits are created before the genesis validators root is known
ZERO_ROOT = bytes(32)

# deposit amount limits
MIN_DEPOSIT_AMOUNT_GWEI: Gwei = Gwei(int(Web3.from_wei(Web3.to_wei(1, 'ether'), 'gwei')))
MAX_DEPOSIT_AMOUNT_GWEI: Gwei = Gwei(2**64 - 1)

# default JSON output version
DEPOSIT_DATA_VERSION = 2
