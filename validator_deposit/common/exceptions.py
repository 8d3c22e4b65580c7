MISSING_FORK_VERSION = (
    'Could not obtain the genesis fork version; supply a connection with '
    '--consensus-endpoint or provide a fork version with --fork-version'
)


class DepositDataError(Exception): ...


class InvalidInputError(DepositDataError, ValueError):
    """Malformed hex, wrong-length keys, malformed amounts or missing selectors."""


class ConfigurationUnavailableError(DepositDataError):
    """The fork version was neither supplied nor fetchable."""

    def __init__(self, message: str = MISSING_FORK_VERSION) -> None:
        super().__init__(message)


class SigningError(DepositDataError):
    """The account is locked or unavailable, or the signer failed."""


class EncodingError(DepositDataError):
    """Commitment root or call data could not be computed."""
