import logging
from urllib.parse import urlparse, urlunparse

from validator_deposit.common.utils import JsonFormatter
from validator_deposit.config.settings import (
    LOG_DATE_FORMAT,
    LOG_JSON,
    LOG_WHITELISTED_DOMAINS,
    settings,
)

LOG_LEVELS = [
    'FATAL',
    'ERROR',
    'WARNING',
    'INFO',
    'DEBUG',
]


class TokenPlainFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        return hide_tokens(super().format(record))


class TokenJsonFormatter(JsonFormatter):
    def format(self, record: logging.LogRecord) -> str:
        return hide_tokens(super().format(record))


def setup_logging() -> None:
    formatter: TokenJsonFormatter | TokenPlainFormatter
    # StreamHandler writes to stderr, stdout is reserved for deposit data
    if settings.log_format == LOG_JSON:
        formatter = TokenJsonFormatter('%(timestamp)s %(level)s %(name)s %(message)s')
        logHandler = logging.StreamHandler()
        logHandler.setFormatter(formatter)
        logging.basicConfig(
            level=settings.log_level,
            handlers=[logHandler],
            force=True,
        )
    else:
        formatter = TokenPlainFormatter('%(asctime)s %(levelname)-8s %(message)s', LOG_DATE_FORMAT)
        logHandler = logging.StreamHandler()
        logHandler.setFormatter(formatter)
        logging.basicConfig(
            level=settings.log_level,
            handlers=[logHandler],
            force=True,
        )


def hide_tokens(msg: str) -> str:
    endpoint_to_hidden_endpoint = _create_hidden_endpoints()
    for endpoint, hidden_endpoint in endpoint_to_hidden_endpoint.items():
        if endpoint in msg:
            msg = msg.replace(endpoint, hidden_endpoint)
    return msg


def _create_hidden_endpoints() -> dict[str, str]:
    results = {}
    endpoints = [
        settings.consensus_endpoint,
        settings.remote_signer_url,
        settings.hashi_vault_url,
    ]
    for endpoint in endpoints:
        if not endpoint:
            continue
        endpoint = endpoint.rstrip('/')
        parsed_endpoint = urlparse(endpoint)
        if parsed_endpoint.hostname in LOG_WHITELISTED_DOMAINS or not parsed_endpoint.path:
            continue
        # Reconstruct the URL with the token hidden
        hidden_endpoint = urlunparse(
            (
                parsed_endpoint.scheme,
                parsed_endpoint.netloc,
                '<hidden>',  # Replace the path with '<hidden>'
                '',
                '',
                '',  # Clear params, query, and fragment
            )
        )
        results[endpoint] = hidden_endpoint
    return results
