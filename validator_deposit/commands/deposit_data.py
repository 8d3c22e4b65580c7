import asyncio
import logging
import sys
from pathlib import Path

import click

from validator_deposit.common.logging import LOG_LEVELS, setup_logging
from validator_deposit.common.utils import greenify, log_verbose
from validator_deposit.config.networks import AVAILABLE_NETWORKS, NETWORKS
from validator_deposit.config.settings import (
    DEFAULT_HASHI_VAULT_ENGINE_NAME,
    DEFAULT_TIMEOUT,
    LOG_FORMATS,
    LOG_PLAIN,
    settings,
)
from validator_deposit.deposit.encoder import render_deposit_data
from validator_deposit.deposit.generator import generate_deposit_data
from validator_deposit.deposit.typings import DepositDataConfig, OutputMode
from validator_deposit.wallets.load import load_wallet_store

logger = logging.getLogger(__name__)


@click.option(
    '--validator-account',
    required=True,
    help='Account(s) of the validator(s) in the form "wallet/account". '
    'The account part is a regular expression, an empty account part selects all accounts.',
)
@click.option(
    '--withdrawal-account',
    help='Account of the withdrawal key in the form "wallet/account".',
)
@click.option(
    '--withdrawal-public-key',
    help='Public key of the withdrawal key in hex.',
)
@click.option(
    '--deposit-value',
    required=True,
    help='Value of the deposit, for example "32 Ether". A value without a unit is in Wei.',
)
@click.option(
    '--fork-version',
    help='Fork version of the chain in hex. Overrides the network and the consensus endpoint.',
)
@click.option(
    '--network',
    type=click.Choice(
        AVAILABLE_NETWORKS,
        case_sensitive=False,
    ),
    envvar='NETWORK',
    help='The network to take the genesis fork version from.',
)
@click.option(
    '--raw',
    is_flag=True,
    help='Print the deposit contract call data.',
)
@click.option(
    '--launchpad',
    is_flag=True,
    help='Print the deposit data in the launchpad format.',
)
@click.option(
    '--output-file',
    type=click.Path(exists=False, file_okay=True, dir_okay=False),
    help='Save the deposit data to the file instead of printing it.',
)
@click.option(
    '--consensus-endpoint',
    type=str,
    envvar='CONSENSUS_ENDPOINT',
    help='API endpoint for the consensus node to fetch the genesis fork version from.',
)
@click.option(
    '--remote-signer-url',
    type=str,
    envvar='REMOTE_SIGNER_URL',
    help='The base URL of the remote signer, e.g. http://signer:9000',
)
@click.option(
    '--hashi-vault-url',
    type=str,
    envvar='HASHI_VAULT_URL',
    help='The base URL of the vault service, e.g. http://vault:8200.',
)
@click.option(
    '--hashi-vault-token',
    type=str,
    envvar='HASHI_VAULT_TOKEN',
    help='Authentication token for accessing Hashi vault.',
)
@click.option(
    '--hashi-vault-engine-name',
    type=str,
    envvar='HASHI_VAULT_ENGINE_NAME',
    default=DEFAULT_HASHI_VAULT_ENGINE_NAME,
    help=f'The name of the K/V secret engine. Default is "{DEFAULT_HASHI_VAULT_ENGINE_NAME}".',
)
@click.option(
    '--timeout',
    type=int,
    envvar='TIMEOUT',
    default=DEFAULT_TIMEOUT,
    help=f'The maximum time in seconds to generate the deposit data. Default is {DEFAULT_TIMEOUT}.',
)
@click.option(
    '--quiet',
    is_flag=True,
    help='Do not print anything, report the result with the exit status only.',
)
@click.option(
    '--log-level',
    type=click.Choice(
        LOG_LEVELS,
        case_sensitive=False,
    ),
    envvar='LOG_LEVEL',
    help='The log level.',
)
@click.option(
    '--log-format',
    type=click.Choice(
        LOG_FORMATS,
        case_sensitive=False,
    ),
    default=LOG_PLAIN,
    envvar='LOG_FORMAT',
    help='The log record format. Can be "plain" or "json".',
)
@click.option(
    '-v',
    '--verbose',
    help='Print the progress of the deposit data generation.',
    envvar='VERBOSE',
    is_flag=True,
)
@click.command(help='Generates signed deposit data for validators.')
# pylint: disable-next=too-many-arguments,too-many-locals
def deposit_data(
    validator_account: str,
    withdrawal_account: str | None,
    withdrawal_public_key: str | None,
    deposit_value: str,
    fork_version: str | None,
    network: str | None,
    raw: bool,
    launchpad: bool,
    output_file: str | None,
    consensus_endpoint: str | None,
    remote_signer_url: str | None,
    hashi_vault_url: str | None,
    hashi_vault_token: str | None,
    hashi_vault_engine_name: str,
    timeout: int,
    quiet: bool,
    log_level: str | None,
    log_format: str,
    verbose: bool,
) -> None:
    if raw and launchpad:
        raise click.UsageError('--raw and --launchpad are mutually exclusive')

    output_mode = OutputMode.DEFAULT
    if raw:
        output_mode = OutputMode.RAW
    elif launchpad:
        output_mode = OutputMode.LAUNCHPAD

    settings.set(
        consensus_endpoint=consensus_endpoint,
        remote_signer_url=remote_signer_url,
        hashi_vault_url=hashi_vault_url,
        hashi_vault_token=hashi_vault_token,
        hashi_vault_engine_name=hashi_vault_engine_name,
        timeout=timeout,
        verbose=verbose,
        quiet=quiet,
        log_level=log_level,
        log_format=log_format,
    )
    setup_logging()

    config = DepositDataConfig(
        validator_account=validator_account,
        withdrawal_account=withdrawal_account,
        withdrawal_public_key=withdrawal_public_key,
        deposit_value=deposit_value,
        fork_version=fork_version,
        network=network.lower() if network else None,
        output_mode=output_mode,
    )

    try:
        output = asyncio.run(main(config))
        if output_file and not quiet:
            Path(output_file).write_text(output + '\n', encoding='utf-8')
    except Exception as e:
        log_verbose(e)
        sys.exit(1)

    if quiet:
        return

    if output_file:
        click.echo(f'Done. Saved deposit data to {greenify(output_file)}')
    else:
        click.echo(output)


async def main(config: DepositDataConfig) -> str:
    wallet_store = load_wallet_store()
    deposit_data = await generate_deposit_data(
        config=config,
        wallet_store=wallet_store,
        timeout=settings.timeout,
    )

    if config.output_mode == OutputMode.RAW and config.network:
        logger.info(
            'Deposit contract address for %s is %s',
            config.network,
            NETWORKS[config.network].DEPOSIT_CONTRACT_ADDRESS,
        )
    return render_deposit_data(deposit_data, config.output_mode)
