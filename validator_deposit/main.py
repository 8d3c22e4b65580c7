import click

import validator_deposit
from validator_deposit.commands.deposit_data import deposit_data


@click.version_option(
    version=validator_deposit.__version__, prog_name='Validator deposit data generator'
)
@click.group()
def cli() -> None:
    pass


cli.add_command(deposit_data)


if __name__ == '__main__':
    cli()
