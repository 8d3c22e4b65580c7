from click.testing import CliRunner

import validator_deposit
from validator_deposit.main import cli


def test_version(runner: CliRunner):
    result = runner.invoke(cli, ['--version'])

    assert result.exit_code == 0
    assert validator_deposit.__version__ in result.output


def test_deposit_data_registered(runner: CliRunner):
    result = runner.invoke(cli, ['deposit-data', '--help'])

    assert result.exit_code == 0
    assert '--validator-account' in result.output
