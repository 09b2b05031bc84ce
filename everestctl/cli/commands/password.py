from pathlib import Path

import click

from everestctl.cli.errors import cli_errors
from everestctl.core import config as everest_config
from everestctl.core.commands.reset_password import ResetConfig, ResetPassword
from everestctl.core.utils import setup_logger


@click.group()
def password():
    """Manage the Everest password."""


@password.command()
@click.option('--namespace', required=True, help='Namespace the password is reset in')
@click.option('--kubeconfig', type=click.Path(path_type=Path), envvar='KUBECONFIG',
              default=everest_config.KUBECONFIG_PATH, show_default=True, help='Path to a kubeconfig')
@click.option('--json', 'as_json', is_flag=True, help='Print the result as JSON')
@click.pass_context
def reset(ctx: click.Context, namespace: str, kubeconfig: Path, as_json: bool):
    """Generate a new password and store its hash in Kubernetes."""
    config = ResetConfig(kubeconfig_path=kubeconfig, namespace=namespace, request_timeout=ctx.obj['timeout'])
    logger = setup_logger('password/reset', ctx.obj['log_level'])

    with cli_errors():
        response = ResetPassword(config, logger=logger).run()

    click.echo(response.model_dump_json() if as_json else str(response))
