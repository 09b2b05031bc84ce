import logging

import click

from everestctl.cli.commands.delete import delete
from everestctl.cli.commands.list_versions import list_group
from everestctl.cli.commands.password import password
from everestctl.cli.commands.provision import provision
from everestctl.core.config import EVEREST_REQUEST_TIMEOUT


@click.group()
@click.version_option(package_name='everestctl')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.option('--timeout', type=click.FloatRange(min=0, min_open=True), default=EVEREST_REQUEST_TIMEOUT,
              show_default=True, help='Timeout in seconds for every API request')
@click.pass_context
def cli(ctx: click.Context, verbose: bool, timeout: float):
    """Manage Percona Everest database clusters."""
    ctx.ensure_object(dict)
    ctx.obj['log_level'] = logging.DEBUG if verbose else logging.INFO
    ctx.obj['timeout'] = timeout


cli.add_command(provision)
cli.add_command(delete)
cli.add_command(list_group)
cli.add_command(password)


if __name__ == '__main__':
    cli()
