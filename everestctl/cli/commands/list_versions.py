import click

from everestctl.cli.commands.options import everest_options
from everestctl.cli.errors import cli_errors
from everestctl.core.commands.everest_config import EverestConfig
from everestctl.core.commands.list_versions import ListVersions, VersionsConfig
from everestctl.core.everest.everest_client import EverestClient
from everestctl.core.utils import setup_logger


@click.group(name='list')
def list_group():
    """List resources known to Everest."""


@list_group.command()
@everest_options
@click.option('--type', 'engine_type', default='',
              help='Only list versions of this database engine type (pxc, psmdb, postgresql)')
@click.pass_context
def versions(ctx: click.Context, kubernetes_id: str, everest_url: str, engine_type: str):
    """List available database engine versions."""
    config = VersionsConfig(
        kubernetes_id=kubernetes_id,
        everest=EverestConfig(endpoint=everest_url, timeout=ctx.obj['timeout']),
        type=engine_type,
    )
    logger = setup_logger('list/versions', ctx.obj['log_level'])

    with cli_errors(), EverestClient(config.everest.endpoint, timeout=config.everest.timeout,
                                     logger=logger) as everest_client:
        result = ListVersions(config, everest_client, logger=logger).run()

    click.echo(str(result))
