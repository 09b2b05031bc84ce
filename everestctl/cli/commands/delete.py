import click

from everestctl.cli.commands.options import everest_options
from everestctl.cli.errors import cli_errors
from everestctl.core.commands.delete_mysql import DeleteMySQL, DeleteMySQLConfig
from everestctl.core.commands.everest_config import EverestConfig
from everestctl.core.everest.everest_client import EverestClient
from everestctl.core.utils import setup_logger


@click.group()
def delete():
    """Delete a database cluster."""


@delete.command()
@click.option('--name', required=True, help='Cluster name')
@everest_options
@click.option('--force', is_flag=True, help='Do not prompt before removal')
@click.pass_context
def mysql(ctx: click.Context, name: str, kubernetes_id: str, everest_url: str, force: bool):
    """Delete a MySQL database cluster."""
    config = DeleteMySQLConfig(
        name=name,
        kubernetes_id=kubernetes_id,
        everest=EverestConfig(endpoint=everest_url, timeout=ctx.obj['timeout']),
        force=force,
    )
    logger = setup_logger('delete/mysql', ctx.obj['log_level'])

    with cli_errors(), EverestClient(config.everest.endpoint, timeout=config.everest.timeout,
                                     logger=logger) as everest_client:
        DeleteMySQL(config, everest_client, logger=logger).run()
