import click

from everestctl.cli.commands.options import everest_options
from everestctl.cli.errors import cli_errors
from everestctl.core.commands.everest_config import EverestConfig
from everestctl.core.commands.provision_mysql import ProvisionMySQL, ProvisionMySQLConfig
from everestctl.core.everest.everest_client import EverestClient
from everestctl.core.utils import setup_logger


@click.group()
def provision():
    """Provision a new database cluster."""


@provision.command()
@click.option('--name', required=True, help='Cluster name')
@everest_options
@click.option('--db-version', default='latest', show_default=True, help='Database engine version')
@click.option('--nodes', type=click.IntRange(min=1), default=1, show_default=True, help='Number of nodes')
@click.option('--cpu', default='1', show_default=True, help='CPUs to assign to the cluster')
@click.option('--memory', default='1G', show_default=True, help='Memory to assign to the cluster')
@click.option('--disk', default='15G', show_default=True, help='Disk size to assign to the cluster')
@click.option('--external-access', is_flag=True, help='Make the cluster accessible from outside Kubernetes')
@click.pass_context
def mysql(ctx: click.Context, name: str, kubernetes_id: str, everest_url: str, db_version: str, nodes: int,
          cpu: str, memory: str, disk: str, external_access: bool):
    """Create a MySQL (Percona XtraDB Cluster) database cluster."""
    config = ProvisionMySQLConfig(
        name=name,
        kubernetes_id=kubernetes_id,
        everest=EverestConfig(endpoint=everest_url, timeout=ctx.obj['timeout']),
        version=db_version,
        nodes=nodes,
        cpu=cpu,
        memory=memory,
        disk=disk,
        external_access=external_access,
    )
    logger = setup_logger('provision/mysql', ctx.obj['log_level'])

    with cli_errors(), EverestClient(config.everest.endpoint, timeout=config.everest.timeout,
                                     logger=logger) as everest_client:
        ProvisionMySQL(config, everest_client, logger=logger).run()
