import logging
from collections.abc import Callable

import click
from pydantic import BaseModel, Field

from everestctl.core.commands.everest_config import EverestConfig
from everestctl.core.everest.everest_client import BaseEverestClient
from everestctl.core.utils import setup_logger


class DeleteMySQLConfig(BaseModel):
    name: str
    kubernetes_id: str
    everest: EverestConfig = Field(default_factory=EverestConfig)
    # Skip the confirmation prompt
    force: bool = False


class DeleteMySQL:
    def __init__(self, config: DeleteMySQLConfig, everest_client: BaseEverestClient,
                 logger: logging.Logger | None = None, confirm: Callable[[str], bool] = click.confirm):
        if config is None:
            raise ValueError('DeleteMySQLConfig is required')

        self.config = config
        self._everest_client = everest_client
        self._logger = logger or setup_logger('delete/mysql')
        self._confirm = confirm

    def run(self) -> bool:
        """Delete the cluster, returning False when the operator declines the prompt."""
        if not self.config.force:
            confirmed = self._confirm(f'Are you sure you want to remove the "{self.config.name}" database cluster?')
            if not confirmed:
                self._logger.info('Exiting')
                return False

        self._logger.info(f'Deleting "{self.config.name}" cluster')
        self._everest_client.delete_db_cluster(self.config.kubernetes_id, self.config.name)
        self._logger.info(f'Cluster "{self.config.name}" successfully deleted')

        return True
