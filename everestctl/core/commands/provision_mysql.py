import logging

import pydantic
from pydantic import BaseModel, Field
from pydantic_core import PydanticSerializationError

from everestctl.core.commands.everest_config import EverestConfig
from everestctl.core.everest import schemas
from everestctl.core.everest.everest_client import BaseEverestClient
from everestctl.core.exceptions import InternalInvariantError
from everestctl.core.kubernetes.database_cluster import (
    DatabaseCluster,
    DatabaseClusterSpec,
    Engine,
    EngineType,
    Expose,
    ExposeType,
    ObjectMeta,
    Proxy,
    ProxyType,
    Resources,
    Storage,
)
from everestctl.core.kubernetes.quantity import parse_resource_quantity
from everestctl.core.utils import setup_logger

LATEST_VERSION = 'latest'


class ProvisionMySQLConfig(BaseModel):
    name: str
    kubernetes_id: str
    everest: EverestConfig = Field(default_factory=EverestConfig)

    version: str = LATEST_VERSION
    nodes: int = Field(default=1, ge=1)
    cpu: str = '1'
    memory: str = '1G'
    disk: str = '15G'

    external_access: bool = False


def normalize_version(version: str) -> str:
    # An empty version makes the operator use the newest one
    return '' if version == LATEST_VERSION else version


def convert_payload(cluster: DatabaseCluster) -> tuple[schemas.DatabaseCluster, str]:
    """
    Translate an operator DatabaseCluster into the Everest API request body.

    The cluster is dumped to canonical JSON and loaded back as the API schema, so
    only fields both schemas share survive. Fields the API does not know about are
    dropped and API fields missing from the cluster keep their defaults. Returns the
    API body together with the intermediate JSON.
    """
    try:
        body_json = cluster.model_dump_json(by_alias=True, exclude_none=True)
    except PydanticSerializationError as e:
        raise InternalInvariantError(f'cannot marshal payload to json: {e}') from e

    try:
        body = schemas.DatabaseCluster.model_validate_json(body_json)
    except pydantic.ValidationError as e:
        raise InternalInvariantError(f'cannot unmarshal payload back from json: {e}') from e

    return body, body_json


class ProvisionMySQL:
    def __init__(self, config: ProvisionMySQLConfig, everest_client: BaseEverestClient,
                 logger: logging.Logger | None = None):
        if config is None:
            raise ValueError('ProvisionMySQLConfig is required')

        self.config = config
        self._everest_client = everest_client
        self._logger = logger or setup_logger('provision/mysql')

    def run(self) -> bool:
        self._logger.info('Preparing cluster config')
        body = self.prepare_body()

        self._logger.info(f'Creating "{self.config.name}" database cluster')
        self._everest_client.create_db_cluster(self.config.kubernetes_id, body)

        self._logger.info(f'Database cluster "{self.config.name}" has been scheduled to Kubernetes')

        return True

    def build_cluster(self) -> DatabaseCluster:
        # Every quantity is parsed before anything is built
        cpu = parse_resource_quantity('cpu', self.config.cpu)
        memory = parse_resource_quantity('memory', self.config.memory)
        disk = parse_resource_quantity('disk storage', self.config.disk)

        replicas = self.config.nodes

        cluster = DatabaseCluster(
            metadata=ObjectMeta(name=self.config.name),
            spec=DatabaseClusterSpec(
                engine=Engine(
                    type=EngineType.PXC,
                    replicas=replicas,
                    version=normalize_version(self.config.version),
                    storage=Storage(size=str(disk)),
                    resources=Resources(cpu=str(cpu), memory=str(memory)),
                ),
                proxy=Proxy(
                    type=ProxyType.HAPROXY,
                    replicas=replicas,
                    expose=Expose(type=ExposeType.INTERNAL),
                ),
            ),
        )

        if self.config.external_access:
            self._logger.debug('Enabling external access')
            cluster.spec.proxy.expose.type = ExposeType.EXTERNAL

        return cluster

    def prepare_body(self) -> schemas.DatabaseCluster:
        body, body_json = convert_payload(self.build_cluster())
        self._logger.debug(body_json)

        return body
