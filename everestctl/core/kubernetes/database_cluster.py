from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DATABASE_CLUSTER_API_VERSION = 'everest.percona.com/v1alpha1'
DATABASE_CLUSTER_KIND = 'DatabaseCluster'


class EngineType(StrEnum):
    PXC = 'pxc'
    PSMDB = 'psmdb'
    POSTGRESQL = 'postgresql'


class ProxyType(StrEnum):
    MONGOS = 'mongos'
    HAPROXY = 'haproxy'
    PROXYSQL = 'proxysql'
    PGBOUNCER = 'pgbouncer'


class ExposeType(StrEnum):
    INTERNAL = 'internal'
    EXTERNAL = 'external'


class OperatorModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ObjectMeta(OperatorModel):
    name: str
    namespace: str | None = None
    labels: dict[str, str] | None = None
    annotations: dict[str, str] | None = None


class Storage(OperatorModel):
    size: str
    storage_class: str | None = Field(default=None, alias='class')


class Resources(OperatorModel):
    cpu: str | None = None
    memory: str | None = None


class Engine(OperatorModel):
    type: EngineType
    # Empty version lets the operator pick the newest one
    version: str = ''
    replicas: int = Field(ge=1)
    storage: Storage
    resources: Resources = Field(default_factory=Resources)
    config: str | None = None
    user_secrets_name: str | None = None
    cr_version: str | None = None


class Expose(OperatorModel):
    type: ExposeType = ExposeType.INTERNAL
    ip_source_ranges: list[str] | None = None


class Proxy(OperatorModel):
    type: ProxyType
    replicas: int | None = None
    expose: Expose = Field(default_factory=Expose)
    config: str | None = None
    resources: Resources | None = None


class DatabaseClusterSpec(OperatorModel):
    paused: bool = False
    allow_unsafe_configuration: bool = False
    engine: Engine
    proxy: Proxy


class DatabaseClusterStatus(OperatorModel):
    status: str | None = None
    hostname: str | None = None
    port: int | None = None
    ready: int | None = None
    size: int | None = None
    message: str | None = None


class DatabaseCluster(OperatorModel):
    """DatabaseCluster custom resource as understood by the Everest operator."""

    api_version: str = DATABASE_CLUSTER_API_VERSION
    kind: str = DATABASE_CLUSTER_KIND
    metadata: ObjectMeta
    spec: DatabaseClusterSpec
    status: DatabaseClusterStatus | None = None
