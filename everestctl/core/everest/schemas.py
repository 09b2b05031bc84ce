"""
Request and response bodies of the Everest HTTP API.

These mirror the API schema, not the operator's custom resources: unknown fields are
ignored on input and fields the API requires default to their zero value.
"""
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class EverestSchema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra='ignore')


class DatabaseClusterStorage(EverestSchema):
    size: str = ''
    storage_class: str | None = Field(default=None, alias='class')


class DatabaseClusterResources(EverestSchema):
    cpu: str | None = None
    memory: str | None = None


class DatabaseClusterEngine(EverestSchema):
    type: str = ''
    version: str = ''
    replicas: int = 0
    storage: DatabaseClusterStorage = Field(default_factory=DatabaseClusterStorage)
    resources: DatabaseClusterResources | None = None
    config: str | None = None
    user_secrets_name: str | None = None


class DatabaseClusterExpose(EverestSchema):
    type: str = ''
    ip_source_ranges: list[str] | None = None


class DatabaseClusterProxy(EverestSchema):
    type: str = ''
    replicas: int | None = None
    expose: DatabaseClusterExpose | None = None
    config: str | None = None


class DatabaseClusterSpec(EverestSchema):
    engine: DatabaseClusterEngine = Field(default_factory=DatabaseClusterEngine)
    proxy: DatabaseClusterProxy | None = None
    backup: dict[str, Any] | None = None
    monitoring: dict[str, Any] | None = None


class DatabaseCluster(EverestSchema):
    api_version: str = ''
    kind: str = ''
    metadata: dict[str, Any] | None = None
    spec: DatabaseClusterSpec | None = None


class DatabaseEngineSpec(EverestSchema):
    type: str = ''
    allowed_versions: list[str] | None = None


class DatabaseEngineAvailableVersions(EverestSchema):
    engine: dict[str, dict[str, Any]] | None = None
    backup: dict[str, dict[str, Any]] | None = None
    proxy: dict[str, dict[str, dict[str, Any]]] | None = None
    tools: dict[str, dict[str, dict[str, Any]]] | None = None


class DatabaseEngineStatus(EverestSchema):
    status: str | None = None
    operator_version: str | None = None
    available_versions: DatabaseEngineAvailableVersions | None = None


class DatabaseEngine(EverestSchema):
    api_version: str | None = None
    kind: str | None = None
    metadata: dict[str, Any] | None = None
    spec: DatabaseEngineSpec | None = None
    status: DatabaseEngineStatus | None = None


class DatabaseEngineList(EverestSchema):
    items: list[DatabaseEngine] | None = None
