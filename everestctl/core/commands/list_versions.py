from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field

import semver
from pydantic import BaseModel, Field

from everestctl.core.commands.everest_config import EverestConfig
from everestctl.core.everest.everest_client import BaseEverestClient
from everestctl.core.everest.schemas import DatabaseEngine
from everestctl.core.exceptions import ValidationError
from everestctl.core.utils import setup_logger


@dataclass(frozen=True)
class EngineVersion:
    original: str
    version: semver.Version = field(compare=False)

    @classmethod
    def parse(cls, version: str) -> EngineVersion:
        try:
            parsed = semver.Version.parse(version, optional_minor_and_patch=True)
        except (ValueError, TypeError) as e:
            raise ValidationError('version', version, str(e)) from e

        return cls(original=version, version=parsed)

    def __str__(self) -> str:
        return self.original


class VersionsList(Mapping[str, tuple[EngineVersion, ...]]):
    """Parsed engine versions keyed by engine type. Read-only once built."""

    def __init__(self, versions: Mapping[str, Iterable[EngineVersion]] | None = None,
                 **kwargs: Iterable[EngineVersion]):
        buckets = dict(versions or {}, **kwargs)
        self._versions = {engine_type: tuple(bucket) for engine_type, bucket in buckets.items()}

    def __getitem__(self, engine_type: str) -> tuple[EngineVersion, ...]:
        return self._versions[engine_type]

    def __iter__(self) -> Iterator[str]:
        return iter(self._versions)

    def __len__(self) -> int:
        return len(self._versions)

    def __repr__(self) -> str:
        return f'VersionsList({self._versions!r})'

    def sorted_versions(self, engine_type: str) -> list[EngineVersion]:
        # Newest first, equal versions keep their relative order
        return sorted(self[engine_type], key=lambda v: v.version, reverse=True)

    def __str__(self) -> str:
        out = []
        for engine_type in self:
            out.extend(['-----', engine_type, '-----'])
            out.extend(v.original for v in self.sorted_versions(engine_type))

        return '\n'.join(out)


class VersionsConfig(BaseModel):
    kubernetes_id: str
    everest: EverestConfig = Field(default_factory=EverestConfig)
    # Database engine type to list versions for, all types when empty
    type: str = ''


class ListVersions:
    def __init__(self, config: VersionsConfig, everest_client: BaseEverestClient,
                 logger: logging.Logger | None = None):
        if config is None:
            raise ValueError('VersionsConfig is required')

        self.config = config
        self._everest_client = everest_client
        self._logger = logger or setup_logger('list/versions')

    def run(self) -> VersionsList:
        db_engines = self._everest_client.list_database_engines(self.config.kubernetes_id)

        if not db_engines.items:
            return VersionsList()

        return self._parse_versions(db_engines.items)

    def _parse_versions(self, items: list[DatabaseEngine]) -> VersionsList:
        buckets: dict[str, list[EngineVersion]] = {}
        for db in items:
            if self._check_if_skip(db):
                continue

            bucket = buckets.setdefault(db.spec.type, [])
            for version in db.status.available_versions.engine:
                bucket.append(EngineVersion.parse(version))

        return VersionsList(buckets)

    def _check_if_skip(self, db: DatabaseEngine) -> bool:
        if db.spec is None:
            return True

        if self.config.type and db.spec.type != self.config.type:
            return True

        if db.status is None or db.status.available_versions is None or db.status.available_versions.engine is None:
            self._logger.debug(f'Skipping {db.spec.type} engine without available versions')
            return True

        return False
