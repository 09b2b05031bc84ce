from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from types import TracebackType
from typing import Any

import httpx
import pydantic

from everestctl.core.config import EVEREST_REQUEST_TIMEOUT
from everestctl.core.everest.schemas import DatabaseCluster, DatabaseEngineList
from everestctl.core.exceptions import RemoteCallError
from everestctl.core.utils import setup_logger


class BaseEverestClient(ABC):
    @abstractmethod
    def create_db_cluster(self, kubernetes_id: str, cluster: DatabaseCluster) -> dict[str, Any] | None:
        pass

    @abstractmethod
    def delete_db_cluster(self, kubernetes_id: str, name: str) -> dict[str, Any] | None:
        pass

    @abstractmethod
    def list_database_engines(self, kubernetes_id: str) -> DatabaseEngineList:
        pass


class EverestClient(BaseEverestClient):
    def __init__(self, endpoint: str, timeout: float = EVEREST_REQUEST_TIMEOUT,
                 transport: httpx.BaseTransport | None = None, logger: logging.Logger | None = None):
        self._logger = logger or setup_logger('EverestClient')

        self._client = httpx.Client(
            base_url=f'{endpoint.rstrip("/")}/v1',
            timeout=timeout,
            transport=transport,
        )

    def __enter__(self) -> EverestClient:
        return self

    def __exit__(self, exc_type: type[BaseException] | None, exc: BaseException | None,
                 traceback: TracebackType | None) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text

        if isinstance(body, dict) and body.get('message'):
            return body['message']

        return response.text

    def _request(self, method: str, path: str, operation: str, **kwargs) -> httpx.Response:
        self._logger.debug(f'{method} {path}')

        try:
            response = self._client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            msg = f'could not {operation}: {e.response.status_code} - {self._error_message(e.response)}'
            self._logger.debug(msg)
            raise RemoteCallError(msg) from e
        except httpx.RequestError as e:
            raise RemoteCallError(f'could not {operation}: cannot connect to Everest: {e}') from e

        return response

    def create_db_cluster(self, kubernetes_id: str, cluster: DatabaseCluster) -> dict[str, Any] | None:
        response = self._request(
            'POST',
            f'/kubernetes/{kubernetes_id}/database-clusters',
            'create database cluster',
            content=cluster.model_dump_json(by_alias=True, exclude_none=True),
            headers={'Content-Type': 'application/json'},
        )

        return response.json() if response.content else None

    def delete_db_cluster(self, kubernetes_id: str, name: str) -> dict[str, Any] | None:
        response = self._request(
            'DELETE',
            f'/kubernetes/{kubernetes_id}/database-clusters/{name}',
            'delete database cluster',
        )

        return response.json() if response.content else None

    def list_database_engines(self, kubernetes_id: str) -> DatabaseEngineList:
        response = self._request(
            'GET',
            f'/kubernetes/{kubernetes_id}/database-engines',
            'list database engines',
        )

        try:
            return DatabaseEngineList.model_validate_json(response.content)
        except pydantic.ValidationError as e:
            raise RemoteCallError(f'could not list database engines: unexpected response from Everest: {e}') from e
