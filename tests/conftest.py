from unittest.mock import MagicMock

import pytest
from kubernetes import client

from everestctl.core.everest.everest_client import BaseEverestClient
from everestctl.core.everest.schemas import DatabaseCluster, DatabaseEngineList
from everestctl.core.exceptions import RemoteCallError
from everestctl.core.kubernetes.kubernetes_client import BaseKubernetesClient


class FakeEverestClient(BaseEverestClient):
    def __init__(self, engines: DatabaseEngineList | None = None, error: Exception | None = None):
        self.engines = engines or DatabaseEngineList()
        self.error = error
        self.created: list[tuple[str, DatabaseCluster]] = []
        self.deleted: list[tuple[str, str]] = []
        self.listed: list[str] = []

    def create_db_cluster(self, kubernetes_id: str, cluster: DatabaseCluster):
        if self.error:
            raise self.error
        self.created.append((kubernetes_id, cluster))

    def delete_db_cluster(self, kubernetes_id: str, name: str):
        if self.error:
            raise self.error
        self.deleted.append((kubernetes_id, name))

    def list_database_engines(self, kubernetes_id: str) -> DatabaseEngineList:
        if self.error:
            raise self.error
        self.listed.append(kubernetes_id)
        return self.engines


class FakeKubernetesClient(BaseKubernetesClient):
    def __init__(self, namespaces: dict[str, str] | None = None, secret_error: Exception | None = None):
        # namespace name -> uid
        self.namespaces = namespaces or {}
        self.secret_error = secret_error
        self.secrets: dict[tuple[str, str], client.V1Secret] = {}
        self.set_secret_calls = 0

    def get_namespace(self, name: str) -> client.V1Namespace:
        if name not in self.namespaces:
            raise RemoteCallError(f'NotFound: namespaces "{name}" not found')
        return client.V1Namespace(metadata=client.V1ObjectMeta(name=name, uid=self.namespaces[name]))

    def set_secret(self, secret: client.V1Secret) -> None:
        self.set_secret_calls += 1
        if self.secret_error:
            raise self.secret_error
        self.secrets[(secret.metadata.namespace, secret.metadata.name)] = secret


@pytest.fixture
def everest_client():
    return FakeEverestClient()


@pytest.fixture
def kube_client():
    return FakeKubernetesClient(namespaces={'everest': '9b6c5a3e-52b4-4bd1-a3f4-0c0c8f6b1a11'})


@pytest.fixture
def logger():
    return MagicMock()
