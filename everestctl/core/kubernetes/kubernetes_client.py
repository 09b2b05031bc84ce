import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path

import urllib3
from kubernetes import client, config
from kubernetes.client import ApiException
from kubernetes.config import ConfigException

from everestctl.core.config import EVEREST_REQUEST_TIMEOUT
from everestctl.core.exceptions import EverestCliError, RemoteCallError
from everestctl.core.utils import setup_logger


class BaseKubernetesClient(ABC):
    @abstractmethod
    def get_namespace(self, name: str) -> client.V1Namespace:
        pass

    @abstractmethod
    def set_secret(self, secret: client.V1Secret) -> None:
        pass


class KubernetesClient(BaseKubernetesClient):
    def __init__(self, kubeconfig_path: Path, request_timeout: float = EVEREST_REQUEST_TIMEOUT,
                 logger: logging.Logger | None = None):
        self._logger = logger or setup_logger('KubernetesClient')
        self._request_timeout = request_timeout

        try:
            api_client = config.new_client_from_config(str(kubeconfig_path))
        except (ConfigException, OSError) as e:
            raise EverestCliError(f'could not load kubeconfig {kubeconfig_path}: {e}') from e

        self._core = client.CoreV1Api(api_client)
        self._version = client.VersionApi(api_client)

        self._check_connection()

    def _check_connection(self):
        try:
            self._version.get_code(_request_timeout=self._request_timeout)
        except urllib3.exceptions.HTTPError as e:
            self._logger.error('Could not connect to Kubernetes. '
                               'Make sure Kubernetes is running and is accessible from this computer/server.')
            raise RemoteCallError(f'could not connect to Kubernetes: {e}') from e
        except ApiException as e:
            raise RemoteCallError(self._describe_api_exception(e)) from e

    def _describe_api_exception(self, exception: ApiException) -> str:
        try:
            body = json.loads(exception.body)
        except (TypeError, ValueError):
            return f'{exception.status} {exception.reason}'

        self._logger.debug(f'Original reason: {exception.reason}')

        return f'{body.get("reason", exception.reason)}: {body.get("message", "")}'

    def get_namespace(self, name: str) -> client.V1Namespace:
        self._logger.debug(f'Reading namespace {name}')

        try:
            return self._core.read_namespace(name, _request_timeout=self._request_timeout)
        except ApiException as e:
            raise RemoteCallError(self._describe_api_exception(e)) from e
        except urllib3.exceptions.HTTPError as e:
            raise RemoteCallError(str(e)) from e

    def set_secret(self, secret: client.V1Secret) -> None:
        name = secret.metadata.name
        namespace = secret.metadata.namespace

        try:
            try:
                self._core.replace_namespaced_secret(name, namespace, secret, _request_timeout=self._request_timeout)
                self._logger.debug(f'Secret {namespace}/{name} replaced')
            except ApiException as e:
                if e.status != 404:
                    raise
                self._core.create_namespaced_secret(namespace, secret, _request_timeout=self._request_timeout)
                self._logger.debug(f'Secret {namespace}/{name} created')
        except ApiException as e:
            raise RemoteCallError(self._describe_api_exception(e)) from e
        except urllib3.exceptions.HTTPError as e:
            raise RemoteCallError(str(e)) from e
