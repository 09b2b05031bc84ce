import base64
import logging
from pathlib import Path

from kubernetes import client
from pydantic import BaseModel

from everestctl.core.config import EVEREST_REQUEST_TIMEOUT, KUBECONFIG_PATH
from everestctl.core.exceptions import RemoteCallError
from everestctl.core.kubernetes.kubernetes_client import BaseKubernetesClient, KubernetesClient
from everestctl.core.utils import derive_password_hash, generate_password, setup_logger

PASSWORD_SECRET_NAME = 'everest-password'
PASSWORD_SECRET_KEY = 'password'


class ResetConfig(BaseModel):
    kubeconfig_path: Path = KUBECONFIG_PATH
    # Namespace the password is reset in
    namespace: str
    request_timeout: float = EVEREST_REQUEST_TIMEOUT


class ResetResponse(BaseModel):
    # Plain-text password generated by the command
    password: str

    def __str__(self) -> str:
        return f'Your new password is:\n{self.password}'


def build_password_secret(namespace: str, password_hash: bytes) -> client.V1Secret:
    return client.V1Secret(
        api_version='v1',
        kind='Secret',
        metadata=client.V1ObjectMeta(name=PASSWORD_SECRET_NAME, namespace=namespace),
        type='Opaque',
        data={PASSWORD_SECRET_KEY: base64.b64encode(password_hash).decode('ascii')},
    )


class ResetPassword:
    def __init__(self, config: ResetConfig, kube_client: BaseKubernetesClient | None = None,
                 logger: logging.Logger | None = None):
        if config is None:
            raise ValueError('ResetConfig is required')

        self.config = config
        self._logger = logger or setup_logger('password/reset')
        self._kube_client = kube_client or KubernetesClient(
            config.kubeconfig_path, request_timeout=config.request_timeout, logger=self._logger
        )

    def run(self) -> ResetResponse:
        try:
            namespace = self._kube_client.get_namespace(self.config.namespace)
        except RemoteCallError as e:
            raise RemoteCallError(f'could not get namespace from Kubernetes: {e}') from e

        new_password = generate_password()
        password_hash = derive_password_hash(new_password, namespace.metadata.uid or '')

        try:
            self._kube_client.set_secret(build_password_secret(self.config.namespace, password_hash))
        except RemoteCallError as e:
            raise RemoteCallError(f'could not update password in Kubernetes: {e}') from e

        self._logger.info(f'Password in namespace {self.config.namespace} has been reset')

        return ResetResponse(password=new_password)
