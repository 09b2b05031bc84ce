import json
from unittest.mock import ANY, MagicMock, patch

import pytest
from click.testing import CliRunner

from everestctl.cli.main import cli
from everestctl.core.everest.schemas import DatabaseEngineList
from everestctl.core.exceptions import RemoteCallError


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def mock_setup_logger():
    modules = ('provision', 'delete', 'list_versions', 'password')
    patchers = [patch(f'everestctl.cli.commands.{module}.setup_logger', return_value=MagicMock()) for module in modules]
    for patcher in patchers:
        patcher.start()
    yield
    for patcher in patchers:
        patcher.stop()


def patch_everest_client(module: str, everest_client):
    everest_client_cls = patch(f'everestctl.cli.commands.{module}.EverestClient').start()
    everest_client_cls.return_value.__enter__.return_value = everest_client
    return everest_client_cls


@pytest.fixture(autouse=True)
def stop_patches():
    yield
    patch.stopall()


class TestProvisionCommand:
    def test_provision_mysql(self, runner, everest_client):
        everest_client_cls = patch_everest_client('provision', everest_client)

        result = runner.invoke(cli, [
            'provision', 'mysql', '--name', 'my-db', '--kubernetes-id', 'k8s-1', '--everest-url', 'http://everest',
            '--nodes', '3', '--cpu', '2', '--memory', '4Gi', '--disk', '100Gi', '--external-access',
        ])

        assert result.exit_code == 0, result.output
        everest_client_cls.assert_called_once_with('http://everest', timeout=30.0, logger=ANY)
        kubernetes_id, body = everest_client.created[0]
        assert kubernetes_id == 'k8s-1'
        assert body.spec.proxy.expose.type == 'external'
        assert body.spec.engine.replicas == body.spec.proxy.replicas == 3

    def test_everest_client_uses_command_logger(self, runner, everest_client):
        everest_client_cls = patch_everest_client('provision', everest_client)
        command_logger = MagicMock()

        with patch('everestctl.cli.commands.provision.setup_logger', return_value=command_logger):
            result = runner.invoke(cli, ['provision', 'mysql', '--name', 'my-db', '--kubernetes-id', 'k8s-1'])

        assert result.exit_code == 0, result.output
        assert everest_client_cls.call_args.kwargs['logger'] is command_logger

    def test_invalid_quantity(self, runner, everest_client):
        patch_everest_client('provision', everest_client)

        result = runner.invoke(cli, ['provision', 'mysql', '--name', 'my-db', '--kubernetes-id', 'k8s-1',
                                     '--memory', 'lots'])

        assert result.exit_code == 1
        assert 'cannot parse memory' in result.output
        assert everest_client.created == []

    def test_nodes_must_be_positive(self, runner, everest_client):
        patch_everest_client('provision', everest_client)

        result = runner.invoke(cli, ['provision', 'mysql', '--name', 'my-db', '--kubernetes-id', 'k8s-1',
                                     '--nodes', '0'])

        assert result.exit_code == 2
        assert everest_client.created == []

    def test_kubernetes_id_from_environment(self, runner, everest_client):
        patch_everest_client('provision', everest_client)

        result = runner.invoke(cli, ['provision', 'mysql', '--name', 'my-db'],
                               env={'EVEREST_KUBERNETES_ID': 'from-env'})

        assert result.exit_code == 0, result.output
        assert everest_client.created[0][0] == 'from-env'


class TestDeleteCommand:
    def test_declined(self, runner, everest_client):
        patch_everest_client('delete', everest_client)

        result = runner.invoke(cli, ['delete', 'mysql', '--name', 'my-db', '--kubernetes-id', 'k8s-1'], input='n\n')

        assert result.exit_code == 0, result.output
        assert 'Are you sure you want to remove the "my-db" database cluster?' in result.output
        assert everest_client.deleted == []

    def test_confirmed(self, runner, everest_client):
        patch_everest_client('delete', everest_client)

        result = runner.invoke(cli, ['delete', 'mysql', '--name', 'my-db', '--kubernetes-id', 'k8s-1'], input='y\n')

        assert result.exit_code == 0, result.output
        assert everest_client.deleted == [('k8s-1', 'my-db')]

    def test_force(self, runner, everest_client):
        patch_everest_client('delete', everest_client)

        result = runner.invoke(cli, ['delete', 'mysql', '--name', 'my-db', '--kubernetes-id', 'k8s-1', '--force'])

        assert result.exit_code == 0, result.output
        assert 'Are you sure' not in result.output
        assert everest_client.deleted == [('k8s-1', 'my-db')]

    def test_remote_error(self, runner, everest_client):
        everest_client.error = RemoteCallError('could not delete database cluster: 404 - not found')
        patch_everest_client('delete', everest_client)

        result = runner.invoke(cli, ['delete', 'mysql', '--name', 'my-db', '--kubernetes-id', 'k8s-1', '--force'])

        assert result.exit_code == 1
        assert 'Error: could not delete database cluster: 404 - not found' in result.output


class TestListVersionsCommand:
    def test_list_versions(self, runner, everest_client):
        everest_client.engines = DatabaseEngineList.model_validate({'items': [
            {'spec': {'type': 'pxc'},
             'status': {'availableVersions': {'engine': {'1.0.0': {}, '2.1.0': {}, '1.9.9': {}}}}},
            {'spec': {'type': 'psmdb'},
             'status': {'availableVersions': {'engine': {'6.0.5-4': {}}}}},
        ]})
        patch_everest_client('list_versions', everest_client)

        result = runner.invoke(cli, ['list', 'versions', '--kubernetes-id', 'k8s-1', '--type', 'pxc'])

        assert result.exit_code == 0, result.output
        assert result.output == '-----\npxc\n-----\n2.1.0\n1.9.9\n1.0.0\n'

    def test_unknown_type(self, runner, everest_client):
        everest_client.engines = DatabaseEngineList.model_validate({'items': [
            {'spec': {'type': 'pxc'},
             'status': {'availableVersions': {'engine': {'8.0.32-24.2': {}}}}},
        ]})
        patch_everest_client('list_versions', everest_client)

        result = runner.invoke(cli, ['list', 'versions', '--kubernetes-id', 'k8s-1', '--type', 'mysql'])

        assert result.exit_code == 0, result.output
        assert result.output == '\n'
        assert everest_client.listed == ['k8s-1']


class TestPasswordResetCommand:
    def test_reset(self, runner, kube_client):
        with patch('everestctl.core.commands.reset_password.KubernetesClient', return_value=kube_client):
            result = runner.invoke(cli, ['password', 'reset', '--namespace', 'everest',
                                         '--kubeconfig', '/tmp/kubeconfig'])

        assert result.exit_code == 0, result.output
        assert result.output.startswith('Your new password is:\n')
        assert len(result.output.splitlines()[1]) == 128

    def test_reset_json(self, runner, kube_client):
        with patch('everestctl.core.commands.reset_password.KubernetesClient', return_value=kube_client):
            result = runner.invoke(cli, ['password', 'reset', '--namespace', 'everest',
                                         '--kubeconfig', '/tmp/kubeconfig', '--json'])

        assert result.exit_code == 0, result.output
        assert len(json.loads(result.output)['password']) == 128

    def test_reset_missing_namespace(self, runner, kube_client):
        with patch('everestctl.core.commands.reset_password.KubernetesClient', return_value=kube_client):
            result = runner.invoke(cli, ['password', 'reset', '--namespace', 'missing',
                                         '--kubeconfig', '/tmp/kubeconfig'])

        assert result.exit_code == 1
        assert 'could not get namespace from Kubernetes' in result.output
