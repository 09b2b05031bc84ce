import click

from everestctl.core import config


def everest_options(func):
    func = click.option('--everest-url', envvar='EVEREST_URL', default=config.EVEREST_URL, show_default=True,
                        help='Everest API endpoint')(func)
    func = click.option('--kubernetes-id', envvar='EVEREST_KUBERNETES_ID', default=config.EVEREST_KUBERNETES_ID,
                        required=True, help='Kubernetes cluster ID registered in Everest')(func)
    return func
