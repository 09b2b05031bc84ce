from contextlib import contextmanager

import click

from everestctl.core.exceptions import EverestCliError


@contextmanager
def cli_errors():
    try:
        yield
    except EverestCliError as e:
        raise click.ClickException(str(e)) from e
