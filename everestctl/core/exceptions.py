class EverestCliError(Exception):
    pass


class ValidationError(EverestCliError):
    """Malformed user input or catalog data, attributable to a single field/value."""

    def __init__(self, field: str, value: str, message: str):
        self.field = field
        self.value = value
        self.message = message

        super().__init__(f'cannot parse {field} {value!r}: {message}')


class RemoteCallError(EverestCliError):
    pass


class InternalInvariantError(EverestCliError):
    pass
