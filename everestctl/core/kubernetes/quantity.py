import re
from dataclasses import dataclass
from decimal import ROUND_UP, Decimal
from enum import StrEnum

from kubernetes.utils import parse_quantity

from everestctl.core.exceptions import ValidationError

# <sign><number> followed by a binary SI suffix, a decimal exponent or a decimal SI suffix
QUANTITY_PATTERN = re.compile(
    r'(?P<sign>[+-]?)(?P<number>[0-9]+(?:\.[0-9]*)?|\.[0-9]+)'
    r'(?:(?P<binary>[KMGTPE]i)|[eE](?P<exponent>[+-]?[0-9]+)|(?P<decimal>[numkMGTPE]))?'
)

DECIMAL_SUFFIXES = {-9: 'n', -6: 'u', -3: 'm', 0: '', 3: 'k', 6: 'M', 9: 'G', 12: 'T', 15: 'P', 18: 'E'}
BINARY_SUFFIXES = ['', 'Ki', 'Mi', 'Gi', 'Ti', 'Pi', 'Ei']

NANO = Decimal('1e-9')


class QuantityFormat(StrEnum):
    DECIMAL_SI = 'DecimalSI'
    BINARY_SI = 'BinarySI'
    DECIMAL_EXPONENT = 'DecimalExponent'


@dataclass(frozen=True)
class Quantity:
    value: Decimal
    format: QuantityFormat

    def _decimal_parts(self) -> tuple[int, int]:
        # value == mantissa * 10 ** exponent with the exponent a multiple of 3
        sign, digits, exponent = self.value.normalize().as_tuple()
        mantissa = int(''.join(map(str, digits))) * (-1 if sign else 1)

        shift = exponent % 3
        return mantissa * 10 ** shift, exponent - shift

    def _binary_parts(self) -> tuple[int, int]:
        mantissa = int(self.value)
        power = 0
        while mantissa % 1024 == 0 and power < len(BINARY_SUFFIXES) - 1:
            mantissa //= 1024
            power += 1

        return mantissa, power

    def __str__(self) -> str:
        """Canonical form, e.g. "1000m" -> "1", "1.5Gi" -> "1536Mi", "1.5G" -> "1500M"."""
        if self.value == 0:
            return '0'

        binary = (
            self.format == QuantityFormat.BINARY_SI
            and abs(self.value) >= 1024
            and self.value == self.value.to_integral_value()
        )
        if binary:
            mantissa, power = self._binary_parts()
            return f'{mantissa}{BINARY_SUFFIXES[power]}'

        mantissa, exponent = self._decimal_parts()
        if self.format == QuantityFormat.DECIMAL_EXPONENT or exponent not in DECIMAL_SUFFIXES:
            return f'{mantissa}e{exponent}' if exponent else str(mantissa)

        return f'{mantissa}{DECIMAL_SUFFIXES[exponent]}'


def parse_resource_quantity(field: str, value: str) -> Quantity:
    """
    Parse a Kubernetes quantity ("2", "500m", "4Gi", "100G", "1e3") for the named field.

    Raises ValidationError naming the field when the value does not follow the
    Kubernetes quantity grammar, e.g. "1K" or " 2".
    """
    match = QUANTITY_PATTERN.fullmatch(value) if isinstance(value, str) else None
    if match is None:
        raise ValidationError(field, value, 'quantities must be a number with an optional suffix '
                                            '(n, u, m, k, M, G, T, P, E, Ki, Mi, Gi, Ti, Pi, Ei or an exponent)')

    try:
        quantity = parse_quantity(value)
    except ValueError as e:
        raise ValidationError(field, value, str(e)) from e

    if quantity.as_tuple().exponent < -9:
        quantity = quantity.quantize(NANO, rounding=ROUND_UP)

    if match.group('binary'):
        quantity_format = QuantityFormat.BINARY_SI
    elif match.group('exponent') is not None:
        quantity_format = QuantityFormat.DECIMAL_EXPONENT
    else:
        quantity_format = QuantityFormat.DECIMAL_SI

    return Quantity(value=quantity, format=quantity_format)
