from decimal import Decimal

import attrs

from stagepass.platform.exception.exceptions import InvalidRequestError


def _to_decimal(value: Decimal | int | float | str) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def _non_negative(instance: object, attribute: attrs.Attribute, value: Decimal | int) -> None:
    if value < 0:
        raise InvalidRequestError(f'{attribute.name} must not be negative')


@attrs.define(frozen=True)
class TicketClass:
    """The single ticket class a concert sells."""

    type: str
    price: Decimal = attrs.field(converter=_to_decimal, validator=_non_negative)
    num_avail: int = attrs.field(validator=_non_negative)

    def total_for(self, quantity: int) -> Decimal:
        return self.price * quantity
