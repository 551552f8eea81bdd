"""Input checks shared by the entity services."""

from decimal import Decimal
from enum import Enum
from typing import Optional, TypeVar, Union

from agencyledger.domain.errors import ValidationError, invalid_choice, negative_amount
from agencyledger.utils.amount_parser import parse_amount
from agencyledger.utils.date_parser import parse_date

E = TypeVar("E", bound=Enum)


def require_name(name: Optional[str], kind: str) -> str:
    """Return the stripped name, rejecting blanks."""
    if name is None or not name.strip():
        raise ValidationError(f"{kind} name must not be empty")
    return name.strip()


def require_amount(amount: Union[str, Decimal, int], kind: str) -> Decimal:
    """Coerce an amount to Decimal and reject negatives."""
    if isinstance(amount, Decimal):
        value = amount
    else:
        try:
            value = parse_amount(str(amount))
        except ValueError as e:
            raise ValidationError(f"Invalid {kind.lower()} amount: {e}") from e
    if value < 0:
        raise ValidationError(negative_amount(kind, value))
    return value


def choice(enum_type: type[E], value: Union[str, E], field: str) -> E:
    """Look up an enum member by value, raising ValidationError for unknown values."""
    try:
        return enum_type(value)
    except ValueError as e:
        raise ValidationError(
            invalid_choice(field, str(value), [member.value for member in enum_type])
        ) from e


def optional_date(value: Optional[str]) -> Optional[str]:
    """Normalize a user-supplied date to ISO format; blank means no date."""
    if value is None or not str(value).strip():
        return None
    try:
        return parse_date(str(value)).isoformat()
    except ValueError as e:
        raise ValidationError(str(e)) from e
