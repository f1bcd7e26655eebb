"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from grocer.domain.exceptions import ValidationError


def is_number(value: object) -> bool:
    """True for finite ints and floats (bools excluded)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


@dataclass(frozen=True)
class Quantity:
    """A positive amount of a product, in kg or units.

    Enforces the invariant that you cannot sell zero or negative amounts.
    """

    value: float

    def __post_init__(self) -> None:
        if not is_number(self.value):
            raise ValidationError(f"Invalid quantity: {self.value!r}")
        if self.value <= 0:
            raise ValidationError(f"Invalid quantity: {self.value} must be positive")

    def __str__(self) -> str:
        return f"{self.value:g}"

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def of(raw: str | float | int) -> Quantity:
        """Convenient factory that coerces CLI text to a float."""
        try:
            return Quantity(float(raw))
        except (TypeError, ValueError) as exc:
            raise ValidationError(f"Invalid quantity: {raw!r}") from exc
