"""Outcome: explicit success-or-reason result values.

Every store and ledger operation that can reject its input returns an
Outcome instead of raising, so callers have to look at the failure path.
``unwrap()`` converts back to an exception at the application boundary.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from grocer.domain.exceptions import DomainException

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Result of an operation: a value, or the error that rejected it.

    ``warnings`` carries non-fatal problems of an otherwise successful
    operation (e.g. a committed sale whose client link failed).
    """

    value: T | None = None
    error: DomainException | None = None
    warnings: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def reason(self) -> str | None:
        return None if self.error is None else str(self.error)

    def unwrap(self) -> T:
        """Return the value, or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def success(value: T | None = None, warnings: tuple[str, ...] = ()) -> Outcome[T]:
        return Outcome(value=value, warnings=tuple(warnings))

    @staticmethod
    def failure(error: DomainException) -> Outcome[T]:
        return Outcome(error=error)
