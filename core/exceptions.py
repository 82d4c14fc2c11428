# core/exceptions.py
from __future__ import annotations

from typing import Sequence


class DomainError(Exception):
    """Base class for domain-level errors."""
    def __init__(self, message: str, *, code: str | None = None):
        super().__init__(message)
        self.code = code or self.__class__.__name__


class ValidationError(DomainError):
    """Raised when data is invalid or violates constraints."""


class NotFoundError(DomainError):
    """Raised when an entity is not found."""


class BusinessRuleError(DomainError):
    """Raised when business rules are violated (e.g., circular dependencies)."""


class CyclicDependencyError(BusinessRuleError):
    """
    Raised when the predecessor network or the summary hierarchy loops back on itself.

    `cycle` holds the task ids along the loop when they are known; it is empty when the
    failure was only detected by a fixed-point loop running past its sweep cap.
    """
    def __init__(
        self,
        message: str,
        *,
        code: str | None = "SCHEDULE_CYCLE",
        cycle: Sequence[str] = (),
    ):
        super().__init__(message, code=code)
        self.cycle: tuple[str, ...] = tuple(cycle)
