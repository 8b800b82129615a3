from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, TypeVar

# Job states FlixCloud reports in a completion notification
JOB_STATES = ("successful_job", "cancelled_job", "failed_job")

T = TypeVar("T")


@dataclass
class Result(Generic[T]):
    """
    Outcome of a validation, submission or parse step.

    Either ``ok`` is True and ``value`` holds the payload, or ``ok`` is
    False and ``errors`` holds one or more human-readable messages.
    """
    ok: bool
    value: Optional[T] = None
    errors: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.ok and self.errors:
            raise ValueError("A successful result cannot carry errors.")
        if not self.ok and not self.errors:
            raise ValueError("A failed result needs at least one error.")

    def __bool__(self) -> bool:
        return self.ok

    # ------------------------------------------------------------------ #
    # Constructors
    # ------------------------------------------------------------------ #
    @classmethod
    def success(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, errors: List[str] | str) -> "Result[T]":
        if isinstance(errors, str):
            errors = [errors]
        return cls(ok=False, errors=[str(e) for e in errors])

    def to_dict(self) -> Dict[str, Any]:
        """
        Plain dict for logging or JSON responses.
        """
        return {"ok": self.ok, "value": self.value, "errors": list(self.errors)}


@dataclass(frozen=True)
class JobReceipt:
    """What FlixCloud hands back after accepting a job (HTTP 201)."""
    id: str
    initialized_job_at: str
