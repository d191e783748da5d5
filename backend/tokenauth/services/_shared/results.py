# comments in English; reST docstrings
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from tokenauth.services._shared.errors import ServiceError

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Outcome(Generic[T, E]):
    """
    Explicit success-or-failure value returned by token operations.

    Exactly one of ``value`` / ``failure`` is set.

    :ivar value: Payload on success.
    :ivar failure: Failure reason (an enum member) otherwise.
    """

    value: T | None = None
    failure: E | None = None

    @classmethod
    def success(cls, value: T) -> Outcome[T, E]:
        return cls(value=value, failure=None)

    @classmethod
    def fail(cls, failure: E) -> Outcome[T, E]:
        return cls(value=None, failure=failure)

    @property
    def ok(self) -> bool:
        return self.failure is None

    def unwrap(self) -> T:
        """
        Return the success payload.

        :raises ServiceError: If the outcome is a failure.
        """
        if self.failure is not None:
            raise ServiceError(f"Outcome is a failure: {self.failure!r}")
        return self.value  # type: ignore[return-value]
