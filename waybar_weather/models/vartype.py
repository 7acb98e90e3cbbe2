"""Scalar wrapper that tracks whether a measurement was ever populated."""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")

UNSUPPORTED = "Unsupported by weather provider"


@dataclass(frozen=True)
class Variable(Generic[T]):
    """A value plus a presence flag.

    An unset variable ("never fetched") renders as the UNSUPPORTED marker,
    which keeps it apart from a measured zero.
    """

    value: T | None = None
    is_set: bool = False

    @classmethod
    def of(cls, value: T) -> "Variable[T]":
        return cls(value=value, is_set=True)

    @classmethod
    def maybe(cls, value: T | None) -> "Variable[T]":
        """Wrap value, leaving the variable unset when value is None."""
        if value is None:
            return cls()
        return cls.of(value)

    def get(self, default: T) -> T:
        if not self.is_set or self.value is None:
            return default
        return self.value

    def __float__(self) -> float:
        return float(self.get(0))  # type: ignore[arg-type]

    def __int__(self) -> int:
        return int(self.get(0))  # type: ignore[arg-type]

    def __str__(self) -> str:
        if not self.is_set:
            return UNSUPPORTED
        return str(self.value)


VarFloat = Variable[float]
VarInt = Variable[int]
VarBool = Variable[bool]
