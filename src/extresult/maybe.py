"""Optional-value type consumed and produced at the Result boundary."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Protocol


class SupportsMaybe[T](Protocol):
    """Anything exposing a presence tag and a payload accessor."""

    def is_just(self) -> bool: ...  # noqa: D102

    @property
    def value(self) -> T: ...  # noqa: D102


@dataclass(frozen=True, slots=True)
class Just[T]:
    """A present value."""

    value: T

    def is_just(self) -> bool:
        return True

    def is_nothing(self) -> bool:
        return False

    def unwrap_or[D](self, default: D) -> T | D:
        return self.value


@dataclass(frozen=True, slots=True)
class Nothing:
    """An absent value."""

    def is_just(self) -> bool:
        return False

    def is_nothing(self) -> bool:
        return True

    def unwrap_or[D](self, default: D) -> D:
        return default


type Maybe[T] = Just[T] | Nothing

nothing: Final[Nothing] = Nothing()


def just[T](value: T) -> Just[T]:
    return Just(value)
