"""Two-state result type consumed and produced at the Result boundary.

By convention ``Left`` carries an error and ``Right`` carries a value.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


class SupportsEither[L, R](Protocol):
    """Anything exposing a left/right tag and a payload accessor."""

    def is_right(self) -> bool: ...  # noqa: D102

    @property
    def value(self) -> L | R: ...  # noqa: D102


@dataclass(frozen=True, slots=True)
class Left[L]:
    value: L

    def is_left(self) -> bool:
        return True

    def is_right(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class Right[R]:
    value: R

    def is_left(self) -> bool:
        return False

    def is_right(self) -> bool:
        return True


type Either[L, R] = Left[L] | Right[R]


def left[L](value: L) -> Left[L]:
    return Left(value)


def right[R](value: R) -> Right[R]:
    return Right(value)
