"""Exception hierarchy for extresult.

Domain failures travel as ``Failure`` values and are never raised. The
exceptions below signal programmer misuse or invalid configuration.
"""

from __future__ import annotations

from typing import Literal

UnwrapState = Literal["initial", "pending", "failure"]


class ExtResultError(Exception):
    """Base exception for all extresult errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class ConfigurationError(ExtResultError):
    """Configuration validation or resolution failed."""


class UnwrapError(ExtResultError):
    """A payload was requested from a Result that does not carry one.

    ``state`` names the variant the Result was in when the call was made.
    """

    def __init__(
        self,
        message: str,
        *,
        state: UnwrapState,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.state = state


class NotCallableError(ExtResultError, TypeError):
    """``apply()`` found no callable Success payload on either side."""


class ContractError(ExtResultError, TypeError):
    """A combinator callback broke its return-type contract."""
