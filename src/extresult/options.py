"""Options for collection-level merges."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal

from extresult.errors import ConfigurationError

MergePriority = Literal["pending", "failure"]

_PRIORITIES: frozenset[str] = frozenset({"pending", "failure"})


@dataclass(frozen=True)
class MergeOptions:
    """How ``merge_with_config()`` ranks non-Success states.

    ``"pending"`` ranks Initial > Pending > Failure, the same order as
    ``merge()``. ``"failure"`` lets the first Failure win over Initial and
    Pending and falls back to the ``"pending"`` order when nothing failed.
    """

    priority: MergePriority = "pending"

    def __post_init__(self) -> None:
        """Validate the priority early for clear errors."""
        if self.priority not in _PRIORITIES:
            raise ConfigurationError(
                f"Unknown merge priority: {self.priority!r}",
                hint="Use priority='pending' (default) or priority='failure'.",
            )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> MergeOptions:
        """Build options from a plain mapping such as ``{"priority": "failure"}``."""
        unknown = set(data) - {"priority"}
        if unknown:
            raise ConfigurationError(
                f"Unknown merge option(s): {', '.join(sorted(unknown))}",
                hint="The only supported merge option is 'priority'.",
            )
        if "priority" not in data:
            return cls()
        return cls(priority=data["priority"])
