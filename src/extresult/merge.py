"""Collection-level merges: many Results in, one Result out.

Inputs are scanned strictly left to right, so which Failure gets reported
and the order of Success payloads depend only on input order.
"""

from __future__ import annotations

from collections.abc import Mapping
from functools import reduce
import logging
from typing import TYPE_CHECKING, Any, Final

from extresult.config import resolve_setting
from extresult.errors import ConfigurationError
from extresult.options import MergeOptions
from extresult.result import Failure, Success, dominant

if TYPE_CHECKING:
    from collections.abc import Iterable

    from extresult.result import Result

logger = logging.getLogger(__name__)

# Seed for folds: any Success ties with it, so the first real non-Success wins.
_ALL_SUCCEEDED: Final[Success[None]] = Success(None)


def _winner(items: tuple[Result[Any, Any], ...]) -> Result[Any, Any]:
    return reduce(dominant, items, _ALL_SUCCEEDED)


def merge_in_one[F, S](values: Iterable[Result[F, S]]) -> Result[F, list[S]]:
    """Merge Results into one Result holding every Success payload.

    Any Initial makes the merge Initial; otherwise any Pending makes it
    Pending; otherwise the first Failure is returned. When everything
    succeeded the payloads are collected in input order.

    Example:
        merge([success(1), success(2)])  # Success(value=[1, 2])
        merge([success(1), failure("e"), pending])  # Pending()
    """
    items = tuple(values)
    winner = _winner(items)
    if isinstance(winner, Success):
        return Success([r.value for r in items])  # type: ignore[union-attr]
    return winner  # type: ignore[return-value]


merge = merge_in_one


def merge_in_many[F, S](values: Iterable[Result[F, S]]) -> Result[list[F], list[S]]:
    """Like ``merge()`` but a Failure reports every error, in input order."""
    items = tuple(values)
    winner = _winner(items)
    if isinstance(winner, Failure):
        return Failure([r.error for r in items if isinstance(r, Failure)])
    if isinstance(winner, Success):
        return Success([r.value for r in items])  # type: ignore[union-attr]
    return winner  # type: ignore[return-value]


def merge_with_config[F, S](
    values: Iterable[Result[F, S]],
    options: MergeOptions | Mapping[str, Any] | None = None,
) -> Result[F, list[S]]:
    """Merge with a configurable priority between Failure and Initial/Pending.

    Args:
        values: Results to merge.
        options: ``MergeOptions`` or a mapping like ``{"priority": "failure"}``.
            When omitted, the priority comes from the active configuration
            (``EXTRESULT_MERGE_PRIORITY`` or ``config_scope()``).

    Returns:
        With ``priority="failure"`` the first Failure wins outright; otherwise
        (and when nothing failed) the result matches ``merge()``.
    """
    opts = _coerce_options(options)
    items = tuple(values)
    if opts.priority == "failure":
        first_failure = next((r for r in items if isinstance(r, Failure)), None)
        if first_failure is not None:
            return first_failure
    return merge_in_one(items)


def _coerce_options(options: MergeOptions | Mapping[str, Any] | None) -> MergeOptions:
    if isinstance(options, MergeOptions):
        return options
    if isinstance(options, Mapping):
        return MergeOptions.from_mapping(options)
    if options is None:
        priority = resolve_setting("merge_priority")
        logger.debug("merge_with_config() using configured priority %r", priority)
        return MergeOptions(priority=priority)
    raise ConfigurationError(
        f"merge options must be MergeOptions or a mapping, got {type(options).__name__}",
        hint="Pass MergeOptions(priority='failure') or {'priority': 'failure'}.",
    )
