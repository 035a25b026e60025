"""Configuration: validated settings, frozen payload and ambient scope.

Resolution follows ``defaults < environment < overrides``. Values pass
through the Pydantic ``Settings`` schema and come out as an immutable
``FrozenConfig``. ``config_scope()`` makes a config ambient for the current
thread or task without touching global state.
"""

from __future__ import annotations

from contextlib import contextmanager
import contextvars
from dataclasses import dataclass
import logging
import os
from typing import TYPE_CHECKING, Any

import dotenv
from pydantic import BaseModel, ValidationError, field_validator

from extresult.errors import ConfigurationError
from extresult.options import MergePriority

if TYPE_CHECKING:
    from collections.abc import Generator, Mapping

log = logging.getLogger(__name__)

#: Environment variables read by ``load_env()``, keyed by settings field.
ENV_VARS: dict[str, str] = {
    "merge_priority": "EXTRESULT_MERGE_PRIORITY",
    "validate_contracts": "EXTRESULT_VALIDATE",
}

_HINTS: dict[str, str] = {
    "merge_priority": "Set EXTRESULT_MERGE_PRIORITY to 'pending' or 'failure'.",
    "validate_contracts": "Set EXTRESULT_VALIDATE to 1/0 or true/false.",
}


# --- Schema (Pydantic wall) ---


class Settings(BaseModel):
    """Schema for configuration fields, defaults and validation rules."""

    merge_priority: MergePriority = "pending"
    validate_contracts: bool = False

    model_config = {"extra": "forbid"}

    @field_validator("merge_priority", mode="before")
    @classmethod
    def normalize_priority(cls, v: Any) -> Any:
        """Accept surrounding whitespace and any letter case."""
        if isinstance(v, str):
            return v.strip().lower()
        return v


# --- Immutable runtime payload ---


@dataclass(frozen=True)
class FrozenConfig:
    """Validated configuration consumed by merges and contract checks."""

    merge_priority: MergePriority = "pending"
    validate_contracts: bool = False


# --- Ambient scope ---

_AMBIENT: contextvars.ContextVar[FrozenConfig | None] = contextvars.ContextVar(
    "extresult_ambient_config", default=None
)

_DOTENV_LOADED: bool = False


def _load_dotenv_once() -> None:
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    dotenv.load_dotenv()
    _DOTENV_LOADED = True


def load_env() -> dict[str, str]:
    """Return the raw configuration values present in the environment."""
    return {
        field: os.environ[var] for field, var in ENV_VARS.items() if var in os.environ
    }


def _validate(merged: Mapping[str, Any]) -> Settings:
    try:
        return Settings.model_validate(merged)
    except ValidationError as e:
        err = e.errors()[0]
        loc = ".".join(str(part) for part in err.get("loc", ()))
        msg = err.get("msg", "invalid value")
        raise ConfigurationError(
            f"Configuration validation failed for {loc or 'config'}: {msg}",
            hint=_HINTS.get(loc, f"Known keys: {', '.join(sorted(ENV_VARS))}"),
        ) from e


def resolve_config(overrides: Mapping[str, Any] | None = None) -> FrozenConfig:
    """Resolve configuration from defaults, environment and overrides.

    Args:
        overrides: Programmatic values that win over the environment.

    Returns:
        A validated ``FrozenConfig``.

    Raises:
        ConfigurationError: If a value fails validation or a key is unknown.
    """
    _load_dotenv_once()
    settings = _validate({**load_env(), **(overrides or {})})
    return FrozenConfig(**settings.model_dump())


def resolve_setting(name: str) -> Any:
    """Resolve one setting, validating only that field.

    The ambient scope wins; otherwise the environment (``.env`` included) is
    read through the same ``Settings`` schema as ``resolve_config()``. Other
    fields are not validated, so a bad ``EXTRESULT_VALIDATE`` does not break
    reads of ``merge_priority``.

    Raises:
        ConfigurationError: If the setting's own value fails validation.
    """
    if name not in ENV_VARS:
        raise ConfigurationError(
            f"Unknown setting {name!r}",
            hint=f"Known keys: {', '.join(sorted(ENV_VARS))}",
        )
    cfg = _AMBIENT.get()
    if cfg is not None:
        return getattr(cfg, name)
    _load_dotenv_once()
    raw = load_env()
    settings = _validate({name: raw[name]} if name in raw else {})
    return getattr(settings, name)


def ambient_config() -> FrozenConfig | None:
    """Return the config installed by the innermost ``config_scope()``, if any."""
    return _AMBIENT.get()


def current_config() -> FrozenConfig:
    """Return the ambient config, or resolve a fresh one."""
    cfg = _AMBIENT.get()
    return cfg if cfg is not None else resolve_config()


@contextmanager
def config_scope(
    cfg_or_overrides: Mapping[str, Any] | FrozenConfig | None = None,
    **overrides: Any,
) -> Generator[FrozenConfig]:
    """Run a block with a specific configuration.

    Thread-safe and async-safe: the config lives in a context variable.

    Example:
        with config_scope(merge_priority="failure"):
            merged = merge_with_config(results)
    """
    if isinstance(cfg_or_overrides, FrozenConfig):
        if overrides:
            raise ConfigurationError(
                "config_scope() got a FrozenConfig and keyword overrides",
                hint="Pass either a FrozenConfig or overrides, not both.",
            )
        cfg = cfg_or_overrides
    else:
        cfg = resolve_config({**(cfg_or_overrides or {}), **overrides})

    log.debug("Entering config scope: %s", cfg)
    token = _AMBIENT.set(cfg)
    try:
        yield cfg
    finally:
        _AMBIENT.reset(token)
