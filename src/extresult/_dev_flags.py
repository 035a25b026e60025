"""Internal helpers for development-time feature flags.

Centralizes how the opt-in contract validation toggle is read so every
combinator agrees on its semantics.
"""

from __future__ import annotations

from extresult.config import resolve_setting

__all__ = ["dev_validate_enabled"]


def dev_validate_enabled(*, override: bool | None = None) -> bool:
    """Return True when callback contract validation is enabled.

    - If ``override`` is provided, it takes precedence.
    - Otherwise an active ``config_scope`` decides.
    - Otherwise ``EXTRESULT_VALIDATE`` (environment or ``.env``) is parsed
      by the same ``Settings`` schema as the rest of the configuration.

    Raises:
        ConfigurationError: If ``EXTRESULT_VALIDATE`` is not a boolean.
    """
    if override is not None:
        return bool(override)
    return bool(resolve_setting("validate_contracts"))
