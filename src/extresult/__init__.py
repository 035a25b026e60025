"""extresult: a four-state Result for deferred and asynchronous computations.

Public API:
    - initial, pending, success(), failure(): Construction
    - from_nullable(), from_maybe(), from_either(), from_try(), from_awaitable(): Conversion
    - Result, Initial, Pending, Success, Failure: The sum type and its variants
    - merge(), merge_in_many(), merge_with_config(): Collection merges
    - config_scope(), resolve_config(): Configuration
"""

from __future__ import annotations

import logging

from extresult.config import (
    FrozenConfig,
    config_scope,
    current_config,
    resolve_config,
    resolve_setting,
)
from extresult.either import Either, Left, Right, left, right
from extresult.errors import (
    ConfigurationError,
    ContractError,
    ExtResultError,
    NotCallableError,
    UnwrapError,
)
from extresult.maybe import Just, Maybe, Nothing, just, nothing
from extresult.merge import merge, merge_in_many, merge_in_one, merge_with_config
from extresult.options import MergeOptions, MergePriority
from extresult.result import (
    Failure,
    Initial,
    Pending,
    Result,
    ResultState,
    Success,
    chain,
    failure,
    from_awaitable,
    from_either,
    from_maybe,
    from_nullable,
    from_promise,
    from_try,
    from_value,
    initial,
    is_failure,
    is_initial,
    is_pending,
    is_result,
    is_success,
    pending,
    success,
)

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("extresult")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("extresult").addHandler(logging.NullHandler())

__all__ = [
    "ConfigurationError",
    "ContractError",
    "Either",
    "ExtResultError",
    "Failure",
    "FrozenConfig",
    "Initial",
    "Just",
    "Left",
    "Maybe",
    "MergeOptions",
    "MergePriority",
    "NotCallableError",
    "Nothing",
    "Pending",
    "Result",
    "ResultState",
    "Right",
    "Success",
    "UnwrapError",
    "chain",
    "config_scope",
    "current_config",
    "failure",
    "from_awaitable",
    "from_either",
    "from_maybe",
    "from_nullable",
    "from_promise",
    "from_try",
    "from_value",
    "initial",
    "is_failure",
    "is_initial",
    "is_pending",
    "is_result",
    "is_success",
    "just",
    "left",
    "merge",
    "merge_in_many",
    "merge_in_one",
    "merge_with_config",
    "nothing",
    "pending",
    "resolve_config",
    "resolve_setting",
    "right",
    "success",
]
