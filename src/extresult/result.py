"""Four-state result type for deferred computations.

A ``Result`` is exactly one of:

- ``Initial``: not requested yet, no payload.
- ``Pending``: in flight, no payload.
- ``Failure(error)``: finished with an error.
- ``Success(value)``: finished with a value.

Values are immutable and every combinator returns a new Result (``Initial``
and ``Pending`` are shared singletons). When two Results are combined the
state follows the precedence Initial > Pending > Failure > Success.

Example:
    r = success(2).map(lambda x: x * 10).zip(success("a"))
    match r:
        case Success((n, s)):
            print(n, s)
        case Failure(err):
            print("failed:", err)
"""

from __future__ import annotations

import dataclasses
import inspect
import logging
from typing import TYPE_CHECKING, Any, ClassVar, Final, Literal, Never, TypeIs

from extresult._dev_flags import dev_validate_enabled
from extresult.either import Left, Right
from extresult.errors import ContractError, NotCallableError, UnwrapError
from extresult.maybe import Just, nothing

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from extresult.either import Either, SupportsEither
    from extresult.maybe import Maybe, SupportsMaybe

logger = logging.getLogger(__name__)

ResultState = Literal["initial", "pending", "failure", "success"]

# Lower rank wins when two states are combined.
_RANK: Final[dict[str, int]] = {
    "initial": 0,
    "pending": 1,
    "failure": 2,
    "success": 3,
}


class _ResultOps[F, S]:
    """Combinators shared by every Result variant."""

    __slots__ = ()

    state: ClassVar[ResultState]

    # --- State predicates ---

    def is_initial(self) -> bool:
        return isinstance(self, Initial)

    def is_pending(self) -> bool:
        return isinstance(self, Pending)

    def is_failure(self) -> bool:
        return isinstance(self, Failure)

    def is_success(self) -> bool:
        return isinstance(self, Success)

    # --- Elimination ---

    def fold[D](
        self,
        on_initial: Callable[[], D],
        on_pending: Callable[[], D],
        on_failure: Callable[[F], D],
        on_success: Callable[[S], D],
    ) -> D:
        """Invoke exactly one handler, chosen by state, and return its result."""
        match self:
            case Success(value):
                return on_success(value)
            case Failure(error):
                return on_failure(error)
            case Pending():
                return on_pending()
            case _:
                return on_initial()

    # --- Transformation ---

    def map[T](self, f: Callable[[S], T]) -> Result[F, T]:
        """Apply ``f`` to a Success payload; other states pass through."""
        match self:
            case Success(value):
                return Success(f(value))
            case _:
                return self  # type: ignore[return-value]

    def map_success[T](self, f: Callable[[S], T]) -> Result[F, T]:
        """Alias of ``map()``."""
        return self.map(f)

    def map_failure[E](self, f: Callable[[F], E]) -> Result[E, S]:
        """Apply ``f`` to a Failure payload; other states pass through."""
        match self:
            case Failure(error):
                return Failure(f(error))
            case _:
                return self  # type: ignore[return-value]

    def bimap[E, T](
        self, on_failure: Callable[[F], E], on_success: Callable[[S], T]
    ) -> Result[E, T]:
        match self:
            case Success(value):
                return Success(on_success(value))
            case Failure(error):
                return Failure(on_failure(error))
            case _:
                return self  # type: ignore[return-value]

    async def async_map[T](self, f: Callable[[S], Awaitable[T]]) -> Result[F, T]:
        """Like ``map()`` with an async ``f``; only Success awaits it."""
        match self:
            case Success(value):
                return Success(await f(value))
            case _:
                return self  # type: ignore[return-value]

    def chain[E, T](self, f: Callable[[S], Result[E, T]]) -> Result[F | E, T]:
        """Monadic bind.

        ``f`` runs only for a Success receiver and its Result is returned.
        Initial, Pending and Failure receivers are returned unchanged, which
        is where Initial > Pending > Failure > Success lands when the
        receiver is the dominant side.
        """
        match self:
            case Success(value):
                return _checked(f(value), "chain")
            case _:
                return self  # type: ignore[return-value]

    async def async_chain[E, T](
        self, f: Callable[[S], Awaitable[Result[E, T]]]
    ) -> Result[F | E, T]:
        """Like ``chain()`` with an async ``f``."""
        match self:
            case Success(value):
                return _checked(await f(value), "async_chain")
            case _:
                return self  # type: ignore[return-value]

    def join(self) -> Result[Any, Any]:
        """Flatten ``Result[F, Result[E, T]]`` into ``Result[F | E, T]``."""
        return self.chain(lambda inner: inner)  # type: ignore[arg-type, return-value]

    def filter(self, predicate: Callable[[S], bool]) -> Result[F | S, S]:
        """Keep a Success whose payload satisfies ``predicate``.

        A rejected payload becomes the Failure payload.
        """
        match self:
            case Success(value) if not predicate(value):
                return Failure(value)
            case _:
                return self  # type: ignore[return-value]

    def filter_map[E, T](self, f: Callable[[S], Result[E, T]]) -> Result[F | E, T]:
        """Alias of ``chain()``."""
        return self.chain(f)

    def apply(self, other: Result[Any, Any]) -> Result[Any, Any]:
        """Applicative application.

        One side must carry a callable Success payload; it is mapped over the
        other side. Failures propagate, the receiver's first.

        Raises:
            NotCallableError: If neither side carries a callable payload.
        """
        if isinstance(self, Failure):
            return self
        if isinstance(other, Failure):
            return other
        if isinstance(self, Success) and callable(self.value):
            return other.map(self.value)
        if isinstance(other, Success) and callable(other.value):
            return self.map(other.value)
        raise NotCallableError(
            f"apply() needs a callable Success payload, got {self!r} and {other!r}",
            hint="Wrap the function with success(fn) on one side.",
        )

    async def async_apply(self, other: Result[Any, Any]) -> Result[Any, Any]:
        """Asynchronous ``apply()``.

        Awaitable Success payloads on both sides are awaited before anything
        else, so a Failure on one side never leaves the other side's payload
        un-awaited. An awaitable returned by the callable is awaited as well.

        Raises:
            NotCallableError: If neither side carries a callable payload.
        """
        receiver = await _settle(self)
        operand = await _settle(other)
        if isinstance(receiver, Failure):
            return receiver
        if isinstance(operand, Failure):
            return operand

        if isinstance(receiver, Success) and callable(receiver.value):
            fn, arg = receiver.value, operand
        elif isinstance(operand, Success) and callable(operand.value):
            fn, arg = operand.value, receiver
        else:
            raise NotCallableError(
                "async_apply() needs a callable Success payload, "
                f"got {receiver!r} and {operand!r}",
                hint="Wrap the function with success(fn) on one side.",
            )

        if not isinstance(arg, Success):
            return arg
        out = fn(arg.value)
        if inspect.isawaitable(out):
            out = await out
        return Success(out)

    # --- Comparison and alternatives ---

    def equal(
        self,
        other: Result[Any, Any],
        extractor: Callable[[Any], object] | None = None,
        *,
        by_identity: bool = False,
    ) -> bool:
        """Compare two Results state by state.

        Success payloads are compared after ``extractor``; without one, the
        same object always matches itself. Failure payloads are compared with
        ``==``, or with ``is`` when ``by_identity`` is set.
        """
        match self:
            case Success(value):
                if not isinstance(other, Success):
                    return False
                if extractor is None:
                    return value is other.value or bool(value == other.value)
                return bool(extractor(value) == extractor(other.value))
            case Failure(error):
                if not isinstance(other, Failure):
                    return False
                if by_identity:
                    return error is other.error
                return error is other.error or bool(error == other.error)
            case _:
                return type(self) is type(other)

    def or_(self, other: Result[F, S]) -> Result[F, S]:
        """Return ``self`` if it succeeded, otherwise ``other`` as-is."""
        return self if isinstance(self, Success) else other  # type: ignore[return-value]

    def zip[E, T](self, other: Result[E, T]) -> Result[F | E, tuple[S, T]]:
        """Pair two Success payloads; otherwise the dominant state wins."""
        return self.zip_with(other, lambda a, b: (a, b))

    def zip_with[E, T, R](
        self, other: Result[E, T], f: Callable[[S, T], R]
    ) -> Result[F | E, R]:
        """Combine two Success payloads with ``f``."""
        winner = dominant(self, other)  # type: ignore[arg-type]
        if isinstance(winner, Success):
            return Success(f(self.value, other.value))  # type: ignore[attr-defined, union-attr]
        return winner  # type: ignore[return-value]

    # --- Recovery and side effects ---

    def recover[T](self, value: T) -> Result[F, S | T]:
        """Replace any non-Success state with ``Success(value)``."""
        if isinstance(self, Success):
            return self
        return Success(value)

    def recover_with[E, T](self, f: Callable[[F], Result[E, T]]) -> Result[E, S | T]:
        """Let ``f`` turn a Failure into a new Result; other states pass through."""
        match self:
            case Failure(error):
                return f(error)
            case _:
                return self  # type: ignore[return-value]

    def tap(self, f: Callable[[S], object]) -> Result[F, S]:
        if isinstance(self, Success):
            f(self.value)
        return self  # type: ignore[return-value]

    def tap_failure(self, f: Callable[[F], object]) -> Result[F, S]:
        if isinstance(self, Failure):
            f(self.error)
        return self  # type: ignore[return-value]

    # --- Conversions ---

    def to_either(
        self, on_initial: Callable[[], F], on_pending: Callable[[], F]
    ) -> Either[F, S]:
        """Convert to ``Right(value)`` or ``Left(error)``.

        Initial and Pending have no error of their own, so the matching
        factory supplies one.
        """
        match self:
            case Success(value):
                return Right(value)
            case Failure(error):
                return Left(error)
            case Pending():
                return Left(on_pending())
            case _:
                return Left(on_initial())

    def to_maybe(self) -> Maybe[S]:
        if isinstance(self, Success):
            return Just(self.value)
        return nothing

    def to_nullable(self) -> S | None:
        """Return the Success payload or ``None``."""
        return self.value if isinstance(self, Success) else None

    to_optional = to_nullable

    def unwrap(
        self,
        *,
        on_initial: Callable[[], BaseException] | None = None,
        on_pending: Callable[[], BaseException] | None = None,
        on_failure: Callable[[F], BaseException] | None = None,
    ) -> S:
        """Return the Success payload or raise.

        A handler for the current state builds the exception to raise;
        without one an ``UnwrapError`` is raised.
        """
        match self:
            case Success(value):
                return value
            case Failure(error) if on_failure is not None:
                raise on_failure(error)
            case Pending() if on_pending is not None:
                raise on_pending()
            case Initial() if on_initial is not None:
                raise on_initial()
        logger.debug("unwrap() called on a %s Result", self.state)
        raise UnwrapError(
            f"Result state is not Success (got {self.state})",
            state=self.state,  # type: ignore[arg-type]
            hint="Check is_success() first, or use unwrap_or()/fold().",
        )

    def unwrap_or[T](self, default: T) -> S | T:
        return self.value if isinstance(self, Success) else default

    def unwrap_or_else(self, f: Callable[[F], S]) -> S:
        """Return the Success payload or derive one from the Failure payload.

        Raises:
            UnwrapError: If the Result is Initial or Pending.
        """
        match self:
            case Success(value):
                return value
            case Failure(error):
                return f(error)
        raise UnwrapError(
            f"unwrap_or_else() has no payload to recover from (got {self.state})",
            state=self.state,  # type: ignore[arg-type]
            hint="Use unwrap_or() or fold() for Initial and Pending results.",
        )


@dataclasses.dataclass(frozen=True, slots=True)
class Initial(_ResultOps[Never, Never]):
    """The computation has not been requested yet."""

    state: ClassVar[ResultState] = "initial"


@dataclasses.dataclass(frozen=True, slots=True)
class Pending(_ResultOps[Never, Never]):
    """The computation is in flight."""

    state: ClassVar[ResultState] = "pending"


@dataclasses.dataclass(frozen=True, slots=True)
class Failure[F](_ResultOps[F, Never]):
    """The computation finished with an error."""

    state: ClassVar[ResultState] = "failure"

    error: F


@dataclasses.dataclass(frozen=True, slots=True)
class Success[S](_ResultOps[Never, S]):
    """The computation finished with a value."""

    state: ClassVar[ResultState] = "success"

    value: S


type Result[F, S] = Initial | Pending | Failure[F] | Success[S]

initial: Final[Initial] = Initial()
pending: Final[Pending] = Pending()


def _checked(result: Any, origin: str) -> Any:
    if isinstance(result, _ResultOps):
        return result
    if dev_validate_enabled():
        raise ContractError(
            f"{origin}() callback must return a Result, got {type(result).__name__}",
            hint="Wrap the value with success(...) or failure(...).",
        )
    logger.warning(
        "%s() callback returned %s instead of a Result",
        origin,
        type(result).__name__,
    )
    return result


async def _settle(result: Result[Any, Any]) -> Result[Any, Any]:
    if isinstance(result, Success) and inspect.isawaitable(result.value):
        return Success(await result.value)
    return result


def dominant[F, S](a: Result[F, S], b: Result[F, S]) -> Result[F, S]:
    """Return whichever Result wins under Initial > Pending > Failure > Success.

    Ties keep ``a``, so folding left to right reports the first occurrence.
    """
    return b if _RANK[b.state] < _RANK[a.state] else a


# --- Construction ---


def success[S](value: S) -> Success[S]:
    return Success(value)


def failure[F](error: F) -> Failure[F]:
    return Failure(error)


def from_value[S](value: S) -> Success[S]:
    """Alias of ``success()``."""
    return Success(value)


def from_nullable[S](value: S | None) -> Success[S] | Initial:
    """``Success(value)`` unless ``value`` is None, then ``Initial``."""
    return initial if value is None else Success(value)


def from_maybe[S](m: SupportsMaybe[S]) -> Success[S] | Initial:
    return Success(m.value) if m.is_just() else initial


def from_either[L, R](e: SupportsEither[L, R]) -> Failure[L] | Success[R]:
    return Success(e.value) if e.is_right() else Failure(e.value)  # type: ignore[arg-type]


def from_try[S](fn: Callable[[], S]) -> Failure[Exception] | Success[S]:
    """Call ``fn`` and capture a raised ``Exception`` as a Failure."""
    try:
        return Success(fn())
    except Exception as exc:
        logger.debug("from_try() captured %s: %s", type(exc).__name__, exc)
        return Failure(exc)


async def from_awaitable[S](aw: Awaitable[S]) -> Failure[Exception] | Success[S]:
    """Await ``aw`` and capture a raised ``Exception`` as a Failure.

    Cancellation is not captured: ``asyncio.CancelledError`` propagates.
    """
    try:
        value = await aw
    except Exception as exc:
        logger.debug("from_awaitable() captured %s: %s", type(exc).__name__, exc)
        return Failure(exc)
    return Success(value)


from_promise = from_awaitable


def chain[S, E, T](
    f: Callable[[S], Awaitable[Result[E, T]]],
) -> Callable[[Result[Any, S]], Awaitable[Result[Any, T]]]:
    """Curry ``async_chain()`` for point-free async pipelines.

    Example:
        fetch_profile = chain(load_profile)
        profile = await fetch_profile(user_result)
    """

    async def _run(m: Result[Any, S]) -> Result[Any, T]:
        return await m.async_chain(f)

    return _run


# --- Type guards for untyped input ---


def is_result(value: object) -> TypeIs[Result[Any, Any]]:
    return isinstance(value, _ResultOps)


def is_initial(value: object) -> TypeIs[Initial]:
    return isinstance(value, Initial)


def is_pending(value: object) -> TypeIs[Pending]:
    return isinstance(value, Pending)


def is_failure(value: object) -> TypeIs[Failure[Any]]:
    return isinstance(value, Failure)


def is_success(value: object) -> TypeIs[Success[Any]]:
    return isinstance(value, Success)
