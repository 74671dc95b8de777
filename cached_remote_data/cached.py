"""
CachedRemoteData: the six-state lifecycle of a fetched, cacheable value.

On top of the four ``RemoteData`` states this adds two states that keep a
previously fetched value around:

- ``Refreshing(value)``: a value is cached and a new fetch is in flight.
- ``Stale(error, value)``: a value is cached and the latest refresh failed.

Every function here is pure and total over the union. Values are never
mutated; each operation returns a new state (or the input itself when
nothing changes).

Example:
    >>> from cached_remote_data import cached as crd
    >>> from cached_remote_data.results import Err, Some
    >>> state = crd.from_value_and_result(Some("data"), Err("503"))
    >>> state
    Stale(error='503', value='data')
    >>> crd.value(state)
    Some(value='data')
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from cached_remote_data.errors import UnknownVariantError
from cached_remote_data.remote import (
    Failure,
    Loading,
    NotAsked,
    RemoteData,
    Success,
)
from cached_remote_data.results import NOTHING, Err, Maybe, Nothing, Ok, Result, Some

A = TypeVar("A")
B = TypeVar("B")
C = TypeVar("C")
D = TypeVar("D")
E = TypeVar("E")
F = TypeVar("F")


@dataclass(frozen=True)
class Refreshing(Generic[A]):
    """A previously fetched value is cached and a new fetch is in flight."""

    value: A


@dataclass(frozen=True)
class Stale(Generic[E, A]):
    """A previously fetched value is cached and the latest refresh failed."""

    error: E
    value: A


CachedRemoteData = Union[
    NotAsked, Loading, Failure[E], Success[A], Refreshing[A], Stale[E, A]
]

VARIANTS: tuple[type, ...] = (NotAsked, Loading, Failure, Success, Refreshing, Stale)


def _check(cached: Any) -> Any:
    if not isinstance(cached, VARIANTS):
        raise UnknownVariantError(cached)
    return cached


# =========================================================
# Constructors
# =========================================================
def succeed(v: A) -> CachedRemoteData[Any, A]:
    return Success(v)


def from_remote_data(rd: RemoteData[E, A]) -> CachedRemoteData[E, A]:
    """Lift a four-state ``RemoteData`` value. The variants are shared, so this
    validates and returns ``rd`` unchanged."""

    match rd:
        case NotAsked() | Loading() | Failure() | Success():
            return rd
        case _:
            raise UnknownVariantError(rd, "RemoteData")


def from_value(maybe: Maybe[A]) -> CachedRemoteData[Any, A]:
    """``NOTHING`` becomes ``NotAsked``; ``Some(v)`` becomes ``Success(v)``."""

    match maybe:
        case Some(value=v):
            return Success(v)
        case Nothing():
            return NotAsked()
        case _:
            raise UnknownVariantError(maybe, "Maybe")


def from_optional(v: A | None) -> CachedRemoteData[Any, A]:
    return from_value(Maybe.from_optional(v))


def from_result(res: Result[E, A]) -> CachedRemoteData[E, A]:
    match res:
        case Ok(value=v):
            return Success(v)
        case Err(error=e):
            return Failure(e)
        case _:
            raise UnknownVariantError(res, "Result")


def from_value_and_result(maybe: Maybe[A], res: Result[E, A]) -> CachedRemoteData[E, A]:
    """Combine a previously cached value with the result of a completed fetch.

    A failed fetch does not throw away a good cached value: ``Some(v)`` with
    ``Err(e)`` yields ``Stale(e, v)``. In every other case the cached value is
    discarded and the result decides the state.
    """

    match (maybe, res):
        case (Some(value=v), Err(error=e)):
            return Stale(e, v)
        case (Some() | Nothing(), _):
            return from_result(res)
        case _:
            raise UnknownVariantError(maybe, "Maybe")


def from_value_and_remote_data(
    maybe: Maybe[A], rd: RemoteData[E, A]
) -> CachedRemoteData[E, A]:
    """Combine a previously cached value with a ``RemoteData`` snapshot.

    With a cached value ``v``:

    ============  ==================
    ``rd``        result
    ============  ==================
    NotAsked      ``Success(v)``
    Loading       ``Refreshing(v)``
    Failure(e)    ``Stale(e, v)``
    Success(w)    ``Success(w)``
    ============  ==================

    Without a cached value the snapshot is lifted unchanged.
    """

    match (maybe, rd):
        case (Some(value=v), NotAsked()):
            return Success(v)
        case (Some(value=v), Loading()):
            return Refreshing(v)
        case (Some(value=v), Failure(error=e)):
            return Stale(e, v)
        case (Some() | Nothing(), _):
            return from_remote_data(rd)
        case _:
            raise UnknownVariantError(maybe, "Maybe")


# =========================================================
# Projections
# =========================================================
def remote_data(cached: CachedRemoteData[E, A]) -> RemoteData[E, A]:
    """Collapse to four states, dropping any cached value.

    ``Refreshing`` reads as ``Loading`` and ``Stale(e, _)`` as ``Failure(e)``.
    """

    match cached:
        case NotAsked() | Loading() | Failure() | Success():
            return cached
        case Refreshing():
            return Loading()
        case Stale(error=e):
            return Failure(e)
        case _:
            raise UnknownVariantError(cached)


def value(cached: CachedRemoteData[E, A]) -> Maybe[A]:
    """Return the cached value of ``Success``, ``Refreshing`` or ``Stale``."""

    match cached:
        case Success(value=v) | Refreshing(value=v) | Stale(value=v):
            return Some(v)
        case NotAsked() | Loading() | Failure():
            return NOTHING
        case _:
            raise UnknownVariantError(cached)


def result(cached: CachedRemoteData[E, A]) -> Maybe[Result[E, A]]:
    """Return the outcome of the latest settled fetch, if any.

    ``Refreshing`` carries a value but has no result: only ``Success``,
    ``Failure`` and ``Stale`` count as settled outcomes here.
    """

    match cached:
        case Success(value=v):
            return Some(Ok(v))
        case Failure(error=e) | Stale(error=e):
            return Some(Err(e))
        case NotAsked() | Loading() | Refreshing():
            return NOTHING
        case _:
            raise UnknownVariantError(cached)


def error(cached: CachedRemoteData[E, A]) -> Maybe[E]:
    match cached:
        case Failure(error=e) | Stale(error=e):
            return Some(e)
        case NotAsked() | Loading() | Success() | Refreshing():
            return NOTHING
        case _:
            raise UnknownVariantError(cached)


def with_default(default: B, cached: CachedRemoteData[E, A]) -> A | B:
    return value(cached).unwrap_or(default)


# =========================================================
# Predicates
# =========================================================
def is_not_asked(cached: CachedRemoteData[E, A]) -> bool:
    return isinstance(cached, NotAsked)


def is_loading(cached: CachedRemoteData[E, A]) -> bool:
    return isinstance(cached, Loading)


def is_success(cached: CachedRemoteData[E, A]) -> bool:
    return isinstance(cached, Success)


def is_failure(cached: CachedRemoteData[E, A]) -> bool:
    return isinstance(cached, Failure)


def is_refreshing(cached: CachedRemoteData[E, A]) -> bool:
    return isinstance(cached, Refreshing)


def is_stale(cached: CachedRemoteData[E, A]) -> bool:
    return isinstance(cached, Stale)


def has_value(cached: CachedRemoteData[E, A]) -> bool:
    """True for ``Success``, ``Refreshing`` and ``Stale``."""
    return isinstance(cached, (Success, Refreshing, Stale))


def has_error(cached: CachedRemoteData[E, A]) -> bool:
    """True for ``Failure`` and ``Stale``."""
    return isinstance(cached, (Failure, Stale))


def is_settled(cached: CachedRemoteData[E, A]) -> bool:
    """True for ``Success`` and ``Failure``: no fetch is in flight."""
    return isinstance(cached, (Success, Failure))


def is_pending(cached: CachedRemoteData[E, A]) -> bool:
    """True for ``Loading`` and ``Refreshing``."""
    return isinstance(cached, (Loading, Refreshing))


# =========================================================
# Functor
# =========================================================
def map(f: Callable[[A], B], cached: CachedRemoteData[E, A]) -> CachedRemoteData[E, B]:
    """Apply ``f`` to the value of ``Success``, ``Refreshing`` or ``Stale``."""

    match cached:
        case Success(value=v):
            return Success(f(v))
        case Refreshing(value=v):
            return Refreshing(f(v))
        case Stale(error=e, value=v):
            return Stale(e, f(v))
        case NotAsked() | Loading() | Failure():
            return cached
        case _:
            raise UnknownVariantError(cached)


def map_error(f: Callable[[E], F], cached: CachedRemoteData[E, A]) -> CachedRemoteData[F, A]:
    """Apply ``f`` to the error of ``Failure`` or ``Stale``."""

    match cached:
        case Failure(error=e):
            return Failure(f(e))
        case Stale(error=e, value=v):
            return Stale(f(e), v)
        case NotAsked() | Loading() | Success() | Refreshing():
            return cached
        case _:
            raise UnknownVariantError(cached)


def map_both(
    fv: Callable[[A], B], fe: Callable[[E], F], cached: CachedRemoteData[E, A]
) -> CachedRemoteData[F, B]:
    """Apply ``fv`` to the value and ``fe`` to the error, where present."""

    match cached:
        case NotAsked() | Loading():
            return cached
        case Failure(error=e):
            return Failure(fe(e))
        case Success(value=v):
            return Success(fv(v))
        case Refreshing(value=v):
            return Refreshing(fv(v))
        case Stale(error=e, value=v):
            return Stale(fe(e), fv(v))
        case _:
            raise UnknownVariantError(cached)


# =========================================================
# Applicative
# =========================================================
def and_map(
    argument: CachedRemoteData[E, A],
    wrapped_fn: CachedRemoteData[E, Callable[[A], B]],
) -> CachedRemoteData[E, B]:
    """Apply a wrapped function to a wrapped argument.

    The function is applied only when both sides hold a value. Otherwise the
    "worst" state wins, regardless of which side it is on. Highest priority
    first:

    1. both hold a value, one is ``Stale``  -> ``Stale(e, fn(v))``
    2. either is ``Failure`` or ``Stale``   -> ``Failure(e)``
    3. either is ``NotAsked``               -> ``NotAsked()``
    4. both hold a value, one is ``Refreshing`` -> ``Refreshing(fn(v))``
    5. either is ``Loading`` or ``Refreshing`` -> ``Loading()``
    6. both are ``Success``                 -> ``Success(fn(v))``

    When both sides carry an error, the error of ``argument`` is kept.
    """

    match (_check(argument), _check(wrapped_fn)):
        # 1. stale, with a value on both sides
        case (
            Stale(error=e, value=v),
            Stale(value=fn) | Refreshing(value=fn) | Success(value=fn),
        ):
            return Stale(e, fn(v))
        case (Refreshing(value=v) | Success(value=v), Stale(error=e, value=fn)):
            return Stale(e, fn(v))

        # 2. an error with no value to pair it with
        case (Failure(error=e) | Stale(error=e), _):
            return Failure(e)
        case (_, Failure(error=e) | Stale(error=e)):
            return Failure(e)

        # 3. never requested
        case (NotAsked(), _) | (_, NotAsked()):
            return NotAsked()

        # 4. refreshing, with a value on both sides
        case (Refreshing(value=v), Refreshing(value=fn) | Success(value=fn)) | (
            Success(value=v),
            Refreshing(value=fn),
        ):
            return Refreshing(fn(v))

        # 5. in flight
        case (Loading() | Refreshing(), _) | (_, Loading() | Refreshing()):
            return Loading()

        # 6. settled on both sides
        case (Success(value=v), Success(value=fn)):
            return Success(fn(v))

        case _:
            raise UnknownVariantError((argument, wrapped_fn))


def _curry(f: Callable[..., Any], arity: int, bound: tuple[Any, ...] = ()) -> Callable[[Any], Any]:
    def step(arg: Any) -> Any:
        args = (*bound, arg)
        if len(args) == arity:
            return f(*args)
        return _curry(f, arity, args)

    return step


def map2(
    f: Callable[[A, B], C],
    first: CachedRemoteData[E, A],
    second: CachedRemoteData[E, B],
) -> CachedRemoteData[E, C]:
    return and_map(second, map(_curry(f, 2), first))


def map3(
    f: Callable[[A, B, C], D],
    first: CachedRemoteData[E, A],
    second: CachedRemoteData[E, B],
    third: CachedRemoteData[E, C],
) -> CachedRemoteData[E, D]:
    return and_map(third, and_map(second, map(_curry(f, 3), first)))


def map_n(f: Callable[..., B], *items: CachedRemoteData[E, Any]) -> CachedRemoteData[E, B]:
    """Left fold of :func:`and_map` over ``map(f, items[0])``.

    ``map_n(f)`` with no items is ``Success(f())``.
    """

    if not items:
        return succeed(f())
    first, *rest = items
    acc = map(_curry(f, len(items)), first)
    for item in rest:
        acc = and_map(item, acc)
    return acc


# =========================================================
# Monad
# =========================================================
def and_then(
    f: Callable[[A], CachedRemoteData[E, B]], cached: CachedRemoteData[E, A]
) -> CachedRemoteData[E, B]:
    """Chain on a settled ``Success``.

    Every other state, including ``Refreshing`` and ``Stale`` which do carry
    a value, yields ``NotAsked()``: ``f`` only ever sees a value from a
    completed, successful fetch.
    """

    match cached:
        case Success(value=v):
            return _check(f(v))
        case NotAsked() | Loading() | Failure() | Refreshing() | Stale():
            return NotAsked()
        case _:
            raise UnknownVariantError(cached)


# =========================================================
# Lifecycle transitions
# =========================================================
def to_pending(cached: CachedRemoteData[E, A]) -> CachedRemoteData[E, A]:
    """State to show while a fetch is dispatched: ``Refreshing(v)`` if a value
    is cached, ``Loading()`` otherwise."""

    return from_value_and_remote_data(value(cached), Loading())


def settle(cached: CachedRemoteData[E, A], res: Result[E, A]) -> CachedRemoteData[E, A]:
    """State after a fetch completes with ``res``, keeping the cached value
    on failure."""

    return from_value_and_result(value(cached), res)


__all__ = [
    "VARIANTS",
    "CachedRemoteData",
    "Failure",
    "Loading",
    "NotAsked",
    "Refreshing",
    "Stale",
    "Success",
    "and_map",
    "and_then",
    "error",
    "from_optional",
    "from_remote_data",
    "from_result",
    "from_value",
    "from_value_and_remote_data",
    "from_value_and_result",
    "has_error",
    "has_value",
    "is_failure",
    "is_loading",
    "is_not_asked",
    "is_pending",
    "is_refreshing",
    "is_settled",
    "is_stale",
    "is_success",
    "map",
    "map2",
    "map3",
    "map_both",
    "map_error",
    "map_n",
    "remote_data",
    "result",
    "settle",
    "succeed",
    "to_pending",
    "value",
    "with_default",
]
