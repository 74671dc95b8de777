"""
Result and Maybe sum types used at the edges of the cached remote data API.

Constructors accept them (``from_result``, ``from_value``) and projections
return them (``value``, ``result``). Unlike exception-only result types, the
error side of :class:`Err` may hold any payload: HTTP status codes, strings,
domain error objects.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Final, Generic, NoReturn, TypeVar, cast

from cached_remote_data.errors import UnwrapError

# =========================================================
# Type Vars
# =========================================================
T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)
E = TypeVar("E")
E_co = TypeVar("E_co", covariant=True)
U = TypeVar("U")
F = TypeVar("F")


class Result(Generic[E_co, T_co]):
    """Sum type representing either a successful value or an error payload."""

    __slots__ = ()

    def is_ok(self) -> bool:
        """Return ``True`` when the result is successful."""

        return isinstance(self, Ok)

    def is_err(self) -> bool:
        """Return ``True`` when the result represents a failure."""

        return isinstance(self, Err)

    def ok(self) -> Maybe[T_co]:
        """Return ``Some(value)``, or ``NOTHING`` if this is an error."""

        if isinstance(self, Ok):
            return Some(self.value)
        return NOTHING

    def err(self) -> Maybe[E_co]:
        """Return ``Some(error)``, or ``NOTHING`` if this is a success."""

        if isinstance(self, Err):
            return Some(self.error)
        return NOTHING

    def unwrap(self) -> T_co:
        """Return the value or raise.

        Exception payloads are raised as-is; any other payload is wrapped in
        :class:`UnwrapError`.
        """

        if isinstance(self, Ok):
            return self.value
        error = cast(Err, self).error
        if isinstance(error, BaseException):
            raise error
        raise UnwrapError(f"Called unwrap on Err value: {error!r}", error)

    def unwrap_err(self) -> E_co:
        """Return the error or raise :class:`UnwrapError` if this is a success."""

        if isinstance(self, Err):
            return self.error
        raise UnwrapError("Called unwrap_err on Ok value", cast(Ok, self).value)

    def unwrap_or(self, default: U) -> T_co | U:
        """Return the contained value, or ``default`` if this is an error."""

        if isinstance(self, Ok):
            return self.value
        return default

    def unwrap_or_else(self, default_fn: Callable[[E_co], U]) -> T_co | U:
        """Return the contained value, or compute a default from the error."""

        if isinstance(self, Ok):
            return self.value
        return default_fn(cast(Err, self).error)

    def map(self, f: Callable[[T_co], U]) -> Result[E_co, U]:
        """Apply ``f`` to the contained value if this is a success."""

        if isinstance(self, Ok):
            return Ok(f(self.value))
        return cast(Result[E_co, U], self)

    def map_err(self, f: Callable[[E_co], F]) -> Result[F, T_co]:
        """Apply ``f`` to the contained error if this is a failure."""

        if isinstance(self, Err):
            return Err(f(self.error))
        return cast(Result[F, T_co], self)

    def and_then(self, f: Callable[[T_co], Result[E_co, U]]) -> Result[E_co, U]:
        """Chain computations that return ``Result``."""

        if isinstance(self, Ok):
            result = f(self.value)
            if not isinstance(result, Result):
                raise TypeError("and_then must return a Result instance")
            return result
        return cast(Result[E_co, U], self)

    def __or__(self, other: Result[F, U]) -> Result[E_co, T_co] | Result[F, U]:
        """Return this result if it is ``Ok``, otherwise return ``other``.

        Example::

            Ok(1) | Ok(2)     # Ok(1)
            Err("a") | Ok(2)  # Ok(2)
            Err("a") | Err("b")  # Err("b")
        """

        if isinstance(self, Ok):
            return self
        return other

    def __bool__(self) -> bool:
        """Truthiness matches :meth:`is_ok`."""

        return self.is_ok()


@dataclass(frozen=True)
class Ok(Result[NoReturn, T], Generic[T]):
    """Success result."""

    value: T


@dataclass(frozen=True)
class Err(Result[E, NoReturn], Generic[E]):
    """Error result carrying an arbitrary payload."""

    error: E


class Maybe(Generic[T_co]):
    """Optional value that may contain ``Some`` data or ``Nothing``.

    Used instead of ``None`` wherever a cached value may legitimately be
    ``None`` itself.
    """

    __slots__ = ()

    def is_some(self) -> bool:
        """Return ``True`` when the value is present."""

        return isinstance(self, Some)

    def is_none(self) -> bool:
        """Return ``True`` when no value is present."""

        return isinstance(self, Nothing)

    def unwrap(self) -> T_co:
        """Return the contained value or raise :class:`UnwrapError`."""

        if isinstance(self, Some):
            return self.value
        raise UnwrapError("Called unwrap on Nothing value")

    def unwrap_or(self, default: U) -> T_co | U:
        """Return the value if present, otherwise ``default``."""

        if isinstance(self, Some):
            return self.value
        return default

    def map(self, func: Callable[[T_co], U]) -> Maybe[U]:
        """Apply ``func`` to the contained value when present."""

        if isinstance(self, Some):
            return Some(func(self.value))
        return NOTHING

    def flat_map(self, func: Callable[[T_co], Maybe[U]]) -> Maybe[U]:
        """Chain computations that themselves return ``Maybe``."""

        if isinstance(self, Some):
            result = func(self.value)
            if not isinstance(result, Maybe):
                raise TypeError("flat_map must return a Maybe instance")
            return result
        return NOTHING

    def ok_or(self, error: E) -> Result[E, T_co]:
        """Convert to ``Result``, using ``error`` when empty."""

        if isinstance(self, Some):
            return Ok(self.value)
        return Err(error)

    def to_optional(self) -> T_co | None:
        """Convert to a Python optional value."""

        if isinstance(self, Some):
            return self.value
        return None

    @classmethod
    def from_optional(cls, value: T | None) -> Maybe[T]:
        """Create a ``Maybe`` from an optional Python value."""

        if value is None:
            return NOTHING
        return Some(value)

    def __or__(self, other: Maybe[U]) -> Maybe[T_co] | Maybe[U]:
        """Return this value if it is ``Some``, otherwise return ``other``."""

        if isinstance(self, Some):
            return self
        return other

    def __bool__(self) -> bool:
        """Truthiness matches :meth:`is_some`."""

        return self.is_some()


@dataclass(frozen=True)
class Some(Maybe[T], Generic[T]):
    """Presence of a value."""

    value: T


class Nothing(Maybe[NoReturn]):
    """Singleton representing the absence of a value."""

    __slots__ = ()
    _instance: Nothing | None = None

    def __new__(cls) -> Nothing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Nothing()"


NOTHING: Final[Maybe[NoReturn]] = Nothing()


__all__ = [
    "NOTHING",
    "Err",
    "Maybe",
    "Nothing",
    "Ok",
    "Result",
    "Some",
]
