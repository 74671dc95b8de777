"""The four-state ``RemoteData`` union.

``NotAsked``, ``Loading``, ``Failure`` and ``Success`` are shared with
:mod:`cached_remote_data.cached`, so every ``RemoteData`` value is also a
``CachedRemoteData`` value.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

A = TypeVar("A")
E = TypeVar("E")


@dataclass(frozen=True)
class NotAsked:
    """No fetch has been initiated and no value is cached."""


@dataclass(frozen=True)
class Loading:
    """A fetch is in flight and no value was ever cached."""


@dataclass(frozen=True)
class Failure(Generic[E]):
    """The only fetch attempt failed."""

    error: E


@dataclass(frozen=True)
class Success(Generic[A]):
    """A fetch succeeded and its value is current."""

    value: A


RemoteData = Union[NotAsked, Loading, Failure[E], Success[A]]

REMOTE_DATA_VARIANTS: tuple[type, ...] = (NotAsked, Loading, Failure, Success)


def is_remote_data(obj: Any) -> bool:
    return isinstance(obj, REMOTE_DATA_VARIANTS)


__all__ = [
    "REMOTE_DATA_VARIANTS",
    "Failure",
    "Loading",
    "NotAsked",
    "RemoteData",
    "Success",
    "is_remote_data",
]
