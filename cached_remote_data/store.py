"""In-memory single owner of the current CachedRemoteData per key.

The store performs the dispatch -> await -> settle sequence for a key as one
logical transition: fetches for the same key are serialized with a per-key
``asyncio.Lock``, while fetches for different keys run concurrently.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Hashable, Mapping
from typing import Any, Generic, TypeVar

from frozendict import frozendict

from cached_remote_data import cached as crd
from cached_remote_data.cached import CachedRemoteData, NotAsked
from cached_remote_data.config import StoreConfig
from cached_remote_data.errors import UnknownVariantError
from cached_remote_data.transport import Operation, send_request_with_cached_data

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
E = TypeVar("E")
A = TypeVar("A")

Listener = Callable[[Any, Any, Any], None]

_MISSING = object()


class CachedDataStore(Generic[K, E, A]):
    """Holds one state per key and replaces it atomically on each transition.

    Listeners registered with :meth:`subscribe` are called synchronously with
    ``(key, previous, current)`` after every change. Unknown keys read as
    ``NotAsked()``.

    Example::

        store: CachedDataStore[str, int, User] = CachedDataStore()
        await store.fetch("me", fetch_user)   # Loading -> Success(user)
        await store.fetch("me", fetch_user)   # Refreshing(user) -> Stale(503, user)
        crd.value(store.get("me"))            # Some(user)
    """

    def __init__(
        self,
        *,
        config: StoreConfig | None = None,
        initial: Mapping[K, CachedRemoteData[E, A]] | None = None,
    ) -> None:
        self._config = config if config is not None else StoreConfig.from_env()
        self._states: dict[K, CachedRemoteData[E, A]] = {}
        self._locks: dict[K, asyncio.Lock] = {}
        self._listeners: list[Listener] = []
        for key, state in (initial or {}).items():
            self._states[key] = _validated(state)

    @property
    def config(self) -> StoreConfig:
        return self._config

    def __contains__(self, key: object) -> bool:
        return key in self._states

    def __len__(self) -> int:
        return len(self._states)

    def get(self, key: K) -> CachedRemoteData[E, A]:
        return self._states.get(key, NotAsked())

    def snapshot(self) -> frozendict[K, CachedRemoteData[E, A]]:
        """Immutable view of every tracked key."""
        return frozendict(self._states)

    def set(self, key: K, state: CachedRemoteData[E, A]) -> None:
        self._transition(key, _validated(state))

    def invalidate(self, key: K) -> CachedRemoteData[E, A]:
        """Forget ``key`` and return the state it held."""

        previous = self._states.pop(key, _MISSING)
        lock = self._locks.get(key)
        if lock is not None and not lock.locked():
            del self._locks[key]
        if previous is _MISSING:
            return NotAsked()
        self._notify(key, previous, NotAsked())
        return previous

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; the returned callable unregisters it."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def is_fetching(self, key: K) -> bool:
        lock = self._locks.get(key)
        return lock is not None and lock.locked()

    async def fetch(self, key: K, op: Operation[E, A]) -> CachedRemoteData[E, A]:
        """Dispatch ``op`` for ``key`` and store the settled state.

        While ``op`` runs the key reads as ``Refreshing(v)`` when a value was
        cached and ``Loading()`` otherwise. If ``op`` raises or the fetch is
        cancelled, the pre-dispatch state is restored and the exception
        propagates.
        """

        async with self._lock_for(key):
            previous = self._states.get(key, _MISSING)
            before = NotAsked() if previous is _MISSING else previous
            self._transition(key, crd.to_pending(before))
            try:
                settled = await send_request_with_cached_data(before, op)
            except BaseException as exc:
                logger.debug("Fetch for %r aborted by %s; restoring", key, type(exc).__name__)
                self._restore(key, previous)
                raise
            self._transition(key, settled)
            return settled

    def _lock_for(self, key: K) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        return lock

    def _restore(self, key: K, previous: Any) -> None:
        if previous is _MISSING:
            current = self._states.pop(key, NotAsked())
            self._notify(key, current, NotAsked())
        else:
            self._transition(key, previous)

    def _transition(self, key: K, state: CachedRemoteData[E, A]) -> None:
        previous = self._states.get(key, NotAsked())
        self._states[key] = state
        self._notify(key, previous, state)

    def _notify(self, key: K, previous: Any, current: Any) -> None:
        logger.debug(
            "%r: %s -> %s",
            key,
            self._config.describe(previous),
            self._config.describe(current),
        )
        for listener in list(self._listeners):
            listener(key, previous, current)


def _validated(state: Any) -> Any:
    if not isinstance(state, crd.VARIANTS):
        logger.warning("Rejected non-CachedRemoteData state of type %s", type(state).__name__)
        raise UnknownVariantError(state)
    return state


__all__ = ["CachedDataStore", "Listener"]
