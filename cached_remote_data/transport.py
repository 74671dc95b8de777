"""asyncio bridges between a transport operation and CachedRemoteData.

A transport operation is any zero-argument callable returning an awaitable
that resolves to a :class:`~cached_remote_data.results.Result`, e.g.::

    async def fetch_user() -> Result[int, User]:
        response = await client.get("/user")
        if response.status_code != 200:
            return Err(response.status_code)
        return Ok(User(**response.json()))

    state = await send_request_with_cached_data(state, fetch_user)
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import ParamSpec, TypeVar

from cached_remote_data import cached as crd
from cached_remote_data.cached import CachedRemoteData
from cached_remote_data.results import Err, Maybe, Ok, Result

logger = logging.getLogger(__name__)

A = TypeVar("A")
E = TypeVar("E")
P = ParamSpec("P")

Operation = Callable[[], Awaitable[Result[E, A]]]


async def _run(op: Operation[E, A]) -> Result[E, A]:
    name = getattr(op, "__qualname__", type(op).__name__)
    logger.debug("Dispatching transport operation %s", name)
    outcome = await op()
    if not isinstance(outcome, Result):
        logger.warning(
            "Transport operation %s resolved to %s instead of a Result",
            name,
            type(outcome).__name__,
        )
        raise TypeError(
            f"Transport operation {name} must resolve to Ok or Err, got {type(outcome).__name__}"
        )
    logger.debug("Transport operation %s settled as %s", name, type(outcome).__name__)
    return outcome


async def send_request(op: Operation[E, A]) -> CachedRemoteData[E, A]:
    """Run ``op`` and lift its result with :func:`~cached_remote_data.cached.from_result`."""

    return crd.from_result(await _run(op))


async def send_request_with_value(
    maybe_cached: Maybe[A], op: Operation[E, A]
) -> CachedRemoteData[E, A]:
    """Run ``op`` and merge its result with a previously cached value.

    A failure with a cached value yields ``Stale`` instead of ``Failure``.
    """

    return crd.from_value_and_result(maybe_cached, await _run(op))


async def send_request_with_cached_data(
    cached: CachedRemoteData[E, A], op: Operation[E, A]
) -> CachedRemoteData[E, A]:
    return await send_request_with_value(crd.value(cached), op)


def safe(fn: Callable[P, Awaitable[A]]) -> Callable[P, Awaitable[Result[Exception, A]]]:
    """Turn a raising coroutine function into one that returns a Result.

    ``Exception`` subclasses become ``Err(exc)``; cancellation and other
    ``BaseException`` subclasses propagate.

    Example::

        @safe
        async def fetch() -> bytes:
            return await download(url)

        state = await send_request(fetch)  # Failure(exc) if download raised
    """

    @wraps(fn)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> Result[Exception, A]:
        try:
            return Ok(await fn(*args, **kwargs))
        except Exception as exc:
            logger.debug(
                "Captured %s from %s", type(exc).__name__, getattr(fn, "__qualname__", fn)
            )
            return Err(exc)

    return wrapper


__all__ = [
    "Operation",
    "safe",
    "send_request",
    "send_request_with_cached_data",
    "send_request_with_value",
]
