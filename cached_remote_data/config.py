"""Settings for the cached data store, read from keyword arguments or the environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

DEBUG_ENV_VAR = "CACHED_REMOTE_DATA_DEBUG"

_TRUTHY = ("1", "true", "yes")

DEFAULT_CONFIG: dict[str, Any] = {
    "debug": False,
    "max_repr": 80,
}


def env_flag(name: str, environ: Mapping[str, str] | None = None) -> bool:
    active_environ = os.environ if environ is None else environ
    return active_environ.get(name, "").strip().lower() in _TRUTHY


@dataclass(frozen=True, kw_only=True)
class StoreConfig:
    """Options for :class:`cached_remote_data.store.CachedDataStore`.

    ``debug`` logs each transition with payload reprs truncated to
    ``max_repr`` characters; otherwise only variant names are logged.
    """

    debug: bool = DEFAULT_CONFIG["debug"]
    max_repr: int = DEFAULT_CONFIG["max_repr"]

    def __post_init__(self) -> None:
        if self.max_repr < 4:
            raise ValueError(f"max_repr must be at least 4, got {self.max_repr}")

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        **overrides: Any,
    ) -> StoreConfig:
        """Build a config honouring ``CACHED_REMOTE_DATA_DEBUG``; keyword
        overrides take precedence over the environment."""

        values = {**DEFAULT_CONFIG, "debug": env_flag(DEBUG_ENV_VAR, environ)}
        values.update(overrides)
        return cls(**values)

    def describe(self, state: Any) -> str:
        name = type(state).__name__
        if not self.debug:
            return name
        text = repr(state)
        if len(text) > self.max_repr:
            text = text[: self.max_repr - 3] + "..."
        return text


__all__ = ["DEBUG_ENV_VAR", "DEFAULT_CONFIG", "StoreConfig", "env_flag"]
