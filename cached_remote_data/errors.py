from __future__ import annotations

from typing import Any


class UnknownVariantError(TypeError):
    """Raised when a combinator receives an object outside the expected union."""

    def __init__(self, obj: Any, expected: str = "CachedRemoteData") -> None:
        self.obj = obj
        self.expected = expected
        super().__init__(
            f"Unknown {expected} variant: {type(obj).__name__}\n"
            f"Hint: build values with the variant classes or the from_* constructors"
        )


class UnwrapError(RuntimeError):
    """Raised when unwrapping the empty side of a Result or Maybe."""

    def __init__(self, message: str, payload: Any = None) -> None:
        self.payload = payload
        super().__init__(message)


__all__ = ["UnknownVariantError", "UnwrapError"]
