# compression/override.py
"""Per-response compression override set by route handlers."""
from enum import Enum
from typing import Any

from starlette.requests import Request

STATE_KEY = "compress"


class CompressOverride(Enum):
    """A handler's own compression preference for its response."""
    FORCE = "force"
    SUPPRESS = "suppress"
    UNSET = "unset"

    @classmethod
    def coerce(cls, value: Any) -> "CompressOverride":
        """Map booleans and None onto the override values."""
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.UNSET
        if value is True:
            return cls.FORCE
        if value is False:
            return cls.SUPPRESS
        raise ValueError(f"Invalid compression override: {value!r}")


def set_compression(request: Request, override: Any) -> None:
    """
    Force or suppress compression of the response to ``request``.

    Args:
        request: The incoming request
        override: A ``CompressOverride``, a bool, or None to restore the default policy
    """
    setattr(request.state, STATE_KEY, CompressOverride.coerce(override))


def get_compression(request: Request) -> CompressOverride:
    """Read the override a handler set for this request."""
    return CompressOverride.coerce(getattr(request.state, STATE_KEY, None))
