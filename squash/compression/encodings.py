# compression/encodings.py
"""Content encodings supported by the compression middleware."""
from enum import Enum
from typing import Any, Callable, Dict
import zlib


class Encoding(str, Enum):
    """Negotiable content encodings."""
    GZIP = "gzip"
    DEFLATE = "deflate"
    # Sentinel: the client accepts none of the offered encodings
    IDENTITY = "identity"


class Compressor:
    """Incremental compressor wrapping a zlib compression object."""

    def __init__(
        self,
        encoding: Encoding,
        wbits: int,
        level: int = zlib.Z_DEFAULT_COMPRESSION,
        mem_level: int = zlib.DEF_MEM_LEVEL,
        strategy: int = zlib.Z_DEFAULT_STRATEGY,
        **options: Any
    ):
        self.encoding = encoding
        self._zobj = zlib.compressobj(level, zlib.DEFLATED, wbits, mem_level, strategy)
        self.closed = False

    def compress(self, data: bytes) -> bytes:
        """Feed a chunk and return whatever compressed output is ready."""
        if self.closed:
            raise ValueError(f"{self.encoding.value} compressor is already closed")
        return self._zobj.compress(data)

    def flush(self) -> bytes:
        """Close the input and return the remaining compressed output."""
        if self.closed:
            return b""
        self.closed = True
        return self._zobj.flush(zlib.Z_FINISH)


def create_gzip(**options: Any) -> Compressor:
    return Compressor(Encoding.GZIP, 16 + zlib.MAX_WBITS, **options)


def create_deflate(**options: Any) -> Compressor:
    # HTTP "deflate" is the zlib-wrapped format
    return Compressor(Encoding.DEFLATE, zlib.MAX_WBITS, **options)


COMPRESSORS: Dict[Encoding, Callable[..., Compressor]] = {
    Encoding.GZIP: create_gzip,
    Encoding.DEFLATE: create_deflate,
}

OFFERED_ENCODINGS = (Encoding.GZIP, Encoding.DEFLATE)


def create_compressor(encoding: Encoding, **options: Any) -> Compressor:
    """Instantiate the compressor for a negotiated encoding."""
    try:
        factory = COMPRESSORS[encoding]
    except KeyError:
        raise ValueError(f"No compressor for encoding: {encoding}") from None
    return factory(**options)
