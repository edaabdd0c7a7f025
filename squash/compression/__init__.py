"""
Conditional response compression.

Decides per response whether to compress it and rewrites the body as a gzip
or deflate stream.
"""
from .config import CompressionConfig, DEFAULT_FILTER, DEFAULT_THRESHOLD
from .core import CompressionUnit, Decision, ResponseContext, SkipReason
from .encodings import COMPRESSORS, Compressor, Encoding, create_compressor
from .negotiation import negotiate_encoding
from .override import CompressOverride, get_compression, set_compression

__all__ = [
    "CompressionConfig",
    "CompressionUnit",
    "CompressOverride",
    "Compressor",
    "COMPRESSORS",
    "Decision",
    "DEFAULT_FILTER",
    "DEFAULT_THRESHOLD",
    "Encoding",
    "ResponseContext",
    "SkipReason",
    "create_compressor",
    "get_compression",
    "negotiate_encoding",
    "set_compression",
]
