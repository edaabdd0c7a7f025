# compression/core.py
"""
Compression decision and body rewrite.

``CompressionUnit.process`` inspects a finished response, decides whether it
should be compressed and, if so, replaces its body with a compressed stream.
Stream bodies are compressed chunk by chunk as they are pulled and are never
materialized in memory.
"""
from collections.abc import AsyncIterable, Iterator, MutableMapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, AsyncIterator, Callable, Optional, Tuple
import json
import logging

from starlette.concurrency import iterate_in_threadpool

from ..exceptions import StreamError
from .config import CompressionConfig
from .encodings import Compressor, Encoding, create_compressor
from .negotiation import negotiate_encoding
from .override import CompressOverride

logger = logging.getLogger("squash.compression")

VARY_HEADER = "Accept-Encoding"
NO_CONTENT_STATUSES = (204, 304)
FILE_CHUNK_SIZE = 64 * 1024


class Decision(Enum):
    PASSTHROUGH = "passthrough"
    COMPRESS = "compress"


class SkipReason(Enum):
    SUPPRESSED = "suppressed by handler"
    HEAD_REQUEST = "HEAD request"
    NO_CONTENT_STATUS = "status without body"
    NO_BODY = "no body"
    TYPE_FILTERED = "content type not compressible"
    NOT_ACCEPTED = "client accepts no offered encoding"
    BELOW_THRESHOLD = "below size threshold"


def _log_stream_error(exc: Exception) -> None:
    logger.error(f"Response stream failed during compression: {exc}", exc_info=exc)


@dataclass
class ResponseContext:
    """Everything the decision needs to know about one response."""
    body: Any
    headers: MutableMapping
    status_code: int = 200
    method: str = "GET"
    accept_encoding: Optional[str] = None
    override: CompressOverride = CompressOverride.UNSET
    on_error: Callable[[Exception], None] = field(default=_log_stream_error)

    @property
    def length(self) -> Optional[int]:
        """Declared Content-Length, if any."""
        value = self.headers.get("content-length")
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            return None

    @property
    def content_type(self) -> Optional[str]:
        return self.headers.get("content-type")


def is_stream(body: Any) -> bool:
    """Byte streams: async iterables, iterators and file-like objects."""
    if isinstance(body, (str, bytes, bytearray, memoryview)):
        return False
    return (
        isinstance(body, (AsyncIterable, Iterator))
        or callable(getattr(body, "read", None))
    )


def is_json(body: Any) -> bool:
    """Check if ``body`` is a structured value to be serialized as JSON."""
    if isinstance(body, (str, bytes, bytearray, memoryview)):
        return False
    return not is_stream(body)


def add_vary(headers: MutableMapping, name: str) -> None:
    """Merge ``name`` into the Vary header without duplicating it."""
    existing = headers.get("vary")
    if not existing:
        headers["vary"] = name
        return
    tokens = [token.strip().lower() for token in existing.split(",")]
    if "*" in tokens or name.lower() in tokens:
        return
    headers["vary"] = f"{existing}, {name}"


def _read_chunks(fileobj: Any) -> Iterator[bytes]:
    while True:
        chunk = fileobj.read(FILE_CHUNK_SIZE)
        if not chunk:
            break
        yield chunk


def _as_async(body: Any) -> AsyncIterator:
    if isinstance(body, AsyncIterable):
        return body.__aiter__()
    # File objects iterate by line; read them in fixed-size chunks instead
    if callable(getattr(body, "read", None)):
        body = _read_chunks(body)
    return iterate_in_threadpool(body)


async def compress_stream(
    source: Any,
    compressor: Compressor,
    on_error: Callable[[Exception], None]
) -> AsyncIterator[bytes]:
    """
    Pipe a byte stream through ``compressor``.

    Chunks are pulled from ``source`` only as the consumer asks for output.
    A failing source is reported to ``on_error`` and then raised as a
    ``StreamError`` so the response is aborted instead of sent truncated.
    """
    try:
        async for chunk in _as_async(source):
            if isinstance(chunk, str):
                chunk = chunk.encode("utf-8")
            output = compressor.compress(chunk)
            if output:
                yield output
    except Exception as e:
        on_error(e)
        raise StreamError(
            f"{compressor.encoding.value} stream aborted: {e}",
            original_exception=e,
        ) from e
    yield compressor.flush()


async def compress_buffer(data: bytes, compressor: Compressor) -> AsyncIterator[bytes]:
    """Compress an in-memory body in one go."""
    yield compressor.compress(data) + compressor.flush()


class CompressionUnit:
    """Decides, per response, whether and how to compress it."""

    def __init__(self, config: Optional[CompressionConfig] = None):
        self.config = config or CompressionConfig()

    def decide(self, ctx: ResponseContext) -> Tuple[Decision, Optional[SkipReason], Encoding]:
        """
        Run the eligibility checks without touching the response.

        Returns the decision, the reason for skipping (None when compressing)
        and the negotiated encoding (IDENTITY when not negotiated).
        """
        if ctx.override is CompressOverride.SUPPRESS:
            return Decision.PASSTHROUGH, SkipReason.SUPPRESSED, Encoding.IDENTITY
        if ctx.method.upper() == "HEAD":
            return Decision.PASSTHROUGH, SkipReason.HEAD_REQUEST, Encoding.IDENTITY
        if ctx.status_code in NO_CONTENT_STATUSES:
            return Decision.PASSTHROUGH, SkipReason.NO_CONTENT_STATUS, Encoding.IDENTITY
        # Assumes handlers either always set a body or never do
        if ctx.body is None:
            return Decision.PASSTHROUGH, SkipReason.NO_BODY, Encoding.IDENTITY

        if ctx.override is not CompressOverride.FORCE and not self.config.matches(ctx.content_type):
            return Decision.PASSTHROUGH, SkipReason.TYPE_FILTERED, Encoding.IDENTITY

        encoding = negotiate_encoding(ctx.accept_encoding)
        if encoding is Encoding.IDENTITY:
            return Decision.PASSTHROUGH, SkipReason.NOT_ACCEPTED, encoding

        if self.config.below_threshold(ctx.length):
            return Decision.PASSTHROUGH, SkipReason.BELOW_THRESHOLD, encoding

        return Decision.COMPRESS, None, encoding

    def process(self, ctx: ResponseContext) -> Decision:
        """
        Decide for ``ctx`` and rewrite its headers and body when compressing.

        After a COMPRESS decision ``ctx.body`` is an async iterator of
        compressed bytes.
        """
        add_vary(ctx.headers, VARY_HEADER)

        decision, reason, encoding = self.decide(ctx)
        if decision is Decision.PASSTHROUGH:
            logger.debug(f"Not compressing response: {reason.value}")
            return decision

        body = ctx.body
        if is_json(body):
            body = json.dumps(body, indent=self.config.json_spaces)

        ctx.headers["content-encoding"] = encoding.value
        if "content-length" in ctx.headers:
            del ctx.headers["content-length"]

        compressor = create_compressor(encoding, **self.config.codec_options)

        if is_stream(body):
            ctx.body = compress_stream(body, compressor, ctx.on_error)
        else:
            if isinstance(body, str):
                body = body.encode("utf-8")
            ctx.body = compress_buffer(bytes(body), compressor)

        logger.debug(f"Compressing response with {encoding.value}")
        return decision
