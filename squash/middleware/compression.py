# middleware/compression.py
"""Compression middleware for squash."""
from .base import SquashMiddleware
from ..compression.config import CompressionConfig
from ..compression.core import CompressionUnit, Decision, ResponseContext
from ..compression.override import get_compression
from starlette.requests import Request
from starlette.responses import Response
from functools import partial
import logging

logger = logging.getLogger("squash.middleware.compression")

class CompressionMiddleware(SquashMiddleware):
    """
    Gzip/deflate compression middleware.
    
    Options:
        filter: Regex tested against the response Content-Type
        threshold: Minimum response size in bytes, or a size string ("1mb")
        json_spaces: Indentation used when a structured body is serialized
        **codec options: level, mem_level, strategy; passed to the compressor
    """
    
    def setup(self):
        # Raises ConfigurationError before any request is served
        self.unit = CompressionUnit(CompressionConfig.from_options(**self.config))
        logger.info(
            f"Compression enabled (threshold={self.unit.config.threshold}, "
            f"filter={self.unit.config.filter.pattern!r})"
        )
    
    async def after_response(self, request: Request, response: Response) -> Response:
        """Compress response if applicable."""
        # call_next always hands back a streaming response
        ctx = ResponseContext(
            body=response.body_iterator,
            headers=response.headers,
            status_code=response.status_code,
            method=request.method,
            accept_encoding=request.headers.get("accept-encoding"),
            override=get_compression(request),
            on_error=partial(self.handle_stream_error, request),
        )
        
        if self.unit.process(ctx) is Decision.COMPRESS:
            response.body_iterator = ctx.body
        return response
    
    def handle_stream_error(self, request: Request, exc: Exception) -> None:
        """Report a body stream that failed while being compressed."""
        request.state.compression_error = exc
        logger.error(
            f"Stream error while compressing {request.method} {request.url.path} "
            f"(request {getattr(request.state, 'request_id', '-')}): {exc}"
        )
