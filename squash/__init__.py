#main __init__.py
"""
squash - conditional gzip/deflate response compression for FastAPI.

squash decides per response whether compressing is worthwhile, negotiates
the encoding with the client and streams the compressed body.
"""

__version__ = "0.1.0"

from typing import Optional, Union
from fastapi import FastAPI
import logging

from .compression import (
    CompressionConfig, CompressionUnit, CompressOverride, Encoding,
    get_compression, set_compression,
)
from .core.config import settings
from .exceptions import SquashError, ConfigurationError, StreamError
from .middleware import MiddlewareManager, CompressionMiddleware

# Initialize module-level logger; logging configuration is handled in `create_app`
logger = logging.getLogger(__name__)


class SquashAPI(FastAPI):
    """FastAPI application with response compression installed."""
    
    def __init__(
        self,
        *args,
        compression: bool = True,
        compression_options: Optional[dict] = None,
        **kwargs
    ):
        super().__init__(*args, **kwargs)
        
        self.logger = logging.getLogger(__name__)
        self.middleware_manager = MiddlewareManager()
        self._setup(compression, compression_options or {})
    
    def _setup(self, compression: bool, compression_options: dict):
        """Set up the application middlewares."""
        self.middleware_manager.configure_compression(enabled=compression, **compression_options)
        self.middleware_manager.apply_to_app(self)
        self.state.compression_enabled = compression


def create_app(
    title: str = settings.APP_NAME,
    debug: Optional[bool] = None,
    compression: Optional[bool] = None,
    filter: Optional[str] = None,
    threshold: Union[int, str, None] = None,
    json_spaces: Optional[int] = None,
    **kwargs
) -> SquashAPI:
    """
    Create and configure a squash application.
    
    Unset arguments fall back to the environment settings.
    
    Args:
        title: The title of the API.
        debug: Whether to run the application in debug mode.
        compression: Whether to install the compression middleware.
        filter: Regex of compressible content types.
        threshold: Minimum response size to compress, in bytes or as "1mb".
        json_spaces: Indentation for structured bodies serialized before compressing.
        **kwargs: Additional keyword arguments to pass to the FastAPI constructor.
    
    Returns:
        SquashAPI: The configured application instance.
    
    Raises:
        ConfigurationError: If the compression options are malformed.
    """
    debug = settings.DEBUG if debug is None else debug
    
    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    
    options = {
        'filter': filter if filter is not None else settings.COMPRESSION_FILTER,
        'threshold': threshold if threshold is not None else settings.COMPRESSION_THRESHOLD,
        'json_spaces': json_spaces if json_spaces is not None else settings.JSON_SPACES,
    }
    if settings.COMPRESSION_LEVEL is not None:
        options['level'] = settings.COMPRESSION_LEVEL
    
    try:
        logger.info(f"Creating {title} application (version: {__version__})")
        app = SquashAPI(
            title=title,
            debug=debug,
            compression=settings.COMPRESSION_ENABLED if compression is None else compression,
            compression_options=options,
            **kwargs
        )
        logger.info("Application initialization complete")
        return app
    except Exception as e:
        logger.critical(f"Failed to create application: {e}", exc_info=True)
        raise

# Export common FastAPI components for easier access
from fastapi import Depends, HTTPException, status, Request, Response, APIRouter  # noqa

__all__ = [
    'SquashAPI', 'create_app', 'CompressionMiddleware', 'MiddlewareManager',
    'CompressionConfig', 'CompressionUnit', 'CompressOverride', 'Encoding',
    'get_compression', 'set_compression', 'SquashError', 'ConfigurationError',
    'StreamError', 'Request', 'Response', 'Depends', 'HTTPException', 'status',
    'APIRouter', 'settings',
]
