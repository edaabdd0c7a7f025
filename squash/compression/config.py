# compression/config.py
"""
Compression configuration.

The configuration is resolved once, when the middleware is created, and is
never mutated afterwards so it can be shared by concurrent requests.
"""
import re
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ByteSize, ConfigDict, Field, ValidationError, field_validator

from ..exceptions import ConfigurationError

DEFAULT_FILTER = re.compile(
    r"json|text|javascript|dart|image/svg\+xml|application/x-font-ttf"
    r"|application/vnd\.ms-opentype|application/vnd\.ms-fontobject"
)
DEFAULT_THRESHOLD = 1024
BINARY_SIZE = re.compile(r"^\s*(\d*\.?\d+)\s*([kmgtp])b?\s*$", re.IGNORECASE)


class CompressionConfig(BaseModel):
    """Immutable compression settings shared by every request."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    filter: re.Pattern = DEFAULT_FILTER
    threshold: Optional[ByteSize] = ByteSize(DEFAULT_THRESHOLD)
    json_spaces: Optional[int] = None
    codec_options: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("filter", mode="before")
    def compile_filter(cls, v):
        if v is None:
            return DEFAULT_FILTER
        if isinstance(v, str):
            return re.compile(v)
        return v

    @field_validator("threshold", mode="before")
    def default_threshold(cls, v):
        # Only an explicit 0 disables the size check
        if v is None:
            return DEFAULT_THRESHOLD
        if isinstance(v, bool):
            raise ValueError("threshold must be a byte count or a size string")
        if isinstance(v, str):
            # kb/mb/gb/tb/pb are 1024-based, as in "1kb" == 1024
            match = BINARY_SIZE.match(v)
            if match:
                return f"{match.group(1)}{match.group(2)}ib"
        return v

    @classmethod
    def from_options(
        cls,
        filter: Union[str, re.Pattern, None] = None,
        threshold: Union[int, str, None] = None,
        json_spaces: Optional[int] = None,
        **codec_options: Any
    ) -> "CompressionConfig":
        """
        Build a configuration from middleware keyword options.

        Args:
            filter: Regex tested against the response Content-Type
            threshold: Minimum size in bytes, or a size string such as "1mb"
            json_spaces: Indentation used when serializing structured bodies
            **codec_options: Forwarded verbatim to the compressor constructor

        Raises:
            ConfigurationError: If the filter or threshold cannot be parsed
        """
        try:
            return cls(
                filter=filter,
                threshold=threshold,
                json_spaces=json_spaces,
                codec_options=codec_options,
            )
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid compression options: {e.errors()[0]['msg']}",
                context={"filter": filter, "threshold": threshold},
                original_exception=e,
            ) from e
        except re.error as e:
            raise ConfigurationError(
                f"Invalid compression filter {filter!r}: {e}",
                context={"filter": filter},
                original_exception=e,
            ) from e

    def matches(self, content_type: Optional[str]) -> bool:
        """Check if a Content-Type is eligible for compression by default."""
        if not content_type:
            return False
        return self.filter.search(content_type) is not None

    def below_threshold(self, length: Optional[int]) -> bool:
        """Check if a known response length is too small to compress."""
        if not self.threshold or length is None:
            return False
        return length < self.threshold
