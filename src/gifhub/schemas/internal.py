"""InternalConfig: Authoritative runtime configuration.

This is the ONLY config schema that runtime code sees. It is fully validated,
normalized, and immutable.

All .get() calls and fallback defaults are FORBIDDEN in runtime code -
everything is explicit here.
"""

from typing import Literal, Optional
from pydantic import Field, ConfigDict
from gifhub.schemas.base import GifhubBaseModel


# =============================================================================
# Nested Configuration Models (Runtime)
# =============================================================================

class InternalFetcherConfig(GifhubBaseModel):
    """Runtime fetcher configuration."""
    scheme: Literal["https", "http"]
    host: str
    user_agent: str
    timeout_sec: float


class InternalLayoutConfig(GifhubBaseModel):
    """Runtime layout configuration."""
    width: float
    height: float
    axis_offset: float
    threshold: float = Field(gt=0, le=1.0)
    decay: float = Field(gt=0)


class InternalStyleConfig(GifhubBaseModel):
    """Runtime style configuration."""
    background_color: str
    label_color: str
    value_color: str
    axis_color: str
    poly_color: str
    font_family: str
    label_font_size: float
    value_font_size: float
    marker_radius: float
    poly_linewidth: float
    axis_linewidth: float
    dpi: int


class InternalEncoderConfig(GifhubBaseModel):
    """Runtime encoder configuration."""
    backend: Literal["pillow", "subprocess"]
    duration_ms: int = Field(ge=1)
    scale: float = Field(gt=0)
    rasterizer_command: list[str]
    bundler_command: list[str]
    keep_artifacts: bool


class InternalOutputConfig(GifhubBaseModel):
    """Runtime output configuration."""
    out_dir: str
    filename_pattern: str
    save_summary: bool


class InternalLoggingConfig(GifhubBaseModel):
    """Runtime logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


# =============================================================================
# Main InternalConfig
# =============================================================================

class InternalConfig(GifhubBaseModel):
    """Authoritative runtime configuration.

    This is the ONLY configuration schema that processing code sees.
    It is fully validated and immutable.

    Usage
    -----
    Runtime modules receive InternalConfig and access fields directly:

        def __init__(self, config: InternalConfig):
            self.threshold = config.layout.threshold  # NOT .get()

    ``subject`` may still be None here; the orchestrator takes the subject as
    an argument and the CLI supplies it.
    """

    subject: Optional[str]
    periods: Optional[list[str]]
    fetcher: InternalFetcherConfig
    layout: InternalLayoutConfig
    style: InternalStyleConfig
    encoder: InternalEncoderConfig
    output: InternalOutputConfig
    logging: InternalLoggingConfig

    model_config = ConfigDict(
        extra='forbid',
        validate_assignment=True,
        use_enum_values=True,
        str_strip_whitespace=True,
        frozen=True,  # Immutable after construction
    )
