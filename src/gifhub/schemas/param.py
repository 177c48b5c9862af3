"""ParamConfig: Expert defaults for the gifhub pipeline.

This module defines the complete default configuration. ALL pipeline
parameters must have defaults here. No runtime code should define fallback
values - this is the single source of truth for defaults.

Runtime code NEVER reads from ParamConfig directly - it only receives InternalConfig.
"""

from typing import Literal, Optional
from pydantic import Field, field_validator
from gifhub.schemas.base import GifhubBaseModel


DEFAULT_USER_AGENT = (
    "gifhub v0.1 - This bot generates GIFs from the user's yearly activity graph"
)


# =============================================================================
# Nested Configuration Models
# =============================================================================

class FetcherConfig(GifhubBaseModel):
    """Profile page fetching configuration."""
    scheme: Literal["https", "http"] = "https"
    host: str = "github.com"
    user_agent: str = DEFAULT_USER_AGENT
    timeout_sec: float = Field(30.0, gt=0, description="Per-request timeout in seconds")


class LayoutConfig(GifhubBaseModel):
    """Canvas geometry and the saturating offset curve."""
    width: float = Field(500.0, gt=0)
    height: float = Field(560.0, gt=0)
    axis_offset: float = Field(2.35, ge=0, description="Axis margin in units of width/10")
    threshold: float = Field(0.8, gt=0, le=1.0, description="Ratio above which offsets snap to max")
    decay: float = Field(50.0, gt=0, description="Metric value giving ratio 1 - 1/e")

    @field_validator("width", "height", mode="before")
    @classmethod
    def coerce_size_to_float(cls, v):
        """Allow int or float for canvas size."""
        return float(v)


class StyleConfig(GifhubBaseModel):
    """Colors, fonts and stroke widths of a rendered frame (pixel units)."""
    background_color: str = "#ffffff"
    label_color: str = "#586069"
    value_color: str = "#959da5"
    axis_color: str = "#6cb267"
    poly_color: str = "#7bc96f"
    font_family: str = "DejaVu Sans"
    label_font_size: float = Field(24.0, gt=0)
    value_font_size: float = Field(22.0, gt=0)
    marker_radius: float = Field(6.0, gt=0)
    poly_linewidth: float = Field(10.0, ge=0)
    axis_linewidth: float = Field(4.0, gt=0)
    dpi: int = Field(100, ge=50)


class EncoderConfig(GifhubBaseModel):
    """Rasterize and bundle backend configuration."""
    backend: Literal["pillow", "subprocess"] = "pillow"
    duration_ms: int = Field(1000, ge=1, description="Display time of each frame")
    scale: float = Field(1.0, gt=0, description="Resize factor applied to every frame")
    rasterizer_command: list[str] = Field(
        default_factory=lambda: ["rsvg-convert", "-f", "png", "-o", "{output}", "{input}"]
    )
    bundler_command: list[str] = Field(
        default_factory=lambda: [
            "convert", "-delay", "{delay_cs}", "-loop", "0",
            "-resize", "{scale_pct}%", "{inputs}", "{output}",
        ]
    )
    keep_artifacts: bool = False


class OutputConfig(GifhubBaseModel):
    """Output file configuration."""
    out_dir: str = "./out"
    filename_pattern: str = "{subject}.gif"
    save_summary: bool = True


class LoggingConfig(GifhubBaseModel):
    """Logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"


# =============================================================================
# Main ParamConfig
# =============================================================================

class ParamConfig(GifhubBaseModel):
    """Complete expert configuration with all defaults.

    This is the single source of truth for all pipeline parameters.
    Every tunable parameter MUST have a default here.

    Usage
    -----
    This config is NOT used directly by runtime code. It serves as the
    base layer in config resolution:

        internal_cfg = resolve_config(param_cfg, user_cfg, cli_cfg)

    Runtime code only sees InternalConfig.
    """

    subject: Optional[str] = None
    periods: Optional[list[str]] = None  # None: discover every period
    fetcher: FetcherConfig = Field(default_factory=FetcherConfig)
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    style: StyleConfig = Field(default_factory=StyleConfig)
    encoder: EncoderConfig = Field(default_factory=EncoderConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
