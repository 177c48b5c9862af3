"""UserConfig: Forgiving, minimal user-facing configuration.

This schema accepts user inputs in a variety of formats, with aliases
for common naming patterns (e.g., SUBJECT → subject, OUT_DIR → out_dir).

UserConfig is intentionally minimal - users only specify what they want
to override from the expert defaults. Validation is lenient to accept
both uppercase and lowercase keys, integers where floats are expected,
comma separated strings where lists are expected, etc.
"""

from typing import Literal, Optional
from pydantic import Field, field_validator
from gifhub.schemas.base import GifhubBaseModel


class UserFetcherConfig(GifhubBaseModel):
    """User-facing fetcher config."""
    scheme: Optional[str] = None
    host: Optional[str] = None
    user_agent: Optional[str] = None
    timeout_sec: Optional[float] = None


class UserLayoutConfig(GifhubBaseModel):
    """User-facing layout config."""
    width: Optional[float] = None
    height: Optional[float] = None
    axis_offset: Optional[float] = None
    threshold: Optional[float] = None
    decay: Optional[float] = None


class UserStyleConfig(GifhubBaseModel):
    """User-facing style config."""
    background_color: Optional[str] = None
    label_color: Optional[str] = None
    value_color: Optional[str] = None
    axis_color: Optional[str] = None
    poly_color: Optional[str] = None
    font_family: Optional[str] = None
    label_font_size: Optional[float] = None
    value_font_size: Optional[float] = None
    marker_radius: Optional[float] = None
    poly_linewidth: Optional[float] = None
    axis_linewidth: Optional[float] = None
    dpi: Optional[int] = None


class UserEncoderConfig(GifhubBaseModel):
    """User-facing encoder config."""
    backend: Optional[str] = None
    duration_ms: Optional[int] = None
    scale: Optional[float] = None
    rasterizer_command: Optional[list[str]] = None
    bundler_command: Optional[list[str]] = None
    keep_artifacts: Optional[bool] = None

    @field_validator("backend", mode="before")
    @classmethod
    def normalize_backend(cls, v):
        """Normalize backend names to lowercase."""
        if isinstance(v, str):
            return v.lower().strip()
        return v


class UserConfig(GifhubBaseModel):
    """User-facing configuration schema.

    Minimal, forgiving, and uses common aliases. Users only specify
    what they want to override from ParamConfig defaults.

    This config is converted to internal overrides during resolution.

    Usage
    -----
        user_cfg = UserConfig(
            subject="octocat",
            periods="2018,2019",
            out_dir="/tmp/gifs",
            duration_ms=500,
        )

        internal = resolve_config(param_cfg, user_cfg, cli_cfg)
    """

    # Target
    subject: Optional[str] = Field(None, alias="SUBJECT")
    periods: Optional[list[str]] = Field(None, alias="PERIODS")

    # Output
    out_dir: Optional[str] = Field(None, alias="OUT_DIR")
    save_summary: Optional[bool] = Field(None, alias="SAVE_SUMMARY")

    # Animation
    duration_ms: Optional[int] = Field(None, alias="DURATION_MS")
    scale: Optional[float] = Field(None, alias="SCALE")
    backend: Optional[Literal["pillow", "subprocess"]] = Field(None, alias="BACKEND")

    # Source
    host: Optional[str] = Field(None, alias="HOST")

    # Layout
    threshold: Optional[float] = Field(None, alias="THRESHOLD")

    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = Field(
        None, alias="LOG_LEVEL"
    )

    # Nested overrides (advanced users)
    fetcher: Optional[UserFetcherConfig] = None
    layout: Optional[UserLayoutConfig] = None
    style: Optional[UserStyleConfig] = None
    encoder: Optional[UserEncoderConfig] = None

    model_config = GifhubBaseModel.model_config.copy()
    # Allow forgiving input dictionaries (ignore unknown legacy keys)
    model_config.update({"populate_by_name": True, "extra": "ignore"})

    @field_validator("periods", mode="before")
    @classmethod
    def split_period_string(cls, v):
        """Accept "2018,2019" as well as a list; "all" means discover."""
        if isinstance(v, str):
            cleaned = v.strip(", ")
            if cleaned.lower() == "all":
                return None
            return [p.strip() for p in cleaned.split(",") if p.strip()]
        if isinstance(v, (list, tuple)):
            return [str(p).strip() for p in v]
        return v

    @field_validator("scale", "threshold", mode="before")
    @classmethod
    def coerce_numeric_fields(cls, v):
        """Accept int or float for numeric fields."""
        if v is not None:
            return float(v)
        return v

    @field_validator("backend", mode="before")
    @classmethod
    def normalize_backend(cls, v):
        """Normalize backend names to lowercase."""
        if isinstance(v, str):
            return v.lower().strip()
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        if isinstance(v, str):
            return v.upper().strip()
        return v

    def to_internal_overrides(self) -> dict:
        """Convert flat UserConfig to nested InternalConfig structure.

        Returns
        -------
        dict
            Nested dictionary matching InternalConfig structure
        """
        overrides = {}

        if self.subject is not None:
            overrides["subject"] = self.subject
        if self.periods is not None:
            overrides["periods"] = list(self.periods)

        # Fetcher section
        fetcher = {}
        if self.host is not None:
            fetcher["host"] = self.host
        if self.fetcher is not None:
            fetcher.update(self.fetcher.model_dump(exclude_none=True))
        if fetcher:
            overrides["fetcher"] = fetcher

        # Layout section
        layout = {}
        if self.threshold is not None:
            layout["threshold"] = self.threshold
        if self.layout is not None:
            layout.update(self.layout.model_dump(exclude_none=True))
        if layout:
            overrides["layout"] = layout

        if self.style is not None:
            style = self.style.model_dump(exclude_none=True)
            if style:
                overrides["style"] = style

        # Encoder section
        encoder = {}
        if self.duration_ms is not None:
            encoder["duration_ms"] = self.duration_ms
        if self.scale is not None:
            encoder["scale"] = self.scale
        if self.backend is not None:
            encoder["backend"] = self.backend
        if self.encoder is not None:
            encoder.update(self.encoder.model_dump(exclude_none=True))
        if encoder:
            overrides["encoder"] = encoder

        # Output section
        output = {}
        if self.out_dir is not None:
            output["out_dir"] = str(self.out_dir)
        if self.save_summary is not None:
            output["save_summary"] = self.save_summary
        if output:
            overrides["output"] = output

        if self.log_level is not None:
            overrides["logging"] = {"level": self.log_level}

        return overrides
