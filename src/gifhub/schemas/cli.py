"""CLIConfig: Command-line operational overrides.

Minimal configuration for parameters that commonly change between runs:
subject, periods, output directory, frame duration, scale, verbosity.

This schema handles command-line arguments parsed by argparse.
"""

from typing import Literal, Optional
from pydantic import Field, field_validator
from gifhub.schemas.base import GifhubBaseModel


class CLIConfig(GifhubBaseModel):
    """Command-line configuration overrides.

    Operational-only settings that override user and param configs.
    Highest priority in config resolution.

    Notes
    -----
    ``periods`` accepts the raw ``--years`` value. ``"all"`` clears any
    period list coming from lower layers so that periods are discovered.

    Usage
    -----
        cli_cfg = CLIConfig(
            subject="octocat",
            periods="2016,2017,2019",
            out_dir="./out",
        )

        internal = resolve_config(param_cfg, user_cfg, cli_cfg)
    """

    subject: Optional[str] = None
    periods: Optional[str] = None
    out_dir: Optional[str] = None
    duration_ms: Optional[int] = Field(None, ge=1)
    scale: Optional[float] = Field(None, gt=0)
    backend: Optional[Literal["pillow", "subprocess"]] = None
    keep_artifacts: Optional[bool] = None
    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = None

    @field_validator("periods", mode="before")
    @classmethod
    def strip_period_flag(cls, v):
        """Trim surrounding commas and spaces like ``" 2016,2017, "``."""
        if isinstance(v, str):
            return v.strip(", ")
        return v

    def period_list(self) -> Optional[list[str]]:
        """Explicit periods, or None when all periods should be discovered."""
        if self.periods is None or self.periods.lower() == "all":
            return None
        return [p.strip() for p in self.periods.split(",") if p.strip()]

    def to_internal_overrides(self) -> dict:
        """Convert CLI config to internal config structure.

        Returns
        -------
        dict
            Nested dictionary matching InternalConfig structure
        """
        overrides = {}

        if self.subject is not None:
            overrides["subject"] = self.subject

        if self.periods is not None:
            overrides["periods"] = self.period_list()

        encoder_overrides = {}
        if self.duration_ms is not None:
            encoder_overrides["duration_ms"] = self.duration_ms
        if self.scale is not None:
            encoder_overrides["scale"] = self.scale
        if self.backend is not None:
            encoder_overrides["backend"] = self.backend
        if self.keep_artifacts is not None:
            encoder_overrides["keep_artifacts"] = self.keep_artifacts
        if encoder_overrides:
            overrides["encoder"] = encoder_overrides

        if self.out_dir is not None:
            overrides["output"] = {"out_dir": str(self.out_dir)}

        if self.log_level is not None:
            overrides["logging"] = {"level": self.log_level}

        return overrides
