"""Pipeline contracts and failure taxonomy.

Contracts fail immediately and loudly when a stage does not produce its
promised invariants. The failure module holds the exception types shared by
every stage.
"""

from gifhub.contracts.failure import (
    GifhubError,
    NetworkError,
    ExtractionError,
    ParseError,
    RenderError,
    EncodeError,
    EmptyResultError,
    ContractViolation,
)
from gifhub.contracts.base import require
from gifhub.contracts.activity import assert_activity
from gifhub.contracts.frames import assert_uniform_frames

__all__ = [
    "GifhubError",
    "NetworkError",
    "ExtractionError",
    "ParseError",
    "RenderError",
    "EncodeError",
    "EmptyResultError",
    "ContractViolation",
    "require",
    "assert_activity",
    "assert_uniform_frames",
]
