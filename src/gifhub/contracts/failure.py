"""Centralized failure taxonomy for the gifhub pipeline.

Per-item failures (network, extraction, parse) are caught inside the fan-out
stages and dropped. Stage-level failures (empty result, render, encode)
propagate to the top level. Contract violations are pipeline bugs.
"""


class GifhubError(Exception):
    """Base class for every expected pipeline failure."""


class NetworkError(GifhubError):
    """Transport failure or a non-200 response."""


class ExtractionError(GifhubError):
    """An anchor token was not found, or its offset fell outside the buffer."""


class ParseError(GifhubError):
    """A value span was not a valid percentage.

    Kept distinct from ExtractionError: a malformed document must never be
    reported as zero activity.
    """


class RenderError(GifhubError):
    """Drawing or rasterizing a frame failed. Always fatal."""


class EncodeError(GifhubError):
    """Bundling the frames into an animated image failed."""


class EmptyResultError(GifhubError):
    """A stage that needs at least one item received none.

    Parameters
    ----------
    stage : str
        Name of the stage that produced zero results
        ("source", "fetch" or "render").
    message : str
        Human readable detail.
    """

    def __init__(self, stage: str, message: str):
        super().__init__(f"{stage} stage produced no results: {message}")
        self.stage = stage


class ContractViolation(RuntimeError):
    """Raised when a pipeline contract is violated.

    This indicates a bug in pipeline logic, not bad input from the remote
    source. It means a stage did not produce the invariants it promised.

    Key distinction:
    - ValueError: User/config error (handled by Pydantic)
    - GifhubError: expected runtime failure (network, document format)
    - ContractViolation: Pipeline bug (programmer error)
    """
    pass
