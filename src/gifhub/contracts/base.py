"""Base contract enforcement utilities.

The require() function is the single enforcement mechanism for all contracts.
"""

from gifhub.contracts.failure import ContractViolation


def require(condition: bool, message: str) -> None:
    """Enforce a pipeline contract.

    Called at stage boundaries to verify the preceding stage produced the
    guaranteed invariants. Fail-fast: no recovery, no fallback, no silence.

    Parameters
    ----------
    condition : bool
        The invariant that must be true. If False, ContractViolation is raised.

    message : str
        Error message explaining the contract violation (for debugging).

    Raises
    ------
    ContractViolation
        If condition is False.

    Examples
    --------
    >>> require(record.period, "Activity contract: empty period")
    >>> require(len(frames) > 0, "Frame contract: at least one frame expected")
    """
    if not condition:
        raise ContractViolation(message)
