"""Fetch stage contract.

Enforces that every record leaving the fetch stage carries its identity and
four percentages in [0, 100].
"""

from gifhub.contracts.base import require
from gifhub.models import ActivityRecord, METRIC_FIELDS


def assert_activity(record: ActivityRecord, subject: str, period: str) -> None:
    """Enforce activity record contract.

    Parameters
    ----------
    record : ActivityRecord
        Output of ``ProfileClient.fetch_activity``.
    subject, period : str
        Identity the record was requested for.

    Raises
    ------
    ContractViolation
        If identity does not match the request or a metric is out of range.
    """
    require(
        isinstance(record, ActivityRecord),
        f"Activity contract violated: got {type(record).__name__}, expected ActivityRecord"
    )
    require(
        record.subject == subject,
        f"Activity contract violated: subject {record.subject!r} != {subject!r}"
    )
    require(
        record.period == period,
        f"Activity contract violated: period {record.period!r} != {period!r}"
    )
    for name in METRIC_FIELDS:
        value = getattr(record, name)
        require(
            isinstance(value, int) and 0 <= value <= 100,
            f"Activity contract violated: {name}={value!r} not in [0, 100]"
        )
