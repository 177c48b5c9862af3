"""Byte-token extraction of activity percentages and periods from profile HTML.

The profile page embeds the activity overview as an attribute holding a
JSON-like object with HTML-escaped quotes::

    data-percentages="{&quot;Commits&quot;:89,&quot;Issues&quot;:4,...}">

This is scanned as raw bytes, not parsed as HTML. The field that occurs last
in the object is closed by ``}`` instead of ``,``; which field that is depends
on the document, so it is looked up per page.
"""

import logging
from typing import Dict, List

from gifhub.contracts.failure import ExtractionError, ParseError

__all__ = ['extract_between', 'scrape_activity', 'scrape_periods', 'ACTIVITY_LABELS']

logger = logging.getLogger(__name__)

ACTIVITY_ATTR = b'data-percentages="'
CLOSING_TAG = b'">'
QUOTE_ENTITY = b'&quot;'
FIELD_SEPARATOR = b','
CLOSING_BRACE = b'}'

# Declared search order. Also decides ties and which label an
# "all labels missing" error names.
ACTIVITY_LABELS = {
    "commits": b"Commits:",
    "issues": b"Issues:",
    "prs": b"Pull requests:",
    "code_reviews": b"Code review:",
}

PERIOD_LIST_START = b'<ul class="filter-list small">'
PERIOD_LIST_END = b'</ul>'
LINK_START = b'<a'
PERIOD_ID_START = b'id="year-link-'
QUOTE = b'"'


def _pattern_not_found(pattern: bytes) -> ExtractionError:
    return ExtractionError(f"could not find {pattern.decode(errors='replace')!r}")


def extract_between(data: bytes, left: bytes, right: bytes) -> bytes:
    """Return the bytes between ``left`` and the next ``right`` after it.

    Parameters
    ----------
    data : bytes
        Buffer to scan.
    left, right : bytes
        Anchor tokens. Only the first occurrence of ``left`` is used.

    Returns
    -------
    bytes
        The span strictly between the two anchors (may be empty).

    Raises
    ------
    ExtractionError
        If either anchor is missing or the left anchor ends past the buffer.

    Examples
    --------
    >>> extract_between(b"a[42]b", b"[", b"]")
    b'42'
    """
    left_idx = data.find(left)
    if left_idx == -1:
        raise _pattern_not_found(left)

    left_offset = left_idx + len(left)
    if left_offset > len(data):
        raise ExtractionError(
            f"left offset larger than buffer: {left.decode(errors='replace')!r}"
        )

    right_idx = data.find(right, left_offset)
    if right_idx == -1:
        raise _pattern_not_found(right)

    return data[left_offset:right_idx]


def _parse_percentage(label: bytes, value: bytes) -> int:
    """Convert a value span to an int, refusing anything but plain digits."""
    if not value or not value.isdigit():
        raise ParseError(
            f"invalid value for {label.decode()!r}: {value.decode(errors='replace')!r}"
        )
    number = int(value)
    if number > 100:
        raise ParseError(f"percentage out of range for {label.decode()!r}: {number}")
    return number


def _last_label(container: bytes) -> str:
    """Key of the label occurring at the greatest offset in ``container``."""
    last_key = None
    last_idx = -1
    for key, token in ACTIVITY_LABELS.items():
        idx = container.find(token)
        if idx > last_idx:
            last_idx = idx
            last_key = key

    if last_key is None:
        first = next(iter(ACTIVITY_LABELS.values()))
        raise ExtractionError(
            f"did not find any activity labels, first searched {first.decode()!r} "
            f"in: {container.decode(errors='replace')!r}"
        )
    return last_key


def parse_activity_container(container: bytes) -> Dict[str, int]:
    """Extract the four percentages from an unescaped activity container.

    Only nonzero values are returned; an absent key means 0.

    Raises
    ------
    ExtractionError
        If no label is present, or a single label or its terminator is missing.
    ParseError
        If a value span holds anything but digits, or exceeds 100.
    """
    last = _last_label(container)

    activities = {}
    for key, token in ACTIVITY_LABELS.items():
        terminator = CLOSING_BRACE if key == last else FIELD_SEPARATOR
        value = extract_between(container, token, terminator)

        num = _parse_percentage(token, value)
        if num != 0:
            activities[key] = num

    return activities


def scrape_activity(html: bytes) -> Dict[str, int]:
    """Return the nonzero activity percentages found in a profile page.

    Parameters
    ----------
    html : bytes
        Raw response body of an overview page.

    Returns
    -------
    dict
        Subset of ``{"commits", "issues", "prs", "code_reviews"}`` mapped to
        their nonzero percentages.

    Raises
    ------
    ExtractionError, ParseError
        See :func:`parse_activity_container`.
    """
    raw_activity = extract_between(html, ACTIVITY_ATTR, CLOSING_TAG)
    container = raw_activity.replace(QUOTE_ENTITY, b"")
    return parse_activity_container(container)


def scrape_periods(html: bytes) -> List[str]:
    """Return every period listed on a profile page, ascending.

    Anchors without a ``year-link-`` id are skipped.

    Raises
    ------
    ExtractionError
        If the period list itself is missing.
    """
    raw_list = extract_between(html, PERIOD_LIST_START, PERIOD_LIST_END)

    # first chunk only holds the opening <li>
    chunks = raw_list.split(LINK_START)[1:]

    periods = []
    for chunk in chunks:
        try:
            period = extract_between(chunk, PERIOD_ID_START, QUOTE)
        except ExtractionError as e:
            logger.debug("Skipping link without period id: %s", e)
            continue
        periods.append(period.decode())

    return sorted(periods)
