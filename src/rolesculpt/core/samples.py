"""Column construction from caller-supplied headers and sample rows.

Cells are reduced to trimmed, non-empty strings before any scorer sees them.
Rows that are not sequences are skipped rather than failing the whole call.
"""

from __future__ import annotations

import logging
import math
import numbers
from typing import TYPE_CHECKING, Any

import pandas as pd

from rolesculpt.core.patterns import SYSTEM_HEADER_PATTERNS
from rolesculpt.core.types import Column

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)


def is_row_sequence(value: Any) -> bool:
    """Check if a value can act as a row of cells."""
    return isinstance(value, (list, tuple))


def coerce_cell(value: Any) -> str | None:
    """Convert a cell to its sample string, or None if it is unusable.

    Args:
        value: Raw cell value from the caller.

    Returns:
        Trimmed string, or None for empty, missing and boolean cells.
    """
    if isinstance(value, str):
        text = value.strip()
        return text or None

    # bool is a Number subclass but carries no textual signal
    if isinstance(value, bool) or value is None:
        return None

    if isinstance(value, numbers.Integral):
        return str(int(value))

    if isinstance(value, numbers.Real):
        number = float(value)
        if not math.isfinite(number):
            return None
        if number.is_integer():
            return str(int(number))
        return str(number)

    return None


def normalize_header(header: Any) -> str:
    """Return a header as a trimmed string; non-strings become empty."""
    if not isinstance(header, str):
        return ""
    return header.strip()


def is_system_header(header: str) -> bool:
    """Check if a header is a timestamp, reaction or internal column."""
    name = header.strip()
    if not name:
        return False
    return any(p.search(name) for p in SYSTEM_HEADER_PATTERNS)


def build_frame(headers: Sequence[Any], sample_rows: Sequence[Any]) -> pd.DataFrame:
    """Align sample rows under the headers.

    Short rows are padded with missing cells and cells beyond the last
    header are dropped.

    Args:
        headers: Header row.
        sample_rows: Data rows.

    Returns:
        Object-dtype DataFrame with one column per header position.
    """
    rows: list[list[Any]] = []
    for row_number, row in enumerate(sample_rows):
        if not is_row_sequence(row):
            logger.debug("Skipping malformed sample row %d: %r", row_number, row)
            continue
        rows.append(list(row))

    frame = pd.DataFrame(rows, dtype=object) if rows else pd.DataFrame(dtype=object)
    return frame.reindex(columns=range(len(headers)))


def build_columns(
    headers: Sequence[Any],
    sample_rows: Sequence[Any],
) -> list[Column]:
    """Build one Column per header position.

    Args:
        headers: Header row; blank or non-string entries give an empty header.
        sample_rows: Data rows.

    Returns:
        Columns in header order, each holding its usable sample strings.
    """
    frame = build_frame(headers, sample_rows)

    columns: list[Column] = []
    for index, header in enumerate(headers):
        samples = tuple(
            text
            for text in (coerce_cell(value) for value in frame[index].tolist())
            if text is not None
        )
        columns.append(Column(index=index, header=normalize_header(header), samples=samples))

    return columns


def competing_columns(columns: Sequence[Column]) -> list[Column]:
    """Drop columns whose header is blank or a system header."""
    kept = []
    for column in columns:
        if not column.header:
            continue
        if is_system_header(column.header):
            logger.debug("Excluding system column %d (%s)", column.index, column.header)
            continue
        kept.append(column)
    return kept
