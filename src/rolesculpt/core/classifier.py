"""Column role classification entry points.

Runs every scorer for every (column, role) pair, resolves the assignment
and checks that the answer column precedes the reason column.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import pandas as pd

from rolesculpt.core.assignment import build_cost_matrix, resolve_assignment
from rolesculpt.core.ensemble import score_column
from rolesculpt.core.samples import build_columns, competing_columns, is_row_sequence
from rolesculpt.core.types import (
    ClassificationResult,
    ClassifierConfig,
    OrderValidation,
    Role,
    ScoreCard,
)

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

logger = logging.getLogger(__name__)

PINNED_CONFIDENCE = 100.0


def _valid_pins(
    existing_mapping: Mapping[Any, Any] | None,
    column_count: int,
) -> dict[Role, int]:
    """Keep caller-pinned roles whose index is a valid column position."""
    pins: dict[Role, int] = {}
    if not existing_mapping:
        return pins

    used: set[int] = set()
    for key, index in existing_mapping.items():
        try:
            role = Role(key)
        except ValueError:
            logger.warning("Ignoring pinned mapping for unknown role %r", key)
            continue
        if isinstance(index, bool) or not isinstance(index, int):
            logger.warning("Ignoring pinned %s: index %r is not an int", role.value, index)
            continue
        if not 0 <= index < column_count or index in used:
            logger.warning("Ignoring pinned %s: index %d unavailable", role.value, index)
            continue
        pins[role] = index
        used.add(index)
    return pins


def score_columns(
    headers: Sequence[Any],
    sample_rows: Sequence[Any],
    config: ClassifierConfig | None = None,
) -> dict[int, dict[Role, ScoreCard]]:
    """Score every competing column for every role.

    System and blank-header columns are left out.

    Args:
        headers: Header row.
        sample_rows: Data rows.
        config: Optional classifier configuration.

    Returns:
        Score cards keyed by column index, then role.
    """
    columns = build_columns(headers, sample_rows)
    header_names = [column.header for column in columns]
    return {
        column.index: score_column(column, header_names, config)
        for column in competing_columns(columns)
    }


def validate_field_order(
    result: ClassificationResult,
    config: ClassifierConfig | None = None,
) -> ClassificationResult:
    """Check that the answer column comes before the reason column.

    When reason precedes answer, a clearly weaker reason is dropped from
    the mapping (its confidence stays as a diagnostic); a clearly weaker
    answer only raises a warning.

    Args:
        result: Result to check; updated in place.
        config: Optional classifier configuration.

    Returns:
        The same result with ``validation`` filled in.
    """
    if config is None:
        config = ClassifierConfig()

    validation = result.validation
    mapping = result.mapping
    if Role.ANSWER not in mapping or Role.REASON not in mapping:
        return result

    answer_index = mapping[Role.ANSWER]
    reason_index = mapping[Role.REASON]
    check: dict[str, Any] = {
        "rule": "answer_before_reason",
        "answer_index": answer_index,
        "reason_index": reason_index,
        "logical": answer_index < reason_index,
    }
    validation.checks.append(check)

    if answer_index < reason_index:
        check["status"] = "passed"
        return result

    answer_confidence = result.confidence.get(Role.ANSWER, 0.0)
    reason_confidence = result.confidence.get(Role.REASON, 0.0)
    gap = config.order_confidence_gap

    if reason_confidence < answer_confidence - gap:
        del mapping[Role.REASON]
        check["status"] = "corrected"
        validation.corrections.append(
            {
                "action": "removed_illogical_reason",
                "field": Role.REASON.value,
                "index": reason_index,
                "reason": "Reason column appears before answer column with low confidence",
            }
        )
        logger.debug("Dropped reason column %d placed before answer", reason_index)
    elif answer_confidence < reason_confidence - gap:
        check["status"] = "warning"
        validation.warnings.append(
            {
                "warning": "potential_field_swap",
                "message": "Answer column may actually be a reason column",
                "answer_index": answer_index,
                "reason_index": reason_index,
            }
        )
    else:
        check["status"] = "preserved"
        validation.corrections.append(
            {
                "action": "preserved_logical_order",
                "message": "Kept answer and reason despite close confidence scores",
                "answer_index": answer_index,
                "reason_index": reason_index,
            }
        )

    return result


def classify_columns(
    headers: Sequence[Any],
    sample_rows: Sequence[Any],
    config: ClassifierConfig | None = None,
    existing_mapping: Mapping[Any, Any] | None = None,
) -> ClassificationResult:
    """Infer which column holds the answer, reason, class and name.

    Never raises for bad data: invalid or empty input gives an empty
    result, and roles without a confident column are simply left out of
    ``mapping``.

    Args:
        headers: Header row; blank entries never receive a role.
        sample_rows: First few data rows; cells may be any type.
        config: Optional classifier configuration.
        existing_mapping: Roles the caller has already fixed, as
            role (or role value) -> column index. Valid entries are kept
            with full confidence and removed from the competition.

    Returns:
        ClassificationResult with an injective role -> column mapping.
    """
    if config is None:
        config = ClassifierConfig()

    if not is_row_sequence(headers) or not is_row_sequence(sample_rows):
        logger.warning(
            "Invalid input: headers and sample rows must be lists, got %s and %s",
            type(headers).__name__,
            type(sample_rows).__name__,
        )
        return ClassificationResult()

    if not headers or not sample_rows:
        logger.warning(
            "Nothing to classify: %d header(s), %d sample row(s)",
            len(headers),
            len(sample_rows),
        )
        return ClassificationResult()

    pins = _valid_pins(existing_mapping, len(headers))
    pinned_columns = set(pins.values())

    scores = {
        index: cards
        for index, cards in score_columns(headers, sample_rows, config).items()
        if index not in pinned_columns
    }
    remaining_roles = [role for role in Role if role not in pins]

    result = ClassificationResult()
    if scores and remaining_roles:
        cost = build_cost_matrix(scores)[[role.value for role in remaining_roles]]
        resolved = resolve_assignment(cost, config)
        result.mapping.update(resolved.mapping)
        result.confidence.update(resolved.confidence)
        logger.debug(
            "Resolved %d role(s) with %d swap(s) and %d eviction(s)",
            len(resolved.mapping),
            resolved.swaps,
            len(resolved.evicted),
        )

    for role, index in pins.items():
        result.mapping[role] = index
        result.confidence[role] = PINNED_CONFIDENCE

    if config.validate_order:
        validate_field_order(result, config)

    return result


def classify_dataframe(
    df: pd.DataFrame,
    config: ClassifierConfig | None = None,
    existing_mapping: Mapping[Any, Any] | None = None,
) -> ClassificationResult:
    """Classify the columns of a DataFrame from its first rows.

    Args:
        df: DataFrame whose column labels are the headers.
        config: Optional classifier configuration.
        existing_mapping: Roles the caller has already fixed.

    Returns:
        ClassificationResult as for classify_columns.
    """
    if config is None:
        config = ClassifierConfig()

    headers = [label if isinstance(label, str) else "" for label in df.columns]
    head = df.head(config.sample_size).astype(object)
    sample_rows = [list(row) for row in head.itertuples(index=False, name=None)]
    return classify_columns(headers, sample_rows, config, existing_mapping)
