"""Positional context scoring for column roles."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rolesculpt.core.headers import is_strong_header
from rolesculpt.core.types import Role

if TYPE_CHECKING:
    from collections.abc import Sequence


# Role whose strong header right before a column supports the given role
PRECEDING_ROLE_BONUS: dict[Role, tuple[Role, float]] = {
    Role.ANSWER: (Role.PERSON_NAME, 20.0),
    Role.REASON: (Role.ANSWER, 40.0),
    Role.PERSON_NAME: (Role.CLASS_LABEL, 30.0),
}


def relative_position(index: int, total_columns: int) -> float:
    """Position of a column in [0, 1]; 0 for a single-column sheet."""
    if total_columns <= 1:
        return 0.0
    return index / (total_columns - 1)


def _position_score(role: Role, index: int, position: float) -> float:
    if role == Role.ANSWER:
        if position >= 0.5:
            return 40.0
        if position >= 0.3:
            return 25.0
        return 10.0

    if role == Role.REASON:
        if position >= 0.6:
            return 40.0
        if position >= 0.4:
            return 25.0
        return 5.0

    if role == Role.CLASS_LABEL:
        if index <= 2 or position <= 0.4:
            return 45.0
        if position <= 0.6:
            return 20.0
        return 5.0

    if role == Role.PERSON_NAME:
        if index <= 1 or position <= 0.2:
            return 45.0
        if position <= 0.6:
            return 30.0
        return 10.0

    raise ValueError(f"Unknown role: {role!r}")


def score_context(index: int, headers: Sequence[str | None], role: Role) -> float:
    """Score a role from where the column sits among its neighbours.

    Forms usually run class, name, answer, reason from left to right, and a
    reason column usually directly follows its answer column.

    Args:
        index: Column index.
        headers: All headers of the sheet.
        role: Target role.

    Returns:
        Score between 0 and 100.
    """
    position = relative_position(index, len(headers))
    score = _position_score(role, index, position)

    if role in PRECEDING_ROLE_BONUS and index > 0:
        preceding_role, bonus = PRECEDING_ROLE_BONUS[role]
        previous = headers[index - 1]
        if isinstance(previous, str) and is_strong_header(previous, preceding_role):
            score += bonus

    return min(100.0, score)
