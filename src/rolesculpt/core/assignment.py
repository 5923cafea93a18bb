"""Conflict-free assignment of roles to columns.

Roles are assigned greedily from the most confident (column, role) pair
down, then improved by a bounded number of pairwise role swaps, and finally
weak assignments are evicted. The search is approximate and may differ
from an optimal assignment on near ties.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from itertools import combinations
from typing import TYPE_CHECKING

import pandas as pd

from rolesculpt.core.types import ClassifierConfig, Role

if TYPE_CHECKING:
    from collections.abc import Mapping

    from rolesculpt.core.types import ScoreCard

logger = logging.getLogger(__name__)

ROLE_ORDER = tuple(Role)


@dataclass
class ResolvedAssignment:
    """Result of resolving the cost matrix."""

    mapping: dict[Role, int] = field(default_factory=dict)
    confidence: dict[Role, float] = field(default_factory=dict)
    swaps: int = 0
    evicted: list[tuple[Role, int]] = field(default_factory=list)


def build_cost_matrix(scores: Mapping[int, Mapping[Role, ScoreCard]]) -> pd.DataFrame:
    """Build the column x role cost matrix (100 - ensemble score).

    Args:
        scores: Score cards keyed by column index, then role.

    Returns:
        DataFrame indexed by column index with one column per role value.
    """
    data = {
        role.value: [100.0 - scores[index][role].ensemble_score for index in scores]
        for role in ROLE_ORDER
    }
    return pd.DataFrame(data, index=list(scores), dtype=float)


def matrix_roles(cost: pd.DataFrame) -> list[Role]:
    """Roles present in a cost matrix, in declaration order."""
    present = {Role(label) for label in cost.columns}
    return [role for role in ROLE_ORDER if role in present]


def candidate_pairs(cost: pd.DataFrame) -> list[tuple[float, int, Role]]:
    """All (confidence, column, role) pairs, most confident first.

    Ties go to the lower column index, then to the earlier role.
    """
    roles = matrix_roles(cost)
    pairs = [
        (100.0 - float(cost.at[index, role.value]), int(index), role)
        for index in cost.index
        for role in roles
    ]
    pairs.sort(key=lambda p: (-p[0], p[1], ROLE_ORDER.index(p[2])))
    return pairs


def _assign_pass(
    pairs: list[tuple[float, int, Role]],
    assigned: dict[int, Role],
    threshold: float,
) -> None:
    claimed = set(assigned.values())
    for confidence, index, role in pairs:
        if confidence < threshold:
            break
        if index in assigned or role in claimed:
            continue
        assigned[index] = role
        claimed.add(role)


def improve_by_swaps(
    cost: pd.DataFrame,
    assigned: dict[int, Role],
    max_iterations: int,
    margin: float,
) -> int:
    """Swap roles between assigned columns while it lowers total cost.

    A swap must lower the pair's cost by more than ``margin``. Stops after
    ``max_iterations`` passes or the first pass without a swap.

    Returns:
        Number of swaps performed.
    """
    swaps = 0
    for _iteration in range(max_iterations):
        improved = False
        for a, b in combinations(sorted(assigned), 2):
            role_a, role_b = assigned[a], assigned[b]
            current = cost.at[a, role_a.value] + cost.at[b, role_b.value]
            swapped = cost.at[a, role_b.value] + cost.at[b, role_a.value]
            if current - swapped > margin:
                assigned[a], assigned[b] = role_b, role_a
                swaps += 1
                improved = True
        if not improved:
            break
    return swaps


def evict_weak(
    cost: pd.DataFrame,
    assigned: dict[int, Role],
    threshold: float,
) -> list[tuple[Role, int]]:
    """Unassign columns whose confidence in their role is below threshold.

    Returns:
        The evicted (role, column) pairs.
    """
    evicted = []
    for index in sorted(assigned):
        role = assigned[index]
        confidence = 100.0 - float(cost.at[index, role.value])
        if confidence < threshold:
            logger.debug(
                "Evicting %s from column %d (confidence %.1f)", role.value, index, confidence
            )
            evicted.append((role, index))
    for role, index in evicted:
        del assigned[index]
    return evicted


def resolve_assignment(
    cost: pd.DataFrame,
    config: ClassifierConfig | None = None,
) -> ResolvedAssignment:
    """Assign each role to at most one column and each column to at most one role.

    Args:
        cost: Cost matrix from build_cost_matrix.
        config: Optional classifier configuration.

    Returns:
        ResolvedAssignment; roles that were never accepted are absent from
        ``mapping`` and carry their best-seen confidence in ``confidence``.
    """
    if config is None:
        config = ClassifierConfig()

    result = ResolvedAssignment()
    if cost.empty:
        return result

    pairs = candidate_pairs(cost)
    assigned: dict[int, Role] = {}

    _assign_pass(pairs, assigned, config.greedy_threshold)
    logger.debug("Greedy pass assigned %d role(s)", len(assigned))

    roles = matrix_roles(cost)
    if config.fallback_pass and len(assigned) < len(roles):
        _assign_pass(pairs, assigned, config.acceptance_threshold)
        logger.debug("Fallback pass brought total to %d role(s)", len(assigned))

    result.swaps = improve_by_swaps(
        cost, assigned, config.max_swap_iterations, config.swap_margin
    )
    result.evicted = evict_weak(cost, assigned, config.acceptance_threshold)

    for index in sorted(assigned):
        role = assigned[index]
        result.mapping[role] = index
        result.confidence[role] = 100.0 - float(cost.at[index, role.value])

    for role in roles:
        if role not in result.confidence:
            result.confidence[role] = max(
                0.0, 100.0 - float(cost[role.value].min())
            )

    return result
