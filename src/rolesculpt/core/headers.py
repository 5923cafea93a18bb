"""Header pattern scoring for column roles."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rolesculpt.core.patterns import NEGATIVE_PATTERNS, ROLE_PATTERNS
from rolesculpt.core.types import Role

if TYPE_CHECKING:
    import re


PRIMARY_SCORE = 98.0
STRONG_SCORE = 85.0
MEDIUM_SCORE = 60.0
WEAK_SCORE = 35.0
ULTRA_CLEAR_BONUS = 2.0


def _matches_any_pattern(name: str, patterns: tuple[re.Pattern, ...]) -> bool:
    """Check if name matches any pattern in the tuple."""
    return any(p.search(name) for p in patterns)


def _clamp(value: float) -> float:
    """Clamp value to 0-100 range."""
    return max(0.0, min(100.0, value))


def negative_penalty(header: str) -> float:
    """Return the penalty of the first negative pattern matching a header."""
    for negative in NEGATIVE_PATTERNS:
        if negative.pattern.search(header):
            return negative.penalty
    return 0.0


def base_header_score(header: str, role: Role) -> float:
    """Score a normalized header against the role's pattern tiers.

    The first tier with any matching pattern decides the score; there is
    no accumulation across tiers.

    Args:
        header: Trimmed, lower-cased header.
        role: Target role.

    Returns:
        One of 0, 35, 60, 85, 98 or 100.
    """
    patterns = ROLE_PATTERNS[role]

    if _matches_any_pattern(header, patterns.primary):
        score = PRIMARY_SCORE
        if any(keyword in header for keyword in patterns.ultra_clear):
            score += ULTRA_CLEAR_BONUS
        return _clamp(score)
    if _matches_any_pattern(header, patterns.strong):
        return STRONG_SCORE
    if _matches_any_pattern(header, patterns.medium):
        return MEDIUM_SCORE
    if _matches_any_pattern(header, patterns.weak):
        return WEAK_SCORE
    return 0.0


def score_header(header: str | None, role: Role) -> float:
    """Score likelihood that a header names a column of the given role.

    High scores for:
    - Headers that are exactly a role keyword ("回答", "reason", ...)
    - Headers containing a role keyword or a question-style prompt

    Low scores for:
    - Reaction words, yes/no tokens and exclamations

    Args:
        header: Raw header; None or blank scores 0.
        role: Target role.

    Returns:
        Score between 0 and 100.
    """
    if not header:
        return 0.0

    normalized = header.strip().lower()
    if not normalized:
        return 0.0

    score = base_header_score(normalized, role)
    if score == 0.0:
        return 0.0

    return _clamp(score - negative_penalty(normalized))


def is_strong_header(header: str | None, role: Role) -> bool:
    """Check if a header reaches the strong tier for a role."""
    return score_header(header, role) >= STRONG_SCORE
