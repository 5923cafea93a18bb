"""Sample-content scorers: length statistics, linguistic cues and semantics."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from rolesculpt.core.patterns import (
    CAUSAL_PATTERN,
    CLASS_TOKEN_PATTERN,
    CLASS_VOCABULARY_PATTERN,
    CONJECTURE_PATTERN,
    DIGIT_PATTERN,
    EXPLANATION_PATTERN,
    GRADE_PATTERN,
    GROUP_PATTERN,
    HONORIFIC_PATTERN,
    I_THINK_PATTERN,
    OPINION_PATTERN,
    POLITE_ENDING_PATTERN,
    QUESTION_MARK_PATTERN,
    ROLE_KEYWORDS,
    SPACED_NAME_PATTERN,
)
from rolesculpt.core.types import Role

if TYPE_CHECKING:
    import re
    from collections.abc import Sequence


KEYWORD_POINTS = 3.0
KEYWORD_CAP = 15.0

# (pattern, points) pairs added when the pattern occurs anywhere in the text
LINGUISTIC_RULES: dict[Role, tuple[tuple[re.Pattern, float], ...]] = {
    Role.ANSWER: (
        (QUESTION_MARK_PATTERN, 30.0),
        (OPINION_PATTERN, 25.0),
        (POLITE_ENDING_PATTERN, 20.0),
        (CONJECTURE_PATTERN, 20.0),
    ),
    Role.REASON: (
        (CAUSAL_PATTERN, 35.0),
        (I_THINK_PATTERN, 25.0),
        (EXPLANATION_PATTERN, 20.0),
        (POLITE_ENDING_PATTERN, 10.0),
    ),
    Role.CLASS_LABEL: (
        (CLASS_TOKEN_PATTERN, 40.0),
        (GRADE_PATTERN, 30.0),
        (GROUP_PATTERN, 30.0),
        (CLASS_VOCABULARY_PATTERN, 20.0),
    ),
    Role.PERSON_NAME: (
        (HONORIFIC_PATTERN, 40.0),
        (SPACED_NAME_PATTERN, 30.0),
    ),
}


def _clamp(value: float) -> float:
    """Clamp value to 0-100 range."""
    return max(0.0, min(100.0, value))


def _non_empty(samples: Sequence[str]) -> list[str]:
    return [s for s in samples if s and s.strip()]


def length_statistics(samples: Sequence[str]) -> tuple[float, float]:
    """Mean and population variance of sample lengths (0, 0 when empty)."""
    values = _non_empty(samples)
    if not values:
        return 0.0, 0.0
    lengths = np.array([len(s) for s in values], dtype=float)
    return float(lengths.mean()), float(lengths.var())


def joined_text(samples: Sequence[str]) -> str:
    """Lower-cased, space-joined sample text."""
    return " ".join(_non_empty(samples)).lower()


def score_content(samples: Sequence[str], role: Role) -> float:
    """Score a role from the length profile of the samples.

    Each role has its own ladder over mean length and length variance;
    the first matching rung gives the score.

    Args:
        samples: Column sample strings.
        role: Target role.

    Returns:
        Score between 0 and 100; 0 when there are no samples.
    """
    if not _non_empty(samples):
        return 0.0

    avg, variance = length_statistics(samples)

    if role == Role.ANSWER:
        if avg <= 20 and variance <= 100:
            return 75.0
        if avg <= 50 and variance <= 500:
            return 60.0
        if avg <= 100:
            return 40.0
        return 20.0

    if role == Role.REASON:
        if 8 <= avg <= 80:
            return 70.0
        if 3 <= avg < 8:
            return 45.0
        if avg > 80:
            return 40.0
        return 15.0

    if role == Role.CLASS_LABEL:
        if avg <= 4 and variance <= 1:
            return 90.0
        if avg <= 8 and variance <= 4:
            return 70.0
        if avg <= 15:
            return 35.0
        return 5.0

    if role == Role.PERSON_NAME:
        if 2 <= avg <= 8 and variance <= 4:
            return 85.0
        if 2 <= avg <= 12 and variance <= 10:
            return 65.0
        if avg <= 20:
            return 30.0
        return 5.0

    raise ValueError(f"Unknown role: {role!r}")


def score_linguistic(samples: Sequence[str], role: Role) -> float:
    """Score a role from keyword and phrase cues in the sample text.

    Args:
        samples: Column sample strings.
        role: Target role.

    Returns:
        Sum of the points of every matching rule, capped at 100.
    """
    text = joined_text(samples)
    if not text:
        return 0.0

    score = 0.0
    for pattern, points in LINGUISTIC_RULES[role]:
        if pattern.search(text):
            score += points
    return _clamp(score)


def score_keyword_density(samples: Sequence[str], role: Role) -> float:
    """Three points per distinct role keyword found, capped at 15."""
    text = joined_text(samples)
    if not text:
        return 0.0

    found = sum(1 for keyword in ROLE_KEYWORDS[role] if keyword in text)
    return min(KEYWORD_CAP, KEYWORD_POINTS * found)


def uniqueness_ratio(samples: Sequence[str]) -> float:
    """Distinct samples divided by sample count."""
    values = _non_empty(samples)
    if not values:
        return 0.0
    return len(set(values)) / len(values)


def score_semantic(samples: Sequence[str], role: Role) -> float:
    """Score a role from uniqueness, length uniformity and content probes.

    High scores for:
    - answer/reason: mostly distinct, longer, varied free text
    - class: repeating, uniform, digit-bearing labels
    - name: distinct, short, uniform, digit-free values

    Args:
        samples: Column sample strings.
        role: Target role.

    Returns:
        Score between 0 and 100; 0 when there are no samples.
    """
    values = _non_empty(samples)
    if not values:
        return 0.0

    uniqueness = uniqueness_ratio(values)
    avg, variance = length_statistics(values)
    std = float(np.sqrt(variance))
    text = joined_text(values)
    has_digit = bool(DIGIT_PATTERN.search(text))

    score = 0.0

    if role == Role.ANSWER:
        if uniqueness >= 0.9:
            score += 40
        elif uniqueness >= 0.7:
            score += 25
        else:
            score += 10
        score += 20 if std > 5 else 5
        if avg > 15:
            score += 20
        if QUESTION_MARK_PATTERN.search(text):
            score += 10

    elif role == Role.REASON:
        if uniqueness >= 0.9:
            score += 35
        elif uniqueness >= 0.7:
            score += 20
        else:
            score += 5
        if avg > 10:
            score += 25
        if CAUSAL_PATTERN.search(text):
            score += 20

    elif role == Role.CLASS_LABEL:
        if uniqueness <= 0.5:
            score += 40
        elif uniqueness <= 0.8:
            score += 25
        else:
            score += 10
        if std <= 1:
            score += 25
        if has_digit:
            score += 20

    elif role == Role.PERSON_NAME:
        if uniqueness >= 0.9:
            score += 35
        elif uniqueness >= 0.7:
            score += 20
        else:
            score += 5
        if std <= 2:
            score += 25
        if 2 <= avg <= 10:
            score += 20
        if not has_digit:
            score += 10

    else:
        raise ValueError(f"Unknown role: {role!r}")

    score += score_keyword_density(values, role)
    return _clamp(score)
