"""Ensemble scoring: combine per-scorer streams into one score per role."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rolesculpt.core.content import score_content, score_linguistic, score_semantic
from rolesculpt.core.context import score_context
from rolesculpt.core.features import classify_features, extract_features
from rolesculpt.core.headers import score_header
from rolesculpt.core.types import (
    ClassifierConfig,
    EnsembleStrategy,
    FeatureVector,
    Role,
    ScoreCard,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rolesculpt.core.types import Column


def _clamp(value: float) -> float:
    """Clamp value to 0-100 range."""
    return max(0.0, min(100.0, value))


def weighted_score(card: ScoreCard, config: ClassifierConfig) -> float:
    """Five-term weighted sum with weights picked by the header tier."""
    w_header, w_content, w_linguistic, w_context, w_semantic = config.weights_for(
        card.header_score
    )
    total = (
        w_header * card.header_score
        + w_content * card.content_score
        + w_linguistic * card.linguistic_score
        + w_context * card.context_score
        + w_semantic * card.semantic_score
    )
    return _clamp(total)


def proportional_score(card: ScoreCard) -> float:
    """Average header, content and advanced streams weighted by their own size.

    Each stream's weight is its score over the stream total, so the
    strongest signal dominates.
    """
    streams = (card.header_score, card.content_score, card.advanced_score)
    total = sum(streams)
    if total <= 0:
        return 0.0
    return _clamp(sum(s * s for s in streams) / total)


def calibration_factor(role: Role, features: FeatureVector) -> float:
    """Fixed multiplier for strong role-specific feature evidence."""
    if role == Role.PERSON_NAME and features.name_pattern_score > 0.8:
        return 1.10
    if role == Role.CLASS_LABEL and features.class_pattern_score > 0.7:
        return 1.08
    if role == Role.ANSWER and features.char_entropy > 4.0:
        return 1.05
    return 1.0


def calibrate(score: float, role: Role, features: FeatureVector) -> float:
    """Apply the calibration multiplier and clamp to 100."""
    return _clamp(score * calibration_factor(role, features))


def score_pair(
    column: Column,
    headers: Sequence[str | None],
    role: Role,
    features: FeatureVector,
    config: ClassifierConfig | None = None,
) -> ScoreCard:
    """Compute every component score and the ensemble score for one pair.

    Args:
        column: Column being scored.
        headers: All headers of the sheet, for positional context.
        role: Target role.
        features: Precomputed feature vector of the column.
        config: Optional classifier configuration.

    Returns:
        ScoreCard with all components clamped to 0-100.
    """
    if config is None:
        config = ClassifierConfig()

    samples = column.samples
    card = ScoreCard(
        column_index=column.index,
        role=role,
        header_score=_clamp(score_header(column.header, role)),
        content_score=_clamp(score_content(samples, role)),
        linguistic_score=_clamp(score_linguistic(samples, role)),
        context_score=_clamp(score_context(column.index, headers, role)),
        semantic_score=_clamp(score_semantic(samples, role)),
        advanced_score=_clamp(classify_features(features, role)),
    )

    if config.strategy == EnsembleStrategy.PROPORTIONAL:
        combined = proportional_score(card)
    else:
        combined = weighted_score(card, config)

    card.ensemble_score = calibrate(combined, role, features)
    return card


def score_column(
    column: Column,
    headers: Sequence[str | None],
    config: ClassifierConfig | None = None,
) -> dict[Role, ScoreCard]:
    """Score a column for every role.

    Columns with a blank header score 0 for every role.
    """
    if not column.header:
        return {role: ScoreCard(column_index=column.index, role=role) for role in Role}

    features = extract_features(column.samples)
    return {
        role: score_pair(column, headers, role, features, config) for role in Role
    }
