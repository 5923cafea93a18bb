"""Core type definitions for Rolesculpt."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from typing import Any

import numpy as np


class Role(str, Enum):
    """Semantic roles a column can play in a response sheet."""

    ANSWER = "answer"
    REASON = "reason"
    CLASS_LABEL = "class"
    PERSON_NAME = "name"


class EnsembleStrategy(str, Enum):
    """Ways of combining per-scorer streams into one ensemble score."""

    WEIGHTED = "weighted"
    PROPORTIONAL = "proportional"


@dataclass(frozen=True)
class Column:
    """A header plus the usable sample values found beneath it."""

    index: int
    header: str
    samples: tuple[str, ...] = ()

    @property
    def normalized_header(self) -> str:
        return self.header.strip().lower()


@dataclass
class ScoreCard:
    """Component and combined scores for one (column, role) pair."""

    column_index: int
    role: Role
    header_score: float = 0.0
    content_score: float = 0.0
    linguistic_score: float = 0.0
    context_score: float = 0.0
    semantic_score: float = 0.0
    advanced_score: float = 0.0
    ensemble_score: float = 0.0


@dataclass(frozen=True)
class FeatureVector:
    """Fixed 15-dimensional summary of a column's sample values."""

    # Length moments
    avg_length: float = 0.0
    std_length: float = 0.0
    skewness: float = 0.0
    kurtosis: float = 0.0

    # Script ratios
    hiragana_ratio: float = 0.0
    katakana_ratio: float = 0.0
    kanji_ratio: float = 0.0
    alphanumeric_ratio: float = 0.0

    # Information measures
    char_entropy: float = 0.0
    bigram_entropy: float = 0.0
    mutual_information: float = 0.0

    # Pattern densities
    question_density: float = 0.0
    reasoning_density: float = 0.0

    # Domain pattern scores
    name_pattern_score: float = 0.0
    class_pattern_score: float = 0.0

    @classmethod
    def zeros(cls) -> FeatureVector:
        return cls()

    def as_array(self) -> np.ndarray:
        """Return the features as a float array in declaration order."""
        return np.array([getattr(self, f.name) for f in fields(self)], dtype=float)


@dataclass
class OrderValidation:
    """Outcome of the answer-before-reason ordering check."""

    checks: list[dict[str, Any]] = field(default_factory=list)
    corrections: list[dict[str, Any]] = field(default_factory=list)
    warnings: list[dict[str, Any]] = field(default_factory=list)


@dataclass
class ClassificationResult:
    """Final role mapping with per-role confidence.

    ``confidence`` may carry diagnostic entries for roles that are absent
    from ``mapping``; only mapped roles cleared the acceptance threshold.
    """

    mapping: dict[Role, int] = field(default_factory=dict)
    confidence: dict[Role, float] = field(default_factory=dict)
    validation: OrderValidation = field(default_factory=OrderValidation)

    @property
    def resolved_fields(self) -> int:
        return len(self.mapping)

    @property
    def overall_score(self) -> int:
        """Rounded mean confidence of the mapped roles."""
        if not self.mapping:
            return 0
        total = sum(self.confidence.get(role, 0.0) for role in self.mapping)
        return round(total / len(self.mapping))

    def to_dict(self) -> dict[str, Any]:
        return {
            "mapping": {role.value: index for role, index in self.mapping.items()},
            "confidence": {
                role.value: value for role, value in self.confidence.items()
            },
            "validation": asdict(self.validation),
        }


# Weight rows are (header, content, linguistic, context, semantic)
DEFAULT_WEIGHT_TIERS: tuple[tuple[float, tuple[float, ...]], ...] = (
    (90.0, (0.5, 0.2, 0.15, 0.1, 0.05)),
    (70.0, (0.4, 0.25, 0.2, 0.1, 0.05)),
    (0.0, (0.3, 0.3, 0.25, 0.1, 0.05)),
)


@dataclass(frozen=True)
class ClassifierConfig:
    """Configuration for classification behavior."""

    # Assignment thresholds
    greedy_threshold: float = 75.0
    acceptance_threshold: float = 60.0
    fallback_pass: bool = True
    swap_margin: float = 5.0
    max_swap_iterations: int = 10

    # Ensemble combination, tiers keyed by minimum header score (descending)
    strategy: EnsembleStrategy = EnsembleStrategy.WEIGHTED
    weight_tiers: tuple[tuple[float, tuple[float, ...]], ...] = DEFAULT_WEIGHT_TIERS

    # Answer/reason ordering check
    validate_order: bool = True
    order_confidence_gap: float = 10.0

    # Rows taken from a DataFrame
    sample_size: int = 10

    def __post_init__(self) -> None:
        if not 0.0 <= self.acceptance_threshold <= self.greedy_threshold <= 100.0:
            raise ValueError(
                "Thresholds must satisfy 0 <= acceptance <= greedy <= 100, got "
                f"{self.acceptance_threshold} and {self.greedy_threshold}"
            )
        if self.max_swap_iterations < 0:
            raise ValueError("max_swap_iterations must be non-negative")
        if self.sample_size < 1:
            raise ValueError("sample_size must be at least 1")
        if not self.weight_tiers:
            raise ValueError("weight_tiers must not be empty")
        for minimum, weights in self.weight_tiers:
            if len(weights) != 5:
                raise ValueError(
                    f"Weight tier {minimum} needs 5 weights, got {len(weights)}"
                )
            if abs(sum(weights) - 1.0) > 1e-9:
                raise ValueError(f"Weight tier {minimum} does not sum to 1")

    def weights_for(self, header_score: float) -> tuple[float, ...]:
        """Pick the weight row for a header score."""
        for minimum, weights in self.weight_tiers:
            if header_score >= minimum:
                return weights
        return self.weight_tiers[-1][1]
