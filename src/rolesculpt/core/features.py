"""Feature vector extraction and feature-based role scoring.

The vector summarizes a column's samples with length moments, script
ratios, entropy measures and pattern densities. The classifier turns it
into a per-role score using fixed empirical thresholds.
"""

from __future__ import annotations

import math
from collections import Counter
from typing import TYPE_CHECKING

import numpy as np

from rolesculpt.core.patterns import (
    BARE_DIGITS_PATTERN,
    BARE_LETTERS_PATTERN,
    DIGIT_LETTER_CLASS_PATTERN,
    KANA_KANJI_NAME_PATTERN,
    LATIN_NAME_PATTERN,
    QUESTION_MARK_PATTERN,
    REASONING_WORD_PATTERN,
    SPACED_KANA_KANJI_NAME_PATTERN,
    YEAR_GROUP_CLASS_PATTERN,
)
from rolesculpt.core.types import FeatureVector, Role

if TYPE_CHECKING:
    from collections.abc import Sequence


def _is_hiragana(char: str) -> bool:
    return "\u3040" <= char <= "\u309f"


def _is_katakana(char: str) -> bool:
    return "\u30a0" <= char <= "\u30ff"


def _is_kanji(char: str) -> bool:
    return "\u4e00" <= char <= "\u9fff"


def _is_alphanumeric(char: str) -> bool:
    return char.isascii() and char.isalnum()


def length_moments(lengths: np.ndarray) -> tuple[float, float, float, float]:
    """Compute mean, population std, skewness and excess kurtosis.

    Skewness and kurtosis are 0 when the standard deviation is 0.
    """
    if lengths.size == 0:
        return 0.0, 0.0, 0.0, 0.0

    mean = float(lengths.mean())
    std = float(lengths.std())
    if std == 0.0:
        return mean, 0.0, 0.0, 0.0

    standardized = (lengths - mean) / std
    skewness = float(np.mean(standardized**3))
    kurtosis = float(np.mean(standardized**4)) - 3.0
    return mean, std, skewness, kurtosis


def script_ratios(text: str) -> tuple[float, float, float, float]:
    """Fractions of hiragana, katakana, kanji and ASCII alphanumerics.

    Other characters count toward the total only.
    """
    total = len(text)
    if total == 0:
        return 0.0, 0.0, 0.0, 0.0

    hiragana = sum(1 for c in text if _is_hiragana(c))
    katakana = sum(1 for c in text if _is_katakana(c))
    kanji = sum(1 for c in text if _is_kanji(c))
    alnum = sum(1 for c in text if _is_alphanumeric(c))
    return hiragana / total, katakana / total, kanji / total, alnum / total


def shannon_entropy(text: str) -> float:
    """Shannon entropy of the character distribution in bits per char."""
    if not text:
        return 0.0

    counts = np.array(list(Counter(text).values()), dtype=float)
    probabilities = counts / counts.sum()
    return float(-np.sum(probabilities * np.log2(probabilities)))


def bigram_entropy(samples: Sequence[str]) -> float:
    """Conditional entropy H(next char | current char) over all samples.

    Bigrams never cross sample boundaries.
    """
    bigrams: Counter[tuple[str, str]] = Counter()
    heads: Counter[str] = Counter()
    for sample in samples:
        for current, following in zip(sample, sample[1:]):
            bigrams[(current, following)] += 1
            heads[current] += 1

    total = sum(bigrams.values())
    if total == 0:
        return 0.0

    entropy = 0.0
    for (current, _following), count in bigrams.items():
        joint = count / total
        conditional = count / heads[current]
        entropy -= joint * math.log2(conditional)
    return entropy


def mutual_information_proxy(samples: Sequence[str], mean_length: float) -> float:
    """Average of log2(distinct chars / (|len - mean| + 1)) per sample."""
    if not samples:
        return 0.0

    values = [
        math.log2(len(set(sample)) / (abs(len(sample) - mean_length) + 1))
        for sample in samples
    ]
    return float(np.mean(values))


def name_pattern_score(samples: Sequence[str]) -> float:
    """Average name-likeness weight of the samples.

    - 2-4 kana/kanji characters: 1.0
    - two short kana/kanji tokens separated by a space: 0.9
    - "Capitalized Capitalized": 0.8
    """
    if not samples:
        return 0.0

    total = 0.0
    for sample in samples:
        if KANA_KANJI_NAME_PATTERN.fullmatch(sample):
            total += 1.0
        elif SPACED_KANA_KANJI_NAME_PATTERN.fullmatch(sample):
            total += 0.9
        elif LATIN_NAME_PATTERN.fullmatch(sample):
            total += 0.8
    return total / len(samples)


def class_pattern_score(samples: Sequence[str]) -> float:
    """Average class-label-likeness weight of the samples.

    - digits followed by a letter or 組 ("1A", "2-B", "3組"): 1.0
    - grade + group ("1年A組", "2年3組"): 0.9
    - 1-2 bare digits: 0.7
    - 1-2 bare letters: 0.6
    """
    if not samples:
        return 0.0

    total = 0.0
    for sample in samples:
        if DIGIT_LETTER_CLASS_PATTERN.fullmatch(sample):
            total += 1.0
        elif YEAR_GROUP_CLASS_PATTERN.fullmatch(sample):
            total += 0.9
        elif BARE_DIGITS_PATTERN.fullmatch(sample):
            total += 0.7
        elif BARE_LETTERS_PATTERN.fullmatch(sample):
            total += 0.6
    return total / len(samples)


def extract_features(samples: Sequence[str]) -> FeatureVector:
    """Reduce a column's samples to its feature vector.

    Args:
        samples: Sample strings; empty entries are ignored.

    Returns:
        FeatureVector, all zeros when no sample is non-empty.
    """
    values = [s for s in samples if s]
    if not values:
        return FeatureVector.zeros()

    lengths = np.array([len(s) for s in values], dtype=float)
    avg_length, std_length, skewness, kurtosis = length_moments(lengths)

    text = "".join(values)
    total_chars = len(text)
    hiragana, katakana, kanji, alnum = script_ratios(text)

    question_matches = sum(len(QUESTION_MARK_PATTERN.findall(s)) for s in values)
    reasoning_matches = sum(len(REASONING_WORD_PATTERN.findall(s)) for s in values)

    return FeatureVector(
        avg_length=avg_length,
        std_length=std_length,
        skewness=skewness,
        kurtosis=kurtosis,
        hiragana_ratio=hiragana,
        katakana_ratio=katakana,
        kanji_ratio=kanji,
        alphanumeric_ratio=alnum,
        char_entropy=shannon_entropy(text),
        bigram_entropy=bigram_entropy(values),
        mutual_information=mutual_information_proxy(values, avg_length),
        question_density=question_matches / total_chars,
        reasoning_density=reasoning_matches / total_chars,
        name_pattern_score=name_pattern_score(values),
        class_pattern_score=class_pattern_score(values),
    )


def classify_features(features: FeatureVector, role: Role) -> float:
    """Score a role from the feature vector alone.

    Only the rule block of the requested role is evaluated.

    Args:
        features: Column feature vector.
        role: Target role.

    Returns:
        One of 0, 85, 88, 92 or 95.
    """
    f = features

    if role == Role.PERSON_NAME:
        if (
            f.name_pattern_score > 0.6
            and 2 <= f.avg_length <= 8
            and f.kanji_ratio + f.hiragana_ratio > 0.7
        ):
            return 95.0
        if f.name_pattern_score > 0.5 and f.avg_length <= 12:
            return 88.0
        return 0.0

    if role == Role.CLASS_LABEL:
        if f.class_pattern_score > 0.7 and f.avg_length <= 6:
            return 95.0
        if f.class_pattern_score > 0.5 and f.alphanumeric_ratio > 0.5:
            return 88.0
        return 0.0

    if role == Role.REASON:
        if f.reasoning_density > 0.01 and f.avg_length > 10:
            return 92.0
        if f.reasoning_density > 0.005 and f.char_entropy > 3.5:
            return 85.0
        return 0.0

    if role == Role.ANSWER:
        if f.avg_length > 15 and f.char_entropy > 4.0 and f.question_density > 0.005:
            return 95.0
        if f.avg_length > 15 and f.char_entropy > 4.0:
            return 88.0
        if f.avg_length > 10 and f.std_length > 3:
            return 85.0
        return 0.0

    raise ValueError(f"Unknown role: {role!r}")
