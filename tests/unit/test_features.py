"""Unit tests for the feature vector and feature-based role scoring."""

from __future__ import annotations

import dataclasses

import numpy as np
import pytest

from rolesculpt.core.features import (
    bigram_entropy,
    class_pattern_score,
    classify_features,
    extract_features,
    length_moments,
    mutual_information_proxy,
    name_pattern_score,
    script_ratios,
    shannon_entropy,
)
from rolesculpt.core.types import FeatureVector, Role


class TestExtractFeatures:
    """Tests for extract_features."""

    def test_empty_samples_give_zero_vector(self) -> None:
        """No samples yields the all-zero vector, never None."""
        features = extract_features([])
        assert features == FeatureVector.zeros()
        assert features.as_array().shape == (15,)
        assert not features.as_array().any()

    def test_blank_samples_are_ignored(self) -> None:
        assert extract_features(["", ""]) == FeatureVector.zeros()

    def test_vector_has_fifteen_features(self) -> None:
        assert len(dataclasses.fields(FeatureVector)) == 15

    def test_all_values_finite(self) -> None:
        """Degenerate inputs never produce NaN or infinity."""
        for samples in (["a"], ["aaaa", "aaaa"], ["?"], ["1A", "1A"]):
            values = extract_features(samples).as_array()
            assert np.isfinite(values).all()

    def test_pattern_densities(self) -> None:
        """Densities are matches per character across all samples."""
        features = extract_features(["what?", "why?"])
        assert features.question_density == pytest.approx(2 / 9)

        features = extract_features(["because"])
        assert features.reasoning_density == pytest.approx(1 / 7)

    def test_name_column(self) -> None:
        features = extract_features(["田中", "佐藤", "鈴木", "高橋"])
        assert features.avg_length == 2.0
        assert features.std_length == 0.0
        assert features.kanji_ratio == 1.0
        assert features.name_pattern_score == 1.0


class TestLengthMoments:
    """Tests for length_moments."""

    def test_constant_lengths(self) -> None:
        """Zero spread gives zero skewness and kurtosis."""
        assert length_moments(np.array([2.0, 2.0, 2.0])) == (2.0, 0.0, 0.0, 0.0)

    def test_symmetric_lengths(self) -> None:
        mean, std, skewness, kurtosis = length_moments(np.array([1.0, 2.0, 3.0]))
        assert mean == pytest.approx(2.0)
        assert std == pytest.approx(np.sqrt(2 / 3))
        assert skewness == pytest.approx(0.0)
        assert kurtosis == pytest.approx(-1.5)

    def test_empty(self) -> None:
        assert length_moments(np.array([])) == (0.0, 0.0, 0.0, 0.0)


class TestScriptRatios:
    """Tests for script_ratios."""

    def test_each_script_class(self) -> None:
        """Punctuation counts toward the total but no script."""
        hiragana, katakana, kanji, alnum = script_ratios("あア漢a!")
        assert hiragana == pytest.approx(0.2)
        assert katakana == pytest.approx(0.2)
        assert kanji == pytest.approx(0.2)
        assert alnum == pytest.approx(0.2)

    def test_empty_text(self) -> None:
        assert script_ratios("") == (0.0, 0.0, 0.0, 0.0)


class TestEntropy:
    """Tests for the information measures."""

    def test_shannon_entropy(self) -> None:
        assert shannon_entropy("") == 0.0
        assert shannon_entropy("aaaa") == pytest.approx(0.0)
        assert shannon_entropy("abab") == pytest.approx(1.0)
        assert shannon_entropy("abcd") == pytest.approx(2.0)

    def test_bigram_entropy_deterministic_successor(self) -> None:
        assert bigram_entropy(["ab", "ab"]) == pytest.approx(0.0)

    def test_bigram_entropy_two_successors(self) -> None:
        assert bigram_entropy(["ab", "ac"]) == pytest.approx(1.0)

    def test_bigram_entropy_without_bigrams(self) -> None:
        assert bigram_entropy(["a", "b"]) == 0.0
        assert bigram_entropy([]) == 0.0

    def test_mutual_information_proxy(self) -> None:
        assert mutual_information_proxy(["ab", "ab"], 2.0) == pytest.approx(1.0)
        assert mutual_information_proxy([], 0.0) == 0.0


class TestDomainPatternScores:
    """Tests for name and class pattern scores."""

    def test_name_pattern_weights(self) -> None:
        samples = ["田中", "佐藤 花子", "John Smith", "1A"]
        assert name_pattern_score(samples) == pytest.approx((1.0 + 0.9 + 0.8) / 4)

    def test_class_pattern_weights(self) -> None:
        samples = ["1A", "1年2組", "3", "B", "hello"]
        assert class_pattern_score(samples) == pytest.approx((1.0 + 0.9 + 0.7 + 0.6) / 5)

    def test_group_suffix_counts_as_class(self) -> None:
        assert class_pattern_score(["3組", "2-B"]) == 1.0

    def test_empty(self) -> None:
        assert name_pattern_score([]) == 0.0
        assert class_pattern_score([]) == 0.0


class TestClassifyFeatures:
    """Tests for classify_features."""

    def test_name_rules(self) -> None:
        features = extract_features(["田中", "佐藤", "鈴木", "高橋"])
        assert classify_features(features, Role.PERSON_NAME) == 95.0

        loose = FeatureVector(name_pattern_score=0.55, avg_length=10.0)
        assert classify_features(loose, Role.PERSON_NAME) == 88.0

    def test_class_rules(self) -> None:
        features = extract_features(["1A", "1B", "2A"])
        assert classify_features(features, Role.CLASS_LABEL) == 95.0

        longer = FeatureVector(
            class_pattern_score=0.6, avg_length=9.0, alphanumeric_ratio=0.8
        )
        assert classify_features(longer, Role.CLASS_LABEL) == 88.0

    def test_reason_rules(self) -> None:
        features = extract_features(["雨が降ったので外で遊べなかったからです"])
        assert classify_features(features, Role.REASON) == 92.0

        sparse = FeatureVector(reasoning_density=0.008, char_entropy=3.8)
        assert classify_features(sparse, Role.REASON) == 85.0

    def test_answer_rules(self) -> None:
        asked = FeatureVector(avg_length=20.0, char_entropy=4.5, question_density=0.05)
        assert classify_features(asked, Role.ANSWER) == 95.0

        plain = FeatureVector(avg_length=20.0, char_entropy=4.5)
        assert classify_features(plain, Role.ANSWER) == 88.0

        varied = FeatureVector(avg_length=12.0, std_length=4.0)
        assert classify_features(varied, Role.ANSWER) == 85.0

    def test_zero_vector_scores_zero(self) -> None:
        """No rule fires on an empty column."""
        for role in Role:
            assert classify_features(FeatureVector.zeros(), role) == 0.0

    def test_only_requested_role_block_fires(self) -> None:
        """Name-like features do not earn a class score."""
        features = extract_features(["田中", "佐藤", "鈴木", "高橋"])
        assert classify_features(features, Role.CLASS_LABEL) == 0.0
