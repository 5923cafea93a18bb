"""Unit tests for positional context scoring."""

from __future__ import annotations

from rolesculpt.core.context import relative_position, score_context
from rolesculpt.core.types import Role

FORM_HEADERS = ["タイムスタンプ", "メール", "クラス", "名前", "回答", "理由"]


class TestRelativePosition:
    """Tests for relative_position."""

    def test_single_column(self) -> None:
        assert relative_position(0, 1) == 0.0

    def test_middle_and_last(self) -> None:
        assert relative_position(2, 5) == 0.5
        assert relative_position(4, 5) == 1.0


class TestScoreContext:
    """Tests for score_context."""

    def test_reason_after_answer(self) -> None:
        """Last column directly after an answer header gets both bonuses."""
        assert score_context(5, FORM_HEADERS, Role.REASON) == 80.0

    def test_reason_without_answer_before(self) -> None:
        headers = ["タイムスタンプ", "メール", "クラス", "名前", "メモ", "理由"]
        assert score_context(5, headers, Role.REASON) == 40.0

    def test_answer_after_name(self) -> None:
        assert score_context(4, FORM_HEADERS, Role.ANSWER) == 60.0

    def test_name_after_class(self) -> None:
        assert score_context(3, FORM_HEADERS, Role.PERSON_NAME) == 60.0

    def test_class_near_front(self) -> None:
        assert score_context(2, FORM_HEADERS, Role.CLASS_LABEL) == 45.0
        assert score_context(5, FORM_HEADERS, Role.CLASS_LABEL) == 5.0

    def test_name_first_column(self) -> None:
        assert score_context(0, ["名前", "回答"], Role.PERSON_NAME) == 45.0

    def test_reason_first_column(self) -> None:
        assert score_context(0, ["理由", "回答", "メモ"], Role.REASON) == 5.0

    def test_blank_previous_header(self) -> None:
        """Missing neighbours give no bonus and no error."""
        assert score_context(1, [None, "理由"], Role.REASON) == 40.0

    def test_bounded(self) -> None:
        for role in Role:
            for index in range(len(FORM_HEADERS)):
                assert 0.0 <= score_context(index, FORM_HEADERS, role) <= 100.0
