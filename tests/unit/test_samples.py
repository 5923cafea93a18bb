"""Unit tests for column construction from raw rows."""

from __future__ import annotations

import math

import numpy as np
import pytest

from rolesculpt.core.samples import (
    build_columns,
    build_frame,
    coerce_cell,
    competing_columns,
    is_system_header,
    normalize_header,
)
from rolesculpt.core.types import Column


class TestCoerceCell:
    """Tests for coerce_cell."""

    def test_strings_are_trimmed(self) -> None:
        assert coerce_cell("  回答  ") == "回答"

    @pytest.mark.parametrize("value", ["", "   ", None, True, False, object()])
    def test_unusable_cells(self, value: object) -> None:
        assert coerce_cell(value) is None

    def test_numbers_become_strings(self) -> None:
        assert coerce_cell(3) == "3"
        assert coerce_cell(3.0) == "3"
        assert coerce_cell(2.5) == "2.5"
        assert coerce_cell(np.int64(4)) == "4"

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_non_finite_numbers(self, value: float) -> None:
        assert coerce_cell(value) is None


class TestHeaders:
    """Tests for header helpers."""

    def test_normalize_header(self) -> None:
        assert normalize_header(" 名前 ") == "名前"
        assert normalize_header(None) == ""
        assert normalize_header(42) == ""

    @pytest.mark.parametrize(
        "header", ["タイムスタンプ", "Timestamp", "いいね", "LIKE", "_row_id", "日付"]
    )
    def test_system_headers(self, header: str) -> None:
        assert is_system_header(header)

    @pytest.mark.parametrize("header", ["回答", "like this", "", "名前"])
    def test_regular_headers(self, header: str) -> None:
        assert not is_system_header(header)


class TestBuildColumns:
    """Tests for build_frame and build_columns."""

    def test_ragged_rows_are_aligned(self) -> None:
        """Short rows are padded and extra cells dropped."""
        columns = build_columns(["h1", "h2"], [["a"], ["b", "c", "d"]])
        assert columns == [
            Column(index=0, header="h1", samples=("a", "b")),
            Column(index=1, header="h2", samples=("c",)),
        ]

    def test_malformed_rows_are_skipped(self) -> None:
        columns = build_columns(["h1"], ["oops", ["x"], None, ("y",)])
        assert columns[0].samples == ("x", "y")

    def test_samples_not_deduplicated(self) -> None:
        columns = build_columns(["クラス"], [["1A"], ["1A"], [" 1A "]])
        assert columns[0].samples == ("1A", "1A", "1A")

    def test_mixed_cell_types(self) -> None:
        columns = build_columns(["番号"], [[1], [2.0], [True], [None], [""]])
        assert columns[0].samples == ("1", "2")

    def test_no_usable_rows(self) -> None:
        frame = build_frame(["a", "b"], ["bad"])
        assert list(frame.columns) == [0, 1]
        assert len(frame) == 0
        columns = build_columns(["a", "b"], ["bad"])
        assert [c.samples for c in columns] == [(), ()]

    def test_blank_headers_kept_as_empty(self) -> None:
        columns = build_columns([None, "回答"], [["x", "y"]])
        assert columns[0].header == ""
        assert columns[0].samples == ("x",)

    def test_caller_rows_not_mutated(self) -> None:
        rows = [[" a ", 1]]
        build_columns(["h1", "h2"], rows)
        assert rows == [[" a ", 1]]


class TestCompetingColumns:
    """Tests for competing_columns."""

    def test_drops_blank_and_system_columns(self) -> None:
        columns = [
            Column(index=0, header="タイムスタンプ"),
            Column(index=1, header=""),
            Column(index=2, header="回答"),
            Column(index=3, header="いいね"),
        ]
        assert [c.index for c in competing_columns(columns)] == [2]
