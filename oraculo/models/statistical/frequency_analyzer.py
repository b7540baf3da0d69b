"""
oraculo/models/statistical/frequency_analyzer.py
Row / column / global digit frequency tables for a data set.
"""
from __future__ import annotations

from collections import Counter
from typing import Any, Sequence

from oraculo.models.records import AnalysisResult, EvenOdd, freeze_counts
from oraculo.utils.config import get_analysis_params

DIGIT_RANGE = range(10)


def _zeroed() -> Counter:
    return Counter({d: 0 for d in DIGIT_RANGE})


class FrequencyAnalyzer:
    """Count digit occurrences across every non-empty row of a data set."""

    def __init__(self, params: dict[str, Any] | None = None):
        params = params or get_analysis_params()
        self.columns = params["columns"]
        self.head_interval = params["head_interval"]

    def is_head(self, row_idx: int) -> bool:
        """Head ("first prize") rows sit at indices 0, 7, 14, ..."""
        return row_idx % self.head_interval == 0

    def analyze(self, data_set: Sequence[Sequence[int] | None]) -> AnalysisResult:
        """
        Build a frozen AnalysisResult. Empty or missing rows are skipped but
        still occupy their index, so head detection follows the raw position.
        Digits past the configured columns count globally only.
        """
        global_freq = _zeroed()
        first_prize = _zeroed()
        col_freq = [_zeroed() for _ in range(self.columns)]
        row_sums: list[int] = []
        row_even_odd: list[EvenOdd] = []
        row_freq: list[Counter] = []
        evens = odds = 0

        for row_idx, row in enumerate(data_set):
            if not row:
                continue
            row_sums.append(sum(row))
            head = self.is_head(row_idx)
            this_row = _zeroed()
            row_evens = 0

            for col_idx, digit in enumerate(row):
                global_freq[digit] += 1
                this_row[digit] += 1
                if col_idx < self.columns:
                    col_freq[col_idx][digit] += 1
                if head:
                    first_prize[digit] += 1
                if digit % 2 == 0:
                    row_evens += 1

            evens += row_evens
            odds += len(row) - row_evens
            row_even_odd.append(EvenOdd(row_evens, len(row) - row_evens))
            row_freq.append(this_row)

        return AnalysisResult(
            row_sums=tuple(row_sums),
            row_even_odd=tuple(row_even_odd),
            row_digit_freq=tuple(freeze_counts(c) for c in row_freq),
            col_digit_freq=tuple(freeze_counts(c) for c in col_freq),
            global_digit_freq=freeze_counts(global_freq),
            first_prize_freq=freeze_counts(first_prize),
            total_even_odd=EvenOdd(evens, odds),
        )


def analyze_set(data_set: Sequence[Sequence[int] | None]) -> AnalysisResult:
    return FrequencyAnalyzer().analyze(data_set)
