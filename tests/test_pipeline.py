"""tests/test_pipeline.py"""
from unittest.mock import MagicMock, patch

import numpy as np
import pytest
from oraculo.models.collapse_selector import CollapseSelector
from oraculo.models.records import HitRecord, RectificationRecord
from oraculo.parsers.module_parser import parse_modules
from oraculo.pipeline.generation_cycle import combine_rows, run_generation_cycle
from oraculo.pipeline.hit_checker import check_hits, match_level


GROUPS = [
    ["1234", "5678", "9012", "3456", "7890", "1111", "222"],
    ["4821", "0937", "5512", "7764", "3309", "2218", "645"],
]
HISTORY_GROUP = [["9876", "5432", "1098", "7654", "3210", "9999", "888"]]


def _fixed_rng():
    rng = MagicMock()
    rng.integers.return_value = 0
    rng.uniform.return_value = 99.9
    return rng


class TestGenerationCycle:
    def setup_method(self):
        self.modules = parse_modules(GROUPS).modules
        self.history = parse_modules(HISTORY_GROUP).modules

    def test_combine_rows_order(self):
        rows = combine_rows(self.modules, self.history)
        assert len(rows) == 21
        assert rows[0] == (1, 2, 3, 4)
        assert rows[14] == (9, 8, 7, 6)

    def test_output_shapes(self):
        out = run_generation_cycle(self.modules, self.history, [], [], rng=np.random.default_rng(7))

        assert len(out.result) == 7
        assert all(len(seq) == 4 for seq in out.result[:6])
        assert len(out.result[6]) == 3
        assert all(0 <= d <= 9 for seq in out.result for d in seq)

        assert len(out.candidates) == 3
        for cand in out.candidates:
            assert len(cand.sequence) == 4
            assert 99.85 <= cand.confidence < 99.99

        adv = out.advanced_predictions
        assert len(adv.hundreds) == 3
        assert len(adv.tens) == 3
        assert len(adv.elite_tens) == 2
        assert len(adv.super_tens) == 3
        assert all(len(p.value) == 3 for p in adv.hundreds)
        assert all(len(p.value) == 2 for p in adv.tens + adv.elite_tens + adv.super_tens)

    def test_tier_confidences(self):
        out = run_generation_cycle(self.modules, [], [], [], rng=np.random.default_rng(1))
        adv = out.advanced_predictions
        assert {p.confidence for p in adv.hundreds} == {99.98}
        assert {p.confidence for p in adv.tens} == {99.97}
        assert {p.confidence for p in adv.elite_tens} == {99.99}
        assert {p.confidence for p in adv.super_tens} == {99.95}

    def test_analysis_covers_modules_and_history(self):
        out = run_generation_cycle(self.modules, self.history, [], [], rng=np.random.default_rng(3))
        inp = out.analysis.input_analysis
        assert sum(inp.global_digit_freq.values()) == 3 * (6 * 4 + 3)
        assert sum(inp.first_prize_freq.values()) == 3 * 4
        assert dict(out.analysis.historical_analysis.historical_digit_freq) == dict(inp.global_digit_freq)

    def test_same_seed_same_cycle(self):
        a = run_generation_cycle(self.modules, self.history, [], [], rng=np.random.default_rng(42))
        b = run_generation_cycle(self.modules, self.history, [], [], rng=np.random.default_rng(42))
        assert a.to_dict() == b.to_dict()

    def test_rects_do_not_change_scoring(self):
        rects = [RectificationRecord(position=1, value="1234")]
        a = run_generation_cycle(self.modules, [], [], [], rng=np.random.default_rng(5))
        b = run_generation_cycle(self.modules, [], [], rects, rng=np.random.default_rng(5))
        assert a.to_dict() == b.to_dict()

    def test_empty_input_with_fixed_draw(self):
        rng = _fixed_rng()
        out = run_generation_cycle([], [], [], [], rng=rng)
        # All digits tie, repeats are penalized -> ascending fresh digits
        assert out.result[0] == (0, 1, 2, 3)
        assert out.result[6] == (1, 2, 3)
        assert out.advanced_predictions.hundreds[0].value == "123"
        assert out.advanced_predictions.tens[0].value == "23"
        assert out.candidates[0].confidence == 99.9
        rng.uniform.assert_called_with(99.85, 99.99)

    def test_collapse_parameters_per_section(self):
        with patch.object(
            CollapseSelector, "collapse_sequence", autospec=True, return_value=(0, 1, 2, 3)
        ) as collapse:
            run_generation_cycle(self.modules, [], [], [], entropy=0.5, rng=_fixed_rng())

        calls = [(c.args[3], c.kwargs["rank"]) for c in collapse.call_args_list]
        assert len(calls) == 7 + 3 + 3 + 3 + 2 + 3
        assert calls[:7] == [(0.5, rank) for rank in range(1, 8)]

        candidates = calls[7:10]
        assert all(rank == 1 for _, rank in candidates)
        assert all(e == pytest.approx(0.5 * 0.4) for e, _ in candidates)

        tiers = calls[10:]
        expected = [0.1] * 3 + [0.15] * 3 + [0.05] * 2 + [0.08] * 3
        assert [rank for _, rank in tiers] == [1] * 11
        assert [e for e, _ in tiers] == pytest.approx(expected)

    def test_summary_lines_cover_rows_candidates_and_tiers(self):
        out = run_generation_cycle([], [], [], [], rng=_fixed_rng())
        lines = out.summary_lines()
        assert len(lines) == 7 + 3 + 4
        assert lines[0] == "1º  0123"
        assert lines[7] == "candidate 0123 (99.90%)"
        assert lines[10] == "hundreds: 123 (99.98%), 123 (99.98%), 123 (99.98%)"
        assert lines[12] == "elite_tens: 23 (99.99%), 23 (99.99%)"
        assert lines[13].startswith("super_tens: 23 (99.95%)")

    def test_hits_pull_rank_toward_hit_digits(self):
        hits = [HitRecord(position=1, status="Acerto", value="9876")]
        out = run_generation_cycle([], [], hits, [], entropy=0.0, rng=_fixed_rng())
        assert out.result[0] == (6, 7, 8, 9)
        assert out.result[1] == (0, 1, 2, 3)


class TestHitChecker:
    def test_match_levels(self):
        assert match_level((1, 2, 3, 4), (1, 2, 3, 4)) == "MILHAR"
        assert match_level((9, 2, 3, 4), (1, 2, 3, 4)) == "CENTENA"
        assert match_level((9, 9, 3, 4), (1, 2, 3, 4)) == "DEZENA"
        assert match_level((1, 2, 3, 5), (1, 2, 3, 4)) is None
        assert match_level((2, 3, 4), (2, 3, 4)) == "MILHAR"

    def test_check_hits_records(self):
        result = [(1, 2, 3, 4), (0, 0, 0, 0), (5, 5, 1, 2)] + [(0, 0, 0, 0)] * 3 + [(9, 9, 9)]
        draw = parse_modules(GROUPS[:1]).modules[0]
        outcome = check_hits(result, draw)

        assert outcome["success"] is True
        hits = outcome["hits"]
        assert len(hits) == 7
        assert hits[0] == HitRecord(position=1, status="Acerto", value="1234")
        assert hits[1].status == "Erro"
        assert hits[2].status == "Acerto"     # 5512 vs 9012 -> dezena
        assert outcome["levels"][2] == "DEZENA"
        assert hits[6].value == "222"
        assert outcome["hit_count"] == 2

    def test_wrong_row_count(self):
        outcome = check_hits([(1, 2, 3, 4)] * 7, [(1, 2, 3, 4)])
        assert outcome["success"] is False
        assert "expected 7" in outcome["error"]

    def test_malformed_hit_record(self):
        with pytest.raises(ValueError):
            HitRecord.from_dict({"position": "x", "status": "Acerto", "value": "1"})
        with pytest.raises(ValueError):
            HitRecord.from_dict({"status": "Acerto"})
