"""
oraculo/models/collapse_selector.py
"Quantum collapse" digit selection: score every digit 0-9 into a resistance
value, rank them, then draw one from an entropy-sized window at the top.
"""
from __future__ import annotations

import math
from typing import Any, Sequence

import numpy as np

from oraculo.models.records import CombinedAnalysis, HitRecord
from oraculo.utils.config import get_collapse_params
from oraculo.utils.logger import get_logger

log = get_logger("model.collapse")


def check_entropy(entropy: float) -> None:
    if not math.isfinite(entropy):
        raise ValueError(f"Entropy must be finite, got {entropy}")
    if entropy == -1:
        raise ValueError("Entropy of -1 zeroes the resonance divisor")


class CollapseSelector:
    """
    Resistance per digit (lower = stronger candidate):

        resonance  = global * w_global + column[pos] * w_column
                     + first_prize * w_first_prize      (rank 1 only)
                     + hits_at_rank_containing_digit * w_hit
                     - penalty * (1 - entropy)           (digit already used)
        resistance = base - resonance / (1 + entropy)

    Ranking is deterministic; only the draw inside the window uses `rng`.
    Entropy is not clamped, but it must be finite and != -1; anything else
    raises ValueError.
    """

    def __init__(self, params: dict[str, Any] | None = None, rng: np.random.Generator | None = None):
        params = params or get_collapse_params()
        self.base_resistance = params["base_resistance"]
        w = params["weights"]
        self.w_global = w["global"]
        self.w_column = w["column"]
        self.w_first_prize = w["first_prize"]
        self.w_hit = w["hit"]
        self.repetition_penalty = params["repetition_penalty"]
        self.window_scale = params["window_scale"]
        self.rng = rng if rng is not None else np.random.default_rng()

    # ── Scoring ───────────────────────────────────────────────────

    def get_resonance(
        self,
        analysis: CombinedAnalysis,
        hits: Sequence[HitRecord],
        entropy: float,
        pos: int,
        rank: int,
        previous_digits: Sequence[int] = (),
    ) -> dict[int, float]:
        inp = analysis.input_analysis
        column = inp.col_digit_freq[pos] if 0 <= pos < len(inp.col_digit_freq) else {}
        rank_hits = [h for h in hits if h.position == rank and h.is_hit]

        resonance: dict[int, float] = {}
        for digit in range(10):
            score = inp.global_digit_freq.get(digit, 0) * self.w_global
            score += column.get(digit, 0) * self.w_column
            if rank == 1:
                score += inp.first_prize_freq.get(digit, 0) * self.w_first_prize

            hit_count = sum(1 for h in rank_hits if str(digit) in h.value)
            score += hit_count * self.w_hit

            # Lower entropy punishes repeats within the same sequence harder
            if digit in previous_digits:
                score -= self.repetition_penalty * (1 - entropy)
            resonance[digit] = score
        return resonance

    def get_resistance(
        self,
        analysis: CombinedAnalysis,
        hits: Sequence[HitRecord],
        entropy: float,
        pos: int,
        rank: int,
        previous_digits: Sequence[int] = (),
    ) -> dict[int, float]:
        check_entropy(entropy)
        resonance = self.get_resonance(analysis, hits, entropy, pos, rank, previous_digits)
        return {d: self.base_resistance - r / (1 + entropy) for d, r in resonance.items()}

    @staticmethod
    def rank_digits(resistance: dict[int, float]) -> list[int]:
        """Digits by ascending resistance; ties keep digit order."""
        return sorted(resistance, key=lambda d: resistance[d])

    def window_size(self, entropy: float) -> int:
        check_entropy(entropy)
        return max(1, math.floor(entropy * self.window_scale))

    # ── Selection ─────────────────────────────────────────────────

    def select(
        self,
        analysis: CombinedAnalysis,
        hits: Sequence[HitRecord],
        entropy: float,
        pos: int,
        rank: int,
        previous_digits: Sequence[int] = (),
    ) -> int:
        resistance = self.get_resistance(analysis, hits, entropy, pos, rank, previous_digits)
        ranked = self.rank_digits(resistance)
        window = self.window_size(entropy)
        idx = int(self.rng.integers(0, window))
        if not 0 <= idx < len(ranked):
            log.debug(f"Draw index {idx} outside ranking (window={window}), using top digit")
            return ranked[0]
        return ranked[idx]

    def collapse_sequence(
        self,
        analysis: CombinedAnalysis,
        hits: Sequence[HitRecord],
        entropy: float,
        rank: int,
        length: int = 4,
    ) -> tuple[int, ...]:
        """Select `length` digits left to right, each seeing the ones before it."""
        seq: list[int] = []
        for pos in range(length):
            seq.append(self.select(analysis, hits, entropy, pos, rank, seq))
        return tuple(seq)
