"""
oraculo/pipeline/generation_cycle.py
One generation cycle: merge modules + history, analyze, then collapse the
7-row result, the top candidates and the four advanced prediction tiers.
"""
from __future__ import annotations

from typing import Any, Sequence

import numpy as np

from oraculo.models.collapse_selector import CollapseSelector
from oraculo.models.records import (
    AdvancedPredictions,
    Candidate,
    CombinedAnalysis,
    DataSet,
    DigitSequence,
    GenerationResult,
    HitRecord,
    RectificationRecord,
    TierPrediction,
)
from oraculo.models.statistical.frequency_analyzer import FrequencyAnalyzer
from oraculo.utils.config import TIER_NAMES, get_engine_config
from oraculo.utils.logger import get_logger

log = get_logger("pipeline.generator")


def combine_rows(modules: Sequence[DataSet], history: Sequence[DataSet]) -> DataSet:
    """Flatten modules followed by history into a single row list."""
    rows: DataSet = []
    for data_set in list(modules) + list(history):
        rows.extend(data_set)
    return rows


def _build_result(
    selector: CollapseSelector,
    analysis: CombinedAnalysis,
    hits: Sequence[HitRecord],
    entropy: float,
    gen: dict[str, Any],
) -> tuple[DigitSequence, ...]:
    n_rows = gen["result_rows"]
    lo, hi = gen["tail_slice"]
    rows: list[DigitSequence] = []
    for i in range(n_rows):
        seq = selector.collapse_sequence(analysis, hits, entropy, rank=i + 1, length=gen["sequence_length"])
        # The last row is the 3-digit tail
        rows.append(seq[lo:hi] if i == n_rows - 1 else seq)
        log.debug(f"rank {i + 1}: {''.join(map(str, rows[-1]))}")
    return tuple(rows)


def _build_candidates(
    selector: CollapseSelector,
    analysis: CombinedAnalysis,
    hits: Sequence[HitRecord],
    entropy: float,
    gen: dict[str, Any],
) -> tuple[Candidate, ...]:
    cfg = gen["candidates"]
    low, high = cfg["confidence_range"]
    candidates = []
    for _ in range(cfg["count"]):
        seq = selector.collapse_sequence(
            analysis, hits, entropy * cfg["entropy_factor"], rank=1, length=gen["sequence_length"]
        )
        confidence = float(selector.rng.uniform(low, high))
        candidates.append(Candidate(sequence=seq, confidence=confidence))
    return tuple(candidates)


def _build_tier(
    selector: CollapseSelector,
    analysis: CombinedAnalysis,
    hits: Sequence[HitRecord],
    tier: dict[str, Any],
    length: int,
) -> tuple[TierPrediction, ...]:
    lo, hi = tier["slice"]
    preds = []
    for _ in range(tier["count"]):
        seq = selector.collapse_sequence(analysis, hits, tier["entropy"], rank=1, length=length)
        preds.append(TierPrediction(value="".join(str(d) for d in seq[lo:hi]), confidence=tier["confidence"]))
    return tuple(preds)


def run_generation_cycle(
    modules: Sequence[DataSet],
    history: Sequence[DataSet],
    hits: Sequence[HitRecord],
    rects: Sequence[RectificationRecord],
    entropy: float = 0.5,
    rng: np.random.Generator | None = None,
    config: dict[str, Any] | None = None,
) -> GenerationResult:
    """
    Full cycle:
    1. Merge modules and history rows
    2. Analyze the merged set
    3. Collapse the result rows (rank 1..N, caller entropy)
    4. Collapse candidates (rank 1, scaled entropy) with a drawn confidence
    5. Collapse every advanced tier (rank 1, fixed tier entropy)

    `rects` are accepted and logged but do not influence scoring.
    """
    config = config or get_engine_config()
    gen = config["generation"]

    rows = combine_rows(modules, history)
    analyzer = FrequencyAnalyzer(config["analysis"])
    analysis = CombinedAnalysis.from_input(analyzer.analyze(rows))
    selector = CollapseSelector(config["collapse"], rng=rng)

    log.info(
        f"[CYCLE] rows={len(rows)} modules={len(modules)} history={len(history)} "
        f"hits={len(hits)} rects={len(rects)} entropy={entropy}"
    )

    result = _build_result(selector, analysis, hits, entropy, gen)
    candidates = _build_candidates(selector, analysis, hits, entropy, gen)
    tiers = {
        name: _build_tier(selector, analysis, hits, gen["tiers"][name], gen["sequence_length"])
        for name in TIER_NAMES
    }

    log.info(
        f"[CYCLE] result={[''.join(map(str, s)) for s in result]} "
        f"candidates={[''.join(map(str, c.sequence)) for c in candidates]}"
    )
    return GenerationResult(
        result=result,
        candidates=candidates,
        advanced_predictions=AdvancedPredictions(**tiers),
        analysis=analysis,
    )
