"""
oraculo/pipeline/hit_checker.py
Compare generated rows with an actual drawn module, rank by rank, and emit
HitRecords for the next generation cycle.
"""
from __future__ import annotations

from typing import Sequence

from oraculo.models.records import HIT_STATUS, MISS_STATUS, HitRecord
from oraculo.utils.logger import get_logger

log = get_logger("pipeline.checker")


# ── Match level logic ─────────────────────────────────────────────

def match_level(predicted: Sequence[int], actual: Sequence[int]) -> str | None:
    """milhar = every digit, centena = last 3, dezena = last 2."""
    predicted, actual = tuple(predicted), tuple(actual)
    if not predicted or not actual:
        return None
    if predicted == actual:
        return "MILHAR"
    if len(predicted) >= 3 and len(actual) >= 3 and predicted[-3:] == actual[-3:]:
        return "CENTENA"
    if len(predicted) >= 2 and len(actual) >= 2 and predicted[-2:] == actual[-2:]:
        return "DEZENA"
    return None


_LEVEL_ICONS = {
    "MILHAR":  "🎰",
    "CENTENA": "🥇",
    "DEZENA":  "✅",
    None:      "❌",
}


def get_level_icon(level: str | None) -> str:
    return _LEVEL_ICONS.get(level, "❌")


# ── Main check function ───────────────────────────────────────────

def check_hits(result: Sequence[Sequence[int]], draw: Sequence[Sequence[int]]) -> dict:
    """
    Return {"success", "hits", "levels", "hit_count"} where `hits` holds
    one HitRecord per rank (value = drawn row as text).
    """
    if len(draw) != len(result):
        msg = f"Draw has {len(draw)} rows, expected {len(result)}."
        log.error(msg)
        return {"success": False, "error": msg}

    hits: list[HitRecord] = []
    levels: list[str | None] = []
    for rank, (predicted, actual) in enumerate(zip(result, draw), start=1):
        level = match_level(predicted, actual)
        levels.append(level)
        hits.append(HitRecord(
            position=rank,
            status=HIT_STATUS if level else MISS_STATUS,
            value="".join(str(d) for d in actual),
        ))

    hit_count = sum(1 for h in hits if h.is_hit)
    log.info(
        f"[CHECK] {hit_count}/{len(hits)} ranks hit | "
        + " ".join(f"{h.position}:{get_level_icon(lv)}" for h, lv in zip(hits, levels))
    )
    return {
        "success": True,
        "hits": hits,
        "levels": levels,
        "hit_count": hit_count,
    }
