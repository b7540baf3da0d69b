"""
oraculo/models/records.py
Plain data carried between the parser, analyzer, selector and generation cycle.
All records are frozen; frequency tables are read-only mappings.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

DigitSequence = tuple[int, ...]
DataSet = list[DigitSequence]

HIT_STATUS = "Acerto"
MISS_STATUS = "Erro"


def freeze_counts(counts: Mapping[int, int]) -> Mapping[int, int]:
    return MappingProxyType(dict(counts))


@dataclass(frozen=True)
class EvenOdd:
    evens: int = 0
    odds: int = 0

    def to_dict(self) -> dict[str, int]:
        return {"evens": self.evens, "odds": self.odds}


@dataclass(frozen=True)
class AnalysisResult:
    """Frequency snapshot of one data set."""

    row_sums: tuple[int, ...]
    row_even_odd: tuple[EvenOdd, ...]
    row_digit_freq: tuple[Mapping[int, int], ...]
    col_digit_freq: tuple[Mapping[int, int], ...]
    global_digit_freq: Mapping[int, int]
    first_prize_freq: Mapping[int, int]
    total_even_odd: EvenOdd

    @property
    def total_digits(self) -> int:
        return self.total_even_odd.evens + self.total_even_odd.odds

    def to_dict(self) -> dict[str, Any]:
        return {
            "row_sums": list(self.row_sums),
            "row_even_odd": [eo.to_dict() for eo in self.row_even_odd],
            "row_digit_freq": [dict(m) for m in self.row_digit_freq],
            "col_digit_freq": [dict(m) for m in self.col_digit_freq],
            "global_digit_freq": dict(self.global_digit_freq),
            "first_prize_freq": dict(self.first_prize_freq),
            "total_even_odd": self.total_even_odd.to_dict(),
        }


@dataclass(frozen=True)
class HistoricalAnalysis:
    # Mirrors the current batch; no cross-call history is kept.
    historical_digit_freq: Mapping[int, int]


@dataclass(frozen=True)
class CombinedAnalysis:
    input_analysis: AnalysisResult
    historical_analysis: HistoricalAnalysis

    @classmethod
    def from_input(cls, analysis: AnalysisResult) -> CombinedAnalysis:
        return cls(
            input_analysis=analysis,
            historical_analysis=HistoricalAnalysis(analysis.global_digit_freq),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "input_analysis": self.input_analysis.to_dict(),
            "historical_analysis": {
                "historical_digit_freq": dict(self.historical_analysis.historical_digit_freq),
            },
        }


@dataclass(frozen=True)
class HitRecord:
    """Outcome of a past attempt at a given rank."""

    position: int
    status: str
    value: str

    @property
    def is_hit(self) -> bool:
        return self.status == HIT_STATUS

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> HitRecord:
        try:
            return cls(position=int(data["position"]), status=str(data["status"]), value=str(data["value"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"Malformed hit record {data!r}: {exc}") from exc

    def to_dict(self) -> dict[str, Any]:
        return {"position": self.position, "status": self.status, "value": self.value}


@dataclass(frozen=True)
class RectificationRecord:
    """Caller correction for a rank. Accepted by the cycle, not scored yet."""

    position: int
    value: str
    note: str = ""


@dataclass(frozen=True)
class Candidate:
    sequence: DigitSequence
    confidence: float

    def to_dict(self) -> dict[str, Any]:
        return {"sequence": list(self.sequence), "confidence": self.confidence}


@dataclass(frozen=True)
class TierPrediction:
    value: str
    confidence: float

    def to_dict(self) -> dict[str, Any]:
        return {"value": self.value, "confidence": self.confidence}


@dataclass(frozen=True)
class AdvancedPredictions:
    hundreds: tuple[TierPrediction, ...]
    tens: tuple[TierPrediction, ...]
    elite_tens: tuple[TierPrediction, ...]
    super_tens: tuple[TierPrediction, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "hundreds": [p.to_dict() for p in self.hundreds],
            "tens": [p.to_dict() for p in self.tens],
            "elite_tens": [p.to_dict() for p in self.elite_tens],
            "super_tens": [p.to_dict() for p in self.super_tens],
        }


@dataclass(frozen=True)
class ParseResult:
    modules: list[DataSet] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class GenerationResult:
    result: tuple[DigitSequence, ...]
    candidates: tuple[Candidate, ...]
    advanced_predictions: AdvancedPredictions
    analysis: CombinedAnalysis

    def summary_lines(self) -> list[str]:
        """Human-readable rows, candidates and tiers for the cycle log."""
        lines = [f"{rank}º  {''.join(map(str, seq))}" for rank, seq in enumerate(self.result, start=1)]
        lines += [
            f"candidate {''.join(map(str, c.sequence))} ({c.confidence:.2f}%)" for c in self.candidates
        ]
        for name, preds in self.advanced_predictions.to_dict().items():
            lines.append(f"{name}: " + ", ".join(f"{p['value']} ({p['confidence']:.2f}%)" for p in preds))
        return lines

    def to_dict(self) -> dict[str, Any]:
        return {
            "result": [list(seq) for seq in self.result],
            "candidates": [c.to_dict() for c in self.candidates],
            "advanced_predictions": self.advanced_predictions.to_dict(),
            "analysis": self.analysis.to_dict(),
        }

