"""Toy heuristic for self-scoring an interview answer. Stateless, no I/O."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List

MAX_LENGTH_POINTS = 3.0
CHARS_PER_POINT = 200
TRADE_OFF_BONUS = 2
COMPLEXITY_BONUS = 2


@dataclass
class Evaluation:
    score: int
    strengths: List[str] = field(default_factory=list)
    weaknesses: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def basic_score_evaluation(answer: str) -> Evaluation:
    lowered = answer.lower()
    length_points = min(len(answer) / CHARS_PER_POINT, MAX_LENGTH_POINTS)
    trade_off = TRADE_OFF_BONUS if "trade-off" in lowered else 0
    complexity = COMPLEXITY_BONUS if "o(" in lowered else 0

    score = min(_round_half_up(length_points + trade_off + complexity), 10)

    strengths = []
    if trade_off:
        strengths.append("Discussed trade-offs")
    if complexity:
        strengths.append("Mentioned complexity analysis")

    if score < 7:
        recommendations = ["Add trade-offs", "Add edge cases", "Be more structured"]
    else:
        recommendations = ["Improve clarity and communication polish"]

    return Evaluation(
        score=score,
        strengths=strengths,
        weaknesses=["Answer lacks depth or structure"] if score < 6 else [],
        recommendations=recommendations,
    )
