"""
Four-factor compatibility score with a weighted overall score
"""
from dataclasses import dataclass, field
from typing import Any, Dict

from .validators import ensure_score


# Integer percentages so the weighted sum can be rounded exactly
FACTOR_WEIGHTS = {
    "interest": 30,
    "personality": 30,
    "lifestyle": 25,
    "value": 15,
}

SUB_SCORE_FIELDS = tuple(FACTOR_WEIGHTS)


def round_half_up_ratio(numerator: int, denominator: int) -> int:
    """Round numerator / denominator to the nearest integer, halves rounding up"""
    return (2 * numerator + denominator) // (2 * denominator)


def compatibility_level(score: int) -> str:
    """Get qualitative compatibility label for an overall score"""
    if score >= 80:
        return "Excellent"
    elif score >= 60:
        return "Good"
    elif score >= 40:
        return "Fair"
    else:
        return "Low"


@dataclass
class DetailedCompatibilityScore:
    """
    Interest, personality, lifestyle and value sub-scores, each in [0, 100].

    Assigning a sub-score outside its range raises OutOfRangeError, so the
    derived overall score is always in [0, 100] as well.
    """
    interest: int = 0
    personality: int = 0
    lifestyle: int = 0
    value: int = 0
    fallback_used: bool = False
    factor_scores: Dict[str, int] = field(default_factory=dict)

    def __setattr__(self, name, value):
        if name in SUB_SCORE_FIELDS:
            ensure_score(value, name)
        super().__setattr__(name, value)

    @property
    def overall(self) -> int:
        """Weighted sum of the four sub-scores rounded to the nearest integer"""
        weighted_sum = sum(getattr(self, name) * weight for name, weight in FACTOR_WEIGHTS.items())
        return round_half_up_ratio(weighted_sum, 100)

    @property
    def compatibility_level(self) -> str:
        return compatibility_level(self.overall)

    def update_core_factors(self, interest: int, personality: int, lifestyle: int, value: int) -> None:
        """Replace all four sub-scores, validating every value before assigning any"""
        for name, score in zip(SUB_SCORE_FIELDS, (interest, personality, lifestyle, value)):
            ensure_score(score, name)

        self.interest = interest
        self.personality = personality
        self.lifestyle = lifestyle
        self.value = value

    def add_factor_score(self, factor_name: str, score: int) -> None:
        """Record an auxiliary named factor score"""
        self.factor_scores[factor_name] = ensure_score(score, factor_name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "interest_compatibility": self.interest,
            "personality_compatibility": self.personality,
            "lifestyle_compatibility": self.lifestyle,
            "value_compatibility": self.value,
            "overall_score": self.overall,
            "compatibility_level": self.compatibility_level,
            "fallback_used": self.fallback_used,
            "factor_scores": dict(self.factor_scores),
        }
