"""
Ranking output records
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .compatibility_score import DetailedCompatibilityScore
from .profile_facts import ProfileFacts


@dataclass
class RankedMatch:
    """One ranked candidate with its base and preference-adjusted scores"""
    candidate_id: str
    base_score: int
    adjusted_score: int
    detailed_score: DetailedCompatibilityScore
    candidate: Optional[ProfileFacts] = None

    @property
    def score_boost(self) -> int:
        return self.adjusted_score - self.base_score

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "candidate_id": self.candidate_id,
            "compatibility_score": self.base_score,
            "adjusted_score": self.adjusted_score,
            "score_boost": self.score_boost,
            "detailed_score": self.detailed_score.to_dict(),
        }
        if self.candidate is not None:
            data["candidate"] = self.candidate.to_dict()
        return data


@dataclass
class RankingResult:
    """Ranked candidates for one requester"""
    user_id: str
    ranked_matches: List[RankedMatch] = field(default_factory=list)
    total_candidates: int = 0
    preferences_applied: bool = False
    generated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "user_id": self.user_id,
            "ranked_matches": [match.to_dict() for match in self.ranked_matches],
            "total_candidates": self.total_candidates,
            "preferences_applied": self.preferences_applied,
            "timestamp": self.generated_at.isoformat(),
        }
