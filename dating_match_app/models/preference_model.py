"""
Per-user preference statistics accumulated from match lifecycle events
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from ..errors import OutOfRangeError
from .validators import ensure_score, validate_interest_weight, validate_trait_preference


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class PreferenceModel:
    """
    Accumulator of interest weights and acceptance history for one user.

    Holds no ranking logic; the ranking engine only reads it.
    """
    user_id: str
    interest_weights: Dict[str, float] = field(default_factory=dict)
    personality_trait_preferences: Dict[str, float] = field(default_factory=dict)
    match_acceptance_count: int = 0
    match_rejection_count: int = 0
    profile_view_count: int = 0
    average_accepted_compatibility_score: float = 0.0
    learning_session_count: int = 0
    last_learning_session_at: Optional[datetime] = None
    last_updated_at: datetime = field(default_factory=_utcnow)

    def record_acceptance(self, compatibility_score: int) -> None:
        """
        Count an accepted match and fold its score into the running mean

        Raises:
            OutOfRangeError: If the score is outside [0, 100]
        """
        ensure_score(compatibility_score, "compatibility_score")

        self.match_acceptance_count += 1
        n = self.match_acceptance_count
        if n == 1:
            self.average_accepted_compatibility_score = float(compatibility_score)
        else:
            previous_total = self.average_accepted_compatibility_score * (n - 1)
            self.average_accepted_compatibility_score = (previous_total + compatibility_score) / n
        self._touch()

    def record_rejection(self) -> None:
        self.match_rejection_count += 1
        self._touch()

    def record_profile_view(self) -> None:
        self.profile_view_count += 1
        self._touch()

    def update_interest_weight(self, interest: str, weight: float) -> None:
        """
        Set the weight of an interest tag

        Raises:
            OutOfRangeError: If weight is outside [0, 1]
        """
        if not validate_interest_weight(weight):
            raise OutOfRangeError(f"Weight must be between 0 and 1, got {weight!r}", field="weight", value=weight)

        self.interest_weights[interest.strip().lower()] = float(weight)
        self._touch()

    def update_personality_trait_preference(self, trait: str, preference: float) -> None:
        """
        Set the preference for a personality trait

        Raises:
            OutOfRangeError: If preference is outside [-1, 1]
        """
        if not validate_trait_preference(preference):
            raise OutOfRangeError(
                f"Preference must be between -1 and 1, got {preference!r}",
                field="preference", value=preference
            )

        self.personality_trait_preferences[trait.strip().lower()] = float(preference)
        self._touch()

    def record_learning_session(self) -> None:
        self.learning_session_count += 1
        self.last_learning_session_at = _utcnow()
        self._touch()

    def reset_match_history(self) -> None:
        """Clear acceptance and rejection statistics before a full rebuild"""
        self.match_acceptance_count = 0
        self.match_rejection_count = 0
        self.average_accepted_compatibility_score = 0.0
        self._touch()

    def acceptance_rate(self) -> float:
        """Accepted share of all decided matches, 0 when nothing was decided"""
        total_matches = self.match_acceptance_count + self.match_rejection_count
        if total_matches == 0:
            return 0.0
        return self.match_acceptance_count / total_matches

    def _touch(self) -> None:
        self.last_updated_at = _utcnow()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "user_id": self.user_id,
            "interest_weights": dict(self.interest_weights),
            "personality_trait_preferences": dict(self.personality_trait_preferences),
            "match_acceptance_count": self.match_acceptance_count,
            "match_rejection_count": self.match_rejection_count,
            "profile_view_count": self.profile_view_count,
            "acceptance_rate": self.acceptance_rate(),
            "average_accepted_compatibility_score": self.average_accepted_compatibility_score,
            "learning_session_count": self.learning_session_count,
            "last_learning_session_at": (
                self.last_learning_session_at.isoformat() if self.last_learning_session_at else None
            ),
        }
