"""
Preference learning from match lifecycle events
"""
import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional

from ..models.match_outcome import MatchOutcome, MatchStatus
from ..models.preference_model import PreferenceModel
from .interfaces import PreferenceStore, ProfileSource


logger = logging.getLogger(__name__)


HIGH_ACCEPTED_SCORE = 75
LOW_REJECTED_SCORE = 60


@dataclass
class LearningSummary:
    """Outcome of one learning session"""
    user_id: str
    matches_analyzed: int
    acceptance_rate: float
    average_accepted_score: float
    interest_weights: Dict[str, float] = field(default_factory=dict)
    learning_session_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "user_id": self.user_id,
            "preferences_updated": True,
            "matches_analyzed": self.matches_analyzed,
            "acceptance_rate": self.acceptance_rate,
            "average_accepted_score": self.average_accepted_score,
            "interest_weights": dict(self.interest_weights),
            "learning_session_count": self.learning_session_count,
        }


class PreferenceLearningService:
    """Updates preference models from accepted and rejected matches"""

    def __init__(self, profile_source: ProfileSource, preference_store: PreferenceStore):
        self.profile_source = profile_source
        self.preference_store = preference_store

    def record_outcome(self, user_id: str, outcome: MatchOutcome) -> PreferenceModel:
        """
        Apply a single match decision to the user's preference model

        Pending and expired outcomes leave the statistics unchanged.
        """
        preferences = self.preference_store.get_or_create(user_id)

        if outcome.status == MatchStatus.ACCEPTED:
            preferences.record_acceptance(outcome.compatibility_score)
        elif outcome.status == MatchStatus.REJECTED:
            preferences.record_rejection()
        else:
            return preferences

        return self.preference_store.save(preferences)

    def learn_from_history(self, user_id: str, outcomes: Iterable[MatchOutcome]) -> LearningSummary:
        """
        Rebuild a user's preference statistics from their full match history

        Counters, the average, the interest weights and the personality trait
        preferences are recomputed from scratch, so running a session twice
        over the same history gives the same statistics.

        Args:
            user_id: User whose preferences are learned
            outcomes: Complete match history of the user

        Returns:
            LearningSummary describing the updated model
        """
        outcomes = list(outcomes)
        preferences = self.preference_store.get_or_create(user_id)
        logger.info(f"Learning preferences for user {user_id} from {len(outcomes)} matches")

        accepted = [outcome for outcome in outcomes if outcome.status == MatchStatus.ACCEPTED]
        rejected = [outcome for outcome in outcomes if outcome.status == MatchStatus.REJECTED]

        if outcomes:
            preferences.reset_match_history()
            preferences.interest_weights = {}
            preferences.personality_trait_preferences = {}
            for outcome in accepted:
                preferences.record_acceptance(outcome.compatibility_score)
            for _ in rejected:
                preferences.record_rejection()

            if accepted:
                self._learn_interest_weights(preferences, accepted)
            self._learn_personality_preferences(preferences, accepted, rejected)
        else:
            logger.info(f"No match history found for user {user_id}")

        preferences.record_learning_session()
        self.preference_store.save(preferences)

        logger.info(
            f"Preferences learned for user {user_id}: "
            f"{preferences.match_acceptance_count} acceptances, {preferences.match_rejection_count} rejections"
        )

        return LearningSummary(
            user_id=user_id,
            matches_analyzed=len(outcomes),
            acceptance_rate=preferences.acceptance_rate(),
            average_accepted_score=preferences.average_accepted_compatibility_score,
            interest_weights=dict(preferences.interest_weights),
            learning_session_count=preferences.learning_session_count,
        )

    def _learn_interest_weights(self, preferences: PreferenceModel, accepted: list) -> None:
        """Weight each tag by the share of accepted partners who list it"""
        interest_frequency = Counter()

        for outcome in accepted:
            partner = self.profile_source.get_profile_facts(outcome.other_user_id)
            if partner is None:
                logger.warning(f"Accepted partner {outcome.other_user_id} no longer exists, skipping")
                continue
            interest_frequency.update(partner.interest_tags)

        for interest, frequency in sorted(interest_frequency.items()):
            preferences.update_interest_weight(interest, min(frequency / len(accepted), 1.0))

    @staticmethod
    def _learn_personality_preferences(preferences: PreferenceModel, accepted: list, rejected: list) -> None:
        average_accepted: Optional[float] = (
            sum(o.compatibility_score for o in accepted) / len(accepted) if accepted else None
        )
        average_rejected: Optional[float] = (
            sum(o.compatibility_score for o in rejected) / len(rejected) if rejected else None
        )

        # Accepting highly compatible matches signals a preference for similar personalities
        if average_accepted is not None and average_accepted > HIGH_ACCEPTED_SCORE:
            preferences.update_personality_trait_preference("compatible", 0.8)
            preferences.update_personality_trait_preference("similar", 0.7)

        # No rejections means no rejected average, so "incompatible" is left unset
        if average_rejected is not None and average_rejected < LOW_REJECTED_SCORE:
            preferences.update_personality_trait_preference("incompatible", -0.8)
            preferences.update_personality_trait_preference("different", -0.5)
