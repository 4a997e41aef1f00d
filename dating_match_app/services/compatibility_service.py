"""
Compatibility scoring between two profiles
"""
import logging
import threading
from typing import Optional

from ..errors import RankingCancelledError
from ..models.compatibility_score import DetailedCompatibilityScore, round_half_up_ratio
from ..models.profile_facts import ProfileFacts
from .intelligence_provider import IntelligenceProvider, OllamaIntelligenceProvider


logger = logging.getLogger(__name__)


NEUTRAL_SCORE = 50

LOCATION_MATCH_SCORE = 100
LOCATION_MISMATCH_SCORE = 30

FALLBACK_PERSONALITY_NO_BIO = 60
FALLBACK_PERSONALITY_BASE = 40
FALLBACK_PERSONALITY_SPAN = 60

FALLBACK_VALUE_SAME_OCCUPATION = 85
FALLBACK_VALUE_DEFAULT = 65


class CompatibilityEngine:
    """Four-factor compatibility scoring with an AI-assisted and a deterministic path"""

    def __init__(self, intelligence_provider: Optional[IntelligenceProvider] = None):
        """
        Initialize the compatibility engine

        Args:
            intelligence_provider: Provider for personality/value estimates
                (defaults to the configured Ollama provider)
        """
        self.intelligence_provider = intelligence_provider or OllamaIntelligenceProvider()

    def score(self, profile_a: ProfileFacts, profile_b: ProfileFacts,
              cancel_event: Optional[threading.Event] = None) -> DetailedCompatibilityScore:
        """
        Calculate the detailed compatibility of two profiles

        Provider failures never escape: the personality and value sub-scores
        fall back to deterministic heuristics and the result is still returned.

        Args:
            profile_a: Facts of the first user
            profile_b: Facts of the second user
            cancel_event: Set by the caller to abort before the provider call

        Returns:
            DetailedCompatibilityScore with all four sub-scores

        Raises:
            RankingCancelledError: If cancel_event is set before the provider call
        """
        score = DetailedCompatibilityScore()
        score.interest = self.calculate_interest_compatibility(profile_a, profile_b)
        score.lifestyle = self.calculate_lifestyle_compatibility(profile_a, profile_b)

        if cancel_event is not None and cancel_event.is_set():
            raise RankingCancelledError()

        try:
            ai_score = self.intelligence_provider.estimate_compatibility(
                profile_a.to_profile_text(),
                profile_b.to_profile_text()
            )
            # One estimate serves both dimensions until they are modeled separately
            score.personality = ai_score
            score.value = ai_score
        except Exception as e:
            logger.warning(
                f"Intelligence provider unavailable for {profile_a.user_id} / {profile_b.user_id}, "
                f"using fallback for personality and value: {e}"
            )
            score.personality = self.calculate_fallback_personality_score(profile_a, profile_b)
            score.value = self.calculate_fallback_value_score(profile_a, profile_b)
            score.fallback_used = True

        return score

    @staticmethod
    def calculate_interest_compatibility(profile_a: ProfileFacts, profile_b: ProfileFacts) -> int:
        """
        Jaccard similarity of the interest tags scaled to 0-100

        Returns:
            50 when either side has no tags, otherwise the rounded percentage
        """
        tags_a = profile_a.interest_tags
        tags_b = profile_b.interest_tags

        if not tags_a or not tags_b:
            return NEUTRAL_SCORE

        common = len(tags_a & tags_b)
        total = len(tags_a | tags_b)
        return round_half_up_ratio(common * 100, total)

    @staticmethod
    def calculate_lifestyle_compatibility(profile_a: ProfileFacts, profile_b: ProfileFacts) -> int:
        """
        Mean of the computable location, age and gender factors

        Returns:
            50 when no factor is computable
        """
        factor_scores = []

        if profile_a.location and profile_b.location:
            same_location = profile_a.location.lower() == profile_b.location.lower()
            factor_scores.append(LOCATION_MATCH_SCORE if same_location else LOCATION_MISMATCH_SCORE)

        if profile_a.age is not None and profile_b.age is not None:
            a_accepts_b = profile_a.accepts_age(profile_b.age)
            b_accepts_a = profile_b.accepts_age(profile_a.age)
            if a_accepts_b and b_accepts_a:
                factor_scores.append(100)
            elif a_accepts_b or b_accepts_a:
                factor_scores.append(50)
            else:
                factor_scores.append(0)

        if profile_a.gender_identity is not None and profile_b.gender_identity is not None:
            mutual = (profile_a.is_interested_in(profile_b.gender_identity)
                      and profile_b.is_interested_in(profile_a.gender_identity))
            factor_scores.append(100 if mutual else 0)

        if not factor_scores:
            return NEUTRAL_SCORE

        return round_half_up_ratio(sum(factor_scores), len(factor_scores))

    @staticmethod
    def calculate_fallback_personality_score(profile_a: ProfileFacts, profile_b: ProfileFacts) -> int:
        """Bio word overlap, 40 plus up to 60 points"""
        words_a = set((profile_a.bio or "").lower().split())
        words_b = set((profile_b.bio or "").lower().split())

        if not words_a or not words_b:
            return FALLBACK_PERSONALITY_NO_BIO

        common = len(words_a & words_b)
        total = len(words_a | words_b)
        return min(100, FALLBACK_PERSONALITY_BASE + (common * FALLBACK_PERSONALITY_SPAN) // total)

    @staticmethod
    def calculate_fallback_value_score(profile_a: ProfileFacts, profile_b: ProfileFacts) -> int:
        # Occupation as a proxy for values
        if not profile_a.occupation or not profile_b.occupation:
            return FALLBACK_VALUE_DEFAULT

        if profile_a.occupation.lower() == profile_b.occupation.lower():
            return FALLBACK_VALUE_SAME_OCCUPATION
        return FALLBACK_VALUE_DEFAULT
