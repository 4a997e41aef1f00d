"""
Match ranking: candidate retrieval, concurrent scoring, preference boosting and sorting
"""
import logging
import math
import threading
from concurrent.futures import FIRST_COMPLETED, ThreadPoolExecutor, wait
from typing import List, Optional

from ..config import get_settings
from ..errors import RankingCancelledError, UserNotFoundError
from ..models.preference_model import PreferenceModel
from ..models.profile_facts import ProfileFacts
from ..models.ranked_match import RankedMatch, RankingResult
from ..models.requests import RankingRequest
from .compatibility_service import CompatibilityEngine
from .interfaces import CandidateSource, PreferenceStore, ProfileSource


logger = logging.getLogger(__name__)


OVER_FETCH_FACTOR = 2
INTEREST_BOOST_SCALE = 10
AFFINITY_BONUS = 5
AFFINITY_WINDOW = 10
MAX_BOOST = 15
MAX_ADJUSTED_SCORE = 100

CANCEL_POLL_SECONDS = 0.05


def calculate_preference_boost(base_score: int, candidate: ProfileFacts, preferences: PreferenceModel) -> float:
    """
    Boost earned by a candidate under a user's learned preferences

    Interest weights are averaged over the candidate's weighted tags, then a
    flat affinity bonus is added when the base score is close to the user's
    average accepted score. The total is capped at 15.

    Args:
        base_score: Overall compatibility of the pair
        candidate: Candidate facts
        preferences: Requesting user's preference model

    Returns:
        Boost between 0 and 15
    """
    interest_boost = 0.0
    weighted_tags = 0

    if preferences.interest_weights:
        for tag in sorted(candidate.interest_tags):
            weight = preferences.interest_weights.get(tag)
            if weight is not None:
                interest_boost += weight * INTEREST_BOOST_SCALE
                weighted_tags += 1

    if weighted_tags > 0:
        interest_boost = interest_boost / weighted_tags

    affinity_bonus = 0
    average_accepted = preferences.average_accepted_compatibility_score
    if average_accepted > 0 and abs(base_score - average_accepted) < AFFINITY_WINDOW:
        affinity_bonus = AFFINITY_BONUS

    return min(interest_boost + affinity_bonus, MAX_BOOST)


def apply_preference_boost(base_score: int, candidate: ProfileFacts, preferences: Optional[PreferenceModel]) -> int:
    """Adjusted score: base plus the rounded boost, never above 100"""
    if preferences is None:
        return base_score

    boost = calculate_preference_boost(base_score, candidate, preferences)
    return min(MAX_ADJUSTED_SCORE, base_score + int(math.floor(boost + 0.5)))


class MatchRankingEngine:
    """Ranks a user's candidate pool by preference-adjusted compatibility"""

    def __init__(self,
                 profile_source: ProfileSource,
                 candidate_source: CandidateSource,
                 preference_store: PreferenceStore,
                 compatibility_engine: Optional[CompatibilityEngine] = None,
                 max_workers: Optional[int] = None):
        """
        Initialize the ranking engine

        Args:
            profile_source: Lookup for the requesting user's facts
            candidate_source: Pre-filtered candidate pool
            preference_store: Read access to preference models
            compatibility_engine: Pairwise scorer (defaults to a new CompatibilityEngine)
            max_workers: Scoring pool size (defaults to MAX_SCORING_WORKERS setting)
        """
        self.profile_source = profile_source
        self.candidate_source = candidate_source
        self.preference_store = preference_store
        self.compatibility_engine = compatibility_engine or CompatibilityEngine()
        self.max_workers = max_workers or get_settings().max_scoring_workers

    def rank(self, request: RankingRequest, cancel_event: Optional[threading.Event] = None) -> RankingResult:
        """
        Rank candidates for the requesting user

        Args:
            request: Validated ranking request
            cancel_event: Set by the caller to abort scoring

        Returns:
            RankingResult with at most request.max_results matches

        Raises:
            UserNotFoundError: If the requesting user does not exist
            RankingCancelledError: If cancel_event is set before scoring completes
        """
        user_id = request.user_id
        logger.info(f"Ranking matches for user {user_id} (max_results={request.max_results})")

        user = self.profile_source.get_profile_facts(user_id)
        if user is None:
            logger.warning(f"User not found: {user_id}")
            raise UserNotFoundError(user_id)

        candidates = self._distinct_candidates(
            user_id,
            self.candidate_source.get_candidates(user_id, request.max_results * OVER_FETCH_FACTOR)
        )

        if not candidates:
            logger.info(f"No potential matches found for user {user_id}")
            return RankingResult(user_id=user_id)

        preferences = self.preference_store.get_preference_model(user_id)
        if preferences is None:
            logger.info(f"No preference model for user {user_id}, ranking unboosted")

        ranked = self._score_candidates(user, candidates, preferences, cancel_event)

        # list.sort is stable, so equal scores keep retrieval order
        ranked.sort(key=lambda match: (match.adjusted_score, match.base_score), reverse=True)
        top_matches = ranked[:request.max_results]

        logger.info(f"Ranked {len(top_matches)} of {len(candidates)} candidates for user {user_id}")

        return RankingResult(
            user_id=user_id,
            ranked_matches=top_matches,
            total_candidates=len(candidates),
            preferences_applied=preferences is not None,
        )

    def _distinct_candidates(self, user_id: str, candidates: List[ProfileFacts]) -> List[ProfileFacts]:
        """Drop duplicates and the requester, preserving retrieval order"""
        seen = {user_id}
        distinct = []
        for candidate in candidates:
            if candidate.user_id in seen:
                continue
            seen.add(candidate.user_id)
            distinct.append(candidate)
        return distinct

    def _score_candidate(self, user: ProfileFacts, candidate: ProfileFacts,
                         preferences: Optional[PreferenceModel],
                         cancel_event: Optional[threading.Event]) -> RankedMatch:
        detailed_score = self.compatibility_engine.score(user, candidate, cancel_event)
        base_score = detailed_score.overall

        return RankedMatch(
            candidate_id=candidate.user_id,
            base_score=base_score,
            adjusted_score=apply_preference_boost(base_score, candidate, preferences),
            detailed_score=detailed_score,
            candidate=candidate,
        )

    def _score_candidates(self, user: ProfileFacts, candidates: List[ProfileFacts],
                          preferences: Optional[PreferenceModel],
                          cancel_event: Optional[threading.Event]) -> List[RankedMatch]:
        """
        Score all candidates on a bounded worker pool and join before returning

        Results are placed by retrieval index, so completion order never
        affects the final ordering.
        """
        results: List[Optional[RankedMatch]] = [None] * len(candidates)
        executor = ThreadPoolExecutor(
            max_workers=min(self.max_workers, len(candidates)),
            thread_name_prefix="match-scoring"
        )
        completed = False

        try:
            futures = {
                executor.submit(self._score_candidate, user, candidate, preferences, cancel_event): index
                for index, candidate in enumerate(candidates)
            }
            pending = set(futures)
            poll = CANCEL_POLL_SECONDS if cancel_event is not None else None

            while pending:
                if cancel_event is not None and cancel_event.is_set():
                    logger.info(f"Ranking for user {user.user_id} cancelled with {len(pending)} candidates outstanding")
                    raise RankingCancelledError()

                done, pending = wait(pending, timeout=poll, return_when=FIRST_COMPLETED)
                for future in done:
                    results[futures[future]] = future.result()

            completed = True
        finally:
            # Abandon queued work on failure or cancellation instead of waiting for it
            executor.shutdown(wait=completed, cancel_futures=not completed)

        return results
