"""
Service boundary for compatibility queries, ranking and preference events
"""
import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterator, Optional

from ..config import Settings, get_settings
from ..database import get_db_context
from ..errors import (
    InvalidParameterError,
    MatchingError,
    MatchingErrorType,
    OutOfRangeError,
    RankingCancelledError,
    RankingError,
    UserNotFoundError,
)
from ..models.match_outcome import MatchOutcome, MatchStatus
from ..models.requests import CompatibilityRequest, RankingRequest
from .compatibility_service import CompatibilityEngine
from .intelligence_provider import IntelligenceProvider, OllamaIntelligenceProvider
from .match_ranking_service import MatchRankingEngine
from .preference_learning_service import PreferenceLearningService
from .preference_repository import PreferenceRepository
from .profile_repository import ProfileRepository


logger = logging.getLogger(__name__)


EXPECTED_ERRORS = (UserNotFoundError, InvalidParameterError, OutOfRangeError, RankingCancelledError)


@dataclass
class OperationResult:
    """Success or failure of one service call"""
    success: bool
    data: Any = None
    error: Optional[str] = None
    error_type: Optional[MatchingErrorType] = None
    cause: Optional[BaseException] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def ok(cls, data: Any = None) -> "OperationResult":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str, error_type: MatchingErrorType,
             cause: Optional[BaseException] = None) -> "OperationResult":
        return cls(success=False, error=error, error_type=error_type, cause=cause)

    def unwrap(self) -> Any:
        """
        Return data, or raise the failure as a MatchingError

        Raises:
            MatchingError: The typed error, or RankingError for unexpected faults
        """
        if self.success:
            return self.data
        if isinstance(self.cause, MatchingError):
            raise self.cause
        raise RankingError(self.error, cause=self.cause) from self.cause

    def to_dict(self) -> Dict[str, Any]:
        data = self.data.to_dict() if hasattr(self.data, "to_dict") else self.data
        return {
            "success": self.success,
            "data": data,
            "error": self.error,
            "error_type": self.error_type.value if self.error_type else None,
            "timestamp": self.timestamp.isoformat(),
        }


class MatchingService:
    """Entry points for pairwise scoring, ranking and preference lifecycle events"""

    def __init__(self,
                 profile_repository: Optional[ProfileRepository] = None,
                 preference_repository: Optional[PreferenceRepository] = None,
                 intelligence_provider: Optional[IntelligenceProvider] = None,
                 settings: Optional[Settings] = None):
        """
        Wire the scoring, ranking and learning services

        Args:
            profile_repository: Profile lookup and candidate pool
            preference_repository: Preference store and outcome history
            intelligence_provider: Provider for AI estimates (defaults to Ollama)
            settings: Settings override (defaults to get_settings())
        """
        self.settings = settings or get_settings()
        self.profile_repository = profile_repository or ProfileRepository()
        self.preference_repository = preference_repository or PreferenceRepository()

        self.compatibility_engine = CompatibilityEngine(
            intelligence_provider or OllamaIntelligenceProvider(settings=self.settings)
        )
        self.ranking_engine = MatchRankingEngine(
            profile_source=self.profile_repository,
            candidate_source=self.profile_repository,
            preference_store=self.preference_repository,
            compatibility_engine=self.compatibility_engine,
            max_workers=self.settings.max_scoring_workers,
        )
        self.learning_service = PreferenceLearningService(
            profile_source=self.profile_repository,
            preference_store=self.preference_repository,
        )

    def _execute(self, action: str, operation: Callable[[], Any]) -> OperationResult:
        """Run operation, converting expected errors and unexpected faults into results"""
        try:
            return OperationResult.ok(operation())
        except EXPECTED_ERRORS as e:
            logger.warning(f"Failed to {action}: {e}")
            return OperationResult.fail(str(e), e.error_type, cause=e)
        except Exception as e:
            logger.error(f"Failed to {action}: {e}", exc_info=True)
            return OperationResult.fail(f"Failed to {action}: {e}", MatchingErrorType.INTERNAL, cause=e)

    def score_compatibility(self, user_id_a: str, user_id_b: str) -> OperationResult:
        """
        Detailed compatibility of two users

        Returns:
            OperationResult whose data is a DetailedCompatibilityScore
        """
        def operation():
            request = CompatibilityRequest(user_id_a, user_id_b)

            profile_a = self.profile_repository.get_profile_facts(request.user_id_a)
            if profile_a is None:
                raise UserNotFoundError(request.user_id_a)
            profile_b = self.profile_repository.get_profile_facts(request.user_id_b)
            if profile_b is None:
                raise UserNotFoundError(request.user_id_b)

            logger.info(f"Calculating compatibility between users {request.user_id_a} and {request.user_id_b}")
            score = self.compatibility_engine.score(profile_a, profile_b)
            logger.info(f"Compatibility calculated: {score.overall}")
            return score

        return self._execute("calculate compatibility", operation)

    def rank_candidates(self, user_id: str, max_results: Optional[int] = None,
                        cancel_event: Optional[threading.Event] = None) -> OperationResult:
        """
        Ranked suggestion list for a user

        Args:
            user_id: Requesting user
            max_results: Number of matches in [1, 100], defaults to DEFAULT_MAX_RESULTS
            cancel_event: Set by the caller to abort the ranking

        Returns:
            OperationResult whose data is a RankingResult
        """
        def operation():
            request = RankingRequest(
                user_id=user_id,
                max_results=max_results,
                default_max_results=self.settings.default_max_results,
            )
            return self.ranking_engine.rank(request, cancel_event=cancel_event)

        return self._execute("rank matches", operation)

    def record_match_outcome(self, user_id: str, other_user_id: str,
                             status: MatchStatus, compatibility_score: int) -> OperationResult:
        """
        Store a match decision and fold it into the user's preferences

        Returns:
            OperationResult whose data is the updated PreferenceModel
        """
        def operation():
            request = CompatibilityRequest(user_id, other_user_id)
            outcome = MatchOutcome(
                other_user_id=request.user_id_b,
                status=status,
                compatibility_score=compatibility_score,
            )
            if self.profile_repository.get_profile_facts(request.user_id_a) is None:
                raise UserNotFoundError(request.user_id_a)

            with self._outcome_transaction() as preference_repository:
                preference_repository.add_outcome(request.user_id_a, outcome)
                learning_service = PreferenceLearningService(
                    profile_source=self.profile_repository,
                    preference_store=preference_repository,
                )
                return learning_service.record_outcome(request.user_id_a, outcome)

        return self._execute("record match outcome", operation)

    @contextmanager
    def _outcome_transaction(self) -> Iterator[PreferenceRepository]:
        """Preference repository whose outcome and model writes commit or roll back together"""
        repository = self.preference_repository
        if not isinstance(repository, PreferenceRepository) or repository.db_session is not None:
            yield repository
            return

        with get_db_context() as db:
            yield PreferenceRepository(db)

    def learn_preferences(self, user_id: str) -> OperationResult:
        """
        Re-learn a user's preferences from their stored match history

        Returns:
            OperationResult whose data is a LearningSummary
        """
        def operation():
            request = RankingRequest(user_id=user_id, default_max_results=self.settings.default_max_results)
            if self.profile_repository.get_profile_facts(request.user_id) is None:
                raise UserNotFoundError(request.user_id)

            outcomes = self.preference_repository.get_outcomes(request.user_id)
            return self.learning_service.learn_from_history(request.user_id, outcomes)

        return self._execute("learn preferences", operation)
