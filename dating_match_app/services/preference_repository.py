"""
Preference store and match outcome history backed by the database
"""
from typing import Callable, List, Optional, TypeVar

from sqlalchemy.orm import Session

from ..database import get_db_context
from ..models.match_outcome import MatchOutcome, MatchOutcomeRecord
from ..models.preference_model import PreferenceModel
from ..models.user_preference import UserPreferenceRecord


T = TypeVar("T")


class PreferenceRepository:
    """Load and persist preference models and match outcomes"""

    def __init__(self, db_session: Optional[Session] = None):
        """
        Initialize the preference repository

        Args:
            db_session: Optional database session. If not provided, will create its own.
        """
        self.db_session = db_session

    def _run(self, operation: Callable[[Session], T]) -> T:
        if self.db_session:
            result = operation(self.db_session)
            self.db_session.flush()
            return result
        with get_db_context() as db:
            return operation(db)

    @staticmethod
    def _get_record(db: Session, user_id: str) -> Optional[UserPreferenceRecord]:
        return db.query(UserPreferenceRecord).filter(UserPreferenceRecord.user_id == user_id).first()

    def get_preference_model(self, user_id: str) -> Optional[PreferenceModel]:
        """
        Get a user's preference model

        Returns:
            PreferenceModel or None if the user has no preferences yet
        """
        def operation(db: Session) -> Optional[PreferenceModel]:
            record = self._get_record(db, user_id)
            return record.to_preference_model() if record else None

        return self._run(operation)

    def get_or_create(self, user_id: str) -> PreferenceModel:
        def operation(db: Session) -> PreferenceModel:
            record = self._get_record(db, user_id)
            if record is None:
                record = UserPreferenceRecord(user_id=user_id)
                record.apply_preference_model(PreferenceModel(user_id=user_id))
                db.add(record)
                db.flush()
            return record.to_preference_model()

        return self._run(operation)

    def save(self, model: PreferenceModel) -> PreferenceModel:
        """Insert or update the record for model.user_id"""
        def operation(db: Session) -> PreferenceModel:
            record = self._get_record(db, model.user_id)
            if record is None:
                record = UserPreferenceRecord(user_id=model.user_id)
                db.add(record)
            record.apply_preference_model(model)
            return model

        return self._run(operation)

    def get_outcomes(self, user_id: str) -> List[MatchOutcome]:
        """Get a user's match outcomes in the order they were recorded"""
        def operation(db: Session) -> List[MatchOutcome]:
            records = (db.query(MatchOutcomeRecord)
                       .filter(MatchOutcomeRecord.user_id == user_id)
                       .order_by(MatchOutcomeRecord.created_at, MatchOutcomeRecord.id)
                       .all())
            return [record.to_match_outcome() for record in records]

        return self._run(operation)

    def add_outcome(self, user_id: str, outcome: MatchOutcome) -> None:
        def operation(db: Session) -> None:
            db.add(MatchOutcomeRecord(
                user_id=user_id,
                other_user_id=outcome.other_user_id,
                status=outcome.status,
                compatibility_score=outcome.compatibility_score,
            ))

        self._run(operation)
