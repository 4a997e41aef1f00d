"""
Persisted preference statistics
"""
from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, JSON, String

from .base import BaseModel
from .preference_model import PreferenceModel


class UserPreferenceRecord(BaseModel):
    """Model for storing learned preferences of a user"""

    __tablename__ = "user_preferences"

    user_id = Column(String(36), ForeignKey("user_profiles.id"), nullable=False, unique=True, index=True)

    interest_weights = Column(JSON, default=dict, nullable=False)
    personality_trait_preferences = Column(JSON, default=dict, nullable=False)

    match_acceptance_count = Column(Integer, default=0, nullable=False)
    match_rejection_count = Column(Integer, default=0, nullable=False)
    profile_view_count = Column(Integer, default=0, nullable=False)
    average_accepted_compatibility_score = Column(Float, default=0.0, nullable=False)

    learning_session_count = Column(Integer, default=0, nullable=False)
    last_learning_session_at = Column(DateTime, nullable=True)

    def __repr__(self):
        return (f"<UserPreferenceRecord(user_id={self.user_id}, "
                f"accepted={self.match_acceptance_count}, rejected={self.match_rejection_count})>")

    def to_preference_model(self) -> PreferenceModel:
        model = PreferenceModel(
            user_id=self.user_id,
            interest_weights=dict(self.interest_weights or {}),
            personality_trait_preferences=dict(self.personality_trait_preferences or {}),
            match_acceptance_count=self.match_acceptance_count or 0,
            match_rejection_count=self.match_rejection_count or 0,
            profile_view_count=self.profile_view_count or 0,
            average_accepted_compatibility_score=self.average_accepted_compatibility_score or 0.0,
            learning_session_count=self.learning_session_count or 0,
            last_learning_session_at=self.last_learning_session_at,
        )
        if self.updated_at is not None:
            model.last_updated_at = self.updated_at
        return model

    def apply_preference_model(self, model: PreferenceModel) -> None:
        """Copy the accumulated statistics of model onto this record"""
        # New dict objects so SQLAlchemy detects the JSON change
        self.interest_weights = dict(model.interest_weights)
        self.personality_trait_preferences = dict(model.personality_trait_preferences)
        self.match_acceptance_count = model.match_acceptance_count
        self.match_rejection_count = model.match_rejection_count
        self.profile_view_count = model.profile_view_count
        self.average_accepted_compatibility_score = model.average_accepted_compatibility_score
        self.learning_session_count = model.learning_session_count
        self.last_learning_session_at = model.last_learning_session_at
