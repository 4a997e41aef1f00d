"""
Match outcomes consumed by preference learning
"""
from dataclasses import dataclass
from enum import Enum

from sqlalchemy import Column, Enum as SAEnum, ForeignKey, Integer, String

from .base import BaseModel
from .validators import ensure_score


class MatchStatus(Enum):
    """Lifecycle status of a match"""
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    EXPIRED = "expired"


@dataclass(frozen=True)
class MatchOutcome:
    """A decided (or pending) match seen from one user's side"""
    other_user_id: str
    status: MatchStatus
    compatibility_score: int

    def __post_init__(self):
        ensure_score(self.compatibility_score, "compatibility_score")


class MatchOutcomeRecord(BaseModel):
    """Model for storing match outcomes of a user"""

    __tablename__ = "match_outcomes"

    user_id = Column(String(36), ForeignKey("user_profiles.id"), nullable=False, index=True)
    other_user_id = Column(String(36), ForeignKey("user_profiles.id"), nullable=False, index=True)
    status = Column(SAEnum(MatchStatus), default=MatchStatus.PENDING, nullable=False)
    compatibility_score = Column(Integer, nullable=False)

    def __repr__(self):
        return (f"<MatchOutcomeRecord(user_id={self.user_id}, other_user_id={self.other_user_id}, "
                f"status={self.status}, score={self.compatibility_score})>")

    def to_match_outcome(self) -> MatchOutcome:
        return MatchOutcome(
            other_user_id=self.other_user_id,
            status=self.status,
            compatibility_score=self.compatibility_score,
        )
