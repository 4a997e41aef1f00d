"""
Models package

This package contains the SQLAlchemy models and the value types used by the
compatibility scoring and match ranking services.
"""

from .base import BaseModel, TimestampMixin
from .profile_facts import ProfileFacts, GenderIdentity
from .compatibility_score import DetailedCompatibilityScore, compatibility_level
from .preference_model import PreferenceModel
from .ranked_match import RankedMatch, RankingResult
from .match_outcome import MatchOutcome, MatchOutcomeRecord, MatchStatus
from .requests import CompatibilityRequest, RankingRequest
from .user_profile import UserProfile
from .user_preference import UserPreferenceRecord
from . import validators

__all__ = [
    "BaseModel",
    "TimestampMixin",
    "ProfileFacts",
    "GenderIdentity",
    "DetailedCompatibilityScore",
    "compatibility_level",
    "PreferenceModel",
    "RankedMatch",
    "RankingResult",
    "MatchOutcome",
    "MatchOutcomeRecord",
    "MatchStatus",
    "CompatibilityRequest",
    "RankingRequest",
    "UserProfile",
    "UserPreferenceRecord",
    "validators",
]
