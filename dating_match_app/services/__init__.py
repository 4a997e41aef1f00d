"""
Services package for dating match application
"""

from .intelligence_provider import IntelligenceProvider, OllamaIntelligenceProvider, DisabledIntelligenceProvider
from .compatibility_service import CompatibilityEngine
from .match_ranking_service import MatchRankingEngine, apply_preference_boost, calculate_preference_boost
from .preference_learning_service import PreferenceLearningService, LearningSummary
from .profile_repository import ProfileRepository
from .preference_repository import PreferenceRepository
from .matching_service import MatchingService, OperationResult

__all__ = [
    "IntelligenceProvider",
    "OllamaIntelligenceProvider",
    "DisabledIntelligenceProvider",
    "CompatibilityEngine",
    "MatchRankingEngine",
    "apply_preference_boost",
    "calculate_preference_boost",
    "PreferenceLearningService",
    "LearningSummary",
    "ProfileRepository",
    "PreferenceRepository",
    "MatchingService",
    "OperationResult",
]
