"""
Narrow capabilities the scoring and ranking services consume
"""
from typing import List, Optional, Protocol

from ..models.preference_model import PreferenceModel
from ..models.profile_facts import ProfileFacts


class ProfileSource(Protocol):
    def get_profile_facts(self, user_id: str) -> Optional[ProfileFacts]:
        ...


class CandidateSource(Protocol):
    def get_candidates(self, user_id: str, limit: int) -> List[ProfileFacts]:
        """Active candidates already filtered for mutual gender interest"""
        ...


class PreferenceStore(Protocol):
    def get_preference_model(self, user_id: str) -> Optional[PreferenceModel]:
        ...

    def get_or_create(self, user_id: str) -> PreferenceModel:
        ...

    def save(self, model: PreferenceModel) -> PreferenceModel:
        ...
