"""
Typed request structs validated once at the service boundary
"""
from dataclasses import dataclass
from typing import Optional

from ..errors import InvalidParameterError
from .validators import normalize_user_id, validate_max_results


@dataclass(frozen=True)
class CompatibilityRequest:
    """Pairwise compatibility query between two distinct users"""
    user_id_a: str
    user_id_b: str

    def __post_init__(self):
        """Normalize identifiers and reject self-comparison."""
        user_id_a = normalize_user_id(self.user_id_a, "user_id_a")
        user_id_b = normalize_user_id(self.user_id_b, "user_id_b")
        if user_id_a == user_id_b:
            raise InvalidParameterError("Cannot calculate compatibility with self", parameter="user_id_b")

        object.__setattr__(self, "user_id_a", user_id_a)
        object.__setattr__(self, "user_id_b", user_id_b)


@dataclass(frozen=True)
class RankingRequest:
    """Request for a ranked candidate list"""
    user_id: str
    max_results: Optional[int] = None
    default_max_results: int = 10

    def __post_init__(self):
        """Normalize the identifier and validate max_results in [1, 100]."""
        object.__setattr__(self, "user_id", normalize_user_id(self.user_id, "user_id"))

        max_results = self.default_max_results if self.max_results is None else self.max_results
        object.__setattr__(self, "max_results", validate_max_results(max_results))
