"""
Immutable per-request profile facts consumed by the scoring engine
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional

from .validators import parse_interest_tags


class GenderIdentity(Enum):
    """Gender identity options"""
    MALE = "male"
    FEMALE = "female"
    NON_BINARY = "non_binary"
    OTHER = "other"


@dataclass(frozen=True)
class ProfileFacts:
    """
    Read-only snapshot of the user facts relevant to compatibility.

    Attributes:
        user_id: Canonical UUID string of the user
        age: Age in years, None when unknown
        bio: Free-text biography
        interest_tags: Lower-cased, trimmed interest tags
        location: Free-text location
        occupation: Free-text occupation
        gender_identity: The user's gender identity, None when undisclosed
        interested_in_genders: Genders the user is interested in
        min_age_preference: Lower bound of accepted partner age, None = unbounded
        max_age_preference: Upper bound of accepted partner age, None = unbounded
        display_name: Name used when rendering the profile text
    """
    user_id: str
    age: Optional[int] = None
    bio: Optional[str] = None
    interest_tags: FrozenSet[str] = field(default_factory=frozenset)
    location: Optional[str] = None
    occupation: Optional[str] = None
    gender_identity: Optional[GenderIdentity] = None
    interested_in_genders: FrozenSet[GenderIdentity] = field(default_factory=frozenset)
    min_age_preference: Optional[int] = None
    max_age_preference: Optional[int] = None
    display_name: Optional[str] = None

    @classmethod
    def from_interests(cls, user_id: str, interests: Optional[str] = None, **kwargs) -> "ProfileFacts":
        """Build facts from a raw comma-separated interests field"""
        genders = kwargs.pop("interested_in_genders", None) or ()
        return cls(
            user_id=user_id,
            interest_tags=parse_interest_tags(interests),
            interested_in_genders=frozenset(genders),
            **kwargs
        )

    def accepts_age(self, other_age: Optional[int]) -> bool:
        """Check whether other_age lies within this user's declared range"""
        if other_age is None:
            return False
        if self.min_age_preference is not None and other_age < self.min_age_preference:
            return False
        if self.max_age_preference is not None and other_age > self.max_age_preference:
            return False
        return True

    def is_interested_in(self, gender: Optional[GenderIdentity]) -> bool:
        return gender is not None and gender in self.interested_in_genders

    def to_profile_text(self) -> str:
        """
        Render the profile as a free-text summary for the intelligence provider

        Returns:
            Period-separated summary of name, age, bio, interests, occupation and location
        """
        parts = [
            f"Name: {self.display_name or self.user_id}",
            f"Age: {self.age if self.age is not None else 'unknown'}",
        ]

        if self.bio:
            parts.append(f"Bio: {self.bio}")
        if self.interest_tags:
            parts.append(f"Interests: {', '.join(sorted(self.interest_tags))}")
        if self.occupation:
            parts.append(f"Occupation: {self.occupation}")
        if self.location:
            parts.append(f"Location: {self.location}")

        return ". ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "user_id": self.user_id,
            "display_name": self.display_name,
            "age": self.age,
            "bio": self.bio,
            "interests": sorted(self.interest_tags),
            "location": self.location,
            "occupation": self.occupation,
            "gender_identity": self.gender_identity.value if self.gender_identity else None,
            "interested_in_genders": sorted(g.value for g in self.interested_in_genders),
            "min_age_preference": self.min_age_preference,
            "max_age_preference": self.max_age_preference,
        }
