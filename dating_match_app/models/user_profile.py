"""
User profile model holding the facts used for compatibility scoring
"""
from sqlalchemy import Boolean, Column, Enum, Integer, JSON, String, Text

from .base import BaseModel
from .profile_facts import GenderIdentity, ProfileFacts
from .validators import parse_interest_tags


class UserProfile(BaseModel):
    """Model for storing a dating profile"""

    __tablename__ = "user_profiles"

    full_name = Column(String(200), nullable=False)
    age = Column(Integer, nullable=True)
    bio = Column(Text, nullable=True)

    # Comma-separated free text, e.g. "hiking, cooking, travel"
    interests = Column(Text, nullable=True)
    location = Column(String(200), nullable=True)
    occupation = Column(String(200), nullable=True)

    gender_identity = Column(Enum(GenderIdentity), nullable=True, index=True)
    interested_in_genders = Column(JSON, default=list, nullable=False)

    # Dating preferences
    min_age = Column(Integer, nullable=True)
    max_age = Column(Integer, nullable=True)

    is_active = Column(Boolean, default=True, nullable=False, index=True)

    def __repr__(self):
        return f"<UserProfile(id={self.id}, name='{self.full_name}', active={self.is_active})>"

    @property
    def interest_tags(self):
        """Get normalized interest tags"""
        return parse_interest_tags(self.interests)

    @property
    def interested_in(self):
        """Get the genders this user is interested in as enum members"""
        return frozenset(GenderIdentity(value) for value in (self.interested_in_genders or []))

    def is_mutual_gender_match(self, other: "UserProfile") -> bool:
        """Check that each profile is interested in the other's gender identity"""
        return (other.gender_identity in self.interested_in
                and self.gender_identity in other.interested_in)

    def to_profile_facts(self) -> ProfileFacts:
        """Snapshot this record as immutable profile facts"""
        return ProfileFacts(
            user_id=self.id,
            display_name=self.full_name,
            age=self.age,
            bio=self.bio,
            interest_tags=self.interest_tags,
            location=self.location,
            occupation=self.occupation,
            gender_identity=self.gender_identity,
            interested_in_genders=self.interested_in,
            min_age_preference=self.min_age,
            max_age_preference=self.max_age,
        )
