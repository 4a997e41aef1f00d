"""
Profile lookup and candidate pool backed by the database
"""
from typing import Callable, Iterable, List, Optional, TypeVar, Union

from sqlalchemy.orm import Session

from ..database import get_db_context
from ..models.profile_facts import GenderIdentity, ProfileFacts
from ..models.user_profile import UserProfile


T = TypeVar("T")


class ProfileRepository:
    """Read profile facts and eligible candidates from the user_profiles table"""

    def __init__(self, db_session: Optional[Session] = None):
        """
        Initialize the profile repository

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

    def get_profile_facts(self, user_id: str) -> Optional[ProfileFacts]:
        """
        Get the facts of a single user

        Returns:
            ProfileFacts or None if the user does not exist
        """
        def operation(db: Session) -> Optional[ProfileFacts]:
            profile = db.query(UserProfile).filter(UserProfile.id == user_id).first()
            return profile.to_profile_facts() if profile else None

        return self._run(operation)

    def get_candidates(self, user_id: str, limit: int) -> List[ProfileFacts]:
        """
        Get active users with mutual gender interest, excluding the requester

        Args:
            user_id: Requesting user
            limit: Maximum number of candidates

        Returns:
            Up to limit candidates ordered by creation time
        """
        def operation(db: Session) -> List[ProfileFacts]:
            requester = db.query(UserProfile).filter(UserProfile.id == user_id).first()
            if requester is None:
                return []

            query = (db.query(UserProfile)
                     .filter(UserProfile.id != user_id, UserProfile.is_active.is_(True))
                     .order_by(UserProfile.created_at, UserProfile.id))

            candidates = []
            # Gender sets live in a JSON column, so the mutual check runs here
            for profile in query:
                if requester.is_mutual_gender_match(profile):
                    candidates.append(profile.to_profile_facts())
                    if len(candidates) >= limit:
                        break
            return candidates

        return self._run(operation)

    def add_profile(self,
                    full_name: str,
                    age: Optional[int] = None,
                    bio: Optional[str] = None,
                    interests: Union[str, Iterable[str], None] = None,
                    location: Optional[str] = None,
                    occupation: Optional[str] = None,
                    gender_identity: Optional[GenderIdentity] = None,
                    interested_in_genders: Iterable[GenderIdentity] = (),
                    min_age: Optional[int] = None,
                    max_age: Optional[int] = None,
                    is_active: bool = True,
                    user_id: Optional[str] = None) -> ProfileFacts:
        """Create a profile and return its facts"""
        if interests is not None and not isinstance(interests, str):
            interests = ", ".join(interests)

        def operation(db: Session) -> ProfileFacts:
            profile = UserProfile(
                full_name=full_name,
                age=age,
                bio=bio,
                interests=interests,
                location=location,
                occupation=occupation,
                gender_identity=gender_identity,
                interested_in_genders=[gender.value for gender in interested_in_genders],
                min_age=min_age,
                max_age=max_age,
                is_active=is_active,
            )
            if user_id:
                profile.id = user_id
            db.add(profile)
            db.flush()
            return profile.to_profile_facts()

        return self._run(operation)

    def set_active(self, user_id: str, is_active: bool) -> bool:
        """Activate or deactivate a profile, returning False if it does not exist"""
        def operation(db: Session) -> bool:
            profile = db.query(UserProfile).filter(UserProfile.id == user_id).first()
            if profile is None:
                return False
            profile.is_active = is_active
            return True

        return self._run(operation)
