"""
Database utility functions
"""
from typing import Dict, List

from dating_match_app.database import get_db_context
from dating_match_app.models import (
    GenderIdentity,
    MatchOutcomeRecord,
    MatchStatus,
    UserPreferenceRecord,
    UserProfile,
)


SAMPLE_PROFILES = [
    dict(
        full_name="Alex Morgan",
        age=29,
        bio="Weekend hiker and home cook who loves quiet mornings and long conversations",
        interests="hiking, cooking, travel, photography",
        location="Portland",
        occupation="Software Engineer",
        gender_identity=GenderIdentity.FEMALE,
        interested_in_genders=[GenderIdentity.MALE],
        min_age=26,
        max_age=36,
    ),
    dict(
        full_name="Jordan Lee",
        age=31,
        bio="Home cook and trail runner who loves long conversations over coffee",
        interests="cooking, running, travel, coffee",
        location="Portland",
        occupation="Software Engineer",
        gender_identity=GenderIdentity.MALE,
        interested_in_genders=[GenderIdentity.FEMALE],
        min_age=25,
        max_age=35,
    ),
    dict(
        full_name="Sam Rivera",
        age=34,
        bio="Musician and photographer, always planning the next trip",
        interests="music, photography, travel",
        location="Seattle",
        occupation="Photographer",
        gender_identity=GenderIdentity.MALE,
        interested_in_genders=[GenderIdentity.FEMALE, GenderIdentity.NON_BINARY],
        min_age=28,
        max_age=40,
    ),
    dict(
        full_name="Casey Kim",
        age=27,
        bio="Board games, climbing and bad puns",
        interests="climbing, board games, hiking",
        location="portland",
        occupation="Teacher",
        gender_identity=GenderIdentity.MALE,
        interested_in_genders=[GenderIdentity.FEMALE],
        min_age=24,
        max_age=32,
    ),
    dict(
        full_name="Riley Chen",
        age=38,
        bio="Gardener and reader looking for someone calm",
        interests="gardening, reading",
        location="Boise",
        occupation="Nurse",
        gender_identity=GenderIdentity.NON_BINARY,
        interested_in_genders=[GenderIdentity.FEMALE, GenderIdentity.MALE],
        min_age=30,
        max_age=45,
    ),
]


def create_sample_data() -> Dict[str, str]:
    """
    Create sample profiles and match outcomes for local use

    Returns:
        Mapping of sample full names to their generated user ids
    """
    with get_db_context() as db:
        profiles = []
        for data in SAMPLE_PROFILES:
            data = dict(data)
            data["interested_in_genders"] = [gender.value for gender in data["interested_in_genders"]]
            profile = UserProfile(**data)
            db.add(profile)
            profiles.append(profile)

        db.flush()  # Get the IDs

        alex, jordan, sam, casey, _ = profiles
        outcomes = [
            MatchOutcomeRecord(user_id=alex.id, other_user_id=jordan.id,
                               status=MatchStatus.ACCEPTED, compatibility_score=82),
            MatchOutcomeRecord(user_id=alex.id, other_user_id=sam.id,
                               status=MatchStatus.ACCEPTED, compatibility_score=77),
            MatchOutcomeRecord(user_id=alex.id, other_user_id=casey.id,
                               status=MatchStatus.REJECTED, compatibility_score=48),
        ]
        for outcome in outcomes:
            db.add(outcome)

        print("✅ Sample data created successfully!")
        print(f"   - Created {len(profiles)} profiles")
        print(f"   - Created {len(outcomes)} match outcomes")

        return {profile.full_name: profile.id for profile in profiles}


def clear_all_data():
    """Clear all data from the database (for testing)"""
    with get_db_context() as db:
        # Delete in order to respect foreign key constraints
        db.query(MatchOutcomeRecord).delete()
        db.query(UserPreferenceRecord).delete()
        db.query(UserProfile).delete()

        print("✅ All data cleared from database")


def get_database_stats() -> Dict[str, int]:
    """Get statistics about the database contents"""
    with get_db_context() as db:
        return {
            "profiles": db.query(UserProfile).count(),
            "active_profiles": db.query(UserProfile).filter(UserProfile.is_active.is_(True)).count(),
            "preferences": db.query(UserPreferenceRecord).count(),
            "match_outcomes": db.query(MatchOutcomeRecord).count(),
        }


def list_profiles() -> List[UserProfile]:
    """Get all profiles ordered by creation time"""
    with get_db_context() as db:
        return db.query(UserProfile).order_by(UserProfile.created_at, UserProfile.id).all()
