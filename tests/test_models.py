"""
Unit tests for value models
"""
import uuid

import pytest

from dating_match_app.errors import InvalidParameterError, OutOfRangeError
from dating_match_app.models import (
    CompatibilityRequest,
    DetailedCompatibilityScore,
    GenderIdentity,
    MatchOutcome,
    MatchStatus,
    PreferenceModel,
    ProfileFacts,
    RankedMatch,
    RankingRequest,
    RankingResult,
    compatibility_level,
)
from dating_match_app.models.compatibility_score import round_half_up_ratio


class TestDetailedCompatibilityScore:
    """Test cases for DetailedCompatibilityScore"""

    def test_overall_is_weighted_sum(self):
        score = DetailedCompatibilityScore(interest=100, personality=70, lifestyle=80, value=60)

        # 30 + 21 + 20 + 9
        assert score.overall == 80

    def test_overall_rounds_half_up(self):
        # 0.30 * 5 = 1.5
        score = DetailedCompatibilityScore(interest=5, personality=0, lifestyle=0, value=0)
        assert score.overall == 2

        # 0.15 * 1 = 0.15
        score = DetailedCompatibilityScore(interest=0, personality=0, lifestyle=0, value=1)
        assert score.overall == 0

    def test_overall_bounds(self):
        assert DetailedCompatibilityScore().overall == 0
        assert DetailedCompatibilityScore(interest=100, personality=100, lifestyle=100, value=100).overall == 100

    def test_sub_score_out_of_range_rejected(self):
        with pytest.raises(OutOfRangeError):
            DetailedCompatibilityScore(interest=101)

        score = DetailedCompatibilityScore()
        with pytest.raises(OutOfRangeError):
            score.lifestyle = -1

    def test_update_core_factors_is_all_or_nothing(self):
        score = DetailedCompatibilityScore(interest=10, personality=20, lifestyle=30, value=40)

        with pytest.raises(OutOfRangeError):
            score.update_core_factors(90, 90, 90, 150)

        assert (score.interest, score.personality, score.lifestyle, score.value) == (10, 20, 30, 40)

        score.update_core_factors(90, 80, 70, 60)
        assert (score.interest, score.personality, score.lifestyle, score.value) == (90, 80, 70, 60)

    def test_add_factor_score(self):
        score = DetailedCompatibilityScore()
        score.add_factor_score("location", 100)

        assert score.factor_scores == {"location": 100}
        with pytest.raises(OutOfRangeError):
            score.add_factor_score("age", 120)

    def test_compatibility_levels(self):
        assert compatibility_level(80) == "Excellent"
        assert compatibility_level(79) == "Good"
        assert compatibility_level(60) == "Good"
        assert compatibility_level(40) == "Fair"
        assert compatibility_level(39) == "Low"

    def test_to_dict(self):
        data = DetailedCompatibilityScore(interest=50, personality=60, lifestyle=70, value=80).to_dict()

        assert data["interest_compatibility"] == 50
        assert data["overall_score"] == 63
        assert data["compatibility_level"] == "Good"
        assert data["fallback_used"] is False

    def test_round_half_up_ratio(self):
        assert round_half_up_ratio(1, 2) == 1
        assert round_half_up_ratio(1, 3) == 0
        assert round_half_up_ratio(200, 3) == 67
        assert round_half_up_ratio(250, 100) == 3


class TestProfileFacts:
    """Test cases for ProfileFacts"""

    def test_from_interests_normalizes_tags(self):
        facts = ProfileFacts.from_interests(str(uuid.uuid4()), " Hiking ,COOKING,, travel ")
        assert facts.interest_tags == frozenset({"hiking", "cooking", "travel"})

    def test_facts_are_immutable(self):
        facts = ProfileFacts(user_id=str(uuid.uuid4()))
        with pytest.raises(AttributeError):
            facts.age = 30

    def test_accepts_age(self):
        facts = ProfileFacts(user_id=str(uuid.uuid4()), min_age_preference=25, max_age_preference=35)

        assert facts.accepts_age(25)
        assert facts.accepts_age(35)
        assert not facts.accepts_age(24)
        assert not facts.accepts_age(36)
        assert not facts.accepts_age(None)

    def test_unset_age_bounds_are_unbounded(self):
        facts = ProfileFacts(user_id=str(uuid.uuid4()))
        assert facts.accepts_age(18)
        assert facts.accepts_age(99)

    def test_is_interested_in(self):
        facts = ProfileFacts.from_interests(
            str(uuid.uuid4()), interested_in_genders=[GenderIdentity.FEMALE, GenderIdentity.NON_BINARY]
        )

        assert facts.is_interested_in(GenderIdentity.FEMALE)
        assert not facts.is_interested_in(GenderIdentity.MALE)
        assert not facts.is_interested_in(None)

    def test_profile_text(self):
        facts = ProfileFacts.from_interests(
            str(uuid.uuid4()), "travel, cooking",
            display_name="Alice", age=29, bio="Loves the outdoors", occupation="Engineer", location="Portland"
        )

        assert facts.to_profile_text() == (
            "Name: Alice. Age: 29. Bio: Loves the outdoors. Interests: cooking, travel. "
            "Occupation: Engineer. Location: Portland"
        )

    def test_profile_text_with_missing_facts(self):
        facts = ProfileFacts(user_id="u-1")
        assert facts.to_profile_text() == "Name: u-1. Age: unknown"


class TestPreferenceModel:
    """Test cases for PreferenceModel"""

    def test_running_average_of_accepted_scores(self):
        model = PreferenceModel(user_id="u-1")
        model.record_acceptance(80)
        model.record_acceptance(70)
        model.record_acceptance(90)

        assert model.match_acceptance_count == 3
        assert model.average_accepted_compatibility_score == pytest.approx(80.0)

    def test_first_acceptance_sets_average(self):
        model = PreferenceModel(user_id="u-1")
        model.record_acceptance(0)

        assert model.match_acceptance_count == 1
        assert model.average_accepted_compatibility_score == 0.0

    def test_acceptance_out_of_range(self):
        model = PreferenceModel(user_id="u-1")
        with pytest.raises(OutOfRangeError):
            model.record_acceptance(101)
        assert model.match_acceptance_count == 0

    def test_acceptance_rate(self):
        model = PreferenceModel(user_id="u-1")
        assert model.acceptance_rate() == 0.0

        model.record_acceptance(80)
        model.record_rejection()
        model.record_rejection()
        model.record_rejection()
        assert model.acceptance_rate() == pytest.approx(0.25)

    def test_update_interest_weight(self):
        model = PreferenceModel(user_id="u-1")
        model.update_interest_weight(" Hiking ", 0.5)

        assert model.interest_weights == {"hiking": 0.5}

        with pytest.raises(OutOfRangeError, match="Weight must be between 0 and 1"):
            model.update_interest_weight("travel", 1.5)
        with pytest.raises(OutOfRangeError):
            model.update_interest_weight("travel", -0.1)
        assert "travel" not in model.interest_weights

    def test_update_personality_trait_preference(self):
        model = PreferenceModel(user_id="u-1")
        model.update_personality_trait_preference("Similar", -1)

        assert model.personality_trait_preferences == {"similar": -1.0}
        with pytest.raises(OutOfRangeError):
            model.update_personality_trait_preference("similar", 1.1)

    def test_profile_views_and_learning_sessions(self):
        model = PreferenceModel(user_id="u-1")
        model.record_profile_view()
        model.record_learning_session()

        assert model.profile_view_count == 1
        assert model.learning_session_count == 1
        assert model.last_learning_session_at is not None

    def test_reset_match_history(self):
        model = PreferenceModel(user_id="u-1")
        model.record_acceptance(80)
        model.record_rejection()
        model.update_interest_weight("hiking", 0.4)

        model.reset_match_history()

        assert model.match_acceptance_count == 0
        assert model.match_rejection_count == 0
        assert model.average_accepted_compatibility_score == 0.0
        assert model.interest_weights == {"hiking": 0.4}


class TestRequests:
    """Test cases for request structs"""

    def test_compatibility_request_normalizes_ids(self):
        a, b = uuid.uuid4(), uuid.uuid4()
        request = CompatibilityRequest(str(a).upper(), str(b))

        assert request.user_id_a == str(a)
        assert request.user_id_b == str(b)

    def test_compatibility_request_rejects_self(self):
        user_id = str(uuid.uuid4())
        with pytest.raises(InvalidParameterError, match="Cannot calculate compatibility with self"):
            CompatibilityRequest(user_id, user_id.upper())

    def test_compatibility_request_rejects_missing_id(self):
        with pytest.raises(InvalidParameterError, match="user_id_b is required"):
            CompatibilityRequest(str(uuid.uuid4()), "")

    def test_ranking_request_default(self):
        request = RankingRequest(str(uuid.uuid4()), default_max_results=7)
        assert request.max_results == 7

    @pytest.mark.parametrize("max_results", [0, 101])
    def test_ranking_request_invalid_max_results(self, max_results):
        with pytest.raises(InvalidParameterError):
            RankingRequest(str(uuid.uuid4()), max_results=max_results)


class TestMatchOutcomeAndRanking:
    """Test cases for match outcomes and ranking records"""

    def test_match_outcome_validates_score(self):
        with pytest.raises(OutOfRangeError):
            MatchOutcome(other_user_id="u-2", status=MatchStatus.ACCEPTED, compatibility_score=150)

    def test_ranked_match_to_dict(self):
        detailed = DetailedCompatibilityScore(interest=80, personality=80, lifestyle=80, value=80)
        match = RankedMatch(candidate_id="u-2", base_score=80, adjusted_score=88, detailed_score=detailed)

        data = match.to_dict()

        assert match.score_boost == 8
        assert data["compatibility_score"] == 80
        assert data["adjusted_score"] == 88
        assert data["score_boost"] == 8
        assert "candidate" not in data

    def test_empty_ranking_result(self):
        result = RankingResult(user_id="u-1")
        data = result.to_dict()

        assert data["ranked_matches"] == []
        assert data["total_candidates"] == 0
        assert data["preferences_applied"] is False
