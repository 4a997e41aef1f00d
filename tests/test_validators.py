"""
Tests for model validators
"""
import uuid

import pytest

from dating_match_app.errors import InvalidParameterError, MatchingErrorType, OutOfRangeError
from dating_match_app.models.validators import (
    ensure_score,
    normalize_user_id,
    parse_interest_tags,
    validate_compatibility_score,
    validate_interest_weight,
    validate_max_results,
    validate_trait_preference,
)


class TestValidateCompatibilityScore:
    """Test compatibility score validation"""

    def test_valid_scores(self):
        for score in (0, 1, 50, 99, 100):
            assert validate_compatibility_score(score)

    def test_invalid_scores(self):
        for score in (-1, 101, 50.5, "50", None, True):
            assert not validate_compatibility_score(score)

    def test_ensure_score_raises_out_of_range(self):
        with pytest.raises(OutOfRangeError) as exc_info:
            ensure_score(101, "interest")

        assert exc_info.value.field == "interest"
        assert exc_info.value.value == 101
        assert exc_info.value.error_type == MatchingErrorType.OUT_OF_RANGE

    def test_out_of_range_is_value_error(self):
        with pytest.raises(ValueError):
            ensure_score(-5)


class TestWeightValidation:
    """Test interest weight and trait preference validation"""

    def test_interest_weight_bounds(self):
        assert validate_interest_weight(0)
        assert validate_interest_weight(0.5)
        assert validate_interest_weight(1.0)
        assert not validate_interest_weight(-0.01)
        assert not validate_interest_weight(1.01)
        assert not validate_interest_weight("0.5")

    def test_trait_preference_bounds(self):
        assert validate_trait_preference(-1)
        assert validate_trait_preference(0.0)
        assert validate_trait_preference(1)
        assert not validate_trait_preference(-1.5)
        assert not validate_trait_preference(1.5)


class TestParseInterestTags:
    """Test interest tag parsing"""

    def test_normalizes_case_and_whitespace(self):
        assert parse_interest_tags(" Hiking, COOKING ,travel") == frozenset({"hiking", "cooking", "travel"})

    def test_drops_empty_tags(self):
        assert parse_interest_tags("hiking,, ,cooking,") == frozenset({"hiking", "cooking"})

    def test_duplicates_collapse(self):
        assert parse_interest_tags("Hiking, hiking, HIKING") == frozenset({"hiking"})

    def test_empty_input(self):
        assert parse_interest_tags("") == frozenset()
        assert parse_interest_tags(None) == frozenset()


class TestNormalizeUserId:
    """Test user identifier validation"""

    def test_canonical_form(self):
        user_id = uuid.uuid4()
        assert normalize_user_id(str(user_id).upper()) == str(user_id)
        assert normalize_user_id(user_id) == str(user_id)

    def test_missing_identifier(self):
        for value in (None, "", "   "):
            with pytest.raises(InvalidParameterError, match="user_id is required"):
                normalize_user_id(value)

    def test_malformed_identifier(self):
        with pytest.raises(InvalidParameterError, match="Invalid user_id format") as exc_info:
            normalize_user_id("not-a-uuid")

        assert exc_info.value.parameter == "user_id"


class TestValidateMaxResults:
    """Test max_results validation"""

    def test_bounds_are_inclusive(self):
        assert validate_max_results(1) == 1
        assert validate_max_results(100) == 100

    @pytest.mark.parametrize("value", [0, -1, 101, 1000, None, "10", 5.0])
    def test_invalid_values(self, value):
        with pytest.raises(InvalidParameterError, match="max_results must be between 1 and 100"):
            validate_max_results(value)
