"""
Model validation utilities
"""
import uuid
from typing import FrozenSet, Optional

from ..errors import InvalidParameterError, OutOfRangeError


MIN_SCORE = 0
MAX_SCORE = 100
MIN_MAX_RESULTS = 1
MAX_MAX_RESULTS = 100


def validate_compatibility_score(score) -> bool:
    """
    Validate compatibility score is an integer between 0 and 100

    Args:
        score: Compatibility score to validate

    Returns:
        True if score is valid
    """
    return (isinstance(score, int) and not isinstance(score, bool)
            and MIN_SCORE <= score <= MAX_SCORE)


def validate_interest_weight(weight) -> bool:
    """Validate interest weight is a number between 0 and 1"""
    return (isinstance(weight, (int, float)) and not isinstance(weight, bool)
            and 0.0 <= weight <= 1.0)


def validate_trait_preference(preference) -> bool:
    """Validate personality trait preference is a number between -1 and 1"""
    return (isinstance(preference, (int, float)) and not isinstance(preference, bool)
            and -1.0 <= preference <= 1.0)


def ensure_score(score, field: str = "score") -> int:
    """
    Return score unchanged or raise OutOfRangeError

    Raises:
        OutOfRangeError: If score is not an integer in [0, 100]
    """
    if not validate_compatibility_score(score):
        raise OutOfRangeError(
            f"{field} must be an integer between {MIN_SCORE} and {MAX_SCORE}, got {score!r}",
            field=field, value=score
        )
    return score


def parse_interest_tags(interests: Optional[str]) -> FrozenSet[str]:
    """
    Split a comma-separated interests field into normalized tags

    Args:
        interests: Raw interests text, e.g. "Hiking, cooking ,travel"

    Returns:
        Lower-cased, trimmed, non-empty tags
    """
    if not interests:
        return frozenset()

    return frozenset(
        tag.strip().lower()
        for tag in interests.split(',')
        if tag.strip()
    )


def normalize_user_id(user_id, parameter: str = "user_id") -> str:
    """
    Validate a user identifier and return its canonical string form

    Raises:
        InvalidParameterError: If the identifier is missing or not a UUID
    """
    if user_id is None or (isinstance(user_id, str) and not user_id.strip()):
        raise InvalidParameterError(f"{parameter} is required", parameter=parameter)

    try:
        return str(uuid.UUID(str(user_id).strip()))
    except ValueError:
        raise InvalidParameterError(f"Invalid {parameter} format", parameter=parameter)


def validate_max_results(max_results) -> int:
    """
    Validate the requested result count

    Raises:
        InvalidParameterError: If max_results is not an integer in [1, 100]
    """
    if (not isinstance(max_results, int) or isinstance(max_results, bool)
            or not MIN_MAX_RESULTS <= max_results <= MAX_MAX_RESULTS):
        raise InvalidParameterError(
            f"max_results must be between {MIN_MAX_RESULTS} and {MAX_MAX_RESULTS}",
            parameter="max_results"
        )
    return max_results
