"""
Error taxonomy for compatibility scoring and match ranking
"""
from enum import Enum


class MatchingErrorType(Enum):
    """Types of matching errors for categorization at the service boundary"""
    USER_NOT_FOUND = "user_not_found"
    INVALID_PARAMETER = "invalid_parameter"
    OUT_OF_RANGE = "out_of_range"
    INTELLIGENCE_UNAVAILABLE = "intelligence_unavailable"
    CANCELLED = "cancelled"
    INTERNAL = "internal"


class MatchingError(Exception):
    """Base exception for matching errors"""
    def __init__(self, message: str, error_type: MatchingErrorType = MatchingErrorType.INTERNAL):
        super().__init__(message)
        self.error_type = error_type
        self.user_message = self._generate_user_message()

    def _generate_user_message(self) -> str:
        """Generate user-friendly error message"""
        if self.error_type == MatchingErrorType.USER_NOT_FOUND:
            return str(self)
        elif self.error_type == MatchingErrorType.INVALID_PARAMETER:
            return f"Invalid request: {self}"
        elif self.error_type == MatchingErrorType.CANCELLED:
            return "The request was cancelled before it completed."
        else:
            return f"An error occurred while matching: {self}"


class UserNotFoundError(MatchingError):
    """Exception raised when a requested or candidate user does not exist"""
    def __init__(self, user_id: str):
        super().__init__(f"User with ID {user_id} not found", MatchingErrorType.USER_NOT_FOUND)
        self.user_id = user_id


class InvalidParameterError(MatchingError):
    """Exception raised when a request parameter fails validation"""
    def __init__(self, message: str, parameter: str = None):
        super().__init__(message, MatchingErrorType.INVALID_PARAMETER)
        self.parameter = parameter


class OutOfRangeError(MatchingError, ValueError):
    """Exception raised when a score or weight is set outside its bounded domain"""
    def __init__(self, message: str, field: str = None, value=None):
        super().__init__(message, MatchingErrorType.OUT_OF_RANGE)
        self.field = field
        self.value = value


class IntelligenceUnavailableError(MatchingError):
    """Exception raised when the intelligence provider cannot produce an estimate"""
    def __init__(self, message: str):
        super().__init__(message, MatchingErrorType.INTELLIGENCE_UNAVAILABLE)


class RankingCancelledError(MatchingError):
    """Exception raised when the caller cancels an in-flight ranking"""
    def __init__(self, message: str = "Ranking cancelled"):
        super().__init__(message, MatchingErrorType.CANCELLED)


class RankingError(MatchingError):
    """Generic failure wrapping an unexpected fault"""
    def __init__(self, message: str, cause: BaseException = None):
        super().__init__(message, MatchingErrorType.INTERNAL)
        self.cause = cause
