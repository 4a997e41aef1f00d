"""
Shared test fixtures and configuration for the dating match application tests.
"""
import logging
import uuid

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from dating_match_app.database import Base
from dating_match_app.errors import IntelligenceUnavailableError
from dating_match_app.models import GenderIdentity, PreferenceModel, ProfileFacts
from dating_match_app.services.intelligence_provider import IntelligenceProvider, OllamaIntelligenceProvider


logger = logging.getLogger(__name__)


def make_user_id() -> str:
    return str(uuid.uuid4())


def make_profile(interests=None, **kwargs) -> ProfileFacts:
    """Build profile facts with a fresh user id unless one is given"""
    kwargs.setdefault("user_id", make_user_id())
    return ProfileFacts.from_interests(interests=interests, **kwargs)


class FixedIntelligenceProvider(IntelligenceProvider):
    """Provider returning a constant estimate and counting calls"""

    def __init__(self, score: int = 70):
        self.score = score
        self.calls = 0

    def estimate_compatibility(self, profile_text_a: str, profile_text_b: str) -> int:
        self.calls += 1
        return self.score


class FailingIntelligenceProvider(IntelligenceProvider):
    """Provider that is always unavailable"""

    def __init__(self, error: Exception = None):
        self.error = error or IntelligenceUnavailableError("connection refused")
        self.calls = 0

    def estimate_compatibility(self, profile_text_a: str, profile_text_b: str) -> int:
        self.calls += 1
        raise self.error

    def is_available(self) -> bool:
        return False


class InMemoryProfileSource:
    """Profile lookup and candidate pool over a list of facts"""

    def __init__(self, profiles=(), candidates=None):
        self.profiles = {profile.user_id: profile for profile in profiles}
        self.candidates = list(candidates) if candidates is not None else list(profiles)
        self.candidate_calls = []

    def get_profile_facts(self, user_id):
        return self.profiles.get(user_id)

    def get_candidates(self, user_id, limit):
        self.candidate_calls.append((user_id, limit))
        return [candidate for candidate in self.candidates if candidate.user_id != user_id][:limit]


class InMemoryPreferenceStore:
    """Preference store backed by a dict"""

    def __init__(self, models=()):
        self.models = {model.user_id: model for model in models}
        self.saved = []

    def get_preference_model(self, user_id):
        return self.models.get(user_id)

    def get_or_create(self, user_id):
        if user_id not in self.models:
            self.models[user_id] = PreferenceModel(user_id=user_id)
        return self.models[user_id]

    def save(self, model):
        self.models[model.user_id] = model
        self.saved.append(model.user_id)
        return model


@pytest.fixture
def db_session():
    """In-memory SQLite session with all tables created"""
    # Import models so they register with Base.metadata
    import dating_match_app.models  # noqa: F401

    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine, expire_on_commit=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def fixed_provider():
    return FixedIntelligenceProvider(70)


@pytest.fixture
def failing_provider():
    return FailingIntelligenceProvider()


@pytest.fixture
def alice():
    """Profile used as the requesting user in most tests"""
    return make_profile(
        interests="hiking, cooking, travel, photography",
        display_name="Alice",
        age=29,
        bio="I love hiking and cooking on weekends",
        location="Portland",
        occupation="Engineer",
        gender_identity=GenderIdentity.FEMALE,
        interested_in_genders=[GenderIdentity.MALE],
        min_age_preference=25,
        max_age_preference=35,
    )


@pytest.fixture
def bob():
    return make_profile(
        interests="hiking, music, travel",
        display_name="Bob",
        age=31,
        bio="I love music and hiking",
        location="portland",
        occupation="engineer",
        gender_identity=GenderIdentity.MALE,
        interested_in_genders=[GenderIdentity.FEMALE],
        min_age_preference=25,
        max_age_preference=40,
    )


@pytest.fixture(scope="session")
def ollama_availability():
    """
    Session-scoped fixture that checks Ollama service availability once per test session.

    Returns:
        dict: Contains 'available' (bool) and 'error_message' (str) keys
    """
    try:
        provider = OllamaIntelligenceProvider()
        if provider.is_available():
            logger.info("Ollama service is available for testing")
            return {'available': True, 'error_message': None}

        error_msg = "Ollama service unreachable or has no models"
        logger.warning(error_msg)
        return {'available': False, 'error_message': error_msg}
    except Exception as e:
        error_msg = f"Unexpected error checking Ollama availability: {str(e)}"
        logger.error(error_msg)
        return {'available': False, 'error_message': error_msg}


@pytest.fixture
def require_ollama(ollama_availability):
    """
    Fixture that skips tests if Ollama is not available.

    Raises:
        pytest.skip: If Ollama service is not available
    """
    if not ollama_availability['available']:
        pytest.skip(
            f"Ollama service is required but not available: {ollama_availability['error_message']}\n"
            f"Please ensure Ollama is running ('ollama serve') and a model is pulled"
        )


def pytest_configure(config):
    """
    Configure pytest with custom markers for Ollama-related tests.
    """
    config.addinivalue_line(
        "markers",
        "requires_ollama: mark test as requiring Ollama service to be available"
    )


def pytest_collection_modifyitems(config, items):
    """
    Automatically add requires_ollama marker to tests that use Ollama fixtures.
    """
    for item in items:
        if 'require_ollama' in getattr(item, 'fixturenames', ()):
            item.add_marker(pytest.mark.requires_ollama)
