"""
Intelligence providers that estimate pairwise compatibility from profile text
"""
import logging
import re
import threading
import time
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

import ollama

from ..config import Settings, get_settings
from ..errors import IntelligenceUnavailableError


logger = logging.getLogger(__name__)


class IntelligenceProvider(ABC):
    """Capability that turns two profile summaries into a 0-100 estimate"""

    @abstractmethod
    def estimate_compatibility(self, profile_text_a: str, profile_text_b: str) -> int:
        """
        Estimate compatibility between two profiles

        Args:
            profile_text_a: Free-text summary of the first profile
            profile_text_b: Free-text summary of the second profile

        Returns:
            Integer estimate between 0 and 100

        Raises:
            IntelligenceUnavailableError: If no estimate can be produced
        """

    def is_available(self) -> bool:
        return True


class DisabledIntelligenceProvider(IntelligenceProvider):
    """Provider that is never available, forcing the deterministic fallback"""

    def estimate_compatibility(self, profile_text_a: str, profile_text_b: str) -> int:
        raise IntelligenceUnavailableError("Intelligence provider disabled")

    def is_available(self) -> bool:
        return False


class OllamaIntelligenceProvider(IntelligenceProvider):
    """Compatibility estimates from a local Ollama model"""

    def __init__(self, model_name: Optional[str] = None, client=None, settings: Optional[Settings] = None):
        """
        Initialize the Ollama provider

        Args:
            model_name: Ollama model to use (defaults to config setting)
            client: Pre-built Ollama client, mainly for tests
            settings: Settings override (defaults to get_settings())
        """
        self.settings = settings or get_settings()
        self.model_name = model_name or self.settings.ollama_model
        self.client = client
        self._ready = False
        self._unavailable_until = 0.0
        self._lock = threading.Lock()

    def _create_client(self):
        return ollama.Client(host=self.settings.ollama_host, timeout=self.settings.ollama_timeout)

    def _ensure_ready(self) -> None:
        """Connect to Ollama and resolve the model once, backing off after a failure"""
        if not self.settings.ollama_enabled:
            raise IntelligenceUnavailableError("Ollama disabled in configuration")

        with self._lock:
            if self._ready:
                return

            if time.monotonic() < self._unavailable_until:
                raise IntelligenceUnavailableError("Ollama recently unreachable, skipping call")

            try:
                if self.client is None:
                    self.client = self._create_client()

                available_models = self._list_model_names()
                if self.model_name not in available_models:
                    logger.warning(f"Model {self.model_name} not found. Available models: {available_models}")
                    if not available_models:
                        raise IntelligenceUnavailableError("No models available in Ollama")
                    self.model_name = available_models[0]
                    logger.info(f"Using model: {self.model_name}")

                self._ready = True
                logger.info("Ollama client initialized successfully")

            except IntelligenceUnavailableError:
                self._unavailable_until = time.monotonic() + self.settings.ollama_retry_after
                raise
            except Exception as e:
                self._unavailable_until = time.monotonic() + self.settings.ollama_retry_after
                logger.error(f"Failed to initialize Ollama client: {e}")
                raise IntelligenceUnavailableError(f"Failed to initialize Ollama client: {e}") from e

    def _list_model_names(self) -> List[str]:
        response = self.client.list()
        models_list = response.models if hasattr(response, 'models') else response.get('models', [])

        names = []
        for model in models_list:
            if hasattr(model, 'model'):
                names.append(model.model)
            elif isinstance(model, dict) and 'name' in model:
                names.append(model['name'])
            elif isinstance(model, str):
                names.append(model)
        return names

    def is_available(self) -> bool:
        """Check if Ollama service is reachable with a usable model"""
        try:
            self._ensure_ready()
            return True
        except IntelligenceUnavailableError:
            return False

    def get_model_info(self) -> Dict[str, str]:
        """
        Get information about the current Ollama model

        Raises:
            IntelligenceUnavailableError: If Ollama service is unavailable
        """
        self._ensure_ready()
        return {
            'status': 'available',
            'model': self.model_name,
            'host': self.settings.ollama_host,
        }

    def estimate_compatibility(self, profile_text_a: str, profile_text_b: str) -> int:
        self._ensure_ready()

        prompt = self._create_compatibility_prompt(profile_text_a, profile_text_b)
        try:
            response = self.client.generate(
                model=self.model_name,
                prompt=prompt,
                options={
                    'temperature': self.settings.ollama_temperature,
                    'num_predict': 10
                }
            )
            response_text = response['response']
        except ollama.ResponseError as e:
            logger.error(f"Ollama rejected compatibility request: {e}")
            raise IntelligenceUnavailableError(f"Failed to estimate compatibility with Ollama: {e}") from e
        except Exception as e:
            self._mark_unreachable()
            logger.error(f"Ollama compatibility estimate failed: {e}")
            raise IntelligenceUnavailableError(f"Failed to estimate compatibility with Ollama: {e}") from e

        return self._parse_score(response_text)

    def _mark_unreachable(self) -> None:
        """Drop the ready state and skip calls for ollama_retry_after seconds"""
        with self._lock:
            self._ready = False
            self._unavailable_until = time.monotonic() + self.settings.ollama_retry_after

    def _create_compatibility_prompt(self, profile_text_a: str, profile_text_b: str) -> str:
        return f"""
You are a relationship compatibility analyst. Rate how compatible these two dating profiles are.

PROFILE 1:
{profile_text_a}

PROFILE 2:
{profile_text_b}

Consider personality, values, interests and lifestyle.
IMPORTANT: Return ONLY a single integer between 0 and 100. No explanations.
"""

    def _parse_score(self, response_text: str) -> int:
        """
        Extract the first integer from the model response

        Raises:
            IntelligenceUnavailableError: If no integer in [0, 100] is present
        """
        match = re.search(r'\d+', response_text or '')
        if not match:
            raise IntelligenceUnavailableError(f"Ollama returned no score: {response_text!r}")

        score = int(match.group())
        if not 0 <= score <= 100:
            raise IntelligenceUnavailableError(f"Ollama returned out-of-range score: {score}")
        return score
