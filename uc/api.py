import logging
from abc import ABC, abstractmethod
from typing import Dict, Any, Optional

import requests

from .config import Config
from .errors import (
    ConfigurationError,
    EmptyCommandError,
    ResponseParseError,
    TransportError,
)
from .parser import clean_response
from .prompts import build_prompt
from .responses import ChatCompletionResponse, GenerateContentResponse, OllamaResponse
from .system import detect_os

# Configure logging
logger = logging.getLogger(__name__)

OLLAMA_GENERATE_PATH = "/api/generate"
OPENAI_CHAT_URL = "https://api.openai.com/v1/chat/completions"
GEMINI_API_URL = "https://generativelanguage.googleapis.com/v1beta"
OPENAI_MAX_TOKENS = 100


class BaseClient(ABC):
    """
    Common behaviour of the LLM backends.

    Subclasses describe their wire format: where to POST, what body and
    headers to send, and how to decode the answer. Prompt construction,
    the HTTP round trip and response cleaning live here so every backend
    behaves the same way.
    """

    provider_name = "LLM"
    response_type: Any = None

    def __init__(self, model: str, timeout: Optional[float] = None,
                 custom_instructions: str = "", os_info: Optional[str] = None):
        self.model = model
        self.timeout = timeout
        self.custom_instructions = custom_instructions
        self.os_info = os_info or detect_os()

    @abstractmethod
    def _endpoint(self) -> str:
        """URL the request is posted to."""

    @abstractmethod
    def _request_body(self, prompt: str) -> Dict[str, Any]:
        """JSON body for a single prompt."""

    def _headers(self) -> Dict[str, str]:
        return {"Content-Type": "application/json"}

    def _params(self) -> Dict[str, str]:
        return {}

    def generate_command(self, natural_language: str) -> str:
        """
        Generates a shell command from a natural language request.

        Args:
            natural_language: What the user wants to do.

        Returns:
            The cleaned command, never empty.

        Raises:
            GenerationError: If the call fails, the answer cannot be decoded,
                or nothing usable is left after cleaning.
        """
        prompt = build_prompt(natural_language, self.os_info, self.custom_instructions)
        body = self._post(self._request_body(prompt))
        decoded = self.response_type.from_dict(body)

        command = clean_response(decoded.text)
        if not command:
            raise EmptyCommandError()
        return command

    def _post(self, payload: Dict[str, Any]) -> Any:
        """Sends the request and returns the parsed JSON body."""
        logger.info(f"Sending request to {self.provider_name} ({self.model})")
        try:
            response = requests.post(
                self._endpoint(),
                params=self._params() or None,
                headers=self._headers(),
                json=payload,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.info(f"{self.provider_name} request failed: {e}")
            raise TransportError(f"failed to call {self.provider_name} API: {e}") from e

        logger.info(f"{self.provider_name} responded with HTTP {response.status_code}")
        try:
            return response.json()
        except ValueError as e:
            logger.info(f"{self.provider_name} returned a non-JSON body: {response.text[:200]!r}")
            raise ResponseParseError(f"could not parse {self.provider_name} response: {e}") from e

    def get_provider_info(self) -> str:
        """Returns provider and model information for the banner."""
        return f"{self.provider_name} ({self.model})"

    def __str__(self) -> str:
        return f"{self.__class__.__name__}(model='{self.model}')"


class OllamaClient(BaseClient):
    """A client for a local Ollama server."""

    provider_name = "Ollama"
    response_type = OllamaResponse

    def __init__(self, url: str, model: str, **kwargs):
        super().__init__(model, **kwargs)
        self.url = url

    def _endpoint(self) -> str:
        return self.url.rstrip("/") + OLLAMA_GENERATE_PATH

    def _request_body(self, prompt: str) -> Dict[str, Any]:
        return {"model": self.model, "prompt": prompt, "stream": False}


class OpenAIClient(BaseClient):
    """A client for the OpenAI chat completions API."""

    provider_name = "OpenAI"
    response_type = ChatCompletionResponse

    def __init__(self, api_key: str, model: str, **kwargs):
        super().__init__(model, **kwargs)
        self.api_key = api_key

    def _endpoint(self) -> str:
        return OPENAI_CHAT_URL

    def _headers(self) -> Dict[str, str]:
        headers = super()._headers()
        headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _request_body(self, prompt: str) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": OPENAI_MAX_TOKENS,
        }


class GeminiClient(BaseClient):
    """A client for the Google Gemini generateContent API."""

    provider_name = "Gemini"
    response_type = GenerateContentResponse

    def __init__(self, api_key: str, model: str, **kwargs):
        super().__init__(model, **kwargs)
        self.api_key = api_key

    def _endpoint(self) -> str:
        return f"{GEMINI_API_URL}/models/{self.model}:generateContent"

    def _params(self) -> Dict[str, str]:
        return {"key": self.api_key}

    def _request_body(self, prompt: str) -> Dict[str, Any]:
        return {"contents": [{"parts": [{"text": prompt}]}]}


def create_client(config: Config, custom_instructions: str = "",
                  os_info: Optional[str] = None) -> BaseClient:
    """
    Creates the client for the configured provider.

    Args:
        config: Loaded settings.
        custom_instructions: Extra prompt directives added to every request.
        os_info: Host description; detected when not given.

    Returns:
        The client for config.provider.

    Raises:
        ConfigurationError: If the provider is unsupported or lacks its API key.
    """
    config.validate()
    common = {
        "timeout": config.request_timeout,
        "custom_instructions": custom_instructions,
        "os_info": os_info,
    }

    if config.provider == "ollama":
        return OllamaClient(url=config.ollama_url, model=config.ollama_model, **common)
    elif config.provider == "openai":
        return OpenAIClient(api_key=config.openai_key, model=config.openai_model, **common)
    elif config.provider == "gemini":
        return GeminiClient(api_key=config.gemini_key, model=config.gemini_model, **common)

    # validate() rejects anything else
    raise ConfigurationError(f"unsupported LLM provider: {config.provider}")
