"""
Typed views of the provider response bodies.

Each class decodes only the fields uc needs. A body of the wrong shape
raises UnexpectedResponseError instead of surfacing as a KeyError,
TypeError or IndexError deep inside a client.
"""
from dataclasses import dataclass
from typing import Any, Optional

from .errors import UnexpectedResponseError


def _api_error_message(body: Any) -> Optional[str]:
    """Returns the error message an API put in its body, if any."""
    if not isinstance(body, dict):
        return None
    error = body.get("error")
    if isinstance(error, dict) and isinstance(error.get("message"), str):
        return error["message"]
    if isinstance(error, str):
        return error
    return None


def _require(value: Any, kind: type, provider: str, body: Any) -> Any:
    if not isinstance(value, kind):
        raise UnexpectedResponseError(provider, _api_error_message(body))
    return value


def _first(items: Any, provider: str, body: Any) -> Any:
    items = _require(items, list, provider, body)
    if not items:
        raise UnexpectedResponseError(provider, _api_error_message(body))
    return items[0]


@dataclass(frozen=True)
class OllamaResponse:
    """Body of POST /api/generate with streaming disabled."""

    response: str
    model: Optional[str] = None

    @classmethod
    def from_dict(cls, body: Any) -> "OllamaResponse":
        provider = "Ollama"
        data = _require(body, dict, provider, body)
        text = _require(data.get("response"), str, provider, body)
        return cls(response=text, model=data.get("model"))

    @property
    def text(self) -> str:
        return self.response


@dataclass(frozen=True)
class ChatCompletionResponse:
    """Body of POST /v1/chat/completions."""

    content: str
    finish_reason: Optional[str] = None

    @classmethod
    def from_dict(cls, body: Any) -> "ChatCompletionResponse":
        provider = "OpenAI"
        data = _require(body, dict, provider, body)
        choice = _require(_first(data.get("choices"), provider, body), dict, provider, body)
        message = _require(choice.get("message"), dict, provider, body)
        content = _require(message.get("content"), str, provider, body)
        return cls(content=content, finish_reason=choice.get("finish_reason"))

    @property
    def text(self) -> str:
        return self.content


@dataclass(frozen=True)
class GenerateContentResponse:
    """Body of POST /v1beta/models/<model>:generateContent."""

    text: str
    finish_reason: Optional[str] = None

    @classmethod
    def from_dict(cls, body: Any) -> "GenerateContentResponse":
        provider = "Gemini"
        data = _require(body, dict, provider, body)
        candidate = _require(_first(data.get("candidates"), provider, body), dict, provider, body)
        content = _require(candidate.get("content"), dict, provider, body)
        part = _require(_first(content.get("parts"), provider, body), dict, provider, body)
        text = _require(part.get("text"), str, provider, body)
        return cls(text=text, finish_reason=candidate.get("finishReason"))
