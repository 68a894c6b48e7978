"""Text-completion providers: model catalogue and request/response shapes.

Each provider is a :class:`ProviderStrategy` in :data:`PROVIDERS`, keyed by
provider id. The network call itself is a *transport* callable injected
into :class:`ProviderSuggester`, so the HTTP client is the caller's choice.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from chatmate.config import SuggestionSettings, api_key_for_provider
from chatmate.core.state import GameState
from chatmate.suggestion.interfaces import SuggestionError
from chatmate.suggestion.prompting import SYSTEM_PROMPT, build_prompt

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ModelSpec:
    """A selectable model and the provider that serves it."""

    id: str
    name: str
    description: str
    api_url: str
    provider: str


MODELS: tuple[ModelSpec, ...] = (
    ModelSpec(
        id="gpt-3.5-turbo",
        name="OpenAI GPT-3.5",
        description="OpenAI's GPT-3.5 Turbo model",
        api_url="https://api.openai.com/v1/chat/completions",
        provider="openai",
    ),
)


@dataclass(frozen=True, slots=True)
class ProviderRequest:
    """One outbound HTTP POST with a JSON body."""

    url: str
    headers: dict[str, str] = field(default_factory=dict)
    payload: dict[str, Any] = field(default_factory=dict)


RequestBuilder = Callable[[ModelSpec, str, str, SuggestionSettings, str], ProviderRequest]
ResponseParser = Callable[[Mapping[str, Any]], str]
Transport = Callable[[ProviderRequest], Mapping[str, Any]]


@dataclass(frozen=True, slots=True)
class ProviderStrategy:
    build_request: RequestBuilder
    parse_response: ResponseParser


def build_chat_completions_request(
    model: ModelSpec,
    system_prompt: str,
    prompt: str,
    settings: SuggestionSettings,
    api_key: str,
) -> ProviderRequest:
    """Request in the chat-completions shape (system + user messages)."""
    return ProviderRequest(
        url=model.api_url,
        headers={
            "Content-Type": "application/json",
            "Authorization": f"Bearer {api_key}",
        },
        payload={
            "model": model.id,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": prompt},
            ],
            "temperature": settings.temperature,
            "max_tokens": settings.max_tokens,
        },
    )


def parse_chat_completions_response(payload: Mapping[str, Any]) -> str:
    """Text of the first choice; ``""`` when the reply carries no content."""
    if not isinstance(payload, Mapping):
        raise SuggestionError(f"Unexpected provider payload: {type(payload).__name__}")
    choices = payload.get("choices") or []
    if not isinstance(choices, list):
        raise SuggestionError(f"Unexpected choices: {choices!r}")
    if not choices:
        return ""
    first = choices[0]
    if not isinstance(first, Mapping):
        raise SuggestionError(f"Unexpected choice entry: {first!r}")
    message = first.get("message") or {}
    if not isinstance(message, Mapping):
        raise SuggestionError(f"Unexpected message: {message!r}")
    content = message.get("content")
    if content is None:
        return ""
    if not isinstance(content, str):
        raise SuggestionError(f"Unexpected message content: {content!r}")
    return content.strip()


PROVIDERS: dict[str, ProviderStrategy] = {
    "openai": ProviderStrategy(
        build_request=build_chat_completions_request,
        parse_response=parse_chat_completions_response,
    ),
}


def find_model(model_id: str, models: tuple[ModelSpec, ...] = MODELS) -> ModelSpec:
    """Catalogue entry for *model_id*; raises ``LookupError`` if unknown."""
    for model in models:
        if model.id == model_id:
            return model
    raise LookupError(f"Unknown model: {model_id!r}")


class ProviderSuggester:
    """:class:`~chatmate.suggestion.interfaces.MoveSuggester` backed by a provider."""

    __slots__ = ("_api_key", "_model", "_settings", "_strategy", "_transport")

    def __init__(
        self,
        transport: Transport,
        settings: SuggestionSettings | None = None,
        *,
        api_key: str | None = None,
        models: tuple[ModelSpec, ...] = MODELS,
        providers: Mapping[str, ProviderStrategy] = PROVIDERS,
    ) -> None:
        self._settings = settings or SuggestionSettings()
        self._model = find_model(self._settings.model_id, models)
        strategy = providers.get(self._model.provider)
        if strategy is None:
            raise LookupError(f"Unsupported provider: {self._model.provider!r}")
        self._strategy = strategy
        self._api_key = (
            api_key if api_key is not None else api_key_for_provider(self._model.provider)
        )
        if not self._api_key:
            _LOGGER.warning("No API key configured for provider %s", self._model.provider)
        self._transport = transport

    @property
    def model(self) -> ModelSpec:
        return self._model

    def suggest(self, state: GameState) -> str:
        prompt = build_prompt(state, window=self._settings.history_window)
        request = self._strategy.build_request(
            self._model, SYSTEM_PROMPT, prompt, self._settings, self._api_key
        )
        _LOGGER.debug("Requesting move from %s (%s)", self._model.id, request.url)
        payload = self._transport(request)
        text = self._strategy.parse_response(payload)
        _LOGGER.debug("Model %s replied %r", self._model.id, text)
        return text
