"""Completion service interface shared by every language-model stage.

Pipeline stages only see CompletionService.complete_json(); which vendor
answers is decided once, from Settings.llm_provider, by
create_completion_service().
"""

import json
import re
from abc import ABC, abstractmethod
from typing import Any, Optional

from factcheck_system.config.settings import Settings
from factcheck_system.errors import ConfigurationError, MalformedCompletionError

_FENCED_JSON = re.compile(r"```(?:json)?\s*([\s\S]*?)```")
_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


def parse_json_object(response_text: str) -> dict[str, Any]:
    """
    Extract a JSON object from model output, tolerating markdown fences.

    Args:
        response_text: Raw completion text.

    Returns:
        Parsed JSON object.

    Raises:
        MalformedCompletionError: If no JSON object can be parsed.
    """
    text = (response_text or "").strip()

    fenced = _FENCED_JSON.search(text)
    if fenced:
        text = fenced.group(1).strip()

    obj_match = _JSON_OBJECT.search(text)
    if obj_match:
        text = obj_match.group(0)

    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedCompletionError(f"Invalid JSON in completion: {e}", raw_text=response_text) from e

    if not isinstance(parsed, dict):
        raise MalformedCompletionError(
            f"Expected a JSON object, got {type(parsed).__name__}", raw_text=response_text
        )
    return parsed


class CompletionService(ABC):
    """A language-model completion service returning JSON-shaped text."""

    name: str = "completion"

    @abstractmethod
    async def complete(self, prompt: str, system: Optional[str] = None) -> str:
        """Send one prompt and return the raw completion text."""

    async def complete_json(self, prompt: str, system: Optional[str] = None) -> dict[str, Any]:
        """Send one prompt and parse the reply as a JSON object.

        Raises:
            MalformedCompletionError: If the reply is not a JSON object.
        """
        text = await self.complete(prompt, system=system)
        return parse_json_object(text)

    async def aclose(self) -> None:
        """Release client resources held by the service."""


def create_completion_service(settings: Settings) -> CompletionService:
    """Instantiate the completion service selected by configuration.

    Raises:
        ConfigurationError: If the provider is unknown or its key is unset.
    """
    if settings.llm_provider == "openai":
        from factcheck_system.llm.openai_client import OpenAICompletionService

        return OpenAICompletionService(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
        )
    if settings.llm_provider == "gemini":
        from factcheck_system.llm.gemini_client import GeminiCompletionService

        return GeminiCompletionService(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
        )
    raise ConfigurationError(f"Unknown LLM provider: {settings.llm_provider}")
