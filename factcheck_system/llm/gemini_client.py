"""Gemini completion service running in JSON mode."""

from typing import Optional

import google.generativeai as genai
from google.generativeai.types.generation_types import BlockedPromptException
from loguru import logger

from factcheck_system.errors import ConfigurationError
from factcheck_system.llm.completion import CompletionService


class GeminiCompletionService(CompletionService):
    """
    Google Gemini completion service.

    Requests application/json output so replies parse directly as JSON objects.
    No retry is attempted here; the pipeline applies a deadline to every call
    and degrades the stage on failure.

    Attributes:
        model_name: Gemini model identifier
        temperature: Sampling temperature
    """

    name = "gemini"

    def __init__(self, api_key: str, model: str = "gemini-1.5-flash", temperature: float = 0.2):
        """
        Initialize Gemini client.

        Raises:
            ConfigurationError: If API key is not configured
        """
        if not api_key:
            raise ConfigurationError("GEMINI_API_KEY not configured in environment")

        genai.configure(api_key=api_key)
        self.model_name = model
        self.temperature = temperature
        self._logger = logger.bind(component="GeminiCompletionService")
        self._logger.info(f"Gemini client initialized with model {model}")

    async def complete(self, prompt: str, system: Optional[str] = None) -> str:
        """
        Generate a JSON completion for prompt.

        Raises:
            BlockedPromptException: If prompt violates safety policies
        """
        model = genai.GenerativeModel(self.model_name, system_instruction=system)
        try:
            response = await model.generate_content_async(
                prompt,
                generation_config=genai.types.GenerationConfig(
                    temperature=self.temperature,
                    response_mime_type="application/json",
                ),
            )
        except BlockedPromptException as e:
            self._logger.error(f"Prompt blocked by safety filters: {e}")
            raise
        return response.text
