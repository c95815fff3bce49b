"""OpenAI chat-completions service running in JSON mode."""

from typing import Optional

from loguru import logger
from openai import AsyncOpenAI

from factcheck_system.errors import ConfigurationError
from factcheck_system.llm.completion import CompletionService


class OpenAICompletionService(CompletionService):
    """
    OpenAI chat completion service with response_format=json_object.

    Attributes:
        model: Chat model identifier (default gpt-4o-mini)
        client: AsyncOpenAI client
    """

    name = "openai"

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        client: Optional[AsyncOpenAI] = None,
    ):
        if client is None and not api_key:
            raise ConfigurationError("OPENAI_API_KEY not configured in environment")

        self.model = model
        # No SDK retries; each call is bounded by the stage deadline
        self.client = client or AsyncOpenAI(api_key=api_key, max_retries=0)
        self._owns_client = client is None
        self._logger = logger.bind(component="OpenAICompletionService")
        self._logger.info(f"OpenAI client initialized with model {model}")

    async def complete(self, prompt: str, system: Optional[str] = None) -> str:
        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        response = await self.client.chat.completions.create(
            model=self.model,
            response_format={"type": "json_object"},
            messages=messages,
        )
        return response.choices[0].message.content or ""

    async def aclose(self) -> None:
        """Close the AsyncOpenAI client if this service created it."""
        if self._owns_client:
            await self.client.close()
