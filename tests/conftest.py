"""Shared fixtures: scripted completion service and sample pages."""

import asyncio
from typing import Optional, Union

import pytest

from factcheck_system.corroboration.schemas import Page
from factcheck_system.llm.completion import CompletionService


class ScriptedCompletion(CompletionService):
    """CompletionService replaying canned replies in order.

    A reply may be raw text, an exception to raise, or a float meaning
    "sleep this many seconds" (for deadline tests).
    """

    name = "scripted"

    def __init__(self, *replies: Union[str, Exception, float]) -> None:
        self.replies = list(replies)
        self.prompts: list[str] = []
        self.systems: list[Optional[str]] = []

    async def complete(self, prompt: str, system: Optional[str] = None) -> str:
        self.prompts.append(prompt)
        self.systems.append(system)
        if not self.replies:
            raise AssertionError("unexpected completion call")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, float):
            await asyncio.sleep(reply)
            return "{}"
        return reply

    @property
    def calls(self) -> int:
        return len(self.prompts)


@pytest.fixture
def scripted():
    """Factory building a ScriptedCompletion from replies."""
    return ScriptedCompletion


@pytest.fixture
def sample_page() -> Page:
    return Page(
        title="Vacina altera DNA",
        text="Publicação afirma que a vacina altera o DNA humano. URGENTE!",
        url="https://randomblog.net/post",
        domain="randomblog.net",
        published_time="2024-02-10",
    )
