"""Shared test fixtures: scripted stand-ins for the generation capability."""

from typing import List, Union

import pytest

from structify.llm.base import GenerationClient, PromptPart


class ScriptedClient(GenerationClient):
    """Returns (or raises) the scripted outcomes in order; the last one repeats."""

    def __init__(self, outcomes: List[Union[str, Exception]]):
        self.outcomes = outcomes
        self.calls: List[List[PromptPart]] = []

    @property
    def call_count(self) -> int:
        return len(self.calls)

    async def generate(self, parts: List[PromptPart]) -> str:
        self.calls.append(list(parts))
        outcome = self.outcomes[min(len(self.calls), len(self.outcomes)) - 1]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def scripted_client():
    return ScriptedClient
