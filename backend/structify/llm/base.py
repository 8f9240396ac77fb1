from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class PromptPart:
    role: str  # "model" | "user"
    text: str


class GenerationClient(ABC):
    @abstractmethod
    async def generate(self, parts: List[PromptPart]) -> str:
        """Generate model text from ordered, role-tagged prompt parts"""
        pass
