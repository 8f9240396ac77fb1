import asyncio
import logging
from typing import List

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from structify.errors import (
    ConfigurationError,
    GenerationRateLimitError,
    GenerationTransportError,
)
from structify.llm.base import GenerationClient, PromptPart

logger = logging.getLogger(__name__)


def to_gemini_contents(parts: List[PromptPart]) -> List[types.Content]:
    return [
        types.Content(role=part.role, parts=[types.Part(text=part.text)])
        for part in parts
    ]


class GeminiClient(GenerationClient):
    """Multi-part generate_content client for Gemini models."""

    def __init__(self, api_key: str, model: str = "gemini-pro", timeout: float = 60.0):
        if not api_key:
            raise ConfigurationError(
                "No Gemini API key provided. Set the GEMINI_AI_KEY environment variable."
            )
        self.model = model
        self.timeout = timeout
        self._client = genai.Client(api_key=api_key)

    async def generate(self, parts: List[PromptPart]) -> str:
        try:
            response = await asyncio.wait_for(
                self._client.aio.models.generate_content(
                    model=self.model,
                    contents=to_gemini_contents(parts),
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            raise GenerationTransportError(
                f"Gemini request timed out after {self.timeout}s"
            ) from e
        except genai_errors.APIError as e:
            if e.code == 429:
                raise GenerationRateLimitError(f"Gemini quota exceeded: {e}") from e
            raise GenerationTransportError(f"Gemini request failed: {e}") from e
        except httpx.HTTPError as e:
            raise GenerationTransportError(f"Gemini request failed: {e}") from e

        # text is None when the candidate was blocked or empty
        text = response.text or ""
        logger.debug("Gemini %s returned %d chars", self.model, len(text))
        return text
