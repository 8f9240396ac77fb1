import asyncio
import logging
from typing import Dict, List

import requests

from structify.errors import (
    GenerationRateLimitError,
    GenerationTransportError,
)
from structify.llm.base import GenerationClient, PromptPart

logger = logging.getLogger(__name__)

# Chat APIs have no "model" role; the instruction part becomes the system turn
ROLE_MAP = {
    "model": "system",
    "user": "user",
}


def to_chat_messages(parts: List[PromptPart]) -> List[Dict[str, str]]:
    return [
        {"role": ROLE_MAP.get(part.role, part.role), "content": part.text}
        for part in parts
    ]


class ChatCompletionsClient(GenerationClient):
    """
    OpenAI-compatible /chat/completions client.

    The HTTP call is blocking (requests) and runs in a worker thread so the
    event loop stays free while a request waits on the model.
    """

    def __init__(
        self,
        base_url: str,
        model: str,
        temperature: float = 0.2,
        api_key: str = "",
        timeout: float = 60.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.temperature = temperature
        self.api_key = api_key
        self.timeout = timeout

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def complete(self, messages: List[Dict[str, str]]) -> str:
        url = f"{self.base_url}/chat/completions"

        try:
            response = requests.post(
                url,
                json={
                    "model": self.model,
                    "messages": messages,
                    "temperature": self.temperature,
                },
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise GenerationTransportError(f"Chat completions request failed: {e}") from e

        if response.status_code == 429:
            raise GenerationRateLimitError(
                f"Rate limited by {url}: {response.text[:200]}"
            )

        try:
            response.raise_for_status()
        except requests.HTTPError as e:
            raise GenerationTransportError(str(e)) from e

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise GenerationTransportError(
                f"Unexpected chat completions response: {response.text[:200]}"
            ) from e

        logger.debug("Chat completion from %s: %d chars", self.model, len(content or ""))
        return content or ""

    async def generate(self, parts: List[PromptPart]) -> str:
        return await asyncio.to_thread(self.complete, to_chat_messages(parts))
