from functools import lru_cache

from structify import config
from structify.errors import ConfigurationError
from structify.llm.base import GenerationClient
from structify.llm.chat_completions_client import ChatCompletionsClient
from structify.llm.gemini_client import GeminiClient


@lru_cache(maxsize=1)
def get_generation_client() -> GenerationClient:
    """
    Process-wide generation client, built on first use.
    A ConfigurationError is not cached, so fixing the env and retrying works.
    """
    if config.LLM_PROVIDER == "gemini":
        return GeminiClient(
            api_key=config.GEMINI_AI_KEY,
            model=config.GEMINI_MODEL,
            timeout=config.LLM_TIMEOUT_SECONDS,
        )

    if config.LLM_PROVIDER == "chat":
        return ChatCompletionsClient(
            base_url=config.LLM_BASE_URL,
            model=config.LLM_MODEL,
            temperature=config.LLM_TEMPERATURE,
            api_key=config.LLM_API_KEY,
            timeout=config.LLM_TIMEOUT_SECONDS,
        )

    raise ConfigurationError(
        f"Unknown LLM_PROVIDER {config.LLM_PROVIDER!r} (expected 'gemini' or 'chat')"
    )
