from structify.llm.base import GenerationClient, PromptPart
from structify.llm.chat_completions_client import ChatCompletionsClient
from structify.llm.gemini_client import GeminiClient
from structify.llm.config import get_generation_client
