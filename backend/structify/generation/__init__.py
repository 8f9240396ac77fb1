from structify.generation.coordinator import generate_validated
from structify.generation.prompts import build_prompt_parts
from structify.generation.retry import retry_async
