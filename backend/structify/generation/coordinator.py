import logging
from typing import Any

from structify import config
from structify.errors import RetryBudgetExhaustedError
from structify.generation.prompts import build_prompt_parts
from structify.generation.retry import retry_async
from structify.llm.base import GenerationClient
from structify.shape.validator import ShapeValidator
from structify.utils.json_extract import parse_model_json

logger = logging.getLogger(__name__)


def _log_failed_attempt(attempt_num: int, error: BaseException, retries_left: int) -> None:
    logger.warning(
        "Attempt %d failed (%d retries left): %s: %s",
        attempt_num,
        retries_left,
        type(error).__name__,
        error,
    )


async def generate_validated(
    client: GenerationClient,
    validator: ShapeValidator,
    raw_data: str,
    descriptor: Any,
    retries: int = config.GENERATION_RETRIES,
) -> Any:
    """
    Ask the model for JSON matching `descriptor` and return the validated value.

    Each attempt is a full round trip: prompt -> model -> JSON parse ->
    validation. Transport, parse and validation failures are retried up to
    `retries` times; after that RetryBudgetExhaustedError is raised.
    """

    async def attempt() -> Any:
        parts = build_prompt_parts(raw_data, descriptor)
        text = await client.generate(parts)
        value = parse_model_json(text)
        return validator.validate(value)

    try:
        return await retry_async(attempt, retries, on_failure=_log_failed_attempt)
    except RetryBudgetExhaustedError as e:
        logger.error("Giving up after %d attempts: %s", e.attempts, e.last_error)
        raise
