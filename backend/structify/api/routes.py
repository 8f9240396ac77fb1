import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from structify.errors import InputValidationError
from structify.generation.coordinator import generate_validated
from structify.llm.base import GenerationClient
from structify.llm.config import get_generation_client
from structify.schemas import GenerateJsonRequest
from structify.shape.validator import ShapeValidator, synthesize

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["json"],
)


def parse_generate_request(body: Any) -> GenerateJsonRequest:
    try:
        return GenerateJsonRequest.model_validate(body)
    except ValidationError as e:
        raise InputValidationError(
            "Request body must contain 'data' (string) and 'format' (object)",
            errors=json.loads(e.json(include_url=False)),
        ) from e


async def read_generate_request(request: Request) -> GenerateJsonRequest:
    try:
        body = await request.json()
    except ValueError as e:
        # JSONDecodeError and UnicodeDecodeError
        raise InputValidationError(f"Request body is not valid JSON: {e}") from e

    return parse_generate_request(body)


def request_validator(
    req: GenerateJsonRequest = Depends(read_generate_request),
) -> ShapeValidator:
    # Fails with UnsupportedTypeError before any model call
    return synthesize(req.format)


# Dependencies resolve in declaration order: the body and its format are
# checked before the generation client is looked up.
@router.post("/json")
async def generate_json(
    req: GenerateJsonRequest = Depends(read_generate_request),
    validator: ShapeValidator = Depends(request_validator),
    client: GenerationClient = Depends(get_generation_client),
):
    logger.info(
        "Generating JSON for %d chars of data, %d top-level keys",
        len(req.data),
        len(req.format),
    )

    result = await generate_validated(client, validator, req.data, req.format)

    return JSONResponse(result, status_code=200)
