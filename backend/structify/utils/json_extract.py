import json
import re
from typing import Any

from structify.errors import ResponseParseError


_FENCE_START = re.compile(r"^```(?:json)?\s*")
_FENCE_END = re.compile(r"\s*```$")


def strip_code_fences(text: str) -> str:
    """Remove a surrounding ```json ... ``` markdown fence, if any."""
    content = _FENCE_START.sub("", text.strip())
    return _FENCE_END.sub("", content.strip())


def _reject_constant(name: str) -> Any:
    # NaN / Infinity / -Infinity are accepted by json.loads but are not JSON
    raise ValueError(f"{name} is not a valid JSON value")


def parse_model_json(text: str) -> Any:
    """
    Parse model output as JSON.
    Raises ResponseParseError instead of guessing at partial objects.
    """
    cleaned = strip_code_fences(text or "")

    try:
        return json.loads(cleaned, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise ResponseParseError(
            f"Model output is not valid JSON: {e.msg} (line {e.lineno}, column {e.colno})",
            raw_text=text,
        ) from e
    except ValueError as e:
        raise ResponseParseError(f"Model output is not valid JSON: {e}", raw_text=text) from e
