import json
from typing import Any, List

from structify.llm.base import PromptPart


MODEL_PROMPT = """
You are an AI that converts unstructured text into structured JSON.

Rules:
- Output ONLY valid JSON
- No markdown, no code fences, no explanations
- Follow the expected JSON format exactly: same keys, same nesting
- Use null for any value that cannot be found in the data
- Never invent data that is not present in the text
- Numbers must be JSON numbers, booleans must be true or false
"""

EXAMPLE_PROMPT = """DATA:
"The Apollo 11 mission launched on July 16, 1969 with three astronauts: Neil Armstrong, Buzz Aldrin and Michael Collins. It was crewed and it landed on the Moon."

-----------
Expected JSON format:
{
  "mission": { "type": "string" },
  "year": { "type": "number" },
  "crewed": { "type": "boolean" },
  "astronauts": {
    "type": "array",
    "items": {
      "name": { "type": "string" }
    }
  },
  "destination": {
    "body": { "type": "string" },
    "orbit_altitude_km": { "type": "number" }
  }
}

-----------
Valid JSON output in expected format:"""

EXAMPLE_RESPONSE = """{
  "mission": "Apollo 11",
  "year": 1969,
  "crewed": true,
  "astronauts": [
    { "name": "Neil Armstrong" },
    { "name": "Buzz Aldrin" },
    { "name": "Michael Collins" }
  ],
  "destination": {
    "body": "Moon",
    "orbit_altitude_km": null
  }
}"""

USER_CONTENT_TEMPLATE = """DATA:
"{data}"

-----------
Expected JSON format:
{format}

-----------
Valid JSON output in expected format:"""


def render_user_content(raw_data: str, descriptor: Any) -> str:
    return USER_CONTENT_TEMPLATE.format(
        data=raw_data,
        format=json.dumps(descriptor, indent=2),
    )


def build_prompt_parts(raw_data: str, descriptor: Any) -> List[PromptPart]:
    return [
        PromptPart(role="model", text=MODEL_PROMPT),
        PromptPart(role="user", text=EXAMPLE_PROMPT),
        PromptPart(role="user", text=EXAMPLE_RESPONSE),
        PromptPart(role="user", text=render_user_content(raw_data, descriptor)),
    ]
