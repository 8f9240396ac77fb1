from pydantic import BaseModel, StrictStr
from typing import Any, Dict


class GenerateJsonRequest(BaseModel):
    data: StrictStr  # free-form text to structure
    format: Dict[str, Any]  # shape descriptor, passed through untouched
