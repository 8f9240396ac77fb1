from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from structify.errors import UnsupportedTypeError


PRIMITIVE_KINDS = ("string", "number", "boolean")
SUPPORTED_KINDS = PRIMITIVE_KINDS + ("array", "object")

# Reserved key: never treated as a field of an object descriptor
TYPE_KEY = "type"


# ============================================================
# SHAPE VARIANTS
# ============================================================

@dataclass
class PrimitiveShape:
    kind: str  # string | number | boolean


@dataclass
class ArrayShape:
    items: Optional["Shape"] = None  # None -> items are unconstrained


@dataclass
class ObjectShape:
    fields: Dict[str, "Shape"] = field(default_factory=dict)


Shape = Union[PrimitiveShape, ArrayShape, ObjectShape]


# ============================================================
# KIND INFERENCE
# ============================================================

def json_type_name(value: Any) -> str:
    """
    Name of the JSON type of a decoded value.
    bool is checked before int since it subclasses it.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def determine_kind(descriptor: Any) -> Any:
    """
    Kind of a descriptor node:

    1. explicit "type" value when the node is an object carrying one
    2. "array" for a bare JSON array (no item information)
    3. otherwise the JSON type of the node itself, so an object without
       "type" is an object descriptor and a bare "x" is a string leaf

    The returned kind is not checked here.
    """
    if isinstance(descriptor, dict) and TYPE_KEY in descriptor:
        return descriptor[TYPE_KEY]
    return json_type_name(descriptor)


# ============================================================
# PARSER
# ============================================================

def parse_descriptor(descriptor: Any) -> Shape:
    """
    Parse a raw shape descriptor into a tagged shape tree.

    Raises UnsupportedTypeError on the first node whose kind is not one of
    string, number, boolean, array or object.
    """
    kind = determine_kind(descriptor)

    if not isinstance(kind, str) or kind not in SUPPORTED_KINDS:
        raise UnsupportedTypeError(kind)

    if kind in PRIMITIVE_KINDS:
        return PrimitiveShape(kind=kind)

    if kind == "array":
        items = descriptor.get("items") if isinstance(descriptor, dict) else None
        if items is None:
            return ArrayShape(items=None)
        return ArrayShape(items=parse_descriptor(items))

    # ---- object ----
    # Any non-dict reaching here carried an explicit {"type": "object"}
    # so descriptor is always a dict.
    return ObjectShape(
        fields={
            key: parse_descriptor(sub)
            for key, sub in descriptor.items()
            if key != TYPE_KEY
        }
    )
