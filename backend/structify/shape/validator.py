"""
Runtime validators built from shape trees.

Each shape node becomes a pydantic type:

    string   -> StrictStr
    number   -> StrictInt | finite StrictFloat (booleans, NaN, Infinity rejected)
    boolean  -> StrictBool
    array    -> List[item]  (List[Any] when items are unconstrained)
    object   -> dynamically created BaseModel, one aliased field per key

Every node below the root is wrapped in Optional. The root is only
nullable when it is not an object.
"""

import json
from typing import Annotated, Any, Dict, List, Optional, Union

from pydantic import (
    BeforeValidator,
    ConfigDict,
    Field,
    FiniteFloat,
    Strict,
    StrictBool,
    StrictInt,
    StrictStr,
    TypeAdapter,
    ValidationError,
    create_model,
)

from structify.errors import SchemaValidationError
from structify.shape.descriptor import (
    ArrayShape,
    ObjectShape,
    PrimitiveShape,
    Shape,
    parse_descriptor,
)


def _reject_bool(value: Any) -> Any:
    if isinstance(value, bool):
        raise ValueError("Input should be a valid number, not a boolean")
    return value


# JSON has no NaN or Infinity
StrictFiniteFloat = Annotated[FiniteFloat, Strict()]

JsonNumber = Annotated[Union[StrictInt, StrictFiniteFloat], BeforeValidator(_reject_bool)]

PRIMITIVE_TYPES: Dict[str, Any] = {
    "string": StrictStr,
    "number": JsonNumber,
    "boolean": StrictBool,
}

ROOT_MODEL_NAME = "Shape"


def _object_model(shape: ObjectShape, name: str) -> type:
    # JSON keys go into aliases: they may not be identifiers, may start
    # with "_" or shadow BaseModel attributes.
    fields: Dict[str, Any] = {}
    for index, (key, child) in enumerate(shape.fields.items()):
        fields[f"field_{index}"] = (
            shape_to_type(child, name=f"{name}_{index}"),
            Field(..., alias=key),
        )

    return create_model(
        name,
        __config__=ConfigDict(extra="ignore"),
        **fields,
    )


def shape_to_type(shape: Shape, name: str = ROOT_MODEL_NAME, nullable: bool = True) -> Any:
    if isinstance(shape, PrimitiveShape):
        py_type = PRIMITIVE_TYPES[shape.kind]
    elif isinstance(shape, ArrayShape):
        if shape.items is None:
            py_type = List[Any]
        else:
            py_type = List[shape_to_type(shape.items, name=f"{name}_item")]
    else:
        py_type = _object_model(shape, name)

    return Optional[py_type] if nullable else py_type


class ShapeValidator:
    """Validates decoded JSON against one shape tree."""

    def __init__(self, shape: Shape):
        self.shape = shape
        root_nullable = not isinstance(shape, ObjectShape)
        self._adapter = TypeAdapter(shape_to_type(shape, nullable=root_nullable))

    def validate(self, value: Any) -> Any:
        """
        Return the validated value as plain JSON data, keyed by the original
        descriptor keys. Undeclared object keys are dropped.
        """
        try:
            validated = self._adapter.validate_python(value)
        except ValidationError as e:
            raise SchemaValidationError(
                f"Output does not match expected format "
                f"({e.error_count()} validation errors)",
                errors=json.loads(e.json(include_url=False)),
            ) from e

        return self._adapter.dump_python(validated, mode="json", by_alias=True)

    def accepts(self, value: Any) -> bool:
        try:
            self.validate(value)
        except SchemaValidationError:
            return False
        return True


def build_validator(shape: Shape) -> ShapeValidator:
    return ShapeValidator(shape)


def synthesize(descriptor: Any) -> ShapeValidator:
    """
    Build a fresh validator straight from a raw shape descriptor.
    Raises UnsupportedTypeError before anything is built.
    """
    return build_validator(parse_descriptor(descriptor))
