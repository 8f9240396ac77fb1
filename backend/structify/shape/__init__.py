"""
Shape descriptors and the validators synthesized from them.
"""

from structify.shape.descriptor import (
    ArrayShape,
    ObjectShape,
    PrimitiveShape,
    Shape,
    determine_kind,
    parse_descriptor,
)
from structify.shape.validator import (
    ShapeValidator,
    build_validator,
    synthesize,
)
