"""
Shape classification of untyped JSON objects.

A node's shape is chosen from an ordered table of key-presence rules; the
first rule whose keys are all present wins. Order matters for nodes that
satisfy more than one rule (a node with ``Transform``, ``Elements``, ``Id``,
``discriminator`` and ``Representation`` is a model, not an element).
"""

from enum import Enum
from typing import Any, Dict, List, Tuple


class Shape(str, Enum):
    MODEL = "model"
    PROFILE = "profile"
    GEOMETRIC_ELEMENT = "geometric_element"
    GENERIC_ELEMENT = "generic_element"
    POLYLINE = "polyline"
    VECTOR = "vector"
    TRANSFORM = "transform"
    BBOX = "bbox"
    UNKNOWN = "unknown"


SHAPE_RULES: Tuple[Tuple[Shape, Tuple[str, ...]], ...] = (
    (Shape.MODEL, ("Transform", "Elements")),
    (Shape.PROFILE, ("Perimeter",)),
    (Shape.GEOMETRIC_ELEMENT, ("Id", "discriminator", "Representation")),
    (Shape.GENERIC_ELEMENT, ("Id", "discriminator")),
    (Shape.POLYLINE, ("Vertices",)),
    (Shape.VECTOR, ("X", "Y", "Z")),
    (Shape.TRANSFORM, ("Matrix",)),
    (Shape.BBOX, ("Min", "Max")),
)


def _matches(node: Dict[str, Any], keys: Tuple[str, ...]) -> bool:
    return all(key in node for key in keys)


def classify(node: Dict[str, Any]) -> Shape:
    """Return the first shape whose rule the node satisfies, else UNKNOWN."""
    for shape, keys in SHAPE_RULES:
        if _matches(node, keys):
            return shape
    return Shape.UNKNOWN


def matching_shapes(node: Dict[str, Any]) -> List[Shape]:
    """Every shape whose rule the node satisfies, in priority order."""
    return [shape for shape, keys in SHAPE_RULES if _matches(node, keys)]
