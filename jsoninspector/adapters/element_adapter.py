"""
Element adapters for nodes tagged with an ``Id`` and a ``discriminator``.
"""

from typing import Any, Dict, List

from ..models.elements import Element, GeometricElement, GenericElement
from .base_adapter import BaseAdapter
from .context import ConversionError, InspectionContext


def element_failure(node: Dict[str, Any]) -> ConversionError:
    return ConversionError(
        f"Could not deserialize {node.get('discriminator')} with id {node.get('Id')}"
    )


class GeometricElementAdapter(BaseAdapter):
    """Full structured parse of an element with a representation."""

    def convert(self, node: Dict[str, Any], context: InspectionContext) -> List[Element]:
        try:
            element = GeometricElement.model_validate(node)
        except Exception as e:
            raise element_failure(node) from e
        return [element]


class GenericElementAdapter(BaseAdapter):
    """Minimal parse: identity plus a free-form property map."""

    def convert(self, node: Dict[str, Any], context: InspectionContext) -> List[Element]:
        try:
            element = GenericElement.model_validate(node)
            discriminator = str(node["discriminator"])
            # The minimal parse drops the type tag; write it to both places.
            element.discriminator = discriminator
            element.additional_properties["discriminator"] = discriminator
        except Exception as e:
            raise element_failure(node) from e
        return [element]
