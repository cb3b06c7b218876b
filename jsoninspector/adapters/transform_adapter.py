"""
Transform adapter: axis indicators for a local frame.
"""

from typing import Any, Dict, List

from ..models.elements import Element
from ..models.geometry import Transform
from ..models.materials import AXIS_MATERIALS
from .base_adapter import BaseAdapter
from .context import InspectionContext


class TransformAdapter(BaseAdapter):
    """X, Y and Z axis curves colored red, green and blue."""

    def convert(self, node: Dict[str, Any], context: InspectionContext) -> List[Element]:
        transform = Transform.model_validate(node)
        lines = transform.axis_lines(context.axis_length)
        return self.curves_from_lines(lines, list(AXIS_MATERIALS))
