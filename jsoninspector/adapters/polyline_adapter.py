"""
Polyline adapter for nodes carrying ``Vertices``.
"""

from typing import Any, Dict, List

from ..models.elements import Element
from ..models.geometry import Polyline
from .base_adapter import BaseAdapter
from .context import InspectionContext


class PolylineAdapter(BaseAdapter):
    """One curve through the vertices, in order."""

    def convert(self, node: Dict[str, Any], context: InspectionContext) -> List[Element]:
        polyline = Polyline.model_validate(node)
        return [self.make_curve(polyline)]
