"""
Bounding box adapter: wireframe edges of a ``Min``/``Max`` box.
"""

from typing import Any, Dict, List

from ..models.elements import Element
from ..models.geometry import BBox3
from .base_adapter import BaseAdapter
from .context import InspectionContext


class BBoxAdapter(BaseAdapter):

    def convert(self, node: Dict[str, Any], context: InspectionContext) -> List[Element]:
        bbox = BBox3.model_validate(node)
        return self.curves_from_lines(bbox.edges())
