"""
Vector adapter: a labeled point marker at an ``X``/``Y``/``Z`` location.
"""

from typing import Any, Dict, List

from ..models.elements import Element
from ..models.geometry import Vector3
from .base_adapter import BaseAdapter
from .context import InspectionContext


class VectorAdapter(BaseAdapter):

    def convert(self, node: Dict[str, Any], context: InspectionContext) -> List[Element]:
        vector = Vector3.model_validate(node)
        return [context.markers.place(vector)]
