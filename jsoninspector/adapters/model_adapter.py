"""
Model adapter: embedded scene documents flattened into the output.
"""

from typing import Any, Dict, List

from ..models.elements import Element, Model
from .base_adapter import BaseAdapter
from .context import InspectionContext


class ModelAdapter(BaseAdapter):
    """Adapter for nodes carrying ``Transform`` and ``Elements``."""

    def convert(self, node: Dict[str, Any], context: InspectionContext) -> List[Element]:
        """Every element of the document, in document order, without a wrapper."""
        model = Model.from_json(node)
        return list(model.elements.values())
