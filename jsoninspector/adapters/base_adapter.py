"""
Base adapter class for shape conversion.
"""

import json
from abc import ABC, abstractmethod
from typing import Any, Dict, List

import structlog

from ..models.elements import Element, ModelCurve, Material
from ..models.geometry import Line
from .context import InspectionContext

logger = structlog.get_logger()


def node_text(node: Dict[str, Any]) -> str:
    """Compact JSON text of a node for diagnostics."""
    try:
        return json.dumps(node, ensure_ascii=False)
    except (TypeError, ValueError, RecursionError):
        pass
    try:
        return str(node)
    except RecursionError:
        return f"<{type(node).__name__} nested too deeply to print>"


class BaseAdapter(ABC):
    """Base class for all shape adapters.

    ``convert`` either returns every element built from the node or raises;
    it never returns a partial result. The inspector turns exceptions into
    warnings.
    """

    def __init__(self):
        self.processed_count = 0
        self.error_count = 0

    @abstractmethod
    def convert(self, node: Dict[str, Any], context: InspectionContext) -> List[Element]:
        """Convert one JSON object into elements."""
        pass

    def process(self, node: Dict[str, Any], context: InspectionContext) -> List[Element]:
        """Convert and keep statistics."""
        try:
            elements = self.convert(node, context)
        except Exception:
            self.error_count += 1
            raise
        self.processed_count += 1
        return elements

    def make_curve(self, curve: Any, material: Material = None) -> ModelCurve:
        return ModelCurve(curve=curve, material=material)

    def curves_from_lines(self, lines: List[Line], materials: List[Material] = None) -> List[ModelCurve]:
        materials = materials or [None] * len(lines)
        return [self.make_curve(line, material) for line, material in zip(lines, materials)]

    def get_processing_stats(self) -> Dict[str, int]:
        """Get processing statistics."""
        return {
            'processed_count': self.processed_count,
            'error_count': self.error_count
        }

    def reset_stats(self):
        """Reset processing statistics."""
        self.processed_count = 0
        self.error_count = 0
