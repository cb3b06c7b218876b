"""
Inspector adapter for arbitrary JSON payloads.
Orchestrates normalization, shape classification and the shape adapters.
"""

import time
from typing import Any, Dict, List, Optional

import structlog

from ..config import Settings, settings as default_settings
from ..models.elements import Element
from ..services.logging_service import logging_service
from .base_adapter import BaseAdapter, node_text
from .bbox_adapter import BBoxAdapter
from .context import (
    ConversionError,
    FailureKind,
    InspectionContext,
    InspectionOutputs,
)
from .element_adapter import GenericElementAdapter, GeometricElementAdapter
from .json_normalizer import normalize_json
from .model_adapter import ModelAdapter
from .polyline_adapter import PolylineAdapter
from .profile_adapter import ProfileAdapter
from .shape_classifier import Shape, classify, matching_shapes
from .transform_adapter import TransformAdapter
from .vector_adapter import VectorAdapter

logger = structlog.get_logger()


class InspectorAdapter:
    """Main adapter turning one JSON text into elements and warnings."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or default_settings
        self.adapters: Dict[Shape, BaseAdapter] = {
            Shape.MODEL: ModelAdapter(),
            Shape.PROFILE: ProfileAdapter(),
            Shape.GEOMETRIC_ELEMENT: GeometricElementAdapter(),
            Shape.GENERIC_ELEMENT: GenericElementAdapter(),
            Shape.POLYLINE: PolylineAdapter(),
            Shape.VECTOR: VectorAdapter(),
            Shape.TRANSFORM: TransformAdapter(),
            Shape.BBOX: BBoxAdapter(),
        }

        # Processing statistics of the last run
        self.shape_counts: Dict[str, int] = {}
        self.warning_counts: Dict[str, int] = {}
        self.used_unescape = False
        self.duration_ms = 0

    def new_context(self) -> InspectionContext:
        return InspectionContext(
            material_seed=self.settings.material_seed,
            marker_radius=self.settings.point_marker_radius,
            marker_divisions=self.settings.point_marker_divisions,
            axis_length=self.settings.transform_axis_length
        )

    def inspect(self, text: Optional[str]) -> InspectionOutputs:
        """
        Convert a JSON payload into elements.

        Never raises: every failure becomes a warning in the returned bundle.

        Returns:
            InspectionOutputs with entities and warnings in input order
        """
        self.reset_stats()
        run_id = logging_service.new_run_id()
        start_time = time.time()
        context = self.new_context()

        normalized = normalize_json(text, context.warnings)
        self.used_unescape = normalized.unescaped

        if normalized.parsed:
            for node in self._top_level_objects(normalized.tree):
                self.process_object(node, context)

        self.duration_ms = int((time.time() - start_time) * 1000)
        self.warning_counts = context.warnings.count_by_kind()

        logging_service.logger.info(
            "Inspection completed",
            run_id=run_id,
            entity_count=len(context.entities),
            warning_count=len(context.warnings),
            shape_counts=self.shape_counts,
            unescaped=self.used_unescape,
            duration_ms=self.duration_ms
        )

        return context.to_outputs()

    def _top_level_objects(self, tree: Any) -> List[Dict[str, Any]]:
        """Objects to classify: the tree itself, or the objects of a top-level array."""
        if isinstance(tree, list):
            return [item for item in tree if isinstance(item, dict)]
        if isinstance(tree, dict):
            return [tree]
        return []

    def process_object(self, node: Dict[str, Any], context: InspectionContext):
        """Classify and convert one node; failures stay local to the node."""
        shape = classify(node)
        self.shape_counts[shape.value] = self.shape_counts.get(shape.value, 0) + 1

        candidates = matching_shapes(node)
        if len(candidates) > 1:
            logger.debug(
                "Node matches several shapes",
                chosen=shape.value,
                candidates=[candidate.value for candidate in candidates]
            )

        adapter = self.adapters.get(shape)
        if adapter is None:
            context.warnings.add(
                f"Could not deserialize {node_text(node)}",
                FailureKind.CLASSIFICATION_MISS
            )
            return

        try:
            elements: List[Element] = adapter.process(node, context)
        except ConversionError as e:
            context.warnings.add(str(e), FailureKind.CONVERSION_FAILURE)
            return
        except Exception as e:
            logger.debug("Shape conversion failed", shape=shape.value, error=str(e))
            context.warnings.add(
                f"Could not deserialize {node_text(node)}",
                FailureKind.CONVERSION_FAILURE
            )
            return

        context.add_entities(elements)

    def get_processing_summary(self) -> Dict[str, Any]:
        """Get summary of the last run."""
        return {
            'shape_counts': dict(self.shape_counts),
            'warning_counts': dict(self.warning_counts),
            'used_unescape': self.used_unescape,
            'duration_ms': self.duration_ms,
            'adapter_stats': {
                shape.value: adapter.get_processing_stats()
                for shape, adapter in self.adapters.items()
            }
        }

    def reset_stats(self):
        """Reset processing statistics."""
        self.shape_counts = {}
        self.warning_counts = {}
        self.used_unescape = False
        self.duration_ms = 0

        for adapter in self.adapters.values():
            adapter.reset_stats()


def inspect_json(text: Optional[str], settings: Optional[Settings] = None) -> InspectionOutputs:
    """Inspect a JSON payload with a fresh adapter."""
    return InspectorAdapter(settings).inspect(text)
