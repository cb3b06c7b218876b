"""
Per-execution state shared by the shape adapters.
"""

from decimal import ROUND_HALF_UP, Context, Decimal
from enum import Enum
from typing import Dict, List, Optional

import structlog
from pydantic import BaseModel, Field

from ..models.elements import Element, ElementInstance, MeshElement
from ..models.geometry import Mesh, Transform, Vector3
from ..models.materials import DEFAULT_SEED, MaterialGenerator, X_AXIS

logger = structlog.get_logger()


class FailureKind(str, Enum):
    PARSE_FAILURE = "parse_failure"
    CLASSIFICATION_MISS = "classification_miss"
    CONVERSION_FAILURE = "conversion_failure"


class ConversionError(Exception):
    """A recognized node could not be converted; the message is the warning text."""


class InspectionWarning(BaseModel):
    kind: FailureKind
    message: str

    class Config:
        frozen = True


class WarningCollector:
    """Append-only, ordered list of diagnostics."""

    def __init__(self):
        self._records: List[InspectionWarning] = []

    def add(self, message: str, kind: FailureKind = FailureKind.CONVERSION_FAILURE):
        self._records.append(InspectionWarning(kind=kind, message=message))
        logger.warning("Inspection warning", failure_kind=kind.value, warning=message)

    @property
    def records(self) -> List[InspectionWarning]:
        return list(self._records)

    @property
    def messages(self) -> List[str]:
        return [record.message for record in self._records]

    def count_by_kind(self) -> Dict[str, int]:
        counts = {kind.value: 0 for kind in FailureKind}
        for record in self._records:
            counts[record.kind.value] += 1
        return counts

    def __len__(self) -> int:
        return len(self._records)


class PointMarkerCache:
    """Lazily built sphere prototype, instanced once per marked point."""

    def __init__(self, radius: float = 0.1, divisions: int = 10):
        self.radius = radius
        self.divisions = divisions
        self._prototype: Optional[MeshElement] = None
        self.build_count = 0

    @property
    def prototype(self) -> MeshElement:
        if self._prototype is None:
            self._prototype = MeshElement(
                name="Point Marker",
                mesh=Mesh.sphere(self.radius, self.divisions),
                transform=Transform(),
                material=X_AXIS,
                is_element_definition=True
            )
            self.build_count += 1
        return self._prototype

    def place(self, point: Vector3) -> ElementInstance:
        return ElementInstance(
            base_definition=self.prototype,
            transform=Transform.from_translation(point),
            name=point_label(point)
        )


# Wide enough for any finite float at one decimal
LABEL_CONTEXT = Context(prec=400, rounding=ROUND_HALF_UP)
LABEL_STEP = Decimal("0.1")


def label_coordinate(value: float) -> str:
    """One decimal, halves rounded away from zero (0.25 -> 0.3, -0.75 -> -0.8)."""
    return str(Decimal(repr(value)).quantize(LABEL_STEP, context=LABEL_CONTEXT))


def point_label(point: Vector3) -> str:
    return f"Point {label_coordinate(point.x)}, {label_coordinate(point.y)}, {label_coordinate(point.z)}"


class InspectionOutputs(BaseModel):
    """Result bundle of one inspection run."""

    entities: List[Element] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


class InspectionContext:
    """Mutable state owned by exactly one inspection run."""

    def __init__(self, material_seed: int = DEFAULT_SEED, marker_radius: float = 0.1,
                 marker_divisions: int = 10, axis_length: float = 1.0):
        self.markers = PointMarkerCache(radius=marker_radius, divisions=marker_divisions)
        self.materials = MaterialGenerator(seed=material_seed)
        self.warnings = WarningCollector()
        self.entities: List[Element] = []
        self.axis_length = axis_length

    def add_entities(self, entities: List[Element]):
        self.entities.extend(entities)

    def to_outputs(self) -> InspectionOutputs:
        return InspectionOutputs(entities=list(self.entities), warnings=self.warnings.messages)
