"""
Element model and the scene document container.

Elements are the entities an inspection run produces. They parse from and
serialize to Elements-style JSON (``Id``, ``Name``, ``Material``,
``Representation``, ...) with the concrete type carried in the
``discriminator`` key.
"""

import json
import uuid
from typing import Annotated, Any, ClassVar, Dict, List, Literal, Optional, Set, Type, Union

from pydantic import BaseModel, Field, computed_field, field_serializer, field_validator, model_validator

from .geometry import Line, Polygon, Polyline, Profile, Transform, Vector3, Mesh


class Color(BaseModel):
    red: float = Field(alias="Red", ge=0.0, le=1.0)
    green: float = Field(alias="Green", ge=0.0, le=1.0)
    blue: float = Field(alias="Blue", ge=0.0, le=1.0)
    alpha: float = Field(default=1.0, alias="Alpha", ge=0.0, le=1.0)

    class Config:
        frozen = True
        populate_by_name = True


class Element(BaseModel):
    """Base for everything placed in a model."""

    DISCRIMINATOR: ClassVar[str] = "Elements.Element"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), alias="Id")
    name: Optional[str] = Field(default=None, alias="Name")

    class Config:
        populate_by_name = True
        allow_inf_nan = False

    def to_json_dict(self) -> Dict[str, Any]:
        data = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        data["discriminator"] = self.DISCRIMINATOR
        return data


class Material(Element):
    DISCRIMINATOR: ClassVar[str] = "Elements.Material"

    color: Color = Field(alias="Color")


def parse_curve(data: Any) -> Union[Line, Polyline, Polygon]:
    """Build a curve from its discriminator, falling back on its keys."""
    if isinstance(data, (Line, Polyline, Polygon)):
        return data
    if not isinstance(data, dict):
        raise ValueError(f"Curve must be an object, got {type(data).__name__}")

    discriminator = data.get("discriminator", "")
    if discriminator == "Elements.Geometry.Line" or ("Start" in data and "End" in data):
        return Line.model_validate(data)
    if discriminator == "Elements.Geometry.Polygon":
        return Polygon.model_validate(data)
    if discriminator in ("Elements.Geometry.Polyline", "") and "Vertices" in data:
        return Polyline.model_validate(data)
    raise ValueError(f"Unsupported curve type {discriminator or 'unknown'}")


class ModelCurve(Element):
    DISCRIMINATOR: ClassVar[str] = "Elements.ModelCurve"

    curve: Union[Line, Polyline, Polygon] = Field(alias="Curve")
    material: Optional[Material] = Field(default=None, alias="Material")
    transform: Transform = Field(default_factory=Transform, alias="Transform")

    @field_validator("curve", mode="before")
    @classmethod
    def _parse_curve(cls, value: Any):
        return parse_curve(value)


class Extrude(BaseModel):
    discriminator: Literal["Elements.Geometry.Solids.Extrude"] = "Elements.Geometry.Solids.Extrude"
    profile: Profile = Field(alias="Profile")
    height: float = Field(alias="Height")
    direction: Vector3 = Field(default_factory=lambda: Vector3(x=0.0, y=0.0, z=1.0), alias="Direction")
    is_void: bool = Field(default=False, alias="IsVoid")

    class Config:
        populate_by_name = True
        allow_inf_nan = False


class Lamina(BaseModel):
    """Flat filled surface bounded by a profile."""

    discriminator: Literal["Elements.Geometry.Solids.Lamina"] = "Elements.Geometry.Solids.Lamina"
    profile: Profile = Field(alias="Profile")
    is_void: bool = Field(default=False, alias="IsVoid")

    class Config:
        populate_by_name = True

    @computed_field(alias="Area")
    @property
    def area(self) -> float:
        return self.profile.area()


SolidOperation = Annotated[Union[Extrude, Lamina], Field(discriminator="discriminator")]


class Representation(BaseModel):
    solid_operations: List[SolidOperation] = Field(alias="SolidOperations")

    class Config:
        populate_by_name = True


class GeometricElement(Element):
    DISCRIMINATOR: ClassVar[str] = "Elements.GeometricElement"

    transform: Transform = Field(default_factory=Transform, alias="Transform")
    material: Optional[Material] = Field(default=None, alias="Material")
    representation: Optional[Representation] = Field(default=None, alias="Representation")
    is_element_definition: bool = Field(default=False, alias="IsElementDefinition")


class MeshElement(Element):
    DISCRIMINATOR: ClassVar[str] = "Elements.MeshElement"

    mesh: Mesh = Field(alias="Mesh")
    transform: Transform = Field(default_factory=Transform, alias="Transform")
    material: Optional[Material] = Field(default=None, alias="Material")
    is_element_definition: bool = Field(default=False, alias="IsElementDefinition")


class ElementInstance(Element):
    """Placement of a shared element definition; holds the definition by reference."""

    DISCRIMINATOR: ClassVar[str] = "Elements.ElementInstance"

    base_definition: Element = Field(alias="BaseDefinition")
    transform: Transform = Field(default_factory=Transform, alias="Transform")

    @field_validator("base_definition")
    @classmethod
    def _must_be_definition(cls, value: Element) -> Element:
        if not getattr(value, "is_element_definition", False):
            raise ValueError("An instance must reference an element definition")
        return value

    @field_serializer("base_definition")
    def _serialize_base_definition(self, base_definition: Element, _info) -> str:
        return base_definition.id


class GenericElement(Element):
    """Minimal element: an identity plus a free-form property map.

    Every key other than ``Id`` and ``Name`` lands in
    ``additional_properties``. The ``discriminator`` type tag is consumed by
    the parse and not kept; callers that need it write it back themselves.
    """

    DISCRIMINATOR: ClassVar[str] = "Elements.GenericElement"

    discriminator: Optional[str] = None
    additional_properties: Dict[str, Any] = Field(default_factory=dict, alias="AdditionalProperties")

    @model_validator(mode="before")
    @classmethod
    def _collect_additional_properties(cls, data: Any):
        if not isinstance(data, dict):
            return data
        known = {"Id", "id", "Name", "name"}
        extras = dict(data.get("AdditionalProperties") or data.get("additional_properties") or {})
        for key, value in data.items():
            if key in known or key in ("AdditionalProperties", "additional_properties", "discriminator"):
                continue
            extras[key] = value
        collected = {key: value for key, value in data.items() if key in known}
        collected["additional_properties"] = extras
        return collected

    def to_json_dict(self) -> Dict[str, Any]:
        data = super().to_json_dict()
        if self.discriminator:
            data["discriminator"] = self.discriminator
        return data


ELEMENT_TYPES: Dict[str, Type[Element]] = {
    element_type.DISCRIMINATOR: element_type
    for element_type in (Material, ModelCurve, GeometricElement, MeshElement, ElementInstance)
}

# Keys whose string value is the id of another element in the same document
REFERENCE_KEYS = ("Material", "BaseDefinition")

# Same, inside each entry of Representation.SolidOperations
SOLID_OPERATION_REFERENCE_KEYS = ("Profile",)


class Model:
    """Scene document: a root transform and an ordered id -> element map."""

    def __init__(self, transform: Optional[Transform] = None,
                 elements: Optional[Dict[str, Element]] = None):
        self.transform = transform or Transform()
        self.elements: Dict[str, Element] = dict(elements or {})

    def all_elements_of_type(self, element_type: Type[Element]) -> List[Element]:
        return [e for e in self.elements.values() if isinstance(e, element_type)]

    @classmethod
    def from_json(cls, data: Union[str, Dict[str, Any]]) -> "Model":
        """Parse a complete scene document.

        Raises ``ValueError`` if the document or any of its elements is
        malformed; a document never loads partially.
        """
        if isinstance(data, str):
            data = json.loads(data)
        if not isinstance(data, dict):
            raise ValueError("Model document must be an object")

        raw_elements = data.get("Elements")
        if not isinstance(raw_elements, dict):
            raise ValueError("Model 'Elements' must be an object keyed by element id")

        transform = Transform.model_validate(data.get("Transform") or {})
        builder = _ElementBuilder(raw_elements)
        elements = {element_id: builder.build(element_id) for element_id in raw_elements}
        return cls(transform=transform, elements=elements)


class _ElementBuilder:
    """Builds document elements on demand, resolving id references."""

    def __init__(self, raw_elements: Dict[str, Any]):
        self.raw_elements = raw_elements
        self.built: Dict[str, Element] = {}
        self.profiles: Dict[str, Profile] = {}
        self.in_progress: Set[str] = set()

    def build(self, element_id: str) -> Element:
        if element_id in self.built:
            return self.built[element_id]
        if element_id in self.in_progress:
            raise ValueError(f"Circular reference through element {element_id}")
        if element_id not in self.raw_elements:
            raise ValueError(f"Reference to missing element {element_id}")

        raw = self.raw_elements[element_id]
        if not isinstance(raw, dict):
            raise ValueError(f"Element {element_id} must be an object")

        self.in_progress.add(element_id)
        try:
            element = self.build_from_dict(dict(raw, Id=raw.get("Id", element_id)))
        finally:
            self.in_progress.discard(element_id)
        self.built[element_id] = element
        return element

    def build_from_dict(self, raw: Dict[str, Any]) -> Element:
        for key in REFERENCE_KEYS:
            value = raw.get(key)
            if isinstance(value, str) and value in self.raw_elements:
                raw[key] = self.build(value)
            elif key == "BaseDefinition" and isinstance(value, dict):
                raw[key] = self.build_from_dict(dict(value))

        representation = raw.get("Representation")
        if isinstance(representation, dict) and isinstance(representation.get("SolidOperations"), list):
            raw["Representation"] = dict(
                representation,
                SolidOperations=[
                    self.resolve_solid_operation(operation)
                    for operation in representation["SolidOperations"]
                ]
            )

        discriminator = raw.get("discriminator", "")
        element_type = ELEMENT_TYPES.get(discriminator)
        if element_type is None:
            element_type = GeometricElement if "Representation" in raw else GenericElement
        element = element_type.model_validate(raw)
        if isinstance(element, GenericElement) and discriminator:
            element.discriminator = discriminator
            element.additional_properties["discriminator"] = discriminator
        return element

    def resolve_solid_operation(self, operation: Any) -> Any:
        if not isinstance(operation, dict):
            return operation
        resolved = dict(operation)
        for key in SOLID_OPERATION_REFERENCE_KEYS:
            value = resolved.get(key)
            if isinstance(value, str) and value in self.raw_elements:
                resolved[key] = self.build_profile(value)
        return resolved

    def build_profile(self, profile_id: str) -> Profile:
        """Profile geometry of a document entry, shared by every operation using it."""
        if profile_id not in self.profiles:
            raw = self.raw_elements[profile_id]
            if not isinstance(raw, dict):
                raise ValueError(f"Element {profile_id} must be an object")
            self.profiles[profile_id] = Profile.model_validate(raw)
        return self.profiles[profile_id]
