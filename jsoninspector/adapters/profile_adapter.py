"""
Profile adapter: filled surface, outlines and vertex markers for a profile.
"""

from typing import Any, Dict, List

from ..models.elements import Element, GeometricElement, Lamina, Representation
from ..models.geometry import Profile
from .base_adapter import BaseAdapter
from .context import InspectionContext


class ProfileAdapter(BaseAdapter):
    """Adapter for nodes carrying a ``Perimeter``."""

    def convert(self, node: Dict[str, Any], context: InspectionContext) -> List[Element]:
        profile = Profile.model_validate(node)

        # Markers and outlines are built before the material is drawn so a
        # failure never advances the shared generator.
        outlines = [self.make_curve(loop.to_polyline()) for loop in profile.loops()]
        markers = [
            context.markers.place(vertex)
            for loop in profile.loops()
            for vertex in loop.vertices
        ]

        surface = GeometricElement(
            name=profile.name,
            representation=Representation(solid_operations=[Lamina(profile=profile)]),
            material=context.materials.next_material()
        )
        return [surface] + outlines + markers
