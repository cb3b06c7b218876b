"""
Adapter layer for inspecting untyped JSON payloads.
Classifies each object by its keys and converts it into elements.
"""

from .base_adapter import BaseAdapter
from .model_adapter import ModelAdapter
from .profile_adapter import ProfileAdapter
from .element_adapter import GeometricElementAdapter, GenericElementAdapter
from .polyline_adapter import PolylineAdapter
from .vector_adapter import VectorAdapter
from .transform_adapter import TransformAdapter
from .bbox_adapter import BBoxAdapter
from .inspector_adapter import InspectorAdapter, inspect_json

__all__ = [
    'BaseAdapter',
    'ModelAdapter',
    'ProfileAdapter',
    'GeometricElementAdapter',
    'GenericElementAdapter',
    'PolylineAdapter',
    'VectorAdapter',
    'TransformAdapter',
    'BBoxAdapter',
    'InspectorAdapter',
    'inspect_json'
]
