"""
Materials: the built-in axis colors and the seeded random material generator.
"""

import uuid

import numpy as np

from .elements import Color, Material

X_AXIS = Material(name="X Axis", color=Color(red=1.0, green=0.0, blue=0.0, alpha=1.0))
Y_AXIS = Material(name="Y Axis", color=Color(red=0.0, green=1.0, blue=0.0, alpha=1.0))
Z_AXIS = Material(name="Z Axis", color=Color(red=0.0, green=0.0, blue=1.0, alpha=1.0))

AXIS_MATERIALS = (X_AXIS, Y_AXIS, Z_AXIS)

DEFAULT_SEED = 11


class MaterialGenerator:
    """Deterministic stream of random opaque materials.

    Two generators built with the same seed hand out the same sequence of
    colors and ids, so a run is reproducible given the same call order.
    """

    def __init__(self, seed: int = DEFAULT_SEED):
        self.seed = seed
        self.rng = np.random.default_rng(seed)
        self.generated_count = 0

    def next_material(self) -> Material:
        red, green, blue = self.rng.random(3).tolist()
        material_id = uuid.UUID(bytes=self.rng.bytes(16), version=4)
        self.generated_count += 1
        return Material(
            id=str(material_id),
            name="Random Material",
            color=Color(red=red, green=green, blue=blue, alpha=1.0)
        )
