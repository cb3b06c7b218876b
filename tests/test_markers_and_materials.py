"""
Unit tests for the point marker cache, the warning collector and the material generator.
"""

import unittest
from unittest.mock import patch

from pydantic import ValidationError

from jsoninspector.adapters import context as context_module
from jsoninspector.adapters.context import FailureKind, PointMarkerCache, WarningCollector, point_label
from jsoninspector.models.geometry import Mesh, Vector3
from jsoninspector.models.materials import MaterialGenerator, X_AXIS


class TestPointMarkerCache(unittest.TestCase):
    def test_prototype_built_lazily_once(self):
        cache = PointMarkerCache(radius=0.1, divisions=10)
        with patch.object(context_module.Mesh, "sphere", wraps=Mesh.sphere) as sphere:
            self.assertEqual(cache.build_count, 0)
            first = cache.place(Vector3(x=0, y=0, z=0))
            second = cache.place(Vector3(x=1, y=2, z=3))
        sphere.assert_called_once_with(0.1, 10)
        self.assertEqual(cache.build_count, 1)
        self.assertIs(first.base_definition, second.base_definition)
        self.assertIs(first.base_definition, cache.prototype)

    def test_prototype_is_definition(self):
        prototype = PointMarkerCache().prototype
        self.assertTrue(prototype.is_element_definition)
        self.assertEqual(prototype.material, X_AXIS)

    def test_instance_placement_and_label(self):
        marker = PointMarkerCache().place(Vector3(x=1.04, y=-0.96, z=10))
        self.assertEqual(marker.transform.origin, Vector3(x=1.04, y=-0.96, z=10))
        self.assertEqual(marker.name, "Point 1.0, -1.0, 10.0")

    def test_label_rounds_halves_away_from_zero(self):
        marker = PointMarkerCache().place(Vector3(x=0.25, y=1.25, z=-0.75))
        self.assertEqual(marker.name, "Point 0.3, 1.3, -0.8")

    def test_label_of_large_coordinate(self):
        self.assertEqual(point_label(Vector3(x=1e20, y=0.05, z=-0.05)),
                         "Point 100000000000000000000.0, 0.1, -0.1")


class TestWarningCollector(unittest.TestCase):
    def test_keeps_order_and_kinds(self):
        warnings = WarningCollector()
        warnings.add("first", FailureKind.CLASSIFICATION_MISS)
        warnings.add("second")
        self.assertEqual(warnings.messages, ["first", "second"])
        self.assertEqual(warnings.records[1].kind, FailureKind.CONVERSION_FAILURE)
        self.assertEqual(
            warnings.count_by_kind(),
            {"parse_failure": 0, "classification_miss": 1, "conversion_failure": 1}
        )

    def test_records_are_immutable(self):
        warnings = WarningCollector()
        warnings.add("first")
        with self.assertRaises(ValidationError):
            warnings.records[0].message = "changed"


class TestMaterialGenerator(unittest.TestCase):
    def test_same_seed_same_sequence(self):
        first = MaterialGenerator(seed=11)
        second = MaterialGenerator(seed=11)
        for _ in range(3):
            a = first.next_material()
            b = second.next_material()
            self.assertEqual(a.color, b.color)
            self.assertEqual(a.id, b.id)
        self.assertEqual(first.generated_count, 3)

    def test_different_seed_different_sequence(self):
        self.assertNotEqual(
            MaterialGenerator(seed=1).next_material().color,
            MaterialGenerator(seed=2).next_material().color
        )

    def test_colors_are_opaque_unit_range(self):
        generator = MaterialGenerator()
        for _ in range(10):
            color = generator.next_material().color
            for channel in (color.red, color.green, color.blue):
                self.assertGreaterEqual(channel, 0.0)
                self.assertLessEqual(channel, 1.0)
            self.assertEqual(color.alpha, 1.0)


if __name__ == "__main__":
    unittest.main()
