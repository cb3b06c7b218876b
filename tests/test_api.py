"""
Tests for the HTTP surface.
"""

import json
import unittest

from fastapi.testclient import TestClient

from inspector_fixtures import profile_node
from jsoninspector.main import app


class TestInspectApi(unittest.TestCase):
    def setUp(self):
        self.client = TestClient(app)

    def test_health(self):
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "healthy")

    def test_inspect_reports_entities_and_warnings(self):
        response = self.client.post("/inspect", json={"json": '[{"X":1,"Y":2,"Z":3}, {"X":"bad"}]'})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["entity_count"], 1)
        self.assertEqual(body["warning_count"], 1)
        self.assertEqual(body["warnings"], ['Could not deserialize {"X": "bad"}'])

        marker = body["entities"][0]
        self.assertEqual(marker["discriminator"], "Elements.ElementInstance")
        self.assertEqual(marker["Name"], "Point 1.0, 2.0, 3.0")
        self.assertEqual(len(body["definitions"]), 1)
        self.assertEqual(marker["BaseDefinition"], body["definitions"][0]["Id"])
        self.assertEqual(body["definitions"][0]["discriminator"], "Elements.MeshElement")

    def test_profile_surface_serializes_area(self):
        response = self.client.post("/inspect", json={"json": json.dumps(profile_node())})
        body = response.json()
        surface = body["entities"][0]
        self.assertEqual(surface["discriminator"], "Elements.GeometricElement")
        lamina = surface["Representation"]["SolidOperations"][0]
        self.assertAlmostEqual(lamina["Area"], 15.0)

    def test_empty_payload(self):
        response = self.client.post("/inspect", json={})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["entity_count"], 0)
        self.assertEqual(body["warning_count"], 0)


if __name__ == "__main__":
    unittest.main()
