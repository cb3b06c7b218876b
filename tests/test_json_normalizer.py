"""
Unit tests for input normalization and the single unescape retry.
"""

import json
import unittest
from unittest.mock import patch

from jsoninspector.adapters import json_normalizer
from jsoninspector.adapters.base_adapter import node_text
from jsoninspector.adapters.context import FailureKind, WarningCollector
from jsoninspector.adapters.json_normalizer import normalize_json, unescape


class TestUnescape(unittest.TestCase):
    def test_unescapes_each_sequence(self):
        self.assertEqual(unescape('a\\nb\\rc\\td\\"e\\\\f'), 'a\nb\rc\td"e\\f')

    def test_plain_text_unchanged(self):
        self.assertEqual(unescape('{"X": 1}'), '{"X": 1}')


class TestNormalizeJson(unittest.TestCase):
    def setUp(self):
        self.warnings = WarningCollector()

    def test_empty_text_does_no_work(self):
        with patch.object(json_normalizer.json, "loads") as loads:
            for text in ("", "   ", "\n\t", None):
                result = normalize_json(text, self.warnings)
                self.assertFalse(result.parsed)
                self.assertIsNone(result.tree)
            loads.assert_not_called()
        self.assertEqual(len(self.warnings), 0)

    def test_clean_json_never_unescapes(self):
        with patch.object(json_normalizer, "unescape", wraps=unescape) as spy:
            result = normalize_json('[{"X": 1, "Y": 2, "Z": 3}]', self.warnings)
        spy.assert_not_called()
        self.assertTrue(result.parsed)
        self.assertFalse(result.unescaped)
        self.assertEqual(result.tree, [{"X": 1, "Y": 2, "Z": 3}])

    def test_escaped_json_parses_after_unescape(self):
        escaped = '{\\"X\\": 1,\\n \\"Y\\": 2, \\"Z\\": 3}'
        with self.assertRaises(json.JSONDecodeError):
            json.loads(escaped)
        result = normalize_json(escaped, self.warnings)
        self.assertTrue(result.parsed)
        self.assertTrue(result.unescaped)
        self.assertEqual(result.tree, {"X": 1, "Y": 2, "Z": 3})
        self.assertEqual(len(self.warnings), 0)

    def test_malformed_json_retries_once_then_warns(self):
        with patch.object(json_normalizer, "unescape", wraps=unescape) as spy:
            result = normalize_json('{"X": 1,', self.warnings)
        self.assertEqual(spy.call_count, 1)
        self.assertFalse(result.parsed)
        self.assertEqual(self.warnings.messages, ['Could not deserialize {"X": 1,'])
        self.assertEqual(self.warnings.records[0].kind, FailureKind.PARSE_FAILURE)

    def test_too_deep_json_is_a_parse_failure(self):
        text = "[" * 100000 + "]" * 100000
        result = normalize_json(text, self.warnings)
        self.assertFalse(result.parsed)
        self.assertEqual(len(self.warnings), 1)
        self.assertEqual(self.warnings.records[0].kind, FailureKind.PARSE_FAILURE)

    def test_parsed_scalar_is_still_parsed(self):
        result = normalize_json("null", self.warnings)
        self.assertTrue(result.parsed)
        self.assertIsNone(result.tree)


class TestNodeText(unittest.TestCase):
    def test_compact_json(self):
        self.assertEqual(node_text({"X": "bad"}), '{"X": "bad"}')

    def test_deeply_nested_node_still_prints(self):
        node = {}
        for _ in range(100000):
            node = {"Child": node}
        self.assertIsInstance(node_text(node), str)


if __name__ == "__main__":
    unittest.main()
