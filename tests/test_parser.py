"""
Tests for the ConfTree JSON adapter.
"""

import json
import os
import unittest
from unittest import mock

from ConfTree.config import ConfigContainer, JSONConfig
from ConfTree.exceptions import ParseError


class TestJSONConfig(unittest.TestCase):
    """Test cases for parsing JSON documents into containers."""

    def setUp(self):
        self.adapter = JSONConfig()

    def test_object_document(self):
        container = self.adapter.parse_data(b'{"name": "demo", "nested": {"port": 80}}')

        self.assertIsInstance(container, ConfigContainer)
        self.assertEqual(container.get("name"), "demo")
        self.assertEqual(container.get("nested::port"), 80)

    def test_numbers_are_floats(self):
        container = self.adapter.parse_data(b'{"count": 3, "ratio": 0.5, "list": [1, 2]}')

        self.assertIsInstance(container.get("count"), float)
        self.assertIsInstance(container.get("ratio"), float)
        self.assertTrue(all(isinstance(v, float) for v in container.get("list")))

    def test_string_input(self):
        container = self.adapter.parse_data('{"name": "démo"}')
        self.assertEqual(container.get_string("name"), "démo")

    def test_array_document_is_wrapped(self):
        container = self.adapter.parse_data(b'["first", {"name": "second"}, 3]')

        self.assertEqual(container.get("rootArray"), ["first", {"name": "second"}, 3.0])
        self.assertEqual(container.get("rootArray::0"), "first")
        self.assertEqual(container.get("rootArray::1::name"), "second")
        self.assertEqual(container.get_int("rootArray::2"), 3)

    def test_array_document_serializes_as_object(self):
        container = self.adapter.parse_data(b'[1, 2]')
        self.assertEqual(json.loads(container.serialize()), {"rootArray": [1.0, 2.0]})

    def test_null_document_is_empty(self):
        container = self.adapter.parse_data(b'null')
        self.assertEqual(container.get_all(), {})

    def test_invalid_document_reports_object_error(self):
        with self.assertRaises(ParseError) as ctx:
            self.adapter.parse_data(b'[1, 2')
        self.assertIsInstance(ctx.exception.__cause__, json.JSONDecodeError)
        self.assertIs(ctx.exception.cause, ctx.exception.__cause__)

    def test_scalar_document_is_rejected(self):
        for document in [b'"text"', b'42', b'true']:
            with self.subTest(document=document):
                with self.assertRaises(ParseError) as ctx:
                    self.adapter.parse_data(document)
                self.assertIn("object", ctx.exception.message)

    def test_non_finite_numbers_are_rejected(self):
        with self.assertRaises(ParseError):
            self.adapter.parse_data(b'{"n": NaN}')
        with self.assertRaises(ParseError):
            self.adapter.parse_data(b'[Infinity]')

    def test_deeply_nested_document(self):
        depth = 400
        document = '{"a":' * depth + '"${CONFTREE_TEST_DEEP||x}"' + '}' * depth
        container = self.adapter.parse_data(document)

        self.assertEqual(container.get("::".join(["a"] * depth)), "x")

    def test_deeply_nested_array_document(self):
        depth = 400
        container = self.adapter.parse_data('[' * depth + '"leaf"' + ']' * depth)
        self.assertEqual(container.get("rootArray" + "::0" * depth), "leaf")

    def test_document_too_deep_to_decode(self):
        depth = 200000
        with self.assertRaises(ParseError) as ctx:
            self.adapter.parse_data('[' * depth + ']' * depth)
        self.assertIn("nests too deeply", ctx.exception.message)
        self.assertIsInstance(ctx.exception.__cause__.__cause__, RecursionError)

    def test_invalid_utf8(self):
        with self.assertRaises(ParseError):
            self.adapter.parse_data(b'\xff\xfe{')

    def test_environment_expanded_once_at_parse_time(self):
        document = b'{"host": "${CONFTREE_TEST_HOST}", "hosts": ["${CONFTREE_TEST_HOST||x}"]}'
        with mock.patch.dict(os.environ, {"CONFTREE_TEST_HOST": "db.internal"}):
            container = self.adapter.parse_data(document)

        # The environment is no longer consulted once parsing is done
        self.assertEqual(container.get_string("host"), "db.internal")
        self.assertEqual(container.get("hosts::0"), "db.internal")

    def test_round_trip_preserves_values(self):
        document = {
            "name": "demo",
            "enabled": True,
            "nothing": None,
            "port": 8080,
            "ratio": 0.25,
            "tags": ["a", "b"],
            "nested": {"deep": {"value": "x"}},
        }
        first = self.adapter.parse_data(json.dumps(document).encode())
        second = self.adapter.parse_data(first.serialize())

        self.assertEqual(second.get_all(), first.get_all())
        for key in ["name", "enabled", "port", "ratio", "tags", "nested::deep::value"]:
            with self.subTest(key=key):
                self.assertEqual(second.get(key), first.get(key))


if __name__ == "__main__":
    unittest.main()
