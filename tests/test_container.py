"""
Tests for the ConfTree configuration container.
"""

import json
import unittest

from ConfTree.config import ConfigContainer, JSONConfig
from ConfTree.exceptions import (
    CoercionError,
    KeyNotFoundError,
    NodeTypeError,
    SectionError,
    UnsupportedOperationError,
)

DOCUMENT = b"""
{
    "appname": "demo",
    "httpport": 8080,
    "ratio": 0.75,
    "negative": -3.9,
    "enabled": true,
    "debug": "on",
    "portstring": "9090",
    "hosts": "a.example;b.example;c.example",
    "empty": "",
    "nothing": null,
    "database": {
        "host": "localhost",
        "port": 5432,
        "pool": {"size": 10, "timeout": 2.5},
        "name": "leaf"
    },
    "labels": {"team": "core", "tier": "backend"},
    "mixed": {"team": "core", "replicas": 3}
}
"""


class TestContainerAccessors(unittest.TestCase):
    """Test cases for typed accessors and their default variants."""

    def setUp(self):
        self.config = JSONConfig().parse_data(DOCUMENT)

    def test_get(self):
        self.assertEqual(self.config.get("appname"), "demo")
        self.assertEqual(self.config.get("database::pool::size"), 10.0)
        self.assertIsNone(self.config.get("missing"))
        self.assertIsNone(self.config.get("nothing"))

    def test_get_empty_key_returns_root(self):
        self.assertEqual(self.config.get("")["appname"], "demo")

    def test_lenient_multi_segment_read(self):
        # "database::name" is a string, so the trailing segment is skipped
        self.assertEqual(self.config.get("database::name::whatever"), "leaf")
        self.assertIsNone(self.config.get("database::missing::whatever"))

    def test_returned_nodes_are_copies(self):
        pool = self.config.get("database::pool")
        pool["size"] = 99.0
        self.config.get_raw("database::pool")["timeout"] = 0.0
        self.config.get("")["appname"] = "changed"

        self.assertEqual(self.config.get_raw("database::pool"), {"size": 10.0, "timeout": 2.5})
        self.assertEqual(self.config.get_string("appname"), "demo")

    def test_get_raw(self):
        self.assertEqual(self.config.get_raw("database::pool"), {"size": 10.0, "timeout": 2.5})
        with self.assertRaises(KeyNotFoundError):
            self.config.get_raw("missing")
        with self.assertRaises(KeyNotFoundError):
            self.config.get_raw("nothing")
        self.assertEqual(self.config.default_raw("missing", "x"), "x")

    def test_get_bool(self):
        self.assertTrue(self.config.get_bool("enabled"))
        self.assertTrue(self.config.get_bool("debug"))
        with self.assertRaises(KeyNotFoundError):
            self.config.get_bool("missing")
        with self.assertRaises(CoercionError):
            self.config.get_bool("appname")

    def test_default_bool(self):
        self.assertTrue(self.config.default_bool("enabled", False))
        self.assertFalse(self.config.default_bool("missing", False))
        self.assertTrue(self.config.default_bool("appname", True))

    def test_get_int(self):
        self.assertEqual(self.config.get_int("httpport"), 8080)
        self.assertEqual(self.config.get_int("negative"), -3)
        self.assertEqual(self.config.get_int("portstring"), 9090)
        self.assertEqual(self.config.get_int("database::port"), 5432)
        with self.assertRaises(CoercionError):
            self.config.get_int("appname")
        with self.assertRaises(CoercionError):
            self.config.get_int("database")
        with self.assertRaises(KeyNotFoundError):
            self.config.get_int("missing")

    def test_default_int(self):
        self.assertEqual(self.config.default_int("httpport", 1), 8080)
        # Missing and mistyped keys look the same to a default caller
        self.assertEqual(self.config.default_int("missing", 42), 42)
        self.assertEqual(self.config.default_int("appname", 42), 42)

    def test_get_int64(self):
        self.assertEqual(self.config.get_int64("httpport"), 8080)
        self.assertEqual(self.config.get_int64("ratio"), 0)
        with self.assertRaises(CoercionError):
            self.config.get_int64("portstring")
        self.assertEqual(self.config.default_int64("portstring", 7), 7)
        self.assertEqual(self.config.default_int64("missing", 7), 7)

    def test_get_float(self):
        self.assertEqual(self.config.get_float("ratio"), 0.75)
        self.assertEqual(self.config.get_float("httpport"), 8080.0)
        with self.assertRaises(CoercionError):
            self.config.get_float("appname")
        with self.assertRaises(KeyNotFoundError):
            self.config.get_float("missing")
        self.assertEqual(self.config.default_float("appname", 1.5), 1.5)

    def test_get_string(self):
        self.assertEqual(self.config.get_string("appname"), "demo")
        self.assertEqual(self.config.get_string("database::host"), "localhost")
        # Wrong kinds and missing keys read as "" without an error
        self.assertEqual(self.config.get_string("httpport"), "")
        self.assertEqual(self.config.get_string("missing"), "")

    def test_default_string(self):
        self.assertEqual(self.config.default_string("appname", "x"), "demo")
        self.assertEqual(self.config.default_string("missing", "x"), "x")
        self.assertEqual(self.config.default_string("empty", "x"), "x")
        self.assertEqual(self.config.default_string("httpport", "x"), "x")

    def test_get_strings(self):
        self.assertEqual(self.config.get_strings("hosts"), ["a.example", "b.example", "c.example"])
        self.assertEqual(self.config.get_strings("appname"), ["demo"])
        self.assertIsNone(self.config.get_strings("missing"))
        self.assertIsNone(self.config.get_strings("empty"))

    def test_default_strings(self):
        self.assertEqual(self.config.default_strings("hosts", []), ["a.example", "b.example", "c.example"])
        self.assertEqual(self.config.default_strings("missing", ["x"]), ["x"])


class TestContainerMutation(unittest.TestCase):
    """Test cases for set, sections and serialization."""

    def setUp(self):
        self.config = JSONConfig().parse_data(DOCUMENT)

    def test_set_then_read(self):
        self.config.set("x", "5")
        self.assertEqual(self.config.get("x"), "5")
        self.assertEqual(self.config.get_int("x"), 5)
        with self.assertRaises(CoercionError):
            self.config.get_bool("x")

    def test_set_overwrites(self):
        self.config.set("appname", "renamed")
        self.assertEqual(self.config.get_string("appname"), "renamed")

    def test_set_is_top_level_only(self):
        self.config.set("database::host", "remote")

        self.assertEqual(self.config.get_all()["database::host"], "remote")
        # The nested value is untouched
        self.assertEqual(self.config.get_string("database::host"), "localhost")

    def test_empty_container(self):
        config = ConfigContainer()
        self.assertIsNone(config.get("anything"))
        config.set("a", "1")
        self.assertEqual(config.get_int("a"), 1)

    def test_get_section(self):
        section = self.config.get_section("labels")
        self.assertEqual(section, {"team": "core", "tier": "backend"})

        # The result is a copy
        section["team"] = "changed"
        self.assertEqual(self.config.get_string("labels::team"), "core")

    def test_get_section_errors(self):
        for name in ["missing", "mixed", "appname", "database"]:
            with self.subTest(section=name):
                with self.assertRaises(SectionError):
                    self.config.get_section(name)

    def test_section_error_is_a_type_error(self):
        self.assertTrue(issubclass(SectionError, NodeTypeError))

    def test_serialize(self):
        data = json.loads(self.config.serialize())
        self.assertEqual(data["appname"], "demo")
        self.assertEqual(data["database"]["pool"]["timeout"], 2.5)
        self.assertIsNone(data["nothing"])

    def test_serialize_is_indented(self):
        text = self.config.serialize().decode("utf-8")
        self.assertIn('\n  "appname": "demo"', text)

    def test_serialize_includes_set_values(self):
        self.config.set("added", "yes")
        self.assertEqual(json.loads(self.config.serialize())["added"], "yes")

    def test_get_all_is_a_copy(self):
        data = self.config.get_all()
        data["database"]["host"] = "changed"
        self.assertEqual(self.config.get_string("database::host"), "localhost")

    def test_on_change_is_unsupported(self):
        with self.assertLogs("ConfTree.config.container", level="WARNING"):
            with self.assertRaises(UnsupportedOperationError):
                self.config.on_change("appname", lambda value: None)


class TestSubContainer(unittest.TestCase):
    """Test cases for sub-tree extraction."""

    def setUp(self):
        self.config = JSONConfig().parse_data(DOCUMENT)

    def test_sub_matches_parent(self):
        database = self.config.sub("database")

        self.assertIsInstance(database, ConfigContainer)
        self.assertEqual(database.get("host"), self.config.get("database::host"))
        self.assertEqual(database.get_int("pool::size"), self.config.get_int("database::pool::size"))

    def test_nested_sub(self):
        pool = self.config.sub("database::pool")
        self.assertEqual(pool.get_float("timeout"), 2.5)

    def test_empty_key_is_whole_tree(self):
        whole = self.config.sub("")
        self.assertEqual(whole.get_string("appname"), "demo")

    def test_sub_errors(self):
        with self.assertRaises(KeyNotFoundError):
            self.config.sub("missing")
        with self.assertRaises(NodeTypeError):
            self.config.sub("appname")
        with self.assertRaises(NodeTypeError):
            self.config.sub("nothing")

    def test_sub_shares_mapping_with_parent(self):
        database = self.config.sub("database")
        database.set("user", "admin")

        self.assertEqual(self.config.get_string("database::user"), "admin")

    def test_replacing_parent_key_does_not_affect_sub(self):
        database = self.config.sub("database")
        self.config.set("database", "gone")

        self.assertEqual(self.config.get_string("database"), "gone")
        self.assertEqual(database.get_string("host"), "localhost")

    def test_sub_has_its_own_lock(self):
        database = self.config.sub("database")
        self.assertIsNot(database._lock, self.config._lock)


if __name__ == "__main__":
    unittest.main()
