"""Tests for primitive sample values."""

import os
import re
import sys
import time
import unittest

current_script_path = os.path.abspath(__file__)
project_root = os.path.dirname(os.path.dirname(current_script_path))
sys.path.append(project_root)

from samplize.primitives import generate_string_from_regex, primitive


class TestPrimitive(unittest.TestCase):
    """Test cases for the type and format lookup."""

    def test_plain_string(self):
        """A string without format or pattern is the literal placeholder."""
        self.assertEqual(primitive({"type": "string"}), "string")

    def test_string_formats(self):
        """Known string formats produce canonical examples."""
        self.assertEqual(primitive({"type": "string", "format": "email"}), "user@example.com")
        self.assertEqual(primitive({"type": "string", "format": "uuid"}), "3fa85f64-5717-4562-b3fc-2c963f66afa6")
        self.assertEqual(primitive({"type": "string", "format": "ipv4"}), "198.51.100.42")
        self.assertEqual(primitive({"type": "string", "format": "uri"}), "https://example.com/")
        self.assertEqual(primitive({"type": "string", "format": "duration"}), "P3D")
        self.assertEqual(primitive({"type": "string", "format": "password"}), "********")
        self.assertEqual(primitive({"type": "string", "format": "idn-hostname"}), "실례.com")

    def test_unknown_string_format_falls_back_to_type(self):
        """An unrecognized format uses the plain type entry."""
        self.assertEqual(primitive({"type": "string", "format": "shoe-size"}), "string")

    def test_date_time_formats(self):
        """Date and time formats are derived from the current UTC time."""
        self.assertRegex(primitive({"type": "string", "format": "date-time"}), r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")
        self.assertRegex(primitive({"type": "string", "format": "date"}), r"^\d{4}-\d{2}-\d{2}$")
        self.assertRegex(primitive({"type": "string", "format": "time"}), r"^\d{2}:\d{2}:\d{2}\.\d{3}Z$")

    def test_integer_formats(self):
        """Integer formats return boundary magnitudes instead of zero."""
        self.assertEqual(primitive({"type": "integer"}), 0)
        self.assertEqual(primitive({"type": "integer", "format": "int32"}), 1073741824)
        self.assertEqual(primitive({"type": "integer", "format": "int64"}), 9007199254740991)

    def test_number_formats(self):
        self.assertEqual(primitive({"type": "number"}), 0)
        self.assertEqual(primitive({"type": "number", "format": "float"}), 0.1)
        self.assertEqual(primitive({"type": "number", "format": "double"}), 0.1)

    def test_boolean_uses_boolean_default(self):
        """Booleans echo a boolean default and are otherwise true."""
        self.assertIs(primitive({"type": "boolean"}), True)
        self.assertIs(primitive({"type": "boolean", "default": False}), False)
        self.assertIs(primitive({"type": "boolean", "default": "no"}), True)

    def test_null(self):
        self.assertIsNone(primitive({"type": "null"}))

    def test_type_list_uses_first_entry(self):
        self.assertEqual(primitive({"type": ["integer", "null"], "format": "int32"}), 1073741824)

    def test_unknown_type(self):
        """Unknown types name the raw type keyword."""
        self.assertEqual(primitive({"type": "file"}), "Unknown Type: file")
        self.assertEqual(primitive({"type": ["file", "blob"]}), "Unknown Type: file,blob")
        self.assertEqual(primitive({}), "Unknown Type: undefined")
        self.assertEqual(primitive(None), "Unknown Type: undefined")


class TestRegexStrings(unittest.TestCase):
    """Test cases for pattern-driven strings."""

    def test_pattern_generates_matching_string(self):
        value = primitive({"type": "string", "pattern": "^[a-z]{3}-[0-9]{2}$"})
        self.assertIsNotNone(re.fullmatch(r"[a-z]{3}-[0-9]{2}", value))

    def test_pattern_is_deterministic(self):
        """The same pattern always yields the same string."""
        pattern = "[A-Z][a-z]+ [0-9]+"
        self.assertEqual(generate_string_from_regex(pattern), generate_string_from_regex(pattern))

    def test_patterns_are_generated_quickly(self):
        """Generating does not stall on complex or unsatisfiable patterns."""
        patterns = [r"^[A-Z]{2}\d{4}$", r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"] * 3
        start = time.monotonic()
        for pattern in patterns:
            self.assertIsNotNone(re.fullmatch(pattern.strip("^$"), generate_string_from_regex(pattern)))
        self.assertEqual(generate_string_from_regex("(?<=a)b"), "string")
        self.assertLess(time.monotonic() - start, 5)

    def test_invalid_pattern_falls_back(self):
        """An invalid pattern degrades to the placeholder instead of raising."""
        self.assertEqual(generate_string_from_regex("[unclosed"), "string")
        self.assertEqual(primitive({"type": "string", "pattern": "(?<name>js-only)"}), "string")


if __name__ == '__main__':
    unittest.main()
