"""Tests for type inference, composition lifting and discriminator lookup."""

import copy
import unittest

from samplize.config import SampleConfig
from samplize.schema_normalizer import (
    discriminator_value,
    infer_type,
    is_visible,
    lift_composition,
    lift_schema,
)


class TestInferType(unittest.TestCase):
    """Test cases for type inference."""

    def test_existing_type_is_kept(self):
        self.assertEqual(infer_type({"type": "integer"}, False), "integer")
        self.assertEqual(infer_type({"type": ["string", "null"]}, False), ["string", "null"])

    def test_object_keywords(self):
        self.assertEqual(infer_type({"properties": {}}, False), "object")
        self.assertEqual(infer_type({"additionalProperties": {}}, False), "object")
        self.assertEqual(infer_type({"minProperties": 1}, False), "object")

    def test_additional_properties_false_is_not_an_object_hint(self):
        self.assertEqual(infer_type({"additionalProperties": False}, False), "string")

    def test_array_keywords(self):
        self.assertEqual(infer_type({"items": {}}, False), "array")
        self.assertEqual(infer_type({"maxItems": 3}, False), "array")

    def test_object_wins_over_array(self):
        self.assertEqual(infer_type({"properties": {}, "items": {}}, False), "object")

    def test_numeric_keywords(self):
        self.assertEqual(infer_type({"minimum": 1}, False), "number")
        self.assertEqual(infer_type({"multipleOf": 2}, False), "number")

    def test_string_fallback(self):
        self.assertEqual(infer_type({}, False), "string")
        self.assertEqual(infer_type({"type": 7}, False), "string")

    def test_literal_or_enum_leaves_type_unresolved(self):
        self.assertIsNone(infer_type({}, True))
        self.assertIsNone(infer_type({"enum": ["a"]}, False))


class TestLifting(unittest.TestCase):
    """Test cases for merging composition alternatives."""

    def setUp(self):
        self.base = {
            "type": "object",
            "properties": {"a": {"type": "string"}},
            "required": ["a"],
        }
        self.alternative = {
            "type": "string",
            "properties": {
                "a": {"type": "integer"},
                "b": {"type": "integer"},
                "c": {"type": "integer", "readOnly": True},
                "d": {"type": "integer", "deprecated": True},
            },
            "required": ["b", "a"],
            "minProperties": 1,
            "description": "not lifted",
        }

    def test_lift_does_not_overwrite(self):
        merged = lift_schema(self.alternative, self.base, SampleConfig())
        self.assertEqual(merged["type"], "object")
        self.assertEqual(merged["properties"]["a"], {"type": "string"})
        self.assertEqual(merged["properties"]["b"], {"type": "integer"})
        self.assertEqual(merged["required"], ["a", "b"])
        self.assertEqual(merged["minProperties"], 1)
        self.assertNotIn("description", merged)

    def test_lift_respects_visibility(self):
        merged = lift_schema(self.alternative, self.base, SampleConfig())
        self.assertNotIn("c", merged["properties"])
        self.assertNotIn("d", merged["properties"])
        merged = lift_schema(self.alternative, self.base, SampleConfig(include_read_only=True))
        self.assertIn("c", merged["properties"])
        self.assertNotIn("d", merged["properties"])

    def test_lift_leaves_inputs_untouched(self):
        base_before = copy.deepcopy(self.base)
        alternative_before = copy.deepcopy(self.alternative)
        lift_schema(self.alternative, self.base, SampleConfig())
        self.assertEqual(self.base, base_before)
        self.assertEqual(self.alternative, alternative_before)

    def test_lift_items_recursively(self):
        merged = lift_schema({"items": {"type": "integer", "minimum": 3}}, {"items": {"type": "number"}}, SampleConfig())
        self.assertEqual(merged["items"], {"type": "number", "minimum": 3})

    def test_lift_self_referencing_items(self):
        tree = {"type": "array"}
        tree["items"] = tree
        merged = lift_schema(tree, {}, SampleConfig())
        self.assertEqual(merged["type"], "array")
        self.assertIs(merged["items"], tree)

    def test_composition_uses_first_one_of(self):
        schema = {"oneOf": [{"type": "string"}, {"type": "integer"}]}
        merged, has_literal = lift_composition(schema, SampleConfig())
        self.assertEqual(merged["type"], "string")
        self.assertFalse(has_literal)
        self.assertNotIn("type", schema)

    def test_composition_falls_back_to_any_of(self):
        merged, _ = lift_composition({"oneOf": [], "anyOf": [{"type": "boolean"}]}, SampleConfig())
        self.assertEqual(merged["type"], "boolean")

    def test_composition_example_is_a_literal(self):
        merged, has_literal = lift_composition({"oneOf": [{"type": "integer", "example": 42}]}, SampleConfig())
        self.assertTrue(has_literal)
        self.assertEqual(merged["example"], 42)

    def test_no_composition(self):
        schema = {"type": "string"}
        merged, has_literal = lift_composition(schema, SampleConfig())
        self.assertIs(merged, schema)
        self.assertFalse(has_literal)


class TestVisibility(unittest.TestCase):
    """Test cases for property visibility."""

    def test_flags(self):
        config = SampleConfig()
        self.assertTrue(is_visible({"type": "string"}, config))
        self.assertFalse(is_visible({"deprecated": True}, config))
        self.assertFalse(is_visible({"readOnly": True}, config))
        self.assertFalse(is_visible({"writeOnly": True}, config))
        self.assertTrue(is_visible({"writeOnly": True}, SampleConfig(include_write_only=True)))
        self.assertFalse(is_visible({"deprecated": True}, SampleConfig(include_read_only=True, include_write_only=True)))
        self.assertTrue(is_visible(None, config))


class TestDiscriminator(unittest.TestCase):
    """Test cases for discriminator mapping lookup."""

    def setUp(self):
        self.schema = {
            "$$ref": "https://example.com/openapi.json#/components/schemas/Dog",
            "discriminator": {
                "propertyName": "petType",
                "mapping": {
                    "cat": "#/components/schemas/Cat",
                    "dog": "#/components/schemas/Dog",
                },
            },
        }

    def test_mapping_key_for_reference(self):
        self.assertEqual(discriminator_value(self.schema, "petType"), "dog")

    def test_other_property(self):
        self.assertIsNone(discriminator_value(self.schema, "name"))

    def test_requires_reference(self):
        schema = dict(self.schema)
        del schema["$$ref"]
        self.assertIsNone(discriminator_value(schema, "petType"))

    def test_invalid_regex_matches_as_substring(self):
        schema = {
            "$$ref": "#/components/schemas/Odd[",
            "discriminator": {"propertyName": "kind", "mapping": {"odd": "Odd["}},
        }
        self.assertEqual(discriminator_value(schema, "kind"), "odd")


if __name__ == '__main__':
    unittest.main()
