#!/usr/bin/env python3
"""
Tests for utility classes and functions.
"""
import pytest

# autopep8: off
from utils import setup
setup()
from json_conditions.utils import MISSING, JsonPointer, SchemaKeywords, TypeUtils, field_label, is_listed
# autopep8: on


class TestJsonPointer:
    """Tests for JsonPointer class."""

    def test_from_parts(self):
        """Test creating a JSON Pointer from path parts."""
        assert JsonPointer.from_parts([]) == ""
        assert JsonPointer.from_parts(["foo"]) == "/foo"
        assert JsonPointer.from_parts(["foo", "bar"]) == "/foo/bar"
        assert JsonPointer.from_parts(["foo", "bar", "0"]) == "/foo/bar/0"

    def test_escape_part(self):
        """Test escaping path parts."""
        assert JsonPointer.escape_part("foo") == "foo"
        assert JsonPointer.escape_part("foo/bar") == "foo~1bar"
        assert JsonPointer.escape_part("foo~bar") == "foo~0bar"
        assert JsonPointer.escape_part("foo/bar~baz") == "foo~1bar~0baz"

    def test_unescape_part(self):
        """Test unescaping path parts."""
        assert JsonPointer.unescape_part("foo") == "foo"
        assert JsonPointer.unescape_part("foo~1bar") == "foo/bar"
        assert JsonPointer.unescape_part("foo~0bar") == "foo~bar"
        assert JsonPointer.unescape_part("foo~1bar~0baz") == "foo/bar~baz"

    def test_to_parts(self):
        """Test splitting a JSON Pointer into parts."""
        assert JsonPointer.to_parts("") == []
        assert JsonPointer.to_parts("/foo") == ["foo"]
        assert JsonPointer.to_parts("/foo/bar") == ["foo", "bar"]
        assert JsonPointer.to_parts("/foo/bar/0") == ["foo", "bar", "0"]
        assert JsonPointer.to_parts("/foo~1bar/baz") == ["foo/bar", "baz"]
        assert JsonPointer.to_parts("/foo~0bar/baz") == ["foo~bar", "baz"]

        # Test invalid pointer
        with pytest.raises(ValueError):
            JsonPointer.to_parts("foo/bar")

    def test_resolve(self):
        """Test resolving a JSON Pointer within a document."""
        document = {
            "foo": {
                "bar": [1, 2, 3],
                "baz": "value"
            },
            "qux": 42,
            "with/slash": "slash value",
            "with~tilde": "tilde value"
        }

        # Empty pointer should return the document
        assert JsonPointer.resolve(document, "") is document

        # Basic resolution
        assert JsonPointer.resolve(document, "/foo") == document["foo"]
        assert JsonPointer.resolve(
            document, "/foo/bar") == document["foo"]["bar"]
        assert JsonPointer.resolve(
            document, "/foo/baz") == document["foo"]["baz"]
        assert JsonPointer.resolve(document, "/qux") == document["qux"]

        # Array indexing
        assert JsonPointer.resolve(
            document, "/foo/bar/0") == document["foo"]["bar"][0]
        assert JsonPointer.resolve(
            document, "/foo/bar/1") == document["foo"]["bar"][1]
        assert JsonPointer.resolve(
            document, "/foo/bar/2") == document["foo"]["bar"][2]

        # Escaped characters
        assert JsonPointer.resolve(
            document, "/with~1slash") == document["with/slash"]
        assert JsonPointer.resolve(
            document, "/with~0tilde") == document["with~tilde"]

        # Invalid pointers
        with pytest.raises(ValueError):
            JsonPointer.resolve(document, "/nonexistent")

        with pytest.raises(ValueError):
            JsonPointer.resolve(document, "/foo/bar/3")  # Out of range

        with pytest.raises(ValueError):
            JsonPointer.resolve(document, "/foo/bar/invalid")  # Not an integer

        with pytest.raises(ValueError):
            # Cannot navigate into string
            JsonPointer.resolve(document, "/foo/baz/subpath")


class TestTypeUtils:
    """Tests for TypeUtils class."""

    def test_is_type_of_value(self):
        """Test matching Python values against JSON Schema types."""
        assert TypeUtils.is_type_of_value("string", "hello")
        assert TypeUtils.is_type_of_value("number", 3.14)
        assert TypeUtils.is_type_of_value("number", 42)
        assert TypeUtils.is_type_of_value("integer", 42)
        assert TypeUtils.is_type_of_value("integer", 2.0)
        assert TypeUtils.is_type_of_value("boolean", False)
        assert TypeUtils.is_type_of_value("array", [])
        assert TypeUtils.is_type_of_value("object", {})
        assert TypeUtils.is_type_of_value("null", None)

        # Booleans are not numbers
        assert not TypeUtils.is_type_of_value("number", True)
        assert not TypeUtils.is_type_of_value("integer", False)

        assert not TypeUtils.is_type_of_value("integer", 2.5)
        assert not TypeUtils.is_type_of_value("null", MISSING)
        assert not TypeUtils.is_type_of_value("invalid", "anything")

    def test_scalar_equal(self):
        """Test strict equality of scalars."""
        assert TypeUtils.scalar_equal(1, 1.0)
        assert TypeUtils.scalar_equal("a", "a")
        assert TypeUtils.scalar_equal(None, None)
        assert TypeUtils.scalar_equal(True, True)

        assert not TypeUtils.scalar_equal(1, True)
        assert not TypeUtils.scalar_equal(0, False)
        assert not TypeUtils.scalar_equal("1", 1)
        assert not TypeUtils.scalar_equal([1], [1])

    def test_deep_equal(self):
        """Test structural equality of JSON values."""
        assert TypeUtils.deep_equal({"a": [1, {"b": 2}]}, {"a": [1, {"b": 2}]})
        assert TypeUtils.deep_equal({"a": 1, "b": 2}, {"b": 2, "a": 1})

        assert not TypeUtils.deep_equal([1, 2], [2, 1])
        assert not TypeUtils.deep_equal({"a": 1}, {"a": 1, "b": 2})
        assert not TypeUtils.deep_equal([1], [True])

    def test_literal_equal(self):
        """Test that the comparison follows the literal's kind."""
        assert TypeUtils.literal_equal([1, 2], [1, 2])
        assert TypeUtils.literal_equal(3, 3.0)
        assert not TypeUtils.literal_equal(3, [3])


class TestSchemaKeywords:
    """Tests for SchemaKeywords class."""

    def test_get_implied_type(self):
        """Test getting the type implied by the keywords of a schema."""
        # Number keywords
        assert SchemaKeywords.get_implied_type({"minimum": 1}) == "number"
        assert SchemaKeywords.get_implied_type({"exclusiveMaximum": 1}) == "number"
        assert SchemaKeywords.get_implied_type({"multipleOf": 5}) == "number"

        # String keywords
        assert SchemaKeywords.get_implied_type({"minLength": 1}) == "string"
        assert SchemaKeywords.get_implied_type({"pattern": "^a"}) == "string"

        # Array keywords
        assert SchemaKeywords.get_implied_type({"items": {}}) == "array"
        assert SchemaKeywords.get_implied_type({"uniqueItems": True}) == "array"
        assert SchemaKeywords.get_implied_type({"contains": {}}) == "array"

        # Object keywords
        assert SchemaKeywords.get_implied_type({"properties": {}}) == "object"
        assert SchemaKeywords.get_implied_type({"required": ["a"]}) == "object"

        # Non-type-specific keywords
        assert SchemaKeywords.get_implied_type({}) is None
        assert SchemaKeywords.get_implied_type({"const": 1}) is None
        assert SchemaKeywords.get_implied_type({"enum": [1]}) is None
        assert SchemaKeywords.get_implied_type({"title": "Name"}) is None


class TestFieldHelpers:
    """Tests for field label and list membership helpers."""

    def test_field_label(self):
        """Test label selection."""
        assert field_label("name", {}) == "Name"
        assert field_label("name", {"title": "Full name"}) == "Full name"
        assert field_label("name", {"title": ""}) == "Name"
        assert field_label(None, {}) == "Value"

    def test_is_listed(self):
        """Test membership in keyword lists."""
        schema = {"required": ["a"], "nullable": "a"}

        assert is_listed(schema, "required", "a")
        assert not is_listed(schema, "required", "b")
        assert not is_listed(schema, "nullable", "a")
        assert not is_listed(schema, "required", None)
        assert not is_listed({}, "required", "a")


if __name__ == "__main__":
    pytest.main(["-xvs", __file__])
