#!/usr/bin/env python3
"""
Tests for object-specific validation features.
"""
import pytest

# autopep8: off
from utils import setup
setup()
from json_conditions import ErrorCode, JsonValidator, MissingTypeError, SchemaInvalidError
# autopep8: on


class TestObjectValidation:
    """Tests for object-specific schema validation."""

    def setup_method(self):
        """Set up the test environment."""
        self.validator = JsonValidator()

    def test_object_constraints(self):
        """Test object-specific constraints."""
        schema = {
            "type": "object",
            "required": ["name", "age"]
        }

        # Valid - has all required properties
        result = self.validator.validate({"name": "John", "age": 30}, schema)
        assert result.valid

        # Invalid - missing required property
        result = self.validator.validate({"name": "John"}, schema)
        assert not result.valid
        assert len(result.errors) == 1
        assert result.errors[0].code == ErrorCode.REQUIRED_PROPERTY_MISSING
        assert result.errors[0].path == "/age"
        assert result.errors[0].message == "Age is required"

        # Test properties with specific types
        schema = {
            "type": "object",
            "properties": {
                "name": {"type": "string"},
                "age": {"type": "integer", "minimum": 0}
            }
        }

        # Valid - properties have correct types
        result = self.validator.validate({"name": "John", "age": 30}, schema)
        assert result.valid

        # Invalid - wrong property type
        result = self.validator.validate(
            {"name": 123, "age": "thirty"}, schema)
        assert not result.valid
        assert len(result.errors) == 2  # Two type errors
        assert result.paths == ["/name", "/age"]

        # Test non-object with object schema
        result = self.validator.validate("not an object", schema)
        assert not result.valid
        assert len(result.errors) == 1
        assert result.errors[0].code == ErrorCode.TYPE_ERROR
        assert result.errors[0].message == "Value does not match type object"

    def test_min_max_properties(self):
        """Test minProperties and maxProperties constraints."""
        schema = {
            "type": "object",
            "minProperties": 2,
            "maxProperties": 4
        }

        # Valid - within property count constraints
        result = self.validator.validate({"a": 1, "b": 2, "c": 3}, schema)
        assert result.valid

        # Invalid - too few properties
        result = self.validator.validate({"a": 1}, schema)
        assert not result.valid
        assert len(result.errors) == 1
        assert result.errors[0].code == ErrorCode.OBJECT_TOO_FEW_PROPERTIES
        assert "minimum" in result.errors[0].message

        # Invalid - too many properties
        result = self.validator.validate(
            {"a": 1, "b": 2, "c": 3, "d": 4, "e": 5}, schema)
        assert not result.valid
        assert len(result.errors) == 1
        assert result.errors[0].code == ErrorCode.OBJECT_TOO_MANY_PROPERTIES
        assert "maximum" in result.errors[0].message

    def test_undeclared_properties_are_allowed(self):
        """Test that properties without a schema are not checked."""
        schema = {
            "type": "object",
            "properties": {"name": {"type": "string"}},
            "additionalProperties": False
        }

        result = self.validator.validate({"name": "John", "extra": 1}, schema)
        assert result.valid

    def test_standalone_object_constraints(self):
        """Test object constraints without explicit type."""
        schema = {
            "properties": {
                "name": {"type": "string"}
            },
            "required": ["name"]
        }

        # Valid object
        result = self.validator.validate({"name": "John"}, schema)
        assert result.valid

        # Invalid - missing required property
        result = self.validator.validate({}, schema)
        assert not result.valid
        assert len(result.errors) == 1
        assert result.errors[0].code == ErrorCode.REQUIRED_PROPERTY_MISSING

        # Object keywords imply the object type
        result = self.validator.validate("not an object", schema)
        assert not result.valid
        assert len(result.errors) == 1
        assert result.errors[0].code == ErrorCode.TYPE_ERROR

    def test_nested_object_paths(self):
        """Test that errors in nested objects carry the full path."""
        schema = {
            "type": "object",
            "properties": {
                "order": {
                    "type": "object",
                    "properties": {
                        "customer": {
                            "type": "object",
                            "properties": {"email": {"type": "string", "minLength": 3}},
                            "required": ["email"]
                        }
                    }
                }
            }
        }

        result = self.validator.validate({"order": {"customer": {}}}, schema)
        assert result.paths == ["/order/customer/email"]

        result = self.validator.validate({"order": {"customer": {"email": "a"}}}, schema)
        assert result.errors[0].code == ErrorCode.STRING_TOO_SHORT
        assert result.errors[0].path == "/order/customer/email"

    def test_path_escaping(self):
        """Test that keys with pointer characters are escaped in paths."""
        schema = {
            "type": "object",
            "properties": {"a/b": {"type": "string"}, "c~d": {"type": "string"}}
        }

        result = self.validator.validate({"a/b": 1, "c~d": 2}, schema)
        assert result.paths == ["/a~1b", "/c~0d"]

    def test_untyped_property_rejected(self):
        """Test that every declared property must have a type."""
        schema = {
            "type": "object",
            "properties": {"name": {"description": "no type"}}
        }

        with pytest.raises(MissingTypeError) as exc_info:
            self.validator.validate({}, schema)
        assert exc_info.value.schema_path == "/properties/name"

    def test_malformed_keywords(self):
        """Test that properties and required must have the right shape."""
        with pytest.raises(SchemaInvalidError):
            self.validator.validate({}, {"type": "object", "properties": []})

        with pytest.raises(SchemaInvalidError):
            self.validator.validate({}, {"type": "object", "required": "name"})

    def test_collect_all_across_fields(self):
        """Test that every failing field is reported in both modes."""
        schema = {
            "type": "object",
            "properties": {
                "name": {"type": "string", "minLength": 3, "pattern": "^[A-Z]"},
                "age": {"type": "integer", "minimum": 0}
            }
        }
        data = {"name": "j", "age": -1}

        result = self.validator.validate(data, schema)
        assert result.paths == ["/name", "/age"]

        result = JsonValidator(collect_all=True).validate(data, schema)
        assert result.paths == ["/name", "/name", "/age"]


if __name__ == "__main__":
    pytest.main(["-xvs", __file__])
