#!/usr/bin/env python3
"""
Tests for basic validation features like types, enums, and const values.
"""
import pytest

# autopep8: off
from utils import setup
setup()
from json_conditions import ErrorCode, ErrorKind, JsonValidator, MissingTypeError, dereference
# autopep8: on


class TestBasicValidation:
    """Tests for basic schema validation."""

    def setup_method(self):
        """Set up the test environment."""
        self.validator = JsonValidator()

    def test_valid_object(self):
        """Test basic validation of a valid object."""
        schema = {"type": "object", "properties": {"name": {"type": "string"}}}
        data = {"name": "test"}

        result = self.validator.validate(data, schema)
        assert result.valid
        assert not result.errors

    def test_invalid_type(self):
        """Test validation of an object with an invalid property type."""
        schema = {"type": "object", "properties": {"name": {"type": "string"}}}
        data = {"name": 123}

        result = self.validator.validate(data, schema)
        assert not result.valid
        assert len(result.errors) == 1
        assert result.errors[0].code == ErrorCode.TYPE_ERROR
        assert result.errors[0].kind == ErrorKind.TYPE_MISMATCH
        assert result.errors[0].path == "/name"
        assert result.errors[0].message == "Name does not match type string"

    def test_required_property(self):
        """Test a required property that is absent."""
        schema = {
            "type": "object",
            "properties": {"name": {"type": "string"}},
            "required": ["name"]
        }

        result = self.validator.validate({}, schema)
        assert not result.valid
        assert result.errors[0].code == ErrorCode.REQUIRED_PROPERTY_MISSING
        assert result.errors[0].message == "Name is required"
        assert result.errors[0].path == "/name"

    def test_required_is_presence(self):
        """Test that a present null or empty value satisfies required."""
        schema = {
            "type": "object",
            "properties": {"note": {"type": "string"}},
            "required": ["note"]
        }

        assert self.validator.validate({"note": ""}, schema).valid
        result = self.validator.validate({"note": None}, schema)
        assert result.errors[0].code == ErrorCode.TYPE_ERROR

    def test_nullable_property(self):
        """Test that nullable properties accept null."""
        schema = {
            "type": "object",
            "properties": {"note": {"type": "string"}},
            "nullable": ["note"]
        }

        assert self.validator.validate({"note": None}, schema).valid
        assert not self.validator.validate({"note": 1}, schema).valid

    def test_label_from_title(self):
        """Test that a title replaces the key in messages."""
        schema = {
            "type": "object",
            "properties": {"dob": {"type": "string", "title": "Date of birth"}},
            "required": ["dob"]
        }

        result = self.validator.validate({}, schema)
        assert result.errors[0].message == "Date of birth is required"
        assert result.errors[0].label == "Date of birth"

    def test_enum_validation(self):
        """Test validation against an enumeration."""
        schema = {
            "type": "object",
            "properties": {"color": {"type": "string", "enum": ["red", "green", "blue"]}}
        }

        # Valid value
        result = self.validator.validate({"color": "red"}, schema)
        assert result.valid
        assert not result.errors

        # Invalid value
        result = self.validator.validate({"color": "yellow"}, schema)
        assert not result.valid
        assert len(result.errors) == 1
        assert result.errors[0].code == ErrorCode.ENUM_MISMATCH
        assert result.errors[0].message == "Color does not match any of the enumerables"

    def test_enum_with_structured_members(self):
        """Test an enumeration mixing scalars and structures."""
        schema = {"type": ["array", "string", "integer"], "enum": [1, "one", [1, 2]]}

        assert self.validator.validate(1, schema).valid
        assert self.validator.validate("one", schema).valid
        assert self.validator.validate([1, 2], schema).valid
        assert not self.validator.validate([2, 1], schema).valid
        assert not self.validator.validate(2, schema).valid

    def test_const_validation(self):
        """Test validation against a constant value."""
        schema = {"type": "integer", "const": 42}

        # Valid value
        result = self.validator.validate(42, schema)
        assert result.valid
        assert not result.errors

        # Invalid value
        result = self.validator.validate(43, schema)
        assert not result.valid
        assert len(result.errors) == 1
        assert result.errors[0].code == ErrorCode.CONST_MISMATCH
        assert result.errors[0].message == "Value does not match constant"

    def test_const_is_strict(self):
        """Test that booleans and numbers never equal each other."""
        schema = {"type": "object", "properties": {"flag": {"type": ["boolean", "integer"], "const": True}}}

        assert self.validator.validate({"flag": True}, schema).valid
        assert not self.validator.validate({"flag": 1}, schema).valid

    def test_untyped_root_is_rejected(self):
        """Test that a schema without type information cannot be compiled."""
        with pytest.raises(MissingTypeError):
            self.validator.validate(42, {"const": 42})

    def test_multiple_types(self):
        """Test validation against multiple types."""
        schema = {"type": ["string", "number"]}

        # Valid string
        result = self.validator.validate("test", schema)
        assert result.valid

        # Valid number
        result = self.validator.validate(123, schema)
        assert result.valid

        # Invalid type
        result = self.validator.validate(True, schema)
        assert not result.valid
        assert len(result.errors) == 1
        assert result.errors[0].code == ErrorCode.TYPE_ERROR
        assert "string, number" in result.errors[0].message

    def test_type_edge_cases(self):
        """Test edge cases in type validation."""
        # Boolean vs number/integer distinction
        schema_number = {"type": "number"}
        schema_integer = {"type": "integer"}
        schema_boolean = {"type": "boolean"}

        # Boolean shouldn't be valid as a number
        result = self.validator.validate(True, schema_number)
        assert not result.valid

        # Boolean shouldn't be valid as an integer
        result = self.validator.validate(True, schema_integer)
        assert not result.valid

        # Boolean should be valid as a boolean
        result = self.validator.validate(True, schema_boolean)
        assert result.valid

        # Integer should be valid as a number
        result = self.validator.validate(42, schema_number)
        assert result.valid

        # Whole floats count as integers
        result = self.validator.validate(2.0, schema_integer)
        assert result.valid

        # Integer shouldn't be valid as a boolean
        result = self.validator.validate(42, schema_boolean)
        assert not result.valid

        # Float shouldn't be valid as an integer
        result = self.validator.validate(3.14, schema_integer)
        assert not result.valid

        # Null only matches null
        result = self.validator.validate(None, {"type": "null"})
        assert result.valid
        result = self.validator.validate(0, {"type": "null"})
        assert not result.valid

    def test_reference_resolution(self):
        """Test resolution of schema references."""
        schema = {
            "definitions": {
                "positiveInteger": {
                    "type": "integer",
                    "minimum": 1
                }
            },
            "type": "object",
            "properties": {
                "count": {"$ref": "#/definitions/positiveInteger"}
            }
        }

        # Valid data
        result = self.validator.validate({"count": 5}, dereference(schema))
        assert result.valid

        # Invalid data (negative number)
        result = self.validator.validate({"count": -5}, dereference(schema))
        assert not result.valid
        assert len(result.errors) == 1
        assert result.errors[0].code == ErrorCode.NUMBER_TOO_SMALL

    def test_nested_validation(self):
        """Test validation of nested objects."""
        schema = {
            "type": "object",
            "properties": {
                "person": {
                    "type": "object",
                    "properties": {
                        "name": {"type": "string"},
                        "age": {"type": "integer", "minimum": 0}
                    },
                    "required": ["name"]
                }
            }
        }

        # Valid data
        result = self.validator.validate(
            {"person": {"name": "John", "age": 30}}, schema)
        assert result.valid

        # Missing required property
        result = self.validator.validate({"person": {"age": 30}}, schema)
        assert not result.valid
        assert len(result.errors) == 1
        assert result.errors[0].code == ErrorCode.REQUIRED_PROPERTY_MISSING
        assert result.errors[0].path == "/person/name"

        # Value below minimum
        result = self.validator.validate(
            {"person": {"name": "John", "age": -5}}, schema)
        assert not result.valid
        assert len(result.errors) == 1
        assert result.errors[0].code == ErrorCode.NUMBER_TOO_SMALL
        assert result.errors[0].path == "/person/age"


if __name__ == "__main__":
    pytest.main(["-xvs", __file__])
