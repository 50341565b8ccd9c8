"""Tests for argument coercers and the validation pass."""

import pytest

from wp_mcp.api.errors import ToolArgumentError
from wp_mcp.tools.coercion import (
    coerce,
    get_array,
    get_boolean,
    get_number,
    get_object,
    get_string,
    validate_arguments,
)


class TestCoercerDefaults:
    """Absent or mistyped values degrade silently to the kind's default."""

    def test_absent_values(self):
        assert get_string({}, "title") == ""
        assert get_number({}, "id") == 0
        assert get_boolean({}, "force") is False
        assert get_array({}, "tags") == []
        assert get_object({}, "billing") == {}

    def test_none_argument_bag(self):
        assert get_string(None, "title") == ""
        assert get_number(None, "id") == 0
        assert get_boolean(None, "force") is False

    def test_mistyped_values(self):
        args = {"title": ["x"], "id": "seven", "force": "yes", "tags": "a,b", "billing": [1]}
        assert get_string(args, "title") == ""
        assert get_number(args, "id") == 0
        assert get_boolean(args, "force") is False
        assert get_array(args, "tags") == []
        assert get_object(args, "billing") == {}

    def test_booleans_are_not_numbers(self):
        assert get_number({"id": True}, "id") == 0

    def test_defaults_are_fresh_containers(self):
        first = get_array({}, "tags")
        first.append(1)
        assert get_array({}, "tags") == []


class TestCoercerConversions:

    def test_numeric_strings(self):
        assert get_number({"id": "42"}, "id") == 42
        assert get_number({"rate": "2.5"}, "rate") == 2.5

    def test_boolean_strings(self):
        assert get_boolean({"force": "true"}, "force") is True
        assert get_boolean({"force": "FALSE"}, "force") is False

    def test_numbers_to_string(self):
        assert get_string({"amount": 10}, "amount") == "10"

    def test_passthrough_of_correct_types(self):
        assert get_array({"tags": [1, 2]}, "tags") == [1, 2]
        assert get_object({"billing": {"city": "Oslo"}}, "billing") == {"city": "Oslo"}

    def test_integer_rejects_fractions(self):
        assert coerce(1.5, "integer") == 0
        assert coerce(3.0, "integer") == 3


SCHEMA = {
    "type": "object",
    "properties": {
        "id": {"type": "integer"},
        "force": {"type": "boolean"},
        "title": {"type": "string"},
        "value": {},
    },
    "required": ["id"],
}


class TestValidateArguments:

    def test_coerces_declared_fields(self):
        out = validate_arguments(SCHEMA, {"id": "7", "force": "true"})
        assert out == {"id": 7, "force": True}

    def test_missing_required_field_rejected(self):
        with pytest.raises(ToolArgumentError, match="missing required field.*id"):
            validate_arguments(SCHEMA, {"force": True})

    def test_required_none_counts_as_missing(self):
        with pytest.raises(ToolArgumentError, match="id"):
            validate_arguments(SCHEMA, {"id": None})

    def test_wrong_type_rejected(self):
        with pytest.raises(ToolArgumentError, match="force \\(expected boolean\\)"):
            validate_arguments(SCHEMA, {"id": 1, "force": "maybe"})

    def test_reports_all_problems(self):
        with pytest.raises(ToolArgumentError) as info:
            validate_arguments({**SCHEMA, "required": ["id", "title"]}, {"force": []})
        message = str(info.value)
        assert "id" in message and "title" in message and "force" in message

    def test_undeclared_keys_pass_through(self):
        out = validate_arguments(SCHEMA, {"id": 1, "per_page": 5, "orderby": "date"})
        assert out == {"id": 1, "per_page": 5, "orderby": "date"}

    def test_untyped_field_accepts_anything(self):
        out = validate_arguments(SCHEMA, {"id": 1, "value": ["a", "b"]})
        assert out["value"] == ["a", "b"]

    def test_absent_optional_fields_stay_absent(self):
        out = validate_arguments(SCHEMA, {"id": 1})
        assert "title" not in out and "force" not in out

    def test_non_object_arguments_rejected(self):
        with pytest.raises(ToolArgumentError):
            validate_arguments(SCHEMA, ["id", 1])
