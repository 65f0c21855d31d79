import pytest

from pres_def.filters import (
    ArrayContainsConst,
    NumberRange,
    StringConst,
    StringPattern,
    from_json,
    to_json,
)


class TestFilterProjection:
    """Filters project to JSON Schema fragments."""

    def test_array_contains_const(self):
        assert to_json(ArrayContainsConst("VerifiableCredential")) == {
            "type": "array",
            "contains": {"const": "VerifiableCredential"},
        }

    def test_string_const(self):
        assert to_json(StringConst("ExampleIDCard")) == {
            "type": "string",
            "const": "ExampleIDCard",
        }

    def test_string_pattern(self):
        assert to_json(StringPattern("^did:")) == {"type": "string", "pattern": "^did:"}

    def test_number_range_omits_unset_bounds(self):
        assert to_json(NumberRange(minimum=18)) == {"type": "number", "minimum": 18}
        assert to_json(NumberRange(maximum=4.0)) == {"type": "number", "maximum": 4.0}
        assert to_json(NumberRange()) == {"type": "number"}

    def test_number_range_keeps_integers(self):
        dumped = to_json(NumberRange(minimum=1, maximum=10))
        assert dumped == {"type": "number", "minimum": 1, "maximum": 10}
        assert isinstance(dumped["minimum"], int)

    def test_key_order(self):
        assert list(to_json(ArrayContainsConst("x"))) == ["type", "contains"]
        assert list(to_json(NumberRange(1, 2))) == ["type", "minimum", "maximum"]

    def test_none(self):
        assert to_json(None) is None

    @pytest.mark.parametrize(
        "value",
        [
            ArrayContainsConst("x"),
            StringConst("x"),
            StringPattern("x"),
            NumberRange(1, 2),
        ],
    )
    def test_json_type_follows_filter_type(self, value):
        dumped = to_json(value)
        assert dumped["type"] == value.type
        assert from_json(dumped) == value
        assert from_json({**dumped, "type": "boolean"}) is None


class TestFilterParsing:
    """JSON Schema fragments parse back into filters."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (
                {"type": "array", "contains": {"const": "Degree"}},
                ArrayContainsConst("Degree"),
            ),
            ({"type": "string", "const": "IDCard"}, StringConst("IDCard")),
            ({"type": "string", "pattern": "^[0-9]+$"}, StringPattern("^[0-9]+$")),
            ({"type": "number", "minimum": 0}, NumberRange(minimum=0)),
            (
                {"type": "number", "minimum": 1.5, "maximum": 3},
                NumberRange(1.5, 3),
            ),
        ],
    )
    def test_recognized(self, value, expected):
        assert from_json(value) == expected

    def test_const_wins_over_pattern(self):
        assert from_json({"type": "string", "const": "a", "pattern": "b"}) == (
            StringConst("a")
        )

    def test_extra_keys_dropped(self):
        assert from_json({"type": "string", "pattern": "^a", "minLength": 2}) == (
            StringPattern("^a")
        )

    @pytest.mark.parametrize(
        "value",
        [
            {"type": "string"},
            {"type": "boolean", "const": True},
            {"type": "array", "contains": "Degree"},
            {"type": "array", "items": {"type": "string"}},
            {"type": "number", "minimum": "ten"},
            {"type": "number", "maximum": True},
            {"const": "no type"},
            {"type": ""},
            "string",
            ["array"],
            42,
        ],
    )
    def test_unrecognized_degrades_to_none(self, value):
        assert from_json(value) is None

    def test_none(self):
        assert from_json(None) is None
