"""Constraint filter shapes and their JSON projections.

A field filter in a presentation definition is a JSON Schema fragment. Only
four fragment shapes are editable in the structured view:

- ``{"type": "array", "contains": {"const": value}}``
- ``{"type": "string", "const": value}``
- ``{"type": "string", "pattern": pattern}``
- ``{"type": "number", "minimum": low, "maximum": high}``

Anything else decodes to ``None`` and the entry simply carries no filter.
"""

import logging
from dataclasses import dataclass
from numbers import Number
from typing import Any, Mapping, Optional, Union

from marshmallow import (
    EXCLUDE,
    Schema,
    ValidationError,
    fields,
    post_dump,
    post_load,
    validate,
)

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArrayContainsConst:
    """Array value must contain a constant."""

    value: Any

    kind = "array-contains-const"
    type = "array"


@dataclass(frozen=True)
class StringConst:
    """String value must equal a constant."""

    value: Any

    kind = "string-const"
    type = "string"


@dataclass(frozen=True)
class StringPattern:
    """String value must match a regular expression."""

    pattern: str

    kind = "string-pattern"
    type = "string"


@dataclass(frozen=True)
class NumberRange:
    """Number value must fall within optional bounds."""

    minimum: Optional[Number] = None
    maximum: Optional[Number] = None

    kind = "number-range"
    type = "number"


Filter = Union[ArrayContainsConst, StringConst, StringPattern, NumberRange]


def _is_number(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


class ArrayContainsConstSchema(Schema):
    """Schema for array-contains-const filters."""

    class Meta:
        """ArrayContainsConstSchema metadata."""

        unknown = EXCLUDE

    type = fields.Str(required=True, validate=validate.Equal(ArrayContainsConst.type))
    contains = fields.Method("dump_contains", deserialize="load_contains", required=True)

    def dump_contains(self, obj: ArrayContainsConst) -> dict:
        """Wrap the constant."""
        return {"const": obj.value}

    def load_contains(self, value: Any) -> Any:
        """Unwrap the constant."""
        if not isinstance(value, Mapping) or "const" not in value:
            raise ValidationError("contains must be an object with a const")
        return value["const"]

    @post_load
    def make_filter(self, data, **kwargs):
        """Build the filter."""
        return ArrayContainsConst(data["contains"])


class StringConstSchema(Schema):
    """Schema for string-const filters."""

    class Meta:
        """StringConstSchema metadata."""

        unknown = EXCLUDE

    type = fields.Str(required=True, validate=validate.Equal(StringConst.type))
    value = fields.Raw(required=True, allow_none=True, data_key="const")

    @post_load
    def make_filter(self, data, **kwargs):
        """Build the filter."""
        return StringConst(data["value"])


class StringPatternSchema(Schema):
    """Schema for string-pattern filters."""

    class Meta:
        """StringPatternSchema metadata."""

        unknown = EXCLUDE

    type = fields.Str(required=True, validate=validate.Equal(StringPattern.type))
    pattern = fields.Str(required=True)

    @post_load
    def make_filter(self, data, **kwargs):
        """Build the filter."""
        return StringPattern(data["pattern"])


class NumberRangeSchema(Schema):
    """Schema for number-range filters."""

    class Meta:
        """NumberRangeSchema metadata."""

        unknown = EXCLUDE

    type = fields.Str(required=True, validate=validate.Equal(NumberRange.type))
    minimum = fields.Raw(load_default=None, allow_none=True)
    maximum = fields.Raw(load_default=None, allow_none=True)

    @post_load
    def make_filter(self, data, **kwargs):
        """Build the filter."""
        for bound in ("minimum", "maximum"):
            if data[bound] is not None and not _is_number(data[bound]):
                raise ValidationError(f"{bound} must be a number", bound)
        return NumberRange(data["minimum"], data["maximum"])

    @post_dump
    def drop_unset_bounds(self, data, **kwargs):
        """Omit bounds that are not set."""
        return {key: value for key, value in data.items() if value is not None}


# Load order matters: a string filter carrying both const and pattern is a const.
_SCHEMAS = {
    ArrayContainsConst.kind: ArrayContainsConstSchema(),
    StringConst.kind: StringConstSchema(),
    StringPattern.kind: StringPatternSchema(),
    NumberRange.kind: NumberRangeSchema(),
}


def to_json(value: Optional[Filter]) -> Optional[dict]:
    """Project a filter into its JSON Schema fragment."""
    if value is None:
        return None
    return _SCHEMAS[value.kind].dump(value)


def from_json(value: Any) -> Optional[Filter]:
    """Parse a JSON Schema fragment into a filter, or None if unrecognized."""
    if value is None:
        return None
    if not isinstance(value, Mapping):
        LOGGER.debug("Dropping filter that is not an object: %r", value)
        return None

    for schema in _SCHEMAS.values():
        try:
            return schema.load(value)
        except ValidationError:
            continue

    LOGGER.debug("Dropping unrecognized filter: %s", value)
    return None
