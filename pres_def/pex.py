"""Preview a presentation definition against a sample credential.

The projected definition is compiled once and each sample payload is then
checked field by field. Paths are JSONPath expressions and filters are
JSON Schema (draft 7) fragments.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

import jsonpath_ng as jsonpath
from jsonpath_ng import DatumInContext, JSONPath
from jsonpath_ng.exceptions import JSONPathError
from jsonschema import Draft7Validator, SchemaError

from .error import PresDefError
from .paths import definition_fields, field_paths

LOGGER = logging.getLogger(__name__)


class PreviewError(PresDefError):
    """Raised when a definition cannot be compiled for preview."""


def compile_filter(schema: Any) -> Draft7Validator:
    """Build the validator for a field filter."""
    if not isinstance(schema, dict):
        raise PreviewError(f"Filter must be an object, got {schema!r}")
    try:
        Draft7Validator.check_schema(schema)
    except SchemaError as err:
        raise PreviewError(f"Invalid filter {schema}") from err
    return Draft7Validator(schema)


@dataclass
class FieldCheck:
    """Compiled constraint field."""

    source: List[str]
    expressions: List[JSONPath]
    validator: Optional[Draft7Validator] = None

    @classmethod
    def compile(cls, constraint: Any) -> "FieldCheck":
        """Compile the paths and filter of a constraint field."""
        source = field_paths(constraint)
        if source is None:
            raise PreviewError(f"Constraint field has no paths: {constraint}")

        try:
            expressions = [jsonpath.parse(path) for path in source]
        except JSONPathError as err:
            raise PreviewError(f"Invalid path in {source}") from err

        validator = None
        if constraint.get("filter"):
            validator = compile_filter(constraint["filter"])

        return cls(source, expressions, validator)

    def candidates(self, payload: Any) -> Iterator[DatumInContext]:
        """Values selected by each path, in path order."""
        for expression in self.expressions:
            yield from expression.find(payload)

    def first_match(self, payload: Any) -> Optional[DatumInContext]:
        """First selected value that satisfies the filter."""
        for datum in self.candidates(payload):
            if self.validator is None or self.validator.is_valid(datum.value):
                return datum
        return None


@dataclass
class PreviewResult:
    """Outcome of checking a sample credential."""

    matched: bool = False
    fields: Dict[str, Any] = field(default_factory=dict)
    details: Optional[str] = None


class DefinitionEvaluator:
    """Check sample credentials against the constraint fields of a definition."""

    def __init__(self, checks: List[FieldCheck]):
        """Initialize the evaluator."""
        self.checks = checks

    @classmethod
    def compile(cls, document: dict) -> "DefinitionEvaluator":
        """Compile a projected definition document."""
        return cls([FieldCheck.compile(item) for item in definition_fields(document)])

    def match(self, credential: Any) -> PreviewResult:
        """Check a credential payload, collecting the selected values.

        Stops at the first field nothing in the payload satisfies.
        """
        selected = {}
        for check in self.checks:
            datum = check.first_match(credential)
            if datum is None:
                LOGGER.debug("Preview: nothing satisfies %s", check.source)
                return PreviewResult(
                    fields=selected,
                    details=f"No value satisfies field {check.source}",
                )
            selected[str(datum.full_path)] = datum.value

        return PreviewResult(matched=True, fields=selected)
