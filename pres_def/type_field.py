"""Encode and decode the type field of a presentation definition."""

from dataclasses import dataclass
from typing import Any, Optional, Union

from .filters import ArrayContainsConst, StringConst, from_json
from .paths import definition_fields, field_paths, is_type_field, join_paths
from .profiles import CredentialProfile, ProfileCodecs, default_codecs


@dataclass(frozen=True)
class TypeFieldValues:
    """Type check values as shown in the editor."""

    type_check_paths: str = ""
    type_filter_value: str = ""


def find_type_field(document: Any) -> Optional[dict]:
    """Return the first field whose paths include a type literal."""
    for field in definition_fields(document):
        if is_type_field(field):
            return field
    return None


def encode_type_field(
    type_check_paths: str,
    type_filter_value: Optional[str],
    profile: Union[str, CredentialProfile],
    codecs: Optional[ProfileCodecs] = None,
) -> Optional[dict]:
    """Build the type field for a profile; None for profiles without one."""
    codec = (codecs or default_codecs()).codec_for_profile(profile)
    return codec.encode_type_field(type_check_paths, type_filter_value)


def decode_type_field(document: Any) -> TypeFieldValues:
    """Recover the type check values from a document.

    The lookup is by path literal, not by profile: the document may have been
    written for a different profile than the one currently selected.
    """
    field = find_type_field(document)
    if field is None:
        return TypeFieldValues()

    type_filter = from_json(field.get("filter"))
    value = ""
    if isinstance(type_filter, (ArrayContainsConst, StringConst)):
        if type_filter.value is not None:
            value = str(type_filter.value)

    return TypeFieldValues(join_paths(field_paths(field)), value)
