"""Encode logical attribute names into JSON paths and back.

The rules differ per credential profile and live in each profile's codec;
the functions here select the codec and hold the helpers shared by all of
them. Every function is pure.
"""

import re
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Union

from .profiles import CredentialProfile, ProfileCodecs, default_codecs

RESERVED_TYPE_PATHS = ("$.type", "$.vct")

# $['namespace']['element']
MDOC_PATH_PATTERN = re.compile(r"^\$\['(.*?)'\]\['(.*)'\]$")


@dataclass(frozen=True)
class DecodedPath:
    """Logical attribute recovered from a JSON path."""

    logical_name: str
    has_prefix: bool


def split_paths(value: Optional[str]) -> List[str]:
    """Split a comma separated path list, dropping blanks."""
    return [part.strip() for part in (value or "").split(",") if part.strip()]


def join_paths(paths: Iterable[str]) -> str:
    """Join paths into the comma separated form shown in the editor."""
    return ", ".join(paths)


def normalize_paths(value: Optional[str]) -> str:
    """Normalize spacing of a comma separated path list."""
    return join_paths(split_paths(value))


def is_reserved_type_path(path: str) -> bool:
    """Whether a path is one of the type field literals."""
    return path in RESERVED_TYPE_PATHS


def field_paths(field: Any) -> Optional[List[str]]:
    """Return the path list of a definition field, or None if malformed.

    A bare string path is accepted as a single-element list.
    """
    if not isinstance(field, dict):
        return None
    paths = field.get("path")
    if isinstance(paths, str):
        paths = [paths]
    if not isinstance(paths, list) or not paths:
        return None
    if not all(isinstance(path, str) for path in paths):
        return None
    return paths


def is_type_field(field: Any) -> bool:
    """Whether a definition field is the type field."""
    paths = field_paths(field)
    return bool(paths) and any(is_reserved_type_path(path) for path in paths)


def definition_fields(document: Any) -> List[Any]:
    """Return the constraint fields of a document, or [] if it has none."""
    if not isinstance(document, dict):
        return []
    constraints = document.get("constraints")
    if not isinstance(constraints, dict):
        return []
    fields = constraints.get("fields")
    return fields if isinstance(fields, list) else []


def encode_path(
    logical_name: str,
    has_prefix: bool,
    profile: Union[str, CredentialProfile],
    mdoc_prefix: str = "",
    codecs: Optional[ProfileCodecs] = None,
) -> str:
    """Encode a logical attribute name into a profile specific JSON path."""
    codec = (codecs or default_codecs()).codec_for_profile(profile)
    return codec.encode_path(logical_name, has_prefix, mdoc_prefix)


def decode_path(
    path: str,
    profile: Union[str, CredentialProfile],
    mdoc_prefix: Optional[str] = None,
    codecs: Optional[ProfileCodecs] = None,
) -> DecodedPath:
    """Decode a JSON path into a logical attribute name and prefix flag."""
    codec = (codecs or default_codecs()).codec_for_profile(profile)
    return codec.decode_path(path, mdoc_prefix)


def detect_mdoc_prefix(document: Any) -> Optional[str]:
    """Recover the mdoc namespace from the first non-type field of a document.

    Returns None when the document has no such field or its first path is not
    shaped like ``$['namespace']['element']``.
    """
    for field in definition_fields(document):
        paths = field_paths(field)
        if not paths or is_type_field(field):
            continue
        match = MDOC_PATH_PATTERN.match(paths[0])
        return match.group(1) if match else None
    return None
