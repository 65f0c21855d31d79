"""Behaviour shared by the credential profile codecs."""

from typing import Optional, Type

from .filters import Filter, to_json
from .paths import DecodedPath, split_paths
from .profiles import CredentialProfile


class BaseProfileCodec:
    """Codec for profiles whose subject attributes share a path prefix.

    Subclasses set the prefix, the default type path and the filter shape
    used for the type constant.
    """

    profile: CredentialProfile
    subject_prefix: str = "$."
    default_type_path: Optional[str] = None
    type_filter_class: Optional[Type[Filter]] = None
    limit_disclosure_required: bool = True

    @property
    def requires_type_field(self) -> bool:
        """Whether definitions for this profile carry a type field."""
        return self.default_type_path is not None

    def encode_path(
        self, logical_name: str, has_prefix: bool, mdoc_prefix: str = ""
    ) -> str:
        """Encode a logical attribute name into a JSON path."""
        if not has_prefix:
            return logical_name
        return f"{self.subject_prefix}{logical_name}"

    def decode_path(self, path: str, mdoc_prefix: Optional[str] = None) -> DecodedPath:
        """Decode a JSON path into a logical attribute name."""
        if path.startswith(self.subject_prefix):
            return DecodedPath(path[len(self.subject_prefix) :], True)
        return DecodedPath(path, False)

    def encode_type_field(
        self, type_check_paths: str, type_filter_value: Optional[str]
    ) -> Optional[dict]:
        """Build the type field from the typed paths, or the profile default."""
        if self.default_type_path is None:
            return None

        paths = split_paths(type_check_paths) or [self.default_type_path]

        field = {"path": paths}
        if type_filter_value and self.type_filter_class is not None:
            field["filter"] = to_json(self.type_filter_class(type_filter_value))
        return field

    def __repr__(self) -> str:
        """Return a readable representation."""
        return f"<{self.__class__.__name__} profile={self.profile.value}>"
