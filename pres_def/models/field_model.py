"""Field model edited through the structured view."""

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, List, Mapping, Optional, Tuple, Union

from marshmallow import EXCLUDE, Schema, ValidationError, fields, post_load

from ..error import ProfileCodecError
from ..filters import Filter, from_json, to_json
from ..paths import is_reserved_type_path, join_paths, split_paths
from ..profiles import CredentialProfile

if TYPE_CHECKING:
    from ..config import Config


@dataclass(frozen=True)
class FieldEntry:
    """Single editable field of a presentation definition."""

    logical_path: str = ""
    has_prefix: bool = True
    is_hidden: bool = False
    filter: Optional[Filter] = None

    @property
    def alternatives(self) -> List[str]:
        """Alternative attribute names of this entry."""
        return split_paths(self.logical_path)

    @property
    def match_key(self) -> str:
        """Normalized logical path used to match definition fields."""
        return join_paths(self.alternatives)

    @property
    def is_placeholder(self) -> bool:
        """Whether the entry has no attribute name yet."""
        return not self.alternatives

    @property
    def is_reserved(self) -> bool:
        """Whether the entry names the type field itself."""
        return any(is_reserved_type_path(name) for name in self.alternatives)


@dataclass(frozen=True)
class TopLevelState:
    """Definition wide settings of the field model."""

    credential_profile: CredentialProfile = CredentialProfile.JWT
    limit_disclosure_requested: bool = False
    type_check_paths: str = ""
    type_filter_value: Optional[str] = None
    mdoc_namespace_prefix: str = ""


@dataclass(frozen=True)
class FieldModel:
    """Immutable snapshot of the structured editor state.

    Every mutation returns a new snapshot; the current one is held by the
    caller.
    """

    entries: Tuple[FieldEntry, ...] = ()
    state: TopLevelState = field(default_factory=TopLevelState)

    @classmethod
    def initial(cls, config: Optional["Config"] = None) -> "FieldModel":
        """Return the empty model a session starts from."""
        if config is None:
            return cls()
        return cls(
            state=TopLevelState(
                credential_profile=config.profile,
                mdoc_namespace_prefix=config.mdoc_namespace,
            )
        )

    @property
    def profile(self) -> CredentialProfile:
        """Selected credential profile."""
        return self.state.credential_profile

    def add_entry(self, entry: Optional[FieldEntry] = None) -> "FieldModel":
        """Append an entry; a blank placeholder by default."""
        return replace(self, entries=self.entries + (entry or FieldEntry(),))

    def remove_entry(self, index: int) -> "FieldModel":
        """Remove the entry at index."""
        entries = list(self.entries)
        del entries[index]
        return replace(self, entries=tuple(entries))

    def edit_entry(self, index: int, **changes: Any) -> "FieldModel":
        """Replace attributes of the entry at index."""
        entries = list(self.entries)
        entries[index] = replace(entries[index], **changes)
        return replace(self, entries=tuple(entries))

    def toggle_hidden(self, index: int) -> "FieldModel":
        """Flip whether the entry at index is left out of the definition."""
        entry = self.entries[index]
        return self.edit_entry(index, is_hidden=not entry.is_hidden)

    def with_state(self, **changes: Any) -> "FieldModel":
        """Replace top level settings."""
        return replace(self, state=replace(self.state, **changes))

    def with_profile(self, profile: Union[str, CredentialProfile]) -> "FieldModel":
        """Switch the credential profile.

        Type check paths typed for another profile are cleared so the new
        profile starts from its own default type path.
        """
        profile = CredentialProfile.parse(profile)
        if profile is self.profile:
            return self
        return self.with_state(credential_profile=profile, type_check_paths="")

    def serialize(self) -> dict:
        """Dump the snapshot to a JSON compatible dict."""
        return FieldModelSchema().dump(self)

    @classmethod
    def deserialize(cls, data: Mapping[str, Any]) -> "FieldModel":
        """Load a snapshot from a dict; raises marshmallow.ValidationError."""
        return FieldModelSchema().load(data)


class FilterField(fields.Field):
    """Filter carried as its JSON Schema fragment."""

    def _serialize(self, value, attr, obj, **kwargs):
        return to_json(value)

    def _deserialize(self, value, attr, data, **kwargs):
        return from_json(value)


class ProfileField(fields.Field):
    """Credential profile carried by name."""

    def _serialize(self, value, attr, obj, **kwargs):
        return None if value is None else CredentialProfile.parse(value).value

    def _deserialize(self, value, attr, data, **kwargs):
        try:
            return CredentialProfile.parse(value)
        except ProfileCodecError as err:
            raise ValidationError(str(err)) from err


class FieldEntrySchema(Schema):
    """Schema for FieldEntry."""

    class Meta:
        """FieldEntrySchema metadata."""

        unknown = EXCLUDE

    logical_path = fields.Str(
        data_key="path",
        load_default="",
        metadata={"example": "name, fullName"},
    )
    has_prefix = fields.Bool(data_key="hasPrefix", load_default=True)
    is_hidden = fields.Bool(data_key="isHidden", load_default=False)
    filter = FilterField(
        allow_none=True,
        load_default=None,
        metadata={"example": {"type": "string", "pattern": "^[A-Z]"}},
    )

    @post_load
    def make_entry(self, data, **kwargs):
        """Build the entry."""
        return FieldEntry(**data)


class FieldModelSchema(Schema):
    """Schema for FieldModel snapshots."""

    class Meta:
        """FieldModelSchema metadata."""

        unknown = EXCLUDE

    entries = fields.List(
        fields.Nested(FieldEntrySchema),
        data_key="fields",
        load_default=list,
    )
    credential_profile = ProfileField(
        attribute="state.credential_profile",
        data_key="credentialFormat",
        load_default=CredentialProfile.JWT,
    )
    limit_disclosure_requested = fields.Bool(
        attribute="state.limit_disclosure_requested",
        data_key="limitDisclosure",
        load_default=False,
    )
    type_check_paths = fields.Str(
        attribute="state.type_check_paths",
        data_key="typeCheck",
        load_default="",
    )
    type_filter_value = fields.Str(
        attribute="state.type_filter_value",
        data_key="typeFilter",
        allow_none=True,
        load_default=None,
    )
    mdoc_namespace_prefix = fields.Str(
        attribute="state.mdoc_namespace_prefix",
        data_key="mdocPrefix",
        load_default="",
        metadata={"example": "org.iso.18013.5.1"},
    )

    @post_load
    def make_model(self, data, **kwargs):
        """Build the model."""
        return FieldModel(
            entries=tuple(data.get("entries", ())),
            state=TopLevelState(**data.get("state", {})),
        )
