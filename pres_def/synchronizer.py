"""Synchronize the field model with the presentation definition document.

``project`` turns a field model into a definition document and runs on every
structured edit. ``reconcile`` folds a hand edited document back into the
previous model and runs only when the raw edit is committed. Hidden entries
never appear in the document, so reconcile merges against the previous model
rather than replacing it; that merge is what keeps hidden entries alive.
"""

import json
import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, List, Optional, Sequence, Union

from .error import ParseError, PresDefError, StructuralError
from .filters import from_json, to_json
from .models.field_model import FieldEntry, FieldModel
from .paths import (
    definition_fields,
    detect_mdoc_prefix,
    field_paths,
    is_reserved_type_path,
    is_type_field,
    join_paths,
)
from .profiles import CredentialProfile, ProfileCodec, ProfileCodecs, default_codecs
from .type_field import TypeFieldValues, decode_type_field, find_type_field
from .validator import validate

LOGGER = logging.getLogger(__name__)


@dataclass
class ReconcileResult:
    """Result of folding definition text back into the field model."""

    model: Optional[FieldModel] = None
    error: Optional[PresDefError] = None

    @property
    def ok(self) -> bool:
        """Whether a new model was produced."""
        return self.error is None and self.model is not None

    @property
    def reason(self) -> Optional[str]:
        """Displayable reason for a failure."""
        return self.error.reason if self.error else None


@dataclass
class _Candidate:
    """Decoded document field waiting to be claimed by a previous entry."""

    entry: FieldEntry
    claimed: bool = False


class Synchronizer:
    """Convert between field models and presentation definition documents."""

    def __init__(self, codecs: Optional[ProfileCodecs] = None, indent: int = 2):
        """Initialize the synchronizer."""
        self.codecs = codecs or default_codecs()
        self.indent = indent

    def project(self, model: FieldModel) -> dict:
        """Build the definition document for a model.

        The type field comes first for profiles that carry one, followed by
        every visible, named entry in model order.
        """
        state = model.state
        codec = self.codecs.codec_for_profile(state.credential_profile)

        fields = []
        type_field = codec.encode_type_field(
            state.type_check_paths, state.type_filter_value
        )
        if type_field is not None:
            fields.append(type_field)

        for entry in model.entries:
            if entry.is_hidden or entry.is_placeholder:
                continue
            if self._shadows_type_field(entry, codec, state.mdoc_namespace_prefix):
                LOGGER.warning(
                    "Field %r encodes to a type path; left out of definition",
                    entry.logical_path,
                )
                continue
            field = {
                "path": self._encode_entry(entry, codec, state.mdoc_namespace_prefix)
            }
            field_filter = to_json(entry.filter)
            if field_filter is not None:
                field["filter"] = field_filter
            fields.append(field)

        constraints = {"fields": fields}
        if codec.limit_disclosure_required:
            constraints["limit_disclosure"] = "required"
        return {"constraints": constraints}

    @staticmethod
    def _encode_entry(
        entry: FieldEntry, codec: ProfileCodec, mdoc_prefix: str
    ) -> List[str]:
        return [
            codec.encode_path(name, entry.has_prefix, mdoc_prefix)
            for name in entry.alternatives
        ]

    @classmethod
    def _shadows_type_field(
        cls, entry: FieldEntry, codec: ProfileCodec, mdoc_prefix: str
    ) -> bool:
        """Whether an entry would be emitted as a second type field."""
        return entry.is_reserved or any(
            is_reserved_type_path(path)
            for path in cls._encode_entry(entry, codec, mdoc_prefix)
        )

    def serialize(self, document: dict) -> str:
        """Render a document as indented JSON text."""
        return json.dumps(document, indent=self.indent)

    def project_text(self, model: FieldModel) -> str:
        """Build the definition text for a model."""
        return self.serialize(self.project(model))

    def reconcile(
        self,
        raw_text: str,
        previous: FieldModel,
        profile: Union[str, CredentialProfile, None] = None,
    ) -> ReconcileResult:
        """Fold edited definition text into the previous model.

        Returns a result carrying either the new model or the error; the
        previous model is never modified.
        """
        profile = CredentialProfile.parse(profile or previous.profile)
        try:
            document = self._parse(raw_text)
            validate(document, profile, self.codecs)
        except (ParseError, StructuralError) as err:
            LOGGER.info("Rejected definition edit: %s", err.reason)
            return ReconcileResult(error=err)

        codec = self.codecs.codec_for_profile(profile)
        state = previous.state

        mdoc_prefix = state.mdoc_namespace_prefix
        if profile is CredentialProfile.MSO_MDOC:
            detected = detect_mdoc_prefix(document)
            if detected is None:
                LOGGER.warning(
                    "Could not determine mdoc namespace from definition; keeping %r",
                    mdoc_prefix,
                )
            else:
                mdoc_prefix = detected

        if profile is CredentialProfile.MSO_MDOC and find_type_field(document) is None:
            type_values = TypeFieldValues(
                state.type_check_paths, state.type_filter_value
            )
        else:
            type_values = decode_type_field(document)

        decoded = self._decode_fields(document, codec, mdoc_prefix)
        entries = self._merge(previous.entries, decoded, codec, mdoc_prefix)

        model = FieldModel(
            entries=tuple(entries),
            state=replace(
                state,
                credential_profile=profile,
                limit_disclosure_requested=(
                    document["constraints"].get("limit_disclosure") == "required"
                ),
                type_check_paths=type_values.type_check_paths,
                type_filter_value=type_values.type_filter_value,
                mdoc_namespace_prefix=mdoc_prefix,
            ),
        )
        LOGGER.info(
            "Reconciled definition: %d fields from %d previous",
            len(model.entries),
            len(previous.entries),
        )
        return ReconcileResult(model=model)

    def peek_type_field(self, raw_text: str, previous: FieldModel) -> ReconcileResult:
        """Refresh only the type check values from text still being edited."""
        try:
            document = self._parse(raw_text)
        except ParseError as err:
            return ReconcileResult(error=err)

        values = decode_type_field(document)
        return ReconcileResult(
            model=previous.with_state(
                type_check_paths=values.type_check_paths,
                type_filter_value=values.type_filter_value,
            )
        )

    @staticmethod
    def _parse(raw_text: str) -> Any:
        try:
            return json.loads(raw_text)
        except json.JSONDecodeError as err:
            raise ParseError(
                f"Invalid JSON: {err.msg} at line {err.lineno} column {err.colno}"
            ) from err
        except (TypeError, ValueError) as err:
            raise ParseError("Invalid JSON") from err

    @staticmethod
    def _decode_fields(
        document: dict, codec: ProfileCodec, mdoc_prefix: Optional[str]
    ) -> List[FieldEntry]:
        """Decode every non-type field of a validated document."""
        entries = []
        for index, field in enumerate(definition_fields(document)):
            paths = field_paths(field)
            if paths is None:
                LOGGER.warning("Skipping malformed definition field %d: %r", index, field)
                continue
            if is_type_field(field):
                continue

            decoded = [codec.decode_path(path, mdoc_prefix) for path in paths]
            entries.append(
                FieldEntry(
                    logical_path=join_paths(d.logical_name for d in decoded),
                    has_prefix=decoded[0].has_prefix,
                    filter=from_json(field.get("filter")),
                )
            )
        return entries

    @staticmethod
    def _claim(
        candidates: Sequence[_Candidate], matches: Callable[[FieldEntry], bool]
    ) -> Optional[_Candidate]:
        for candidate in candidates:
            if not candidate.claimed and matches(candidate.entry):
                candidate.claimed = True
                return candidate
        return None

    def _merge(
        self,
        previous: Sequence[FieldEntry],
        decoded: Sequence[FieldEntry],
        codec: ProfileCodec,
        mdoc_prefix: str,
    ) -> List[FieldEntry]:
        """Merge decoded document fields into the previous entries.

        Previous entries keep their position and hidden flag when the document
        still names them; hidden and placeholder entries are kept even when it
        does not, and so are entries that would shadow the type field. Document
        fields nobody claimed are appended.
        """
        candidates = [_Candidate(entry) for entry in decoded]
        merged: List[Optional[FieldEntry]] = []
        unmatched = []

        for existing in previous:
            if existing.is_placeholder or self._shadows_type_field(
                existing, codec, mdoc_prefix
            ):
                merged.append(existing)
                continue

            key = existing.match_key
            candidate = self._claim(candidates, lambda entry: entry.match_key == key)
            if candidate:
                merged.append(
                    replace(
                        existing,
                        filter=candidate.entry.filter,
                        has_prefix=candidate.entry.has_prefix,
                    )
                )
            elif existing.is_hidden:
                merged.append(existing)
            else:
                unmatched.append((len(merged), existing))
                merged.append(None)

        # Alternatives added to or removed from a multi-path entry
        for position, existing in unmatched:
            names = set(existing.alternatives)
            candidate = self._claim(
                candidates, lambda entry: bool(names & set(entry.alternatives))
            )
            if candidate:
                LOGGER.debug(
                    "Field %r now reads %r",
                    existing.logical_path,
                    candidate.entry.logical_path,
                )
                merged[position] = replace(
                    existing,
                    logical_path=candidate.entry.logical_path,
                    filter=candidate.entry.filter,
                    has_prefix=candidate.entry.has_prefix,
                )
            else:
                LOGGER.debug("Field %r removed from definition", existing.logical_path)

        merged.extend(c.entry for c in candidates if not c.claimed)
        return [entry for entry in merged if entry is not None]


def project(model: FieldModel) -> dict:
    """Build the definition document for a model with the bundled codecs."""
    return Synchronizer().project(model)


def reconcile(
    raw_text: str,
    previous: FieldModel,
    profile: Union[str, CredentialProfile, None] = None,
) -> ReconcileResult:
    """Fold edited definition text into a model with the bundled codecs."""
    return Synchronizer().reconcile(raw_text, previous, profile)
