"""Editor session holding the current field model snapshot."""

import logging
from typing import Any, Callable, Optional, Union

from .config import Config
from .error import PresDefError
from .filters import Filter
from .models.field_model import FieldEntry, FieldModel
from .profiles import CredentialProfile
from .synchronizer import ReconcileResult, Synchronizer

LOGGER = logging.getLogger(__name__)


class EditorSession:
    """State of one editing session.

    Structured edits replace the model snapshot and re-project the definition
    text immediately. Raw text edits go to a draft that is only folded back
    into the model on commit.
    """

    def __init__(
        self,
        model: Optional[FieldModel] = None,
        synchronizer: Optional[Synchronizer] = None,
        config: Optional[Config] = None,
    ):
        """Initialize the session."""
        self.config = config or Config()
        self.synchronizer = synchronizer or Synchronizer(indent=self.config.indent)
        self.model = model or FieldModel.initial(self.config)
        self.text = self.synchronizer.project_text(self.model)
        self.draft: Optional[str] = None
        self.error: Optional[str] = None

    @property
    def editing_raw(self) -> bool:
        """Whether a raw definition edit is open."""
        return self.draft is not None

    def apply(self, mutation: Callable[[FieldModel], FieldModel]) -> FieldModel:
        """Swap in the snapshot produced by a mutation and re-project."""
        self.model = mutation(self.model)
        self.text = self.synchronizer.project_text(self.model)
        return self.model

    def add_field(
        self,
        logical_path: str = "",
        has_prefix: bool = True,
        entry_filter: Optional[Filter] = None,
    ) -> FieldModel:
        """Append a field entry."""
        entry = FieldEntry(logical_path, has_prefix=has_prefix, filter=entry_filter)
        return self.apply(lambda model: model.add_entry(entry))

    def remove_field(self, index: int) -> FieldModel:
        """Remove a field entry."""
        return self.apply(lambda model: model.remove_entry(index))

    def edit_field(self, index: int, **changes: Any) -> FieldModel:
        """Edit a field entry."""
        return self.apply(lambda model: model.edit_entry(index, **changes))

    def toggle_hidden(self, index: int) -> FieldModel:
        """Show or hide a field entry."""
        return self.apply(lambda model: model.toggle_hidden(index))

    def set_profile(self, profile: Union[str, CredentialProfile]) -> FieldModel:
        """Select the credential profile."""
        return self.apply(lambda model: model.with_profile(profile))

    def set_type_check(
        self, paths: Optional[str] = None, value: Optional[str] = None
    ) -> FieldModel:
        """Set the type check paths and/or expected type value."""
        changes = {}
        if paths is not None:
            changes["type_check_paths"] = paths
        if value is not None:
            changes["type_filter_value"] = value
        return self.apply(lambda model: model.with_state(**changes))

    def set_mdoc_prefix(self, prefix: str) -> FieldModel:
        """Set the mdoc namespace."""
        return self.apply(lambda model: model.with_state(mdoc_namespace_prefix=prefix))

    def open_raw_editor(self) -> str:
        """Start a raw definition edit from the current text."""
        self.text = self.synchronizer.project_text(self.model)
        self.draft = self.text
        self.error = None
        return self.draft

    def edit_draft(self, text: str) -> ReconcileResult:
        """Record draft text and preview the type values it carries."""
        if self.draft is None:
            raise PresDefError("No raw definition edit in progress")
        self.draft = text
        result = self.synchronizer.peek_type_field(text, self.model)
        self.error = result.reason
        return result

    def commit(self) -> ReconcileResult:
        """Fold the draft into the model.

        On failure the model and text are kept, the draft stays open and the
        reason is recorded.
        """
        if self.draft is None:
            raise PresDefError("No raw definition edit in progress")

        result = self.synchronizer.reconcile(
            self.draft, self.model, self.model.profile
        )
        if not result.ok:
            self.error = result.reason
            return result

        self.model = result.model
        self.text = self.synchronizer.project_text(self.model)
        self.draft = None
        self.error = None
        LOGGER.info("Committed raw definition edit")
        return result

    def cancel(self):
        """Discard the draft."""
        self.draft = None
        self.error = None
