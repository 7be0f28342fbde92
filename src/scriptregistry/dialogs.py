"""Create/edit dialog state machines.

Created: 2026-10-12

Each dialog walks through:

    CLOSED -> OPENING_FOR_CREATE | OPENING_FOR_EDIT -> EDITING
           -> SUBMITTING -> CLOSED (success) | EDITING (validation error)

The draft is created on open and discarded on close. Validation is the
server's job; the only client-side rule is the input widget's max length.
A request still running when the dialog closes completes anyway: a late
create is inserted into the tree, a late validation error is dropped.
"""

from __future__ import annotations

import dataclasses
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from scriptregistry.config import Settings, get_settings
from scriptregistry.coordinator import RegistryCoordinator
from scriptregistry.errors import DialogStateError, ValidationRejected
from scriptregistry.models import Directory, Script

logger = logging.getLogger(__name__)


class DialogState(str, Enum):
    """Dialog lifecycle state."""

    CLOSED = "closed"
    OPENING_FOR_CREATE = "opening_for_create"
    OPENING_FOR_EDIT = "opening_for_edit"
    EDITING = "editing"
    SUBMITTING = "submitting"


@dataclass
class DialogDraft:
    """Transient form state of an open dialog.

    Attributes:
        values: Current form values by field name
        entity_id: Entity being edited, None when creating
        parent_id: Container for a new entity
        entity: Record loaded for editing
        error_field: Field the server rejected, if any
        error_message: Message for ``error_field``, or a general message
            when ``error_field`` is None
    """

    values: dict[str, str] = field(default_factory=dict)
    entity_id: int | None = None
    parent_id: int | None = None
    entity: Directory | Script | None = None
    error_field: str | None = None
    error_message: str | None = None

    @property
    def is_new(self) -> bool:
        return self.entity_id is None

    def field_error(self, name: str) -> str | None:
        """Inline message for ``name``, if the server rejected it."""
        if self.error_field == name:
            return self.error_message
        return None

    @property
    def general_error(self) -> str | None:
        if self.error_field is None:
            return self.error_message
        return None

    def clear_error(self) -> None:
        self.error_field = None
        self.error_message = None


class EntityDialog(ABC):
    """Shared state machine; subclasses supply the entity-specific calls."""

    entity_label = "entity"
    fields: tuple[str, ...] = ("name",)

    def __init__(self, coordinator: RegistryCoordinator, settings: Settings | None = None):
        self._coordinator = coordinator
        self._settings = settings or get_settings()
        self._state = DialogState.CLOSED
        self._draft: DialogDraft | None = None

    @property
    def state(self) -> DialogState:
        return self._state

    @property
    def draft(self) -> DialogDraft | None:
        return self._draft

    @property
    def is_open(self) -> bool:
        return self._state != DialogState.CLOSED

    @property
    def heading(self) -> str:
        draft = self._draft
        if draft is None or draft.is_new:
            return f"Add {self.entity_label}"
        name = draft.entity.name if draft.entity is not None else ""
        return f"Edit {self.entity_label}: {name}"

    def max_length(self, name: str) -> int | None:
        return None

    # -- transitions --

    def open_for_create(self, parent_id: int | None = None) -> DialogDraft:
        self._state = DialogState.OPENING_FOR_CREATE
        self._draft = DialogDraft(values=self._empty_values(), parent_id=parent_id)
        self._state = DialogState.EDITING
        return self._draft

    async def open_for_edit(self, entity_id: int) -> DialogDraft:
        """Open for editing and load the entity.

        Until the load finishes the draft holds empty values. If the dialog
        is closed or reopened meanwhile, the loaded entity is discarded.
        """
        draft = DialogDraft(values=self._empty_values(), entity_id=entity_id)
        self._draft = draft
        self._state = DialogState.OPENING_FOR_EDIT

        try:
            entity = await self._fetch(entity_id)
        except Exception:
            if self._draft is draft:
                self.close()
            raise

        if self._draft is not draft:
            logger.debug(f"Dropping loaded {self.entity_label} {entity_id}, dialog moved on")
            return draft

        draft.entity = entity
        draft.values.update(self._seed(entity))
        draft.clear_error()
        self._state = DialogState.EDITING
        return draft

    def set_field(self, name: str, value: str) -> None:
        if name not in self.fields:
            raise ValueError(f"Unknown {self.entity_label} field: {name}")
        if self._state not in (DialogState.OPENING_FOR_EDIT, DialogState.EDITING):
            raise DialogStateError(f"Cannot edit {self.entity_label} dialog while {self._state.value}")
        limit = self.max_length(name)
        if limit is not None:
            value = value[:limit]
        self._draft.values[name] = value

    async def submit(self) -> bool:
        """Send the draft to the server.

        Returns True when the entity was saved and the dialog closed,
        False when the server rejected a field (dialog stays open).
        Other failures put the dialog back into EDITING and propagate.
        """
        if self._state != DialogState.EDITING:
            raise DialogStateError(f"Cannot submit {self.entity_label} dialog while {self._state.value}")

        draft = self._draft
        draft.clear_error()
        self._state = DialogState.SUBMITTING

        try:
            if draft.is_new:
                entity = await self._create(draft)
                self._apply_created(entity)
            else:
                entity = await self._update(draft)
                self._apply_updated(entity)
        except ValidationRejected as e:
            if self._draft is not draft:
                logger.warning(f"Dropping validation error for closed {self.entity_label} dialog: {e}")
                return False
            if e.field in self.fields:
                draft.error_field = e.field
            draft.error_message = e.message
            self._state = DialogState.EDITING
            return False
        except Exception:
            if self._draft is draft:
                self._state = DialogState.EDITING
            raise

        if self._draft is draft:
            self.close()
        return True

    def close(self) -> None:
        self._draft = None
        self._state = DialogState.CLOSED

    cancel = close

    # -- entity hooks --

    def _empty_values(self) -> dict[str, str]:
        return {name: "" for name in self.fields}

    def _seed(self, entity: Any) -> dict[str, str]:
        return {name: getattr(entity, name, "") or "" for name in self.fields}

    @abstractmethod
    async def _fetch(self, entity_id: int) -> Any:
        """Load the entity being edited."""
        ...

    @abstractmethod
    async def _create(self, draft: DialogDraft) -> Any:
        """Create the entity on the server, returning the canonical record."""
        ...

    @abstractmethod
    async def _update(self, draft: DialogDraft) -> Any:
        """Update the entity on the server, returning the canonical record."""
        ...

    @abstractmethod
    def _apply_created(self, entity: Any) -> None:
        """Insert a server-confirmed entity into the tree."""
        ...

    @abstractmethod
    def _apply_updated(self, entity: Any) -> None:
        """Apply a server-confirmed update to the tree."""
        ...


class DirectoryDialog(EntityDialog):
    """Create or rename a directory."""

    entity_label = "directory"

    def max_length(self, name: str) -> int | None:
        if name == "name":
            return self._settings.directory_name_max_length
        return None

    async def _fetch(self, entity_id: int) -> Directory:
        return await self._coordinator.service.get_directory(entity_id)

    async def _create(self, draft: DialogDraft) -> Directory:
        return await self._coordinator.service.create_directory(
            draft.values["name"], draft.parent_id
        )

    async def _update(self, draft: DialogDraft) -> Directory:
        return await self._coordinator.service.update_directory(
            draft.entity_id, draft.values["name"]
        )

    def _apply_created(self, entity: Directory) -> None:
        self._coordinator.apply_directory_created(entity)

    def _apply_updated(self, entity: Directory) -> None:
        self._coordinator.apply_directory_updated(entity)


class ScriptDialog(EntityDialog):
    """Create or rename a script. Script bodies are not handled here."""

    entity_label = "script"

    def max_length(self, name: str) -> int | None:
        if name == "name":
            return self._settings.script_name_max_length
        return None

    def open_for_create(self, parent_id: int | None = None) -> DialogDraft:
        if parent_id is None:
            raise ValueError("A script must be created inside a directory")
        return super().open_for_create(parent_id)

    async def _fetch(self, entity_id: int) -> Script:
        return await self._coordinator.service.get_script(entity_id)

    async def _create(self, draft: DialogDraft) -> Script:
        script = await self._coordinator.service.create_script(draft.parent_id, dict(draft.values))
        if script.directory_id is None:
            script = dataclasses.replace(script, directory_id=draft.parent_id)
        return script

    async def _update(self, draft: DialogDraft) -> Script:
        return await self._coordinator.service.update_script(draft.entity_id, dict(draft.values))

    def _apply_created(self, entity: Script) -> None:
        self._coordinator.apply_script_created(entity)

    def _apply_updated(self, entity: Script) -> None:
        self._coordinator.apply_script_updated(entity)
