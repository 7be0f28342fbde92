# Registry view model - what a UI shell binds to.
# Created: 2026-10-12
#
# Holds the presentation-only state (filter text, drag in progress), owns the
# two dialogs and routes create/edit/delete intents and drag results to the
# coordinator. Rendering itself stays outside this package.

from __future__ import annotations

import logging
from typing import Any

from scriptregistry.config import Settings, get_settings
from scriptregistry.coordinator import RegistryCoordinator
from scriptregistry.dialogs import DirectoryDialog, EntityDialog, ScriptDialog
from scriptregistry.events import EntityIntent, EntityType, IntentAction, MoveEvent
from scriptregistry.filtering import TreeFilter
from scriptregistry.models import Tree

logger = logging.getLogger(__name__)

EMPTY_REGISTRY_MESSAGE = "No scripts"


class RegistryView:
    """Presentation model for the script registry page."""

    def __init__(self, coordinator: RegistryCoordinator, settings: Settings | None = None):
        settings = settings or get_settings()
        self.coordinator = coordinator
        self.filter_text = ""
        self.is_dragging = False
        self._filter = TreeFilter(min_length=settings.filter_min_length)
        self.dialogs: dict[EntityType, EntityDialog] = {
            EntityType.DIRECTORY: DirectoryDialog(coordinator, settings),
            EntityType.SCRIPT: ScriptDialog(coordinator, settings),
        }

    @property
    def directory_dialog(self) -> DirectoryDialog:
        return self.dialogs[EntityType.DIRECTORY]

    @property
    def script_dialog(self) -> ScriptDialog:
        return self.dialogs[EntityType.SCRIPT]

    # -- rendering inputs --

    def set_filter(self, text: str) -> None:
        self.filter_text = text

    @property
    def visible_tree(self) -> Tree:
        """Current tree with the filter applied (memoized)."""
        return self._filter(self.coordinator.tree, self.filter_text)

    @property
    def show_spinner(self) -> bool:
        return not self.coordinator.ready

    @property
    def show_blanket(self) -> bool:
        """Block interaction while a move awaits confirmation."""
        return self.coordinator.waiting

    @property
    def empty_message(self) -> str | None:
        if self.coordinator.ready and self.visible_tree.is_empty:
            return EMPTY_REGISTRY_MESSAGE
        return None

    # -- drag and drop --

    def on_drag_start(self) -> None:
        self.is_dragging = True

    async def on_drag_end(self, result: dict[str, Any]) -> bool:
        """Handle a finished drag. Returns True if a move was confirmed."""
        self.is_dragging = False
        event = MoveEvent.from_drag_result(result)
        if event is None:
            return False
        return await self.coordinator.move_script(event)

    # -- intents --

    async def handle_intent(self, intent: EntityIntent) -> Any:
        dialog = self.dialogs[intent.entity_type]
        if intent.action == IntentAction.CREATE:
            return dialog.open_for_create(intent.parent_id)
        if intent.action == IntentAction.EDIT:
            return await dialog.open_for_edit(intent.id)
        if intent.entity_type == EntityType.DIRECTORY:
            return await self.coordinator.delete_directory(intent.id, intent.name)
        return await self.coordinator.delete_script(intent.id, intent.name)

    def create_directory(self) -> None:
        """Open the dialog for a new root directory."""
        self.directory_dialog.open_for_create(None)
