# Presentation boundary events for the script registry.
# Created: 2026-10-12
#
# The UI layer turns gestures into these value objects and hands them to the
# coordinator or the view model. Drag libraries report container ids as
# strings, MoveEvent.from_drag_result converts them.

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class EntityType(str, Enum):
    """Kinds of registry entities a dialog or intent can target."""

    DIRECTORY = "directory"
    SCRIPT = "script"


class IntentAction(str, Enum):
    CREATE = "create"
    EDIT = "edit"
    DELETE = "delete"


@dataclass(frozen=True)
class MoveEvent:
    """A script was dropped from one directory onto another.

    ``destination_container_id`` is None when the drop landed outside
    any directory.
    """

    script_id: int
    source_container_id: int
    destination_container_id: int | None

    @property
    def is_noop(self) -> bool:
        return (
            self.destination_container_id is None
            or self.source_container_id == self.destination_container_id
        )

    @classmethod
    def from_drag_result(cls, result: dict[str, Any]) -> MoveEvent | None:
        """Build an event from a drag-and-drop result dict.

        Expects ``{"draggableId": "10", "source": {"droppableId": "1"},
        "destination": {"droppableId": "2"}}``. Returns None when the drag
        has no source.
        """
        source = result.get("source")
        if not source:
            return None
        destination = result.get("destination")
        return cls(
            script_id=int(result["draggableId"]),
            source_container_id=int(source["droppableId"]),
            destination_container_id=(
                int(destination["droppableId"]) if destination else None
            ),
        )


@dataclass(frozen=True)
class EntityIntent:
    """A create/edit/delete request coming from the presentation shell."""

    action: IntentAction
    entity_type: EntityType
    id: int | None = None
    parent_id: int | None = None
    name: str = ""
