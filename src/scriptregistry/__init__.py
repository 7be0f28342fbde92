"""Script Registry - client-side state for a server-backed script hierarchy.

Created: 2026-10-12

Organizes executable scripts into nested directories. The server is the
system of record; this package keeps the local tree, filters it, and
reconciles local changes with the server:

- Immutable tree snapshots with pure derivations (models, tree)
- Recursive name filter with memoization (filtering)
- Optimistic moves with rollback, confirm-then-apply create/update/delete
  (coordinator)
- Create/edit dialog state machines (dialogs)
- REST client for the registry API (client)

Usage:
    from scriptregistry import RegistryClient, RegistryCoordinator, MoveEvent

    coordinator = RegistryCoordinator(RegistryClient())
    await coordinator.load()

    # Drag script 10 from directory 1 onto directory 2
    await coordinator.move_script(MoveEvent(10, 1, 2))
"""

# Client
from scriptregistry.client import RegistryClient

# Coordinator
from scriptregistry.coordinator import (
    RegistryCoordinator,
    RegistrySnapshot,
    get_registry_coordinator,
    reset_registry_coordinator,
)

# Dialogs
from scriptregistry.dialogs import (
    DialogDraft,
    DialogState,
    DirectoryDialog,
    ScriptDialog,
)

# Errors
from scriptregistry.errors import (
    DialogStateError,
    NotFoundInTree,
    OperationFailed,
    RegistryError,
    ValidationRejected,
)

# Events
from scriptregistry.events import EntityIntent, EntityType, IntentAction, MoveEvent

# Filtering
from scriptregistry.filtering import TreeFilter, filter_tree

# Models
from scriptregistry.models import Directory, Script, Tree
from scriptregistry.protocol import RegistryServiceProtocol
from scriptregistry.view import RegistryView

__all__ = [
    # Models
    "Directory",
    "Script",
    "Tree",
    # Filtering
    "TreeFilter",
    "filter_tree",
    # Coordinator
    "RegistryCoordinator",
    "RegistrySnapshot",
    "get_registry_coordinator",
    "reset_registry_coordinator",
    # Dialogs
    "DialogDraft",
    "DialogState",
    "DirectoryDialog",
    "ScriptDialog",
    # Service
    "RegistryServiceProtocol",
    "RegistryClient",
    # Events
    "EntityIntent",
    "EntityType",
    "IntentAction",
    "MoveEvent",
    # View
    "RegistryView",
    # Errors
    "RegistryError",
    "NotFoundInTree",
    "ValidationRejected",
    "OperationFailed",
    "DialogStateError",
]
