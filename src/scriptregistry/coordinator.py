"""Script Registry coordinator.

Created: 2026-10-12

Owns the current Tree snapshot and sequences local changes with the
remote service:

- Moves are optimistic: the tree changes immediately, the request runs,
  and a failed request is compensated by the inverse move applied to the
  tree current at that moment
- Creates and updates are applied only once the server returns the
  canonical entity (the client cannot assign ids)
- Deletes go through a confirmation gate and are applied after the server
  confirms

Every change replaces the snapshot in one assignment and notifies the
subscribers, so readers always see a fully formed tree.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from scriptregistry.errors import NotFoundInTree, OperationFailed, RegistryError
from scriptregistry.events import MoveEvent
from scriptregistry.models import Directory, Script, Tree
from scriptregistry.protocol import RegistryServiceProtocol

logger = logging.getLogger(__name__)

ConfirmCallback = Callable[[str], bool | Awaitable[bool]]
Listener = Callable[["RegistrySnapshot"], None]


def delete_prompt(name: str) -> str:
    return f'Are you sure you want to delete "{name}"?'


def _decline(prompt: str) -> bool:
    logger.info(f"No confirmation handler, declining: {prompt}")
    return False


@dataclass(frozen=True)
class RegistrySnapshot:
    """What subscribers see after each change."""

    tree: Tree
    ready: bool
    waiting: bool


class RegistryCoordinator:
    """Applies registry mutations locally and reconciles them with the server.

    Args:
        service: Remote registry implementation
        tree: Initial tree, empty until ``load()`` runs
        confirm: Yes/no gate for deletes, sync or async. Declines by default.
    """

    def __init__(
        self,
        service: RegistryServiceProtocol,
        tree: Tree | None = None,
        confirm: ConfirmCallback | None = None,
    ):
        self._service = service
        self._tree = tree if tree is not None else Tree()
        self._confirm = confirm or _decline
        self._ready = tree is not None
        self._moves_in_flight = 0
        self._listeners: list[Listener] = []

    # =========================================================================
    # State
    # =========================================================================

    @property
    def service(self) -> RegistryServiceProtocol:
        return self._service

    @property
    def tree(self) -> Tree:
        return self._tree

    @property
    def ready(self) -> bool:
        return self._ready

    @property
    def waiting(self) -> bool:
        """True while at least one move awaits server confirmation."""
        return self._moves_in_flight > 0

    def snapshot(self) -> RegistrySnapshot:
        return RegistrySnapshot(tree=self._tree, ready=self._ready, waiting=self.waiting)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self, tree: Tree | None = None) -> None:
        if tree is not None:
            self._tree = tree
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)

    def _derive(self, description: str, derive: Callable[[Tree], Tree]) -> bool:
        """Replace the tree with ``derive(tree)``; NotFound aborts as a no-op."""
        try:
            tree = derive(self._tree)
        except NotFoundInTree as e:
            logger.error(f"Cannot {description}: {e}")
            return False
        self._publish(tree)
        return True

    # =========================================================================
    # Initial Load
    # =========================================================================

    async def load(self) -> Tree:
        """Fetch the whole registry and replace the tree wholesale."""
        directories = await self._service.list_directories()
        self._ready = True
        self._publish(Tree(directories=tuple(directories)))
        logger.info(
            f"Registry loaded: {len(directories)} root directories, "
            f"{self._tree.script_count} scripts"
        )
        return self._tree

    # =========================================================================
    # Move (optimistic)
    # =========================================================================

    async def move_script(self, event: MoveEvent) -> bool:
        """Move a script, applying the change before the server confirms it.

        Returns True when the server accepted the move, False when the event
        was ignored. A rejected move is rolled back and raised as
        OperationFailed.
        """
        if event.is_noop:
            return False

        script_id = event.script_id
        source_id = event.source_container_id
        destination_id = event.destination_container_id

        if self._tree.find_script(script_id) is None:
            logger.error(f"Unable to find script {script_id} for move {event}")
            return False

        try:
            moved = self._tree.with_script_moved(script_id, source_id, destination_id)
        except NotFoundInTree as e:
            logger.error(f"Cannot move script {script_id}: {e}")
            return False

        self._moves_in_flight += 1
        self._publish(moved)

        error: Exception | None = None
        try:
            await self._service.move_script(script_id, destination_id)
        except Exception as e:
            error = e
        finally:
            self._moves_in_flight -= 1
            # A cancelled move keeps the optimistic tree, only waiting changes
            if error is None:
                self._publish()

        if error is not None:
            logger.warning(
                f"Move of script {script_id} to directory {destination_id} failed, "
                f"restoring it to directory {source_id}: {error}"
            )
            if not self._derive(
                f"restore script {script_id}",
                lambda t: t.with_script_moved(script_id, destination_id, source_id),
            ):
                self._publish()
            if isinstance(error, OperationFailed):
                raise error
            raise OperationFailed(f"Move of script {script_id} failed: {error}") from error

        logger.info(f"Moved script {script_id} to directory {destination_id}")
        return True

    # =========================================================================
    # Create / Update (applied after server confirmation)
    # =========================================================================

    def apply_directory_created(self, directory: Directory) -> bool:
        """Insert a directory the server just created, with empty contents."""
        directory = Directory(id=directory.id, name=directory.name, parent_id=directory.parent_id)
        return self._derive(
            f"add directory {directory.id}",
            lambda t: t.with_directory_added(directory.parent_id, directory),
        )

    def apply_directory_updated(self, directory: Directory) -> bool:
        return self._derive(
            f"update directory {directory.id}",
            lambda t: t.with_directory_updated(directory.id, {"name": directory.name}),
        )

    def apply_script_created(self, script: Script) -> bool:
        if script.directory_id is None:
            logger.error(f"Created script {script.id} has no directory")
            return False
        return self._derive(
            f"add script {script.id}",
            lambda t: t.with_script_added(script.directory_id, script),
        )

    def apply_script_updated(self, script: Script) -> bool:
        return self._derive(
            f"update script {script.id}",
            lambda t: t.with_script_updated(script.id, {"name": script.name}),
        )

    # =========================================================================
    # Delete (confirmed, then applied after server confirmation)
    # =========================================================================

    async def _confirmed(self, name: str) -> bool:
        answer = self._confirm(delete_prompt(name))
        if inspect.isawaitable(answer):
            answer = await answer
        return bool(answer)

    async def delete_directory(self, directory_id: int, name: str) -> bool:
        """Delete a directory after user confirmation.

        Returns False if the user declined. Server failures propagate and
        leave the tree untouched.
        """
        if not await self._confirmed(name):
            return False
        try:
            await self._service.delete_directory(directory_id)
        except RegistryError as e:
            logger.error(f"Failed to delete directory {directory_id}: {e}")
            raise
        self._derive(
            f"remove directory {directory_id}",
            lambda t: t.with_directory_removed(directory_id),
        )
        return True

    async def delete_script(self, script_id: int, name: str) -> bool:
        """Delete a script after user confirmation. See delete_directory."""
        if not await self._confirmed(name):
            return False
        try:
            await self._service.delete_script(script_id)
        except RegistryError as e:
            logger.error(f"Failed to delete script {script_id}: {e}")
            raise
        self._derive(
            f"remove script {script_id}",
            lambda t: t.with_script_removed(script_id),
        )
        return True


# =========================================================================
# Factory Function
# =========================================================================

_coordinator_instance: RegistryCoordinator | None = None


def get_registry_coordinator(
    service: RegistryServiceProtocol | None = None,
) -> RegistryCoordinator:
    """Get or create the coordinator singleton.

    Args:
        service: Optional service. Only used on first call; defaults to
            a RegistryClient built from the current settings.
    """
    global _coordinator_instance
    if _coordinator_instance is None:
        if service is None:
            from scriptregistry.client import RegistryClient

            service = RegistryClient()
        _coordinator_instance = RegistryCoordinator(service)
    return _coordinator_instance


def reset_registry_coordinator() -> None:
    """Reset the coordinator singleton (for testing)."""
    global _coordinator_instance
    _coordinator_instance = None
