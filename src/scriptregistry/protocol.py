"""Script Registry service protocol.

Created: 2026-10-12
Defines the interface of the remote registry service.

The server is the system of record; implementations perform the network
calls. RegistryClient (client.py) talks to the REST API, tests substitute
an AsyncMock.

Every mutating call may raise:
- ValidationRejected: the server refused the request for a named field
- OperationFailed: anything else (transport error, unexpected response)
"""

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from scriptregistry.models import Directory, Script


@runtime_checkable
class RegistryServiceProtocol(Protocol):
    """Protocol for the remote script registry."""

    # =========================================================================
    # Directory Operations
    # =========================================================================

    async def list_directories(self) -> list[Directory]:
        """Fetch the whole registry tree (root directories)."""
        ...

    async def get_directory(self, directory_id: int) -> Directory:
        """Fetch one directory. Children and scripts may be left empty."""
        ...

    async def create_directory(self, name: str, parent_id: int | None = None) -> Directory:
        """Create a directory. The server assigns the id."""
        ...

    async def update_directory(self, directory_id: int, name: str) -> Directory:
        """Rename a directory, returning the canonical record."""
        ...

    async def delete_directory(self, directory_id: int) -> None:
        """Delete a directory and everything below it."""
        ...

    # =========================================================================
    # Script Operations
    # =========================================================================

    async def get_script(self, script_id: int) -> Script:
        """Fetch one script."""
        ...

    async def create_script(self, directory_id: int, fields: Mapping[str, Any]) -> Script:
        """Create a script in a directory. ``fields`` are passed through."""
        ...

    async def update_script(self, script_id: int, fields: Mapping[str, Any]) -> Script:
        """Update a script, returning the canonical record."""
        ...

    async def delete_script(self, script_id: int) -> None:
        """Delete a script."""
        ...

    async def move_script(self, script_id: int, directory_id: int) -> None:
        """Reparent a script under ``directory_id``."""
        ...
