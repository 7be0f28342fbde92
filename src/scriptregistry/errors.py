# Script Registry errors.
# Created: 2026-10-12
#
# NotFoundInTree   - id missing from the local tree (logged, never shown)
# ValidationRejected - server refused a create/update for a specific field
# OperationFailed  - network/server failure, the action did not happen

from __future__ import annotations


class RegistryError(Exception):
    """Base class for all script registry errors."""


class NotFoundInTree(RegistryError):
    """A directory or script id does not resolve in the current tree."""

    def __init__(self, kind: str, entity_id: int | None):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} {entity_id} not found in tree")


class ValidationRejected(RegistryError):
    """Structured validation failure reported by the server."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class OperationFailed(RegistryError):
    """Unstructured failure: transport error or unexpected server response."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DialogStateError(RegistryError):
    """Dialog operation invoked in a state that does not allow it."""
