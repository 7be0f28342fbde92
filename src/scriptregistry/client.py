# Registry Client - HTTP client for the script registry REST API.
# Created: 2026-10-12
#
# Implements RegistryServiceProtocol. Error mapping:
#   400 with {"field", "message"}  -> ValidationRejected
#   any other error status         -> OperationFailed(status_code=...)
#   transport errors               -> OperationFailed
#   malformed success bodies       -> OperationFailed

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from scriptregistry.config import Settings, get_settings
from scriptregistry.errors import OperationFailed, ValidationRejected
from scriptregistry.models import Directory, Script
from scriptregistry.schemas import (
    DirectoryForm,
    DirectoryPayload,
    FieldErrorPayload,
    MoveForm,
    ScriptPayload,
)

logger = logging.getLogger(__name__)

PayloadT = TypeVar("PayloadT", bound=BaseModel)

# Status code signalling a structured {field, message} body
_VALIDATION_STATUS = 400


class RegistryClient:
    """HTTP client for the script registry.

    A fresh ``httpx.AsyncClient`` is opened per request; ``transport`` lets
    tests plug in ``httpx.MockTransport``.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings or get_settings()
        self._transport = transport

    async def _request(
        self, method: str, path: str, json: dict[str, Any] | None = None
    ) -> Any:
        logger.debug(f"{method} {path}")
        try:
            async with httpx.AsyncClient(
                base_url=self.settings.api_base_url,
                timeout=self.settings.request_timeout,
                transport=self._transport,
            ) as client:
                resp = await client.request(method, path, json=json)
        except httpx.HTTPError as e:
            raise OperationFailed(f"{method} {path} failed: {e}") from e

        if resp.status_code == _VALIDATION_STATUS:
            raise self._validation_error(method, path, resp)
        if resp.is_error:
            raise OperationFailed(
                f"{method} {path} returned {resp.status_code}",
                status_code=resp.status_code,
            )
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            raise OperationFailed(
                f"{method} {path} returned a non-JSON body", status_code=resp.status_code
            ) from e

    @staticmethod
    def _parse(model: type[PayloadT], data: Any) -> PayloadT:
        """Validate a success body, treating a malformed one as a failed call."""
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise OperationFailed(f"Unexpected {model.__name__} response: {e}") from e

    @staticmethod
    def _validation_error(method: str, path: str, resp: httpx.Response) -> Exception:
        """Turn a 400 response into the matching registry error."""
        try:
            payload = FieldErrorPayload.model_validate(resp.json())
        except (ValueError, ValidationError):
            logger.warning(f"{method} {path}: 400 without a field error body")
            return OperationFailed(
                f"{method} {path} returned {resp.status_code}",
                status_code=resp.status_code,
            )
        return ValidationRejected(payload.field, payload.message)

    # =========================================================================
    # Directory Operations
    # =========================================================================

    async def list_directories(self) -> list[Directory]:
        data = await self._request("GET", "/registry/directory/all")
        if data is None:
            return []
        if not isinstance(data, list):
            raise OperationFailed(f"Expected a directory list, got {type(data).__name__}")
        return [self._parse(DirectoryPayload, d).to_model() for d in data]

    async def get_directory(self, directory_id: int) -> Directory:
        data = await self._request("GET", f"/registry/directory/{directory_id}")
        return self._parse(DirectoryPayload, data).to_model()

    async def create_directory(self, name: str, parent_id: int | None = None) -> Directory:
        form = DirectoryForm(name=name, parent_id=parent_id)
        data = await self._request("POST", "/registry/directory", json=form.to_json())
        directory = self._parse(DirectoryPayload, data).to_model()
        logger.info(f"Created directory {directory.id}: {directory.name}")
        return directory

    async def update_directory(self, directory_id: int, name: str) -> Directory:
        form = DirectoryForm(name=name)
        data = await self._request(
            "PUT", f"/registry/directory/{directory_id}", json=form.to_json()
        )
        return self._parse(DirectoryPayload, data).to_model()

    async def delete_directory(self, directory_id: int) -> None:
        await self._request("DELETE", f"/registry/directory/{directory_id}")
        logger.info(f"Deleted directory {directory_id}")

    # =========================================================================
    # Script Operations
    # =========================================================================

    async def get_script(self, script_id: int) -> Script:
        data = await self._request("GET", f"/registry/script/{script_id}")
        return self._parse(ScriptPayload, data).to_model()

    async def create_script(self, directory_id: int, fields: Mapping[str, Any]) -> Script:
        body = {**fields, "directoryId": directory_id}
        data = await self._request("POST", "/registry/script", json=body)
        script = self._parse(ScriptPayload, data).to_model()
        logger.info(f"Created script {script.id}: {script.name}")
        return script

    async def update_script(self, script_id: int, fields: Mapping[str, Any]) -> Script:
        data = await self._request("PUT", f"/registry/script/{script_id}", json=dict(fields))
        return self._parse(ScriptPayload, data).to_model()

    async def delete_script(self, script_id: int) -> None:
        await self._request("DELETE", f"/registry/script/{script_id}")
        logger.info(f"Deleted script {script_id}")

    async def move_script(self, script_id: int, directory_id: int) -> None:
        form = MoveForm(parent_id=directory_id)
        await self._request(
            "PUT",
            f"/registry/script/{script_id}/parent",
            json=form.model_dump(by_alias=True),
        )
