# Wire schemas for the registry REST API.
# Created: 2026-10-12
#
# The server speaks camelCase JSON; these pydantic models validate responses
# and build request bodies, then hand frozen dataclass records to the core.

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from scriptregistry.models import Directory, Script


class WireModel(BaseModel):
    """Base for registry payloads."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ScriptPayload(WireModel):
    id: int
    name: str
    directory_id: int | None = Field(default=None, alias="directoryId")

    def to_model(self) -> Script:
        return Script(id=self.id, name=self.name, directory_id=self.directory_id)


class DirectoryPayload(WireModel):
    id: int
    name: str
    parent_id: int | None = Field(default=None, alias="parentId")
    children: list[DirectoryPayload] = Field(default_factory=list)
    scripts: list[ScriptPayload] = Field(default_factory=list)

    def to_model(self) -> Directory:
        return Directory(
            id=self.id,
            name=self.name,
            parent_id=self.parent_id,
            children=tuple(child.to_model() for child in self.children),
            scripts=tuple(script.to_model() for script in self.scripts),
        )


class FieldErrorPayload(WireModel):
    """Structured validation failure body (HTTP 400)."""

    field: str = Field(..., min_length=1)
    message: str


class DirectoryForm(WireModel):
    """Request body for creating or renaming a directory."""

    name: str
    parent_id: int | None = Field(default=None, alias="parentId")

    def to_json(self) -> dict:
        # A root directory is sent without parentId
        return self.model_dump(by_alias=True, exclude_none=True)


class MoveForm(WireModel):
    parent_id: int = Field(..., alias="parentId")


DirectoryPayload.model_rebuild()
