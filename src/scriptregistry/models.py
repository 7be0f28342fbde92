"""Script Registry data models.

Created: 2026-10-12

These models define the directory/script hierarchy:
- Script (named leaf, owned by exactly one directory)
- Directory (named container with child directories and scripts)
- Tree (ordered root directories)

Design notes:
- Frozen dataclasses, children and scripts held in tuples
- A change always produces a new Tree, so consumers can compare by identity
- Script ids are unique across the whole tree, not only within a directory
- A Directory rewrites its children's parent_id and its scripts' directory_id
  to its own id, so owner references cannot drift from the nesting
- Structural derivations live in tree.py and are exposed as Tree methods
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

# ============================================================================
# Data Models
# ============================================================================


@dataclass(frozen=True)
class Script:
    """A named executable script.

    Attributes:
        id: Server-assigned identifier, unique across the tree
        name: Display name
        directory_id: Owning directory
    """

    id: int
    name: str
    directory_id: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "directoryId": self.directory_id,
        }


@dataclass(frozen=True, eq=False)
class Directory:
    """A named container of child directories and scripts.

    Child order is significant; the script collection is not, so equality
    ignores the order of ``scripts``.

    Attributes:
        id: Server-assigned identifier
        name: Display name (1-32 chars, checked by the server)
        parent_id: Parent directory, None for a root
        children: Child directories in display order
        scripts: Scripts owned by this directory
    """

    id: int
    name: str
    parent_id: int | None = None
    children: tuple[Directory, ...] = ()
    scripts: tuple[Script, ...] = ()

    def __post_init__(self):
        # Owner references always follow the nesting
        children = tuple(
            c if c.parent_id == self.id else dataclasses.replace(c, parent_id=self.id)
            for c in self.children
        )
        scripts = tuple(
            s if s.directory_id == self.id else dataclasses.replace(s, directory_id=self.id)
            for s in self.scripts
        )
        object.__setattr__(self, "children", children)
        object.__setattr__(self, "scripts", scripts)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Directory):
            return NotImplemented
        return (
            self.id == other.id
            and self.name == other.name
            and self.parent_id == other.parent_id
            and self.children == other.children
            and _sorted_scripts(self.scripts) == _sorted_scripts(other.scripts)
        )

    __hash__ = None  # type: ignore[assignment]

    @property
    def is_empty(self) -> bool:
        return not self.children and not self.scripts

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "parentId": self.parent_id,
            "children": [child.to_dict() for child in self.children],
            "scripts": [script.to_dict() for script in self.scripts],
        }


def _sorted_scripts(scripts: tuple[Script, ...]) -> list[Script]:
    return sorted(scripts, key=lambda s: s.id)


@dataclass(frozen=True)
class Tree:
    """Immutable snapshot of the whole registry.

    Every ``with_*`` method returns a new Tree and leaves this one untouched.
    """

    directories: tuple[Directory, ...] = field(default_factory=tuple)

    # -- queries --

    @property
    def is_empty(self) -> bool:
        return not self.directories

    @property
    def script_count(self) -> int:
        return sum(1 for _ in self.iter_scripts())

    def iter_directories(self) -> Iterator[Directory]:
        return _ops.iter_directories(self.directories)

    def iter_scripts(self) -> Iterator[Script]:
        for directory in self.iter_directories():
            yield from directory.scripts

    def find_directory(self, directory_id: int) -> Directory | None:
        return _ops.find_directory(self.directories, directory_id)

    def find_script(self, script_id: int) -> Script | None:
        return _ops.find_script(self.directories, script_id)

    # -- derivations --

    def with_directory_added(self, parent_id: int | None, directory: Directory) -> Tree:
        return _ops.with_directory_added(self, parent_id, directory)

    def with_directory_updated(self, directory_id: int, patch: Mapping[str, Any]) -> Tree:
        return _ops.with_directory_updated(self, directory_id, patch)

    def with_directory_removed(self, directory_id: int) -> Tree:
        return _ops.with_directory_removed(self, directory_id)

    def with_script_added(self, directory_id: int, script: Script) -> Tree:
        return _ops.with_script_added(self, directory_id, script)

    def with_script_updated(self, script_id: int, patch: Mapping[str, Any]) -> Tree:
        return _ops.with_script_updated(self, script_id, patch)

    def with_script_removed(self, script_id: int) -> Tree:
        return _ops.with_script_removed(self, script_id)

    def with_script_moved(self, script_id: int, from_directory_id: int, to_directory_id: int) -> Tree:
        return _ops.with_script_moved(self, script_id, from_directory_id, to_directory_id)

    def to_list(self) -> list[dict[str, Any]]:
        """Convert to a list of directory dicts for JSON serialization."""
        return [directory.to_dict() for directory in self.directories]


# tree.py builds on the classes above, so it is bound after they exist
from scriptregistry import tree as _ops  # noqa: E402
