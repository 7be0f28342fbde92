"""Tree derivations for the script registry.

Created: 2026-10-12

Pure functions over the frozen models. None of them mutate their input;
each returns a new Tree (or the same Tree when nothing changes).
Lookups are depth-first pre-order: a directory's children are searched
before its own scripts, root directories in display order.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any

from scriptregistry.errors import NotFoundInTree
from scriptregistry.models import Directory, Script, Tree

DIRECTORY_MUTABLE_FIELDS = frozenset({"name"})
SCRIPT_MUTABLE_FIELDS = frozenset({"name"})

DirectoryMapper = Callable[[Directory], Directory | None]


# =========================================================================
# Lookups
# =========================================================================


def iter_directories(directories: Iterable[Directory]) -> Iterator[Directory]:
    """Yield every directory, parents before their children."""
    for directory in directories:
        yield directory
        yield from iter_directories(directory.children)


def find_directory(directories: Iterable[Directory], directory_id: int) -> Directory | None:
    for directory in iter_directories(directories):
        if directory.id == directory_id:
            return directory
    return None


def find_script(directories: Iterable[Directory], script_id: int) -> Script | None:
    """Locate a script anywhere below ``directories``, or None."""
    for directory in directories:
        found = _find_script_in_directory(directory, script_id)
        if found is not None:
            return found
    return None


def _find_script_in_directory(directory: Directory, script_id: int) -> Script | None:
    for child in directory.children:
        found = _find_script_in_directory(child, script_id)
        if found is not None:
            return found
    for script in directory.scripts:
        if script.id == script_id:
            return script
    return None


def find_script_directory(directories: Iterable[Directory], script_id: int) -> Directory | None:
    """Return the directory whose script collection holds ``script_id``."""
    for directory in iter_directories(directories):
        if any(script.id == script_id for script in directory.scripts):
            return directory
    return None


# =========================================================================
# Structural helpers
# =========================================================================


def _map_directory(
    directories: tuple[Directory, ...], directory_id: int, mapper: DirectoryMapper
) -> tuple[tuple[Directory, ...], bool]:
    """Rebuild ``directories`` with ``mapper`` applied to one directory.

    A mapper returning None removes the directory (and its subtree).
    Only the path from the root to the target is copied; untouched
    siblings are shared with the input.
    """
    result: list[Directory] = []
    found = False
    for directory in directories:
        if found:
            result.append(directory)
        elif directory.id == directory_id:
            found = True
            mapped = mapper(directory)
            if mapped is not None:
                result.append(mapped)
        else:
            children, found = _map_directory(directory.children, directory_id, mapper)
            if found:
                directory = dataclasses.replace(directory, children=children)
            result.append(directory)
    if not found:
        return directories, False
    return tuple(result), True


def _apply(tree: Tree, kind: str, directory_id: int, mapper: DirectoryMapper) -> Tree:
    directories, found = _map_directory(tree.directories, directory_id, mapper)
    if not found:
        raise NotFoundInTree(kind, directory_id)
    return Tree(directories=directories)


def _checked_patch(patch: Mapping[str, Any], allowed: frozenset[str], kind: str) -> dict[str, Any]:
    unknown = set(patch) - allowed
    if unknown:
        raise ValueError(f"Cannot update {kind} fields: {', '.join(sorted(unknown))}")
    return dict(patch)


# =========================================================================
# Directory derivations
# =========================================================================


def with_directory_added(tree: Tree, parent_id: int | None, directory: Directory) -> Tree:
    """Append ``directory`` as the last child of ``parent_id`` (or as a root)."""
    if find_directory(tree.directories, directory.id) is not None:
        raise ValueError(f"Directory {directory.id} already exists in tree")
    directory = dataclasses.replace(directory, parent_id=parent_id)
    if parent_id is None:
        return Tree(directories=(*tree.directories, directory))
    return _apply(
        tree,
        "directory",
        parent_id,
        lambda parent: dataclasses.replace(parent, children=(*parent.children, directory)),
    )


def with_directory_updated(tree: Tree, directory_id: int, patch: Mapping[str, Any]) -> Tree:
    changes = _checked_patch(patch, DIRECTORY_MUTABLE_FIELDS, "directory")
    return _apply(
        tree, "directory", directory_id, lambda d: dataclasses.replace(d, **changes)
    )


def with_directory_removed(tree: Tree, directory_id: int) -> Tree:
    return _apply(tree, "directory", directory_id, lambda d: None)


# =========================================================================
# Script derivations
# =========================================================================


def with_script_added(tree: Tree, directory_id: int, script: Script) -> Tree:
    if find_script(tree.directories, script.id) is not None:
        raise ValueError(f"Script {script.id} already exists in tree")
    script = dataclasses.replace(script, directory_id=directory_id)
    return _apply(
        tree,
        "directory",
        directory_id,
        lambda d: dataclasses.replace(d, scripts=(*d.scripts, script)),
    )


def with_script_updated(tree: Tree, script_id: int, patch: Mapping[str, Any]) -> Tree:
    changes = _checked_patch(patch, SCRIPT_MUTABLE_FIELDS, "script")
    owner = find_script_directory(tree.directories, script_id)
    if owner is None:
        raise NotFoundInTree("script", script_id)

    def update(directory: Directory) -> Directory:
        scripts = tuple(
            dataclasses.replace(s, **changes) if s.id == script_id else s
            for s in directory.scripts
        )
        return dataclasses.replace(directory, scripts=scripts)

    return _apply(tree, "directory", owner.id, update)


def with_script_removed(tree: Tree, script_id: int) -> Tree:
    owner = find_script_directory(tree.directories, script_id)
    if owner is None:
        raise NotFoundInTree("script", script_id)
    return _apply(
        tree,
        "directory",
        owner.id,
        lambda d: dataclasses.replace(
            d, scripts=tuple(s for s in d.scripts if s.id != script_id)
        ),
    )


def with_script_moved(
    tree: Tree, script_id: int, from_directory_id: int, to_directory_id: int
) -> Tree:
    """Move a script between directories, keeping its own fields.

    Moving within the same directory returns ``tree`` unchanged.
    """
    if from_directory_id == to_directory_id:
        return tree

    source = find_directory(tree.directories, from_directory_id)
    if source is None:
        raise NotFoundInTree("directory", from_directory_id)
    if find_directory(tree.directories, to_directory_id) is None:
        raise NotFoundInTree("directory", to_directory_id)

    script = next((s for s in source.scripts if s.id == script_id), None)
    if script is None:
        raise NotFoundInTree("script", script_id)

    moved = dataclasses.replace(script, directory_id=to_directory_id)
    tree = _apply(
        tree,
        "directory",
        from_directory_id,
        lambda d: dataclasses.replace(
            d, scripts=tuple(s for s in d.scripts if s.id != script_id)
        ),
    )
    return _apply(
        tree,
        "directory",
        to_directory_id,
        lambda d: dataclasses.replace(d, scripts=(*d.scripts, moved)),
    )
