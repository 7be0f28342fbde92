"""Registry filter engine.

Created: 2026-10-12

Derives a filtered view of the tree from a search string:
- A directory whose own name matches is kept whole (all descendants)
- Otherwise its scripts are reduced to the matching ones and its
  children are filtered with the same rule
- Directories left without scripts and children are dropped

Matching is a case-insensitive substring test. A directory name match keeps
every sibling script below it, a script name match keeps only that script.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable

from scriptregistry.models import Directory, Script, Tree

logger = logging.getLogger(__name__)

DEFAULT_MIN_FILTER_LENGTH = 2


def matches_filter(item: Directory | Script, query: str) -> bool:
    """Check whether an item's name contains the (lowercased) query."""
    return query in item.name.lower()


def filter_directories(directories: Iterable[Directory], query: str) -> tuple[Directory, ...]:
    result = []
    for directory in directories:
        if not matches_filter(directory, query):
            directory = dataclasses.replace(
                directory,
                scripts=tuple(s for s in directory.scripts if matches_filter(s, query)),
                children=filter_directories(directory.children, query),
            )
        if not directory.is_empty:
            result.append(directory)
    return tuple(result)


def filter_tree(tree: Tree, query: str) -> Tree:
    """Return the filtered view of ``tree`` for ``query``.

    The result is itself a Tree; filtering it again with the same query
    yields an equal tree.
    """
    return Tree(directories=filter_directories(tree.directories, query.lower()))


class TreeFilter:
    """Memoized filter for the presentation layer.

    Remembers the last (tree, query) pair and its result. The tree is
    compared by identity (every change produces a new Tree), the query
    by value. Queries shorter than ``min_length`` leave the tree unfiltered.
    """

    def __init__(self, min_length: int = DEFAULT_MIN_FILTER_LENGTH):
        self.min_length = min_length
        self._last_tree: Tree | None = None
        self._last_query: str | None = None
        self._last_result: Tree | None = None
        self.computations = 0

    def is_active(self, text: str | None) -> bool:
        return bool(text) and len(text) >= self.min_length

    def __call__(self, tree: Tree, text: str | None) -> Tree:
        if not self.is_active(text):
            return tree

        query = text.lower()
        if tree is self._last_tree and query == self._last_query:
            return self._last_result

        self._last_result = filter_tree(tree, query)
        self._last_tree = tree
        self._last_query = query
        self.computations += 1
        logger.debug(
            f"Filtered registry by {query!r}: "
            f"{len(self._last_result.directories)}/{len(tree.directories)} roots"
        )
        return self._last_result

    def clear(self) -> None:
        self._last_tree = None
        self._last_query = None
        self._last_result = None
