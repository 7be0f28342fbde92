# Tests for the registry tree model
# Created: 2026-10-12
# Tests lookups and the pure with_* derivations

import pytest

from scriptregistry.errors import NotFoundInTree
from scriptregistry.models import Directory, Script, Tree

ALL_SCRIPT_IDS = [10, 11, 12, 13, 14]


class TestModels:
    """Tests for the frozen records."""

    def test_directory_normalizes_owner_ids(self):
        directory = Directory(
            id=7,
            name="Jobs",
            children=(Directory(id=8, name="Child", parent_id=99),),
            scripts=(Script(20, "Run"),),
        )
        assert directory.children[0].parent_id == 7
        assert directory.scripts[0].directory_id == 7

    def test_directory_accepts_lists(self):
        directory = Directory(id=7, name="Jobs", scripts=[Script(20, "Run")])
        assert isinstance(directory.scripts, tuple)

    def test_directory_equality_ignores_script_order(self):
        a = Directory(id=1, name="A", scripts=(Script(1, "x"), Script(2, "y")))
        b = Directory(id=1, name="A", scripts=(Script(2, "y"), Script(1, "x")))
        assert a == b

    def test_directory_equality_respects_child_order(self):
        a = Directory(id=1, name="A", children=(Directory(2, "b"), Directory(3, "c")))
        b = Directory(id=1, name="A", children=(Directory(3, "c"), Directory(2, "b")))
        assert a != b

    def test_to_dict(self, tree):
        data = tree.to_list()
        assert data[0]["name"] == "Scripts"
        assert data[0]["children"][0] == {
            "id": 2,
            "name": "Sub",
            "parentId": 1,
            "children": [],
            "scripts": [],
        }
        assert data[0]["scripts"][0] == {"id": 10, "name": "Foo", "directoryId": 1}

    def test_queries(self, tree):
        assert tree.script_count == 5
        assert [d.id for d in tree.iter_directories()] == [1, 2, 3, 4, 6]
        assert not tree.is_empty
        assert Tree().is_empty


class TestFindScript:
    """Tests for find_script / find_directory."""

    @pytest.mark.parametrize("script_id", ALL_SCRIPT_IDS)
    def test_finds_every_script(self, tree, script_id):
        script = tree.find_script(script_id)
        assert script is not None
        assert script.id == script_id

    def test_missing_script(self, tree):
        assert tree.find_script(999) is None

    def test_nested_script_keeps_owner(self, tree):
        assert tree.find_script(13).directory_id == 4

    def test_find_directory(self, tree):
        assert tree.find_directory(4).name == "Nested"
        assert tree.find_directory(999) is None


class TestDirectoryDerivations:
    """Tests for with_directory_added/updated/removed."""

    def test_add_child(self, tree):
        result = tree.with_directory_added(1, Directory(id=5, name="New"))
        parent = result.find_directory(1)
        assert parent.children[-1] == Directory(id=5, name="New", parent_id=1)
        assert tree.find_directory(5) is None

    def test_add_root(self, tree):
        result = tree.with_directory_added(None, Directory(id=5, name="New", parent_id=3))
        assert result.directories[-1].id == 5
        assert result.directories[-1].parent_id is None

    def test_add_to_missing_parent(self, tree):
        with pytest.raises(NotFoundInTree) as exc_info:
            tree.with_directory_added(999, Directory(id=5, name="New"))
        assert exc_info.value.entity_id == 999

    def test_add_duplicate_id(self, tree):
        with pytest.raises(ValueError):
            tree.with_directory_added(None, Directory(id=2, name="Dup"))

    def test_update_name(self, tree):
        result = tree.with_directory_updated(4, {"name": "Deep"})
        assert result.find_directory(4).name == "Deep"
        assert result.find_directory(4).scripts == (Script(13, "Cleanup", 4),)
        assert tree.find_directory(4).name == "Nested"

    def test_update_rejects_immutable_field(self, tree):
        with pytest.raises(ValueError):
            tree.with_directory_updated(4, {"parent_id": 1})

    def test_update_missing(self, tree):
        with pytest.raises(NotFoundInTree):
            tree.with_directory_updated(999, {"name": "x"})

    def test_remove_subtree(self, tree):
        result = tree.with_directory_removed(3)
        assert result.find_directory(3) is None
        assert result.find_directory(4) is None
        assert result.find_script(12) is None
        assert result.find_script(13) is None
        assert result.find_script(10) is not None

    def test_remove_root(self, tree):
        result = tree.with_directory_removed(6)
        assert [d.id for d in result.directories] == [1]

    def test_remove_missing(self, tree):
        with pytest.raises(NotFoundInTree):
            tree.with_directory_removed(999)

    def test_untouched_roots_are_shared(self, tree):
        result = tree.with_directory_updated(4, {"name": "Deep"})
        assert result.directories[1] is tree.directories[1]


class TestScriptDerivations:
    """Tests for with_script_added/updated/removed."""

    def test_add(self, tree):
        result = tree.with_script_added(2, Script(20, "Report"))
        assert result.find_script(20) == Script(20, "Report", 2)
        assert result.find_directory(2).scripts[-1].id == 20

    def test_add_duplicate_id(self, tree):
        with pytest.raises(ValueError):
            tree.with_script_added(2, Script(10, "Foo again"))

    def test_add_to_missing_directory(self, tree):
        with pytest.raises(NotFoundInTree):
            tree.with_script_added(999, Script(20, "Report"))

    def test_update(self, tree):
        result = tree.with_script_updated(13, {"name": "Purge"})
        assert result.find_script(13) == Script(13, "Purge", 4)

    def test_update_missing(self, tree):
        with pytest.raises(NotFoundInTree):
            tree.with_script_updated(999, {"name": "x"})

    def test_remove(self, tree):
        result = tree.with_script_removed(11)
        assert result.find_script(11) is None
        assert [s.id for s in result.find_directory(1).scripts] == [10]

    def test_remove_missing(self, tree):
        with pytest.raises(NotFoundInTree):
            tree.with_script_removed(999)


class TestScriptMove:
    """Tests for with_script_moved."""

    def test_move(self, tree):
        result = tree.with_script_moved(10, 1, 2)
        assert result.find_directory(2).scripts == (Script(10, "Foo", 2),)
        assert [s.id for s in result.find_directory(1).scripts] == [11]
        assert tree.find_script(10).directory_id == 1

    def test_move_appends_to_destination(self, tree):
        result = tree.with_script_moved(10, 1, 4)
        assert [s.id for s in result.find_directory(4).scripts] == [13, 10]

    def test_same_directory_is_noop(self, tree):
        assert tree.with_script_moved(10, 1, 1) is tree

    @pytest.mark.parametrize("script_id,source,destination", [
        (10, 1, 2), (11, 1, 6), (13, 4, 1), (14, 6, 4), (12, 3, 2),
    ])
    def test_round_trip(self, tree, script_id, source, destination):
        moved = tree.with_script_moved(script_id, source, destination)
        assert moved != tree
        assert moved.with_script_moved(script_id, destination, source) == tree

    def test_script_not_in_source(self, tree):
        with pytest.raises(NotFoundInTree) as exc_info:
            tree.with_script_moved(13, 1, 2)
        assert exc_info.value.kind == "script"

    def test_missing_source(self, tree):
        with pytest.raises(NotFoundInTree):
            tree.with_script_moved(10, 999, 2)

    def test_missing_destination(self, tree):
        with pytest.raises(NotFoundInTree):
            tree.with_script_moved(10, 1, 999)
