"""
Tests for appbasis.config.tree module.

Tests tree operations including:
- Lookup of present, missing and blocked paths
- Auto-vivification on write
- Deletion with pruning of empty parents
- Change detection
- Type conflicts (overwrite vs strict)
- Deep merging
"""

from __future__ import annotations

import pytest

from appbasis.config.tree import get_value, merge_values, set_value, values_equal
from appbasis.exceptions import ConfigPathError, ConfigValueError


class TestGetValue:
    """Tests for get_value."""

    def test_get_nested(self):
        """Test reading a nested value."""
        tree = {"one": {"two": {"three": "four"}}}

        assert get_value(tree, ["one", "two", "three"]) == "four"
        assert get_value(tree, ["one", "two"]) == {"three": "four"}

    def test_get_missing_returns_none(self):
        """Test that missing keys yield None."""
        tree = {"one": {"two": 2}}

        assert get_value(tree, ["nope"]) is None
        assert get_value(tree, ["one", "nope"]) is None
        assert get_value(tree, ["one", "nope", "deeper"]) is None

    def test_get_through_scalar_returns_none(self):
        """Test that descending through a scalar yields None, not an error."""
        tree = {"one": "scalar"}

        assert get_value(tree, ["one", "two"]) is None

    def test_get_through_list_returns_none(self):
        """Test that lists are leaves for path lookup."""
        tree = {"items": ["a", "b"]}

        assert get_value(tree, ["items", "0"]) is None

    def test_get_root_is_live_tree(self):
        """Test that the empty path returns the root object itself."""
        tree = {"a": 1}

        assert get_value(tree, []) is tree


class TestSetValue:
    """Tests for set_value writes."""

    def test_set_creates_intermediates(self):
        """Test auto-vivification of missing parents."""
        tree = {}

        changed = set_value(tree, ["test2", "test3", "test4"], 124)

        assert changed is True
        assert tree == {"test2": {"test3": {"test4": 124}}}

    def test_set_same_value_is_unchanged(self):
        """Test that re-assigning an equal value reports no change."""
        tree = {}
        set_value(tree, ["a", "b"], "x")

        assert set_value(tree, ["a", "b"], "x") is False

    def test_set_different_value_is_changed(self):
        """Test that assigning a new value reports a change."""
        tree = {"a": {"b": "x"}}

        assert set_value(tree, ["a", "b"], "y") is True
        assert tree["a"]["b"] == "y"

    def test_set_type_change_is_changed(self):
        """Test that equal-comparing values of different types count as changes."""
        tree = {"flag": 1}

        assert set_value(tree, ["flag"], True) is True
        assert tree["flag"] is True

    def test_set_nested_mapping(self):
        """Test storing a whole mapping as a value."""
        tree = {}
        value = {"fred": "one", "bill": 2, "barney": {"value": "three"}}

        set_value(tree, ["complex"], value)

        assert get_value(tree, ["complex"]) == value
        assert get_value(tree, ["complex", "barney", "value"]) == "three"

    def test_set_copies_value(self):
        """Test that later mutation of the caller's object does not leak in."""
        tree = {}
        value = {"inner": ["a"]}

        set_value(tree, ["key"], value)
        value["inner"].append("b")
        value["extra"] = 1

        assert tree == {"key": {"inner": ["a"]}}

    def test_set_converts_tuples(self):
        """Test that tuples are stored as lists."""
        tree = {}

        set_value(tree, ["items"], ("a", ("b", "c")))

        assert tree["items"] == ["a", ["b", "c"]]

    def test_set_replaces_null_intermediate(self):
        """Test that a null intermediate is treated as absent."""
        tree = {"a": None}

        set_value(tree, ["a", "b"], 1)

        assert tree == {"a": {"b": 1}}


class TestDelete:
    """Tests for deletion through set_value with no value."""

    def test_delete_prunes_empty_parents(self):
        """Test that deleting the only leaf removes every emptied ancestor."""
        tree = {"one": {"two": {"three": "four"}}}

        changed = set_value(tree, ["one", "two", "three"])

        assert changed is True
        assert tree == {}
        assert get_value(tree, ["one"]) is None

    def test_delete_stops_at_non_empty_ancestor(self):
        """Test that pruning stops where siblings remain."""
        tree = {"one": {"two": {"three": "four"}, "keep": 1}}

        set_value(tree, ["one", "two", "three"])

        assert tree == {"one": {"keep": 1}}

    def test_delete_missing_is_unchanged(self):
        """Test that deleting a missing path reports no change and creates nothing."""
        tree = {"a": {"b": 1}}

        assert set_value(tree, ["a", "zzz", "c"]) is False
        assert set_value(tree, ["nope"]) is False
        assert tree == {"a": {"b": 1}}

    def test_delete_through_scalar_is_unchanged(self):
        """Test that deleting below a scalar leaves the scalar alone."""
        tree = {"a": "scalar"}

        assert set_value(tree, ["a", "b"]) is False
        assert tree == {"a": "scalar"}

    def test_delete_subtree(self):
        """Test deleting an intermediate mapping removes its whole subtree."""
        tree = {"a": {"b": {"c": 1, "d": 2}}, "e": 3}

        set_value(tree, ["a", "b"])

        assert tree == {"e": 3}


class TestRootOperations:
    """Tests for writes addressed at the root."""

    def test_clear_whole_tree(self):
        """Test that the empty path with no value empties the tree in place."""
        tree = {"a": 1, "b": {"c": 2}}
        original = tree

        assert set_value(tree, []) is True
        assert tree == {}
        assert tree is original

    def test_clear_empty_tree_is_unchanged(self):
        """Test that clearing an empty tree reports no change."""
        assert set_value({}, []) is False

    def test_replace_whole_tree(self):
        """Test that the empty path with a mapping replaces the contents."""
        tree = {"old": 1}

        assert set_value(tree, [], {"new": {"x": 1}}) is True
        assert tree == {"new": {"x": 1}}

    def test_replace_with_equal_tree_is_unchanged(self):
        """Test that replacing with identical contents reports no change."""
        tree = {"a": {"b": 1}}

        assert set_value(tree, [], {"a": {"b": 1}}) is False

    def test_replace_root_with_scalar_raises(self):
        """Test that the root must stay a mapping."""
        tree = {"a": 1}

        with pytest.raises(ConfigValueError, match="must be a mapping"):
            set_value(tree, [], "scalar")

        assert tree == {"a": 1}


class TestTypeConflicts:
    """Tests for writes that descend through a non-mapping value."""

    def test_overwrite_with_warning(self, recording_logger):
        """Test default behaviour replaces the scalar and warns."""
        tree = {"a": "scalar"}

        changed = set_value(tree, ["a", "b"], 1, logger=recording_logger)

        assert changed is True
        assert tree == {"a": {"b": 1}}
        warnings = recording_logger.of_kind("warning")
        assert len(warnings) == 1
        assert "/a" in warnings[0]

    def test_strict_raises_and_leaves_tree(self):
        """Test strict mode raises and does not touch the tree."""
        tree = {"a": {"b": [1, 2]}}

        with pytest.raises(ConfigPathError, match="/a/b"):
            set_value(tree, ["a", "b", "c", "d"], 1, strict=True)

        assert tree == {"a": {"b": [1, 2]}}

    def test_strict_allows_normal_writes(self):
        """Test strict mode only affects conflicts."""
        tree = {}

        assert set_value(tree, ["a", "b"], 1, strict=True) is True


class TestMergeValues:
    """Tests for merge_values."""

    def test_merge_deep(self):
        """Test that nested mappings merge key by key."""
        tree = {"server": {"host": "localhost", "port": 80}}

        changed = merge_values(tree, [], {"server": {"port": 8080, "tls": True}})

        assert changed is True
        assert tree == {"server": {"host": "localhost", "port": 8080, "tls": True}}

    def test_merge_lists_replace(self):
        """Test that lists are replaced, not concatenated."""
        tree = {"items": ["a", "b"]}

        merge_values(tree, [], {"items": ["c"]})

        assert tree == {"items": ["c"]}

    def test_merge_none_deletes(self):
        """Test that None in the overlay deletes and prunes."""
        tree = {"a": {"b": {"c": 1}}, "d": 2}

        merge_values(tree, [], {"a": {"b": {"c": None}}})

        assert tree == {"d": 2}

    def test_merge_at_subpath(self):
        """Test merging below a path, creating it if needed."""
        tree = {}

        merge_values(tree, ["x", "y"], {"z": 1})

        assert tree == {"x": {"y": {"z": 1}}}

    def test_merge_identical_is_unchanged(self):
        """Test that merging values already present reports no change."""
        tree = {"a": {"b": 1, "c": [1, 2]}}

        assert merge_values(tree, [], {"a": {"b": 1, "c": [1, 2]}}) is False

    def test_merge_non_mapping_raises(self):
        """Test that only mappings can be merged."""
        with pytest.raises(ConfigValueError):
            merge_values({}, [], ["not", "a", "dict"])


class TestValuesEqual:
    """Tests for values_equal."""

    def test_nested_equal(self):
        """Test deep equality ignoring key order."""
        assert values_equal({"a": [1, {"b": 2}], "c": 3}, {"c": 3, "a": [1, {"b": 2}]})

    def test_scalar_types_differ(self):
        """Test that bool, int and float are distinct."""
        assert not values_equal(1, True)
        assert not values_equal(1, 1.0)
        assert not values_equal("1", 1)

    def test_list_length_differs(self):
        """Test that list prefixes are not equal."""
        assert not values_equal([1, 2], [1, 2, 3])
