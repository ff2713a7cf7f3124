"""Unit tests for key path flattening."""

from lang_audit.localization import count_leaves, flatten_paths


class TestFlattenPaths:
    """Test flatten_paths."""

    def test_flat_mapping(self):
        assert flatten_paths({"a": "1", "b": "2"}) == ["a", "b"]

    def test_nested_mapping_is_depth_first_pre_order(self):
        tree = {
            "z": "last?",
            "menu": {"home": "Home", "sub": {"deep": "d"}, "about": "About"},
            "a": "first?",
        }

        assert flatten_paths(tree) == ["z", "menu.home", "menu.sub.deep", "menu.about", "a"]

    def test_prefix_is_prepended(self):
        assert flatten_paths({"a": {"b": "c"}}, prefix="messages") == ["messages.a.b"]

    def test_empty_nested_mapping_has_no_paths(self):
        assert flatten_paths({"empty": {}, "k": "v"}) == ["k"]

    def test_one_path_per_leaf(self):
        tree = {
            "l1": {"l2": {"l3": {"l4": "deep"}}, "x": None, "y": 3},
            "list": ["not", "a", "mapping"],
            "z": "",
        }

        paths = flatten_paths(tree)

        assert len(paths) == count_leaves(tree) == 5
        assert len(set(paths)) == len(paths)
        assert "l1.l2.l3.l4" in paths
        assert "list" in paths

    def test_keys_are_case_and_punctuation_sensitive(self):
        paths = flatten_paths({"Key": "1", "key": "2", "key.": "3"})

        assert paths == ["Key", "key", "key."]

    def test_zero_key_is_a_valid_prefix(self):
        assert flatten_paths({"0": {"1": "x"}}) == ["0.1"]


class TestCountLeaves:
    """Test count_leaves."""

    def test_counts_only_leaves(self):
        assert count_leaves({"a": {"b": "1", "c": {"d": "2"}}, "e": "3", "f": {}}) == 3
