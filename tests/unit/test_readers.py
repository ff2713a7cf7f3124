"""Unit tests for resource file readers."""

import json

import pytest

from lang_audit.errors import ResourceParseError
from lang_audit.localization import read_group_file, read_json_catalog, strip_group_suffix


class TestStripGroupSuffix:
    """Test explicit group name normalization."""

    @pytest.mark.parametrize("name, expected", [
        ("messages.php", "messages"),
        ("messages", "messages"),
        ("menu.yaml", "menu"),
        ("menu.yml", "menu"),
        ("menu.json", "menu"),
        ("archive.php.php", "archive.php"),
        (".php", ".php"),
        ("phpinfo", "phpinfo"),
    ])
    def test_strip(self, name, expected):
        assert strip_group_suffix(name) == expected


class TestReadGroupFile:
    """Test reading group files of each supported type."""

    def test_php(self, tmp_path):
        path = tmp_path / "messages.php"
        path.write_text("<?php return ['a' => ['b' => 'c']];", encoding="utf-8")

        assert read_group_file(path) == {"a": {"b": "c"}}

    def test_json(self, tmp_path):
        path = tmp_path / "menu.json"
        path.write_text(json.dumps({"home": "Home", "sub": {"x": "y"}}), encoding="utf-8")

        assert read_group_file(path) == {"home": "Home", "sub": {"x": "y"}}

    def test_yaml_keys_are_stringified(self, tmp_path):
        path = tmp_path / "menu.yml"
        path.write_text("home: Home\ncodes:\n  404: Not found\n", encoding="utf-8")

        assert read_group_file(path) == {"home": "Home", "codes": {"404": "Not found"}}

    def test_empty_yaml_is_empty_group(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        assert read_group_file(path) == {}

    @pytest.mark.parametrize("name, content", [
        ("messages.php", "<?php return ['a' => 'b'];"),
        ("messages.json", '{"a": "b"}'),
        ("messages.yaml", "a: b\n"),
    ])
    def test_byte_order_mark_is_ignored(self, tmp_path, name, content):
        path = tmp_path / name
        path.write_bytes(b"\xef\xbb\xbf" + content.encode("utf-8"))

        assert read_group_file(path) == {"a": "b"}

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "messages.txt"
        path.write_text("a=b", encoding="utf-8")

        with pytest.raises(ResourceParseError, match="unsupported"):
            read_group_file(path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{\n  'a': }", encoding="utf-8")

        with pytest.raises(ResourceParseError, match="invalid JSON") as exc_info:
            read_group_file(path)

        assert exc_info.value.path == path

    def test_top_level_must_be_mapping(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]", encoding="utf-8")

        with pytest.raises(ResourceParseError, match="mapping"):
            read_group_file(path)


class TestReadJsonCatalog:
    """Test reading the flat JSON catalog."""

    def test_keys_are_kept_verbatim(self, tmp_path):
        path = tmp_path / "en.json"
        path.write_text(json.dumps({"Log in": "Log in", "a.b": "dotted"}), encoding="utf-8")

        assert set(read_json_catalog(path)) == {"Log in", "a.b"}

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "en.json"
        path.write_text('"text"', encoding="utf-8")

        with pytest.raises(ResourceParseError, match="object"):
            read_json_catalog(path)

    def test_byte_order_mark_is_ignored(self, tmp_path):
        path = tmp_path / "en.json"
        path.write_bytes(b"\xef\xbb\xbf" + json.dumps({"Log in": "Log in"}).encode("utf-8"))

        assert read_json_catalog(path) == {"Log in": "Log in"}
