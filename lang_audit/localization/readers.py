"""Readers for resource group files and JSON catalogs."""

import json
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Tuple

import structlog
import yaml

from ..errors import ResourceParseError
from . import php_array

logger = structlog.get_logger(__name__)


def _read_json(path: Path) -> Any:
    with open(path, "r", encoding="utf-8-sig") as f:
        return json.load(f)


def _read_yaml(path: Path) -> Any:
    with open(path, "r", encoding="utf-8-sig") as f:
        return yaml.safe_load(f)


# Lookup order when resolving a bare group name to a file
GROUP_READERS: Dict[str, Callable[[Path], Any]] = {
    ".php": php_array.load,
    ".json": _read_json,
    ".yaml": _read_yaml,
    ".yml": _read_yaml,
}

SUPPORTED_SUFFIXES: Tuple[str, ...] = tuple(GROUP_READERS)


def strip_group_suffix(name: str) -> str:
    """Drop one trailing resource suffix, so ``messages.php`` names ``messages``."""
    for suffix in SUPPORTED_SUFFIXES:
        if name.endswith(suffix) and len(name) > len(suffix):
            return name[: -len(suffix)]
    return name


def _stringify_keys(tree: Mapping[Any, Any]) -> Dict[str, Any]:
    result: Dict[str, Any] = {}
    for key, value in tree.items():
        if isinstance(value, Mapping):
            value = _stringify_keys(value)
        result[str(key)] = value
    return result


def read_group_file(path: Path) -> Dict[str, Any]:
    """
    Read one resource group file into a nested dict with string keys.

    Raises:
        ResourceParseError: unsupported suffix, syntax error or a top level
            that is not a mapping
    """
    reader = GROUP_READERS.get(path.suffix)
    if reader is None:
        raise ResourceParseError(f"unsupported resource file type {path.suffix!r}", path=path)

    try:
        data = reader(path)
    except ResourceParseError:
        raise
    except json.JSONDecodeError as e:
        raise ResourceParseError(f"invalid JSON: {e.msg}", path=path, line=e.lineno, previous_error=e) from e
    except yaml.YAMLError as e:
        raise ResourceParseError(f"invalid YAML: {e}", path=path, previous_error=e) from e
    except UnicodeDecodeError as e:
        raise ResourceParseError(f"not UTF-8 text: {e}", path=path, previous_error=e) from e

    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise ResourceParseError("top level must be a mapping", path=path)
    return _stringify_keys(data)


def read_json_catalog(path: Path) -> Dict[str, Any]:
    """Read a flat ``{locale}.json`` catalog; keys are full translation strings."""
    try:
        data = _read_json(path)
    except json.JSONDecodeError as e:
        raise ResourceParseError(f"invalid JSON: {e.msg}", path=path, line=e.lineno, previous_error=e) from e
    except UnicodeDecodeError as e:
        raise ResourceParseError(f"not UTF-8 text: {e}", path=path, previous_error=e) from e

    if not isinstance(data, dict):
        raise ResourceParseError("JSON catalog must be an object", path=path)
    return data
