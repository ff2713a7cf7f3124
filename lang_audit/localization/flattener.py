"""Turn nested translation trees into dotted key paths."""

from typing import Any, List, Mapping, Union

# A tree node is either a leaf (any scalar) or a nested mapping of nodes
TranslationTree = Mapping[str, Union[Any, "TranslationTree"]]


def flatten_paths(tree: TranslationTree, prefix: str = "") -> List[str]:
    """Return the dot-joined path of every leaf in ``tree``.

    Paths come out depth-first, pre-order, in the mapping's iteration order.
    Empty nested mappings have no leaves and produce no paths.

    >>> flatten_paths({"greeting": "hi", "nested": {"a": "x"}})
    ['greeting', 'nested.a']
    """
    paths: List[str] = []
    for key, value in tree.items():
        current_path = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            paths.extend(flatten_paths(value, current_path))
        else:
            paths.append(current_path)
    return paths


def count_leaves(tree: TranslationTree) -> int:
    """Count leaf values without building the path list."""
    count = 0
    for value in tree.values():
        if isinstance(value, Mapping):
            count += count_leaves(value)
        else:
            count += 1
    return count
