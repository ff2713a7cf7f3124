"""Key extraction and reconciliation for translation audits."""

from .extractor import UsageExtractor
from .flattener import count_leaves, flatten_paths
from .loader import KeySourceLoader, Locale, ResourceGroup
from .readers import read_group_file, read_json_catalog, strip_group_suffix
from .reconciler import (
    AuditMode,
    AuditReport,
    find_missing,
    find_unused,
    reconcile,
    render,
    render_json,
    render_plain,
    render_text,
)

__all__ = [
    "AuditMode",
    "AuditReport",
    "KeySourceLoader",
    "Locale",
    "ResourceGroup",
    "UsageExtractor",
    "count_leaves",
    "find_missing",
    "find_unused",
    "flatten_paths",
    "read_group_file",
    "read_json_catalog",
    "reconcile",
    "render",
    "render_json",
    "render_plain",
    "render_text",
    "strip_group_suffix",
]
