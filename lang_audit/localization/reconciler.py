"""Compare declared and referenced keys and render the result."""

import json
from dataclasses import dataclass
from enum import Enum
from typing import AbstractSet, Any, Dict, Tuple


class AuditMode(str, Enum):
    """Which set difference to report."""

    MISSING = "missing"
    UNUSED = "unused"


SUCCESS_MESSAGES = {
    AuditMode.MISSING: "All keys are translated.",
    AuditMode.UNUSED: "All keys are used.",
}


def find_missing(declared: AbstractSet[str], referenced: AbstractSet[str]) -> AbstractSet[str]:
    """Keys referenced in code but declared nowhere."""
    return frozenset(referenced) - frozenset(declared)


def find_unused(declared: AbstractSet[str], referenced: AbstractSet[str]) -> AbstractSet[str]:
    """Keys declared but never referenced in code."""
    return frozenset(declared) - frozenset(referenced)


@dataclass(frozen=True)
class AuditReport:
    """Outcome of one missing/unused run."""

    mode: AuditMode
    locale: str
    keys: Tuple[str, ...]
    declared_count: int
    referenced_count: int

    @property
    def count(self) -> int:
        return len(self.keys)

    @property
    def is_clean(self) -> bool:
        return not self.keys

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mode": self.mode.value,
            "locale": self.locale,
            "count": self.count,
            "keys": list(self.keys),
            "declared_count": self.declared_count,
            "referenced_count": self.referenced_count,
        }


def reconcile(
    mode: AuditMode,
    declared: AbstractSet[str],
    referenced: AbstractSet[str],
    locale: str = "",
) -> AuditReport:
    """Compute the difference for ``mode`` as a sorted report."""
    if mode is AuditMode.MISSING:
        result = find_missing(declared, referenced)
    else:
        result = find_unused(declared, referenced)
    return AuditReport(
        mode=mode,
        locale=locale,
        keys=tuple(sorted(result)),
        declared_count=len(declared),
        referenced_count=len(referenced),
    )


def render_text(report: AuditReport) -> str:
    """Count line and sorted keys, or the success message when empty."""
    if report.is_clean:
        return SUCCESS_MESSAGES[report.mode]
    lines = [f"Found {report.count} {report.mode.value} keys:"]
    lines.extend(report.keys)
    return "\n".join(lines)


def render_plain(report: AuditReport) -> str:
    """One key per line; empty output when nothing was found."""
    return "\n".join(report.keys)


def render_json(report: AuditReport) -> str:
    return json.dumps(report.to_dict(), ensure_ascii=False, indent=2)


RENDERERS = {
    "text": render_text,
    "plain": render_plain,
    "json": render_json,
}


def render(report: AuditReport, output_format: str = "text") -> str:
    return RENDERERS[output_format](report)
