"""Run a missing/unused audit end to end."""

from typing import Optional, Sequence, Set

import structlog

from .config import Settings
from .localization import AuditMode, AuditReport, KeySourceLoader, Locale, UsageExtractor, reconcile
from .ui import Console

logger = structlog.get_logger(__name__)


class ScanDriver:
    """Wires the loader, extractor and reconciler together for one run."""

    def __init__(self, settings: Settings, console: Optional[Console] = None):
        self.settings = settings
        self.console = console or Console(enabled=False)
        self.loader = KeySourceLoader(settings)
        self.extractor = UsageExtractor(settings.compiled_patterns(), max_workers=settings.max_workers)

    def run(
        self,
        mode: AuditMode,
        locale: Optional[str] = None,
        files: Sequence[str] = (),
        skip_json: bool = False,
    ) -> AuditReport:
        """
        Audit one locale.

        Declared keys are loaded before any source is scanned, so an unknown
        locale or a missing explicit group aborts without scanning.

        Raises:
            LocaleNotFoundError: the locale has no directory and no catalog
            GroupFileNotFoundError: an explicit group has no file
            ResourceParseError: a group or catalog cannot be parsed
        """
        if locale is None:
            locale = self.settings.default_locale
        target = self.loader.resolve_locale(locale)
        groups = self._resolve_groups(target, files)
        declared = self._load_declared(target, groups, skip_json)
        referenced = self._scan_usages()

        report = reconcile(mode, declared, referenced, locale=target.name)
        logger.info(
            "Audit finished",
            mode=mode.value,
            locale=target.name,
            declared=report.declared_count,
            referenced=report.referenced_count,
            found=report.count,
        )
        return report

    def _resolve_groups(self, locale: Locale, files: Sequence[str]) -> Sequence[str]:
        if files:
            return self.loader.list_group_names(locale, explicit=files)

        groups = self.loader.list_group_names(locale)
        self.console.new_line()
        if not locale.has_directory:
            self.console.warn("Lang folder not found.")
        else:
            loaded = ", ".join(self.loader.group_path(locale, g).name for g in groups)
            self.console.info(f"Loaded language files: {loaded}")
        self.console.new_line()
        return groups

    def _load_declared(self, locale: Locale, groups: Sequence[str], skip_json: bool) -> Set[str]:
        if not skip_json and locale.has_catalog:
            self.console.info(f"Checking {locale.catalog_path.name} ...")
        for group in groups:
            self.console.info(f"Checking {self.loader.group_path(locale, group).name} ...")
        return self.loader.declared_keys(locale, groups, skip_json=skip_json)

    def _scan_usages(self) -> Set[str]:
        referenced: Set[str] = set()
        for directory, relative in zip(self.settings.scan_dirs, self.settings.scan_paths):
            self.console.new_line()
            self.console.info(f"Scanning directory {relative.as_posix()} ...")
            if not directory.is_dir():
                self.console.warn(f"Directory {relative.as_posix()} not found, skipped.")
            referenced |= self.extractor.scan_directory(directory, progress=self.console.scan_progress)
        self.console.new_line()
        self.console.info(f"Total keys found: {len(referenced)}")
        return referenced
