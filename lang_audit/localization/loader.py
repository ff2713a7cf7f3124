"""Load declared translation keys for a locale."""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Mapping, Optional, Sequence, Set, TypeVar

import structlog

from ..config import Settings
from ..errors import GroupFileNotFoundError, LangFolderNotFoundError, LocaleNotFoundError
from .flattener import count_leaves, flatten_paths
from .readers import SUPPORTED_SUFFIXES, read_group_file, read_json_catalog, strip_group_suffix

logger = structlog.get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Locale:
    """A resolved locale: its group directory and flat JSON catalog."""

    name: str
    directory: Path
    catalog_path: Path

    @property
    def has_directory(self) -> bool:
        return self.directory.is_dir()

    @property
    def has_catalog(self) -> bool:
        return self.catalog_path.is_file()


@dataclass(frozen=True)
class ResourceGroup:
    """One nested resource file, named after the file without its suffix."""

    name: str
    path: Path
    tree: Mapping[str, Any] = field(repr=False)

    def key_paths(self) -> List[str]:
        """Dotted paths of every leaf, prefixed with the group name."""
        return [f"{self.name}.{path}" for path in flatten_paths(self.tree)]


class KeySourceLoader:
    """Reads a locale's JSON catalog and resource groups into key paths."""

    def __init__(self, settings: Settings):
        """Initialize the loader.

        Args:
            settings: Supplies the lang directory, baseline locale,
                discovery denylist and worker bound
        """
        self.lang_dir = settings.lang_dir
        self.baseline_locale = settings.baseline_locale
        self.excluded_groups: FrozenSet[str] = frozenset(
            strip_group_suffix(name) for name in settings.excluded_groups
        )
        self.max_workers = settings.max_workers

    def resolve_locale(self, name: str) -> Locale:
        """Resolve ``name`` or fail if it has neither a directory nor a catalog."""
        # Locale names are single path components below the lang directory
        if name in ("", ".", "..") or "/" in name or "\\" in name:
            raise LocaleNotFoundError(name, lang_path=self.lang_dir)
        locale = Locale(
            name=name,
            directory=self.lang_dir / name,
            catalog_path=self.lang_dir / f"{name}.json",
        )
        if not locale.has_directory and not locale.has_catalog:
            raise LocaleNotFoundError(name, lang_path=self.lang_dir)

        logger.info(
            "Resolved locale",
            locale=name,
            has_directory=locale.has_directory,
            has_catalog=locale.has_catalog,
        )
        return locale

    def list_group_names(self, locale: Locale, explicit: Optional[Iterable[str]] = None) -> List[str]:
        """Names of the resource groups to check.

        An explicit list is used as given (suffix stripped) and bypasses the
        denylist. Otherwise groups are discovered from the locale directory;
        a missing directory is only a warning because a catalog-only locale
        is valid.
        """
        if explicit:
            names = [strip_group_suffix(name) for name in explicit]
            logger.info("Using explicit group list", locale=locale.name, groups=names)
            return names

        try:
            names = self._discover_groups(locale)
        except LangFolderNotFoundError as e:
            logger.warning(e.message, **e.context)
            return []

        logger.info("Discovered groups", locale=locale.name, groups=names)
        return names

    def _discover_groups(self, locale: Locale) -> List[str]:
        if not locale.has_directory:
            raise LangFolderNotFoundError(locale.name, directory=locale.directory)

        baseline_dir = self.lang_dir / self.baseline_locale
        names = []
        for path in sorted(locale.directory.iterdir()):
            if not path.is_file() or path.suffix not in SUPPORTED_SUFFIXES:
                continue
            if path.stem in self.excluded_groups:
                logger.debug("Skipping excluded group", group=path.stem)
                continue
            # Groups without a canonical counterpart have nothing to compare against
            if not (baseline_dir / path.name).is_file():
                logger.debug("Skipping group missing from baseline", group=path.stem, baseline=self.baseline_locale)
                continue
            if path.stem not in names:
                names.append(path.stem)
        return names

    def group_path(self, locale: Locale, group: str) -> Path:
        """File backing ``group``, trying each supported suffix in order."""
        for suffix in SUPPORTED_SUFFIXES:
            candidate = locale.directory / f"{group}{suffix}"
            if candidate.is_file():
                return candidate
        raise GroupFileNotFoundError(group, locale.name, directory=locale.directory)

    def load_group(self, locale: Locale, group: str) -> ResourceGroup:
        """Load one group; a missing file aborts the run."""
        path = self.group_path(locale, group)
        tree = read_group_file(path)
        logger.debug("Loaded group", group=group, file=str(path), keys=count_leaves(tree))
        return ResourceGroup(name=group, path=path, tree=tree)

    def load_json_catalog(self, locale: Locale, skip: bool = False) -> Dict[str, Any]:
        """The flat catalog, or an empty dict when absent or skipped."""
        if skip:
            logger.debug("Skipping JSON catalog", locale=locale.name)
            return {}
        if not locale.has_catalog:
            logger.debug("No JSON catalog", locale=locale.name, file=str(locale.catalog_path))
            return {}

        catalog = read_json_catalog(locale.catalog_path)
        logger.debug("Loaded JSON catalog", file=str(locale.catalog_path), keys=len(catalog))
        return catalog

    def _map_groups(self, locale: Locale, groups: Sequence[str], func: Callable[[str], T]) -> List[T]:
        # Locate every file first so a missing group fails before any parsing
        for group in groups:
            self.group_path(locale, group)

        if not groups:
            return []
        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(groups))) as executor:
            return list(executor.map(func, groups))

    def declared_keys(
        self,
        locale: Locale,
        groups: Sequence[str],
        skip_json: bool = False,
    ) -> Set[str]:
        """Union of catalog keys (bare) and group key paths (prefixed).

        Each group is read and flattened as its own pool task; the partial
        sets are merged afterwards.
        """
        declared: Set[str] = set(self.load_json_catalog(locale, skip=skip_json))
        partials = self._map_groups(locale, groups, lambda g: self.load_group(locale, g).key_paths())
        for paths in partials:
            declared.update(paths)

        logger.info("Declared keys loaded", locale=locale.name, groups=len(groups), keys=len(declared))
        return declared
