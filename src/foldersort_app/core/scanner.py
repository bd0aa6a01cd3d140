# core/scanner.py
"""
Source tree scanning.

Two read-only passes over a source folder:
- survey_extensions(): which extensions exist per category (fills the
  extension filter choices before a run)
- iter_candidates(): lazily yields the files a run should transfer, applying
  the depth policy, hidden-file rule and category/extension filters

Neither function raises for a missing or unreadable folder; problems are
reported through the log callback instead.
"""

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, Iterator, List, Mapping, Optional, Set, Union

from foldersort_app.core.categories import Category, category_for, get_file_extension
from foldersort_app.core.transfer import SessionState
from foldersort_app.utils.log_sink import LogCallback, emit

logger = logging.getLogger(__name__)


class ScanDepth(Enum):
    """How far below the source root candidate files are collected."""

    TOP_LEVEL = "top-level"
    RECURSIVE = "recursive"


def _normalize_extension(ext: str) -> str:
    return ext.strip().lstrip(".").lower()


def _as_category(value: Union[str, Category]) -> Category:
    if isinstance(value, Category):
        return value
    return Category.from_name(value)


@dataclass(frozen=True)
class ScanFilter:
    """
    Optional restriction of which files a run picks up.

    categories: allowed categories; empty means every category.
    extensions: per-category allowed extensions. A category missing from the
        mapping, or mapped to an empty set, has no extension restriction.
    """

    categories: FrozenSet[Category] = frozenset()
    extensions: Mapping[Category, FrozenSet[str]] = field(default_factory=dict)

    @classmethod
    def from_selection(
        cls,
        categories: Optional[Iterable[Union[str, Category]]] = None,
        extensions: Optional[Mapping[Union[str, Category], Iterable[str]]] = None,
    ) -> "ScanFilter":
        """
        Build a filter from caller selections.

        Category names are matched case-insensitively; extensions are
        lower-cased and may carry a leading dot.

        Raises:
            ValueError: If a category name is unknown
        """
        cats = frozenset(_as_category(c) for c in (categories or ()))
        exts = {
            _as_category(cat): frozenset(_normalize_extension(e) for e in values)
            for cat, values in (extensions or {}).items()
        }
        return cls(categories=cats, extensions=exts)

    def allows_category(self, category: Category) -> bool:
        return not self.categories or category in self.categories

    def allows_extension(self, category: Category, extension: str) -> bool:
        allowed = self.extensions.get(category)
        if not allowed:
            return True
        return extension in allowed


@dataclass(frozen=True)
class ScanEntry:
    """A candidate file found by iter_candidates()."""

    path: Path
    name: str
    category: Category
    extension: str


def _list_dir(directory: Path, log_callback: Optional[LogCallback]) -> List[os.DirEntry]:
    """Read a directory's children once; unreadable directories count as empty."""
    try:
        with os.scandir(directory) as it:
            return list(it)
    except OSError as e:
        emit(logger, log_callback, f"Could not read folder: {directory} ({e})", "warning")
        return []


def _is_file(entry: os.DirEntry) -> bool:
    try:
        return entry.is_file()
    except OSError:
        return False


def _is_real_dir(entry: os.DirEntry) -> bool:
    # Symlinked folders are never followed
    try:
        return entry.is_dir(follow_symlinks=False)
    except OSError:
        return False


def survey_extensions(
    source_dir: Union[str, Path], depth: ScanDepth
) -> Dict[Category, Set[str]]:
    """
    Report the distinct extensions present under source_dir, per category.

    Args:
        source_dir: Folder to inspect
        depth: TOP_LEVEL looks at direct children only, RECURSIVE at the whole tree

    Returns:
        Mapping of every Category to the set of lower-cased extensions seen
        (files without an extension contribute "" to Others)
    """
    result: Dict[Category, Set[str]] = {category: set() for category in Category}

    root = Path(source_dir)
    if not root.is_dir():
        return result

    pending = [root]
    while pending:
        directory = pending.pop()
        for entry in _list_dir(directory, None):
            if _is_file(entry):
                ext = get_file_extension(entry.name)
                result[category_for(ext)].add(ext)
            elif depth is ScanDepth.RECURSIVE and _is_real_dir(entry):
                pending.append(Path(entry.path))

    return result


def iter_candidates(
    source_dir: Union[str, Path],
    depth: ScanDepth,
    scan_filter: Optional[ScanFilter] = None,
    log_callback: Optional[LogCallback] = None,
    state: Optional[SessionState] = None,
) -> Iterator[ScanEntry]:
    """
    Lazily yield the files to transfer from source_dir.

    Children are visited in the order the filesystem lists them; in
    RECURSIVE mode a subfolder is walked when it is reached. Hidden files
    (leading ".") are skipped.

    Args:
        source_dir: Root folder to scan
        depth: TOP_LEVEL or RECURSIVE
        scan_filter: Optional category/extension restriction
        log_callback: Receives user-facing log lines (skips, warnings)
        state: Batch session; no subfolder is entered once it is cancelled

    Yields:
        ScanEntry for each accepted file
    """
    root = Path(source_dir)
    if not root.is_dir():
        emit(
            logger,
            log_callback,
            f"Source folder does not exist or is not a directory: {root.absolute()}",
            "warning",
        )
        return

    yield from _walk(root, depth, scan_filter or ScanFilter(), log_callback, state, True)


def _walk(
    directory: Path,
    depth: ScanDepth,
    scan_filter: ScanFilter,
    log_callback: Optional[LogCallback],
    state: Optional[SessionState],
    is_root: bool,
) -> Iterator[ScanEntry]:
    children = _list_dir(directory, log_callback)
    if not children:
        emit(logger, log_callback, f"No files found in subfolder: {directory}")
        return

    if is_root and not any(_is_file(child) for child in children):
        emit(logger, log_callback, f"No top-level files found in: {directory}")

    for child in children:
        if state is not None and state.cancelled:
            return

        if _is_real_dir(child):
            if depth is ScanDepth.RECURSIVE:
                yield from _walk(
                    Path(child.path), depth, scan_filter, log_callback, state, False
                )
            continue

        if not _is_file(child):
            continue

        name = child.name
        if name.startswith("."):
            emit(logger, log_callback, f"Skipped hidden file: {name}")
            continue

        ext = get_file_extension(name)
        category = category_for(ext)

        if not scan_filter.allows_category(category):
            emit(logger, log_callback, f"Skipped (not in selected categories): {name}")
            continue

        if not scan_filter.allows_extension(category, ext):
            emit(logger, log_callback, f"Skipped (extension not selected): {name}")
            continue

        yield ScanEntry(
            path=Path(child.path).absolute(),
            name=name,
            category=category,
            extension=ext,
        )


__all__ = [
    "ScanDepth",
    "ScanFilter",
    "ScanEntry",
    "survey_extensions",
    "iter_candidates",
]
