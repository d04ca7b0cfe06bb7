"""Data models for creative sets and the reconstructed folder tree."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from sharemyad.models.intake import ArchiveEntry, IntakeWarning

SET_NAME_RE = re.compile(r"^[A-Za-z0-9\-_]+$")
FOLDER_NAME_RE = re.compile(r"^[A-Za-z0-9\-_ ]+$")

DEFAULT_SET_NAME = "Default"
UNPARSED_FOLDER_NAME = "Unparsed"


@dataclass(slots=True, frozen=True)
class SetMatch:
    """Outcome of resolving a single folder path.

    Attributes:
        name: Canonical set name.
        source_folder: Path prefix whose last segment matched, or the whole
            path for the default set.
        pattern: Name of the matcher rule, None for the default set.
    """

    name: str
    source_folder: str
    pattern: str | None = None

    @property
    def is_default(self) -> bool:
        return self.pattern is None


@dataclass(slots=True)
class CreativeSet:
    """A named group of entries representing one ad variant.

    Attributes:
        name: Canonical set name.
        source_folders: Path prefixes that contributed to this set.
        asset_count: Number of entries attributed to the set.
        pattern: Matcher rule that produced the set.
        is_default: True for the implicit bucket of unmatched content.
        is_html5_bundle: True when one of its entries is an index.html.
    """

    name: str
    source_folders: list[str] = field(default_factory=list)
    asset_count: int = 0
    pattern: str | None = None
    is_default: bool = False
    is_html5_bundle: bool = False

    def __post_init__(self) -> None:
        if not SET_NAME_RE.match(self.name):
            raise ValueError(f"Invalid creative set name: {self.name!r}")
        if self.asset_count < 0:
            raise ValueError(f"Creative set asset count cannot be negative: {self.asset_count}")

    def add_source_folder(self, folder: str) -> None:
        if folder not in self.source_folders:
            self.source_folders.append(folder)


@dataclass(slots=True)
class FolderNode:
    """One folder in the reconstructed hierarchy.

    The parent is referenced by its ``full_path`` only; a node never owns
    its parent.
    """

    name: str
    full_path: str
    parent_path: str | None
    depth_level: int
    asset_count: int = 0
    total_asset_count: int = 0
    is_html5_bundle: bool = False
    set_name: str | None = None
    is_flattened: bool = False
    original_paths: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not FOLDER_NAME_RE.match(self.name):
            raise ValueError(f"Invalid folder name: {self.name!r}")
        if not 0 <= self.depth_level <= 10:
            raise ValueError(f"Folder depth must be between 0 and 10: {self.depth_level}")
        if (self.parent_path is None) != (self.depth_level == 0):
            raise ValueError(f"Only depth 0 folders may lack a parent: {self.full_path!r}")
        if self.asset_count < 0:
            raise ValueError(f"Folder asset count cannot be negative: {self.asset_count}")


@dataclass(slots=True)
class ResolutionResult:
    """Creative sets detected from a list of folder paths.

    Attributes:
        sets: Every set including the default bucket, so each input path is
            claimed by exactly one set.
        assignments: Input path to set name.
    """

    sets: list[CreativeSet] = field(default_factory=list)
    assignments: dict[str, str] = field(default_factory=dict)

    @property
    def named_sets(self) -> list[CreativeSet]:
        """Sets to report; the default set only when it is the only content."""
        named = [creative_set for creative_set in self.sets if not creative_set.is_default]
        return named or list(self.sets)

    def get(self, name: str) -> CreativeSet | None:
        return next((s for s in self.sets if s.name == name), None)


@dataclass(slots=True)
class HierarchyResult:
    """Folder tree built from entry paths.

    Attributes:
        nodes: Folder nodes ordered by depth, then path.
        warnings: Non-fatal notices (sanitized names, flattening, ...).
        file_folders: Archive file path to the ``full_path`` of the folder
            the file was attributed to; files at the root are absent.
    """

    nodes: list[FolderNode] = field(default_factory=list)
    warnings: list[IntakeWarning] = field(default_factory=list)
    file_folders: dict[str, str] = field(default_factory=dict)

    def get(self, full_path: str) -> FolderNode | None:
        return next((node for node in self.nodes if node.full_path == full_path), None)


@dataclass(slots=True)
class ProcessingResult:
    """Everything one archive-processing pass hands to persistence and UI."""

    entries: list[ArchiveEntry] = field(default_factory=list)
    sets: list[CreativeSet] = field(default_factory=list)
    folders: list[FolderNode] = field(default_factory=list)
    warnings: list[IntakeWarning] = field(default_factory=list)
    entry_sets: dict[str, str] = field(default_factory=dict)
    total_size_bytes: int = 0

    @property
    def named_sets(self) -> list[CreativeSet]:
        named = [creative_set for creative_set in self.sets if not creative_set.is_default]
        return named or list(self.sets)

    @property
    def has_html5_bundle(self) -> bool:
        return any(entry.is_html5_marker for entry in self.entries)

    @property
    def file_count(self) -> int:
        return len(self.entries)
