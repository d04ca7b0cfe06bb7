"""Creative-set detection from folder naming conventions.

Folder paths are classified by scanning their segments from the deepest one
towards the root; the first segment that matches a rule of
:data:`~sharemyad.constants.set_patterns.SET_PATTERNS` names the set. Paths
that match nothing fall into the implicit default set, so every path is
claimed by exactly one set.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from sharemyad.constants.set_patterns import SET_PATTERNS
from sharemyad.models.creative import DEFAULT_SET_NAME, CreativeSet, ResolutionResult, SetMatch


def _split(path: str) -> list[str]:
    return [segment for segment in path.replace("\\", "/").split("/") if segment]


def match_segment(segment: str) -> tuple[str, str] | None:
    """Match a single folder name against the rule table.

    Returns:
        Tuple of (canonical set name, rule name), or None when no rule matches.
    """
    candidate = segment.strip()
    for pattern in SET_PATTERNS:
        name = pattern.match(candidate)
        if name is not None:
            return name, pattern.name
    return None


def resolve_set_name(path: str) -> SetMatch:
    """Resolve the creative set a folder path belongs to.

    Args:
        path: Slash-delimited folder path (a bare folder name also works).

    Returns:
        SetMatch naming the set and the path prefix that decided it. Paths
        without a matching segment resolve to the default set.
    """
    segments = _split(path)
    for index in range(len(segments) - 1, -1, -1):
        found = match_segment(segments[index])
        if found is not None:
            name, rule = found
            return SetMatch(name=name, source_folder="/".join(segments[: index + 1]), pattern=rule)
    return SetMatch(name=DEFAULT_SET_NAME, source_folder="/".join(segments))


def detect_creative_sets(folders: Iterable[str]) -> ResolutionResult:
    """Group folder paths into creative sets.

    Duplicate paths are resolved once. Sets appear in the order their first
    path was seen, with the default set last.

    Args:
        folders: Folder paths from the archive.

    Returns:
        ResolutionResult with every set and the path-to-set assignments.
    """
    result = ResolutionResult()
    by_name: dict[str, CreativeSet] = {}
    default_set: CreativeSet | None = None

    for folder in folders:
        if folder in result.assignments:
            continue
        match = resolve_set_name(folder)
        result.assignments[folder] = match.name

        if match.is_default:
            if default_set is None:
                default_set = CreativeSet(name=DEFAULT_SET_NAME, is_default=True)
            if match.source_folder:
                default_set.add_source_folder(match.source_folder)
            continue

        creative_set = by_name.get(match.name)
        if creative_set is None:
            creative_set = CreativeSet(name=match.name, pattern=match.pattern)
            by_name[match.name] = creative_set
        creative_set.add_source_folder(match.source_folder)

    result.sets = list(by_name.values())
    if default_set is not None:
        result.sets.append(default_set)
    return result


def group_folders_by_set(folders: Iterable[str]) -> dict[str, list[str]]:
    """Return set name to the input folders assigned to it."""
    grouped: dict[str, list[str]] = {}
    for folder, name in detect_creative_sets(folders).assignments.items():
        grouped.setdefault(name, []).append(folder)
    return grouped


def get_detection_accuracy(folders: Iterable[str]) -> float:
    """Percentage (0-100) of input folders assigned to a named set.

    Repeated folders count once per occurrence.
    """
    folders = list(folders)
    if not folders:
        return 0.0
    assignments = detect_creative_sets(folders).assignments
    matched = sum(1 for folder in folders if assignments[folder] != DEFAULT_SET_NAME)
    return matched / len(folders) * 100


def suggest_set_names(folders: Iterable[str]) -> list[tuple[str, str]]:
    """Suggest set names for folders no rule recognised.

    Returns:
        List of (folder, suggestion) pairs for unmatched folders.
    """
    suggestions: list[tuple[str, str]] = []
    for folder, name in detect_creative_sets(folders).assignments.items():
        if name != DEFAULT_SET_NAME:
            continue
        segments = _split(folder)
        folder_name = re.sub(r"[^A-Za-z0-9]+", "-", segments[-1]).strip("-") if segments else ""
        if not folder_name:
            suggestions.append((folder, "Set-A"))
        elif any(char.isdigit() for char in folder_name):
            suggestions.append((folder, f"Version-{folder_name}"))
        else:
            suggestions.append((folder, f"Set-{folder_name}"))
    return suggestions


def normalize_set_name(set_name: str) -> str:
    """Collapse separator runs to ``-`` and capitalize the first letter."""
    normalized = re.sub(r"[-_]+", "-", set_name)
    return normalized[:1].upper() + normalized[1:]


def is_sequential_pattern(set_names: Iterable[str]) -> bool:
    """Return True when set names form a gapless sequence (1, 2, 3 or A, B, C)."""
    names = list(set_names)
    if len(names) < 2:
        return False

    numbers: list[int] = []
    letters: list[str] = []
    for name in names:
        digits = re.search(r"\d+", name)
        if digits:
            numbers.append(int(digits.group()))
            continue
        suffix = re.sub(r"^(?:Set|Test|Variant)[-_]?", "", name, flags=re.IGNORECASE)
        if len(suffix) == 1 and suffix.isalpha():
            letters.append(suffix.upper())

    for values in (sorted(numbers), sorted(ord(letter) for letter in letters)):
        if len(values) >= 2:
            return all(b == a + 1 for a, b in zip(values, values[1:], strict=False))
    return False
