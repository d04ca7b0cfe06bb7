"""Folder hierarchy reconstruction for extracted archives."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from sharemyad.config import MAX_FOLDER_DEPTH
from sharemyad.constants.file_types import HTML5_COMPANION_EXTENSIONS
from sharemyad.models.creative import UNPARSED_FOLDER_NAME, FolderNode, HierarchyResult
from sharemyad.models.intake import ArchiveEntry, IntakeWarning, WarningCode
from sharemyad.utils.paths import has_control_chars, sanitize_folder_name

logger = logging.getLogger(__name__)


def _file_segments(item: ArchiveEntry | str) -> tuple[str, list[str]]:
    if isinstance(item, ArchiveEntry):
        return item.full_path, list(item.path)
    return item, item.split("/")


def _is_malformed(segments: list[str]) -> bool:
    """True when a path cannot be decomposed into valid folder segments."""
    if not segments or not segments[-1]:
        return True
    for segment in segments:
        if segment in {"", ".", ".."} or has_control_chars(segment):
            return True
    return any(not sanitize_folder_name(segment) for segment in segments[:-1])


def _extension(filename: str) -> str:
    _, dot, extension = filename.rpartition(".")
    return f".{extension.lower()}" if dot else ""


def rollup_asset_counts(nodes: list[FolderNode]) -> None:
    """Compute ``total_asset_count`` for every node from its descendants.

    Runs once after the tree is complete; ``asset_count`` is left untouched.
    """
    by_path = {node.full_path: node for node in nodes}
    for node in nodes:
        node.total_asset_count = node.asset_count
    for node in sorted(nodes, key=lambda n: n.depth_level, reverse=True):
        if node.parent_path is not None and node.parent_path in by_path:
            by_path[node.parent_path].total_asset_count += node.total_asset_count


def build_folder_hierarchy(
    files: Iterable[ArchiveEntry | str], max_depth: int = MAX_FOLDER_DEPTH
) -> HierarchyResult:
    """Build the folder tree for a list of files.

    Folders deeper than *max_depth* are flattened into their ancestor at
    *max_depth*; files whose path cannot be decomposed are attributed to a
    synthetic ``Unparsed`` folder. Neither aborts the batch; both produce
    warnings.

    Args:
        files: Archive entries or slash-delimited file paths.
        max_depth: Deepest folder level kept, root folders being level 0.

    Returns:
        HierarchyResult with nodes ordered by depth then path.
    """
    result = HierarchyResult()
    direct_counts: dict[str, int] = {}
    original_paths: dict[str, list[str]] = {}
    html5_folders: set[str] = set()
    companion_folders: set[str] = set()
    folder_segments: dict[str, list[str]] = {}
    flattened_files = 0

    for item in files:
        file_path, segments = _file_segments(item)

        if _is_malformed(segments):
            result.warnings.append(
                IntakeWarning(
                    code=WarningCode.UNPARSED_PATH,
                    message=f"Could not parse folder path for {file_path!r}; "
                    f"file placed in {UNPARSED_FOLDER_NAME}",
                    path=file_path,
                )
            )
            parents = [UNPARSED_FOLDER_NAME]
            filename = segments[-1] if segments else ""
        else:
            parents = segments[:-1]
            filename = segments[-1]

        if not parents:
            continue

        if len(parents) > max_depth + 1:
            flattened_files += 1
            original = "/".join(parents)
            parents = parents[: max_depth + 1]
            original_paths.setdefault("/".join(parents), []).append(original)

        folder_path = "/".join(parents)
        result.file_folders[file_path] = folder_path
        direct_counts[folder_path] = direct_counts.get(folder_path, 0) + 1
        if filename.lower() == "index.html":
            html5_folders.add(folder_path)
        elif _extension(filename) in HTML5_COMPANION_EXTENSIONS:
            companion_folders.add(folder_path)

        for index in range(1, len(parents) + 1):
            folder_segments.setdefault("/".join(parents[:index]), parents[:index])

    if flattened_files:
        result.warnings.append(
            IntakeWarning(
                code=WarningCode.DEPTH_LIMIT_EXCEEDED,
                message=f"{flattened_files} file(s) in deeply-nested folders were flattened "
                f"to depth {max_depth}",
                count=flattened_files,
            )
        )

    for full_path in sorted(folder_segments, key=lambda p: (len(folder_segments[p]), p)):
        segments = folder_segments[full_path]
        name = sanitize_folder_name(segments[-1])
        if name != segments[-1]:
            result.warnings.append(
                IntakeWarning(
                    code=WarningCode.INVALID_FOLDER_NAME,
                    message=f"Folder {segments[-1]!r} renamed to {name!r}",
                    path=full_path,
                    count=direct_counts.get(full_path, 0),
                )
            )
        flattened_from = original_paths.get(full_path, [])
        result.nodes.append(
            FolderNode(
                name=name,
                full_path=full_path,
                parent_path="/".join(segments[:-1]) if len(segments) > 1 else None,
                depth_level=len(segments) - 1,
                asset_count=direct_counts.get(full_path, 0),
                is_html5_bundle=full_path in html5_folders,
                is_flattened=bool(flattened_from),
                original_paths=sorted(set(flattened_from)),
            )
        )

    for folder in sorted(companion_folders - html5_folders):
        inside_bundle = any(
            folder.startswith(f"{bundle}/") for bundle in html5_folders
        )
        if not inside_bundle:
            result.warnings.append(
                IntakeWarning(
                    code=WarningCode.HTML5_BUNDLE_INCOMPLETE,
                    message=f"Folder {folder} has HTML5 files but no index.html entry point",
                    path=folder,
                )
            )

    rollup_asset_counts(result.nodes)
    logger.info(
        "Built folder hierarchy with %d folders (%d warnings)",
        len(result.nodes),
        len(result.warnings),
    )
    return result


def validate_folder_structure(nodes: list[FolderNode]) -> list[str]:
    """Check a node list for duplicates, depth mismatches and orphans.

    Nodes must be ordered parents-first, as ``build_folder_hierarchy``
    returns them.

    Returns:
        List of error messages; empty when the structure is consistent.
    """
    errors: list[str] = []
    seen: dict[str, FolderNode] = {}
    for node in nodes:
        if node.full_path in seen:
            errors.append(f"Duplicate folder path: {node.full_path}")
        if node.parent_path is None:
            if node.depth_level != 0:
                errors.append(f"Root folder {node.full_path} has depth {node.depth_level}")
        else:
            parent = seen.get(node.parent_path)
            if parent is None:
                errors.append(
                    f"Orphaned folder {node.full_path}: parent {node.parent_path} not found"
                )
            elif node.depth_level != parent.depth_level + 1:
                errors.append(
                    f"Incorrect depth for {node.full_path}: expected "
                    f"{parent.depth_level + 1}, got {node.depth_level}"
                )
        seen[node.full_path] = node
    return errors
