"""Archive processing pipeline: intake, folder tree and creative sets."""

from __future__ import annotations

import logging

from sharemyad.config import IntakeLimits, load_limits
from sharemyad.models.creative import DEFAULT_SET_NAME, CreativeSet, ProcessingResult
from sharemyad.models.intake import ArchiveEntry, ArchiveIntakeError
from sharemyad.services.archive_intake import ArchiveSource, intake
from sharemyad.services.creative_sets import detect_creative_sets, resolve_set_name
from sharemyad.services.folder_structure import build_folder_hierarchy

logger = logging.getLogger(__name__)


def assign_entries_to_sets(
    entries: list[ArchiveEntry],
) -> tuple[list[CreativeSet], dict[str, str]]:
    """Attribute every entry to exactly one creative set.

    Entries are resolved through the folder intake reported for them, so
    flattening a deep folder in the hierarchy never changes its set. Files
    at the archive root belong to the default set. Counts and HTML5 flags
    are computed once the full entry list is known.

    Returns:
        Tuple of (sets with counts, entry path to set name).
    """
    resolution = detect_creative_sets(entry.folder for entry in entries if entry.folder)
    sets = {creative_set.name: creative_set for creative_set in resolution.sets}

    entry_sets: dict[str, str] = {}
    counts: dict[str, int] = {}
    html5_sets: set[str] = set()
    for entry in entries:
        name = resolution.assignments[entry.folder] if entry.folder else DEFAULT_SET_NAME
        entry_sets[entry.full_path] = name
        counts[name] = counts.get(name, 0) + 1
        if entry.is_html5_marker:
            html5_sets.add(name)

    if DEFAULT_SET_NAME in counts and DEFAULT_SET_NAME not in sets:
        sets[DEFAULT_SET_NAME] = CreativeSet(name=DEFAULT_SET_NAME, is_default=True)

    ordered = [s for s in sets.values() if not s.is_default]
    ordered.extend(s for s in sets.values() if s.is_default)
    for creative_set in ordered:
        creative_set.asset_count = counts.get(creative_set.name, 0)
        creative_set.is_html5_bundle = creative_set.name in html5_sets
    return ordered, entry_sets


def process_archive(
    archive: ArchiveSource, limits: IntakeLimits | None = None
) -> ProcessingResult:
    """Run one archive through intake, hierarchy building and set detection.

    Args:
        archive: Zip bytes, a binary file object or a path to a zip file.
        limits: Intake ceilings; environment defaults when omitted.

    Returns:
        ProcessingResult ready to hand to persistence.

    Raises:
        ArchiveIntakeError: If intake rejects the archive. Nothing partial is
            returned in that case.
    """
    limits = limits or load_limits()
    try:
        intake_result = intake(archive, limits)
    except ArchiveIntakeError as exc:
        logger.warning("Archive rejected (%s): %s", exc.code, exc.message)
        raise

    hierarchy = build_folder_hierarchy(intake_result.entries, limits.max_folder_depth)
    sets, entry_sets = assign_entries_to_sets(intake_result.entries)

    set_names = {creative_set.name for creative_set in sets}
    for node in hierarchy.nodes:
        # Flattened nodes keep the set of the deeper folders merged into them.
        source = node.original_paths[0] if node.is_flattened else node.full_path
        name = resolve_set_name(source).name
        node.set_name = name if name in set_names else None

    result = ProcessingResult(
        entries=intake_result.entries,
        sets=sets,
        folders=hierarchy.nodes,
        warnings=[*intake_result.warnings, *hierarchy.warnings],
        entry_sets=entry_sets,
        total_size_bytes=intake_result.total_size_bytes,
    )
    logger.info(
        "Processed archive: %d files, %d creative sets, %d folders, %d warnings",
        result.file_count,
        len(result.sets),
        len(result.folders),
        len(result.warnings),
    )
    return result
