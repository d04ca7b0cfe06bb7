"""Display and formatting utilities"""

from __future__ import annotations

from typing import Any

from sharemyad.models.creative import FolderNode, ProcessingResult


def print_tree(nodes: list[FolderNode]) -> None:
    """Print folder nodes as an indented tree.

    Args:
        nodes: Folder nodes ordered parents-first.
    """
    children: dict[str | None, list[FolderNode]] = {}
    for node in nodes:
        children.setdefault(node.parent_path, []).append(node)

    def _print(parent: str | None, indent: int) -> None:
        for node in sorted(children.get(parent, []), key=lambda n: n.name):
            marker = " [HTML5]" if node.is_html5_bundle else ""
            set_label = f" ({node.set_name})" if node.set_name else ""
            print(
                f"{'  ' * indent}📁 {node.name}/ "
                f"{node.asset_count} direct, {node.total_asset_count} total{set_label}{marker}"
            )
            _print(node.full_path, indent + 1)

    _print(None, 0)


def display_processing_result(result: ProcessingResult) -> None:
    """Display a processing result with formatted output."""
    print("\n✅ Successfully processed zip archive:")
    print(f"   • Files found: {result.file_count}")
    print(f"   • Total size: {result.total_size_bytes:,} bytes")
    print(f"   • HTML5 bundle: {'yes' if result.has_html5_bundle else 'no'}")

    print("\n🎨 Creative Sets:")
    print("-" * 60)
    for creative_set in result.sets:
        label = " (default)" if creative_set.is_default else ""
        print(f"   • {creative_set.name}{label}: {creative_set.asset_count} asset(s)")
        for folder in creative_set.source_folders:
            print(f"       ↳ {folder}")

    if result.folders:
        print("\n📂 Folder Structure:")
        print("-" * 60)
        print_tree(result.folders)

    if result.warnings:
        print("\n⚠️  Warnings:")
        for warning in result.warnings:
            print(f"   • {warning.message}")


def processing_result_to_dict(result: ProcessingResult) -> dict[str, Any]:
    """Return a JSON-serializable summary of *result* (file content excluded)."""
    return {
        "file_count": result.file_count,
        "total_size_bytes": result.total_size_bytes,
        "has_html5_bundle": result.has_html5_bundle,
        "sets": [
            {
                "name": s.name,
                "asset_count": s.asset_count,
                "source_folders": list(s.source_folders),
                "is_default": s.is_default,
                "is_html5_bundle": s.is_html5_bundle,
            }
            for s in result.sets
        ],
        "folders": [
            {
                "folder_name": node.name,
                "full_path": node.full_path,
                "parent_path": node.parent_path,
                "depth_level": node.depth_level,
                "asset_count": node.asset_count,
                "total_asset_count": node.total_asset_count,
                "is_html5_bundle": node.is_html5_bundle,
                "set_name": node.set_name,
            }
            for node in result.folders
        ],
        "entries": [
            {
                "path": entry.full_path,
                "size_bytes": entry.size_bytes,
                "mime_hint": entry.mime_hint,
                "set_name": result.entry_sets.get(entry.full_path),
            }
            for entry in result.entries
        ],
        "warnings": [
            {
                "code": w.code.value,
                "message": w.message,
                "path": w.path,
                "count": w.count,
            }
            for w in result.warnings
        ],
    }
