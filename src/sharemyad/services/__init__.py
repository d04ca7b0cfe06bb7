"""Services"""

from sharemyad.services.archive_intake import intake
from sharemyad.services.creative_sets import (
    detect_creative_sets,
    get_detection_accuracy,
    resolve_set_name,
)
from sharemyad.services.folder_structure import build_folder_hierarchy, rollup_asset_counts

__all__ = [
    "build_folder_hierarchy",
    "detect_creative_sets",
    "get_detection_accuracy",
    "intake",
    "resolve_set_name",
    "rollup_asset_counts",
]
