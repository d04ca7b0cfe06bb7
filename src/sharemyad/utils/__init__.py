"""Utility functions and helpers"""

from sharemyad.utils.display import (
    display_processing_result,
    print_tree,
    processing_result_to_dict,
)
from sharemyad.utils.paths import (
    normalize_archive_path,
    sanitize_filename,
    sanitize_folder_name,
)

__all__ = [
    "display_processing_result",
    "normalize_archive_path",
    "print_tree",
    "processing_result_to_dict",
    "sanitize_filename",
    "sanitize_folder_name",
]
