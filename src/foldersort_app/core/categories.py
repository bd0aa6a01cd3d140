# core/categories.py
"""
Extension to category classification.

Maps a file extension onto one of five fixed categories:
- Images
- Documents
- Audios
- Videos
- Others (catch-all, also used for files without an extension)

The extension tables are read-only and built once at import time.
"""

import os
from enum import Enum
from types import MappingProxyType


class Category(Enum):
    """Destination category folders."""

    IMAGES = "Images"
    DOCUMENTS = "Documents"
    AUDIOS = "Audios"
    VIDEOS = "Videos"
    OTHERS = "Others"

    @classmethod
    def from_name(cls, name: str) -> "Category":
        """
        Parse a category folder name, ignoring case.

        Args:
            name: Category name such as "images" or "Videos"

        Returns:
            Matching Category member

        Raises:
            ValueError: If the name is not one of the five categories
        """
        wanted = name.strip().lower()
        for category in cls:
            if category.value.lower() == wanted:
                return category
        raise ValueError(f"Unknown category: {name!r}")


IMAGE_EXTENSIONS = frozenset(("jpg", "jpeg", "png", "gif", "bmp", "ico", "tiff", "svg"))
DOCUMENT_EXTENSIONS = frozenset(
    ("pdf", "doc", "docx", "xls", "xlsx", "ppt", "pptx", "txt", "csv", "rtf")
)
AUDIO_EXTENSIONS = frozenset(("mp3", "wav", "flac", "aac", "ogg", "m4a"))
VIDEO_EXTENSIONS = frozenset(("mp4", "mkv", "mov", "avi", "wmv"))

# Others has no table: anything not listed above lands there
CATEGORY_EXTENSIONS = MappingProxyType(
    {
        Category.IMAGES: IMAGE_EXTENSIONS,
        Category.DOCUMENTS: DOCUMENT_EXTENSIONS,
        Category.AUDIOS: AUDIO_EXTENSIONS,
        Category.VIDEOS: VIDEO_EXTENSIONS,
    }
)


def get_file_extension(filepath: str) -> str:
    """
    Extract lowercase file extension from filepath.

    Args:
        filepath: Path to the file (can be full path or just filename)

    Returns:
        Lowercase extension without dot, or empty string if the name has no
        dot or ends with one
    """
    filename = os.path.basename(filepath)
    dot = filename.rfind(".")
    if dot == -1 or dot == len(filename) - 1:
        return ""
    return filename[dot + 1 :].lower()


def category_for(extension: str) -> Category:
    """
    Classify an extension into its category.

    Args:
        extension: Extension without the leading dot, any case

    Returns:
        The Category the extension belongs to (Others when unknown or empty)
    """
    ext = (extension or "").lower()
    if not ext:
        return Category.OTHERS

    for category, extensions in CATEGORY_EXTENSIONS.items():
        if ext in extensions:
            return category

    return Category.OTHERS


__all__ = [
    "Category",
    "IMAGE_EXTENSIONS",
    "DOCUMENT_EXTENSIONS",
    "AUDIO_EXTENSIONS",
    "VIDEO_EXTENSIONS",
    "CATEGORY_EXTENSIONS",
    "get_file_extension",
    "category_for",
]
