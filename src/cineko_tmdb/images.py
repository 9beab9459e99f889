"""TMDB image URL helpers.

Size tokens are ordered smallest to largest; index 0 is always the smallest
rendition and the last entry is ``original``.
"""

from __future__ import annotations

from enum import StrEnum

from .endpoints import IMAGE_URL


class ImageClass(StrEnum):
    """Image classes with their own size token lists."""

    BACKDROP = "backdrop"
    LOGO = "logo"
    POSTER = "poster"
    PROFILE = "profile"
    STILL = "still"


SIZES: dict[ImageClass, tuple[str, ...]] = {
    ImageClass.BACKDROP: ("w300", "w780", "w1280", "original"),
    ImageClass.LOGO: ("w45", "w92", "w154", "w185", "w300", "w500", "original"),
    ImageClass.POSTER: ("w92", "w154", "w185", "w342", "w500", "w780", "original"),
    # w92 is not listed in the TMDB configuration endpoint but is served.
    ImageClass.PROFILE: ("w45", "w92", "w185", "h632", "original"),
    ImageClass.STILL: ("w92", "w185", "w300", "original"),
}


def size_token(image_class: ImageClass, size_index: int = 0) -> str:
    """Return the size token at ``size_index``; negative indexes count from the largest.

    Raises:
        IndexError: if the index is outside the class's size list
    """
    return SIZES[image_class][size_index]


def image_url(
    path: str,
    image_class: ImageClass,
    size_index: int = 0,
    base_url: str = IMAGE_URL,
) -> str:
    """Build a fully-qualified image URL from a TMDB ``file_path`` fragment."""
    if not path.startswith("/"):
        path = f"/{path}"
    return f"{base_url.rstrip('/')}/{size_token(image_class, size_index)}{path}"
