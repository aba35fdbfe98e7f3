"""Derive layout items from image files on disk.

Only the header is read (Pillow opens lazily), so sizing a large folder does
not decode pixel data.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Tuple

from PIL import Image, UnidentifiedImageError

from app.waterfall.layout.engine import MasonryItem
from app.waterfall.layout.geometry import scaled_height

_logger = logging.getLogger(__name__)

IMAGE_EXTS = {".jpg", ".jpeg", ".png", ".gif", ".webp", ".bmp", ".tif", ".tiff"}

EXIF_ORIENTATION = 0x0112
# Orientations 5-8 are stored rotated by 90 degrees.
TRANSPOSED_ORIENTATIONS = {5, 6, 7, 8}


def media_key(path: str | Path) -> str:
    """Stable item key: the path with forward slashes, case preserved."""
    return Path(path).as_posix()


def image_size(path: str | Path) -> Tuple[int, int]:
    """Displayed (width, height), honouring the EXIF orientation tag."""
    with Image.open(path) as img:
        w, h = img.size
        if img.getexif().get(EXIF_ORIENTATION) in TRANSPOSED_ORIENTATIONS:
            return h, w
        return w, h


def item_from_image(path: str | Path, column_width_px: int) -> MasonryItem:
    w, h = image_size(path)
    return MasonryItem(
        key=media_key(path),
        height=scaled_height(w, h, column_width_px),
        payload=str(path),
    )


def scan_images(folder: str | Path) -> List[Path]:
    root = Path(folder)
    if not root.is_dir():
        raise NotADirectoryError(str(root))
    return sorted(
        (p for p in root.iterdir() if p.is_file() and p.suffix.lower() in IMAGE_EXTS),
        key=lambda p: (p.name.lower(), p.name),
    )


def items_from_folder(folder: str | Path, column_width_px: int) -> List[MasonryItem]:
    items: List[MasonryItem] = []
    for path in scan_images(folder):
        try:
            items.append(item_from_image(path, column_width_px))
        except (OSError, UnidentifiedImageError, ValueError, Image.DecompressionBombError) as exc:
            _logger.warning("skipping unreadable image %s: %s", path, exc)
    return items
