"""Pixel geometry for a layout snapshot.

The engine only decides which column an item lands in; renderers need x/y
positions. Heights are taken as-is, so items should already be sized for the
column width (see `scaled_height`).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from app.waterfall.errors import InvalidConfiguration
from app.waterfall.layout.engine import Snapshot


@dataclass(frozen=True)
class MasonryPlacement:
    key: str
    column: int
    x: int
    y: int
    width: int
    height: int


def column_width(container_width_px: int, columns: int, gutter_px: int) -> int:
    if columns <= 0:
        raise InvalidConfiguration("columns must be > 0")
    if container_width_px <= 0:
        raise InvalidConfiguration("container_width_px must be > 0")
    if gutter_px < 0:
        raise InvalidConfiguration("gutter_px must be >= 0")

    usable = container_width_px - gutter_px * (columns - 1)
    if usable <= 0:
        raise InvalidConfiguration("container too small for given columns/gutter")
    return usable // columns


def scaled_height(width_px: float, height_px: float, column_width_px: float) -> float:
    """Height of a width_px x height_px image drawn column_width_px wide."""
    if width_px <= 0 or height_px <= 0:
        raise InvalidConfiguration("image dimensions must be > 0")
    if column_width_px <= 0:
        raise InvalidConfiguration("column_width_px must be > 0")
    return column_width_px * height_px / width_px


def compute_geometry(
    snapshot: Snapshot,
    *,
    container_width_px: int,
    gutter_px: int,
) -> Tuple[List[MasonryPlacement], int]:
    """Stack each column top-down and return (placements, total_height_px).

    Placements are ordered column by column, top to bottom.
    """

    columns = len(snapshot)
    col_w = column_width(container_width_px, columns, gutter_px)
    col_heights = [0] * columns

    placements: List[MasonryPlacement] = []
    for col, bucket in enumerate(snapshot):
        for item in bucket:
            h = max(1, int(round(item.height)))
            y = col_heights[col]
            placements.append(
                MasonryPlacement(
                    key=item.key,
                    column=col,
                    x=col * (col_w + gutter_px),
                    y=y,
                    width=col_w,
                    height=h,
                )
            )
            col_heights[col] = y + h + gutter_px

    # Every non-empty column carries one trailing gutter.
    total = max(h - gutter_px if h else 0 for h in col_heights)
    return placements, max(0, int(total))
