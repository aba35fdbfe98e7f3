"""Column-count policies for the waterfall grid."""

from __future__ import annotations

from app.waterfall.errors import InvalidConfiguration

PORTRAIT_COLUMNS = 2
LANDSCAPE_COLUMNS = 3


def choose_columns(
    *,
    container_width_px: int,
    min_column_width_px: int,
    gutter_px: int,
    max_columns: int = 12,
) -> int:
    """Largest column count whose columns stay at least min_column_width_px wide.

    Gutters sit between columns only. Result is clamped to [1, max_columns].
    """

    if container_width_px <= 0:
        raise InvalidConfiguration("container_width_px must be > 0")
    if min_column_width_px <= 0:
        raise InvalidConfiguration("min_column_width_px must be > 0")
    if gutter_px < 0:
        raise InvalidConfiguration("gutter_px must be >= 0")
    if max_columns <= 0:
        raise InvalidConfiguration("max_columns must be > 0")

    # N*min + (N-1)*gutter <= width  =>  N <= (width+gutter)/(min+gutter)
    n = (container_width_px + gutter_px) // (min_column_width_px + gutter_px)
    return int(max(1, min(max_columns, n)))


def columns_for_orientation(*, portrait: bool) -> int:
    return PORTRAIT_COLUMNS if portrait else LANDSCAPE_COLUMNS
