"""Incremental masonry (waterfall) layout engine.

This module is intentionally UI-framework agnostic.

Items with a known height are assigned to the currently shortest column
(lowest index on ties). Placements are never revisited: new pages are
appended with `place_all`, and the whole layout is discarded with `reset`
(pull-to-refresh) or rebuilt with `relayout` (column-count change).

The engine holds plain mutable state with no locking; callers must serialize
`place`/`place_all`/`reset` against one instance.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Iterable, List, Optional, Tuple

from app.waterfall.errors import InvalidConfiguration, InvalidItem

_logger = logging.getLogger(__name__)

Snapshot = Tuple[Tuple["MasonryItem", ...], ...]


@dataclass(frozen=True)
class MasonryItem:
    """Input item for layout.

    key: unique identity supplied by the caller.
    height: display height, must be > 0.
    payload: opaque caller data (e.g. an image URL); ignored by layout.
    """

    key: str
    height: float
    payload: Any = field(default=None, compare=False)


def _check_columns(columns: Any) -> int:
    if isinstance(columns, bool) or not isinstance(columns, int):
        raise InvalidConfiguration(f"columns must be an integer, got {columns!r}")
    if columns < 1:
        raise InvalidConfiguration(f"columns must be >= 1, got {columns}")
    return columns


def _check_item(item: Any, index: Optional[int] = None) -> float:
    height = getattr(item, "height", None)
    if isinstance(height, bool) or not isinstance(height, Real):
        raise InvalidItem(f"item height must be a number, got {height!r}", item=item, index=index)
    h = float(height)
    if not math.isfinite(h) or h <= 0:
        raise InvalidItem(f"item height must be > 0, got {height!r}", item=item, index=index)
    return h


class MasonryLayoutEngine:
    def __init__(self, columns: int) -> None:
        self._columns = _check_columns(columns)
        self._heights: List[float] = [0.0] * self._columns
        self._buckets: List[List[MasonryItem]] = [[] for _ in range(self._columns)]
        # Global arrival order, needed to re-place everything on a column change.
        self._arrivals: List[MasonryItem] = []

    @property
    def columns(self) -> int:
        return self._columns

    @property
    def heights(self) -> Tuple[float, ...]:
        return tuple(self._heights)

    @property
    def item_count(self) -> int:
        return len(self._arrivals)

    @property
    def items(self) -> Tuple[MasonryItem, ...]:
        """Every placed item in arrival order."""
        return tuple(self._arrivals)

    @property
    def total_height(self) -> float:
        return max(self._heights)

    def __len__(self) -> int:
        return len(self._arrivals)

    def _append(self, item: MasonryItem, height: float) -> int:
        # min() returns the first minimum, so ties resolve to the lowest index.
        col = min(range(self._columns), key=lambda c: self._heights[c])
        self._buckets[col].append(item)
        self._heights[col] += height
        self._arrivals.append(item)
        _logger.debug("placed %s (h=%s) in column %d", item.key, height, col)
        return col

    def place(self, item: MasonryItem) -> int:
        """Place one item and return its column index.

        Raises InvalidItem (state unchanged) if the height is not a finite
        number > 0.
        """
        return self._append(item, _check_item(item))

    def place_all(self, items: Iterable[MasonryItem]) -> List[int]:
        """Place items in input order and return their column indices.

        Stops at the first invalid item: earlier items stay placed, later
        ones are not placed. The raised InvalidItem carries the batch index.
        """
        chosen: List[int] = []
        for index, item in enumerate(items):
            chosen.append(self._append(item, _check_item(item, index)))
        return chosen

    def reset(self, columns: Optional[int] = None) -> None:
        """Drop every placement, optionally switching the column count.

        An invalid column count leaves the engine untouched.
        """
        new_columns = self._columns if columns is None else _check_columns(columns)
        self._columns = new_columns
        self._heights = [0.0] * new_columns
        self._buckets = [[] for _ in range(new_columns)]
        self._arrivals = []

    def relayout(self, columns: int) -> Snapshot:
        """Reset to `columns` and re-place every retained item in arrival order."""
        retained = list(self._arrivals)
        self.reset(columns)
        for item in retained:
            # Already validated when first placed.
            self._append(item, float(item.height))
        _logger.debug("relayout: %d items over %d columns", len(retained), self._columns)
        return self.snapshot()

    def snapshot(self) -> Snapshot:
        return tuple(tuple(bucket) for bucket in self._buckets)
