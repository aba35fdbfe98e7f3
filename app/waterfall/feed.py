"""Paginated photo feed driving a MasonryLayoutEngine.

UI layers work in pages (load-more at the bottom of the grid, pull-to-refresh
at the top). The feed owns the page counter and forwards each batch to the
engine; it does no fetching itself, pages come from a caller-supplied source.
"""

from __future__ import annotations

import logging
import random
from typing import Callable, Iterable, List, Optional, Tuple

from app.waterfall.errors import InvalidItem
from app.waterfall.layout.engine import MasonryItem, MasonryLayoutEngine, Snapshot

_logger = logging.getLogger(__name__)

PageSource = Callable[[int, int], Iterable[MasonryItem]]

SAMPLE_ITEMS: Tuple[MasonryItem, ...] = tuple(
    MasonryItem(f"sample-{i}", float(h), payload=f"https://picsum.photos/200/{h}")
    for i, h in enumerate((300, 250, 400, 350, 280, 320, 270, 380, 290, 340))
)


def page_to_limit_offset(*, page: int, page_size: int) -> tuple[int, int]:
    """Convert a 1-based page number to (limit, offset)."""

    if page <= 0:
        raise ValueError("page must be >= 1")
    if page_size <= 0:
        raise ValueError("page_size must be > 0")
    return int(page_size), int((page - 1) * page_size)


def sample_source(
    seed: Optional[int] = None,
    *,
    min_height: int = 250,
    max_height: int = 400,
) -> PageSource:
    """Endless source of placeholder photos with random heights."""
    if min_height <= 0 or max_height < min_height:
        raise ValueError("need 0 < min_height <= max_height")
    rng = random.Random(seed)

    def fetch(page: int, page_size: int) -> List[MasonryItem]:
        _limit, offset = page_to_limit_offset(page=page, page_size=page_size)
        batch = []
        for n in range(offset, offset + page_size):
            h = rng.randint(min_height, max_height)
            batch.append(MasonryItem(f"photo-{n}", float(h), payload=f"https://picsum.photos/200/{h}"))
        return batch

    return fetch


class PhotoFeed:
    def __init__(self, source: PageSource, engine: MasonryLayoutEngine, *, page_size: int = 10) -> None:
        if page_size <= 0:
            raise ValueError("page_size must be > 0")
        self.source = source
        self.engine = engine
        self.page_size = page_size
        self.page = 1
        self.is_loading = False

    @property
    def items(self) -> Tuple[MasonryItem, ...]:
        return self.engine.items

    def snapshot(self) -> Snapshot:
        return self.engine.snapshot()

    def load_more(self) -> List[int]:
        """Fetch the next page and append it to the layout.

        Items the engine rejects are skipped with a warning. Returns the
        columns chosen for the items that were placed.
        """
        if self.is_loading:
            return []
        self.is_loading = True
        try:
            batch = list(self.source(self.page, self.page_size))
            chosen: List[int] = []
            for item in batch:
                try:
                    chosen.append(self.engine.place(item))
                except InvalidItem as exc:
                    _logger.warning("skipping item on page %d: %s", self.page, exc)
            _logger.info("page %d: placed %d/%d items", self.page, len(chosen), len(batch))
            self.page += 1
            return chosen
        finally:
            self.is_loading = False

    def refresh(self) -> List[int]:
        self.page = 1
        self.engine.reset()
        return self.load_more()

    def set_columns(self, columns: int) -> Snapshot:
        return self.engine.relayout(columns)
