from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from typing import Optional, Sequence

from app.waterfall.feed import PhotoFeed, sample_source
from app.waterfall.layout.columns import choose_columns
from app.waterfall.layout.engine import MasonryLayoutEngine
from app.waterfall.layout.geometry import column_width, compute_geometry
from app.waterfall.media import items_from_folder


@dataclass(frozen=True)
class LayoutSettings:
    container_width_px: int = 800
    min_column_width_px: int = 180
    gutter_px: int = 10
    columns: Optional[int] = None
    page_size: int = 10
    pages: int = 1
    seed: Optional[int] = None

    def resolved_columns(self) -> int:
        if self.columns is not None:
            return self.columns
        return choose_columns(
            container_width_px=self.container_width_px,
            min_column_width_px=self.min_column_width_px,
            gutter_px=self.gutter_px,
        )


def build_engine(settings: LayoutSettings, folder: str | None = None) -> MasonryLayoutEngine:
    engine = MasonryLayoutEngine(settings.resolved_columns())
    if folder:
        col_w = column_width(settings.container_width_px, engine.columns, settings.gutter_px)
        engine.place_all(items_from_folder(folder, col_w))
    else:
        feed = PhotoFeed(sample_source(settings.seed), engine, page_size=settings.page_size)
        for _ in range(settings.pages):
            feed.load_more()
    return engine


def render_summary(engine: MasonryLayoutEngine, settings: LayoutSettings) -> str:
    _placements, total = compute_geometry(
        engine.snapshot(),
        container_width_px=settings.container_width_px,
        gutter_px=settings.gutter_px,
    )
    lines = [f"Columns: {engine.columns}  Items: {len(engine)}  Height: {total}px"]
    for col, (bucket, height) in enumerate(zip(engine.snapshot(), engine.heights)):
        heights = ", ".join(f"{item.height:g}" for item in bucket)
        lines.append(f"[{col}] {height:g}px ({len(bucket)}): {heights}")
    return "\n".join(lines)


def parse_args(argv: Sequence[str] | None = None) -> tuple[LayoutSettings, argparse.Namespace]:
    parser = argparse.ArgumentParser(description="Waterfall layout runner")
    parser.add_argument("--columns", type=int, default=None, help="Fixed column count (default: derived from width)")
    parser.add_argument("--container-width", type=int, default=800, help="Container width in px")
    parser.add_argument("--min-column-width", type=int, default=180, help="Minimum column width in px")
    parser.add_argument("--gutter", type=int, default=10, help="Gap between columns in px")
    parser.add_argument("--pages", type=int, default=1, help="Sample pages to load")
    parser.add_argument("--page-size", type=int, default=10, help="Items per page")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for sample heights")
    parser.add_argument("--folder", default=None, help="Lay out the images in this folder instead")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log each placement")
    args = parser.parse_args(argv)
    settings = LayoutSettings(
        container_width_px=args.container_width,
        min_column_width_px=args.min_column_width,
        gutter_px=args.gutter,
        columns=args.columns,
        page_size=args.page_size,
        pages=args.pages,
        seed=args.seed,
    )
    return settings, args


def main(argv: Sequence[str] | None = None) -> int:
    settings, args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        engine = build_engine(settings, args.folder)
        summary = render_summary(engine, settings)
    except (ValueError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    print(summary)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
