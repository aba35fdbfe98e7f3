from __future__ import annotations

import sys
import zlib

from PySide6.QtCore import QRect, Qt
from PySide6.QtGui import QAction, QColor, QPainter, QPaintEvent
from PySide6.QtWidgets import (
    QApplication,
    QComboBox,
    QLabel,
    QMainWindow,
    QScrollArea,
    QToolBar,
    QWidget,
)

from app.waterfall.feed import PhotoFeed, sample_source
from app.waterfall.layout.columns import columns_for_orientation
from app.waterfall.layout.engine import MasonryLayoutEngine
from app.waterfall.layout.geometry import MasonryPlacement, compute_geometry

GUTTER_PX = 10
LOAD_MORE_MARGIN_PX = 200


def card_hue(key: str) -> int:
    """Hue for a card, stable across runs."""
    return zlib.crc32(key.encode()) % 360


class GridCanvas(QWidget):
    """Paints the current snapshot as placeholder cards."""

    def __init__(self, feed: PhotoFeed, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.feed = feed
        self._placements: list[MasonryPlacement] = []

    def relayout(self, width: int) -> None:
        if width <= 0:
            return
        try:
            placements, total = compute_geometry(
                self.feed.snapshot(),
                container_width_px=width - 2 * GUTTER_PX,
                gutter_px=GUTTER_PX,
            )
        except ValueError:
            # Window narrower than the gutters; keep the previous frame.
            return
        self._placements = placements
        self.setFixedHeight(total + 2 * GUTTER_PX)
        self.update()

    def paintEvent(self, event: QPaintEvent) -> None:  # type: ignore[override]
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        for p in self._placements:
            rect = QRect(p.x + GUTTER_PX, p.y + GUTTER_PX, p.width, p.height)
            if not rect.intersects(event.rect()):
                continue
            painter.setBrush(QColor.fromHsv(card_hue(p.key), 60, 230))
            painter.setPen(Qt.PenStyle.NoPen)
            painter.drawRoundedRect(rect, 8, 8)
            painter.setPen(QColor(60, 60, 60))
            painter.drawText(rect, Qt.AlignmentFlag.AlignCenter, f"{p.key}\n{p.height}px")
        painter.end()


class MainWindow(QMainWindow):
    def __init__(self, columns: int | None = None, seed: int | None = None) -> None:
        super().__init__()
        self.setWindowTitle("Waterfall")
        self.resize(480, 800)

        if columns is None:
            columns = columns_for_orientation(portrait=self.height() >= self.width())
        self.feed = PhotoFeed(sample_source(seed), MasonryLayoutEngine(columns))

        self.canvas = GridCanvas(self.feed)
        self.scroll = QScrollArea()
        self.scroll.setWidgetResizable(True)
        self.scroll.setWidget(self.canvas)
        self.scroll.verticalScrollBar().valueChanged.connect(self._on_scrolled)
        self.setCentralWidget(self.scroll)

        self.status = QLabel()
        self.statusBar().addWidget(self.status)

        self._build_toolbar(columns)
        self.feed.load_more()
        self._relayout()

    def _build_toolbar(self, columns: int) -> None:
        toolbar = QToolBar("Layout")
        self.addToolBar(toolbar)

        refresh_action = QAction("&Refresh", self)
        refresh_action.setShortcut("F5")
        refresh_action.triggered.connect(self.refresh)
        toolbar.addAction(refresh_action)

        self.column_picker = QComboBox()
        for n in (2, 3):
            self.column_picker.addItem(f"{n} columns", n)
        idx = self.column_picker.findData(columns)
        if idx < 0:
            self.column_picker.addItem(f"{columns} columns", columns)
            idx = self.column_picker.count() - 1
        self.column_picker.setCurrentIndex(idx)
        self.column_picker.currentIndexChanged.connect(self._on_columns_changed)
        toolbar.addWidget(self.column_picker)

    def _relayout(self) -> None:
        self.canvas.relayout(self.scroll.viewport().width())
        engine = self.feed.engine
        self.status.setText(f"{len(engine)} photos in {engine.columns} columns")

    def _on_columns_changed(self, index: int) -> None:
        self.feed.set_columns(int(self.column_picker.itemData(index)))
        self._relayout()

    def _on_scrolled(self, value: int) -> None:
        bar = self.scroll.verticalScrollBar()
        if bar.maximum() - value <= LOAD_MORE_MARGIN_PX and self.feed.load_more():
            self._relayout()

    def refresh(self) -> None:
        self.feed.refresh()
        self.scroll.verticalScrollBar().setValue(0)
        self._relayout()

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        if hasattr(self, "canvas"):
            self._relayout()


def main() -> None:
    app = QApplication(sys.argv)
    app.setApplicationName("Waterfall")

    win = MainWindow()
    win.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
