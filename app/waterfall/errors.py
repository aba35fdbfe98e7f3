"""Errors raised by the waterfall layout engine and its helpers.

Both kinds subclass ValueError so existing `except ValueError` call sites keep
working.
"""

from __future__ import annotations

from typing import Any, Optional


class LayoutError(ValueError):
    pass


class InvalidConfiguration(LayoutError):
    """Column count (or a geometry argument) is out of range."""


class InvalidItem(LayoutError):
    """An item cannot be placed, typically because its height is not > 0.

    The engine never clamps; the caller decides whether to skip the item or
    retry with a corrected height.
    """

    def __init__(self, message: str, *, item: Any = None, index: Optional[int] = None) -> None:
        super().__init__(message)
        self.item = item
        self.index = index
