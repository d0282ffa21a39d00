"""Viewport, cursor navigation and paint frames."""

from .frame import Frame, FrameSource
from .viewport import Direction, PageDirection, Viewport, ViewportSnapshot

__all__ = [
    "Direction",
    "Frame",
    "FrameSource",
    "PageDirection",
    "Viewport",
    "ViewportSnapshot",
]
