"""Textual host: frame controller, rich rendering and the viewer app."""

from .controller import FrameResult, ViewerController, ViewerHooks
from .render import render_streamed_text, style_for

__all__ = [
    "FrameResult",
    "ViewerController",
    "ViewerHooks",
    "render_streamed_text",
    "style_for",
]
