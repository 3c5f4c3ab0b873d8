#!/usr/bin/env python3
"""Text controls for the navigator panes."""

from typing import Callable, Optional

from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.mouse_events import MouseEvent

MouseHandler = Callable[[MouseEvent], object]


class PaneControl(FormattedTextControl):
    """Non-focusable FormattedTextControl that offers mouse events to its pane first.

    The pane handler returns NotImplemented for events it does not consume; those
    fall through to prompt_toolkit's own fragment handlers (breadcrumb links).
    """

    def __init__(self, text, *, mouse_handler: Optional[MouseHandler] = None, **kwargs):
        kwargs.setdefault("focusable", False)
        kwargs.setdefault("show_cursor", False)
        super().__init__(text, **kwargs)
        self.pane_mouse_handler = mouse_handler

    def mouse_handler(self, mouse_event: MouseEvent):
        if self.pane_mouse_handler is not None:
            result = self.pane_mouse_handler(mouse_event)
            if result is not NotImplemented:
                return result
        return super().mouse_handler(mouse_event)


__all__ = ["PaneControl"]
