"""Status bar (breadcrumb, address, messages) and footer for NavigatorTUI."""

import time
from typing import List

from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.mouse_events import MouseButton, MouseEventType

from core import Level
from core.navigator.application.address import format_location
from core.navigator.interface.tui_format import clip, display_width

BREADCRUMB_SEPARATOR = " › "


def _collapse_handler(tui, level: Level):
    def handler(event):
        if event.event_type == MouseEventType.MOUSE_UP and event.button == MouseButton.LEFT:
            tui.collapse_to(level)
            return None
        return NotImplemented

    return handler


def build_breadcrumb(tui) -> List[tuple]:
    """Board › list › task › subtask; every segment but the last jumps back to its level."""
    board = getattr(tui, "board", None)
    resolved = tui.navigation.resolve()
    segments = [(Level.ROOT, board.name if board else tui.slug)]
    if resolved.collection:
        segments.append((Level.COLLECTION, resolved.collection.name))
    if resolved.item:
        segments.append((Level.ITEM, resolved.item.title))
    if resolved.sub_item:
        segments.append((Level.SUB_ITEM, resolved.sub_item.title))
    parts: List[tuple] = []
    for index, (level, name) in enumerate(segments):
        if index:
            parts.append(("class:text.dimmer", BREADCRUMB_SEPARATOR))
        name = clip(name or tui._t("BREADCRUMB_BOARD"), 28)
        if index == len(segments) - 1:
            parts.append(("class:header", name))
        else:
            parts.append(("class:breadcrumb", name, _collapse_handler(tui, level)))
    return parts


def build_status_text(tui) -> FormattedText:
    parts: List[tuple] = build_breadcrumb(tui)
    if getattr(tui, "board_loading", False):
        parts.extend(
            [
                ("class:text.dim", " | "),
                ("class:loading", tui._t("STATUS_LOADING_BOARD", slug=tui.slug)),
            ]
        )
    message = getattr(tui, "status_message", "")
    if message and time.time() < getattr(tui, "status_message_expires", 0):
        style = "class:status.error" if getattr(tui, "status_is_error", False) else "class:status.message"
        parts.extend([("class:text.dim", " | "), (style, clip(message, 80))])
    elif message:
        tui.status_message = ""

    location = format_location(tui.slug, tui.navigation.address)
    term_width = tui.get_terminal_width()
    used = sum(display_width(fragment[1]) for fragment in parts)
    room = term_width - used - 3
    if room > 8:
        location = clip(location, room)
        parts.append(("class:text", " " * max(1, term_width - used - display_width(location))))
        parts.append(("class:address", location))
    return FormattedText(parts)


def build_footer_text(tui) -> FormattedText:
    history = tui.history
    back_style = "class:text.dim" if history.can_go_back else "class:text.dimmer"
    forward_style = "class:text.dim" if history.can_go_forward else "class:text.dimmer"
    hints_key = "FOOTER_HINTS_BROWSE" if getattr(tui, "read_only", False) else "FOOTER_HINTS"
    return FormattedText(
        [
            (back_style, "◀ "),
            (forward_style, "▶ "),
            ("class:border", "│ "),
            ("class:text.dim", clip(tui._t(hints_key), max(10, tui.get_terminal_width() - 8))),
        ]
    )


__all__ = ["build_breadcrumb", "build_status_text", "build_footer_text"]
