"""One drill-down level rendered as a clickable list.

The renderer is stateless apart from its scroll offset and the row map of the
last render: everything it shows comes from a `ColumnView`, everything the user
does goes out through callbacks. Action intents are gated by
`ColumnCapabilities`; a disabled intent is ignored.
"""

from dataclasses import dataclass
from datetime import date
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.mouse_events import MouseButton, MouseEvent, MouseEventType

from core import Level
from core.navigator.application.column_items import ICON_FILE, ICON_FOLDER, ICON_TASK, ColumnItem, find_column_item
from core.navigator.interface.i18n import translate
from core.navigator.interface.tui_format import color_style, display_width, due_label, pad

HEADER_ROWS = 2
MAX_LABEL_DOTS = 3
ICONS = {ICON_FOLDER: "▤", ICON_TASK: "▪", ICON_FILE: "·"}


@dataclass(frozen=True)
class ColumnCapabilities:
    toggle_complete: bool = False
    edit: bool = False
    delete: bool = False

    @property
    def read_only(self) -> bool:
        return not (self.toggle_complete or self.edit or self.delete)


BROWSE = ColumnCapabilities()
MANAGE_ENTRY = ColumnCapabilities(toggle_complete=True, edit=True)
MANAGE_SUB_ITEM = ColumnCapabilities(toggle_complete=True, edit=True, delete=True)

PROFILES: Dict[str, Dict[Level, ColumnCapabilities]] = {
    "browse": {Level.COLLECTION: BROWSE, Level.ITEM: BROWSE, Level.SUB_ITEM: BROWSE},
    "manage": {Level.COLLECTION: MANAGE_ENTRY, Level.ITEM: MANAGE_ENTRY, Level.SUB_ITEM: MANAGE_SUB_ITEM},
}
DEFAULT_PROFILE = "manage"


def capabilities_for(profile: str, level: Level) -> ColumnCapabilities:
    return PROFILES.get(profile, PROFILES[DEFAULT_PROFILE]).get(level, BROWSE)


@dataclass(frozen=True)
class ColumnView:
    level: Level
    title: str
    items: Tuple[ColumnItem, ...] = ()
    selected_id: Optional[int] = None
    hovered_id: Optional[int] = None
    is_loading: bool = False
    empty_message: str = ""
    error_message: str = ""
    focused: bool = False


ItemHandler = Callable[[ColumnItem], None]
HoverHandler = Callable[[Optional[ColumnItem]], None]


class ColumnRenderer:
    def __init__(
        self,
        level: Level,
        view: Callable[[], ColumnView],
        *,
        on_select: ItemHandler,
        on_hover: HoverHandler,
        capabilities: ColumnCapabilities = BROWSE,
        on_toggle_complete: Optional[ItemHandler] = None,
        on_request_edit: Optional[ItemHandler] = None,
        on_request_delete: Optional[ItemHandler] = None,
        translate_fn: Callable[..., str] = translate,
        today: Optional[Callable[[], date]] = None,
    ) -> None:
        self.level = level
        self._view = view
        self._on_select = on_select
        self._on_hover = on_hover
        self.capabilities = capabilities
        self._on_toggle_complete = on_toggle_complete
        self._on_request_edit = on_request_edit
        self._on_request_delete = on_request_delete
        self._t = translate_fn
        self._today = today or date.today
        self.offset = 0
        self._rows: List[ColumnItem] = []

    # ----- rendering -----------------------------------------------------

    def render(self, width: int = 32, height: Optional[int] = None) -> FormattedText:
        view = self._view()
        width = max(8, width)
        parts: List[Tuple[str, str]] = []
        header_style = "class:header" if view.focused else "class:text.dim"
        badge = "" if view.is_loading else f" {len(view.items)}"
        title_width = max(1, width - display_width(badge) - 1)
        parts.append((header_style, " " + pad(view.title, title_width)))
        parts.append(("class:badge", badge))
        parts.append(("", "\n"))
        parts.append(("class:border", "─" * width + "\n"))
        self._rows = []

        if view.is_loading:
            parts.append(("class:loading", " " + self._t("COLUMN_LOADING")))
            return FormattedText(parts)
        if view.error_message and not view.items:
            parts.append(("class:error", " " + pad(self._t("COLUMN_ERROR", error=view.error_message), width - 1) + "\n"))
            parts.append(("class:text.dim", " " + self._t("COLUMN_RETRY_HINT")))
            return FormattedText(parts)
        if not view.items:
            parts.append(("class:text.dim", " " + view.empty_message))
            return FormattedText(parts)

        self._rows = self._visible_rows(view, height)
        for index, item in enumerate(self._rows):
            if index:
                parts.append(("", "\n"))
            parts.extend(self._row_fragments(item, view, width))
        return FormattedText(parts)

    def _visible_rows(self, view: ColumnView, height: Optional[int]) -> List[ColumnItem]:
        items = list(view.items)
        if height is None:
            self.offset = 0
            return items
        capacity = max(1, height - HEADER_ROWS)
        cursor = self.cursor_item(view)
        if cursor is not None:
            index = items.index(cursor)
            if index < self.offset:
                self.offset = index
            elif index >= self.offset + capacity:
                self.offset = index - capacity + 1
        self.offset = max(0, min(self.offset, len(items) - capacity))
        return items[self.offset:self.offset + capacity]

    def _meta_fragments(self, item: ColumnItem) -> List[Tuple[str, str]]:
        meta = item.metadata
        parts: List[Tuple[str, str]] = []
        if meta.priority.style:
            parts.append((f"class:{meta.priority.style}", " !"))
        colors = meta.label_colors
        if colors:
            parts.append(("", " "))
            for color in colors[:MAX_LABEL_DOTS]:
                parts.append((color_style(color), "●"))
            if len(colors) > MAX_LABEL_DOTS:
                parts.append(("class:label", self._t("MORE_LABELS", count=len(colors) - MAX_LABEL_DOTS)))
        due = due_label(meta.due_date, self._t, self._today())
        if due and not item.is_completed:
            parts.append((due[0], f" {due[1]}"))
        if meta.count is not None:
            if self.level == Level.COLLECTION:
                parts.append(("class:badge", " " + self._t("ITEM_COUNT", count=meta.count)))
            else:
                parts.append(("class:badge", f" {meta.count}"))
        return parts

    def _row_fragments(self, item: ColumnItem, view: ColumnView, width: int) -> List[Tuple[str, str]]:
        selected = item.id == view.selected_id
        if selected:
            row_style = "class:selected"
        elif item.id == view.hovered_id:
            row_style = "class:hover"
        else:
            row_style = ""
        mark = [("class:icon.check", "✔ ") if item.is_completed else ("class:icon.open", "○ ")]
        icon = [(f"class:icon.{item.icon_kind}", ICONS.get(item.icon_kind, "·") + " ")]
        meta = self._meta_fragments(item)
        chevron = [("class:chevron", " ›") if item.has_children is not False else ("", "  ")]
        used = 1 + sum(display_width(text) for _, text in mark + icon + meta + chevron)
        if used + 4 > width:
            meta = []
            used = 1 + sum(display_width(text) for _, text in mark + icon + chevron)
        title_style = "class:completed" if item.is_completed else "class:text"
        fragments = (
            [("class:selected" if selected else "", "▌" if selected else " ")]
            + mark
            + icon
            + [(title_style, pad(item.title, max(1, width - used)))]
            + meta
            + chevron
        )
        if not row_style:
            return fragments
        return [(f"{row_style} {style}".strip(), text) for style, text in fragments]

    # ----- pointer & keyboard -------------------------------------------

    def row_at(self, y: int) -> Optional[ColumnItem]:
        index = y - HEADER_ROWS
        if 0 <= index < len(self._rows):
            return self._rows[index]
        return None

    def handle_mouse(self, mouse_event: MouseEvent):
        event_type = mouse_event.event_type
        if event_type == MouseEventType.MOUSE_MOVE:
            self._on_hover(self.row_at(mouse_event.position.y))
            return None
        if event_type == MouseEventType.MOUSE_UP and mouse_event.button == MouseButton.LEFT:
            item = self.row_at(mouse_event.position.y)
            if item is not None:
                self._on_select(item)
            return None
        if event_type == MouseEventType.SCROLL_DOWN:
            self.move_cursor(1)
            return None
        if event_type == MouseEventType.SCROLL_UP:
            self.move_cursor(-1)
            return None
        return NotImplemented

    def cursor_item(self, view: Optional[ColumnView] = None) -> Optional[ColumnItem]:
        """The hovered row, else the selected one."""
        view = view or self._view()
        return find_column_item(view.items, view.hovered_id) or find_column_item(view.items, view.selected_id)

    def move_cursor(self, delta: int) -> Optional[ColumnItem]:
        view = self._view()
        items: Sequence[ColumnItem] = view.items
        if not items:
            return None
        current = self.cursor_item(view)
        if current is None:
            index = 0 if delta > 0 else len(items) - 1
        else:
            index = max(0, min(len(items) - 1, list(items).index(current) + delta))
        target = items[index]
        self._on_hover(target)
        return target

    def select_cursor(self) -> Optional[ColumnItem]:
        item = self.cursor_item()
        if item is not None:
            self._on_select(item)
        return item

    def toggle_complete(self, item: Optional[ColumnItem] = None) -> bool:
        return self._intent(self.capabilities.toggle_complete, self._on_toggle_complete, item)

    def request_edit(self, item: Optional[ColumnItem] = None) -> bool:
        return self._intent(self.capabilities.edit, self._on_request_edit, item)

    def request_delete(self, item: Optional[ColumnItem] = None) -> bool:
        return self._intent(self.capabilities.delete, self._on_request_delete, item)

    def _intent(self, enabled: bool, handler: Optional[ItemHandler], item: Optional[ColumnItem]) -> bool:
        if not enabled or handler is None:
            return False
        item = item or self.cursor_item()
        if item is None:
            return False
        handler(item)
        return True


__all__ = [
    "BROWSE",
    "ColumnCapabilities",
    "ColumnRenderer",
    "ColumnView",
    "DEFAULT_PROFILE",
    "HEADER_ROWS",
    "PROFILES",
    "capabilities_for",
]
