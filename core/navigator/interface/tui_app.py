#!/usr/bin/env python3
"""TUI application - NavigatorTUI class: three drill-down columns and a preview pane."""

import asyncio
import logging
import os
import time
from typing import Awaitable, Dict, List, Optional, Set, Tuple

from prompt_toolkit.application import Application
from prompt_toolkit.filters import Condition
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout import HSplit, Layout, VSplit, Window
from prompt_toolkit.layout.containers import ConditionalContainer
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.layout.dimension import Dimension
from prompt_toolkit.mouse_events import MouseButton, MouseEvent, MouseEventType

from application.ports import ChildFetcher, Entity, ItemActions
from core import Board, Item, Level
from core.navigator.application.address import SubItemAddressPolicy
from core.navigator.application.child_cache import ChildCache, EntryState
from core.navigator.application.column_items import ColumnItem, collection_items, item_items, sub_item_items
from core.navigator.application.hover_state import HoverState
from core.navigator.application.navigation_state import NavigationStateController, find_sub_item
from core.navigator.application.preview_composer import PreviewComposer
from core.navigator.interface.constants import ERROR_TTL, STATUS_TTL
from core.navigator.interface.i18n import effective_lang, translator
from core.navigator.interface.tui_column import (
    DEFAULT_PROFILE,
    PROFILES,
    ColumnRenderer,
    ColumnView,
    capabilities_for,
)
from core.navigator.interface.tui_history import AddressBar
from core.navigator.interface.tui_controls import PaneControl
from core.navigator.interface.tui_preview import build_preview_text
from core.navigator.interface.tui_status import build_footer_text, build_status_text
from core.navigator.interface.tui_themes import DEFAULT_THEME, build_style
from infrastructure.board_actions import BoardActions, UnsupportedActionError
from infrastructure.board_api import BoardApiClient, BoardApiError, sub_item_fetcher

logger = logging.getLogger("miller.tui")

COLUMN_LEVELS: Tuple[Level, ...] = (Level.COLLECTION, Level.ITEM, Level.SUB_ITEM)
PREVIEW_MIN_WIDTH = 36
COLUMN_MIN_WIDTH = 18
COLUMN_MAX_WIDTH = 40
CHROME_ROWS = 2


class NavigatorTUI:
    def __init__(
        self,
        client: BoardApiClient,
        slug: str,
        *,
        location: str = "",
        theme: str = DEFAULT_THEME,
        profile: str = DEFAULT_PROFILE,
        policy: SubItemAddressPolicy = SubItemAddressPolicy.EPHEMERAL,
        language: Optional[str] = None,
        fetcher: Optional[ChildFetcher] = None,
        actions: Optional[ItemActions] = None,
    ) -> None:
        self.client = client
        self.slug = slug
        self.board: Optional[Board] = None
        self.board_loading = False
        self.board_error = ""
        self.theme_name = theme
        self.profile = profile if profile in PROFILES else DEFAULT_PROFILE
        self.language = effective_lang(language)
        self._t = translator(self.language)
        self.status_message: str = ""
        self.status_message_expires: float = 0.0
        self.status_is_error = False
        self.focus_level = Level.COLLECTION
        self.pending_delete: Optional[Tuple[Level, int]] = None
        self._initial_location = location.split("?", 1)[1] if "?" in location else location
        self._restored = False
        self._tasks: Set[asyncio.Task] = set()

        self.history = AddressBar(self._initial_location)
        self.hover = HoverState()
        self.cache = ChildCache(fetcher or sub_item_fetcher(client), on_error=self._on_fetch_error)
        self.navigation = NavigationStateController(self._tree, self.cache, self.hover, self.history, policy=policy)
        self.previewer = PreviewComposer(self._tree, self.navigation, self.hover, self.cache)
        self.actions: ItemActions = actions or BoardActions(client, self.cache, self.reload_board)
        self.cache.subscribe(self._on_cache_changed)
        self.hover.subscribe(lambda _path: self.force_render())
        self.navigation.subscribe(lambda _path: self._on_path_changed())

        self.columns: Dict[Level, ColumnRenderer] = {level: self._build_column(level) for level in COLUMN_LEVELS}
        self.style = build_style(theme)
        self.key_bindings = self._build_key_bindings()
        self.layout = self._build_layout()
        self.app: Optional[Application] = None

    # ----- helpers -------------------------------------------------------

    def _tree(self) -> Optional[Board]:
        return self.board

    @property
    def read_only(self) -> bool:
        return all(self.columns[level].capabilities.read_only for level in COLUMN_LEVELS)

    @staticmethod
    def get_terminal_width() -> int:
        try:
            return os.get_terminal_size().columns
        except (AttributeError, ValueError, OSError):
            return 120

    @staticmethod
    def get_terminal_height() -> int:
        try:
            return os.get_terminal_size().lines
        except (AttributeError, ValueError, OSError):
            return 40

    def force_render(self) -> None:
        app = getattr(self, "app", None)
        if app:
            app.invalidate()

    def set_status_message(self, message: str, ttl: float = STATUS_TTL) -> None:
        self.status_message = message
        self.status_message_expires = time.time() + ttl
        self.status_is_error = False

    def notify(self, message: str, *, error: bool = False) -> None:
        self.set_status_message(message, ttl=ERROR_TTL if error else STATUS_TTL)
        self.status_is_error = error
        self.force_render()

    def _spawn(self, coro: Awaitable[None]) -> asyncio.Task:
        if self.app is not None:
            return self.app.create_background_task(coro)
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    # ----- board ---------------------------------------------------------

    async def reload_board(self) -> None:
        self.board_loading = True
        self.force_render()
        loop = asyncio.get_running_loop()
        try:
            board = await loop.run_in_executor(None, self.client.get_board, self.slug)
        except BoardApiError as exc:
            logger.warning("board %s could not be loaded: %s", self.slug, exc)
            self.board_error = str(exc)
            self.notify(self._t("STATUS_BOARD_ERROR", error=exc), error=True)
            return
        finally:
            self.board_loading = False
            self.force_render()
        self.board = board
        self.board_error = ""
        if not self._restored:
            self._restored = True
            self.navigation.restore_from_external_state(self._initial_location)
        else:
            self.navigation.sync_with_tree()
            self.navigation.ensure_children()
        self.force_render()

    def _on_cache_changed(self, parent_id: int) -> None:
        self.navigation.sync_with_tree()
        entry = self.cache.entry(parent_id)
        # invalidated open item: reload now
        if parent_id == self.navigation.path.item_id and entry.state is EntryState.ABSENT and entry.error is None:
            self.navigation.ensure_children()
        self.force_render()

    def _on_fetch_error(self, parent_id: int, exc: BaseException) -> None:
        self.notify(self._t("STATUS_FETCH_ERROR", error=exc), error=True)

    def _on_path_changed(self) -> None:
        self.pending_delete = None
        visible = self.visible_levels()
        if self.focus_level not in visible:
            self.focus_level = visible[-1]
        self.force_render()

    # ----- columns -------------------------------------------------------

    def visible_levels(self) -> List[Level]:
        resolved = self.navigation.resolve()
        levels = [Level.COLLECTION]
        if resolved.collection is not None:
            levels.append(Level.ITEM)
        if resolved.item is not None:
            levels.append(Level.SUB_ITEM)
        return levels

    def column_view(self, level: Level) -> ColumnView:
        t = self._t
        path = self.navigation.path
        hovered = self.hover.path.id_at(level)
        focused = level == self.focus_level
        if level == Level.COLLECTION:
            board = self.board
            return ColumnView(
                level,
                t("COLUMN_COLLECTIONS"),
                tuple(collection_items(board.collections)) if board else (),
                selected_id=path.collection_id,
                hovered_id=hovered,
                is_loading=self.board_loading and board is None,
                empty_message=t("EMPTY_COLLECTIONS"),
                error_message=self.board_error if board is None else "",
                focused=focused,
            )
        resolved = self.navigation.resolve()
        if level == Level.ITEM:
            return ColumnView(
                level,
                t("COLUMN_ITEMS"),
                tuple(item_items(resolved.collection, self.cache.known_for)),
                selected_id=path.item_id,
                hovered_id=hovered,
                empty_message=t("EMPTY_ITEMS"),
                focused=focused,
            )
        item = resolved.item
        if item is None:
            return ColumnView(level, t("COLUMN_SUB_ITEMS"), empty_message=t("EMPTY_SUB_ITEMS"), focused=focused)
        entry = self.cache.entry(item.id)
        loading = entry.state is EntryState.PENDING
        children = None if loading else self.cache.known_for(item)
        return ColumnView(
            level,
            t("COLUMN_SUB_ITEMS"),
            tuple(sub_item_items(children)),
            selected_id=path.sub_item_id,
            hovered_id=hovered,
            is_loading=loading,
            empty_message=t("EMPTY_SUB_ITEMS"),
            error_message=(entry.error or "") if children is None else "",
            focused=focused,
        )

    def _build_column(self, level: Level) -> ColumnRenderer:
        return ColumnRenderer(
            level,
            lambda: self.column_view(level),
            on_select=lambda entry: self.select(level, entry.id),
            on_hover=lambda entry: self.hover_entry(level, entry),
            capabilities=capabilities_for(self.profile, level),
            on_toggle_complete=lambda entry: self._toggle_complete(level, entry),
            on_request_edit=lambda entry: self._request_edit(level, entry),
            on_request_delete=lambda entry: self._request_delete(level, entry),
            translate_fn=self._t,
        )

    def select(self, level: Level, entry_id: int) -> None:
        self.focus_level = level
        if level == Level.COLLECTION:
            self.navigation.select_collection(entry_id)
        elif level == Level.ITEM:
            self.navigation.select_item(entry_id)
        elif level == Level.SUB_ITEM:
            self.navigation.select_sub_item(entry_id)

    def hover_entry(self, level: Level, entry: Optional[ColumnItem]) -> None:
        self.hover.pointer_entered(level)
        self.hover.hover(level, entry.id if entry else None)

    def collapse_to(self, level: Level) -> None:
        self.navigation.collapse_to(level)
        self.focus_level = max(Level.COLLECTION, level)

    def open_cursor(self) -> None:
        """Select the focused column's cursor row (unless already open) and step into the next column."""
        level = self.focus_level
        entry = self.columns[level].cursor_item()
        if entry is None:
            return
        if entry.id != self.navigation.path.id_at(level):
            self.select(level, entry.id)
        if level < Level.SUB_ITEM:
            deeper = Level(level + 1)
            if deeper in self.visible_levels():
                self.focus_level = deeper
                self.hover.pointer_entered(deeper)

    def move_focus(self, delta: int) -> None:
        visible = self.visible_levels()
        index = visible.index(self.focus_level) if self.focus_level in visible else 0
        self.focus_level = visible[max(0, min(len(visible) - 1, index + delta))]
        self.hover.pointer_entered(self.focus_level)
        self.force_render()

    # ----- actions -------------------------------------------------------

    def _entity_for(self, level: Level, entry_id: int) -> Tuple[Optional[Entity], Optional[Item]]:
        board = self.board
        if board is None:
            return None, None
        if level == Level.COLLECTION:
            return board.find_collection(entry_id), None
        resolved = self.navigation.resolve()
        if level == Level.ITEM:
            return (resolved.collection.find_item(entry_id) if resolved.collection else None), None
        if resolved.item is None:
            return None, None
        return find_sub_item(self.cache.known_for(resolved.item), entry_id), resolved.item

    async def _run_action(self, action: Awaitable[None], success_message: str) -> None:
        try:
            await action
        except UnsupportedActionError as exc:
            self.notify(self._t("STATUS_ACTION_UNSUPPORTED", error=exc), error=True)
        except BoardApiError as exc:
            logger.warning("item action failed: %s", exc)
            self.notify(self._t("STATUS_ACTION_ERROR", error=exc), error=True)
        else:
            self.notify(success_message)

    def _toggle_complete(self, level: Level, entry: ColumnItem) -> None:
        entity, parent = self._entity_for(level, entry.id)
        if entity is None:
            return
        self._spawn(self._run_action(self.actions.toggle_complete(entity, parent), self._t("STATUS_TOGGLED", title=entry.title)))

    def _request_delete(self, level: Level, entry: ColumnItem) -> None:
        key = (level, entry.id)
        if self.pending_delete != key:
            self.pending_delete = key
            self.notify(self._t("STATUS_CONFIRM_DELETE", title=entry.title))
            return
        self.pending_delete = None
        entity, parent = self._entity_for(level, entry.id)
        if entity is None:
            return
        self._spawn(self._run_action(self.actions.request_delete(entity, parent), self._t("STATUS_DELETED", title=entry.title)))

    def _request_edit(self, level: Level, entry: ColumnItem) -> None:
        entity, _ = self._entity_for(level, entry.id)
        if entity is None:
            return
        try:
            self.actions.request_edit(entity)
        except UnsupportedActionError as exc:
            self.notify(self._t("STATUS_ACTION_UNSUPPORTED", error=exc), error=True)
            return
        self.notify(self._t("STATUS_EDIT_OPENED", link=getattr(entity, "link", "")))

    def _column_intent(self, name: str) -> None:
        column = self.columns[self.focus_level]
        if column.capabilities.read_only:
            self.notify(self._t("STATUS_ACTION_DISABLED"))
            return
        getattr(column, name)()

    # ----- history -------------------------------------------------------

    def go_back(self) -> None:
        query = self.history.back()
        if query is None:
            self.notify(self._t("STATUS_HISTORY_START"))
            return
        self.navigation.restore_from_external_state(query)

    def go_forward(self) -> None:
        query = self.history.forward()
        if query is None:
            self.notify(self._t("STATUS_HISTORY_END"))
            return
        self.navigation.restore_from_external_state(query)

    # ----- rendering -----------------------------------------------------

    def column_width(self) -> int:
        visible = max(1, len(self.visible_levels()))
        available = max(COLUMN_MIN_WIDTH * visible, self.get_terminal_width() - PREVIEW_MIN_WIDTH)
        return max(COLUMN_MIN_WIDTH, min(COLUMN_MAX_WIDTH, available // visible - 1))

    def preview_width(self) -> int:
        used = (self.column_width() + 1) * len(self.visible_levels())
        return max(PREVIEW_MIN_WIDTH - 2, self.get_terminal_width() - used - 1)

    def get_column_text(self, level: Level) -> FormattedText:
        return self.columns[level].render(self.column_width(), self.get_terminal_height() - CHROME_ROWS)

    def get_preview_text(self) -> FormattedText:
        return build_preview_text(self.previewer.compose(), self._t, width=self.preview_width())

    def get_status_text(self) -> FormattedText:
        return build_status_text(self)

    def get_footer_text(self) -> FormattedText:
        return build_footer_text(self)

    def _handle_column_mouse(self, level: Level, mouse_event: MouseEvent):
        if mouse_event.event_type == MouseEventType.MOUSE_UP and mouse_event.button == MouseButton.LEFT:
            self.focus_level = level
        return self.columns[level].handle_mouse(mouse_event)

    def _handle_preview_mouse(self, mouse_event: MouseEvent):
        if mouse_event.event_type == MouseEventType.MOUSE_MOVE:
            self.hover.reset()
            return None
        return NotImplemented

    def _build_layout(self) -> Layout:
        self.status_bar = Window(content=PaneControl(self.get_status_text), height=1, always_hide_cursor=True)
        self.footer = Window(content=FormattedTextControl(self.get_footer_text), height=1, always_hide_cursor=True)
        panes = []
        for level in COLUMN_LEVELS:
            control = PaneControl(
                lambda level=level: self.get_column_text(level),
                mouse_handler=lambda event, level=level: self._handle_column_mouse(level, event),
            )
            column = VSplit(
                [
                    Window(content=control, always_hide_cursor=True, wrap_lines=False, width=lambda: self.column_width()),
                    Window(width=1, char="│", style="class:border"),
                ]
            )
            panes.append(ConditionalContainer(column, filter=Condition(lambda level=level: level in self.visible_levels())))
        self.preview_control = PaneControl(self.get_preview_text, mouse_handler=self._handle_preview_mouse)
        panes.append(Window(content=self.preview_control, always_hide_cursor=True, wrap_lines=False, width=Dimension(weight=1)))
        return Layout(HSplit([self.status_bar, VSplit(panes), self.footer]))

    def _build_key_bindings(self) -> KeyBindings:
        kb = KeyBindings()

        @kb.add("q")
        @kb.add("c-c")
        def _(event):
            event.app.exit()

        @kb.add("up")
        @kb.add("k")
        def _(event):
            self.columns[self.focus_level].move_cursor(-1)

        @kb.add("down")
        @kb.add("j")
        def _(event):
            self.columns[self.focus_level].move_cursor(1)

        @kb.add("left")
        @kb.add("h")
        def _(event):
            self.move_focus(-1)

        @kb.add("right")
        @kb.add("l")
        def _(event):
            self.open_cursor()

        @kb.add("enter")
        def _(event):
            self.columns[self.focus_level].select_cursor()

        @kb.add("backspace")
        def _(event):
            depth = self.navigation.path.depth
            if depth > Level.ROOT:
                self.collapse_to(Level(depth - 1))

        @kb.add("escape", eager=True)
        def _(event):
            self.hover.reset()

        @kb.add("space")
        def _(event):
            self._column_intent("toggle_complete")

        @kb.add("e")
        def _(event):
            self._column_intent("request_edit")

        @kb.add("d")
        def _(event):
            self._column_intent("request_delete")

        @kb.add("[")
        def _(event):
            self.go_back()

        @kb.add("]")
        def _(event):
            self.go_forward()

        @kb.add("r")
        def _(event):
            self.notify(self._t("STATUS_RELOADING"))
            self._spawn(self.reload_board())

        return kb

    # ----- lifecycle -----------------------------------------------------

    def _build_application(self) -> Application:
        return Application(
            layout=self.layout,
            key_bindings=self.key_bindings,
            style=self.style,
            full_screen=True,
            mouse_support=True,
            refresh_interval=1.0,
        )

    def _on_start(self) -> None:
        self._spawn(self.reload_board())

    def run(self) -> None:
        self.app = self._build_application()
        self.app.run(pre_run=self._on_start)


__all__ = ["NavigatorTUI", "COLUMN_LEVELS"]
