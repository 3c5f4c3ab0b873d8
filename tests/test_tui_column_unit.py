from datetime import date
from types import SimpleNamespace

from prompt_toolkit.mouse_events import MouseButton, MouseEventType

from core import Label, Level
from core.navigator.application.column_items import collection_items, item_items, sub_item_items
from core.navigator.interface.tui_column import (
    BROWSE,
    HEADER_ROWS,
    ColumnCapabilities,
    ColumnRenderer,
    ColumnView,
    capabilities_for,
)


def _mouse(event_type, y=0, button=MouseButton.LEFT):
    return SimpleNamespace(event_type=event_type, button=button, position=SimpleNamespace(y=y), modifiers=())


def _t(key, **kwargs):
    return f"{key}{kwargs}" if kwargs else key


def _text(fragments):
    return "".join(fragment[1] for fragment in fragments)


class Recorder:
    def __init__(self):
        self.events = []

    def __getattr__(self, name):
        return lambda item: self.events.append((name, item.id if item is not None else None))


def _renderer(view, capabilities=BROWSE, recorder=None):
    recorder = recorder or Recorder()
    state = {"view": view}
    renderer = ColumnRenderer(
        view.level,
        lambda: state["view"],
        on_select=recorder.select,
        on_hover=recorder.hover,
        capabilities=capabilities,
        on_toggle_complete=recorder.toggle,
        on_request_edit=recorder.edit,
        on_request_delete=recorder.delete,
        translate_fn=_t,
        today=lambda: date(2029, 12, 31),
    )
    return renderer, recorder, state


def test_render_lists_titles_and_header_badge(board):
    view = ColumnView(Level.ITEM, "Tasks", tuple(item_items(board.find_collection(1))), selected_id=11)
    renderer, _, _ = _renderer(view)
    text = _text(renderer.render(width=60))
    assert text.splitlines()[0].startswith(" Tasks")
    assert text.splitlines()[0].rstrip().endswith("3")
    assert "Design" in text and "Build" in text and "Ship" in text


def test_render_row_metadata(board):
    view = ColumnView(Level.ITEM, "Tasks", tuple(item_items(board.find_collection(1))), selected_id=11)
    renderer, _, _ = _renderer(view)
    fragments = renderer.render(width=70)
    build_row = [fragment for fragment in fragments if "class:selected" in fragment[0]]
    styles = " ".join(fragment[0] for fragment in build_row)
    texts = _text(build_row)
    assert "class:priority.high" in styles
    assert "fg:#ef4444" in styles and "fg:#3b82f6" in styles
    assert "DUE_TOMORROW" in texts
    assert " 2" in texts
    assert texts.rstrip().endswith("›")


def test_collection_rows_show_item_count(board):
    view = ColumnView(Level.COLLECTION, "Lists", tuple(collection_items(board.collections)))
    renderer, _, _ = _renderer(view)
    assert "ITEM_COUNT{'count': 3}" in _text(renderer.render(width=80))


def test_label_dots_are_capped(board):
    sprint = board.find_collection(1)
    sprint.labels = [Label(index, f"l{index}", "#111111") for index in range(5)]
    view = ColumnView(Level.COLLECTION, "Lists", tuple(collection_items([sprint])))
    renderer, _, _ = _renderer(view)
    text = _text(renderer.render(width=80))
    assert text.count("●") == 3
    assert "MORE_LABELS{'count': 2}" in text


def test_completed_rows_are_struck_and_leaf_rows_have_no_chevron(board):
    view = ColumnView(Level.SUB_ITEM, "Subtasks", tuple(sub_item_items(board.find_item(1, 11).sub_items)))
    renderer, _, _ = _renderer(view)
    fragments = renderer.render(width=40)
    assert any(style == "class:completed" and "Compile" in text for style, text in fragments)
    assert "›" not in _text(fragments)


def test_loading_empty_and_error_states():
    loading, _, _ = _renderer(ColumnView(Level.SUB_ITEM, "Subtasks", is_loading=True))
    assert "COLUMN_LOADING" in _text(loading.render())
    empty, _, _ = _renderer(ColumnView(Level.SUB_ITEM, "Subtasks", empty_message="nothing here"))
    assert "nothing here" in _text(empty.render())
    failed, _, _ = _renderer(ColumnView(Level.SUB_ITEM, "Subtasks", error_message="timeout"))
    text = _text(failed.render(width=60))
    assert "COLUMN_ERROR" in text and "COLUMN_RETRY_HINT" in text


def test_click_selects_row_and_motion_hovers(board):
    view = ColumnView(Level.ITEM, "Tasks", tuple(item_items(board.find_collection(1))))
    renderer, recorder, _ = _renderer(view)
    renderer.render(width=40)
    renderer.handle_mouse(_mouse(MouseEventType.MOUSE_UP, y=HEADER_ROWS + 1))
    renderer.handle_mouse(_mouse(MouseEventType.MOUSE_MOVE, y=HEADER_ROWS + 2))
    renderer.handle_mouse(_mouse(MouseEventType.MOUSE_MOVE, y=0))
    renderer.handle_mouse(_mouse(MouseEventType.MOUSE_UP, y=40))
    assert recorder.events == [("select", 11), ("hover", 12), ("hover", None)]


def test_unhandled_mouse_event_is_passed_on(board):
    view = ColumnView(Level.ITEM, "Tasks", tuple(item_items(board.find_collection(1))))
    renderer, _, _ = _renderer(view)
    assert renderer.handle_mouse(_mouse(MouseEventType.MOUSE_DOWN, y=2)) is NotImplemented


def test_scroll_moves_cursor(board):
    view = ColumnView(Level.ITEM, "Tasks", tuple(item_items(board.find_collection(1))), selected_id=10)
    renderer, recorder, _ = _renderer(view)
    renderer.handle_mouse(_mouse(MouseEventType.SCROLL_DOWN))
    assert recorder.events == [("hover", 11)]


def test_keyboard_cursor_prefers_hover_then_selection(board):
    items = tuple(item_items(board.find_collection(1)))
    renderer, recorder, state = _renderer(ColumnView(Level.ITEM, "Tasks", items))
    assert renderer.cursor_item() is None
    renderer.move_cursor(1)
    state["view"] = ColumnView(Level.ITEM, "Tasks", items, selected_id=12, hovered_id=10)
    renderer.move_cursor(1)
    renderer.move_cursor(-1)
    renderer.select_cursor()
    state["view"] = ColumnView(Level.ITEM, "Tasks", items, selected_id=12)
    renderer.move_cursor(5)
    assert recorder.events == [("hover", 10), ("hover", 11), ("hover", 10), ("select", 10), ("hover", 12)]


def test_action_intents_respect_capabilities(board):
    items = tuple(item_items(board.find_collection(1)))
    view = ColumnView(Level.ITEM, "Tasks", items, hovered_id=11)
    browse, browse_events, _ = _renderer(view)
    assert browse.toggle_complete() is False
    assert browse.request_edit() is False
    assert browse.request_delete() is False
    assert browse_events.events == []

    caps = ColumnCapabilities(toggle_complete=True, edit=True)
    manage, manage_events, _ = _renderer(view, caps)
    assert manage.toggle_complete() is True
    assert manage.request_edit() is True
    assert manage.request_delete() is False
    assert manage_events.events == [("toggle", 11), ("edit", 11)]


def test_scroll_offset_keeps_cursor_visible(board):
    items = tuple(item_items(board.find_collection(1)))
    view = ColumnView(Level.ITEM, "Tasks", items, hovered_id=12)
    renderer, recorder, _ = _renderer(view)
    text = _text(renderer.render(width=40, height=HEADER_ROWS + 2))
    assert "Design" not in text and "Ship" in text
    renderer.handle_mouse(_mouse(MouseEventType.MOUSE_UP, y=HEADER_ROWS))
    assert recorder.events == [("select", 11)]


def test_profiles():
    assert capabilities_for("browse", Level.SUB_ITEM).read_only
    manage_sub = capabilities_for("manage", Level.SUB_ITEM)
    assert manage_sub.delete and manage_sub.toggle_complete and manage_sub.edit
    assert not capabilities_for("manage", Level.ITEM).delete
    assert capabilities_for("unknown", Level.ITEM) == capabilities_for("manage", Level.ITEM)
