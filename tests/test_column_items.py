from datetime import date

from core import Priority
from core.navigator.application.column_items import (
    ICON_FILE,
    ICON_FOLDER,
    ICON_TASK,
    collection_items,
    find_column_item,
    item_items,
    sub_item_items,
)


def test_collection_projection(board):
    rows = collection_items(board.collections)
    sprint = rows[0]
    assert sprint.icon_kind == ICON_FOLDER
    assert sprint.title == "Sprint"
    assert sprint.has_children is True
    assert sprint.metadata.count == 3
    assert sprint.metadata.label_colors == ("#22c55e",)


def test_item_projection_marks_unknown_children(board):
    rows = item_items(board.find_collection(1))
    by_id = {row.id: row for row in rows}
    assert [row.title for row in rows] == ["Design", "Build", "Ship"]
    assert by_id[10].has_children is None
    assert by_id[10].metadata.count is None
    assert by_id[11].has_children is True
    assert by_id[11].metadata.count == 2
    assert by_id[11].icon_kind == ICON_TASK
    assert by_id[11].metadata.priority is Priority.HIGH
    assert by_id[11].metadata.due_date == date(2030, 1, 1)
    assert by_id[11].metadata.label_colors == ("#ef4444", "#3b82f6")


def test_item_projection_uses_known_children_callback(board):
    rows = item_items(board.find_collection(1), lambda item: [] if item.id == 10 else item.sub_items)
    assert find_column_item(rows, 10).has_children is False


def test_item_projection_without_collection():
    assert item_items(None) == []


def test_sub_item_projection_sorted_leaf_rows(board):
    rows = sub_item_items(board.find_item(1, 11).sub_items)
    assert [row.title for row in rows] == ["Compile", "Test"]
    assert all(row.has_children is False and row.icon_kind == ICON_FILE for row in rows)
    assert rows[0].is_completed
    assert sub_item_items(None) == []


def test_find_column_item(board):
    rows = collection_items(board.collections)
    assert find_column_item(rows, 2).title == "Backlog"
    assert find_column_item(rows, None) is None
    assert find_column_item(rows, 404) is None
