from .board import Board, Collection, Item, Label, Priority, SubItem, ordered_sub_items
from .paths import HoverPath, Level, SelectionPath

__all__ = [
    "Board",
    "Collection",
    "Item",
    "Label",
    "Priority",
    "SubItem",
    "ordered_sub_items",
    # Paths
    "HoverPath",
    "Level",
    "SelectionPath",
]
