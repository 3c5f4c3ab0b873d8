"""Ephemeral per-column pointer tracking."""

from dataclasses import replace
from typing import Callable, List, Optional

from core import HoverPath, Level


class HoverState:
    def __init__(self) -> None:
        self._path = HoverPath()
        self._listeners: List[Callable[[HoverPath], None]] = []

    @property
    def path(self) -> HoverPath:
        return self._path

    def hover(self, level: Level, entity_id: Optional[int]) -> None:
        if level == Level.COLLECTION:
            updated = replace(self._path, collection_id=entity_id)
        elif level == Level.ITEM:
            updated = replace(self._path, item_id=entity_id)
        elif level == Level.SUB_ITEM:
            updated = replace(self._path, sub_item_id=entity_id)
        else:
            return
        self._set(updated)

    def clear_deeper_than(self, level: Level) -> None:
        """Drop hover for every level strictly deeper than `level`."""
        self._set(
            HoverPath(
                collection_id=self._path.collection_id if level >= Level.COLLECTION else None,
                item_id=self._path.item_id if level >= Level.ITEM else None,
                sub_item_id=self._path.sub_item_id if level >= Level.SUB_ITEM else None,
            )
        )

    def pointer_entered(self, level: Level) -> None:
        """The pointer can rest in one column only: other columns lose their hover."""
        self._set(
            HoverPath(
                collection_id=self._path.collection_id if level == Level.COLLECTION else None,
                item_id=self._path.item_id if level == Level.ITEM else None,
                sub_item_id=self._path.sub_item_id if level == Level.SUB_ITEM else None,
            )
        )

    def reset(self) -> None:
        self._set(HoverPath())

    def subscribe(self, listener: Callable[[HoverPath], None]) -> None:
        self._listeners.append(listener)

    def _set(self, path: HoverPath) -> None:
        if path == self._path:
            return
        self._path = path
        for listener in list(self._listeners):
            listener(path)


__all__ = ["HoverState"]
