"""Per-item action intents (toggle/edit/delete) backed by the REST API.

Every sub-item mutation invalidates its parent's cached child list and asks the
page to reload the board tree; the navigator itself never mutates entities.
"""

import asyncio
import logging
import webbrowser
from typing import Awaitable, Callable, Optional

from application.ports import Entity
from core import Collection, Item, SubItem
from core.navigator.application.child_cache import ChildCache
from infrastructure.board_api import BoardApiClient, BoardApiError

logger = logging.getLogger("miller.actions")


class UnsupportedActionError(BoardApiError):
    pass


def _item_fields(item: Item, **overrides) -> dict:
    fields = {
        "title": item.title,
        "description": item.description,
        "link": item.link or None,
        "isCompleted": item.is_completed,
        "position": item.position,
        "dueDate": item.due_date.isoformat() if item.due_date else None,
        "priority": item.priority.code,
        "labelIds": [label.id for label in item.labels],
    }
    fields.update(overrides)
    return fields


def _collection_fields(collection: Collection, **overrides) -> dict:
    fields = {
        "name": collection.name,
        "description": collection.description,
        "link": collection.link or None,
        "isCompleted": collection.is_completed,
        "dueDate": collection.due_date.isoformat() if collection.due_date else None,
        "priority": collection.priority.code,
        "labelIds": [label.id for label in collection.labels],
    }
    fields.update(overrides)
    return fields


class BoardActions:
    def __init__(
        self,
        client: BoardApiClient,
        cache: ChildCache,
        refresh_tree: Callable[[], Awaitable[None]],
        open_url: Callable[[str], bool] = webbrowser.open,
    ) -> None:
        self._client = client
        self._cache = cache
        self._refresh_tree = refresh_tree
        self._open_url = open_url

    async def toggle_complete(self, entity: Entity, parent: Optional[Item] = None) -> None:
        if isinstance(entity, SubItem):
            await self._call(self._client.toggle_sub_item, entity.id)
            self._invalidate_parent(entity, parent)
        elif isinstance(entity, Item):
            await self._call(self._client.update_item, entity.id, _item_fields(entity, isCompleted=not entity.is_completed))
        elif isinstance(entity, Collection):
            await self._call(
                self._client.update_collection,
                entity.id,
                _collection_fields(entity, isCompleted=not entity.is_completed),
            )
        else:
            raise UnsupportedActionError(f"cannot toggle {type(entity).__name__}")
        logger.info("toggled %s %s", type(entity).__name__, entity.id)
        await self._refresh_tree()

    async def request_delete(self, entity: Entity, parent: Optional[Item] = None) -> None:
        if not isinstance(entity, SubItem):
            raise UnsupportedActionError(f"deleting a {type(entity).__name__} is not available here")
        await self._call(self._client.delete_sub_item, entity.id)
        self._invalidate_parent(entity, parent)
        logger.info("deleted sub-item %s", entity.id)
        await self._refresh_tree()

    def request_edit(self, entity: Entity) -> None:
        link = getattr(entity, "link", "") or ""
        if not link:
            raise UnsupportedActionError(f"{type(entity).__name__} {entity.id} has no link to edit")
        self._open_url(link)

    def _invalidate_parent(self, entity: SubItem, parent: Optional[Item]) -> None:
        if parent is None:
            logger.warning("sub-item %s changed without a known parent; cache left as is", entity.id)
            return
        self._cache.invalidate(parent.id)

    @staticmethod
    async def _call(func, *args):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, func, *args)


__all__ = ["BoardActions", "UnsupportedActionError"]
