from typing import Awaitable, List, Optional, Protocol, Union

from core import Collection, Item, SubItem

Entity = Union[Collection, Item, SubItem]


class ChildFetcher(Protocol):
    def __call__(self, item_id: int) -> Awaitable[List[SubItem]]:
        ...


class LocationSink(Protocol):
    def push(self, query: str) -> None:
        ...

    def replace(self, query: str) -> None:
        ...


class ItemActions(Protocol):
    async def toggle_complete(self, entity: Entity, parent: Optional[Item] = None) -> None:
        ...

    def request_edit(self, entity: Entity) -> None:
        ...

    async def request_delete(self, entity: Entity, parent: Optional[Item] = None) -> None:
        ...
