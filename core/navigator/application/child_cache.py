"""Lazy per-item store of fetched sub-item lists.

Entries move ABSENT -> PENDING -> FETCHED. A PENDING entry carries the
correlation token of its single in-flight request; every caller asking for the
same parent while it is pending joins that request instead of starting another.
A late result is written only when its token still matches the entry, so a
fetch that was overtaken by `invalidate` can never overwrite fresher data.
Failures drop the entry back to ABSENT so the next selection retries.
Invalidating a fetched entry keeps its list as a stale snapshot that
`known_for` serves until the next fetch for that parent settles.
"""

import asyncio
import itertools
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Set, Tuple

from application.ports import ChildFetcher
from core import Item, SubItem

logger = logging.getLogger("miller.cache")


class ChildFetchError(RuntimeError):
    def __init__(self, parent_id: int, cause: BaseException) -> None:
        super().__init__(f"sub-items of {parent_id} could not be loaded: {cause}")
        self.parent_id = parent_id
        self.cause = cause


class EntryState(Enum):
    ABSENT = "absent"
    PENDING = "pending"
    FETCHED = "fetched"


@dataclass(frozen=True)
class FetchRequest:
    parent_id: int
    request_id: int


@dataclass(frozen=True)
class CacheEntry:
    parent_id: int
    state: EntryState = EntryState.ABSENT
    sub_items: Tuple[SubItem, ...] = ()
    request: Optional[FetchRequest] = None
    error: Optional[str] = None


CacheListener = Callable[[int], None]
ErrorHandler = Callable[[int, BaseException], None]


class ChildCache:
    def __init__(self, fetcher: ChildFetcher, *, on_error: Optional[ErrorHandler] = None) -> None:
        self._fetcher = fetcher
        self._on_error = on_error
        self._entries: Dict[int, CacheEntry] = {}
        self._inflight: Dict[int, Tuple[FetchRequest, "asyncio.Task[List[SubItem]]"]] = {}
        self._tasks: Set["asyncio.Task[List[SubItem]]"] = set()
        self._invalidated: Set[int] = set()
        self._stale: Dict[int, Tuple[SubItem, ...]] = {}
        self._request_ids = itertools.count(1)
        self._listeners: List[CacheListener] = []
        self.fetch_count = 0

    # ----- reads -------------------------------------------------------

    def entry(self, parent_id: int) -> CacheEntry:
        return self._entries.get(parent_id) or CacheEntry(parent_id)

    def peek(self, parent_id: int) -> Optional[List[SubItem]]:
        """Cached list or None. Never starts a fetch."""
        entry = self._entries.get(parent_id)
        if entry is None or entry.state is not EntryState.FETCHED:
            return None
        return list(entry.sub_items)

    def known_for(self, item: Item) -> Optional[List[SubItem]]:
        """Cached list, else the stale snapshot, else the list embedded in the board payload, else None."""
        cached = self.peek(item.id)
        if cached is not None:
            return cached
        if item.id in self._stale:
            return list(self._stale[item.id])
        return list(item.sub_items) if item.sub_items is not None else None

    def is_pending(self, parent_id: int) -> bool:
        return self.entry(parent_id).state is EntryState.PENDING

    def last_error(self, parent_id: int) -> Optional[str]:
        return self.entry(parent_id).error

    # ----- fetches -----------------------------------------------------

    def request(self, parent_id: int, embedded: Optional[Sequence[SubItem]] = None) -> CacheEntry:
        """Make sure a list for `parent_id` is cached or on its way; return the entry.

        Outside a running event loop nothing is started and the entry stays ABSENT.
        """
        entry = self.entry(parent_id)
        if entry.state is not EntryState.ABSENT:
            return entry
        if embedded is not None and parent_id not in self._invalidated:
            self._store(CacheEntry(parent_id, EntryState.FETCHED, tuple(embedded)))
            return self._entries[parent_id]
        self._start(parent_id)
        return self.entry(parent_id)

    async def get_or_fetch(self, parent_id: int, embedded: Optional[Sequence[SubItem]] = None) -> List[SubItem]:
        entry = self.request(parent_id, embedded)
        if entry.state is EntryState.FETCHED:
            return list(entry.sub_items)
        _, task = self._inflight[parent_id]
        return list(await asyncio.shield(task))

    def invalidate(self, parent_id: int) -> None:
        """Forget `parent_id`; its next lookup goes to the network."""
        self._invalidated.add(parent_id)
        self._inflight.pop(parent_id, None)
        entry = self._entries.pop(parent_id, None)
        if entry is not None and entry.state is EntryState.FETCHED:
            self._stale[parent_id] = entry.sub_items
        if entry is not None:
            logger.debug("invalidated sub-items of %s", parent_id)
            self._emit(parent_id)

    def subscribe(self, listener: CacheListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ----- internals ---------------------------------------------------

    def _start(self, parent_id: int) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("no running loop, sub-items of %s are left unrequested", parent_id)
            return
        request = FetchRequest(parent_id, next(self._request_ids))
        task = loop.create_task(self._run(request))
        self._tasks.add(task)
        task.add_done_callback(self._task_done)
        self._inflight[parent_id] = (request, task)
        self.fetch_count += 1
        self._store(CacheEntry(parent_id, EntryState.PENDING, request=request))

    async def _run(self, request: FetchRequest) -> List[SubItem]:
        try:
            result = list(await self._fetcher(request.parent_id))
        except Exception as exc:
            self._settle_failure(request, exc)
            raise ChildFetchError(request.parent_id, exc) from exc
        self._settle_success(request, result)
        return result

    def _task_done(self, task: "asyncio.Task[List[SubItem]]") -> None:
        self._tasks.discard(task)
        if not task.cancelled():
            # Failures were already reported in _settle_failure.
            task.exception()

    def _is_current(self, request: FetchRequest) -> bool:
        entry = self._entries.get(request.parent_id)
        return bool(entry and entry.state is EntryState.PENDING and entry.request == request)

    def _settle_success(self, request: FetchRequest, result: List[SubItem]) -> None:
        if not self._is_current(request):
            logger.debug("dropping stale sub-items for %s (request %s)", request.parent_id, request.request_id)
            return
        self._inflight.pop(request.parent_id, None)
        self._stale.pop(request.parent_id, None)
        self._store(CacheEntry(request.parent_id, EntryState.FETCHED, tuple(result)))

    def _settle_failure(self, request: FetchRequest, exc: BaseException) -> None:
        if not self._is_current(request):
            logger.debug("ignoring failure of stale request %s for %s", request.request_id, request.parent_id)
            return
        logger.warning("sub-item fetch for %s failed: %s", request.parent_id, exc)
        self._inflight.pop(request.parent_id, None)
        self._stale.pop(request.parent_id, None)
        self._store(CacheEntry(request.parent_id, EntryState.ABSENT, error=str(exc) or exc.__class__.__name__))
        if self._on_error:
            self._on_error(request.parent_id, exc)

    def _store(self, entry: CacheEntry) -> None:
        self._entries[entry.parent_id] = entry
        self._emit(entry.parent_id)

    def _emit(self, parent_id: int) -> None:
        for listener in list(self._listeners):
            listener(parent_id)


__all__ = [
    "CacheEntry",
    "ChildCache",
    "ChildFetchError",
    "EntryState",
    "FetchRequest",
]
