import asyncio
from datetime import date

import pytest

from core import Board, Collection, Item, Label, Priority, SubItem


class FakeFetcher:
    """Child fetcher double: records calls; `hold(id)` parks a fetch until `release(id)`."""

    def __init__(self, results=None):
        self.results = dict(results or {})
        self.errors = {}
        self.calls = []
        self._gates = {}

    def hold(self, item_id):
        self._gates[item_id] = asyncio.Event()

    def release(self, item_id):
        self._gates.pop(item_id).set()

    async def __call__(self, item_id):
        self.calls.append(item_id)
        result = list(self.results.get(item_id, []))
        gate = self._gates.get(item_id)
        if gate is not None:
            await gate.wait()
        if item_id in self.errors:
            raise self.errors[item_id]
        return result


def make_board():
    sprint = Collection(
        id=1,
        name="Sprint",
        labels=[Label(1, "team", "#22c55e")],
        items=[
            Item(id=10, title="Design", position=0, sub_items=None),
            Item(
                id=11,
                title="Build",
                position=1,
                priority=Priority.HIGH,
                due_date=date(2030, 1, 1),
                labels=[Label(2, "bug", "#ef4444"), Label(3, "ui", "#3b82f6")],
                sub_items=[
                    SubItem(id=102, title="Test", position=1),
                    SubItem(id=101, title="Compile", position=0, is_completed=True),
                ],
            ),
            Item(id=12, title="Ship", position=2, sub_items=None),
        ],
    )
    backlog = Collection(
        id=2,
        name="Backlog",
        items=[Item(id=20, title="Research", sub_items=[SubItem(id=201, title="Read papers")])],
    )
    ops = Collection(id=5, name="Ops", items=[Item(id=50, title="Deploy", link="https://example.test/tasks/50")])
    return Board(id=7, name="Roadmap", slug="roadmap", collections=[sprint, backlog, ops])


@pytest.fixture
def board():
    return make_board()


@pytest.fixture
def fetcher():
    return FakeFetcher()


class RecordingSink:
    def __init__(self):
        self.calls = []

    def push(self, query):
        self.calls.append(("push", query))

    def replace(self, query):
        self.calls.append(("replace", query))


@pytest.fixture
def sink():
    return RecordingSink()
