# tests/test_todo_app.py

import asyncio
import datetime
import json
from pathlib import Path

from dolist.data_model import today, tomorrow
from dolist.persistence import Store
from dolist.textual_widgets import TaskItem
from dolist.todo_app import TodoApp


def drive(app: TodoApp, *keys: str) -> None:
    """Run the app headless and press ``keys`` in order."""
    async def _run() -> None:
        async with app.run_test() as pilot:
            await pilot.pause()
            for key in keys:
                await pilot.press(key)
                await pilot.pause()

    asyncio.run(_run())


def test_rows_follow_store_order(store: Store) -> None:
    store.insert_task("later", today() + datetime.timedelta(days=2))
    store.insert_task("sooner", today())
    app = TodoApp(store)

    async def _run() -> list:
        async with app.run_test() as pilot:
            await pilot.pause()
            return [item.task.name for item in app.query(TaskItem)]

    assert asyncio.run(_run()) == ["sooner", "later"]


def test_finish_highlighted_task(store: Store, store_path: Path) -> None:
    store.insert_task("first", today())
    store.insert_task("second", tomorrow())
    drive(TodoApp(store), "f")
    assert store.get_task(1).complete is True
    assert store.get_task(2).complete is False
    saved = json.loads(store_path.read_text(encoding="utf-8"))
    assert [t["id"] for t in saved] == [2, 1]


def test_push_highlighted_task(store: Store) -> None:
    store.insert_task("first", today())
    drive(TodoApp(store), "p")
    assert store.get_task(1).date == tomorrow()


def test_clean_removes_completed(store: Store) -> None:
    store.insert_task("a", today())
    store.insert_task("b", today())
    store.finish_tasks([2])
    drive(TodoApp(store), "c")
    assert [t.name for t in store] == ["a"]


def test_add_task_from_screen(store: Store) -> None:
    drive(TodoApp(store), "a", "m", "i", "l", "k", "enter")
    assert [(t.id, t.name, t.date) for t in store] == [(1, "milk", today())]


def test_cancel_add_task(store: Store) -> None:
    drive(TodoApp(store), "a", "x", "escape")
    assert len(store) == 0


def test_keys_on_empty_list_do_nothing(store: Store) -> None:
    drive(TodoApp(store), "f", "p", "c")
    assert len(store) == 0
