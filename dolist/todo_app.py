# dolist/todo_app.py

import logging
import datetime
from typing import List, Optional

from textual.app import App, ComposeResult
from textual.widgets import ListView, Label
from textual.containers import Container

from .data_model import Task
from .dates import Timeframe, filter_tasks
from .persistence import Store
from .textual_widgets import TaskItem
from .task_screen import TaskScreen, TaskScreenResult


class TodoApp(App):
    """Interactive view of the task list.

    Every change goes through the Store and is saved straight away, so the
    list on screen is always the store's order.
    """
    CSS = """
    Screen {
        color: #00dd00;
        text-style: bold;
    }

    ListView {
        width: 100%;
        height: 100%;
    }

    #header {
        dock: top;
        background: black;
        color: #00dd00;
        text-style: bold;
        padding: 0 1 1 1;
        width: 100%;
        height: 2;
    }
    """

    BINDINGS = [
        ("a", "add_task", "Add"),
        ("f", "finish_task", "Finish"),
        ("p", "push_task", "Push"),
        ("c", "clean", "Clean"),
        ("j", "cursor_down", "Down"),
        ("k", "cursor_up", "Up"),
        ("q", "quit", "Quit"),
        ("escape", "quit", "Quit"),
    ]

    list_view: Optional[ListView] = None

    def __init__(self, store: Store, timeframe: Timeframe = Timeframe.ALL):
        super().__init__()
        self.store = store
        self.timeframe = timeframe
        self.logger = logging.getLogger(__name__)
        self._handling_task_screen = False
        self.logger.debug("TodoApp initialized with %d tasks", len(store))

    def compose(self) -> ComposeResult:
        current_date = datetime.date.today().strftime("%d.%m.%Y")
        yield Label(f"dolist - {self.timeframe.value} ({current_date})", id="header")
        with Container():
            yield ListView()

    async def on_mount(self) -> None:
        self.list_view = self.query_one(ListView)
        await self.update_list_view()

    def visible_tasks(self) -> List[Task]:
        return filter_tasks(self.store.tasks, self.timeframe)

    async def update_list_view(self, focus_id: Optional[int] = None) -> None:
        """Rebuild the rows from the store, keeping the cursor on ``focus_id``."""
        if self.list_view is None:
            return

        previous = self.list_view.index or 0
        tasks = self.visible_tasks()
        await self.list_view.clear()
        await self.list_view.extend(TaskItem(task) for task in tasks)

        if not tasks:
            self.list_view.index = None
        else:
            target = min(previous, len(tasks) - 1)
            for position, task in enumerate(tasks):
                if task.id == focus_id:
                    target = position
                    break
            self.list_view.index = target
        self.list_view.focus()

    def get_selected_task(self) -> Optional[Task]:
        """Return the highlighted task, or None if the list is empty."""
        if self.list_view is None:
            return None
        item = self.list_view.highlighted_child
        if isinstance(item, TaskItem):
            return item.task
        return None

    async def _commit(self, message: str, focus_id: Optional[int] = None) -> None:
        self.store.save()
        self.logger.info(message)
        await self.update_list_view(focus_id)

    def action_cursor_down(self) -> None:
        if self.list_view is not None:
            self.list_view.action_cursor_down()

    def action_cursor_up(self) -> None:
        if self.list_view is not None:
            self.list_view.action_cursor_up()

    async def action_add_task(self) -> None:
        if self._handling_task_screen:
            return
        self._handling_task_screen = True
        await self.push_screen(TaskScreen())

    async def on_task_screen_result(self, message: TaskScreenResult) -> None:
        self._handling_task_screen = False
        if message.cancelled:
            return
        task = self.store.insert_task(message.task_name, message.date)
        await self._commit(f"Added task {task.id}: '{task.name}'", task.id)

    async def action_finish_task(self) -> None:
        task = None if self._handling_task_screen else self.get_selected_task()
        if task is None:
            return
        self.store.finish_tasks([task.id])
        await self._commit(f"Finished task {task.id}: '{task.name}'", task.id)

    async def action_push_task(self) -> None:
        task = None if self._handling_task_screen else self.get_selected_task()
        if task is None:
            return
        self.store.push_tasks([task.id])
        await self._commit(f"Pushed task {task.id}: '{task.name}' to {task.date}", task.id)

    async def action_clean(self) -> None:
        if self._handling_task_screen:
            return
        removed = self.store.remove_finished_tasks()
        await self._commit(f"Removed {removed} completed tasks")
