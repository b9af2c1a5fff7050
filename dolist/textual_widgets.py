# dolist/textual_widgets.py

import datetime
from typing import Optional

from textual.widgets import ListItem, Label

from .data_model import Task, today


class TaskItem(ListItem):
    """A ListItem representing a single task row in the ListView."""

    DEFAULT_CSS = """
    TaskItem {
        color: #00dd00;
        text-style: bold;
    }

    TaskItem > Label {
        color: #00dd00;
        text-style: bold;
    }

    TaskItem.-complete,
    TaskItem.-complete > Label {
        color: #666666;
        text-style: none;
    }

    TaskItem.-overdue > Label {
        color: #dddd00;
    }
    """

    def __init__(self, task: Task, current: Optional[datetime.date] = None):
        # ListItem already uses _task internally
        self._task_item = task
        self._current = current if current is not None else today()
        self._label = Label(self.render_text())
        super().__init__(self._label)
        self._apply_classes()

    def render_text(self) -> str:
        """Return a text representation of this task, with a marker if complete."""
        marker = "[x]" if self._task_item.complete else "[ ]"
        text = f"{self._task_item.id:>3} {marker} {self._task_item.name}"
        if self._task_item.date != self._current:
            text += f"  ({self._task_item.date.isoformat()})"
        return text

    @property
    def task(self) -> Task:
        return self._task_item

    def _apply_classes(self) -> None:
        self.set_class(self._task_item.complete, "-complete")
        self.set_class(
            not self._task_item.complete and self._task_item.date < self._current,
            "-overdue",
        )
