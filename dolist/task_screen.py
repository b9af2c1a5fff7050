# dolist/task_screen.py

import datetime
import logging
from typing import Optional

from textual.app import ComposeResult
from textual.screen import Screen
from textual.widgets import Label, Input
from textual import events

from .data_model import InvalidDate, parse_date


class TaskScreenResult(events.Message):
    """Message containing the result of TaskScreen operations."""
    def __init__(
        self,
        cancelled: bool,
        task_name: str = "",
        date: Optional[datetime.date] = None,
    ) -> None:
        super().__init__()
        self.cancelled = cancelled
        self.task_name = task_name
        self.date = date


class TaskScreen(Screen):
    """Screen for adding a task."""
    BINDINGS = [
        ("escape", "cancel", "Cancel"),
    ]

    def __init__(self):
        super().__init__()
        self.name_input = Input(placeholder="Name (required)", id="name")
        self.date_input = Input(placeholder="Date (optional, YYYY-MM-DD)", id="date")
        self.error_label = Label("", id="error")
        self.logger = logging.getLogger(__name__)

    def compose(self) -> ComposeResult:
        yield Label("New Task")
        yield Label("Name:")
        yield self.name_input
        yield Label("Date:")
        yield self.date_input
        yield self.error_label

    def on_mount(self):
        self.name_input.focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.action_submit()

    def action_submit(self) -> None:
        name = self.name_input.value.strip()
        raw_date = self.date_input.value.strip()

        if not name:
            self.logger.debug("Name is required, submission aborted")
            self.error_label.update("A name is required.")
            return

        date = None
        if raw_date:
            try:
                date = parse_date(raw_date)
            except InvalidDate as exc:
                self.logger.debug("Rejected date %r", raw_date)
                self.error_label.update(str(exc))
                self.date_input.focus()
                return

        self.app.post_message(TaskScreenResult(cancelled=False, task_name=name, date=date))
        self.app.pop_screen()

    def action_cancel(self) -> None:
        """Handle Escape key for canceling the new task."""
        self.logger.debug("Cancel action triggered")
        self.app.post_message(TaskScreenResult(cancelled=True))
        self.app.pop_screen()
