# dolist/persistence.py

import os
import json
import logging
import datetime
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Set, Union

from .data_model import LegacyTask, Task, parse_date, today

DEFAULT_FILENAME = ".dolist.json"
PATH_ENV_VAR = "DOLIST_FILE"
EMPTY_DOCUMENT = "{}"


class StoreError(Exception):
    """Base class for failures reading or writing the task file."""


class StoreIOError(StoreError):
    """The task file could not be located, read or written."""


class StoreParseError(StoreError):
    """The task file does not hold a task list in the expected format."""


class Schema(Enum):
    CURRENT = "current"
    LEGACY = "legacy"


def default_path() -> Path:
    """Return the task file in the user's home directory."""
    try:
        home = Path.home()
    except (RuntimeError, KeyError) as exc:
        raise StoreIOError("Unable to find your home directory") from exc
    if not str(home):
        raise StoreIOError("Unable to find your home directory")
    return home / DEFAULT_FILENAME


def resolve_path(override: Optional[Union[str, Path]] = None) -> Path:
    """Pick the task file: explicit override, then $DOLIST_FILE, then the default."""
    if override:
        return Path(override).expanduser()
    from_env = os.environ.get(PATH_ENV_VAR)
    if from_env:
        return Path(from_env).expanduser()
    return default_path()


def parse_document(text: str, schema: Schema, source: str = "task file") -> List[Task]:
    """Turn the raw contents of a task file into tasks of the current format.

    The schema is never guessed: a legacy document fails to parse as
    Schema.CURRENT and must be loaded explicitly with Schema.LEGACY.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise StoreParseError(f"{source} is not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise StoreParseError(f"{source} does not contain a list of tasks")

    tasks = []
    for index, item in enumerate(data):
        try:
            if not isinstance(item, dict):
                raise ValueError("expected an object")
            if schema is Schema.LEGACY:
                task = LegacyTask.from_dict(item).upgrade()
            else:
                task = Task.from_dict(item)
        except KeyError as exc:
            raise StoreParseError(
                f"{source}: task #{index} is missing field {exc}"
            ) from exc
        except (TypeError, ValueError) as exc:
            raise StoreParseError(f"{source}: task #{index} is invalid: {exc}") from exc
        tasks.append(task)
    return tasks


class Store:
    """Owns the task list for one run and keeps it in display order.

    Every mutating operation re-sorts the list, so ``tasks`` is always in the
    order it should be shown: incomplete before complete, then by date.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.tasks: List[Task] = []
        self.logger = logging.getLogger(__name__)

    def __len__(self) -> int:
        return len(self.tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self.tasks)

    # Loading and saving

    def init(self) -> None:
        """Open the task file, or create an empty one if it doesn't exist yet."""
        if self.path.exists():
            self.open()
            return
        self.logger.debug("Creating task file %s", self.path)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(EMPTY_DOCUMENT, encoding="utf-8")
        except OSError as exc:
            raise StoreIOError(f"Unable to create {self.path}: {exc}") from exc
        self.tasks = []

    def open(self) -> None:
        self.tasks = self._read(Schema.CURRENT)
        self.order_tasks()
        self.logger.debug("Loaded %d tasks from %s", len(self.tasks), self.path)

    def migrate(self) -> None:
        """Load a task file written before tasks had dates.

        Each task is dated today. Call save() afterwards to rewrite the
        file in the current format.
        """
        self.tasks = self._read(Schema.LEGACY)
        self.order_tasks()
        self.logger.info("Migrated %d tasks from %s", len(self.tasks), self.path)

    def save(self) -> None:
        data = [t.to_dict() for t in self.tasks]
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
        except OSError as exc:
            raise StoreIOError(f"Unable to write {self.path}: {exc}") from exc
        self.logger.debug("Saved %d tasks to %s", len(self.tasks), self.path)

    def _read(self, schema: Schema) -> List[Task]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StoreIOError(f"Unable to read {self.path}: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise StoreParseError(f"{self.path} is not UTF-8 text: {exc}") from exc
        return parse_document(text, schema, source=str(self.path))

    # Queries

    def next_id(self) -> Optional[int]:
        if not self.tasks:
            return None
        return max(task.id for task in self.tasks) + 1

    def get_task(self, task_id: int) -> Optional[Task]:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def unmatched_ids(self, ids: Iterable[int]) -> Set[int]:
        """Return the ids that don't belong to any task."""
        present = {task.id for task in self.tasks}
        return set(ids) - present

    # Mutations

    def insert_task(self, name: str, date: Optional[datetime.date] = None) -> Task:
        task = Task(
            id=self.next_id() or 1,
            name=name,
            date=date if date is not None else today(),
        )
        self.tasks.append(task)
        self.logger.info("Added task %d: %r due %s", task.id, task.name, task.date)
        self.order_tasks()
        return task

    def finish_tasks(self, ids: Iterable[int]) -> None:
        wanted = set(ids)
        for task in self.tasks:
            if task.id in wanted:
                task.finish()
                self.logger.info("Finished task %d", task.id)
        self.order_tasks()

    def push_tasks(self, ids: Iterable[int], date: Optional[str] = None) -> None:
        """Push tasks to tomorrow, or to ``date`` when one is given.

        The date is parsed before anything changes, so an InvalidDate
        leaves every task untouched.
        """
        new_date = parse_date(date) if date is not None else None
        wanted = set(ids)
        for task in self.tasks:
            if task.id not in wanted:
                continue
            if new_date is None:
                task.push()
            else:
                task.date = new_date
            self.logger.info("Pushed task %d to %s", task.id, task.date)
        self.order_tasks()

    def remove_finished_tasks(self) -> int:
        """Delete completed tasks and return how many were removed."""
        before = len(self.tasks)
        self.tasks = [t for t in self.tasks if not t.complete]
        removed = before - len(self.tasks)
        self.logger.info("Removed %d finished tasks", removed)
        self.order_tasks()
        return removed

    def order_tasks(self) -> None:
        # list.sort is stable: ties keep their previous relative order
        self.tasks.sort(key=lambda t: (t.complete, t.date))
