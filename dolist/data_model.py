# dolist/data_model.py

import datetime
from dataclasses import dataclass, field
from typing import Optional

DATE_FORMAT = "%Y-%m-%d"


class InvalidDate(ValueError):
    """Raised when a user-supplied date matches none of the accepted forms."""


def today() -> datetime.date:
    """Return the current local calendar date."""
    return datetime.date.today()


def tomorrow() -> datetime.date:
    return today() + datetime.timedelta(days=1)


def parse_date(text: str) -> datetime.date:
    """Parse an explicit date given by the user.

    Accepts either an internet date-time such as ``2024-03-15T10:00:00+02:00``
    (converted to local time, then only the calendar date is kept) or a bare
    calendar date such as ``2024-03-15``. A date-time without an offset is
    rejected.
    """
    value = text.strip()
    if "T" in value or " " in value:
        try:
            moment = datetime.datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            pass
        else:
            if moment.tzinfo is not None:
                return moment.astimezone().date()
    try:
        return datetime.datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        raise InvalidDate(
            f"'{text}' is not a valid date; use YYYY-MM-DD or an "
            f"RFC 3339 date-time like 2024-03-15T09:00:00+00:00"
        ) from None


def _check_id(value) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"task id must be a non-negative integer, got {value!r}")
    return value


def _check_type(name: str, value, kind: type):
    if not isinstance(value, kind):
        raise ValueError(f"'{name}' must be {kind.__name__}, got {value!r}")
    return value


@dataclass
class Task:
    """A single to-do item."""
    id: int
    name: str
    date: datetime.date = field(default_factory=today)
    complete: bool = False

    def push(self) -> None:
        """Reschedule to tomorrow, whatever the current date is."""
        self.date = tomorrow()

    def finish(self) -> None:
        self.complete = True

    def to_dict(self):
        """Convert Task to a dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "date": self.date.strftime(DATE_FORMAT),
            "complete": self.complete,
        }

    @classmethod
    def from_dict(cls, data: dict):
        """Create Task from a dictionary (JSON deserialization)."""
        raw_date = _check_type("date", data["date"], str)
        return cls(
            id=_check_id(data["id"]),
            name=_check_type("name", data["name"], str),
            date=datetime.datetime.strptime(raw_date, DATE_FORMAT).date(),
            complete=_check_type("complete", data["complete"], bool),
        )

    def __repr__(self):
        return f"Task(id={self.id}, name={self.name}, date={self.date}, complete={self.complete})"


@dataclass
class LegacyTask:
    """A task record from the on-disk format that predates due dates."""
    id: int
    name: str
    complete: bool = False

    @classmethod
    def from_dict(cls, data: dict):
        return cls(
            id=_check_id(data["id"]),
            name=_check_type("name", data["name"], str),
            complete=_check_type("complete", data["complete"], bool),
        )

    def upgrade(self, date: Optional[datetime.date] = None) -> Task:
        """Convert to the current format; the missing date becomes today."""
        return Task(
            id=self.id,
            name=self.name,
            date=date if date is not None else today(),
            complete=self.complete,
        )
