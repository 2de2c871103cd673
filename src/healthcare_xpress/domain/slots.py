"""Home-visit date-time slots: a calendar date plus one of four fixed start times."""

import datetime as dt
import enum
from dataclasses import dataclass


class SlotNumber(enum.Enum):
    FIRST = 1
    SECOND = 2
    THIRD = 3
    FOURTH = 4

    @property
    def time(self) -> dt.time:
        return _SLOT_TIMES[self]

    @classmethod
    def from_time(cls, value: dt.time) -> "SlotNumber":
        for slot, start in _SLOT_TIMES.items():
            if start == value:
                return slot
        raise ValueError(f"{value.strftime('%H:%M')} is not a slot start time")


_SLOT_TIMES = {
    SlotNumber.FIRST: dt.time(10, 0),
    SlotNumber.SECOND: dt.time(13, 0),
    SlotNumber.THIRD: dt.time(16, 0),
    SlotNumber.FOURTH: dt.time(19, 0),
}


@dataclass(frozen=True)
class DateTime:
    """One home-visit slot. Ordered chronologically."""

    MESSAGE_CONSTRAINTS = (
        "Date and time should be a valid date in the form YYYY-MM-DDTHH:MM with HH:MM one of "
        "10:00, 13:00, 16:00, 19:00, or YYYY-MM-DD,N with slot number N from 1 to 4"
    )

    date: dt.date
    slot: SlotNumber

    def __lt__(self, other: "DateTime") -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return (self.date, self.slot.value) < (other.date, other.slot.value)

    def __le__(self, other: "DateTime") -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self == other or self < other

    @classmethod
    def parse(cls, text: str) -> "DateTime":
        text = (text or "").strip()
        try:
            if "," in text:
                date_part, slot_part = text.split(",", 1)
                return cls(dt.date.fromisoformat(date_part.strip()), SlotNumber(int(slot_part)))
            date_part, time_part = text.split("T", 1)
            start = dt.time.fromisoformat(time_part)
            return cls(dt.date.fromisoformat(date_part), SlotNumber.from_time(start))
        except ValueError as e:
            raise ValueError(cls.MESSAGE_CONSTRAINTS) from e

    @classmethod
    def is_valid(cls, text: str) -> bool:
        try:
            cls.parse(text)
        except ValueError:
            return False
        return True

    def export(self) -> dt.datetime:
        return dt.datetime.combine(self.date, self.slot.time)

    def __str__(self) -> str:
        return self.export().strftime("%Y-%m-%dT%H:%M")
