"""Domain entities: Patient, Nurse and the attending Physician.

Person is a tagged union of Patient | Nurse; the category property is the tag.
All entities are immutable. Edits build a new instance that replaces the old one.
"""

import datetime as dt
from dataclasses import dataclass, field

from healthcare_xpress.domain.slots import DateTime, SlotNumber
from healthcare_xpress.domain.uid import Uid
from healthcare_xpress.domain.values import (
    Address,
    Category,
    Email,
    Gender,
    Name,
    Phone,
    Tag,
    VisitStatus,
)

# Nurses with this many unavailable or fully scheduled days count as fully assigned.
FULLY_ASSIGNED_DAYS_THRESHOLD = 7

# Matching attributes needed for two records to be considered similar.
SIMILARITY_THRESHOLD = 5


@dataclass(frozen=True)
class Physician:
    """Attending physician of a patient: contact details only, not a stored record."""

    name: Name
    phone: Phone
    email: Email

    def __str__(self) -> str:
        return f"Name: {self.name}; Phone: {self.phone}; Email: {self.email}"


@dataclass(frozen=True)
class HomeVisit:
    """One slot a nurse is booked for, pointing at the patient being visited."""

    date_time: DateTime
    patient_uid: Uid
    visited: bool = False


@dataclass(frozen=True)
class _BasePerson:
    uid: Uid
    name: Name
    gender: Gender
    phone: Phone
    email: Email
    address: Address
    tags: frozenset[Tag] = field(default_factory=frozenset)

    def __post_init__(self):
        for attr in ("uid", "name", "gender", "phone", "email", "address"):
            if getattr(self, attr) is None:
                raise ValueError(f"Person {attr} must be present.")
        object.__setattr__(self, "tags", frozenset(self.tags))

    @property
    def category(self) -> Category:
        raise NotImplementedError

    def is_same_person(self, other: "Person | None") -> bool:
        """Identity check: uids match (the wildcard uid matches every record)."""
        if other is self:
            return True
        return other is not None and self.uid.matches(other.uid)

    def is_similar_person(self, other: "Person", default_region: str | None = None) -> bool:
        """True when most contact attributes agree. Phones are compared in E.164 form."""
        if other is self:
            return True
        matches = [
            self.name == other.name,
            self.gender == other.gender,
            self.phone.normalized(default_region) == other.phone.normalized(default_region),
            self.email == other.email,
            self.address == other.address,
            self.tags == other.tags,
        ]
        return sum(matches) >= SIMILARITY_THRESHOLD

    def sorted_tags(self) -> list[Tag]:
        return sorted(self.tags, key=lambda t: t.name)

    def summary(self) -> str:
        text = (
            f"Category: {self.category} Uid: {self.uid}; Name: {self.name}; "
            f"Gender: {self.gender}; Phone: {self.phone}; Email: {self.email}; "
            f"Address: {self.address}"
        )
        if self.tags:
            text += "; Tags: " + "".join(str(t) for t in self.sorted_tags())
        return text


@dataclass(frozen=True)
class Nurse(_BasePerson):
    unavailable_dates: frozenset[dt.date] = field(default_factory=frozenset)
    home_visits: tuple[HomeVisit, ...] = ()

    def __post_init__(self):
        super().__post_init__()
        object.__setattr__(self, "unavailable_dates", frozenset(self.unavailable_dates))
        object.__setattr__(
            self,
            "home_visits",
            tuple(sorted(self.home_visits, key=lambda v: v.date_time.export())),
        )

    @property
    def category(self) -> Category:
        return Category(Category.NURSE_SYMBOL)

    def fully_scheduled_dates(self) -> set[dt.date]:
        """Dates on which every slot of the day already has a home visit."""
        slots_by_date: dict[dt.date, set[SlotNumber]] = {}
        for visit in self.home_visits:
            slots_by_date.setdefault(visit.date_time.date, set()).add(visit.date_time.slot)
        return {d for d, slots in slots_by_date.items() if len(slots) == len(SlotNumber)}

    def is_fully_assigned(self) -> bool:
        busy_days = len(self.unavailable_dates) + len(self.fully_scheduled_dates())
        return busy_days >= FULLY_ASSIGNED_DAYS_THRESHOLD

    def has_completed_all_visits(self) -> bool:
        return all(v.visited for v in self.home_visits)

    def is_available(self, when: DateTime) -> bool:
        if when.date in self.unavailable_dates:
            return False
        return all(v.date_time != when for v in self.home_visits)

    def visits_for(self, patient_uid: Uid) -> list[HomeVisit]:
        return [v for v in self.home_visits if v.patient_uid == patient_uid]


@dataclass(frozen=True)
class Patient(_BasePerson):
    date_times: tuple[DateTime, ...] = ()
    visit_status: VisitStatus = field(default_factory=VisitStatus)
    physician: Physician | None = None
    assigned_slots: frozenset[DateTime] = field(default_factory=frozenset)

    def __post_init__(self):
        super().__post_init__()
        object.__setattr__(self, "date_times", tuple(self.date_times))
        object.__setattr__(self, "assigned_slots", frozenset(self.assigned_slots))

    @property
    def category(self) -> Category:
        return Category(Category.PATIENT_SYMBOL)

    def has_been_fully_assigned(self) -> bool:
        return all(d in self.assigned_slots for d in self.date_times)

    def has_been_fully_visited(self) -> bool:
        return self.visit_status.visited

    def unassigned_slots(self) -> list[DateTime]:
        return [d for d in self.date_times if d not in self.assigned_slots]

    def summary(self) -> str:
        text = super().summary()
        if self.date_times:
            text += "; Home Visits Date and Time: " + ", ".join(str(d) for d in self.date_times)
        text += f"; Visit Status: {self.visit_status}"
        if self.physician is not None:
            text += f"; Attending Physician: {self.physician.name}"
        return text


Person = Patient | Nurse
