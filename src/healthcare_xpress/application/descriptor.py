"""Sparse edit overlay and the pure merge that applies it to a person."""

from dataclasses import dataclass, fields

from healthcare_xpress.domain import (
    Address,
    Category,
    DateTime,
    Email,
    Gender,
    Name,
    Nurse,
    Patient,
    Person,
    Phone,
    Tag,
)


@dataclass(frozen=True)
class EditPersonDescriptor:
    """Each non-None field replaces the corresponding field of the edited person."""

    category: Category | None = None
    name: Name | None = None
    gender: Gender | None = None
    phone: Phone | None = None
    email: Email | None = None
    address: Address | None = None
    tags: frozenset[Tag] | None = None
    date_times: tuple[DateTime, ...] | None = None

    def __post_init__(self):
        if self.tags is not None:
            object.__setattr__(self, "tags", frozenset(self.tags))
        if self.date_times is not None:
            object.__setattr__(self, "date_times", tuple(self.date_times))

    def is_any_field_edited(self) -> bool:
        return any(getattr(self, f.name) is not None for f in fields(self))


def _pick(value, fallback):
    return fallback if value is None else value


def merge(existing: Person, descriptor: EditPersonDescriptor) -> Person:
    """Return a new person: descriptor fields where set, existing fields otherwise.

    The uid is never edited. The result's variant follows the merged category;
    state belonging to the other variant is dropped.
    """
    category = _pick(descriptor.category, existing.category)
    common = dict(
        uid=existing.uid,
        name=_pick(descriptor.name, existing.name),
        gender=_pick(descriptor.gender, existing.gender),
        phone=_pick(descriptor.phone, existing.phone),
        email=_pick(descriptor.email, existing.email),
        address=_pick(descriptor.address, existing.address),
        tags=_pick(descriptor.tags, existing.tags),
    )

    if category.is_nurse:
        match existing:
            case Nurse():
                return Nurse(
                    **common,
                    unavailable_dates=existing.unavailable_dates,
                    home_visits=existing.home_visits,
                )
            case Patient():
                return Nurse(**common)

    match existing:
        case Patient():
            date_times = _pick(descriptor.date_times, existing.date_times)
            return Patient(
                **common,
                date_times=date_times,
                visit_status=existing.visit_status,
                physician=existing.physician,
                assigned_slots=frozenset(d for d in existing.assigned_slots if d in date_times),
            )
        case Nurse():
            return Patient(**common, date_times=_pick(descriptor.date_times, ()))
    raise TypeError(f"Unsupported person type: {type(existing).__name__}")
