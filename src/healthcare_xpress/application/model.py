"""In-memory model: the full person collection plus the filtered view shown to the user."""

import dataclasses
import logging
from collections.abc import Callable, Iterable

from healthcare_xpress.domain import Appointment, Nurse, Patient, Person, Uid

logger = logging.getLogger(__name__)

PersonPredicate = Callable[[Person], bool]


def show_all_persons(person: Person) -> bool:
    return True


class AddressBook:
    """Ordered collection of persons, unique by identity.

    Nurse home visits are the source of truth for assignments; every mutation
    re-derives patients' assigned slots and drops visits that no longer point
    at an existing patient slot.
    """

    def __init__(self, persons: Iterable[Person] = ()) -> None:
        self._persons: list[Person] = []
        for person in persons:
            if self.has_person(person):
                raise ValueError(f"Person with uid {person.uid} already exists.")
            self._persons.append(person)
        self._reconcile()

    @property
    def persons(self) -> list[Person]:
        return list(self._persons)

    def __len__(self) -> int:
        return len(self._persons)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AddressBook):
            return NotImplemented
        return self._persons == other._persons

    def has_person(self, person: Person) -> bool:
        return any(p.is_same_person(person) for p in self._persons)

    def get(self, uid: Uid) -> Person | None:
        for person in self._persons:
            if person.uid == uid:
                return person
        return None

    def add_person(self, person: Person) -> None:
        if self.has_person(person):
            raise ValueError(f"Person with uid {person.uid} already exists.")
        self._persons.append(person)
        self._reconcile()

    def set_person(self, target: Person, edited: Person) -> None:
        """Replace target (looked up by uid) with edited, keeping its position."""
        index = self._index_of(target)
        self._persons[index] = edited
        self._reconcile()

    def remove_person(self, target: Person) -> None:
        del self._persons[self._index_of(target)]
        self._reconcile()

    def _index_of(self, target: Person) -> int:
        for i, person in enumerate(self._persons):
            if person.uid == target.uid:
                return i
        raise KeyError(f"No person with uid {target.uid}.")

    def _reconcile(self) -> None:
        patients = {p.uid: p for p in self._persons if isinstance(p, Patient)}
        assigned: dict[Uid, set] = {uid: set() for uid in patients}
        for i, person in enumerate(self._persons):
            if not isinstance(person, Nurse):
                continue
            kept = tuple(
                v
                for v in person.home_visits
                if v.patient_uid in patients and v.date_time in patients[v.patient_uid].date_times
            )
            for visit in kept:
                assigned[visit.patient_uid].add(visit.date_time)
            if kept != person.home_visits:
                logger.debug("Dropping %d stale home visits of nurse %s", len(person.home_visits) - len(kept), person.uid)
                self._persons[i] = dataclasses.replace(person, home_visits=kept)
        for i, person in enumerate(self._persons):
            if isinstance(person, Patient) and person.assigned_slots != assigned[person.uid]:
                self._persons[i] = dataclasses.replace(person, assigned_slots=frozenset(assigned[person.uid]))


class Model:
    """Holds the address book and the predicate behind the displayed list.

    Listeners registered with subscribe() are called after every change to the
    data or to the displayed list.
    """

    def __init__(self, address_book: AddressBook | None = None) -> None:
        self._address_book = address_book if address_book is not None else AddressBook()
        self._predicate: PersonPredicate = show_all_persons
        self._listeners: list[Callable[[], None]] = []

    @property
    def address_book(self) -> AddressBook:
        return self._address_book

    def set_address_book(self, address_book: AddressBook) -> None:
        self._address_book = address_book
        self._notify()

    def subscribe(self, listener: Callable[[], None]) -> None:
        self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in self._listeners:
            listener()

    # --- persons ---

    def has_person(self, person: Person) -> bool:
        return self._address_book.has_person(person)

    def get_person(self, uid: Uid) -> Person | None:
        return self._address_book.get(uid)

    def add_person(self, person: Person) -> None:
        self._address_book.add_person(person)
        self._predicate = show_all_persons
        self._notify()

    def set_person(self, target: Person, edited: Person) -> None:
        self._address_book.set_person(target, edited)
        self._notify()

    def delete_person(self, target: Person) -> None:
        self._address_book.remove_person(target)
        self._notify()

    # --- filtered view ---

    @property
    def predicate(self) -> PersonPredicate:
        return self._predicate

    @property
    def filtered_persons(self) -> list[Person]:
        return [p for p in self._address_book.persons if self._predicate(p)]

    def update_filtered_person_list(self, predicate: PersonPredicate) -> None:
        self._predicate = predicate
        self._notify()

    def find_displayed(self, uid: Uid) -> Person | None:
        """Return the displayed person with this uid, or None if it is filtered out or absent."""
        for person in self.filtered_persons:
            if person.uid == uid:
                return person
        return None

    # --- scheduling ---

    def appointments(self) -> list[Appointment]:
        """All nurse home visits as appointments, earliest first."""
        out = []
        for nurse in self._address_book.persons:
            if not isinstance(nurse, Nurse):
                continue
            for visit in nurse.home_visits:
                patient = self._address_book.get(visit.patient_uid)
                if isinstance(patient, Patient):
                    out.append(Appointment(patient, nurse, visit.date_time, visit.visited))
        return sorted(out)
