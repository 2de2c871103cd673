"""Tests for AddressBook consistency and the Model's filtered view."""

import dataclasses

import pytest

from healthcare_xpress.application import AddressBook, Model
from healthcare_xpress.domain import (
    Address,
    DateTime,
    Email,
    Gender,
    HomeVisit,
    Name,
    Nurse,
    Patient,
    Phone,
    Uid,
)
from healthcare_xpress.domain.uid import WILDCARD_UID

SLOT_A = DateTime.parse("2022-11-11T10:00")
SLOT_B = DateTime.parse("2022-11-12T13:00")


def _patient(uid: int = 1, **kwargs) -> Patient:
    fields = dict(
        uid=Uid(uid),
        name=Name(f"Patient {uid}"),
        gender=Gender("F"),
        phone=Phone("94351253"),
        email=Email(f"p{uid}@example.com"),
        address=Address("Jurong West"),
        date_times=(SLOT_A, SLOT_B),
    )
    fields.update(kwargs)
    return Patient(**fields)


def _nurse(uid: int = 2, **kwargs) -> Nurse:
    fields = dict(
        uid=Uid(uid),
        name=Name(f"Nurse {uid}"),
        gender=Gender("M"),
        phone=Phone("98765432"),
        email=Email(f"n{uid}@example.com"),
        address=Address("Clementi"),
    )
    fields.update(kwargs)
    return Nurse(**fields)


def test_duplicate_uid_rejected() -> None:
    book = AddressBook([_patient(1)])
    with pytest.raises(ValueError):
        book.add_person(_nurse(1))
    with pytest.raises(ValueError):
        AddressBook([_patient(1), _patient(1)])


def test_wildcard_uid_collides_with_everything() -> None:
    book = AddressBook([_patient(1)])
    assert book.has_person(_nurse(WILDCARD_UID))
    assert book.get(Uid(WILDCARD_UID)) is None


def test_assigned_slots_follow_nurse_visits() -> None:
    book = AddressBook([_patient(1), _nurse(2, home_visits=(HomeVisit(SLOT_A, Uid(1)),))])
    assert book.get(Uid(1)).assigned_slots == frozenset({SLOT_A})


def test_stale_visits_dropped_when_patient_slot_removed() -> None:
    book = AddressBook([_patient(1), _nurse(2, home_visits=(HomeVisit(SLOT_A, Uid(1)), HomeVisit(SLOT_B, Uid(1))))])
    patient = book.get(Uid(1))
    book.set_person(patient, dataclasses.replace(patient, date_times=(SLOT_B,)))
    assert [v.date_time for v in book.get(Uid(2)).home_visits] == [SLOT_B]
    assert book.get(Uid(1)).assigned_slots == frozenset({SLOT_B})


def test_deleting_patient_removes_nurse_visits() -> None:
    book = AddressBook([_patient(1), _nurse(2, home_visits=(HomeVisit(SLOT_A, Uid(1)),))])
    book.remove_person(book.get(Uid(1)))
    assert book.get(Uid(2)).home_visits == ()
    assert len(book) == 1


def test_set_person_keeps_position() -> None:
    book = AddressBook([_patient(1), _nurse(2), _patient(3)])
    book.set_person(book.get(Uid(2)), _nurse(2, name=Name("Renamed")))
    assert [p.uid.value for p in book.persons] == [1, 2, 3]
    assert book.get(Uid(2)).name == Name("Renamed")


def test_filtered_view_and_listeners() -> None:
    model = Model(AddressBook([_patient(1), _nurse(2)]))
    calls = []
    model.subscribe(lambda: calls.append(len(model.filtered_persons)))

    model.update_filtered_person_list(lambda p: isinstance(p, Nurse))
    assert [p.uid for p in model.filtered_persons] == [Uid(2)]
    assert model.find_displayed(Uid(1)) is None
    assert model.find_displayed(Uid(2)) is not None

    model.add_person(_patient(3))
    assert len(model.filtered_persons) == 3
    assert calls == [1, 3]


def test_appointments_sorted_across_nurses() -> None:
    model = Model(
        AddressBook(
            [
                _patient(1),
                _nurse(2, home_visits=(HomeVisit(SLOT_B, Uid(1)),)),
                _nurse(3, home_visits=(HomeVisit(SLOT_A, Uid(1)),)),
            ]
        )
    )
    appointments = model.appointments()
    assert [(a.date_time, a.nurse.uid) for a in appointments] == [(SLOT_A, Uid(3)), (SLOT_B, Uid(2))]
