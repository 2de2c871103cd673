"""Tests for Patient, Nurse and Appointment."""

import datetime as dt

import pytest

from healthcare_xpress.domain import (
    Address,
    Appointment,
    DateTime,
    Email,
    Gender,
    HomeVisit,
    Name,
    Nurse,
    Patient,
    Phone,
    Physician,
    Tag,
    Uid,
    VisitStatus,
)
from healthcare_xpress.domain.uid import WILDCARD_UID

SLOT_A = DateTime.parse("2022-11-11T10:00")
SLOT_B = DateTime.parse("2022-11-12T13:00")


def _patient(uid: int = 1, name: str = "Alice Pauline", **kwargs) -> Patient:
    fields = dict(
        uid=Uid(uid),
        name=Name(name),
        gender=Gender("F"),
        phone=Phone("94351253"),
        email=Email("alice@example.com"),
        address=Address("123, Jurong West Ave 6, #08-111"),
        tags=frozenset({Tag("friends")}),
    )
    fields.update(kwargs)
    return Patient(**fields)


def _nurse(uid: int = 2, name: str = "Benson Meier", **kwargs) -> Nurse:
    fields = dict(
        uid=Uid(uid),
        name=Name(name),
        gender=Gender("M"),
        phone=Phone("98765432"),
        email=Email("johnd@example.com"),
        address=Address("311, Clementi Ave 2, #02-25"),
    )
    fields.update(kwargs)
    return Nurse(**fields)


def test_category_follows_variant() -> None:
    assert str(_patient().category) == "P"
    assert str(_nurse().category) == "N"


def test_missing_required_field_rejected() -> None:
    with pytest.raises(ValueError, match="address must be present"):
        _patient(address=None)


def test_same_person_by_uid_only() -> None:
    assert _patient(uid=1).is_same_person(_patient(uid=1, name="Other Name"))
    assert not _patient(uid=1).is_same_person(_patient(uid=3))
    assert not _patient().is_same_person(None)


def test_wildcard_uid_is_same_as_everyone() -> None:
    assert _patient(uid=WILDCARD_UID).is_same_person(_nurse(uid=5))
    assert _nurse(uid=5).is_same_person(_patient(uid=WILDCARD_UID))


def test_similar_person_needs_five_matching_attributes() -> None:
    a = _patient(uid=1)
    b = _patient(uid=2)
    assert a.is_similar_person(b)
    assert a.is_similar_person(_patient(uid=2, name="Someone Else"))
    assert not a.is_similar_person(_patient(uid=2, name="Someone Else", email=Email("x@example.com")))


def test_similar_person_compares_normalized_phones() -> None:
    a = _patient(uid=1, name="A", email=Email("a@example.com"))
    b = _patient(uid=2, name="B", email=Email("a@example.com"), phone=Phone("+6594351253"))
    assert not a.is_similar_person(b)
    assert a.is_similar_person(b, default_region="SG")


def test_patient_summary_lists_slots_status_and_physician() -> None:
    physician = Physician(Name("Dr Tan"), Phone("61234567"), Email("drtan@clinic.com"))
    patient = _patient(date_times=(SLOT_A, SLOT_B), visit_status=VisitStatus(visited=True), physician=physician)
    text = patient.summary()
    assert text.startswith("Category: P Uid: 1; Name: Alice Pauline;")
    assert "Tags: [friends]" in text
    assert "Home Visits Date and Time: 2022-11-11T10:00, 2022-11-12T13:00" in text
    assert "Visit Status: visited" in text
    assert text.endswith("Attending Physician: Dr Tan")


def test_patient_assignment_state() -> None:
    patient = _patient(date_times=(SLOT_A, SLOT_B), assigned_slots={SLOT_A})
    assert not patient.has_been_fully_assigned()
    assert patient.unassigned_slots() == [SLOT_B]
    assert _patient().has_been_fully_assigned()


def test_nurse_home_visits_sorted_and_availability() -> None:
    nurse = _nurse(
        home_visits=(HomeVisit(SLOT_B, Uid(1)), HomeVisit(SLOT_A, Uid(1))),
        unavailable_dates={dt.date(2022, 12, 1)},
    )
    assert [v.date_time for v in nurse.home_visits] == [SLOT_A, SLOT_B]
    assert not nurse.is_available(SLOT_A)
    assert not nurse.is_available(DateTime.parse("2022-12-01,2"))
    assert nurse.is_available(DateTime.parse("2022-11-11,2"))
    assert len(nurse.visits_for(Uid(1))) == 2


def test_nurse_fully_assigned_after_seven_busy_days() -> None:
    unavailable = {dt.date(2022, 11, d) for d in range(1, 7)}
    full_day = tuple(HomeVisit(DateTime.parse(f"2022-11-20,{n}"), Uid(1)) for n in range(1, 5))
    assert not _nurse(unavailable_dates=unavailable).is_fully_assigned()
    busy = _nurse(unavailable_dates=unavailable, home_visits=full_day)
    assert busy.fully_scheduled_dates() == {dt.date(2022, 11, 20)}
    assert busy.is_fully_assigned()


def test_nurse_completed_visits() -> None:
    assert _nurse().has_completed_all_visits()
    assert not _nurse(home_visits=(HomeVisit(SLOT_A, Uid(1)),)).has_completed_all_visits()
    assert _nurse(home_visits=(HomeVisit(SLOT_A, Uid(1), visited=True),)).has_completed_all_visits()


def test_appointments_order_by_slot() -> None:
    patient = _patient(date_times=(SLOT_A, SLOT_B))
    nurse = _nurse()
    late = Appointment(patient, nurse, SLOT_B)
    early = Appointment(patient, nurse, SLOT_A)
    assert sorted([late, early]) == [early, late]
    assert early.involves(nurse) and early.has_patient(patient)
    assert early != late
    assert early == Appointment(patient, nurse, SLOT_A, visited=True)
    assert "nurse Benson Meier (Uid 2) visits patient Alice Pauline (Uid 1) [pending]" in str(early)
