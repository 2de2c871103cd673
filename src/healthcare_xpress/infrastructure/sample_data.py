"""Starter records used when no data file exists yet."""

import datetime as dt

from healthcare_xpress.application.model import AddressBook
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
    SlotNumber,
    Tag,
    UidAllocator,
    VisitStatus,
)


def _tags(*names: str) -> frozenset[Tag]:
    return frozenset(Tag(n) for n in names)


def sample_address_book(allocator: UidAllocator) -> AddressBook:
    alex = Patient(
        uid=allocator.issue(),
        name=Name("Alex Yeoh"),
        gender=Gender("M"),
        phone=Phone("87438807"),
        email=Email("alexyeoh@example.com"),
        address=Address("Blk 30 Geylang Street 29, #06-40"),
        tags=_tags("diabetic"),
        date_times=(
            DateTime(dt.date(2022, 11, 11), SlotNumber.SECOND),
            DateTime(dt.date(2022, 11, 18), SlotNumber.SECOND),
        ),
    )
    bernice = Patient(
        uid=allocator.issue(),
        name=Name("Bernice Yu"),
        gender=Gender("F"),
        phone=Phone("99272758"),
        email=Email("berniceyu@example.com"),
        address=Address("Blk 30 Lorong 3 Serangoon Gardens, #07-18"),
        tags=_tags("wheelchair", "elderly"),
        date_times=(DateTime(dt.date(2022, 11, 12), SlotNumber.FIRST),),
        visit_status=VisitStatus(visited=True),
    )
    cola = Nurse(
        uid=allocator.issue(),
        name=Name("Cola"),
        gender=Gender("F"),
        phone=Phone("98345432"),
        email=Email("cola@example.com"),
        address=Address("Blk 431 Ang Mo Kio Ave 10, Singapore 560431 #01-03"),
        tags=_tags("Pediatric", "heartDiseaseSpecialist"),
        home_visits=(HomeVisit(DateTime(dt.date(2022, 11, 11), SlotNumber.SECOND), alex.uid),),
    )
    david = Nurse(
        uid=allocator.issue(),
        name=Name("David Li"),
        gender=Gender("M"),
        phone=Phone("91031282"),
        email=Email("lidavid@example.com"),
        address=Address("Blk 436 Serangoon Gardens Street 26, #16-43"),
        unavailable_dates=frozenset({dt.date(2022, 11, 14)}),
    )
    return AddressBook([alex, bernice, cola, david])
