"""Domain layer: entities and value objects. No dependencies on outer layers."""

from healthcare_xpress.domain.appointment import Appointment
from healthcare_xpress.domain.entities import (
    HomeVisit,
    Nurse,
    Patient,
    Person,
    Physician,
)
from healthcare_xpress.domain.slots import DateTime, SlotNumber
from healthcare_xpress.domain.uid import Uid, UidAllocator
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

__all__ = [
    "Address",
    "Appointment",
    "Category",
    "DateTime",
    "Email",
    "Gender",
    "HomeVisit",
    "Name",
    "Nurse",
    "Patient",
    "Person",
    "Phone",
    "Physician",
    "SlotNumber",
    "Tag",
    "Uid",
    "UidAllocator",
    "VisitStatus",
]
