"""Appointment: one nurse visiting one patient in one slot."""

import functools
from dataclasses import dataclass

from healthcare_xpress.domain.entities import Nurse, Patient, Person
from healthcare_xpress.domain.slots import DateTime


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class Appointment:
    patient: Patient
    nurse: Nurse
    date_time: DateTime
    visited: bool = False

    def involves(self, person: Person) -> bool:
        return self.patient == person or self.nurse == person

    def has_patient(self, patient: Patient) -> bool:
        return self.patient == patient

    def has_nurse(self, nurse: Nurse) -> bool:
        return self.nurse == nurse

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Appointment):
            return NotImplemented
        return (
            self.patient == other.patient
            and self.nurse == other.nurse
            and self.date_time == other.date_time
        )

    def __hash__(self) -> int:
        return hash((self.patient.uid, self.nurse.uid, self.date_time))

    def __lt__(self, other: "Appointment") -> bool:
        if not isinstance(other, Appointment):
            return NotImplemented
        return self.date_time < other.date_time

    def __str__(self) -> str:
        status = "visited" if self.visited else "pending"
        return (
            f"{self.date_time}: nurse {self.nurse.name} (Uid {self.nurse.uid}) visits "
            f"patient {self.patient.name} (Uid {self.patient.uid}) [{status}]"
        )
