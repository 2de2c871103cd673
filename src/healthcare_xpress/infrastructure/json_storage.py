"""JSON file implementation of AddressBookStorage.

File layout: {"persons": [ {...}, ... ]}. Each record is validated on its own;
a record that fails is skipped and reported, the rest still load.
"""

import datetime as dt
import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from healthcare_xpress.application.errors import DataLoadingError, IllegalValueError
from healthcare_xpress.application.model import AddressBook
from healthcare_xpress.domain import (
    Address,
    Category,
    DateTime,
    Email,
    Gender,
    HomeVisit,
    Name,
    Nurse,
    Patient,
    Person,
    Phone,
    Physician,
    Tag,
    Uid,
    UidAllocator,
    VisitStatus,
)

logger = logging.getLogger(__name__)

MISSING_FIELD_MESSAGE_FORMAT = "Person's {} field is missing!"
MESSAGE_DUPLICATE_PERSON = "Persons list contains duplicate person(s)."
MESSAGE_INVALID_DATE = "Dates should be in the form YYYY-MM-DD"
NOT_AVAILABLE = "NA"


def _checked(factory: Callable, text: str):
    try:
        return factory(text)
    except ValueError as e:
        raise IllegalValueError(str(e)) from e


def _required(value: Any, field_name: str) -> Any:
    if value is None:
        raise IllegalValueError(MISSING_FIELD_MESSAGE_FORMAT.format(field_name))
    return value


class JsonAdaptedHomeVisit(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    date_time: str = Field(alias="dateTime")
    patient_uid: int = Field(alias="patientUid")
    visited: bool = False

    @classmethod
    def from_model(cls, visit: HomeVisit) -> "JsonAdaptedHomeVisit":
        return cls(date_time=str(visit.date_time), patient_uid=visit.patient_uid.value, visited=visit.visited)

    def to_model_type(self) -> HomeVisit:
        return HomeVisit(
            date_time=_checked(DateTime.parse, self.date_time),
            patient_uid=_checked(Uid, self.patient_uid),
            visited=self.visited,
        )


class JsonAdaptedPerson(BaseModel):
    """Serialisable form of a Patient or Nurse. Required fields stay optional here so they can be reported."""

    model_config = ConfigDict(populate_by_name=True)

    uid: int | None = None
    name: str | None = None
    category: str | None = None
    gender: str | None = None
    phone: str | None = None
    email: str | None = None
    address: str | None = None
    date_times: list[str] = Field(default_factory=list, alias="dateTimes")
    tagged: list[str] = Field(default_factory=list)
    phys_name: str = Field(default=NOT_AVAILABLE, alias="phys name")
    phys_phone: str = Field(default=NOT_AVAILABLE, alias="phys phone")
    phys_email: str = Field(default=NOT_AVAILABLE, alias="phys email")
    visit_status: str | None = Field(default=None, alias="visit status")
    unavailable_dates: list[str] = Field(default_factory=list, alias="unavailableDates")
    home_visits: list[JsonAdaptedHomeVisit] = Field(default_factory=list, alias="homeVisits")

    @field_validator("phys_name", "phys_phone", "phys_email", mode="before")
    @classmethod
    def _absent_physician_field(cls, value: Any) -> Any:
        return NOT_AVAILABLE if value is None else value

    @field_validator("date_times", "tagged", "unavailable_dates", "home_visits", mode="before")
    @classmethod
    def _absent_list(cls, value: Any) -> Any:
        return [] if value is None else value

    @classmethod
    def from_model(cls, person: Person) -> "JsonAdaptedPerson":
        data: dict[str, Any] = dict(
            uid=person.uid.value,
            name=person.name.value,
            category=person.category.value,
            gender=person.gender.value,
            phone=person.phone.value,
            email=person.email.value,
            address=person.address.value,
            tagged=[t.name for t in person.sorted_tags()],
        )
        match person:
            case Patient():
                data["date_times"] = [str(d) for d in person.date_times]
                data["visit_status"] = str(person.visit_status)
                if person.physician is not None:
                    data["phys_name"] = person.physician.name.value
                    data["phys_phone"] = person.physician.phone.value
                    data["phys_email"] = person.physician.email.value
            case Nurse():
                data["unavailable_dates"] = sorted(d.isoformat() for d in person.unavailable_dates)
                data["home_visits"] = [JsonAdaptedHomeVisit.from_model(v) for v in person.home_visits]
        return cls(**data)

    def to_model_type(self, allocator: UidAllocator) -> Person:
        """Build the domain person. Raises IllegalValueError on a missing or invalid field."""
        uid = _checked(allocator.issue, _required(self.uid, "Uid"))
        common = dict(
            uid=uid,
            name=_checked(Name, _required(self.name, "Name")),
            gender=_checked(Gender, _required(self.gender, "Gender")),
            phone=_checked(Phone, _required(self.phone, "Phone")),
            email=_checked(Email, _required(self.email, "Email")),
            address=_checked(Address, _required(self.address, "Address")),
            tags=frozenset(_checked(Tag, t) for t in self.tagged),
        )
        category = _checked(Category, _required(self.category, "Category"))

        if category.is_nurse:
            return Nurse(
                **common,
                unavailable_dates=frozenset(self._unavailable_dates()),
                home_visits=tuple(v.to_model_type() for v in self.home_visits),
            )

        visit_status = _checked(VisitStatus.from_text, _required(self.visit_status, "VisitStatus"))
        return Patient(
            **common,
            date_times=tuple(_checked(DateTime.parse, d) for d in self.date_times),
            visit_status=visit_status,
            physician=self._physician(),
        )

    def _unavailable_dates(self) -> list[dt.date]:
        try:
            return [dt.date.fromisoformat(d) for d in self.unavailable_dates]
        except ValueError as e:
            raise IllegalValueError(MESSAGE_INVALID_DATE) from e

    def _physician(self) -> Physician | None:
        if (self.phys_name, self.phys_phone, self.phys_email) == (NOT_AVAILABLE,) * 3:
            return None
        return Physician(
            name=_checked(Name, self.phys_name),
            phone=_checked(Phone, self.phys_phone),
            email=_checked(Email, self.phys_email),
        )


class JsonSerializableAddressBook(BaseModel):
    persons: list[JsonAdaptedPerson] = Field(default_factory=list)

    @classmethod
    def from_model(cls, address_book: AddressBook) -> "JsonSerializableAddressBook":
        return cls(persons=[JsonAdaptedPerson.from_model(p) for p in address_book.persons])


class JsonAddressBookStorage:
    """Reads and rewrites one JSON file."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)
        self._last_load_errors: list[str] = []

    @property
    def path(self) -> Path:
        return self._path

    @property
    def last_load_errors(self) -> list[str]:
        return list(self._last_load_errors)

    def read_address_book(self, allocator: UidAllocator) -> AddressBook | None:
        self._last_load_errors = []
        if not self._path.exists():
            logger.info("Data file not found: %s", self._path)
            return None
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise DataLoadingError(f"Could not read data file {self._path}: {e}") from e
        if not isinstance(raw, dict) or not isinstance(raw.get("persons", []), list):
            raise DataLoadingError(f"Data file {self._path} is not an address book")

        persons: list[Person] = []
        for index, record in enumerate(raw.get("persons", [])):
            try:
                person = JsonAdaptedPerson.model_validate(record).to_model_type(allocator)
            except ValidationError as e:
                self._skip(index, f"Malformed person record: {e.errors()[0]['msg']}")
                continue
            except IllegalValueError as e:
                self._skip(index, str(e))
                continue
            if any(p.is_same_person(person) for p in persons):
                self._skip(index, MESSAGE_DUPLICATE_PERSON)
                continue
            persons.append(person)

        address_book = AddressBook(persons)
        logger.info("Loaded %d persons from %s", len(address_book), self._path)
        return address_book

    def _skip(self, index: int, message: str) -> None:
        logger.warning("Skipping person record %d in %s: %s", index, self._path, message)
        self._last_load_errors.append(f"Record {index}: {message}")

    def save_address_book(self, address_book: AddressBook) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = JsonSerializableAddressBook.from_model(address_book)
        self._path.write_text(payload.model_dump_json(by_alias=True, indent=4), encoding="utf-8")
        logger.debug("Saved %d persons to %s", len(address_book), self._path)
