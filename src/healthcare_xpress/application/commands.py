"""Executable commands. Each validates fully before touching the model, so a failure leaves it unchanged."""

import dataclasses
import datetime as dt
from dataclasses import dataclass, field
from typing import Protocol

from healthcare_xpress.application.descriptor import EditPersonDescriptor, merge
from healthcare_xpress.application.dto import CommandResult, ListCriteria
from healthcare_xpress.application.errors import CommandError
from healthcare_xpress.application.filters import matches_criteria, name_contains_keywords
from healthcare_xpress.application.model import AddressBook, Model, show_all_persons
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

PATIENT_INDICATOR = "patient"
PERSON_INDICATOR = "person"

MESSAGE_PATIENT_ONLY_FIELDS = "Date and time and visit status are only applicable to patients."

MESSAGE_INVALID_PERSON_DISPLAYED_UID = (
    "The person UID provided is invalid or not in the displayed list."
)


def indicator(person: Person) -> str:
    return PATIENT_INDICATOR if isinstance(person, Patient) else PERSON_INDICATOR


def _displayed_or_raise(model: Model, uid: Uid) -> Person:
    person = model.find_displayed(uid)
    if person is None:
        raise CommandError(MESSAGE_INVALID_PERSON_DISPLAYED_UID)
    return person


class Command(Protocol):
    def execute(self, model: Model) -> CommandResult:
        ...


@dataclass(frozen=True)
class AddCommand:
    COMMAND_WORD = "add"
    MESSAGE_USAGE = (
        "add: Adds a patient or nurse to the address book.\n"
        "Parameters: c/CATEGORY n/NAME g/GENDER p/PHONE e/EMAIL a/ADDRESS [t/TAG]... "
        "[dt/DATE_AND_TIME]... [v/VISITED]\n"
        "Date and time and visit status are only applicable to patients.\n"
        "Example: add c/P n/John Doe g/M p/98765432 e/johnd@example.com "
        "a/311, Clementi Ave 2, #02-25 t/friends dt/2022-11-11T13:00 v/false"
    )
    MESSAGE_SUCCESS = "New {indicator} added: {summary}"
    MESSAGE_SIMILAR_PERSON = (
        "This person may already exist in the address book (similar to Uid {uid})."
    )

    category: Category
    name: Name
    gender: Gender
    phone: Phone
    email: Email
    address: Address
    tags: frozenset[Tag]
    date_times: tuple[DateTime, ...]
    visit_status: VisitStatus
    allocator: UidAllocator = field(compare=False)
    phone_region: str | None = field(default=None, compare=False)

    def _build(self, uid: Uid) -> Person:
        common = dict(
            uid=uid,
            name=self.name,
            gender=self.gender,
            phone=self.phone,
            email=self.email,
            address=self.address,
            tags=self.tags,
        )
        if self.category.is_patient:
            return Patient(**common, date_times=self.date_times, visit_status=self.visit_status)
        return Nurse(**common)

    def execute(self, model: Model) -> CommandResult:
        candidate = self._build(Uid(self.allocator.next_value))
        for existing in model.address_book.persons:
            if existing.is_similar_person(candidate, self.phone_region):
                raise CommandError(self.MESSAGE_SIMILAR_PERSON.format(uid=existing.uid))
        person = self._build(self.allocator.issue())
        if model.has_person(person):
            raise CommandError(f"This {indicator(person)} already exists in the address book.")
        model.add_person(person)
        return CommandResult(
            self.MESSAGE_SUCCESS.format(indicator=indicator(person), summary=person.summary())
        )


@dataclass(frozen=True)
class EditCommand:
    COMMAND_WORD = "edit"
    MESSAGE_USAGE = (
        "edit: Edits the details of the patient/nurse identified by the unique id number used in "
        "the displayed person list. Existing values will be overwritten by the input values.\n"
        "Parameters: id/UID [c/CATEGORY] [n/NAME] [g/GENDER] [p/PHONE] [e/EMAIL] [a/ADDRESS] "
        "[t/TAG]... [dt/DATE_AND_TIME]...\n"
        "Date and time are only applicable to patients.\n"
        "Example: edit id/1 p/91234567 e/johndoe@example.com"
    )
    MESSAGE_EDIT_PERSON_SUCCESS = "Edited {indicator}: {summary}"
    MESSAGE_NOT_EDITED = "At least one field to edit must be provided."
    MESSAGE_DUPLICATE_PERSON = "This {indicator} already exists in the address book."

    uid: Uid
    descriptor: EditPersonDescriptor

    def __post_init__(self):
        if not self.descriptor.is_any_field_edited():
            raise CommandError(self.MESSAGE_NOT_EDITED)

    def execute(self, model: Model) -> CommandResult:
        target = _displayed_or_raise(model, self.uid)
        category = self.descriptor.category or target.category
        if category.is_nurse and self.descriptor.date_times is not None:
            raise CommandError(MESSAGE_PATIENT_ONLY_FIELDS)
        edited = merge(target, self.descriptor)

        if not target.is_same_person(edited) and model.has_person(edited):
            raise CommandError(self.MESSAGE_DUPLICATE_PERSON.format(indicator=indicator(target)))

        model.set_person(target, edited)
        model.update_filtered_person_list(show_all_persons)
        stored = model.get_person(edited.uid) or edited
        return CommandResult(
            self.MESSAGE_EDIT_PERSON_SUCCESS.format(indicator=indicator(target), summary=stored.summary())
        )


@dataclass(frozen=True)
class DeleteCommand:
    COMMAND_WORD = "delete"
    MESSAGE_USAGE = (
        "delete: Deletes the person identified by the unique id shown in the displayed list.\n"
        "Parameters: id/UID\n"
        "Example: delete id/3"
    )
    MESSAGE_SUCCESS = "Deleted {indicator}: {summary}"

    uid: Uid

    def execute(self, model: Model) -> CommandResult:
        target = _displayed_or_raise(model, self.uid)
        model.delete_person(target)
        return CommandResult(
            self.MESSAGE_SUCCESS.format(indicator=indicator(target), summary=target.summary())
        )


def _render_criterion(value: str | bool | None) -> str:
    if value is None:
        return "NIL"
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


@dataclass(frozen=True)
class ListCommand:
    COMMAND_WORD = "list"
    MESSAGE_USAGE = (
        "list: Lists all enrolled users who fit the specified criteria, "
        "or all enrolled users if no criteria were specified.\n"
        "Parameters: [a/ADDRESS] [c/CATEGORY] [g/GENDER] [t/TAG] [as/FULLY_ASSIGNED] [v/FULLY_VISITED]\n"
        "Example: list c/N g/F"
    )
    MESSAGE_ARGUMENTS = (
        "ADDRESS: {}, CATEGORY: {}, GENDER: {}, TAG: {}, FULLY ASSIGNED: {}, FULLY VISITED: {}"
    )
    MESSAGE_SUCCESS = "Listed all persons with specifications: " + MESSAGE_ARGUMENTS

    criteria: ListCriteria = field(default_factory=ListCriteria)

    def execute(self, model: Model) -> CommandResult:
        criteria = self.criteria
        model.update_filtered_person_list(lambda p: matches_criteria(p, criteria))
        return CommandResult(
            self.MESSAGE_SUCCESS.format(
                _render_criterion(criteria.address),
                _render_criterion(criteria.category),
                _render_criterion(criteria.gender),
                _render_criterion(criteria.tag),
                _render_criterion(criteria.fully_assigned),
                _render_criterion(criteria.fully_visited),
            )
        )


@dataclass(frozen=True)
class FindCommand:
    COMMAND_WORD = "find"
    MESSAGE_USAGE = (
        "find: Finds all persons whose names contain any of the specified keywords "
        "(case-insensitive) and displays them.\n"
        "Parameters: KEYWORD [MORE_KEYWORDS]...\n"
        "Example: find alice bob"
    )
    MESSAGE_PERSONS_LISTED = "{count} patients and nurses listed!"

    keywords: tuple[str, ...]

    def execute(self, model: Model) -> CommandResult:
        keywords = self.keywords
        model.update_filtered_person_list(lambda p: name_contains_keywords(p, keywords))
        return CommandResult(self.MESSAGE_PERSONS_LISTED.format(count=len(model.filtered_persons)))


@dataclass(frozen=True)
class MarkCommand:
    COMMAND_WORD = "mark"
    MESSAGE_USAGE = (
        "mark: Marks the patient identified by the unique id as visited.\n"
        "Parameters: id/UID\n"
        "Example: mark id/2"
    )
    MESSAGE_SUCCESS = "Marked patient as visited: {summary}"
    MESSAGE_NOT_PATIENT = "Only patients can be marked as visited."

    uid: Uid

    def execute(self, model: Model) -> CommandResult:
        target = _displayed_or_raise(model, self.uid)
        if not isinstance(target, Patient):
            raise CommandError(self.MESSAGE_NOT_PATIENT)

        model.set_person(target, dataclasses.replace(target, visit_status=VisitStatus(visited=True)))
        for nurse in model.address_book.persons:
            if isinstance(nurse, Nurse) and nurse.visits_for(target.uid):
                visits = tuple(
                    dataclasses.replace(v, visited=True) if v.patient_uid == target.uid else v
                    for v in nurse.home_visits
                )
                model.set_person(nurse, dataclasses.replace(nurse, home_visits=visits))
        return CommandResult(self.MESSAGE_SUCCESS.format(summary=model.get_person(target.uid).summary()))


@dataclass(frozen=True)
class SetPhysicianCommand:
    COMMAND_WORD = "setphysician"
    MESSAGE_USAGE = (
        "setphysician: Sets the attending physician of the patient identified by the unique id.\n"
        "Parameters: id/UID n/NAME p/PHONE e/EMAIL\n"
        "Example: setphysician id/2 n/Dr Tan p/61234567 e/drtan@clinic.com"
    )
    MESSAGE_SUCCESS = "Attending physician {name} set for patient: {summary}"
    MESSAGE_NOT_PATIENT = "Attending physicians can only be set for patients."

    uid: Uid
    physician: Physician

    def execute(self, model: Model) -> CommandResult:
        target = _displayed_or_raise(model, self.uid)
        if not isinstance(target, Patient):
            raise CommandError(self.MESSAGE_NOT_PATIENT)
        edited = dataclasses.replace(target, physician=self.physician)
        model.set_person(target, edited)
        return CommandResult(
            self.MESSAGE_SUCCESS.format(name=self.physician.name, summary=edited.summary())
        )


@dataclass(frozen=True)
class AssignCommand:
    COMMAND_WORD = "assign"
    MESSAGE_USAGE = (
        "assign: Assigns a nurse to every unassigned home visit slot of a patient.\n"
        "Parameters: nid/NURSE_UID pid/PATIENT_UID\n"
        "Example: assign nid/3 pid/1"
    )
    MESSAGE_SUCCESS = "Assigned nurse {nurse} to {count} home visit(s) of patient {patient}: {slots}"
    MESSAGE_NOT_NURSE = "The person with Uid {uid} is not a nurse."
    MESSAGE_NOT_PATIENT = "The person with Uid {uid} is not a patient."
    MESSAGE_NOTHING_TO_ASSIGN = "Patient {patient} has no unassigned home visit slots."
    MESSAGE_UNAVAILABLE = "Nurse {nurse} is not available for the home visit at {slot}."

    nurse_uid: Uid
    patient_uid: Uid

    def execute(self, model: Model) -> CommandResult:
        nurse = _displayed_or_raise(model, self.nurse_uid)
        patient = _displayed_or_raise(model, self.patient_uid)
        if not isinstance(nurse, Nurse):
            raise CommandError(self.MESSAGE_NOT_NURSE.format(uid=self.nurse_uid))
        if not isinstance(patient, Patient):
            raise CommandError(self.MESSAGE_NOT_PATIENT.format(uid=self.patient_uid))

        slots = sorted(set(patient.unassigned_slots()))
        if not slots:
            raise CommandError(self.MESSAGE_NOTHING_TO_ASSIGN.format(patient=patient.name))
        for slot in slots:
            if not nurse.is_available(slot):
                raise CommandError(self.MESSAGE_UNAVAILABLE.format(nurse=nurse.name, slot=slot))

        visits = nurse.home_visits + tuple(HomeVisit(slot, patient.uid) for slot in slots)
        model.set_person(nurse, dataclasses.replace(nurse, home_visits=visits))
        return CommandResult(
            self.MESSAGE_SUCCESS.format(
                nurse=nurse.name,
                count=len(slots),
                patient=patient.name,
                slots=", ".join(str(s) for s in slots),
            )
        )


@dataclass(frozen=True)
class UnavailableCommand:
    COMMAND_WORD = "unavailable"
    MESSAGE_USAGE = (
        "unavailable: Marks the nurse identified by the unique id as unavailable on a date.\n"
        "Parameters: id/UID d/YYYY-MM-DD\n"
        "Example: unavailable id/3 d/2022-11-11"
    )
    MESSAGE_SUCCESS = "Nurse {nurse} marked unavailable on {date}"
    MESSAGE_NOT_NURSE = "Only nurses can be marked unavailable."
    MESSAGE_ALREADY_UNAVAILABLE = "Nurse {nurse} is already unavailable on {date}."
    MESSAGE_HAS_VISITS = "Nurse {nurse} has home visits on {date}."

    uid: Uid
    date: dt.date

    def execute(self, model: Model) -> CommandResult:
        nurse = _displayed_or_raise(model, self.uid)
        if not isinstance(nurse, Nurse):
            raise CommandError(self.MESSAGE_NOT_NURSE)
        if self.date in nurse.unavailable_dates:
            raise CommandError(self.MESSAGE_ALREADY_UNAVAILABLE.format(nurse=nurse.name, date=self.date))
        if any(v.date_time.date == self.date for v in nurse.home_visits):
            raise CommandError(self.MESSAGE_HAS_VISITS.format(nurse=nurse.name, date=self.date))

        edited = dataclasses.replace(nurse, unavailable_dates=nurse.unavailable_dates | {self.date})
        model.set_person(nurse, edited)
        return CommandResult(self.MESSAGE_SUCCESS.format(nurse=nurse.name, date=self.date))


@dataclass(frozen=True)
class AppointmentsCommand:
    COMMAND_WORD = "appointments"
    MESSAGE_USAGE = "appointments: Lists every scheduled home visit, earliest first."
    MESSAGE_NONE = "No appointments scheduled."
    MESSAGE_LISTED = "{count} appointment(s):\n{lines}"

    def execute(self, model: Model) -> CommandResult:
        appointments = model.appointments()
        if not appointments:
            return CommandResult(self.MESSAGE_NONE)
        lines = "\n".join(str(a) for a in appointments)
        return CommandResult(self.MESSAGE_LISTED.format(count=len(appointments), lines=lines))


@dataclass(frozen=True)
class ClearCommand:
    COMMAND_WORD = "clear"
    MESSAGE_SUCCESS = "Address book has been cleared!"

    def execute(self, model: Model) -> CommandResult:
        model.set_address_book(AddressBook())
        model.update_filtered_person_list(show_all_persons)
        return CommandResult(self.MESSAGE_SUCCESS)


@dataclass(frozen=True)
class HelpCommand:
    COMMAND_WORD = "help"
    MESSAGE_USAGE = "help: Shows program usage instructions.\nParameters: [KEYWORD]\nExample: help list"
    SHOWING_HELP_MESSAGE = "Opened help window."

    query: str | None = None

    def execute(self, model: Model) -> CommandResult:
        return CommandResult(self.SHOWING_HELP_MESSAGE, show_help=True, help_query=self.query)


@dataclass(frozen=True)
class ExitCommand:
    COMMAND_WORD = "exit"
    MESSAGE_EXIT_ACKNOWLEDGEMENT = "Thank you for using Healthcare Xpress!"

    def execute(self, model: Model) -> CommandResult:
        return CommandResult(self.MESSAGE_EXIT_ACKNOWLEDGEMENT, exit=True)


# Commands that change stored data; the service saves after each of them.
MUTATING_COMMANDS: tuple[type, ...] = (
    AddCommand,
    EditCommand,
    DeleteCommand,
    MarkCommand,
    SetPhysicianCommand,
    AssignCommand,
    UnavailableCommand,
    ClearCommand,
)
