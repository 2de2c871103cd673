"""Turns a line of user input into a command object.

Arguments are prefix-tagged (e.g. ``n/John Doe``). A prefix only counts when it
starts the input or follows whitespace; the text before the first prefix is the
preamble.
"""

import datetime as dt
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from healthcare_xpress.application.commands import (
    MESSAGE_PATIENT_ONLY_FIELDS,
    AddCommand,
    AppointmentsCommand,
    AssignCommand,
    ClearCommand,
    Command,
    DeleteCommand,
    EditCommand,
    ExitCommand,
    FindCommand,
    HelpCommand,
    ListCommand,
    MarkCommand,
    SetPhysicianCommand,
    UnavailableCommand,
)
from healthcare_xpress.application.descriptor import EditPersonDescriptor
from healthcare_xpress.application.dto import ListCriteria
from healthcare_xpress.application.errors import ParseError
from healthcare_xpress.domain import (
    Address,
    Category,
    DateTime,
    Email,
    Gender,
    Name,
    Phone,
    Physician,
    Tag,
    Uid,
    UidAllocator,
    VisitStatus,
)

PREFIX_CATEGORY = "c/"
PREFIX_NAME = "n/"
PREFIX_GENDER = "g/"
PREFIX_PHONE = "p/"
PREFIX_EMAIL = "e/"
PREFIX_ADDRESS = "a/"
PREFIX_TAG = "t/"
PREFIX_DATE_AND_TIME = "dt/"
PREFIX_VISIT_STATUS = "v/"
PREFIX_FULLY_ASSIGNED = "as/"
PREFIX_UID = "id/"
PREFIX_NURSE_UID = "nid/"
PREFIX_PATIENT_UID = "pid/"
PREFIX_DATE = "d/"

MESSAGE_INVALID_COMMAND_FORMAT = "Invalid command format! \n{usage}"
MESSAGE_UNKNOWN_COMMAND = "Unknown command"
MESSAGE_INVALID_BOOLEAN = "{what} should be either true or false"
MESSAGE_INVALID_DATE = "Dates should be in the form YYYY-MM-DD"

_COMMAND_FORMAT = re.compile(r"(?P<word>\S+)(?P<arguments>.*)", re.DOTALL)


@dataclass
class ArgumentMultimap:
    preamble: str = ""
    values: dict[str, list[str]] = field(default_factory=dict)

    def get_value(self, prefix: str) -> str | None:
        """Last value given for the prefix, or None."""
        found = self.values.get(prefix)
        return found[-1] if found else None

    def get_all_values(self, prefix: str) -> list[str]:
        return list(self.values.get(prefix, []))

    def has(self, prefix: str) -> bool:
        return prefix in self.values

    def duplicated(self, prefixes: Iterable[str]) -> list[str]:
        return [p for p in prefixes if len(self.values.get(p, [])) > 1]


def tokenize(args: str, *prefixes: str) -> ArgumentMultimap:
    """Split args into a preamble and the values following each prefix."""
    text = " " + args
    positions: list[tuple[int, str]] = []
    for prefix in prefixes:
        for match in re.finditer(r"(?<=\s)" + re.escape(prefix), text):
            positions.append((match.start(), prefix))
    positions.sort()

    result = ArgumentMultimap()
    first = positions[0][0] if positions else len(text)
    result.preamble = text[:first].strip()
    for i, (start, prefix) in enumerate(positions):
        end = positions[i + 1][0] if i + 1 < len(positions) else len(text)
        value = text[start + len(prefix):end].strip()
        result.values.setdefault(prefix, []).append(value)
    return result


def _value(factory: Callable, text: str):
    """Build a value object, turning its ValueError into a ParseError with the same message."""
    try:
        return factory(text.strip())
    except ValueError as e:
        raise ParseError(str(e)) from e


def parse_uid(text: str) -> Uid:
    return _value(Uid.parse, text)


def parse_tags(values: Iterable[str]) -> frozenset[Tag]:
    return frozenset(_value(Tag, v) for v in values)


def parse_date_times(values: Iterable[str]) -> tuple[DateTime, ...]:
    return tuple(_value(DateTime.parse, v) for v in values)


def parse_boolean(text: str, what: str) -> bool:
    lowered = text.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise ParseError(MESSAGE_INVALID_BOOLEAN.format(what=what))


def parse_date(text: str) -> dt.date:
    try:
        return dt.date.fromisoformat(text.strip())
    except ValueError as e:
        raise ParseError(MESSAGE_INVALID_DATE) from e


def _collection_or_reset(values: list[str]) -> list[str]:
    """A single empty value (``t/``) means "clear the collection"."""
    if len(values) == 1 and values[0] == "":
        return []
    return values


def _invalid(usage: str) -> ParseError:
    return ParseError(MESSAGE_INVALID_COMMAND_FORMAT.format(usage=usage))


class CommandParser:
    """Parses user input. New records draw uids from the injected allocator."""

    def __init__(self, allocator: UidAllocator, phone_region: str | None = None) -> None:
        self._allocator = allocator
        self._phone_region = phone_region
        self._parsers: dict[str, Callable[[str], Command]] = {
            AddCommand.COMMAND_WORD: self._parse_add,
            EditCommand.COMMAND_WORD: self._parse_edit,
            DeleteCommand.COMMAND_WORD: self._parse_delete,
            ListCommand.COMMAND_WORD: self._parse_list,
            FindCommand.COMMAND_WORD: self._parse_find,
            MarkCommand.COMMAND_WORD: self._parse_mark,
            SetPhysicianCommand.COMMAND_WORD: self._parse_set_physician,
            AssignCommand.COMMAND_WORD: self._parse_assign,
            UnavailableCommand.COMMAND_WORD: self._parse_unavailable,
            AppointmentsCommand.COMMAND_WORD: lambda args: self._no_arguments(args, AppointmentsCommand),
            ClearCommand.COMMAND_WORD: lambda args: self._no_arguments(args, ClearCommand),
            ExitCommand.COMMAND_WORD: lambda args: self._no_arguments(args, ExitCommand),
            HelpCommand.COMMAND_WORD: lambda args: HelpCommand(args.strip() or None),
        }

    @property
    def command_words(self) -> list[str]:
        return sorted(self._parsers)

    def parse(self, user_input: str) -> Command:
        match = _COMMAND_FORMAT.fullmatch((user_input or "").strip())
        if match is None:
            raise _invalid(HelpCommand.MESSAGE_USAGE)
        parser = self._parsers.get(match.group("word"))
        if parser is None:
            raise ParseError(MESSAGE_UNKNOWN_COMMAND)
        return parser(match.group("arguments"))

    def _no_arguments(self, args: str, command_type: type) -> Command:
        # Trailing text after clear/exit/appointments is ignored.
        return command_type()

    def _parse_add(self, args: str) -> AddCommand:
        usage = AddCommand.MESSAGE_USAGE
        required = (PREFIX_CATEGORY, PREFIX_NAME, PREFIX_GENDER, PREFIX_PHONE, PREFIX_EMAIL, PREFIX_ADDRESS)
        argmap = tokenize(
            args, *required, PREFIX_TAG, PREFIX_DATE_AND_TIME, PREFIX_VISIT_STATUS
        )
        if argmap.preamble or not all(argmap.has(p) for p in required):
            raise _invalid(usage)

        category = _value(Category, argmap.get_value(PREFIX_CATEGORY))
        date_times = parse_date_times(argmap.get_all_values(PREFIX_DATE_AND_TIME))
        visit_text = argmap.get_value(PREFIX_VISIT_STATUS)
        if category.is_nurse and (date_times or visit_text is not None):
            raise ParseError(MESSAGE_PATIENT_ONLY_FIELDS)
        visit_status = _value(VisitStatus.from_text, visit_text) if visit_text is not None else VisitStatus()

        return AddCommand(
            category=category,
            name=_value(Name, argmap.get_value(PREFIX_NAME)),
            gender=_value(Gender, argmap.get_value(PREFIX_GENDER)),
            phone=_value(Phone, argmap.get_value(PREFIX_PHONE)),
            email=_value(Email, argmap.get_value(PREFIX_EMAIL)),
            address=_value(Address, argmap.get_value(PREFIX_ADDRESS)),
            tags=parse_tags(argmap.get_all_values(PREFIX_TAG)),
            date_times=date_times,
            visit_status=visit_status,
            allocator=self._allocator,
            phone_region=self._phone_region,
        )

    def _parse_edit(self, args: str) -> EditCommand:
        argmap = tokenize(
            args,
            PREFIX_UID,
            PREFIX_CATEGORY,
            PREFIX_NAME,
            PREFIX_GENDER,
            PREFIX_PHONE,
            PREFIX_EMAIL,
            PREFIX_ADDRESS,
            PREFIX_TAG,
            PREFIX_DATE_AND_TIME,
        )
        if argmap.preamble or argmap.get_value(PREFIX_UID) is None:
            raise _invalid(EditCommand.MESSAGE_USAGE)
        uid = parse_uid(argmap.get_value(PREFIX_UID))

        def optional(prefix: str, factory: Callable):
            text = argmap.get_value(prefix)
            return None if text is None else _value(factory, text)

        tags = None
        if argmap.has(PREFIX_TAG):
            tags = parse_tags(_collection_or_reset(argmap.get_all_values(PREFIX_TAG)))
        date_times = None
        if argmap.has(PREFIX_DATE_AND_TIME):
            date_times = parse_date_times(_collection_or_reset(argmap.get_all_values(PREFIX_DATE_AND_TIME)))

        descriptor = EditPersonDescriptor(
            category=optional(PREFIX_CATEGORY, Category),
            name=optional(PREFIX_NAME, Name),
            gender=optional(PREFIX_GENDER, Gender),
            phone=optional(PREFIX_PHONE, Phone),
            email=optional(PREFIX_EMAIL, Email),
            address=optional(PREFIX_ADDRESS, Address),
            tags=tags,
            date_times=date_times,
        )
        if not descriptor.is_any_field_edited():
            raise ParseError(EditCommand.MESSAGE_NOT_EDITED)
        return EditCommand(uid, descriptor)

    def _parse_uid_only(self, args: str, usage: str) -> Uid:
        argmap = tokenize(args, PREFIX_UID)
        if argmap.preamble or argmap.get_value(PREFIX_UID) is None:
            raise _invalid(usage)
        return parse_uid(argmap.get_value(PREFIX_UID))

    def _parse_delete(self, args: str) -> DeleteCommand:
        return DeleteCommand(self._parse_uid_only(args, DeleteCommand.MESSAGE_USAGE))

    def _parse_mark(self, args: str) -> MarkCommand:
        return MarkCommand(self._parse_uid_only(args, MarkCommand.MESSAGE_USAGE))

    def _parse_list(self, args: str) -> ListCommand:
        prefixes = (
            PREFIX_ADDRESS,
            PREFIX_CATEGORY,
            PREFIX_GENDER,
            PREFIX_TAG,
            PREFIX_FULLY_ASSIGNED,
            PREFIX_VISIT_STATUS,
        )
        argmap = tokenize(args, *prefixes)
        if argmap.preamble or argmap.duplicated(prefixes):
            raise _invalid(ListCommand.MESSAGE_USAGE)

        address = argmap.get_value(PREFIX_ADDRESS)
        category = argmap.get_value(PREFIX_CATEGORY)
        gender = argmap.get_value(PREFIX_GENDER)
        tag = argmap.get_value(PREFIX_TAG)
        if address is not None:
            _value(Address, address)
        if category is not None:
            _value(Category, category)
        if gender is not None:
            _value(Gender, gender)
        if tag is not None:
            _value(Tag, tag)

        assigned_text = argmap.get_value(PREFIX_FULLY_ASSIGNED)
        visited_text = argmap.get_value(PREFIX_VISIT_STATUS)
        return ListCommand(
            ListCriteria(
                address=address,
                category=category,
                gender=gender,
                tag=tag,
                fully_assigned=None if assigned_text is None else parse_boolean(assigned_text, "Fully assigned"),
                fully_visited=None if visited_text is None else parse_boolean(visited_text, "Fully visited"),
            )
        )

    def _parse_find(self, args: str) -> FindCommand:
        keywords = tuple(args.split())
        if not keywords:
            raise _invalid(FindCommand.MESSAGE_USAGE)
        return FindCommand(keywords)

    def _parse_set_physician(self, args: str) -> SetPhysicianCommand:
        usage = SetPhysicianCommand.MESSAGE_USAGE
        required = (PREFIX_UID, PREFIX_NAME, PREFIX_PHONE, PREFIX_EMAIL)
        argmap = tokenize(args, *required)
        if argmap.preamble or not all(argmap.has(p) for p in required):
            raise _invalid(usage)
        physician = Physician(
            name=_value(Name, argmap.get_value(PREFIX_NAME)),
            phone=_value(Phone, argmap.get_value(PREFIX_PHONE)),
            email=_value(Email, argmap.get_value(PREFIX_EMAIL)),
        )
        return SetPhysicianCommand(parse_uid(argmap.get_value(PREFIX_UID)), physician)

    def _parse_assign(self, args: str) -> AssignCommand:
        argmap = tokenize(args, PREFIX_NURSE_UID, PREFIX_PATIENT_UID)
        nurse_text = argmap.get_value(PREFIX_NURSE_UID)
        patient_text = argmap.get_value(PREFIX_PATIENT_UID)
        if argmap.preamble or nurse_text is None or patient_text is None:
            raise _invalid(AssignCommand.MESSAGE_USAGE)
        return AssignCommand(parse_uid(nurse_text), parse_uid(patient_text))

    def _parse_unavailable(self, args: str) -> UnavailableCommand:
        argmap = tokenize(args, PREFIX_UID, PREFIX_DATE)
        uid_text = argmap.get_value(PREFIX_UID)
        date_text = argmap.get_value(PREFIX_DATE)
        if argmap.preamble or uid_text is None or date_text is None:
            raise _invalid(UnavailableCommand.MESSAGE_USAGE)
        return UnavailableCommand(parse_uid(uid_text), parse_date(date_text))
