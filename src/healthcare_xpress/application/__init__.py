"""Application layer: model, commands, parser, service, ports and DTOs. Depends only on domain."""

from healthcare_xpress.application.commands import (
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
from healthcare_xpress.application.descriptor import EditPersonDescriptor, merge
from healthcare_xpress.application.dto import CommandResult, ListCriteria
from healthcare_xpress.application.errors import (
    CommandError,
    DataLoadingError,
    HealthcareXpressError,
    IllegalValueError,
    ParseError,
)
from healthcare_xpress.application.model import AddressBook, Model, show_all_persons
from healthcare_xpress.application.parser import CommandParser
from healthcare_xpress.application.ports import AddressBookStorage
from healthcare_xpress.application.service import AddressBookService

__all__ = [
    "AddCommand",
    "AddressBook",
    "AddressBookService",
    "AddressBookStorage",
    "AppointmentsCommand",
    "AssignCommand",
    "ClearCommand",
    "Command",
    "CommandError",
    "CommandParser",
    "CommandResult",
    "DataLoadingError",
    "DeleteCommand",
    "EditCommand",
    "EditPersonDescriptor",
    "ExitCommand",
    "FindCommand",
    "HealthcareXpressError",
    "HelpCommand",
    "IllegalValueError",
    "ListCommand",
    "ListCriteria",
    "MarkCommand",
    "Model",
    "ParseError",
    "SetPhysicianCommand",
    "UnavailableCommand",
    "merge",
    "show_all_persons",
]
