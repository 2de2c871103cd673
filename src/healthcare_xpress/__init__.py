"""
Healthcare Xpress core: clean-architecture layout.

- domain: value objects, Patient/Nurse records, uid allocation, slots. No outer dependencies.
- application: model, commands, parser, AddressBookService, ports (AddressBookStorage), DTOs.
- infrastructure: adapters (JsonAddressBookStorage, InMemoryAddressBookStorage), settings.
"""

from healthcare_xpress.application import (
    AddressBook,
    AddressBookService,
    AddressBookStorage,
    CommandError,
    CommandResult,
    EditPersonDescriptor,
    Model,
    ParseError,
    merge,
)
from healthcare_xpress.domain import Nurse, Patient, Person, Uid, UidAllocator
from healthcare_xpress.infrastructure import InMemoryAddressBookStorage, JsonAddressBookStorage

__all__ = [
    "AddressBook",
    "AddressBookService",
    "AddressBookStorage",
    "CommandError",
    "CommandResult",
    "EditPersonDescriptor",
    "InMemoryAddressBookStorage",
    "JsonAddressBookStorage",
    "Model",
    "Nurse",
    "ParseError",
    "Patient",
    "Person",
    "Uid",
    "UidAllocator",
    "merge",
]
