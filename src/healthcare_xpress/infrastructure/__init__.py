"""Infrastructure layer: concrete implementations of application ports."""

from healthcare_xpress.infrastructure.json_storage import (
    JsonAdaptedPerson,
    JsonAddressBookStorage,
    JsonSerializableAddressBook,
)
from healthcare_xpress.infrastructure.memory_storage import InMemoryAddressBookStorage
from healthcare_xpress.infrastructure.sample_data import sample_address_book
from healthcare_xpress.infrastructure.settings import Settings, load_env_file, load_settings

__all__ = [
    "InMemoryAddressBookStorage",
    "JsonAdaptedPerson",
    "JsonAddressBookStorage",
    "JsonSerializableAddressBook",
    "Settings",
    "load_env_file",
    "load_settings",
    "sample_address_book",
]
