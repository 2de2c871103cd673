"""Application ports (interfaces). Implemented by infrastructure adapters."""

from pathlib import Path
from typing import Protocol

from healthcare_xpress.application.model import AddressBook
from healthcare_xpress.domain import UidAllocator


class AddressBookStorage(Protocol):
    """Loads and saves the whole address book."""

    @property
    def path(self) -> Path | None:
        """Where the data lives, if it is file-backed."""
        ...

    @property
    def last_load_errors(self) -> list[str]:
        """Messages for records skipped by the most recent read."""
        ...

    def read_address_book(self, allocator: UidAllocator) -> AddressBook | None:
        """Return the stored address book, or None if nothing has been saved yet."""
        ...

    def save_address_book(self, address_book: AddressBook) -> None:
        """Replace the stored address book with the given one."""
        ...
