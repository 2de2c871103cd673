"""In-memory implementation of AddressBookStorage (no file)."""

from pathlib import Path

from healthcare_xpress.application.model import AddressBook
from healthcare_xpress.domain import Person, UidAllocator


class InMemoryAddressBookStorage:
    """Keeps the last saved persons in memory. Order preserved by insertion.
    save_count lets callers check which commands persisted.
    """

    def __init__(self, persons: list[Person] | None = None) -> None:
        self._persons: list[Person] | None = list(persons) if persons is not None else None
        self.save_count = 0

    @property
    def path(self) -> Path | None:
        return None

    @property
    def last_load_errors(self) -> list[str]:
        return []

    @property
    def saved_persons(self) -> list[Person]:
        return list(self._persons or [])

    def read_address_book(self, allocator: UidAllocator) -> AddressBook | None:
        if self._persons is None:
            return None
        for person in self._persons:
            allocator.observe(person.uid)
        return AddressBook(self._persons)

    def save_address_book(self, address_book: AddressBook) -> None:
        self._persons = address_book.persons
        self.save_count += 1
