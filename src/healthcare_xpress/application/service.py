"""Runs user commands: parse, execute against the model, save on change."""

import logging

from healthcare_xpress.application.commands import MUTATING_COMMANDS
from healthcare_xpress.application.dto import CommandResult
from healthcare_xpress.application.errors import CommandError
from healthcare_xpress.application.model import AddressBook, Model
from healthcare_xpress.application.parser import CommandParser
from healthcare_xpress.application.ports import AddressBookStorage
from healthcare_xpress.domain import Appointment, Person, UidAllocator

logger = logging.getLogger(__name__)

MESSAGE_SAVE_FAILED = "Could not save data to file: {error}"


class AddressBookService:
    """Core flow: one command line in, one result out. Single-threaded; one command at a time."""

    def __init__(
        self,
        model: Model,
        storage: AddressBookStorage,
        allocator: UidAllocator,
        *,
        phone_region: str | None = None,
    ) -> None:
        self._model = model
        self._storage = storage
        self._parser = CommandParser(allocator, phone_region=phone_region)

    @property
    def model(self) -> Model:
        return self._model

    @property
    def command_words(self) -> list[str]:
        return self._parser.command_words

    def execute(self, command_text: str) -> CommandResult:
        """Parse and run one command. Raises ParseError or CommandError on failure."""
        logger.info("----------------[USER COMMAND][%s]", command_text)
        command = self._parser.parse(command_text)
        if not isinstance(command, MUTATING_COMMANDS):
            result = command.execute(self._model)
            logger.info("Result: %s", result.feedback.splitlines()[0] if result.feedback else "")
            return result

        before = AddressBook(self._model.address_book.persons)
        predicate = self._model.predicate
        result = command.execute(self._model)
        try:
            self._storage.save_address_book(self._model.address_book)
        except OSError as e:
            logger.error("Saving address book failed, changes rolled back: %s", e)
            self._model.set_address_book(before)
            self._model.update_filtered_person_list(predicate)
            raise CommandError(MESSAGE_SAVE_FAILED.format(error=e)) from e
        logger.info("Result: %s", result.feedback.splitlines()[0] if result.feedback else "")
        return result

    def displayed_persons(self) -> list[Person]:
        return self._model.filtered_persons

    def appointments(self) -> list[Appointment]:
        return self._model.appointments()
