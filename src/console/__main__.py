"""
Healthcare Xpress console: AddressBookService + JSON file storage.
Run: python -m console (from repo root, with .env or env vars set).
"""
import logging
from collections.abc import Iterator

from healthcare_xpress.application import (
    AddressBook,
    AddressBookService,
    DataLoadingError,
    HealthcareXpressError,
    Model,
)
from healthcare_xpress.domain import UidAllocator
from healthcare_xpress.infrastructure import (
    JsonAddressBookStorage,
    load_env_file,
    load_settings,
    sample_address_book,
)

from console import render
from console.help_loader import find_topics, get_help

logger = logging.getLogger(__name__)

PROMPT = "> "


def _initial_address_book(storage: JsonAddressBookStorage, allocator: UidAllocator) -> AddressBook:
    try:
        address_book = storage.read_address_book(allocator)
    except DataLoadingError as e:
        logger.warning("Data file %s is not in the correct format. Starting with an empty address book: %s", storage.path, e)
        return AddressBook()
    if address_book is None:
        logger.info("Data file %s not found. Starting with a sample address book", storage.path)
        return sample_address_book(allocator)
    for message in storage.last_load_errors:
        print(f"Skipped record: {message}")
    return address_book


def _show_help(query: str | None) -> None:
    try:
        catalogue = get_help()
    except (OSError, ValueError) as e:
        logger.error("Could not load help catalogue: %s", e)
        print("Help is not available right now.")
        return
    print(render.help_text(catalogue, find_topics(catalogue, query)))


def _read_line(lines: Iterator[str] | None) -> str | None:
    if lines is not None:
        return next(lines, None)
    try:
        return input(PROMPT)
    except EOFError:
        return None


def run(service: AddressBookService, lines: Iterator[str] | None = None) -> None:
    """Read commands until exit or end of input. Reads stdin when lines is None."""
    changed = []
    service.model.subscribe(lambda: changed.append(True))
    print(render.person_list(service.displayed_persons()))
    while True:
        text = _read_line(lines)
        if text is None:
            break
        text = text.strip()
        if not text:
            continue
        changed.clear()
        try:
            result = service.execute(text)
        except HealthcareXpressError as e:
            print(e)
            continue
        print(result.feedback)
        # A command may notify several times; show the list once.
        if changed:
            print(render.person_list(service.displayed_persons()))
        if result.show_help:
            _show_help(result.help_query)
        if result.exit:
            break


def main() -> None:
    load_env_file()
    settings = load_settings()
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=settings.log_level,
    )
    logger.info("Starting Healthcare Xpress with data file %s", settings.data_file)

    allocator = UidAllocator()
    storage = JsonAddressBookStorage(settings.data_file)
    model = Model(_initial_address_book(storage, allocator))
    service = AddressBookService(model, storage, allocator, phone_region=settings.phone_region)
    run(service)
    logger.info("Stopping Healthcare Xpress")


if __name__ == "__main__":
    main()
