"""Tests for console rendering and the REPL loop. No real stdin; lines are passed in."""

from console import render
from console.__main__ import run
from healthcare_xpress.application import AddressBookService, Model
from healthcare_xpress.domain import UidAllocator
from healthcare_xpress.infrastructure import InMemoryAddressBookStorage, sample_address_book


def _service(model: Model | None = None) -> AddressBookService:
    return AddressBookService(model or Model(), InMemoryAddressBookStorage(), UidAllocator(start=10))


def test_sample_book_is_consistent() -> None:
    allocator = UidAllocator()
    book = sample_address_book(allocator)
    assert len(book) == 4
    assert allocator.next_value == 5
    alex = book.persons[0]
    assert [str(d) for d in alex.unassigned_slots()] == ["2022-11-18T13:00"]


def test_person_card_shows_variant_details() -> None:
    book = sample_address_book(UidAllocator())
    alex, _, cola, david = book.persons
    alex_card = render.person_card(alex)
    assert alex_card.splitlines()[0] == "[P] 1. Alex Yeoh"
    assert "2022-11-18T13:00 (unassigned)" in alex_card
    assert "Visit status: not visited" in alex_card
    assert "Home visits: 2022-11-11T13:00 (patient 1)" in render.person_card(cola)
    assert "Unavailable: 2022-11-14" in render.person_card(david)


def test_person_list_empty() -> None:
    assert render.person_list([]) == "No persons to show."


def test_help_text_includes_usage_and_guide() -> None:
    catalogue = {
        "user_guide": "https://example.com/guide",
        "topics": [{"title": "mark", "usage": "mark id/UID", "example": "mark id/2"}],
    }
    text = render.help_text(catalogue, catalogue["topics"])
    assert "Usage: mark id/UID" in text
    assert text.endswith("Refer to the user guide: https://example.com/guide")
    assert render.help_text(catalogue, []) == "No help topic matches that keyword."


def test_run_executes_until_exit(capsys) -> None:
    service = _service(Model(sample_address_book(UidAllocator())))
    run(service, iter(["find Alex", "", "bogus", "exit", "clear"]))
    out = capsys.readouterr().out
    assert "1 patients and nurses listed!" in out
    assert "Unknown command" in out
    assert "Thank you for using Healthcare Xpress!" in out
    assert len(service.model.address_book) == 4


def test_run_prints_help_topics(capsys) -> None:
    run(_service(), iter(["help unavail"]))
    out = capsys.readouterr().out
    assert "Opened help window." in out
    assert "Usage: unavailable id/UID d/YYYY-MM-DD" in out


def test_run_prints_list_once_per_command(capsys) -> None:
    service = _service(Model(sample_address_book(UidAllocator())))
    run(service, iter(["mark id/1"]))
    out = capsys.readouterr().out
    assert "Marked patient as visited:" in out
    # Initial listing plus one listing after the command.
    assert out.count("[P] 1. Alex Yeoh") == 2
