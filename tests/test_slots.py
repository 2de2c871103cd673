"""Tests for home-visit date-time slots."""

import datetime as dt

import pytest

from healthcare_xpress.domain import DateTime, SlotNumber


def test_parse_iso_form() -> None:
    d = DateTime.parse("2022-11-11T13:00")
    assert d.date == dt.date(2022, 11, 11)
    assert d.slot is SlotNumber.SECOND
    assert str(d) == "2022-11-11T13:00"


def test_parse_slot_number_form() -> None:
    assert DateTime.parse("2022-11-11,4") == DateTime(dt.date(2022, 11, 11), SlotNumber.FOURTH)
    assert str(DateTime.parse("2022-11-11, 1")) == "2022-11-11T10:00"


def test_slot_times() -> None:
    assert [s.time.hour for s in SlotNumber] == [10, 13, 16, 19]
    assert SlotNumber.from_time(dt.time(16, 0)) is SlotNumber.THIRD


@pytest.mark.parametrize(
    "text",
    ["", "2022-11-11", "2022-11-11T14:00", "2022-11-11,5", "2022-11-11,0", "2022-13-01T10:00", "tomorrow"],
)
def test_invalid_forms_rejected(text) -> None:
    assert not DateTime.is_valid(text)
    with pytest.raises(ValueError, match="YYYY-MM-DD"):
        DateTime.parse(text)


def test_chronological_order() -> None:
    early = DateTime.parse("2022-11-11T19:00")
    later = DateTime.parse("2022-11-12T10:00")
    same_day_later = DateTime.parse("2022-11-11,4")
    assert early < later
    assert early <= same_day_later
    assert sorted([later, early]) == [early, later]
    assert early.export() == dt.datetime(2022, 11, 11, 19, 0)
