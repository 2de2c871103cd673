"""Tests for the YAML help catalogue loader."""

import pytest

from console import help_loader
from healthcare_xpress.application import CommandParser
from healthcare_xpress.domain import UidAllocator


def test_bundled_catalogue_covers_every_command() -> None:
    catalogue = help_loader.load_help()
    titles = {t["title"] for t in catalogue["topics"]}
    assert titles == set(CommandParser(UidAllocator()).command_words)


def test_find_topics_by_title_substring() -> None:
    catalogue = help_loader.load_help()
    assert [t["title"] for t in help_loader.find_topics(catalogue, "ASSIGN")] == ["assign"]
    assert len(help_loader.find_topics(catalogue, None)) == len(catalogue["topics"])
    assert help_loader.find_topics(catalogue, "nothing") == []


def test_help_path_env_override(tmp_path, monkeypatch) -> None:
    path = tmp_path / "help.yaml"
    path.write_text(
        "topics:\n  - title: add\n    usage: add ...\n    example: add c/P\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("HXPRESS_HELP_PATH", str(path))
    assert help_loader.get_help_path() == path.resolve()
    catalogue = help_loader.get_help(cache=False)
    assert [t["title"] for t in catalogue["topics"]] == ["add"]
    assert catalogue["user_guide"] == ""
    monkeypatch.delenv("HXPRESS_HELP_PATH")
    help_loader.get_help(cache=False)


@pytest.mark.parametrize(
    "text, message",
    [
        ("- just a list\n", "must be a dict"),
        ("topics: []\n", "non-empty 'topics'"),
        ("topics:\n  - title: add\n    usage: add\n", "missing 'example'"),
        (
            "topics:\n  - {title: add, usage: a, example: b}\n  - {title: add, usage: a, example: b}\n",
            "Duplicate help topic",
        ),
    ],
)
def test_invalid_catalogue_rejected(tmp_path, text, message) -> None:
    path = tmp_path / "help.yaml"
    path.write_text(text, encoding="utf-8")
    with pytest.raises(ValueError, match=message):
        help_loader.load_help(path)
