"""Result types returned to the console."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CommandResult:
    """Feedback for the user, plus flags the console acts on."""

    feedback: str
    show_help: bool = False
    help_query: str | None = None
    exit: bool = False


@dataclass(frozen=True)
class ListCriteria:
    """Optional filters for the list command. None means "match anything"."""

    address: str | None = None
    category: str | None = None
    gender: str | None = None
    tag: str | None = None
    fully_assigned: bool | None = None
    fully_visited: bool | None = None
