"""Predicates behind the list and find commands."""

from collections.abc import Sequence

from healthcare_xpress.application.dto import ListCriteria
from healthcare_xpress.domain import Nurse, Patient, Person


def is_fully_assigned(person: Person) -> bool:
    match person:
        case Patient():
            return person.has_been_fully_assigned()
        case Nurse():
            return person.is_fully_assigned()
    raise TypeError(f"Unsupported person type: {type(person).__name__}")


def is_fully_visited(person: Person) -> bool:
    match person:
        case Patient():
            return person.has_been_fully_visited()
        case Nurse():
            return person.has_completed_all_visits()
    raise TypeError(f"Unsupported person type: {type(person).__name__}")


def matches_criteria(person: Person, criteria: ListCriteria) -> bool:
    """True when every supplied criterion matches. Unset criteria always match."""
    if criteria.address is not None:
        if criteria.address.lower() not in person.address.value.lower():
            return False
    if criteria.category is not None:
        if person.category.value.lower() != criteria.category.strip().lower():
            return False
    if criteria.gender is not None:
        if person.gender.value.lower() != criteria.gender.strip().lower():
            return False
    if criteria.tag is not None:
        if not any(tag.name == criteria.tag for tag in person.tags):
            return False
    if criteria.fully_assigned is not None:
        if is_fully_assigned(person) != criteria.fully_assigned:
            return False
    if criteria.fully_visited is not None:
        if is_fully_visited(person) != criteria.fully_visited:
            return False
    return True


def name_contains_keywords(person: Person, keywords: Sequence[str]) -> bool:
    """True when any keyword equals a word of the name, ignoring case."""
    words = {w.lower() for w in person.name.value.split()}
    return any(k.lower() in words for k in keywords)
