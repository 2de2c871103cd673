"""Plain-text rendering of persons and help topics for the console."""

from healthcare_xpress.domain import Nurse, Patient, Person


def person_card(person: Person) -> str:
    lines = [
        f"[{person.category}] {person.uid}. {person.name}",
        f"  Gender: {person.gender}",
        f"  Phone: {person.phone}",
        f"  Email: {person.email}",
        f"  Address: {person.address}",
    ]
    if person.tags:
        lines.append("  Tags: " + " ".join(str(t) for t in person.sorted_tags()))
    match person:
        case Patient():
            if person.date_times:
                slots = ", ".join(
                    f"{d}{'' if d in person.assigned_slots else ' (unassigned)'}" for d in person.date_times
                )
                lines.append(f"  Home visits: {slots}")
            lines.append(f"  Visit status: {person.visit_status}")
            if person.physician is not None:
                lines.append(f"  Attending physician: {person.physician}")
        case Nurse():
            if person.unavailable_dates:
                dates = ", ".join(d.isoformat() for d in sorted(person.unavailable_dates))
                lines.append(f"  Unavailable: {dates}")
            if person.home_visits:
                visits = ", ".join(f"{v.date_time} (patient {v.patient_uid})" for v in person.home_visits)
                lines.append(f"  Home visits: {visits}")
    return "\n".join(lines)


def person_list(persons: list[Person]) -> str:
    if not persons:
        return "No persons to show."
    return "\n\n".join(person_card(p) for p in persons)


def help_text(catalogue: dict, topics: list[dict]) -> str:
    if not topics:
        return "No help topic matches that keyword."
    blocks = []
    for topic in topics:
        block = f"{topic['title']}\n  Usage: {topic['usage']}\n  Example: {topic['example']}"
        if topic.get("notes"):
            block += f"\n  {topic['notes']}"
        blocks.append(block)
    if catalogue.get("user_guide"):
        blocks.append(f"Refer to the user guide: {catalogue['user_guide']}")
    return "\n\n".join(blocks)
