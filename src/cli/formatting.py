"""Plain-text rendering of contacts, events and failures."""

from ddd.application import ContactSummary, Duplicate, EventSummary, Invalid, NotFound
from ddd.infrastructure.phone import format_phone


def format_contact(s: ContactSummary) -> str:
    """Format one contact as a card: id, kind and name first, then details."""
    parts = [f"#{s.contact_id} {s.name} ({s.kind})"]
    parts.append(f"Phone: {format_phone(s.phone)}")
    parts.append(f"Email: {s.email}")
    parts.append(f"Address: {s.address}")
    if s.service:
        parts.append(f"Service: {s.service}")
    if s.tags:
        parts.append("Tags: " + ", ".join(s.tags))
    if s.event_ids:
        parts.append("Events: " + ", ".join(f"#{i}" for i in s.event_ids))
    return "\n".join(parts)


def _people(ids: tuple[int, ...], names: tuple[str, ...]) -> str:
    if not ids:
        return "-"
    if len(names) != len(ids):
        return ", ".join(f"#{i}" for i in ids)
    return ", ".join(f"{name} (#{i})" for i, name in zip(ids, names))


def format_event(s: EventSummary) -> str:
    return "\n".join(
        [
            f"#{s.event_id} {s.name} on {s.date.isoformat()}",
            f"Description: {s.description}",
            f"Clients: {_people(s.client_ids, s.client_names)}",
            f"Vendors: {_people(s.vendor_ids, s.vendor_names)}",
        ]
    )


def format_failure(result: NotFound | Duplicate | Invalid) -> str:
    if isinstance(result, NotFound):
        return f"Not found: {result.reason}"
    if isinstance(result, Duplicate):
        return f"Already exists: {result.reason}"
    return f"Invalid: {result.reason}"
