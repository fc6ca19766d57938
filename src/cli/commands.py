"""Command objects produced by the parser. execute() runs one use case and returns the reply text."""

from dataclasses import dataclass

from cli.formatting import format_contact, format_event, format_failure
from ddd.application import (
    AddressBookService,
    ContactAdded,
    ContactChanges,
    ContactData,
    ContactDeleted,
    ContactEdited,
    EventAdded,
    EventChanges,
    EventData,
    EventDeleted,
    EventEdited,
)
from ddd.domain import Id


class Command:
    is_exit = False

    def execute(self, service: AddressBookService) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class AddContactCommand(Command):
    data: ContactData

    def execute(self, service: AddressBookService) -> str:
        result = service.add_contact(self.data)
        if isinstance(result, ContactAdded):
            return f"New {result.contact.kind} added:\n{format_contact(result.contact)}"
        return format_failure(result)


@dataclass(frozen=True)
class AddEventCommand(Command):
    data: EventData

    def execute(self, service: AddressBookService) -> str:
        result = service.add_event(self.data)
        if isinstance(result, EventAdded):
            return f"New event added:\n{format_event(result.event)}"
        return format_failure(result)


@dataclass(frozen=True)
class EditContactCommand(Command):
    contact_id: Id
    changes: ContactChanges

    def execute(self, service: AddressBookService) -> str:
        result = service.edit_contact(self.contact_id, self.changes)
        if isinstance(result, ContactEdited):
            return f"Edited {result.contact.kind}:\n{format_contact(result.contact)}"
        return format_failure(result)


@dataclass(frozen=True)
class EditEventCommand(Command):
    event_id: Id
    changes: EventChanges

    def execute(self, service: AddressBookService) -> str:
        result = service.edit_event(self.event_id, self.changes)
        if isinstance(result, EventEdited):
            return f"Edited event:\n{format_event(result.event)}"
        return format_failure(result)


@dataclass(frozen=True)
class DeleteContactCommand(Command):
    contact_id: Id

    def execute(self, service: AddressBookService) -> str:
        result = service.delete_contact(self.contact_id)
        if isinstance(result, ContactDeleted):
            return f"Deleted {result.contact.kind}:\n{format_contact(result.contact)}"
        return format_failure(result)


@dataclass(frozen=True)
class DeleteEventCommand(Command):
    event_id: Id

    def execute(self, service: AddressBookService) -> str:
        result = service.delete_event(self.event_id)
        if isinstance(result, EventDeleted):
            return f"Deleted event:\n{format_event(result.event)}"
        return format_failure(result)


def _listing(service: AddressBookService, kind: str | None, keywords: list[str] | None) -> str:
    if kind == "event":
        events = service.list_events() if keywords is None else service.find_events(keywords)
        if not events:
            return "No events found."
        return f"{len(events)} event(s):\n" + "\n\n".join(format_event(e) for e in events)
    if keywords is None:
        contacts = service.list_contacts(kind)
    else:
        contacts = service.find_contacts(keywords, kind)
    if not contacts:
        return "No contacts found."
    return f"{len(contacts)} contact(s):\n" + "\n\n".join(format_contact(c) for c in contacts)


@dataclass(frozen=True)
class ListCommand(Command):
    """List contacts (all, clients or vendors) or events."""

    kind: str | None = None

    def execute(self, service: AddressBookService) -> str:
        return _listing(service, self.kind, None)


@dataclass(frozen=True)
class FindCommand(Command):
    keywords: tuple[str, ...]
    kind: str | None = None

    def execute(self, service: AddressBookService) -> str:
        return _listing(service, self.kind, list(self.keywords))


@dataclass(frozen=True)
class HelpCommand(Command):
    usage: str

    def execute(self, service: AddressBookService) -> str:
        return self.usage


@dataclass(frozen=True)
class ExitCommand(Command):
    is_exit = True

    def execute(self, service: AddressBookService) -> str:
        return "Goodbye."
