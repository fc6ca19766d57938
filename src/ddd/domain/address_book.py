"""AddressBook aggregate: the only sanctioned entry point for creating, linking and deleting."""

from collections.abc import Iterable
from datetime import date as Date

from ddd.domain.contact import Client, Contact, Vendor
from ddd.domain.errors import DddError, DuplicateError, InvalidStateError, NotFoundError
from ddd.domain.event import Event
from ddd.domain.values import Description, Id, Name


class AddressBook:
    """
    Owns every contact and event, keyed by Id.

    Contacts and events are unique by name. Every mutation either completes or
    raises before changing anything, so the contact-event links stay symmetric
    and no event is left without a client.
    """

    def __init__(self, *, next_contact_id: int = 0, next_event_id: int = 0) -> None:
        self._contacts: dict[Id, Contact] = {}
        self._events: dict[Id, Event] = {}
        self._next_contact_id = next_contact_id
        self._next_event_id = next_event_id

    # --- ids ---

    @property
    def contact_id_counter(self) -> int:
        """Value the next allocated contact id will have."""
        return self._next_contact_id

    @property
    def event_id_counter(self) -> int:
        return self._next_event_id

    def next_contact_id(self) -> Id:
        contact_id = Id(self._next_contact_id)
        self._next_contact_id += 1
        return contact_id

    def next_event_id(self) -> Id:
        event_id = Id(self._next_event_id)
        self._next_event_id += 1
        return event_id

    # --- lookup ---

    def get_contact(self, contact_id: Id) -> Contact:
        contact = self._contacts.get(contact_id)
        if contact is None:
            raise NotFoundError(f"No contact with id {contact_id}.")
        return contact

    def get_event(self, event_id: Id) -> Event:
        event = self._events.get(event_id)
        if event is None:
            raise NotFoundError(f"No event with id {event_id}.")
        return event

    def find_contact(self, contact_id: Id) -> Contact | None:
        return self._contacts.get(contact_id)

    def find_event(self, event_id: Id) -> Event | None:
        return self._events.get(event_id)

    def find_contact_named(self, name: Name) -> Contact | None:
        for contact in self._contacts.values():
            if contact.name.key == name.key:
                return contact
        return None

    def find_event_named(self, name: Name) -> Event | None:
        for event in self._events.values():
            if event.name.key == name.key:
                return event
        return None

    def get_contacts(self) -> tuple[Contact, ...]:
        return tuple(self._contacts.values())

    def get_clients(self) -> tuple[Client, ...]:
        return tuple(c for c in self._contacts.values() if isinstance(c, Client))

    def get_vendors(self) -> tuple[Vendor, ...]:
        return tuple(c for c in self._contacts.values() if isinstance(c, Vendor))

    def get_events(self) -> tuple[Event, ...]:
        return tuple(self._events.values())

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Contact):
            return self._contacts.get(item.id) is item
        if isinstance(item, Event):
            return self._events.get(item.id) is item
        return False

    # --- contacts ---

    def add_contact(self, contact: Contact) -> None:
        """Insert contact. DuplicateError if a same-name contact or the id is taken."""
        for existing in self._contacts.values():
            if existing.is_same_contact(contact):
                raise DuplicateError(f"A contact named '{existing.name}' already exists.")
        if contact.id in self._contacts:
            raise DuplicateError(f"Contact id {contact.id} is already in use.")
        self._contacts[contact.id] = contact
        self._next_contact_id = max(self._next_contact_id, contact.id.value + 1)

    def create_contact(self, contact_cls: type[Contact], name: Name, **details) -> Contact:
        """Build a contact with a fresh id and insert it. No id is used up on failure."""
        existing = self.find_contact_named(name)
        if existing is not None:
            raise DuplicateError(f"A contact named '{existing.name}' already exists.")
        contact = contact_cls(self.next_contact_id(), name, **details)
        self.add_contact(contact)
        return contact

    def edit_contact(self, contact: Contact, **changes) -> None:
        self._require_contact(contact)
        new_name = changes.get("name")
        if new_name is not None:
            existing = self.find_contact_named(new_name)
            if existing is not None and existing is not contact:
                raise DuplicateError(f"A contact named '{existing.name}' already exists.")
        contact.update(**changes)

    def remove_contact(self, contact: Contact) -> None:
        """Unlink contact from every event, then drop it.

        InvalidStateError (nothing changed) if it is the only client of an event.
        """
        self._require_contact(contact)
        orphaned = [e for e in self._events.values() if e.get_clients() == (contact,)]
        if orphaned:
            names = ", ".join(str(e.name) for e in orphaned)
            raise InvalidStateError(
                f"'{contact.name}' is the only client of: {names}. "
                "Add another client or delete the event first."
            )
        for event in self._events.values():
            while event.has_contact(contact):
                event.remove_contact(contact)
        for event in contact.get_events():
            contact.remove_event(event)
        del self._contacts[contact.id]

    # --- events ---

    def add_event(self, event: Event) -> None:
        """Insert a fully built event.

        DuplicateError on a same-name event, InvalidStateError if it has no
        client, NotFoundError if a participant is not in this book. A rejected
        event is detached from its participants so they keep no back-reference
        to it.
        """
        try:
            self._check_new_event(event)
        except DddError:
            if event not in self:
                for contact in event.get_contacts():
                    contact.remove_event(event)
            raise
        self._events[event.id] = event
        self._next_event_id = max(self._next_event_id, event.id.value + 1)

    def _check_new_event(self, event: Event) -> None:
        for existing in self._events.values():
            if existing.is_same_event(event):
                raise DuplicateError(f"An event named '{existing.name}' already exists.")
        if event.id in self._events:
            raise DuplicateError(f"Event id {event.id} is already in use.")
        event.validate()
        for contact in event.get_contacts():
            if contact not in self:
                raise NotFoundError(f"{contact!r} is not in the address book.")

    def create_event(
        self,
        name: Name,
        description: Description,
        date: Date,
        clients: Iterable[Client],
        vendors: Iterable[Vendor] = (),
    ) -> Event:
        """Check everything, then build the event with a fresh id and link its contacts."""
        clients = list(clients)
        vendors = list(vendors)
        existing = self.find_event_named(name)
        if existing is not None:
            raise DuplicateError(f"An event named '{existing.name}' already exists.")
        if not clients:
            raise InvalidStateError("An event needs at least one client.")
        seen: set[Id] = set()
        for contact in clients + vendors:
            self._require_contact(contact)
            if contact.id in seen:
                raise DuplicateError(f"Contact {contact.id} is listed more than once.")
            seen.add(contact.id)
        event = Event(name, description, date, clients, vendors, self.next_event_id())
        self._events[event.id] = event
        return event

    def edit_event(self, event: Event, **changes) -> None:
        self._require_event(event)
        new_name = changes.get("name")
        if new_name is not None:
            existing = self.find_event_named(new_name)
            if existing is not None and existing is not event:
                raise DuplicateError(f"An event named '{existing.name}' already exists.")
        event.update(**changes)

    def remove_event(self, event: Event) -> None:
        """Unlink every participant, then drop the event."""
        self._require_event(event)
        for contact in event.get_contacts():
            if event.has_contact(contact):
                event.remove_contact(contact)
        for contact in self._contacts.values():
            contact.remove_event(event)
        del self._events[event.id]

    # --- links ---

    def link_contact(self, event: Event, contact: Contact) -> None:
        self._require_event(event)
        self._require_contact(contact)
        if event.has_contact(contact):
            raise DuplicateError(f"'{contact.name}' is already part of '{event.name}'.")
        event.add_contact(contact)

    def unlink_contact(self, event: Event, contact: Contact) -> None:
        self._require_event(event)
        self._require_contact(contact)
        if not event.has_contact(contact):
            raise NotFoundError(f"'{contact.name}' is not part of '{event.name}'.")
        if event.get_clients() == (contact,):
            raise InvalidStateError(
                f"'{contact.name}' is the only client of '{event.name}' and cannot be removed."
            )
        event.remove_contact(contact)

    # --- checks ---

    def check_consistency(self) -> None:
        """Raise InvalidStateError on the first broken link or client-less event."""
        for event in self._events.values():
            event.validate()
            for contact in event.get_contacts():
                if contact not in self:
                    raise InvalidStateError(
                        f"Event {event.id} references unknown contact {contact.id}."
                    )
                if not contact.has_event(event):
                    raise InvalidStateError(
                        f"Contact {contact.id} is missing a link to event {event.id}."
                    )
        for contact in self._contacts.values():
            for event in contact.get_events():
                if event not in self or not event.has_contact(contact):
                    raise InvalidStateError(
                        f"Contact {contact.id} links to event {event.id}, which does not list it."
                    )

    def _require_contact(self, contact: Contact) -> None:
        if contact not in self:
            raise NotFoundError(f"No contact with id {contact.id}.")

    def _require_event(self, event: Event) -> None:
        if event not in self:
            raise NotFoundError(f"No event with id {event.id}.")
