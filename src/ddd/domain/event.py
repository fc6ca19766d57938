"""Event entity. Owns the participant lists and keeps contact back-references in sync."""

import logging
from collections.abc import Iterable
from datetime import date as Date

from ddd.domain.contact import Client, Contact, Vendor
from ddd.domain.errors import InvalidStateError, NotFoundError
from ddd.domain.values import Description, Id, Name

logger = logging.getLogger(__name__)

MESSAGE_CONSTRAINTS = "There must be at least one client in an event."


def _require_all(contacts: list, cls: type, label: str) -> None:
    for contact in contacts:
        if not isinstance(contact, cls):
            raise TypeError(f"{contact!r} is not a {label}.")


class Event:
    """
    An occasion linking one or more clients and zero or more vendors.

    Every add/remove goes through this class so that a contact is listed here
    iff this event is in the contact's events. An event built with the primary
    constructor always has a client; Event.deferred starts empty for two-phase
    loading and is invalid until a client is added.
    Equality is object identity; use is_same_event for name-based matching.
    """

    editable_fields = ("name", "description", "date")

    def __init__(
        self,
        name: Name,
        description: Description,
        date: Date,
        clients: Iterable[Client],
        vendors: Iterable[Vendor],
        event_id: Id,
    ) -> None:
        clients = list(clients)
        vendors = list(vendors)
        if not clients:
            raise InvalidStateError(MESSAGE_CONSTRAINTS)
        _require_all(clients, Client, "client")
        _require_all(vendors, Vendor, "vendor")
        self._setup(name, description, date, event_id)
        for client in clients:
            self.add_client(client)
        for vendor in vendors:
            self.add_vendor(vendor)

    @classmethod
    def deferred(
        cls, name: Name, description: Description, date: Date, event_id: Id
    ) -> "Event":
        """Build an event with no participants yet. Caller must add a client before use."""
        event = cls.__new__(cls)
        event._setup(name, description, date, event_id)
        return event

    def _setup(self, name: Name, description: Description, date: Date, event_id: Id) -> None:
        if not isinstance(event_id, Id):
            raise TypeError("event_id must be an Id.")
        self._name = name
        self._description = description
        self._date = date
        self._id = event_id
        self._clients: list[Client] = []
        self._vendors: list[Vendor] = []

    @property
    def id(self) -> Id:
        return self._id

    @property
    def name(self) -> Name:
        return self._name

    @property
    def description(self) -> Description:
        return self._description

    @property
    def date(self) -> Date:
        return self._date

    def add_client(self, client: Client) -> None:
        """Append client, then add this event to its back-references if missing.

        Duplicates are not checked here; AddressBook.link_contact does that.
        """
        if not isinstance(client, Client):
            raise TypeError(f"{client!r} is not a client.")
        self._clients.append(client)
        if not client.has_event(self):
            client.add_event(self)

    def add_vendor(self, vendor: Vendor) -> None:
        """Append vendor, then add this event to its back-references if missing."""
        if not isinstance(vendor, Vendor):
            raise TypeError(f"{vendor!r} is not a vendor.")
        self._vendors.append(vendor)
        if not vendor.has_event(self):
            vendor.add_event(self)

    def add_contact(self, contact: Contact) -> None:
        if isinstance(contact, Client):
            self.add_client(contact)
        else:
            self.add_vendor(contact)

    def remove_contact(self, contact: Contact) -> None:
        """Unlink contact from this event on both sides.

        Raises NotFoundError (and changes nothing) if contact is not a participant.
        A missing back-reference on the contact is tolerated and logged.
        """
        participants = self._participants_for(contact)
        if contact not in participants:
            raise NotFoundError(
                f"Contact {contact.id} is not part of event {self._id}."
            )
        if contact.has_event(self):
            contact.remove_event(self)
        else:
            logger.warning(
                "Contact %s was listed in event %s without a back-reference",
                contact.id,
                self._id,
            )
        participants.remove(contact)

    def _participants_for(self, contact: Contact) -> list:
        if isinstance(contact, Client):
            return self._clients
        if isinstance(contact, Vendor):
            return self._vendors
        raise TypeError(f"{contact!r} is neither a client nor a vendor.")

    def has_contact(self, contact: Contact) -> bool:
        return contact in self._clients or contact in self._vendors

    def get_clients(self) -> tuple[Client, ...]:
        return tuple(self._clients)

    def get_vendors(self) -> tuple[Vendor, ...]:
        return tuple(self._vendors)

    def get_contacts(self) -> tuple[Contact, ...]:
        """Clients first, then vendors."""
        return tuple(self._clients) + tuple(self._vendors)

    def get_client_ids(self) -> list[Id]:
        return [client.id for client in self._clients]

    def get_vendor_ids(self) -> list[Id]:
        return [vendor.id for vendor in self._vendors]

    def is_valid(self) -> bool:
        return bool(self._clients)

    def validate(self) -> None:
        if not self.is_valid():
            raise InvalidStateError(f"Event {self._id}: {MESSAGE_CONSTRAINTS}")

    def is_same_event(self, other: "Event | None") -> bool:
        """Two events are the same if their names match, regardless of id or date."""
        if other is self:
            return True
        return other is not None and self.name.key == other.name.key

    def update(self, **changes) -> None:
        """Replace name, description or date. Called by AddressBook.edit_event."""
        unknown = set(changes) - set(self.editable_fields)
        if unknown:
            raise TypeError(f"Event has no editable field(s): {', '.join(sorted(unknown))}")
        for field_name, value in changes.items():
            setattr(self, "_" + field_name, value)

    def __repr__(self) -> str:
        return (
            f"Event(id={self._id.value}, name={self._name.value!r}, "
            f"clients={[i.value for i in self.get_client_ids()]}, "
            f"vendors={[i.value for i in self.get_vendor_ids()]})"
        )
