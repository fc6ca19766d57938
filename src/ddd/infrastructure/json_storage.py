"""JSON file implementation of AddressBookStorage.

Links are stored once, as id lists on each event. Loading is two-phase:
contacts first, then each event is built empty (Event.deferred) and wired
through add_client/add_vendor so both sides of every link are restored.
"""

import datetime
import logging
import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ValidationError

from ddd.domain import (
    Address,
    AddressBook,
    Client,
    Contact,
    DddError,
    Description,
    Email,
    Event,
    Id,
    Name,
    Phone,
    Service,
    StorageError,
    Tag,
    Vendor,
)

logger = logging.getLogger(__name__)


class JsonAdaptedContact(BaseModel):
    id: int
    kind: Literal["client", "vendor"]
    name: str
    phone: str
    email: str
    address: str
    tags: list[str] = []
    service: str | None = None

    @classmethod
    def from_model(cls, contact: Contact) -> "JsonAdaptedContact":
        return cls(
            id=contact.id.value,
            kind=contact.kind,
            name=contact.name.value,
            phone=contact.phone.value,
            email=contact.email.value,
            address=contact.address.value,
            tags=sorted(tag.value for tag in contact.tags),
            service=contact.service.value if isinstance(contact, Vendor) else None,
        )

    def to_model(self) -> Contact:
        args = (
            Id(self.id),
            Name(self.name),
            Phone(self.phone),
            Email(self.email),
            Address(self.address),
        )
        tags = [Tag(t) for t in self.tags]
        if self.kind == "vendor":
            if self.service is None:
                raise ValueError(f"Vendor {self.id} has no service.")
            return Vendor(*args, service=Service(self.service), tags=tags)
        return Client(*args, tags=tags)


class JsonAdaptedEvent(BaseModel):
    id: int
    name: str
    description: str
    date: datetime.date
    client_ids: list[int]
    vendor_ids: list[int] = []

    @classmethod
    def from_model(cls, event: Event) -> "JsonAdaptedEvent":
        return cls(
            id=event.id.value,
            name=event.name.value,
            description=event.description.value,
            date=event.date,
            client_ids=[i.value for i in event.get_client_ids()],
            vendor_ids=[i.value for i in event.get_vendor_ids()],
        )

    def to_model(self, book: AddressBook) -> Event:
        """Build the event and link it to contacts already in book."""
        event = Event.deferred(
            Name(self.name), Description(self.description), self.date, Id(self.id)
        )
        for client_id in self.client_ids:
            client = book.get_contact(Id(client_id))
            if not isinstance(client, Client):
                raise ValueError(f"Event {self.id} lists vendor {client_id} as a client.")
            event.add_client(client)
        for vendor_id in self.vendor_ids:
            vendor = book.get_contact(Id(vendor_id))
            if not isinstance(vendor, Vendor):
                raise ValueError(f"Event {self.id} lists client {vendor_id} as a vendor.")
            event.add_vendor(vendor)
        return event


class JsonSerializableAddressBook(BaseModel):
    contacts: list[JsonAdaptedContact] = []
    events: list[JsonAdaptedEvent] = []
    next_contact_id: int = 0
    next_event_id: int = 0

    @classmethod
    def from_model(cls, book: AddressBook) -> "JsonSerializableAddressBook":
        return cls(
            contacts=[JsonAdaptedContact.from_model(c) for c in book.get_contacts()],
            events=[JsonAdaptedEvent.from_model(e) for e in book.get_events()],
            next_contact_id=book.contact_id_counter,
            next_event_id=book.event_id_counter,
        )

    def to_model(self) -> AddressBook:
        """Rebuild the book. Raises StorageError on invalid values, duplicates or bad links."""
        book = AddressBook(
            next_contact_id=self.next_contact_id, next_event_id=self.next_event_id
        )
        try:
            for adapted in self.contacts:
                book.add_contact(adapted.to_model())
            for adapted in self.events:
                linked = adapted.client_ids + adapted.vendor_ids
                if len(set(linked)) != len(linked):
                    raise ValueError(f"Event {adapted.id} lists a contact more than once.")
                book.add_event(adapted.to_model(book))
            book.check_consistency()
        except (ValueError, DddError) as exc:
            raise StorageError(f"Invalid address book data: {exc}") from exc
        return book


class JsonAddressBookStorage:
    """Stores the address book as one JSON file. Saves replace the file atomically."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> AddressBook | None:
        if not self._path.exists():
            logger.info("No data file at %s, starting with an empty address book", self._path)
            return None
        try:
            raw = self._path.read_text(encoding="utf-8")
            data = JsonSerializableAddressBook.model_validate_json(raw)
        except (OSError, ValidationError) as exc:
            raise StorageError(f"Could not read {self._path}: {exc}") from exc
        book = data.to_model()
        logger.info(
            "Loaded %d contacts and %d events from %s",
            len(data.contacts),
            len(data.events),
            self._path,
        )
        return book

    def save(self, book: AddressBook) -> None:
        data = JsonSerializableAddressBook.from_model(book)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(data.model_dump_json(indent=2), encoding="utf-8")
            os.replace(tmp, self._path)
        except OSError as exc:
            raise StorageError(f"Could not write {self._path}: {exc}") from exc
        logger.debug("Saved address book to %s", self._path)
