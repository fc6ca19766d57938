"""Input DTOs and result types for address book use cases."""

import datetime
from dataclasses import dataclass, field

from ddd.domain import Address, Description, Email, Id, Name, Phone, Service, Tag

CLIENT = "client"
VENDOR = "vendor"


# --- inputs (already validated value objects) ---


@dataclass(frozen=True)
class ContactData:
    """A new contact. A vendor is a contact with a service."""

    name: Name
    phone: Phone
    email: Email
    address: Address
    tags: frozenset[Tag] = frozenset()
    service: Service | None = None

    @property
    def kind(self) -> str:
        return VENDOR if self.service is not None else CLIENT


@dataclass(frozen=True)
class ContactChanges:
    """Fields to replace on a contact. None means unchanged; tags replace the whole set."""

    name: Name | None = None
    phone: Phone | None = None
    email: Email | None = None
    address: Address | None = None
    tags: frozenset[Tag] | None = None
    service: Service | None = None

    def as_dict(self) -> dict:
        return {k: v for k, v in self.__dict__.items() if v is not None}


@dataclass(frozen=True)
class EventData:
    name: Name
    description: Description
    date: datetime.date
    client_ids: tuple[Id, ...]
    vendor_ids: tuple[Id, ...] = ()


@dataclass(frozen=True)
class EventChanges:
    """Field replacements plus contacts to link (by kind) and unlink."""

    name: Name | None = None
    description: Description | None = None
    date: datetime.date | None = None
    add_client_ids: tuple[Id, ...] = ()
    add_vendor_ids: tuple[Id, ...] = ()
    remove_ids: tuple[Id, ...] = ()

    def fields(self) -> dict:
        values = {"name": self.name, "description": self.description, "date": self.date}
        return {k: v for k, v in values.items() if v is not None}

    def is_empty(self) -> bool:
        return not (
            self.fields() or self.add_client_ids or self.add_vendor_ids or self.remove_ids
        )


# --- read models ---


@dataclass(frozen=True)
class ContactSummary:
    """One contact as returned by list, find and mutation results."""

    contact_id: int
    kind: str
    name: str
    phone: str
    email: str
    address: str
    tags: tuple[str, ...] = ()
    service: str | None = None
    event_ids: tuple[int, ...] = ()


@dataclass(frozen=True)
class EventSummary:
    event_id: int
    name: str
    description: str
    date: datetime.date
    client_ids: tuple[int, ...] = ()
    vendor_ids: tuple[int, ...] = ()
    client_names: tuple[str, ...] = field(default=(), compare=False)
    vendor_names: tuple[str, ...] = field(default=(), compare=False)


# --- mutation results ---


@dataclass(frozen=True)
class ContactAdded:
    contact: ContactSummary


@dataclass(frozen=True)
class ContactEdited:
    contact: ContactSummary


@dataclass(frozen=True)
class ContactDeleted:
    contact: ContactSummary


@dataclass(frozen=True)
class EventAdded:
    event: EventSummary


@dataclass(frozen=True)
class EventEdited:
    event: EventSummary


@dataclass(frozen=True)
class EventDeleted:
    event: EventSummary


# --- failures ---


@dataclass(frozen=True)
class NotFound:
    """A referenced contact, event or link does not exist."""

    reason: str


@dataclass(frozen=True)
class Duplicate:
    """A contact or event with this name (or this link) already exists."""

    reason: str


@dataclass(frozen=True)
class Invalid:
    """The request would break an address book rule (e.g. an event with no client)."""

    reason: str
