"""Application layer: use cases, ports, and DTOs. Depends only on domain."""

from ddd.application.address_book_service import AddressBookService
from ddd.application.dto import (
    CLIENT,
    VENDOR,
    ContactAdded,
    ContactChanges,
    ContactData,
    ContactDeleted,
    ContactEdited,
    ContactSummary,
    Duplicate,
    EventAdded,
    EventChanges,
    EventData,
    EventDeleted,
    EventEdited,
    EventSummary,
    Invalid,
    NotFound,
)
from ddd.application.ports import AddressBookStorage

__all__ = [
    "CLIENT",
    "VENDOR",
    "AddressBookService",
    "AddressBookStorage",
    "ContactAdded",
    "ContactChanges",
    "ContactData",
    "ContactDeleted",
    "ContactEdited",
    "ContactSummary",
    "Duplicate",
    "EventAdded",
    "EventChanges",
    "EventData",
    "EventDeleted",
    "EventEdited",
    "EventSummary",
    "Invalid",
    "NotFound",
]
