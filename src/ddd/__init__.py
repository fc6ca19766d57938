"""
DDD core: clean-architecture layout.

- domain: Contact (Client, Vendor), Event, AddressBook, value objects, errors.
- application: use cases (AddressBookService), port (AddressBookStorage), DTOs.
- infrastructure: adapters (JsonAddressBookStorage, InMemoryAddressBookStorage), settings.
"""

from ddd.application import (
    AddressBookService,
    AddressBookStorage,
    ContactData,
    ContactSummary,
    Duplicate,
    EventData,
    EventSummary,
    Invalid,
    NotFound,
)
from ddd.domain import AddressBook, Client, Contact, Event, Vendor
from ddd.infrastructure import InMemoryAddressBookStorage, JsonAddressBookStorage

__all__ = [
    "AddressBook",
    "AddressBookService",
    "AddressBookStorage",
    "Client",
    "Contact",
    "ContactData",
    "ContactSummary",
    "Duplicate",
    "Event",
    "EventData",
    "EventSummary",
    "InMemoryAddressBookStorage",
    "Invalid",
    "JsonAddressBookStorage",
    "NotFound",
    "Vendor",
]
