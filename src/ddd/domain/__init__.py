"""Domain layer: entities, value objects, aggregate and errors. No dependencies on outer layers."""

from ddd.domain.address_book import AddressBook
from ddd.domain.contact import Client, Contact, Vendor
from ddd.domain.errors import (
    DddError,
    DuplicateError,
    InvalidStateError,
    NotFoundError,
    StorageError,
)
from ddd.domain.event import Event
from ddd.domain.values import (
    Address,
    Description,
    Email,
    Id,
    Name,
    Phone,
    Service,
    Tag,
)

__all__ = [
    "Address",
    "AddressBook",
    "Client",
    "Contact",
    "DddError",
    "Description",
    "DuplicateError",
    "Email",
    "Event",
    "Id",
    "InvalidStateError",
    "Name",
    "NotFoundError",
    "Phone",
    "Service",
    "StorageError",
    "Tag",
    "Vendor",
]
