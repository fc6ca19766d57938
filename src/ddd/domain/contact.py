"""Contact entities: Client and Vendor, with back-references to their events."""

from collections.abc import Iterable
from typing import TYPE_CHECKING

from ddd.domain.values import Address, Email, Id, Name, Phone, Service, Tag

if TYPE_CHECKING:
    from ddd.domain.event import Event


class Contact:
    """
    A person or organization in the address book.
    Holds the set of events it takes part in. The set is only changed through
    Event (which keeps both sides in sync); these methods never touch the event.
    Equality is object identity; use is_same_contact for name-based matching.
    """

    kind = "contact"
    editable_fields: tuple[str, ...] = ("name", "phone", "email", "address", "tags")

    def __init__(
        self,
        contact_id: Id,
        name: Name,
        phone: Phone,
        email: Email,
        address: Address,
        tags: Iterable[Tag] = (),
    ) -> None:
        if not isinstance(contact_id, Id):
            raise TypeError("contact_id must be an Id.")
        self._id = contact_id
        self._name = name
        self._phone = phone
        self._email = email
        self._address = address
        self._tags = frozenset(tags)
        self._events: set["Event"] = set()

    @property
    def id(self) -> Id:
        return self._id

    @property
    def name(self) -> Name:
        return self._name

    @property
    def phone(self) -> Phone:
        return self._phone

    @property
    def email(self) -> Email:
        return self._email

    @property
    def address(self) -> Address:
        return self._address

    @property
    def tags(self) -> frozenset[Tag]:
        return self._tags

    def add_event(self, event: "Event") -> None:
        """Record that this contact takes part in event. No-op if already recorded."""
        self._events.add(event)

    def remove_event(self, event: "Event") -> None:
        """Forget event. No-op if not recorded."""
        self._events.discard(event)

    def has_event(self, event: "Event") -> bool:
        return event in self._events

    def get_events(self) -> frozenset["Event"]:
        return frozenset(self._events)

    def get_event_ids(self) -> list[Id]:
        return sorted(event.id for event in self._events)

    def is_same_contact(self, other: "Contact | None") -> bool:
        """Two contacts are the same if their names match (case-insensitive), whatever their ids."""
        if other is self:
            return True
        return other is not None and self.name.key == other.name.key

    def update(self, **changes) -> None:
        """Replace detail fields. Identity and event links are kept.

        Called by AddressBook.edit_contact, which checks name collisions first.
        """
        unknown = set(changes) - set(self.editable_fields)
        if unknown:
            raise TypeError(
                f"{type(self).__name__} has no editable field(s): {', '.join(sorted(unknown))}"
            )
        for field_name, value in changes.items():
            if field_name == "tags":
                value = frozenset(value)
            setattr(self, "_" + field_name, value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self._id.value}, name={self._name.value!r})"


class Client(Contact):
    """A contact who commissions events."""

    kind = "client"


class Vendor(Contact):
    """A contact who provides a service at events."""

    kind = "vendor"
    editable_fields = Contact.editable_fields + ("service",)

    def __init__(
        self,
        contact_id: Id,
        name: Name,
        phone: Phone,
        email: Email,
        address: Address,
        service: Service,
        tags: Iterable[Tag] = (),
    ) -> None:
        super().__init__(contact_id, name, phone, email, address, tags)
        self._service = service

    @property
    def service(self) -> Service:
        return self._service
