"""Address book use cases: add, edit, delete, list and find contacts and events."""

import logging

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
from ddd.domain import (
    AddressBook,
    Client,
    Contact,
    DuplicateError,
    Event,
    Id,
    InvalidStateError,
    NotFoundError,
    StorageError,
    Vendor,
)

logger = logging.getLogger(__name__)


def summarize_contact(contact: Contact) -> ContactSummary:
    return ContactSummary(
        contact_id=contact.id.value,
        kind=contact.kind,
        name=contact.name.value,
        phone=contact.phone.value,
        email=contact.email.value,
        address=contact.address.value,
        tags=tuple(sorted(tag.value for tag in contact.tags)),
        service=contact.service.value if isinstance(contact, Vendor) else None,
        event_ids=tuple(i.value for i in contact.get_event_ids()),
    )


def summarize_event(event: Event) -> EventSummary:
    return EventSummary(
        event_id=event.id.value,
        name=event.name.value,
        description=event.description.value,
        date=event.date,
        client_ids=tuple(i.value for i in event.get_client_ids()),
        vendor_ids=tuple(i.value for i in event.get_vendor_ids()),
        client_names=tuple(c.name.value for c in event.get_clients()),
        vendor_names=tuple(v.name.value for v in event.get_vendors()),
    )


def _matches(name: str, keywords: list[str]) -> bool:
    lowered = name.lower()
    return any(k in lowered for k in keywords)


class AddressBookService:
    """Runs one request at a time against the in-memory book and saves after every change.

    Domain errors never escape: they come back as NotFound, Duplicate or Invalid.
    A failed save is the exception and raises StorageError.
    """

    def __init__(
        self, storage: AddressBookStorage, *, book: AddressBook | None = None
    ) -> None:
        self._storage = storage
        if book is None:
            book = storage.load()
        self._book = book if book is not None else AddressBook()

    @property
    def address_book(self) -> AddressBook:
        return self._book

    def _save(self) -> None:
        """Persist the book. The in-memory change stays applied if this raises StorageError."""
        try:
            self._storage.save(self._book)
        except OSError as exc:
            raise StorageError(f"Could not save the address book: {exc}") from exc

    # --- contacts ---

    def add_contact(self, data: ContactData) -> ContactAdded | Duplicate:
        """Create a client, or a vendor when data carries a service."""
        details = {
            "phone": data.phone,
            "email": data.email,
            "address": data.address,
            "tags": data.tags,
        }
        if data.kind == VENDOR:
            details["service"] = data.service
        contact_cls = Vendor if data.kind == VENDOR else Client
        try:
            contact = self._book.create_contact(contact_cls, data.name, **details)
        except DuplicateError as exc:
            return Duplicate(reason=str(exc))
        self._save()
        logger.info("Added %s %s (%s)", contact.kind, contact.id, contact.name)
        return ContactAdded(contact=summarize_contact(contact))

    def edit_contact(
        self, contact_id: Id, changes: ContactChanges
    ) -> ContactEdited | NotFound | Duplicate | Invalid:
        contact = self._book.find_contact(contact_id)
        if contact is None:
            return NotFound(reason=f"No contact with id {contact_id}.")
        fields = changes.as_dict()
        if not fields:
            return Invalid(reason="At least one field to edit must be provided.")
        if "service" in fields and not isinstance(contact, Vendor):
            return Invalid(reason="Only vendors have a service.")
        try:
            self._book.edit_contact(contact, **fields)
        except DuplicateError as exc:
            return Duplicate(reason=str(exc))
        self._save()
        logger.info("Edited contact %s: %s", contact.id, ", ".join(sorted(fields)))
        return ContactEdited(contact=summarize_contact(contact))

    def delete_contact(self, contact_id: Id) -> ContactDeleted | NotFound | Invalid:
        contact = self._book.find_contact(contact_id)
        if contact is None:
            return NotFound(reason=f"No contact with id {contact_id}.")
        summary = summarize_contact(contact)
        try:
            self._book.remove_contact(contact)
        except InvalidStateError as exc:
            return Invalid(reason=str(exc))
        self._save()
        logger.info("Deleted contact %s (%s)", contact.id, contact.name)
        return ContactDeleted(contact=summary)

    def get_contact(self, contact_id: Id) -> ContactSummary | None:
        contact = self._book.find_contact(contact_id)
        return summarize_contact(contact) if contact is not None else None

    def list_contacts(self, kind: str | None = None) -> list[ContactSummary]:
        """Return contacts in insertion order, optionally only clients or vendors."""
        if kind == CLIENT:
            contacts = self._book.get_clients()
        elif kind == VENDOR:
            contacts = self._book.get_vendors()
        else:
            contacts = self._book.get_contacts()
        return [summarize_contact(c) for c in contacts]

    def find_contacts(
        self, keywords: list[str], kind: str | None = None
    ) -> list[ContactSummary]:
        """Return contacts whose name contains any keyword (case-insensitive, partial)."""
        needles = [k.strip().lower() for k in keywords if k and k.strip()]
        if not needles:
            return []
        return [s for s in self.list_contacts(kind) if _matches(s.name, needles)]

    # --- events ---

    def _resolve(self, ids, expected_cls: type[Contact]) -> list[Contact]:
        contacts = []
        for contact_id in ids:
            contact = self._book.get_contact(contact_id)
            if not isinstance(contact, expected_cls):
                raise TypeError(f"Contact {contact_id} ({contact.name}) is not a {expected_cls.kind}.")
            contacts.append(contact)
        return contacts

    def add_event(self, data: EventData) -> EventAdded | NotFound | Duplicate | Invalid:
        try:
            clients = self._resolve(data.client_ids, Client)
            vendors = self._resolve(data.vendor_ids, Vendor)
            event = self._book.create_event(
                data.name, data.description, data.date, clients, vendors
            )
        except NotFoundError as exc:
            return NotFound(reason=str(exc))
        except DuplicateError as exc:
            return Duplicate(reason=str(exc))
        except (InvalidStateError, TypeError) as exc:
            return Invalid(reason=str(exc))
        self._save()
        logger.info("Added event %s (%s) with %d contacts", event.id, event.name, len(event.get_contacts()))
        return EventAdded(event=summarize_event(event))

    def edit_event(
        self, event_id: Id, changes: EventChanges
    ) -> EventEdited | NotFound | Duplicate | Invalid:
        """Apply field changes, links and unlinks together, or none of them."""
        event = self._book.find_event(event_id)
        if event is None:
            return NotFound(reason=f"No event with id {event_id}.")
        if changes.is_empty():
            return Invalid(reason="At least one field to edit must be provided.")
        try:
            to_link = self._resolve(changes.add_client_ids, Client) + self._resolve(
                changes.add_vendor_ids, Vendor
            )
            to_unlink = [self._book.get_contact(i) for i in changes.remove_ids]
        except NotFoundError as exc:
            return NotFound(reason=str(exc))
        except TypeError as exc:
            return Invalid(reason=str(exc))

        failure = self._check_edit(event, changes, to_link, to_unlink)
        if failure is not None:
            return failure

        for contact in to_link:
            self._book.link_contact(event, contact)
        for contact in to_unlink:
            self._book.unlink_contact(event, contact)
        fields = changes.fields()
        if fields:
            self._book.edit_event(event, **fields)
        self._save()
        logger.info(
            "Edited event %s: %d linked, %d unlinked, fields %s",
            event.id,
            len(to_link),
            len(to_unlink),
            ", ".join(sorted(fields)) or "-",
        )
        return EventEdited(event=summarize_event(event))

    def _check_edit(
        self,
        event: Event,
        changes: EventChanges,
        to_link: list[Contact],
        to_unlink: list[Contact],
    ) -> Duplicate | NotFound | Invalid | None:
        if changes.name is not None:
            existing = self._book.find_event_named(changes.name)
            if existing is not None and existing is not event:
                return Duplicate(reason=f"An event named '{existing.name}' already exists.")
        link_ids = [c.id for c in to_link]
        unlink_ids = [c.id for c in to_unlink]
        if len(set(link_ids)) != len(link_ids) or len(set(unlink_ids)) != len(unlink_ids):
            return Invalid(reason="A contact is listed more than once.")
        if set(link_ids) & set(unlink_ids):
            return Invalid(reason="A contact cannot be both added to and removed from an event.")
        for contact in to_link:
            if event.has_contact(contact):
                return Duplicate(reason=f"'{contact.name}' is already part of '{event.name}'.")
        for contact in to_unlink:
            if not event.has_contact(contact):
                return NotFound(reason=f"'{contact.name}' is not part of '{event.name}'.")
        remaining = [c for c in event.get_clients() if c not in to_unlink]
        if not remaining and not any(isinstance(c, Client) for c in to_link):
            return Invalid(reason=f"'{event.name}' must keep at least one client.")
        return None

    def delete_event(self, event_id: Id) -> EventDeleted | NotFound:
        event = self._book.find_event(event_id)
        if event is None:
            return NotFound(reason=f"No event with id {event_id}.")
        summary = summarize_event(event)
        self._book.remove_event(event)
        self._save()
        logger.info("Deleted event %s (%s)", event.id, event.name)
        return EventDeleted(event=summary)

    def get_event(self, event_id: Id) -> EventSummary | None:
        event = self._book.find_event(event_id)
        return summarize_event(event) if event is not None else None

    def list_events(self) -> list[EventSummary]:
        return [summarize_event(e) for e in self._book.get_events()]

    def find_events(self, keywords: list[str]) -> list[EventSummary]:
        """Return events whose name contains any keyword (case-insensitive, partial)."""
        needles = [k.strip().lower() for k in keywords if k and k.strip()]
        if not needles:
            return []
        return [s for s in self.list_events() if _matches(s.name, needles)]
