"""Unit tests for AddressBookService. In-memory storage and DTOs only."""

from datetime import date

import pytest

from ddd.application import (
    CLIENT,
    VENDOR,
    AddressBookService,
    ContactAdded,
    ContactChanges,
    ContactData,
    ContactDeleted,
    ContactEdited,
    Duplicate,
    EventAdded,
    EventChanges,
    EventData,
    EventDeleted,
    EventEdited,
    Invalid,
    NotFound,
)
from ddd.domain import Address, Description, Email, Id, Name, Phone, Service, StorageError, Tag
from ddd.infrastructure import InMemoryAddressBookStorage


def _service(storage: InMemoryAddressBookStorage | None = None) -> AddressBookService:
    return AddressBookService(storage=storage or InMemoryAddressBookStorage())


def _contact(name: str, service: str | None = None, tags: tuple[str, ...] = ()) -> ContactData:
    return ContactData(
        name=Name(name),
        phone=Phone("+12025551234"),
        email=Email(f"{name.lower().replace(' ', '.')}@example.com"),
        address=Address("1 Main St"),
        tags=frozenset(Tag(t) for t in tags),
        service=Service(service) if service else None,
    )


def _event(name: str, clients: tuple[int, ...], vendors: tuple[int, ...] = ()) -> EventData:
    return EventData(
        name=Name(name),
        description=Description("Details"),
        date=date(2025, 6, 1),
        client_ids=tuple(Id(i) for i in clients),
        vendor_ids=tuple(Id(i) for i in vendors),
    )


def _seeded() -> tuple[AddressBookService, InMemoryAddressBookStorage]:
    """Alice (#0, client), Bob (#1, vendor), Carol (#2, client); Wedding (#0) = Alice + Bob."""
    storage = InMemoryAddressBookStorage()
    service = _service(storage)
    service.add_contact(_contact("Alice", tags=("vip",)))
    service.add_contact(_contact("Bob", service="catering"))
    service.add_contact(_contact("Carol"))
    service.add_event(_event("Wedding", clients=(0,), vendors=(1,)))
    return service, storage


def test_add_client_and_vendor() -> None:
    service = _service()
    r1 = service.add_contact(_contact("Alice"))
    r2 = service.add_contact(_contact("Bob", service="catering"))

    assert isinstance(r1, ContactAdded)
    assert r1.contact.kind == CLIENT
    assert r1.contact.contact_id == 0
    assert isinstance(r2, ContactAdded)
    assert r2.contact.kind == VENDOR
    assert r2.contact.service == "catering"
    assert [s.name for s in service.list_contacts()] == ["Alice", "Bob"]
    assert [s.name for s in service.list_contacts(VENDOR)] == ["Bob"]


def test_duplicate_contact_by_name() -> None:
    service = _service()
    service.add_contact(_contact("Alice"))
    r = service.add_contact(_contact("alice", service="photos"))
    assert isinstance(r, Duplicate)
    assert "Alice" in r.reason
    assert len(service.list_contacts()) == 1


def test_every_change_is_saved() -> None:
    service, storage = _seeded()
    assert storage.save_count == 4
    service.add_contact(_contact("Alice"))
    assert storage.save_count == 4


class _FullDiskStorage(InMemoryAddressBookStorage):
    def save(self, book) -> None:
        raise OSError("disk full")


def test_failed_save_raises_storage_error_and_keeps_change() -> None:
    service = _service(_FullDiskStorage())
    with pytest.raises(StorageError, match="disk full"):
        service.add_contact(_contact("Alice"))
    assert [s.name for s in service.list_contacts()] == ["Alice"]


def test_service_loads_existing_book_from_storage() -> None:
    _, storage = _seeded()
    reloaded = _service(storage)
    assert [s.name for s in reloaded.list_contacts()] == ["Alice", "Bob", "Carol"]
    wedding = reloaded.get_event(Id(0))
    assert wedding is not None
    assert wedding.client_ids == (0,)
    assert wedding.vendor_ids == (1,)
    reloaded.address_book.check_consistency()


def test_add_event_links_contacts() -> None:
    service, _ = _seeded()
    alice = service.get_contact(Id(0))
    bob = service.get_contact(Id(1))
    assert alice.event_ids == (0,)
    assert bob.event_ids == (0,)


def test_add_event_failures() -> None:
    service, _ = _seeded()
    assert isinstance(service.add_event(_event("wedding", clients=(2,))), Duplicate)
    assert isinstance(service.add_event(_event("Party", clients=(42,))), NotFound)
    assert isinstance(service.add_event(_event("Party", clients=(1,))), Invalid)
    assert isinstance(service.add_event(_event("Party", clients=(0,), vendors=(2,))), Invalid)
    assert isinstance(service.add_event(_event("Party", clients=())), Invalid)

    assert service.get_contact(Id(2)).event_ids == ()
    assert len(service.list_events()) == 1


def test_add_second_event() -> None:
    service, _ = _seeded()
    r = service.add_event(_event("Party", clients=(0, 2), vendors=(1,)))
    assert isinstance(r, EventAdded)
    assert r.event.event_id == 1
    assert r.event.client_names == ("Alice", "Carol")
    assert service.get_contact(Id(1)).event_ids == (0, 1)


def test_edit_contact() -> None:
    service, _ = _seeded()
    r = service.edit_contact(Id(0), ContactChanges(name=Name("Alice Smith"), tags=frozenset()))
    assert isinstance(r, ContactEdited)
    assert r.contact.name == "Alice Smith"
    assert r.contact.tags == ()
    assert r.contact.event_ids == (0,)
    assert service.get_event(Id(0)).client_names == ("Alice Smith",)


def test_edit_contact_failures() -> None:
    service, _ = _seeded()
    assert isinstance(service.edit_contact(Id(9), ContactChanges(name=Name("X"))), NotFound)
    assert isinstance(service.edit_contact(Id(0), ContactChanges(name=Name("bob"))), Duplicate)
    assert isinstance(service.edit_contact(Id(0), ContactChanges()), Invalid)
    assert isinstance(
        service.edit_contact(Id(0), ContactChanges(service=Service("photos"))), Invalid
    )
    r = service.edit_contact(Id(1), ContactChanges(service=Service("photos")))
    assert isinstance(r, ContactEdited)
    assert r.contact.service == "photos"


def test_delete_vendor_unlinks_from_events() -> None:
    service, _ = _seeded()
    r = service.delete_contact(Id(1))
    assert isinstance(r, ContactDeleted)
    assert r.contact.name == "Bob"
    assert service.get_event(Id(0)).vendor_ids == ()
    assert service.get_contact(Id(1)) is None


def test_delete_sole_client_rejected() -> None:
    service, storage = _seeded()
    saves = storage.save_count
    r = service.delete_contact(Id(0))
    assert isinstance(r, Invalid)
    assert "Wedding" in r.reason
    assert service.get_contact(Id(0)) is not None
    assert storage.save_count == saves
    assert isinstance(service.delete_contact(Id(77)), NotFound)


def test_edit_event_links_and_unlinks_together() -> None:
    service, _ = _seeded()
    r = service.edit_event(
        Id(0),
        EventChanges(
            name=Name("Big Wedding"),
            add_client_ids=(Id(2),),
            remove_ids=(Id(0), Id(1)),
        ),
    )
    assert isinstance(r, EventEdited)
    assert r.event.name == "Big Wedding"
    assert r.event.client_ids == (2,)
    assert r.event.vendor_ids == ()
    assert service.get_contact(Id(0)).event_ids == ()
    assert service.get_contact(Id(1)).event_ids == ()
    assert service.get_contact(Id(2)).event_ids == (0,)


def test_edit_event_failures_change_nothing() -> None:
    service, _ = _seeded()
    service.add_event(_event("Party", clients=(2,)))

    cases = [
        (EventChanges(), Invalid),
        (EventChanges(name=Name("party")), Duplicate),
        (EventChanges(add_client_ids=(Id(0),)), Duplicate),
        (EventChanges(add_vendor_ids=(Id(2),)), Invalid),
        (EventChanges(add_client_ids=(Id(55),)), NotFound),
        (EventChanges(remove_ids=(Id(2),)), NotFound),
        (EventChanges(remove_ids=(Id(0),)), Invalid),
        (EventChanges(add_client_ids=(Id(2),), remove_ids=(Id(2),)), Invalid),
        (EventChanges(name=Name("Renamed"), remove_ids=(Id(0),)), Invalid),
    ]
    for changes, expected in cases:
        assert isinstance(service.edit_event(Id(0), changes), expected), changes

    wedding = service.get_event(Id(0))
    assert wedding.name == "Wedding"
    assert wedding.client_ids == (0,)
    assert wedding.vendor_ids == (1,)
    assert isinstance(service.edit_event(Id(9), EventChanges(name=Name("X"))), NotFound)
    service.address_book.check_consistency()


def test_delete_event() -> None:
    service, _ = _seeded()
    r = service.delete_event(Id(0))
    assert isinstance(r, EventDeleted)
    assert r.event.name == "Wedding"
    assert service.list_events() == []
    assert service.get_contact(Id(0)).event_ids == ()
    assert isinstance(service.delete_event(Id(0)), NotFound)


def test_find_contacts_case_insensitive_partial() -> None:
    service, _ = _seeded()
    assert [s.name for s in service.find_contacts(["ALI"])] == ["Alice"]
    assert [s.name for s in service.find_contacts(["bob", "carol"])] == ["Bob", "Carol"]
    assert service.find_contacts(["carol"], kind=VENDOR) == []
    assert service.find_contacts(["   "]) == []


def test_find_events() -> None:
    service, _ = _seeded()
    assert [s.name for s in service.find_events(["wed"])] == ["Wedding"]
    assert service.find_events(["gala"]) == []
