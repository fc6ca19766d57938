"""Tests for the command parser. No service involved: only the command objects produced."""

from datetime import date

import pytest

from cli.commands import (
    AddContactCommand,
    AddEventCommand,
    DeleteContactCommand,
    DeleteEventCommand,
    EditContactCommand,
    EditEventCommand,
    ExitCommand,
    FindCommand,
    HelpCommand,
    ListCommand,
)
from cli.parser import ParseError, parse_command
from ddd.application import CLIENT, VENDOR
from ddd.domain import Id, Name, Phone, Service, Tag

ADD_ALICE = "add -c n/Alice Smith p/202 555 1234 e/alice@example.com a/1 Main St t/vip t/friend"


def test_add_client() -> None:
    command = parse_command(ADD_ALICE, phone_region="US")
    assert isinstance(command, AddContactCommand)
    data = command.data
    assert data.name == Name("Alice Smith")
    assert data.phone == Phone("+12025551234")
    assert data.address.value == "1 Main St"
    assert data.tags == frozenset({Tag("vip"), Tag("friend")})
    assert data.kind == CLIENT


def test_add_vendor_requires_service() -> None:
    line = "add -v n/Bob p/+39 312 345 6789 e/bob@example.com a/Via Roma s/catering"
    command = parse_command(line)
    assert command.data.kind == VENDOR
    assert command.data.service == Service("catering")

    with pytest.raises(ParseError, match="s/"):
        parse_command("add -v n/Bob p/+12025551234 e/bob@example.com a/Via Roma")
    with pytest.raises(ParseError, match="Only vendors"):
        parse_command("add -c n/Bob p/+12025551234 e/bob@example.com a/Via Roma s/cake")


def test_add_event() -> None:
    line = "add -e n/Wedding des/Beach wedding d/2025-06-01 c/0 c/3 v/1"
    command = parse_command(line)
    assert isinstance(command, AddEventCommand)
    assert command.data.name == Name("Wedding")
    assert command.data.description.value == "Beach wedding"
    assert command.data.date == date(2025, 6, 1)
    assert command.data.client_ids == (Id(0), Id(3))
    assert command.data.vendor_ids == (Id(1),)


@pytest.mark.parametrize(
    "line, message",
    [
        ("add n/Alice", "-c, -v or -e"),
        ("add -c n/Alice p/+12025551234 e/alice@example.com", "a/"),
        ("add -c n/Alice n/Bob p/+12025551234 e/a@b.com a/x", "single-valued"),
        ("add -c n/Alice p/12 e/alice@example.com a/x", "phone"),
        ("add -c n/Alice p/+12025551234 e/alice a/x", "Email"),
        ("add -c n/Alice p/+12025551234 e/alice@example.com a/x t/two words", "alphanumeric"),
        ("add -e n/Gala des/Fun d/2025-13-01 c/0", "YYYY-MM-DD"),
        ("add -e n/Gala des/Fun d/2025-01-01", "c/"),
        ("add -e n/Gala des/Fun d/2025-01-01 c/x", "not a valid id"),
        ("add -e n/Gala des/Fun d/2025-01-01 c/0 rm/1", "rm/"),
        ("add -e extra n/Gala des/Fun d/2025-01-01 c/0", "Unexpected"),
    ],
)
def test_add_errors(line, message) -> None:
    with pytest.raises(ParseError, match=message):
        parse_command(line, phone_region="US")


def test_description_prefix_not_confused_with_service() -> None:
    command = parse_command("add -e n/Gala des/Dress code s/ formal d/2025-01-01 c/0")
    assert command.data.description.value == "Dress code s/ formal"


def test_edit_contact() -> None:
    command = parse_command("edit 3 n/Alicia p/+393123456789 t/")
    assert isinstance(command, EditContactCommand)
    assert command.contact_id == Id(3)
    assert command.changes.name == Name("Alicia")
    assert command.changes.phone == Phone("+393123456789")
    assert command.changes.tags == frozenset()
    assert command.changes.email is None


def test_edit_contact_without_tags_leaves_them() -> None:
    command = parse_command("edit 3 e/new@example.com")
    assert command.changes.tags is None


def test_edit_event() -> None:
    command = parse_command("edit -e 2 d/2026-01-01 c/4 v/5 rm/0 rm/1")
    assert isinstance(command, EditEventCommand)
    assert command.event_id == Id(2)
    assert command.changes.date == date(2026, 1, 1)
    assert command.changes.add_client_ids == (Id(4),)
    assert command.changes.add_vendor_ids == (Id(5),)
    assert command.changes.remove_ids == (Id(0), Id(1))
    assert command.changes.name is None


def test_edit_errors() -> None:
    with pytest.raises(ParseError, match="Missing contact id"):
        parse_command("edit n/Alice")
    with pytest.raises(ParseError, match="Missing event id"):
        parse_command("edit -e n/Gala")
    with pytest.raises(ParseError):
        parse_command("edit -c 1 n/Alice")


def test_delete() -> None:
    assert parse_command("delete 4") == DeleteContactCommand(Id(4))
    assert parse_command("delete -e 4") == DeleteEventCommand(Id(4))
    for line in ("delete", "delete 1 2", "delete -v 1", "delete -1"):
        with pytest.raises(ParseError):
            parse_command(line)


@pytest.mark.parametrize(
    "line",
    [
        "delete ²",
        "delete -e ٣",
        "edit -e ² d/2025-01-01",
        "add -e n/Gala des/Fun d/2025-06-01 c/¹",
    ],
)
def test_non_ascii_digits_are_not_ids(line) -> None:
    with pytest.raises(ParseError, match="not a valid id"):
        parse_command(line)


def test_list_and_find() -> None:
    assert parse_command("list") == ListCommand(kind=None)
    assert parse_command("list -v") == ListCommand(kind=VENDOR)
    assert parse_command("LIST -e") == ListCommand(kind="event")
    assert parse_command("find -c ali  bo") == FindCommand(keywords=("ali", "bo"), kind=CLIENT)
    with pytest.raises(ParseError):
        parse_command("find -e")
    with pytest.raises(ParseError):
        parse_command("list alice")


def test_help_exit_and_unknown() -> None:
    assert isinstance(parse_command("help"), HelpCommand)
    assert isinstance(parse_command("exit"), ExitCommand)
    with pytest.raises(ParseError, match="Unknown command"):
        parse_command("frobnicate")
    with pytest.raises(ParseError):
        parse_command("   ")
