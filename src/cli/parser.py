"""Parse one line of user input into a command object.

Syntax: COMMAND [-c|-v|-e] [PREAMBLE] [prefix/value]...
"""

import re
from collections.abc import Callable
from datetime import date

from cli.commands import (
    AddContactCommand,
    AddEventCommand,
    Command,
    DeleteContactCommand,
    DeleteEventCommand,
    EditContactCommand,
    EditEventCommand,
    ExitCommand,
    FindCommand,
    HelpCommand,
    ListCommand,
)
from ddd.application import (
    CLIENT,
    VENDOR,
    ContactChanges,
    ContactData,
    EventChanges,
    EventData,
)
from ddd.domain import Address, Description, Email, Id, Name, Phone, Service, Tag
from ddd.infrastructure.phone import normalize_phone

PREFIX_NAME = "n/"
PREFIX_PHONE = "p/"
PREFIX_EMAIL = "e/"
PREFIX_ADDRESS = "a/"
PREFIX_TAG = "t/"
PREFIX_SERVICE = "s/"
PREFIX_DESCRIPTION = "des/"
PREFIX_DATE = "d/"
PREFIX_CLIENT = "c/"
PREFIX_VENDOR = "v/"
PREFIX_REMOVE = "rm/"

FLAG_CLIENT = "-c"
FLAG_VENDOR = "-v"
FLAG_EVENT = "-e"

_CONTACT_PREFIXES = (
    PREFIX_NAME, PREFIX_PHONE, PREFIX_EMAIL, PREFIX_ADDRESS, PREFIX_TAG, PREFIX_SERVICE,
)
_EVENT_PREFIXES = (
    PREFIX_NAME, PREFIX_DESCRIPTION, PREFIX_DATE, PREFIX_CLIENT, PREFIX_VENDOR, PREFIX_REMOVE,
)
_MULTI_VALUED = {PREFIX_TAG, PREFIX_CLIENT, PREFIX_VENDOR, PREFIX_REMOVE}

ADD_USAGE = (
    "add -c n/NAME p/PHONE e/EMAIL a/ADDRESS [t/TAG]...\n"
    "add -v n/NAME p/PHONE e/EMAIL a/ADDRESS s/SERVICE [t/TAG]...\n"
    "add -e n/NAME des/DESCRIPTION d/YYYY-MM-DD c/CLIENT_ID... [v/VENDOR_ID]..."
)
EDIT_USAGE = (
    "edit ID [n/NAME] [p/PHONE] [e/EMAIL] [a/ADDRESS] [s/SERVICE] [t/TAG]...\n"
    "edit -e ID [n/NAME] [des/DESCRIPTION] [d/YYYY-MM-DD] [c/CLIENT_ID]... "
    "[v/VENDOR_ID]... [rm/CONTACT_ID]..."
)
DELETE_USAGE = "delete ID\ndelete -e ID"
LIST_USAGE = "list [-c|-v|-e]"
FIND_USAGE = "find [-c|-v|-e] KEYWORD [MORE_KEYWORDS]..."
USAGE = "\n".join(
    [ADD_USAGE, EDIT_USAGE, DELETE_USAGE, LIST_USAGE, FIND_USAGE, "help", "exit"]
)


class ParseError(ValueError):
    """User input does not match the command syntax. Message is shown to the user."""


def _split_prefixes(args: str, prefixes: tuple[str, ...]) -> tuple[str, dict[str, list[str]]]:
    """Return (preamble, values per prefix). A prefix only counts after whitespace."""
    alternatives = "|".join(re.escape(p) for p in sorted(prefixes, key=len, reverse=True))
    parts = re.split(rf"\s({alternatives})", " " + args)
    values: dict[str, list[str]] = {}
    for prefix, value in zip(parts[1::2], parts[2::2]):
        values.setdefault(prefix, []).append(value.strip())
    duplicated = sorted(p for p, v in values.items() if len(v) > 1 and p not in _MULTI_VALUED)
    if duplicated:
        raise ParseError(
            "Multiple values specified for the following single-valued field(s): "
            + " ".join(duplicated)
        )
    return parts[0].strip(), values


def _take_flag(args: str) -> tuple[str | None, str]:
    head, _, rest = args.strip().partition(" ")
    if head in (FLAG_CLIENT, FLAG_VENDOR, FLAG_EVENT):
        return head, rest.strip()
    return None, args.strip()


def _value(builder: Callable, raw: str):
    try:
        return builder(raw)
    except ValueError as exc:
        raise ParseError(str(exc)) from exc


def parse_id(raw: str) -> Id:
    raw = raw.strip()
    if not (raw.isascii() and raw.isdigit()):
        raise ParseError(f"'{raw}' is not a valid id (expected a non-negative integer).")
    return Id(int(raw))


def parse_phone(raw: str, region: str | None) -> Phone:
    normalized = normalize_phone(raw, default_region=region)
    if normalized is None:
        raise ParseError(f"'{raw}' is not a valid phone number.")
    return Phone(normalized)


def parse_date(raw: str) -> date:
    try:
        return date.fromisoformat(raw.strip())
    except ValueError:
        raise ParseError(f"'{raw}' is not a valid date (expected YYYY-MM-DD).") from None


def _require(values: dict[str, list[str]], prefixes: tuple[str, ...], usage: str) -> None:
    missing = [p for p in prefixes if not values.get(p)]
    if missing:
        raise ParseError(f"Missing field(s): {' '.join(missing)}\nUsage:\n{usage}")


def _parse_add(args: str, region: str | None) -> Command:
    flag, rest = _take_flag(args)
    if flag == FLAG_EVENT:
        preamble, values = _split_prefixes(rest, _EVENT_PREFIXES)
        if preamble:
            raise ParseError(f"Unexpected text '{preamble}'.\nUsage:\n{ADD_USAGE}")
        _require(values, (PREFIX_NAME, PREFIX_DESCRIPTION, PREFIX_DATE, PREFIX_CLIENT), ADD_USAGE)
        if values.get(PREFIX_REMOVE):
            raise ParseError(f"{PREFIX_REMOVE} is only valid when editing an event.")
        return AddEventCommand(
            EventData(
                name=_value(Name, values[PREFIX_NAME][0]),
                description=_value(Description, values[PREFIX_DESCRIPTION][0]),
                date=parse_date(values[PREFIX_DATE][0]),
                client_ids=tuple(parse_id(v) for v in values[PREFIX_CLIENT]),
                vendor_ids=tuple(parse_id(v) for v in values.get(PREFIX_VENDOR, [])),
            )
        )
    if flag not in (FLAG_CLIENT, FLAG_VENDOR):
        raise ParseError(f"Specify what to add with -c, -v or -e.\nUsage:\n{ADD_USAGE}")
    preamble, values = _split_prefixes(rest, _CONTACT_PREFIXES)
    if preamble:
        raise ParseError(f"Unexpected text '{preamble}'.\nUsage:\n{ADD_USAGE}")
    required = (PREFIX_NAME, PREFIX_PHONE, PREFIX_EMAIL, PREFIX_ADDRESS)
    if flag == FLAG_VENDOR:
        required += (PREFIX_SERVICE,)
    elif values.get(PREFIX_SERVICE):
        raise ParseError("Only vendors have a service (use add -v).")
    _require(values, required, ADD_USAGE)
    service = values.get(PREFIX_SERVICE)
    return AddContactCommand(
        ContactData(
            name=_value(Name, values[PREFIX_NAME][0]),
            phone=parse_phone(values[PREFIX_PHONE][0], region),
            email=_value(Email, values[PREFIX_EMAIL][0]),
            address=_value(Address, values[PREFIX_ADDRESS][0]),
            tags=frozenset(_value(Tag, t) for t in values.get(PREFIX_TAG, [])),
            service=_value(Service, service[0]) if service else None,
        )
    )


def _parse_tags(raw_tags: list[str] | None) -> frozenset[Tag] | None:
    """t/ with no value clears all tags."""
    if raw_tags is None:
        return None
    return frozenset(_value(Tag, t) for t in raw_tags if t)


def _parse_edit(args: str, region: str | None) -> Command:
    flag, rest = _take_flag(args)
    if flag == FLAG_EVENT:
        preamble, values = _split_prefixes(rest, _EVENT_PREFIXES)
        event_id = parse_id(preamble) if preamble else None
        if event_id is None:
            raise ParseError(f"Missing event id.\nUsage:\n{EDIT_USAGE}")
        name = values.get(PREFIX_NAME)
        description = values.get(PREFIX_DESCRIPTION)
        when = values.get(PREFIX_DATE)
        return EditEventCommand(
            event_id,
            EventChanges(
                name=_value(Name, name[0]) if name else None,
                description=_value(Description, description[0]) if description else None,
                date=parse_date(when[0]) if when else None,
                add_client_ids=tuple(parse_id(v) for v in values.get(PREFIX_CLIENT, [])),
                add_vendor_ids=tuple(parse_id(v) for v in values.get(PREFIX_VENDOR, [])),
                remove_ids=tuple(parse_id(v) for v in values.get(PREFIX_REMOVE, [])),
            ),
        )
    if flag is not None:
        raise ParseError(f"Contacts are edited by id alone.\nUsage:\n{EDIT_USAGE}")
    preamble, values = _split_prefixes(rest, _CONTACT_PREFIXES)
    if not preamble:
        raise ParseError(f"Missing contact id.\nUsage:\n{EDIT_USAGE}")
    contact_id = parse_id(preamble)
    name = values.get(PREFIX_NAME)
    phone = values.get(PREFIX_PHONE)
    email = values.get(PREFIX_EMAIL)
    address = values.get(PREFIX_ADDRESS)
    service = values.get(PREFIX_SERVICE)
    return EditContactCommand(
        contact_id,
        ContactChanges(
            name=_value(Name, name[0]) if name else None,
            phone=parse_phone(phone[0], region) if phone else None,
            email=_value(Email, email[0]) if email else None,
            address=_value(Address, address[0]) if address else None,
            tags=_parse_tags(values.get(PREFIX_TAG)),
            service=_value(Service, service[0]) if service else None,
        ),
    )


def _parse_delete(args: str) -> Command:
    flag, rest = _take_flag(args)
    if not rest or len(rest.split()) != 1 or flag in (FLAG_CLIENT, FLAG_VENDOR):
        raise ParseError(f"Usage:\n{DELETE_USAGE}")
    if flag == FLAG_EVENT:
        return DeleteEventCommand(parse_id(rest))
    return DeleteContactCommand(parse_id(rest))


def _kind_for(flag: str | None) -> str | None:
    return {FLAG_CLIENT: CLIENT, FLAG_VENDOR: VENDOR, FLAG_EVENT: "event"}.get(flag)


def _parse_list(args: str) -> Command:
    flag, rest = _take_flag(args)
    if rest:
        raise ParseError(f"Usage:\n{LIST_USAGE}\nUse find to search by name.")
    return ListCommand(kind=_kind_for(flag))


def _parse_find(args: str) -> Command:
    flag, rest = _take_flag(args)
    keywords = rest.split()
    if not keywords:
        raise ParseError(f"Usage:\n{FIND_USAGE}")
    return FindCommand(keywords=tuple(keywords), kind=_kind_for(flag))


def parse_command(line: str, phone_region: str | None = None) -> Command:
    """Turn a line into a command. Raises ParseError with a user-facing message."""
    text = (line or "").strip()
    if not text:
        raise ParseError("Type a command. Enter help to see all commands.")
    word, _, args = text.partition(" ")
    word = word.lower()
    if word == "add":
        return _parse_add(args, phone_region)
    if word == "edit":
        return _parse_edit(args, phone_region)
    if word == "delete":
        return _parse_delete(args)
    if word == "list":
        return _parse_list(args)
    if word == "find":
        return _parse_find(args)
    if word == "help":
        return HelpCommand(USAGE)
    if word == "exit":
        return ExitCommand()
    raise ParseError(f"Unknown command '{word}'. Enter help to see all commands.")
