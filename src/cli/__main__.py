"""
Interactive DDD shell: AddressBookService + JSON file storage.
Run: python -m cli (from repo root, with .env or env vars set).
"""

import logging

from ddd.infrastructure import load_env_file, load_settings

load_env_file()

from cli.parser import ParseError, parse_command  # noqa: E402
from ddd.application import AddressBookService  # noqa: E402
from ddd.domain import AddressBook, StorageError  # noqa: E402
from ddd.infrastructure import JsonAddressBookStorage  # noqa: E402

logger = logging.getLogger(__name__)

PROMPT = "ddd> "
WELCOME = "DDD address book. Enter help to see all commands, exit to quit."


def handle_line(
    service: AddressBookService, line: str, phone_region: str | None = None
) -> tuple[str, bool]:
    """Run one line of input. Returns (reply, should_exit)."""
    try:
        command = parse_command(line, phone_region)
    except ParseError as exc:
        return str(exc), False
    try:
        reply = command.execute(service)
    except StorageError as exc:
        logger.error("%s", exc)
        return f"{exc}\nThe change is kept for this session only.", False
    return reply, command.is_exit


def build_service(storage: JsonAddressBookStorage) -> AddressBookService:
    """Load the stored book; on unreadable data keep the file and start empty."""
    try:
        return AddressBookService(storage)
    except StorageError as exc:
        logger.error("%s", exc)
        logger.warning(
            "Starting with an empty address book; %s will be overwritten on the next change",
            storage.path,
        )
        return AddressBookService(storage, book=AddressBook())


def main() -> None:
    settings = load_settings()
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=getattr(logging, settings.log_level, logging.INFO),
    )
    service = build_service(JsonAddressBookStorage(settings.data_path))
    print(WELCOME)
    while True:
        try:
            line = input(PROMPT)
        except (EOFError, KeyboardInterrupt):
            print()
            break
        if not line.strip():
            continue
        reply, should_exit = handle_line(service, line, settings.phone_region)
        print(reply)
        if should_exit:
            break


if __name__ == "__main__":
    main()
