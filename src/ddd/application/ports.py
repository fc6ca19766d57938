"""Application ports (interfaces). Implemented by infrastructure adapters."""

from typing import Protocol

from ddd.domain import AddressBook


class AddressBookStorage(Protocol):
    """Loads and saves the whole address book (full replace)."""

    def load(self) -> AddressBook | None:
        """Return the stored book, or None if nothing has been saved yet.

        Raises StorageError if the stored data is unreadable or inconsistent.
        """
        ...

    def save(self, book: AddressBook) -> None:
        """Replace the stored book. Must only read from book.

        Raises StorageError (or OSError) if the book could not be written.
        """
        ...
