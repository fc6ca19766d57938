"""In-memory implementation of AddressBookStorage (no file)."""

from ddd.domain import AddressBook
from ddd.infrastructure.json_storage import JsonSerializableAddressBook


class InMemoryAddressBookStorage:
    """Keeps the last saved snapshot in memory.
    load() rebuilds a fresh book from the snapshot, exactly as the JSON storage would.
    """

    def __init__(self, initial: AddressBook | None = None) -> None:
        self._snapshot: JsonSerializableAddressBook | None = None
        self.save_count = 0
        if initial is not None:
            self._snapshot = JsonSerializableAddressBook.from_model(initial)

    def load(self) -> AddressBook | None:
        if self._snapshot is None:
            return None
        return self._snapshot.to_model()

    def save(self, book: AddressBook) -> None:
        self._snapshot = JsonSerializableAddressBook.from_model(book)
        self.save_count += 1

    @property
    def snapshot(self) -> JsonSerializableAddressBook | None:
        return self._snapshot
