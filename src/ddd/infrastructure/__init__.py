"""Infrastructure layer: concrete implementations of application ports."""

from ddd.infrastructure.json_storage import (
    JsonAddressBookStorage,
    JsonSerializableAddressBook,
)
from ddd.infrastructure.memory_storage import InMemoryAddressBookStorage
from ddd.infrastructure.phone import format_phone, normalize_phone
from ddd.infrastructure.settings import Settings, load_env_file, load_settings

__all__ = [
    "InMemoryAddressBookStorage",
    "JsonAddressBookStorage",
    "JsonSerializableAddressBook",
    "Settings",
    "format_phone",
    "load_env_file",
    "load_settings",
    "normalize_phone",
]
