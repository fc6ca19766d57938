"""Domain errors. All are recoverable: the service layer turns them into result types."""


class DddError(Exception):
    """Base class for address book errors."""


class NotFoundError(DddError):
    """A contact, event, or contact-event association does not exist."""


class DuplicateError(DddError):
    """A contact or event with the same name (or the same link) already exists."""


class InvalidStateError(DddError):
    """An event would have no clients, or the association graph is inconsistent."""


class StorageError(DddError):
    """Stored address book data cannot be read or describes an inconsistent book."""
