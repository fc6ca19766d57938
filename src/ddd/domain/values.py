"""Value objects for contacts and events. All immutable; invalid values raise ValueError."""

import re
from dataclasses import dataclass

NAME_MAX_LENGTH = 500
DESCRIPTION_MAX_LENGTH = 2000

_NAME_PATTERN = re.compile(r"^[^\W_][\w .,'&()-]*$")
_PHONE_PATTERN = re.compile(r"^\+\d{4,15}$")
_EMAIL_PATTERN = re.compile(
    r"^[A-Za-z0-9](?:[\w.+-]*[A-Za-z0-9])?@[A-Za-z0-9-]+(?:\.[A-Za-z0-9-]+)*$"
)
_TAG_PATTERN = re.compile(r"^[A-Za-z0-9]+$")


def _clean(value: str, label: str, max_length: int | None = None) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{label} must be non-empty.")
    cleaned = " ".join(value.split())
    if max_length is not None and len(cleaned) > max_length:
        raise ValueError(f"{label} must be at most {max_length} chars.")
    return cleaned


@dataclass(frozen=True, order=True)
class Id:
    """Stable identifier of a contact or event. Never reused within a session."""

    value: int

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError("Id must be an integer.")
        if self.value < 0:
            raise ValueError("Id must be non-negative.")

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Name:
    """
    Name of a contact or event.
    Whitespace is collapsed; two names match for deduplication regardless of case.
    """

    value: str

    def __post_init__(self):
        value = _clean(self.value, "Name", NAME_MAX_LENGTH)
        if not _NAME_PATTERN.match(value):
            raise ValueError(
                "Name should start with a letter or digit and contain only "
                "letters, digits, spaces and basic punctuation."
            )
        object.__setattr__(self, "value", value)

    @property
    def key(self) -> str:
        return self.value.casefold()

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Phone:
    """Phone number in E.164 form (normalize raw input before constructing)."""

    value: str

    def __post_init__(self):
        value = _clean(self.value, "Phone").replace(" ", "")
        if not _PHONE_PATTERN.match(value):
            raise ValueError("Phone must be in E.164 form, e.g. +12025551234.")
        object.__setattr__(self, "value", value)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Email:
    value: str

    def __post_init__(self):
        value = _clean(self.value, "Email")
        if not _EMAIL_PATTERN.match(value):
            raise ValueError("Email should be of the format local-part@domain.")
        object.__setattr__(self, "value", value)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Address:
    value: str

    def __post_init__(self):
        object.__setattr__(self, "value", _clean(self.value, "Address"))

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Tag:
    """Single-word label attached to a contact."""

    value: str

    def __post_init__(self):
        value = _clean(self.value, "Tag")
        if not _TAG_PATTERN.match(value):
            raise ValueError("Tags should be alphanumeric.")
        object.__setattr__(self, "value", value)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Service:
    """What a vendor provides (e.g. catering, photography)."""

    value: str

    def __post_init__(self):
        object.__setattr__(self, "value", _clean(self.value, "Service"))

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Description:
    value: str

    def __post_init__(self):
        object.__setattr__(
            self, "value", _clean(self.value, "Description", DESCRIPTION_MAX_LENGTH)
        )

    def __str__(self) -> str:
        return self.value
