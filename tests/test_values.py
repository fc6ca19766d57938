"""Tests for value objects: cleaning and validation."""

import pytest

from ddd.domain import Address, Description, Email, Id, Name, Phone, Tag


def test_name_collapses_whitespace_and_keys_case_insensitively():
    name = Name("  Alice   Smith ")
    assert name.value == "Alice Smith"
    assert name.key == Name("alice smith").key
    assert name != Name("alice smith")


@pytest.mark.parametrize("raw", ["", "   ", "-dash first", "a" * 501, "Alice\x00"])
def test_name_invalid(raw):
    with pytest.raises(ValueError):
        Name(raw)


def test_id_must_be_non_negative_int():
    assert Id(0) < Id(3)
    assert str(Id(7)) == "7"
    for raw in (-1, True, "3", 1.5):
        with pytest.raises(ValueError):
            Id(raw)


def test_phone_requires_e164():
    assert Phone("+1 2025551234").value == "+12025551234"
    with pytest.raises(ValueError):
        Phone("2025551234")


def test_email_address_tag_description():
    assert Email("bob.smith+events@mail.example.com").value == "bob.smith+events@mail.example.com"
    with pytest.raises(ValueError):
        Email("bob@")
    assert Address(" 1  Main St ").value == "1 Main St"
    with pytest.raises(ValueError):
        Tag("no spaces")
    with pytest.raises(ValueError):
        Description("")
