# mypy: ignore-errors
"""Tests for registration and password input checks."""

import pytest

from lireddit.services.validation import FieldError, validate_password, validate_register


def test_valid_registration_has_no_errors() -> None:
    assert validate_register("bob", "bob@example.com", "secret") == []


@pytest.mark.parametrize(
    ("username", "email", "password", "expected"),
    [
        ("bo", "bob@example.com", "secret", [FieldError("username", "length must be greater than 2")]),
        ("b@b", "bob@example.com", "secret", [FieldError("username", "cannot include an @")]),
        ("bob", "bob.example.com", "secret", [FieldError("email", "invalid email")]),
        ("bob", "bob@example.com", "short", [FieldError("password", "length must be greater than 5")]),
    ],
)
def test_single_field_errors(username, email, password, expected) -> None:
    assert validate_register(username, email, password) == expected


def test_password_field_name_is_configurable() -> None:
    assert validate_password("abc", field="newPassword") == [
        FieldError("newPassword", "length must be greater than 5")
    ]
