"""
Tests for the editor dialog state machine
"""

import pytest

from record_browser.editor import ClientValidationFailure, DialogState, EditorDialog
from record_store.models.user import UserResponse


def test_starts_closed() -> None:
    dialog = EditorDialog()
    assert dialog.state is DialogState.CLOSED
    assert not dialog.is_open
    assert dialog.target is None


def test_open_without_record_is_create() -> None:
    dialog = EditorDialog()
    dialog.name, dialog.email = "stale", "stale@x.com"

    dialog.open()

    assert dialog.state is DialogState.OPEN_FOR_CREATE
    assert dialog.target is None
    assert (dialog.name, dialog.email) == ("", "")
    assert dialog.title == "Add User"


def test_open_with_record_seeds_form() -> None:
    record = UserResponse(id=3, name="Ann", email="a@x.com")
    dialog = EditorDialog()

    dialog.open(record)

    assert dialog.state is DialogState.OPEN_FOR_EDIT
    assert dialog.target == record
    assert (dialog.name, dialog.email) == ("Ann", "a@x.com")
    assert dialog.title == "Edit User"


def test_close_drops_edit_target() -> None:
    dialog = EditorDialog()
    dialog.open(UserResponse(id=3, name="Ann", email="a@x.com"))

    dialog.close()

    assert dialog.state is DialogState.CLOSED
    assert dialog.target is None

    dialog.open()
    assert dialog.target is None


@pytest.mark.parametrize("name,email,missing", [
    ("", "a@x.com", ["name"]),
    ("Ann", "   ", ["email"]),
    ("", "", ["name", "email"]),
])
def test_validate_reports_empty_fields(name, email, missing) -> None:
    dialog = EditorDialog()
    dialog.open()
    dialog.name, dialog.email = name, email

    with pytest.raises(ClientValidationFailure) as excinfo:
        dialog.validate()

    assert excinfo.value.missing_fields == missing


def test_validate_accepts_unformatted_email() -> None:
    dialog = EditorDialog()
    dialog.open()
    dialog.name, dialog.email = "Ann", "not-an-email"
    dialog.validate()
