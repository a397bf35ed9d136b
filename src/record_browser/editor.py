"""
Editor dialog state for creating and editing user records
"""

from enum import Enum
from typing import List, Optional

from record_store.models.user import UserResponse


class DialogState(str, Enum):
    CLOSED = "closed"
    OPEN_FOR_CREATE = "open_for_create"
    OPEN_FOR_EDIT = "open_for_edit"


class ClientValidationFailure(ValueError):
    """Required form fields were left empty; nothing was sent to the store"""

    def __init__(self, missing_fields: List[str]):
        super().__init__(f"Required fields are empty: {', '.join(missing_fields)}")
        self.missing_fields = missing_fields


class EditorDialog:
    """
    Three-state dialog: closed, open to create, or open to edit one record.

    The edit target is set exactly when the state is OPEN_FOR_EDIT.
    """

    def __init__(self):
        self.state = DialogState.CLOSED
        self.target: Optional[UserResponse] = None
        self.name = ""
        self.email = ""

    @property
    def is_open(self) -> bool:
        return self.state is not DialogState.CLOSED

    @property
    def title(self) -> str:
        return "Edit User" if self.state is DialogState.OPEN_FOR_EDIT else "Add User"

    def open(self, record: Optional[UserResponse] = None) -> None:
        """Seed the form from record, or clear it for a new record"""
        if record is not None:
            self.state = DialogState.OPEN_FOR_EDIT
            self.target = record
            self.name = record.name
            self.email = record.email
        else:
            self.state = DialogState.OPEN_FOR_CREATE
            self.target = None
            self.name = ""
            self.email = ""

    def close(self) -> None:
        self.state = DialogState.CLOSED
        self.target = None
        self.name = ""
        self.email = ""

    def validate(self) -> None:
        missing = [field for field in ("name", "email") if not getattr(self, field).strip()]
        if missing:
            raise ClientValidationFailure(missing)
