"""
Record browser - local view over the record store's user collection

The store is the source of truth. After every successful write the browser
throws away its copy and loads the full collection again.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from record_browser.client import RecordStoreRequestError, UsersApiClient
from record_browser.editor import ClientValidationFailure, EditorDialog
from record_store.models.user import UserResponse

logger = logging.getLogger(__name__)

SUCCESS = "success"
ERROR = "error"


@dataclass
class Notice:
    """Acknowledgment shown to the user after an action"""
    level: str
    title: str
    text: str


def matches(user: UserResponse, term: str) -> bool:
    needle = term.lower()
    return needle in user.name.lower() or needle in user.email.lower()


class RecordBrowser:
    """Canonical copy, filtered view and editor dialog for user records"""

    def __init__(self, client: UsersApiClient):
        self.client = client
        self.users: List[UserResponse] = []
        self.filtered_users: List[UserResponse] = []
        self.search_term = ""
        self.editor = EditorDialog()
        self.notices: List[Notice] = []

    async def initialize(self) -> bool:
        """Initial load; a failure is acknowledged rather than raised"""
        return await self._reload()

    async def load(self) -> None:
        """Replace the canonical copy and the filtered view with the store's collection"""
        users = await self.client.list_users()
        self.users = users
        self.filtered_users = list(users)
        self.search_term = ""
        logger.info(f"Loaded {len(users)} user records")

    def search(self, term: str) -> List[UserResponse]:
        """Case-insensitive substring filter on name or email over the canonical copy"""
        self.search_term = term
        self.filtered_users = [user for user in self.users if matches(user, term)]
        return self.filtered_users

    def find(self, user_id: int) -> Optional[UserResponse]:
        return next((user for user in self.users if user.id == user_id), None)

    def open_editor(self, record: Optional[UserResponse] = None) -> None:
        self.editor.open(record)

    def cancel(self) -> None:
        self.editor.close()

    async def submit(self) -> bool:
        """
        Create or update from the editor form, then reload.

        Returns:
            True when the write succeeded. On failure the dialog stays open.
        """
        if not self.editor.is_open:
            raise RuntimeError("Editor dialog is not open")

        try:
            self.editor.validate()
        except ClientValidationFailure as e:
            self._notify(ERROR, "Missing fields", f"Please fill in: {', '.join(e.missing_fields)}")
            return False

        target = self.editor.target
        name, email = self.editor.name, self.editor.email
        try:
            if target is not None:
                await self.client.update_user(target.id, name, email)
                text = "User updated successfully!"
            else:
                await self.client.create_user(name, email)
                text = "User registered successfully!"
        except RecordStoreRequestError as e:
            self._notify_failure(e)
            return False

        self._notify(SUCCESS, "Success!", text)
        self.editor.close()
        await self._reload()
        return True

    async def delete_record(self, user_id: int) -> bool:
        try:
            await self.client.delete_user(user_id)
        except RecordStoreRequestError as e:
            self._notify_failure(e)
            return False

        self._notify(SUCCESS, "Success!", "User deleted successfully!")
        await self._reload()
        return True

    async def _reload(self) -> bool:
        try:
            await self.load()
        except RecordStoreRequestError as e:
            self._notify_failure(e)
            return False
        return True

    def _notify(self, level: str, title: str, text: str) -> None:
        self.notices.append(Notice(level, title, text))
        logger.info(f"[{level}] {title} {text}")

    def _notify_failure(self, error: Exception) -> None:
        logger.error(f"Record store request failed: {error}")
        self._notify(ERROR, "Oops...", "Something went wrong!")
