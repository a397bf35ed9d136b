"""
Users service - one parameterized statement per operation
"""

import logging
from record_store.services.base_service import BaseService, ServiceResult, STORE_ERRORS
from record_store.utils.error_handling import log_business_error

logger = logging.getLogger(__name__)

INSERT_USER = "INSERT INTO users (name, email) VALUES ($1, $2) RETURNING id"
SELECT_USERS = "SELECT id, name, email FROM users ORDER BY id"
UPDATE_USER = "UPDATE users SET name = $1, email = $2 WHERE id = $3"
DELETE_USER = "DELETE FROM users WHERE id = $1"

class UsersService(BaseService):
    """Service for user record operations"""

    def __init__(self):
        super().__init__("users")

    async def create_user(self, name: str, email: str) -> ServiceResult:
        """
        Insert a user; the store assigns the id

        Returns:
            ServiceResult whose single row is the new id plus the submitted fields
        """
        try:
            row = await self._fetchrow(INSERT_USER, name, email)
        except STORE_ERRORS as e:
            return self._store_fault("Create", e)

        if row is None:
            return self._store_fault("Create", RuntimeError("Insert returned no id"))

        logger.info(f"Created user {row['id']} for {email}")
        return ServiceResult(
            success=True,
            data=[{"id": row["id"], "name": name, "email": email}],
            count=1
        )

    async def list_users(self) -> ServiceResult:
        """Every user record, ordered by id"""
        try:
            rows = await self._fetch(SELECT_USERS)
        except STORE_ERRORS as e:
            return self._store_fault("List", e)

        return ServiceResult(success=True, data=rows, count=len(rows))

    async def update_user(self, user_id: int, name: str, email: str) -> ServiceResult:
        """
        Overwrite name and email of a user

        The submitted values are echoed back even when no row matched;
        count tells how many rows actually changed.
        """
        try:
            count = await self._execute(UPDATE_USER, name, email, user_id)
        except STORE_ERRORS as e:
            return self._store_fault("Update", e)

        if count == 0:
            log_business_error(
                "record_not_found",
                f"Update matched no user with id {user_id}",
                {"table": self.table_name, "id": user_id}
            )

        return ServiceResult(
            success=True,
            data=[{"id": user_id, "name": name, "email": email}],
            count=count
        )

    async def delete_user(self, user_id: int) -> ServiceResult:
        try:
            count = await self._execute(DELETE_USER, user_id)
        except STORE_ERRORS as e:
            return self._store_fault("Delete", e)

        if count == 0:
            log_business_error(
                "record_not_found",
                f"Delete matched no user with id {user_id}",
                {"table": self.table_name, "id": user_id}
            )
        else:
            logger.info(f"Deleted user {user_id}")

        return ServiceResult(success=True, data=[], count=count)


# Global service instance
_users_service = None

def get_users_service() -> UsersService:
    """Get the global users service instance"""
    global _users_service
    if _users_service is None:
        _users_service = UsersService()
    return _users_service
