"""
Tests for the users service layer
"""

import pytest

from record_store.services.base_service import STORE_FAULT, rows_affected
from record_store.services.users_service import UsersService, get_users_service


@pytest.mark.asyncio
async def test_create_returns_assigned_id_and_fields(fake_pool) -> None:
    result = await UsersService().create_user("Ann", "a@x.com")

    assert result.success
    assert result.count == 1
    assert result.data == [{"id": 1, "name": "Ann", "email": "a@x.com"}]


@pytest.mark.asyncio
async def test_list_is_ordered_by_id(fake_pool) -> None:
    service = UsersService()
    for name in ["Cy", "Ann", "Bob"]:
        await service.create_user(name, f"{name.lower()}@x.com")

    result = await service.list_users()

    assert result.success
    assert [row["id"] for row in result.data] == [1, 2, 3]
    assert result.count == 3


@pytest.mark.asyncio
async def test_update_and_delete_report_rows_affected(fake_pool) -> None:
    service = UsersService()
    await service.create_user("Ann", "a@x.com")

    updated = await service.update_user(1, "Ann B", "a@x.com")
    missing = await service.update_user(7, "Nobody", "n@x.com")

    assert updated.success and updated.count == 1
    assert missing.success and missing.count == 0
    assert missing.data == [{"id": 7, "name": "Nobody", "email": "n@x.com"}]

    deleted = await service.delete_user(1)
    deleted_again = await service.delete_user(1)

    assert deleted.count == 1
    assert deleted_again.success and deleted_again.count == 0


@pytest.mark.asyncio
async def test_store_errors_become_failed_results(broken_pool) -> None:
    service = UsersService()

    for result in [
        await service.create_user("Ann", "a@x.com"),
        await service.list_users(),
        await service.update_user(1, "Ann", "a@x.com"),
        await service.delete_user(1),
    ]:
        assert not result.success
        assert result.error_type == STORE_FAULT
        assert "Connection refused" in result.error


def test_get_users_service_is_shared() -> None:
    assert get_users_service() is get_users_service()


@pytest.mark.parametrize("status,expected", [
    ("UPDATE 1", 1),
    ("DELETE 0", 0),
    ("DELETE 12", 12),
    ("", 0),
    (None, 0),
])
def test_rows_affected(status, expected) -> None:
    assert rows_affected(status) == expected
