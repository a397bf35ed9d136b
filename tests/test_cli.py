"""
Tests for the record browser command line
"""

import pytest

from record_browser.cli import create_argument_parser, render_table, run
from record_store.models.user import UserResponse


async def _run(argv, store_client) -> int:
    args = create_argument_parser().parse_args(argv)
    return await run(args, store_client)


def test_render_table() -> None:
    table = render_table([
        UserResponse(id=1, name="Ann", email="a@x.com"),
        UserResponse(id=10, name="Bob Jones", email="b@x.com"),
    ])
    assert table.splitlines() == [
        "ID  Name       Email",
        "1   Ann        a@x.com",
        "10  Bob Jones  b@x.com",
    ]
    assert render_table([]) == "(no users)"


@pytest.mark.asyncio
async def test_add_edit_list_delete(store_client, fake_pool, capsys) -> None:
    assert await _run(["add", "Ann", "a@x.com"], store_client) == 0
    assert "User registered successfully!" in capsys.readouterr().out

    assert await _run(["edit", "1", "Ann B", "a@x.com"], store_client) == 0
    out = capsys.readouterr().out
    assert "User updated successfully!" in out
    assert "Ann B" in out

    assert await _run(["add", "Bob", "b@x.com"], store_client) == 0
    capsys.readouterr()

    assert await _run(["list", "--search", "BOB"], store_client) == 0
    out = capsys.readouterr().out
    assert "Bob" in out
    assert "Ann B" not in out

    assert await _run(["delete", "1"], store_client) == 0
    assert "User deleted successfully!" in capsys.readouterr().out
    assert list(fake_pool.rows) == [2]


@pytest.mark.asyncio
async def test_edit_unknown_id_fails(store_client, fake_pool, capsys) -> None:
    assert await _run(["edit", "9", "X", "x@x.com"], store_client) == 1
    assert "No user with id 9" in capsys.readouterr().err


@pytest.mark.asyncio
async def test_store_fault_exits_nonzero(store_client, broken_pool, capsys) -> None:
    assert await _run(["list"], store_client) == 1
    assert "Something went wrong!" in capsys.readouterr().out
