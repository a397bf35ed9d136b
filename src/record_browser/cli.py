"""
Command line front end for the record browser
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from record_browser.browser import RecordBrowser
from record_browser.client import UsersApiClient
from record_browser.settings import RECORD_STORE_URL
from record_store.models.user import UserResponse


def create_argument_parser() -> argparse.ArgumentParser:
    """Create command line argument parser"""
    parser = argparse.ArgumentParser(
        prog="record_browser",
        description="Browse and edit user records in the record store",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m record_browser list                        # All users
  python -m record_browser list --search ann           # Users whose name or email contains "ann"
  python -m record_browser add "Ann" a@x.com           # Create a user
  python -m record_browser edit 1 "Ann B" a@x.com      # Update user 1
  python -m record_browser delete 1                    # Delete user 1
        """
    )
    parser.add_argument(
        "--url",
        default=RECORD_STORE_URL,
        help=f"Record store base URL (default: {RECORD_STORE_URL})"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show request logging"
    )

    commands = parser.add_subparsers(dest="command", required=True)

    list_parser = commands.add_parser("list", help="List users")
    list_parser.add_argument("--search", default="", help="Filter by name or email")

    add_parser = commands.add_parser("add", help="Create a user")
    add_parser.add_argument("name")
    add_parser.add_argument("email")

    edit_parser = commands.add_parser("edit", help="Update a user")
    edit_parser.add_argument("id", type=int)
    edit_parser.add_argument("name")
    edit_parser.add_argument("email")

    delete_parser = commands.add_parser("delete", help="Delete a user")
    delete_parser.add_argument("id", type=int)

    return parser


def render_table(users: List[UserResponse]) -> str:
    if not users:
        return "(no users)"
    id_width = max(len("ID"), *(len(str(user.id)) for user in users))
    name_width = max(len("Name"), *(len(user.name) for user in users))
    lines = [f"{'ID':<{id_width}}  {'Name':<{name_width}}  Email"]
    for user in users:
        lines.append(f"{user.id:<{id_width}}  {user.name:<{name_width}}  {user.email}")
    return "\n".join(lines)


async def run_command(args: argparse.Namespace, browser: RecordBrowser) -> bool:
    """Drive the browser the way a user would for one command"""
    if not await browser.initialize():
        return False

    if args.command == "list":
        browser.search(args.search)
        return True

    if args.command == "delete":
        return await browser.delete_record(args.id)

    if args.command == "edit":
        record = browser.find(args.id)
        if record is None:
            print(f"No user with id {args.id}", file=sys.stderr)
            return False
        browser.open_editor(record)
    else:
        browser.open_editor()

    browser.editor.name = args.name
    browser.editor.email = args.email
    return await browser.submit()


async def run(args: argparse.Namespace, client: UsersApiClient) -> int:
    browser = RecordBrowser(client)
    ok = await run_command(args, browser)

    for notice in browser.notices:
        print(f"{notice.title} {notice.text}")
    print(render_table(browser.filtered_users))
    return 0 if ok else 1


async def _main(args: argparse.Namespace) -> int:
    async with UsersApiClient(args.url) as client:
        return await run(args, client)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = create_argument_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)
    return asyncio.run(_main(args))
