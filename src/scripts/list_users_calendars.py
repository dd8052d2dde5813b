#!/usr/bin/env python3
"""
List calendar identifiers for MS365 users.

Prints identifiers in the form AVAILABILITY_CALENDAR_IDS expects.

Usage:
    uv run python src/scripts/list_users_calendars.py teresa@example.com
    uv run python src/scripts/list_users_calendars.py  # all users
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from msgraph.generated.models.o_data_errors.o_data_error import ODataError

from core.config import ConfigurationError
from core.graph_client import get_graph_client
from services.calendar import CalendarNotFoundError, list_user_calendars


async def main(users: list[str]):
    """List calendar identifiers for the given users (all users if none given)."""
    if not users:
        print("Fetching users from MS365...\n")
        users_response = await get_graph_client().users.get()
        users = [u.user_principal_name for u in users_response.value or [] if u.user_principal_name]

    print(f"Found {len(users)} users\n")
    print("=" * 80)

    for user in users:
        print(f"\nUser: {user}")
        try:
            for identifier in await list_user_calendars(user):
                print(f"    - {identifier}")
        except ODataError as e:
            message = e.error.message if e.error else str(e)
            print(f"  Error fetching calendars: {message}")
        except CalendarNotFoundError as e:
            print(f"  {e}")

        print("-" * 80)

    print("\nDone!")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="List calendar identifiers")
    parser.add_argument("users", nargs="*", help="User principal names (default: all users)")
    args = parser.parse_args()

    try:
        asyncio.run(main(args.users))
    except ConfigurationError as e:
        print(f"Configuration error:\n{e}")
        sys.exit(2)
