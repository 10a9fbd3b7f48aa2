#!/usr/bin/env python3
"""
List a user's MS365 calendars, to pick GRAPH_CALENDAR_ID.

Usage:
    uv run python src/scripts/list_calendars.py --user someone@example.com
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import GRAPH_USER_ID
from services.calendar import discover_calendars


async def main(user_id: str):
    """List the user's calendars."""
    if not user_id:
        print("No user given: pass --user or set GRAPH_USER_ID")
        return 1

    print(f"Fetching calendars for {user_id}...\n")
    try:
        calendars = await discover_calendars(user_id)
    except Exception as e:
        print(f"Error fetching calendars: {e}")
        return 1

    print(f"Found {len(calendars)} calendars\n")
    print("=" * 80)

    for cal in calendars:
        marker = " (default)" if cal["is_default"] else ""
        print(f"  - {cal['calendar_name']}{marker}")
        print(f"    ID: {cal['calendar_id']}")

    print("-" * 80)
    print("\nDone!")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="List a user's calendars")
    parser.add_argument("--user", default=GRAPH_USER_ID, help="User id or principal name")
    args = parser.parse_args()
    sys.exit(asyncio.run(main(args.user)))
