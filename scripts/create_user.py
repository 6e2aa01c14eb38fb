#!/usr/bin/env python3
"""Create a login user for the apartment manager.

Run: `python scripts/create_user.py --username admin --password changeme`
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from apartment_manager.core.errors import ApartmentManagerError, user_message  # noqa: E402
from apartment_manager.main import open_databases  # noqa: E402


def main() -> int:
    parser = argparse.ArgumentParser(description="Create a login user")
    parser.add_argument("--username", required=True)
    parser.add_argument("--password", required=True)
    args = parser.parse_args()

    with open_databases(setup_logging=True) as app:
        try:
            user = app.users.save_user(args.username, args.password)
        except ApartmentManagerError as exc:
            print(user_message(exc), file=sys.stderr)
            return 1
    print(f"Created user {user.username} (id={user.id}).")
    return 0


if __name__ == "__main__":
    sys.exit(main())
