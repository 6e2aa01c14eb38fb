#!/usr/bin/env python3
"""Import apartment records from, or export them to, a .csv or .xlsx file.

Usage:
    python scripts/transfer_apartments.py import apartments.xlsx
    python scripts/transfer_apartments.py export apartments.csv
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
    parser = argparse.ArgumentParser(description="Move apartment records in or out of a spreadsheet file.")
    parser.add_argument("direction", choices=["import", "export"])
    parser.add_argument("path", type=Path)
    args = parser.parse_args()

    with open_databases(setup_logging=True) as app:
        try:
            if args.direction == "import":
                count = app.import_apartments(args.path)
                print(f"Data imported: {count} apartments from {args.path}")
            else:
                count = app.export_apartments(args.path)
                print(f"Data exported: {count} apartments to {args.path}")
        except (ApartmentManagerError, OSError) as exc:
            print(user_message(exc), file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
