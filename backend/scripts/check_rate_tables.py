"""
Check the statutory rate tables before deploying them.
Loads epf.json, socso.json, eis.json and pcb.json from a directory and reports
which tables and sections are present and which will fall back to defaults.

Usage:
    python -m scripts.check_rate_tables
    python -m scripts.check_rate_tables --dir path/to/rate_tables
"""

import argparse
import logging
import sys

from gajicore.config import get_settings
from gajicore.core.rate_tables import TABLE_FILES, RateTableProvider


def main():
    parser = argparse.ArgumentParser(description="Check statutory rate tables")
    parser.add_argument("--dir", default=None, help="Rate table directory (defaults to RATE_TABLE_DIR)")
    args = parser.parse_args()

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    directory = args.dir or get_settings().RATE_TABLE_DIR
    provider = RateTableProvider(directory)
    status = provider.load().status()

    print(f"Rate table directory: {provider.directory.resolve()}")
    print()

    for name, missing in status.items():
        filename = TABLE_FILES[name]
        if missing is None:
            print(f"  {name.upper():<6} {filename:<11} MISSING  (hardcoded defaults)")
        elif missing:
            print(f"  {name.upper():<6} {filename:<11} PARTIAL  (defaults for: {', '.join(missing)})")
        else:
            print(f"  {name.upper():<6} {filename:<11} OK")

    if all(missing is None for missing in status.values()):
        print()
        print("Error: no rate table could be loaded")
        sys.exit(1)


if __name__ == "__main__":
    main()
