"""orderpay database management CLI.

Provides commands to create and drop the SQL schemas of the catalogue,
ordering and payments domains. The store is picked by PROTEAN_ENV; with the
default in-memory provider there is nothing to create.

Usage:
    PROTEAN_ENV=sqlite python src/manage.py setup-db
    PROTEAN_ENV=sqlite python src/manage.py drop-db --domain ordering
"""

import argparse
import sys

DOMAINS = ["catalogue", "ordering", "payments"]


def _domains(names=None):
    from catalogue.domain import catalogue
    from ordering.domain import ordering
    from payments.domain import payments

    all_domains = {"catalogue": catalogue, "ordering": ordering, "payments": payments}
    return {name: all_domains[name] for name in names or DOMAINS}


def setup_databases(names=None):
    """Create database schemas for the specified (or all) domains."""
    from shared.utils.db import setup_db

    for name, domain in _domains(names).items():
        print(f"Initializing {name} domain...")
        domain.init()
        tables = setup_db(domain)
        if tables:
            print(f"  {name} schema ready: {', '.join(tables)}")
        else:
            print(f"  {name} has no SQL provider configured; skipped.")

    print("Done.")


def drop_databases(names=None):
    """Drop database schemas for the specified (or all) domains."""
    from shared.utils.db import drop_db

    for name, domain in _domains(names).items():
        print(f"Initializing {name} domain...")
        domain.init()
        print(f"Dropping {name} database schema...")
        drop_db(domain)
        print(f"  {name} schema dropped.")

    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="orderpay database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    setup_parser = subparsers.add_parser("setup-db", help="Create all database tables")
    setup_parser.add_argument(
        "--domain",
        choices=DOMAINS,
        nargs="*",
        help="Specific domain(s) to set up (default: all)",
    )

    drop_parser = subparsers.add_parser("drop-db", help="Drop all database tables")
    drop_parser.add_argument(
        "--domain",
        choices=DOMAINS,
        nargs="*",
        help="Specific domain(s) to drop (default: all)",
    )

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_databases(args.domain)
    elif args.command == "drop-db":
        drop_databases(args.domain)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
