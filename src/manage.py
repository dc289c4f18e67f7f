"""Storefront management CLI.

Creates and drops the database schema, and creates administrator accounts
(the API only ever registers ordinary users).

Usage:
    python src/manage.py setup-db
    python src/manage.py drop-db
    python src/manage.py create-admin --name "Ops" --email ops@example.com --password ...
"""

import argparse
import sys


def _domain():
    from storefront.domain import storefront
    from storefront.utils.logging import configure_logging

    configure_logging()
    print("Initializing storefront domain...")
    storefront.init()
    return storefront


def setup_database():
    from storefront.utils.db import setup_db

    domain = _domain()
    print("Creating storefront database schema...")
    setup_db(domain)
    print("Done.")


def drop_database():
    from storefront.utils.db import drop_db

    domain = _domain()
    print("Dropping storefront database schema...")
    drop_db(domain)
    print("Done.")


def create_admin(name, email, password, address=None):
    from storefront.account.registration import register_user
    from storefront.account.user import Role

    domain = _domain()
    with domain.domain_context():
        user_id = register_user(name=name, email=email, password=password, address=address, role=Role.ADMIN)
    print(f"Administrator created: {user_id}")


def main():
    parser = argparse.ArgumentParser(description="Storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    admin_parser = subparsers.add_parser("create-admin", help="Register a user with the ADMIN role")
    admin_parser.add_argument("--name", required=True)
    admin_parser.add_argument("--email", required=True)
    admin_parser.add_argument("--password", required=True)
    admin_parser.add_argument("--address")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "create-admin":
        create_admin(args.name, args.email, args.password, args.address)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
