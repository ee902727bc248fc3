#!/usr/bin/env python
"""
Create an administrator account.

Roles are fixed when an account is created, so this is how admins are made.

Usage:
    python scripts/create_admin.py --username alice --email alice@example.com
    (the password is prompted for unless --password is given)
"""

import sys
import argparse
import getpass
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from cinerank.core.errors import ConstraintViolationError
from cinerank.core.security import hash_password
from cinerank.database import crud, init_database
from cinerank.database.models import ROLE_ADMIN


def main():
    parser = argparse.ArgumentParser(description="Create a CineRank admin user")
    parser.add_argument('--username', required=True, help='Display name')
    parser.add_argument('--email', required=True, help='Login email')
    parser.add_argument('--password', default=None, help='Password (prompted if omitted)')
    parser.add_argument(
        '--database-url',
        type=str,
        default=None,
        help='SQLAlchemy database URL (default: DATABASE_URL)'
    )
    args = parser.parse_args()

    password = args.password or getpass.getpass("Password: ")
    if not password:
        print("Error: password must not be empty")
        sys.exit(1)

    db_manager = init_database(database_url=args.database_url)
    session = db_manager.get_session()
    try:
        user = crud.create_user(
            session,
            username=args.username,
            email=args.email,
            password_hash=hash_password(password),
            role=ROLE_ADMIN,
        )
    except ConstraintViolationError:
        print(f"Error: {args.email} is already registered")
        sys.exit(1)
    finally:
        session.close()

    print(f"Created admin user #{user.id} ({user.email})")


if __name__ == "__main__":
    main()
