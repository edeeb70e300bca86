#!/usr/bin/env python3
"""
Create the database tables and the first main admin.

Usage:
    python scripts/init_db.py [--email=admin@example.com --password=secret]

Without arguments the admin credentials come from MAIN_ADMIN_EMAIL and
MAIN_ADMIN_PASSWORD in the environment or .env file. Running it again is
safe: existing tables and an existing main admin are left alone.
"""
import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlmodel import Session

from dearguest.core.config import Settings
from dearguest.core.database import create_db_and_tables, create_db_engine
from dearguest.core.errors import DearGuestError
from dearguest.invites.accounts import ensure_main_admin


def main():
    parser = argparse.ArgumentParser(description="Initialize the DearGuest database")
    parser.add_argument("--email", help="Main admin email")
    parser.add_argument("--password", help="Main admin password")
    args = parser.parse_args()

    settings = Settings()
    email = args.email or settings.main_admin_email
    password = args.password or settings.main_admin_password

    engine = create_db_engine(settings.database_url)
    create_db_and_tables(engine)
    print(f"Tables ready in {settings.database_url}")

    if not email or not password:
        print("No main admin credentials given; skipping admin creation.")
        return

    with Session(engine) as session:
        try:
            user = ensure_main_admin(session, email, password, settings.bcrypt_rounds)
        except DearGuestError as e:
            print(f"Error: {e.message}")
            sys.exit(1)

    if user:
        print(f"Created main admin {user.email}")
    else:
        print("A main admin already exists; nothing to do.")


if __name__ == "__main__":
    main()
