#!/usr/bin/env python3
"""
Create an event from a JSON invitation config.

The event is created on behalf of the first main admin, so run
scripts/init_db.py first.

Usage:
    python scripts/seed_event.py CONFIG.json --slug=raphael-christine --name="Raphael & Christine"
    python scripts/seed_event.py CONFIG.json --slug=... --name=... \\
        --owner-email=couple@example.com --owner-password=secret
"""
import argparse
import json
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlmodel import Session, select

from dearguest.core.config import Settings
from dearguest.core.database import create_db_and_tables, create_db_engine
from dearguest.core.errors import DearGuestError
from dearguest.core.security import Principal
from dearguest.invites.events import create_event
from dearguest.models import Role, User


def main():
    parser = argparse.ArgumentParser(description="Create a DearGuest event from a config file")
    parser.add_argument("config", type=Path, help="Path to the event config JSON")
    parser.add_argument("--slug", required=True, help="URL segment for the event")
    parser.add_argument("--name", required=True, help="Event display name")
    parser.add_argument("--owner-email", help="Create an event_admin owner with this email")
    parser.add_argument("--owner-password", help="Password for the new owner")
    args = parser.parse_args()

    try:
        config = json.loads(args.config.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        print(f"Error: could not read {args.config}: {e}")
        sys.exit(1)

    settings = Settings()
    engine = create_db_engine(settings.database_url)
    create_db_and_tables(engine)

    with Session(engine) as session:
        admin = session.exec(
            select(User).where(User.role == Role.MAIN_ADMIN.value).order_by(User.created_at)
        ).first()
        if not admin:
            print("Error: no main admin exists. Run scripts/init_db.py first.")
            sys.exit(1)

        principal = Principal(user_id=admin.id, email=admin.email, role=admin.role)
        try:
            event, created_owner = create_event(
                session,
                principal,
                slug=args.slug,
                name=args.name,
                config=json.dumps(config),
                owner_email=args.owner_email,
                owner_password=args.owner_password,
                rounds=settings.bcrypt_rounds,
            )
        except DearGuestError as e:
            print(f"Error: {e.message}")
            sys.exit(1)

        print(f"Created event '{event.name}' at /e/{event.slug}")
        if created_owner:
            print(f"Owner account: {created_owner.email}")


if __name__ == "__main__":
    main()
