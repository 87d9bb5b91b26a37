"""Prepare a database for the bulletin board.

Creates missing tables, seeds the community settings row and can promote an
existing user to admin::

    python -m bulletin_board.scripts.bootstrap --promote-admin chair@example.org
"""
from __future__ import annotations

import argparse
import logging
import sys

from sqlalchemy.orm import Session

from bulletin_board.db.session import SessionLocal, create_tables
from bulletin_board.models import Profile, User
from bulletin_board.models.user import ROLE_ADMIN
from bulletin_board.services.community_settings import ensure_community_settings

logger = logging.getLogger(__name__)


class BootstrapError(RuntimeError):
    """Raised when a bootstrap step cannot be completed."""


def promote_admin(db: Session, email: str) -> Profile:
    """Give the user registered under `email` the admin role.

    A profile is created when the user has never signed in.

    Raises:
        BootstrapError: If no user is registered under `email`.
    """
    normalised = email.strip().lower()
    user = db.query(User).filter(User.email == normalised).one_or_none()
    if user is None:
        raise BootstrapError(f"No registered user with email {normalised}")

    profile = db.get(Profile, user.id)
    if profile is None:
        profile = Profile(id=user.id, email=user.email, role=ROLE_ADMIN)
        db.add(profile)
    else:
        profile.role = ROLE_ADMIN
    db.commit()
    db.refresh(profile)
    logger.info("Promoted %s to admin", normalised)
    return profile


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create tables and seed the bulletin board database")
    parser.add_argument(
        "--skip-create",
        action="store_true",
        help="Do not create missing tables (use when Alembic manages the schema).",
    )
    parser.add_argument(
        "--promote-admin",
        metavar="EMAIL",
        default=None,
        help="Promote the registered user with this email to admin.",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s [%(name)s] %(message)s")

    if not args.skip_create:
        create_tables()

    with SessionLocal() as db:
        row = ensure_community_settings(db)
        print(f"[bootstrap] community settings row {row.id}: {row.community_name!r}")
        if args.promote_admin:
            try:
                promote_admin(db, args.promote_admin)
            except BootstrapError as exc:
                print(f"[bootstrap] ERROR: {exc}", file=sys.stderr)
                return 1
            print(f"[bootstrap] {args.promote_admin} is now an admin")
    return 0


if __name__ == "__main__":
    sys.exit(main())
