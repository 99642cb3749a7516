"""
Repair users whose creating admin is missing.

Users lose their admin when that admin is deleted (``created_by`` becomes
NULL), which blocks them from filing change requests.  This command hands all
such users to the oldest admin.

    taskhub-fix-user-admin
"""
import logging
import sys

from sqlalchemy.orm import Session

from . import config, models
from .database import SessionLocal, init_db
from .logging_config import setup_logging

logger = logging.getLogger(__name__)


class NoAdminError(Exception):
    pass


def assign_orphaned_users(db: Session):
    """Give every user without an admin to the lowest-id admin.

    Returns ``(count, admin)``; ``admin`` is None when there was nothing to do.
    Raises ``NoAdminError`` if orphans exist but no admin does.
    """
    orphans = db.query(models.User).filter(models.User.created_by.is_(None)).order_by(models.User.id).all()
    if not orphans:
        logger.info("All users already have an assigned admin")
        return 0, None

    for user in orphans:
        logger.info("Orphaned user: ID %s, %s (%s %s)", user.id, user.email, user.first_name, user.last_name)

    admin = db.query(models.Admin).order_by(models.Admin.id.asc()).first()
    if not admin:
        raise NoAdminError("No admin found in the database; create an admin first")

    for user in orphans:
        user.created_by = admin.id
    db.commit()
    logger.info("Assigned %d user(s) to admin %s (ID: %s)", len(orphans), admin.email, admin.id)
    return len(orphans), admin


def main():
    setup_logging(config.LOG_LEVEL, config.LOG_FILE)
    init_db()
    db = SessionLocal()
    try:
        assign_orphaned_users(db)
    except NoAdminError as e:
        logger.error(str(e))
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    main()
