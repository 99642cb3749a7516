from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..exceptions import ConflictError


def commit_or_conflict(db: Session, message: str):
    """Commit, turning a unique-constraint violation into ``ConflictError``.

    The callers pre-check for duplicates; this covers a concurrent insert
    landing between that check and the commit.
    """
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(message)
