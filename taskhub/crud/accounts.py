"""Admin and User accounts.  Both share one shape; users also carry their creating admin."""
import logging

from sqlalchemy.orm import Session

from .. import models, schemas
from ..auth import hash_password
from ..exceptions import ConflictError, NotFoundError
from .common import commit_or_conflict

logger = logging.getLogger(__name__)


def _email_taken(db: Session, model, email: str, exclude_id: int = None) -> bool:
    q = db.query(model).filter(model.email == email)
    if exclude_id is not None:
        q = q.filter(model.id != exclude_id)
    return db.query(q.exists()).scalar()


def _create_account(db: Session, model, account: schemas.AccountCreate, **extra):
    label = model.__name__
    if _email_taken(db, model, account.email):
        raise ConflictError(f"{label} with this email already exists")
    db_account = model(
        first_name=account.first_name,
        last_name=account.last_name,
        email=account.email,
        password=hash_password(account.password),
        **extra,
    )
    db.add(db_account)
    commit_or_conflict(db, f"{label} with this email already exists")
    db.refresh(db_account)
    logger.info("%s created: %s (ID: %s)", label, db_account.email, db_account.id)
    return db_account


def _get_account(db: Session, model, account_id: int):
    account = db.get(model, account_id)
    if not account:
        raise NotFoundError(f"{model.__name__} with ID {account_id} not found")
    return account


def _list_accounts(db: Session, model):
    return db.query(model).order_by(model.created_at.desc(), model.id.desc()).all()


def _update_account(db: Session, model, account_id: int, account_update: schemas.AccountUpdate):
    account = _get_account(db, model, account_id)
    label = model.__name__
    data = account_update.model_dump(exclude_unset=True, exclude_none=True)

    if "email" in data and _email_taken(db, model, data["email"], exclude_id=account_id):
        raise ConflictError(f"{label} with this email already exists")
    if "password" in data:
        data["password"] = hash_password(data["password"])

    for field, value in data.items():
        setattr(account, field, value)
    commit_or_conflict(db, f"{label} with this email already exists")
    db.refresh(account)
    logger.info("%s updated (ID: %s): %s", label, account_id, ", ".join(sorted(data)) or "no changes")
    return account


def _delete_account(db: Session, model, account_id: int):
    account = _get_account(db, model, account_id)
    logger.warning("Deleting %s %s (ID: %s)", model.__name__, account.email, account_id)
    db.delete(account)
    db.commit()


def _get_by_email(db: Session, model, email: str):
    return db.query(model).filter(model.email == email).first()


# ADMINS
def create_admin(db: Session, admin: schemas.AccountCreate):
    return _create_account(db, models.Admin, admin)


def get_admins(db: Session):
    return _list_accounts(db, models.Admin)


def get_admin(db: Session, admin_id: int):
    return _get_account(db, models.Admin, admin_id)


def update_admin(db: Session, admin_id: int, admin_update: schemas.AccountUpdate):
    return _update_account(db, models.Admin, admin_id, admin_update)


def delete_admin(db: Session, admin_id: int):
    _delete_account(db, models.Admin, admin_id)


def get_admin_by_email(db: Session, email: str):
    return _get_by_email(db, models.Admin, email)


# USERS
def create_user(db: Session, user: schemas.AccountCreate, admin_id: int):
    return _create_account(db, models.User, user, created_by=admin_id)


def get_users(db: Session):
    return _list_accounts(db, models.User)


def get_user(db: Session, user_id: int):
    return _get_account(db, models.User, user_id)


def update_user(db: Session, user_id: int, user_update: schemas.AccountUpdate):
    return _update_account(db, models.User, user_id, user_update)


def delete_user(db: Session, user_id: int):
    _delete_account(db, models.User, user_id)


def get_user_by_email(db: Session, email: str):
    return _get_by_email(db, models.User, email)
