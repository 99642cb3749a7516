import logging

from sqlalchemy.orm import Session

from .. import schemas
from ..auth import ADMIN_ROLE, USER_ROLE, create_access_token, verify_password
from ..exceptions import ConflictError, UnauthorizedError
from . import accounts

logger = logging.getLogger(__name__)


def _summary(account):
    return {
        "id": account.id,
        "first_name": account.first_name,
        "last_name": account.last_name,
        "email": account.email,
    }


def authenticate_admin(db: Session, email: str, password: str):
    admin = accounts.get_admin_by_email(db, email)
    if not admin or not verify_password(password, admin.password):
        return None
    return admin


def authenticate_user(db: Session, email: str, password: str):
    user = accounts.get_user_by_email(db, email)
    if not user or not verify_password(password, user.password):
        return None
    return user


def signup(db: Session, payload: schemas.AccountCreate):
    if accounts.get_admin_by_email(db, payload.email):
        raise ConflictError("Admin with this email already exists")
    admin = accounts.create_admin(db, payload)
    token = create_access_token(admin.id, admin.email, ADMIN_ROLE)
    return {"access_token": token, "token_type": "bearer", "admin": _summary(admin)}


def login(db: Session, payload: schemas.LoginRequest):
    if payload.role == ADMIN_ROLE:
        account = authenticate_admin(db, payload.email, payload.password)
    else:
        account = authenticate_user(db, payload.email, payload.password)
    if not account:
        logger.info("Failed %s login for %s", payload.role, payload.email)
        raise UnauthorizedError("Invalid credentials")

    token = create_access_token(account.id, account.email, payload.role)
    logger.info("%s %s (ID: %s) logged in", payload.role.capitalize(), account.email, account.id)
    return {
        "access_token": token,
        "token_type": "bearer",
        "user": {**_summary(account), "role": payload.role},
    }


def login_user(db: Session, payload: schemas.UserLoginRequest):
    user = authenticate_user(db, payload.email, payload.password)
    if not user:
        logger.info("Failed user login for %s", payload.email)
        raise UnauthorizedError("Invalid credentials")
    return {"access_token": create_access_token(user.id, user.email, USER_ROLE), "token_type": "bearer"}


# Tokens are stateless; logging out is an acknowledgement for the client, which discards the token.
def logout(current_user: schemas.CurrentUser):
    logger.info("Admin %s (ID: %s) logged out", current_user.email, current_user.user_id)
    return {"message": "Logout successful"}


def logout_user(current_user: schemas.CurrentUser):
    logger.info("User %s (ID: %s) logged out", current_user.email, current_user.user_id)
    return {"message": "Logout successful"}
