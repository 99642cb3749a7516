"""Profile change requests.  Password requests never store the proposed password and are never approvable."""
import logging

from sqlalchemy.orm import Session, selectinload

from .. import models, schemas
from ..auth import verify_password
from ..exceptions import BadRequestError, ConflictError, ForbiddenError, NotFoundError
from .common import commit_or_conflict

logger = logging.getLogger(__name__)

PASSWORD_PLACEHOLDER = "[HIDDEN]"

# request type -> User attribute written on approval
REQUEST_FIELDS = {
    models.RequestType.FIRST_NAME: "first_name",
    models.RequestType.LAST_NAME: "last_name",
    models.RequestType.EMAIL: "email",
}


def create_request(db: Session, user_id: int, request: schemas.RequestCreate):
    user = db.get(models.User, user_id)
    if not user:
        raise NotFoundError(f"User with ID {user_id} not found")
    if not user.created_by:
        raise BadRequestError("User does not have an assigned admin")

    if request.request_type == models.RequestType.PASSWORD:
        if not request.current_password:
            raise BadRequestError("Current password is required for password change requests")
        if not verify_password(request.current_password, user.password):
            raise BadRequestError("Current password is incorrect")
        current_value = None
        requested_value = PASSWORD_PLACEHOLDER
    else:
        current_value = getattr(user, REQUEST_FIELDS[request.request_type])
        requested_value = request.requested_value

    logger.debug("Creating %s change request for user %s", request.request_type.value, user.email)
    db_request = models.UserRequest(
        user_id=user.id,
        admin_id=user.created_by,
        request_type=request.request_type,
        current_value=current_value,
        requested_value=requested_value,
        status=models.RequestStatus.PENDING,
    )
    db.add(db_request)
    db.commit()
    db.refresh(db_request)
    logger.info("Request created: %s (ID: %s)", db_request.request_type.value, db_request.id)
    return db_request


def get_requests_by_user(db: Session, user_id: int):
    return db.query(models.UserRequest).options(selectinload(models.UserRequest.admin)).filter(
        models.UserRequest.user_id == user_id
    ).order_by(models.UserRequest.created_at.desc(), models.UserRequest.id.desc()).all()


def get_requests_by_admin(db: Session, admin_id: int):
    return db.query(models.UserRequest).options(selectinload(models.UserRequest.user)).filter(
        models.UserRequest.admin_id == admin_id
    ).order_by(models.UserRequest.created_at.desc(), models.UserRequest.id.desc()).all()


def get_request(db: Session, request_id: int):
    return db.query(models.UserRequest).options(
        selectinload(models.UserRequest.user),
        selectinload(models.UserRequest.admin),
    ).filter(models.UserRequest.id == request_id).first()


def _get_pending_request(db: Session, request_id: int, admin_id: int, action: str):
    request = get_request(db, request_id)
    if not request:
        raise NotFoundError(f"Request with ID {request_id} not found")
    if request.admin_id != admin_id:
        raise ForbiddenError(f"You can only {action} requests from your users")
    if request.status != models.RequestStatus.PENDING:
        raise BadRequestError(f"Request is already {request.status.value}")
    return request


def approve_request(db: Session, request_id: int, admin_id: int):
    request = _get_pending_request(db, request_id, admin_id, "approve")
    if request.request_type == models.RequestType.PASSWORD:
        raise BadRequestError("Password change requests cannot be approved by admins for security reasons")

    field = REQUEST_FIELDS[request.request_type]
    user = request.user
    if field == "email":
        taken = db.query(models.User).filter(
            models.User.email == request.requested_value, models.User.id != user.id
        ).first()
        if taken:
            raise ConflictError("User with this email already exists")

    logger.debug("Approving request %s: %s change for user %s", request_id, request.request_type.value, user.email)
    setattr(user, field, request.requested_value)
    request.status = models.RequestStatus.APPROVED
    commit_or_conflict(db, "User with this email already exists")
    db.refresh(request)
    logger.info("Request approved: %s for user ID %s (ID: %s)", request.request_type.value, user.id, request_id)
    return request


def reject_request(db: Session, request_id: int, admin_id: int):
    request = _get_pending_request(db, request_id, admin_id, "reject")
    request.status = models.RequestStatus.REJECTED
    db.commit()
    db.refresh(request)
    logger.info("Request rejected: %s for user ID %s (ID: %s)", request.request_type.value, request.user_id, request_id)
    return request
