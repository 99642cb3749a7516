from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from .. import crud, schemas
from ..auth import get_current_user, require_admin, require_user
from ..database import get_db

router = APIRouter(prefix="/request", tags=["request"])


@router.post("", response_model=schemas.RequestOut, status_code=status.HTTP_201_CREATED)
def create_request(
    request: schemas.RequestCreate,
    current_user: schemas.CurrentUser = Depends(require_user),
    db: Session = Depends(get_db),
):
    return crud.user_requests.create_request(db, current_user.user_id, request)


@router.get("/my-requests", response_model=List[schemas.RequestWithAdmin])
def my_requests(current_user: schemas.CurrentUser = Depends(require_user), db: Session = Depends(get_db)):
    return crud.user_requests.get_requests_by_user(db, current_user.user_id)


@router.get("/admin-requests", response_model=List[schemas.RequestWithUser])
def admin_requests(current_user: schemas.CurrentUser = Depends(require_admin), db: Session = Depends(get_db)):
    return crud.user_requests.get_requests_by_admin(db, current_user.user_id)


@router.get("/{request_id}", response_model=Optional[schemas.RequestDetail], dependencies=[Depends(get_current_user)])
def get_request(request_id: int, db: Session = Depends(get_db)):
    return crud.user_requests.get_request(db, request_id)


@router.patch("/{request_id}/approve", response_model=schemas.RequestOut)
def approve_request(
    request_id: int,
    current_user: schemas.CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return crud.user_requests.approve_request(db, request_id, current_user.user_id)


@router.patch("/{request_id}/reject", response_model=schemas.RequestOut)
def reject_request(
    request_id: int,
    current_user: schemas.CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return crud.user_requests.reject_request(db, request_id, current_user.user_id)
