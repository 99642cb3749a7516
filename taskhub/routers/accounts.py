from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from .. import crud, schemas
from ..auth import get_current_user, require_admin
from ..database import get_db

admin_router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])
user_router = APIRouter(prefix="/user", tags=["user"])


# ADMINS
@admin_router.get("", response_model=List[schemas.AdminOut])
def list_admins(db: Session = Depends(get_db)):
    return crud.accounts.get_admins(db)


@admin_router.get("/{admin_id}", response_model=schemas.AdminOut)
def get_admin(admin_id: int, db: Session = Depends(get_db)):
    return crud.accounts.get_admin(db, admin_id)


@admin_router.patch("/{admin_id}", response_model=schemas.AdminOut)
def update_admin(admin_id: int, admin_update: schemas.AccountUpdate, db: Session = Depends(get_db)):
    return crud.accounts.update_admin(db, admin_id, admin_update)


@admin_router.delete("/{admin_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_admin(admin_id: int, db: Session = Depends(get_db)):
    crud.accounts.delete_admin(db, admin_id)


# USERS
@user_router.post("", response_model=schemas.UserOut, status_code=status.HTTP_201_CREATED)
def create_user(
    user: schemas.AccountCreate,
    current_user: schemas.CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return crud.accounts.create_user(db, user, current_user.user_id)


@user_router.get("", response_model=List[schemas.UserOut], dependencies=[Depends(get_current_user)])
def list_users(db: Session = Depends(get_db)):
    return crud.accounts.get_users(db)


@user_router.get("/{user_id}", response_model=schemas.UserOut, dependencies=[Depends(get_current_user)])
def get_user(user_id: int, db: Session = Depends(get_db)):
    return crud.accounts.get_user(db, user_id)


@user_router.patch("/{user_id}", response_model=schemas.UserOut, dependencies=[Depends(require_admin)])
def update_user(user_id: int, user_update: schemas.AccountUpdate, db: Session = Depends(get_db)):
    return crud.accounts.update_user(db, user_id, user_update)


@user_router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_admin)])
def delete_user(user_id: int, db: Session = Depends(get_db)):
    crud.accounts.delete_user(db, user_id)
