from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from .. import crud, schemas
from ..auth import get_current_user
from ..database import get_db

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=schemas.SignupResponse, status_code=status.HTTP_201_CREATED)
def signup(payload: schemas.AccountCreate, db: Session = Depends(get_db)):
    return crud.authentication.signup(db, payload)


@router.post("/login", response_model=schemas.LoginResponse)
def login(payload: schemas.LoginRequest, db: Session = Depends(get_db)):
    return crud.authentication.login(db, payload)


@router.post("/logout", response_model=schemas.MessageResponse)
def logout(current_user: schemas.CurrentUser = Depends(get_current_user)):
    return crud.authentication.logout(current_user)


@router.post("/user/login", response_model=schemas.TokenResponse)
def user_login(payload: schemas.UserLoginRequest, db: Session = Depends(get_db)):
    return crud.authentication.login_user(db, payload)


@router.post("/user/logout", response_model=schemas.MessageResponse)
def user_logout(current_user: schemas.CurrentUser = Depends(get_current_user)):
    return crud.authentication.logout_user(current_user)
