from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from .. import crud, schemas
from ..auth import require_admin
from ..database import get_db

router = APIRouter(prefix="/designation", tags=["designation"], dependencies=[Depends(require_admin)])


@router.post("", response_model=schemas.DesignationOut, status_code=status.HTTP_201_CREATED)
def create_designation(designation: schemas.DesignationCreate, db: Session = Depends(get_db)):
    return crud.designations.create_designation(db, designation)


@router.get("", response_model=List[schemas.DesignationOut])
def list_designations(db: Session = Depends(get_db)):
    return crud.designations.get_designations(db)


@router.get("/{designation_id}", response_model=schemas.DesignationOut)
def get_designation(designation_id: int, db: Session = Depends(get_db)):
    return crud.designations.get_designation(db, designation_id)


@router.patch("/{designation_id}", response_model=schemas.DesignationOut)
def update_designation(designation_id: int, designation: schemas.DesignationUpdate, db: Session = Depends(get_db)):
    return crud.designations.update_designation(db, designation_id, designation)


@router.delete("/{designation_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_designation(designation_id: int, db: Session = Depends(get_db)):
    crud.designations.delete_designation(db, designation_id)
