import logging

from sqlalchemy.orm import Session

from .. import models, schemas
from ..exceptions import ConflictError, NotFoundError
from .common import commit_or_conflict

logger = logging.getLogger(__name__)

DUPLICATE_NAME = "Designation with this name already exists"


def get_designation_by_name(db: Session, name: str):
    return db.query(models.Designation).filter(models.Designation.name == name).first()


def create_designation(db: Session, designation: schemas.DesignationCreate):
    logger.debug("Creating designation: %s", designation.name)
    if get_designation_by_name(db, designation.name):
        raise ConflictError(DUPLICATE_NAME)

    db_designation = models.Designation(name=designation.name, description=designation.description)
    db.add(db_designation)
    commit_or_conflict(db, DUPLICATE_NAME)
    db.refresh(db_designation)
    logger.info("Designation created: %s (ID: %s)", db_designation.name, db_designation.id)
    return db_designation


def get_designations(db: Session):
    return db.query(models.Designation).order_by(models.Designation.name.asc()).all()


def get_designation(db: Session, designation_id: int):
    designation = db.get(models.Designation, designation_id)
    if not designation:
        raise NotFoundError(f"Designation with ID {designation_id} not found")
    return designation


def update_designation(db: Session, designation_id: int, designation_update: schemas.DesignationUpdate):
    designation = get_designation(db, designation_id)
    data = designation_update.model_dump(exclude_unset=True)

    if data.get("name"):
        existing = get_designation_by_name(db, data["name"])
        if existing and existing.id != designation_id:
            raise ConflictError(DUPLICATE_NAME)
    elif "name" in data:
        # name is mandatory; an explicit null leaves it unchanged
        del data["name"]

    for field, value in data.items():
        setattr(designation, field, value)
    commit_or_conflict(db, DUPLICATE_NAME)
    db.refresh(designation)
    logger.info("Designation updated: %s (ID: %s)", designation.name, designation.id)
    return designation


def delete_designation(db: Session, designation_id: int):
    designation = get_designation(db, designation_id)
    name = designation.name
    db.delete(designation)
    db.commit()
    logger.info("Designation deleted: %s (ID: %s)", name, designation_id)
