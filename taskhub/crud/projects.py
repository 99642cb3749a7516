"""Projects, their members and their attached designations.  Every mutation requires the owning admin."""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session, selectinload

from .. import models, schemas
from ..auth import ADMIN_ROLE
from ..exceptions import BadRequestError, ConflictError, ForbiddenError, NotFoundError
from .common import commit_or_conflict

logger = logging.getLogger(__name__)


def _with_members(query, include_designation: bool = False):
    options = [
        selectinload(models.Project.admin),
        selectinload(models.Project.users).selectinload(models.ProjectUser.user),
    ]
    if include_designation:
        options.append(selectinload(models.Project.users).selectinload(models.ProjectUser.designation))
    return query.options(*options)


def get_owned_project(db: Session, project_id: int, admin_id: int, forbidden_message: str):
    project = db.get(models.Project, project_id)
    if not project:
        raise NotFoundError(f"Project with ID {project_id} not found")
    if project.created_by != admin_id:
        raise ForbiddenError(forbidden_message)
    return project


def _get_membership(db: Session, project_id: int, user_id: int) -> Optional[models.ProjectUser]:
    return db.query(models.ProjectUser).filter(
        models.ProjectUser.project_id == project_id,
        models.ProjectUser.user_id == user_id,
    ).first()


def _get_designation_link(db: Session, project_id: int, designation_id: int) -> Optional[models.ProjectDesignation]:
    return db.query(models.ProjectDesignation).filter(
        models.ProjectDesignation.project_id == project_id,
        models.ProjectDesignation.designation_id == designation_id,
    ).first()


def get_member_names(db: Session, project_id: int) -> List[str]:
    rows = db.query(models.User.first_name, models.User.last_name).join(
        models.ProjectUser, models.ProjectUser.user_id == models.User.id
    ).filter(models.ProjectUser.project_id == project_id).order_by(models.ProjectUser.id).all()
    return [f"{first} {last}" for first, last in rows]


def get_designation_names(db: Session, project_id: int) -> List[str]:
    rows = db.query(models.Designation.name).join(
        models.ProjectDesignation, models.ProjectDesignation.designation_id == models.Designation.id
    ).filter(models.ProjectDesignation.project_id == project_id).order_by(models.ProjectDesignation.id).all()
    return [name for (name,) in rows]


# PROJECTS
def create_project(db: Session, project: schemas.ProjectCreate, admin_id: int):
    logger.debug("Creating project: %s by admin ID: %s", project.name, admin_id)
    db_project = models.Project(
        name=project.name,
        description=project.description,
        status=project.status or models.ProjectStatus.ACTIVE,
        created_by=admin_id,
    )
    db.add(db_project)
    db.commit()
    db.refresh(db_project)
    logger.info("Project created: %s (ID: %s) by admin ID: %s", db_project.name, db_project.id, admin_id)
    return db_project


def get_projects(db: Session, user_id: int, role: str):
    """Admins get the projects they created; users get the projects they are members of."""
    q = _with_members(db.query(models.Project))
    if role == ADMIN_ROLE:
        q = q.filter(models.Project.created_by == user_id)
    else:
        q = q.filter(models.Project.users.any(models.ProjectUser.user_id == user_id))
    return q.order_by(models.Project.created_at.desc(), models.Project.id.desc()).all()


def get_project(db: Session, project_id: int):
    return _with_members(db.query(models.Project), include_designation=True).filter(
        models.Project.id == project_id
    ).first()


def update_project(db: Session, project_id: int, admin_id: int, project_update: schemas.ProjectUpdate):
    project = get_owned_project(db, project_id, admin_id, "You can only update your own projects")
    logger.debug("Updating project: %s (ID: %s)", project.name, project_id)

    for field, value in project_update.model_dump(exclude_unset=True).items():
        if value is None and field != "description":
            continue
        setattr(project, field, value)
    db.commit()
    db.refresh(project)
    logger.info("Project updated: %s (ID: %s)", project.name, project_id)
    return project


def delete_project(db: Session, project_id: int, admin_id: int):
    project = get_owned_project(db, project_id, admin_id, "You can only delete your own projects")
    name = project.name
    logger.warning("Deleting project: %s (ID: %s)", name, project_id)
    db.delete(project)
    db.commit()
    logger.info("Project deleted: %s (ID: %s)", name, project_id)


# MEMBERSHIP
def assign_user(db: Session, project_id: int, user_id: int, admin_id: int) -> List[str]:
    project = get_owned_project(db, project_id, admin_id, "You can only assign users to your own projects")

    user = db.get(models.User, user_id)
    if not user:
        raise NotFoundError(f"User with ID {user_id} not found")
    if _get_membership(db, project_id, user_id):
        raise ConflictError("User is already assigned to this project")

    logger.debug("Assigning user %s to project %s", user.email, project.name)
    db.add(models.ProjectUser(project_id=project_id, user_id=user_id))
    commit_or_conflict(db, "User is already assigned to this project")
    logger.info("User %s assigned to project %s (ID: %s)", user.email, project.name, project_id)

    return get_member_names(db, project_id)


def remove_user(db: Session, project_id: int, user_id: int, admin_id: int) -> List[str]:
    project = get_owned_project(db, project_id, admin_id, "You can only remove users from your own projects")

    membership = _get_membership(db, project_id, user_id)
    if not membership:
        logger.warning(
            "User ID %s is not assigned to project %s (ID: %s); nothing to remove",
            user_id, project.name, project_id,
        )
    else:
        db.delete(membership)
        db.commit()
        logger.info("User ID %s removed from project %s (ID: %s)", user_id, project.name, project_id)

    return get_member_names(db, project_id)


# PROJECT DESIGNATIONS
def assign_designation(db: Session, project_id: int, designation_id: int, admin_id: int) -> List[str]:
    project = get_owned_project(
        db, project_id, admin_id, "You can only assign designations to your own projects"
    )

    designation = db.get(models.Designation, designation_id)
    if not designation:
        raise NotFoundError(f"Designation with ID {designation_id} not found")
    if _get_designation_link(db, project_id, designation_id):
        raise ConflictError("Designation is already assigned to this project")

    db.add(models.ProjectDesignation(project_id=project_id, designation_id=designation_id))
    commit_or_conflict(db, "Designation is already assigned to this project")
    logger.info("Designation %s assigned to project %s (ID: %s)", designation.name, project.name, project_id)

    return get_designation_names(db, project_id)


def remove_designation(db: Session, project_id: int, designation_id: int, admin_id: int) -> List[str]:
    project = get_owned_project(
        db, project_id, admin_id, "You can only remove designations from your own projects"
    )

    link = _get_designation_link(db, project_id, designation_id)
    if not link:
        logger.warning(
            "Designation ID %s is not assigned to project %s (ID: %s); nothing to remove",
            designation_id, project.name, project_id,
        )
    else:
        # Members may only hold designations attached to their project.
        cleared = db.query(models.ProjectUser).filter(
            models.ProjectUser.project_id == project_id,
            models.ProjectUser.designation_id == designation_id,
        ).update({models.ProjectUser.designation_id: None}, synchronize_session="fetch")
        db.delete(link)
        db.commit()
        logger.info(
            "Designation ID %s removed from project %s (ID: %s), cleared from %d member(s)",
            designation_id, project.name, project_id, cleared,
        )

    return get_designation_names(db, project_id)


def get_project_designations(db: Session, project_id: int):
    if not db.get(models.Project, project_id):
        raise NotFoundError(f"Project with ID {project_id} not found")

    rows = db.query(models.Designation, models.ProjectDesignation.assigned_at).join(
        models.ProjectDesignation, models.ProjectDesignation.designation_id == models.Designation.id
    ).filter(models.ProjectDesignation.project_id == project_id).order_by(models.Designation.name.asc()).all()
    return [
        {
            "id": designation.id,
            "name": designation.name,
            "description": designation.description,
            "assigned_at": assigned_at,
        }
        for designation, assigned_at in rows
    ]


def _member_designation(membership: models.ProjectUser):
    return {
        "id": membership.user.id,
        "first_name": membership.user.first_name,
        "last_name": membership.user.last_name,
        "designation": membership.designation.name if membership.designation else None,
    }


def set_user_designation(db: Session, project_id: int, user_id: int, designation_id: int, admin_id: int):
    get_owned_project(db, project_id, admin_id, "You can only manage designations in your own projects")

    membership = _get_membership(db, project_id, user_id)
    if not membership:
        raise NotFoundError(f"User with ID {user_id} is not assigned to this project")
    if not _get_designation_link(db, project_id, designation_id):
        raise BadRequestError(
            f"Designation with ID {designation_id} is not assigned to this project. "
            "Assign the designation to the project first"
        )

    membership.designation_id = designation_id
    db.commit()
    db.refresh(membership)
    logger.info("User ID %s in project ID %s now has designation ID %s", user_id, project_id, designation_id)
    return _member_designation(membership)


def remove_user_designation(db: Session, project_id: int, user_id: int, admin_id: int):
    get_owned_project(db, project_id, admin_id, "You can only manage designations in your own projects")

    membership = _get_membership(db, project_id, user_id)
    if not membership:
        raise NotFoundError(f"User with ID {user_id} is not assigned to this project")

    membership.designation_id = None
    db.commit()
    db.refresh(membership)
    logger.info("Designation cleared for user ID %s in project ID %s", user_id, project_id)
    return _member_designation(membership)
