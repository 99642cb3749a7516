import logging

from sqlalchemy.orm import Session, selectinload

from .. import models, schemas
from ..auth import ADMIN_ROLE
from ..exceptions import BadRequestError, ForbiddenError, NotFoundError
from .projects import get_owned_project

logger = logging.getLogger(__name__)

# The only fields an assignee may change on their own task.
ASSIGNEE_EDITABLE_FIELDS = {"status", "submission_data"}

# Columns that cannot be cleared; an explicit null for them is ignored.
REQUIRED_FIELDS = {"title", "status", "project_id"}


def _ensure_user_exists(db: Session, user_id: int):
    if not db.get(models.User, user_id):
        raise NotFoundError(f"User with ID {user_id} not found")


def create_task(db: Session, task: schemas.TaskCreate, admin_id: int):
    get_owned_project(db, task.project_id, admin_id, "You can only add tasks to projects you created")
    if task.assigned_to is not None:
        _ensure_user_exists(db, task.assigned_to)

    db_task = models.Task(**task.model_dump())
    db.add(db_task)
    db.commit()
    db.refresh(db_task)
    logger.info("Task created: %s (ID: %s) in project ID %s", db_task.title, db_task.id, db_task.project_id)
    return db_task


def get_tasks(db: Session, current_user: schemas.CurrentUser, status=None, project_id=None):
    """Admins see every task in projects they own; users see the tasks assigned to them."""
    q = db.query(models.Task).options(
        selectinload(models.Task.project),
        selectinload(models.Task.assignee),
    )
    if current_user.role == ADMIN_ROLE:
        q = q.join(models.Project).filter(models.Project.created_by == current_user.user_id)
    else:
        q = q.filter(models.Task.assigned_to == current_user.user_id)
    if status:
        q = q.filter(models.Task.status == status)
    if project_id:
        q = q.filter(models.Task.project_id == project_id)
    return q.order_by(models.Task.id).all()


def get_task(db: Session, task_id: int):
    task = db.query(models.Task).options(
        selectinload(models.Task.project),
        selectinload(models.Task.assignee),
    ).filter(models.Task.id == task_id).first()
    if not task:
        raise NotFoundError(f"Task with ID {task_id} not found")
    return task


def update_task(db: Session, task_id: int, task_update: schemas.TaskUpdate, current_user: schemas.CurrentUser):
    task = get_task(db, task_id)
    updates = task_update.model_dump(exclude_unset=True)

    if current_user.role == ADMIN_ROLE:
        if task.project.created_by != current_user.user_id:
            raise ForbiddenError("You can only update tasks in your projects")
        unknown = set(updates) - set(schemas.TaskUpdate.model_fields)
        if unknown:
            raise BadRequestError(f"Unknown task field(s): {', '.join(sorted(unknown))}")
        new_project_id = updates.get("project_id")
        if new_project_id is not None and new_project_id != task.project_id:
            get_owned_project(db, new_project_id, current_user.user_id, "You can only move tasks into your own projects")
        if updates.get("assigned_to") is not None:
            _ensure_user_exists(db, updates["assigned_to"])
    else:
        if task.assigned_to != current_user.user_id:
            raise ForbiddenError("You can only update tasks assigned to you")
        # Any field outside the allowlist rejects the whole update.
        if not set(updates) <= ASSIGNEE_EDITABLE_FIELDS:
            raise ForbiddenError("Users can only update task status or submit form data")

    for field, value in updates.items():
        if value is None and field in REQUIRED_FIELDS:
            continue
        setattr(task, field, value)
    db.commit()
    logger.info("Task ID %s updated by %s ID %s: %s", task_id, current_user.role, current_user.user_id,
                ", ".join(sorted(updates)) or "no changes")
    return get_task(db, task_id)


def delete_task(db: Session, task_id: int, admin_id: int):
    task = get_task(db, task_id)
    if task.project.created_by != admin_id:
        raise ForbiddenError("You can only delete tasks in your projects")
    db.delete(task)
    db.commit()
    logger.info("Task ID %s deleted", task_id)
