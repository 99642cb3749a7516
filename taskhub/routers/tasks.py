from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from .. import crud, schemas
from ..auth import get_current_user, require_admin
from ..database import get_db
from ..models import TaskStatus

router = APIRouter(prefix="/task", tags=["task"])


@router.post("", response_model=schemas.TaskOut, status_code=status.HTTP_201_CREATED)
def create_task(
    task: schemas.TaskCreate,
    current_user: schemas.CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return crud.tasks.create_task(db, task, current_user.user_id)


@router.get("", response_model=List[schemas.TaskDetail])
def list_tasks(
    status: Optional[TaskStatus] = None,
    project_id: Optional[int] = None,
    current_user: schemas.CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return crud.tasks.get_tasks(db, current_user, status=status, project_id=project_id)


@router.get("/{task_id}", response_model=schemas.TaskDetail, dependencies=[Depends(get_current_user)])
def get_task(task_id: int, db: Session = Depends(get_db)):
    return crud.tasks.get_task(db, task_id)


@router.patch("/{task_id}", response_model=schemas.TaskDetail)
def update_task(
    task_id: int,
    task_update: schemas.TaskUpdate,
    current_user: schemas.CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return crud.tasks.update_task(db, task_id, task_update, current_user)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: int,
    current_user: schemas.CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    crud.tasks.delete_task(db, task_id, current_user.user_id)
