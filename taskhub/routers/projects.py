from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from .. import crud, schemas
from ..auth import get_current_user, require_admin
from ..database import get_db

router = APIRouter(prefix="/project", tags=["project"])


@router.post("", response_model=schemas.ProjectOut, status_code=status.HTTP_201_CREATED)
def create_project(
    project: schemas.ProjectCreate,
    current_user: schemas.CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return crud.projects.create_project(db, project, current_user.user_id)


@router.get("", response_model=List[schemas.ProjectWithMembers])
def list_projects(current_user: schemas.CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    return crud.projects.get_projects(db, current_user.user_id, current_user.role)


@router.get("/{project_id}", response_model=Optional[schemas.ProjectDetail], dependencies=[Depends(get_current_user)])
def get_project(project_id: int, db: Session = Depends(get_db)):
    return crud.projects.get_project(db, project_id)


@router.patch("/{project_id}", response_model=schemas.ProjectOut)
def update_project(
    project_id: int,
    project: schemas.ProjectUpdate,
    current_user: schemas.CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return crud.projects.update_project(db, project_id, current_user.user_id, project)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(
    project_id: int,
    current_user: schemas.CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    crud.projects.delete_project(db, project_id, current_user.user_id)


# MEMBERSHIP
@router.post("/{project_id}/assign-user", response_model=schemas.AssignedUsersResponse)
def assign_user(
    project_id: int,
    payload: schemas.AssignUserRequest,
    current_user: schemas.CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    names = crud.projects.assign_user(db, project_id, payload.user_id, current_user.user_id)
    return {"assigned_users": names}


@router.delete("/{project_id}/remove-user/{user_id}", response_model=schemas.AssignedUsersResponse)
def remove_user(
    project_id: int,
    user_id: int,
    current_user: schemas.CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    names = crud.projects.remove_user(db, project_id, user_id, current_user.user_id)
    return {"assigned_users": names}


# DESIGNATIONS
@router.post("/{project_id}/assign-designation", response_model=schemas.AssignedDesignationsResponse)
def assign_designation(
    project_id: int,
    payload: schemas.AssignDesignationRequest,
    current_user: schemas.CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    names = crud.projects.assign_designation(db, project_id, payload.designation_id, current_user.user_id)
    return {"assigned_designations": names}


@router.delete(
    "/{project_id}/remove-designation/{designation_id}", response_model=schemas.AssignedDesignationsResponse
)
def remove_designation(
    project_id: int,
    designation_id: int,
    current_user: schemas.CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    names = crud.projects.remove_designation(db, project_id, designation_id, current_user.user_id)
    return {"assigned_designations": names}


@router.get(
    "/{project_id}/designations",
    response_model=List[schemas.ProjectDesignationOut],
    dependencies=[Depends(get_current_user)],
)
def list_project_designations(project_id: int, db: Session = Depends(get_db)):
    return crud.projects.get_project_designations(db, project_id)


@router.patch("/{project_id}/user/{user_id}/designation", response_model=schemas.UserDesignationOut)
def set_user_designation(
    project_id: int,
    user_id: int,
    payload: schemas.SetUserDesignationRequest,
    current_user: schemas.CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return crud.projects.set_user_designation(db, project_id, user_id, payload.designation_id, current_user.user_id)


@router.delete("/{project_id}/user/{user_id}/designation", response_model=schemas.UserDesignationOut)
def remove_user_designation(
    project_id: int,
    user_id: int,
    current_user: schemas.CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return crud.projects.remove_user_designation(db, project_id, user_id, current_user.user_id)
