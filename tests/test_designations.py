import pytest

from taskhub import crud, models, schemas
from taskhub.exceptions import ConflictError, NotFoundError


def test_create_and_list_by_name(db):
    crud.designations.create_designation(db, schemas.DesignationCreate(name="Tester"))
    crud.designations.create_designation(
        db, schemas.DesignationCreate(name="Architect", description="Owns the technical design")
    )

    assert [d.name for d in crud.designations.get_designations(db)] == ["Architect", "Tester"]


def test_duplicate_name_conflicts(db, designation):
    with pytest.raises(ConflictError):
        crud.designations.create_designation(db, schemas.DesignationCreate(name="Developer"))


def test_update_checks_uniqueness_excluding_self(db, designation):
    other = crud.designations.create_designation(db, schemas.DesignationCreate(name="Designer"))

    with pytest.raises(ConflictError):
        crud.designations.update_designation(db, other.id, schemas.DesignationUpdate(name="Developer"))

    same = crud.designations.update_designation(
        db, designation.id, schemas.DesignationUpdate(name="Developer", description="Writes the code daily")
    )
    assert same.description == "Writes the code daily"


def test_missing_designation_raises(db):
    with pytest.raises(NotFoundError):
        crud.designations.get_designation(db, 5)
    with pytest.raises(NotFoundError):
        crud.designations.update_designation(db, 5, schemas.DesignationUpdate(name="Ghost"))
    with pytest.raises(NotFoundError):
        crud.designations.delete_designation(db, 5)


def test_delete_detaches_from_projects_and_members(db, admin, user, project, designation):
    crud.projects.assign_user(db, project.id, user.id, admin.id)
    crud.projects.assign_designation(db, project.id, designation.id, admin.id)
    crud.projects.set_user_designation(db, project.id, user.id, designation.id, admin.id)

    crud.designations.delete_designation(db, designation.id)

    assert db.query(models.ProjectDesignation).count() == 0
    membership = db.query(models.ProjectUser).one()
    assert membership.designation_id is None
