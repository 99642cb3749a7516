import pytest

from taskhub import crud, models, schemas
from taskhub.auth import verify_password
from taskhub.exceptions import BadRequestError, ConflictError, ForbiddenError, NotFoundError
from taskhub.crud.user_requests import PASSWORD_PLACEHOLDER

from conftest import account


def file_request(db, user, request_type, value="Umaima", current_password=None):
    return crud.user_requests.create_request(
        db,
        user.id,
        schemas.RequestCreate(request_type=request_type, requested_value=value, current_password=current_password),
    )


def test_create_snapshots_current_value(db, admin, user):
    request = file_request(db, user, models.RequestType.FIRST_NAME)

    assert request.admin_id == admin.id
    assert request.current_value == "Uma"
    assert request.requested_value == "Umaima"
    assert request.status == models.RequestStatus.PENDING


def test_password_request_is_redacted(db, user):
    request = file_request(db, user, models.RequestType.PASSWORD, value="brand-new-pass", current_password="userpass1")

    assert request.current_value is None
    assert request.requested_value == PASSWORD_PLACEHOLDER


@pytest.mark.parametrize("current_password", [None, "not-my-password"])
def test_password_request_requires_current_password(db, user, current_password):
    with pytest.raises(BadRequestError):
        file_request(db, user, models.RequestType.PASSWORD, value="brand-new-pass", current_password=current_password)


def test_user_without_admin_cannot_file(db, admin, user):
    crud.accounts.delete_admin(db, admin.id)
    db.expire_all()
    with pytest.raises(BadRequestError):
        file_request(db, user, models.RequestType.LAST_NAME)


def test_unknown_user_cannot_file(db):
    with pytest.raises(NotFoundError):
        crud.user_requests.create_request(
            db, 404, schemas.RequestCreate(request_type=models.RequestType.EMAIL, requested_value="x@example.com")
        )


def test_listing_newest_first(db, admin, user):
    first = file_request(db, user, models.RequestType.FIRST_NAME)
    second = file_request(db, user, models.RequestType.LAST_NAME, value="Userson")

    mine = crud.user_requests.get_requests_by_user(db, user.id)
    assert [r.id for r in mine] == [second.id, first.id]
    assert mine[0].admin.id == admin.id

    theirs = crud.user_requests.get_requests_by_admin(db, admin.id)
    assert [r.id for r in theirs] == [second.id, first.id]
    assert theirs[0].user.id == user.id


def test_approve_applies_change(db, admin, user):
    request = file_request(db, user, models.RequestType.LAST_NAME, value="Userson")

    approved = crud.user_requests.approve_request(db, request.id, admin.id)

    assert approved.status == models.RequestStatus.APPROVED
    assert crud.accounts.get_user(db, user.id).last_name == "Userson"


def test_approve_email_change(db, admin, user):
    request = file_request(db, user, models.RequestType.EMAIL, value="uma.new@example.com")
    crud.user_requests.approve_request(db, request.id, admin.id)
    assert crud.accounts.get_user_by_email(db, "uma.new@example.com").id == user.id


def test_approve_email_change_to_taken_address_conflicts(db, admin, user):
    crud.accounts.create_user(db, account("Bob", "Builder", "bob@example.com"), admin.id)
    request = file_request(db, user, models.RequestType.EMAIL, value="bob@example.com")

    with pytest.raises(ConflictError):
        crud.user_requests.approve_request(db, request.id, admin.id)


def test_password_request_can_never_be_approved(db, admin, user):
    request = file_request(db, user, models.RequestType.PASSWORD, value="brand-new-pass", current_password="userpass1")

    with pytest.raises(BadRequestError):
        crud.user_requests.approve_request(db, request.id, admin.id)
    assert verify_password("userpass1", crud.accounts.get_user(db, user.id).password)


def test_approve_checks(db, admin, other_admin, user):
    request = file_request(db, user, models.RequestType.FIRST_NAME)

    with pytest.raises(NotFoundError):
        crud.user_requests.approve_request(db, 999, admin.id)
    with pytest.raises(ForbiddenError):
        crud.user_requests.approve_request(db, request.id, other_admin.id)

    crud.user_requests.approve_request(db, request.id, admin.id)
    with pytest.raises(BadRequestError):
        crud.user_requests.approve_request(db, request.id, admin.id)
    with pytest.raises(BadRequestError):
        crud.user_requests.reject_request(db, request.id, admin.id)


def test_reject_leaves_user_untouched(db, admin, other_admin, user):
    request = file_request(db, user, models.RequestType.FIRST_NAME)

    with pytest.raises(ForbiddenError):
        crud.user_requests.reject_request(db, request.id, other_admin.id)

    rejected = crud.user_requests.reject_request(db, request.id, admin.id)
    assert rejected.status == models.RequestStatus.REJECTED
    assert crud.accounts.get_user(db, user.id).first_name == "Uma"


def test_find_one_returns_none_when_absent(db):
    assert crud.user_requests.get_request(db, 1) is None
