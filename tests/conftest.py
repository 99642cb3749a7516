import os

# Must be set before taskhub is imported: config is read at import time.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SECRET_KEY"] = "test-secret-key"

import pytest
from fastapi.testclient import TestClient

from taskhub import crud, schemas
from taskhub.database import Base, SessionLocal, engine
from taskhub.main import app


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def account(first="Alice", last="Admin", email="alice@example.com", password="secret123"):
    return schemas.AccountCreate(first_name=first, last_name=last, email=email, password=password)


@pytest.fixture
def admin(db):
    return crud.accounts.create_admin(db, account())


@pytest.fixture
def other_admin(db):
    return crud.accounts.create_admin(db, account("Oscar", "Other", "oscar@example.com"))


@pytest.fixture
def user(db, admin):
    return crud.accounts.create_user(db, account("Uma", "User", "uma@example.com", "userpass1"), admin.id)


@pytest.fixture
def project(db, admin):
    return crud.projects.create_project(
        db, schemas.ProjectCreate(name="Apollo", description="Moon landing programme"), admin.id
    )


@pytest.fixture
def designation(db):
    return crud.designations.create_designation(db, schemas.DesignationCreate(name="Developer"))


# HTTP helpers
def signup(client, email="alice@example.com", password="secret123"):
    resp = client.post("/auth/signup", json={
        "firstName": "Alice", "lastName": "Admin", "email": email, "password": password,
    })
    assert resp.status_code == 201, resp.text
    return resp.json()["access_token"]


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(client):
    return bearer(signup(client))


@pytest.fixture
def user_headers(client, admin_headers):
    resp = client.post("/user", headers=admin_headers, json={
        "firstName": "Uma", "lastName": "User", "email": "uma@example.com", "password": "userpass1",
    })
    assert resp.status_code == 201, resp.text
    login = client.post("/auth/user/login", json={"email": "uma@example.com", "password": "userpass1"})
    assert login.status_code == 200, login.text
    return bearer(login.json()["access_token"])
