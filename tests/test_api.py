import pytest

from conftest import bearer, signup


def test_health(client):
    assert client.get("/").json() == {"status": "ok"}
    assert client.get("/health").json() == {"status": "ok"}


@pytest.mark.parametrize("method,path", [
    ("get", "/admin"),
    ("get", "/user"),
    ("get", "/project"),
    ("get", "/task"),
    ("get", "/designation"),
    ("get", "/request/my-requests"),
    ("post", "/auth/logout"),
])
def test_routes_require_token(client, method, path):
    resp = getattr(client, method)(path)
    assert resp.status_code == 401
    assert resp.headers["www-authenticate"] == "Bearer"


def test_bad_token_is_rejected(client):
    resp = client.get("/project", headers=bearer("not-a-token"))
    assert resp.status_code == 401
    assert resp.json() == {"detail": "Invalid or expired token"}


def test_role_guards(client, admin_headers, user_headers):
    assert client.get("/admin", headers=user_headers).status_code == 403
    assert client.get("/designation", headers=user_headers).status_code == 403
    assert client.get("/request/my-requests", headers=admin_headers).status_code == 403

    resp = client.post("/project", headers=user_headers, json={"name": "Nope", "description": "Users cannot create"})
    assert resp.status_code == 403
    assert resp.json() == {"detail": "Only admins can perform this action"}


def test_signup_and_login_shapes(client):
    signup(client)

    resp = client.post("/auth/login", json={"email": "alice@example.com", "password": "secret123", "role": "admin"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["firstName"] == "Alice"
    assert body["user"]["role"] == "admin"
    assert "password" not in body["user"]

    resp = client.post("/auth/login", json={"email": "alice@example.com", "password": "wrong-pw", "role": "admin"})
    assert resp.status_code == 401


def test_validation_errors(client):
    resp = client.post("/auth/signup", json={"firstName": "Al", "lastName": "Admin", "email": "nope", "password": "x"})
    assert resp.status_code == 422


def test_user_crud_over_http(client, admin_headers):
    resp = client.post("/user", headers=admin_headers, json={
        "firstName": "Bob", "lastName": "Builder", "email": "bob@example.com", "password": "buildit",
    })
    assert resp.status_code == 201
    created = resp.json()
    assert created["createdBy"] is not None
    assert "password" not in created

    resp = client.patch(f"/user/{created['id']}", headers=admin_headers, json={"lastName": "Baker"})
    assert resp.json()["lastName"] == "Baker"

    assert client.delete(f"/user/{created['id']}", headers=admin_headers).status_code == 204
    resp = client.get(f"/user/{created['id']}", headers=admin_headers)
    assert resp.status_code == 404
    assert resp.json() == {"detail": f"User with ID {created['id']} not found"}


def test_project_flow_over_http(client, admin_headers, user_headers):
    project = client.post("/project", headers=admin_headers, json={
        "name": "Apollo", "description": "Moon landing programme",
    })
    assert project.status_code == 201
    project_id = project.json()["id"]
    assert project.json()["status"] == "active"

    uma = client.get("/user", headers=admin_headers).json()[0]
    resp = client.post(f"/project/{project_id}/assign-user", headers=admin_headers, json={"userId": uma["id"]})
    assert resp.json() == {"assignedUsers": ["Uma User"]}

    resp = client.post(f"/project/{project_id}/assign-user", headers=admin_headers, json={"userId": uma["id"]})
    assert resp.status_code == 409

    designation = client.post("/designation", headers=admin_headers, json={"name": "Developer"}).json()
    resp = client.post(
        f"/project/{project_id}/assign-designation", headers=admin_headers, json={"designationId": designation["id"]}
    )
    assert resp.json() == {"assignedDesignations": ["Developer"]}

    resp = client.patch(
        f"/project/{project_id}/user/{uma['id']}/designation",
        headers=admin_headers,
        json={"designationId": designation["id"]},
    )
    assert resp.json() == {"id": uma["id"], "firstName": "Uma", "lastName": "User", "designation": "Developer"}

    detail = client.get(f"/project/{project_id}", headers=user_headers).json()
    assert detail["admin"]["email"] == "alice@example.com"
    assert detail["users"][0]["designation"]["name"] == "Developer"

    mine = client.get("/project", headers=user_headers).json()
    assert [p["id"] for p in mine] == [project_id]

    assert client.get("/project/999", headers=admin_headers).json() is None

    assert client.delete(f"/project/{project_id}", headers=admin_headers).status_code == 204
    assert client.get("/project", headers=admin_headers).json() == []


def test_task_flow_over_http(client, admin_headers, user_headers):
    project_id = client.post("/project", headers=admin_headers, json={"name": "Apollo"}).json()["id"]
    uma = client.get("/user", headers=admin_headers).json()[0]

    task = client.post("/task", headers=admin_headers, json={
        "title": "Write report",
        "projectId": project_id,
        "assignedTo": uma["id"],
        "formSchema": [{"name": "summary"}],
    })
    assert task.status_code == 201
    task_id = task.json()["id"]
    assert task.json()["status"] == "pending"

    resp = client.patch(f"/task/{task_id}", headers=user_headers, json={"title": "Mine"})
    assert resp.status_code == 403

    resp = client.patch(f"/task/{task_id}", headers=user_headers, json={
        "status": "in-progress", "submissionData": {"summary": "halfway"},
    })
    assert resp.status_code == 200
    assert resp.json()["status"] == "in-progress"
    assert resp.json()["assignee"]["id"] == uma["id"]

    assert len(client.get("/task?status=in-progress", headers=admin_headers).json()) == 1
    assert client.get("/task?status=done", headers=admin_headers).json() == []

    assert client.delete(f"/task/{task_id}", headers=user_headers).status_code == 403
    assert client.delete(f"/task/{task_id}", headers=admin_headers).status_code == 204


def test_request_flow_over_http(client, admin_headers, user_headers):
    resp = client.post("/request", headers=user_headers, json={"requestType": "firstName", "requestedValue": "Umaima"})
    assert resp.status_code == 201
    request_id = resp.json()["id"]
    assert resp.json()["currentValue"] == "Uma"

    resp = client.post("/request", headers=user_headers, json={
        "requestType": "password", "requestedValue": "brand-new-pass", "currentPassword": "userpass1",
    })
    assert resp.json()["requestedValue"] == "[HIDDEN]"
    password_request_id = resp.json()["id"]

    pending = client.get("/request/admin-requests", headers=admin_headers).json()
    assert {r["id"] for r in pending} == {request_id, password_request_id}

    assert client.patch(f"/request/{password_request_id}/approve", headers=admin_headers).status_code == 400

    resp = client.patch(f"/request/{request_id}/approve", headers=admin_headers)
    assert resp.json()["status"] == "approved"
    me = client.get("/user", headers=user_headers).json()[0]
    assert me["firstName"] == "Umaima"

    assert client.patch(f"/request/{request_id}/reject", headers=admin_headers).status_code == 400
    assert client.get("/request/999", headers=user_headers).json() is None


def test_other_admin_cannot_touch_foreign_resources(client, admin_headers):
    project_id = client.post("/project", headers=admin_headers, json={"name": "Apollo"}).json()["id"]
    intruder = bearer(signup(client, email="oscar@example.com"))

    assert client.patch(f"/project/{project_id}", headers=intruder, json={"name": "Hijacked"}).status_code == 403
    assert client.delete(f"/project/{project_id}", headers=intruder).status_code == 403


def test_assignee_cannot_sneak_extra_fields_into_task_update(client, admin_headers, user_headers):
    project_id = client.post("/project", headers=admin_headers, json={"name": "Apollo"}).json()["id"]
    uma = client.get("/user", headers=admin_headers).json()[0]
    task_id = client.post("/task", headers=admin_headers, json={
        "title": "Write report", "projectId": project_id, "assignedTo": uma["id"],
    }).json()["id"]

    resp = client.patch(f"/task/{task_id}", headers=user_headers, json={"status": "done", "priority": 5})
    assert resp.status_code == 403
    assert resp.json() == {"detail": "Users can only update task status or submit form data"}
    assert client.get(f"/task/{task_id}", headers=user_headers).json()["status"] == "pending"

    resp = client.patch(f"/task/{task_id}", headers=admin_headers, json={"priority": 5})
    assert resp.status_code == 400
