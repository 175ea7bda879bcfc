from typing import Dict

from fastapi.testclient import TestClient

from taskboard_api.app.core.config import Settings
from taskboard_api.app.core.security import create_access_token
from taskboard_api.app.main import create_app
from taskboard_api.app.storage import SQLiteStorage


API = "/api"


def _register(client: TestClient, username: str, password: str = "secret1"):
    return client.post(f"{API}/auth/register", json={"username": username, "password": password})


def _login(client: TestClient, username: str, password: str = "secret1"):
    return client.post(f"{API}/auth/login", json={"username": username, "password": password})


def _auth(client: TestClient, username: str, password: str = "secret1") -> Dict[str, str]:
    _register(client, username, password)
    resp = _login(client, username, password)
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['token']}"}


def _create_project(client: TestClient, headers: Dict[str, str], name: str = "P1") -> dict:
    resp = client.post(f"{API}/projects", json={"name": name}, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_end_to_end_alice_and_bob(client):
    resp = _register(client, "alice", "secret1")
    assert resp.status_code == 201, resp.text
    alice = resp.json()
    assert set(alice) == {"id", "username"}

    resp = _login(client, "alice", "secret1")
    assert resp.status_code == 200
    alice_headers = {"Authorization": f"Bearer {resp.json()['token']}"}

    resp = _login(client, "alice", "wrong")
    assert resp.status_code == 401
    assert resp.json() == {"message": "Invalid credentials"}

    resp = client.post(f"{API}/projects", json={"name": "P1"}, headers=alice_headers)
    assert resp.status_code == 201, resp.text
    p1 = resp.json()
    assert p1["ownerId"] == alice["id"]
    assert p1["status"] == "active"
    assert p1["createdAt"]

    resp = client.post(f"{API}/projects/{p1['id']}/tasks", json={"title": "T1"}, headers=alice_headers)
    assert resp.status_code == 201, resp.text
    t1 = resp.json()
    assert t1["status"] == "todo"
    assert t1["projectId"] == p1["id"]

    resp = client.patch(f"{API}/tasks/{t1['id']}", json={"status": "done"}, headers=alice_headers)
    assert resp.status_code == 200, resp.text
    assert resp.json()["status"] == "done"

    assert _register(client, "bob", "secret2").status_code == 201
    resp = client.post(f"{API}/projects/{p1['id']}/members", json={"username": "bob"}, headers=alice_headers)
    assert resp.status_code == 201, resp.text
    assert resp.json()["username"] == "bob"

    bob_headers = _auth(client, "bob", "secret2")
    resp = client.get(f"{API}/projects/{p1['id']}/tasks", headers=bob_headers)
    assert resp.status_code == 200
    assert [t["id"] for t in resp.json()] == [t1["id"]]

    resp = client.patch(f"{API}/projects/{p1['id']}", json={"name": "mine now"}, headers=bob_headers)
    assert resp.status_code == 403
    assert "message" in resp.json()


def test_register_duplicate_username(client):
    assert _register(client, "alice").status_code == 201
    resp = _register(client, "alice")
    assert resp.status_code == 400
    assert resp.json()["message"] == "Username already exists"


def test_register_missing_password_is_validation_error(client):
    resp = client.post(f"{API}/auth/register", json={"username": "alice"})
    assert resp.status_code == 400
    assert resp.json()["field"] == "password"


def test_me_returns_identity(client):
    headers = _auth(client, "alice")
    resp = client.get(f"{API}/auth/me", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["username"] == "alice"
    assert "password" not in resp.json()


def test_missing_token_is_401(client):
    resp = client.get(f"{API}/projects")
    assert resp.status_code == 401
    assert resp.json() == {"message": "No token provided"}


def test_invalid_token_is_403(client):
    resp = client.get(f"{API}/projects", headers={"Authorization": "Bearer not-a-token"})
    assert resp.status_code == 403
    assert resp.json() == {"message": "Invalid token"}


def test_expired_token_is_403(client, settings):
    token = create_access_token({"sub": "1", "username": "alice"}, expires_delta=-60, config=settings)
    resp = client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 403


def test_token_for_deleted_user_is_401_on_me(client, settings):
    token = create_access_token({"sub": "4242", "username": "ghost"}, config=settings)
    resp = client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401


def test_project_listing_and_visibility(client):
    alice = _auth(client, "alice")
    bob = _auth(client, "bob")
    p1 = _create_project(client, alice, "P1")
    _create_project(client, bob, "B1")

    resp = client.get(f"{API}/projects", headers=alice)
    assert [p["name"] for p in resp.json()] == ["P1"]

    assert client.get(f"{API}/projects/{p1['id']}", headers=alice).status_code == 200
    assert client.get(f"{API}/projects/{p1['id']}", headers=bob).status_code == 403
    assert client.get(f"{API}/projects/9999", headers=alice).status_code == 404


def test_owner_updates_project(client):
    alice = _auth(client, "alice")
    p1 = _create_project(client, alice)
    resp = client.patch(
        f"{API}/projects/{p1['id']}",
        json={"status": "archived", "description": "old"},
        headers=alice,
    )
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert (body["name"], body["status"], body["description"]) == ("P1", "archived", "old")

    resp = client.patch(f"{API}/projects/{p1['id']}", json={"status": "gone"}, headers=alice)
    assert resp.status_code == 400
    assert resp.json()["field"] == "status"

    resp = client.patch(f"{API}/projects/9999", json={"name": "x"}, headers=alice)
    assert resp.status_code == 404


def test_create_project_requires_name(client):
    alice = _auth(client, "alice")
    resp = client.post(f"{API}/projects", json={"name": ""}, headers=alice)
    assert resp.status_code == 400
    assert resp.json() == {"message": "Project name is required", "field": "name"}


def test_members_endpoints(client):
    alice = _auth(client, "alice")
    bob = _auth(client, "bob")
    carol = _auth(client, "carol")
    p1 = _create_project(client, alice)
    members_url = f"{API}/projects/{p1['id']}/members"

    assert client.post(members_url, json={"username": "bob"}, headers=alice).status_code == 201
    assert client.post(members_url, json={"username": "bob"}, headers=alice).status_code == 400
    assert client.post(members_url, json={"username": "nobody"}, headers=alice).status_code == 404
    assert client.post(members_url, json={"username": "carol"}, headers=bob).status_code == 403

    resp = client.get(members_url, headers=bob)
    assert resp.status_code == 200
    assert [m["username"] for m in resp.json()] == ["bob"]
    assert client.get(members_url, headers=carol).status_code == 403


def test_task_lifecycle_and_authorization(client):
    alice = _auth(client, "alice")
    carol = _auth(client, "carol")
    p1 = _create_project(client, alice)
    _create_project(client, carol, "C1")

    resp = client.post(
        f"{API}/projects/{p1['id']}/tasks",
        json={"title": "T1", "description": "first", "status": "in_progress"},
        headers=alice,
    )
    assert resp.status_code == 201
    task = resp.json()
    assert task["status"] == "in_progress"
    assert task["assigneeId"] is None

    assert client.get(f"{API}/projects/{p1['id']}/tasks", headers=carol).status_code == 403
    assert client.post(f"{API}/projects/{p1['id']}/tasks", json={"title": "x"}, headers=carol).status_code == 403
    assert client.patch(f"{API}/tasks/{task['id']}", json={"title": "x"}, headers=carol).status_code == 403
    assert client.delete(f"{API}/tasks/{task['id']}", headers=carol).status_code == 403

    me = client.get(f"{API}/auth/me", headers=alice).json()
    resp = client.patch(f"{API}/tasks/{task['id']}", json={"assigneeId": me["id"]}, headers=alice)
    assert resp.json()["assigneeId"] == me["id"]
    resp = client.patch(f"{API}/tasks/{task['id']}", json={"assigneeId": None}, headers=alice)
    assert resp.json()["assigneeId"] is None
    assert resp.json()["description"] == "first"

    resp = client.delete(f"{API}/tasks/{task['id']}", headers=alice)
    assert resp.status_code == 204
    assert client.delete(f"{API}/tasks/{task['id']}", headers=alice).status_code == 404
    assert client.patch(f"{API}/tasks/{task['id']}", json={"title": "x"}, headers=alice).status_code == 404


def test_task_validation(client):
    alice = _auth(client, "alice")
    p1 = _create_project(client, alice)
    url = f"{API}/projects/{p1['id']}/tasks"

    resp = client.post(url, json={"title": "T1", "status": "blocked"}, headers=alice)
    assert resp.status_code == 400
    assert resp.json()["field"] == "status"

    resp = client.post(url, json={"title": "T1", "assigneeId": 9999}, headers=alice)
    assert resp.status_code == 400
    assert resp.json()["field"] == "assigneeId"

    resp = client.post(url, json={"description": "no title"}, headers=alice)
    assert resp.status_code == 400
    assert resp.json()["field"] == "title"


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_storage_failure_is_generic_500(client, monkeypatch, storage):
    from taskboard_api.app.storage import StorageError

    headers = _auth(client, "alice")

    def broken(user_id):
        raise StorageError("disk I/O error")

    monkeypatch.setattr(storage, "find_projects_by_owner", broken)
    resp = client.get(f"{API}/projects", headers=headers)
    assert resp.status_code == 500
    assert resp.json() == {"message": "Internal server error"}


def test_seeded_demo_user_can_log_in(tmp_path):
    config = Settings(database_url=str(tmp_path / "seeded.db"), secret_key="s", seed_demo_data=True)
    app = create_app(settings=config, storage=SQLiteStorage(config.database_url))
    with TestClient(app) as client:
        resp = _login(client, "demo", "demo123")
        assert resp.status_code == 200
        headers = {"Authorization": f"Bearer {resp.json()['token']}"}
        projects = client.get(f"{API}/projects", headers=headers).json()
        assert [p["name"] for p in projects] == ["Demo Project"]
        tasks = client.get(f"{API}/projects/{projects[0]['id']}/tasks", headers=headers).json()
        assert len(tasks) == 3


def test_ids_beyond_integer_range_are_absent(client):
    alice = _auth(client, "alice")
    p1 = _create_project(client, alice)
    huge = 2 ** 64

    resp = client.get(f"{API}/projects/{huge}", headers=alice)
    assert resp.status_code == 404
    assert client.patch(f"{API}/projects/{huge}", json={"name": "x"}, headers=alice).status_code == 404
    assert client.delete(f"{API}/tasks/{huge}", headers=alice).status_code == 404
    assert client.patch(f"{API}/tasks/{huge}", json={"title": "x"}, headers=alice).status_code == 404

    resp = client.post(
        f"{API}/projects/{p1['id']}/tasks",
        json={"title": "T", "assigneeId": huge},
        headers=alice,
    )
    assert resp.status_code == 400
    assert resp.json()["field"] == "assigneeId"


def test_patch_rejects_fields_that_cannot_change(client):
    alice = _auth(client, "alice")
    p1 = _create_project(client, alice, "P1")
    p2 = _create_project(client, alice, "P2")
    task = client.post(f"{API}/projects/{p1['id']}/tasks", json={"title": "T1"}, headers=alice).json()

    resp = client.patch(f"{API}/tasks/{task['id']}", json={"projectId": p2["id"]}, headers=alice)
    assert resp.status_code == 400
    assert resp.json()["field"] == "projectId"
    tasks = client.get(f"{API}/projects/{p1['id']}/tasks", headers=alice).json()
    assert [t["id"] for t in tasks] == [task["id"]]

    resp = client.patch(f"{API}/projects/{p1['id']}", json={"ownerId": 42}, headers=alice)
    assert resp.status_code == 400
    assert resp.json()["field"] == "ownerId"
