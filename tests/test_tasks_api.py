from __future__ import annotations

import pytest
from fastapi.testclient import TestClient


def test_scenario_create_toggle_rename_delete(client: TestClient) -> None:
    resp = client.post("/api/tasks", json={"title": "Buy milk"})
    assert resp.status_code == 201
    assert resp.json() == {"id": 1, "title": "Buy milk", "completed": False}

    resp = client.put("/api/tasks", json={"id": 1, "completed": True})
    assert resp.status_code == 200
    assert resp.json() == {"id": 1, "title": "Buy milk", "completed": True}

    resp = client.put("/api/tasks/1", json={"title": "Buy bread"})
    assert resp.status_code == 200
    assert resp.json() == {"id": 1, "title": "Buy bread", "completed": True}

    resp = client.delete("/api/tasks/1")
    assert resp.status_code == 204
    assert resp.content == b""

    listed = client.get("/api/tasks")
    assert listed.status_code == 200
    assert 1 not in [t["id"] for t in listed.json()]


def test_list_returns_insertion_order(client: TestClient) -> None:
    for title in ("one", "two", "three"):
        client.post("/api/tasks", json={"title": title})
    titles = [t["title"] for t in client.get("/api/tasks").json()]
    assert titles == ["one", "two", "three"]


def test_get_single_task(client: TestClient) -> None:
    created = client.post("/api/tasks", json={"title": "look me up"}).json()
    resp = client.get(f"/api/tasks/{created['id']}")
    assert resp.status_code == 200
    assert resp.json() == created
    assert client.get("/api/tasks/404").status_code == 404


def test_create_empty_title_is_rejected(client: TestClient) -> None:
    resp = client.post("/api/tasks", json={"title": ""})
    assert resp.status_code == 400
    assert "title" in resp.json()["detail"]
    assert client.get("/api/tasks").json() == []


def test_create_without_body_is_rejected(client: TestClient) -> None:
    assert client.post("/api/tasks").status_code == 400


def test_create_malformed_json_is_rejected(client: TestClient) -> None:
    resp = client.post(
        "/api/tasks",
        content=b"{not json",
        headers={"content-type": "application/json"},
    )
    assert resp.status_code == 400


def test_put_unknown_id_is_not_found(client: TestClient) -> None:
    client.post("/api/tasks", json={"title": "untouched"})
    resp = client.put("/api/tasks", json={"id": 999, "title": "changed"})
    assert resp.status_code == 404
    assert [t["title"] for t in client.get("/api/tasks").json()] == ["untouched"]


def test_put_string_completed_is_not_coerced(client: TestClient) -> None:
    task = client.post("/api/tasks", json={"title": "x"}).json()
    resp = client.put(f"/api/tasks/{task['id']}", json={"completed": "true"})
    assert resp.status_code == 200
    assert resp.json()["completed"] is False


def test_put_without_id_is_rejected(client: TestClient) -> None:
    assert client.put("/api/tasks", json={"completed": True}).status_code == 400


def test_delete_unknown_and_non_numeric(client: TestClient) -> None:
    assert client.delete("/api/tasks/12").status_code == 404
    assert client.delete("/api/tasks/abc").status_code == 400


@pytest.mark.parametrize("path", ["/api/tasks", "/api/tasks/1"])
def test_unsupported_verb_lists_allowed_methods(client: TestClient, path: str) -> None:
    resp = client.patch(path, json={"completed": True})
    assert resp.status_code == 405
    allowed = {m.strip() for m in resp.headers["allow"].split(",")}
    assert allowed == {"GET", "POST", "PUT", "DELETE"}
    assert "PATCH" in resp.text


def test_root_and_healthz(client: TestClient) -> None:
    assert client.get("/").json() == {"ok": True, "service": "tasklist"}
    assert client.get("/healthz").json() == {"status": "ok"}


def test_storage_failure_maps_to_500(app, monkeypatch) -> None:
    from tasklist.app.core.errors import StorageError
    from tasklist.app.routers import tasks as tasks_module

    class BrokenStore:
        def list_tasks(self):
            raise StorageError("storage error during list")

    app.dependency_overrides[tasks_module.get_task_store] = lambda: BrokenStore()
    resp = TestClient(app).get("/api/tasks")
    assert resp.status_code == 500
    assert resp.json()["detail"] == "storage error during list"


def test_put_non_numeric_path_id_is_rejected(client: TestClient) -> None:
    resp = client.put("/api/tasks/abc", json={"completed": True})
    assert resp.status_code == 400


@pytest.mark.parametrize("token", ["99999999999999999999", "１"])
def test_delete_oversized_or_non_ascii_id_is_rejected(client: TestClient, token: str) -> None:
    client.post("/api/tasks", json={"title": "survivor"})
    resp = client.delete(f"/api/tasks/{token}")
    assert resp.status_code == 400
    assert [t["title"] for t in client.get("/api/tasks").json()] == ["survivor"]


def test_put_oversized_body_id_is_rejected(client: TestClient) -> None:
    resp = client.put("/api/tasks", json={"id": 2**70, "completed": True})
    assert resp.status_code == 400


def test_rejected_request_logs_op_and_task(client: TestClient, caplog) -> None:
    with caplog.at_level("INFO", logger="tasklist.app.routers.tasks"):
        assert client.delete("/api/tasks/31").status_code == 404
    record = [r for r in caplog.records if r.name == "tasklist.app.routers.tasks"][-1]
    assert record.op == "delete"
    assert record.task == "31"
