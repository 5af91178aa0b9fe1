from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from backend.app import main as api
from backend.app.history import HistoryStore, HistoryUnavailable


@pytest.fixture
def store(tmp_path: Path) -> HistoryStore:
    return HistoryStore(str(tmp_path / "data" / "linsolver.json"))


@pytest.fixture
def client(store: HistoryStore):
    api.app.dependency_overrides[api.get_history_store] = lambda: store
    yield TestClient(api.app)
    api.app.dependency_overrides.clear()


def _post(client, equations, method="Gaussian Elimination", **extra):
    return client.post("/api/solve", json={"equations": equations, "method": method, **extra})


def test_solve_returns_solution_and_steps(client) -> None:
    resp = _post(client, ["2x + y = 5", "x - y = 1"])
    assert resp.status_code == 200
    solution = resp.json()["solution"]
    assert solution["status"] == "solved"
    assert solution["variables"] == {"x": 2.0, "y": 1.0}
    assert solution["steps"][0] == "Initial augmented matrix:"


def test_solve_without_steps(client) -> None:
    resp = _post(client, ["2x + y = 5", "x - y = 1"], "Matrix Inversion", show_steps=False)
    solution = resp.json()["solution"]
    assert solution["variables"] == {"x": 2.0, "y": 1.0}
    assert solution["steps"] is None


def test_solve_classifications_are_not_http_errors(client) -> None:
    inconsistent = _post(client, ["x + y = 2", "x + y = 3"]).json()["solution"]
    assert inconsistent["status"] == "inconsistent"
    assert inconsistent["variables"] is None
    assert inconsistent["message"]

    error = _post(client, ["2x + y 5", "x - y = 1"]).json()["solution"]
    assert error["status"] == "error"
    assert "Invalid equation format" in error["message"]


@pytest.mark.parametrize(
    "payload,detail",
    [
        ({"equations": ["x = 1"], "method": "Gaussian Elimination"},
         "At least two equations are required"),
        ({"equations": ["x = 1", "  "], "method": "Gaussian Elimination"},
         "At least two equations are required"),
        ({"equations": ["x + y = 1", "x - y = 0"], "method": "Cramer"},
         "Valid method is required"),
        ({"equations": ["x + y = 1", "x - y = 0"]}, "Valid method is required"),
    ],
)
def test_solve_validation(client, payload, detail) -> None:
    resp = client.post("/api/solve", json=payload)
    assert resp.status_code == 400
    assert resp.json()["detail"] == detail


def test_solved_result_saved_for_user(client, store) -> None:
    _post(client, ["2x + y = 5", "x - y = 1"], user_id="u1")
    _post(client, ["x + y = 2", "x + y = 3"], user_id="u1")  # not solved, not saved
    _post(client, ["x + y = 2", "x - y = 0"])                # no user, not saved

    records = store.get_records("u1")
    assert len(records) == 1
    assert records[0]["method"] == "Gaussian Elimination"
    assert records[0]["solution"] == {"x": 2.0, "y": 1.0}


def test_history_failure_does_not_fail_solve(client, store, monkeypatch) -> None:
    def unavailable(*args, **kwargs):
        raise HistoryUnavailable("down")

    monkeypatch.setattr(store, "add_record", unavailable)
    resp = _post(client, ["2x + y = 5", "x - y = 1"], user_id="u1")
    assert resp.status_code == 200
    assert resp.json()["solution"]["status"] == "solved"


def test_history_endpoints(client) -> None:
    assert client.get("/api/history").status_code == 400

    _post(client, ["2x + y = 5", "x - y = 1"], user_id="u1")
    _post(client, ["x + y = 2", "x - y = 0"], "Matrix Inversion", user_id="u1")

    records = client.get("/api/history", params={"user_id": "u1"}).json()["equations"]
    assert [r["method"] for r in records] == ["Matrix Inversion", "Gaussian Elimination"]

    resp = client.delete(f"/api/history/{records[0]['id']}", params={"user_id": "u1"})
    assert resp.status_code == 200
    resp = client.delete(f"/api/history/{records[0]['id']}", params={"user_id": "u1"})
    assert resp.status_code == 404

    assert client.delete("/api/history", params={"user_id": "u1"}).json() == {"deleted": 1}
    assert client.get("/api/history", params={"user_id": "u1"}).json() == {"equations": []}
