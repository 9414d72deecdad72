import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from tracker.client.api import ApiError, BackendUnavailable, TrackerClient
from tracker.client.cache import LocalCache
from tracker.db.models import Base
from tracker.db.session import get_db
from tracker.main import app


BASE_URL = "http://testserver/api"


def make_http():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)
    Base.metadata.create_all(bind=engine)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


def offline_http():
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    return httpx.Client(transport=httpx.MockTransport(refuse))


def test_client_round_trips_through_api(tmp_path):
    client = TrackerClient(base_url=BASE_URL, http=make_http(), cache=LocalCache(tmp_path / "cache.json"))

    project = client.projects.create(
        {"title": "Redesign", "deadline": "2025-01-01", "priority": "high", "status": "planning"}
    )
    task = client.tasks.create(
        {
            "title": "Fix bug",
            "assignee": "Alice",
            "priority": "low",
            "status": "todo",
            "dueDate": "2025-02-01",
            "project_id": project["id"],
        }
    )

    assert client.projects.get(project["id"])["tasks"][0]["id"] == task["id"]
    assert client.tasks.update(task["id"], {"progress": 30})["progress"] == 30
    assert client.tasks.mark_complete(task["id"])["progress"] == 100
    assert client.tasks.delete(task["id"]) is None

    with pytest.raises(ApiError) as excinfo:
        client.tasks.get(task["id"])
    assert excinfo.value.status_code == 404
    assert excinfo.value.detail == f"Task with ID {task['id']} not found"


def test_list_results_are_cached_and_served_offline(tmp_path):
    cache = LocalCache(tmp_path / "cache.json")
    online = TrackerClient(base_url=BASE_URL, http=make_http(), cache=cache)
    online.users.create({"name": "Alice"})
    users = online.users.list()
    dashboard = online.dashboard()

    offline = TrackerClient(base_url=BASE_URL, http=offline_http(), cache=cache)

    assert offline.users.list() == users
    assert offline.dashboard() == dashboard


def test_offline_without_cache_raises(tmp_path):
    client = TrackerClient(base_url=BASE_URL, http=offline_http(), cache=LocalCache(tmp_path / "cache.json"))

    with pytest.raises(BackendUnavailable):
        client.projects.list()


def test_offline_writes_are_not_queued(tmp_path):
    cache = LocalCache(tmp_path / "cache.json")
    cache.put("users", [{"id": 1, "name": "Alice"}])
    client = TrackerClient(base_url=BASE_URL, http=offline_http(), cache=cache)

    with pytest.raises(BackendUnavailable):
        client.users.create({"name": "Bob"})

    assert cache.get("users") == [{"id": 1, "name": "Alice"}]


def test_server_errors_fall_back_to_cache(tmp_path):
    cache = LocalCache(tmp_path / "cache.json")
    cache.put("tasks", [{"id": 3}])
    http = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(503)))
    client = TrackerClient(base_url=BASE_URL, http=http, cache=cache)

    assert client.tasks.list() == [{"id": 3}]


def test_cache_tolerates_missing_and_corrupt_files(tmp_path):
    path = tmp_path / "nested" / "cache.json"
    cache = LocalCache(path)
    assert cache.get("projects") is None

    cache.put("projects", [])
    assert path.exists()
    assert cache.get("projects") == []

    path.write_text("{broken", encoding="utf-8")
    assert cache.load() == {}

    cache.clear()
    assert not path.exists()


def test_undecodable_cache_file_is_treated_as_empty(tmp_path):
    path = tmp_path / "cache.json"
    path.write_bytes(b"\xff\xfe{")
    http = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(503)))
    client = TrackerClient(base_url=BASE_URL, http=http, cache=LocalCache(path))

    with pytest.raises(BackendUnavailable):
        client.projects.list()


def test_unwritable_cache_does_not_lose_fetched_data(tmp_path):
    cache_dir = tmp_path / "cache.json"
    cache_dir.mkdir()
    http = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(200, json=[{"id": 1}])))
    client = TrackerClient(base_url=BASE_URL, http=http, cache=LocalCache(cache_dir))

    assert client.projects.list() == [{"id": 1}]
    assert list(tmp_path.iterdir()) == [cache_dir]


def test_cache_put_replaces_file_without_leftovers(tmp_path):
    cache = LocalCache(tmp_path / "cache.json")
    cache.put("users", [{"id": 1}])
    cache.put("tasks", [])

    assert cache.load() == {"users": [{"id": 1}], "tasks": []}
    assert [item.name for item in tmp_path.iterdir()] == ["cache.json"]


def test_tasks_for_user(tmp_path):
    client = TrackerClient(base_url=BASE_URL, http=make_http(), cache=LocalCache(tmp_path / "cache.json"))
    user = client.users.create({"name": "Alice"})
    task = client.tasks.create(
        {
            "title": "Fix bug",
            "assignee": "Alice",
            "priority": "low",
            "status": "todo",
            "dueDate": "2025-02-01",
            "assigned_user_id": user["id"],
        }
    )

    assert [item["id"] for item in client.tasks.for_user(user["id"])] == [task["id"]]
    with pytest.raises(ApiError) as excinfo:
        client.tasks.for_user(user["id"] + 100)
    assert excinfo.value.status_code == 404


def test_close_leaves_injected_http_client_open(tmp_path):
    http = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(200, json=[])))
    with TrackerClient(base_url=BASE_URL, http=http, cache=LocalCache(tmp_path / "cache.json")) as client:
        client.users.list()

    assert not http.is_closed
    http.close()

    owned = TrackerClient(base_url=BASE_URL, cache=LocalCache(tmp_path / "cache.json"))
    owned.close()
    assert owned.http.is_closed
