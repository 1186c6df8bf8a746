"""Tests for the local-first TaskListSync."""

import httpx
import pytest
from fastapi.testclient import TestClient

from taskmanager.client.api import ApiError, ClientConfig, TaskApiClient
from taskmanager.client.storage import LocalStorage
from taskmanager.client.sync import SyncStatus, TaskListSync
from taskmanager.errors import AuthError, ValidationError


class FlakyApi:
    """In-memory stand-in for TaskApiClient that can be switched offline."""

    def __init__(self):
        self.token = None
        self.offline = False
        self.failing = set()
        self.remote = {}
        self.calls = []
        self._next = 0

    def _check(self, name):
        self.calls.append(name)
        if self.offline or name in self.failing:
            raise ApiError("Network error: offline")

    def create_task(self, text):
        self._check("create")
        self._next += 1
        task = {
            "id": f"r{self._next}",
            "text": text,
            "completed": False,
            "createdAt": "2026-01-01T00:00:00+00:00",
        }
        self.remote[task["id"]] = task
        return task

    def update_task(self, task_id, text=None, completed=None):
        self._check("update")
        task = self.remote[task_id]
        if text is not None:
            task["text"] = text
        if completed is not None:
            task["completed"] = completed
        return task

    def delete_task(self, task_id):
        self._check("delete")
        return self.remote.pop(task_id)

    def clear_tasks(self):
        self._check("clear")
        self.remote.clear()
        return "Deleted"

    def list_tasks(self):
        self._check("list")
        return list(self.remote.values())

    def login(self, email, password):
        self._check("login")
        return {"user": {"id": "u1", "email": email}, "token": "tok"}

    def create_review(self, task_id, rating, comment=None):
        self._check("review")
        return {"taskId": task_id, "rating": rating}


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(str(tmp_path / "device.json"))


@pytest.fixture
def api():
    return FlakyApi()


@pytest.fixture
def sync(storage, api):
    task_list = TaskListSync(storage, api)
    task_list.load()
    return task_list


def test_offline_mutations_stay_local(sync, api, storage):
    """Without a session nothing is sent and records stay local."""
    task = sync.add_task("  buy milk ")
    sync.toggle_task(task.id)

    assert task.text == "buy milk"
    assert task.completed is True
    assert task.sync_status == SyncStatus.LOCAL
    assert api.calls == []
    assert storage.get_json("tasks")[0]["text"] == "buy milk"


def test_blank_task_is_rejected(sync):
    with pytest.raises(ValidationError):
        sync.add_task("   ")
    assert sync.tasks == []


def test_login_uploads_offline_tasks(sync, api, storage):
    """Tasks written while logged out are uploaded, then merged with the server list."""
    api.create_task("from server")
    draft = sync.add_task("local draft")
    assert draft.sync_status == SyncStatus.LOCAL

    sync.login("a@x.com", "pw")

    assert sorted(t.text for t in sync.tasks) == ["from server", "local draft"]
    assert all(t.sync_status == SyncStatus.SYNCED for t in sync.tasks)
    assert all(t.remote_id in api.remote for t in sync.tasks)
    assert sorted(t["text"] for t in api.remote.values()) == ["from server", "local draft"]
    assert api.token == "tok"
    assert storage.get_json("user")["token"] == "tok"


def test_mutations_are_mirrored(sync, api):
    sync.login("a@x.com", "pw")

    task = sync.add_task("write tests")
    assert task.sync_status == SyncStatus.SYNCED
    assert api.remote[task.remote_id]["text"] == "write tests"

    sync.toggle_task(task.id)
    assert api.remote[task.remote_id]["completed"] is True

    sync.delete_task(task.id)
    assert api.remote == {}


def test_failed_sync_keeps_local_change(sync, api):
    """A failed server call marks the task local_only, never rolls back."""
    sync.login("a@x.com", "pw")
    api.offline = True

    task = sync.add_task("offline task")

    assert task in sync.tasks
    assert task.sync_status == SyncStatus.LOCAL_ONLY
    assert task.remote_id is None
    assert sync.pending() == [task]


def test_local_only_retried_on_next_mutation(sync, api):
    sync.login("a@x.com", "pw")
    api.offline = True
    first = sync.add_task("first")
    sync.toggle_task(first.id)
    api.offline = False

    second = sync.add_task("second")

    assert first.sync_status == SyncStatus.SYNCED
    assert api.remote[first.remote_id]["completed"] is True
    assert second.sync_status == SyncStatus.SYNCED
    assert sync.pending() == []


def test_failed_refresh_keeps_local_state(sync, api):
    sync.login("a@x.com", "pw")
    sync.add_task("kept")
    api.offline = True

    assert sync.refresh() is False
    assert [t.text for t in sync.tasks] == ["kept"]


def test_failed_login_propagates(sync, api):
    api.offline = True
    with pytest.raises(ApiError):
        sync.login("a@x.com", "pw")
    assert sync.session is None


def test_clear_all(sync, api):
    sync.login("a@x.com", "pw")
    sync.add_task("one")
    sync.add_task("two")

    assert sync.clear_all() == 2
    assert sync.tasks == []
    assert api.remote == {}
    assert sync.analytics.tasks_deleted == 2


def test_submit_review(sync, api):
    local = sync.add_task("offline")
    with pytest.raises(AuthError):
        sync.submit_review(local.id, 5)

    sync.login("a@x.com", "pw")
    task = sync.add_task("rate me")
    with pytest.raises(ValidationError):
        sync.submit_review(task.id, 6)

    review = sync.submit_review(task.id, 4)
    assert review["taskId"] == task.remote_id
    assert sync.analytics.reviews_submitted == 1


def test_state_survives_restart(storage, api):
    first = TaskListSync(storage, api)
    first.load()
    first.add_task("persist me")
    first.set_language("fr")
    first.login("a@x.com", "pw")

    second = TaskListSync(storage, FlakyApi())
    second.load()

    assert second.language == "fr"
    assert second.has_session
    assert second.api.token == "tok"
    assert second.analytics.app_opens == 2
    assert second.analytics.tasks_created == 1


def test_unsupported_language(sync):
    with pytest.raises(ValidationError):
        sync.set_language("de")
    assert sync.language == "en"


def test_corrupt_key_falls_back(storage, api):
    """One broken key does not stop the others from loading."""
    storage.set_item("tasks", "[broken")
    storage.set_json("language", "es")

    task_list = TaskListSync(storage, api)
    task_list.load()

    assert task_list.tasks == []
    assert task_list.language == "es"


def test_against_real_api(app, storage):
    """Drive the real app through TaskApiClient."""
    api_client = TaskApiClient(ClientConfig(), http=TestClient(app))
    task_list = TaskListSync(storage, api_client)
    task_list.load()

    task_list.register("alice", "a@x.com", "pw123456")
    task = task_list.add_task(" buy milk ")
    task_list.toggle_task(task.id)

    remote = api_client.get_task(task.remote_id)
    assert remote["text"] == "buy milk"
    assert remote["completed"] is True

    review = task_list.submit_review(task.id, 5, "done")
    assert api_client.list_reviews(task.remote_id)[0]["id"] == review["id"]

    assert task_list.refresh() is True
    assert [t.remote_id for t in task_list.tasks] == [task.remote_id]


def test_api_client_wraps_network_errors():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    http = httpx.Client(transport=httpx.MockTransport(handler), base_url="http://test")
    api_client = TaskApiClient(ClientConfig(), http=http)

    with pytest.raises(ApiError) as exc:
        api_client.list_tasks()
    assert exc.value.status_code is None


def test_api_client_surfaces_error_envelope():
    def handler(request):
        return httpx.Response(404, json={"success": False, "error": "Task not found"})

    http = httpx.Client(transport=httpx.MockTransport(handler), base_url="http://test")
    api_client = TaskApiClient(ClientConfig(), http=http)

    with pytest.raises(ApiError) as exc:
        api_client.get_task("missing")
    assert exc.value.status_code == 404
    assert exc.value.message == "Task not found"


def test_update_text_and_logout(sync, api, storage):
    sync.login("a@x.com", "pw")
    task = sync.add_task("draft")

    sync.update_text(task.id, "  final ")
    assert api.remote[task.remote_id]["text"] == "final"
    with pytest.raises(ValidationError):
        sync.update_text(task.id, " ")

    sync.logout()
    assert not sync.has_session
    assert api.token is None
    assert storage.get_item("user") is None


def test_register_uploads_offline_tasks(app, storage):
    """Against the real app, a logged-out task reaches the server on register."""
    api_client = TaskApiClient(ClientConfig(), http=TestClient(app))
    task_list = TaskListSync(storage, api_client)
    task_list.load()
    task_list.add_task("written while logged out")

    task_list.register("alice", "a@x.com", "pw123456")

    assert [t.text for t in task_list.tasks] == ["written while logged out"]
    assert task_list.tasks[0].sync_status == SyncStatus.SYNCED
    assert [t["text"] for t in api_client.list_tasks()] == ["written while logged out"]


def test_refresh_keeps_task_whose_retry_fails(sync, api):
    """A local_only task survives a refresh when its retry fails again."""
    sync.login("a@x.com", "pw")
    api.create_task("from server")
    api.failing = {"create"}
    stuck = sync.add_task("stuck")
    assert stuck.sync_status == SyncStatus.LOCAL_ONLY

    assert sync.refresh() is True

    assert [t.text for t in sync.tasks] == ["from server", "stuck"]
    assert stuck in sync.tasks
    assert stuck.sync_status == SyncStatus.LOCAL_ONLY
    assert stuck.remote_id is None

    api.failing = set()
    assert sync.refresh() is True
    assert sorted(t["text"] for t in api.remote.values()) == ["from server", "stuck"]
    assert sync.pending() == []


def test_api_client_rejects_non_object_json():
    def handler(request):
        return httpx.Response(502, json=["bad gateway"])

    http = httpx.Client(transport=httpx.MockTransport(handler), base_url="http://test")
    api_client = TaskApiClient(ClientConfig(), http=http)

    with pytest.raises(ApiError) as exc:
        api_client.list_tasks()
    assert exc.value.status_code == 502
