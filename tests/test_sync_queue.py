import json

import httpx
import pytest

from studyassistant.client.sync_queue import SyncQueue


class Recorder:
    def __init__(self, fail_paths=()):
        self.seen = []
        self.fail_paths = set(fail_paths)

    def __call__(self, request):
        self.seen.append((request.method, request.url.path, json.loads(request.content) if request.content else None))
        if request.url.path in self.fail_paths:
            return httpx.Response(500, json={"error": "INTERNAL_ERROR"})
        return httpx.Response(200, json={})


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def http(recorder):
    return httpx.Client(base_url="http://api.test", transport=httpx.MockTransport(recorder))


def test_add_persists_to_disk(tmp_path, http):
    path = tmp_path / "queue.json"
    q = SyncQueue(path, http, online=False)
    item = q.add("put", "/api/flashcards/1", {"mastery_level": 3})
    assert item["method"] == "PUT"
    assert json.loads(path.read_text())[0]["url"] == "/api/flashcards/1"
    assert SyncQueue(path, http).status()["pending"] == 1


def test_process_is_noop_offline_or_empty(tmp_path, http, recorder):
    q = SyncQueue(tmp_path / "q.json", http, online=False)
    assert q.process() is None
    q.add("POST", "/api/quizzes/1/submit", {"answers": [0]})
    assert q.process() is None
    assert recorder.seen == []
    assert SyncQueue(tmp_path / "empty.json", http).process() is None


def test_replays_in_order_when_back_online(tmp_path, http, recorder):
    q = SyncQueue(tmp_path / "q.json", http, online=False)
    q.add("PUT", "/api/flashcards/1", {"mastery_level": 1})
    q.add("DELETE", "/api/flashcards/2")
    q.add("POST", "/api/quizzes/7/submit", {"answers": [1, 0]})

    assert q.set_online(True) == {"processed": 3, "failed": 0}
    assert [(m, p) for m, p, _ in recorder.seen] == [
        ("PUT", "/api/flashcards/1"),
        ("DELETE", "/api/flashcards/2"),
        ("POST", "/api/quizzes/7/submit"),
    ]
    assert recorder.seen[2][2] == {"answers": [1, 0]}
    assert q.status() == {"pending": 0, "is_online": True}


def test_failed_items_stay_queued(tmp_path):
    recorder = Recorder(fail_paths={"/api/flashcards/2"})
    http = httpx.Client(base_url="http://api.test", transport=httpx.MockTransport(recorder))
    path = tmp_path / "q.json"
    q = SyncQueue(path, http)
    q.add("PUT", "/api/flashcards/1", {"mastery_level": 1})
    q.add("PUT", "/api/flashcards/2", {"mastery_level": 2})

    assert q.process() == {"processed": 1, "failed": 1}
    assert [i["url"] for i in q.queue] == ["/api/flashcards/2"]
    assert [i["url"] for i in json.loads(path.read_text())] == ["/api/flashcards/2"]


def test_network_errors_count_as_failures(tmp_path):
    def refuse(request):
        raise httpx.ConnectError("offline", request=request)

    q = SyncQueue(tmp_path / "q.json", httpx.Client(base_url="http://api.test", transport=httpx.MockTransport(refuse)))
    q.add("DELETE", "/api/lectures/3")
    assert q.process() == {"processed": 0, "failed": 1}
    assert q.status()["pending"] == 1


def test_going_offline_does_not_process(tmp_path, http, recorder):
    q = SyncQueue(tmp_path / "q.json", http)
    q.add("DELETE", "/api/lectures/3")
    assert q.set_online(False) is None
    assert recorder.seen == []


def test_corrupt_file_starts_empty(tmp_path, http):
    path = tmp_path / "q.json"
    path.write_text("{not json")
    assert SyncQueue(path, http).queue == []


def test_clear(tmp_path, http):
    q = SyncQueue(tmp_path / "q.json", http, online=False)
    q.add("DELETE", "/api/lectures/3")
    q.clear()
    assert SyncQueue(tmp_path / "q.json", http).queue == []
