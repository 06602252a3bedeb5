import pytest
from fastapi.testclient import TestClient


def test_static_directory_is_served_at_root(make_app, tmp_path):
    (tmp_path / "index.html").write_text("<h1>chat</h1>", encoding="utf-8")
    app = make_app(STATIC_DIR=str(tmp_path))
    with TestClient(app) as client:
        r = client.get("/")
        assert r.status_code == 200
        assert "<h1>chat</h1>" in r.text
        # API routes are matched before the static mount
        assert client.get("/tasks").json() == []


def test_missing_static_directory_is_skipped(make_app, tmp_path):
    app = make_app(STATIC_DIR=str(tmp_path / "absent"))
    with TestClient(app) as client:
        assert client.get("/").status_code == 404
        assert client.get("/tasks").status_code == 200


def test_each_app_owns_its_registry_and_store(make_app):
    first, second = make_app(), make_app()
    assert first.state.chat_registry is not second.state.chat_registry
    assert first.state.task_store is not second.state.task_store
    assert first.state.chat_hub.registry is first.state.chat_registry


def test_supplied_settings_are_validated(make_app):
    with pytest.raises(ValueError):
        make_app(CHAT_INBOUND_QUEUE_SIZE=-1)
