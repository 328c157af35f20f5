"""Tests for the FastAPI REST server."""

import pytest
from fastapi.testclient import TestClient

from recordstore.config import Settings
from recordstore.core.types import TimestampedRecord
from recordstore.storage import PlainValueStore, TimestampedValueStore
from server.api import create_app
from server.auth.credentials import CredentialTable

GOOD = {"Authorization": "alice:secret"}
BAD = {"Authorization": "alice:wrong"}


def _client(service_type: str) -> TestClient:
    settings = Settings(
        app_name="sample-app",
        app_description="test app",
        app_version="9.9.9",
        values_service_type=service_type,
    )
    credentials = CredentialTable([{"id": "alice", "password": "secret"}])
    return TestClient(create_app(settings, credentials))


@pytest.fixture()
def client() -> TestClient:
    return _client("default")


@pytest.fixture()
def simple_client() -> TestClient:
    return _client("simple")


class TestMetadata:
    def test_info_needs_no_auth(self, client: TestClient):
        r = client.get("/info")
        assert r.status_code == 200
        assert r.json() == {"name": "sample-app", "description": "test app", "version": "9.9.9"}

    def test_health(self, client: TestClient):
        client.post("/values", json="x", headers=GOOD)
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json() == {"status": "ok", "version": "9.9.9", "records": 1}

    def test_metrics(self, client: TestClient):
        client.get("/values", headers=GOOD)
        client.get("/values", headers=BAD)
        r = client.get("/metrics")
        assert r.status_code == 200
        body = r.text
        assert "recordstore_requests_total" in body
        assert 'path="/values"' in body
        assert "recordstore_auth_failures_total 1.0" in body


class TestAuth:
    @pytest.mark.parametrize(
        "headers",
        [{}, {"Authorization": "alice"}, {"Authorization": "bob:secret"}, BAD],
        ids=["absent", "malformed", "unknown", "wrong-password"],
    )
    def test_every_failure_looks_the_same(self, client: TestClient, headers):
        client.post("/values", json="seed", headers=GOOD)
        responses = [
            client.get("/values", headers=headers),
            client.get("/values/1", headers=headers),
            client.post("/values", json="x", headers=headers),
            client.put("/values/1", json="x", headers=headers),
            client.delete("/values/1", headers=headers),
        ]
        for r in responses:
            assert r.status_code == 401
            assert r.json() == {"detail": "Unauthorized"}

    def test_rejected_request_leaves_store_untouched(self, client: TestClient):
        client.post("/values", json="hello", headers=BAD)
        assert client.app.state.store.count() == 0

    @pytest.mark.parametrize("method", ["post", "put"])
    @pytest.mark.parametrize("headers", [{}, BAD], ids=["absent", "wrong-password"])
    def test_malformed_body_without_credentials_is_401(self, client: TestClient, method, headers):
        path = "/values" if method == "post" else "/values/1"
        r = getattr(client, method)(
            path,
            content=b"{not json",
            headers={"Content-Type": "application/json", **headers},
        )
        assert r.status_code == 401
        assert r.json() == {"detail": "Unauthorized"}

    def test_malformed_body_with_credentials_is_422(self, client: TestClient):
        r = client.post(
            "/values",
            content=b"{not json",
            headers={"Content-Type": "application/json", **GOOD},
        )
        assert r.status_code == 422


class TestScenarios:
    def test_a_create(self, client: TestClient):
        r = client.post("/values", json="hello", headers=GOOD)
        assert r.status_code == 200
        assert r.content == b""
        assert client.app.state.store.read(1).value == "hello"

    def test_b_wrong_password(self, client: TestClient):
        client.post("/values", json="hello", headers=GOOD)
        assert client.get("/values/1", headers=BAD).status_code == 401

    def test_c_not_found(self, client: TestClient):
        r = client.get("/values/999", headers=GOOD)
        assert r.status_code == 404
        assert r.json() == "ID '999' Not Found"

    def test_d_update(self, client: TestClient):
        client.post("/values", json="hello", headers=GOOD)
        before = client.get("/values/1", headers=GOOD).json()

        r = client.put("/values/1", json="world", headers=GOOD)
        assert r.status_code == 200

        after = client.get("/values/1", headers=GOOD).json()
        assert after["value"] == "world"
        assert after["id"] == 1

        old, new = TimestampedRecord.model_validate(before), TimestampedRecord.model_validate(after)
        assert new.created == old.created
        assert new.updated > old.updated

    def test_e_delete(self, client: TestClient):
        client.post("/values", json="hello", headers=GOOD)
        assert client.delete("/values/1", headers=GOOD).status_code == 200
        r = client.get("/values/1", headers=GOOD)
        assert r.status_code == 404
        assert r.json() == "ID '1' Not Found"


class TestCRUD:
    def test_list(self, client: TestClient):
        client.post("/values", json="a", headers=GOOD)
        client.post("/values", json="b", headers=GOOD)
        r = client.get("/values", headers=GOOD)
        assert r.status_code == 200
        data = r.json()
        assert {k: v["value"] for k, v in data.items()} == {"1": "a", "2": "b"}

    def test_list_empty(self, client: TestClient):
        assert client.get("/values", headers=GOOD).json() == {}

    def test_update_and_delete_missing(self, client: TestClient):
        r = client.put("/values/5", json="x", headers=GOOD)
        assert r.status_code == 404
        assert r.json() == "ID '5' Not Found"
        r = client.delete("/values/5", headers=GOOD)
        assert r.status_code == 404
        assert r.json() == "ID '5' Not Found"

    def test_non_integer_id(self, client: TestClient):
        assert client.get("/values/abc", headers=GOOD).status_code == 422

    def test_ids_not_reused_after_delete(self, client: TestClient):
        client.post("/values", json="a", headers=GOOD)
        client.delete("/values/1", headers=GOOD)
        client.post("/values", json="b", headers=GOOD)
        assert list(client.get("/values", headers=GOOD).json()) == ["2"]


class TestSimpleBackend:
    def test_store_is_plain(self, simple_client: TestClient):
        assert isinstance(simple_client.app.state.store, PlainValueStore)

    def test_bare_values(self, simple_client: TestClient):
        simple_client.post("/values", json="hello", headers=GOOD)
        assert simple_client.get("/values/1", headers=GOOD).json() == "hello"
        simple_client.put("/values/1", json="world", headers=GOOD)
        assert simple_client.get("/values", headers=GOOD).json() == {"1": "world"}


class TestAppFactory:
    def test_default_store_is_timestamped(self, client: TestClient):
        assert isinstance(client.app.state.store, TimestampedValueStore)

    def test_apps_do_not_share_state(self):
        a = _client("default")
        b = _client("default")
        a.post("/values", json="only in a", headers=GOOD)
        assert b.get("/values", headers=GOOD).json() == {}

    def test_loads_credentials_file(self, tmp_path):
        users = tmp_path / "appusers.json"
        users.write_text('{"AppUsers": [{"Id": "bob", "Password": "pw"}]}')
        app = create_app(Settings(users_file=users))
        c = TestClient(app)
        assert c.get("/values", headers={"Authorization": "bob:pw"}).status_code == 200
        assert c.get("/values", headers=GOOD).status_code == 401


class TestEntrypoint:
    def test_import_builds_no_app(self):
        import server.api as api_mod

        assert not hasattr(api_mod, "app")

    def test_run_serves_a_single_factory_built_app(self, monkeypatch):
        import uvicorn

        import server.api as api_mod

        calls = []
        monkeypatch.setattr(uvicorn, "run", lambda *args, **kwargs: calls.append((args, kwargs)))
        monkeypatch.setattr(api_mod.logging, "basicConfig", lambda **kwargs: None)
        monkeypatch.setenv("RECORDSTORE_PORT", "9123")

        api_mod.run()

        assert len(calls) == 1
        args, kwargs = calls[0]
        assert args == ("server.api:create_app",)
        assert kwargs["factory"] is True
        assert kwargs["port"] == 9123
