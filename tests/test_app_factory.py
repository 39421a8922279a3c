"""Tests for app factory wiring and correlation IDs."""

from fastapi.testclient import TestClient

from chatrelay.api.factory import create_app


class TestRouting:
    def test_health_available(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_version(self, client, monkeypatch):
        monkeypatch.setenv("RENDER_GIT_COMMIT", "abc1234")
        body = client.get("/version").json()
        assert body["ok"] is True
        assert body["commit"] == "abc1234"
        assert body["renderedAt"].endswith("Z")

    def test_version_without_commit(self, client, monkeypatch):
        monkeypatch.delenv("RENDER_GIT_COMMIT", raising=False)
        monkeypatch.delenv("COMMIT_SHA", raising=False)
        assert client.get("/version").json()["commit"] is None

    def test_unknown_route_404(self, client):
        assert client.get("/api/nope").status_code == 404

    def test_interactive_docs_not_mounted(self, client):
        assert client.get("/docs").status_code == 404

    def test_each_app_has_its_own_state(self, relay_env):
        first = create_app()
        second = create_app()
        TestClient(first).post("/webhook/chatguru", json={"celular": "5511999999999"})
        assert first.state.relay.counters.received_webhooks == 1
        assert second.state.relay.counters.received_webhooks == 0


class TestCorrelationId:
    """Tests for correlation ID middleware."""

    def test_generates_correlation_id(self, client):
        response = client.get("/health")
        cid = response.headers["X-Correlation-ID"]
        assert len(cid) == 32  # uuid4 hex

    def test_preserves_incoming_correlation_id(self, client):
        response = client.get("/health", headers={"X-Correlation-ID": "test-123"})
        assert response.headers["X-Correlation-ID"] == "test-123"

    def test_replaces_oversized_correlation_id(self, client):
        response = client.get("/health", headers={"X-Correlation-ID": "x" * 500})
        assert len(response.headers["X-Correlation-ID"]) == 32

    def test_present_on_error_responses(self, client):
        response = client.get("/last-chat")
        assert response.status_code == 401
        assert "X-Correlation-ID" in response.headers
