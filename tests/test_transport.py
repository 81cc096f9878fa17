"""Tests for the authenticated transport and its 429 retry policy."""

import json
import logging

import httpx
import pytest

from conftest import Upstream, ok, run
from flightops.config import ClientConfig
from flightops.errors import (
    AuthenticationError,
    ConfigurationError,
    NetworkError,
    RateLimitExceededError,
    UpstreamError,
)
from flightops.middleware.logging import redact_headers


RATE_LIMITED = httpx.Response(429, json={"message": "Too Many Requests"})


class TestRetry:
    """Only HTTP 429 is retried, with 1s/2s/4s backoff."""

    def test_three_rate_limits_then_success(self, make_client, sleep):
        upstream = Upstream(RATE_LIMITED, RATE_LIMITED, RATE_LIMITED, ok({"result": "ok"}))
        client = make_client(upstream)

        body = run(client.transport.request("/zones"))

        assert body == {"result": "ok"}
        assert sleep.delays == [1.0, 2.0, 4.0]
        assert upstream.calls == 4

    def test_fourth_rate_limit_gives_up(self, make_client, sleep):
        upstream = Upstream(RATE_LIMITED)
        client = make_client(upstream)

        with pytest.raises(RateLimitExceededError) as exc_info:
            run(client.transport.request("/zones"))

        assert upstream.calls == 4
        assert sleep.delays == [1.0, 2.0, 4.0]
        assert exc_info.value.attempts == 4
        assert exc_info.value.message == "Rate limit exceeded for Flightradar24 API"

    def test_retries_disabled(self, make_client, sleep):
        upstream = Upstream(RATE_LIMITED)
        client = make_client(upstream, ClientConfig(api_key="k", max_retries=0))

        with pytest.raises(RateLimitExceededError):
            run(client.transport.request("/zones"))

        assert upstream.calls == 1
        assert sleep.delays == []

    def test_custom_backoff_policy(self, make_client, sleep):
        cfg = ClientConfig(api_key="k", retry_delay=0.5, retry_multiplier=3)
        upstream = Upstream(RATE_LIMITED, RATE_LIMITED, ok({}))
        client = make_client(upstream, cfg)

        run(client.transport.request("/zones"))

        assert sleep.delays == [0.5, 1.5]


class TestErrorClassification:
    def test_unauthorized_is_not_retried(self, make_client, sleep):
        upstream = Upstream(httpx.Response(401, json={"error": "bad key"}))
        client = make_client(upstream)

        with pytest.raises(AuthenticationError) as exc_info:
            run(client.transport.request("/airports", {"iata": "LHR"}))

        assert upstream.calls == 1
        assert sleep.delays == []
        assert exc_info.value.message == "Invalid Flightradar24 API key"

    def test_server_error_carries_status_and_body(self, make_client, sleep):
        upstream = Upstream(httpx.Response(503, json={"error": "maintenance"}))
        client = make_client(upstream)

        with pytest.raises(UpstreamError) as exc_info:
            run(client.transport.request("/flights"))

        err = exc_info.value
        assert err.status_code == 503
        assert err.body == {"error": "maintenance"}
        assert err.message.startswith("Flightradar24 API error: 503 - ")
        assert upstream.calls == 1
        assert sleep.delays == []

    def test_non_json_error_body_kept_as_text(self, make_client):
        upstream = Upstream(httpx.Response(404, text="not here"))
        client = make_client(upstream)

        with pytest.raises(UpstreamError) as exc_info:
            run(client.transport.request("/aircraft/G-XXXX"))

        assert exc_info.value.status_code == 404
        assert exc_info.value.body == "not here"

    def test_redirect_is_upstream_error(self, make_client, sleep):
        upstream = Upstream(
            httpx.Response(302, headers={"location": "https://example.com/"}, content=b"")
        )
        client = make_client(upstream)

        with pytest.raises(UpstreamError) as exc_info:
            run(client.transport.request("/zones"))

        assert exc_info.value.status_code == 302
        assert exc_info.value.body == ""
        assert upstream.calls == 1
        assert sleep.delays == []

    def test_connection_failure_is_network_error(self, make_client, sleep):
        calls = []

        def refuse(request):
            calls.append(request)
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(refuse)

        with pytest.raises(NetworkError) as exc_info:
            run(client.transport.request("/flights"))

        assert len(calls) == 1
        assert sleep.delays == []
        assert "Network error" in exc_info.value.message

    def test_timeout_is_network_error(self, make_client):
        def slow(request):
            raise httpx.ReadTimeout("timed out", request=request)

        client = make_client(slow)

        with pytest.raises(NetworkError):
            run(client.transport.request("/flights"))

    def test_other_exceptions_propagate(self, make_client):
        def broken(request):
            raise RuntimeError("boom")

        client = make_client(broken)

        with pytest.raises(RuntimeError, match="boom"):
            run(client.transport.request("/flights"))


class TestRequestShape:
    def test_bearer_token_and_base_url(self, make_client):
        upstream = Upstream(ok({}))
        client = make_client(upstream)

        run(client.transport.request("/airports", {"iata": "LHR"}))

        req = upstream.last
        assert req.method == "GET"
        assert req.headers["Authorization"] == "Bearer test-key"
        assert str(req.url) == "https://api.flightradar24.com/v1/airports?iata=LHR"

    def test_none_params_are_dropped(self, make_client):
        upstream = Upstream(ok({}))
        client = make_client(upstream)

        run(client.transport.request("/flights", {"flight_iata": "BA123", "registration": None}))

        assert dict(upstream.last.url.params) == {"flight_iata": "BA123"}


class TestConfig:
    def test_empty_api_key_rejected(self):
        with pytest.raises(ConfigurationError):
            ClientConfig(api_key="")

    def test_blank_api_key_rejected(self):
        with pytest.raises(ConfigurationError):
            ClientConfig(api_key="   ")

    def test_from_env_requires_key(self, monkeypatch):
        monkeypatch.delenv("FLIGHTRADAR24_API_KEY", raising=False)
        with pytest.raises(ConfigurationError):
            ClientConfig.from_env()

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("FLIGHTRADAR24_API_KEY", "secret")
        monkeypatch.setenv("FLIGHTRADAR24_MAX_RETRIES", "5")
        cfg = ClientConfig.from_env()
        assert cfg.api_key == "secret"
        assert cfg.max_retries == 5
        assert cfg.timeout == 10.0
        assert cfg.base_url == "https://api.flightradar24.com/v1"

    def test_config_is_frozen(self, config):
        with pytest.raises(Exception):
            config.api_key = "other"

    def test_backoff(self, config):
        assert [config.backoff(n) for n in range(3)] == [1.0, 2.0, 4.0]


class TestLogging:
    def test_bearer_token_never_logged(self, make_client, caplog):
        client = make_client(Upstream(httpx.Response(429), ok({})))

        with caplog.at_level(logging.INFO, logger="flightops"):
            run(client.transport.request("/zones", {"bounds": "1,0,0,1"}))

        assert "test-key" not in caplog.text
        events = [json.loads(r.getMessage()) for r in caplog.records if r.name == "flightops"]
        requests = [e for e in events if e["event"] == "fr24_api_request"]
        assert [e["attempt"] for e in requests] == [0, 1]
        assert requests[0]["headers"]["authorization"] == "<redacted>"
        assert any(e["event"] == "fr24_rate_limited" for e in events)

    def test_redact_headers(self):
        headers = httpx.Headers({"Authorization": "Bearer abc", "X-API-Key": "k", "Accept": "*/*"})

        assert redact_headers(headers) == {
            "authorization": "<redacted>",
            "x-api-key": "<redacted>",
            "accept": "*/*",
        }
