"""Cache and whiteboard HTTP client tests (httpx.MockTransport)"""

import base64
import json
from urllib.parse import parse_qs

import httpx
import pytest

from core import cache, whiteboard


def mock_client(monkeypatch, module, handler, seen):
    def recording(request):
        seen.append(request)
        return handler(request)

    def _client(**kwargs):
        return httpx.AsyncClient(transport=httpx.MockTransport(recording), **kwargs)

    monkeypatch.setattr(module, "_client", _client)


class TestCache:
    async def test_set_sends_command_array(self, monkeypatch):
        seen = []
        mock_client(monkeypatch, cache, lambda r: httpx.Response(200, json={"result": "OK"}), seen)

        assert await cache.set("k", "", ttl_s=60, only_if_absent=True) is True

        request = seen[0]
        assert request.url.host == "cache.test"
        assert request.headers["Authorization"] == "Bearer cache-token"
        assert json.loads(request.content) == ["SET", "k", "", "EX", 60, "NX"]

    async def test_set_nx_refused(self, monkeypatch):
        mock_client(monkeypatch, cache, lambda r: httpx.Response(200, json={"result": None}), [])
        assert await cache.set("k", "v", only_if_absent=True) is False

    async def test_get_and_exists(self, monkeypatch):
        replies = {"GET": "value", "EXISTS": 1}

        def handler(request):
            return httpx.Response(200, json={"result": replies[json.loads(request.content)[0]]})

        mock_client(monkeypatch, cache, handler, [])
        assert await cache.get("k") == "value"
        assert await cache.exists("k") is True

    async def test_get_missing(self, monkeypatch):
        mock_client(monkeypatch, cache, lambda r: httpx.Response(200, json={"result": None}), [])
        assert await cache.get("k") is None

    async def test_error_reply_raises(self, monkeypatch):
        mock_client(monkeypatch, cache, lambda r: httpx.Response(200, json={"error": "WRONGTYPE"}), [])
        with pytest.raises(cache.CacheError):
            await cache.get("k")

    async def test_http_failure_raises(self, monkeypatch):
        mock_client(monkeypatch, cache, lambda r: httpx.Response(401, text="unauthorized"), [])
        with pytest.raises(cache.CacheError):
            await cache.exists("k")


class TestWhiteboardClient:
    async def test_query_conversion_task(self, monkeypatch):
        seen = []
        body = {"uuid": "t-1", "type": "static", "status": "Converting", "progress": {}}
        mock_client(monkeypatch, whiteboard, lambda r: httpx.Response(200, json=body), seen)

        result = await whiteboard.query_conversion_task("sg", "t-1", "static")

        assert result["status"] == "Converting"
        request = seen[0]
        assert request.method == "GET"
        assert request.url.path == "/v5/services/conversion/tasks/t-1"
        assert request.url.params["type"] == "static"
        assert request.headers["region"] == "sg"
        assert request.headers["token"] == "NETLESSSDK_test"

    async def test_query_error(self, monkeypatch):
        mock_client(monkeypatch, whiteboard, lambda r: httpx.Response(500, text="oops"), [])
        with pytest.raises(whiteboard.WhiteboardError):
            await whiteboard.query_conversion_task("sg", "t-1", "static")

    async def test_create_dynamic_task(self, monkeypatch):
        seen = []
        mock_client(monkeypatch, whiteboard, lambda r: httpx.Response(201, json={"uuid": "t-2"}), seen)

        result = await whiteboard.create_conversion_task("cn-hz", "https://oss.test/a.pptx", "dynamic")

        assert result["uuid"] == "t-2"
        assert json.loads(seen[0].content) == {
            "resource": "https://oss.test/a.pptx",
            "type": "dynamic",
            "preview": True,
        }

    async def test_head_object(self, monkeypatch):
        seen = []
        mock_client(monkeypatch, whiteboard, lambda r: httpx.Response(404), seen)
        resp = await whiteboard.head_object("https://oss.test/dir/result")
        assert resp.status_code == 404
        assert seen[0].method == "HEAD"


class TestSdkToken:
    def test_generated_token_is_signed(self):
        token = whiteboard.create_sdk_token("ak-1", "sk-1", lifespan_ms=1000)

        assert token.startswith("NETLESSSDK_")
        encoded = token[len("NETLESSSDK_"):]
        decoded = base64.urlsafe_b64decode(encoded + "=" * (-len(encoded) % 4)).decode("utf-8")
        fields = parse_qs(decoded)
        assert fields["ak"] == ["ak-1"]
        assert fields["role"] == ["0"]
        assert len(fields["sig"][0]) == 64
        assert "expireAt" in fields

    def test_static_token_wins(self):
        assert whiteboard.sdk_token() == "NETLESSSDK_test"

    def test_missing_keys(self, monkeypatch):
        monkeypatch.delenv("WHITEBOARD_SDK_TOKEN")
        monkeypatch.delenv("WHITEBOARD_ACCESS_KEY", raising=False)
        with pytest.raises(whiteboard.WhiteboardError):
            whiteboard.sdk_token()
