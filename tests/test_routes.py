"""HTTP tests for the relay endpoints."""

import asyncio
import json

import httpx
from starlette.testclient import TestClient

from webflow_mcp.bridge import CommandBridge
from webflow_mcp.protocol import invoke_tool


class TestBridgeEndpoints:
    async def test_poll_returns_heartbeat_when_idle(self, client: httpx.AsyncClient):
        response = await client.get("/mcp/bridge/events")

        assert response.status_code == 200
        body = response.json()
        assert body["type"] == "heartbeat"
        assert body["timestamp"].endswith("Z")

    async def test_poll_counts_as_ping(self, client: httpx.AsyncClient, bridge: CommandBridge):
        assert not bridge.is_consumer_connected()
        await client.get("/mcp/bridge/events")
        assert bridge.is_consumer_connected()

    async def test_full_round_trip(self, client: httpx.AsyncClient, bridge: CommandBridge):
        await client.get("/mcp/bridge/events")
        task = asyncio.create_task(invoke_tool(bridge, "get_site_info", {}))
        await asyncio.sleep(0)

        command = (await client.get("/mcp/bridge/events")).json()
        assert command == {"id": command["id"], "name": "get_site_info", "params": {}}

        response = await client.post(
            "/mcp/command-result",
            json={"id": command["id"], "payload": {"siteName": "x"}},
        )
        assert response.status_code == 200
        assert response.json() == {"success": True}

        [content] = await task
        assert json.loads(content.text) == {"siteName": "x"}
        assert bridge.store.get().pending == {}

    async def test_result_for_unknown_id_still_succeeds(self, client: httpx.AsyncClient):
        for _ in range(2):
            response = await client.post(
                "/mcp/command-result", json={"id": "gone", "payload": {"error": "late"}}
            )
            assert response.status_code == 200
            assert response.json() == {"success": True}

    async def test_malformed_result_body(self, client: httpx.AsyncClient):
        response = await client.post(
            "/mcp/command-result",
            content=b"not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert "error" in response.json()

    async def test_result_without_id(self, client: httpx.AsyncClient):
        response = await client.post("/mcp/command-result", json={"payload": {}})
        assert response.status_code == 400


class TestStatusEndpoints:
    async def test_status(self, client: httpx.AsyncClient):
        body = (await client.get("/status")).json()
        assert body["agent"] == "webflow-mcp-agent"
        assert body["consumerConnected"] is False
        assert body["lastConsumerPing"] == "Never"
        assert body["commandsExecuted"] == 0
        assert body["queueLength"] == 0

    async def test_health(self, client: httpx.AsyncClient):
        body = (await client.get("/health")).json()
        assert body["status"] == "ok"
        assert body["service"] == "webflow-designer-mcp"

    async def test_info_page(self, client: httpx.AsyncClient):
        response = await client.get("/")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert "Tools Available: 29 Webflow Designer tools" in response.text
        assert "http://test/mcp/bridge/events" in response.text

    async def test_cors_preflight(self, client: httpx.AsyncClient):
        response = await client.options(
            "/mcp/command-result",
            headers={
                "Origin": "https://webflow.com",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"

    async def test_cors_header_on_simple_request(self, client: httpx.AsyncClient):
        response = await client.get("/mcp/bridge/events", headers={"Origin": "https://webflow.com"})
        assert response.headers["access-control-allow-origin"] == "*"


class TestSseMessages:
    async def test_sse_get_without_event_stream_accept(self, client: httpx.AsyncClient):
        response = await client.get("/sse")
        assert response.status_code == 400

    async def test_unknown_session(self, client: httpx.AsyncClient):
        response = await client.post(
            "/sse/message?sessionId=missing",
            json={"jsonrpc": "2.0", "id": 1, "method": "tools/list"},
        )
        assert response.json()["error"] == {
            "code": -32603,
            "message": "No SSE connection found for this session",
        }

    async def test_parse_error(self, client: httpx.AsyncClient):
        response = await client.post(
            "/sse/message?sessionId=s1",
            content=b"{oops",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == -32700

    async def test_reply_is_pushed_onto_the_stream(self, app, client: httpx.AsyncClient):
        session = app.state.sse_sessions.open("s1")

        response = await client.post(
            "/sse/message?sessionId=s1",
            json={"jsonrpc": "2.0", "id": 1, "method": "initialize", "params": {}},
        )

        assert response.status_code == 202
        event = session.queue.get_nowait()
        reply = json.loads(event.split("data: ", 1)[1])
        assert reply["id"] == 1
        assert reply["result"]["serverInfo"]["name"] == "webflow-designer-mcp"

    async def test_notification_pushes_nothing(self, app, client: httpx.AsyncClient):
        session = app.state.sse_sessions.open("s1")

        response = await client.post(
            "/sse/message?sessionId=s1",
            json={"jsonrpc": "2.0", "method": "notifications/initialized"},
        )

        assert response.status_code == 202
        assert session.queue.empty()

    async def test_tool_call_replies_after_designer_result(
        self, app, client: httpx.AsyncClient, bridge: CommandBridge
    ):
        session = app.state.sse_sessions.open("s1")
        await client.get("/mcp/bridge/events")

        response = await client.post(
            "/sse/message?sessionId=s1",
            json={
                "jsonrpc": "2.0",
                "id": 9,
                "method": "tools/call",
                "params": {"name": "get_text_content", "arguments": {"elementId": "e1"}},
            },
        )
        assert response.status_code == 202
        await asyncio.sleep(0)

        command = (await client.get("/mcp/bridge/events")).json()
        assert command["params"] == {"elementId": "e1"}
        await client.post("/mcp/command-result", json={"id": command["id"], "payload": "Hello"})

        event = await asyncio.wait_for(session.queue.get(), timeout=1)
        reply = json.loads(event.split("data: ", 1)[1])
        assert reply["id"] == 9
        assert reply["result"]["content"] == [{"type": "text", "text": "Hello"}]

    async def test_tool_call_with_non_object_arguments_gets_an_error_reply(
        self, app, client: httpx.AsyncClient, bridge: CommandBridge
    ):
        session = app.state.sse_sessions.open("s1")
        await client.get("/mcp/bridge/events")

        response = await client.post(
            "/sse/message?sessionId=s1",
            json={
                "jsonrpc": "2.0",
                "id": 10,
                "method": "tools/call",
                "params": {"name": "get_site_info", "arguments": ["x"]},
            },
        )
        assert response.status_code == 202

        event = await asyncio.wait_for(session.queue.get(), timeout=1)
        reply = json.loads(event.split("data: ", 1)[1])
        assert reply["id"] == 10
        assert reply["error"]["code"] == -32602

        poll = await client.get("/mcp/bridge/events")
        assert poll.status_code == 200
        assert poll.json()["type"] == "heartbeat"
        assert bridge.store.get().pending == {}


class TestMcpWebSocket:
    def test_tool_call_without_designer_is_in_band(self, app):
        with TestClient(app) as client:
            with client.websocket_connect("/mcp", subprotocols=["mcp"]) as ws:
                ws.send_json({
                    "jsonrpc": "2.0",
                    "id": 1,
                    "method": "initialize",
                    "params": {
                        "protocolVersion": "2024-11-05",
                        "capabilities": {},
                        "clientInfo": {"name": "pytest", "version": "0"},
                    },
                })
                initialized = ws.receive_json()
                assert initialized["id"] == 1
                assert initialized["result"]["serverInfo"]["name"] == "webflow-designer-mcp"

                ws.send_json({"jsonrpc": "2.0", "method": "notifications/initialized"})
                ws.send_json({
                    "jsonrpc": "2.0",
                    "id": 2,
                    "method": "tools/call",
                    "params": {"name": "get_site_info", "arguments": {}},
                })
                reply = ws.receive_json()

        assert reply["id"] == 2
        [content] = reply["result"]["content"]
        body = json.loads(content["text"])
        assert body["errorType"] == "consumer_unavailable"
        assert body["toolName"] == "get_site_info"
