"""
Tests for Live routes.
Tests the meeting-link endpoint and the live-call socket protocol.
"""

import json
from unittest.mock import Mock, patch

import pytest

from meetai.agents.exceptions import AgentStoreError
from meetai.live.exceptions import InvalidClientMessageError
from meetai.live.routes import _handle_client_message, _parse_client_message
from meetai.live.schemas import ClientMessage
from tests.utils.assertions import assert_error_response

WEBSOCKET_HEADERS = {"Connection": "Upgrade", "Upgrade": "websocket"}


class FakeSocket:
    """Stands in for simple_websocket.Server with a scripted inbox"""

    def __init__(self, inbox):
        self.inbox = list(inbox)
        self.sent = []
        self.connected = True

    def receive(self, timeout=None):
        return self.inbox.pop(0) if self.inbox else json.dumps({"action": "close"})

    def send(self, data):
        self.sent.append(json.loads(data))

    def close(self):
        self.connected = False


class FakeLinkClient:
    """MeetingLinkClient double that answers instantly"""

    instances = []

    def __init__(self, base_url):
        self.base_url = base_url
        self.closed = False
        FakeLinkClient.instances.append(self)

    async def fetch(self, agent_name):
        return "https://stream.meet.ai/rooms/resolved"

    async def aclose(self):
        self.closed = True


@pytest.mark.unit
class TestMeetingLinkRoute:
    """Test GET /api/live/meeting-link"""

    def test_resolves_slug(self, client):
        """Test the documented example"""
        response = client.get("/api/live/meeting-link?agent=My%20Bot%21")

        assert response.status_code == 200
        assert json.loads(response.data) == {"meetingLink": "https://stream.meet.ai/my-bot"}

    @pytest.mark.parametrize("query", ["", "?agent=", "?agent=%21%21%21"])
    def test_missing_or_empty_agent(self, client, query):
        """Test names without alphanumerics resolve to the generic room"""
        response = client.get(f"/api/live/meeting-link{query}")

        assert response.status_code == 200
        assert json.loads(response.data) == {"meetingLink": "https://stream.meet.ai/agent"}

    def test_no_session_needed(self, client, anonymous_auth_session):
        """Test the endpoint is public"""
        response = client.get("/api/live/meeting-link?agent=Cricket%20Coach")

        assert response.status_code == 200
        anonymous_auth_session.get_session.assert_not_called()


@pytest.mark.unit
class TestParseClientMessage:
    """Test socket frame decoding"""

    def test_ping(self):
        assert _parse_client_message(json.dumps({"type": "ping"})) is None

    def test_select_agent(self):
        message = _parse_client_message(json.dumps({"action": "select_agent", "agent_id": "agent_2"}))

        assert isinstance(message, ClientMessage)
        assert message.agent_id == "agent_2"

    @pytest.mark.parametrize(
        "data",
        [
            "not json",
            json.dumps(["start"]),
            json.dumps({"action": "dance"}),
            json.dumps({}),
            json.dumps({"action": "select_agent"}),
            json.dumps({"action": "select_agent", "agent_id": "  "}),
        ],
    )
    def test_invalid(self, data):
        """Test unusable frames raise InvalidClientMessageError"""
        with pytest.raises(InvalidClientMessageError):
            _parse_client_message(data)


@pytest.mark.unit
class TestHandleClientMessage:
    """Test dispatch from socket frames to the controller"""

    @pytest.mark.parametrize(
        "action, method",
        [("start", "start"), ("end", "end"), ("insight", "request_insight")],
    )
    def test_actions(self, action, method):
        """Test each action reaches the controller"""
        ws = FakeSocket([])
        controller = Mock()

        assert _handle_client_message(ws, controller, json.dumps({"action": action})) is True
        getattr(controller, method).assert_called_once_with()

    def test_select_agent(self):
        ws = FakeSocket([])
        controller = Mock()

        _handle_client_message(ws, controller, json.dumps({"action": "select_agent", "agent_id": "agent_2"}))

        controller.select_agent.assert_called_once_with("agent_2")

    def test_close(self):
        """Test close stops the loop"""
        assert _handle_client_message(FakeSocket([]), Mock(), json.dumps({"action": "close"})) is False

    def test_ping(self):
        ws = FakeSocket([])

        assert _handle_client_message(ws, Mock(), json.dumps({"type": "ping"})) is True
        assert ws.sent[0]["type"] == "pong"

    def test_invalid_frame_reports_error(self):
        """Test bad frames are answered with an error and the loop continues"""
        ws = FakeSocket([])
        controller = Mock()

        assert _handle_client_message(ws, controller, "{") is True
        assert ws.sent[0]["type"] == "error"
        assert ws.sent[0]["error"] == "INVALID_MESSAGE"
        assert controller.method_calls == []


@pytest.mark.unit
class TestLiveCallSocket:
    """Test the /api/live/call upgrade path"""

    def test_anonymous_rejected_before_upgrade(self, client, anonymous_auth_session):
        """Test no session means a plain 401"""
        with patch("meetai.live.routes.Server") as mock_server:
            response = client.get("/api/live/call", headers=WEBSOCKET_HEADERS)

        assert response.status_code == 401
        assert_error_response(json.loads(response.data), "UNAUTHORIZED")
        mock_server.accept.assert_not_called()

    def test_store_error_before_upgrade(self, client, mock_auth_session):
        """Test agent loading failures are plain HTTP errors"""
        with patch("meetai.live.routes.get_agent_service") as mock_getter, \
             patch("meetai.live.routes.Server") as mock_server:
            mock_getter.return_value.get_many.side_effect = AgentStoreError("Failed to list agents")
            response = client.get("/api/live/call", headers=WEBSOCKET_HEADERS)

        assert response.status_code == 502
        assert_error_response(json.loads(response.data), "AGENT_STORE_ERROR")
        mock_server.accept.assert_not_called()

    def test_session_loop(self, app, client, mock_auth_session, sample_agents):
        """Test a scripted client drives the controller and the socket is closed"""
        app.config["LIVE_CONNECT_DELAY_SECONDS"] = 0.0
        ws = FakeSocket(
            [
                json.dumps({"type": "ping"}),
                None,
                json.dumps({"action": "select_agent", "agent_id": "agent_2"}),
                json.dumps({"action": "start"}),
                "garbage",
                json.dumps({"action": "close"}),
            ]
        )
        FakeLinkClient.instances.clear()

        with patch("meetai.live.routes.get_agent_service") as mock_getter, \
             patch("meetai.live.routes.Server") as mock_server, \
             patch("meetai.live.routes.MeetingLinkClient", FakeLinkClient):
            mock_getter.return_value.get_many.return_value = sample_agents
            mock_server.accept.return_value = ws
            client.get("/api/live/call?agent=agent_1", headers=WEBSOCKET_HEADERS)

        mock_getter.return_value.get_many.assert_called_once_with("user_test_123")
        assert ws.connected is False

        types = [message["type"] for message in ws.sent]
        assert types[0] == "state"
        assert "pong" in types
        assert "error" in types

        states = [message["data"] for message in ws.sent if message["type"] == "state"]
        assert states[0]["active_agent"]["id"] == "agent_1"
        assert states[0]["is_fetching_meeting_link"] is True
        assert any(state["status"] == "connecting" for state in states)
        assert any(state["active_agent"]["id"] == "agent_2" for state in states)

        link_client = FakeLinkClient.instances[0]
        assert link_client.base_url == "http://meet.test"
        assert link_client.closed is True

    def test_foreign_origin_rejected_before_upgrade(self, client, mock_auth_session):
        """Test a cross-site page cannot open the call socket"""
        headers = dict(WEBSOCKET_HEADERS, Origin="https://evil.example")
        with patch("meetai.live.routes.get_agent_service") as mock_getter, \
             patch("meetai.live.routes.Server") as mock_server:
            response = client.get("/api/live/call", headers=headers)

        assert response.status_code == 403
        assert json.loads(response.data)["error"] == "OriginNotAllowedError"
        mock_getter.return_value.get_many.assert_not_called()
        mock_server.accept.assert_not_called()

    @pytest.mark.parametrize("origin", ["http://localhost:3000", "http://localhost"])
    def test_allowed_origin_upgrades(self, app, client, mock_auth_session, sample_agents, origin):
        """Test listed and same-host origins reach the socket"""
        app.config["LIVE_CONNECT_DELAY_SECONDS"] = 0.0
        ws = FakeSocket([json.dumps({"action": "close"})])
        headers = dict(WEBSOCKET_HEADERS, Origin=origin)

        with patch("meetai.live.routes.get_agent_service") as mock_getter, \
             patch("meetai.live.routes.Server") as mock_server, \
             patch("meetai.live.routes.MeetingLinkClient", FakeLinkClient):
            mock_getter.return_value.get_many.return_value = sample_agents
            mock_server.accept.return_value = ws
            client.get("/api/live/call", headers=headers)

        mock_server.accept.assert_called_once()
        assert ws.sent[0]["type"] == "state"
