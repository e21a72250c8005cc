"""
Live API Routes - meeting-link lookup and the live-call WebSocket.

Endpoints:
- GET /api/live/meeting-link?agent=<name>
- WS  /api/live/call?agent=<agent_id>
"""
import asyncio
import json
import logging
from datetime import datetime

from flask import Blueprint, current_app, g, jsonify, request
from pydantic import ValidationError
from simple_websocket import ConnectionClosed, Server

from meetai.agents.exceptions import AgentsError
from meetai.agents.services import get_agent_service
from meetai.auth.decorators import login_required
from meetai.shared.schemas import ErrorResponseSchema

from .constants import (
    MESSAGE_TYPE_PING,
    MESSAGE_TYPE_PONG,
    SOCKET_RECEIVE_TIMEOUT,
    ClientAction,
)
from .exceptions import InvalidClientMessageError, LiveCallException, OriginNotAllowedError
from .meeting_link import MeetingLinkClient, resolve_meeting_link
from .models import CallSession
from .schemas import ClientMessage, ErrorMessage, MeetingLinkResponse, StateMessage
from .services import LiveCallController

logger = logging.getLogger(__name__)

# Create blueprint
live_bp = Blueprint("live", __name__)


# ==============================================================================
# HTTP: MEETING LINK
# ==============================================================================


@live_bp.route("/meeting-link", methods=["GET"])
def get_meeting_link():
    """
    Resolve the Stream meeting URL for an agent name.

    Query Parameters:
        agent: Agent display name (optional)

    Returns:
        {"meetingLink": "https://stream.meet.ai/<slug>"}
    """
    response = MeetingLinkResponse(meeting_link=resolve_meeting_link(request.args.get("agent")))
    return jsonify(response.model_dump(by_alias=True)), 200


# ==============================================================================
# WEBSOCKET: LIVE CALL
# ==============================================================================


@live_bp.route("/call", websocket=True)
@login_required
def live_call():
    """
    WebSocket endpoint driving one simulated call session.

    The origin is checked and the session user's agents are loaded before the
    upgrade, so a foreign origin, a missing session or a store failure is
    answered with a plain HTTP error.

    Message Format (Client -> Server):
    {"action": "select_agent", "agent_id": "..."}
    {"action": "start"} | {"action": "end"} | {"action": "insight"}
    {"action": "close"} | {"type": "ping"}

    Message Format (Server -> Client):
    {"type": "state", "data": {...}, "timestamp": "..."}
    or
    {"type": "error", "error": "...", "message": "...", "timestamp": "..."}
    """
    _check_origin()
    agents = get_agent_service().get_many(g.session_user.id)
    initial_agent_id = request.args.get("agent")
    link_base_url = current_app.config.get("MEETING_LINK_API_BASE_URL") or request.host_url
    connect_delay = current_app.config["LIVE_CONNECT_DELAY_SECONDS"]

    ws = Server.accept(request.environ)
    logger.info(f"Live call socket connected for user {g.session_user.id} ({len(agents)} agents)")

    try:
        asyncio.run(
            _run_call_session(ws, agents, initial_agent_id, link_base_url, connect_delay)
        )
    except ConnectionClosed:
        logger.info("Live call socket closed by client")
    except Exception as e:
        logger.error(f"Live call socket error: {str(e)}", exc_info=True)
    finally:
        if ws.connected:
            ws.close()

    return ""


async def _run_call_session(ws, agents, initial_agent_id, link_base_url, connect_delay):
    """Own one controller for the lifetime of the socket."""
    link_client = MeetingLinkClient(link_base_url)
    controller = LiveCallController(
        agents,
        initial_agent_id=initial_agent_id,
        link_lookup=link_client.fetch,
        connect_delay=connect_delay,
        on_change=lambda session: _ws_send_state(ws, session),
    )

    try:
        controller.mount()
        _ws_send_state(ws, controller.session)

        while True:
            data = await asyncio.to_thread(ws.receive, SOCKET_RECEIVE_TIMEOUT)
            if data is None:
                continue
            if not _handle_client_message(ws, controller, data):
                logger.info("Client requested close")
                break
    finally:
        await controller.teardown()
        await link_client.aclose()


def _parse_client_message(data):
    """
    Decode one socket frame.

    Returns:
        ClientMessage, or None for a ping

    Raises:
        InvalidClientMessageError: If the frame is not a usable message
    """
    try:
        message = json.loads(data)
    except (TypeError, ValueError):
        raise InvalidClientMessageError("Invalid JSON")

    if not isinstance(message, dict):
        raise InvalidClientMessageError("Expected a JSON object")

    if message.get("type") == MESSAGE_TYPE_PING:
        return None

    try:
        parsed = ClientMessage(**message)
    except ValidationError:
        raise InvalidClientMessageError(f"Unknown action: {message.get('action')!r}")

    if parsed.action == ClientAction.SELECT_AGENT and not parsed.agent_id:
        raise InvalidClientMessageError("agent_id is required")
    return parsed


def _handle_client_message(ws, controller: LiveCallController, data) -> bool:
    """
    Apply one client message to the controller.

    Returns:
        False when the client asked to close the socket
    """
    try:
        message = _parse_client_message(data)
    except InvalidClientMessageError as e:
        _ws_send_error(ws, e.message, "INVALID_MESSAGE")
        return True

    if message is None:
        _ws_send_pong(ws)
        return True

    if message.action == ClientAction.CLOSE:
        return False

    if message.action == ClientAction.SELECT_AGENT:
        controller.select_agent(message.agent_id)
    elif message.action == ClientAction.START:
        controller.start()
    elif message.action == ClientAction.END:
        controller.end()
    elif message.action == ClientAction.INSIGHT:
        controller.request_insight()

    return True


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================


def _check_origin():
    """
    Reject browser upgrades from origins outside CORS_ORIGINS.

    Requests without an Origin header and same-host requests pass. A "*" entry
    does not count, because the socket authenticates with the session cookie.
    """
    origin = request.headers.get("Origin")
    if not origin:
        return

    origin = origin.rstrip("/")
    if origin == request.host_url.rstrip("/") or origin in current_app.config["CORS_ORIGINS"]:
        return

    logger.warning(f"Rejected live call upgrade from origin {origin}")
    raise OriginNotAllowedError(origin)


def _ws_send_state(ws: Server, session: CallSession):
    """Push a session snapshot via WebSocket."""
    message = StateMessage(data=session.to_dict())
    ws.send(message.model_dump_json())
    logger.debug(f"Sent call state: {session.status.value}")


def _ws_send_error(ws: Server, message: str, error_code: str):
    """Send standardized error message via WebSocket."""
    ws.send(ErrorMessage(error=error_code, message=message).model_dump_json())
    logger.debug(f"Sent WebSocket error: {message}")


def _ws_send_pong(ws: Server):
    """Answer a client ping."""
    ws.send(json.dumps({"type": MESSAGE_TYPE_PONG, "timestamp": datetime.utcnow().isoformat()}))


# ==============================================================================
# ERROR HANDLERS
# ==============================================================================


@live_bp.errorhandler(AgentsError)
def handle_agents_error(error: AgentsError):
    """Agent loading failed before the socket upgrade."""
    logger.error(f"Could not load agents for live call: {error.message}")
    response = ErrorResponseSchema(**error.to_dict())
    return jsonify(response.model_dump(mode="json")), error.status_code


@live_bp.errorhandler(LiveCallException)
def handle_live_call_exception(error: LiveCallException):
    """Handle live domain exceptions."""
    response = ErrorResponseSchema(error=error.__class__.__name__, message=error.message)
    return jsonify(response.model_dump(mode="json")), error.status_code
