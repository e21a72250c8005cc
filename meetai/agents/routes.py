"""Agents API Routes - owner-scoped agent directory endpoints."""

from flask import Blueprint, current_app, g, jsonify, request
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException
from werkzeug.local import LocalProxy

from meetai.auth.decorators import login_required
from meetai.auth.exceptions import AuthError
from meetai.shared.schemas import ErrorResponseSchema

from .constants import (
    ERROR_REQUEST_BODY_REQUIRED,
    ERROR_UNEXPECTED,
    ERROR_VALIDATION_FAILED,
    HTTP_BAD_REQUEST,
    HTTP_CREATED,
    HTTP_INTERNAL_ERROR,
    HTTP_OK,
    SUCCESS_AGENT_CREATED,
    SUCCESS_AGENT_UPDATED,
)
from .exceptions import AgentsError, InvalidRequestError
from .schemas import (
    AgentInsertSchema,
    AgentListResponseSchema,
    AgentResponseSchema,
    AgentUpdateSchema,
)
from .services import get_agent_service

# Flask Blueprint and logger
agents_bp = Blueprint("agents", __name__)
logger = LocalProxy(lambda: current_app.logger)


@agents_bp.errorhandler(AgentsError)
def handle_agents_error(error: AgentsError):
    """Handle domain-specific errors."""
    logger.error(f"Agents error: {error.message}")
    response = ErrorResponseSchema(**error.to_dict())
    return jsonify(response.model_dump(mode="json")), error.status_code


@agents_bp.errorhandler(ValidationError)
def handle_validation_error(error: ValidationError):
    """Handle Pydantic validation errors."""
    logger.error(f"Validation error: {error}")
    response = ErrorResponseSchema(
        error="VALIDATION_ERROR",
        message=ERROR_VALIDATION_FAILED,
        details={"errors": error.errors(include_url=False, include_context=False)},
    )
    return jsonify(response.model_dump(mode="json")), HTTP_BAD_REQUEST


@agents_bp.errorhandler(AuthError)
def handle_auth_error(error: AuthError):
    """Handle missing sessions and auth service outages."""
    logger.info(f"Auth error: {error.message}")
    response = ErrorResponseSchema(**error.to_dict())
    return jsonify(response.model_dump(mode="json")), error.status_code


@agents_bp.errorhandler(Exception)
def handle_generic_error(error: Exception):
    """Handle unexpected errors."""
    if isinstance(error, HTTPException):
        return error
    logger.error(f"Unexpected error: {error}", exc_info=True)
    response = ErrorResponseSchema(
        error="INTERNAL_ERROR", message=ERROR_UNEXPECTED, details={"error": str(error)}
    )
    return jsonify(response.model_dump(mode="json")), HTTP_INTERNAL_ERROR


def _json_body() -> dict:
    data = request.get_json(silent=True)
    if not data or not isinstance(data, dict):
        raise InvalidRequestError(ERROR_REQUEST_BODY_REQUIRED)
    return data


@agents_bp.route("", methods=["GET"])
@login_required
def get_many():
    """
    List every agent owned by the session user.

    Returns:
        JSON response with the agents and their count
    """
    agents = get_agent_service().get_many(g.session_user.id)
    response = AgentListResponseSchema(
        agents=[AgentResponseSchema.from_agent(agent) for agent in agents],
        count=len(agents),
    )
    return jsonify(response.model_dump(mode="json")), HTTP_OK


@agents_bp.route("/<agent_id>", methods=["GET"])
@login_required
def get_one(agent_id: str):
    """Fetch one owned agent (404 when missing or not owned)."""
    agent = get_agent_service().get_one(g.session_user.id, agent_id)
    return jsonify(AgentResponseSchema.from_agent(agent).model_dump(mode="json")), HTTP_OK


@agents_bp.route("", methods=["POST"])
@login_required
def create():
    """
    Create an agent for the session user.

    Request Body:
        {
            "name": "Cricket Coach",
            "instructions": "Coach the batting lineup between overs."
        }
    """
    payload = AgentInsertSchema(**_json_body())

    agent = get_agent_service().create(
        user_id=g.session_user.id,
        name=payload.name,
        instructions=payload.instructions,
    )

    logger.info(SUCCESS_AGENT_CREATED)
    return (
        jsonify(AgentResponseSchema.from_agent(agent).model_dump(mode="json")),
        HTTP_CREATED,
    )


@agents_bp.route("/<agent_id>", methods=["PATCH", "PUT"])
@login_required
def update(agent_id: str):
    """Update name and instructions of an owned agent."""
    payload = AgentUpdateSchema(**_json_body())

    agent = get_agent_service().update(
        user_id=g.session_user.id,
        agent_id=agent_id,
        name=payload.name,
        instructions=payload.instructions,
    )

    logger.info(SUCCESS_AGENT_UPDATED)
    return jsonify(AgentResponseSchema.from_agent(agent).model_dump(mode="json")), HTTP_OK
