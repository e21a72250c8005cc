"""Agents Domain Constants - Configuration and constant values."""

# API Version
API_VERSION = "v1"
API_PREFIX = f"/api/{API_VERSION}/agents"

# Storage
AGENTS_TABLE = "agents"
AGENT_COLUMNS = "id,user_id,name,instructions,created_at,updated_at"

# Validation
MAX_AGENT_NAME_LENGTH = 100  # characters
MAX_INSTRUCTIONS_LENGTH = 5000  # characters

# HTTP Status Codes
HTTP_OK = 200
HTTP_CREATED = 201
HTTP_BAD_REQUEST = 400
HTTP_INTERNAL_ERROR = 500

# Error Messages
ERROR_AGENT_NOT_FOUND = "Agent not found"
ERROR_REQUEST_BODY_REQUIRED = "Request body is required"
ERROR_VALIDATION_FAILED = "Request validation failed"
ERROR_UNEXPECTED = "An unexpected error occurred"

# Success Messages
SUCCESS_AGENT_CREATED = "Agent created"
SUCCESS_AGENT_UPDATED = "Agent updated"
