"""Route guards backed by the auth service session lookup."""

import logging
from functools import wraps

from flask import g, request

from meetai.shared.utils.service_loader import get_auth_session_service

from .exceptions import UnauthorizedError

logger = logging.getLogger(__name__)


def resolve_session_user(req):
    """Return the SessionUser for a request, or None."""
    return get_auth_session_service().get_session(req.headers.get("Cookie"))


def login_required(f):
    """Require a signed-in user; exposes it as g.session_user."""

    @wraps(f)
    def decorated(*args, **kwargs):
        user = resolve_session_user(request)
        if user is None:
            logger.debug(f"Rejected anonymous request to {request.path}")
            raise UnauthorizedError()
        g.session_user = user
        return f(*args, **kwargs)

    return decorated
