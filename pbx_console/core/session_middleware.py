"""
Session middleware: resolves the session once per request and guards pages
"""

from fastapi import Request
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware
from typing import Callable
import structlog

from pbx_console.core.config import get_settings
from pbx_console.core.guard import AccessOutcome, authorize_path
from pbx_console.core.session import parse_session_cookie

logger = structlog.get_logger(__name__)
settings = get_settings()


class SessionGuardMiddleware(BaseHTTPMiddleware):
    """Middleware to parse the session cookie and apply the page guard"""

    async def dispatch(self, request: Request, call_next: Callable):
        app_session = parse_session_cookie(request.cookies.get(settings.SESSION_COOKIE_NAME))

        # Read back by get_app_session
        request.state.app_session = app_session

        decision = authorize_path(app_session, request.url.path)
        if decision.outcome == AccessOutcome.REDIRECT:
            logger.debug(
                "Guard redirect",
                path=request.url.path,
                location=decision.location,
                role=app_session.role.value if app_session else "guest",
            )
            return RedirectResponse(decision.location, status_code=307)

        response = await call_next(request)
        return response
