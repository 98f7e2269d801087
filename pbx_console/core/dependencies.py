"""
Authentication dependencies for FastAPI
"""

from fastapi import Depends, HTTPException, Request, status
from typing import Optional
import uuid
import structlog

from pbx_console.core.config import get_settings
from pbx_console.core.guard import authorize_company, is_guest
from pbx_console.core.session import parse_session_cookie
from pbx_console.schemas.session import AppSession

logger = structlog.get_logger(__name__)
settings = get_settings()


def get_app_session(request: Request) -> Optional[AppSession]:
    """Session resolved by SessionGuardMiddleware, None for guests"""
    if not hasattr(request.state, "app_session"):
        request.state.app_session = parse_session_cookie(
            request.cookies.get(settings.SESSION_COOKIE_NAME)
        )
    return request.state.app_session


async def require_session(
    app_session: Optional[AppSession] = Depends(get_app_session),
) -> AppSession:
    """Reject guests"""
    if is_guest(app_session):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return app_session


async def require_company_scope(
    company_id: uuid.UUID,
    app_session: AppSession = Depends(require_session),
) -> AppSession:
    """Reject editors acting on a company that is not theirs"""
    decision = authorize_company(app_session, str(company_id))
    if not decision.allowed:
        logger.info(
            "Cross-company request denied",
            account_id=app_session.account_id,
            company_id=str(company_id),
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access to this company is not allowed",
            headers={"Location": decision.location} if decision.location else None,
        )
    return app_session
