"""
Login / logout API endpoints
"""

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.responses import RedirectResponse
from sqlmodel import Session
import structlog

from pbx_console.core.database import get_session
from pbx_console.core.dependencies import require_session
from pbx_console.core.guard import LOGIN_PATH
from pbx_console.core.session import clear_session_cookie, set_session_cookie
from pbx_console.schemas.session import AppSession, LoginRequest, LoginResponse
from pbx_console.services.auth_service import authenticate

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post("/login", response_model=LoginResponse, response_model_by_alias=True)
def login(
    login_data: LoginRequest,
    response: Response,
    session: Session = Depends(get_session),
):
    """Check credentials and set the session cookie"""
    app_session = authenticate(session, login_data.email, login_data.password)
    if app_session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password.",
        )

    set_session_cookie(response, app_session)
    return LoginResponse(role=app_session.role, company_id=app_session.company_id)


def _logout_response() -> RedirectResponse:
    # 303: browser follows with GET
    response = RedirectResponse(LOGIN_PATH, status_code=status.HTTP_303_SEE_OTHER)
    clear_session_cookie(response)
    return response


@router.post("/logout")
def logout():
    """Clear the session cookie"""
    return _logout_response()


@router.get("/logout")
def logout_link():
    """Clear the session cookie (direct link)"""
    return _logout_response()


@router.get("/me")
def current_session(app_session: AppSession = Depends(require_session)):
    """Current session payload"""
    return app_session.model_dump(by_alias=True, mode="json")
