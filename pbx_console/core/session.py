"""
Session cookie issuing and parsing

The cookie value is the session serialized as JSON, then percent-encoded.
It is neither signed nor encrypted; expiry is the cookie max-age only.
"""

import json
from typing import Optional
from urllib.parse import quote, unquote

from fastapi import Response
from pydantic import ValidationError as PydanticValidationError

from pbx_console.core.config import get_settings
from pbx_console.models.account import Account
from pbx_console.schemas.session import AppSession

settings = get_settings()


def issue_session(account: Account) -> AppSession:
    """Build the session for an authenticated account, role taken verbatim"""
    return AppSession(
        account_id=str(account.id),
        user_id=str(account.user_id) if account.user_id else None,
        company_id=str(account.company_id) if account.company_id else None,
        role=account.role,
    )


def parse_session(raw: Optional[str]) -> Optional[AppSession]:
    """Deserialize a JSON session payload, None when malformed or role invalid"""
    if not raw:
        return None

    try:
        payload = json.loads(raw)
    except ValueError:
        return None

    if not isinstance(payload, dict) or not payload.get("role"):
        return None

    try:
        return AppSession.model_validate(payload)
    except PydanticValidationError:
        return None


def encode_session_cookie(session: AppSession) -> str:
    """Serialize session for the cookie value"""
    payload = session.model_dump(by_alias=True, mode="json")
    return quote(json.dumps(payload), safe="")


def parse_session_cookie(value: Optional[str]) -> Optional[AppSession]:
    """Decode a raw cookie value and parse it"""
    if not value:
        return None
    return parse_session(unquote(value))


def set_session_cookie(response: Response, session: AppSession) -> None:
    """Attach session cookie to response"""
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=encode_session_cookie(session),
        max_age=settings.SESSION_MAX_AGE_SECONDS,
        path="/",
        secure=settings.session_cookie_secure,
        httponly=True,
        samesite="lax",
    )


def clear_session_cookie(response: Response) -> None:
    """Expire session cookie (logout)"""
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value="",
        max_age=0,
        path="/",
        secure=settings.session_cookie_secure,
        httponly=True,
        samesite="lax",
    )
