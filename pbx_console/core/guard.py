"""
Authorization guard

Pure functions of (session, path) deciding whether a request may proceed.
Admins act on every company. Editors act only inside their own company and
are sent back to their own user list when they aim anywhere else. A missing
or invalid session is a guest and gets nothing protected.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional
from urllib.parse import quote

from pbx_console.schemas.session import AppSession

LOGIN_PATH = "/login"
DASHBOARD_PREFIX = "/dashboard"
COMPANIES_PATH = "/dashboard/companies"


class AccessOutcome(str, Enum):
    ALLOW = "allow"
    REDIRECT = "redirect"
    DENY = "deny"


@dataclass(frozen=True)
class AccessDecision:
    outcome: AccessOutcome
    location: Optional[str] = None

    @property
    def allowed(self) -> bool:
        return self.outcome == AccessOutcome.ALLOW


ALLOW = AccessDecision(AccessOutcome.ALLOW)


def company_users_path(company_id: str) -> str:
    return f"{COMPANIES_PATH}/{company_id}/users"


def home_path(session: AppSession) -> str:
    """Landing page for a role"""
    if session.is_admin:
        return COMPANIES_PATH
    return company_users_path(session.company_id)


def login_redirect(path: str) -> AccessDecision:
    return AccessDecision(AccessOutcome.REDIRECT, f"{LOGIN_PATH}?from={quote(path, safe='')}")


def company_id_from_path(path: str) -> Optional[str]:
    """Extract {companyId} from /dashboard/companies/{companyId}/..."""
    parts = path.split("/")
    if len(parts) > 3 and parts[1] == "dashboard" and parts[2] == "companies" and parts[3]:
        return parts[3]
    return None


def is_guest(session: Optional[AppSession]) -> bool:
    # An editor with no company has nowhere to act
    return session is None or (session.is_editor and not session.company_id)


def authorize_path(session: Optional[AppSession], path: str) -> AccessDecision:
    """Decide what happens to a page request"""
    if path == LOGIN_PATH:
        if not is_guest(session):
            return AccessDecision(AccessOutcome.REDIRECT, home_path(session))
        return ALLOW

    if not (path == DASHBOARD_PREFIX or path.startswith(DASHBOARD_PREFIX + "/")):
        return ALLOW

    if is_guest(session):
        return login_redirect(path)

    if session.is_admin:
        return ALLOW

    # Editors never enumerate companies
    if path.rstrip("/") == COMPANIES_PATH:
        return AccessDecision(AccessOutcome.REDIRECT, home_path(session))

    target_company_id = company_id_from_path(path)
    if target_company_id and target_company_id != session.company_id:
        return AccessDecision(AccessOutcome.REDIRECT, home_path(session))

    return ALLOW


def authorize_company(session: Optional[AppSession], company_id: str) -> AccessDecision:
    """Decide whether a session may act on a company (API requests)"""
    if is_guest(session):
        return AccessDecision(AccessOutcome.DENY)

    if session.is_admin or str(company_id) == session.company_id:
        return ALLOW

    return AccessDecision(AccessOutcome.DENY, home_path(session))
