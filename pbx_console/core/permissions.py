"""
RBAC (Role-Based Access Control) permission system
"""

from enum import Enum
from typing import Optional, Set
from fastapi import Depends, HTTPException, status

from pbx_console.core.dependencies import require_company_scope, require_session
from pbx_console.schemas.session import AppSession


class Permission(str, Enum):
    """Permission definitions"""
    # Company permissions
    COMPANY_LIST = "company:list"
    COMPANY_MANAGE = "company:manage"

    # User permissions
    USER_VIEW = "user:view"
    USER_CREATE = "user:create"
    USER_EDIT = "user:edit"
    USER_SOFT_DELETE = "user:soft_delete"
    USER_RESTORE = "user:restore"
    USER_APPROVE = "user:approve"
    USER_REJECT = "user:reject"
    USER_HARD_DELETE = "user:hard_delete"
    USER_IMPORT = "user:import"

    # Editor account permissions
    EDITOR_MANAGE = "editor:manage"


# Role permission mapping
ROLE_PERMISSIONS = {
    # Admins have all permissions
    "admin": set(Permission),
    "editor": {
        # Editors work inside their own company; adds and edits go to review
        Permission.USER_VIEW,
        Permission.USER_CREATE,
        Permission.USER_EDIT,
        Permission.USER_SOFT_DELETE,
        Permission.USER_RESTORE,
    },
}


def get_permissions_for_role(role: Optional[str]) -> Set[Permission]:
    """Get permissions for a given role, empty for guests"""
    if not role:
        return set()
    return ROLE_PERMISSIONS.get(str(getattr(role, "value", role)).lower(), set())


def has_permission(required_permission: Permission, user_permissions: Set[Permission]) -> bool:
    """Check if user has required permission"""
    return required_permission in user_permissions


def require_permission(required_permission: Permission):
    """Dependency factory to check permissions"""
    async def check_permission(app_session: AppSession = Depends(require_session)) -> AppSession:
        if not has_permission(required_permission, get_permissions_for_role(app_session.role)):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Permission required: {required_permission.value}",
            )
        return app_session
    return check_permission


def require_company_permission(required_permission: Permission):
    """Dependency factory: company scope check first, then the permission"""
    async def check_company_permission(
        app_session: AppSession = Depends(require_company_scope),
    ) -> AppSession:
        if not has_permission(required_permission, get_permissions_for_role(app_session.role)):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Permission required: {required_permission.value}",
            )
        return app_session
    return check_company_permission
