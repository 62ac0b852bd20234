# app/core/rbac.py

from fastapi import Depends, HTTPException, status
from app.api.deps import get_current_user
from app.models.user import User, UserRole


def _role_name(role) -> str:
    if isinstance(role, UserRole):
        return role.value
    return str(role).strip().lower()


def AllowRoles(*allowed_roles, admin_bypass: bool = True):
    """
    Coarse route gate on the caller's role. Roles may be given as UserRole
    members or plain strings, in any case. Admins get through unless
    admin_bypass=False.

    Whether the caller owns the faculty / project / application is a
    separate question answered by app.core.permissions inside the handler.
    """
    permitted = frozenset(_role_name(r) for r in allowed_roles)

    async def role_checker(current_user: User = Depends(get_current_user)) -> User:
        role = _role_name(current_user.role)

        if role in permitted:
            return current_user

        if admin_bypass and role == UserRole.Admin.value:
            return current_user

        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Role ({role}) is not authorized to access this route",
        )

    return role_checker


# Shared gates
require_admin = AllowRoles(UserRole.Admin)
# Students act only for themselves; admins do not get this one
require_student = AllowRoles(UserRole.Student, admin_bypass=False)
