"""Caller identity and role checks for the API boundary.

The core never looks at roles. Routes that mutate the ledger, change order
status or administer users depend on `require_admin`.
"""

from fastapi import Header
from protean.utils.globals import current_domain

from storefront.account.user import Role, User
from storefront.api.responses import AccessDenied


def current_user(x_user_id: str | None = Header(default=None)) -> User:
    """Load the caller named by the `X-User-Id` header."""
    if not x_user_id:
        raise AccessDenied("X-User-Id header is required", status_code=401, kind="Unauthenticated")
    user = current_domain.repository_for(User).get_or_none(x_user_id)
    if user is None:
        raise AccessDenied(f"Unknown caller: {x_user_id}", status_code=401, kind="Unauthenticated")
    return user


def require_admin(x_user_id: str | None = Header(default=None)) -> User:
    user = current_user(x_user_id)
    admin_role = getattr(current_domain, "ADMIN_ROLE", Role.ADMIN.value)
    if user.role != admin_role:
        raise AccessDenied(f"Role {admin_role} required", status_code=403, kind="Forbidden")
    return user
