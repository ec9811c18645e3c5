# shopcart/api/auth.py
import uuid

from fastapi import Depends, Header

from shopcart.domain.errors import Forbidden, Unauthenticated, ValidationFailed
from shopcart.domain.principal import Principal


def get_current_principal(
    x_user_id: str | None = Header(default=None),
    x_user_roles: str | None = Header(default=None),
) -> Principal:
    """
    Bramka uwierzytelnia request (token) i przekazuje nam X-User-Id i X-User-Roles.
    Tutaj tylko zamieniamy naglowki na Principal.
    """
    if not x_user_id:
        raise Unauthenticated()

    try:
        user_id = uuid.UUID(x_user_id)
    except ValueError as e:
        raise ValidationFailed("Invalid user id", detail=str(e)) from e

    roles = frozenset(r.strip() for r in (x_user_roles or "").split(",") if r.strip())
    return Principal(user_id=user_id, roles=roles)


def require_admin(principal: Principal = Depends(get_current_principal)) -> Principal:
    if not principal.is_admin:
        raise Forbidden("Admin role required")
    return principal
