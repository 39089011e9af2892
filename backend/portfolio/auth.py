from __future__ import annotations

from typing import Optional

from fastapi import Header, HTTPException, Request, status

from .services.auth_service import AuthService


SESSION_KEY = "admin"


def is_admin_session(request: Request) -> bool:
    return bool(request.session.get(SESSION_KEY))


def require_admin(request: Request) -> bool:
    """HTML admin screens: signed-in session required."""
    if not is_admin_session(request):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Admin login required")
    return True


def _bearer(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, value = authorization.partition(" ")
    if scheme.lower() != "bearer" or not value.strip():
        return None
    return value.strip()


def require_admin_token(
    request: Request,
    x_admin_token: Optional[str] = Header(default=None),
    authorization: Optional[str] = Header(default=None),
) -> bool:
    """JSON admin API: token from ``X-Admin-Token`` or ``Authorization: Bearer``."""
    token = x_admin_token or _bearer(authorization)
    if AuthService().verify_token(token):
        return True
    if is_admin_session(request):
        return True
    raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or missing admin token")
