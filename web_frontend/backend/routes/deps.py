"""
Request identity dependencies.

The acting user is supplied by the authentication layer in front of the
API as ``X-User-Id`` (and ``X-User-Role`` for administrators).
"""

from typing import Optional

from fastapi import Depends, Header, HTTPException

from doe_studio.params.loader import parse_mode


def require_user(x_user_id: Optional[str] = Header(None)) -> str:
    """Current user id; 401 when absent."""
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Authentication required")
    return x_user_id


def require_admin(
    user_id: str = Depends(require_user),
    x_user_role: Optional[str] = Header(None)
) -> str:
    """Current user id, which must have the admin role; 403 otherwise."""
    if (x_user_role or '').lower() != 'admin':
        raise HTTPException(status_code=403, detail="Only admins can modify templates")
    return user_id


def check_mode(mode: str) -> None:
    """422 unless ``mode`` is a supported DOE mode."""
    try:
        parse_mode(mode)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
