"""
Authentication & authorization for the admin panel.
Handles the login flow and the bearer-token gate on admin routes.
"""

from typing import Optional

from fastapi import Depends, Header

from storefront.database import MemoryStore, get_store
from storefront.errors import InvalidCredential, Unauthorized
from storefront.models import User
from storefront.security import create_token, decode_token, verify_password
from storefront.utils.logger import get_logger

_logger = get_logger(__name__)


def login_admin(store: MemoryStore, username: str, password: str) -> Optional[tuple[str, User]]:
    """Validate credentials and return (token, user), or None on failure."""
    user = store.get_user_by_username(username)
    if user is None or not verify_password(password, user.password_hash):
        _logger.warning(f"Failed admin login for '{username}'")
        return None
    return create_token(user.id, user.username), user


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def current_admin(store: MemoryStore, authorization: Optional[str]) -> User:
    if not authorization:
        raise Unauthorized()
    token = bearer_token(authorization)
    if token is None:
        raise InvalidCredential()
    data = decode_token(token)
    if data is None:
        raise InvalidCredential()
    user = store.get_user(data["sub"])
    if user is None:
        raise InvalidCredential()
    return user


def require_admin(
    authorization: Optional[str] = Header(default=None),
    store: MemoryStore = Depends(get_store),
) -> User:
    """FastAPI dependency guarding admin-only routes."""
    return current_admin(store, authorization)
