"""
Password hashing and signed bearer tokens.

Tokens are JWT-shaped (header.payload.signature, base64url) and signed with
HMAC-SHA256 over the configured SECRET_KEY.
"""

import base64
import binascii
import hashlib
import hmac
import json
import secrets
import time
from typing import Optional

from storefront import config


# --------------- Password hashing ----------------------------------------

def hash_password(plain: str, salt: Optional[str] = None,
                  iterations: Optional[int] = None) -> str:
    """Salted PBKDF2-SHA256, encoded as ``pbkdf2_sha256$iter$salt$hex``."""
    salt = salt or secrets.token_hex(16)
    iterations = iterations or config.PASSWORD_HASH_ITERATIONS
    digest = hashlib.pbkdf2_hmac("sha256", plain.encode(), salt.encode(), iterations)
    return f"pbkdf2_sha256${iterations}${salt}${digest.hex()}"


def verify_password(plain: str, stored: str) -> bool:
    try:
        scheme, iterations, salt, _ = stored.split("$")
        iterations = int(iterations)
    except ValueError:
        return False
    if scheme != "pbkdf2_sha256":
        return False
    return hmac.compare_digest(hash_password(plain, salt, iterations), stored)


# --------------- Signed tokens -------------------------------------------

def _b64(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode()


def _unb64(data: str) -> bytes:
    return base64.urlsafe_b64decode(data + "=" * (-len(data) % 4))


def _sign(signing_input: str) -> str:
    sig = hmac.new(config.SECRET_KEY.encode(), signing_input.encode(), hashlib.sha256).digest()
    return _b64(sig)


def create_token(user_id: str, username: str, now: Optional[float] = None,
                 expires_in: Optional[int] = None) -> str:
    """Issue a token for `user_id`, valid for TOKEN_EXPIRY_MINUTES by default."""
    now = time.time() if now is None else now
    expires_in = config.TOKEN_EXPIRY_MINUTES * 60 if expires_in is None else expires_in
    header = _b64(json.dumps({"alg": config.TOKEN_ALGORITHM, "typ": "JWT"}).encode())
    payload = _b64(json.dumps({
        "sub": user_id,
        "name": username,
        "iat": int(now),
        "exp": int(now) + expires_in,
    }).encode())
    return f"{header}.{payload}.{_sign(f'{header}.{payload}')}"


def decode_token(token: str, now: Optional[float] = None) -> Optional[dict]:
    """Verify signature and expiry. Returns the payload, or None if invalid."""
    parts = token.split(".")
    if len(parts) != 3:
        return None
    header, payload, sig = parts
    if not hmac.compare_digest(sig.encode(), _sign(f"{header}.{payload}").encode()):
        return None
    try:
        data = json.loads(_unb64(payload))
    except (binascii.Error, ValueError):
        return None
    if not isinstance(data, dict) or "sub" not in data:
        return None
    now = time.time() if now is None else now
    if not isinstance(data.get("exp"), int) or data["exp"] <= now:
        return None
    return data
