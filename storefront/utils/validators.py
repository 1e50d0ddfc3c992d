"""
Input validators — used by schemas and the store before touching records.
"""

import re


def validate_phone(phone: str) -> tuple[bool, str]:
    """Phone numbers: digits with optional leading + and spaces/dashes, 6‑20 digits."""
    if not re.match(r"^\+?[0-9][0-9 \-]*$", phone):
        return False, "Phone may only contain digits, spaces, dashes and a leading +"
    digits = sum(c.isdigit() for c in phone)
    if digits < 6 or digits > 20:
        return False, "Phone must have between 6 and 20 digits"
    return True, ""


def validate_username(username: str) -> tuple[bool, str]:
    """Username rules: 3‑30 chars, alphanumeric + underscores."""
    if len(username) < 3:
        return False, "Username must be at least 3 characters"
    if len(username) > 30:
        return False, "Username must be at most 30 characters"
    if not re.match(r"^[a-zA-Z0-9_]+$", username):
        return False, "Username may only contain letters, digits, and underscores"
    return True, ""


def validate_password(password: str) -> tuple[bool, str]:
    """Password rules: min 6 chars, at least one digit."""
    if len(password) < 6:
        return False, "Password must be at least 6 characters"
    if not any(c.isdigit() for c in password):
        return False, "Password must contain at least one digit"
    return True, ""


def validate_slug(slug: str) -> tuple[bool, str]:
    if not slug:
        return False, "Slug must not be empty"
    if not re.match(r"^[a-z0-9]+(?:-[a-z0-9]+)*$", slug):
        return False, "Slug may only contain lowercase letters, digits, and single hyphens"
    return True, ""
