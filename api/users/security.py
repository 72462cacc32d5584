"""
Password digest helpers.

`sha512` (default) is a single unsalted SHA-512 hex digest, kept for
compatibility with rows already stored that way. `bcrypt` is salted and
adaptive; enable it with PASSWORD_HASH_SCHEME=bcrypt.
"""

from __future__ import annotations

import hashlib

import bcrypt

from core import config

SHA512 = "sha512"
BCRYPT = "bcrypt"
SUPPORTED_SCHEMES = (SHA512, BCRYPT)

# bcrypt only looks at the first 72 bytes; longer input is rejected.
BCRYPT_MAX_BYTES = 72


class PasswordHashError(ValueError):
    pass


def resolve_scheme(scheme: str | None = None) -> str:
    resolved = (scheme or config.password_hash_scheme()).strip().lower()
    if resolved not in SUPPORTED_SCHEMES:
        raise RuntimeError(f"Unsupported PASSWORD_HASH_SCHEME: {resolved!r}")
    return resolved


def hash_password(plain_password: str, *, scheme: str | None = None) -> str:
    password = (plain_password or "").encode("utf-8")
    if not password:
        raise PasswordHashError("Password is empty.")

    if resolve_scheme(scheme) == BCRYPT:
        if len(password) > BCRYPT_MAX_BYTES:
            raise PasswordHashError(f"Password is longer than {BCRYPT_MAX_BYTES} bytes.")
        return bcrypt.hashpw(password, bcrypt.gensalt()).decode("utf-8")

    return hashlib.sha512(password).hexdigest()
