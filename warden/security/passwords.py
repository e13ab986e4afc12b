"""
Password and security-code helpers.
"""

import hashlib
import secrets
import string

import bcrypt

SECURITY_CODE_ALPHABET = string.ascii_uppercase + string.digits


def hash_password(plain_password: str) -> str:
    return bcrypt.hashpw(plain_password.encode("utf-8"), bcrypt.gensalt()).decode(
        "utf-8"
    )


def verify_password(plain_password: str, hashed_password: str) -> bool:
    if not plain_password or not hashed_password:
        return False
    try:
        return bcrypt.checkpw(
            plain_password.encode("utf-8"), hashed_password.encode("utf-8")
        )
    except ValueError:
        # Not a bcrypt hash.
        return False


def hash_security_code(security_code: str) -> str:
    return hashlib.sha256(security_code.encode("utf-8")).hexdigest()


def generate_security_code(length: int = 8) -> str:
    return "".join(secrets.choice(SECURITY_CODE_ALPHABET) for _ in range(length))


def generate_random_password() -> str:
    return secrets.token_urlsafe(24)
