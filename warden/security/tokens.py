"""
Signing of generated API tokens.

Tokens are signed RS256 with the configured RSA private key when both
``jwt_rsa_key_id`` and ``jwt_rsa_private_key`` are set. Otherwise they are
signed HS256 with ``secret_key`` and the application name is the issuer.
"""

from datetime import datetime
from typing import Any

from jose import jwt

from warden.config import settings
from warden.models.pydantic_models import GenerateTokenRequest
from warden.utils import to_epoch_seconds


def signing_parameters() -> tuple[str, str, str, dict[str, str]]:
    """Return ``(key, algorithm, issuer, headers)`` for the current settings."""
    if settings.jwt_rsa_key_id and settings.jwt_rsa_private_key:
        return (
            settings.jwt_rsa_private_key,
            "RS256",
            settings.jwt_rsa_key_id,
            {"kid": settings.jwt_rsa_key_id},
        )
    return settings.secret_key, "HS256", settings.app_name, {}


def build_claims(
    token_id: str, request: GenerateTokenRequest, issued: datetime, issuer: str
) -> dict[str, Any]:
    claims: dict[str, Any] = {
        "iss": issuer,
        "sub": request.name,
        "jti": token_id,
        "iat": to_epoch_seconds(issued),
    }
    if request.valid_from_date is not None:
        claims["nbf"] = to_epoch_seconds(request.valid_from_date)
    if request.expiry_date is not None:
        claims["exp"] = to_epoch_seconds(request.expiry_date)
    for claim in request.claims:
        claims[claim.name] = list(claim.values)
    return claims


def sign_token(token_id: str, request: GenerateTokenRequest, issued: datetime) -> str:
    key, algorithm, issuer, headers = signing_parameters()
    claims = build_claims(token_id, request, issued, issuer)
    return jwt.encode(claims, key, algorithm=algorithm, headers=headers or None)
