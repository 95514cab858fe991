# This file verifies bearer credentials and exposes the caller identity to routes.
# Tokens are HMAC-signed JWTs issued elsewhere; only verification happens here.

from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import ValidationError

from src.api.api_config import ApiConfig
from src.api.dependencies import get_config
from src.api.error_handlers import UnauthenticatedError
from src.api.schemas.auth_schemas import Identity

LOGGER = logging.getLogger("auth")

_bearer_scheme = HTTPBearer(auto_error=False)


def decode_identity(token: str, *, secret: str, algorithm: str) -> Identity:
    """Verify a token's signature and expiry and return its identity claims."""

    try:
        claims: dict[str, Any] = jwt.decode(token, secret, algorithms=[algorithm])
    except JWTError as exc:
        LOGGER.info("Rejected bearer token: %s", exc)
        raise UnauthenticatedError("Invalid or expired token") from exc
    try:
        return Identity.model_validate(claims)
    except ValidationError as exc:
        LOGGER.info("Rejected bearer token with malformed claims: %s", exc.error_count())
        raise UnauthenticatedError("Invalid or expired token") from exc


def get_current_identity(
    config: Annotated[ApiConfig, Depends(get_config)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer_scheme)],
) -> Identity:
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedError("Access token required")
    return decode_identity(
        credentials.credentials,
        secret=config.jwt_secret,
        algorithm=config.jwt_algorithm,
    )


IdentityDep = Annotated[Identity, Depends(get_current_identity)]
