"""
Internal API authentication dependencies.

The service sits behind the web front end, which owns user sessions.
Endpoints trust two headers set by that server:

  - X-Internal-Secret: <INTERNAL_API_SECRET>, shared by both services
  - X-User-Id: the signed-in user's id, required by user-scoped routes

Setup:
  - Add INTERNAL_API_SECRET=<random-long-string> to both .env files
  - Generate one with: python -c "import secrets; print(secrets.token_hex(32))"
"""
from fastapi import Header, HTTPException
from typing import Annotated

from app.core.config import settings


def verify_internal_secret(x_internal_secret: Annotated[str, Header()] = "") -> None:
    """FastAPI dependency that validates the shared internal secret header."""
    if not settings.INTERNAL_API_SECRET:
        # If the env var is not set, block all requests to prevent accidental exposure
        raise HTTPException(
            status_code=503,
            detail="Service not configured (INTERNAL_API_SECRET not set)"
        )
    if x_internal_secret != settings.INTERNAL_API_SECRET:
        raise HTTPException(
            status_code=403,
            detail="Forbidden: invalid or missing internal secret"
        )


def get_current_user_id(x_user_id: Annotated[str, Header()] = "") -> str:
    """FastAPI dependency returning the user id forwarded by the upstream server."""
    user_id = x_user_id.strip()
    if not user_id:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return user_id
