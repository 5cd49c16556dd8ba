"""
JWT bearer authentication for professional-scoped routes
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
import jwt as pyjwt

from app.config import settings
from app.exceptions import UnauthorizedError

security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthenticatedProfessional:
    professional_id: int
    email: str
    profession: str


def create_access_token(
    professional_id: int,
    email: str,
    profession: str,
    expires_in: Optional[timedelta] = None,
) -> str:
    """Create a signed access token. Used by tests and local tooling."""
    expire = datetime.now(timezone.utc) + (
        expires_in or timedelta(hours=settings.jwt_expiration_hours)
    )
    payload = {
        "professionalId": professional_id,
        "email": email,
        "profession": profession,
        "exp": expire,
    }
    return pyjwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> AuthenticatedProfessional:
    try:
        payload = pyjwt.decode(
            token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm]
        )
    except pyjwt.ExpiredSignatureError:
        raise UnauthorizedError("Token expired")
    except pyjwt.PyJWTError:
        raise UnauthorizedError("Invalid authentication credentials")

    professional_id = payload.get("professionalId")
    if not isinstance(professional_id, int) or isinstance(professional_id, bool):
        raise UnauthorizedError("Invalid authentication credentials")

    return AuthenticatedProfessional(
        professional_id=professional_id,
        email=payload.get("email", ""),
        profession=payload.get("profession", ""),
    )


def get_current_professional(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> AuthenticatedProfessional:
    """Resolve the calling professional from the Authorization header"""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Access token required")
    return decode_access_token(credentials.credentials)
