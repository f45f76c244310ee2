"""
Bearer token issuing and verification for the mock backend.

Access and refresh tokens are HS256 JWTs; the refresh token currently
held by a user is stored on the user record so logout can revoke it.
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Depends, Header, HTTPException, Request

from .config import BackendSettings
from .database import MockDatabase
from .models.user import User

logger = logging.getLogger(__name__)


class TokenService:
    """Issues and verifies JWT access/refresh tokens"""

    def __init__(self, settings: BackendSettings):
        self.secret = settings.jwt_secret
        self.algorithm = settings.jwt_algorithm
        self.access_ttl = timedelta(minutes=settings.access_token_ttl_minutes)
        self.refresh_ttl = timedelta(days=settings.refresh_token_ttl_days)

    def _issue(self, user_id: str, token_type: str, ttl: timedelta) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": user_id,
            "type": token_type,
            "jti": uuid.uuid4().hex,
            "iat": int(now.timestamp()),
            "exp": int((now + ttl).timestamp()),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def issue_access_token(self, user_id: str) -> str:
        return self._issue(user_id, "access", self.access_ttl)

    def issue_refresh_token(self, user_id: str) -> str:
        return self._issue(user_id, "refresh", self.refresh_ttl)

    def verify(self, token: str, token_type: str) -> Optional[str]:
        """Return the user id for a valid token of the given type"""
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.PyJWTError as e:
            logger.debug(f"Token rejected: {e}")
            return None

        if payload.get("type") != token_type:
            return None
        return payload.get("sub")


def get_db(request: Request) -> MockDatabase:
    return request.app.state.db


def get_token_service(request: Request) -> TokenService:
    return request.app.state.tokens


async def require_user(
    authorization: Optional[str] = Header(None),
    db: MockDatabase = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> User:
    """Resolve the bearer token to a user or fail with 401"""
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Authentication required")

    user_id = tokens.verify(authorization.removeprefix("Bearer "), "access")
    user = db.users.get_user(user_id) if user_id else None
    if not user:
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    return user
