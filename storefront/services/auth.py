"""Authentication session"""

import logging
from typing import Optional

import pydantic

from ..errors import AuthenticationError, ServerError, StorefrontError
from ..models.auth import AuthTokens, UserProfile
from ..storage.local_store import LocalStore
from .api_client import StorefrontClient
from .sync import OperationResult

logger = logging.getLogger(__name__)


def _banned(payload: dict, status_code: Optional[int] = None) -> AuthenticationError:
    return AuthenticationError(
        payload.get("banReason") or "This account has been suspended",
        status_code=status_code,
        payload=payload,
    )


class AuthManager:
    """Holds the signed-in user and token pair, mirrored to `user`/`tokens`"""

    def __init__(self, client: StorefrontClient, storage: LocalStore):
        self.client = client
        self.storage = storage
        self.user: Optional[UserProfile] = None
        self.tokens: Optional[AuthTokens] = None
        self.error: Optional[str] = None
        self.loading = False

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None and self.tokens is not None

    @property
    def is_admin(self) -> bool:
        return self.user is not None and self.user.is_admin

    def hydrate(self) -> None:
        """Restore a persisted session; a partial or corrupt pair is cleared"""
        raw_user = self.storage.get_json("user")
        raw_tokens = self.storage.get_json("tokens")
        if raw_user is None or raw_tokens is None:
            self.clear()
            return

        try:
            self.user = UserProfile.model_validate(raw_user)
            self.tokens = AuthTokens.model_validate(raw_tokens)
        except pydantic.ValidationError:
            logger.warning("Discarding invalid stored auth data")
            self.clear()
            return

        self.client.set_tokens(self.tokens)
        logger.info(f"Restored session for {self.user.email or self.user.id}")

    async def login(self, email: str, password: str) -> OperationResult:
        """Exchange credentials for tokens and load the profile"""
        self.loading = True
        self.error = None
        try:
            payload = await self.client.login(email, password)
            if payload.get("isBanned"):
                raise _banned(payload)

            tokens = AuthTokens.model_validate(payload)
            self.client.set_tokens(tokens)
            profile = await self.client.get_profile()
            user = UserProfile.model_validate(profile.get("data") or profile.get("user") or profile)
        except pydantic.ValidationError as e:
            self.client.set_tokens(self.tokens)
            return self._fail(ServerError("Unexpected response from server", payload=str(e)))
        except ServerError as e:
            self.client.set_tokens(self.tokens)
            if isinstance(e.payload, dict) and e.payload.get("isBanned"):
                e = _banned(e.payload, e.status_code)
            return self._fail(e)
        except StorefrontError as e:
            self.client.set_tokens(self.tokens)
            return self._fail(e)
        finally:
            self.loading = False

        self.user = user
        self.tokens = tokens
        self.storage.set_json("user", user.model_dump(mode="json"))
        self.save_tokens(tokens)
        logger.info(f"Logged in as {user.email or user.id}")
        return OperationResult(success=True, data=user)

    async def logout(self) -> OperationResult:
        """Invalidate the refresh token if possible; always signs out locally"""
        refresh_token = self.tokens.refresh_token if self.tokens else None
        if refresh_token:
            try:
                await self.client.logout(refresh_token)
            except StorefrontError as e:
                logger.warning(f"Logout request failed: {e.message}")

        self.clear()
        logger.info("Logged out")
        return OperationResult(success=True)

    def save_tokens(self, tokens: AuthTokens) -> None:
        self.tokens = tokens
        self.storage.set_json("tokens", tokens.model_dump(mode="json", by_alias=True))

    def clear(self) -> None:
        """Drop user and tokens from memory, storage and the client"""
        self._forget()
        self.storage.remove("user")
        self.storage.remove("tokens")

    def _forget(self) -> None:
        self.user = None
        self.tokens = None
        self.client.set_tokens(None)

    def _fail(self, error: StorefrontError) -> OperationResult:
        self.error = error.message
        logger.error(f"Login failed: {error.message}")
        return OperationResult(success=False, error=error)
