"""Auth API routes for mock backend"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..database import MockDatabase
from ..models.auth import LoginRequest, LogoutRequest, RefreshTokenRequest
from ..models.user import User
from ..security import TokenService, get_db, get_token_service, require_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


def _message(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message, **extra})


@router.post("/login")
async def login(
    request: LoginRequest,
    db: MockDatabase = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    """Exchange credentials for an access/refresh token pair"""
    user = db.users.authenticate(request.email, request.password)
    if not user:
        return _message(400, "Invalid credentials")

    if user.is_banned:
        logger.info(f"Rejected login for banned user {user.id}")
        return _message(
            403,
            "Your account has been banned",
            isBanned=True,
            banReason=user.ban_reason,
        )

    access_token = tokens.issue_access_token(user.id)
    refresh_token = tokens.issue_refresh_token(user.id)
    db.users.set_refresh_token(user.id, refresh_token)

    return {
        "message": "Login successful",
        "accessToken": access_token,
        "refreshToken": refresh_token,
    }


@router.get("/profile")
async def get_profile(user: User = Depends(require_user)):
    return user.to_profile()


@router.post("/refresh-token")
async def refresh_token(
    request: RefreshTokenRequest,
    db: MockDatabase = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    """Issue a new access token for a refresh token that is still on record"""
    if not request.refresh_token:
        return _message(401, "Refresh token required")

    user_id = tokens.verify(request.refresh_token, "refresh")
    user = db.users.find_by_refresh_token(request.refresh_token)
    if not user_id or not user or user.id != user_id:
        return _message(401, "Invalid refresh token")

    return {"message": "Token refreshed", "accessToken": tokens.issue_access_token(user.id)}


@router.post("/logout")
async def logout(request: LogoutRequest, db: MockDatabase = Depends(get_db)):
    """Revoke the refresh token; unknown tokens are ignored"""
    if request.refresh_token:
        user = db.users.find_by_refresh_token(request.refresh_token)
        if user:
            db.users.set_refresh_token(user.id, None)

    return {"message": "Logged out successfully"}
