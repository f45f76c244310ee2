"""User models for mock backend"""

from typing import Optional

from pydantic import BaseModel


class User(BaseModel):
    """Registered user"""
    id: str
    name: str
    email: str
    password_hash: str
    role: str = "user"
    is_banned: bool = False
    ban_reason: Optional[str] = None
    refresh_token: Optional[str] = None

    def to_profile(self) -> dict:
        return {
            "_id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
        }
