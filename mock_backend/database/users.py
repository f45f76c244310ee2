"""User accounts for mock backend"""

import hashlib
from typing import Optional

from ..models.user import User


def hash_password(password: str) -> str:
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


class UserDatabase:
    """In-memory user accounts"""

    def __init__(self):
        self.users: dict[str, User] = {}
        self._seed_users()

    def _seed_users(self):
        seed = [
            User(
                id="user-shopper",
                name="Demo Shopper",
                email="shopper@example.com",
                password_hash=hash_password("password123"),
            ),
            User(
                id="user-admin",
                name="Store Admin",
                email="admin@example.com",
                password_hash=hash_password("admin123"),
                role="admin",
            ),
            User(
                id="user-banned",
                name="Banned Shopper",
                email="banned@example.com",
                password_hash=hash_password("password123"),
                is_banned=True,
                ban_reason="Repeated chargebacks",
            ),
        ]
        for user in seed:
            self.users[user.id] = user

    def get_user(self, user_id: str) -> Optional[User]:
        return self.users.get(user_id)

    def authenticate(self, email: str, password: str) -> Optional[User]:
        """Return the user matching the credentials, if any"""
        email = email.strip().lower()
        for user in self.users.values():
            if user.email == email and user.password_hash == hash_password(password):
                return user
        return None

    def set_refresh_token(self, user_id: str, token: Optional[str]) -> None:
        user = self.users.get(user_id)
        if user:
            self.users[user_id] = user.model_copy(update={"refresh_token": token})

    def find_by_refresh_token(self, token: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.refresh_token == token), None)
