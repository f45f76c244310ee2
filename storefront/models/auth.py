"""Authentication models"""

from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class AuthTokens(BaseModel):
    """Bearer token pair issued at login"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    access_token: str
    refresh_token: Optional[str] = None


class UserProfile(BaseModel):
    """Profile returned by `/auth/profile`"""

    model_config = ConfigDict(extra="allow", populate_by_name=True, coerce_numbers_to_str=True)

    id: str = Field(validation_alias=AliasChoices("id", "_id", "userId"))
    name: str = ""
    email: str = ""
    role: str = "user"

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
