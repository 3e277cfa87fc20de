"""Users – User record and API response envelopes."""
from __future__ import annotations

from enum import StrEnum
from typing import TypeVar

from pydantic import BaseModel, ConfigDict, Field

from truevault.documents.models import decode_document

T = TypeVar("T")


class UserStatus(StrEnum):
    ACTIVATED = "ACTIVATED"
    PENDING = "PENDING"
    LOCKED = "LOCKED"
    DEACTIVATED = "DEACTIVATED"


class User(BaseModel):
    """A TrueVault user.

    ``api_key`` is only populated in the response to user creation.
    ``attributes`` is base64-encoded JSON, present when fetched with
    ``full=True``.
    """

    model_config = ConfigDict(frozen=True)

    id: str = ""
    user_id: str = ""
    account_id: str = ""
    username: str = ""
    status: str = ""
    access_token: str | None = None
    api_key: str | None = None
    attributes: str | None = None
    group_ids: list[str] = Field(default_factory=list)
    mfa_enrolled: bool = False

    def decode_attributes(self, target_type: type[T]) -> T:
        return decode_document(self.attributes or "", target_type, document_id=self.id or None)


class APIError(BaseModel):
    message: str = ""
    type: str = ""
    code: str = ""


class UserResponse(BaseModel):
    result: str = ""
    transaction_id: str = ""
    user: User = Field(default_factory=User)
    error: APIError | None = None


class UsersResponse(BaseModel):
    result: str = ""
    transaction_id: str = ""
    users: list[User] = Field(default_factory=list)
    error: APIError | None = None


class APIKeyResponse(BaseModel):
    result: str = ""
    transaction_id: str = ""
    api_key: str = ""
    error: APIError | None = None


__all__ = [
    "APIError",
    "APIKeyResponse",
    "User",
    "UserResponse",
    "UserStatus",
    "UsersResponse",
]
