"""Users – UserService."""
from __future__ import annotations

import base64
import json
from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from truevault.adapters.http import TrueVaultClient, URLBuilder
from truevault.kernel.errors import ResponseDecodeError, TrueVaultAPIError, ValidationError
from truevault.observability.logging import get_logger
from truevault.search.values import format_rfc3339
from truevault.users.models import APIKeyResponse, User, UserResponse, UsersResponse, UserStatus

logger = get_logger(__name__)

M = TypeVar("M", bound=BaseModel)

_MAX_GET_IDS = 100


class UserService:
    """User management: create, read, update, deactivate and credential vending.

    Optional arguments left as ``None`` are not sent, so the API keeps its
    own defaults (e.g. new users are ``ACTIVATED``).
    """

    def __init__(self, client: TrueVaultClient) -> None:
        self._client = client

    @property
    def _urls(self) -> URLBuilder:
        return self._client.url_builder

    async def create(
        self,
        username: str,
        *,
        password: str | None = None,
        attributes: Mapping[str, Any] | str | None = None,
        group_ids: Sequence[str] | None = None,
        status: UserStatus | None = None,
        access_token_not_valid_after: datetime | None = None,
    ) -> User:
        """Create a user; the response carries its API key and an access token.

        A user created without a password cannot log in but can still use
        its API key, which suits service accounts.
        """
        if not username:
            raise ValidationError("username required to create user", field="username")

        form = _form(
            username=username,
            password=password,
            attributes=_encode_attributes(attributes),
            group_ids=",".join(group_ids) if group_ids is not None else None,
            status=_status(status),
            access_token_not_valid_after=_timestamp(access_token_not_valid_after),
        )
        payload = await self._client.post_form(self._urls.create_user_url(), form)
        user = self._checked(payload, UserResponse).user
        logger.info("users.created", user_id=user.id or user.user_id)
        return user

    async def get(self, user_ids: Sequence[str], *, full: bool = False) -> list[User]:
        """Fetch up to 100 users by id.

        With ``full=True`` attributes and group ids are included, at the cost
        of one API operation per user.
        """
        if not user_ids:
            raise ValidationError("user id required", field="user_ids")
        if len(user_ids) > _MAX_GET_IDS:
            raise ValidationError(f"at most {_MAX_GET_IDS} user ids per request", field="user_ids")

        payload = await self._client.get(self._urls.get_user_url(user_ids), params={"full": _flag(full)})
        return self._checked(payload, UsersResponse).users

    async def list(
        self,
        status: UserStatus | Sequence[UserStatus] | None = None,
        *,
        full: bool = False,
    ) -> list[User]:
        """List the account's users, optionally filtered by one or more statuses."""
        params = {"full": _flag(full)}
        if status is not None:
            statuses = [status] if isinstance(status, str) else list(status)
            params["status"] = ",".join(_status(s) or "" for s in statuses)

        payload = await self._client.get(self._urls.list_user_url(), params=params)
        return self._checked(payload, UsersResponse).users

    async def update(
        self,
        user_id: str,
        *,
        username: str | None = None,
        password: str | None = None,
        access_token: str | None = None,
        access_token_not_valid_after: datetime | None = None,
        attributes: Mapping[str, Any] | str | None = None,
        status: UserStatus | None = None,
    ) -> User:
        """Overwrite the given properties of a user."""
        _require_id(user_id)
        form = _form(
            username=username,
            password=password,
            access_token=access_token,
            access_token_not_valid_after=_timestamp(access_token_not_valid_after),
            attributes=_encode_attributes(attributes),
            status=_status(status),
        )
        payload = await self._client.put_form(self._urls.update_user_url(user_id), form)
        return self._checked(payload, UserResponse).user

    async def update_password(self, user_id: str, password: str) -> None:
        _require_id(user_id)
        if not password:
            raise ValidationError("password is required", field="password")

        payload = await self._client.put_form(
            self._urls.update_user_password_url(user_id), {"password": password}
        )
        self._checked(payload, UserResponse)
        logger.info("users.password_updated", user_id=user_id)

    async def delete(self, user_id: str) -> None:
        """Deactivate a user.

        Frees the username, revokes all access tokens and removes the user
        from every group. Stored data is not purged, and a deactivated user
        cannot be reactivated.
        """
        _require_id(user_id)
        payload = await self._client.delete(self._urls.delete_user_url(user_id))
        self._checked(payload, UserResponse)
        logger.info("users.deactivated", user_id=user_id)

    async def create_access_token(self, user_id: str, *, not_valid_after: datetime | None = None) -> str:
        """Vend a new access token for *user_id* and return it."""
        _require_id(user_id)
        form = _form(not_valid_after=_timestamp(not_valid_after))
        payload = await self._client.post_form(self._urls.create_access_token_url(user_id), form)
        token = self._checked(payload, UserResponse).user.access_token
        if not token:
            raise ResponseDecodeError("Access token response carries no token", payload_type="UserResponse")
        logger.info("users.access_token_created", user_id=user_id)
        return token

    async def create_api_key(self, user_id: str) -> str:
        """Replace the API key of *user_id* and return the new one."""
        _require_id(user_id)
        payload = await self._client.post_form(self._urls.create_api_key_url(user_id))
        api_key = self._checked(payload, APIKeyResponse).api_key
        if not api_key:
            raise ResponseDecodeError("API key response carries no key", payload_type="APIKeyResponse")
        logger.info("users.api_key_created", user_id=user_id)
        return api_key

    @staticmethod
    def _checked(payload: Any, model: type[M]) -> M:
        try:
            response = model.model_validate(payload)
        except PydanticValidationError as exc:
            raise ResponseDecodeError(
                f"Response does not match {model.__name__}", payload_type=model.__name__, cause=exc
            ) from exc

        error = getattr(response, "error", None)
        if error is not None and error.message:
            raise TrueVaultAPIError(
                error.message,
                error_type=error.type or None,
                error_code=error.code or None,
                transaction_id=getattr(response, "transaction_id", None) or None,
            )
        return response


def _require_id(user_id: str) -> None:
    if not user_id:
        raise ValidationError("user id required", field="user_id")


def _form(**fields: str | None) -> dict[str, str]:
    return {k: v for k, v in fields.items() if v is not None}


def _flag(value: bool) -> str:
    return "true" if value else "false"


def _status(status: UserStatus | str | None) -> str | None:
    if status is None:
        return None
    try:
        return UserStatus(status).value
    except ValueError as exc:
        raise ValidationError(f"{status!r} is not a valid user status", field="status") from exc


def _timestamp(value: datetime | None) -> str | None:
    return format_rfc3339(value) if value is not None else None


def _encode_attributes(attributes: Mapping[str, Any] | str | None) -> str | None:
    """Attributes go over the wire as base64-encoded JSON."""
    if attributes is None or isinstance(attributes, str):
        return attributes
    return base64.b64encode(json.dumps(dict(attributes)).encode()).decode("ascii")


__all__ = ["UserService"]
