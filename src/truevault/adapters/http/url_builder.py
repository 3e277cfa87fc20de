"""HTTP adapter – URLBuilder port and the default TrueVault endpoints."""
from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable
from urllib.parse import quote

from truevault.config.settings import DEFAULT_BASE_URL


@runtime_checkable
class URLBuilder(Protocol):
    """Builds absolute endpoint URLs; swap it out to target a test server."""

    def search_document_url(self, vault_id: str) -> str: ...
    def create_user_url(self) -> str: ...
    def get_user_url(self, user_ids: Sequence[str]) -> str: ...
    def list_user_url(self) -> str: ...
    def update_user_url(self, user_id: str) -> str: ...
    def update_user_password_url(self, user_id: str) -> str: ...
    def delete_user_url(self, user_id: str) -> str: ...
    def create_access_token_url(self, user_id: str) -> str: ...
    def create_api_key_url(self, user_id: str) -> str: ...


class DefaultURLBuilder:
    """URLs of the public TrueVault API, rooted at *base_url*."""

    def __init__(self, base_url: str = DEFAULT_BASE_URL) -> None:
        self._base = base_url.rstrip("/")

    @property
    def base_url(self) -> str:
        return self._base

    def search_document_url(self, vault_id: str) -> str:
        return f"{self._base}/v1/vaults/{_seg(vault_id)}/search"

    def create_user_url(self) -> str:
        return f"{self._base}/v1/users"

    def get_user_url(self, user_ids: Sequence[str]) -> str:
        return f"{self._base}/v2/users/{','.join(_seg(u) for u in user_ids)}"

    def list_user_url(self) -> str:
        return f"{self._base}/v2/users"

    def update_user_url(self, user_id: str) -> str:
        return f"{self._base}/v1/users/{_seg(user_id)}"

    def update_user_password_url(self, user_id: str) -> str:
        return f"{self._base}/v1/users/{_seg(user_id)}/password"

    def delete_user_url(self, user_id: str) -> str:
        return f"{self._base}/v1/users/{_seg(user_id)}"

    def create_access_token_url(self, user_id: str) -> str:
        return f"{self._base}/v1/users/{_seg(user_id)}/access_token"

    def create_api_key_url(self, user_id: str) -> str:
        return f"{self._base}/v1/users/{_seg(user_id)}/api_key"


def _seg(value: str) -> str:
    return quote(str(value), safe="")


__all__ = ["DEFAULT_BASE_URL", "DefaultURLBuilder", "URLBuilder"]
