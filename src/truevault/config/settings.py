"""Config – TrueVaultSettings."""
from __future__ import annotations

import dataclasses
from typing import ClassVar
from urllib.parse import urlsplit

from truevault.kernel.errors import InvalidSettingValueError

DEFAULT_BASE_URL = "https://api.truevault.com"


@dataclasses.dataclass(frozen=True)
class TrueVaultSettings:
    """Client settings, loadable from ``TRUEVAULT_*`` environment variables.

    ``api_key`` may be an API key or an access token; both are sent the same
    way.
    """

    _prefix: ClassVar[str] = "TRUEVAULT"

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 10.0

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        if not self.api_key:
            raise InvalidSettingValueError("api_key", self.api_key, "must not be empty")
        parts = urlsplit(self.base_url)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise InvalidSettingValueError("base_url", self.base_url, "must be an absolute http(s) URL")
        if self.timeout <= 0:
            raise InvalidSettingValueError("timeout", self.timeout, "must be positive")

    def __repr__(self) -> str:
        return f"TrueVaultSettings(api_key='***', base_url={self.base_url!r}, timeout={self.timeout!r})"


__all__ = ["DEFAULT_BASE_URL", "TrueVaultSettings"]
