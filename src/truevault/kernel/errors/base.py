"""Root error class for the truevault error hierarchy."""

from __future__ import annotations

import json
from typing import Any


class TrueVaultError(Exception):
    """Root of the error hierarchy.

    Args:
        message: Human-readable description.
        code: Machine-readable slug (defaults to ``default_code``).
        detail: Arbitrary extra context (serialisable dict).
        cause: Original exception that triggered this error.
        transaction_id: TrueVault transaction id of the failed call, when the
            API reported one; quote it in support requests.
    """

    default_code: str = "truevault_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
        transaction_id: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = detail or {}
        self.cause = cause
        self.transaction_id = transaction_id
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        """Return a JSON single-line representation."""
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a plain dict (safe for logging)."""
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "detail": self.detail,
        }
        if self.transaction_id:
            payload["transaction_id"] = self.transaction_id
        if self.cause is not None:
            payload["cause"] = repr(self.cause)
        return payload


__all__ = ["TrueVaultError"]
