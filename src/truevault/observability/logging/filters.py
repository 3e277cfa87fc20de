"""Observability – SensitiveFieldsFilter."""
from __future__ import annotations

from typing import Any

# Keys that carry TrueVault credentials or user secrets.
DEFAULT_SENSITIVE_FIELDS: frozenset[str] = frozenset(
    {
        "access_token",
        "api_key",
        "apikey",
        "authorization",
        "password",
        "secret",
        "token",
    }
)


class SensitiveFieldsFilter:
    """Replace values of sensitive keys with ``[REDACTED]``.

    Keys are matched case-insensitively.
    """

    REDACTED = "[REDACTED]"

    def __init__(self, sensitive_fields: frozenset[str] | None = None) -> None:
        fields = sensitive_fields if sensitive_fields is not None else DEFAULT_SENSITIVE_FIELDS
        self._fields = frozenset(f.lower() for f in fields)

    def is_sensitive(self, key: str) -> bool:
        return key.lower() in self._fields

    def redact_deep(self, data: dict[str, Any]) -> dict[str, Any]:
        """Recursively redact nested dicts, including dicts inside lists."""
        result: dict[str, Any] = {}
        for k, v in data.items():
            if isinstance(k, str) and self.is_sensitive(k):
                result[k] = self.REDACTED
            else:
                result[k] = self._redact_value(v)
        return result

    def _redact_value(self, value: Any) -> Any:
        if isinstance(value, dict):
            return self.redact_deep(value)
        if isinstance(value, (list, tuple)):
            return type(value)(self._redact_value(v) for v in value)
        return value

    def __call__(self, logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:  # noqa: ARG002
        """structlog processor entry point."""
        return self.redact_deep(event_dict)


__all__ = ["DEFAULT_SENSITIVE_FIELDS", "SensitiveFieldsFilter"]
