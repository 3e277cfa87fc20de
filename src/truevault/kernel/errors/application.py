"""Application-layer errors – bad caller input and configuration."""

from __future__ import annotations

from typing import Any

from truevault.kernel.errors.base import TrueVaultError


class ApplicationError(TrueVaultError):
    """The caller asked for something the client cannot do."""

    default_code = "application_error"


class ValidationError(ApplicationError):
    """Input arguments do not meet the API's requirements.

    ``field`` names the argument that failed, when there is one.
    """

    default_code = "validation_error"

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.field = field

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        if self.field is not None:
            base["field"] = self.field
        return base


class ConfigError(ApplicationError):
    """Raised when configuration is invalid or loading failed."""

    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """A required environment variable / setting is absent."""

    default_code = "missing_required_setting"

    def __init__(self, setting_name: str) -> None:
        super().__init__(f"Required setting '{setting_name}' is missing")
        self.setting_name = setting_name


class InvalidSettingValueError(ConfigError):
    """A setting's value is present but semantically invalid."""

    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        super().__init__(f"Setting '{setting_name}' has invalid value {value!r}: {reason}")
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


__all__ = [
    "ApplicationError",
    "ConfigError",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "ValidationError",
]
