"""Infrastructure errors – transport failures and unexpected API responses."""

from __future__ import annotations

from typing import Any

from truevault.kernel.errors.base import TrueVaultError


class InfrastructureError(TrueVaultError):
    """I/O failure talking to the TrueVault API."""

    default_code = "infrastructure_error"


class TransportError(InfrastructureError):
    """The request never produced an HTTP response (DNS, TLS, reset, ...)."""

    default_code = "transport_error"

    def __init__(self, url: str, message: str | None = None, **kwargs: Any) -> None:
        super().__init__(message or f"Request to '{url}' failed", **kwargs)
        self.url = url


class RequestTimeoutError(TransportError):
    """The request exceeded the configured timeout."""

    default_code = "request_timeout"


class ExternalServiceError(InfrastructureError):
    """The API answered with an unexpected status code."""

    default_code = "external_service_error"

    def __init__(
        self,
        url: str,
        message: str | None = None,
        *,
        status_code: int | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"TrueVault request to '{url}' failed", **kwargs)
        self.url = url
        self.status_code = status_code


class UnauthorizedError(ExternalServiceError):
    """HTTP 401: the API key or access token was rejected."""

    default_code = "unauthorized"

    def __init__(self, url: str, **kwargs: Any) -> None:
        super().__init__(url, "error: authorization failed", status_code=401, **kwargs)


class BadRequestError(ExternalServiceError):
    """HTTP 400: the API rejected the request body or parameters."""

    default_code = "bad_request"

    def __init__(self, url: str, **kwargs: Any) -> None:
        super().__init__(url, "error: bad request", status_code=400, **kwargs)


class ServerError(ExternalServiceError):
    """HTTP 500 from the API."""

    default_code = "server_error"

    def __init__(self, url: str, **kwargs: Any) -> None:
        super().__init__(url, "error: server error", status_code=500, **kwargs)


class ResponseDecodeError(InfrastructureError):
    """A successful response body is not the JSON shape the API documents."""

    default_code = "response_decode_error"

    def __init__(
        self,
        message: str,
        *,
        payload_type: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.payload_type = payload_type


class TrueVaultAPIError(InfrastructureError):
    """The API returned a 2xx response carrying an ``error`` object."""

    default_code = "api_error"

    def __init__(
        self,
        message: str,
        *,
        error_type: str | None = None,
        error_code: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.error_type = error_type
        self.error_code = error_code


__all__ = [
    "BadRequestError",
    "ExternalServiceError",
    "InfrastructureError",
    "RequestTimeoutError",
    "ResponseDecodeError",
    "ServerError",
    "TransportError",
    "TrueVaultAPIError",
    "UnauthorizedError",
]
