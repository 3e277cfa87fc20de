"""HTTP adapter – TrueVaultClient."""
from __future__ import annotations

import base64
import time
from collections.abc import Mapping
from typing import Any

import httpx

from truevault.adapters.http.url_builder import DefaultURLBuilder, URLBuilder
from truevault.config.settings import TrueVaultSettings
from truevault.kernel.errors import (
    BadRequestError,
    ExternalServiceError,
    RequestTimeoutError,
    ResponseDecodeError,
    ServerError,
    TransportError,
    UnauthorizedError,
)
from truevault.observability.logging import get_logger

CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_FORM = "application/x-www-form-urlencoded"

logger = get_logger(__name__)

_STATUS_ERRORS: dict[int, type[ExternalServiceError]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    500: ServerError,
}


def build_authorization_value(api_key: str) -> str:
    """Return the ``Authorization`` header for an API key or access token."""
    return "Basic " + base64.b64encode(f"{api_key}:".encode()).decode("ascii")


class TrueVaultClient:
    """Async httpx wrapper that authenticates and maps API failures to errors.

    Usage::

        async with TrueVaultClient(api_key) as client:
            result = await DocumentService(client).search_documents(vault_id, search_filter)

    The underlying :class:`httpx.AsyncClient` is closed on exit only when
    this client created it.
    """

    def __init__(
        self,
        api_key: str,
        *,
        url_builder: URLBuilder | None = None,
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
        **kwargs: Any,
    ) -> None:
        self._authorization = build_authorization_value(api_key)
        self._url_builder: URLBuilder = url_builder or DefaultURLBuilder()
        self._owns_http_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=timeout, **kwargs)

    @classmethod
    def from_settings(cls, settings: TrueVaultSettings, **kwargs: Any) -> "TrueVaultClient":
        return cls(
            settings.api_key,
            url_builder=kwargs.pop("url_builder", None) or DefaultURLBuilder(settings.base_url),
            timeout=settings.timeout,
            **kwargs,
        )

    def with_api_key(self, api_key: str) -> "TrueVaultClient":
        """Return a client for another credential sharing this one's connection pool.

        The returned client never closes the shared pool.
        """
        return TrueVaultClient(api_key, url_builder=self._url_builder, http_client=self._client)

    @property
    def url_builder(self) -> URLBuilder:
        return self._url_builder

    async def __aenter__(self) -> "TrueVaultClient":
        if self._owns_http_client:
            await self._client.__aenter__()
        return self

    async def __aexit__(self, *args: Any) -> None:
        if self._owns_http_client:
            await self._client.__aexit__(*args)

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self._client.aclose()

    async def get(self, url: str, *, params: Mapping[str, str] | None = None) -> Any:
        return await self.request("GET", url, params=params)

    async def post_json(self, url: str, body: str | bytes) -> Any:
        content = body.encode() if isinstance(body, str) else body
        return await self.request("POST", url, content_type=CONTENT_TYPE_JSON, content=content)

    async def post_form(self, url: str, data: Mapping[str, str] | None = None) -> Any:
        return await self.request("POST", url, content_type=CONTENT_TYPE_FORM, data=data)

    async def put_form(self, url: str, data: Mapping[str, str] | None = None) -> Any:
        return await self.request("PUT", url, content_type=CONTENT_TYPE_FORM, data=data)

    async def delete(self, url: str) -> Any:
        return await self.request("DELETE", url)

    async def request(
        self,
        method: str,
        url: str,
        *,
        content_type: str = CONTENT_TYPE_JSON,
        content: bytes | None = None,
        data: Mapping[str, str] | None = None,
        params: Mapping[str, str] | None = None,
    ) -> Any:
        """Send one request and return the decoded JSON body.

        Raises
        ------
        UnauthorizedError, BadRequestError, ServerError
            On HTTP 401, 400 and 500.
        ExternalServiceError
            On any other non-2xx status.
        RequestTimeoutError, TransportError
            When no response was received.
        ResponseDecodeError
            When a 2xx body is not JSON.
        """
        headers = {"Authorization": self._authorization, "Content-Type": content_type}
        started = time.monotonic()
        logger.debug("truevault.request", method=method, url=url)
        try:
            response = await self._client.request(
                method, url, headers=headers, content=content, data=data, params=params
            )
        except httpx.TimeoutException as exc:
            logger.warning("truevault.request_failed", method=method, url=url, reason="timeout")
            raise RequestTimeoutError(url, f"TrueVault request timed out: {method} {url}", cause=exc) from exc
        except httpx.HTTPError as exc:
            logger.warning("truevault.request_failed", method=method, url=url, reason=type(exc).__name__)
            raise TransportError(url, f"TrueVault request failed: {method} {url}: {exc}", cause=exc) from exc

        elapsed_ms = int((time.monotonic() - started) * 1000)
        logger.debug(
            "truevault.response", method=method, url=url, status=response.status_code, elapsed_ms=elapsed_ms
        )
        if response.is_error:
            raise self._status_error(method, url, response)
        return self._decode(url, response)

    def _status_error(self, method: str, url: str, response: httpx.Response) -> ExternalServiceError:
        body = _error_body(response)
        detail = _error_detail(body)
        transaction_id = body.get("transaction_id") or None
        logger.warning(
            "truevault.request_failed", method=method, url=url, status=response.status_code, **detail
        )
        error_cls = _STATUS_ERRORS.get(response.status_code)
        if error_cls is not None:
            return error_cls(url, detail=detail, transaction_id=transaction_id)
        return ExternalServiceError(
            url,
            f"HTTP {response.status_code} from {method} {url}",
            status_code=response.status_code,
            detail=detail,
            transaction_id=transaction_id,
        )

    @staticmethod
    def _decode(url: str, response: httpx.Response) -> Any:
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            raise ResponseDecodeError(f"Response from '{url}' is not JSON", cause=exc) from exc


def _error_body(response: httpx.Response) -> dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def _error_detail(body: dict[str, Any]) -> dict[str, Any]:
    """Pull ``error.message``/``error.type`` out of an error body, if any."""
    error = body.get("error")
    if not isinstance(error, dict):
        return {}
    return {f"api_{k}": v for k, v in error.items() if k in ("message", "type", "code")}


__all__ = [
    "CONTENT_TYPE_FORM",
    "CONTENT_TYPE_JSON",
    "TrueVaultClient",
    "build_authorization_value",
]
