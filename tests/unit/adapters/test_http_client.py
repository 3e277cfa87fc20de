"""Unit tests – TrueVault HTTP transport."""
from __future__ import annotations

import asyncio
import base64

import httpx
import pytest
import respx

from truevault.adapters.http import (
    CONTENT_TYPE_FORM,
    CONTENT_TYPE_JSON,
    DefaultURLBuilder,
    TrueVaultClient,
    URLBuilder,
    build_authorization_value,
)
from truevault.config import TrueVaultSettings
from truevault.kernel.errors import (
    BadRequestError,
    ExternalServiceError,
    RequestTimeoutError,
    ResponseDecodeError,
    ServerError,
    TransportError,
    UnauthorizedError,
)

URL = "https://tv.test/v1/thing"


# ---------------------------------------------------------------------------
# Authorization header
# ---------------------------------------------------------------------------


class TestAuthorization:
    def test_basic_value_is_key_with_empty_password(self) -> None:
        value = build_authorization_value("my-key")
        assert value.startswith("Basic ")
        assert base64.b64decode(value.removeprefix("Basic ")) == b"my-key:"

    @respx.mock
    def test_every_request_carries_auth_and_content_type(self) -> None:
        route = respx.post(URL).mock(return_value=httpx.Response(200, json={}))

        async def run() -> None:
            async with TrueVaultClient("my-key") as client:
                await client.post_json(URL, '{"a":1}')

        asyncio.run(run())
        sent = route.calls.last.request
        assert sent.headers["authorization"] == build_authorization_value("my-key")
        assert sent.headers["content-type"] == CONTENT_TYPE_JSON
        assert sent.content == b'{"a":1}'

    @respx.mock
    def test_with_api_key_swaps_credential_only(self) -> None:
        route = respx.get(URL).mock(return_value=httpx.Response(200, json={}))
        builder = DefaultURLBuilder("https://tv.test")

        async def run() -> None:
            async with TrueVaultClient("first", url_builder=builder) as client:
                other = client.with_api_key("second")
                assert other.url_builder is builder
                await other.get(URL)

        asyncio.run(run())
        assert route.calls.last.request.headers["authorization"] == build_authorization_value("second")


# ---------------------------------------------------------------------------
# Status and transport error mapping
# ---------------------------------------------------------------------------


class TestErrorMapping:
    @pytest.mark.parametrize(
        ("status", "error_cls"),
        [(400, BadRequestError), (401, UnauthorizedError), (500, ServerError), (404, ExternalServiceError)],
    )
    def test_status_maps_to_error(self, status, error_cls) -> None:
        async def run() -> None:
            async with TrueVaultClient("k") as client:
                with pytest.raises(error_cls) as exc_info:
                    await client.get(URL)
            assert exc_info.value.status_code == status

        with respx.mock:
            respx.get(URL).mock(return_value=httpx.Response(status))
            asyncio.run(run())

    @respx.mock
    def test_api_error_message_lands_in_detail(self) -> None:
        respx.get(URL).mock(
            return_value=httpx.Response(400, json={"error": {"message": "bad filter", "type": "invalid"}})
        )

        async def run() -> None:
            async with TrueVaultClient("k") as client:
                with pytest.raises(BadRequestError) as exc_info:
                    await client.get(URL)
            assert exc_info.value.detail == {"api_message": "bad filter", "api_type": "invalid"}

        asyncio.run(run())

    @respx.mock
    def test_transaction_id_travels_with_status_error(self) -> None:
        respx.get(URL).mock(
            return_value=httpx.Response(
                500, json={"transaction_id": "tx-500", "error": {"message": "internal", "type": "SERVER"}}
            )
        )

        async def run() -> None:
            async with TrueVaultClient("k") as client:
                with pytest.raises(ServerError) as exc_info:
                    await client.get(URL)
            assert exc_info.value.transaction_id == "tx-500"
            assert exc_info.value.to_dict()["transaction_id"] == "tx-500"

        asyncio.run(run())

    @respx.mock
    def test_timeout_maps_to_request_timeout(self) -> None:
        respx.get(URL).mock(side_effect=httpx.ReadTimeout("slow"))

        async def run() -> None:
            async with TrueVaultClient("k") as client:
                with pytest.raises(RequestTimeoutError):
                    await client.get(URL)

        asyncio.run(run())

    @respx.mock
    def test_connection_failure_maps_to_transport_error(self) -> None:
        respx.get(URL).mock(side_effect=httpx.ConnectError("refused"))

        async def run() -> None:
            async with TrueVaultClient("k") as client:
                with pytest.raises(TransportError) as exc_info:
                    await client.get(URL)
            assert not isinstance(exc_info.value, RequestTimeoutError)
            assert exc_info.value.url == URL

        asyncio.run(run())

    @respx.mock
    def test_non_json_success_body_raises(self) -> None:
        respx.get(URL).mock(return_value=httpx.Response(200, text="<html>"))

        async def run() -> None:
            async with TrueVaultClient("k") as client:
                with pytest.raises(ResponseDecodeError):
                    await client.get(URL)

        asyncio.run(run())

    @respx.mock
    def test_empty_success_body_is_empty_dict(self) -> None:
        respx.delete(URL).mock(return_value=httpx.Response(204))

        async def run() -> dict:
            async with TrueVaultClient("k") as client:
                return await client.delete(URL)

        assert asyncio.run(run()) == {}


# ---------------------------------------------------------------------------
# Form bodies and settings
# ---------------------------------------------------------------------------


class TestRequests:
    @respx.mock
    def test_post_form_encodes_fields(self) -> None:
        route = respx.post(URL).mock(return_value=httpx.Response(200, json={"ok": True}))

        async def run() -> dict:
            async with TrueVaultClient("k") as client:
                return await client.post_form(URL, {"username": "ann", "status": "ACTIVATED"})

        assert asyncio.run(run()) == {"ok": True}
        sent = route.calls.last.request
        assert sent.headers["content-type"] == CONTENT_TYPE_FORM
        assert sent.content == b"username=ann&status=ACTIVATED"

    def test_from_settings_uses_base_url(self) -> None:
        settings = TrueVaultSettings(api_key="k", base_url="https://eu.tv.test/", timeout=3.0)
        client = TrueVaultClient.from_settings(settings)
        assert client.url_builder.search_document_url("v1") == "https://eu.tv.test/v1/vaults/v1/search"
        asyncio.run(client.aclose())


class TestDefaultURLBuilder:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(DefaultURLBuilder(), URLBuilder)

    def test_endpoints(self) -> None:
        b = DefaultURLBuilder()
        assert b.search_document_url("vault-1") == "https://api.truevault.com/v1/vaults/vault-1/search"
        assert b.create_user_url() == "https://api.truevault.com/v1/users"
        assert b.get_user_url(["a", "b"]) == "https://api.truevault.com/v2/users/a,b"
        assert b.list_user_url() == "https://api.truevault.com/v2/users"
        assert b.update_user_url("u") == "https://api.truevault.com/v1/users/u"
        assert b.update_user_password_url("u") == "https://api.truevault.com/v1/users/u/password"
        assert b.delete_user_url("u") == "https://api.truevault.com/v1/users/u"
        assert b.create_access_token_url("u") == "https://api.truevault.com/v1/users/u/access_token"
        assert b.create_api_key_url("u") == "https://api.truevault.com/v1/users/u/api_key"

    def test_path_segments_are_quoted(self) -> None:
        assert DefaultURLBuilder().update_user_url("a/b") == "https://api.truevault.com/v1/users/a%2Fb"
