"""Search errors – filter encoding and document decoding failures."""

from __future__ import annotations

from typing import Any

from truevault.kernel.errors.base import TrueVaultError


class SearchError(TrueVaultError):
    """A search filter could not be built or sent."""

    default_code = "search_error"


class SearchEncodingError(SearchError):
    """A value cannot be represented in the search wire format.

    ``path`` locates the offending value inside the filter, e.g.
    ``filter.price.value.gt``.
    """

    default_code = "search_encoding_error"

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.path = path
        if path is not None:
            self.detail.setdefault("path", path)


class DocumentDecodeError(TrueVaultError):
    """A raw search document could not be materialised."""

    default_code = "document_decode_error"

    def __init__(
        self,
        message: str,
        *,
        document_id: Any = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.document_id = document_id
        if document_id is not None:
            self.detail.setdefault("document_id", str(document_id))


class InvalidEncodingError(DocumentDecodeError):
    """The document payload is not valid padded standard base64."""

    default_code = "invalid_encoding"


class InvalidPayloadError(DocumentDecodeError):
    """The decoded bytes are not JSON, or do not fit the target shape."""

    default_code = "invalid_payload"


__all__ = [
    "DocumentDecodeError",
    "InvalidEncodingError",
    "InvalidPayloadError",
    "SearchEncodingError",
    "SearchError",
]
