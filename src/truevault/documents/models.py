"""Documents – search result envelope and raw document decoding."""
from __future__ import annotations

import base64
import binascii
import json
import uuid
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from truevault.kernel.errors import DocumentDecodeError, InvalidEncodingError, InvalidPayloadError
from truevault.kernel.types import Err, Ok, Result

T = TypeVar("T")


def decode_document(raw_document: str, target_type: type[T], *, document_id: Any = None) -> T:
    """Decode a base64 + JSON document into an instance of *target_type*.

    *target_type* may be anything pydantic can validate into: a
    ``BaseModel``, a dataclass, a ``TypedDict`` or plain ``dict``. A new
    object is returned, so a failed decode never leaves partial state.

    Raises
    ------
    InvalidEncodingError
        *raw_document* is not padded standard-alphabet base64.
    InvalidPayloadError
        The decoded bytes are not JSON or do not fit *target_type*.
    """
    try:
        data = base64.b64decode(raw_document, validate=True)
    except (binascii.Error, ValueError, TypeError) as exc:
        raise InvalidEncodingError(
            f"document is not valid base64: {exc}", document_id=document_id, cause=exc
        ) from exc

    try:
        parsed = json.loads(data)
    except ValueError as exc:
        raise InvalidPayloadError(
            f"document is not valid JSON: {exc}", document_id=document_id, cause=exc
        ) from exc

    try:
        return TypeAdapter(target_type).validate_python(parsed)
    except PydanticValidationError as exc:
        raise InvalidPayloadError(
            f"document does not match {getattr(target_type, '__name__', target_type)}",
            document_id=document_id,
            detail={"errors": exc.errors(include_url=False, include_context=False)},
            cause=exc,
        ) from exc


class SearchDocument(BaseModel):
    """One hit of a document search; ``document`` is base64-encoded JSON."""

    model_config = ConfigDict(frozen=True)

    document: str = ""
    document_id: uuid.UUID | None = None
    owner_id: uuid.UUID | None = None

    def decode(self, target_type: type[T]) -> T:
        return decode_document(self.document, target_type, document_id=self.document_id)


class SearchDocumentResultInfo(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    per_page: int = 0
    current_page: int = 0
    num_pages: int = Field(default=0, alias="num_page")
    total_result_count: int = 0


class SearchDocumentResult(BaseModel):
    """Envelope returned by the document search endpoint."""

    model_config = ConfigDict(frozen=True)

    info: SearchDocumentResultInfo = Field(default_factory=SearchDocumentResultInfo)
    documents: list[SearchDocument] = Field(default_factory=list)
    result: str = ""
    transaction_id: uuid.UUID | None = None

    def decode_documents(self, target_type: type[T]) -> list[Result[T, DocumentDecodeError]]:
        """Decode every document independently, in result order.

        A document that fails to decode yields an ``Err`` in its slot and
        does not affect its siblings.
        """
        outcomes: list[Result[T, DocumentDecodeError]] = []
        for doc in self.documents:
            try:
                outcomes.append(Ok(doc.decode(target_type)))
            except DocumentDecodeError as exc:
                outcomes.append(Err(exc))
        return outcomes


__all__ = [
    "SearchDocument",
    "SearchDocumentResult",
    "SearchDocumentResultInfo",
    "decode_document",
]
