"""Documents – search results, document decoding and the search service."""
from truevault.documents.models import (
    SearchDocument,
    SearchDocumentResult,
    SearchDocumentResultInfo,
    decode_document,
)
from truevault.documents.service import DocumentService

__all__ = [
    "DocumentService",
    "SearchDocument",
    "SearchDocumentResult",
    "SearchDocumentResultInfo",
    "decode_document",
]
