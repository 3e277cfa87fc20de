"""Documents – DocumentService."""
from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError

from truevault.adapters.http import TrueVaultClient
from truevault.documents.models import SearchDocumentResult
from truevault.kernel.errors import ResponseDecodeError
from truevault.observability.logging import get_logger
from truevault.search import SearchFilter, dumps

logger = get_logger(__name__)


class DocumentService:
    """Document search against one TrueVault account.

    See https://docs.truevault.com/documentsearch#search-documents
    """

    def __init__(self, client: TrueVaultClient) -> None:
        self._client = client

    async def search_documents(self, vault_id: str, search_filter: SearchFilter) -> SearchDocumentResult:
        """Run *search_filter* against *vault_id*.

        The filter is encoded before anything is sent, so an
        :class:`~truevault.kernel.errors.SearchEncodingError` means no
        request was made.
        """
        body = dumps(search_filter)
        url = self._client.url_builder.search_document_url(vault_id)
        logger.debug("documents.search", vault_id=vault_id, fields=sorted(search_filter.filter))

        payload = await self._client.post_json(url, body)
        try:
            result = SearchDocumentResult.model_validate(payload)
        except PydanticValidationError as exc:
            raise ResponseDecodeError(
                "Search response does not match the documented envelope",
                payload_type="SearchDocumentResult",
                cause=exc,
            ) from exc

        logger.debug(
            "documents.search_completed",
            vault_id=vault_id,
            returned=len(result.documents),
            total=result.info.total_result_count,
        )
        return result


__all__ = ["DocumentService"]
