"""HTTP adapter – authenticated async transport for the TrueVault API."""
from truevault.adapters.http.client import (
    CONTENT_TYPE_FORM,
    CONTENT_TYPE_JSON,
    TrueVaultClient,
    build_authorization_value,
)
from truevault.adapters.http.url_builder import DEFAULT_BASE_URL, DefaultURLBuilder, URLBuilder

__all__ = [
    "CONTENT_TYPE_FORM",
    "CONTENT_TYPE_JSON",
    "DEFAULT_BASE_URL",
    "DefaultURLBuilder",
    "TrueVaultClient",
    "URLBuilder",
    "build_authorization_value",
]
