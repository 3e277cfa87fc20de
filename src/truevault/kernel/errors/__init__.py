"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    TrueVaultError
    ├── SearchError                  (search.py)
    │   └── SearchEncodingError
    ├── DocumentDecodeError          (search.py)
    │   ├── InvalidEncodingError
    │   └── InvalidPayloadError
    ├── ApplicationError             (application.py)
    │   ├── ValidationError
    │   └── ConfigError
    │       ├── MissingRequiredSettingError
    │       └── InvalidSettingValueError
    └── InfrastructureError          (infrastructure.py)
        ├── TransportError
        │   └── RequestTimeoutError
        ├── ExternalServiceError
        │   ├── UnauthorizedError
        │   ├── BadRequestError
        │   └── ServerError
        ├── ResponseDecodeError
        └── TrueVaultAPIError
"""

from truevault.kernel.errors.application import (
    ApplicationError,
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
    ValidationError,
)
from truevault.kernel.errors.base import TrueVaultError
from truevault.kernel.errors.infrastructure import (
    BadRequestError,
    ExternalServiceError,
    InfrastructureError,
    RequestTimeoutError,
    ResponseDecodeError,
    ServerError,
    TransportError,
    TrueVaultAPIError,
    UnauthorizedError,
)
from truevault.kernel.errors.search import (
    DocumentDecodeError,
    InvalidEncodingError,
    InvalidPayloadError,
    SearchEncodingError,
    SearchError,
)

__all__ = [
    "ApplicationError",
    "BadRequestError",
    "ConfigError",
    "DocumentDecodeError",
    "ExternalServiceError",
    "InfrastructureError",
    "InvalidEncodingError",
    "InvalidPayloadError",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "RequestTimeoutError",
    "ResponseDecodeError",
    "SearchEncodingError",
    "SearchError",
    "ServerError",
    "TransportError",
    "TrueVaultAPIError",
    "TrueVaultError",
    "UnauthorizedError",
    "ValidationError",
]
