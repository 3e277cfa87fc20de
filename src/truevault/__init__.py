"""
truevault – typed async client for the TrueVault document-vault API.

Import path convention::

    from truevault.search import Eq, In, Range, RangeValue, SearchFilter, String
    from truevault.documents import DocumentService
    from truevault.adapters.http import TrueVaultClient
    from truevault.kernel.errors import SearchEncodingError
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
