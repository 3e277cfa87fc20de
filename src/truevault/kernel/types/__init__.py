"""Kernel types – small generic value types."""
from truevault.kernel.types.result import Err, Ok, Result

__all__ = ["Err", "Ok", "Result"]
