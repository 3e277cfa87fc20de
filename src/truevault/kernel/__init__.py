"""Kernel – error hierarchy and shared value types."""
