"""HTTP utilities package: async ``httpx`` client construction."""

from .client import create_async_client

__all__ = ["create_async_client"]
