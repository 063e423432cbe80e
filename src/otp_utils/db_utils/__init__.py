"""Storage backends for single-use token tracking."""

from .token_store import LastCodeTokenStore, MemoryTokenStore, TokenStore

__all__ = [
    "TokenStore",
    "LastCodeTokenStore",
    "MemoryTokenStore",
]
