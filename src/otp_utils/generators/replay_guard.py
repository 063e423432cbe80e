"""
Single-use verification on top of HOTP/TOTP generators.
"""

from __future__ import annotations

import hashlib
import logging
import threading
from typing import Any, Optional, Union

from ..db_utils.token_store import LastCodeTokenStore, TokenStore
from .hotp import HOTPGenerator, code_is_well_formed
from .totp import TOTPGenerator

logger = logging.getLogger(__name__)

Generator = Union[HOTPGenerator, TOTPGenerator]


def secret_id(secret: bytes) -> str:
    """Storage key for a secret; the raw secret is never used as a key."""
    return hashlib.sha256(secret).hexdigest()


class ReplayGuard:
    """
    Wraps ``generator.verify`` so that each code verifies at most once per
    secret.

    The replay check, the verification and the insert run under one lock, so
    two concurrent verifications of the same code cannot both succeed.

    Without an explicit store only the last accepted code per secret is
    remembered. Pass a :class:`MemoryTokenStore` to reject every code used
    within its TTL.
    """

    def __init__(self, generator: Generator, store: Optional[TokenStore] = None):
        self.generator = generator
        self.store: TokenStore = store if store is not None else LastCodeTokenStore()
        self.secret_id = secret_id(generator.secret)
        self._lock = threading.Lock()

    def verify(self, code: str, *args: Any, **kwargs: Any) -> bool:
        """
        Verify a code and mark it as used.

        Takes the same arguments as the wrapped generator's ``verify``:
        ``(code, counter, delay_window=0)`` for HOTP and
        ``(code, delay_window=0, clock=None)`` for TOTP.
        """
        if not code_is_well_formed(code, self.generator.password_length):
            return False

        with self._lock:
            if self.store.contains(self.secret_id, code):
                logger.warning("Rejected previously used one-time password")
                return False
            if not self.generator.verify(code, *args, **kwargs):
                return False
            self.store.put(self.secret_id, code)
            logger.debug("One-time password accepted and recorded as used")
            return True


__all__ = ["ReplayGuard", "secret_id"]
