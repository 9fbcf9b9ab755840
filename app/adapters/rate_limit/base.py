"""Rate limiter interfaces.

The API should depend on this abstraction (not the concrete implementation)
so we can swap storage backends later (e.g., Redis) with minimal changes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class AbstractRateLimiter(ABC):
    """Interface for per-key admission gates."""

    @abstractmethod
    def can_make_request(self, key: str) -> bool:
        """Check whether ``key`` may proceed, recording the request if admitted.

        Args:
            key: Client identifier (e.g., IP address, or "anonymous").

        Returns:
            True if admitted, False if the key's quota is exhausted.
        """
        raise NotImplementedError
