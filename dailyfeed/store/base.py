"""Local key/value store contract."""

from abc import ABC, abstractmethod
from typing import Optional


class LocalStore(ABC):
    """Abstract byte store addressed by fixed key names.

    Implementations raise ``StoreError`` for backend failures. Access is
    sequential; no concurrent writers are assumed.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[bytes]:
        """Return the value stored under ``key``, or None if absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: bytes) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key``. Removing a missing key is not an error."""
        pass

    def close(self) -> None:
        """Release backend resources."""
