from abc import ABC, abstractmethod
from typing import List, Optional


class StorageProvider(ABC):
    """Abstract base class for multi-storage providers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name."""
        pass

    @property
    @abstractmethod
    def schemes(self) -> List[str]:
        """Locator schemes this provider handles."""
        pass

    @abstractmethod
    async def post_stream(self, name: str, path: Optional[str] = None, container: Optional[str] = None):
        """Open a write stream for a new file; the stream carries the file's locator as ``url``."""
        pass

    @abstractmethod
    async def get_stream(self, url: str):
        """Open a read stream for the file at ``url``."""
        pass

    @abstractmethod
    async def delete(self, url: str) -> None:
        """Delete the file at ``url``."""
        pass

    @abstractmethod
    async def close(self):
        """Close the underlying client and cleanup."""
        pass
