"""Provider system for the multi-storage Azure Blob adapter."""

from .base import StorageProvider
from .factory import ProviderFactory, provider_factory
from .azure_providers import (
    AzureBlobStorageProvider,
    BlobReadStream,
    BlobWriteStream,
)

__all__ = [
    # Base classes
    'StorageProvider',
    # Factory
    'ProviderFactory',
    'provider_factory',
    # Azure providers
    'AzureBlobStorageProvider',
    'BlobReadStream',
    'BlobWriteStream',
]
