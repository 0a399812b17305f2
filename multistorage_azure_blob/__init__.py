"""Azure Blob Storage provider for multi-storage, addressed by ``azure-blob://container/path`` locators."""

from .exceptions import (
    AddressingException,
    ConfigurationException,
    InvalidLocatorException,
    MultiStorageException,
    ProviderException,
    ResourceNotFoundException,
    TransportException,
    ValidationException,
)
from .hooks import ManagerHooks
from .config import AzureBlobConfig
from .providers import AzureBlobStorageProvider, BlobReadStream, BlobWriteStream, ProviderFactory

__version__ = "1.0.0"

__all__ = [
    "AddressingException",
    "AzureBlobConfig",
    "AzureBlobStorageProvider",
    "BlobReadStream",
    "BlobWriteStream",
    "ConfigurationException",
    "InvalidLocatorException",
    "ManagerHooks",
    "MultiStorageException",
    "ProviderException",
    "ProviderFactory",
    "ResourceNotFoundException",
    "TransportException",
    "ValidationException",
]
