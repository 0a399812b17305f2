from .storage_provider import AzureBlobStorageProvider
from .streams import BlobReadStream, BlobWriteStream

__all__ = [
    "AzureBlobStorageProvider",
    "BlobReadStream",
    "BlobWriteStream",
]
