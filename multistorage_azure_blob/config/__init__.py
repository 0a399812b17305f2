from .settings import AzureBlobConfig, LoggingConfig, MultiStorageConfig, StorageConfig

__all__ = [
    "AzureBlobConfig",
    "LoggingConfig",
    "MultiStorageConfig",
    "StorageConfig",
]
