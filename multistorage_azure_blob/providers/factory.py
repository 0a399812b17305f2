from typing import Any, Callable, Dict, List, Optional, Type
from loguru import logger

from .base import StorageProvider
from .azure_providers import AzureBlobStorageProvider
from ..config.settings import MultiStorageConfig
from ..exceptions import ConfigurationException
from ..hooks import ManagerHooks


class ProviderFactory:
    """Factory class for creating storage provider instances."""

    _storage_providers: Dict[str, Type[StorageProvider]] = {
        'azure-blob': AzureBlobStorageProvider,
    }

    # Loads a provider's settings section when the caller passes no config
    _storage_config_loaders: Dict[str, Callable[[MultiStorageConfig], Any]] = {
        'azure-blob': lambda config: config.azure_blob,
    }

    @classmethod
    def create_storage_provider(
        cls,
        provider_name: str = None,
        config: Any = None,
        hooks: Optional[ManagerHooks] = None,
    ) -> StorageProvider:
        """
        Create storage provider instance.

        Args:
            provider_name: Name of the provider (optional, defaults to config)
            config: Provider configuration (optional, defaults to the provider's settings section)
            hooks: Logging callbacks of the owning storage manager

        Returns:
            StorageProvider instance

        Raises:
            ConfigurationException: If provider is not supported or has no configuration
        """
        settings = MultiStorageConfig()
        if provider_name is None:
            provider_name = settings.storage.provider

        if provider_name not in cls._storage_providers:
            raise ConfigurationException(
                f"Unknown storage provider: {provider_name}. "
                f"Supported providers: {list(cls._storage_providers.keys())}"
            )

        if config is None:
            loader = cls._storage_config_loaders.get(provider_name)
            if loader is None:
                raise ConfigurationException(f"No configuration given for storage provider: {provider_name}")
            config = loader(settings)

        provider_class = cls._storage_providers[provider_name]
        logger.info(f"Creating storage provider: {provider_name}")
        return provider_class(config, hooks=hooks)

    @classmethod
    def get_supported_providers(cls) -> Dict[str, List[str]]:
        """Get the names of all registered providers."""
        return {
            "storage": list(cls._storage_providers.keys())
        }

    @classmethod
    def register_storage_provider(
        cls,
        name: str,
        provider_class: Type[StorageProvider],
        config_loader: Optional[Callable[[MultiStorageConfig], Any]] = None,
    ):
        """Register a new storage provider."""
        cls._storage_providers[name] = provider_class
        if config_loader is not None:
            cls._storage_config_loaders[name] = config_loader
        logger.info(f"Registered storage provider: {name}")


# Global provider factory instance
provider_factory = ProviderFactory()
