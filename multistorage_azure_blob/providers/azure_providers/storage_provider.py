from typing import Any, Dict, List, Optional, Union

from azure.core.exceptions import AzureError, ResourceExistsError, ResourceNotFoundError
from azure.storage.blob import StorageErrorCode
from azure.storage.blob.aio import BlobServiceClient
from loguru import logger
from pydantic import ValidationError

from multistorage_azure_blob import locator
from multistorage_azure_blob.config.settings import AzureBlobConfig
from multistorage_azure_blob.exceptions import (
    AddressingException,
    ConfigurationException,
    InvalidLocatorException,
    ResourceNotFoundException,
    TransportException,
)
from multistorage_azure_blob.hooks import ManagerHooks
from multistorage_azure_blob.providers.azure_providers.streams import BlobReadStream, BlobWriteStream
from multistorage_azure_blob.providers.base import StorageProvider
from multistorage_azure_blob.utils.error_handler import convert_exceptions, log_exceptions


class AzureBlobStorageProvider(StorageProvider):
    """Azure Blob Storage provider for the ``azure-blob://`` locator scheme."""

    def __init__(self, config: Union[AzureBlobConfig, Dict[str, Any]], hooks: Optional[ManagerHooks] = None):
        """
        Initialize Azure Blob Storage Provider.

        Args:
            config: AzureBlobConfig, or a dictionary of its fields:
                - account_name: Storage account name (required)
                - access_key: Storage account key (required)
                - default_container: Container used when a write names none
                - first_folder_is_container: Use the first path segment as the container
                - account_url: Endpoint override, e.g. for the Azurite emulator
                - block_size: Bytes buffered per staged block on writes
            hooks: Debug/error callbacks of the owning storage manager
        """
        if isinstance(config, dict):
            try:
                config = AzureBlobConfig(**config)
            except ValidationError as e:
                invalid = ", ".join(
                    f'{".".join(str(part) for part in error["loc"])}="{error.get("input")}"' for error in e.errors()
                )
                raise ConfigurationException(
                    f"Invalid azure-blob configuration: {invalid}",
                    details={"errors": e.errors(include_url=False)},
                ) from e
        self.config = config

        account_name = config.account_name
        access_key = config.access_key
        if not isinstance(account_name, str) or len(account_name) == 0:
            raise ConfigurationException(f'Need the account name but got "{account_name}"')
        if not isinstance(access_key, str) or len(access_key) == 0:
            raise ConfigurationException(f'Need the key but got "{access_key}"')

        self._service = BlobServiceClient(
            account_url=config.resolved_account_url,
            credential={"account_name": account_name, "account_key": access_key},
        )
        self._container_name = config.default_container
        self._use_first_folder_as_container = bool(config.first_folder_is_container)
        self.hooks = hooks or ManagerHooks()
        logger.info(f"Initialized Azure Blob Storage provider for account {account_name}")

    @classmethod
    def from_connection_string(cls, connection_string: str, hooks: Optional[ManagerHooks] = None):
        raise ConfigurationException("Creating the azure-blob provider from a connection string is not yet supported")

    def set_hooks(self, hooks: Optional[ManagerHooks]):
        self.hooks = hooks or ManagerHooks()

    @property
    def name(self) -> str:
        return locator.SCHEME

    @property
    def schemes(self) -> List[str]:
        return [locator.SCHEME]

    @property
    def service(self) -> BlobServiceClient:
        """The blob service connection."""
        return self._service

    @property
    def container_name(self) -> Optional[str]:
        """The name of the default container used for this provider."""
        return self._container_name

    def build_locator(self, path: str, container: Optional[str] = None) -> str:
        """
        Return the locator for ``path``. The locator is only an address for the
        multi-storage layer and cannot be fetched over HTTP.
        """
        return locator.build_locator(path, container or self.container_name)

    def container_from_locator(self, url: str) -> Optional[str]:
        return locator.container_from_locator(url)

    def path_from_locator(self, url: str) -> Optional[str]:
        return locator.path_from_locator(url)

    def _parse(self, url: str):
        container_name = self.container_from_locator(url)
        blob_name = self.path_from_locator(url)
        # None without "://"; empty for "azure-blob://container/" or "azure-blob:///file"
        if not container_name or not blob_name:
            raise InvalidLocatorException(f"Invalid URL {url}", details={"url": url})
        return container_name, blob_name

    def _resolve_target(self, name: str, path: Optional[str], container: Optional[str]):
        if isinstance(path, str) and len(path) > 0:
            name = f"{path}/{name}"
        name = locator.clean_path(name)

        if self._use_first_folder_as_container:
            segments = [segment for segment in name.split("/") if segment]
            if len(segments) < 2:
                raise AddressingException(
                    f'The file name "{name}" has no container name although the first folder '
                    f'is expected to be the container name.',
                    details={"name": name},
                )
            container_name = segments[0]
            name = "/".join(segments[1:])
        else:
            container_name = container or self.container_name

        if not isinstance(container_name, str) or len(container_name) == 0:
            raise AddressingException("Could not determine the container name.", details={"name": name})
        return container_name, name

    @convert_exceptions({AzureError: TransportException})
    async def _create_container_if_not_exists(self, container_name: str):
        self.hooks.notify_debug(f"Creating container {container_name} (if it does not yet exist)")
        container_client = self._service.get_container_client(container_name)
        try:
            await container_client.create_container()
        except ResourceExistsError:
            logger.debug(f"Container {container_name} already exists")
        except AzureError as e:
            self.hooks.notify_error(f"Failed to create container {container_name} due to error: {e}")
            raise
        finally:
            await container_client.close()

    async def post_stream(self, name: str, path: Optional[str] = None, container: Optional[str] = None) -> BlobWriteStream:
        """
        Open a write stream for ``name``.

        The container is taken from the first folder of ``path/name`` when the
        provider is configured that way, otherwise from ``container`` or the
        default container. The container is created if needed before the stream
        is returned; the stream's ``url`` is the locator of the new blob.

        Raises:
            AddressingException: If no container can be resolved
            TransportException: If the container cannot be created
        """
        container_name, blob_name = self._resolve_target(name, path, container)

        self.hooks.notify_debug(f"Posting stream {blob_name} in {container_name}")
        url = self.build_locator(blob_name, container_name)
        await self._create_container_if_not_exists(container_name)

        blob_client = self._service.get_blob_client(container=container_name, blob=blob_name)
        return BlobWriteStream(blob_client, url, block_size=self.config.block_size)

    @convert_exceptions({AzureError: TransportException})
    async def get_properties(self, url: str):
        """
        Return the properties of the blob at ``url``.

        Raises:
            InvalidLocatorException: If ``url`` is not an azure-blob locator
            ResourceNotFoundException: If the blob does not exist
            TransportException: If the request fails
        """
        container_name, blob_name = self._parse(url)

        self.hooks.notify_debug(f"Requesting properties for {blob_name} in {container_name}")
        blob_client = self._service.get_blob_client(container=container_name, blob=blob_name)
        try:
            return await blob_client.get_blob_properties()
        except ResourceNotFoundError as e:
            raise ResourceNotFoundException(f"The blob with the URL {url} does not exist.", details={"url": url}) from e
        except AzureError as e:
            self.hooks.notify_error(f"Failed to get properties for {blob_name} in {container_name} due to error: {e}")
            raise
        finally:
            await blob_client.close()

    @convert_exceptions({AzureError: TransportException})
    async def get_stream(self, url: str) -> BlobReadStream:
        """
        Open a read stream for the blob at ``url``. Properties are fetched
        first so a missing blob fails with ResourceNotFoundException.
        """
        container_name, blob_name = self._parse(url)

        self.hooks.notify_debug(f"Getting stream for {blob_name} in {container_name}")
        properties = await self.get_properties(url)

        blob_client = self._service.get_blob_client(container=container_name, blob=blob_name)
        try:
            downloader = await blob_client.download_blob()
        except AzureError as e:
            self.hooks.notify_error(f"Failed to open stream for {blob_name} in {container_name} due to error: {e}")
            await blob_client.close()
            raise
        return BlobReadStream(blob_client, downloader, url, properties)

    @convert_exceptions({AzureError: TransportException})
    async def delete(self, url: str) -> None:
        """
        Delete the blob at ``url``.

        A blob that does not exist counts as deleted: the not-found outcome is
        reported as debug information and the call succeeds. Reads, in
        contrast, surface not-found as ResourceNotFoundException.
        """
        container_name, blob_name = self._parse(url)

        self.hooks.notify_debug(f"Deleting {blob_name} in {container_name}")
        blob_client = self._service.get_blob_client(container=container_name, blob=blob_name)
        try:
            await blob_client.delete_blob()
        except ResourceNotFoundError as e:
            if getattr(e, "error_code", None) != StorageErrorCode.BLOB_NOT_FOUND:
                self.hooks.notify_error(f"Failed to delete {blob_name} in {container_name} due to error: {e}")
                raise
            self.hooks.notify_debug(
                f"Blob {blob_name} in {container_name} not found, ignoring error since we wanted to delete"
            )
        except AzureError as e:
            self.hooks.notify_error(f"Failed to delete {blob_name} in {container_name} due to error: {e}")
            raise
        finally:
            await blob_client.close()

    @convert_exceptions({AzureError: TransportException})
    async def exists(self, url: str) -> bool:
        container_name, blob_name = self._parse(url)
        blob_client = self._service.get_blob_client(container=container_name, blob=blob_name)
        try:
            return await blob_client.exists()
        finally:
            await blob_client.close()

    @log_exceptions(log_level="WARNING", include_traceback=False)
    async def close(self):
        """Close the underlying service client."""
        logger.info("Closing Azure Blob Storage client")
        await self._service.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
