"""
Shared fixtures: an in-memory stand-in for ``azure.storage.blob.aio.BlobServiceClient``.

Every fake client records the SDK calls it receives in ``FakeBlobStore.calls``
so tests can assert that validation failures never reach the network.
"""

import types
from typing import Dict, List, Optional

import pytest
from azure.core.exceptions import ResourceExistsError, ResourceNotFoundError

from multistorage_azure_blob.providers.azure_providers import storage_provider


def _not_found(message: str, error_code: str) -> ResourceNotFoundError:
    error = ResourceNotFoundError(message)
    error.error_code = error_code
    return error


class FakeBlobStore:
    def __init__(self):
        self.containers: Dict[str, Dict[str, bytes]] = {}
        self.staged: Dict[tuple, Dict[str, bytes]] = {}
        self.calls: List[tuple] = []
        # operation name -> exception raised instead of performing it
        self.failures: Dict[str, Exception] = {}

    def record(self, operation: str, *args):
        self.calls.append((operation,) + args)
        failure = self.failures.get(operation)
        if failure is not None:
            raise failure

    def operations(self) -> List[str]:
        return [call[0] for call in self.calls]


class FakeDownloader:
    def __init__(self, data: bytes, chunk_size: int = 4, store: Optional[FakeBlobStore] = None):
        self.store = store
        self._data = data
        self._position = 0
        self._chunk_size = chunk_size

    async def read(self, size: int = -1) -> bytes:
        if size is None or size < 0:
            size = len(self._data) - self._position
        chunk = self._data[self._position:self._position + size]
        self._position += len(chunk)
        return chunk

    async def readall(self) -> bytes:
        return await self.read()

    async def chunks(self):
        while self._position < len(self._data):
            yield await self.read(self._chunk_size)
            if self.store is not None:
                self.store.record("chunks")


class FakeBlobClient:
    def __init__(self, store: FakeBlobStore, container_name: str, blob_name: str):
        self.store = store
        self.container_name = container_name
        self.blob_name = blob_name
        self.closed = False

    def _key(self):
        return (self.container_name, self.blob_name)

    def _existing(self) -> bytes:
        container = self.store.containers.get(self.container_name)
        if container is None:
            raise _not_found("The specified container does not exist.", "ContainerNotFound")
        if self.blob_name not in container:
            raise _not_found("The specified blob does not exist.", "BlobNotFound")
        return container[self.blob_name]

    async def stage_block(self, block_id: str, data: bytes, length: Optional[int] = None, **kwargs):
        self.store.record("stage_block", self.container_name, self.blob_name, block_id)
        self.store.staged.setdefault(self._key(), {})[block_id] = bytes(data)

    async def commit_block_list(self, block_list, **kwargs):
        self.store.record("commit_block_list", self.container_name, self.blob_name)
        staged = self.store.staged.pop(self._key(), {})
        self.store.containers[self.container_name][self.blob_name] = b"".join(staged[block.id] for block in block_list)

    async def get_blob_properties(self, **kwargs):
        self.store.record("get_blob_properties", self.container_name, self.blob_name)
        data = self._existing()
        return types.SimpleNamespace(
            name=self.blob_name,
            container=self.container_name,
            size=len(data),
            content_settings=types.SimpleNamespace(content_type="application/octet-stream"),
        )

    async def download_blob(self, **kwargs):
        self.store.record("download_blob", self.container_name, self.blob_name)
        return FakeDownloader(self._existing(), store=self.store)

    async def delete_blob(self, **kwargs):
        self.store.record("delete_blob", self.container_name, self.blob_name)
        self._existing()
        del self.store.containers[self.container_name][self.blob_name]

    async def exists(self, **kwargs) -> bool:
        self.store.record("exists", self.container_name, self.blob_name)
        return self.blob_name in self.store.containers.get(self.container_name, {})

    async def close(self):
        self.closed = True


class FakeContainerClient:
    def __init__(self, store: FakeBlobStore, container_name: str):
        self.store = store
        self.container_name = container_name

    async def create_container(self, **kwargs):
        self.store.record("create_container", self.container_name)
        if self.container_name in self.store.containers:
            raise ResourceExistsError("The specified container already exists.")
        self.store.containers[self.container_name] = {}

    async def close(self):
        pass


class FakeBlobServiceClient:
    store: FakeBlobStore = None

    def __init__(self, account_url: str, credential=None, **kwargs):
        self.account_url = account_url
        self.credential = credential
        self.closed = False

    def get_container_client(self, container: str) -> FakeContainerClient:
        return FakeContainerClient(self.store, container)

    def get_blob_client(self, container: str, blob: str) -> FakeBlobClient:
        return FakeBlobClient(self.store, container, blob)

    async def close(self):
        self.closed = True


@pytest.fixture
def blob_store(monkeypatch) -> FakeBlobStore:
    store = FakeBlobStore()
    service_class = type("BoundFakeBlobServiceClient", (FakeBlobServiceClient,), {"store": store})
    monkeypatch.setattr(storage_provider, "BlobServiceClient", service_class)
    return store


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep developer settings out of configuration tests."""
    for variable in (
        "AZURE_BLOB_ACCOUNT_NAME",
        "AZURE_BLOB_ACCESS_KEY",
        "AZURE_BLOB_DEFAULT_CONTAINER",
        "AZURE_BLOB_FIRST_FOLDER_IS_CONTAINER",
        "AZURE_BLOB_ACCOUNT_URL",
        "AZURE_BLOB_BLOCK_SIZE",
        "STORAGE_PROVIDER",
    ):
        monkeypatch.delenv(variable, raising=False)
    # No .env lookups while testing
    monkeypatch.setattr("multistorage_azure_blob.config.settings.find_dotenv", lambda *args, **kwargs: "")


class RecordingHooks:
    def __init__(self):
        self.debug_messages: List[str] = []
        self.error_messages: List[str] = []

    def debug(self, message: str):
        self.debug_messages.append(message)

    def error(self, message: str):
        self.error_messages.append(message)


@pytest.fixture
def recorded_hooks():
    from multistorage_azure_blob.hooks import ManagerHooks

    recorder = RecordingHooks()
    return recorder, ManagerHooks(debug=recorder.debug, error=recorder.error)
