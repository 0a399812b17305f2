"""
Stream handles returned by the Azure Blob provider.

Writes are streamed as block blobs: bytes are buffered up to ``block_size``,
each full block is staged as soon as it is complete, and closing the stream
commits the staged block list. Nothing is visible in the container until the
commit, so an aborted stream leaves the previous blob content untouched.
"""

import uuid
from typing import AsyncIterator, List, Union

from azure.core.exceptions import AzureError
from azure.storage.blob import BlobBlock
from loguru import logger

from multistorage_azure_blob.config.settings import DEFAULT_BLOCK_SIZE
from multistorage_azure_blob.exceptions import TransportException
from multistorage_azure_blob.utils.error_handler import convert_exceptions


class BlobWriteStream:
    """Async writable byte stream bound to one block blob."""

    def __init__(self, blob_client, url: str, block_size: int = DEFAULT_BLOCK_SIZE):
        self.blob_client = blob_client
        self.url = url
        self.block_size = block_size
        self._stream_id = uuid.uuid4().hex
        self._buffer = bytearray()
        self._block_ids: List[str] = []
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def container_name(self) -> str:
        return self.blob_client.container_name

    @property
    def blob_name(self) -> str:
        return self.blob_client.blob_name

    @convert_exceptions({AzureError: TransportException})
    async def write(self, data: Union[bytes, bytearray, str]) -> int:
        if self._closed:
            raise ValueError("I/O operation on closed stream")
        if isinstance(data, str):
            data = data.encode("utf-8")

        self._buffer.extend(data)
        while len(self._buffer) >= self.block_size:
            chunk = bytes(self._buffer[:self.block_size])
            del self._buffer[:self.block_size]
            await self._stage_block(chunk)
        return len(data)

    async def _stage_block(self, chunk: bytes):
        # Ids must share one length within a blob; the SDK base64-encodes them.
        block_id = f"{self._stream_id}-{len(self._block_ids):08d}"
        await self.blob_client.stage_block(block_id=block_id, data=chunk, length=len(chunk))
        self._block_ids.append(block_id)

    @convert_exceptions({AzureError: TransportException})
    async def close(self):
        """Stage buffered bytes and commit the blob."""
        if self._closed:
            return
        self._closed = True
        try:
            if self._buffer:
                await self._stage_block(bytes(self._buffer))
                self._buffer.clear()
            await self.blob_client.commit_block_list([BlobBlock(block_id=block_id) for block_id in self._block_ids])
            logger.debug(f"Committed {len(self._block_ids)} block(s) to {self.url}")
        finally:
            await self.blob_client.close()

    async def abort(self):
        """Discard the stream without committing; staged blocks expire on the service side."""
        if self._closed:
            return
        self._closed = True
        self._buffer.clear()
        logger.debug(f"Aborted write to {self.url}")
        await self.blob_client.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if exc_type is None:
            await self.close()
        else:
            await self.abort()


class BlobReadStream:
    """Async readable byte stream over a blob download, with the blob's properties attached."""

    def __init__(self, blob_client, downloader, url: str, properties):
        self.blob_client = blob_client
        self.downloader = downloader
        self.url = url
        self.properties = properties
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def size(self) -> int:
        return self.properties.size

    @convert_exceptions({AzureError: TransportException})
    async def read(self, size: int = -1) -> bytes:
        if self._closed:
            raise ValueError("I/O operation on closed stream")
        return await self.downloader.read(size)

    @convert_exceptions({AzureError: TransportException})
    async def readall(self) -> bytes:
        if self._closed:
            raise ValueError("I/O operation on closed stream")
        return await self.downloader.readall()

    def __aiter__(self) -> AsyncIterator[bytes]:
        return self._iter_chunks()

    async def _iter_chunks(self) -> AsyncIterator[bytes]:
        if self._closed:
            raise ValueError("I/O operation on closed stream")
        try:
            async for chunk in self.downloader.chunks():
                yield chunk
        except AzureError as e:
            raise TransportException(str(e), details={"original_exception": type(e).__name__}) from e

    async def close(self):
        if self._closed:
            return
        self._closed = True
        await self.blob_client.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
