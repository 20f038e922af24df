"""Content sinks persisting attachment bytes.

Two backends are available: a directory on local disk and an Azure Blob
Storage container. Both address content by an opaque locator string and
translate backend errors into :class:`NotFound` / :class:`StorageFailure`.
"""

from __future__ import annotations

import logging
import os
import tempfile
from functools import lru_cache
from pathlib import Path
from typing import Optional, Protocol

from azure.core.exceptions import AzureError, ResourceExistsError, ResourceNotFoundError
from azure.storage.blob import BlobServiceClient, ContainerClient, ContentSettings

from formvault.config import Settings, get_settings
from formvault.domain.errors import NotFound, StorageFailure

logger = logging.getLogger(__name__)


class ContentSink(Protocol):
    """Durable byte store keyed by locator."""

    def write(self, locator: str, data: bytes, *, content_type: Optional[str] = None) -> None:
        ...

    def read(self, locator: str) -> bytes:
        ...

    def delete(self, locator: str) -> None:
        ...


class LocalContentSink:
    """Store content as files below ``root``."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root).resolve()

    def _path_for(self, locator: str) -> Path:
        candidate = (self.root / locator).resolve()
        if candidate == self.root or self.root not in candidate.parents:
            raise StorageFailure(f"Locator '{locator}' escapes the storage root")
        return candidate

    def write(self, locator: str, data: bytes, *, content_type: Optional[str] = None) -> None:
        """Write ``data`` to ``locator``, replacing the file atomically."""

        destination = self._path_for(locator)
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=destination.parent, prefix=".upload-")
            try:
                with os.fdopen(fd, "wb") as handle:
                    handle.write(data)
                os.replace(tmp_name, destination)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageFailure(f"Could not write content '{locator}'") from exc

    def read(self, locator: str) -> bytes:
        path = self._path_for(locator)
        try:
            return path.read_bytes()
        except FileNotFoundError as exc:
            raise NotFound(f"Content '{locator}' not found") from exc
        except OSError as exc:
            raise StorageFailure(f"Could not read content '{locator}'") from exc

    def delete(self, locator: str) -> None:
        """Delete the content at ``locator`` if it exists."""

        path = self._path_for(locator)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise StorageFailure(f"Could not delete content '{locator}'") from exc
        parent = path.parent
        if parent != self.root:
            try:
                parent.rmdir()
            except OSError:
                # Other files of the same record are still present.
                pass


class AzureBlobContentSink:
    """Store content as blobs inside one Azure Storage container."""

    def __init__(self, container_client: ContainerClient) -> None:
        self.container_client = container_client

    @classmethod
    def from_connection_string(
        cls, connection_string: str, container_name: str
    ) -> "AzureBlobContentSink":
        service_client = BlobServiceClient.from_connection_string(connection_string)
        try:
            service_client.create_container(container_name)
        except ResourceExistsError:
            pass
        return cls(service_client.get_container_client(container_name))

    def write(self, locator: str, data: bytes, *, content_type: Optional[str] = None) -> None:
        """Upload ``data`` to the container at ``locator``."""

        blob_client = self.container_client.get_blob_client(locator)
        content_settings = None
        if content_type is not None:
            content_settings = ContentSettings(content_type=content_type)
        try:
            blob_client.upload_blob(
                data,
                overwrite=True,
                content_settings=content_settings,
            )
        except AzureError as exc:
            raise StorageFailure(f"Could not upload blob '{locator}'") from exc

    def read(self, locator: str) -> bytes:
        blob_client = self.container_client.get_blob_client(locator)
        try:
            stream = blob_client.download_blob()
            return stream.readall()
        except ResourceNotFoundError as exc:
            raise NotFound(f"Content '{locator}' not found") from exc
        except AzureError as exc:
            raise StorageFailure(f"Could not download blob '{locator}'") from exc

    def delete(self, locator: str) -> None:
        """Delete the blob located at ``locator`` if it exists."""

        blob_client = self.container_client.get_blob_client(locator)
        try:
            blob_client.delete_blob()
        except ResourceNotFoundError:
            return
        except AzureError as exc:
            raise StorageFailure(f"Could not delete blob '{locator}'") from exc


def build_content_sink(settings: Settings) -> ContentSink:
    """Return the sink selected by ``settings.storage_backend``."""

    if settings.storage_backend == "azure":
        logger.info(
            "Using Azure blob container '%s' for attachment content",
            settings.azure_storage_container_name,
        )
        return AzureBlobContentSink.from_connection_string(
            settings.azure_storage_connection_string or "",
            settings.azure_storage_container_name or "",
        )
    logger.info("Using local directory '%s' for attachment content", settings.storage_root)
    return LocalContentSink(settings.storage_root)


@lru_cache
def get_content_sink() -> ContentSink:
    """Return the process-wide content sink."""

    return build_content_sink(get_settings())


__all__ = [
    "AzureBlobContentSink",
    "ContentSink",
    "LocalContentSink",
    "build_content_sink",
    "get_content_sink",
]
