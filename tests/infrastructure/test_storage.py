"""Tests for the content sinks."""

from __future__ import annotations

import pytest
from azure.core.exceptions import HttpResponseError, ResourceNotFoundError

from formvault.config import Settings
from formvault.domain.errors import NotFound, StorageFailure
from formvault.infrastructure.storage import (
    AzureBlobContentSink,
    LocalContentSink,
    build_content_sink,
)


def test_local_sink_write_read_delete(tmp_path):
    sink = LocalContentSink(tmp_path)

    sink.write("record/attachment", b"payload")
    assert sink.read("record/attachment") == b"payload"

    sink.delete("record/attachment")
    with pytest.raises(NotFound):
        sink.read("record/attachment")
    assert not (tmp_path / "record").exists()


def test_local_sink_overwrites(tmp_path):
    sink = LocalContentSink(tmp_path)

    sink.write("a/b", b"one")
    sink.write("a/b", b"two")

    assert sink.read("a/b") == b"two"
    assert [path.name for path in (tmp_path / "a").iterdir()] == ["b"]


def test_local_sink_delete_missing_is_noop(tmp_path):
    LocalContentSink(tmp_path).delete("nothing/here")


@pytest.mark.parametrize("locator", ["../outside", "a/../../outside", ""])
def test_local_sink_rejects_escaping_locators(tmp_path, locator):
    sink = LocalContentSink(tmp_path / "root")

    with pytest.raises(StorageFailure):
        sink.write(locator, b"x")


class _FakeDownload:
    def __init__(self, data: bytes) -> None:
        self._data = data

    def readall(self) -> bytes:
        return self._data


class _FakeBlobClient:
    def __init__(self, container: "_FakeContainerClient", name: str) -> None:
        self.container = container
        self.name = name

    def upload_blob(self, data, overwrite=False, content_settings=None):
        if self.container.fail_uploads:
            raise HttpResponseError(message="throttled")
        self.container.blobs[self.name] = (data, content_settings)

    def download_blob(self):
        if self.name not in self.container.blobs:
            raise ResourceNotFoundError(message="missing")
        return _FakeDownload(self.container.blobs[self.name][0])

    def delete_blob(self):
        if self.name not in self.container.blobs:
            raise ResourceNotFoundError(message="missing")
        del self.container.blobs[self.name]


class _FakeContainerClient:
    def __init__(self) -> None:
        self.blobs: dict[str, tuple[bytes, object]] = {}
        self.fail_uploads = False

    def get_blob_client(self, name: str) -> _FakeBlobClient:
        return _FakeBlobClient(self, name)


def test_azure_sink_round_trip():
    container = _FakeContainerClient()
    sink = AzureBlobContentSink(container)

    sink.write("r/a", b"blob", content_type="application/pdf")

    assert sink.read("r/a") == b"blob"
    assert container.blobs["r/a"][1].content_type == "application/pdf"
    sink.delete("r/a")
    sink.delete("r/a")
    with pytest.raises(NotFound):
        sink.read("r/a")


def test_azure_sink_wraps_service_errors():
    container = _FakeContainerClient()
    container.fail_uploads = True

    with pytest.raises(StorageFailure):
        AzureBlobContentSink(container).write("r/a", b"blob")


def test_build_content_sink_defaults_to_local(tmp_path):
    settings = Settings(storage_root=str(tmp_path))

    sink = build_content_sink(settings)

    assert isinstance(sink, LocalContentSink)
    assert sink.root == tmp_path.resolve()
