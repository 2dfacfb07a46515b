from __future__ import annotations

from typing import BinaryIO, Iterator, Protocol, Union

from mdsclient.domain.byte_range import NO_RANGE, ByteRange
from mdsclient.domain.models import DownloadInfo, Key, Namespace, UploadInfo


# ---- Ports (Hexagonal boundaries) ----
class ObjectBody(Protocol):
    """Live object body handed to the caller, who must close it."""

    def read(self) -> bytes: ...
    def iter_chunks(self, chunk_size: int = ...) -> Iterator[bytes]: ...
    def close(self) -> None: ...


class ObjectStoragePort(Protocol):
    """Store/read/delete/ping/direct-link operations against an MDS proxy."""

    def upload(
        self,
        namespace: Namespace,
        key: Key,
        size: int,
        body: Union[bytes, BinaryIO, Iterator[bytes]],
    ) -> UploadInfo: ...
    def get(
        self, namespace: Namespace, key: Key, byte_range: ByteRange = NO_RANGE
    ) -> ObjectBody: ...  # caller owns the returned body
    def get_file(
        self, namespace: Namespace, key: Key, byte_range: ByteRange = NO_RANGE
    ) -> bytes: ...
    def delete(self, namespace: Namespace, key: Key) -> None: ...
    def ping(self) -> None: ...
    def download_info(self, namespace: Namespace, key: Key) -> DownloadInfo: ...


__all__ = ["ObjectBody", "ObjectStoragePort"]
