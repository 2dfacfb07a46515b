"""REST adapter implementing ``ObjectStoragePort`` against an MDS proxy.

Endpoints (``U`` = upload port, ``R`` = read port):
  - POST U/upload-{namespace}/{key}        body: object bytes -> <post> envelope
  - GET  R/get-{namespace}/{key}           optional Range     -> object bytes
  - GET  U/delete-{namespace}/{key}
  - GET  R/ping
  - GET  R/downloadinfo-{namespace}/{key}                     -> <download-info>

Each call issues exactly one request, never retries, and closes the response
on every path except a successful ``get``, whose body is handed to the caller
as an ``ObjectStream``.
"""

from __future__ import annotations

import logging
from typing import Any, BinaryIO, Iterator, Optional, Union

import requests
from requests import exceptions as req_exc

from mdsclient.domain.byte_range import NO_RANGE, Between, ByteRange, From, NoRange
from mdsclient.domain.errors import (
    DirectLinkDisabledError,
    InvalidRangeError,
    KeyNotFoundError,
    MdsError,
    NamespaceNotFoundError,
    NamespaceWriteProhibitedError,
    StorageExhaustedError,
    TransportFailureError,
)
from mdsclient.domain.models import DownloadInfo, Key, MdsConfig, Namespace, UploadInfo
from mdsclient.domain.ports import ObjectStoragePort

from mdsclient.adapters.api_errors import StatusTable, error_for_status
from mdsclient.adapters.envelope import decode_download_info, decode_upload_info
from mdsclient.adapters.http_client import HttpConfig, MdsSession


_UPLOAD_ERRORS: StatusTable = {
    403: (NamespaceWriteProhibitedError, "update is prohibited for namespace {namespace}"),
    507: (StorageExhaustedError, "no space left in storage"),
}
_GET_ERRORS: StatusTable = {
    404: (KeyNotFoundError, "no such key {key}"),
    406: (NamespaceNotFoundError, "no such namespace {namespace}"),
    410: (NamespaceNotFoundError, "no such namespace {namespace}"),
}
_DELETE_ERRORS: StatusTable = {
    404: (KeyNotFoundError, "no such key {key}"),
}
_PING_ERRORS: StatusTable = {}
_DOWNLOAD_INFO_ERRORS: StatusTable = {
    404: (KeyNotFoundError, "no such key {key}"),
    410: (DirectLinkDisabledError, "direct links are disabled for namespace {namespace}"),
}

_CHUNK_SIZE = 64 * 1024


class ObjectStream:
    """Live object body returned by ``MdsRestAdapter.get``.

    The caller owns the stream and must close it, either explicitly or by
    using it as a context manager. Closing more than once is a no-op.
    """

    def __init__(self, response: requests.Response, *, context: str = "") -> None:
        self._response = response
        self._context = context
        self._closed = False

    @property
    def status_code(self) -> int:
        return self._response.status_code

    @property
    def headers(self) -> Any:
        return self._response.headers

    @property
    def closed(self) -> bool:
        return self._closed

    def iter_chunks(self, chunk_size: int = _CHUNK_SIZE) -> Iterator[bytes]:
        """Yield the body in chunks of at most ``chunk_size`` bytes."""
        if self._closed:
            raise ValueError("I/O operation on closed object stream")
        try:
            for chunk in self._response.iter_content(chunk_size):
                if chunk:
                    yield chunk
        except req_exc.RequestException as exc:
            raise TransportFailureError(
                f"transport failure while reading body: {exc}", context=self._context
            ) from exc

    def read(self) -> bytes:
        """Read the remaining body into memory."""
        return b"".join(self.iter_chunks())

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._response.close()

    def __enter__(self) -> "ObjectStream":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


class MdsRestAdapter(ObjectStoragePort):
    """HTTP adapter for one MDS proxy (host with an upload and a read port)."""

    def __init__(
        self,
        config: MdsConfig,
        *,
        session: Optional[requests.Session] = None,
        request_timeout_s: Optional[float] = None,
    ) -> None:
        """Create adapter for ``config``.

        Args:
            config: Proxy endpoint and credential.
            session: Transport to use; a private ``requests.Session`` is
                created when omitted.
            request_timeout_s: Timeout passed to the transport per request.
        """
        self._log = logging.getLogger(__name__)
        self.config = config
        self.cfg = HttpConfig(request_timeout_s=request_timeout_s)
        self.http = MdsSession(config.auth_header, self.cfg, session)

    # ---------- URLs ----------

    def _url(self, port: int, path: str) -> str:
        return f"http://{self.config.host}:{port}{path}"

    def upload_url(self, namespace: Namespace, key: Key) -> str:
        return self._url(self.config.upload_port, f"/upload-{namespace}/{key}")

    def read_url(self, namespace: Namespace, key: Key) -> str:
        """Return a URL which could be used to get the object's data."""
        return self._url(self.config.read_port, f"/get-{namespace}/{key}")

    def delete_url(self, namespace: Namespace, key: Key) -> str:
        return self._url(self.config.upload_port, f"/delete-{namespace}/{key}")

    def ping_url(self) -> str:
        return self._url(self.config.read_port, "/ping")

    def download_info_url(self, namespace: Namespace, key: Key) -> str:
        return self._url(self.config.read_port, f"/downloadinfo-{namespace}/{key}")

    # ---------- ObjectStoragePort ----------

    def upload(
        self,
        namespace: Namespace,
        key: Key,
        size: int,
        body: Union[bytes, BinaryIO, Iterator[bytes]],
    ) -> UploadInfo:
        """Store ``size`` bytes read from ``body`` under ``namespace/key``.

        ``size`` is always sent as ``Content-Length``, also for bodies whose
        length the transport cannot determine.

        Raises:
            ValueError: If ``size`` is negative.
            NamespaceWriteProhibitedError: HTTP 403.
            StorageExhaustedError: HTTP 507.
            UnexpectedStatusError: Any other non-200 status.
            MalformedResponseError: The ``<post>`` envelope cannot be decoded.
            TransportFailureError: The transport failed.
        """
        if size < 0:
            raise ValueError(f"size must not be negative, got {size}")
        ctx = f"upload[{namespace}/{key}]"
        resp = self.http.request(
            "POST", self.upload_url(namespace, key), data=body, content_length=size
        )
        try:
            self._ensure_status(resp, 200, _UPLOAD_ERRORS, ctx, namespace, key)
            return decode_upload_info(self._read_body(resp, ctx), ctx=ctx)
        finally:
            resp.close()

    def get(
        self, namespace: Namespace, key: Key, byte_range: ByteRange = NO_RANGE
    ) -> ObjectStream:
        """Open the object for reading, optionally restricted to a byte range.

        Any 2xx status (200, 206) is success. The returned stream must be
        closed by the caller.

        Raises:
            InvalidRangeError: ``byte_range`` is not a ``ByteRange``; no
                request is issued.
            KeyNotFoundError: HTTP 404.
            NamespaceNotFoundError: HTTP 410 or 406.
            UnexpectedStatusError: Any other non-2xx status.
            TransportFailureError: The transport failed.
        """
        if not isinstance(byte_range, (NoRange, From, Between)):
            raise InvalidRangeError(f"invalid range: {byte_range!r}")
        ctx = f"get[{namespace}/{key}]"
        headers = {}
        range_value = byte_range.header_value()
        if range_value is not None:
            headers["Range"] = range_value

        resp = self.http.request("GET", self.read_url(namespace, key), headers=headers)
        if 200 <= resp.status_code < 300:
            return ObjectStream(resp, context=ctx)

        try:
            raise self._failure(resp, _GET_ERRORS, ctx, namespace, key)
        finally:
            resp.close()

    def get_file(
        self, namespace: Namespace, key: Key, byte_range: ByteRange = NO_RANGE
    ) -> bytes:
        """Like ``get`` but reads the whole body and releases it."""
        with self.get(namespace, key, byte_range) as stream:
            return stream.read()

    def delete(self, namespace: Namespace, key: Key) -> None:
        """Delete ``key`` from ``namespace``.

        Raises:
            KeyNotFoundError: HTTP 404.
            UnexpectedStatusError: Any other non-200 status.
            TransportFailureError: The transport failed.
        """
        ctx = f"delete[{namespace}/{key}]"
        resp = self.http.request("GET", self.delete_url(namespace, key))
        try:
            self._ensure_status(resp, 200, _DELETE_ERRORS, ctx, namespace, key)
        finally:
            resp.close()

    def ping(self) -> None:
        """Check availability of the proxy."""
        ctx = "ping"
        resp = self.http.request("GET", self.ping_url())
        try:
            self._ensure_status(resp, 200, _PING_ERRORS, ctx)
        finally:
            resp.close()

    def download_info(self, namespace: Namespace, key: Key) -> DownloadInfo:
        """Retrieve the direct link descriptor for an object, if available.

        Raises:
            DirectLinkDisabledError: HTTP 410.
            KeyNotFoundError: HTTP 404.
            UnexpectedStatusError: Any other non-200 status.
            MalformedResponseError: The ``<download-info>`` envelope cannot be
                decoded.
            TransportFailureError: The transport failed.
        """
        ctx = f"download_info[{namespace}/{key}]"
        resp = self.http.request("GET", self.download_info_url(namespace, key))
        try:
            self._ensure_status(resp, 200, _DOWNLOAD_INFO_ERRORS, ctx, namespace, key)
            return decode_download_info(self._read_body(resp, ctx), ctx=ctx)
        finally:
            resp.close()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _ensure_status(
        self,
        resp: requests.Response,
        expected: int,
        table: StatusTable,
        ctx: str,
        namespace: Optional[Namespace] = None,
        key: Optional[Key] = None,
    ) -> None:
        if resp.status_code == expected:
            return
        raise self._failure(resp, table, ctx, namespace, key)

    def _failure(
        self,
        resp: requests.Response,
        table: StatusTable,
        ctx: str,
        namespace: Optional[Namespace] = None,
        key: Optional[Key] = None,
    ) -> MdsError:
        err = error_for_status(resp, table, ctx=ctx, namespace=namespace, key=key)
        self._log.debug("%s failed with %s (%s)", ctx, err.status_text, err.code)
        return err

    @staticmethod
    def _read_body(resp: requests.Response, ctx: str) -> bytes:
        try:
            return resp.content
        except req_exc.RequestException as exc:
            raise TransportFailureError(
                f"transport failure while reading body: {exc}", context=ctx
            ) from exc


__all__ = ["MdsRestAdapter", "ObjectStream"]
