from __future__ import annotations

import io
import re
import threading
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union
from urllib.parse import urlsplit

import requests

from mdsclient.adapters.mds_rest import MdsRestAdapter
from mdsclient.domain.models import MdsConfig

AUTH = "Basic c2FuZGJveC10bXA6c2VjcmV0"

CONFIG = MdsConfig(
    host="storage-int.mds.local",
    upload_port=1111,
    read_port=8080,
    auth_header=AUTH,
)


class TrackingRaw(io.BytesIO):
    """Raw body double recording whether the response released it."""

    def __init__(self, data: bytes) -> None:
        super().__init__(data)
        self.released = False

    def release_conn(self) -> None:
        self.released = True


def make_response(
    status: int,
    body: bytes = b"",
    *,
    reason: Optional[str] = None,
    headers: Optional[Dict[str, str]] = None,
) -> requests.Response:
    resp = requests.Response()
    resp.status_code = status
    resp.reason = reason or ""
    resp.raw = TrackingRaw(body)
    resp.headers.update(headers or {})
    return resp


def released(resp: requests.Response) -> bool:
    return resp.raw.released


Reply = Union[requests.Response, Exception]


class StubSession(requests.Session):
    """Session replaying queued responses and recording prepared requests."""

    def __init__(self, replies: Sequence[Reply] = ()) -> None:
        super().__init__()
        self.trust_env = False
        self._replies = list(replies)
        self.calls: List[Dict[str, Any]] = []

    def send(self, request: requests.PreparedRequest, **kwargs: Any) -> requests.Response:
        body = request.body
        if body is not None and not isinstance(body, (bytes, str)):
            body = b"".join(body if not hasattr(body, "read") else [body.read()])
        self.calls.append(
            {
                "method": request.method,
                "url": request.url,
                "headers": dict(request.headers),
                "body": body,
                "kwargs": kwargs,
            }
        )
        if not self._replies:
            raise AssertionError(f"No stub response configured for {request.url}")
        reply = self._replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


_PATH_RE = re.compile(r"^/(upload|get|delete|downloadinfo)-([^/]+)/(.+)$")
_RANGE_RE = re.compile(r"^bytes=(\d+)-(\d*)$")


class FakeMdsSession(requests.Session):
    """In-memory MDS proxy answering prepared requests like the real service.

    Namespaces must be registered with ``add_namespace``. ``read_only``
    namespaces reject uploads with 403, ``direct_links=False`` answers
    downloadinfo with 410.
    """

    def __init__(self, config: MdsConfig = CONFIG) -> None:
        super().__init__()
        self.trust_env = False
        self.config = config
        self.namespaces: Dict[str, Dict[str, Any]] = {}
        self.objects: Dict[Tuple[str, str], bytes] = {}
        self.responses: List[requests.Response] = []
        self._counter = 0
        self._lock = threading.Lock()

    def add_namespace(
        self, name: str, *, read_only: bool = False, direct_links: bool = True
    ) -> None:
        self.namespaces[name] = {"read_only": read_only, "direct_links": direct_links}

    def send(self, request: requests.PreparedRequest, **kwargs: Any) -> requests.Response:
        with self._lock:
            resp = self._dispatch(request)
            self.responses.append(resp)
        return resp

    def _dispatch(self, request: requests.PreparedRequest) -> requests.Response:
        if request.headers.get("Authorization") != self.config.auth_header:
            return make_response(401, reason="Unauthorized")
        parts = urlsplit(request.url)
        if parts.hostname != self.config.host:
            return make_response(502, reason="Bad Gateway")
        if parts.path == "/ping":
            if parts.port != self.config.read_port:
                return make_response(404, reason="Not Found")
            return make_response(200, reason="OK")

        match = _PATH_RE.match(parts.path)
        if match is None:
            return make_response(400, reason="Bad Request")
        op, namespace, key = match.groups()
        expected_port = (
            self.config.upload_port if op in ("upload", "delete") else self.config.read_port
        )
        if parts.port != expected_port:
            return make_response(404, reason="Not Found")
        ns = self.namespaces.get(namespace)
        if ns is None:
            if op == "get":
                return make_response(410, reason="Gone")
            return make_response(404, reason="Not Found")
        return getattr(self, f"_{op}")(request, namespace, key, ns)

    def _upload(self, request, namespace, key, ns) -> requests.Response:
        if ns["read_only"]:
            return make_response(403, reason="Forbidden")
        body = request.body
        if body is None:
            body = b""
        elif hasattr(body, "read"):
            body = body.read()
        elif not isinstance(body, bytes):
            body = b"".join(body)
        declared = int(request.headers.get("Content-Length", "-1"))
        if declared != len(body):
            return make_response(400, reason="Bad Request")
        self._counter += 1
        stored_key = f"{self._counter}/{key}"
        self.objects[(namespace, stored_key)] = body
        envelope = (
            '<?xml version="1.0" encoding="utf-8"?>\n'
            f'<post obj="{namespace}.{key}" id="0:{self._counter:08x}" groups="2" '
            f'size="{len(body)}" key="{stored_key}">\n'
            '<complete addr="10.0.0.1:1025" path="/srv/storage/1/data-0.0" group="11" status="0"/>\n'
            '<complete addr="10.0.0.2:1025" path="/srv/storage/2/data-0.0" group="12" status="0"/>\n'
            "<written>2</written>\n"
            "</post>"
        )
        return make_response(200, envelope.encode(), reason="OK")

    def _get(self, request, namespace, key, ns) -> requests.Response:
        data = self.objects.get((namespace, key))
        if data is None:
            return make_response(404, reason="Not Found")
        header = request.headers.get("Range")
        if header is None:
            return make_response(200, data, reason="OK")
        match = _RANGE_RE.match(header)
        if match is None:
            return make_response(416, reason="Requested Range Not Satisfiable")
        start = int(match.group(1))
        end = int(match.group(2)) if match.group(2) else len(data) - 1
        return make_response(
            206,
            data[start : end + 1],
            reason="Partial Content",
            headers={"Content-Range": f"bytes {start}-{end}/{len(data)}"},
        )

    def _delete(self, request, namespace, key, ns) -> requests.Response:
        if self.objects.pop((namespace, key), None) is None:
            return make_response(404, reason="Not Found")
        return make_response(200, reason="OK")

    def _downloadinfo(self, request, namespace, key, ns) -> requests.Response:
        if not ns["direct_links"]:
            return make_response(410, reason="Gone")
        if (namespace, key) not in self.objects:
            return make_response(404, reason="Not Found")
        envelope = (
            "<download-info>"
            "<host>storage-node.mds.local</host>"
            f"<path>/rlimit/{namespace}/{key}</path>"
            "<ts>4f8e2c1d</ts>"
            "<region>-1</region>"
            "<s>deadbeef</s>"
            "</download-info>"
        )
        return make_response(200, envelope.encode(), reason="OK")


def make_adapter(session: requests.Session, config: MdsConfig = CONFIG) -> MdsRestAdapter:
    return MdsRestAdapter(config, session=session)


__all__ = [
    "AUTH",
    "CONFIG",
    "FakeMdsSession",
    "StubSession",
    "TrackingRaw",
    "make_adapter",
    "make_response",
    "released",
]
