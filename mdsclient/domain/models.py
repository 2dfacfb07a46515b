"""Typed domain objects for MDS proxy configuration and responses."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple


Namespace = str
Key = str

_ENV_HOST = "MDS_HOST"
_ENV_UPLOAD_PORT = "MDS_UPLOAD_PORT"
_ENV_READ_PORT = "MDS_READ_PORT"
_ENV_AUTH_HEADER = "MDS_AUTH_HEADER"


@dataclass(frozen=True)
class MdsConfig:
    """Endpoint and credential settings for one MDS proxy.

    Attributes:
        host: Proxy host name, without scheme or port.
        upload_port: Port serving upload and delete requests.
        read_port: Port serving get, ping and downloadinfo requests.
        auth_header: Pre-formatted ``Authorization`` header value.
    """

    host: str
    upload_port: int
    read_port: int
    auth_header: str

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "MdsConfig":
        """Build a config from ``MDS_*`` environment variables.

        Args:
            environ: Mapping to read from; defaults to ``os.environ``.

        Returns:
            Config populated from the environment.

        Raises:
            ValueError: If a variable is missing or a port is not an integer.
        """
        env = os.environ if environ is None else environ
        host = (env.get(_ENV_HOST) or "").strip()
        if not host:
            raise ValueError(f"{_ENV_HOST} is required")
        return cls(
            host=host,
            upload_port=_port_from_env(env, _ENV_UPLOAD_PORT),
            read_port=_port_from_env(env, _ENV_READ_PORT),
            auth_header=env.get(_ENV_AUTH_HEADER) or "",
        )


def _port_from_env(env: Mapping[str, str], name: str) -> int:
    raw = (env.get(name) or "").strip()
    if not raw:
        raise ValueError(f"{name} is required")
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


@dataclass(frozen=True)
class ReplicaAck:
    """One ``<complete>`` record of an upload acknowledgment.

    Informational only: address, on-disk path, storage group and status of a
    replica that finished writing.
    """

    addr: str = ""
    path: str = ""
    group: int = 0
    status: int = 0


@dataclass(frozen=True)
class UploadInfo:
    """Result of a successful store, decoded from the ``<post>`` envelope."""

    obj: str = ""
    id: str = ""
    key: str = ""
    size: int = 0
    groups: int = 0
    complete: Tuple[ReplicaAck, ...] = ()
    written: int = 0


@dataclass(frozen=True)
class DownloadInfo:
    """Direct link descriptor decoded from the ``<download-info>`` envelope.

    ``region`` is signed; ``-1`` means the region is unspecified.
    """

    host: str = ""
    path: str = ""
    ts: str = ""
    region: int = 0
    sign: str = ""

    def url(self) -> str:
        """Return the direct link to the object.

        The query string is ``?ts=<ts>sign=<sign>`` with no separator before
        ``sign``; the proxy's consumers expect exactly this shape.
        """
        return f"http://{self.host}{self.path}?ts={self.ts}sign={self.sign}"


__all__ = [
    "DownloadInfo",
    "Key",
    "MdsConfig",
    "Namespace",
    "ReplicaAck",
    "UploadInfo",
]
