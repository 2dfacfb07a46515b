"""Domain-level error types for MDS operations.

Every failure an operation can report is one of the classes below, each
carrying enough context (namespace, key, raw status text) to log or act on
without re-deriving state.
"""

from __future__ import annotations

from typing import Optional


class MdsError(RuntimeError):
    """Base class for MDS client failures."""

    code = "MDS_ERROR"

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        status_text: Optional[str] = None,
        namespace: Optional[str] = None,
        key: Optional[str] = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.status_text = status_text
        self.namespace = namespace
        self.key = key
        self.context = context


class InvalidRangeError(MdsError, ValueError):
    """Byte range rejected locally; no request was issued."""

    code = "INVALID_RANGE"


class NamespaceWriteProhibitedError(MdsError):
    """HTTP 403 on upload: writes are prohibited for the namespace."""

    code = "NAMESPACE_WRITE_PROHIBITED"


class StorageExhaustedError(MdsError):
    """HTTP 507 on upload: no space left in storage."""

    code = "STORAGE_EXHAUSTED"


class KeyNotFoundError(MdsError):
    """HTTP 404: no such key in the namespace."""

    code = "KEY_NOT_FOUND"


class NamespaceNotFoundError(MdsError):
    """HTTP 410 or 406 on read: no such namespace."""

    code = "NAMESPACE_NOT_FOUND"


class DirectLinkDisabledError(MdsError):
    """HTTP 410 on downloadinfo: direct links are disabled for the namespace."""

    code = "DIRECT_LINK_DISABLED"


class UnexpectedStatusError(MdsError):
    """Status code the operation does not classify."""

    code = "UNEXPECTED_STATUS"


class MalformedResponseError(MdsError):
    """Successful status but the XML envelope could not be decoded."""

    code = "MALFORMED_RESPONSE"


class TransportFailureError(MdsError):
    """Connection-level failure raised by the transport."""

    code = "TRANSPORT_FAILURE"


__all__ = [
    "DirectLinkDisabledError",
    "InvalidRangeError",
    "KeyNotFoundError",
    "MalformedResponseError",
    "MdsError",
    "NamespaceNotFoundError",
    "NamespaceWriteProhibitedError",
    "StorageExhaustedError",
    "TransportFailureError",
    "UnexpectedStatusError",
]
