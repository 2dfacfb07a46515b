"""Domain package exports for value objects, byte ranges and errors."""

from .byte_range import (
    NO_RANGE,
    Between,
    ByteRange,
    From,
    NoRange,
    byte_range_from_bounds,
)
from .errors import (
    DirectLinkDisabledError,
    InvalidRangeError,
    KeyNotFoundError,
    MalformedResponseError,
    MdsError,
    NamespaceNotFoundError,
    NamespaceWriteProhibitedError,
    StorageExhaustedError,
    TransportFailureError,
    UnexpectedStatusError,
)
from .models import DownloadInfo, Key, MdsConfig, Namespace, ReplicaAck, UploadInfo
from .ports import ObjectBody, ObjectStoragePort

__all__ = [
    "Between",
    "ByteRange",
    "DirectLinkDisabledError",
    "DownloadInfo",
    "From",
    "InvalidRangeError",
    "Key",
    "KeyNotFoundError",
    "MalformedResponseError",
    "MdsConfig",
    "MdsError",
    "NO_RANGE",
    "Namespace",
    "NamespaceNotFoundError",
    "NamespaceWriteProhibitedError",
    "NoRange",
    "ObjectBody",
    "ObjectStoragePort",
    "ReplicaAck",
    "StorageExhaustedError",
    "TransportFailureError",
    "UnexpectedStatusError",
    "UploadInfo",
    "byte_range_from_bounds",
]
