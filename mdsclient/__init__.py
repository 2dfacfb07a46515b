"""Client for the MDS object-storage proxy."""

from mdsclient.adapters import MdsRestAdapter, ObjectStream
from mdsclient.domain import (
    NO_RANGE,
    Between,
    DownloadInfo,
    From,
    MdsConfig,
    MdsError,
    NoRange,
    UploadInfo,
    byte_range_from_bounds,
)
from mdsclient.utils.logging import configure_logging

__all__ = [
    "Between",
    "DownloadInfo",
    "From",
    "MdsConfig",
    "MdsError",
    "MdsRestAdapter",
    "NO_RANGE",
    "NoRange",
    "ObjectStream",
    "UploadInfo",
    "byte_range_from_bounds",
    "configure_logging",
]
