"""Adapter package for external I/O implementations.

Purpose:
    Collect the concrete HTTP implementation of ``ObjectStoragePort`` together
    with its transport wrapper, XML envelope decoding and status helpers.

Dependencies:
    ``requests`` for network I/O and ``xml.etree.ElementTree`` for envelopes.

Call context:
    Imported by application wiring code and by tests (for transport-level
    behavior verification with stub sessions).
"""

from .http_client import HttpConfig, MdsSession
from .mds_rest import MdsRestAdapter, ObjectStream

__all__ = ["HttpConfig", "MdsRestAdapter", "MdsSession", "ObjectStream"]
