"""Shared HTTP transport utilities for the MDS adapter.

This module provides a thin wrapper around ``requests.Session`` so the adapter
can issue exactly one request per call with the ``Authorization`` header
always set and an optional explicit ``Content-Length``.

Dependencies:
    - ``requests`` for network I/O.
    - ``mdsclient.domain.errors.TransportFailureError`` for typed transport
      failures.

Call context:
    - Constructed by ``mdsclient/adapters/mds_rest.py`` around an injected
      session (or a fresh ``requests.Session`` when none is given).
    - Maps responses to nothing; status classification is the adapter's job.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from requests import exceptions as req_exc

from mdsclient.domain.errors import TransportFailureError


@dataclass
class HttpConfig:
    """Transport configuration for adapter HTTP calls.

    Attributes:
        request_timeout_s: Timeout in seconds passed to the transport, or
            ``None`` to leave timeouts to the session defaults.
    """
    request_timeout_s: Optional[float] = None


class MdsSession:
    """Single-shot requests wrapper with a fixed ``Authorization`` header.

    This class is intentionally transport-only. Callers provide endpoint URLs
    and decide how to map response statuses into domain errors. Responses are
    always requested in streaming mode; the caller owns and must close them.
    """

    def __init__(
        self,
        auth_header: str,
        cfg: HttpConfig,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Create a session wrapper.

        Args:
            auth_header: Value placed in the ``Authorization`` header of every
                request.
            cfg: Transport settings.
            session: Injected ``requests.Session`` (or compatible object). A
                new session is created when omitted.
        """
        self.session = session if session is not None else requests.Session()
        self.auth_header = auth_header
        self.cfg = cfg
        self._log = logging.getLogger(__name__)

    def _headers(self, extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        headers = dict(extra or {})
        headers["Authorization"] = self.auth_header
        return headers

    def request(
        self,
        method: str,
        url: str,
        *,
        headers: Optional[Dict[str, str]] = None,
        data: Any = None,
        content_length: Optional[int] = None,
    ) -> requests.Response:
        """Send one request and return the streaming response.

        Args:
            method: HTTP method.
            url: Absolute endpoint URL.
            headers: Extra request headers.
            data: Optional request body (bytes, file-like or iterator).
            content_length: When given, sent as ``Content-Length`` whatever the
                transport inferred from ``data``.

        Returns:
            ``requests.Response`` with an unread body.

        Raises:
            TransportFailureError: If the transport raises a
                ``requests.RequestException``.

        Call Chain:
            Adapter methods -> ``MdsSession.request`` -> ``requests.Session.send``.
        """
        context = f"{method} {url}"
        try:
            prepared = self.session.prepare_request(
                requests.Request(method, url, headers=self._headers(headers), data=data)
            )
            # Session auth/netrc may have rewritten it during preparation.
            prepared.headers["Authorization"] = self.auth_header
            if content_length is not None:
                prepared.headers.pop("Transfer-Encoding", None)
                prepared.headers["Content-Length"] = str(content_length)
            settings = self.session.merge_environment_settings(
                prepared.url, {}, True, None, None
            )
            resp = self.session.send(
                prepared, timeout=self.cfg.request_timeout_s, **settings
            )
        except req_exc.RequestException as exc:
            self._log.debug("%s failed: %s", context, exc)
            raise TransportFailureError(
                f"transport failure: {exc}", context=context
            ) from exc
        self._log.debug("%s -> %s", context, resp.status_code)
        return resp


__all__ = ["HttpConfig", "MdsSession"]
