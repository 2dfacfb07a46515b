from __future__ import annotations

from http import HTTPStatus
from typing import Any, Mapping, Optional, Tuple, Type

from mdsclient.domain.errors import MdsError, UnexpectedStatusError

# status -> (error class, message template); templates may use {namespace}/{key}
StatusTable = Mapping[int, Tuple[Type[MdsError], str]]


def status_text(resp: Any) -> str:
    """Return ``"<code> <reason>"`` for a response, e.g. ``"404 Not Found"``."""
    status = int(resp.status_code)
    reason = getattr(resp, "reason", None) or ""
    if not reason:
        try:
            reason = HTTPStatus(status).phrase
        except ValueError:
            reason = ""
    return f"{status} {reason}".strip()


def build_error_message(ctx: str, detail: str, text: str) -> str:
    return f"{ctx}: {detail}: {text}"


def error_for_status(
    resp: Any,
    table: StatusTable,
    *,
    ctx: str,
    namespace: Optional[str] = None,
    key: Optional[str] = None,
) -> MdsError:
    """Build the error an operation reports for a non-success status.

    Statuses missing from ``table`` become ``UnexpectedStatusError``.
    """
    status = int(resp.status_code)
    text = status_text(resp)
    error_cls, template = table.get(status, (UnexpectedStatusError, "unexpected status"))
    detail = template.format(namespace=namespace, key=key)
    return error_cls(
        build_error_message(ctx, detail, text),
        status=status,
        status_text=text,
        namespace=namespace,
        key=key,
        context=ctx,
    )


__all__ = ["StatusTable", "build_error_message", "error_for_status", "status_text"]
