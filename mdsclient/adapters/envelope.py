"""Decoding of the XML envelopes returned by the MDS proxy.

Two documents are understood:

``<post>``
    Upload acknowledgment. Attributes ``obj``, ``id``, ``key``, ``size`` and
    ``groups``; repeated ``<complete addr path group status/>`` children and a
    ``<written>`` element holding the number of replicas written.

``<download-info>``
    Direct link descriptor with ``<host>``, ``<path>``, ``<ts>``,
    ``<region>`` and ``<s>`` children.

Unknown elements and attributes are ignored and missing ones keep their zero
value. Anything else wrong with the document raises
``MalformedResponseError``.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Optional

from mdsclient.domain.errors import MalformedResponseError
from mdsclient.domain.models import DownloadInfo, ReplicaAck, UploadInfo


def _parse(body: bytes, root_tag: str, ctx: str) -> ET.Element:
    try:
        root = ET.fromstring(body)
    except ET.ParseError as exc:
        raise MalformedResponseError(f"{ctx}: invalid XML: {exc}", context=ctx) from exc
    if root.tag != root_tag:
        raise MalformedResponseError(
            f"{ctx}: expected <{root_tag}> root element, got <{root.tag}>",
            context=ctx,
        )
    return root


def _int(raw: Optional[str], field: str, ctx: str, *, unsigned: bool = False) -> int:
    text = (raw or "").strip()
    if not text:
        return 0
    try:
        value = int(text)
    except ValueError as exc:
        raise MalformedResponseError(
            f"{ctx}: field {field!r} is not an integer: {text!r}", context=ctx
        ) from exc
    if unsigned and value < 0:
        raise MalformedResponseError(
            f"{ctx}: field {field!r} must not be negative: {value}", context=ctx
        )
    return value


def _child_text(root: ET.Element, tag: str) -> str:
    child = root.find(tag)
    if child is None:
        return ""
    return child.text or ""


def decode_upload_info(body: bytes, *, ctx: str = "upload") -> UploadInfo:
    """Decode a ``<post>`` envelope into ``UploadInfo``."""
    root = _parse(body, "post", ctx)
    complete = tuple(
        ReplicaAck(
            addr=node.get("addr", ""),
            path=node.get("path", ""),
            group=_int(node.get("group"), "complete.group", ctx),
            status=_int(node.get("status"), "complete.status", ctx),
        )
        for node in root.findall("complete")
    )
    return UploadInfo(
        obj=root.get("obj", ""),
        id=root.get("id", ""),
        key=root.get("key", ""),
        size=_int(root.get("size"), "size", ctx, unsigned=True),
        groups=_int(root.get("groups"), "groups", ctx),
        complete=complete,
        written=_int(_child_text(root, "written"), "written", ctx),
    )


def decode_download_info(body: bytes, *, ctx: str = "download_info") -> DownloadInfo:
    """Decode a ``<download-info>`` envelope into ``DownloadInfo``."""
    root = _parse(body, "download-info", ctx)
    return DownloadInfo(
        host=_child_text(root, "host"),
        path=_child_text(root, "path"),
        ts=_child_text(root, "ts"),
        region=_int(_child_text(root, "region"), "region", ctx),
        sign=_child_text(root, "s"),
    )


__all__ = ["decode_download_info", "decode_upload_info"]
