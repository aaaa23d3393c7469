"""Attachment requests."""

from typing import Any

import httpx

from .request import RequestBase, require_name, require_options, unexpected_status


def attachment_path(key: str) -> str:
    return f"static/{require_name(key, 'attachment key')}"


def interpret_get(response: httpx.Response) -> bytes:
    if response.status_code != 200:
        raise unexpected_status("get the attachment", response)
    return response.content


def interpret_save(response: httpx.Response) -> None:
    if response.status_code != 201:
        raise unexpected_status("save the attachment", response)


def interpret_remove(response: httpx.Response) -> None:
    if response.status_code != 204:
        raise unexpected_status("delete the attachment", response)


class AttachmentRequests(RequestBase):
    """Get, save and remove attachments stored under ``static/<key>``.

    Example:
        >>> attachments = AttachmentRequests({"host": "http://localhost:8080", "database": "shop"})
        >>> attachments.save("logo.png", {"buffer": png_bytes})
        >>> attachments.get("logo.png") == png_bytes
        True
    """

    def get(self, key: str) -> bytes:
        """Fetch the raw content of an attachment."""
        path = attachment_path(key)
        return interpret_get(self._send_get(path))

    def save(self, key: str, options: dict[str, Any]) -> None:
        """Store an attachment.

        Args:
            key: Attachment key.
            options: Mapping with a ``buffer`` entry. Bytes are stored as-is,
                other values are sent as JSON.
        """
        path = attachment_path(key)
        buffer = require_options(options)
        interpret_save(self._send_put(path, buffer))

    def remove(self, key: str) -> None:
        path = attachment_path(key)
        interpret_remove(self._send_delete(path))
