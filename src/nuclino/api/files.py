"""File API wrapper for the Nuclino API.

File metadata comes from ``/v0/files/{id}``; the bytes themselves are served
from the short-lived pre-signed URL in the metadata's ``download`` object.
"""

from __future__ import annotations

from typing import Any

from .pagination import resource_path
from .transport import NuclinoTransport


class FileAPI:
    """Synchronous wrapper for ``/v0/files``.

    Parameters
    ----------
    transport:
        A configured :class:`NuclinoTransport` instance.
    """

    def __init__(self, transport: NuclinoTransport) -> None:
        self._transport = transport

    def retrieve(self, file_id: str) -> dict[str, Any]:
        """Retrieve file metadata, including a fresh download link."""
        return self._transport.request("GET", resource_path("files", file_id, "file_id"))

    def download(self, url: str) -> bytes:
        """Download the bytes behind a download link."""
        return self._transport.download(url)
