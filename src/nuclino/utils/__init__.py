"""Internal helpers shared across nuclino modules."""

from __future__ import annotations

from .redact import redact

__all__ = ["redact"]
