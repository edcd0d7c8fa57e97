"""ConfigWriter Port Interface.

Contract: Persist rendered configuration text at a path; no retries, no wrapping.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class ConfigWriter(Protocol):
    def write(self, path: Path, content: str) -> None: ...

    """
    Write ``content`` to ``path``, replacing any existing file.

    Errors from the underlying storage (missing directory, permission denied,
    disk full) propagate to the caller with their original type.
    """
