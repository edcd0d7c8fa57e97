from __future__ import annotations

import logging
from pathlib import Path

from envtoml.ports.config_writer import ConfigWriter

_LOGGER = logging.getLogger(__name__)


class FilesystemConfigWriter(ConfigWriter):
    """Persist rendered configuration to the local filesystem."""

    def write(self, path: Path, content: str) -> None:
        """Write ``content`` as UTF-8 bytes, truncating any existing file."""
        path = path if isinstance(path, Path) else Path(path)
        # OSError subclasses (FileNotFoundError, PermissionError, ...) propagate unchanged
        path.write_bytes(content.encode("utf-8"))
        _LOGGER.debug(
            "config_written",
            extra={"event": "config_written", "path": str(path), "chars": len(content)},
        )
