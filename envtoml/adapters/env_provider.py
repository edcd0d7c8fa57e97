from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping

from dotenv import dotenv_values

from envtoml.ports.environment_source import EnvironmentSource

_LOGGER = logging.getLogger(__name__)


class OsEnvironmentSource(EnvironmentSource):
    """Snapshot of the live process environment."""

    def snapshot(self) -> Mapping[str, str]:
        # copy once so a conversion sees a consistent table
        env = dict(os.environ)
        _LOGGER.debug(
            "environment_snapshot",
            extra={"event": "environment_snapshot", "source": "os", "variables": len(env)},
        )
        return env


class StaticEnvironmentSource(EnvironmentSource):
    """Fixed mapping, mostly for tests and embedding."""

    def __init__(self, variables: Mapping[str, str]) -> None:
        self._variables = dict(variables)

    def snapshot(self) -> Mapping[str, str]:
        return dict(self._variables)


class DotenvEnvironmentSource(EnvironmentSource):
    def __init__(
        self, path: str | Path, *, overlay_os: bool = False, interpolate: bool = False
    ) -> None:
        """
        Read variables from a ``.env`` file instead of the process table.

        With ``overlay_os`` the live environment is read first and the file's
        entries win on conflict, mirroring what ``load_dotenv(override=True)``
        would leave in ``os.environ`` without mutating it.

        Values are taken literally. ``interpolate`` turns on python-dotenv's
        ``${VAR}`` expansion, which also resolves names from the live process
        environment.
        """

        self._path = Path(path)
        self._overlay_os = overlay_os
        self._interpolate = interpolate

    def snapshot(self) -> Mapping[str, str]:
        if not self._path.is_file():
            raise FileNotFoundError(f"dotenv file not found: {self._path}")

        raw = dotenv_values(self._path, interpolate=self._interpolate)
        # "KEY" with no "=" parses to None; treat it as an empty value
        file_vars = {k: (v if v is not None else "") for k, v in raw.items()}

        env: dict[str, str] = dict(os.environ) if self._overlay_os else {}
        env.update(file_vars)
        _LOGGER.debug(
            "environment_snapshot",
            extra={
                "event": "environment_snapshot",
                "source": "dotenv",
                "path": str(self._path),
                "variables": len(env),
                "overlay_os": self._overlay_os,
            },
        )
        return env
