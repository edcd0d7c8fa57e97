"""
Purpose:
    - Glue collection and serialization behind one call
    - Report each conversion through the Telemetry port

Errors surface as EnvTomlError subclasses; nothing is returned on failure.
"""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, Optional

from envtoml.adapters.env_provider import OsEnvironmentSource
from envtoml.adapters.file_writer import FilesystemConfigWriter
from envtoml.adapters.telemetry.logging_telemetry import LoggingTelemetry
from envtoml.config.settings import ConversionSettings
from envtoml.core.collector import Collector
from envtoml.core.serializer import Serializer
from envtoml.core.utility import content_hash
from envtoml.errors.errors import EnvTomlError
from envtoml.ports.config_writer import ConfigWriter
from envtoml.ports.environment_source import EnvironmentSource
from envtoml.ports.telemetry import Telemetry


class EnvTomlConverter:
    def __init__(
        self,
        settings: Optional[ConversionSettings] = None,
        telemetry: Optional[Telemetry] = None,
        environment_source: Optional[EnvironmentSource] = None,
    ) -> None:
        self.settings = settings or ConversionSettings()
        self.telemetry = telemetry or LoggingTelemetry()
        self.environment_source = environment_source or OsEnvironmentSource()

    def convert(
        self,
        prefix: Optional[str] = None,
        environment: Optional[Mapping[str, str]] = None,
    ) -> str:
        """
        1. Snapshot the environment (unless a mapping is passed in)
        2. Collect matching variables into a Config
        3. Serialize the Config
        Raises EnvTomlError subclasses; no partial output.
        """
        prefix = self.settings.prefix if prefix is None else prefix
        env = self.environment_source.snapshot() if environment is None else environment

        self.telemetry.log("conversion_started", prefix=prefix, variables_scanned=len(env))

        collector = Collector(prefix, on_duplicate=self.settings.on_duplicate)
        serializer = Serializer(
            section_order=self.settings.section_order,
            value_encoding=self.settings.value_encoding,
        )
        try:
            config = collector.collect(env)
            content = serializer.serialize(config)
        except EnvTomlError as exc:
            self.telemetry.log(
                "conversion_failed",
                prefix=prefix,
                error_type=exc.__class__.__name__,
                reason=str(exc),
            )
            raise

        self.telemetry.log(
            "conversion_completed",
            prefix=prefix,
            global_items=len(config.global_items),
            sections=sorted(config.sections),
            items_total=len(config),
            content_hash=content_hash(content),
        )
        return content


def convert(
    prefix: str,
    environment: Optional[Mapping[str, str]] = None,
    *,
    settings: Optional[ConversionSettings] = None,
    telemetry: Optional[Telemetry] = None,
) -> str:
    """
    Convert variables starting with ``prefix`` into TOML text.

    Reads the live process environment unless ``environment`` is given.
    """
    return EnvTomlConverter(settings=settings, telemetry=telemetry).convert(
        prefix=prefix, environment=environment
    )


def write_config(path: str | Path, content: str, writer: Optional[ConfigWriter] = None) -> None:
    """Hand ``content`` to ``writer`` (filesystem by default); I/O errors propagate as-is."""
    (writer or FilesystemConfigWriter()).write(Path(path), content)
