"""envtoml CLI entrypoint.

Reads prefixed environment variables (from the process or a dotenv file) and
prints the TOML rendering, or writes it to --out.

Exit codes: 0 success, 1 conversion error, 2 settings or I/O error.
"""

from __future__ import annotations

import argparse
import logging
import sys
import uuid
from pathlib import Path
from typing import Any, Optional

from envtoml.adapters.env_provider import DotenvEnvironmentSource, OsEnvironmentSource
from envtoml.adapters.file_writer import FilesystemConfigWriter
from envtoml.adapters.telemetry.jsonl import JsonlTelemetry
from envtoml.adapters.telemetry.logging_telemetry import LoggingTelemetry
from envtoml.config.settings import load_settings
from envtoml.core.converter import EnvTomlConverter, write_config
from envtoml.errors.errors import EnvTomlError, SettingsError
from envtoml.ports.environment_source import EnvironmentSource
from envtoml.ports.telemetry import Telemetry

_LOGGER = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONVERSION_ERROR = 1
EXIT_USAGE_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    """
    Return the CLI argument parser.
    """
    p = argparse.ArgumentParser(
        prog="envtoml", description="Render prefixed environment variables as TOML"
    )
    p.add_argument("--prefix", default=None, help="Variable name prefix (default: APP_)")
    p.add_argument("--out", type=Path, default=None, help="Write to this file instead of stdout")
    p.add_argument(
        "--env-file", type=Path, default=None, help="Read variables from a dotenv file"
    )
    p.add_argument(
        "--overlay-os",
        action="store_true",
        help="With --env-file, start from the process environment and let the file win",
    )
    p.add_argument("--section-order", choices=("sorted", "insertion"), default=None)
    p.add_argument("--on-duplicate", choices=("error", "first", "last", "keep"), default=None)
    p.add_argument("--value-encoding", choices=("escape", "reject", "raw"), default=None)
    p.add_argument("--events", type=Path, default=None, help="Append JSONL telemetry here")
    p.add_argument(
        "--log-level",
        type=str.upper,
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        default="WARNING",
    )
    return p


def _settings_overrides(args: argparse.Namespace) -> dict[str, Any]:
    return {
        "prefix": args.prefix,
        "section_order": args.section_order,
        "on_duplicate": args.on_duplicate,
        "value_encoding": args.value_encoding,
    }


def _build_source(args: argparse.Namespace) -> EnvironmentSource:
    if args.env_file is not None:
        return DotenvEnvironmentSource(args.env_file, overlay_os=args.overlay_os)
    return OsEnvironmentSource()


def _build_telemetry(events: Optional[Path]) -> Telemetry:
    if events is None:
        return LoggingTelemetry()
    return JsonlTelemetry(run_id=str(uuid.uuid4()), sink_path=events)


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint wrapper compatible with setuptools scripts."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, stream=sys.stderr)

    try:
        settings = load_settings(_settings_overrides(args))
    except SettingsError as exc:
        print(f"envtoml: {exc}", file=sys.stderr)
        return EXIT_USAGE_ERROR

    converter = EnvTomlConverter(
        settings=settings,
        telemetry=_build_telemetry(args.events),
        environment_source=_build_source(args),
    )

    try:
        content = converter.convert()
    except EnvTomlError as exc:
        print(f"envtoml: {exc}", file=sys.stderr)
        return EXIT_CONVERSION_ERROR
    except OSError as exc:
        # unreadable --env-file
        print(f"envtoml: {exc}", file=sys.stderr)
        return EXIT_USAGE_ERROR

    if args.out is None:
        sys.stdout.write(content)
        return EXIT_OK

    try:
        write_config(args.out, content, FilesystemConfigWriter())
    except OSError as exc:
        print(f"envtoml: cannot write {args.out}: {exc}", file=sys.stderr)
        return EXIT_USAGE_ERROR
    _LOGGER.info("config_written", extra={"event": "config_written", "path": str(args.out)})
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
