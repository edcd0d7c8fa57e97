"""
Exceptions raised by the env-to-TOML conversion.

Exception hierarchy:
- EnvTomlError (base)
  - ValueEncodingError: value or key cannot be represented in a quoted string
  - DuplicateKeyError: two variables normalize to the same (section, key)
    - KeyConflictError: a key path is also a section path
  - ConfigInvariantError: Config built with items in the wrong bucket
  - SettingsError: invalid conversion settings
"""

from __future__ import annotations

from typing import Any, Optional


class EnvTomlError(Exception):
    """Base exception for all conversion errors."""

    def __init__(
        self,
        message: str,
        *,
        component: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.component = component
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.component:
            parts.append(f"[component={self.component}]")
        if self.details:
            parts.append(f"[details={self.details}]")
        return " ".join(parts)


class ValueEncodingError(EnvTomlError):
    """Raised when a value (or key) contains characters the output cannot carry."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        section: Optional[str] = None,
        source: Optional[str] = None,
        component: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.key = key
        self.section = section
        self.source = source
        details = details or {}
        details["key"] = key
        if section is not None:
            details["section"] = section
        if source:
            details["source"] = source
        super().__init__(message, component=component, details=details)


class DuplicateKeyError(EnvTomlError):
    """Raised when two environment variables collapse onto one (section, key) pair."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        section: Optional[str],
        sources: tuple[str, str],
        component: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.key = key
        self.section = section
        self.sources = sources
        details = details or {}
        details["key"] = key
        if section is not None:
            details["section"] = section
        details["sources"] = list(sources)
        super().__init__(message, component=component, details=details)


class ConfigInvariantError(EnvTomlError):
    """Raised when a Config holds an item outside the bucket its section names."""


class SettingsError(EnvTomlError):
    """Raised for invalid conversion settings."""

    def __init__(
        self,
        message: str,
        *,
        errors: Optional[list[dict[str, str]]] = None,
        component: Optional[str] = None,
    ) -> None:
        self.errors = errors or []
        details = {"errors": self.errors} if self.errors else None
        super().__init__(message, component=component, details=details)


class KeyConflictError(DuplicateKeyError):
    """Raised when a variable's key path is also used as a section (table) path."""
