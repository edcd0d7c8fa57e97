"""
Purpose:
    - Render a Config as TOML-style text
    - Apply the section-order and value-encoding policies

Layout:
    key = "value"          (global items, collection order)

    [section]              (one block per section)
    key = "value"
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Optional

from envtoml.config.settings import SectionOrder, ValueEncoding
from envtoml.errors.errors import ValueEncodingError
from envtoml.types.types import SECTION_JOINER, Config, ConfigItem

_LOGGER = logging.getLogger(__name__)

BARE_KEY = re.compile(r"^[A-Za-z0-9_-]+$")
_SHORT_ESCAPES: dict[str, str] = {
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\f": "\\f",
    "\r": "\\r",
    '"': '\\"',
    "\\": "\\\\",
}


def _is_control(ch: str) -> bool:
    return ch < " " or ch == "\x7f"


def _is_surrogate(ch: str) -> bool:
    return "\ud800" <= ch <= "\udfff"


def has_surrogates(text: str) -> bool:
    """
    True if ``text`` holds lone surrogates, which is how ``os.environ`` carries
    bytes that are not valid UTF-8. No TOML string escape can express them.
    """
    return any(_is_surrogate(ch) for ch in text)


def needs_escape(text: str) -> bool:
    """True if ``text`` cannot sit verbatim inside a basic (double-quoted) string."""
    return any(
        ch in ('"', "\\") or (_is_control(ch) and ch != "\t") or _is_surrogate(ch)
        for ch in text
    )


def escape_basic_string(text: str) -> str:
    out: list[str] = []
    for ch in text:
        if ch in _SHORT_ESCAPES:
            out.append(_SHORT_ESCAPES[ch])
        elif _is_control(ch):
            out.append(f"\\u{ord(ch):04X}")
        else:
            out.append(ch)
    return "".join(out)


class Serializer:
    def __init__(
        self,
        section_order: SectionOrder = "sorted",
        value_encoding: ValueEncoding = "escape",
    ) -> None:
        self._section_order = section_order
        self._value_encoding = value_encoding

    def serialize(self, config: Config) -> str:
        lines: list[str] = [self._render_item(item) for item in config.global_items]

        for name in self._ordered_sections(config):
            items = config.sections[name]
            lines.append("")
            lines.append(f"[{self._render_header(name, items[0] if items else None)}]")
            lines.extend(self._render_item(item) for item in items)

        if not lines:
            return ""
        # without globals the output still opens with the blank separator line
        return "\n".join(lines) + "\n"

    def _ordered_sections(self, config: Config) -> Iterable[str]:
        if self._section_order == "sorted":
            return sorted(config.sections)
        return list(config.sections)

    # --- rendering ------------------------------------------------

    def _render_item(self, item: ConfigItem) -> str:
        key = self._render_key(item.key, item=item)
        value = self._render_value(item)
        return f"{key} = {value}"

    def _render_value(self, item: ConfigItem) -> str:
        if has_surrogates(item.value):
            # every policy, raw included: the text could not be written as UTF-8
            raise ValueEncodingError(
                f"Value of '{item.source or item.key}' is not valid UTF-8",
                key=item.key,
                section=item.section,
                source=item.source,
                component="core.serializer",
            )
        if self._value_encoding == "raw":
            return f'"{item.value}"'
        if self._value_encoding == "reject" and needs_escape(item.value):
            raise ValueEncodingError(
                f"Value of '{item.source or item.key}' contains characters "
                "that need escaping",
                key=item.key,
                section=item.section,
                source=item.source,
                component="core.serializer",
            )
        return f'"{escape_basic_string(item.value)}"'

    def _render_key(self, key: str, item: Optional[ConfigItem] = None) -> str:
        source = item.source if item else None
        if has_surrogates(key):
            raise ValueEncodingError(
                f"Key {key!r} of {source!r} is not valid UTF-8",
                key=key,
                section=item.section if item else None,
                source=source,
                component="core.serializer",
            )
        if self._value_encoding == "raw" or BARE_KEY.match(key):
            return key
        if self._value_encoding == "reject" and needs_escape(key):
            raise ValueEncodingError(
                f"Key '{key}' of '{source or key}' contains characters that need escaping",
                key=key,
                section=item.section if item else None,
                source=source,
                component="core.serializer",
            )
        _LOGGER.debug("key_quoted", extra={"event": "key_quoted", "key": key})
        return f'"{escape_basic_string(key)}"'

    def _render_header(self, section: str, item: Optional[ConfigItem] = None) -> str:
        """
        ``item`` is any member of the section; errors name its source variable.
        Under "raw" each component comes back verbatim, so the header does too.
        """
        return SECTION_JOINER.join(
            self._render_key(part, item) for part in section.split(SECTION_JOINER)
        )


def serialize(
    config: Config,
    *,
    section_order: SectionOrder = "sorted",
    value_encoding: ValueEncoding = "escape",
) -> str:
    """Render ``config``; an empty Config renders as the empty string."""
    return Serializer(section_order, value_encoding).serialize(config)
