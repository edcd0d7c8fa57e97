"""
Purpose:
    - Filter an environment snapshot by prefix
    - Derive (section, key) for every matching name
    - Group the items into a Config

Derivation of a name such as ``APP_DB__HOST`` with prefix ``APP_``:
    strip prefix  -> "DB__HOST"
    lowercase     -> "db__host"
    split on "__" -> ["db", "host"]
    last part is the key, the rest joined with "." is the section ("db").
A name without "__" after the prefix lands in the global scope.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from envtoml.config.settings import DuplicatePolicy
from envtoml.errors.errors import DuplicateKeyError, KeyConflictError
from envtoml.types.aliases import ItemPath, SectionName
from envtoml.types.types import PATH_DELIMITER, SECTION_JOINER, Config, ConfigItem

_LOGGER = logging.getLogger(__name__)


def derive_item_path(prefix: str, name: str) -> Optional[ItemPath]:
    """
    Map ``name`` to ``(section, key)``, or None when it does not start with ``prefix``.
    The match is exact and case-sensitive; an empty prefix matches everything.
    """
    if not name.startswith(prefix):
        return None

    normalized = name[len(prefix) :].lower()
    parts = normalized.split(PATH_DELIMITER)
    section = SECTION_JOINER.join(parts[:-1])
    # "" also covers names like APP___X whose leading components are all empty
    return (section or None, parts[-1])


def collect(
    prefix: str,
    environment: Mapping[str, str],
    *,
    on_duplicate: DuplicatePolicy = "error",
) -> Config:
    """
    Build a Config from every variable in ``environment`` that starts with ``prefix``.

    Items keep the iteration order of ``environment`` inside the global scope and
    inside each section; sections are recorded in order of first appearance.
    No matches yield an empty Config.
    """
    global_items: list[ConfigItem] = []
    sections: dict[SectionName, list[ConfigItem]] = {}
    # where each (section, key) currently lives: bucket and index within it
    seen: dict[ItemPath, tuple[list[ConfigItem], int]] = {}

    for name, value in environment.items():
        path = derive_item_path(prefix, name)
        if path is None:
            continue
        section, key = path
        item = ConfigItem(section=section, key=key, value=value, source=name)

        if not key:
            _LOGGER.warning(
                "empty_key_derived",
                extra={"event": "empty_key_derived", "source": name, "section": section},
            )

        bucket = global_items if section is None else sections.setdefault(section, [])

        if path in seen:
            earlier_bucket, index = seen[path]
            earlier = earlier_bucket[index]
            if on_duplicate == "error":
                raise DuplicateKeyError(
                    f"'{earlier.source}' and '{name}' both map to key '{key}'",
                    key=key,
                    section=section,
                    sources=(earlier.source, name),
                    component="core.collector",
                )
            _LOGGER.warning(
                "duplicate_key",
                extra={
                    "event": "duplicate_key",
                    "policy": on_duplicate,
                    "section": section,
                    "key": key,
                    "sources": [earlier.source, name],
                },
            )
            if on_duplicate == "first":
                continue
            if on_duplicate == "last":
                earlier_bucket[index] = item
                continue
            # "keep": both lines end up in the output

        bucket.append(item)
        seen[path] = (bucket, len(bucket) - 1)

    _check_key_table_conflicts(global_items, sections, on_duplicate)

    config = Config(global_items=tuple(global_items), sections=sections)
    _LOGGER.debug(
        "environment_collected",
        extra={
            "event": "environment_collected",
            "prefix": prefix,
            "scanned": len(environment),
            "matched": len(config),
            "sections": len(config.sections),
        },
    )
    return config


def _check_key_table_conflicts(
    global_items: list[ConfigItem],
    sections: Mapping[SectionName, list[ConfigItem]],
    on_duplicate: DuplicatePolicy,
) -> None:
    """
    A key whose dotted path names a section, or a parent of one
    (APP_DB with APP_DB__HOST, APP_A__B with APP_A__B__C), cannot be both a
    string and a table. Neither variable can be dropped in favour of the other,
    so only "keep" lets the pair through.
    """
    # every table the headers open, implicit parents included: "a.b" -> "a", "a.b"
    tables: dict[str, SectionName] = {}
    for name in sections:
        parts = name.split(SECTION_JOINER)
        for depth in range(1, len(parts) + 1):
            tables.setdefault(SECTION_JOINER.join(parts[:depth]), name)

    all_items = list(global_items)
    for section_items in sections.values():
        all_items.extend(section_items)

    for item in all_items:
        full_path = (
            item.key if item.section is None else SECTION_JOINER.join((item.section, item.key))
        )
        if full_path not in tables:
            continue
        table_source = sections[tables[full_path]][0].source
        if on_duplicate != "keep":
            raise KeyConflictError(
                f"'{item.source}' sets key '{full_path}' which '{table_source}' "
                "uses as a section",
                key=item.key,
                section=item.section,
                sources=(item.source, table_source),
                component="core.collector",
            )
        _LOGGER.warning(
            "key_table_conflict",
            extra={
                "event": "key_table_conflict",
                "policy": on_duplicate,
                "path": full_path,
                "sources": [item.source, table_source],
            },
        )


class Collector:
    """Collector bound to one prefix and duplicate policy."""

    def __init__(self, prefix: str, on_duplicate: DuplicatePolicy = "error") -> None:
        self._prefix = prefix
        self._on_duplicate = on_duplicate

    @property
    def prefix(self) -> str:
        return self._prefix

    def collect(self, environment: Mapping[str, str]) -> Config:
        return collect(self._prefix, environment, on_duplicate=self._on_duplicate)
