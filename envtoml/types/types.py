from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping, Optional

from envtoml.errors.errors import ConfigInvariantError
from envtoml.types.aliases import EnvName, ItemPath, SectionName

# -------- Constants --------

PATH_DELIMITER = "__"  # separates path components in a variable name
SECTION_JOINER = "."  # joins section components in the output header


@dataclass(frozen=True)
class ConfigItem:
    """One key/value entry; ``section is None`` places it in the global scope."""

    section: Optional[SectionName]
    key: str
    value: str
    source: EnvName = ""

    @property
    def path(self) -> ItemPath:
        return (self.section, self.key)


@dataclass(frozen=True)
class Config:
    """
    Result of collecting one environment snapshot.

    ``global_items`` holds the section-less entries, ``sections`` maps a dotted
    section name to its entries. Both keep collection order. Built once, never
    mutated.
    """

    global_items: tuple[ConfigItem, ...] = ()
    sections: Mapping[SectionName, tuple[ConfigItem, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self) -> None:
        for item in self.global_items:
            if item.section is not None:
                raise ConfigInvariantError(
                    "global item carries a section",
                    component="types.Config",
                    details={"key": item.key, "section": item.section},
                )
        for name, items in self.sections.items():
            for item in items:
                if item.section != name:
                    raise ConfigInvariantError(
                        "section item filed under the wrong section",
                        component="types.Config",
                        details={"key": item.key, "section": item.section, "bucket": name},
                    )
        # freeze whatever mapping the caller handed in
        frozen = MappingProxyType({name: tuple(items) for name, items in self.sections.items()})
        object.__setattr__(self, "global_items", tuple(self.global_items))
        object.__setattr__(self, "sections", frozen)

    @property
    def is_empty(self) -> bool:
        return not self.global_items and not self.sections

    def items(self) -> Iterator[ConfigItem]:
        """Every item, global scope first, then sections in collection order."""
        yield from self.global_items
        for section_items in self.sections.values():
            yield from section_items

    def __len__(self) -> int:
        return len(self.global_items) + sum(len(v) for v in self.sections.values())
