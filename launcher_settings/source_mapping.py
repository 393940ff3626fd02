"""Decide which file each entity is persisted to.

Every entity loaded from an include file is recorded as mapping to that file;
entities of the root file map to ``None``. Unrecorded entities fall back to a
name-prefix match (so ``code/extra`` lands next to ``code``) and finally to a
per-kind default.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .model import PATH_SEPARATOR, EntityKind

STYLING_FILE = "settings.styling.json"

DEFAULT_SOURCES: Dict[EntityKind, Optional[str]] = {
    EntityKind.COLOR_SCHEME: STYLING_FILE,
    EntityKind.TEXT_STYLE: STYLING_FILE,
    EntityKind.BOARD: None,
    EntityKind.PADSET: None,
}


@dataclass(frozen=True)
class SourceMapping:
    kind: EntityKind
    name: str
    source: Optional[str]


def first_segment(name: str) -> str:
    return name.split(PATH_SEPARATOR, 1)[0]


def default_source(kind: EntityKind) -> Optional[str]:
    return DEFAULT_SOURCES.get(kind)


class SourceResolver:
    """Index over recorded mappings; first recorded mapping wins on ties."""

    def __init__(self, mappings: Iterable[SourceMapping] = ()) -> None:
        self._mappings: List[SourceMapping] = list(mappings)
        self._exact: Dict[Tuple[EntityKind, str], SourceMapping] = {}
        self._by_name: Dict[str, SourceMapping] = {}
        for mapping in self._mappings:
            self._exact.setdefault((mapping.kind, mapping.name), mapping)
            self._by_name.setdefault(mapping.name, mapping)

    @property
    def mappings(self) -> List[SourceMapping]:
        return list(self._mappings)

    def resolve(self, kind: EntityKind, name: str) -> Optional[str]:
        mapping = self._exact.get((kind, name)) or self._by_name.get(first_segment(name))
        if mapping is not None:
            return mapping.source
        return default_source(kind)


def rename_mapping(
    mappings: Sequence[SourceMapping], kind: EntityKind, old_name: str, new_name: str
) -> List[SourceMapping]:
    """Return ``mappings`` with the exact ``(kind, old_name)`` record renamed."""

    renamed: List[SourceMapping] = []
    for mapping in mappings:
        if mapping.kind is kind and mapping.name == old_name:
            mapping = SourceMapping(kind, new_name, mapping.source)
        renamed.append(mapping)
    return renamed
