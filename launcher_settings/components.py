"""Split the entity collections into per-file groups and merge them back.

Pure helpers: no file IO. ``partition`` buckets every entity by the file it
resolves to (``None`` is the root file); ``flatten`` concatenates buckets in
the order given. Relative order inside each collection is preserved, so
``flatten(partition(c, m))`` keeps every entity exactly once.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from .model import Board, ColorScheme, EntityKind, PadSet, SettingsData, TextStyle, _list, _mapping
from .source_mapping import SourceMapping, SourceResolver


@dataclass
class Components:
    """The four entity collections of one file (or of the whole dataset)."""

    color_schemes: List[ColorScheme] = field(default_factory=list)
    text_styles: List[TextStyle] = field(default_factory=list)
    boards: List[Board] = field(default_factory=list)
    padsets: List[PadSet] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: Any) -> "Components":
        raw = _mapping(raw, "components")
        return cls(
            color_schemes=[ColorScheme.from_dict(item) for item in _list(raw.get("color_schemes"), "color_schemes")],
            text_styles=[TextStyle.from_dict(item) for item in _list(raw.get("text_styles"), "text_styles")],
            boards=[Board.from_dict(item) for item in _list(raw.get("boards"), "boards")],
            padsets=[PadSet.from_dict(item) for item in _list(raw.get("padsets"), "padsets")],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "color_schemes": [scheme.to_dict() for scheme in self.color_schemes],
            "text_styles": [style.to_dict() for style in self.text_styles],
            "boards": [board.to_dict() for board in self.boards],
            "padsets": [padset.to_dict() for padset in self.padsets],
        }

    def entities(self) -> Iterator[Tuple[EntityKind, Any]]:
        for style in self.text_styles:
            yield EntityKind.TEXT_STYLE, style
        for scheme in self.color_schemes:
            yield EntityKind.COLOR_SCHEME, scheme
        for board in self.boards:
            yield EntityKind.BOARD, board
        for padset in self.padsets:
            yield EntityKind.PADSET, padset

    def is_empty(self) -> bool:
        return not (self.color_schemes or self.text_styles or self.boards or self.padsets)

    def mappings_for(self, source: Optional[str]) -> List[SourceMapping]:
        return [SourceMapping(kind, entity.name, source) for kind, entity in self.entities()]

    def extend(self, other: "Components") -> None:
        self.color_schemes.extend(other.color_schemes)
        self.text_styles.extend(other.text_styles)
        self.boards.extend(other.boards)
        self.padsets.extend(other.padsets)

    def _collection(self, kind: EntityKind) -> List[Any]:
        return {
            EntityKind.COLOR_SCHEME: self.color_schemes,
            EntityKind.TEXT_STYLE: self.text_styles,
            EntityKind.BOARD: self.boards,
            EntityKind.PADSET: self.padsets,
        }[kind]


def components_of(data: SettingsData) -> Components:
    return Components(
        color_schemes=list(data.color_schemes),
        text_styles=list(data.text_styles),
        boards=list(data.boards),
        padsets=list(data.padsets),
    )


def partition(components: Components, mappings: Sequence[SourceMapping]) -> Dict[Optional[str], Components]:
    """Bucket every entity by the source it resolves to."""

    resolver = SourceResolver(mappings)
    buckets: Dict[Optional[str], Components] = {}
    for kind, entity in components.entities():
        source = resolver.resolve(kind, entity.name)
        bucket = buckets.setdefault(source, Components())
        bucket._collection(kind).append(entity)
    return buckets


def flatten(buckets: Mapping[Optional[str], Components]) -> Components:
    """Concatenate buckets in iteration order into one group."""

    merged = Components()
    for bucket in buckets.values():
        merged.extend(bucket)
    return merged


def ordered_sources(buckets: Mapping[Optional[str], Components]) -> List[Optional[str]]:
    """Root first, then include names sorted; the order a reload merges them in."""

    includes = sorted(source for source in buckets if source is not None)
    return ([None] if None in buckets else []) + includes
