"""Walk every place one entity names another.

Boards name a color scheme, a text style, a base pad set and modifier pad
sets; pads name a board to navigate to plus their own scheme/style overrides.
Validation and rename cascades both go through :func:`iter_reference_sites`,
so a new reference field only has to be added here.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, MutableMapping, Optional

from .model import Board, EntityKind, Pad, PadSet, SettingsData


@dataclass
class ReferenceSite:
    kind: EntityKind
    owner: Any
    key: str
    board: Optional[Board] = None
    padset: Optional[PadSet] = None
    pad: Optional[Pad] = None
    slot: Optional[int] = None
    modifier: Optional[str] = None

    @property
    def in_pad(self) -> bool:
        return self.pad is not None

    def get(self) -> Optional[str]:
        if isinstance(self.owner, MutableMapping):
            return self.owner.get(self.key)
        return getattr(self.owner, self.key)

    def set(self, value: str) -> None:
        if isinstance(self.owner, MutableMapping):
            self.owner[self.key] = value
        else:
            setattr(self.owner, self.key, value)


def iter_reference_sites(data: SettingsData) -> Iterator[ReferenceSite]:
    for board in data.boards:
        yield ReferenceSite(EntityKind.COLOR_SCHEME, board, "color_scheme", board=board)
        yield ReferenceSite(EntityKind.TEXT_STYLE, board, "text_style", board=board)
        yield ReferenceSite(EntityKind.PADSET, board, "base_pads", board=board)
        for modifier in list(board.modifier_pads):
            yield ReferenceSite(EntityKind.PADSET, board.modifier_pads, modifier, board=board, modifier=modifier)
    for padset in data.padsets:
        for slot, pad in enumerate(padset.items):
            yield ReferenceSite(EntityKind.BOARD, pad, "board", padset=padset, pad=pad, slot=slot)
            yield ReferenceSite(EntityKind.COLOR_SCHEME, pad, "color_scheme", padset=padset, pad=pad, slot=slot)
            yield ReferenceSite(EntityKind.TEXT_STYLE, pad, "text_style", padset=padset, pad=pad, slot=slot)


def rewrite_references(data: SettingsData, kind: EntityKind, old_name: str, new_name: str) -> int:
    """Point every ``kind`` reference to ``old_name`` at ``new_name``; return the count."""

    rewritten = 0
    for site in iter_reference_sites(data):
        if site.kind is kind and site.get() == old_name:
            site.set(new_name)
            rewritten += 1
    return rewritten
