"""Board level use cases composed from repository calls."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List

from .errors import BoardInUseError, EntityExistsError, EntityNotFoundError
from .logging_utils import get_logger
from .model import PATH_SEPARATOR, Board, EntityKind, PadSet
from .repository import SettingsRepositoryMut

LOGGER = get_logger("BoardOps")


def slugify(value: str) -> str:
    """``"Ctrl+Shift"`` -> ``"ctrl_shift"``; ``"Chrome.exe"`` -> ``"chrome"``."""

    return value.lower().replace(".exe", "").replace(" ", "_").replace("-", "_").replace("+", "_")


@dataclass
class BoardReferences:
    padsets: List[str]
    chains: List[str]

    def __bool__(self) -> bool:
        return bool(self.padsets or self.chains)


def find_board_references(repo: SettingsRepositoryMut, name: str) -> BoardReferences:
    """Pad sets whose pads navigate to ``name`` and chain boards that list it."""

    padsets = [
        padset.name for padset in repo.padsets() if any(pad.board == name for pad in padset.items)
    ]
    chains = [
        board.name
        for board in repo.boards()
        if board.kind.chain is not None and name in board.kind.chain.board_names()
    ]
    return BoardReferences(padsets, chains)


def delete_board_with_padsets(repo: SettingsRepositoryMut, name: str) -> None:
    """Delete a board with its base and modifier pad sets.

    Refuses while any pad or chain board still points at it.
    """

    board = repo.get_board(name)
    references = find_board_references(repo, name)
    if references.padsets:
        raise BoardInUseError(
            f"Board '{name}' is referenced by pad set '{references.padsets[0]}'", name, references.padsets[0]
        )
    if references.chains:
        raise BoardInUseError(f"Board '{name}' is listed in chain '{references.chains[0]}'", name, references.chains[0])

    repo.delete_board(name)
    existing = set(repo.padset_names())
    owned = ([board.base_pads] if board.base_pads else []) + list(board.modifier_pads.values())
    for padset_name in owned:
        if padset_name in existing:
            repo.delete_padset(padset_name)
            existing.discard(padset_name)
    LOGGER.debug("Board deleted with pad sets: %s %s", name, owned)


def create_child_board(repo: SettingsRepositoryMut, parent_name: str, keyword: str) -> Board:
    """Add a static ``<parent>/<slug(keyword)>`` board styled like its parent, with an empty pad set."""

    root_parent = parent_name
    if PATH_SEPARATOR in parent_name:
        base = parent_name.rsplit(PATH_SEPARATOR, 1)[0]
        if base in repo.board_names():
            root_parent = base
    name = f"{root_parent}{PATH_SEPARATOR}{slugify(keyword)}"
    if name in repo.board_names():
        raise EntityExistsError(EntityKind.BOARD.label, name)

    parent = repo.get_board(parent_name)
    if not parent.kind.is_static:
        raise ValueError(f"Parent board '{parent_name}' must be a static board")

    board = Board(
        name=name,
        title=keyword,
        icon=parent.icon,
        color_scheme=parent.color_scheme,
        text_style=parent.text_style,
        base_pads=name,
    )
    repo.add_board(board)
    repo.add_padset(PadSet(name))
    return repo.get_board(name)


def create_modifier_padset(repo: SettingsRepositoryMut, board_name: str, modifier: str) -> PadSet:
    """Add an empty ``<board>/<slug(modifier)>`` pad set and wire it to ``modifier``."""

    board = repo.get_board(board_name)
    if board.has_modifier(modifier):
        raise EntityExistsError("Modifier", modifier)
    padset_name = f"{board_name}{PATH_SEPARATOR}{slugify(modifier)}"
    board.modifier_pads[modifier] = padset_name
    repo.add_padset(PadSet(padset_name))
    repo.set_board(board)
    return repo.get_padset(padset_name)


def delete_modifier_padset(repo: SettingsRepositoryMut, board_name: str, modifier: str) -> None:
    board = repo.get_board(board_name)
    padset_name = board.modifier_pads.pop(modifier, None)
    if padset_name is None:
        raise EntityNotFoundError("Modifier", modifier)
    repo.delete_padset(padset_name)
    repo.set_board(board)
