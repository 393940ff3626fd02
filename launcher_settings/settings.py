"""In-process repository over the persisted settings.

:class:`Settings` owns the loaded aggregate for the lifetime of the launcher.
Readers get copies; every change goes through a mutating method, which marks
the repository dirty until :meth:`Settings.flush` writes it back.
"""
from __future__ import annotations

import copy
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar

from .errors import EntityExistsError, EntityNotFoundError
from .logging_utils import get_logger
from .model import (
    DEFAULT_SCHEME,
    DEFAULT_TEXT_STYLE,
    HOME_BOARD_NAME,
    Board,
    ColorScheme,
    Detection,
    EntityKind,
    LayoutSettings,
    PadSet,
    SettingsData,
    TextStyle,
)
from .references import rewrite_references
from .resources import Resources
from .source_mapping import rename_mapping
from .storage import SettingsFileStorage

LOGGER = get_logger("Repository")

_Entity = TypeVar("_Entity", ColorScheme, TextStyle, Board, PadSet)


def _index_of(collection: Sequence[_Entity], name: str) -> Optional[int]:
    for index, entity in enumerate(collection):
        if entity.name == name:
            return index
    return None


class Settings:
    """File-backed implementation of :class:`~launcher_settings.repository.SettingsRepositoryMut`."""

    def __init__(
        self,
        data: SettingsData,
        resources: Resources,
        storage: Optional[SettingsFileStorage] = None,
    ) -> None:
        self._resources = resources
        self._storage = storage or SettingsFileStorage(resources)
        self._data = data
        self._dirty = False
        self._logger = LOGGER

    @classmethod
    def load(cls, resources: Resources) -> "Settings":
        storage = SettingsFileStorage(resources)
        return cls(storage.load(), resources, storage)

    @property
    def resources(self) -> Resources:
        return self._resources

    def snapshot(self) -> SettingsData:
        """Deep copy of the whole aggregate, source mappings included."""

        snapshot = copy.deepcopy(self._data)
        snapshot.source_mappings = list(self._data.source_mappings)
        return snapshot

    # Scalars -----------------------------------------------------------------

    def timeout(self) -> int:
        return self._data.timeout

    def feedback(self) -> int:
        return self._data.feedback

    def editor(self) -> str:
        return self._data.editor

    def natural_key_order(self) -> bool:
        return self._data.natural_key_order

    def home_board_name(self) -> str:
        return HOME_BOARD_NAME

    def get_layout_settings(self) -> Optional[LayoutSettings]:
        return copy.deepcopy(self._data.layout)

    def set_layout_settings(self, layout: LayoutSettings) -> None:
        self._data.layout = copy.deepcopy(layout)
        self._changed("Layout updated: %s", layout)

    # Listings ----------------------------------------------------------------

    def board_names(self) -> List[str]:
        return [board.name for board in self._data.boards]

    def padset_names(self) -> List[str]:
        return [padset.name for padset in self._data.padsets]

    def color_scheme_names(self) -> List[str]:
        return [scheme.name for scheme in self._data.color_schemes]

    def text_style_names(self) -> List[str]:
        return [style.name for style in self._data.text_styles]

    def boards(self) -> List[Board]:
        return copy.deepcopy(self._data.boards)

    def padsets(self) -> List[PadSet]:
        return copy.deepcopy(self._data.padsets)

    def color_schemes(self) -> List[ColorScheme]:
        return copy.deepcopy(self._data.color_schemes)

    def text_styles(self) -> List[TextStyle]:
        return copy.deepcopy(self._data.text_styles)

    # Lookups -----------------------------------------------------------------

    def get_board(self, name: str) -> Board:
        index = _index_of(self._data.boards, name)
        if index is None:
            raise EntityNotFoundError(EntityKind.BOARD.label, name)
        return copy.deepcopy(self._data.boards[index])

    def get_padset(self, name: str) -> PadSet:
        index = _index_of(self._data.padsets, name)
        if index is None:
            raise EntityNotFoundError(EntityKind.PADSET.label, name)
        return copy.deepcopy(self._data.padsets[index])

    def get_color_scheme(self, name: str) -> Optional[ColorScheme]:
        index = _index_of(self._data.color_schemes, name)
        return None if index is None else copy.deepcopy(self._data.color_schemes[index])

    def get_text_style(self, name: str) -> Optional[TextStyle]:
        index = _index_of(self._data.text_styles, name)
        return None if index is None else copy.deepcopy(self._data.text_styles[index])

    def resolve_color_scheme(self, name: Optional[str]) -> ColorScheme:
        """Named scheme, else the ``default`` scheme, else the built-in defaults."""

        if name is not None:
            scheme = self.get_color_scheme(name)
            if scheme is not None:
                return scheme
        return self.get_color_scheme(DEFAULT_SCHEME) or ColorScheme(name=DEFAULT_SCHEME)

    def resolve_text_style(self, name: Optional[str]) -> TextStyle:
        if name is not None:
            style = self.get_text_style(name)
            if style is not None:
                return style
        return self.get_text_style(DEFAULT_TEXT_STYLE) or TextStyle(name=DEFAULT_TEXT_STYLE)

    def detect(self, process_name: str) -> Optional[str]:
        """Name of the first board whose detection rule matches ``process_name``."""

        for board in self._data.boards:
            if board.detection.is_match(process_name):
                return board.name
        return None

    def detections(self) -> List[Tuple[str, Detection]]:
        return [
            (board.name, copy.deepcopy(board.detection))
            for board in self._data.boards
            if not board.detection.is_none
        ]

    # Mutations ---------------------------------------------------------------

    def add_board(self, board: Board) -> None:
        self._add(EntityKind.BOARD, self._data.boards, board)

    def set_board(self, board: Board) -> None:
        self._set(EntityKind.BOARD, self._data.boards, board)

    def delete_board(self, name: str) -> None:
        self._delete(EntityKind.BOARD, self._data.boards, name)

    def modify_board(self, name: str, update: Callable[[Board], None]) -> None:
        """Apply ``update`` to a copy of the board and store the result.

        ``update`` may rename the board as long as the new name is free; the
        board keeps its file.
        """

        index = _index_of(self._data.boards, name)
        if index is None:
            raise EntityNotFoundError(EntityKind.BOARD.label, name)
        board = copy.deepcopy(self._data.boards[index])
        update(board)
        if board.name != name:
            if _index_of(self._data.boards, board.name) is not None:
                raise EntityExistsError(EntityKind.BOARD.label, board.name)
            self._data.source_mappings = rename_mapping(
                self._data.source_mappings, EntityKind.BOARD, name, board.name
            )
        self._data.boards[index] = board
        self._changed("Board modified: %s", name)

    def add_padset(self, padset: PadSet) -> None:
        self._add(EntityKind.PADSET, self._data.padsets, padset)

    def set_padset(self, padset: PadSet) -> None:
        self._set(EntityKind.PADSET, self._data.padsets, padset)

    def delete_padset(self, name: str) -> None:
        self._delete(EntityKind.PADSET, self._data.padsets, name)

    def add_color_scheme(self, scheme: ColorScheme) -> None:
        self._add(EntityKind.COLOR_SCHEME, self._data.color_schemes, scheme)

    def set_color_scheme(self, scheme: ColorScheme) -> None:
        self._set(EntityKind.COLOR_SCHEME, self._data.color_schemes, scheme)

    def delete_color_scheme(self, name: str) -> None:
        self._delete(EntityKind.COLOR_SCHEME, self._data.color_schemes, name)

    def rename_color_scheme(self, old_name: str, new_name: str) -> None:
        self._rename(EntityKind.COLOR_SCHEME, self._data.color_schemes, old_name, new_name)

    def add_text_style(self, style: TextStyle) -> None:
        self._add(EntityKind.TEXT_STYLE, self._data.text_styles, style)

    def set_text_style(self, style: TextStyle) -> None:
        self._set(EntityKind.TEXT_STYLE, self._data.text_styles, style)

    def delete_text_style(self, name: str) -> None:
        self._delete(EntityKind.TEXT_STYLE, self._data.text_styles, name)

    def rename_text_style(self, old_name: str, new_name: str) -> None:
        self._rename(EntityKind.TEXT_STYLE, self._data.text_styles, old_name, new_name)

    def _add(self, kind: EntityKind, collection: List[_Entity], entity: _Entity) -> None:
        if _index_of(collection, entity.name) is not None:
            raise EntityExistsError(kind.label, entity.name)
        collection.append(copy.deepcopy(entity))
        self._changed("%s added: %s", kind.label, entity.name)

    def _set(self, kind: EntityKind, collection: List[_Entity], entity: _Entity) -> None:
        index = _index_of(collection, entity.name)
        if index is None:
            raise EntityNotFoundError(kind.label, entity.name)
        collection[index] = copy.deepcopy(entity)
        self._changed("%s updated: %s", kind.label, entity.name)

    def _delete(self, kind: EntityKind, collection: List[_Entity], name: str) -> None:
        index = _index_of(collection, name)
        if index is None:
            raise EntityNotFoundError(kind.label, name)
        del collection[index]
        self._changed("%s deleted: %s", kind.label, name)

    def _rename(self, kind: EntityKind, collection: List[_Entity], old_name: str, new_name: str) -> None:
        if _index_of(collection, new_name) is not None:
            raise EntityExistsError(kind.label, new_name)
        index = _index_of(collection, old_name)
        if index is None:
            raise EntityNotFoundError(kind.label, old_name)
        collection[index].name = new_name
        rewritten = rewrite_references(self._data, kind, old_name, new_name)
        self._data.source_mappings = rename_mapping(self._data.source_mappings, kind, old_name, new_name)
        self._changed("%s renamed: %s -> %s (%d references)", kind.label, old_name, new_name, rewritten)

    # Persistence -------------------------------------------------------------

    def mark_dirty(self) -> None:
        self._dirty = True

    def is_dirty(self) -> bool:
        return self._dirty

    def flush(self) -> None:
        """Write pending changes; a failed write leaves the repository dirty."""

        if not self._dirty:
            self._logger.debug("Flush skipped; settings unchanged")
            return
        self._data = self._storage.save(self._data)
        self._dirty = False
        self._logger.debug("Settings flushed")

    def reload(self) -> None:
        """Replace the held aggregate with a fresh load, dropping unflushed changes."""

        self._data = self._storage.load()
        self._dirty = False
        self._logger.debug("Settings reloaded")

    def _changed(self, message: str, *args: object) -> None:
        self._dirty = True
        self._logger.debug(message, *args)
