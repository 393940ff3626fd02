"""The repository surface the UI and navigation layers depend on.

Consumers type against these protocols; :class:`launcher_settings.settings.Settings`
is the implementation backed by files.
"""
from __future__ import annotations

from typing import Callable, List, Optional, Protocol

from .model import Board, ColorScheme, Detection, LayoutSettings, PadSet, TextStyle


class SettingsRepository(Protocol):  # type: ignore[name-defined]
    def timeout(self) -> int: ...
    def feedback(self) -> int: ...
    def editor(self) -> str: ...
    def natural_key_order(self) -> bool: ...
    def home_board_name(self) -> str: ...
    def board_names(self) -> List[str]: ...
    def padset_names(self) -> List[str]: ...
    def color_scheme_names(self) -> List[str]: ...
    def text_style_names(self) -> List[str]: ...
    def boards(self) -> List[Board]: ...
    def padsets(self) -> List[PadSet]: ...
    def color_schemes(self) -> List[ColorScheme]: ...
    def text_styles(self) -> List[TextStyle]: ...
    def get_board(self, name: str) -> Board: ...
    def get_padset(self, name: str) -> PadSet: ...
    def get_color_scheme(self, name: str) -> Optional[ColorScheme]: ...
    def get_text_style(self, name: str) -> Optional[TextStyle]: ...
    def resolve_color_scheme(self, name: Optional[str]) -> ColorScheme: ...
    def resolve_text_style(self, name: Optional[str]) -> TextStyle: ...
    def detect(self, process_name: str) -> Optional[str]: ...
    def detections(self) -> List[tuple[str, Detection]]: ...
    def get_layout_settings(self) -> Optional[LayoutSettings]: ...


class SettingsRepositoryMut(SettingsRepository, Protocol):  # type: ignore[name-defined]
    def add_board(self, board: Board) -> None: ...
    def set_board(self, board: Board) -> None: ...
    def delete_board(self, name: str) -> None: ...
    def modify_board(self, name: str, update: Callable[[Board], None]) -> None: ...
    def add_padset(self, padset: PadSet) -> None: ...
    def set_padset(self, padset: PadSet) -> None: ...
    def delete_padset(self, name: str) -> None: ...
    def add_color_scheme(self, scheme: ColorScheme) -> None: ...
    def set_color_scheme(self, scheme: ColorScheme) -> None: ...
    def delete_color_scheme(self, name: str) -> None: ...
    def rename_color_scheme(self, old_name: str, new_name: str) -> None: ...
    def add_text_style(self, style: TextStyle) -> None: ...
    def set_text_style(self, style: TextStyle) -> None: ...
    def delete_text_style(self, name: str) -> None: ...
    def rename_text_style(self, old_name: str, new_name: str) -> None: ...
    def set_layout_settings(self, layout: LayoutSettings) -> None: ...
    def mark_dirty(self) -> None: ...
    def is_dirty(self) -> bool: ...
    def flush(self) -> None: ...
    def reload(self) -> None: ...
