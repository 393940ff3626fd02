"""Entity records persisted by the settings store.

The records mirror the JSON layout of ``settings.json`` and its include files.
Each record knows how to build itself from a decoded JSON mapping
(``from_dict``) and how to render itself back (``to_dict``); optional fields
are omitted on write so unmodified files re-save byte-for-byte.
"""
from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

if TYPE_CHECKING:  # pragma: no cover
    from .source_mapping import SourceMapping

DEFAULT_SCHEME = "default"
DEFAULT_TEXT_STYLE = "default"
DEFAULT_OPACITY = 0.80
DEFAULT_BACKGROUND = "#00007f"
DEFAULT_FOREGROUND1 = "#6464b4"
DEFAULT_FOREGROUND2 = "#dbdbec"
DEFAULT_TAG_COLOR = "#dbdbec"

DEFAULT_HEADER_FONT = "Comic Sans MS Bold 36"
DEFAULT_PAD_HEADER_FONT = "Consolas 20"
DEFAULT_PAD_TEXT_FONT = "Comic Sans MS Bold 26"
DEFAULT_PAD_ID_FONT = "Nirmala UI 18"
DEFAULT_TAG_FONT = "Consolas Bold 18"
DEFAULT_FONT_FACE = "Arial"
DEFAULT_FONT_SIZE = 12

DEFAULT_TIMEOUT = 4
DEFAULT_FEEDBACK = 0
DEFAULT_EDITOR = "notepad.exe"
HOME_BOARD_NAME = "home"

PAD_SLOTS = 9
PATH_SEPARATOR = "/"
WINDOW_STYLES = ("Window", "Floating", "Taskbar")
ACTION_KINDS = ("Shortcut", "Text", "Line", "Paste", "PasteEnter", "Pause", "OpenUrl", "Custom")
BOARD_KINDS = ("static", "home", "chain", "custom")
_HEX_DIGITS = set("0123456789abcdef")


class EntityKind(Enum):
    """The four named entity collections; used as the source resolver key."""

    COLOR_SCHEME = "ColorScheme"
    TEXT_STYLE = "TextStyle"
    BOARD = "Board"
    PADSET = "PadSet"

    @property
    def label(self) -> str:
        return self.value


# Decoding helpers -----------------------------------------------------------


def _mapping(raw: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(raw, Mapping):
        raise ValueError(f"{what} must be a JSON object, got {type(raw).__name__}")
    return raw


def _list(raw: Any, what: str) -> List[Any]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ValueError(f"{what} must be a JSON array, got {type(raw).__name__}")
    return raw


def _name(raw: Mapping[str, Any], kind: str) -> str:
    value = raw.get("name")
    if not isinstance(value, str) or not value:
        raise ValueError(f"{kind} entry is missing a 'name'")
    return value


def _opt_str(raw: Mapping[str, Any], key: str) -> Optional[str]:
    value = raw.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"'{key}' must be a string, got {type(value).__name__}")
    return value


def _str(raw: Mapping[str, Any], key: str, default: str) -> str:
    value = _opt_str(raw, key)
    return default if value is None else value


def _required_str(raw: Mapping[str, Any], key: str, kind: str) -> str:
    value = _opt_str(raw, key)
    if value is None:
        raise ValueError(f"{kind} entry is missing '{key}'")
    return value


def _int(raw: Mapping[str, Any], key: str, default: int, *, minimum: Optional[int] = None) -> int:
    value = raw.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"'{key}' must be an integer, got {value!r}")
    if minimum is not None and value < minimum:
        raise ValueError(f"'{key}' must be at least {minimum}, got {value!r}")
    return value


def _str_list(raw: Mapping[str, Any], key: str) -> List[str]:
    values = _list(raw.get(key), key)
    if not all(isinstance(item, str) for item in values):
        raise ValueError(f"'{key}' must contain only strings")
    return list(values)


def _put_optional(payload: Dict[str, Any], key: str, value: Any) -> None:
    if value is not None:
        payload[key] = value


# Colors and fonts -----------------------------------------------------------


@dataclass(frozen=True)
class Color:
    r: int
    g: int
    b: int

    @classmethod
    def from_hex(cls, value: str) -> Optional["Color"]:
        """Parse ``#rrggbb``/``0xrrggbb``/``rrggbb``; anything else yields None."""

        token = (value or "").strip().lower()
        if token.startswith("0x"):
            token = token[2:]
        if token.startswith("#"):
            token = token[1:]
        if len(token) != 6 or not set(token) <= _HEX_DIGITS:
            return None
        return cls(int(token[0:2], 16), int(token[2:4], 16), int(token[4:6], 16))

    @classmethod
    def from_hex_or(cls, value: str, fallback: str) -> Optional["Color"]:
        return cls.from_hex(value) or cls.from_hex(fallback)

    def to_hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def to_rgb(self) -> Tuple[int, int, int]:
        return self.r, self.g, self.b

    def inverted(self) -> "Color":
        return Color(255 - self.r, 255 - self.g, 255 - self.b)


@dataclass(frozen=True)
class FontSpec:
    face: str
    bold: bool
    italic: bool
    size: int


def parse_font(descriptor: str) -> FontSpec:
    """Split a descriptor such as ``"Consolas Bold 18"`` into its parts.

    The last token is the size; ``bold``/``italic`` tokens anywhere before it set
    the flags and the remaining tokens form the face name.
    """

    parts = (descriptor or "").split()
    if not parts:
        return FontSpec(DEFAULT_FONT_FACE, False, False, DEFAULT_FONT_SIZE)
    try:
        size = int(parts[-1])
    except ValueError:
        size = DEFAULT_FONT_SIZE
    bold = False
    italic = False
    face_parts: List[str] = []
    for part in parts[:-1]:
        token = part.lower()
        if token == "bold":
            bold = True
        elif token == "italic":
            italic = True
        else:
            face_parts.append(part)
    face = " ".join(face_parts) if face_parts else DEFAULT_FONT_FACE
    return FontSpec(face, bold, italic, size)


# Styling entities -----------------------------------------------------------


@dataclass
class ColorScheme:
    name: str = DEFAULT_SCHEME
    opacity: float = DEFAULT_OPACITY
    background: str = DEFAULT_BACKGROUND
    foreground1: str = DEFAULT_FOREGROUND1
    foreground2: str = DEFAULT_FOREGROUND2
    tag_foreground: str = DEFAULT_TAG_COLOR
    palette: List[str] = field(default_factory=list)

    entity_kind = EntityKind.COLOR_SCHEME

    @classmethod
    def from_dict(cls, raw: Any) -> "ColorScheme":
        raw = _mapping(raw, "ColorScheme")
        opacity = raw.get("opacity", DEFAULT_OPACITY)
        if isinstance(opacity, bool) or not isinstance(opacity, (int, float)):
            raise ValueError(f"'opacity' must be a number, got {opacity!r}")
        return cls(
            name=_name(raw, "ColorScheme"),
            opacity=max(0.0, min(float(opacity), 1.0)),
            background=_str(raw, "background", DEFAULT_BACKGROUND),
            foreground1=_str(raw, "foreground1", DEFAULT_FOREGROUND1),
            foreground2=_str(raw, "foreground2", DEFAULT_FOREGROUND2),
            tag_foreground=_str(raw, "tag_foreground", DEFAULT_TAG_COLOR),
            palette=_str_list(raw, "palette"),
        )

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "name": self.name,
            "opacity": self.opacity,
            "background": self.background,
            "foreground1": self.foreground1,
            "foreground2": self.foreground2,
            "tag_foreground": self.tag_foreground,
        }
        if self.palette:
            payload["palette"] = list(self.palette)
        return payload

    def background_color(self) -> Color:
        return Color.from_hex_or(self.background, "#00007f")  # type: ignore[return-value]

    def foreground1_color(self) -> Color:
        return Color.from_hex_or(self.foreground1, "#5454a9")  # type: ignore[return-value]

    def foreground2_color(self) -> Color:
        return Color.from_hex_or(self.foreground2, "#dbdbec")  # type: ignore[return-value]

    def tag_foreground_color(self) -> Color:
        return Color.from_hex_or(self.tag_foreground, "#ff0000")  # type: ignore[return-value]

    def palette_color(self, index: int) -> Optional[Color]:
        if 0 <= index < len(self.palette):
            return Color.from_hex(self.palette[index])
        return None

    def palette_color_or(self, index: int, fallback: Callable[["ColorScheme"], Color]) -> Color:
        return self.palette_color(index) or fallback(self)

    def inverted(self) -> "ColorScheme":
        return ColorScheme(
            name=f"{self.name} (inverted)",
            opacity=self.opacity,
            background=self.background_color().inverted().to_hex(),
            foreground1=self.foreground1_color().inverted().to_hex(),
            foreground2=self.foreground2_color().inverted().to_hex(),
            tag_foreground=self.tag_foreground_color().inverted().to_hex(),
            palette=[
                Color.from_hex_or(value, "#ff0000").inverted().to_hex()  # type: ignore[union-attr]
                for value in self.palette
            ],
        )


@dataclass
class TextStyle:
    name: str = DEFAULT_TEXT_STYLE
    header_font: str = DEFAULT_HEADER_FONT
    pad_header_font: str = DEFAULT_PAD_HEADER_FONT
    pad_text_font: str = DEFAULT_PAD_TEXT_FONT
    pad_id_font: str = DEFAULT_PAD_ID_FONT
    tag_font: str = DEFAULT_TAG_FONT
    palette: List[str] = field(default_factory=list)

    entity_kind = EntityKind.TEXT_STYLE

    @classmethod
    def from_dict(cls, raw: Any) -> "TextStyle":
        raw = _mapping(raw, "TextStyle")
        return cls(
            name=_name(raw, "TextStyle"),
            header_font=_required_str(raw, "header_font", "TextStyle"),
            pad_header_font=_required_str(raw, "pad_header_font", "TextStyle"),
            pad_text_font=_required_str(raw, "pad_text_font", "TextStyle"),
            pad_id_font=_required_str(raw, "pad_id_font", "TextStyle"),
            tag_font=_required_str(raw, "tag_font", "TextStyle"),
            palette=_str_list(raw, "palette"),
        )

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "name": self.name,
            "header_font": self.header_font,
            "pad_header_font": self.pad_header_font,
            "pad_text_font": self.pad_text_font,
            "pad_id_font": self.pad_id_font,
            "tag_font": self.tag_font,
        }
        if self.palette:
            payload["palette"] = list(self.palette)
        return payload

    def font_spec(self, role: str) -> FontSpec:
        """Return the parsed font for ``header``, ``pad_header``, ``pad_text``, ``pad_id`` or ``tag``."""

        descriptor = getattr(self, f"{role}_font", None)
        if descriptor is None:
            raise ValueError(f"Unknown font role: {role}")
        return parse_font(descriptor)

    def palette_font(self, index: int) -> Optional[FontSpec]:
        if 0 <= index < len(self.palette):
            return parse_font(self.palette[index])
        return None


# Parameters and actions ----------------------------------------------------


@dataclass
class Param:
    name: str
    value: str = ""

    @classmethod
    def from_dict(cls, raw: Any) -> "Param":
        raw = _mapping(raw, "Param")
        name = raw.get("name")
        if not isinstance(name, str):
            raise ValueError("Param entry is missing a 'name'")
        value = raw.get("value", "")
        return cls(name=name, value=value if isinstance(value, str) else str(value))

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "value": self.value}

    def as_int(self) -> int:
        try:
            return int(self.value)
        except ValueError:
            return 0

    def as_float(self) -> float:
        try:
            return float(self.value)
        except ValueError:
            return 0.0

    def as_bool(self) -> bool:
        return self.value.strip().lower() in {"1", "true", "yes", "on"}


def find_param(params: Sequence[Param], name: str) -> Optional[Param]:
    return next((param for param in params if param.name == name), None)


def merge_params(base: Sequence[Param], overrides: Sequence[Param]) -> List[Param]:
    """Return ``base`` with values replaced/extended by ``overrides`` (by name)."""

    merged = [Param(param.name, param.value) for param in base]
    for override in overrides:
        existing = find_param(merged, override.name)
        if existing is not None:
            existing.value = override.value
        else:
            merged.append(Param(override.name, override.value))
    return merged


def _params(raw: Any, what: str) -> List[Param]:
    return [Param.from_dict(item) for item in _list(raw, what)]


@dataclass
class Action:
    """One typed pad action; ``value`` is the script/text/url, pause millis, or custom type."""

    kind: str
    value: Any = ""
    params: List[Param] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: Any) -> "Action":
        raw = _mapping(raw, "Action")
        if len(raw) != 1:
            raise ValueError(f"Action must have exactly one variant key, got {sorted(raw)}")
        kind, value = next(iter(raw.items()))
        if kind not in ACTION_KINDS:
            raise ValueError(f"Unknown action type: {kind}")
        if kind == "Custom":
            body = _mapping(value, "Custom action")
            action_type = body.get("type")
            if not isinstance(action_type, str):
                raise ValueError("Custom action is missing a 'type'")
            return cls(kind, action_type, _params(body.get("params"), "params"))
        if kind == "Pause":
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"Pause must be a non-negative integer, got {value!r}")
            return cls(kind, value)
        if not isinstance(value, str):
            raise ValueError(f"{kind} action expects a string, got {value!r}")
        return cls(kind, value)

    def to_dict(self) -> Dict[str, Any]:
        if self.kind == "Custom":
            body: Dict[str, Any] = {"type": self.value}
            if self.params:
                body["params"] = [param.to_dict() for param in self.params]
            return {"Custom": body}
        return {self.kind: self.value}


# Boards --------------------------------------------------------------------


@dataclass
class ChainParams:
    boards: str = ""
    initial_board: Optional[str] = None
    params: List[Param] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: Any) -> "ChainParams":
        raw = _mapping(raw, "chain")
        return cls(
            boards=_str(raw, "boards", ""),
            initial_board=_opt_str(raw, "initial_board"),
            params=_params(raw.get("params"), "params"),
        )

    @classmethod
    def from_params(cls, params: Sequence[Param]) -> "ChainParams":
        boards = find_param(params, "boards")
        initial = find_param(params, "initial_board")
        return cls(
            boards=boards.value if boards else "",
            initial_board=initial.value if initial else None,
            params=[Param(p.name, p.value) for p in params if p.name not in {"boards", "initial_board"}],
        )

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"boards": self.boards}
        _put_optional(payload, "initial_board", self.initial_board)
        if self.params:
            payload["params"] = [param.to_dict() for param in self.params]
        return payload

    def board_names(self) -> List[str]:
        return [name.strip() for name in self.boards.split(",") if name.strip()]


@dataclass
class BoardParams:
    board_type: str
    params: List[Param] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: Any) -> "BoardParams":
        raw = _mapping(raw, "custom")
        board_type = raw.get("type")
        if not isinstance(board_type, str):
            raise ValueError("Custom board is missing a 'type'")
        return cls(board_type, _params(raw.get("params"), "params"))

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"type": self.board_type}
        if self.params:
            payload["params"] = [param.to_dict() for param in self.params]
        return payload


@dataclass
class BoardKind:
    """Static | Home | Chain(ChainParams) | Custom(BoardParams)."""

    name: str = "static"
    chain: Optional[ChainParams] = None
    custom: Optional[BoardParams] = None

    @classmethod
    def static(cls) -> "BoardKind":
        return cls("static")

    @classmethod
    def home(cls) -> "BoardKind":
        return cls("home")

    @classmethod
    def chained(cls, params: ChainParams) -> "BoardKind":
        return cls("chain", chain=params)

    @classmethod
    def custom_board(cls, params: BoardParams) -> "BoardKind":
        return cls("custom", custom=params)

    @property
    def is_static(self) -> bool:
        return self.name == "static"

    @classmethod
    def from_wire(cls, raw: Any) -> "BoardKind":
        if raw is None:
            return cls.static()
        if isinstance(raw, str):
            if raw in {"static", "home"}:
                return cls(raw)
            raise ValueError(f"Unknown board kind: {raw}")
        raw = _mapping(raw, "kind")
        if len(raw) != 1:
            raise ValueError(f"Board kind must have exactly one variant key, got {sorted(raw)}")
        variant, body = next(iter(raw.items()))
        if variant == "chain":
            return cls.chained(ChainParams.from_dict(body))
        if variant == "custom":
            return cls.custom_board(BoardParams.from_dict(body))
        raise ValueError(f"Unknown board kind: {variant}")

    def to_wire(self) -> Any:
        if self.name == "chain" and self.chain is not None:
            return {"chain": self.chain.to_dict()}
        if self.name == "custom" and self.custom is not None:
            return {"custom": self.custom.to_dict()}
        return self.name


@dataclass
class Detection:
    """Process detection rule; ``keyword`` None means no detection."""

    keyword: Optional[str] = None

    @classmethod
    def from_wire(cls, raw: Any) -> "Detection":
        if raw is None or raw == "none":
            return cls()
        raw = _mapping(raw, "detection")
        keyword = raw.get("win32")
        if len(raw) != 1 or not isinstance(keyword, str):
            raise ValueError(f"Unsupported detection rule: {dict(raw)!r}")
        return cls(keyword)

    def to_wire(self) -> Any:
        if self.keyword is None:
            return "none"
        return {"win32": self.keyword}

    @property
    def is_none(self) -> bool:
        return self.keyword is None

    def is_match(self, process_name: str) -> bool:
        if self.keyword is None:
            return False
        return self.keyword.lower() in (process_name or "").lower()


@dataclass
class Board:
    name: str
    kind: BoardKind = field(default_factory=BoardKind)
    title: Optional[str] = None
    icon: Optional[str] = None
    detection: Detection = field(default_factory=Detection)
    color_scheme: Optional[str] = None
    text_style: Optional[str] = None
    base_pads: Optional[str] = None
    modifier_pads: Dict[str, str] = field(default_factory=dict)

    entity_kind = EntityKind.BOARD

    @classmethod
    def from_dict(cls, raw: Any) -> "Board":
        raw = _mapping(raw, "Board")
        modifier_raw = raw.get("modifier_pads") or {}
        modifier_pads = dict(_mapping(modifier_raw, "modifier_pads"))
        if not all(isinstance(value, str) for value in modifier_pads.values()):
            raise ValueError("'modifier_pads' values must be pad set names")
        return cls(
            name=_name(raw, "Board"),
            kind=BoardKind.from_wire(raw.get("kind")),
            title=_opt_str(raw, "title"),
            icon=_opt_str(raw, "icon"),
            detection=Detection.from_wire(raw.get("detection")),
            color_scheme=_opt_str(raw, "color_scheme"),
            text_style=_opt_str(raw, "text_style"),
            base_pads=_opt_str(raw, "base_pads"),
            modifier_pads=modifier_pads,
        )

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        if not self.kind.is_static:
            payload["kind"] = self.kind.to_wire()
        payload["name"] = self.name
        _put_optional(payload, "title", self.title)
        _put_optional(payload, "icon", self.icon)
        payload["detection"] = self.detection.to_wire()
        _put_optional(payload, "color_scheme", self.color_scheme)
        _put_optional(payload, "text_style", self.text_style)
        _put_optional(payload, "base_pads", self.base_pads)
        if self.modifier_pads:
            payload["modifier_pads"] = {key: self.modifier_pads[key] for key in sorted(self.modifier_pads)}
        return payload

    def display_title(self) -> str:
        return self.title if self.title is not None else self.name

    def parent_name(self) -> str:
        return self.name.split(PATH_SEPARATOR, 1)[0]

    def padset_name(self, modifier: Optional[str] = None) -> Optional[str]:
        if modifier is not None and modifier in self.modifier_pads:
            return self.modifier_pads[modifier]
        return self.base_pads

    def has_modifier(self, modifier: str) -> bool:
        return modifier in self.modifier_pads


# Pads ----------------------------------------------------------------------


@dataclass
class Pad:
    header: Optional[str] = None
    text: Optional[str] = None
    icon: Optional[str] = None
    actions: List[Action] = field(default_factory=list)
    board: Optional[str] = None
    board_params: List[Param] = field(default_factory=list)
    color_scheme: Optional[str] = None
    text_style: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Any) -> "Pad":
        raw = _mapping(raw, "Pad")
        return cls(
            header=_opt_str(raw, "header"),
            text=_opt_str(raw, "text"),
            icon=_opt_str(raw, "icon"),
            actions=[Action.from_dict(item) for item in _list(raw.get("actions"), "actions")],
            board=_opt_str(raw, "board"),
            board_params=_params(raw.get("board_params"), "board_params"),
            color_scheme=_opt_str(raw, "color_scheme"),
            text_style=_opt_str(raw, "text_style"),
        )

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        _put_optional(payload, "header", self.header)
        _put_optional(payload, "text", self.text)
        _put_optional(payload, "icon", self.icon)
        if self.actions:
            payload["actions"] = [action.to_dict() for action in self.actions]
        _put_optional(payload, "board", self.board)
        if self.board_params:
            payload["board_params"] = [param.to_dict() for param in self.board_params]
        _put_optional(payload, "color_scheme", self.color_scheme)
        _put_optional(payload, "text_style", self.text_style)
        return payload

    def is_empty(self) -> bool:
        return not self.to_dict()

    def is_interactive(self) -> bool:
        return bool(self.actions) or bool(self.board)


@dataclass
class PadSet:
    name: str
    items: List[Pad] = field(default_factory=list)

    entity_kind = EntityKind.PADSET

    @classmethod
    def from_dict(cls, raw: Any) -> "PadSet":
        raw = _mapping(raw, "PadSet")
        kind = raw.get("kind", "static")
        if kind != "static":
            raise ValueError(f"Unknown pad set kind: {kind!r}")
        return cls(
            name=_name(raw, "PadSet"),
            items=[Pad.from_dict(item) for item in _list(raw.get("items"), "items")],
        )

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"name": self.name}
        items = self.compact_items()
        if items:
            payload["items"] = [pad.to_dict() for pad in items]
        return payload

    def compact_items(self) -> List[Pad]:
        """Pads as stored: trailing empty slots are dropped."""

        items = list(self.items)
        while items and items[-1].is_empty():
            items.pop()
        return items

    def slots(self) -> List[Pad]:
        """Pads expanded to the nine physical slots, missing positions empty."""

        pads = [copy.deepcopy(pad) for pad in self.items[:PAD_SLOTS]]
        pads.extend(Pad() for _ in range(PAD_SLOTS - len(pads)))
        return pads

    def pad(self, index: int) -> Pad:
        """Return a copy of the pad in slot ``index`` (0..8)."""

        if not 0 <= index < PAD_SLOTS:
            raise IndexError(f"Pad index {index} out of range")
        return self.slots()[index]


# Root aggregate ------------------------------------------------------------


@dataclass
class LayoutSettings:
    x: int
    y: int
    width: int
    height: int
    window_style: str = "Window"

    @classmethod
    def from_dict(cls, raw: Any) -> "LayoutSettings":
        raw = _mapping(raw, "layout")
        style = _str(raw, "window_style", "Window")
        if style not in WINDOW_STYLES:
            raise ValueError(f"Unknown window_style: {style}")
        return cls(
            x=_int(raw, "x", 0),
            y=_int(raw, "y", 0),
            width=_int(raw, "width", 0),
            height=_int(raw, "height", 0),
            window_style=style,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "window_style": self.window_style,
        }


@dataclass
class SettingsData:
    timeout: int = DEFAULT_TIMEOUT
    feedback: int = DEFAULT_FEEDBACK
    editor: str = DEFAULT_EDITOR
    color_schemes: List[ColorScheme] = field(default_factory=list)
    text_styles: List[TextStyle] = field(default_factory=list)
    boards: List[Board] = field(default_factory=list)
    padsets: List[PadSet] = field(default_factory=list)
    layout: Optional[LayoutSettings] = None
    natural_key_order: bool = False
    includes: List[str] = field(default_factory=list)
    # Built while loading; never persisted.
    source_mappings: List["SourceMapping"] = field(default_factory=list, compare=False, repr=False)

    @classmethod
    def from_dict(cls, raw: Any) -> "SettingsData":
        raw = _mapping(raw, "settings")
        layout_raw = raw.get("layout")
        natural = raw.get("natural_key_order", False)
        if not isinstance(natural, bool):
            raise ValueError(f"'natural_key_order' must be true or false, got {natural!r}")
        return cls(
            timeout=_int(raw, "timeout", DEFAULT_TIMEOUT, minimum=0),
            feedback=_int(raw, "feedback", DEFAULT_FEEDBACK, minimum=0),
            editor=_str(raw, "editor", DEFAULT_EDITOR),
            color_schemes=[ColorScheme.from_dict(item) for item in _list(raw.get("color_schemes"), "color_schemes")],
            text_styles=[TextStyle.from_dict(item) for item in _list(raw.get("text_styles"), "text_styles")],
            boards=[Board.from_dict(item) for item in _list(raw.get("boards"), "boards")],
            padsets=[PadSet.from_dict(item) for item in _list(raw.get("padsets"), "padsets")],
            layout=LayoutSettings.from_dict(layout_raw) if layout_raw is not None else None,
            natural_key_order=natural,
            includes=_str_list(raw, "includes"),
        )

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "timeout": self.timeout,
            "feedback": self.feedback,
            "editor": self.editor,
            "color_schemes": [scheme.to_dict() for scheme in self.color_schemes],
            "text_styles": [style.to_dict() for style in self.text_styles],
            "boards": [board.to_dict() for board in self.boards],
        }
        if self.padsets:
            payload["padsets"] = [padset.to_dict() for padset in self.padsets]
        if self.layout is not None:
            payload["layout"] = self.layout.to_dict()
        if self.natural_key_order:
            payload["natural_key_order"] = True
        if self.includes:
            payload["includes"] = list(self.includes)
        return payload
