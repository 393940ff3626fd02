import pytest

from launcher_settings.model import (
    DEFAULT_EDITOR,
    DEFAULT_TIMEOUT,
    PAD_SLOTS,
    Action,
    Board,
    BoardKind,
    ChainParams,
    Color,
    ColorScheme,
    Detection,
    LayoutSettings,
    Pad,
    PadSet,
    Param,
    SettingsData,
    TextStyle,
    merge_params,
    parse_font,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("#00007f", (0, 0, 127)),
        ("0xFF8000", (255, 128, 0)),
        ("dbdbec", (219, 219, 236)),
        ("#12345", None),
        ("#gggggg", None),
        ("", None),
    ],
)
def test_color_from_hex(value, expected):
    color = Color.from_hex(value)
    if expected is None:
        assert color is None
    else:
        assert color.to_rgb() == expected


def test_color_helpers():
    assert Color.from_hex_or("nope", "#010203").to_hex() == "#010203"
    assert Color(0, 128, 255).inverted() == Color(255, 127, 0)


@pytest.mark.parametrize(
    "descriptor, face, bold, italic, size",
    [
        ("Consolas Bold 18", "Consolas", True, False, 18),
        ("Comic Sans MS Bold 36", "Comic Sans MS", True, False, 36),
        ("Segoe UI italic BOLD 9", "Segoe UI", True, True, 9),
        ("Consolas", "Arial", False, False, 12),
        ("", "Arial", False, False, 12),
    ],
)
def test_parse_font(descriptor, face, bold, italic, size):
    spec = parse_font(descriptor)
    assert (spec.face, spec.bold, spec.italic, spec.size) == (face, bold, italic, size)


def test_color_scheme_defaults_and_clamping():
    scheme = ColorScheme.from_dict({"name": "loud", "opacity": 3, "palette": ["#ff0000", "bad"]})
    assert scheme.opacity == 1.0
    assert scheme.background == "#00007f"
    assert scheme.palette_color(0) == Color(255, 0, 0)
    assert scheme.palette_color(1) is None
    assert scheme.palette_color(5) is None
    assert scheme.palette_color_or(1, ColorScheme.foreground1_color) == scheme.foreground1_color()
    assert "palette" not in ColorScheme(name="plain").to_dict()


def test_color_scheme_inverted_names_and_colors():
    inverted = ColorScheme(name="blue", background="#000000").inverted()
    assert inverted.name == "blue (inverted)"
    assert inverted.background == "#ffffff"


def test_color_scheme_rejects_non_numeric_opacity():
    with pytest.raises(ValueError):
        ColorScheme.from_dict({"name": "x", "opacity": "high"})


def test_text_style_font_specs():
    style = TextStyle(name="mono", pad_text_font="Consolas 20", palette=["Arial Italic 10"])
    assert style.font_spec("pad_text").size == 20
    assert style.palette_font(0).italic is True
    assert style.palette_font(1) is None
    with pytest.raises(ValueError):
        style.font_spec("missing")


def test_text_style_requires_every_font():
    raw = TextStyle("mono").to_dict()
    assert TextStyle.from_dict(raw) == TextStyle("mono")

    for key in ("header_font", "pad_header_font", "pad_text_font", "pad_id_font", "tag_font"):
        missing = {k: v for k, v in raw.items() if k != key}
        with pytest.raises(ValueError, match=key):
            TextStyle.from_dict(missing)
        with pytest.raises(ValueError, match=key):
            TextStyle.from_dict({**raw, key: 18})



def test_params_accessors_and_merge():
    assert Param("n", "7").as_int() == 7
    assert Param("n", "x").as_int() == 0
    assert Param("f", "0.5").as_float() == 0.5
    assert Param("b", "Yes").as_bool() is True
    merged = merge_params([Param("a", "1"), Param("b", "2")], [Param("b", "3"), Param("c", "4")])
    assert [(p.name, p.value) for p in merged] == [("a", "1"), ("b", "3"), ("c", "4")]


def test_actions_wire_format():
    raw_actions = [
        {"Shortcut": "CTRL+C"},
        {"Pause": 250},
        {"OpenUrl": "https://example.com"},
        {"Custom": {"type": "volume", "params": [{"name": "delta", "value": "5"}]}},
    ]
    actions = [Action.from_dict(raw) for raw in raw_actions]
    assert actions[1].value == 250
    assert actions[3].value == "volume"
    assert [action.to_dict() for action in actions] == raw_actions


@pytest.mark.parametrize(
    "raw",
    [{"Pause": -1}, {"Explode": "now"}, {"Text": 5}, {"Text": "a", "Line": "b"}],
)
def test_actions_reject_malformed(raw):
    with pytest.raises(ValueError):
        Action.from_dict(raw)


def test_board_kind_wire_variants():
    assert BoardKind.from_wire(None).is_static
    assert BoardKind.from_wire("home").to_wire() == "home"
    chain = BoardKind.from_wire({"chain": {"boards": "a, b", "initial_board": "b"}})
    assert chain.chain.board_names() == ["a", "b"]
    assert chain.to_wire() == {"chain": {"boards": "a, b", "initial_board": "b"}}
    custom = BoardKind.from_wire({"custom": {"type": "colors"}})
    assert custom.to_wire() == {"custom": {"type": "colors"}}
    with pytest.raises(ValueError):
        BoardKind.from_wire("dynamic")


def test_chain_params_from_params():
    chain = ChainParams.from_params([Param("boards", "x,y"), Param("initial_board", "y"), Param("speed", "2")])
    assert chain.board_names() == ["x", "y"]
    assert chain.initial_board == "y"
    assert [p.name for p in chain.params] == ["speed"]
    assert ChainParams().board_names() == []


def test_detection_matching():
    assert Detection.from_wire("none").is_none
    detection = Detection.from_wire({"win32": "Chrome"})
    assert detection.is_match("C:/Apps/chrome.exe")
    assert not detection.is_match("firefox.exe")
    assert not Detection().is_match("chrome.exe")
    assert detection.to_wire() == {"win32": "Chrome"}


def test_board_round_trip_omits_defaults_and_sorts_modifiers():
    raw = {
        "name": "chrome/console",
        "detection": "none",
        "base_pads": "chrome/console",
        "modifier_pads": {"Shift": "chrome/console/shift", "Ctrl": "chrome/console/ctrl"},
    }
    board = Board.from_dict(raw)
    payload = board.to_dict()
    assert "kind" not in payload
    assert "title" not in payload
    assert list(payload["modifier_pads"]) == ["Ctrl", "Shift"]
    assert board.parent_name() == "chrome"
    assert board.display_title() == "chrome/console"
    assert board.padset_name("Ctrl") == "chrome/console/ctrl"
    assert board.padset_name("Alt") == "chrome/console"
    assert board.has_modifier("Shift")


def test_padset_slots_and_compact_storage():
    padset = PadSet("home", [Pad(header="one"), Pad(), Pad(text="three"), Pad(), Pad()])
    assert len(padset.slots()) == PAD_SLOTS
    assert padset.pad(8).is_empty()
    assert padset.to_dict() == {"name": "home", "items": [{"header": "one"}, {}, {"text": "three"}]}
    with pytest.raises(IndexError):
        padset.pad(9)
    assert PadSet("empty", [Pad(), Pad()]).to_dict() == {"name": "empty"}


def test_padset_rejects_unknown_kind():
    with pytest.raises(ValueError):
        PadSet.from_dict({"name": "x", "kind": "dynamic"})


def test_pad_interactive():
    assert Pad(board="next").is_interactive()
    assert Pad(actions=[Action("Text", "hi")]).is_interactive()
    assert not Pad(header="label").is_interactive()


def test_layout_window_style_validated():
    layout = LayoutSettings.from_dict({"x": 1, "y": 2, "width": 300, "height": 400, "window_style": "Floating"})
    assert layout.to_dict()["window_style"] == "Floating"
    with pytest.raises(ValueError):
        LayoutSettings.from_dict({"window_style": "Fullscreen"})


def test_settings_data_defaults_and_optional_fields():
    data = SettingsData.from_dict({})
    assert data.timeout == DEFAULT_TIMEOUT
    assert data.editor == DEFAULT_EDITOR
    payload = data.to_dict()
    assert list(payload) == ["timeout", "feedback", "editor", "color_schemes", "text_styles", "boards"]

    data.natural_key_order = True
    data.includes = ["settings.styling.json"]
    payload = data.to_dict()
    assert payload["natural_key_order"] is True
    assert payload["includes"] == ["settings.styling.json"]


def test_settings_data_rejects_bad_flag():
    with pytest.raises(ValueError):
        SettingsData.from_dict({"natural_key_order": "yes"})


@pytest.mark.parametrize(
    "raw",
    [
        {"timeout": -3},
        {"feedback": 0.5},
        {"timeout": float("inf")},
        {"timeout": float("nan")},
        {"feedback": True},
        {"timeout": "4"},
    ],
)
def test_settings_data_rejects_bad_durations(raw):
    with pytest.raises(ValueError):
        SettingsData.from_dict(raw)


def test_layout_allows_negative_coordinates_but_not_fractions():
    assert LayoutSettings.from_dict({"x": -1920, "y": -10}).x == -1920
    with pytest.raises(ValueError, match="'width'"):
        LayoutSettings.from_dict({"width": 300.5})
