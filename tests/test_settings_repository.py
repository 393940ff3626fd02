import json
import logging

import pytest

from launcher_settings.errors import EntityExistsError, EntityNotFoundError, SettingsFileError
from launcher_settings.model import (
    Board,
    ColorScheme,
    Detection,
    EntityKind,
    LayoutSettings,
    Pad,
    PadSet,
    TextStyle,
)
from launcher_settings.resources import ResourceNames, Resources
from launcher_settings.settings import Settings
from launcher_settings.source_mapping import STYLING_FILE, SourceMapping
from launcher_settings.storage import SettingsFileStorage


def _write_json(path, payload):
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def _settings(tmp_path) -> Settings:
    _write_json(
        tmp_path / "settings.json",
        {
            "timeout": 4,
            "feedback": 0,
            "editor": "notepad.exe",
            "color_schemes": [],
            "text_styles": [],
            "boards": [
                {
                    "kind": "home",
                    "name": "home",
                    "detection": "none",
                    "color_scheme": "blue",
                    "text_style": "default",
                    "base_pads": "home",
                },
                {
                    "name": "chrome",
                    "detection": {"win32": "chrome"},
                    "color_scheme": "blue",
                    "base_pads": "chrome",
                },
            ],
            "padsets": [
                {"name": "home", "items": [{"header": "Chrome", "board": "chrome", "color_scheme": "blue"}]},
                {"name": "chrome", "items": [{"header": "Home", "board": "home", "text_style": "default"}]},
            ],
            "includes": [STYLING_FILE],
        },
    )
    _write_json(
        tmp_path / STYLING_FILE,
        {
            "color_schemes": [{"name": "default"}, {"name": "blue", "background": "#000080"}],
            "text_styles": [TextStyle("default").to_dict()],
        },
    )
    return Settings.load(Resources([tmp_path], ResourceNames()))


def test_fresh_repository_is_clean(tmp_path):
    settings = _settings(tmp_path)
    assert settings.is_dirty() is False
    assert settings.board_names() == ["home", "chrome"]
    assert settings.padset_names() == ["home", "chrome"]
    assert settings.color_scheme_names() == ["default", "blue"]
    assert settings.text_style_names() == ["default"]
    assert settings.timeout() == 4
    assert settings.editor() == "notepad.exe"
    assert settings.home_board_name() == "home"
    assert settings.natural_key_order() is False
    assert settings.get_layout_settings() is None


def test_reads_return_copies(tmp_path):
    settings = _settings(tmp_path)
    board = settings.get_board("home")
    board.title = "changed"
    settings.boards()[0].title = "changed too"
    assert settings.get_board("home").title is None
    assert settings.is_dirty() is False


def test_lookups(tmp_path):
    settings = _settings(tmp_path)
    with pytest.raises(EntityNotFoundError, match="Board 'nope' not found"):
        settings.get_board("nope")
    with pytest.raises(EntityNotFoundError):
        settings.get_padset("nope")
    assert settings.get_color_scheme("nope") is None
    assert settings.get_text_style("default").name == "default"


def test_resolve_falls_back_to_default(tmp_path):
    settings = _settings(tmp_path)
    assert settings.resolve_color_scheme("blue").background == "#000080"
    assert settings.resolve_color_scheme("missing").name == "default"
    assert settings.resolve_color_scheme(None).name == "default"
    settings.delete_text_style("default")
    style = settings.resolve_text_style(None)
    assert style == TextStyle()


def test_detect_and_detections(tmp_path):
    settings = _settings(tmp_path)
    assert settings.detect("C:/Program Files/Google/Chrome.exe") == "chrome"
    assert settings.detect("notepad.exe") is None
    assert settings.detections() == [("chrome", Detection("chrome"))]


def test_add_set_symmetry(tmp_path):
    settings = _settings(tmp_path)
    with pytest.raises(EntityExistsError, match="Board 'home' already exists"):
        settings.add_board(Board("home"))
    with pytest.raises(EntityNotFoundError):
        settings.set_board(Board("ghost"))
    assert settings.is_dirty() is False

    replacement = Board("home", title="Start", base_pads="home")
    settings.set_board(replacement)
    assert settings.get_board("home") == replacement
    assert settings.board_names() == ["home", "chrome"]
    assert settings.is_dirty() is True


def test_add_copies_the_entity(tmp_path):
    settings = _settings(tmp_path)
    scheme = ColorScheme("green")
    settings.add_color_scheme(scheme)
    scheme.background = "#00ff00"
    assert settings.get_color_scheme("green").background != "#00ff00"


@pytest.mark.parametrize(
    "add, set_, entity",
    [
        ("add_padset", "set_padset", PadSet("extra")),
        ("add_color_scheme", "set_color_scheme", ColorScheme("extra")),
        ("add_text_style", "set_text_style", TextStyle("extra")),
    ],
)
def test_add_then_set_each_kind(tmp_path, add, set_, entity):
    settings = _settings(tmp_path)
    with pytest.raises(EntityNotFoundError):
        getattr(settings, set_)(entity)
    getattr(settings, add)(entity)
    with pytest.raises(EntityExistsError):
        getattr(settings, add)(entity)
    getattr(settings, set_)(entity)


def test_delete_does_not_cascade(tmp_path):
    settings = _settings(tmp_path)
    settings.delete_color_scheme("blue")
    assert settings.get_color_scheme("blue") is None
    assert settings.get_board("home").color_scheme == "blue"
    with pytest.raises(EntityNotFoundError):
        settings.delete_color_scheme("blue")
    with pytest.raises(EntityNotFoundError):
        settings.delete_text_style("nope")
    settings.delete_padset("chrome")
    settings.delete_board("chrome")
    assert settings.board_names() == ["home"]


def test_rename_color_scheme_cascades(tmp_path):
    settings = _settings(tmp_path)
    settings.rename_color_scheme("blue", "navy")

    assert settings.get_color_scheme("blue") is None
    assert settings.get_color_scheme("navy").background == "#000080"
    assert settings.get_board("home").color_scheme == "navy"
    assert settings.get_board("chrome").color_scheme == "navy"
    assert settings.get_padset("home").items[0].color_scheme == "navy"
    assert settings.is_dirty() is True


def test_rename_text_style_cascades(tmp_path):
    settings = _settings(tmp_path)
    settings.rename_text_style("default", "plain")
    assert settings.get_board("home").text_style == "plain"
    assert settings.get_padset("chrome").items[0].text_style == "plain"


def test_rename_rejections(tmp_path):
    settings = _settings(tmp_path)
    with pytest.raises(EntityExistsError):
        settings.rename_color_scheme("blue", "default")
    with pytest.raises(EntityNotFoundError):
        settings.rename_color_scheme("red", "crimson")
    with pytest.raises(EntityNotFoundError):
        settings.rename_text_style("fancy", "plain")
    assert settings.is_dirty() is False


def test_rename_keeps_entity_in_its_file(tmp_path):
    settings = _settings(tmp_path)
    settings.rename_color_scheme("blue", "navy")
    settings.flush()

    styling = json.loads((tmp_path / STYLING_FILE).read_text(encoding="utf-8"))
    assert [s["name"] for s in styling["color_schemes"]] == ["default", "navy"]
    assert SourceMapping(EntityKind.COLOR_SCHEME, "navy", STYLING_FILE) in settings.snapshot().source_mappings


def test_modify_board(tmp_path):
    settings = _settings(tmp_path)

    def _retitle(board):
        board.title = "Browser"

    settings.modify_board("chrome", _retitle)
    assert settings.get_board("chrome").title == "Browser"
    assert settings.is_dirty() is True

    with pytest.raises(EntityNotFoundError):
        settings.modify_board("nope", _retitle)

    def _rename_to_home(board):
        board.name = "home"

    with pytest.raises(EntityExistsError):
        settings.modify_board("chrome", _rename_to_home)
    assert settings.board_names() == ["home", "chrome"]


def test_layout_settings(tmp_path):
    settings = _settings(tmp_path)
    layout = LayoutSettings(10, 20, 300, 400, "Floating")
    settings.set_layout_settings(layout)
    assert settings.get_layout_settings() == layout
    assert settings.is_dirty() is True


def test_flush_on_clean_repository_writes_nothing(tmp_path):
    settings = _settings(tmp_path)
    before = {p.name: p.stat().st_mtime_ns for p in tmp_path.glob("*.json")}
    root_text = (tmp_path / "settings.json").read_text(encoding="utf-8")
    settings.flush()
    assert {p.name: p.stat().st_mtime_ns for p in tmp_path.glob("*.json")} == before
    assert (tmp_path / "settings.json").read_text(encoding="utf-8") == root_text


def test_mark_dirty_forces_flush(tmp_path):
    settings = _settings(tmp_path)
    settings.mark_dirty()
    assert settings.is_dirty() is True
    settings.flush()
    assert settings.is_dirty() is False
    assert (tmp_path / "settings.json").read_text(encoding="utf-8").endswith("\n")


def test_flush_then_reload_yields_flushed_data(tmp_path):
    settings = _settings(tmp_path)
    settings.add_board(Board("chrome/console", base_pads="chrome/console"))
    settings.add_padset(PadSet("chrome/console", [Pad(header="One"), Pad(), Pad()]))
    settings.add_color_scheme(ColorScheme("green"))
    settings.rename_color_scheme("blue", "navy")

    settings.flush()
    flushed = settings.snapshot()
    assert settings.is_dirty() is False

    settings.reload()
    assert settings.snapshot() == flushed
    assert settings.get_padset("chrome/console").items == [Pad(header="One")]


def test_reload_discards_unflushed_changes(tmp_path):
    settings = _settings(tmp_path)
    settings.delete_board("chrome")
    settings.reload()
    assert settings.is_dirty() is False
    assert "chrome" in settings.board_names()


def test_failed_flush_stays_dirty(tmp_path):
    resources = Resources([tmp_path], ResourceNames())
    _settings(tmp_path)
    storage = SettingsFileStorage(resources)

    class _FailingStorage(SettingsFileStorage):
        def save(self, data):
            raise SettingsFileError("disk full")

    settings = Settings(storage.load(), resources, _FailingStorage(resources))
    settings.add_color_scheme(ColorScheme("green"))
    with pytest.raises(SettingsFileError):
        settings.flush()
    assert settings.is_dirty() is True
    assert settings.get_color_scheme("green") is not None


def test_mutations_logged_at_debug(tmp_path, caplog):
    settings = _settings(tmp_path)
    with caplog.at_level(logging.DEBUG, logger="KeypadLauncher.Settings.Repository"):
        settings.add_text_style(TextStyle("mono"))
    assert any("TextStyle added: mono" in record.getMessage() for record in caplog.records)
