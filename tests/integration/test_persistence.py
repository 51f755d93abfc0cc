"""Integration tests: typed bindings persisted through SQLite."""

from datetime import date, datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Annotated
from uuid import UUID, uuid4

import pytest
from pydantic import AnyUrl, BaseModel

from storebacked import (
    Binding,
    Color,
    SecureArchivable,
    SQLiteStore,
    StoreBacked,
    binding_of,
)
from storebacked.conversion import FLOAT


class Record(BaseModel):
    identifier: str


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"
    SEPIA = "sepia"


class Window(BaseModel):
    width: int
    height: int
    maximized: bool = False


class Cursor(SecureArchivable):
    def __init__(self, line: int, column: int):
        self.line = line
        self.column = column

    def __eq__(self, other):
        return isinstance(other, Cursor) and (self.line, self.column) == (other.line, other.column)


class EditorPreferences:
    theme: Theme = StoreBacked("editor.theme", default=Theme.LIGHT)
    font_size: int = StoreBacked("editor.fontSize", default=12)
    zoom: Annotated[float, FLOAT] = StoreBacked("editor.zoom", default=1.0)
    recent_files: list[Path] = StoreBacked("editor.recentFiles", default=[])
    window: Window | None = StoreBacked("editor.window")
    accent: Color = StoreBacked("editor.accent", default=Color(red=0.0, green=0.5, blue=1.0))
    homepage: AnyUrl | None = StoreBacked("editor.homepage")
    cursor: Cursor | None = StoreBacked("editor.cursor")
    installed_on: date | None = StoreBacked("editor.installedOn")
    device_id: UUID | None = StoreBacked("editor.deviceId")
    shortcuts: dict[str, list[str]] = StoreBacked("editor.shortcuts", default={})

    def __init__(self, store):
        self.store = store


@pytest.fixture
def db_path(temp_data_dir: Path) -> Path:
    return temp_data_dir / "settings.sqlite"


def _reopen(db_path: Path) -> SQLiteStore:
    """Open a new store over the same file, as a restarted process would."""
    return SQLiteStore(db_path, domain="editor")


class TestPersistedScenarios:
    """The accessor scenarios against a persistent store."""

    def test_string_property(self, db_path):
        """Test reset, read and write of a string binding."""
        binding = Binding("string", str, default="default", store=_reopen(db_path))
        binding.reset()
        assert binding.value == "default"

        binding.value = "hello"
        assert binding.value == "hello"
        assert Binding("string", str, default="default", store=_reopen(db_path)).value == "hello"

    def test_optional_record_property(self, db_path):
        """Test an optional record written and read after a restart."""
        binding = Binding("data", Record | None, store=_reopen(db_path))
        binding.reset()
        assert binding.value is None

        binding.value = Record(identifier="hey")
        assert Binding("data", Record | None, store=_reopen(db_path)).value == Record(identifier="hey")


class TestEditorPreferences:
    """Tests for a realistic preferences class."""

    def test_all_attributes_survive_restart(self, db_path):
        """Test every composition rule round-trips through SQLite."""
        prefs = EditorPreferences(_reopen(db_path))
        device_id = uuid4()

        prefs.theme = Theme.DARK
        prefs.font_size = 14
        prefs.zoom = 1.25
        prefs.recent_files = [Path("/home/ada/notes.md"), Path("/home/ada/todo.txt")]
        prefs.window = Window(width=1280, height=800, maximized=True)
        prefs.accent = Color.from_hex("#FF8000")
        prefs.homepage = AnyUrl("https://example.com/start")
        prefs.cursor = Cursor(line=10, column=4)
        prefs.installed_on = date(2024, 3, 1)
        prefs.device_id = device_id
        prefs.shortcuts = {"save": ["ctrl", "s"], "quit": []}

        restarted = EditorPreferences(_reopen(db_path))
        assert restarted.theme is Theme.DARK
        assert restarted.font_size == 14
        assert restarted.zoom == 1.25
        assert restarted.recent_files == [Path("/home/ada/notes.md"), Path("/home/ada/todo.txt")]
        assert restarted.window == Window(width=1280, height=800, maximized=True)
        assert restarted.accent == Color.from_hex("#FF8000")
        assert restarted.homepage == AnyUrl("https://example.com/start")
        assert restarted.cursor == Cursor(line=10, column=4)
        assert restarted.installed_on == date(2024, 3, 1)
        assert restarted.device_id == device_id
        assert restarted.shortcuts == {"save": ["ctrl", "s"], "quit": []}

    def test_stored_representations(self, db_path):
        """Test what actually lands in the store."""
        store = _reopen(db_path)
        prefs = EditorPreferences(store)
        prefs.theme = Theme.SEPIA
        prefs.window = None
        prefs.installed_on = date(2024, 3, 1)

        assert store.get("editor.theme") == "sepia"
        assert store.get("editor.window") == []
        assert store.get("editor.installedOn") == [datetime(2024, 3, 1, tzinfo=timezone.utc)]

    def test_legacy_values_fall_back(self, db_path):
        """Test values from an older version degrade to defaults."""
        store = _reopen(db_path)
        store.set("editor.theme", "solarized")
        store.set("editor.fontSize", 13.5)
        store.set("editor.window", [b'{"value": {"w": 1}}'])

        prefs = EditorPreferences(store)
        assert prefs.theme is Theme.LIGHT
        assert prefs.font_size == 12
        assert prefs.window is None

    def test_reset_erases_persisted_entry(self, db_path):
        """Test reset removes the entry from the database."""
        store = _reopen(db_path)
        prefs = EditorPreferences(store)
        prefs.font_size = 20
        binding_of(prefs, "font_size").reset()

        assert prefs.font_size == 12
        assert "editor.fontSize" not in _reopen(db_path).keys()
