"""Tests for viewer settings persistence."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from mdview.config import SettingsManager, ViewerSettings
from mdview.theme import Theme


@pytest.fixture
def settings_path(tmp_path: Path) -> Path:
    return tmp_path / "settings.yaml"


@pytest.fixture
def manager(settings_path: Path) -> SettingsManager:
    return SettingsManager(settings_path)


class TestViewerSettings:
    """Tests for ViewerSettings validation and serialization."""

    def test_defaults(self) -> None:
        settings = ViewerSettings()
        assert settings.theme is Theme.SYSTEM
        assert settings.show_raw_markdown is False
        assert settings.width == 80

    def test_theme_string_is_coerced(self) -> None:
        assert ViewerSettings(theme="dark").theme is Theme.DARK  # type: ignore[arg-type]

    def test_unknown_theme_raises(self) -> None:
        with pytest.raises(ValueError):
            ViewerSettings(theme="sepia")  # type: ignore[arg-type]

    def test_width_too_small_raises(self) -> None:
        with pytest.raises(ValueError, match="at least"):
            ViewerSettings(width=5)

    def test_width_must_be_int(self) -> None:
        with pytest.raises(ValueError):
            ViewerSettings(width="wide")  # type: ignore[arg-type]

    def test_show_raw_must_be_bool(self) -> None:
        with pytest.raises(ValueError):
            ViewerSettings(show_raw_markdown="yes")  # type: ignore[arg-type]

    def test_to_dict(self) -> None:
        assert ViewerSettings(theme=Theme.LIGHT).to_dict() == {
            "theme": "light",
            "show_raw_markdown": False,
            "width": 80,
        }

    def test_from_dict_partial(self) -> None:
        settings = ViewerSettings.from_dict({"width": 100})
        assert settings.width == 100
        assert settings.theme is Theme.SYSTEM


class TestSettingsManager:
    """Tests for SettingsManager load/save."""

    def test_missing_file_gives_defaults(self, manager: SettingsManager) -> None:
        assert manager.load() == ViewerSettings()

    def test_empty_file_gives_defaults(
        self, manager: SettingsManager, settings_path: Path
    ) -> None:
        settings_path.write_text("", encoding="utf-8")
        assert manager.load() == ViewerSettings()

    def test_load(self, manager: SettingsManager, settings_path: Path) -> None:
        settings_path.write_text(
            "theme: light\nshow_raw_markdown: true\nwidth: 60\n", encoding="utf-8"
        )
        assert manager.load() == ViewerSettings(
            theme=Theme.LIGHT, show_raw_markdown=True, width=60
        )

    def test_load_non_mapping_raises(
        self, manager: SettingsManager, settings_path: Path
    ) -> None:
        settings_path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError, match="mapping"):
            manager.load()

    def test_load_broken_yaml_raises_value_error(
        self, manager: SettingsManager, settings_path: Path
    ) -> None:
        settings_path.write_text("theme: [unclosed\n", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid YAML"):
            manager.load()

    def test_load_invalid_value_raises(
        self, manager: SettingsManager, settings_path: Path
    ) -> None:
        settings_path.write_text("theme: sepia\n", encoding="utf-8")
        with pytest.raises(ValueError):
            manager.load()

    def test_save_creates_parent(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "dir" / "settings.yaml"
        SettingsManager(path).save(ViewerSettings(theme=Theme.DARK))
        assert yaml.safe_load(path.read_text(encoding="utf-8"))["theme"] == "dark"

    def test_save_then_load(self, manager: SettingsManager) -> None:
        settings = ViewerSettings(theme=Theme.LIGHT, show_raw_markdown=True, width=120)
        manager.save(settings)
        assert manager.load() == settings

    def test_save_leaves_no_temp_files(
        self, manager: SettingsManager, settings_path: Path
    ) -> None:
        manager.save(ViewerSettings())
        assert [p.name for p in settings_path.parent.iterdir()] == ["settings.yaml"]


class TestSetValue:
    """Tests for SettingsManager.set_value."""

    def test_set_theme(self, manager: SettingsManager) -> None:
        settings = manager.set_value("theme", "light")
        assert settings.theme is Theme.LIGHT
        assert manager.load().theme is Theme.LIGHT

    @pytest.mark.parametrize("raw,expected", [("true", True), ("off", False), ("YES", True)])
    def test_set_show_raw(self, manager: SettingsManager, raw: str, expected: bool) -> None:
        assert manager.set_value("show_raw_markdown", raw).show_raw_markdown is expected

    def test_set_width_keeps_other_values(self, manager: SettingsManager) -> None:
        manager.set_value("theme", "dark")
        settings = manager.set_value("width", "100")
        assert settings.width == 100
        assert settings.theme is Theme.DARK

    def test_unknown_key_raises(self, manager: SettingsManager) -> None:
        with pytest.raises(KeyError):
            manager.set_value("font", "mono")

    @pytest.mark.parametrize(
        "key,raw",
        [("theme", "sepia"), ("show_raw_markdown", "maybe"), ("width", "wide"), ("width", "3")],
    )
    def test_invalid_value_raises(self, manager: SettingsManager, key: str, raw: str) -> None:
        with pytest.raises(ValueError):
            manager.set_value(key, raw)

    def test_invalid_value_is_not_saved(
        self, manager: SettingsManager, settings_path: Path
    ) -> None:
        with pytest.raises(ValueError):
            manager.set_value("width", "3")
        assert not settings_path.exists()
