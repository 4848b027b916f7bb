from __future__ import annotations

import json
from pathlib import Path

import pytest

from review_mode import config_service
from review_mode.config_service import ConfigService, ReviewSettings


def test_missing_config_gives_default_settings(tmp_path: Path) -> None:
    cfg = ConfigService(app_dir=tmp_path)
    assert cfg.load_config(cli_portable=True) == {}
    assert cfg.load_settings(cli_portable=True) == ReviewSettings()


def test_config_round_trip(tmp_path: Path) -> None:
    cfg = ConfigService(app_dir=tmp_path)
    payload = {
        "min_slots_matched": 3,
        "generalize_digits": False,
        "separators": "_-. ",
        "ignore_rules": [".", "thumbs"],
    }
    cfg.save_config(payload, cli_portable=True)
    path = cfg.get_config_path(cli_portable=True)
    assert path == tmp_path / "config.json"
    assert json.loads(path.read_text(encoding="utf-8")) == payload

    settings = cfg.load_settings(cli_portable=True)
    assert settings.min_slots_matched == 3
    assert settings.generalize_digits is False
    assert settings.separators == "_-. "
    assert settings.ignore_rules == (".", "thumbs")
    assert settings.to_config() == payload


def test_invalid_config_on_disk_falls_back(tmp_path: Path) -> None:
    cfg = ConfigService(app_dir=tmp_path)
    path = cfg.get_config_path(cli_portable=True)
    path.write_text(json.dumps({"min_slots_matched": 0}), encoding="utf-8")
    assert cfg.load_config(cli_portable=True) == {}


def test_unparseable_config_falls_back(tmp_path: Path) -> None:
    cfg = ConfigService(app_dir=tmp_path)
    cfg.get_config_path(cli_portable=True).write_text("{not json", encoding="utf-8")
    assert cfg.load_settings(cli_portable=True) == ReviewSettings()


def test_saving_invalid_config_raises(tmp_path: Path) -> None:
    cfg = ConfigService(app_dir=tmp_path)
    with pytest.raises(ValueError):
        cfg.save_config({"min_slots_matched": "two"}, cli_portable=True)
    with pytest.raises(ValueError):
        cfg.save_config({"unknown_key": True}, cli_portable=True)
    assert not cfg.get_config_path(cli_portable=True).exists()


def test_portable_flag_selects_app_dir(tmp_path: Path) -> None:
    (tmp_path / "portable.flag").write_text("", encoding="utf-8")
    cfg = ConfigService(app_dir=tmp_path)
    assert cfg.detect_mode() is True
    assert cfg.get_config_dir() == tmp_path


def test_appdata_mode_uses_xdg_config_home(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setattr(config_service.platform, "system", lambda: "Linux")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    cfg = ConfigService(app_dir=tmp_path / "app")
    assert cfg.detect_mode() is False
    assert cfg.get_config_dir() == tmp_path / "xdg" / "ReviewMode"


def test_appdata_mode_on_windows_uses_appdata(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setattr(config_service.platform, "system", lambda: "Windows")
    monkeypatch.setenv("APPDATA", str(tmp_path / "roaming"))
    cfg = ConfigService(app_dir=tmp_path / "app")
    assert cfg.get_config_dir() == tmp_path / "roaming" / "ReviewMode"


def test_settings_from_partial_config() -> None:
    settings = ReviewSettings.from_config({"min_slots_matched": 1})
    assert settings.min_slots_matched == 1
    assert settings.separators == ReviewSettings().separators


def test_windows_without_appdata_uses_roaming_under_home(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setattr(config_service.platform, "system", lambda: "Windows")
    monkeypatch.delenv("APPDATA", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    cfg = ConfigService(app_dir=tmp_path / "app")
    assert cfg.get_config_dir() == tmp_path / "home" / "AppData" / "Roaming" / "ReviewMode"


def test_save_settings_writes_a_valid_document(tmp_path: Path) -> None:
    cfg = ConfigService(app_dir=tmp_path)
    settings = ReviewSettings(min_slots_matched=1, ignore_rules=(".",))
    cfg.save_settings(settings, cli_portable=True)
    cfg.validate(json.loads(cfg.get_config_path(cli_portable=True).read_text(encoding="utf-8")))
    assert cfg.load_settings(cli_portable=True) == settings
