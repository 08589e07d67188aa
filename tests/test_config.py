from importlib import resources
from unittest.mock import patch

from console_derby import config


def test_get_config_reads_dot_paths():
    fake = {"race": {"field_size": {"min": 5, "max": 11}}}
    with patch.object(config, "BALANCE_CONFIG", fake):
        assert config.get_config("race.field_size.max") == 11
        assert config.get_config("race.missing", 3) == 3


def test_get_config_without_file_uses_default():
    with patch.object(config, "BALANCE_CONFIG", None):
        assert config.get_config("race.tick_seconds", 0.1) == 0.1


def test_load_config_reports_missing_file(tmp_path, capsys):
    assert config.load_config(str(tmp_path / "none.json")) is None
    assert "FATAL ERROR" in capsys.readouterr().out


def test_bundled_config_ships_inside_the_package():
    assert resources.files("console_derby").joinpath(config.CONFIG_RESOURCE).is_file()
    loaded = config.load_config()
    assert loaded["race"]["columns_per_furlong"] == 5
    assert loaded["race"]["step_distribution"]["base"] == [0.3, 0.5, 0.2]


def test_env_setting_casts_and_rejects(monkeypatch, capsys):
    monkeypatch.setenv("DERBY_SEED", "42")
    assert config.get_env_setting("DERBY_SEED", None, int) == 42

    monkeypatch.setenv("DERBY_SEED", "forty-two")
    assert config.get_env_setting("DERBY_SEED", 7, int) == 7
    assert "Ignoring invalid value for DERBY_SEED" in capsys.readouterr().out

    monkeypatch.delenv("DERBY_SEED")
    assert config.get_env_setting("DERBY_SEED", 7, int) == 7


def test_load_config_reports_unparseable_file(tmp_path, capsys):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    assert config.load_config(str(path)) is None
    assert "Could not parse config file" in capsys.readouterr().out
