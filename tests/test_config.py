import logging
import os

from volition_engine.config import HOME_DIR, LOGGER_NAME, configure_logging, load_config


def test_config_reads_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("VOLITION_SETTINGS_PATH", str(tmp_path / "s.json"))
    monkeypatch.setenv("VOLITION_DEFAULT_ENERGY", "LOW")
    monkeypatch.setenv("VOLITION_LOG_LEVEL", "DEBUG")
    config = load_config()
    assert config.settings_path == str(tmp_path / "s.json")
    assert config.default_energy_state == "LOW"
    assert config.log_level == "DEBUG"


def test_config_defaults(monkeypatch):
    monkeypatch.delenv("VOLITION_DEFAULT_ENERGY", raising=False)
    monkeypatch.delenv("VOLITION_SETTINGS_PATH", raising=False)
    config = load_config()
    assert config.default_energy_state == "MED"
    assert config.settings_path == os.path.join(HOME_DIR, "settings.json")
    assert "site-packages" not in config.settings_path


def test_configure_logging_adds_one_handler():
    logger = logging.getLogger(LOGGER_NAME)
    configure_logging("debug")
    configure_logging("info")
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
