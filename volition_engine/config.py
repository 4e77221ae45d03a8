# volition_engine/config.py

import logging
import os
from dataclasses import dataclass, field

# Per-user state directory, writable once the package is installed
HOME_DIR = os.path.abspath(os.getenv("VOLITION_HOME", os.path.join(os.path.expanduser("~"), ".volition")))

LOGGER_NAME = "volition_engine"


@dataclass(frozen=True)
class EngineConfig:
    """Runtime configuration.

    Values can be overridden via environment variables:
    - VOLITION_SETTINGS_PATH (default: VOLITION_HOME/settings.json, VOLITION_HOME defaults to ~/.volition)
    - VOLITION_DEFAULT_ENERGY
    - VOLITION_LOG_LEVEL
    """

    settings_path: str = field(
        default_factory=lambda: os.getenv(
            "VOLITION_SETTINGS_PATH", os.path.join(HOME_DIR, "settings.json")
        )
    )
    default_energy_state: str = field(default_factory=lambda: os.getenv("VOLITION_DEFAULT_ENERGY", "MED"))
    log_level: str = field(default_factory=lambda: os.getenv("VOLITION_LOG_LEVEL", "WARNING"))


def load_config() -> EngineConfig:
    return EngineConfig()


def configure_logging(level: str = "WARNING") -> None:
    """Attach a single stream handler to the package logger."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, str(level).upper(), logging.WARNING))
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        logger.addHandler(handler)
