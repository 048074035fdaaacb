import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Self

from dungeon_automation.constants import DEFAULT_TICK_INTERVAL_MS, SETTINGS_KEYS
from dungeon_automation.utils.utils import load_yaml_file

LOGGER = logging.getLogger(__name__)


class PathConfig:
    @staticmethod
    def get_project_root() -> Path:
        return Path(__file__).parent.parent

    @staticmethod
    def logs_folder() -> Path:
        folder = PathConfig.get_project_root() / "logs"
        if not folder.exists():
            LOGGER.warning("Logs folder does not exist: %s", folder)
            folder.mkdir(parents=True, exist_ok=True)
            LOGGER.info("Logs folder created.")
        return folder

    @staticmethod
    def resources_folder() -> Path:
        folder = PathConfig.get_project_root() / "resources"
        if not folder.exists():
            LOGGER.critical("Resources folder does not exist: %s", folder)
        return folder

    @staticmethod
    def settings_file() -> Path:
        file = PathConfig.resources_folder() / "settings.yaml"
        if not file.exists():
            LOGGER.critical("Settings file does not exist: %s", file)
        return file

    @staticmethod
    def snapshots_folder() -> Path:
        folder = PathConfig.resources_folder() / "snapshots"
        if not folder.exists():
            LOGGER.error("Snapshots folder does not exist: %s", folder)
        return folder


def _parse_log_level(value: str | int) -> int:
    if isinstance(value, int):
        return value
    level = logging.getLevelName(str(value).upper())
    if not isinstance(level, int):
        err_msg = f"Invalid log level: {value!r}"
        raise ValueError(err_msg)
    return level


def _parse_flag(key: str, value: Any) -> bool:
    if not isinstance(value, bool):
        err_msg = f"Setting {key!r} must be true or false, got {value!r}"
        raise ValueError(err_msg)
    return value


@dataclass
class AutomationSettings:
    tick_interval_ms: int = DEFAULT_TICK_INTERVAL_MS
    auto_restart: bool = True
    stop_on_shiny_completion: bool = True
    console_log_level: int = logging.WARNING
    file_log_level: int = logging.INFO

    def __post_init__(self) -> None:
        if self.tick_interval_ms <= 0:
            err_msg = f"Tick interval must be positive, got {self.tick_interval_ms} ms"
            raise ValueError(err_msg)
        self.console_log_level = _parse_log_level(self.console_log_level)
        self.file_log_level = _parse_log_level(self.file_log_level)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Self:
        if not data:
            return cls()
        unknown_keys = sorted(set(data) - SETTINGS_KEYS)
        if unknown_keys:
            LOGGER.warning("Ignoring unknown settings: %s", ", ".join(unknown_keys))
        known = {key: value for key, value in data.items() if key in SETTINGS_KEYS}
        if "tick_interval_ms" in known:
            known["tick_interval_ms"] = int(known["tick_interval_ms"])
        for flag in ("auto_restart", "stop_on_shiny_completion"):
            if flag in known:
                known[flag] = _parse_flag(flag, known[flag])
        return cls(**known)

    @classmethod
    def load(cls, file_path: Path | None = None) -> Self:
        settings_path = file_path if file_path is not None else PathConfig.settings_file()
        if not settings_path.exists():
            LOGGER.warning("Using default settings, no file at: %s", settings_path)
            return cls()
        return cls.from_dict(load_yaml_file(settings_path))
