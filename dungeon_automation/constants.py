import logging

from rich.console import Console
from rich.theme import Theme

THEME = Theme(
    {
        "logging.level.debug": "dim white",
        "logging.level.info": "white",
        "logging.level.warning": "yellow",
        "logging.level.error": "red",
        "logging.level.critical": "bold bright_red",
    },
)
CONSOLE = Console(theme=THEME)
LOG_FILE_LIMIT = 20
LOGGER = logging.getLogger(__name__)

DEFAULT_TICK_INTERVAL_MS = 1000

SETTINGS_KEYS = {
    "auto_restart",
    "console_log_level",
    "file_log_level",
    "stop_on_shiny_completion",
    "tick_interval_ms",
}

RECORD_KIND_BOSS = "boss"
RECORD_KIND_POKEMON = "pokemon"
RECORD_KIND_TRAINER = "trainer"

LABEL_CATCHABLE = "Catchable Pokemon"
LABEL_NO_DUNGEON = "No dungeon available in the current context."
LABEL_NOT_OWNED = "Not owned"
LABEL_OWNED = "Owned"
LABEL_SHINY = "Shiny"
LABEL_SHINY_PROGRESS = "Shiny progress"
LABEL_STATUS = "Status"

TABLE_COLOR_NOT_OWNED = "dim"
TABLE_COLOR_OWNED = "white"
TABLE_COLOR_SHINY = "bold yellow"
