import logging

from rich.console import Console
from rich.table import Table

from dungeon_automation.constants import (
    CONSOLE,
    LABEL_CATCHABLE,
    LABEL_NOT_OWNED,
    LABEL_OWNED,
    LABEL_SHINY,
    LABEL_SHINY_PROGRESS,
    LABEL_STATUS,
    TABLE_COLOR_NOT_OWNED,
    TABLE_COLOR_OWNED,
    TABLE_COLOR_SHINY,
)
from dungeon_automation.models.host import CreatureRegistry
from dungeon_automation.models.models import CompletionReport

LOGGER = logging.getLogger(__name__)


class ConsoleProgressLabel:
    def __init__(self, console: Console = CONSOLE) -> None:
        self._console = console
        self._text = ""

    def setText(self, text: str) -> None:  # noqa: N802
        if text == self._text:
            return
        self._text = text
        self._console.print(f"{LABEL_SHINY_PROGRESS}: [bold]{text}[/bold]")

    def text(self) -> str:
        return self._text


def _ownership(registry: CreatureRegistry, pokemon_name: str) -> tuple[str, str]:
    owned = registry.get_pokemon_by_name(pokemon_name)
    if owned is None:
        return LABEL_NOT_OWNED, TABLE_COLOR_NOT_OWNED
    if getattr(owned, "shiny", False):
        return LABEL_SHINY, TABLE_COLOR_SHINY
    return LABEL_OWNED, TABLE_COLOR_OWNED


def build_report_table(report: CompletionReport, catchable: list[str], registry: CreatureRegistry) -> Table:
    table = Table(title=f"{report.dungeon_name} ({LABEL_SHINY_PROGRESS}: {report.label})")
    table.add_column("#", justify="right")
    table.add_column(LABEL_CATCHABLE)
    table.add_column(LABEL_STATUS)
    for index, pokemon_name in enumerate(catchable, start=1):
        status, style = _ownership(registry, pokemon_name)
        table.add_row(str(index), pokemon_name, status, style=style)
    return table
