import argparse
import logging
import sys
from pathlib import Path
from platform import python_version

import yaml
from dependency_injector import providers
from PyQt6.QtCore import QCoreApplication

from dungeon_automation import __version__
from dungeon_automation.config import AutomationSettings
from dungeon_automation.constants import CONSOLE, LABEL_NO_DUNGEON
from dungeon_automation.container import Container
from dungeon_automation.host.snapshot import SnapshotHost
from dungeon_automation.models.models import EventType
from dungeon_automation.utils.console import ConsoleProgressLabel, build_report_table
from dungeon_automation.utils.logs import setup_logging

LOGGER = logging.getLogger(__name__)


def _parse_arguments(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="dungeon_automation",
        description="Resolve catchable dungeon pokemon and track shiny completion",
    )
    parser.add_argument("snapshot", type=Path, help="YAML snapshot describing the game state")
    parser.add_argument("--settings", type=Path, help="Settings file (defaults to resources/settings.yaml)")
    parser.add_argument("--watch", action="store_true", help="Run the dungeon loop, re-reading the snapshot")
    parser.add_argument("--max-runs", type=int, default=10, help="Stop watching after this many runs")
    parser.add_argument("--verbose", action="store_true", help="Log debug output to the console")
    return parser.parse_args(argv)


def _print_report(container: Container, host: SnapshotHost) -> None:
    dungeon = container.dungeon_locator().resolve_current_dungeon()
    if dungeon is None:
        CONSOLE.print(LABEL_NO_DUNGEON)
        return
    catchable = container.catchable_service().resolve_catchable_set(dungeon)
    report = container.completion_service().build_report(dungeon)
    CONSOLE.print(build_report_table(report, catchable, host))


def _watch(container: Container, host: SnapshotHost, max_runs: int) -> None:
    app = QCoreApplication(sys.argv)
    event_manager = container.event_manager()
    controller = container.run_controller()

    def on_run_restarted(payload: dict) -> None:
        if payload["run"] >= max_runs:
            LOGGER.warning("Reached %d run(s), stopping", max_runs)
            controller.stop()

    def on_tick_started(_: dict) -> None:
        try:
            host.reload_if_changed()
        except (KeyError, ValueError, yaml.YAMLError):
            LOGGER.warning("Snapshot %s is invalid, keeping the previous state", host.snapshot_file, exc_info=True)

    event_manager.subscribe(EventType.TICK_STARTED, on_tick_started)
    event_manager.subscribe(EventType.RUN_RESTARTED, on_run_restarted)
    event_manager.subscribe(EventType.AUTOMATION_STOPPED, lambda _: app.quit())
    container.completion_service().register_label(ConsoleProgressLabel())
    controller.start()
    if controller.is_running:
        app.exec()


def main(argv: list[str] | None = None) -> None:
    args = _parse_arguments(argv)
    try:
        settings = AutomationSettings.load(args.settings)
    except (ValueError, yaml.YAMLError) as exc:
        CONSOLE.print(f"[red]{exc}[/red]")
        raise SystemExit(1) from exc
    console_level = logging.DEBUG if args.verbose else settings.console_log_level
    setup_logging(console_level, settings.file_log_level)
    LOGGER.info("Python v%s", python_version())
    LOGGER.info("Dungeon Automation v%s", __version__)
    container = Container()
    container.settings.override(providers.Object(settings))
    try:
        host = SnapshotHost.from_yaml(args.snapshot, container.catchable_service())
    except (FileNotFoundError, KeyError, ValueError, yaml.YAMLError) as exc:
        LOGGER.error("Could not load snapshot %s: %s", args.snapshot, exc)
        raise SystemExit(1) from exc
    container.game_host.override(providers.Object(host))
    _print_report(container, host)
    if args.watch:
        _watch(container, host, args.max_runs)


if __name__ == "__main__":
    main()
