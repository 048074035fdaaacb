import logging

from dungeon_automation.events import EventManager
from dungeon_automation.models.host import CompletionOracle, CreatureRegistry, Dungeon, ProgressLabel
from dungeon_automation.models.models import CompletionReport, EventType
from dungeon_automation.services.catchable_service import CatchableService
from dungeon_automation.services.dungeon_locator_service import DungeonLocatorService

LOGGER = logging.getLogger(__name__)


class CompletionService:
    def __init__(
        self,
        dungeon_locator: DungeonLocatorService,
        catchable_service: CatchableService,
        registry: CreatureRegistry,
        completion_oracle: CompletionOracle,
        event_manager: EventManager,
    ) -> None:
        self._catchable_service = catchable_service
        self._completion_oracle = completion_oracle
        self._dungeon_locator = dungeon_locator
        self._event_manager = event_manager
        self._progress_label: ProgressLabel | None = None
        self._registry = registry

    @property
    def progress_label(self) -> ProgressLabel | None:
        return self._progress_label

    def _is_shiny_owned(self, pokemon_name: str) -> bool:
        owned = self._registry.get_pokemon_by_name(pokemon_name)
        return owned is not None and bool(getattr(owned, "shiny", False))

    def build_report(self, dungeon: Dungeon | None = None) -> CompletionReport | None:
        target = dungeon if dungeon is not None else self._dungeon_locator.resolve_town_dungeon()
        if target is None:
            return None
        catchable = self._catchable_service.resolve_catchable_set(target)
        caught = sum(1 for name in catchable if self._is_shiny_owned(name))
        return CompletionReport(getattr(target, "name", ""), caught, len(catchable))

    def is_fully_shiny_completed(self, dungeon: Dungeon | None = None) -> bool:
        target = dungeon if dungeon is not None else self._dungeon_locator.resolve_current_dungeon()
        if target is None:
            return False
        return self._completion_oracle.dungeon_completed(target, True)

    def refresh_progress_label(self) -> CompletionReport | None:
        if self._progress_label is None:
            return None
        report = self.build_report()
        if report is None:
            return None
        self._progress_label.setText(report.label)
        LOGGER.debug("Shiny progress for %s", report)
        self._event_manager.publish(EventType.PROGRESS_REFRESHED, {"report": report})
        return report

    def register_label(self, label: ProgressLabel | None) -> None:
        self._progress_label = label
