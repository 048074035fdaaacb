import logging

from dungeon_automation.config import AutomationSettings
from dungeon_automation.events import EventManager
from dungeon_automation.models.host import RunOrchestrator, RunStateProvider, Ticker
from dungeon_automation.models.models import EventType, RunDecision
from dungeon_automation.services.completion_service import CompletionService
from dungeon_automation.services.dungeon_locator_service import DungeonLocatorService

LOGGER = logging.getLogger(__name__)


def decide(
    has_dungeon: bool,
    run_active: bool,
    run_finished: bool,
    shiny_completed: bool,
    settings: AutomationSettings,
) -> RunDecision:
    if not has_dungeon:
        return RunDecision.IDLE
    if shiny_completed and settings.stop_on_shiny_completion:
        return RunDecision.STOP
    if run_active and not run_finished:
        return RunDecision.CONTINUE
    return RunDecision.RESTART if settings.auto_restart else RunDecision.STOP


class DungeonRunController:
    def __init__(
        self,
        dungeon_locator: DungeonLocatorService,
        completion_service: CompletionService,
        run_state: RunStateProvider,
        orchestrator: RunOrchestrator,
        ticker: Ticker,
        event_manager: EventManager,
        settings: AutomationSettings,
    ) -> None:
        self._completion_service = completion_service
        self._dungeon_locator = dungeon_locator
        self._event_manager = event_manager
        self._orchestrator = orchestrator
        self._run_state = run_state
        self._settings = settings
        self._ticker = ticker
        self.last_decision = RunDecision.IDLE
        self.runs_started = 0

    @property
    def is_running(self) -> bool:
        return self._ticker.is_active

    def _apply_decision(
        self,
        decision: RunDecision,
        dungeon: object | None,
        run_active: bool,
        shiny_completed: bool,
    ) -> None:
        dungeon_name = getattr(dungeon, "name", "")
        if decision is RunDecision.RESTART:
            self.runs_started += 1
            LOGGER.info("Starting run #%d in %s", self.runs_started, dungeon_name)
            self._orchestrator.start_run(dungeon)
            self._event_manager.publish(EventType.RUN_RESTARTED, {"dungeon": dungeon, "run": self.runs_started})
        elif decision is RunDecision.STOP:
            if shiny_completed:
                LOGGER.info("All catchable pokemon in %s are shiny, stopping", dungeon_name)
                self._event_manager.publish(EventType.SHINY_COMPLETED, {"dungeon": dungeon})
            if run_active:
                self._orchestrator.stop_run()
            self.stop()

    def start(self) -> None:
        if self._ticker.is_active:
            return
        LOGGER.info("Dungeon automation started (every %d ms)", self._settings.tick_interval_ms)
        self._ticker.start(self._settings.tick_interval_ms, self.tick)
        self._event_manager.publish(EventType.AUTOMATION_STARTED)
        self.tick()

    def stop(self) -> None:
        was_active = self._ticker.is_active
        self._ticker.stop()
        if was_active:
            LOGGER.info("Dungeon automation stopped after %d run(s)", self.runs_started)
            self._event_manager.publish(EventType.AUTOMATION_STOPPED, {"runs": self.runs_started})

    def tick(self) -> RunDecision:
        self._event_manager.publish(EventType.TICK_STARTED)
        self._completion_service.refresh_progress_label()
        dungeon = self._dungeon_locator.resolve_current_dungeon()
        run_active = self._dungeon_locator.run_active
        shiny_completed = self._completion_service.is_fully_shiny_completed(dungeon)
        decision = decide(
            has_dungeon=dungeon is not None,
            run_active=run_active,
            run_finished=bool(getattr(self._run_state, "run_finished", False)),
            shiny_completed=shiny_completed,
            settings=self._settings,
        )
        if decision is not self.last_decision:
            LOGGER.debug("Run decision changed: %s -> %s", self.last_decision.name, decision.name)
        self.last_decision = decision
        self._apply_decision(decision, dungeon, run_active, shiny_completed)
        return decision

    def toggle(self, enable: bool) -> None:
        if enable:
            self.start()
        else:
            self.stop()
