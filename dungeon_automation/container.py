from dependency_injector import containers, providers

from dungeon_automation.config import AutomationSettings
from dungeon_automation.events import EventManager
from dungeon_automation.gui.ticker import QtTicker
from dungeon_automation.services.catchable_service import CatchableService
from dungeon_automation.services.completion_service import CompletionService
from dungeon_automation.services.dungeon_locator_service import DungeonLocatorService
from dungeon_automation.services.encounter_classifier import EncounterClassifier
from dungeon_automation.services.run_controller import DungeonRunController


class Container(containers.DeclarativeContainer):
    settings = providers.Singleton(AutomationSettings.load)
    event_manager = providers.Singleton(EventManager)
    encounter_classifier = providers.Singleton(EncounterClassifier)
    catchable_service = providers.Singleton(CatchableService, encounter_classifier=encounter_classifier)
    game_host = providers.Dependency()
    dungeon_locator = providers.Singleton(DungeonLocatorService, run_state=game_host, location=game_host)
    completion_service = providers.Singleton(
        CompletionService,
        dungeon_locator=dungeon_locator,
        catchable_service=catchable_service,
        registry=game_host,
        completion_oracle=game_host,
        event_manager=event_manager,
    )
    ticker = providers.Singleton(QtTicker)
    run_controller = providers.Singleton(
        DungeonRunController,
        dungeon_locator=dungeon_locator,
        completion_service=completion_service,
        run_state=game_host,
        orchestrator=game_host,
        ticker=ticker,
        event_manager=event_manager,
        settings=settings,
    )
