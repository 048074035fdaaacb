from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any
from unittest.mock import MagicMock

import pytest

from dungeon_automation.config import AutomationSettings
from dungeon_automation.events import EventManager
from dungeon_automation.models.models import GameState
from dungeon_automation.services.catchable_service import CatchableService
from dungeon_automation.services.completion_service import CompletionService
from dungeon_automation.services.dungeon_locator_service import DungeonLocatorService
from dungeon_automation.services.encounter_classifier import EncounterClassifier


@dataclass
class FakeDungeon:
    name: str
    normal_encounter_list: list[Any] = field(default_factory=list)
    boss_list: list[Any] = field(default_factory=list)


@dataclass
class FakeTown:
    name: str


@dataclass
class FakeDungeonTown:
    name: str
    dungeon: Any


@dataclass
class FakeRunState:
    game_state: GameState = GameState.TOWN
    run_dungeon: Any = None
    run_finished: bool = False


@dataclass
class FakeLocation:
    current_town: Any = None


@dataclass
class FakeOwnedPokemon:
    shiny: bool


@dataclass
class FakeLabel:
    text: str = ""

    def setText(self, text: str) -> None:  # noqa: N802
        self.text = text


class FakeTicker:
    def __init__(self) -> None:
        self.callback: Callable[[], None] | None = None
        self.interval_ms: int | None = None
        self.start_calls = 0

    @property
    def is_active(self) -> bool:
        return self.callback is not None

    def fire(self) -> None:
        self.callback()

    def start(self, interval_ms: int, callback: Callable[[], None]) -> None:
        self.start_calls += 1
        self.interval_ms = interval_ms
        self.callback = callback

    def stop(self) -> None:
        self.callback = None


class FakeRequirement:
    def __init__(self, completed: bool) -> None:
        self.completed = completed
        self.calls = 0

    def is_completed(self) -> bool:
        self.calls += 1
        return self.completed


@pytest.fixture
def classifier() -> EncounterClassifier:
    return EncounterClassifier()


@pytest.fixture
def catchable_service(classifier: EncounterClassifier) -> CatchableService:
    return CatchableService(classifier)


@pytest.fixture
def run_state() -> FakeRunState:
    return FakeRunState()


@pytest.fixture
def location() -> FakeLocation:
    return FakeLocation()


@pytest.fixture
def locator(run_state: FakeRunState, location: FakeLocation) -> DungeonLocatorService:
    return DungeonLocatorService(run_state, location)


@pytest.fixture
def registry() -> MagicMock:
    registry = MagicMock()
    registry.get_pokemon_by_name.return_value = None
    return registry


@pytest.fixture
def completion_oracle() -> MagicMock:
    oracle = MagicMock()
    oracle.dungeon_completed.return_value = False
    return oracle


@pytest.fixture
def event_manager() -> EventManager:
    return EventManager()


@pytest.fixture
def completion_service(
    locator: DungeonLocatorService,
    catchable_service: CatchableService,
    registry: MagicMock,
    completion_oracle: MagicMock,
    event_manager: EventManager,
) -> CompletionService:
    return CompletionService(locator, catchable_service, registry, completion_oracle, event_manager)


@pytest.fixture
def settings() -> AutomationSettings:
    return AutomationSettings()
