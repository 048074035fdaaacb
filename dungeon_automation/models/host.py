from collections.abc import Callable, Iterable, Sequence
from typing import Any, Protocol, runtime_checkable

from dungeon_automation.models.models import GameState


class Requirement(Protocol):
    def is_completed(self) -> bool: ...


class Dungeon(Protocol):
    name: str
    normal_encounter_list: Sequence[Any]
    boss_list: Sequence[Any]


class AvailabilityQuery(Protocol):
    def all_available_pokemon(self, catchable_only: bool) -> Iterable[Any]: ...


@runtime_checkable
class DungeonTown(Protocol):
    dungeon: Dungeon | None


class OwnedPokemon(Protocol):
    shiny: bool


class RunStateProvider(Protocol):
    @property
    def game_state(self) -> GameState: ...

    @property
    def run_dungeon(self) -> Dungeon | None: ...

    @property
    def run_finished(self) -> bool: ...


class LocationProvider(Protocol):
    @property
    def current_town(self) -> object | None: ...


class CreatureRegistry(Protocol):
    def get_pokemon_by_name(self, name: str) -> OwnedPokemon | None: ...


class CompletionOracle(Protocol):
    def dungeon_completed(self, dungeon: Dungeon, shiny: bool) -> bool: ...


class RunOrchestrator(Protocol):
    def start_run(self, dungeon: Dungeon) -> None: ...

    def stop_run(self) -> None: ...


class ProgressLabel(Protocol):
    def setText(self, text: str) -> None: ...  # noqa: N802


class Ticker(Protocol):
    @property
    def is_active(self) -> bool: ...

    def start(self, interval_ms: int, callback: Callable[[], None]) -> None: ...

    def stop(self) -> None: ...
