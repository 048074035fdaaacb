from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dungeon_automation.models.host import Requirement


class EncounterSource(Enum):
    NORMAL = auto()
    BOSS = auto()


class EventType(Enum):
    TICK_STARTED = auto()
    PROGRESS_REFRESHED = auto()
    RUN_RESTARTED = auto()
    SHINY_COMPLETED = auto()
    AUTOMATION_STARTED = auto()
    AUTOMATION_STOPPED = auto()


class GameState(Enum):
    TOWN = auto()
    DUNGEON = auto()
    FIGHTING = auto()
    GYM = auto()
    BATTLE_FRONTIER = auto()


class RunDecision(Enum):
    IDLE = auto()
    CONTINUE = auto()
    RESTART = auto()
    STOP = auto()


class ShadowStatus(Enum):
    NONE = 0
    SHADOW = 1
    PURIFIED = 2


@dataclass(frozen=True)
class PokemonEncounter:
    pokemon_name: str
    hide: bool = False
    shadow_trainer: bool = False
    mimic: bool = False
    requirement: "Requirement | None" = None


@dataclass(frozen=True)
class BossPokemon:
    name: str
    requirement: "Requirement | None" = None


@dataclass(frozen=True)
class TrainerPokemon:
    name: str
    shadow: ShadowStatus = ShadowStatus.NONE


@dataclass(frozen=True)
class DungeonTrainer:
    name: str
    team: tuple[TrainerPokemon, ...] = field(default_factory=tuple)
    requirement: "Requirement | None" = None


EncounterRecord = PokemonEncounter | BossPokemon | DungeonTrainer | TrainerPokemon


@dataclass(frozen=True)
class CompletionReport:
    dungeon_name: str
    caught: int
    total: int

    def __str__(self) -> str:
        return f"{self.dungeon_name}: {self.label}"

    @property
    def is_complete(self) -> bool:
        return self.total > 0 and self.caught >= self.total

    @property
    def label(self) -> str:
        return f"{self.caught}/{self.total}"

    @property
    def remaining(self) -> int:
        return self.total - self.caught
