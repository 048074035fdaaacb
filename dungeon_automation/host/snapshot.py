import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Self

from dungeon_automation.constants import RECORD_KIND_BOSS, RECORD_KIND_POKEMON, RECORD_KIND_TRAINER
from dungeon_automation.models.models import (
    BossPokemon,
    DungeonTrainer,
    GameState,
    PokemonEncounter,
    RunDecision,
    ShadowStatus,
    TrainerPokemon,
)
from dungeon_automation.services.catchable_service import CatchableService
from dungeon_automation.utils.utils import load_yaml_file

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class SnapshotRequirement:
    completed: bool

    def is_completed(self) -> bool:
        return self.completed


@dataclass
class SnapshotDungeon:
    name: str
    normal_encounter_list: list[Any] = field(default_factory=list)
    boss_list: list[Any] = field(default_factory=list)


@dataclass
class SnapshotQueryDungeon:
    name: str
    available: list[Any] = field(default_factory=list)

    def all_available_pokemon(self, catchable_only: bool) -> list[Any]:
        return list(self.available)


@dataclass(frozen=True)
class SnapshotTown:
    name: str


@dataclass(frozen=True)
class SnapshotDungeonTown:
    name: str
    dungeon: SnapshotDungeon | SnapshotQueryDungeon


@dataclass(frozen=True)
class SnapshotPokemon:
    name: str
    shiny: bool = False


def _mapping(value: Any, key: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        err_msg = f"Expected a mapping for {key!r}, got {type(value).__name__}"
        raise ValueError(err_msg)
    return value


def _sequence(value: Any, key: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        err_msg = f"Expected a list for {key!r}, got {type(value).__name__}"
        raise ValueError(err_msg)
    return value


def _required_name(data: Any, key: str) -> str:
    name = _mapping(data, key).get("name")
    if not isinstance(name, str) or not name:
        err_msg = f"Missing name in {key!r} entry: {data!r}"
        raise ValueError(err_msg)
    return name


def _reference(value: Any, key: str) -> str | None:
    if value is None or isinstance(value, str):
        return value
    err_msg = f"Expected a name for {key!r}, got {value!r}"
    raise ValueError(err_msg)


def _parse_requirement(data: dict[str, Any]) -> SnapshotRequirement | None:
    requirement = data.get("requirement")
    if requirement is None:
        return None
    if isinstance(requirement, bool):
        return SnapshotRequirement(requirement)
    return SnapshotRequirement(bool(_mapping(requirement, "requirement").get("completed", False)))


def _parse_shadow(value: str | None) -> ShadowStatus:
    if value is None:
        return ShadowStatus.NONE
    try:
        return ShadowStatus[str(value).upper()]
    except KeyError as exc:
        err_msg = f"Unknown shadow status: {value!r}"
        raise ValueError(err_msg) from exc


def _parse_record(data: Any) -> Any:
    if not isinstance(data, dict):
        return data
    kind = data.get("kind", RECORD_KIND_POKEMON)
    if kind == RECORD_KIND_POKEMON:
        return PokemonEncounter(
            data.get("name", ""),
            hide=bool(data.get("hide", False)),
            shadow_trainer=bool(data.get("shadow_trainer", False)),
            mimic=bool(data.get("mimic", False)),
            requirement=_parse_requirement(data),
        )
    if kind == RECORD_KIND_BOSS:
        return BossPokemon(data.get("name", ""), requirement=_parse_requirement(data))
    if kind == RECORD_KIND_TRAINER:
        team = tuple(
            TrainerPokemon(_required_name(member, "team"), _parse_shadow(member.get("shadow")))
            for member in _sequence(data.get("team"), "team")
        )
        return DungeonTrainer(data.get("name", ""), team, requirement=_parse_requirement(data))
    LOGGER.warning("Unknown encounter kind %r, keeping raw record", kind)
    return data


def _parse_dungeon(data: Any) -> SnapshotDungeon | SnapshotQueryDungeon:
    name = _required_name(data, "dungeons")
    if "available" in data:
        return SnapshotQueryDungeon(name, list(_sequence(data["available"], "available")))
    return SnapshotDungeon(
        name,
        [_parse_record(record) for record in _sequence(data.get("normal_encounters"), "normal_encounters")],
        [_parse_record(record) for record in _sequence(data.get("bosses"), "bosses")],
    )


def _parse_game_state(value: str | None) -> GameState:
    if value is None:
        return GameState.TOWN
    try:
        return GameState[str(value).upper()]
    except KeyError as exc:
        err_msg = f"Unknown game state: {value!r}"
        raise ValueError(err_msg) from exc


class SnapshotHost:
    def __init__(self, snapshot_file: Path, catchable_service: CatchableService) -> None:
        self._catchable_service = catchable_service
        self._snapshot_file = snapshot_file
        self._mtime: float | None = None
        self.current_town: SnapshotTown | SnapshotDungeonTown | None = None
        self.decisions: list[tuple[RunDecision, str]] = []
        self.dungeons: dict[str, SnapshotDungeon | SnapshotQueryDungeon] = {}
        self.game_state = GameState.TOWN
        self.owned: dict[str, SnapshotPokemon] = {}
        self.run_dungeon: SnapshotDungeon | SnapshotQueryDungeon | None = None
        self.run_finished = False
        self.towns: dict[str, SnapshotTown | SnapshotDungeonTown] = {}

    @property
    def snapshot_file(self) -> Path:
        return self._snapshot_file

    @classmethod
    def from_yaml(cls, snapshot_file: Path, catchable_service: CatchableService) -> Self:
        if not snapshot_file.exists():
            err_msg = f"Snapshot file not found: {snapshot_file}"
            raise FileNotFoundError(err_msg)
        host = cls(snapshot_file, catchable_service)
        host.reload()
        return host

    def _apply(self, data: Any) -> None:
        data = _mapping(data, "snapshot")
        dungeons = {}
        for dungeon_data in _sequence(data.get("dungeons"), "dungeons"):
            dungeon = _parse_dungeon(dungeon_data)
            dungeons[dungeon.name] = dungeon
        towns = {}
        for town_data in _sequence(data.get("towns"), "towns"):
            town_name = _required_name(town_data, "towns")
            dungeon_name = _reference(town_data.get("dungeon"), "dungeon")
            if dungeon_name is None:
                towns[town_name] = SnapshotTown(town_name)
            elif dungeon_name in dungeons:
                towns[town_name] = SnapshotDungeonTown(town_name, dungeons[dungeon_name])
            else:
                err_msg = f"Town {town_name!r} refers to unknown dungeon {dungeon_name!r}"
                raise ValueError(err_msg)
        game_state = _parse_game_state(data.get("game_state"))
        run = _mapping(data.get("run"), "run")
        owned = {
            name: SnapshotPokemon(name, bool(_mapping(info, f"owned.{name}").get("shiny", False)))
            for name, info in _mapping(data.get("owned"), "owned").items()
        }
        current_town = towns.get(_reference(data.get("current_town"), "current_town"))
        run_dungeon = dungeons.get(_reference(run.get("dungeon"), "run.dungeon"))
        self.current_town = current_town
        self.dungeons = dungeons
        self.game_state = game_state
        self.owned = owned
        self.run_dungeon = run_dungeon
        self.run_finished = bool(run.get("finished", False))
        self.towns = towns

    def dungeon_completed(self, dungeon: Any, shiny: bool) -> bool:
        catchable = self._catchable_service.resolve_catchable_set(dungeon)
        if not catchable:
            return False
        for name in catchable:
            owned = self.owned.get(name)
            if owned is None or (shiny and not owned.shiny):
                return False
        return True

    def get_pokemon_by_name(self, name: str) -> SnapshotPokemon | None:
        return self.owned.get(name)

    def reload(self) -> None:
        self._apply(load_yaml_file(self._snapshot_file))
        self._mtime = self._snapshot_file.stat().st_mtime
        LOGGER.info(
            "Snapshot loaded: %d dungeon(s), %d town(s), %d owned pokemon",
            len(self.dungeons),
            len(self.towns),
            len(self.owned),
        )

    def reload_if_changed(self) -> bool:
        if not self._snapshot_file.exists():
            LOGGER.warning("Snapshot file disappeared: %s", self._snapshot_file)
            return False
        if self._snapshot_file.stat().st_mtime == self._mtime:
            return False
        self.reload()
        return True

    def start_run(self, dungeon: Any) -> None:
        dungeon_name = getattr(dungeon, "name", "")
        self.decisions.append((RunDecision.RESTART, dungeon_name))
        LOGGER.info("Host asked to start a run in %s", dungeon_name)

    def stop_run(self) -> None:
        dungeon_name = getattr(self.run_dungeon, "name", "")
        self.decisions.append((RunDecision.STOP, dungeon_name))
        LOGGER.info("Host asked to stop the run in %s", dungeon_name)
