import logging
from collections.abc import Callable
from typing import Any

from dungeon_automation.models.models import (
    BossPokemon,
    DungeonTrainer,
    EncounterRecord,
    EncounterSource,
    PokemonEncounter,
    ShadowStatus,
    TrainerPokemon,
)

LOGGER = logging.getLogger(__name__)


def _valid_name(name: Any) -> str | None:
    if isinstance(name, str) and name:
        return name
    return None


class EncounterClassifier:
    def __init__(self) -> None:
        self._handlers: dict[type, Callable[[Any], str | None]] = {
            BossPokemon: self._classify_boss,
            DungeonTrainer: self._classify_trainer,
            PokemonEncounter: self._classify_pokemon_encounter,
            TrainerPokemon: self._classify_trainer_pokemon,
        }

    @staticmethod
    def _classify_boss(record: BossPokemon) -> str | None:
        return _valid_name(record.name)

    @staticmethod
    def _classify_pokemon_encounter(record: PokemonEncounter) -> str | None:
        if record.hide or record.shadow_trainer or record.mimic:
            return None
        return _valid_name(record.pokemon_name)

    @staticmethod
    def _classify_trainer(_: DungeonTrainer) -> str | None:
        return None

    @staticmethod
    def _classify_trainer_pokemon(record: TrainerPokemon) -> str | None:
        if record.shadow is not ShadowStatus.SHADOW:
            return None
        return _valid_name(record.name)

    @staticmethod
    def requirement_met(record: EncounterRecord) -> bool:
        requirement = getattr(record, "requirement", None)
        if requirement is None:
            return True
        is_completed = getattr(requirement, "is_completed", None)
        if not callable(is_completed):
            LOGGER.warning("Dropping %r, its requirement cannot be evaluated: %r", record, requirement)
            return False
        try:
            return bool(is_completed())
        except (AttributeError, TypeError, ValueError):
            LOGGER.warning("Dropping %r, its requirement check failed", record, exc_info=True)
            return False

    def catchable_names(self, record: Any, source: EncounterSource) -> list[str]:
        if source is EncounterSource.BOSS and isinstance(record, DungeonTrainer):
            if not self.requirement_met(record):
                return []
            roster = (self._classify_roster_member(member) for member in record.team or ())
            return [name for name in roster if name is not None]
        name = self.classify(record)
        return [name] if name is not None else []

    def _classify_roster_member(self, member: Any) -> str | None:
        if not isinstance(member, TrainerPokemon):
            LOGGER.debug("Dropping roster member without a shadow status: %r", member)
            return None
        return self._classify_trainer_pokemon(member)

    def classify(self, record: Any) -> str | None:
        handler = self._handlers.get(type(record))
        if handler is None:
            LOGGER.debug("Dropping unrecognized encounter record: %r", record)
            return None
        if not self.requirement_met(record):
            return None
        return handler(record)
