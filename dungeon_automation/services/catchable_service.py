import logging
from collections.abc import Mapping
from typing import Any

from dungeon_automation.models.host import Dungeon
from dungeon_automation.models.models import EncounterSource
from dungeon_automation.services.encounter_classifier import EncounterClassifier
from dungeon_automation.utils.utils import dedupe_preserving_order

LOGGER = logging.getLogger(__name__)


def _field(entry: Any, *names: str) -> Any:
    for name in names:
        if isinstance(entry, Mapping):
            if name in entry:
                return entry[name]
        elif hasattr(entry, name):
            return getattr(entry, name)
    return None


def availability_name(entry: Any) -> str | None:
    if isinstance(entry, str):
        return entry or None
    if entry is None:
        return None
    name = _field(entry, "pokemon_name", "pokemonName")
    if name is None:
        name = _field(_field(entry, "pokemon"), "name")
    if isinstance(name, str) and name:
        return name
    LOGGER.debug("Dropping unrecognized availability entry: %r", entry)
    return None


class CatchableService:
    def __init__(self, encounter_classifier: EncounterClassifier) -> None:
        self._encounter_classifier = encounter_classifier

    def _from_availability_query(self, dungeon: Dungeon) -> list[str]:
        try:
            entries = list(dungeon.all_available_pokemon(True) or [])
        except (AttributeError, TypeError, ValueError):
            LOGGER.warning("Availability query failed for %s", getattr(dungeon, "name", dungeon), exc_info=True)
            return []
        names = [availability_name(entry) for entry in entries]
        return dedupe_preserving_order([name for name in names if name is not None])

    def _from_encounter_lists(self, dungeon: Dungeon) -> list[str]:
        sources = (
            (EncounterSource.NORMAL, getattr(dungeon, "normal_encounter_list", None) or []),
            (EncounterSource.BOSS, getattr(dungeon, "boss_list", None) or []),
        )
        names = []
        for source, records in sources:
            for record in records:
                names.extend(self._encounter_classifier.catchable_names(record, source))
        return dedupe_preserving_order(names)

    @staticmethod
    def has_availability_query(dungeon: Dungeon | None) -> bool:
        return callable(getattr(dungeon, "all_available_pokemon", None))

    def resolve_catchable_set(self, dungeon: Dungeon | None) -> list[str]:
        if dungeon is None:
            return []
        if self.has_availability_query(dungeon):
            catchable = self._from_availability_query(dungeon)
        else:
            catchable = self._from_encounter_lists(dungeon)
        LOGGER.debug("Catchable set for %s: %s", getattr(dungeon, "name", dungeon), catchable)
        return catchable
