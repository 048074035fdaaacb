import logging

from dungeon_automation.models.host import Dungeon, DungeonTown, LocationProvider, RunStateProvider
from dungeon_automation.models.models import GameState

LOGGER = logging.getLogger(__name__)


class DungeonLocatorService:
    def __init__(self, run_state: RunStateProvider, location: LocationProvider) -> None:
        self._location = location
        self._run_state = run_state

    @property
    def run_active(self) -> bool:
        return self.resolve_run_dungeon() is not None

    def resolve_current_dungeon(self) -> Dungeon | None:
        """Return the dungeon of the active run, else the one tied to the current town."""
        run_dungeon = self.resolve_run_dungeon()
        if run_dungeon is not None:
            return run_dungeon
        return self.resolve_town_dungeon()

    def resolve_run_dungeon(self) -> Dungeon | None:
        if getattr(self._run_state, "game_state", None) is not GameState.DUNGEON:
            return None
        dungeon = getattr(self._run_state, "run_dungeon", None)
        if dungeon is None:
            LOGGER.debug("Game reports a dungeon run without an attached dungeon")
        return dungeon

    def resolve_town_dungeon(self) -> Dungeon | None:
        town = getattr(self._location, "current_town", None)
        if not isinstance(town, DungeonTown):
            return None
        return town.dungeon
