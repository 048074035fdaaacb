import os
from unittest.mock import MagicMock

import pytest

from dungeon_automation import __main__ as cli
from dungeon_automation.config import PathConfig
from dungeon_automation.host.snapshot import SnapshotDungeonTown, SnapshotHost, SnapshotQueryDungeon
from dungeon_automation.models.models import GameState, RunDecision
from dungeon_automation.services.completion_service import CompletionService
from dungeon_automation.services.dungeon_locator_service import DungeonLocatorService

SNAPSHOT = """
game_state: dungeon
current_town: Mt. Moon
run:
  dungeon: Mt. Moon
  finished: false
towns:
  - name: Pewter City
  - name: Mt. Moon
    dungeon: Mt. Moon
  - name: Digletts Cave
    dungeon: Digletts Cave
dungeons:
  - name: Mt. Moon
    normal_encounters:
      - {kind: pokemon, name: Zubat}
      - {kind: pokemon, name: Jigglypuff, requirement: {completed: false}}
      - {kind: pokemon, name: Kabuto, hide: true}
      - {kind: fossil, name: Omanyte}
    bosses:
      - {kind: boss, name: Onix}
      - kind: trainer
        name: Cipher Peon
        team:
          - {name: Makuhita, shadow: shadow}
          - {name: Zubat, shadow: none}
  - name: Digletts Cave
    available: [Diglett, {pokemon_name: Dugtrio}, {pokemon: {name: Diglett}}]
owned:
  Zubat: {shiny: true}
  Onix: {shiny: true}
  Makuhita: {shiny: false}
"""


@pytest.fixture
def snapshot_file(tmp_path):
    path = tmp_path / "snapshot.yaml"
    path.write_text(SNAPSHOT, encoding="utf-8")
    return path


@pytest.fixture
def host(snapshot_file, catchable_service) -> SnapshotHost:
    return SnapshotHost.from_yaml(snapshot_file, catchable_service)


class TestLoading:
    def test_builds_host_state(self, host):
        assert host.game_state is GameState.DUNGEON
        assert host.run_dungeon is host.dungeons["Mt. Moon"]
        assert isinstance(host.current_town, SnapshotDungeonTown)
        assert isinstance(host.dungeons["Digletts Cave"], SnapshotQueryDungeon)
        assert host.get_pokemon_by_name("Zubat").shiny
        assert host.get_pokemon_by_name("Geodude") is None

    def test_resolves_catchable_sets(self, host, catchable_service):
        assert catchable_service.resolve_catchable_set(host.dungeons["Mt. Moon"]) == ["Zubat", "Onix", "Makuhita"]
        assert catchable_service.resolve_catchable_set(host.dungeons["Digletts Cave"]) == ["Diglett", "Dugtrio"]

    def test_missing_file_raises(self, tmp_path, catchable_service):
        with pytest.raises(FileNotFoundError):
            SnapshotHost.from_yaml(tmp_path / "missing.yaml", catchable_service)

    def test_unknown_town_dungeon_raises(self, tmp_path, catchable_service):
        path = tmp_path / "broken.yaml"
        path.write_text("towns:\n  - {name: Nowhere, dungeon: Ghost Cave}\n", encoding="utf-8")

        with pytest.raises(ValueError):
            SnapshotHost.from_yaml(path, catchable_service)

    def test_unknown_game_state_raises(self, tmp_path, catchable_service):
        path = tmp_path / "broken.yaml"
        path.write_text("game_state: underwater\n", encoding="utf-8")

        with pytest.raises(ValueError):
            SnapshotHost.from_yaml(path, catchable_service)

    def test_bundled_example_loads(self, catchable_service):
        host = SnapshotHost.from_yaml(PathConfig.snapshots_folder() / "example.yaml", catchable_service)

        assert host.game_state is GameState.TOWN
        assert host.current_town.name == "Mt. Moon"


class TestHostProtocols:
    def test_completion_oracle(self, host):
        mt_moon = host.dungeons["Mt. Moon"]

        assert host.dungeon_completed(mt_moon, False)
        assert not host.dungeon_completed(mt_moon, True)
        assert not host.dungeon_completed(host.dungeons["Digletts Cave"], False)

    def test_drives_the_engine(self, host, catchable_service, event_manager):
        locator = DungeonLocatorService(host, host)
        completion_service = CompletionService(locator, catchable_service, host, host, event_manager)

        assert locator.resolve_current_dungeon() is host.dungeons["Mt. Moon"]
        assert completion_service.build_report().label == "2/3"
        assert not completion_service.is_fully_shiny_completed()

    def test_records_run_decisions(self, host):
        host.start_run(host.dungeons["Digletts Cave"])
        host.stop_run()

        assert host.decisions == [(RunDecision.RESTART, "Digletts Cave"), (RunDecision.STOP, "Mt. Moon")]


class TestReload:
    def test_unchanged_file_is_not_reloaded(self, host):
        assert not host.reload_if_changed()

    def test_changed_file_is_reloaded(self, host, snapshot_file):
        snapshot_file.write_text(SNAPSHOT.replace("game_state: dungeon", "game_state: town"), encoding="utf-8")
        stat = snapshot_file.stat()
        os.utime(snapshot_file, (stat.st_atime, stat.st_mtime + 5))

        assert host.reload_if_changed()
        assert host.game_state is GameState.TOWN

    def test_invalid_reload_keeps_previous_state(self, host, snapshot_file):
        snapshot_file.write_text("game_state: underwater\n", encoding="utf-8")
        stat = snapshot_file.stat()
        os.utime(snapshot_file, (stat.st_atime, stat.st_mtime + 5))

        with pytest.raises(ValueError):
            host.reload_if_changed()
        assert host.game_state is GameState.DUNGEON
        assert "Mt. Moon" in host.dungeons


MALFORMED_SNAPSHOTS = [
    "- Mt. Moon\n",
    "owned: [Zubat]\n",
    "owned: {Zubat: true}\n",
    "dungeons: [Mt. Moon]\n",
    "dungeons: {name: Mt. Moon}\n",
    "dungeons:\n  - {normal_encounters: []}\n",
    "dungeons:\n  - {name: Mt. Moon, bosses: {kind: boss, name: Onix}}\n",
    "dungeons:\n  - {name: Digletts Cave, available: Diglett}\n",
    "dungeons:\n  - name: Mt. Moon\n    bosses:\n      - {kind: trainer, name: Cipher Peon, team: [Makuhita]}\n",
    "dungeons:\n  - name: Mt. Moon\n    bosses:\n      - {kind: trainer, name: Cipher Peon, team: {name: Makuhita}}\n",
    "dungeons:\n  - name: Mt. Moon\n    bosses:\n      - {kind: boss, name: Onix, requirement: [done]}\n",
    "towns: [Pewter City]\n",
    "towns:\n  - {name: Mt. Moon, dungeon: [Mt. Moon]}\n",
    "current_town: [Mt. Moon]\n",
    "run: [Mt. Moon]\n",
    "run: {dungeon: {name: Mt. Moon}}\n",
]


class TestMalformedSnapshots:
    @pytest.mark.parametrize("content", MALFORMED_SNAPSHOTS)
    def test_wrong_shape_raises_value_error(self, tmp_path, catchable_service, content):
        path = tmp_path / "broken.yaml"
        path.write_text(content, encoding="utf-8")

        with pytest.raises(ValueError):
            SnapshotHost.from_yaml(path, catchable_service)

    def test_trainer_without_team_has_empty_roster(self, tmp_path, catchable_service):
        path = tmp_path / "snapshot.yaml"
        path.write_text(
            "dungeons:\n  - name: Mt. Moon\n    bosses:\n      - {kind: trainer, name: Cipher Peon, team: null}\n",
            encoding="utf-8",
        )

        host = SnapshotHost.from_yaml(path, catchable_service)

        assert host.dungeons["Mt. Moon"].boss_list[0].team == ()

    def test_wrong_shape_on_reload_keeps_previous_state(self, host, snapshot_file):
        snapshot_file.write_text(SNAPSHOT + "run: {dungeon: [Mt. Moon]}\n", encoding="utf-8")
        stat = snapshot_file.stat()
        os.utime(snapshot_file, (stat.st_atime, stat.st_mtime + 5))

        with pytest.raises(ValueError):
            host.reload_if_changed()
        assert host.run_dungeon is host.dungeons["Mt. Moon"]
        assert host.current_town.name == "Mt. Moon"


class TestCommandLine:
    @pytest.fixture(autouse=True)
    def _no_log_files(self, monkeypatch):
        monkeypatch.setattr(cli, "setup_logging", MagicMock())

    @pytest.mark.parametrize("content", ["owned: [Zubat]\n", "dungeons: [Mt. Moon]\n", "owned: {Zubat: true}\n"])
    def test_malformed_snapshot_exits_with_error(self, tmp_path, content):
        path = tmp_path / "broken.yaml"
        path.write_text(content, encoding="utf-8")

        with pytest.raises(SystemExit) as exc_info:
            cli.main([str(path), "--settings", str(tmp_path / "missing.yaml")])

        assert exc_info.value.code == 1

    def test_missing_snapshot_exits_with_error(self, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            cli.main([str(tmp_path / "missing.yaml"), "--settings", str(tmp_path / "missing.yaml")])

        assert exc_info.value.code == 1

    def test_valid_snapshot_prints_report(self, snapshot_file, tmp_path):
        cli.main([str(snapshot_file), "--settings", str(tmp_path / "missing.yaml")])
