"""
Unit tests for the Sideline Rotation data models.

Tests configuration validation, player stat accumulation, formation helpers
and JSON serialization of game state snapshots.
"""
import json
import unittest
from dataclasses import FrozenInstanceError

from sideline_rotation.errors import InvalidConfiguration, InvalidSubstitutionType
from sideline_rotation.models import (
    GameState,
    IndividualFormation,
    PairRoleRotation,
    PairsFormation,
    PairSlot,
    Player,
    PlayerRole,
    PlayerStats,
    PlayerStatus,
    SubstitutionType,
    TeamConfig,
    formation_from_dict,
)
from sideline_rotation.models.formation import qualify_pair_position, split_pair_position
from sideline_rotation.services import GameStateEngine


class TestTeamConfig(unittest.TestCase):
    """Test cases for TeamConfig validation and parsing."""

    def test_valid_configurations(self) -> None:
        for config in [
            TeamConfig(format="5v5", squad_size=5, formation_id="2-2"),
            TeamConfig(format="5v5", squad_size=11, formation_id="1-2-1"),
            TeamConfig(format="7v7", squad_size=15, formation_id="2-2-2"),
            TeamConfig(format="5v5", squad_size=7, formation_id="2-2",
                       substitution_type=SubstitutionType.PAIRS),
        ]:
            self.assertIs(config.validate(), config)

    def test_field_player_count(self) -> None:
        self.assertEqual(TeamConfig(format="5v5", squad_size=6, formation_id="2-2").field_player_count, 4)
        self.assertEqual(TeamConfig(format="7v7", squad_size=9, formation_id="2-3-1").field_player_count, 6)

    def test_invalid_configurations(self) -> None:
        invalid = [
            TeamConfig(format="9v9", squad_size=10, formation_id="2-2"),
            TeamConfig(format="5v5", squad_size=4, formation_id="2-2"),
            TeamConfig(format="7v7", squad_size=16, formation_id="2-2-2"),
            TeamConfig(format="5v5", squad_size=6, formation_id="2-3-1"),
            TeamConfig(format="5v5", squad_size=6, formation_id="2-2",
                       substitution_type=SubstitutionType.PAIRS),
            TeamConfig(format="5v5", squad_size=7, formation_id="1-2-1",
                       substitution_type=SubstitutionType.PAIRS),
        ]
        for config in invalid:
            with self.assertRaises(InvalidConfiguration):
                config.validate()

    def test_from_dict_defaults(self) -> None:
        config = TeamConfig.from_dict({"format": "5v5", "squad_size": "6", "formation_id": "2-2"})

        self.assertEqual(config.squad_size, 6)
        self.assertEqual(config.substitution_type, SubstitutionType.INDIVIDUAL)
        self.assertEqual(config.pair_role_rotation, PairRoleRotation.KEEP)
        self.assertFalse(config.is_pairs)

    def test_from_dict_round_trip(self) -> None:
        config = TeamConfig(
            format="5v5", squad_size=7, formation_id="2-2",
            substitution_type=SubstitutionType.PAIRS, pair_role_rotation=PairRoleRotation.SWAP,
        )
        self.assertEqual(TeamConfig.from_dict(config.to_dict()), config)

    def test_from_dict_errors(self) -> None:
        with self.assertRaises(InvalidConfiguration):
            TeamConfig.from_dict({"format": "5v5", "formation_id": "2-2"})
        with self.assertRaises(InvalidConfiguration):
            TeamConfig.from_dict({"format": "5v5", "squad_size": "many", "formation_id": "2-2"})
        with self.assertRaises(InvalidSubstitutionType):
            TeamConfig.from_dict({
                "format": "5v5", "squad_size": 6, "formation_id": "2-2",
                "substitution_type": "rolling",
            })
        with self.assertRaises(InvalidConfiguration):
            TeamConfig.from_dict({
                "format": "5v5", "squad_size": 7, "formation_id": "2-2",
                "substitution_type": "pairs", "pair_role_rotation": "shuffle",
            })


class TestPlayerModel(unittest.TestCase):
    """Test cases for Player and PlayerStats."""

    def test_add_stint_by_role(self) -> None:
        stats = PlayerStats().add_stint(PlayerRole.DEFENDER, 60).add_stint(PlayerRole.SUBSTITUTE, 30)

        self.assertEqual(stats.time_as_defender_seconds, 60)
        self.assertEqual(stats.time_as_substitute_seconds, 30)
        self.assertEqual(stats.time_on_field_seconds, 60)
        self.assertEqual(stats.seconds_as(PlayerRole.DEFENDER), 60)

    def test_add_empty_stint_returns_same_stats(self) -> None:
        stats = PlayerStats(time_on_field_seconds=10)
        self.assertIs(stats.add_stint(PlayerRole.ATTACKER, 0), stats)

    def test_player_is_frozen(self) -> None:
        player = Player(id="A")
        with self.assertRaises(FrozenInstanceError):
            player.is_inactive = True  # type: ignore[misc]

    def test_status_properties(self) -> None:
        goalie = Player(id="G", current_status=PlayerStatus.GOALIE, current_role=PlayerRole.GOALIE)
        field_player = Player(id="A", current_status=PlayerStatus.ON_FIELD)

        self.assertTrue(goalie.is_goalie)
        self.assertFalse(goalie.on_field)
        self.assertTrue(field_player.on_field)
        self.assertTrue(Player(id="S").is_substitute)

    def test_display_name_falls_back_to_id(self) -> None:
        self.assertEqual(Player(id="7").display_name, "7")
        self.assertEqual(Player(id="7", name="Sam").display_name, "Sam")

    def test_serialization_round_trip(self) -> None:
        player = Player(
            id="A",
            name="Alex",
            stats=PlayerStats(time_on_field_seconds=90, time_as_attacker_seconds=90),
            current_status=PlayerStatus.ON_FIELD,
            current_position="leftAttacker",
            current_role=PlayerRole.ATTACKER,
            last_stint_start_time_epoch=1000.5,
        )
        data = player.to_dict()

        self.assertEqual(data["current_status"], "on_field")
        self.assertEqual(data["stats"]["time_as_attacker_seconds"], 90)
        self.assertEqual(Player.from_dict(json.loads(json.dumps(data))), player)

    def test_from_dict_minimal(self) -> None:
        player = Player.from_dict({"id": 4})
        self.assertEqual(player.id, "4")
        self.assertEqual(player.stats, PlayerStats())
        self.assertEqual(player.current_status, PlayerStatus.SUBSTITUTE)


class TestFormationModel(unittest.TestCase):
    """Test cases for formation instances."""

    def test_pair_position_keys(self) -> None:
        self.assertEqual(qualify_pair_position("leftPair", "attacker"), "leftPair.attacker")
        self.assertEqual(split_pair_position("rightPair.defender"), ("rightPair", "defender"))
        self.assertEqual(split_pair_position("leftDefender"), ("leftDefender", None))

    def test_pair_slot_helpers(self) -> None:
        pair = PairSlot(defender="A", attacker="B")

        self.assertEqual(pair.slot_of("B"), "attacker")
        self.assertIsNone(pair.slot_of("C"))
        self.assertEqual(pair.swapped(), PairSlot(defender="B", attacker="A"))
        self.assertEqual(pair.with_member("defender", "C"), PairSlot(defender="C", attacker="B"))
        with self.assertRaises(KeyError):
            pair.with_member("goalie", "C")

    def test_individual_lookup(self) -> None:
        formation = IndividualFormation(goalie="G", positions={"leftDefender": "A", "substitute_1": "B"})

        self.assertEqual(formation.player_at("goalie"), "G")
        self.assertEqual(formation.position_of("B"), "substitute_1")
        self.assertEqual(formation.position_of("G"), "goalie")
        self.assertIsNone(formation.position_of("Z"))
        self.assertEqual(formation.player_ids(), ["A", "B"])
        with self.assertRaises(KeyError):
            formation.with_assignments({"sweeper": "A"})

    def test_pairs_lookup(self) -> None:
        formation = PairsFormation(goalie="G", pairs={
            "leftPair": PairSlot("A", "B"),
            "rightPair": PairSlot("C", "D"),
            "subPair": PairSlot("E", "F"),
        })

        self.assertEqual(formation.player_at("rightPair.attacker"), "D")
        self.assertIsNone(formation.player_at("rightPair"))
        self.assertEqual(formation.position_of("E"), "subPair.defender")
        self.assertEqual(formation.pair_of("B"), "leftPair")
        self.assertEqual(formation.player_ids(), ["A", "B", "C", "D", "E", "F"])

    def test_formation_from_dict(self) -> None:
        individual = IndividualFormation(goalie="G", positions={"attacker": "A"})
        pairs = PairsFormation(goalie="G", pairs={"leftPair": PairSlot("A", "B")})

        self.assertEqual(formation_from_dict(individual.to_dict()), individual)
        self.assertEqual(formation_from_dict(pairs.to_dict()), pairs)
        with self.assertRaises(ValueError):
            formation_from_dict({"kind": "triangle", "goalie": "G"})


class TestGameStateSerialization(unittest.TestCase):
    """Test cases for GameState JSON round trips."""

    def setUp(self) -> None:
        self.engine = GameStateEngine()

    def test_individual_state_round_trip(self) -> None:
        config = TeamConfig(format="5v5", squad_size=7, formation_id="1-2-1")
        state = self.engine.create_game_state(config, list("ABCDEFG"), "G", now=1000, inactive_ids=["F"])
        state = self.engine.calculate_substitution(state, now=1090)

        data = json.loads(json.dumps(state.to_json()))
        restored = GameState.from_json(data)

        self.assertEqual(restored, state)
        self.assertEqual(restored.inactive_queue(), ["F"])

    def test_pairs_state_round_trip(self) -> None:
        config = TeamConfig(format="5v5", squad_size=7, formation_id="2-2",
                            substitution_type=SubstitutionType.PAIRS)
        state = self.engine.create_game_state(config, list("ABCDEFG"), "G", now=1000)
        state = self.engine.calculate_substitution(state, now=1200)

        restored = GameState.from_json(json.loads(json.dumps(state.to_json())))

        self.assertIsInstance(restored.formation, PairsFormation)
        self.assertEqual(restored, state)

    def test_queue_segments(self) -> None:
        config = TeamConfig(format="5v5", squad_size=7, formation_id="2-2")
        state = self.engine.create_game_state(config, list("ABCDEFG"), "G", now=0, inactive_ids=["E"])

        self.assertEqual(state.active_queue(), ["A", "B", "C", "D", "F"])
        self.assertEqual(state.inactive_queue(), ["E"])
        self.assertEqual(state.goalie_id, "G")


if __name__ == "__main__":
    unittest.main()
