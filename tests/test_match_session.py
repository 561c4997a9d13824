"""
Unit tests for MatchSession undo/redo history.
"""
import unittest
from dataclasses import replace

from sideline_rotation.errors import (
    CannotDeactivateFieldPlayer,
    InvalidQueueComposition,
    MatchNotStarted,
    NothingToRedo,
    NothingToUndo,
    UnknownAction,
)
from sideline_rotation.models import TeamConfig
from sideline_rotation.services import MatchSession

SIX = TeamConfig(format="5v5", squad_size=6, formation_id="2-2")


class TestMatchSession(unittest.TestCase):
    """Test cases for the session that owns the current game state."""

    def setUp(self) -> None:
        self.session = MatchSession()
        self.initial = self.session.start(SIX, list("ABCDEF"), "F", now=1000)

    def test_state_before_start(self) -> None:
        session = MatchSession()
        self.assertFalse(session.has_match)
        with self.assertRaises(MatchNotStarted):
            _ = session.state
        with self.assertRaises(MatchNotStarted):
            session.apply("substitution", now=1060)

    def test_apply_records_history(self) -> None:
        new_state = self.session.apply("substitution", now=1060)

        self.assertIs(self.session.state, new_state)
        self.assertTrue(self.session.can_undo())
        self.assertFalse(self.session.can_redo())
        self.assertEqual(self.session.get_action_history(), ["substitution"])

    def test_undo_restores_previous_snapshot(self) -> None:
        self.session.apply("substitution", now=1060)
        self.session.apply("position_switch", "leftDefender", "rightAttacker", now=1090)

        self.session.undo()
        restored = self.session.undo()

        self.assertIs(restored, self.initial)
        self.assertFalse(self.session.can_undo())
        with self.assertRaises(NothingToUndo):
            self.session.undo()

    def test_redo_reapplies_undone_action(self) -> None:
        after = self.session.apply("substitution", now=1060)
        self.session.undo()

        self.assertIs(self.session.redo(), after)
        self.assertFalse(self.session.can_redo())
        with self.assertRaises(NothingToRedo):
            self.session.redo()

    def test_new_action_clears_redo(self) -> None:
        self.session.apply("substitution", now=1060)
        self.session.undo()
        self.session.apply("goalie_switch", "A", now=1070)

        self.assertFalse(self.session.can_redo())
        self.assertEqual(self.session.get_action_history(), ["goalie_switch"])

    def test_failed_action_keeps_state_and_history(self) -> None:
        with self.assertRaises(CannotDeactivateFieldPlayer):
            self.session.apply("toggle_inactive", "A", now=1010)

        self.assertIs(self.session.state, self.initial)
        self.assertFalse(self.session.can_undo())

    def test_no_op_action_is_not_recorded(self) -> None:
        self.session.apply("goalie_switch", "F", now=1010)
        self.session.apply("resume", now=1010)
        self.assertFalse(self.session.can_undo())

    def test_unknown_action(self) -> None:
        with self.assertRaises(UnknownAction):
            self.session.apply("red_card", "A")

    def test_history_is_bounded(self) -> None:
        session = MatchSession(max_history=3)
        session.start(SIX, list("ABCDEF"), "F", now=0)
        for step in range(1, 6):
            session.apply("substitution", now=step * 60)

        self.assertEqual(len(session.get_action_history()), 3)
        for _ in range(3):
            session.undo()
        self.assertFalse(session.can_undo())
        self.assertEqual(session.state.all_players["A"].stats.time_on_field_seconds, 60)

    def test_start_and_load_clear_history(self) -> None:
        current = self.session.apply("substitution", now=1060)
        self.session.load(current)
        self.assertFalse(self.session.can_undo())

        self.session.apply("substitution", now=1120)
        self.session.start(SIX, list("ABCDEF"), "A", now=2000)
        self.assertFalse(self.session.can_undo())
        self.assertEqual(self.session.state.goalie_id, "A")

    def test_load_rejects_inconsistent_state(self) -> None:
        current = self.session.apply("substitution", now=1060)
        corrupt = replace(current, rotation_queue=("A", "B", "C", "D", "Z"))

        with self.assertRaises(InvalidQueueComposition):
            self.session.load(corrupt)
        self.assertIs(self.session.state, current)
        self.assertTrue(self.session.can_undo())
        self.assertEqual(self.session.get_action_history(), ["substitution"])


if __name__ == "__main__":
    unittest.main()
