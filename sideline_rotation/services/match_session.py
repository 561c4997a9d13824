"""
Match session: the single owner of the current game state.

The engine is pure and keeps no history, so the session retains each prior
snapshot before applying an action and hands it back to the engine's undo.
Undo/redo follow the command-history model: a bounded history, cleared
forward history on every new action.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from ..errors import MatchNotStarted, NothingToRedo, NothingToUndo, UnknownAction
from ..models import GameState, TeamConfig
from ..utils.constants import DEFAULT_MAX_HISTORY
from .game_engine import GameStateEngine, Lineup, SquadEntry

logger = logging.getLogger(__name__)

# Action name -> engine method
ACTIONS: Dict[str, str] = {
    "substitution": "calculate_substitution",
    "position_switch": "calculate_position_switch",
    "goalie_switch": "calculate_goalie_switch",
    "toggle_inactive": "calculate_player_toggle_inactive",
    "pair_swap": "calculate_pair_position_swap",
    "substitute_swap": "calculate_substitute_swap",
    "next_target": "calculate_next_substitution_target",
    "pause": "calculate_pause",
    "resume": "calculate_resume",
}


class MatchSession:
    """
    Holds the current GameState and undo/redo history for one match.

    Calls must be made one at a time; the session is the single writer of
    its state.
    """

    def __init__(self, engine: Optional[GameStateEngine] = None, max_history: int = DEFAULT_MAX_HISTORY):
        """
        Initialize the session.

        Args:
            engine: Engine to delegate to, a default one is created if omitted
            max_history: Maximum number of snapshots kept for undo
        """
        self.engine = engine or GameStateEngine()
        self.max_history = max_history
        self._state: Optional[GameState] = None
        self._undo_stack: List[Tuple[str, GameState]] = []
        self._redo_stack: List[Tuple[str, GameState]] = []

    @property
    def state(self) -> GameState:
        """
        Current snapshot.

        Raises:
            MatchNotStarted: If no match has been set up
        """
        if self._state is None:
            raise MatchNotStarted("No match has been started")
        return self._state

    @property
    def has_match(self) -> bool:
        return self._state is not None

    def start(
        self,
        team_config: TeamConfig,
        players: Sequence[SquadEntry],
        goalie_id: str,
        lineup: Optional[Lineup] = None,
        now: Optional[float] = None,
        inactive_ids: Iterable[str] = (),
        paused: bool = False,
    ) -> GameState:
        """Set up a new match, discarding any previous one and its history."""
        state = self.engine.create_game_state(
            team_config, players, goalie_id,
            lineup=lineup, now=now, inactive_ids=inactive_ids, paused=paused,
        )
        self.load(state)
        logger.info(
            "Match started: %s %s, %d players",
            team_config.format, team_config.formation_id, team_config.squad_size,
        )
        return state

    def load(self, state: GameState) -> None:
        """
        Replace the current state (e.g. from a save file) and clear history.

        Raises:
            LineupError: If the state is inconsistent; the session keeps its
                current state
        """
        self._state = self.engine.validate_game_state(state)
        self.clear_history()

    def apply(self, action: str, *args: Any, **kwargs: Any) -> GameState:
        """
        Run an engine action against the current state.

        A failing action raises and leaves state and history untouched. An
        action that returns the same snapshot is not recorded.

        Args:
            action: Key of :data:`ACTIONS`
            *args: Positional action parameters after the state
            **kwargs: Keyword action parameters (e.g. ``now``)

        Returns:
            The new current state

        Raises:
            UnknownAction: If ``action`` is not recognised
            MatchNotStarted: If no match has been set up
            LineupError: Whatever the engine raises for the action
        """
        if action not in ACTIONS:
            raise UnknownAction(f"Unknown action: {action!r}")
        current = self.state
        new_state = getattr(self.engine, ACTIONS[action])(current, *args, **kwargs)
        if new_state is current:
            return current

        self._undo_stack.append((action, current))
        if len(self._undo_stack) > self.max_history:
            self._undo_stack.pop(0)
        self._redo_stack.clear()
        self._state = new_state
        logger.info("Applied %s", action)
        return new_state

    def undo(self) -> GameState:
        """
        Return to the snapshot before the last action.

        Raises:
            NothingToUndo: If there is no history
        """
        if not self.can_undo():
            raise NothingToUndo("Nothing to undo")
        action, previous = self._undo_stack.pop()
        self._redo_stack.append((action, self.state))
        self._state = self.engine.calculate_undo(self.state, previous)
        logger.info("Undid %s", action)
        return self._state

    def redo(self) -> GameState:
        """
        Reapply the last undone action's result.

        Raises:
            NothingToRedo: If nothing has been undone since the last action
        """
        if not self.can_redo():
            raise NothingToRedo("Nothing to redo")
        action, redone = self._redo_stack.pop()
        self._undo_stack.append((action, self.state))
        self._state = redone
        logger.info("Redid %s", action)
        return redone

    def can_undo(self) -> bool:
        """Check if undo is available."""
        return bool(self._undo_stack)

    def can_redo(self) -> bool:
        """Check if redo is available."""
        return bool(self._redo_stack)

    def get_action_history(self) -> List[str]:
        """Names of the actions that can be undone, oldest first."""
        return [action for action, _ in self._undo_stack]

    def clear_history(self) -> None:
        self._undo_stack.clear()
        self._redo_stack.clear()
