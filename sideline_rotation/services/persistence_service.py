"""
Persistence service for the Sideline Rotation engine.

This module handles saving and loading game states and match summaries
to/from JSON files. The engine itself never performs I/O.
"""
import json
import logging
import os
from typing import Optional

from ..models import GameState
from .game_engine import GameStateEngine
from .report_service import ReportService

logger = logging.getLogger(__name__)


class PersistenceService:
    """
    Saves and restores match snapshots and final reports as JSON.

    Saved states keep their running stint start times, so a match can be
    resumed after loading.
    """

    @staticmethod
    def serialize_game_state(game_state: GameState) -> str:
        """Encode a game state as a JSON string."""
        return json.dumps(game_state.to_json(), indent=2)

    @staticmethod
    def deserialize_game_state(payload: str, engine: Optional[GameStateEngine] = None) -> GameState:
        """
        Decode and check a game state from a JSON string.

        Raises:
            json.JSONDecodeError: If the payload is not JSON
            KeyError: If a required section is missing
            ValueError: If the JSON structure is invalid
            LineupError: If the decoded state is inconsistent
        """
        state = GameState.from_json(json.loads(payload))
        return (engine or GameStateEngine()).validate_game_state(state)

    @staticmethod
    def save_game_to_file(game_state: GameState, file_path: str) -> None:
        """
        Write a match snapshot to disk, creating parent directories.

        Args:
            game_state: Snapshot to store, running stints included
            file_path: Destination file

        Raises:
            OSError: If the file cannot be written
        """
        PersistenceService._ensure_directory(file_path)
        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(game_state.to_json(), f, indent=2)
        logger.info("Saved game state to %s", file_path)

    @staticmethod
    def load_game_from_file(file_path: str, engine: Optional[GameStateEngine] = None) -> GameState:
        """
        Read a match snapshot written by :meth:`save_game_to_file`.

        Args:
            file_path: Save file to read
            engine: Engine used to check the state, a default one if omitted

        Returns:
            The stored GameState

        Raises:
            FileNotFoundError: If there is no save at ``file_path``
            json.JSONDecodeError: If the file is not JSON
            ValueError: If an enum value in the file is not recognised
            LineupError: If the stored state is inconsistent
        """
        if not os.path.exists(file_path):
            raise FileNotFoundError(f"Game file not found: {file_path}")

        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)

        state = (engine or GameStateEngine()).validate_game_state(GameState.from_json(data))
        logger.info("Loaded game state from %s", file_path)
        return state

    @staticmethod
    def save_match_report(
        game_state: GameState,
        file_path: str,
        now: Optional[float] = None,
        report_service: Optional[ReportService] = None,
    ) -> None:
        """
        Write the end-of-match playing time summary as JSON.

        Args:
            game_state: Final game state
            file_path: Destination file
            now: Time to close running stints at, defaults to now
            report_service: Report builder, a default one is used if omitted
        """
        report = (report_service or ReportService()).generate_match_report(game_state, now)
        PersistenceService._ensure_directory(file_path)
        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(report.to_dict(), f, indent=2)
        logger.info("Saved match report for %d players to %s", report.squad_size, file_path)

    @staticmethod
    def _ensure_directory(file_path: str) -> None:
        directory = os.path.dirname(file_path)
        if directory and not os.path.exists(directory):
            os.makedirs(directory)
