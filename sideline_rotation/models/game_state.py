"""
GameState model for the Sideline Rotation engine.

This module contains the immutable GameState snapshot. The engine never
modifies a GameState; every operation returns a new one and the caller keeps
whichever snapshot is current.
"""
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Tuple

from .formation import Formation, formation_from_dict
from .player import Player
from .team_config import TeamConfig
from ..errors import PlayerNotInSquad


@dataclass(frozen=True)
class GameState:
    """
    Complete lineup state of a match at one instant.

    Attributes:
        team_config: Configuration the match was set up with
        formation: Who holds which position (individual or pairs)
        all_players: Players keyed by id, goalie included
        rotation_queue: Active ids in priority order followed by inactive ids
        next_player_id_to_sub_out: Field player at the head of the rotation
        next_next_player_id_to_sub_out: Field player after that, only set when
            the formation has two or more substitute slots
        next_pair_to_sub_out: Pairs mode only, pair key of the next pair off
        players_to_highlight: Ids moved by the last operation
        is_clock_paused: Stints are not running while True
    """
    team_config: TeamConfig
    formation: Formation
    all_players: Dict[str, Player] = field(default_factory=dict)
    rotation_queue: Tuple[str, ...] = ()
    next_player_id_to_sub_out: Optional[str] = None
    next_next_player_id_to_sub_out: Optional[str] = None
    next_pair_to_sub_out: Optional[str] = None
    players_to_highlight: Tuple[str, ...] = ()
    is_clock_paused: bool = False

    @property
    def goalie_id(self) -> str:
        return self.formation.goalie

    def player(self, player_id: str) -> Player:
        """
        Look up a squad member.

        Raises:
            PlayerNotInSquad: If the id is not in the squad
        """
        try:
            return self.all_players[player_id]
        except KeyError:
            raise PlayerNotInSquad(f"Player {player_id!r} is not in the squad") from None

    def active_queue(self) -> List[str]:
        """Active segment of the rotation queue, front first."""
        return [pid for pid in self.rotation_queue if not self.all_players[pid].is_inactive]

    def inactive_queue(self) -> List[str]:
        return [pid for pid in self.rotation_queue if self.all_players[pid].is_inactive]

    def with_players(self, updated: Dict[str, Player], **changes) -> 'GameState':
        """Return a copy with some players replaced and other fields changed."""
        players = dict(self.all_players)
        players.update(updated)
        return replace(self, all_players=players, **changes)

    def to_json(self) -> dict:
        """
        Convert GameState to JSON-serializable dictionary.

        Returns:
            Dictionary representation suitable for JSON serialization
        """
        return {
            "team_config": self.team_config.to_dict(),
            "formation": self.formation.to_dict(),
            "players": {pid: player.to_dict() for pid, player in self.all_players.items()},
            "rotation_queue": list(self.rotation_queue),
            "next_player_id_to_sub_out": self.next_player_id_to_sub_out,
            "next_next_player_id_to_sub_out": self.next_next_player_id_to_sub_out,
            "next_pair_to_sub_out": self.next_pair_to_sub_out,
            "players_to_highlight": list(self.players_to_highlight),
            "is_clock_paused": self.is_clock_paused,
        }

    @staticmethod
    def from_json(data: dict) -> "GameState":
        """
        Create GameState from JSON dictionary.

        Args:
            data: Dictionary with game state data

        Returns:
            New GameState instance

        Raises:
            KeyError: If a required section is missing
            ValueError: If an enum value is not recognised
        """
        players = {
            str(pid): Player.from_dict(pdata) for pid, pdata in data.get("players", {}).items()
        }
        return GameState(
            team_config=TeamConfig.from_dict(data["team_config"]),
            formation=formation_from_dict(data["formation"]),
            all_players=players,
            rotation_queue=tuple(str(pid) for pid in data.get("rotation_queue", [])),
            next_player_id_to_sub_out=data.get("next_player_id_to_sub_out"),
            next_next_player_id_to_sub_out=data.get("next_next_player_id_to_sub_out"),
            next_pair_to_sub_out=data.get("next_pair_to_sub_out"),
            players_to_highlight=tuple(data.get("players_to_highlight", [])),
            is_clock_paused=bool(data.get("is_clock_paused", False)),
        )
