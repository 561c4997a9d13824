"""
Player model for the Sideline Rotation engine.

This module contains the immutable Player dataclass used inside every game
state snapshot, together with the per-role playing-time accumulators and the
status/role enumerations.
"""
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional
from enum import Enum


class PlayerStatus(Enum):
    """Where the player currently is."""
    ON_FIELD = "on_field"
    SUBSTITUTE = "substitute"
    GOALIE = "goalie"


class PlayerRole(Enum):
    """Role derived from the position the player holds."""
    DEFENDER = "defender"
    MIDFIELDER = "midfielder"
    ATTACKER = "attacker"
    GOALIE = "goalie"
    SUBSTITUTE = "substitute"


ROLE_STAT_FIELDS = {
    PlayerRole.DEFENDER: "time_as_defender_seconds",
    PlayerRole.MIDFIELDER: "time_as_midfielder_seconds",
    PlayerRole.ATTACKER: "time_as_attacker_seconds",
    PlayerRole.GOALIE: "time_as_goalie_seconds",
    PlayerRole.SUBSTITUTE: "time_as_substitute_seconds",
}


@dataclass(frozen=True)
class PlayerStats:
    """Accumulated seconds per role for one match."""
    time_on_field_seconds: int = 0
    time_as_defender_seconds: int = 0
    time_as_attacker_seconds: int = 0
    time_as_midfielder_seconds: int = 0
    time_as_goalie_seconds: int = 0
    time_as_substitute_seconds: int = 0

    def add_stint(self, role: PlayerRole, seconds: int) -> 'PlayerStats':
        """
        Return new stats with a finished stint added.

        The role accumulator always grows; ``time_on_field_seconds`` grows for
        every role except substitute, so goalie time counts as time on the
        pitch.

        Args:
            role: Role the player held during the stint
            seconds: Whole seconds the stint lasted

        Returns:
            Updated PlayerStats instance
        """
        if seconds <= 0:
            return self
        stat_field = ROLE_STAT_FIELDS[role]
        updates = {stat_field: getattr(self, stat_field) + seconds}
        if role is not PlayerRole.SUBSTITUTE:
            updates["time_on_field_seconds"] = self.time_on_field_seconds + seconds
        return replace(self, **updates)

    def seconds_as(self, role: PlayerRole) -> int:
        """Seconds accumulated in ``role``."""
        return getattr(self, ROLE_STAT_FIELDS[role])

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "time_on_field_seconds": self.time_on_field_seconds,
            "time_as_defender_seconds": self.time_as_defender_seconds,
            "time_as_attacker_seconds": self.time_as_attacker_seconds,
            "time_as_midfielder_seconds": self.time_as_midfielder_seconds,
            "time_as_goalie_seconds": self.time_as_goalie_seconds,
            "time_as_substitute_seconds": self.time_as_substitute_seconds,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'PlayerStats':
        """Create from dictionary for JSON deserialization."""
        if not data:
            return cls()
        return cls(
            time_on_field_seconds=int(data.get("time_on_field_seconds", 0)),
            time_as_defender_seconds=int(data.get("time_as_defender_seconds", 0)),
            time_as_attacker_seconds=int(data.get("time_as_attacker_seconds", 0)),
            time_as_midfielder_seconds=int(data.get("time_as_midfielder_seconds", 0)),
            time_as_goalie_seconds=int(data.get("time_as_goalie_seconds", 0)),
            time_as_substitute_seconds=int(data.get("time_as_substitute_seconds", 0)),
        )


@dataclass(frozen=True)
class Player:
    """
    A squad member inside one game state snapshot.

    Instances are never mutated; the engine builds a new Player with
    ``dataclasses.replace`` whenever something about the player changes.

    Attributes:
        id: Unique identifier, stable for the match
        name: Display name (optional, defaults to the id)
        stats: Accumulated seconds per role
        current_status: On the field, substitute or goalie
        current_position: Formation position key held, None for substitutes
        current_role: Role derived from the position held
        is_inactive: Temporarily excluded from the rotation
        last_stint_start_time_epoch: Start of the running stint, None while
            the match clock is paused or the player is inactive
    """
    id: str
    name: str = ""
    stats: PlayerStats = field(default_factory=PlayerStats)
    current_status: PlayerStatus = PlayerStatus.SUBSTITUTE
    current_position: Optional[str] = None
    current_role: PlayerRole = PlayerRole.SUBSTITUTE
    is_inactive: bool = False
    last_stint_start_time_epoch: Optional[float] = None

    @property
    def display_name(self) -> str:
        """Name to show in reports, falling back to the id."""
        return self.name or self.id

    @property
    def on_field(self) -> bool:
        """True while the player holds an outfield position."""
        return self.current_status is PlayerStatus.ON_FIELD

    @property
    def is_goalie(self) -> bool:
        return self.current_status is PlayerStatus.GOALIE

    @property
    def is_substitute(self) -> bool:
        return self.current_status is PlayerStatus.SUBSTITUTE

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert player to dictionary for JSON serialization.

        Returns:
            Dictionary representation of the player
        """
        return {
            "id": self.id,
            "name": self.name,
            "stats": self.stats.to_dict(),
            "current_status": self.current_status.value,
            "current_position": self.current_position,
            "current_role": self.current_role.value,
            "is_inactive": self.is_inactive,
            "last_stint_start_time_epoch": self.last_stint_start_time_epoch,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Player':
        """
        Create player from dictionary for JSON deserialization.

        Args:
            data: Dictionary representation of player

        Returns:
            Player instance

        Raises:
            KeyError: If the id is missing
            ValueError: If status or role are not recognised
        """
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            stats=PlayerStats.from_dict(data.get("stats")),
            current_status=PlayerStatus(data.get("current_status", PlayerStatus.SUBSTITUTE.value)),
            current_position=data.get("current_position"),
            current_role=PlayerRole(data.get("current_role", PlayerRole.SUBSTITUTE.value)),
            is_inactive=bool(data.get("is_inactive", False)),
            last_stint_start_time_epoch=data.get("last_stint_start_time_epoch"),
        )
