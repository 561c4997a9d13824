"""Dataclasses describing the end-of-match playing time summary."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class PlayerTimeSummary:
    """Accumulated playing time for a single player, open stint included."""

    player_id: str
    name: str
    status: str
    role: str
    position: Optional[str]
    is_inactive: bool
    time_on_field_seconds: int
    time_as_defender_seconds: int
    time_as_midfielder_seconds: int
    time_as_attacker_seconds: int
    time_as_goalie_seconds: int
    time_as_substitute_seconds: int
    delta_seconds: int = 0
    fairness: str = "ok"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_id": self.player_id,
            "name": self.name,
            "status": self.status,
            "role": self.role,
            "position": self.position,
            "is_inactive": self.is_inactive,
            "time_on_field_seconds": self.time_on_field_seconds,
            "time_as_defender_seconds": self.time_as_defender_seconds,
            "time_as_midfielder_seconds": self.time_as_midfielder_seconds,
            "time_as_attacker_seconds": self.time_as_attacker_seconds,
            "time_as_goalie_seconds": self.time_as_goalie_seconds,
            "time_as_substitute_seconds": self.time_as_substitute_seconds,
            "delta_seconds": self.delta_seconds,
            "fairness": self.fairness,
        }


@dataclass
class MatchReport:
    """Snapshot of the playing time distribution for a game state."""

    generated_ts: float
    squad_size: int
    formation_id: str
    substitution_type: str
    players: List[PlayerTimeSummary] = field(default_factory=list)
    average_seconds: float = 0.0
    median_seconds: float = 0.0
    min_seconds: int = 0
    max_seconds: int = 0
    fairness_counts: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "generated_ts": self.generated_ts,
            "squad_size": self.squad_size,
            "formation_id": self.formation_id,
            "substitution_type": self.substitution_type,
            "players": [summary.to_dict() for summary in self.players],
            "average_seconds": self.average_seconds,
            "median_seconds": self.median_seconds,
            "min_seconds": self.min_seconds,
            "max_seconds": self.max_seconds,
            "fairness_counts": dict(self.fairness_counts),
        }
