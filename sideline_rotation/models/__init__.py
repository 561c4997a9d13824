"""
Models package for the Sideline Rotation engine.

This package contains the immutable data models threaded through the engine.
"""
from .player import Player, PlayerStats, PlayerStatus, PlayerRole
from .team_config import TeamConfig, SubstitutionType, PairRoleRotation
from .formation import (
    Formation, FormationKind, IndividualFormation, PairsFormation, PairSlot,
    formation_from_dict,
)
from .game_state import GameState
from .match_report import MatchReport, PlayerTimeSummary

__all__ = [
    "Player", "PlayerStats", "PlayerStatus", "PlayerRole",
    "TeamConfig", "SubstitutionType", "PairRoleRotation",
    "Formation", "FormationKind", "IndividualFormation", "PairsFormation", "PairSlot",
    "formation_from_dict", "GameState", "MatchReport", "PlayerTimeSummary",
]
