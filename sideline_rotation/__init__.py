"""
Sideline Rotation

Lineup rotation and playing-time engine for youth sports substitution
tracking: fair rotation queues, stint-based time accounting and both
individual and pairs substitution.

The core is a set of pure operations over immutable GameState snapshots;
a MatchSession and a Flask JSON API sit on top for callers that want one.
"""
from .errors import LineupError
from .models import GameState, Player, TeamConfig, SubstitutionType, PairRoleRotation
from .services import FormationCatalog, GameStateEngine, MatchSession, PersistenceService, ReportService
from .utils import fmt_mmss, now_ts, APP_TITLE

__version__ = "1.0.0"

__all__ = [
    "LineupError", "GameState", "Player", "TeamConfig", "SubstitutionType", "PairRoleRotation",
    "FormationCatalog", "GameStateEngine", "MatchSession", "PersistenceService", "ReportService",
    "fmt_mmss", "now_ts", "APP_TITLE",
]
