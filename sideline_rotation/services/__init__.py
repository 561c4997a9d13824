"""
Services package for the Sideline Rotation engine.

This package contains the rotation core (formation catalog, rotation queue,
stint tracker, substitution manager, game state engine) and the caller-side
services built on it (match session, reports, persistence).
"""
from .formation_catalog import FormationCatalog, FormationLayout
from .rotation_queue import RotationQueue
from .stint_tracker import stint_duration, close_stint, open_stint, reassign, live_stats
from .substitution_manager import SubstitutionManager, SubstitutionResult, NextTargets
from .game_engine import GameStateEngine
from .match_session import MatchSession
from .report_service import ReportService, MatchReportExporter
from .persistence_service import PersistenceService

__all__ = [
    "FormationCatalog", "FormationLayout", "RotationQueue",
    "stint_duration", "close_stint", "open_stint", "reassign", "live_stats",
    "SubstitutionManager", "SubstitutionResult", "NextTargets",
    "GameStateEngine", "MatchSession", "ReportService", "MatchReportExporter",
    "PersistenceService",
]
