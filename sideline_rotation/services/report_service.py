"""Playing time reports and the end-of-match summary hand-off."""

from __future__ import annotations

import csv
import datetime as dt
import io
import statistics
from collections import Counter
from typing import Any, Dict, List, Optional, Protocol

from ..models import GameState, MatchReport, PlayerTimeSummary
from ..utils import fmt_mmss, now_ts
from ..utils.constants import APP_TITLE, FAIRNESS_THRESHOLD_SECONDS
from .stint_tracker import live_stats

FAIRNESS_ORDER = {"under": 0, "ok": 1, "over": 2}


class ExportServiceInterface(Protocol):
    """Interface for report export."""

    def export_to_csv(self, report: MatchReport) -> str:
        """Export report to CSV format."""
        ...


class MatchReportExporter:
    """CSV export of a :class:`MatchReport`."""

    def export_to_csv(self, report: MatchReport) -> str:
        """Return a CSV document: summary rows, a blank line, then a player table.

        Raises:
            ValueError: If the report has no players.
        """
        if report.squad_size == 0:
            raise ValueError("Cannot export a report without any players")

        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")

        generated_dt = dt.datetime.fromtimestamp(report.generated_ts)
        writer.writerow([f"{APP_TITLE} Report"])
        writer.writerow(["Generated", generated_dt.isoformat(timespec="seconds")])
        writer.writerow(["Squad Size", report.squad_size])
        writer.writerow(["Formation", report.formation_id])
        writer.writerow(["Substitution Type", report.substitution_type])
        writer.writerow(["Average Field Seconds", round(report.average_seconds, 2)])
        writer.writerow(["Median Field Seconds", round(report.median_seconds, 2)])
        writer.writerow(["Minimum Field Seconds", report.min_seconds])
        writer.writerow(["Maximum Field Seconds", report.max_seconds])

        fairness_counts = report.fairness_counts or {}
        writer.writerow(["Players Under Average", fairness_counts.get("under", 0)])
        writer.writerow(["Players Near Average", fairness_counts.get("ok", 0)])
        writer.writerow(["Players Over Average", fairness_counts.get("over", 0)])
        writer.writerow([])

        writer.writerow(
            [
                "Player Id",
                "Name",
                "Status",
                "Position",
                "Inactive",
                "Field Time",
                "Field Seconds",
                "Defender Seconds",
                "Midfielder Seconds",
                "Attacker Seconds",
                "Goalie Seconds",
                "Substitute Seconds",
                "Delta Seconds",
                "Fairness",
            ]
        )
        for summary in report.players:
            writer.writerow(
                [
                    summary.player_id,
                    summary.name,
                    summary.status,
                    summary.position or "",
                    "yes" if summary.is_inactive else "no",
                    fmt_mmss(summary.time_on_field_seconds),
                    summary.time_on_field_seconds,
                    summary.time_as_defender_seconds,
                    summary.time_as_midfielder_seconds,
                    summary.time_as_attacker_seconds,
                    summary.time_as_goalie_seconds,
                    summary.time_as_substitute_seconds,
                    summary.delta_seconds,
                    summary.fairness,
                ]
            )

        csv_text = buffer.getvalue()
        buffer.close()
        return csv_text


class ReportService:
    """
    Build playing time reports from a game state.

    Running stints are counted up to the report time without closing them,
    so a report can be taken mid-match.
    """

    def __init__(self, export_service: Optional[ExportServiceInterface] = None) -> None:
        self.export_service = export_service or MatchReportExporter()

    def generate_match_report(self, state: GameState, now: Optional[float] = None) -> MatchReport:
        """Build a :class:`MatchReport` snapshot for ``state``."""
        now = now_ts() if now is None else now
        summaries = self.player_summaries(state, now)

        totals = [summary.time_on_field_seconds for summary in summaries]
        average_seconds = statistics.mean(totals) if totals else 0.0
        for summary in summaries:
            summary.delta_seconds = int(round(summary.time_on_field_seconds - average_seconds))
            summary.fairness = self._classify_fairness(summary.delta_seconds)

        summaries.sort(
            key=lambda item: (
                FAIRNESS_ORDER.get(item.fairness, 1),
                item.delta_seconds,
                item.name,
            )
        )
        fairness_counter = Counter(summary.fairness for summary in summaries)

        return MatchReport(
            generated_ts=now,
            squad_size=len(summaries),
            formation_id=state.team_config.formation_id,
            substitution_type=state.team_config.substitution_type.value,
            players=summaries,
            average_seconds=average_seconds,
            median_seconds=statistics.median(totals) if totals else 0.0,
            min_seconds=min(totals) if totals else 0,
            max_seconds=max(totals) if totals else 0,
            fairness_counts={
                "under": fairness_counter.get("under", 0),
                "ok": fairness_counter.get("ok", 0),
                "over": fairness_counter.get("over", 0),
            },
        )

    def player_summaries(self, state: GameState, now: float) -> List[PlayerTimeSummary]:
        """Per-player time-by-role totals, open stints included."""
        summaries = []
        for player in state.all_players.values():
            stats = live_stats(player, now)
            summaries.append(
                PlayerTimeSummary(
                    player_id=player.id,
                    name=player.display_name,
                    status=player.current_status.value,
                    role=player.current_role.value,
                    position=player.current_position,
                    is_inactive=player.is_inactive,
                    time_on_field_seconds=stats.time_on_field_seconds,
                    time_as_defender_seconds=stats.time_as_defender_seconds,
                    time_as_midfielder_seconds=stats.time_as_midfielder_seconds,
                    time_as_attacker_seconds=stats.time_as_attacker_seconds,
                    time_as_goalie_seconds=stats.time_as_goalie_seconds,
                    time_as_substitute_seconds=stats.time_as_substitute_seconds,
                )
            )
        return summaries

    def final_stats(self, state: GameState, now: Optional[float] = None) -> Dict[str, Dict[str, Any]]:
        """Player id -> accumulated time-by-role, for match recording."""
        now = now_ts() if now is None else now
        return {
            player.id: live_stats(player, now).to_dict()
            for player in state.all_players.values()
        }

    def generate_report_csv(self, state: GameState, now: Optional[float] = None) -> str:
        """Generate a report for ``state`` and export it with the export service."""
        return self.export_service.export_to_csv(self.generate_match_report(state, now))

    @staticmethod
    def _classify_fairness(delta_seconds: int) -> str:
        if delta_seconds <= -FAIRNESS_THRESHOLD_SECONDS:
            return "under"
        if delta_seconds >= FAIRNESS_THRESHOLD_SECONDS:
            return "over"
        return "ok"
