"""Test playing time reports and CSV export."""

import csv
import io
import unittest

from sideline_rotation.models import MatchReport, TeamConfig
from sideline_rotation.services import GameStateEngine, MatchReportExporter, ReportService


class TestReportService(unittest.TestCase):
    """Test report generation from a game state."""

    def setUp(self):
        """Six players, one substitution at ten minutes."""
        self.engine = GameStateEngine()
        self.service = ReportService()
        config = TeamConfig(format="5v5", squad_size=6, formation_id="2-2")
        state = self.engine.create_game_state(config, list("ABCDEF"), "F", now=0)
        self.state = self.engine.calculate_substitution(state, now=600)

    def test_report_counts_open_stints(self):
        report = self.service.generate_match_report(self.state, now=1200)
        by_id = {summary.player_id: summary for summary in report.players}

        self.assertEqual(by_id["A"].time_as_defender_seconds, 600)
        self.assertEqual(by_id["A"].time_as_substitute_seconds, 600)
        self.assertEqual(by_id["E"].time_as_defender_seconds, 600)
        self.assertEqual(by_id["B"].time_on_field_seconds, 1200)
        self.assertEqual(by_id["F"].time_as_goalie_seconds, 1200)
        # The report must not close stints in the state it reads
        self.assertEqual(self.state.all_players["B"].stats.time_on_field_seconds, 0)

    def test_summary_statistics(self):
        report = self.service.generate_match_report(self.state, now=1200)

        self.assertEqual(report.squad_size, 6)
        self.assertEqual(report.formation_id, "2-2")
        self.assertEqual(report.substitution_type, "individual")
        self.assertEqual(report.average_seconds, 1000)
        self.assertEqual(report.median_seconds, 1200)
        self.assertEqual(report.min_seconds, 600)
        self.assertEqual(report.max_seconds, 1200)

    def test_fairness_classification_and_order(self):
        report = self.service.generate_match_report(self.state, now=1200)

        self.assertEqual([s.player_id for s in report.players], ["A", "E", "B", "C", "D", "F"])
        self.assertEqual(report.players[0].delta_seconds, -400)
        self.assertEqual(report.players[0].fairness, "under")
        self.assertEqual(report.players[-1].fairness, "over")
        self.assertEqual(report.fairness_counts, {"under": 2, "ok": 0, "over": 4})

    def test_players_within_threshold_are_ok(self):
        report = self.service.generate_match_report(self.state, now=600)
        self.assertEqual(report.fairness_counts, {"under": 1, "ok": 5, "over": 0})

    def test_final_stats(self):
        stats = self.service.final_stats(self.state, now=900)

        self.assertEqual(set(stats), set("ABCDEF"))
        self.assertEqual(stats["E"]["time_as_defender_seconds"], 300)
        self.assertEqual(stats["E"]["time_as_substitute_seconds"], 600)
        self.assertEqual(stats["F"]["time_on_field_seconds"], 900)

    def test_report_to_dict(self):
        data = self.service.generate_match_report(self.state, now=1200).to_dict()

        self.assertEqual(data["generated_ts"], 1200)
        self.assertEqual(len(data["players"]), 6)
        self.assertEqual(data["players"][0]["player_id"], "A")


class TestReportExport(unittest.TestCase):
    """Test CSV export of match reports."""

    def setUp(self):
        engine = GameStateEngine()
        config = TeamConfig(format="5v5", squad_size=6, formation_id="2-2")
        squad = [{"id": pid, "name": f"Player {pid}"} for pid in "ABCDEF"]
        state = engine.create_game_state(config, squad, "F", now=1640995200)
        self.state = engine.calculate_substitution(state, now=1640995200 + 600)
        self.service = ReportService()

    def test_csv_structure(self):
        csv_text = self.service.generate_report_csv(self.state, now=1640995200 + 1200)
        rows = list(csv.reader(io.StringIO(csv_text)))

        self.assertEqual(rows[0], ["Sideline Rotation Report"])
        self.assertIn(["Squad Size", "6"], rows)
        self.assertIn(["Formation", "2-2"], rows)
        self.assertIn(["Players Under Average", "2"], rows)

        header_index = rows.index([]) + 1
        header = rows[header_index]
        self.assertEqual(header[0], "Player Id")
        self.assertIn("Field Time", header)

        player_rows = rows[header_index + 1:]
        self.assertEqual(len(player_rows), 6)
        first = dict(zip(header, player_rows[0]))
        self.assertEqual(first["Player Id"], "A")
        self.assertEqual(first["Name"], "Player A")
        self.assertEqual(first["Field Time"], "10:00")
        self.assertEqual(first["Inactive"], "no")
        self.assertEqual(first["Fairness"], "under")

    def test_empty_report_is_rejected(self):
        report = MatchReport(generated_ts=0, squad_size=0, formation_id="2-2", substitution_type="individual")
        with self.assertRaises(ValueError):
            MatchReportExporter().export_to_csv(report)


if __name__ == "__main__":
    unittest.main()
