"""
Web application module for the Sideline Rotation engine.

This module contains the Flask server exposing the match session as a JSON
API: one endpoint per engine action, plus undo/redo, reports and save/load.
"""
import logging
from typing import Any, Dict, Optional

from flask import Flask, Response, jsonify, request

from ..errors import LineupError
from ..models import GameState, TeamConfig
from ..services import MatchSession, PersistenceService, ReportService
from ..utils.constants import APP_TITLE, DEFAULT_HOST, DEFAULT_PORT

logger = logging.getLogger(__name__)


class WebAppState:
    """
    State holder for the web application.

    Owns the single MatchSession; every request goes through it so calls are
    applied one at a time against the latest snapshot.
    """

    def __init__(self, session: Optional[MatchSession] = None):
        self.session = session or MatchSession()
        self.report_service = ReportService()
        self.persistence_service = PersistenceService()

    def reset(self) -> None:
        """Drop the current match and its history."""
        self.session = MatchSession(self.session.engine, self.session.max_history)


# Global state instance
app_state = WebAppState()


def create_app(state: Optional[WebAppState] = None) -> Flask:
    """
    Create and configure the Flask application with API endpoints.

    Args:
        state: State holder to serve, defaults to the module-level instance

    Returns:
        Configured Flask application instance
    """
    web_state = state or app_state
    app = Flask(__name__)

    def _payload() -> Dict[str, Any]:
        return request.get_json(silent=True) or {}

    def _state_response(game_state: Optional[GameState], message: Optional[str] = None):
        session = web_state.session
        body: Dict[str, Any] = {
            "success": True,
            "state": game_state.to_json() if game_state is not None else None,
            "can_undo": session.can_undo(),
            "can_redo": session.can_redo(),
        }
        if message:
            body["message"] = message
        return jsonify(body)

    def _error_response(error: Exception, status: int = 400):
        return jsonify({
            "success": False,
            "error": str(error),
            "error_type": type(error).__name__,
        }), status

    def _now_from(data: Dict[str, Any]) -> Optional[float]:
        """Optional ``now`` field as epoch seconds."""
        now = data.get("now")
        if now is None:
            return None
        if isinstance(now, bool) or not isinstance(now, (int, float)):
            raise ValueError(f"now must be a number of epoch seconds, got {now!r}")
        return float(now)

    def _run_action(action: str, *args: Any):
        """Apply one session action and render the new state or the error."""
        try:
            now = _now_from(_payload())
            kwargs = {} if now is None else {"now": now}
            new_state = web_state.session.apply(action, *args, **kwargs)
        except (LineupError, ValueError) as e:
            logger.warning("Action %s rejected: %s", action, e)
            return _error_response(e)
        return _state_response(new_state)

    def _require(data: Dict[str, Any], *keys: str) -> Optional[str]:
        missing = [key for key in keys if data.get(key) in (None, "")]
        return f"Missing field(s): {', '.join(missing)}" if missing else None

    # ==================== Match ==================== #

    @app.route("/api/state", methods=["GET"])
    def get_state():
        """Current game state, or null before a match is started."""
        session = web_state.session
        return _state_response(session.state if session.has_match else None)

    @app.route("/api/match/start", methods=["POST"])
    def start_match():
        """Set up a match from a team configuration, squad and goalie."""
        data = _payload()
        error = _require(data, "team_config", "players", "goalie_id")
        if error:
            return jsonify({"success": False, "error": error}), 400
        paused = data.get("paused", False)
        if not isinstance(paused, bool):
            return jsonify({"success": False, "error": "paused must be true or false"}), 400
        try:
            team_config = TeamConfig.from_dict(data["team_config"])
            game_state = web_state.session.start(
                team_config,
                data["players"],
                str(data["goalie_id"]),
                lineup=data.get("lineup"),
                now=_now_from(data),
                inactive_ids=data.get("inactive_ids") or (),
                paused=paused,
            )
        except (LineupError, ValueError) as e:
            logger.warning("Match setup rejected: %s", e)
            return _error_response(e)
        return _state_response(game_state, "Match started")

    # ==================== Actions ==================== #

    @app.route("/api/substitution", methods=["POST"])
    def substitution():
        """Rotate the next player or pair off."""
        return _run_action("substitution")

    @app.route("/api/position-switch", methods=["POST"])
    def position_switch():
        """Swap two field positions."""
        data = _payload()
        error = _require(data, "position_a", "position_b")
        if error:
            return jsonify({"success": False, "error": error}), 400
        return _run_action("position_switch", data["position_a"], data["position_b"])

    @app.route("/api/goalie-switch", methods=["POST"])
    def goalie_switch():
        """Put another squad player in goal."""
        data = _payload()
        error = _require(data, "goalie_id")
        if error:
            return jsonify({"success": False, "error": error}), 400
        return _run_action("goalie_switch", str(data["goalie_id"]))

    @app.route("/api/toggle-inactive", methods=["POST"])
    def toggle_inactive():
        """Deactivate or reactivate a substitute."""
        data = _payload()
        error = _require(data, "player_id")
        if error:
            return jsonify({"success": False, "error": error}), 400
        return _run_action("toggle_inactive", str(data["player_id"]))

    @app.route("/api/pair-swap", methods=["POST"])
    def pair_swap():
        """Swap defender and attacker inside a field pair."""
        data = _payload()
        error = _require(data, "pair_key")
        if error:
            return jsonify({"success": False, "error": error}), 400
        return _run_action("pair_swap", data["pair_key"])

    @app.route("/api/substitute-swap", methods=["POST"])
    def substitute_swap():
        """Change the order of two waiting substitutes."""
        data = _payload()
        error = _require(data, "player_a", "player_b")
        if error:
            return jsonify({"success": False, "error": error}), 400
        return _run_action("substitute_swap", str(data["player_a"]), str(data["player_b"]))

    @app.route("/api/next-target", methods=["POST"])
    def next_target():
        """Choose who comes off next."""
        data = _payload()
        error = _require(data, "player_id")
        if error:
            return jsonify({"success": False, "error": error}), 400
        return _run_action("next_target", str(data["player_id"]))

    @app.route("/api/pause", methods=["POST"])
    def pause():
        """Stop the match clock."""
        return _run_action("pause")

    @app.route("/api/resume", methods=["POST"])
    def resume():
        """Restart the match clock."""
        return _run_action("resume")

    # ==================== History ==================== #

    @app.route("/api/undo", methods=["POST"])
    def undo_action():
        """Undo the last action."""
        try:
            game_state = web_state.session.undo()
        except LineupError as e:
            return _error_response(e)
        return _state_response(game_state, "Action undone")

    @app.route("/api/redo", methods=["POST"])
    def redo_action():
        """Redo the last undone action."""
        try:
            game_state = web_state.session.redo()
        except LineupError as e:
            return _error_response(e)
        return _state_response(game_state, "Action redone")

    @app.route("/api/history", methods=["GET"])
    def get_history():
        """Action history for UI display."""
        session = web_state.session
        return jsonify({
            "success": True,
            "history": session.get_action_history(),
            "can_undo": session.can_undo(),
            "can_redo": session.can_redo(),
        })

    # ==================== Reports ==================== #

    @app.route("/api/report", methods=["GET"])
    def get_report():
        """Playing time report for the current state."""
        try:
            report = web_state.report_service.generate_match_report(web_state.session.state)
        except LineupError as e:
            return _error_response(e)
        return jsonify({"success": True, "report": report.to_dict()})

    @app.route("/api/report/csv", methods=["GET"])
    def get_report_csv():
        """Playing time report as a CSV download."""
        try:
            csv_text = web_state.report_service.generate_report_csv(web_state.session.state)
        except LineupError as e:
            return _error_response(e)
        return Response(
            csv_text,
            mimetype="text/csv",
            headers={"Content-Disposition": "attachment; filename=match_report.csv"},
        )

    # ==================== Save / load ==================== #

    @app.route("/api/save", methods=["POST"])
    def save_game():
        """Save the current state to ``file_path``."""
        data = _payload()
        error = _require(data, "file_path")
        if error:
            return jsonify({"success": False, "error": error}), 400
        try:
            web_state.persistence_service.save_game_to_file(web_state.session.state, data["file_path"])
        except LineupError as e:
            return _error_response(e)
        except OSError as e:
            logger.error("Save to %s failed: %s", data["file_path"], e)
            return _error_response(e, 500)
        return jsonify({"success": True, "message": f"Saved to {data['file_path']}"})

    @app.route("/api/load", methods=["POST"])
    def load_game():
        """Load a state from an inline ``state`` object or from ``file_path``."""
        data = _payload()
        inline = data.get("state")
        try:
            if inline:
                if not isinstance(inline, dict):
                    return jsonify({"success": False, "error": "state must be a JSON object"}), 400
                game_state = GameState.from_json(inline)
            elif data.get("file_path"):
                game_state = web_state.persistence_service.load_game_from_file(data["file_path"])
            else:
                return jsonify({"success": False, "error": "Provide state or file_path"}), 400
            web_state.session.load(game_state)
        except FileNotFoundError as e:
            return _error_response(e, 404)
        except (LineupError, KeyError, TypeError, AttributeError, ValueError) as e:
            logger.warning("Load rejected: %s", e)
            return _error_response(e)
        return _state_response(game_state, "Game loaded")

    # ==================== Reset ==================== #

    @app.route("/api/reset", methods=["POST"])
    def reset_match():
        """Drop the current match and its history."""
        web_state.reset()
        return _state_response(None, "Match cleared")

    return app


def run_web_app(host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> None:
    """
    Run the web application.

    Args:
        host: Host address to bind to (default: localhost only)
        port: Port number to listen on
    """
    app = create_app()
    logger.info("Serving %s API on http://%s:%d", APP_TITLE, host, port)
    app.run(host=host, port=port, debug=False)


if __name__ == "__main__":
    run_web_app()
