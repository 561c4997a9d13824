"""
Constants for the Sideline Rotation engine.

This module contains configuration constants used throughout the application:
match formats, squad-size bounds, formation keys and reporting thresholds.
"""

# Application metadata
APP_TITLE = "Sideline Rotation"

# Match formats and the number of outfield players each puts on the pitch
FORMAT_5V5 = "5v5"
FORMAT_7V7 = "7v7"

FIELD_PLAYERS_BY_FORMAT = {
    FORMAT_5V5: 4,
    FORMAT_7V7: 6,
}

# Squad-size bounds per format (goalie included)
MIN_SQUAD_SIZE = {
    FORMAT_5V5: 5,
    FORMAT_7V7: 7,
}
MAX_SQUAD_SIZE = {
    FORMAT_5V5: 11,
    FORMAT_7V7: 15,
}

# Formations offered for each format, first entry is the default
FORMATIONS_BY_FORMAT = {
    FORMAT_5V5: ["2-2", "1-2-1"],
    FORMAT_7V7: ["2-2-2", "2-3-1"],
}

# Pairs mode: two field pairs, one substitute pair and a goalie
PAIRS_FORMAT = FORMAT_5V5
PAIRS_FORMATION = "2-2"
PAIRS_SQUAD_SIZE = 7
FIELD_PAIR_KEYS = ["leftPair", "rightPair"]
SUBSTITUTE_PAIR_KEY = "subPair"
PAIR_SLOTS = ["defender", "attacker"]

GOALIE_POSITION = "goalie"
SUBSTITUTE_POSITION_PREFIX = "substitute_"

# Reporting
FAIRNESS_THRESHOLD_SECONDS = 120  # +/- 2 minutes regarded as notable variance

# Match session
DEFAULT_MAX_HISTORY = 50

# Web server
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 7122
