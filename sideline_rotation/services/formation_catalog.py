"""
Static formation definitions for the Sideline Rotation engine.

The catalog maps a team configuration to its ordered field positions,
substitute slots and the role each position implies. It is a pure lookup
and never changes after construction.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from ..errors import InvalidPosition, UnknownFormation
from ..models import FormationKind, PlayerRole, TeamConfig
from ..models.formation import qualify_pair_position, split_pair_position
from ..utils.constants import (
    FIELD_PAIR_KEYS,
    FIELD_PLAYERS_BY_FORMAT,
    FORMAT_5V5,
    FORMAT_7V7,
    FORMATIONS_BY_FORMAT,
    GOALIE_POSITION,
    MAX_SQUAD_SIZE,
    MIN_SQUAD_SIZE,
    PAIR_SLOTS,
    PAIRS_FORMAT,
    PAIRS_FORMATION,
    PAIRS_SQUAD_SIZE,
    SUBSTITUTE_PAIR_KEY,
    SUBSTITUTE_POSITION_PREFIX,
)

D = PlayerRole.DEFENDER
M = PlayerRole.MIDFIELDER
A = PlayerRole.ATTACKER


@dataclass(frozen=True)
class FormationLayout:
    """Field positions of one formation, in display order."""
    format: str
    formation_id: str
    field_positions: Tuple[Tuple[str, PlayerRole], ...]

    @property
    def position_keys(self) -> List[str]:
        return [key for key, _ in self.field_positions]


STANDARD_LAYOUTS: Tuple[FormationLayout, ...] = (
    FormationLayout(FORMAT_5V5, "2-2", (
        ("leftDefender", D), ("rightDefender", D),
        ("leftAttacker", A), ("rightAttacker", A),
    )),
    FormationLayout(FORMAT_5V5, "1-2-1", (
        ("defender", D), ("left", M), ("right", M), ("attacker", A),
    )),
    FormationLayout(FORMAT_7V7, "2-2-2", (
        ("leftDefender", D), ("rightDefender", D),
        ("leftMidfielder", M), ("rightMidfielder", M),
        ("leftAttacker", A), ("rightAttacker", A),
    )),
    FormationLayout(FORMAT_7V7, "2-3-1", (
        ("leftDefender", D), ("rightDefender", D),
        ("leftMidfielder", M), ("centerMidfielder", M), ("rightMidfielder", M),
        ("attacker", A),
    )),
)

PAIR_SLOT_ROLES = {"defender": D, "attacker": A}


def substitute_slot_key(index: int) -> str:
    """Key of the 1-based substitute slot ``index``."""
    return f"{SUBSTITUTE_POSITION_PREFIX}{index}"


class FormationCatalog:
    """
    Lookup service for formation layouts.

    Args:
        layouts: Layouts to register, defaults to the standard 5v5/7v7 set
    """

    def __init__(self, layouts: Optional[Iterable[FormationLayout]] = None) -> None:
        self._layouts: Dict[Tuple[str, str], FormationLayout] = {}
        self._roles: Dict[str, PlayerRole] = {}
        for layout in (layouts if layouts is not None else STANDARD_LAYOUTS):
            self._layouts[(layout.format, layout.formation_id)] = layout
            for key, role in layout.field_positions:
                self._roles.setdefault(key, role)

    # ---------- Layout lookup ---------- #

    def get_layout(self, team_config: TeamConfig) -> FormationLayout:
        """
        Layout registered for the configuration.

        Raises:
            UnknownFormation: If the formation is not registered for the
                format, or the squad size does not fit it
        """
        layout = self._layouts.get((team_config.format, team_config.formation_id))
        if layout is None:
            raise UnknownFormation(
                f"Formation {team_config.formation_id!r} is not registered for {team_config.format!r}"
            )
        minimum, maximum = self.squad_size_bounds(team_config.format)
        if not minimum <= team_config.squad_size <= maximum:
            raise UnknownFormation(
                f"Formation {team_config.formation_id!r} does not support a squad of {team_config.squad_size}"
            )
        if team_config.is_pairs and (
            team_config.format != PAIRS_FORMAT
            or team_config.formation_id != PAIRS_FORMATION
            or team_config.squad_size != PAIRS_SQUAD_SIZE
        ):
            raise UnknownFormation(
                f"No pairs layout for {team_config.format} {team_config.formation_id} "
                f"with {team_config.squad_size} players"
            )
        return layout

    def get_formation_kind(self, team_config: TeamConfig) -> FormationKind:
        self.get_layout(team_config)
        return FormationKind.PAIRS if team_config.is_pairs else FormationKind.INDIVIDUAL

    def get_field_positions(self, team_config: TeamConfig) -> List[str]:
        """
        Ordered field position keys.

        In pairs mode these are the pair keys of the two field pairs.
        """
        layout = self.get_layout(team_config)
        if team_config.is_pairs:
            return list(FIELD_PAIR_KEYS)
        return layout.position_keys

    def get_substitute_positions(self, team_config: TeamConfig) -> List[str]:
        """Ordered substitute slot keys; ``substitute_1`` is next on."""
        layout = self.get_layout(team_config)
        if team_config.is_pairs:
            return [SUBSTITUTE_PAIR_KEY]
        count = team_config.squad_size - len(layout.field_positions) - 1
        return [substitute_slot_key(i) for i in range(1, count + 1)]

    def get_switchable_positions(self, team_config: TeamConfig) -> List[str]:
        """Field position keys addressable by a manual position switch."""
        if team_config.is_pairs:
            return [
                qualify_pair_position(pair_key, slot)
                for pair_key in self.get_field_positions(team_config)
                for slot in PAIR_SLOTS
            ]
        return self.get_field_positions(team_config)

    # ---------- Roles ---------- #

    def get_position_role(self, position_key: str, slot: Optional[str] = None) -> PlayerRole:
        """
        Role implied by a position key.

        Args:
            position_key: Field, goalie, substitute or pair key. Pair members
                can be given qualified ("leftPair.defender") or via ``slot``
            slot: "defender" or "attacker" for unqualified pair keys

        Raises:
            InvalidPosition: If the key is unknown or a pair slot is missing
        """
        if position_key == GOALIE_POSITION:
            return PlayerRole.GOALIE
        if position_key.startswith(SUBSTITUTE_POSITION_PREFIX) or position_key == SUBSTITUTE_PAIR_KEY:
            return PlayerRole.SUBSTITUTE

        pair_key, qualified_slot = split_pair_position(position_key)
        if pair_key in FIELD_PAIR_KEYS:
            pair_slot = qualified_slot or slot
            if pair_slot not in PAIR_SLOT_ROLES:
                raise InvalidPosition(f"Pair position {position_key!r} needs a defender/attacker slot")
            return PAIR_SLOT_ROLES[pair_slot]
        if pair_key == SUBSTITUTE_PAIR_KEY:
            return PlayerRole.SUBSTITUTE

        try:
            return self._roles[position_key]
        except KeyError:
            raise InvalidPosition(f"Unknown position {position_key!r}") from None

    # ---------- Capabilities ---------- #

    def supports_inactive_players(self, team_config: TeamConfig) -> bool:
        """Individual rotation with at least one substitute slot."""
        if team_config.is_pairs:
            return False
        return len(self.get_substitute_positions(team_config)) >= 1

    def supports_next_next_indicator(self, team_config: TeamConfig) -> bool:
        if team_config.is_pairs:
            return False
        return len(self.get_substitute_positions(team_config)) >= 2

    def formations_for_format(self, team_format: str) -> List[str]:
        return [fid for (fmt, fid) in self._layouts if fmt == team_format]

    @staticmethod
    def squad_size_bounds(team_format: str) -> Tuple[int, int]:
        """
        Minimum and maximum squad size for a format.

        Raises:
            UnknownFormation: If the format is not supported
        """
        if team_format not in FIELD_PLAYERS_BY_FORMAT:
            raise UnknownFormation(f"Unsupported format: {team_format!r}")
        return MIN_SQUAD_SIZE[team_format], MAX_SQUAD_SIZE[team_format]

    @staticmethod
    def supported_formats() -> List[str]:
        return list(FORMATIONS_BY_FORMAT)
