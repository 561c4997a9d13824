"""Per-match team configuration."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

from ..errors import InvalidConfiguration, InvalidSubstitutionType
from ..utils.constants import (
    FIELD_PLAYERS_BY_FORMAT,
    FORMATIONS_BY_FORMAT,
    MAX_SQUAD_SIZE,
    MIN_SQUAD_SIZE,
    PAIRS_FORMAT,
    PAIRS_FORMATION,
    PAIRS_SQUAD_SIZE,
)


class SubstitutionType(Enum):
    """How players rotate on and off the field."""
    INDIVIDUAL = "individual"
    PAIRS = "pairs"

    @classmethod
    def parse(cls, value: Any) -> SubstitutionType:
        """Parse a caller supplied value, raising InvalidSubstitutionType."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidSubstitutionType(f"Unknown substitution type: {value!r}") from None


class PairRoleRotation(Enum):
    """Whether pair members keep or swap defender/attacker between stints."""
    KEEP = "keep"
    SWAP = "swap"


@dataclass(frozen=True)
class TeamConfig:
    """
    Team configuration handed to the engine before kick-off.

    Attributes:
        format: Match format such as "5v5" or "7v7"
        squad_size: Number of selected players including the goalie
        formation_id: Formation key from the formation catalog
        substitution_type: Individual or pairs rotation
        pair_role_rotation: Pairs only, keep or swap roles on return
    """
    format: str
    squad_size: int
    formation_id: str
    substitution_type: SubstitutionType = SubstitutionType.INDIVIDUAL
    pair_role_rotation: PairRoleRotation = PairRoleRotation.KEEP

    @property
    def is_pairs(self) -> bool:
        return self.substitution_type is SubstitutionType.PAIRS

    @property
    def field_player_count(self) -> int:
        """Outfield players on the pitch at once."""
        return FIELD_PLAYERS_BY_FORMAT[self.format]

    def validate(self) -> TeamConfig:
        """
        Check the configuration invariants.

        Returns:
            The same configuration, for chaining

        Raises:
            InvalidConfiguration: If format, squad size, formation or
                substitution type do not fit together
        """
        if self.format not in FIELD_PLAYERS_BY_FORMAT:
            raise InvalidConfiguration(f"Unsupported format: {self.format!r}")

        minimum = MIN_SQUAD_SIZE[self.format]
        maximum = MAX_SQUAD_SIZE[self.format]
        if not minimum <= self.squad_size <= maximum:
            raise InvalidConfiguration(
                f"Squad size {self.squad_size} outside {minimum}-{maximum} for {self.format}"
            )

        if self.formation_id not in FORMATIONS_BY_FORMAT[self.format]:
            raise InvalidConfiguration(
                f"Formation {self.formation_id!r} is not available for {self.format}"
            )

        if self.is_pairs:
            if self.format != PAIRS_FORMAT or self.formation_id != PAIRS_FORMATION:
                raise InvalidConfiguration(
                    f"Pairs rotation needs the {PAIRS_FORMAT} {PAIRS_FORMATION} formation"
                )
            if self.squad_size != PAIRS_SQUAD_SIZE:
                raise InvalidConfiguration(
                    f"Pairs rotation needs exactly {PAIRS_SQUAD_SIZE} players, got {self.squad_size}"
                )
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "format": self.format,
            "squad_size": self.squad_size,
            "formation_id": self.formation_id,
            "substitution_type": self.substitution_type.value,
            "pair_role_rotation": self.pair_role_rotation.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> TeamConfig:
        """
        Create a configuration from caller supplied JSON.

        The result is not validated; call :meth:`validate` before use.

        Raises:
            InvalidConfiguration: If required keys are missing or malformed
            InvalidSubstitutionType: If the substitution type is unknown
        """
        try:
            squad_size = int(data["squad_size"])
            team_format = str(data["format"])
            formation_id = str(data["formation_id"])
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidConfiguration(f"Malformed team configuration: {e}") from e

        try:
            pair_role_rotation = PairRoleRotation(data.get("pair_role_rotation", "keep"))
        except ValueError:
            raise InvalidConfiguration(
                f"Unknown pair role rotation: {data.get('pair_role_rotation')!r}"
            ) from None

        return cls(
            format=team_format,
            squad_size=squad_size,
            formation_id=formation_id,
            substitution_type=SubstitutionType.parse(data.get("substitution_type", "individual")),
            pair_role_rotation=pair_role_rotation,
        )
