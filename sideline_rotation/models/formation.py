"""Formation instances: who stands where in the current game state."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Tuple, Union

from ..utils.constants import GOALIE_POSITION, PAIR_SLOTS


class FormationKind(Enum):
    """The two formation topologies the engine understands."""
    INDIVIDUAL = "individual"
    PAIRS = "pairs"


def qualify_pair_position(pair_key: str, slot: str) -> str:
    """Build a pair position key such as ``leftPair.defender``."""
    return f"{pair_key}.{slot}"


def split_pair_position(position_key: str) -> Tuple[str, Optional[str]]:
    """Split ``leftPair.defender`` into ``("leftPair", "defender")``."""
    pair_key, _, slot = position_key.partition(".")
    return pair_key, (slot or None)


@dataclass(frozen=True)
class PairSlot:
    """A defender/attacker unit in pairs mode."""
    defender: str
    attacker: str

    def members(self) -> Tuple[str, str]:
        return (self.defender, self.attacker)

    def slot_of(self, player_id: str) -> Optional[str]:
        """Return "defender", "attacker" or None if not in this pair."""
        if self.defender == player_id:
            return "defender"
        if self.attacker == player_id:
            return "attacker"
        return None

    def player_in(self, slot: str) -> str:
        if slot not in PAIR_SLOTS:
            raise KeyError(slot)
        return getattr(self, slot)

    def swapped(self) -> PairSlot:
        """Same pair with defender and attacker exchanged."""
        return PairSlot(defender=self.attacker, attacker=self.defender)

    def with_member(self, slot: str, player_id: str) -> PairSlot:
        if slot == "defender":
            return PairSlot(defender=player_id, attacker=self.attacker)
        if slot == "attacker":
            return PairSlot(defender=self.defender, attacker=player_id)
        raise KeyError(slot)

    def to_dict(self) -> Dict[str, str]:
        return {"defender": self.defender, "attacker": self.attacker}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> PairSlot:
        return cls(defender=str(data["defender"]), attacker=str(data["attacker"]))


@dataclass(frozen=True)
class IndividualFormation:
    """
    Position key to player id mapping for individual rotation.

    ``positions`` holds the field positions followed by the substitute
    slots, in catalog order. The goalie is kept separately.
    """
    goalie: str
    positions: Dict[str, str] = field(default_factory=dict)

    kind: ClassVar[FormationKind] = FormationKind.INDIVIDUAL

    def player_at(self, position_key: str) -> Optional[str]:
        if position_key == GOALIE_POSITION:
            return self.goalie
        return self.positions.get(position_key)

    def position_of(self, player_id: str) -> Optional[str]:
        """Position key held by ``player_id``, including "goalie"."""
        if player_id == self.goalie:
            return GOALIE_POSITION
        for key, occupant in self.positions.items():
            if occupant == player_id:
                return key
        return None

    def player_ids(self) -> List[str]:
        """Every non-goalie player id in position order."""
        return list(self.positions.values())

    def with_assignments(self, assignments: Dict[str, str], goalie: Optional[str] = None) -> IndividualFormation:
        """Return a copy with some positions (and optionally the goalie) reassigned."""
        positions = dict(self.positions)
        for key, player_id in assignments.items():
            if key not in positions:
                raise KeyError(key)
            positions[key] = player_id
        return IndividualFormation(goalie=goalie if goalie is not None else self.goalie, positions=positions)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "goalie": self.goalie,
            "positions": dict(self.positions),
        }


@dataclass(frozen=True)
class PairsFormation:
    """
    Pair key to :class:`PairSlot` mapping for pairs rotation.

    Individual members are addressed with qualified keys such as
    ``rightPair.attacker``.
    """
    goalie: str
    pairs: Dict[str, PairSlot] = field(default_factory=dict)

    kind: ClassVar[FormationKind] = FormationKind.PAIRS

    def pair_of(self, player_id: str) -> Optional[str]:
        for pair_key, pair in self.pairs.items():
            if pair.slot_of(player_id):
                return pair_key
        return None

    def player_at(self, position_key: str) -> Optional[str]:
        if position_key == GOALIE_POSITION:
            return self.goalie
        pair_key, slot = split_pair_position(position_key)
        pair = self.pairs.get(pair_key)
        if pair is None or slot not in PAIR_SLOTS:
            return None
        return pair.player_in(slot)

    def position_of(self, player_id: str) -> Optional[str]:
        """Qualified position of ``player_id``, including "goalie"."""
        if player_id == self.goalie:
            return GOALIE_POSITION
        for pair_key, pair in self.pairs.items():
            slot = pair.slot_of(player_id)
            if slot:
                return qualify_pair_position(pair_key, slot)
        return None

    def player_ids(self) -> List[str]:
        ids: List[str] = []
        for pair in self.pairs.values():
            ids.extend(pair.members())
        return ids

    def with_pairs(self, updates: Dict[str, PairSlot], goalie: Optional[str] = None) -> PairsFormation:
        """Return a copy with some pairs (and optionally the goalie) replaced."""
        pairs = dict(self.pairs)
        for pair_key, pair in updates.items():
            if pair_key not in pairs:
                raise KeyError(pair_key)
            pairs[pair_key] = pair
        return PairsFormation(goalie=goalie if goalie is not None else self.goalie, pairs=pairs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "goalie": self.goalie,
            "pairs": {key: pair.to_dict() for key, pair in self.pairs.items()},
        }


Formation = Union[IndividualFormation, PairsFormation]


def formation_from_dict(data: Dict[str, Any]) -> Formation:
    """
    Rebuild a formation from its ``to_dict`` form.

    Raises:
        ValueError: If the kind is unknown
    """
    kind = FormationKind(data.get("kind", FormationKind.INDIVIDUAL.value))
    if kind is FormationKind.PAIRS:
        return PairsFormation(
            goalie=str(data["goalie"]),
            pairs={key: PairSlot.from_dict(pair) for key, pair in data.get("pairs", {}).items()},
        )
    return IndividualFormation(
        goalie=str(data["goalie"]),
        positions={key: str(player_id) for key, player_id in data.get("positions", {}).items()},
    )
