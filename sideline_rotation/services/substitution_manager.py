"""
Substitution handling for individual and pairs rotation.

Each handler takes the current snapshot and returns a
:class:`SubstitutionResult` describing the new formation, the players whose
status changed and the rotated queue. Nothing here mutates the input state.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Protocol, Tuple

from ..errors import InsufficientActivePlayers, InvalidSubstitutionType
from ..models import (
    Formation,
    FormationKind,
    GameState,
    IndividualFormation,
    PairRoleRotation,
    PairsFormation,
    Player,
    PlayerRole,
    PlayerStatus,
    SubstitutionType,
)
from ..utils.constants import PAIR_SLOTS, SUBSTITUTE_PAIR_KEY
from .formation_catalog import PAIR_SLOT_ROLES, FormationCatalog
from .rotation_queue import RotationQueue
from .stint_tracker import reassign


@dataclass(frozen=True)
class NextTargets:
    """Who is due off after the current change."""
    next_player_id: Optional[str] = None
    next_next_player_id: Optional[str] = None
    next_pair_key: Optional[str] = None


def compute_next_targets(
    formation: Formation,
    players: Mapping[str, Player],
    queue: RotationQueue,
    supports_next_next: bool,
) -> NextTargets:
    """
    Derive the next-off indicators from the queue head.

    The next player is the first active queue entry currently on the field;
    the one after is only tracked when the formation has two or more
    substitute slots.
    """
    def on_field(player_id: str) -> bool:
        return players[player_id].current_status is PlayerStatus.ON_FIELD

    next_id = queue.first_active(on_field)
    if isinstance(formation, PairsFormation):
        return NextTargets(
            next_player_id=next_id,
            next_pair_key=formation.pair_of(next_id) if next_id else None,
        )
    next_next_id = queue.first_active(on_field, skip=1) if supports_next_next else None
    return NextTargets(next_player_id=next_id, next_next_player_id=next_next_id)


@dataclass(frozen=True)
class SubstitutionResult:
    """Everything that changes in one substitution."""
    formation: Formation
    players: Dict[str, Player]
    rotation_queue: Tuple[str, ...]
    next_targets: NextTargets
    players_to_highlight: Tuple[str, ...] = field(default_factory=tuple)

    def apply_to(self, state: GameState) -> GameState:
        """Build the successor snapshot of ``state``."""
        return state.with_players(
            self.players,
            formation=self.formation,
            rotation_queue=self.rotation_queue,
            next_player_id_to_sub_out=self.next_targets.next_player_id,
            next_next_player_id_to_sub_out=self.next_targets.next_next_player_id,
            next_pair_to_sub_out=self.next_targets.next_pair_key,
            players_to_highlight=self.players_to_highlight,
        )


class SubstitutionHandler(Protocol):
    """Interface every substitution topology implements."""

    kind: FormationKind

    def execute(self, state: GameState, now: float) -> SubstitutionResult:
        ...


class IndividualSubstitution:
    """
    Carousel rotation through one or more free-floating substitute slots.

    The front-of-queue field player comes off, ``substitute_1`` takes their
    position, the other active substitutes move up one slot and the outgoing
    player fills the last active slot. Inactive substitutes keep the bottom
    slots untouched.
    """

    kind = FormationKind.INDIVIDUAL

    def __init__(self, catalog: FormationCatalog) -> None:
        self.catalog = catalog

    def execute(self, state: GameState, now: float) -> SubstitutionResult:
        formation = state.formation
        if not isinstance(formation, IndividualFormation):
            raise InvalidSubstitutionType("Individual rotation needs an individual formation")
        players = state.all_players
        config = state.team_config

        substitute_slots = self.catalog.get_substitute_positions(config)
        if not substitute_slots:
            raise InsufficientActivePlayers("No substitute slots in this squad")

        active_slots = [
            slot for slot in substitute_slots
            if not players[formation.positions[slot]].is_inactive
        ]
        if not active_slots:
            raise InsufficientActivePlayers("No active substitute available to come on")

        queue = RotationQueue.from_state(state)
        outgoing_id = queue.first_active(lambda pid: players[pid].on_field)
        if outgoing_id is None:
            raise InsufficientActivePlayers("No active field player in the rotation queue")

        waiting = [formation.positions[slot] for slot in active_slots]
        incoming_id = waiting[0]
        field_key = formation.position_of(outgoing_id)

        assignments = {field_key: incoming_id}
        assignments.update(zip(active_slots, waiting[1:] + [outgoing_id]))
        new_formation = formation.with_assignments(assignments)

        paused = state.is_clock_paused
        updated = {
            outgoing_id: reassign(
                players[outgoing_id], now,
                status=PlayerStatus.SUBSTITUTE, role=PlayerRole.SUBSTITUTE,
                position=None, paused=paused,
            ),
            incoming_id: reassign(
                players[incoming_id], now,
                status=PlayerStatus.ON_FIELD, role=self.catalog.get_position_role(field_key),
                position=field_key, paused=paused,
            ),
        }
        queue.rotate_player(outgoing_id)

        merged = {**players, **updated}
        targets = compute_next_targets(
            new_formation, merged, queue, self.catalog.supports_next_next_indicator(config)
        )
        return SubstitutionResult(
            formation=new_formation,
            players=updated,
            rotation_queue=tuple(queue.to_array()),
            next_targets=targets,
            players_to_highlight=(outgoing_id, incoming_id),
        )


class PairsSubstitution:
    """
    Whole-pair rotation: the field pair due off swaps with the substitute pair.

    With ``PairRoleRotation.SWAP`` the incoming pair comes on with defender
    and attacker exchanged relative to how it went off.
    """

    kind = FormationKind.PAIRS

    def __init__(self, catalog: FormationCatalog) -> None:
        self.catalog = catalog

    def execute(self, state: GameState, now: float) -> SubstitutionResult:
        formation = state.formation
        if not isinstance(formation, PairsFormation):
            raise InvalidSubstitutionType("Pairs rotation needs a pairs formation")
        players = state.all_players

        queue = RotationQueue.from_state(state)
        head_id = queue.first_active(lambda pid: players[pid].on_field)
        if head_id is None:
            raise InsufficientActivePlayers("No active field pair in the rotation queue")

        outgoing_key = formation.pair_of(head_id)
        outgoing_pair = formation.pairs[outgoing_key]
        substitute_pair = formation.pairs[SUBSTITUTE_PAIR_KEY]
        if state.team_config.pair_role_rotation is PairRoleRotation.SWAP:
            incoming_pair = substitute_pair.swapped()
        else:
            incoming_pair = substitute_pair

        new_formation = formation.with_pairs({
            outgoing_key: incoming_pair,
            SUBSTITUTE_PAIR_KEY: outgoing_pair,
        })

        paused = state.is_clock_paused
        updated: Dict[str, Player] = {}
        for slot in PAIR_SLOTS:
            incoming_id = incoming_pair.player_in(slot)
            updated[incoming_id] = reassign(
                players[incoming_id], now,
                status=PlayerStatus.ON_FIELD, role=PAIR_SLOT_ROLES[slot],
                position=outgoing_key, paused=paused,
            )
        for outgoing_id in outgoing_pair.members():
            updated[outgoing_id] = reassign(
                players[outgoing_id], now,
                status=PlayerStatus.SUBSTITUTE, role=PlayerRole.SUBSTITUTE,
                position=None, paused=paused,
            )

        for outgoing_id in sorted(outgoing_pair.members(), key=queue.position_of):
            queue.rotate_player(outgoing_id)

        merged = {**players, **updated}
        targets = compute_next_targets(new_formation, merged, queue, supports_next_next=False)
        return SubstitutionResult(
            formation=new_formation,
            players=updated,
            rotation_queue=tuple(queue.to_array()),
            next_targets=targets,
            players_to_highlight=outgoing_pair.members() + incoming_pair.members(),
        )


class SubstitutionManager:
    """
    Dispatches a substitution to the handler for the team's topology.

    Args:
        catalog: Formation catalog shared with the engine
    """

    def __init__(self, catalog: Optional[FormationCatalog] = None) -> None:
        self.catalog = catalog or FormationCatalog()
        self._handlers: Dict[SubstitutionType, SubstitutionHandler] = {
            SubstitutionType.INDIVIDUAL: IndividualSubstitution(self.catalog),
            SubstitutionType.PAIRS: PairsSubstitution(self.catalog),
        }

    def execute(self, state: GameState, now: float) -> SubstitutionResult:
        """
        Compute one substitution.

        Args:
            state: Current snapshot
            now: Current timestamp in epoch seconds

        Returns:
            SubstitutionResult for the caller to apply

        Raises:
            InvalidSubstitutionType: If the type is unknown or does not match
                the formation shape
            InsufficientActivePlayers: If nobody can be rotated
        """
        substitution_type = state.team_config.substitution_type
        handler = self._handlers.get(substitution_type)
        if handler is None:
            raise InvalidSubstitutionType(f"Unknown substitution type: {substitution_type!r}")
        if handler.kind is not state.formation.kind:
            raise InvalidSubstitutionType(
                f"{substitution_type.value} rotation cannot run on a {state.formation.kind.value} formation"
            )
        return handler.execute(state, now)
