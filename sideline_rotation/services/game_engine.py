"""
Game state engine: the action API of the rotation core.

Every public method takes the current :class:`GameState` plus the action's
parameters and returns a brand-new snapshot. Inputs are never modified, and
every validation error is raised before a new snapshot is built, so a failed
call leaves the caller holding its last-good state.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from ..errors import (
    CannotDeactivateFieldPlayer,
    InactiveUnsupported,
    InsufficientActivePlayers,
    InvalidConfiguration,
    InvalidGameState,
    InvalidPosition,
    InvalidQueueComposition,
    NothingToUndo,
    PlayerInactive,
    PlayerNotInSquad,
)
from ..models import (
    Formation,
    GameState,
    IndividualFormation,
    PairsFormation,
    PairSlot,
    Player,
    PlayerRole,
    PlayerStatus,
    TeamConfig,
)
from ..models.formation import split_pair_position
from ..utils import now_ts
from ..utils.constants import FIELD_PAIR_KEYS, GOALIE_POSITION, PAIR_SLOTS, SUBSTITUTE_PAIR_KEY
from .formation_catalog import PAIR_SLOT_ROLES, FormationCatalog
from .rotation_queue import RotationQueue
from .stint_tracker import close_stint, open_stint, reassign
from .substitution_manager import SubstitutionManager, compute_next_targets

SquadEntry = Union[str, Player, Mapping[str, Any]]
Lineup = Mapping[str, Any]


class GameStateEngine:
    """
    Facade over the formation catalog, rotation queue, stint tracker and
    substitution manager.

    The engine holds no match state of its own; one instance can serve any
    number of matches.

    Args:
        catalog: Formation catalog to use, defaults to the standard set
    """

    def __init__(self, catalog: Optional[FormationCatalog] = None) -> None:
        self.catalog = catalog or FormationCatalog()
        self.substitutions = SubstitutionManager(self.catalog)

    # ==================== Match setup ==================== #

    def create_game_state(
        self,
        team_config: TeamConfig,
        players: Sequence[SquadEntry],
        goalie_id: str,
        lineup: Optional[Lineup] = None,
        now: Optional[float] = None,
        inactive_ids: Iterable[str] = (),
        paused: bool = False,
    ) -> GameState:
        """
        Build the first snapshot of a match.

        Args:
            team_config: Validated team configuration
            players: Squad as ids, Player objects or {"id", "name"} dicts
            goalie_id: Starting goalie
            lineup: Individual mode: position key -> player id for every field
                and substitute slot. Pairs mode: pair key -> {"defender",
                "attacker"}. Omitted: assigned in squad order
            now: Kick-off timestamp, defaults to the current time
            inactive_ids: Substitutes who start the match inactive
            paused: Start with the match clock stopped

        Returns:
            Initial GameState, rotation queue ordered field positions first

        Raises:
            InvalidConfiguration: If the config, squad or lineup do not fit
            UnknownFormation: If the formation is not in the catalog
            InvalidPosition: If the lineup names an unknown position
            PlayerNotInSquad: If the goalie or an inactive id is not in the squad
            InactiveUnsupported: If inactive players are not allowed
            CannotDeactivateFieldPlayer: If an inactive id is not a substitute
        """
        now = self._now(now)
        team_config.validate()
        self.catalog.get_layout(team_config)

        names = self._normalize_squad(players)
        if len(names) != team_config.squad_size:
            raise InvalidConfiguration(
                f"Squad has {len(names)} players, configuration expects {team_config.squad_size}"
            )
        if goalie_id not in names:
            raise PlayerNotInSquad(f"Goalie {goalie_id!r} is not in the squad")

        outfield_ids = [pid for pid in names if pid != goalie_id]
        if team_config.is_pairs:
            formation: Formation = self._build_pairs_formation(team_config, goalie_id, outfield_ids, lineup)
        else:
            formation = self._build_individual_formation(team_config, goalie_id, outfield_ids, lineup)

        inactive = list(dict.fromkeys(inactive_ids))
        if inactive:
            formation = self._validate_initial_inactive(team_config, formation, inactive)

        built = self._initial_players(team_config, formation, names, set(inactive), now, paused)
        queue = RotationQueue.initialize(
            self._initial_queue_order(formation),
            inactive,
            expected_size=team_config.squad_size - 1,
        )
        targets = compute_next_targets(
            formation, built, queue, self.catalog.supports_next_next_indicator(team_config)
        )
        return GameState(
            team_config=team_config,
            formation=formation,
            all_players=built,
            rotation_queue=tuple(queue.to_array()),
            next_player_id_to_sub_out=targets.next_player_id,
            next_next_player_id_to_sub_out=targets.next_next_player_id,
            next_pair_to_sub_out=targets.next_pair_key,
            players_to_highlight=(),
            is_clock_paused=paused,
        )

    # ==================== Actions ==================== #

    def calculate_substitution(self, state: GameState, now: Optional[float] = None) -> GameState:
        """
        Rotate the next player (or pair) off and the next substitute on.

        Raises:
            InsufficientActivePlayers: If nobody can be rotated
            InvalidSubstitutionType: If the rotation type is not supported
        """
        result = self.substitutions.execute(state, self._now(now))
        return result.apply_to(state)

    def calculate_position_switch(
        self,
        state: GameState,
        position_a: str,
        position_b: str,
        now: Optional[float] = None,
    ) -> GameState:
        """
        Swap the players holding two field positions.

        In pairs mode positions are qualified, e.g. ``leftPair.attacker``.

        Raises:
            InvalidPosition: If either key is not a field position of the
                current formation, or both keys are the same
        """
        switchable = self.catalog.get_switchable_positions(state.team_config)
        for key in (position_a, position_b):
            if key not in switchable:
                raise InvalidPosition(f"{key!r} is not a field position in this formation")
        if position_a == position_b:
            raise InvalidPosition(f"Cannot switch {position_a!r} with itself")

        now = self._now(now)
        formation = state.formation
        player_a = formation.player_at(position_a)
        player_b = formation.player_at(position_b)

        if isinstance(formation, PairsFormation):
            new_formation: Formation = self._swap_pair_members(formation, position_a, position_b)
        else:
            new_formation = formation.with_assignments({position_a: player_b, position_b: player_a})

        updated = {
            player_a: self._place_on_field(state, player_a, position_b, now),
            player_b: self._place_on_field(state, player_b, position_a, now),
        }
        return self._successor(state, new_formation, updated, self._queue_for(state), (player_a, player_b))

    def calculate_goalie_switch(
        self,
        state: GameState,
        new_goalie_id: str,
        now: Optional[float] = None,
    ) -> GameState:
        """
        Put ``new_goalie_id`` in goal.

        The old goalie takes over the new goalie's formation slot and exact
        rotation queue position. Choosing the current goalie returns the
        state unchanged.

        Raises:
            PlayerNotInSquad: If the id is not in the squad
            PlayerInactive: If the player is currently inactive
        """
        incoming = state.player(new_goalie_id)
        old_goalie_id = state.goalie_id
        if new_goalie_id == old_goalie_id:
            return state
        if incoming.is_inactive:
            raise PlayerInactive(f"Player {new_goalie_id!r} is inactive and cannot go in goal")

        now = self._now(now)
        paused = state.is_clock_paused
        formation = state.formation

        if isinstance(formation, PairsFormation):
            pair_key = formation.pair_of(new_goalie_id)
            pair = formation.pairs[pair_key]
            slot = pair.slot_of(new_goalie_id)
            new_formation: Formation = formation.with_pairs(
                {pair_key: pair.with_member(slot, old_goalie_id)}, goalie=new_goalie_id
            )
            if pair_key == SUBSTITUTE_PAIR_KEY:
                status, role, position = PlayerStatus.SUBSTITUTE, PlayerRole.SUBSTITUTE, None
            else:
                status, role, position = PlayerStatus.ON_FIELD, PAIR_SLOT_ROLES[slot], pair_key
        else:
            position_key = formation.position_of(new_goalie_id)
            new_formation = formation.with_assignments({position_key: old_goalie_id}, goalie=new_goalie_id)
            if position_key in self.catalog.get_substitute_positions(state.team_config):
                status, role, position = PlayerStatus.SUBSTITUTE, PlayerRole.SUBSTITUTE, None
            else:
                status, role = PlayerStatus.ON_FIELD, self.catalog.get_position_role(position_key)
                position = position_key

        updated = {
            new_goalie_id: reassign(
                incoming, now, status=PlayerStatus.GOALIE, role=PlayerRole.GOALIE,
                position=GOALIE_POSITION, paused=paused,
            ),
            old_goalie_id: reassign(
                state.player(old_goalie_id), now, status=status, role=role,
                position=position, paused=paused,
            ),
        }
        queue = self._queue_for(state)
        queue.replace(new_goalie_id, old_goalie_id)
        return self._successor(state, new_formation, updated, queue, (new_goalie_id, old_goalie_id))

    def calculate_player_toggle_inactive(
        self,
        state: GameState,
        player_id: str,
        now: Optional[float] = None,
    ) -> GameState:
        """
        Deactivate an active substitute or reactivate an inactive one.

        Deactivated players drop to the bottom substitute slot and the
        inactive queue segment, and stop accumulating time. Reactivated
        players join the back of the active queue and take the first slot
        below the waiting substitutes.

        Raises:
            PlayerNotInSquad: If the id is not in the squad
            InactiveUnsupported: If the configuration has no inactive support
            CannotDeactivateFieldPlayer: If the player is on the field or in goal
            InsufficientActivePlayers: If the last active substitute of a
                multi-slot bench would be deactivated
        """
        player = state.player(player_id)
        formation = state.formation
        if not isinstance(formation, IndividualFormation) or not self.catalog.supports_inactive_players(
            state.team_config
        ):
            raise InactiveUnsupported(
                f"Inactive players are not supported for {state.team_config.formation_id} "
                f"with {state.team_config.squad_size} players"
            )
        if not player.is_substitute:
            raise CannotDeactivateFieldPlayer(f"Player {player_id!r} is not a substitute")

        now = self._now(now)
        slots = self.catalog.get_substitute_positions(state.team_config)
        occupants = [formation.positions[slot] for slot in slots]
        waiting = [pid for pid in occupants if pid != player_id and not state.all_players[pid].is_inactive]
        resting = [pid for pid in occupants if pid != player_id and state.all_players[pid].is_inactive]

        queue = self._queue_for(state)
        if player.is_inactive:
            queue.reactivate_player(player_id)
            changed = replace(player, is_inactive=False)
            if not state.is_clock_paused:
                changed = open_stint(changed, now)
            order = waiting + [player_id] + resting
        else:
            if len(slots) >= 2 and not waiting:
                raise InsufficientActivePlayers("At least one substitute has to stay active")
            queue.deactivate_player(player_id)
            changed = replace(close_stint(player, now), is_inactive=True)
            order = waiting + resting + [player_id]

        new_formation = formation.with_assignments(dict(zip(slots, order)))
        return self._successor(state, new_formation, {player_id: changed}, queue, (player_id,))

    def calculate_pair_position_swap(
        self,
        state: GameState,
        pair_key: str,
        now: Optional[float] = None,
    ) -> GameState:
        """
        Exchange defender and attacker within one field pair.

        Raises:
            InvalidPosition: If the formation is not pairs or ``pair_key`` is
                not a field pair
        """
        formation = state.formation
        if not isinstance(formation, PairsFormation) or pair_key not in FIELD_PAIR_KEYS:
            raise InvalidPosition(f"{pair_key!r} is not a field pair in this formation")

        now = self._now(now)
        swapped = formation.pairs[pair_key].swapped()
        new_formation = formation.with_pairs({pair_key: swapped})
        updated = {
            pid: reassign(
                state.player(pid), now, status=PlayerStatus.ON_FIELD,
                role=PAIR_SLOT_ROLES[slot], position=pair_key, paused=state.is_clock_paused,
            )
            for slot, pid in zip(PAIR_SLOTS, swapped.members())
        }
        return self._successor(state, new_formation, updated, self._queue_for(state), swapped.members())

    def calculate_undo(self, state: GameState, previous_state: Optional[GameState]) -> GameState:
        """
        Return ``previous_state`` unchanged.

        The engine keeps no history; the caller retains the prior snapshot
        before each action and hands it back here.

        Raises:
            NothingToUndo: If there is no previous state
        """
        if previous_state is None:
            raise NothingToUndo("No previous state to return to")
        return previous_state

    # ==================== Bench management ==================== #

    def calculate_substitute_swap(
        self,
        state: GameState,
        player_a: str,
        player_b: str,
        now: Optional[float] = None,
    ) -> GameState:
        """
        Exchange the slots of two active substitutes.

        Used to change who comes on next. Nobody's status changes, so no
        stints are touched.

        Raises:
            PlayerNotInSquad: If either id is unknown
            InvalidPosition: If either player is not a substitute, or the
                formation is pairs
            PlayerInactive: If either player is inactive
        """
        formation = state.formation
        if not isinstance(formation, IndividualFormation):
            raise InvalidPosition("Substitute slots can only be swapped in individual rotation")
        for pid in (player_a, player_b):
            player = state.player(pid)
            if not player.is_substitute:
                raise InvalidPosition(f"Player {pid!r} is not a substitute")
            if player.is_inactive:
                raise PlayerInactive(f"Player {pid!r} is inactive")
        if player_a == player_b:
            raise InvalidPosition(f"Cannot swap {player_a!r} with itself")

        slot_a = formation.position_of(player_a)
        slot_b = formation.position_of(player_b)
        new_formation = formation.with_assignments({slot_a: player_b, slot_b: player_a})
        return self._successor(state, new_formation, {}, self._queue_for(state), (player_a, player_b))

    def calculate_next_substitution_target(
        self,
        state: GameState,
        player_id: str,
        now: Optional[float] = None,
    ) -> GameState:
        """
        Make ``player_id`` (in pairs mode: their whole pair) next off.

        Raises:
            PlayerNotInSquad: If the id is unknown
            PlayerInactive: If the player is inactive
            InvalidPosition: If the player is not on the field
        """
        player = state.player(player_id)
        if player.is_inactive:
            raise PlayerInactive(f"Player {player_id!r} is inactive")
        if not player.on_field:
            raise InvalidPosition(f"Player {player_id!r} is not on the field")

        queue = self._queue_for(state)
        formation = state.formation
        if isinstance(formation, PairsFormation):
            members = formation.pairs[formation.pair_of(player_id)].members()
            for pid in sorted(members, key=queue.position_of, reverse=True):
                queue.move_to_front(pid)
        else:
            queue.move_to_front(player_id)
        return self._successor(state, formation, {}, queue, ())

    # ==================== Match clock ==================== #

    def calculate_pause(self, state: GameState, now: Optional[float] = None) -> GameState:
        """Close every running stint and mark the clock as paused."""
        if state.is_clock_paused:
            return state
        now = self._now(now)
        updated = {pid: close_stint(player, now) for pid, player in state.all_players.items()}
        return state.with_players(updated, is_clock_paused=True, players_to_highlight=())

    def calculate_resume(self, state: GameState, now: Optional[float] = None) -> GameState:
        """Open a stint for every active player and restart the clock."""
        if not state.is_clock_paused:
            return state
        now = self._now(now)
        updated = {
            pid: open_stint(player, now)
            for pid, player in state.all_players.items()
            if not player.is_inactive
        }
        return state.with_players(updated, is_clock_paused=False, players_to_highlight=())

    # ==================== State checks ==================== #

    def validate_game_state(self, state: GameState) -> GameState:
        """
        Check that a snapshot built outside the engine is consistent.

        Saved or submitted states go through here before they replace the
        current one, so later actions can rely on the snapshot invariants.

        Returns:
            The same state, for chaining

        Raises:
            InvalidConfiguration: If the team configuration is invalid
            UnknownFormation: If the formation is not in the catalog
            InvalidGameState: If formation and players disagree
            InvalidQueueComposition: If the queue is not the non-goalie squad
                with inactive players last
        """
        config = state.team_config.validate()
        formation = state.formation
        if formation.kind is not self.catalog.get_formation_kind(config):
            raise InvalidGameState(
                f"{config.substitution_type.value} rotation cannot use a {formation.kind.value} formation"
            )

        keys = self.catalog.get_field_positions(config) + self.catalog.get_substitute_positions(config)
        held = list(formation.pairs) if isinstance(formation, PairsFormation) else list(formation.positions)
        if sorted(held) != sorted(keys):
            raise InvalidGameState(f"Formation positions {held} do not match {config.formation_id}")

        occupants = formation.player_ids() + [formation.goalie]
        if len(set(occupants)) != len(occupants):
            raise InvalidGameState("A player holds more than one position")
        if set(occupants) != set(state.all_players):
            raise InvalidGameState("Formation occupants do not match the squad")

        placements = self._placements(config, formation)
        for pid, player in state.all_players.items():
            if player.id != pid:
                raise InvalidGameState(f"Player stored under {pid!r} has id {player.id!r}")
            if (player.current_status, player.current_role, player.current_position) != placements[pid]:
                raise InvalidGameState(f"Player {pid!r} does not match their formation slot")
            if player.is_inactive and not (
                player.is_substitute and self.catalog.supports_inactive_players(config)
            ):
                raise InvalidGameState(f"Player {pid!r} cannot be inactive")
            running = player.last_stint_start_time_epoch is not None
            if running and (player.is_inactive or state.is_clock_paused):
                raise InvalidGameState(f"Player {pid!r} has a running stint while stopped")

        if set(state.rotation_queue) != set(formation.player_ids()):
            raise InvalidQueueComposition("Rotation queue must hold every non-goalie player")
        queue = RotationQueue.from_state(state)
        if tuple(queue.to_array()) != tuple(state.rotation_queue):
            raise InvalidQueueComposition("Inactive players must follow the active ones in the queue")
        return state

    # ==================== Helpers ==================== #

    @staticmethod
    def _now(now: Optional[float]) -> float:
        return now_ts() if now is None else now

    @staticmethod
    def _queue_for(state: GameState) -> RotationQueue:
        return RotationQueue.from_state(state)

    def _successor(
        self,
        state: GameState,
        formation: Formation,
        updated: Dict[str, Player],
        queue: RotationQueue,
        highlight: Tuple[str, ...],
    ) -> GameState:
        players = {**state.all_players, **updated}
        targets = compute_next_targets(
            formation, players, queue, self.catalog.supports_next_next_indicator(state.team_config)
        )
        return replace(
            state,
            formation=formation,
            all_players=players,
            rotation_queue=tuple(queue.to_array()),
            next_player_id_to_sub_out=targets.next_player_id,
            next_next_player_id_to_sub_out=targets.next_next_player_id,
            next_pair_to_sub_out=targets.next_pair_key,
            players_to_highlight=tuple(highlight),
        )

    def _place_on_field(self, state: GameState, player_id: str, position_key: str, now: float) -> Player:
        """Move a field player to another field position."""
        pair_key, slot = split_pair_position(position_key)
        if slot:
            role = PAIR_SLOT_ROLES[slot]
            position = pair_key
        else:
            role = self.catalog.get_position_role(position_key)
            position = position_key
        return reassign(
            state.player(player_id), now, status=PlayerStatus.ON_FIELD,
            role=role, position=position, paused=state.is_clock_paused,
        )

    @staticmethod
    def _swap_pair_members(formation: PairsFormation, position_a: str, position_b: str) -> PairsFormation:
        pair_a, slot_a = split_pair_position(position_a)
        pair_b, slot_b = split_pair_position(position_b)
        player_a = formation.pairs[pair_a].player_in(slot_a)
        player_b = formation.pairs[pair_b].player_in(slot_b)
        if pair_a == pair_b:
            return formation.with_pairs({pair_a: formation.pairs[pair_a].swapped()})
        return formation.with_pairs({
            pair_a: formation.pairs[pair_a].with_member(slot_a, player_b),
            pair_b: formation.pairs[pair_b].with_member(slot_b, player_a),
        })

    @staticmethod
    def _normalize_squad(players: Sequence[SquadEntry]) -> Dict[str, str]:
        """Map player id to display name, preserving squad order."""
        names: Dict[str, str] = {}
        for entry in players:
            if isinstance(entry, Player):
                pid, name = entry.id, entry.name
            elif isinstance(entry, Mapping):
                if "id" not in entry:
                    raise InvalidConfiguration(f"Squad entry without an id: {dict(entry)}")
                pid, name = str(entry["id"]), str(entry.get("name", ""))
            else:
                pid, name = str(entry), ""
            if pid in names:
                raise InvalidConfiguration(f"Player {pid!r} appears twice in the squad")
            names[pid] = name
        return names

    def _build_individual_formation(
        self,
        team_config: TeamConfig,
        goalie_id: str,
        outfield_ids: List[str],
        lineup: Optional[Lineup],
    ) -> IndividualFormation:
        keys = self.catalog.get_field_positions(team_config) + self.catalog.get_substitute_positions(team_config)
        if lineup is None:
            return IndividualFormation(goalie=goalie_id, positions=dict(zip(keys, outfield_ids)))

        for key in lineup:
            if key not in keys:
                raise InvalidPosition(f"{key!r} is not a position in {team_config.formation_id}")
        missing = [key for key in keys if key not in lineup]
        if missing:
            raise InvalidConfiguration(f"Lineup leaves positions empty: {missing}")

        positions = {key: str(lineup[key]) for key in keys}
        self._check_lineup_ids(list(positions.values()), goalie_id, outfield_ids)
        return IndividualFormation(goalie=goalie_id, positions=positions)

    def _build_pairs_formation(
        self,
        team_config: TeamConfig,
        goalie_id: str,
        outfield_ids: List[str],
        lineup: Optional[Lineup],
    ) -> PairsFormation:
        keys = self.catalog.get_field_positions(team_config) + self.catalog.get_substitute_positions(team_config)
        if lineup is None:
            pairs = {
                key: PairSlot(defender=outfield_ids[2 * i], attacker=outfield_ids[2 * i + 1])
                for i, key in enumerate(keys)
            }
            return PairsFormation(goalie=goalie_id, pairs=pairs)

        for key in lineup:
            if key not in keys:
                raise InvalidPosition(f"{key!r} is not a pair in this formation")
        pairs = {}
        for key in keys:
            if key not in lineup:
                raise InvalidConfiguration(f"Lineup is missing pair {key!r}")
            value = lineup[key]
            if isinstance(value, PairSlot):
                pairs[key] = value
            else:
                try:
                    pairs[key] = PairSlot.from_dict(value)
                except (KeyError, TypeError) as e:
                    raise InvalidConfiguration(f"Pair {key!r} needs a defender and an attacker") from e

        ids = [pid for pair in pairs.values() for pid in pair.members()]
        self._check_lineup_ids(ids, goalie_id, outfield_ids)
        return PairsFormation(goalie=goalie_id, pairs=pairs)

    @staticmethod
    def _check_lineup_ids(ids: List[str], goalie_id: str, outfield_ids: List[str]) -> None:
        if goalie_id in ids:
            raise InvalidConfiguration(f"Goalie {goalie_id!r} cannot also hold a position")
        if len(set(ids)) != len(ids):
            raise InvalidConfiguration("A player is assigned to more than one position")
        unknown = set(ids) - set(outfield_ids)
        if unknown:
            raise PlayerNotInSquad(f"Lineup names players outside the squad: {sorted(unknown)}")
        if set(ids) != set(outfield_ids):
            raise InvalidConfiguration("Lineup must place every squad player exactly once")

    def _validate_initial_inactive(
        self,
        team_config: TeamConfig,
        formation: Formation,
        inactive: List[str],
    ) -> IndividualFormation:
        """Check starting inactive ids and move them to the bottom slots."""
        if not isinstance(formation, IndividualFormation) or not self.catalog.supports_inactive_players(team_config):
            raise InactiveUnsupported("This configuration does not allow inactive players")
        slots = self.catalog.get_substitute_positions(team_config)
        occupants = [formation.positions[slot] for slot in slots]
        squad_ids = set(formation.player_ids()) | {formation.goalie}
        for pid in inactive:
            if pid not in squad_ids:
                raise PlayerNotInSquad(f"Inactive player {pid!r} is not in the squad")
            if pid not in occupants:
                raise CannotDeactivateFieldPlayer(f"Player {pid!r} is not a substitute")
        waiting = [pid for pid in occupants if pid not in inactive]
        if len(slots) >= 2 and not waiting:
            raise InsufficientActivePlayers("At least one substitute has to stay active")
        resting = [pid for pid in occupants if pid in inactive]
        return formation.with_assignments(dict(zip(slots, waiting + resting)))

    def _placements(
        self,
        team_config: TeamConfig,
        formation: Formation,
    ) -> Dict[str, Tuple[PlayerStatus, PlayerRole, Optional[str]]]:
        """Status, role and position every occupant should have."""
        placements: Dict[str, Tuple[PlayerStatus, PlayerRole, Optional[str]]] = {
            formation.goalie: (PlayerStatus.GOALIE, PlayerRole.GOALIE, GOALIE_POSITION),
        }
        if isinstance(formation, PairsFormation):
            for pair_key, pair in formation.pairs.items():
                for slot in PAIR_SLOTS:
                    if pair_key == SUBSTITUTE_PAIR_KEY:
                        placements[pair.player_in(slot)] = (PlayerStatus.SUBSTITUTE, PlayerRole.SUBSTITUTE, None)
                    else:
                        placements[pair.player_in(slot)] = (PlayerStatus.ON_FIELD, PAIR_SLOT_ROLES[slot], pair_key)
        else:
            substitute_slots = set(self.catalog.get_substitute_positions(team_config))
            for key, pid in formation.positions.items():
                if key in substitute_slots:
                    placements[pid] = (PlayerStatus.SUBSTITUTE, PlayerRole.SUBSTITUTE, None)
                else:
                    placements[pid] = (PlayerStatus.ON_FIELD, self.catalog.get_position_role(key), key)
        return placements

    def _initial_players(
        self,
        team_config: TeamConfig,
        formation: Formation,
        names: Dict[str, str],
        inactive: set,
        now: float,
        paused: bool,
    ) -> Dict[str, Player]:
        placements = self._placements(team_config, formation)

        built: Dict[str, Player] = {}
        for pid, name in names.items():
            status, role, position = placements[pid]
            is_inactive = pid in inactive
            built[pid] = Player(
                id=pid,
                name=name,
                current_status=status,
                current_role=role,
                current_position=position,
                is_inactive=is_inactive,
                last_stint_start_time_epoch=None if (paused or is_inactive) else now,
            )
        return built

    @staticmethod
    def _initial_queue_order(formation: Formation) -> List[str]:
        """Field positions in catalog order, then the substitutes."""
        return formation.player_ids()
