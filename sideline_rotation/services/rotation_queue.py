"""
Rotation queue: the fairness ordering behind every substitution.

The queue is a working object built from a snapshot, changed in place while
one engine operation runs and written back with :meth:`RotationQueue.to_array`.
The snapshot itself only ever stores the resulting tuple.
"""
from __future__ import annotations

from typing import Callable, Iterable, List, Optional, Sequence

from ..errors import (
    InvalidQueueComposition,
    PlayerAlreadyInactive,
    PlayerNotInactive,
    PlayerNotInActiveQueue,
)
from ..models import GameState


class RotationQueue:
    """
    Ordered player ids split into an active and an inactive segment.

    The front of the active segment is the next player to come off. Order is
    the only fairness signal; nothing is ever sorted by playing time.
    """

    def __init__(self, active: Optional[Iterable[str]] = None, inactive: Optional[Iterable[str]] = None) -> None:
        self._active: List[str] = list(active or [])
        self._inactive: List[str] = list(inactive or [])

    @classmethod
    def initialize(
        cls,
        player_ids: Sequence[str],
        initial_inactive_ids: Iterable[str] = (),
        expected_size: Optional[int] = None,
    ) -> RotationQueue:
        """
        Build a queue from the full id list.

        Args:
            player_ids: Every non-goalie id, front of the rotation first
            initial_inactive_ids: Ids that start in the inactive segment
            expected_size: Number of ids the squad requires, if known

        Returns:
            New RotationQueue

        Raises:
            InvalidQueueComposition: If ids repeat, the count is wrong or an
                inactive id is not part of ``player_ids``
        """
        ids = list(player_ids)
        if len(set(ids)) != len(ids):
            raise InvalidQueueComposition(f"Duplicate ids in rotation queue: {ids}")
        if expected_size is not None and len(ids) != expected_size:
            raise InvalidQueueComposition(
                f"Rotation queue holds {len(ids)} players, squad needs {expected_size}"
            )
        inactive_ids = set(initial_inactive_ids)
        unknown = inactive_ids - set(ids)
        if unknown:
            raise InvalidQueueComposition(f"Inactive ids not in queue: {sorted(unknown)}")
        return cls(
            active=[pid for pid in ids if pid not in inactive_ids],
            inactive=[pid for pid in ids if pid in inactive_ids],
        )

    @classmethod
    def from_state(cls, state: GameState) -> RotationQueue:
        """
        Rebuild the working queue for a snapshot.

        Raises:
            InvalidQueueComposition: If the stored queue names players outside
                the squad, repeats one or has the wrong length
        """
        unknown = [pid for pid in state.rotation_queue if pid not in state.all_players]
        if unknown:
            raise InvalidQueueComposition(f"Rotation queue names players outside the squad: {unknown}")
        inactive_ids = [pid for pid in state.rotation_queue if state.all_players[pid].is_inactive]
        return cls.initialize(
            state.rotation_queue,
            inactive_ids,
            expected_size=state.team_config.squad_size - 1,
        )

    # ---------- Queries ---------- #

    def active(self) -> List[str]:
        return list(self._active)

    def inactive(self) -> List[str]:
        return list(self._inactive)

    def to_array(self) -> List[str]:
        """Active ids followed by inactive ids."""
        return self._active + self._inactive

    def __len__(self) -> int:
        return len(self._active) + len(self._inactive)

    def __contains__(self, player_id: object) -> bool:
        return player_id in self._active or player_id in self._inactive

    def is_active(self, player_id: str) -> bool:
        return player_id in self._active

    def position_of(self, player_id: str) -> int:
        """Index of ``player_id`` in :meth:`to_array`, -1 if absent."""
        ordered = self.to_array()
        return ordered.index(player_id) if player_id in ordered else -1

    def first_active(self, predicate: Callable[[str], bool], skip: int = 0) -> Optional[str]:
        """The ``skip``-th active id (0-based) that satisfies ``predicate``."""
        for player_id in self._active:
            if predicate(player_id):
                if skip == 0:
                    return player_id
                skip -= 1
        return None

    # ---------- Mutations ---------- #

    def rotate_player(self, outgoing_id: str) -> None:
        """
        Send ``outgoing_id`` to the back of the active segment.

        Raises:
            PlayerNotInActiveQueue: If the id is not in the active segment
        """
        self._require_active(outgoing_id)
        self._active.remove(outgoing_id)
        self._active.append(outgoing_id)

    def deactivate_player(self, player_id: str) -> None:
        """
        Move ``player_id`` to the end of the inactive segment.

        Raises:
            PlayerAlreadyInactive: If the id is already inactive
            PlayerNotInActiveQueue: If the id is not queued at all
        """
        if player_id in self._inactive:
            raise PlayerAlreadyInactive(f"Player {player_id!r} is already inactive")
        self._require_active(player_id)
        self._active.remove(player_id)
        self._inactive.append(player_id)

    def reactivate_player(self, player_id: str) -> None:
        """
        Move ``player_id`` from the inactive segment to the back of the active one.

        Raises:
            PlayerNotInactive: If the id is not in the inactive segment
        """
        if player_id not in self._inactive:
            raise PlayerNotInactive(f"Player {player_id!r} is not inactive")
        self._inactive.remove(player_id)
        self._active.append(player_id)

    def move_to_front(self, player_id: str) -> None:
        """
        Put an active player at the head of the rotation.

        Raises:
            PlayerNotInActiveQueue: If the id is not in the active segment
        """
        self._require_active(player_id)
        self._active.remove(player_id)
        self._active.insert(0, player_id)

    def replace(self, old_id: str, new_id: str) -> None:
        """
        Put ``new_id`` exactly where ``old_id`` was.

        Raises:
            PlayerNotInActiveQueue: If ``old_id`` is not queued
            InvalidQueueComposition: If ``new_id`` is already queued
        """
        if new_id in self:
            raise InvalidQueueComposition(f"Player {new_id!r} is already in the rotation queue")
        for segment in (self._active, self._inactive):
            if old_id in segment:
                segment[segment.index(old_id)] = new_id
                return
        raise PlayerNotInActiveQueue(f"Player {old_id!r} is not in the rotation queue")

    def _require_active(self, player_id: str) -> None:
        if player_id not in self._active:
            raise PlayerNotInActiveQueue(f"Player {player_id!r} is not in the active rotation")
