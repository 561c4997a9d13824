"""
Stint-based playing time accounting.

A stint is an uninterrupted spell in one status/role. Closing a stint adds its
length to the matching accumulators; opening one records when it began. All
functions are pure and return new Player instances.
"""
from dataclasses import replace
from typing import Optional

from ..models import Player, PlayerRole, PlayerStats, PlayerStatus
from ..utils import whole_seconds


def stint_duration(now_epoch_seconds: float, start_epoch_seconds: Optional[float]) -> int:
    """
    Whole seconds between the stint start and ``now``.

    A missing start counts as zero and the result is never negative.
    """
    return whole_seconds(now_epoch_seconds, start_epoch_seconds)


def close_stint(player: Player, now_epoch_seconds: float) -> Player:
    """
    End the running stint and bank its time.

    The duration goes to the accumulator for ``current_role`` and, unless the
    player was a substitute, to ``time_on_field_seconds`` as well.

    Args:
        player: Player whose stint ends
        now_epoch_seconds: Current timestamp in epoch seconds

    Returns:
        Player with updated stats and no running stint
    """
    seconds = stint_duration(now_epoch_seconds, player.last_stint_start_time_epoch)
    return replace(
        player,
        stats=player.stats.add_stint(player.current_role, seconds),
        last_stint_start_time_epoch=None,
    )


def open_stint(player: Player, now_epoch_seconds: float) -> Player:
    """Start a new stint at ``now_epoch_seconds``."""
    return replace(player, last_stint_start_time_epoch=now_epoch_seconds)


def reassign(
    player: Player,
    now_epoch_seconds: float,
    *,
    status: PlayerStatus,
    role: PlayerRole,
    position: Optional[str],
    paused: bool = False,
) -> Player:
    """
    Close the current stint, move the player and open the next stint.

    Args:
        player: Player changing status or role
        now_epoch_seconds: Current timestamp in epoch seconds
        status: New status
        role: New role
        position: New position key, None for substitutes
        paused: Leave the new stint unopened while the match clock is paused

    Returns:
        Updated Player
    """
    moved = replace(
        close_stint(player, now_epoch_seconds),
        current_status=status,
        current_role=role,
        current_position=position,
    )
    if paused or moved.is_inactive:
        return moved
    return open_stint(moved, now_epoch_seconds)


def live_stats(player: Player, now_epoch_seconds: float) -> PlayerStats:
    """Stats as they would be if the running stint closed at ``now``."""
    return close_stint(player, now_epoch_seconds).stats
