"""Duplicate-signal suppression."""

from core.models import Direction, Signal

# Minimum time between two signals in the same direction (5 minutes)
SIGNAL_COOLDOWN_MS = 300_000


def is_in_cooldown(
    last_signal: Signal | None,
    direction: Direction,
    timestamp: int,
    window_ms: int = SIGNAL_COOLDOWN_MS,
) -> bool:
    """Check whether a candidate signal must be suppressed.

    Only a same-direction repeat inside the window is suppressed. An
    opposite-direction candidate always passes, however soon it follows.

    Args:
        last_signal: Most recently accepted signal, if any
        direction: Candidate direction
        timestamp: Candidate time in epoch milliseconds
        window_ms: Cooldown window in milliseconds

    Returns:
        True if the candidate is a duplicate and should be dropped
    """
    if last_signal is None:
        return False
    if last_signal.direction != direction:
        return False
    return (timestamp - last_signal.timestamp) < window_ms
