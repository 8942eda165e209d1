"""Bounded polling shared by the wake confirmation phases."""

import logging
import time
from typing import Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def poll_until(
    probe: Callable[[], Optional[T]],
    timeout: float,
    poll_interval: float = 1.0,
    description: str = "condition",
) -> Optional[T]:
    """
    Call ``probe`` until it returns a value or ``timeout`` seconds elapse.

    The probe runs before each deadline check, so it is always attempted at
    least once.  Sleeps are clipped to the remaining budget; None is only
    returned once the elapsed time has reached ``timeout``.

    Args:
        probe: Returns a result when the condition holds, None otherwise
        timeout: Maximum seconds to keep polling
        poll_interval: Seconds between attempts
        description: What is being waited for, used in log messages

    Returns:
        The first non-None probe result, or None on timeout
    """
    start = time.monotonic()
    attempt = 0
    while True:
        attempt += 1
        result = probe()
        if result is not None:
            logger.debug("Got %s after %d attempt(s)", description, attempt)
            return result

        elapsed = time.monotonic() - start
        if elapsed >= timeout:
            logger.warning("Gave up waiting for %s after %.1fs", description, elapsed)
            return None

        remaining = timeout - elapsed
        logger.debug(
            "Waiting for %s: %3.0f%% of %gs elapsed, %.0fs remaining (attempt %d)",
            description,
            100 * elapsed / timeout,
            timeout,
            remaining,
            attempt,
        )
        time.sleep(min(poll_interval, remaining))
