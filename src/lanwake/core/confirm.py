"""
Post-wake confirmation.

After the magic packet goes out there is no reply to wait for, so the only
way to tell whether the host woke up is to watch the network for it:

    Phase A: wait for the target's MAC to appear in the neighbor table with
             an IP address (the host has started talking on the LAN).
    Phase B: wait for that IP address to answer ping.

Each phase has its own time budget and raises its own timeout error.
"""

import logging
from typing import Callable, Optional

from lanwake.core.errors import (
    NeighborTableError,
    ReachabilityTimeoutError,
    ResolutionTimeoutError,
)
from lanwake.core.models import IpAddress, MacAddress, ProbeResult
from lanwake.core.neighbors import NeighborTable
from lanwake.core.ping import ping
from lanwake.core.poll import poll_until

logger = logging.getLogger(__name__)

Prober = Callable[..., ProbeResult]


def _is_pingable(ip: IpAddress) -> bool:
    """Link-local IPv6 needs a zone (fe80::1%eth0) before ping can reach it."""
    return not (ip.version == 6 and ip.is_link_local and not getattr(ip, "scope_id", None))


def await_resolution(
    mac: MacAddress,
    neighbors: NeighborTable,
    timeout: float = 60.0,
    poll_interval: float = 1.0,
) -> IpAddress:
    """
    Wait until the neighbor table maps ``mac`` to an IP address.

    A failed table query counts as "no entry yet" and polling continues.

    Args:
        mac: MAC address of the woken host
        neighbors: Neighbor table to poll
        timeout: Maximum seconds to wait
        poll_interval: Seconds between table queries

    Returns:
        An IP address for ``mac`` that ping can target, IPv4 preferred

    Raises:
        ResolutionTimeoutError: If no entry appears within ``timeout``
    """

    def _probe() -> Optional[IpAddress]:
        try:
            entries = neighbors.entries_for_mac(mac)
        except NeighborTableError as exc:
            logger.debug("Neighbor table query failed, retrying: %s", exc)
            return None
        usable = [e.ip for e in entries if _is_pingable(e.ip)]
        # IPv4 first, stable sort keeps table order within a family
        usable.sort(key=lambda ip: ip.version)
        return usable[0] if usable else None

    logger.info("Waiting for %s to appear in the neighbor table (timeout: %gs)", mac, timeout)
    ip = poll_until(_probe, timeout, poll_interval, description=f"neighbor entry for {mac}")
    if ip is None:
        raise ResolutionTimeoutError(mac, timeout)
    logger.info("%s is at %s", mac, ip)
    return ip


def await_reachable(
    ip: IpAddress,
    timeout: float = 60.0,
    poll_interval: float = 1.0,
    probe_timeout: float = 1.0,
    prober: Prober = ping,
) -> None:
    """
    Wait until ``ip`` answers an echo request.

    Args:
        ip: Address resolved in Phase A
        timeout: Maximum seconds to wait
        poll_interval: Seconds between probes
        probe_timeout: Seconds each probe waits for its reply
        prober: Callable ``(ip, timeout=...) -> ProbeResult``

    Raises:
        ReachabilityTimeoutError: If no probe succeeds within ``timeout``
    """

    def _probe() -> Optional[ProbeResult]:
        result = prober(ip, timeout=probe_timeout)
        return result if result.success else None

    logger.info("Waiting for %s to answer ping (timeout: %gs)", ip, timeout)
    result = poll_until(_probe, timeout, poll_interval, description=f"echo reply from {ip}")
    if result is None:
        raise ReachabilityTimeoutError(ip, timeout)
    if result.rtt_ms is not None:
        logger.info("%s is reachable (%.1f ms)", ip, result.rtt_ms)
    else:
        logger.info("%s is reachable", ip)
