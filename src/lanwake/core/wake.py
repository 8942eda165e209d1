"""Wake orchestration."""

import logging
from typing import Optional

from lanwake.core.address import resolve_mac
from lanwake.core.confirm import Prober, await_reachable, await_resolution
from lanwake.core.models import IpAddress, MacAddress, WakeSettings
from lanwake.core.neighbors import IpNeighborTable, NeighborTable
from lanwake.core.ping import ping
from lanwake.core.wol import build_magic_packet, send_magic_packet

logger = logging.getLogger(__name__)


def wake_only(
    address: str,
    settings: Optional[WakeSettings] = None,
    neighbors: Optional[NeighborTable] = None,
) -> MacAddress:
    """
    Resolve ``address`` and broadcast a magic packet, without confirmation.

    Returns:
        The MAC address the packet was built for
    """
    settings = settings or WakeSettings()
    neighbors = neighbors if neighbors is not None else IpNeighborTable()

    mac = resolve_mac(address, neighbors)
    logger.info(
        "Sending WOL magic packet to %s via %s:%d", mac, settings.broadcast_ip, settings.port
    )
    send_magic_packet(
        build_magic_packet(mac),
        broadcast_ip=settings.broadcast_ip,
        port=settings.port,
        interface=settings.interface,
    )
    return mac


def wake(
    address: str,
    settings: Optional[WakeSettings] = None,
    neighbors: Optional[NeighborTable] = None,
    prober: Prober = ping,
) -> IpAddress:
    """
    Wake a host and confirm it came up.

    Workflow:
        1. Resolve the MAC address (from a MAC literal or the neighbor table)
        2. Build and broadcast the magic packet (once, no retry)
        3. Wait for the MAC to appear in the neighbor table with an IP
        4. Wait for that IP to answer ping

    Errors from any step propagate unchanged.

    Args:
        address: IP or MAC literal of the target
        settings: Broadcast target and time budgets (defaults if None)
        neighbors: Neighbor table to query (``ip neigh`` if None)
        prober: Echo probe used in step 4

    Returns:
        The IP address confirmed reachable in step 4
    """
    settings = settings or WakeSettings()
    neighbors = neighbors if neighbors is not None else IpNeighborTable()

    # ── Steps 1-2: Resolve and send ──────────────────────────────────────────
    mac = wake_only(address, settings, neighbors)

    # ── Step 3: Wait for the neighbor table ──────────────────────────────────
    ip = await_resolution(
        mac,
        neighbors,
        timeout=settings.resolution_timeout,
        poll_interval=settings.poll_interval,
    )

    # ── Step 4: Wait for ping ────────────────────────────────────────────────
    await_reachable(
        ip,
        timeout=settings.reachability_timeout,
        poll_interval=settings.poll_interval,
        probe_timeout=settings.probe_timeout,
        prober=prober,
    )
    logger.info("Host %s (%s) is awake", ip, mac)
    return ip
