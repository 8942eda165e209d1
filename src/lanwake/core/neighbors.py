"""
Read-only access to the OS neighbor (ARP/NDP) table.

The kernel owns this table; lanwake only ever reads it.  Lookups go through
the small ``NeighborTable`` protocol so the resolver and the confirmer can be
driven by an in-memory table in tests.  The production implementation parses
``ip neigh show`` output from iproute2, e.g.::

    192.168.1.20 dev eth0 lladdr 00:11:22:33:44:55 REACHABLE
    fe80::1 dev eth0 lladdr aa:bb:cc:dd:ee:ff router STALE
    192.168.1.99 dev eth0 FAILED
"""

import ipaddress
import logging
import subprocess
from typing import Optional, Protocol

from lanwake.core.errors import NeighborTableError
from lanwake.core.models import IpAddress, MacAddress, NeighborEntry

logger = logging.getLogger(__name__)


class NeighborTable(Protocol):
    def lookup_ip(self, ip: IpAddress) -> Optional[NeighborEntry]:
        """Return the entry for ``ip``, or None if the table has none."""
        ...

    def entries_for_mac(self, mac: MacAddress) -> list[NeighborEntry]:
        """Return every entry whose link-layer address equals ``mac``."""
        ...


def parse_neighbor_output(output: str) -> list[NeighborEntry]:
    """
    Parse ``ip neigh show`` output into neighbor entries.

    Rows without a link-layer address (INCOMPLETE, FAILED) and rows whose IP
    or MAC does not parse are skipped.

    Args:
        output: Raw stdout of ``ip neigh show``

    Returns:
        List of NeighborEntry in table order
    """
    entries: list[NeighborEntry] = []
    for line in output.splitlines():
        parts = line.split()
        if len(parts) < 2 or "lladdr" not in parts:
            continue
        idx = parts.index("lladdr")
        if idx + 1 >= len(parts):
            continue
        dev = parts[parts.index("dev") + 1] if "dev" in parts[:-1] else ""
        try:
            ip = ipaddress.ip_address(parts[0])
            if ip.version == 6 and ip.is_link_local and dev:
                # fe80:: is only reachable through the interface it was seen on
                ip = ipaddress.ip_address(f"{parts[0]}%{dev}")
            mac = MacAddress.parse(parts[idx + 1])
        except ValueError:
            logger.debug("Skipping unparseable neighbor row: %s", line.strip())
            continue
        entries.append(NeighborEntry(ip=ip, mac=mac, state=parts[-1], dev=dev))
    return entries


class IpNeighborTable:
    """NeighborTable backed by the iproute2 ``ip neigh`` command."""

    def __init__(self, ip_bin: str = "ip", command_timeout: float = 5.0) -> None:
        self.ip_bin = ip_bin
        self.command_timeout = command_timeout

    def _show(self, *args: str) -> list[NeighborEntry]:
        cmd = [self.ip_bin, "neigh", "show", *args]
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.command_timeout,
            )
        except (FileNotFoundError, subprocess.TimeoutExpired) as exc:
            raise NeighborTableError(f"{' '.join(cmd)} failed: {exc}") from exc
        if result.returncode != 0:
            raise NeighborTableError(
                f"{' '.join(cmd)} exited {result.returncode}: {result.stderr.strip()}"
            )
        return parse_neighbor_output(result.stdout)

    def lookup_ip(self, ip: IpAddress) -> Optional[NeighborEntry]:
        for entry in self._show("to", str(ip)):
            # Compare without the zone so a scoped fe80:: entry matches an unscoped query
            if entry.ip.version == ip.version and entry.ip.packed == ip.packed:
                return entry
        return None

    def entries_for_mac(self, mac: MacAddress) -> list[NeighborEntry]:
        return [entry for entry in self._show() if entry.mac == mac]
