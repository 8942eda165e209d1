"""Core data models shared by the resolver, confirmer and CLI."""

import re
from dataclasses import dataclass
from ipaddress import IPv4Address, IPv6Address
from typing import Optional, Union

IpAddress = Union[IPv4Address, IPv6Address]

# Six hex pairs joined by one consistent delimiter, e.g. AA:BB:CC:DD:EE:FF or aa-bb-cc-dd-ee-ff
_MAC_RE = re.compile(r"^[0-9A-Fa-f]{2}([:\-])(?:[0-9A-Fa-f]{2}\1){4}[0-9A-Fa-f]{2}$")


@dataclass(frozen=True)
class MacAddress:
    """A 6-byte hardware address. Compares byte-wise."""

    octets: bytes

    def __post_init__(self) -> None:
        if len(self.octets) != 6:
            raise ValueError(f"MAC address must be 6 bytes, got {len(self.octets)}")

    @classmethod
    def parse(cls, text: str) -> "MacAddress":
        """
        Parse a colon- or hyphen-delimited MAC literal (case-insensitive).

        Raises:
            ValueError: If ``text`` is not a MAC literal
        """
        if not _MAC_RE.match(text):
            raise ValueError(f"invalid MAC address '{text}'")
        return cls(bytes.fromhex(text.replace(text[2], "")))

    def __str__(self) -> str:
        return ":".join(f"{b:02X}" for b in self.octets)


@dataclass(frozen=True)
class NeighborEntry:
    """One row of the OS neighbor (ARP/NDP) table."""

    ip: IpAddress
    mac: MacAddress
    state: str = ""
    dev: str = ""


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of a single echo request."""

    success: bool
    rtt_ms: Optional[float] = None


@dataclass(frozen=True)
class WakeSettings:
    """Tunables for a wake attempt. Timeouts and intervals are in seconds."""

    broadcast_ip: str = "255.255.255.255"
    port: int = 9
    interface: Optional[str] = None
    resolution_timeout: float = 60.0
    reachability_timeout: float = 60.0
    poll_interval: float = 1.0
    probe_timeout: float = 1.0


@dataclass(frozen=True)
class Host:
    """A named wake target from the config file."""

    name: str
    address: str
    description: str = ""
