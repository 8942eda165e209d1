"""Address-kind detection and MAC resolution."""

import enum
import ipaddress
import logging
from dataclasses import dataclass
from typing import Optional

from lanwake.core.errors import (
    AddressNotInNeighborTableError,
    InvalidAddressFormatError,
    MacAddressUnresolvedError,
    NeighborTableError,
)
from lanwake.core.models import IpAddress, MacAddress
from lanwake.core.neighbors import NeighborTable

logger = logging.getLogger(__name__)

# Shortest accepted literal is "1.1.1.1", longest is a delimited MAC
MIN_ADDRESS_LENGTH = 7
MAX_ADDRESS_LENGTH = 17


class AddressKind(enum.Enum):
    IP = "ip"
    MAC = "mac"
    INVALID = "invalid"


@dataclass(frozen=True)
class ParsedAddress:
    kind: AddressKind
    ip: Optional[IpAddress] = None
    mac: Optional[MacAddress] = None


def parse_address(text: str) -> ParsedAddress:
    """
    Classify an address string as an IP literal, a MAC literal, or neither.

    IP parsing is tried first, then MAC parsing.  Strings outside the 7-17
    character window are INVALID without any parse attempt.
    """
    if not MIN_ADDRESS_LENGTH <= len(text) <= MAX_ADDRESS_LENGTH:
        return ParsedAddress(AddressKind.INVALID)
    try:
        return ParsedAddress(AddressKind.IP, ip=ipaddress.ip_address(text))
    except ValueError:
        pass
    try:
        return ParsedAddress(AddressKind.MAC, mac=MacAddress.parse(text))
    except ValueError:
        return ParsedAddress(AddressKind.INVALID)


def resolve_mac(address: str, neighbors: NeighborTable) -> MacAddress:
    """
    Resolve a user-supplied address to the target's MAC address.

    A MAC literal is returned as-is without touching the neighbor table.  An
    IP literal is looked up in the neighbor table exactly once.

    Args:
        address: IP or MAC literal
        neighbors: Neighbor table to consult for IP literals

    Returns:
        The target's MacAddress

    Raises:
        InvalidAddressFormatError: If ``address`` is neither an IP nor a MAC
        AddressNotInNeighborTableError: If the IP has no usable table entry
        MacAddressUnresolvedError: If no MAC was obtained by any path
    """
    parsed = parse_address(address)
    mac: Optional[MacAddress] = None

    if parsed.kind is AddressKind.IP:
        logger.debug("'%s' is an IP address, querying neighbor table", address)
        try:
            entry = neighbors.lookup_ip(parsed.ip)  # type: ignore[arg-type]
        except NeighborTableError as exc:
            logger.debug("Neighbor table lookup for %s failed: %s", parsed.ip, exc)
            raise AddressNotInNeighborTableError(parsed.ip) from exc
        if entry is None:
            raise AddressNotInNeighborTableError(parsed.ip)
        mac = entry.mac
        logger.info("Resolved %s → %s (%s)", parsed.ip, mac, entry.state or "no state")
    elif parsed.kind is AddressKind.MAC:
        mac = parsed.mac
    else:
        raise InvalidAddressFormatError(address)

    if mac is None:
        raise MacAddressUnresolvedError(address)
    return mac
