"""Wake-on-LAN magic packet construction and broadcast."""

import logging
import socket
from typing import Optional

from wakeonlan import create_magic_packet

from lanwake.core.errors import TransmitError
from lanwake.core.models import MacAddress

logger = logging.getLogger(__name__)

MAGIC_PACKET_LENGTH = 102


def build_magic_packet(mac: MacAddress) -> bytes:
    """
    Build the 102-byte magic packet for ``mac``.

    Layout: six 0xFF sync bytes followed by the MAC repeated 16 times.
    """
    return create_magic_packet(str(mac))


def send_magic_packet(
    payload: bytes,
    broadcast_ip: str = "255.255.255.255",
    port: int = 9,
    interface: Optional[str] = None,
) -> int:
    """
    Broadcast a magic packet over UDP, exactly once.

    Args:
        payload: Magic packet bytes
        broadcast_ip: Destination broadcast address (default: 255.255.255.255)
        port: UDP port for WOL packet (default: 9)
        interface: Local IP address to bind before sending (optional)

    Returns:
        Number of bytes handed to the network

    Raises:
        TransmitError: If the socket cannot be opened or the send fails
    """
    logger.debug("Magic packet (%d bytes): %s", len(payload), payload.hex(" "))
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_BROADCAST, 1)
            if interface:
                sock.bind((interface, 0))
            sent = sock.sendto(payload, (broadcast_ip, port))
    except OSError as exc:
        raise TransmitError(
            f"Could not send magic packet to {broadcast_ip}:{port}: {exc}"
        ) from exc
    logger.info("Sent %d-byte magic packet to %s:%d", sent, broadcast_ip, port)
    return sent
