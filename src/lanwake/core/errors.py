"""Domain-specific errors for lanwake.

Every failure a wake attempt can end in has its own class and its own process
exit code, so callers can tell them apart without parsing messages.
"""

from typing import Optional


class LanwakeError(Exception):
    """Base error for lanwake."""

    exit_code = 1


class ConfigError(LanwakeError):
    """Raised for invalid or missing configuration."""

    exit_code = 1

    def __init__(self, message: str, errors: Optional[list[str]] = None) -> None:
        self.errors = errors or []
        super().__init__(message)


class InvalidAddressFormatError(LanwakeError):
    """Raised when an address is neither an IP nor a MAC literal."""

    exit_code = 3

    def __init__(self, address: str) -> None:
        self.address = address
        super().__init__(f"'{address}' is not a valid IP or MAC address")


class AddressNotInNeighborTableError(LanwakeError):
    """Raised when an IP address has no usable entry in the neighbor table."""

    exit_code = 4

    def __init__(self, ip: object) -> None:
        self.ip = ip
        super().__init__(f"No MAC address found for {ip} in the neighbor table")


class MacAddressUnresolvedError(LanwakeError):
    """Raised when no MAC address could be obtained for the target."""

    exit_code = 5

    def __init__(self, address: str) -> None:
        self.address = address
        super().__init__(f"Could not determine a MAC address for '{address}'")


class TransmitError(LanwakeError):
    """Raised when the magic packet cannot be sent."""

    exit_code = 6


class ResolutionTimeoutError(LanwakeError):
    """Raised when the woken host never shows up in the neighbor table."""

    exit_code = 7

    def __init__(self, mac: object, timeout: float) -> None:
        self.mac = mac
        self.timeout = timeout
        super().__init__(
            f"Magic packet sent, but no IP address appeared for {mac} within {timeout:g}s"
        )


class ReachabilityTimeoutError(LanwakeError):
    """Raised when the resolved IP never answers an echo probe."""

    exit_code = 8

    def __init__(self, ip: object, timeout: float) -> None:
        self.ip = ip
        self.timeout = timeout
        super().__init__(f"{ip} did not answer ping within {timeout:g}s")


class NeighborTableError(LanwakeError):
    """Raised when the OS neighbor table cannot be queried."""
