"""End-to-end tests for wake orchestration."""

import ipaddress
from unittest.mock import MagicMock, patch

import pytest

from lanwake.core.errors import (
    AddressNotInNeighborTableError,
    InvalidAddressFormatError,
    ReachabilityTimeoutError,
    ResolutionTimeoutError,
    TransmitError,
)
from lanwake.core.models import MacAddress, ProbeResult, WakeSettings
from lanwake.core.wake import wake, wake_only

MAC_TEXT = "00-50-56-C0-00-01"
MAC = MacAddress.parse(MAC_TEXT)
TARGET_IP = ipaddress.ip_address("10.0.0.5")
SETTINGS = WakeSettings(resolution_timeout=60, reachability_timeout=60, poll_interval=1.0)


def _prober(successes_after=None):
    calls = []

    def probe(ip, timeout=1.0):
        calls.append(ip)
        if successes_after is not None and len(calls) > successes_after:
            return ProbeResult(success=True, rtt_ms=1.2)
        return ProbeResult(success=False)

    probe.calls = calls  # type: ignore[attr-defined]
    return probe


@patch("lanwake.core.wake.send_magic_packet", return_value=102)
class TestWake:
    def test_happy_path(self, mock_send: MagicMock, neighbors, fake_clock) -> None:
        """Table resolves within the deadline, third echo probe answers."""
        neighbors.add(TARGET_IP, MAC, appear_after=5)
        prober = _prober(successes_after=2)

        ip = wake(MAC_TEXT, SETTINGS, neighbors=neighbors, prober=prober)

        assert ip == TARGET_IP
        assert prober.calls == [TARGET_IP] * 3
        mock_send.assert_called_once()
        payload = mock_send.call_args[0][0]
        assert len(payload) == 102
        assert payload[6:12] == MAC.octets

    def test_uses_settings_for_broadcast(self, mock_send: MagicMock, neighbors, fake_clock) -> None:
        neighbors.add(TARGET_IP, MAC)
        settings = WakeSettings(broadcast_ip="192.168.1.255", port=7, interface="192.168.1.10")

        wake(MAC_TEXT, settings, neighbors=neighbors, prober=_prober(successes_after=0))

        assert mock_send.call_args[1] == {
            "broadcast_ip": "192.168.1.255",
            "port": 7,
            "interface": "192.168.1.10",
        }

    def test_ip_not_in_table_sends_nothing(self, mock_send: MagicMock, neighbors) -> None:
        with pytest.raises(AddressNotInNeighborTableError):
            wake("192.168.1.1", SETTINGS, neighbors=neighbors, prober=_prober())

        mock_send.assert_not_called()

    def test_invalid_address_sends_nothing(self, mock_send: MagicMock, neighbors) -> None:
        with pytest.raises(InvalidAddressFormatError):
            wake("nonsense!", SETTINGS, neighbors=neighbors, prober=_prober())

        mock_send.assert_not_called()

    def test_resolution_timeout(self, mock_send: MagicMock, neighbors, fake_clock) -> None:
        prober = _prober(successes_after=0)

        with pytest.raises(ResolutionTimeoutError):
            wake(MAC_TEXT, SETTINGS, neighbors=neighbors, prober=prober)

        mock_send.assert_called_once()
        assert prober.calls == []
        assert fake_clock.now == 60

    def test_reachability_timeout(self, mock_send: MagicMock, neighbors, fake_clock) -> None:
        neighbors.add(TARGET_IP, MAC, appear_after=2)

        with pytest.raises(ReachabilityTimeoutError) as exc_info:
            wake(MAC_TEXT, SETTINGS, neighbors=neighbors, prober=_prober())

        assert exc_info.value.ip == TARGET_IP

    def test_ip_input_resolves_then_confirms(
        self, mock_send: MagicMock, neighbors, fake_clock
    ) -> None:
        neighbors.add(TARGET_IP, MacAddress.parse("AA-BB-CC-DD-EE-FF"))

        ip = wake("10.0.0.5", SETTINGS, neighbors=neighbors, prober=_prober(successes_after=0))

        assert ip == TARGET_IP
        assert mock_send.call_args[0][0][6:12] == bytes.fromhex("AABBCCDDEEFF")

    def test_transmit_error_propagates(self, mock_send: MagicMock, neighbors) -> None:
        mock_send.side_effect = TransmitError("Network is unreachable")

        with pytest.raises(TransmitError):
            wake(MAC_TEXT, SETTINGS, neighbors=neighbors, prober=_prober())

        assert neighbors.mac_queries == 0


class TestWakeOnly:
    @patch("lanwake.core.wake.send_magic_packet", return_value=102)
    def test_sends_without_confirming(self, mock_send: MagicMock, neighbors) -> None:
        mac = wake_only(MAC_TEXT, neighbors=neighbors)

        assert mac == MAC
        mock_send.assert_called_once()
        assert neighbors.mac_queries == 0
