"""Shared fakes for the lanwake test suite."""

from typing import Optional

import pytest

from lanwake.core.errors import NeighborTableError
from lanwake.core.models import IpAddress, MacAddress, NeighborEntry


class FakeNeighborTable:
    """
    In-memory neighbor table.

    Entries added with ``appear_after=n`` stay hidden from MAC queries until
    ``n`` queries have been made, which simulates ARP converging while a host
    boots.
    """

    def __init__(self) -> None:
        self._entries: list[tuple[NeighborEntry, int]] = []
        self.ip_lookups: list[IpAddress] = []
        self.mac_queries = 0
        self.fail_queries = 0

    def add(self, ip: IpAddress, mac: MacAddress, appear_after: int = 0) -> None:
        self._entries.append((NeighborEntry(ip=ip, mac=mac, state="REACHABLE"), appear_after))

    def lookup_ip(self, ip: IpAddress) -> Optional[NeighborEntry]:
        self.ip_lookups.append(ip)
        return next((e for e, _ in self._entries if e.ip == ip), None)

    def entries_for_mac(self, mac: MacAddress) -> list[NeighborEntry]:
        self.mac_queries += 1
        if self.fail_queries:
            self.fail_queries -= 1
            raise NeighborTableError("ip neigh show exited 1")
        return [e for e, after in self._entries if e.mac == mac and self.mac_queries > after]


class FakeClock:
    """Stands in for the ``time`` module; ``sleep`` advances ``monotonic``."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def monotonic(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def neighbors() -> FakeNeighborTable:
    return FakeNeighborTable()


@pytest.fixture
def fake_clock(monkeypatch: pytest.MonkeyPatch) -> FakeClock:
    clock = FakeClock()
    monkeypatch.setattr("lanwake.core.poll.time", clock)
    return clock
