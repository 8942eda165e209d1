"""Single-shot ICMP echo probe using the system ``ping`` binary."""

import logging
import math
import re
import subprocess

from lanwake.core.models import IpAddress, ProbeResult

logger = logging.getLogger(__name__)

_RTT_RE = re.compile(r"time[=<]\s*([\d.]+)\s*ms")


def ping(ip: IpAddress, timeout: float = 1.0, ping_bin: str = "ping") -> ProbeResult:
    """
    Send one echo request to ``ip`` and wait up to ``timeout`` seconds for the reply.

    A lost reply, a non-zero exit, a hung process or a missing binary all
    yield an unsuccessful result; none of them raise.

    Args:
        ip: Target address
        timeout: Seconds to wait for the reply (rounded up to whole seconds)
        ping_bin: Path or name of the ping binary

    Returns:
        ProbeResult with success flag and round-trip time in ms when known
    """
    cmd = [ping_bin, "-c", "1", "-W", str(max(1, math.ceil(timeout)))]
    if ip.version == 6:
        cmd.append("-6")
    cmd.append(str(ip))

    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout + 5,
        )
    except FileNotFoundError:
        logger.warning("'%s' not found; cannot probe %s", ping_bin, ip)
        return ProbeResult(success=False)
    except subprocess.TimeoutExpired:
        logger.debug("Ping timeout: %s", ip)
        return ProbeResult(success=False)

    if result.returncode != 0:
        logger.debug("Ping failed: %s (returncode: %d)", ip, result.returncode)
        return ProbeResult(success=False)

    match = _RTT_RE.search(result.stdout)
    rtt = float(match.group(1)) if match else None
    if rtt is None:
        logger.debug("Ping success: %s", ip)
    else:
        logger.debug("Ping success: %s time=%.3f ms", ip, rtt)
    return ProbeResult(success=True, rtt_ms=rtt)
