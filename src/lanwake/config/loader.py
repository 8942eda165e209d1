"""YAML configuration loader and validator."""

from ipaddress import IPv4Address
from pathlib import Path
from typing import Any, Optional

import yaml

from lanwake.core.address import AddressKind, parse_address
from lanwake.core.errors import ConfigError
from lanwake.core.models import Host, WakeSettings

# Settings that must be positive numbers (seconds)
_DURATION_FIELDS = (
    "resolution_timeout",
    "reachability_timeout",
    "poll_interval",
    "probe_timeout",
)


def load_config(path: Path) -> Optional[dict[str, Any]]:
    """
    Load configuration from a YAML file.

    Args:
        path: Path to the YAML config file

    Returns:
        Parsed configuration dictionary, or None if file is empty

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is invalid
    """
    with open(path) as f:
        result: Optional[dict[str, Any]] = yaml.safe_load(f)
        return result


def read_config(path: Path) -> dict[str, Any]:
    """
    Load and validate a config file.

    Args:
        path: Path to the YAML config file

    Returns:
        Validated configuration dictionary (empty if the file is empty)

    Raises:
        ConfigError: If the file is missing, is not valid YAML, or fails validation
    """
    try:
        raw = load_config(path)
    except FileNotFoundError as exc:
        raise ConfigError(f"Config file not found: {path}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(
            "Config validation errors", [f"{path}: invalid YAML ({exc})"]
        ) from exc
    if not raw:
        return {}
    errors = validate_config(raw)
    if errors:
        raise ConfigError("Config validation errors", errors)
    return raw


def _is_positive_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0


def validate_config(config: dict[str, Any]) -> list[str]:
    """
    Validate a loaded configuration dictionary.

    Returns:
        List of validation error messages (empty list = valid)
    """
    errors: list[str] = []

    if not isinstance(config, dict):
        return ["Config root must be a YAML mapping"]

    settings = config.get("settings", {}) or {}
    if not isinstance(settings, dict):
        errors.append("'settings' must be a mapping")
        settings = {}

    for field in _DURATION_FIELDS:
        if field in settings and not _is_positive_number(settings[field]):
            errors.append(f"settings.{field}: must be a positive number of seconds")

    port = settings.get("port", 9)
    if isinstance(port, bool) or not isinstance(port, int) or not 1 <= port <= 65535:
        errors.append(f"settings.port: invalid port '{port}' (expected 1-65535)")

    # The magic packet goes out over an AF_INET socket
    for field in ("broadcast_ip", "interface"):
        value = settings.get(field)
        if value is not None and not isinstance(parse_address(str(value)).ip, IPv4Address):
            errors.append(f"settings.{field}: invalid IPv4 address '{value}'")

    hosts = config.get("hosts", []) or []
    if not isinstance(hosts, list):
        errors.append("'hosts' must be a list")
        return errors

    seen: set[str] = set()
    for i, host in enumerate(hosts):
        prefix = f"hosts[{i}]"
        if not isinstance(host, dict):
            errors.append(f"{prefix}: must be a mapping")
            continue
        for field in ("name", "address"):
            if not host.get(field):
                errors.append(f"{prefix}: missing required field '{field}'")
        address = host.get("address")
        if address and not isinstance(address, str):
            # Unquoted MACs made only of digits load as YAML 1.1 sexagesimal ints
            errors.append(f"{prefix}: address must be a quoted string")
        elif address and parse_address(address).kind is AddressKind.INVALID:
            errors.append(f"{prefix}: invalid address '{address}'")
        name = host.get("name")
        if name:
            if name in seen:
                errors.append(f"{prefix}: duplicate host name '{name}'")
            seen.add(name)

    return errors


def settings_from_config(config: dict[str, Any]) -> WakeSettings:
    """
    Construct WakeSettings from a validated config dict.

    Missing keys fall back to the WakeSettings defaults.
    """
    raw = config.get("settings", {}) or {}
    defaults = WakeSettings()
    return WakeSettings(
        broadcast_ip=str(raw.get("broadcast_ip", defaults.broadcast_ip)),
        port=int(raw.get("port", defaults.port)),
        interface=raw.get("interface", defaults.interface),
        resolution_timeout=float(raw.get("resolution_timeout", defaults.resolution_timeout)),
        reachability_timeout=float(
            raw.get("reachability_timeout", defaults.reachability_timeout)
        ),
        poll_interval=float(raw.get("poll_interval", defaults.poll_interval)),
        probe_timeout=float(raw.get("probe_timeout", defaults.probe_timeout)),
    )


def hosts_from_config(config: dict[str, Any]) -> list[Host]:
    """
    Construct a list of Host objects from a validated config dict.

    Args:
        config: Parsed and validated config dictionary

    Returns:
        List of Host instances
    """
    hosts: list[Host] = []
    for raw in config.get("hosts", []) or []:
        hosts.append(
            Host(
                name=str(raw["name"]),
                address=str(raw["address"]),
                description=raw.get("description", ""),
            )
        )
    return hosts
