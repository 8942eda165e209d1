"""lanwake: wake a LAN host and confirm it came up."""

__version__ = "0.1.0"
