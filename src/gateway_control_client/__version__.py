"""Version information for gateway_control_client."""

__version__ = "0.1.0"
