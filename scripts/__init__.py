"""Scripts package for the NHL Auth Gateway.

This package contains helper scripts run alongside the gateway.
"""

# Package metadata
__version__ = "1.0.0"
__license__ = "MIT"

# Export script names for easy reference
__all__ = [
    "env_check",
]
