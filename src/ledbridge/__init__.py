"""ledbridge: mirrors a grid game's state onto a 16x11 WebSocket LED board."""

__version__ = "0.1.0"

# Facade
from .core import HardwareBridge

# Configuration and inputs
from .models import BridgeConfig, Color, LogicalPosition, TileState

__all__ = [
    "BridgeConfig",
    "Color",
    "HardwareBridge",
    "LogicalPosition",
    "TileState",
]
