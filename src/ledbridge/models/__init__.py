"""Data models for the LED board bridge."""

from .color import BLACK, CYAN, GREEN, ORANGE, PURPLE, RED, WHITE, YELLOW, Color
from .config import BridgeConfig
from .enums import ConnectionState
from .position import LogicalPosition, PhysicalPosition, TileState
from .requests import SetLedRequest, SyncGameStateRequest, TriggerEffectRequest
from .status import BridgeStatus

__all__ = [
    # Named colors
    "BLACK",
    "CYAN",
    "GREEN",
    "ORANGE",
    "PURPLE",
    "RED",
    "WHITE",
    "YELLOW",
    # Models
    "BridgeConfig",
    "BridgeStatus",
    "Color",
    # Enums
    "ConnectionState",
    "LogicalPosition",
    "PhysicalPosition",
    # Requests
    "SetLedRequest",
    "SyncGameStateRequest",
    "TileState",
    "TriggerEffectRequest",
]
