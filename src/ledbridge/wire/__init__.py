"""Wire protocol between the bridge and the LED board controller."""

from .commands import (
    ClearCommand,
    Command,
    ConfigCommand,
    EffectCommand,
    HardwareResponse,
    SetPixelCommand,
    UpdateCommand,
)
from .effects import DEFAULT_EFFECT_DURATION, EFFECT_PRESETS, EffectPreset, GameEffect, find_preset

__all__ = [
    "DEFAULT_EFFECT_DURATION",
    "EFFECT_PRESETS",
    # Commands
    "ClearCommand",
    "Command",
    "ConfigCommand",
    "EffectCommand",
    # Effects
    "EffectPreset",
    "GameEffect",
    "HardwareResponse",
    "SetPixelCommand",
    "UpdateCommand",
    "find_preset",
]
