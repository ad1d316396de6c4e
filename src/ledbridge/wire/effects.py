"""Named gameplay effects and the board animations they map to."""

from enum import Enum
from typing import NamedTuple, Optional

from ledbridge.models import CYAN, ORANGE, PURPLE, RED, WHITE, Color

# Duration used for effect names with no preset
DEFAULT_EFFECT_DURATION = 1.0


class EffectPreset(NamedTuple):
    """How one gameplay event is rendered on the board."""

    wire_name: str                 # name the board firmware knows
    color: Optional[Color]         # default color (None = board decides)
    duration: float                # seconds
    needs_position: bool           # event is anchored to a game cell


class GameEffect(Enum):
    """Gameplay events with a board animation."""

    COLLAPSE_PULSE = "collapse_pulse"      # reality breaking, all lights flicker
    MEMORY_SPARK = "memory_spark"          # memory corridor lightning
    SIGNAL_PULSE = "signal_pulse"          # ripple from a player's signal
    FEAR_RIPPLE = "fear_ripple"            # red ripple from a noise source
    ILLUMINATE_BLOOM = "illuminate_bloom"  # charging spell blooming outward
    PLAYER_HEARTBEAT = "player_heartbeat"  # double-thump around a player
    VICTORY = "victory"                    # rainbow celebration
    VOID_BREATHING = "void_breathing"      # ambient darkness on secondary LEDs
    PLAYER_FILED = "player_filed"          # player vanishes
    FILED_SOS = "filed_sos"                # SOS morse pattern


EFFECT_PRESETS: dict[GameEffect, EffectPreset] = {
    GameEffect.COLLAPSE_PULSE: EffectPreset("collapse_pulse", RED, 3.0, False),
    GameEffect.MEMORY_SPARK: EffectPreset("memory_spark", CYAN, 1.0, True),
    GameEffect.SIGNAL_PULSE: EffectPreset("signal_ripple", None, 2.0, True),
    GameEffect.FEAR_RIPPLE: EffectPreset("fear_ripple", RED, 2.0, True),
    GameEffect.ILLUMINATE_BLOOM: EffectPreset("illuminate_bloom", WHITE, 2.0, True),
    GameEffect.PLAYER_HEARTBEAT: EffectPreset("heartbeat", None, 2.0, True),
    GameEffect.VICTORY: EffectPreset("rainbow_victory", None, 5.0, False),
    GameEffect.VOID_BREATHING: EffectPreset("void_breathing", PURPLE, 8.0, False),
    GameEffect.PLAYER_FILED: EffectPreset("filed_vanish", RED, 1.0, True),
    GameEffect.FILED_SOS: EffectPreset("sos_pattern", ORANGE, 5.0, True),
}


def find_preset(name: str) -> Optional[EffectPreset]:
    """
    Look up the preset for a gameplay effect name.

    Args:
        name: Gameplay event name (e.g. "memory_spark")

    Returns:
        The preset, or None for names the bridge doesn't know
    """
    try:
        return EFFECT_PRESETS[GameEffect(name)]
    except ValueError:
        return None
