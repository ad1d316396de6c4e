"""Per-operation parameter structs for the HardwareBridge facade.

Each public bridge operation validates its arguments by building one of
these models. Coordinates may be given as models or plain (x, y) pairs.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .color import Color
from .position import LogicalPosition, TileState


def _coerce_position(value: Any) -> Any:
    """Turn an (x, y) pair into a LogicalPosition, leave anything else to pydantic."""
    if isinstance(value, (tuple, list)) and len(value) == 2:
        return LogicalPosition(x=value[0], y=value[1])
    return value


class SyncGameStateRequest(BaseModel):
    """Board snapshot to mirror onto the LED matrix."""

    model_config = ConfigDict(frozen=True)

    cells: dict[LogicalPosition, TileState] = Field(
        description="Tile state for each game-grid cell that should be shown"
    )

    @field_validator("cells", mode="before")
    @classmethod
    def coerce_keys(cls, v: Any) -> Any:
        if isinstance(v, Mapping):
            return {_coerce_position(pos): tile for pos, tile in v.items()}
        return v


class SetLedRequest(BaseModel):
    """Direct pixel write on physical coordinates (no game-grid mapping)."""

    model_config = ConfigDict(frozen=True)

    x: int
    y: int
    color: Color


class TriggerEffectRequest(BaseModel):
    """A named effect cue from a gameplay system."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="Effect name (preset or raw hardware name)")
    position: LogicalPosition | None = Field(default=None, description="Game-grid origin")
    color: Color | None = Field(default=None, description="Overrides the preset color")
    duration: float | None = Field(default=None, ge=0, description="Overrides the preset duration")

    @field_validator("position", mode="before")
    @classmethod
    def coerce_position(cls, v: Any) -> Any:
        return _coerce_position(v)
