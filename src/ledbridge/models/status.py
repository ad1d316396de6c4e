"""Status snapshot reported by the bridge."""

from typing import Any

from pydantic import BaseModel, Field


class BridgeStatus(BaseModel):
    """Point-in-time view of the bridge, safe to build before connect()."""

    connected: bool
    connection_state: str
    url: str
    led_count: int
    board_dimensions: tuple[int, int]
    queued_commands: int
    active_leds: int
    reconnect_attempts: int
    max_reconnect_attempts: int
    reconnect_exhausted: bool = False
    sync_fps: float
    matrix_dimensions: str = Field(description="e.g. '16x11'")
    game_grid_dimensions: str = Field(description="e.g. '8x6'")

    def as_dict(self) -> dict[str, Any]:
        """Plain dict form for callers that want the loose status map."""
        return self.model_dump()
