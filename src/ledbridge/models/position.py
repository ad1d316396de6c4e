"""Grid coordinates and per-cell tile state."""

from pydantic import BaseModel, ConfigDict, Field


class LogicalPosition(BaseModel):
    """A cell on the 8x6 game grid.

    Frozen so positions can be used as keys in board-state mappings.
    Range checking happens in the mapper, which skips cells that land
    outside the matrix rather than rejecting them here.
    """

    model_config = ConfigDict(frozen=True)

    x: int = Field(description="Column (0-7, left to right)")
    y: int = Field(description="Row (0-5, top to bottom)")

    def as_tuple(self) -> tuple[int, int]:
        return (self.x, self.y)


class PhysicalPosition(BaseModel):
    """A pixel on the 16x11 LED matrix."""

    model_config = ConfigDict(frozen=True)

    x: int = Field(description="Column (0-15)")
    y: int = Field(description="Row (0-10)")

    def as_tuple(self) -> tuple[int, int]:
        return (self.x, self.y)


class TileState(BaseModel):
    """Gameplay attributes of one grid cell, as seen by the LED board.

    Supplied by the game on every sync; the bridge only reads it.
    """

    model_config = ConfigDict(frozen=True)

    lit: bool = Field(default=False, description="Cell is illuminated")
    exit: bool = Field(default=False, description="Cell is an exit")
    marker: bool = Field(default=False, description="Cell carries a special marker")
