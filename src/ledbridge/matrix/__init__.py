"""LED matrix geometry and addressing."""

from .mapper import (
    GAME_GRID_HEIGHT,
    GAME_GRID_WIDTH,
    GLOW_FACTOR,
    INVALID_INDEX,
    LED_COUNT,
    MATRIX_HEIGHT,
    MATRIX_WIDTH,
    MatrixMapper,
)

__all__ = [
    "GAME_GRID_HEIGHT",
    "GAME_GRID_WIDTH",
    "GLOW_FACTOR",
    "INVALID_INDEX",
    "LED_COUNT",
    "MATRIX_HEIGHT",
    "MATRIX_WIDTH",
    "MatrixMapper",
]
