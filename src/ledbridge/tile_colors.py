"""Tile Color Definitions - Single source of truth for how game cells look on the board.

Color Scheme (strict precedence, first match wins):
- Exit tiles: Green
- Marker tiles: Yellow
- Lit tiles: White
- Unlit tiles: Off (black)

Lit tiles additionally glow on their secondary LEDs at a quarter of the
primary color (see MatrixMapper.glow_color).
"""

from ledbridge.models import BLACK, CYAN, GREEN, WHITE, YELLOW, Color, TileState

EXIT_COLOR = GREEN
MARKER_COLOR = YELLOW
LIT_COLOR = WHITE
UNLIT_COLOR = BLACK

# Used by the CLI test pattern
DIAGNOSTIC_COLOR = CYAN


def get_tile_color(tile: TileState) -> Color:
    """
    Get the primary LED color for a tile.

    Args:
        tile: The tile's gameplay flags

    Returns:
        Color for the tile's primary LED
    """
    if tile.exit:
        return EXIT_COLOR
    if tile.marker:
        return MARKER_COLOR
    if tile.lit:
        return LIT_COLOR
    return UNLIT_COLOR
