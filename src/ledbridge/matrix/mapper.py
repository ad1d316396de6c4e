"""Coordinate mapping for the serpentine-wired LED matrix."""

from typing import Optional

from ledbridge.models import Color, LogicalPosition, PhysicalPosition

MATRIX_WIDTH = 16
MATRIX_HEIGHT = 11
LED_COUNT = MATRIX_WIDTH * MATRIX_HEIGHT  # 176
GAME_GRID_WIDTH = 8
GAME_GRID_HEIGHT = 6

# Returned by xy_to_index() for coordinates with no LED behind them
INVALID_INDEX = -1

# Secondary LEDs glow at this fraction of their primary's color
GLOW_FACTOR = 0.25


class MatrixMapper:
    """
    Mapping between game-grid cells, matrix pixels and strip indices.

    Every game cell owns a 2x2 block of pixels. The top-left pixel of the
    block (both coordinates even) is the *primary* LED and carries the
    cell's gameplay state; the pixels around it are *secondary* LEDs that
    only ever show a dimmed glow.

    The strip is wired in a zigzag: even rows run left to right, odd rows
    run right to left.

    Provides:
    - game_to_led(): game cell → primary pixel
    - is_primary(): is a pixel a gameplay-bearing one?
    - xy_to_index(): pixel → strip index (INVALID_INDEX if none)
    - index_to_xy(): strip index → pixel
    - secondary_glow_positions(): glow pixels around a primary
    """

    def __init__(
        self,
        width: int = MATRIX_WIDTH,
        height: int = MATRIX_HEIGHT,
        grid_width: int = GAME_GRID_WIDTH,
        grid_height: int = GAME_GRID_HEIGHT,
    ):
        """
        Initialize mapper for a matrix geometry.

        Args:
            width: Matrix columns
            height: Matrix rows
            grid_width: Game grid columns
            grid_height: Game grid rows
        """
        self.width = width
        self.height = height
        self.grid_width = grid_width
        self.grid_height = grid_height

    @property
    def led_count(self) -> int:
        return self.width * self.height

    def game_to_led(self, logical: LogicalPosition) -> PhysicalPosition:
        """
        Convert a game cell to its primary pixel.

        Does not clamp: callers check in_bounds() on the result.

        Example:
            (0, 0) → (0, 0)
            (3, 3) → (6, 6)
            (7, 5) → (14, 10)
        """
        return PhysicalPosition(x=logical.x * 2, y=logical.y * 2)

    def in_bounds(self, x: int, y: int) -> bool:
        """Check that a pixel lies on the matrix."""
        return 0 <= x < self.width and 0 <= y < self.height

    def is_primary(self, x: int, y: int) -> bool:
        """True iff (x, y) is even-even and inside the area covered by the game grid."""
        return (
            x % 2 == 0 and y % 2 == 0
            and 0 <= x < self.grid_width * 2
            and 0 <= y < self.grid_height * 2
        )

    def xy_to_index(self, x: int, y: int) -> int:
        """
        Convert a pixel to its index along the LED strip.

        Args:
            x: column (0-15)
            y: row (0-10)

        Returns:
            Strip index, or INVALID_INDEX if no LED is wired there

        Example:
            (0, 0) → 0, (15, 0) → 15
            (0, 1) → 31, (15, 1) → 16
        """
        if y >= self.height or x < 0 or y < 0:
            return INVALID_INDEX

        if y % 2 == 0:
            index = y * self.width + x
        else:
            index = y * self.width + (self.width - 1 - x)

        return index if index < self.led_count else INVALID_INDEX

    def index_to_xy(self, index: int) -> Optional[tuple[int, int]]:
        """
        Convert a strip index back to (x, y).

        Returns:
            (x, y) tuple or None if the index is off the strip
        """
        if not 0 <= index < self.led_count:
            return None

        y, offset = divmod(index, self.width)
        x = offset if y % 2 == 0 else self.width - 1 - offset
        return (x, y)

    def secondary_glow_positions(self, primary: PhysicalPosition) -> set[PhysicalPosition]:
        """
        In-bounds neighbours of a primary pixel that are not primaries themselves.

        Returns:
            Up to 8 positions from the Moore neighbourhood
        """
        positions = set()
        for dy in (-1, 0, 1):
            for dx in (-1, 0, 1):
                if dx == 0 and dy == 0:
                    continue
                x, y = primary.x + dx, primary.y + dy
                if self.in_bounds(x, y) and not self.is_primary(x, y):
                    positions.add(PhysicalPosition(x=x, y=y))
        return positions

    @staticmethod
    def glow_color(color: Color) -> Color:
        """Dim a primary color for its secondary pixels."""
        return color.scaled(GLOW_FACTOR)
