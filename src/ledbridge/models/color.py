"""Color model for LED control."""

from pydantic import BaseModel, ConfigDict, Field


class Color(BaseModel):
    """Normalized RGBA color.

    Channels are floats in 0.0-1.0, matching how the game describes
    colors. The wire protocol wants 8-bit channels, see `to_rgb255()`.

    The model is frozen so colors can be compared and stored in the
    bridge's last-sent LED state.
    """

    model_config = ConfigDict(frozen=True)

    r: float = Field(ge=0.0, le=1.0, description="Red (0.0-1.0)")
    g: float = Field(ge=0.0, le=1.0, description="Green (0.0-1.0)")
    b: float = Field(ge=0.0, le=1.0, description="Blue (0.0-1.0)")
    a: float = Field(default=1.0, ge=0.0, le=1.0, description="Alpha (0.0-1.0)")

    @property
    def is_black(self) -> bool:
        """True if all RGB channels are zero (alpha ignored)."""
        return self.r == 0 and self.g == 0 and self.b == 0

    def scaled(self, factor: float) -> "Color":
        """Scale RGB channels by `factor`, preserving alpha.

        Example:
            >>> Color(r=1.0, g=0.5, b=0.0).scaled(0.25)
            Color(r=0.25, g=0.125, b=0.0, a=1.0)
        """
        return Color(
            r=min(1.0, self.r * factor),
            g=min(1.0, self.g * factor),
            b=min(1.0, self.b * factor),
            a=self.a,
        )

    def to_rgb255(self) -> tuple[int, int, int]:
        """Convert to 8-bit channels using round(channel * 255).

        Example:
            >>> Color(r=1.0, g=0.25, b=0.0).to_rgb255()
            (255, 64, 0)
        """
        return (round(self.r * 255), round(self.g * 255), round(self.b * 255))


# Named colors used by the board's gameplay palette
BLACK = Color(r=0.0, g=0.0, b=0.0)
WHITE = Color(r=1.0, g=1.0, b=1.0)
RED = Color(r=1.0, g=0.0, b=0.0)
GREEN = Color(r=0.0, g=1.0, b=0.0)
YELLOW = Color(r=1.0, g=1.0, b=0.0)
CYAN = Color(r=0.0, g=1.0, b=1.0)
ORANGE = Color(r=1.0, g=0.647, b=0.0)
PURPLE = Color(r=0.5, g=0.0, b=0.5)
