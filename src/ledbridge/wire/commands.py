"""Board commands and their JSON wire format.

Every command is sent as one JSON text frame with a `cmd` discriminator:

    {"cmd":"config","width":16,"height":11,"fps":60,"brightness":128}
    {"cmd":"set_pixel","x":6,"y":6,"r":255,"g":255,"b":0}
    {"cmd":"update"}
    {"cmd":"clear"}
    {"cmd":"effect","name":"memory_spark","duration":1.0,"x":4,"y":2,"r":0,"g":255,"b":255}

The protocol is fire-and-forget: no sequence numbers, no acknowledgements.
`set_pixel` only stages a pixel; the board shows staged pixels on `update`.
"""

import json
import logging
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, ValidationError

from ledbridge.models import Color, PhysicalPosition

logger = logging.getLogger(__name__)


class Command(BaseModel):
    """Base class for all outbound board commands (immutable)."""

    model_config = ConfigDict(frozen=True)

    cmd: ClassVar[str] = ""

    def to_wire(self) -> dict[str, Any]:
        """Build the JSON object for this command."""
        return {"cmd": self.cmd}

    def to_json(self) -> str:
        """Serialize to a compact JSON frame."""
        return json.dumps(self.to_wire(), separators=(",", ":"))


def _rgb_fields(color: Color) -> dict[str, int]:
    r, g, b = color.to_rgb255()
    return {"r": r, "g": g, "b": b}


class SetPixelCommand(Command):
    """Stage one pixel color."""

    cmd: ClassVar[str] = "set_pixel"

    position: PhysicalPosition
    color: Color

    def to_wire(self) -> dict[str, Any]:
        return {
            "cmd": self.cmd,
            "x": self.position.x,
            "y": self.position.y,
            **_rgb_fields(self.color),
        }


class UpdateCommand(Command):
    """Flush staged pixels to the display."""

    cmd: ClassVar[str] = "update"


class ClearCommand(Command):
    """Blank every pixel."""

    cmd: ClassVar[str] = "clear"


class EffectCommand(Command):
    """Run a named, timed animation on the board."""

    cmd: ClassVar[str] = "effect"

    name: str
    duration: float
    position: PhysicalPosition | None = None
    color: Color | None = None

    def to_wire(self) -> dict[str, Any]:
        wire: dict[str, Any] = {
            "cmd": self.cmd,
            "name": self.name,
            "duration": self.duration,
        }
        if self.position is not None:
            wire["x"] = self.position.x
            wire["y"] = self.position.y
        # Black means "board picks the color"
        if self.color is not None and not self.color.is_black:
            wire.update(_rgb_fields(self.color))
        return wire


class ConfigCommand(Command):
    """Board geometry and refresh settings, sent once per connection."""

    cmd: ClassVar[str] = "config"

    width: int
    height: int
    fps: int
    brightness: int

    def to_wire(self) -> dict[str, Any]:
        return {
            "cmd": self.cmd,
            "width": self.width,
            "height": self.height,
            "fps": self.fps,
            "brightness": self.brightness,
        }


class HardwareResponse(BaseModel):
    """Status/error envelope the board may send back."""

    status: str | None = None
    message: str | None = None

    @property
    def is_error(self) -> bool:
        return self.status == "error"

    @classmethod
    def parse(cls, raw: str | bytes) -> "HardwareResponse | None":
        """
        Parse an inbound frame.

        Returns:
            The response, or None if the frame is not a JSON object
        """
        try:
            return cls.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Ignoring malformed message from LED board: {e.errors()[0].get('msg')}")
            return None
