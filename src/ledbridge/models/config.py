"""Bridge configuration model."""

import logging
import os
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

from ledbridge.exceptions import ConfigFileInvalidError, wrap_pydantic_error

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".ledbridge" / "config.json"
URL_ENV_VAR = "LED_BOARD_URL"


class BridgeConfig(BaseModel):
    """LED board connection and sync settings."""

    # Endpoint
    led_board_url: str = Field(
        default="ws://192.168.1.100:8080",
        description=(
            "WebSocket endpoint of the board controller. "
            "Overridden by the LED_BOARD_URL environment variable."
        ),
    )

    # Queue draining
    sync_interval: float = Field(
        default=0.016, gt=0, description="Seconds between queue drains (~60 per second)"
    )
    max_commands_per_tick: int = Field(
        default=10, ge=1, description="Maximum commands sent per drain"
    )

    # Reconnection
    reconnect_interval: float = Field(
        default=5.0, gt=0, description="Fixed delay between reconnect attempts (seconds)"
    )
    max_reconnect_attempts: int = Field(
        default=10, ge=0, description="Automatic reconnect attempts before giving up"
    )
    auto_reconnect: bool = Field(default=True, description="Reconnect after connection loss")
    replay_on_reconnect: bool = Field(
        default=False,
        description="Resend every known pixel after the board is cleared on (re)connect",
    )

    # Sent to the board in the config command on connect
    brightness: int = Field(default=128, ge=0, le=255, description="Global board brightness")
    hardware_fps: int = Field(default=60, gt=0, description="Board refresh rate")

    # Geometry
    matrix_width: int = Field(default=16, gt=0, description="LED matrix columns")
    matrix_height: int = Field(default=11, gt=0, description="LED matrix rows")
    grid_width: int = Field(default=8, gt=0, description="Game grid columns")
    grid_height: int = Field(default=6, gt=0, description="Game grid rows")

    @field_validator("led_board_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Only WebSocket endpoints are supported."""
        if not v.startswith(("ws://", "wss://")):
            raise ValueError("URL scheme must be ws:// or wss://")
        return v

    @property
    def sync_fps(self) -> float:
        return 1.0 / self.sync_interval

    @property
    def led_count(self) -> int:
        return self.matrix_width * self.matrix_height

    def with_env_overrides(self) -> "BridgeConfig":
        """
        Apply environment overrides.

        Returns:
            A copy with LED_BOARD_URL applied (validated), or self if unset

        Raises:
            ConfigValidationError: If the environment URL is invalid
        """
        env_url = os.environ.get(URL_ENV_VAR)
        if not env_url:
            return self

        logger.info(f"Using LED board URL from environment: {env_url}")
        try:
            return self.model_validate({**self.model_dump(), "led_board_url": env_url})
        except ValidationError as e:
            raise wrap_pydantic_error(e, f"${URL_ENV_VAR}") from e

    @classmethod
    def load_or_default(cls, path: Path | None = None) -> "BridgeConfig":
        """
        Load config from file or return default, then apply environment overrides.

        Args:
            path: Path to config file. If None, uses ~/.ledbridge/config.json.

        Raises:
            ConfigFileInvalidError: If config file has invalid JSON syntax
            ConfigValidationError: If config values fail validation
        """
        if path is None:
            path = DEFAULT_CONFIG_PATH

        try:
            config = cls.model_validate_json(path.read_text(encoding="utf-8"))
            logger.info(f"Loaded bridge config from {path}")
        except FileNotFoundError:
            logger.debug(f"No config file at {path}, using defaults")
            config = cls()
        except ValidationError as e:
            raise wrap_pydantic_error(e, str(path)) from e
        except UnicodeDecodeError as e:
            raise ConfigFileInvalidError(str(path), str(e)) from e

        return config.with_env_overrides()

    def save(self, path: Path | None = None) -> None:
        """Save config to file."""
        if path is None:
            path = DEFAULT_CONFIG_PATH

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.model_dump_json(indent=2), encoding="utf-8")
