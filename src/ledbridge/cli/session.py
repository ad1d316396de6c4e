"""Helpers shared by commands that talk to a live board."""

import logging
import time

import click

from ledbridge.core import HardwareBridge

logger = logging.getLogger(__name__)

DEFAULT_CONNECT_TIMEOUT = 10.0


def make_bridge(ctx: click.Context) -> HardwareBridge:
    """Build a bridge from the resolved config on the click context."""
    return HardwareBridge(
        ctx.obj["config"],
        transport_factory=ctx.obj.get("transport_factory"),
    )


def wait_for_connection(bridge: HardwareBridge, timeout: float) -> bool:
    """
    Connect and tick until the link opens.

    Returns:
        True if connected within `timeout` seconds
    """
    click.echo(f"Connecting to {bridge.config.led_board_url}...")
    bridge.connect()

    start_time = time.monotonic()
    while not bridge.is_connected:
        if time.monotonic() - start_time > timeout:
            click.echo("\n[FAIL] LED board did not answer within timeout period")
            return False
        bridge.tick()
        time.sleep(bridge.config.sync_interval)

    click.echo(f"[OK] Connected to: {bridge.config.led_board_url}")
    return True


def run_for(bridge: HardwareBridge, duration: float, until_drained: bool = False) -> None:
    """Keep ticking for `duration` seconds (or until the queue is empty)."""
    start_time = time.monotonic()
    while time.monotonic() - start_time < duration:
        bridge.tick()
        if until_drained and not bridge.pending_commands:
            return
        time.sleep(bridge.config.sync_interval)
