"""Test pattern command for checking the board wiring."""

import logging

import click

from ledbridge.cli.session import DEFAULT_CONNECT_TIMEOUT, make_bridge, run_for, wait_for_connection
from ledbridge.models import LogicalPosition
from ledbridge.tile_colors import DIAGNOSTIC_COLOR

logger = logging.getLogger(__name__)

# Game cells lit by the pattern: two rows of three
PATTERN_CELLS = [(0, 0), (1, 0), (2, 0), (0, 1), (1, 1), (2, 1)]


@click.command(name="test-pattern")
@click.option('--duration', type=float, default=3.0, show_default=True,
              help='Seconds to keep the pattern on')
@click.option('--timeout', type=float, default=DEFAULT_CONNECT_TIMEOUT, show_default=True,
              help='Seconds to wait for the board')
@click.pass_context
def test_pattern(ctx, duration: float, timeout: float):
    """
    Light a diagnostic pattern on the board.

    Connects, lights the primary LED of six game cells in cyan, holds
    the pattern, then clears the board.
    """
    bridge = make_bridge(ctx)

    try:
        if not wait_for_connection(bridge, timeout):
            ctx.exit(1)

        click.echo("\nSetting up test pattern...")
        for x, y in PATTERN_CELLS:
            led = bridge.mapper.game_to_led(LogicalPosition(x=x, y=y))
            bridge.set_led(led.x, led.y, DIAGNOSTIC_COLOR)
            click.echo(f"  cell ({x}, {y}) -> LED ({led.x}, {led.y})")

        run_for(bridge, duration)

        report = bridge.get_status()
        click.echo(f"\n[OK] Test pattern sent ({report.queued_commands} commands still queued)")

    finally:
        click.echo("Clearing board...")
        bridge.emergency_shutdown()
