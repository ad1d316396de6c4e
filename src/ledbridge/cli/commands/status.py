"""Status command: show resolved settings and the offline bridge status."""

import click

from ledbridge.cli.session import make_bridge


@click.command(name="status")
@click.pass_context
def status(ctx):
    """
    Show the resolved configuration and bridge status.

    Does not connect; useful for checking which URL and settings
    (config file, LED_BOARD_URL, --url) are in effect.
    """
    bridge = make_bridge(ctx)
    config = bridge.config
    report = bridge.get_status()

    click.echo("LED Board Bridge\n")
    click.echo(f"  URL:              {report.url}")
    click.echo(f"  Matrix:           {report.matrix_dimensions} ({report.led_count} LEDs)")
    click.echo(f"  Game grid:        {report.game_grid_dimensions}")
    click.echo(f"  Sync rate:        {report.sync_fps:.1f} per second, "
               f"{config.max_commands_per_tick} commands per tick")
    click.echo(f"  Reconnect:        every {config.reconnect_interval:g}s, "
               f"up to {report.max_reconnect_attempts} attempts")
    click.echo(f"  Brightness:       {config.brightness}")
    click.echo(f"  Connection state: {report.connection_state}")
