"""Effect command: fire one board animation."""

from typing import Optional

import click

from ledbridge.cli.session import DEFAULT_CONNECT_TIMEOUT, make_bridge, run_for, wait_for_connection
from ledbridge.wire import EFFECT_PRESETS


@click.command(name="effect")
@click.argument("name")
@click.option('--x', type=int, default=None, help='Game cell column')
@click.option('--y', type=int, default=None, help='Game cell row')
@click.option('--duration', type=float, default=None, help='Override the effect duration')
@click.option('--timeout', type=float, default=DEFAULT_CONNECT_TIMEOUT, show_default=True,
              help='Seconds to wait for the board')
@click.pass_context
def effect(ctx, name: str, x: Optional[int], y: Optional[int], duration: Optional[float],
           timeout: float):
    """
    Trigger effect NAME on the board.

    NAME is a gameplay effect (e.g. memory_spark, victory) or any raw
    animation name the board firmware understands.
    """
    if (x is None) != (y is None):
        raise click.UsageError("--x and --y must be given together")

    known = {preset.value for preset in EFFECT_PRESETS}
    if name not in known:
        click.echo(f"'{name}' is not a known gameplay effect, sending it as-is")

    bridge = make_bridge(ctx)
    position = (x, y) if x is not None else None

    try:
        if not wait_for_connection(bridge, timeout):
            ctx.exit(1)

        if not bridge.trigger_effect(name, position=position, duration=duration):
            click.echo(f"[FAIL] Effect '{name}' was rejected (see log for details)")
            ctx.exit(1)

        run_for(bridge, duration or 1.0, until_drained=True)
        click.echo(f"[OK] Effect '{name}' sent")

    finally:
        bridge.close()
